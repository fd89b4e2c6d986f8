"""Case-insensitive substring search across loaded transcripts."""

from __future__ import annotations

from typing import Iterable, List, Optional

from rich.console import Console

from tubescribe.models.search import SearchMatch
from tubescribe.models.transcript import VideoRecord


class InvalidQueryError(ValueError):
    """Raised when a search query or context window cannot be used."""


class SearchService:
    """Locate transcript entries containing a query and collect their surrounding entries."""

    def __init__(self, *, console: Optional[Console] = None) -> None:
        self._console = console or Console(stderr=True)

    def search(self, records: Iterable[VideoRecord], query: str, context_window: int) -> List[SearchMatch]:
        """Search every record for ``query``.

        Parameters
        ----------
        records:
            Candidate videos. Scan order does not affect the result order.
        query:
            Text to find, matched case-insensitively as a substring of each entry. A blank query is
            rejected.
        context_window:
            Number of entries on each side of a match to include in ``context_text``.

        Returns
        -------
        list of SearchMatch
            One match per matching entry, ordered by video ID then by timestamp.

        Raises
        ------
        InvalidQueryError
            If the query is blank or ``context_window`` is negative.
        """

        needle = self._normalise_query(query)
        if context_window < 0:
            raise InvalidQueryError("Context window must be zero or greater")

        matches: List[SearchMatch] = []
        scanned = 0
        for record in records:
            scanned += 1
            matches.extend(self._scan(record, needle, context_window))

        matches.sort(key=lambda match: (match.video_id, match.timestamp, match.match_index))
        self._console.log(f"Search for {query.strip()!r} found {len(matches)} matches in {scanned} videos")
        return matches

    def search_in_transcript(self, record: VideoRecord, query: str, context_window: int) -> List[SearchMatch]:
        """Search a single record; results are in transcript order."""

        if context_window < 0:
            raise InvalidQueryError("Context window must be zero or greater")
        return self._scan(record, self._normalise_query(query), context_window)

    @staticmethod
    def _normalise_query(query: str) -> str:
        if not (query or "").strip():
            raise InvalidQueryError("Search query cannot be empty")
        return query.lower()

    @staticmethod
    def _scan(record: VideoRecord, needle: str, context_window: int) -> List[SearchMatch]:
        transcript = record.transcript
        total = len(transcript)
        results: List[SearchMatch] = []
        for index, entry in enumerate(transcript):
            if needle not in entry.text.lower():
                continue
            start = max(0, index - context_window)
            end = min(total, index + context_window + 1)
            results.append(
                SearchMatch(
                    video_id=record.id,
                    video_url=record.url,
                    video_title=record.title,
                    timestamp=entry.start_seconds,
                    duration_seconds=entry.duration_seconds,
                    matched_text=entry.text,
                    context_text=" ".join(item.text for item in transcript[start:end]),
                    match_index=index,
                )
            )
        return results


__all__ = ["InvalidQueryError", "SearchService"]
