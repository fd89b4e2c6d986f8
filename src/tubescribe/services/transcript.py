"""Transcript acquisition: the fetch adapter contract and its YouTube caption implementation."""

from __future__ import annotations

import time
from typing import Any, Iterable, List, Mapping, Optional, Protocol, Sequence

from rich.console import Console
from youtube_transcript_api import YouTubeTranscriptApi
from youtube_transcript_api._errors import (
    AgeRestricted,
    InvalidVideoId,
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
    VideoUnplayable,
)

from tubescribe.config.settings import Settings, get_settings
from tubescribe.models.transcript import CaptionPayload, TranscriptEntry, VideoRecord
from tubescribe.utils.validation import watch_url

MAX_RETRY_DELAY_SECONDS = 10.0
_PERMANENT_ERRORS = (
    VideoUnavailable,
    VideoUnplayable,
    InvalidVideoId,
    AgeRestricted,
    TranscriptsDisabled,
    NoTranscriptFound,
)


class ProviderError(RuntimeError):
    """Raised when captions for a video cannot be retrieved."""

    def __init__(self, video_id: str, message: str) -> None:
        super().__init__(message)
        self.video_id = video_id


class TranscriptFetcher(Protocol):
    """Source of raw, millisecond-timed captions for a video."""

    def fetch(self, video_id: str, language: str) -> Sequence[CaptionPayload]:
        """Return captions in chronological order or raise :class:`ProviderError`."""


class YouTubeTranscriptFetcher:
    """Fetch captions through ``youtube-transcript-api`` with retries for transient failures."""

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        console: Optional[Console] = None,
        transcript_api: Optional[Any] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._console = console or Console(stderr=True)
        self._attempts = max(1, self._settings.fetch_retry_attempts)
        self._backoff = self._settings.fetch_retry_backoff_seconds
        self._transcript_api = transcript_api or YouTubeTranscriptApi()

    def fetch(self, video_id: str, language: str) -> List[CaptionPayload]:
        """Fetch the caption track for ``video_id`` in ``language``.

        Parameters
        ----------
        video_id:
            The canonical 11-character YouTube video identifier.
        language:
            Language code of the requested caption track (``"en"``, ``"es"``...).

        Returns
        -------
        list of CaptionPayload
            Captions with offsets and durations converted to milliseconds.

        Raises
        ------
        ProviderError
            If the video is unavailable, captions are disabled or missing for ``language``, or
            every retry attempt failed.
        """

        self._console.log(f"Fetching captions (video_id={video_id}, language={language})")
        attempt = 0
        while True:
            attempt += 1
            try:
                fetched = self._transcript_api.fetch(video_id, languages=(language,))
                break
            except _PERMANENT_ERRORS as exc:
                self._console.log(f"[red]Captions unavailable:[/red] {type(exc).__name__} (video_id={video_id})")
                raise ProviderError(video_id, _describe(exc)) from exc
            except Exception as exc:  # pragma: no cover - network issues exercised via fakes
                if attempt >= self._attempts:
                    self._console.log(
                        f"[red]Caption fetch failed after {attempt} attempts:[/red] {exc} (video_id={video_id})"
                    )
                    raise ProviderError(video_id, _describe(exc)) from exc
                delay = min(self._backoff * attempt, MAX_RETRY_DELAY_SECONDS)
                self._console.log(
                    f"[yellow]Caption fetch attempt {attempt} failed:[/yellow] {exc}; "
                    f"retrying in {delay:.1f}s (video_id={video_id})"
                )
                time.sleep(delay)

        return [_to_payload(item) for item in fetched.to_raw_data()]


def build_video_record(video_id: str, language: str, captions: Iterable[CaptionPayload]) -> VideoRecord:
    """Convert adapter captions (milliseconds) into a stored record (seconds)."""

    entries = tuple(
        TranscriptEntry(
            text=caption.text,
            start_seconds=caption.offset_ms / 1000,
            duration_seconds=caption.duration_ms / 1000,
        )
        for caption in captions
    )
    return VideoRecord(
        id=video_id,
        url=watch_url(video_id),
        title=f"Video {video_id}",
        language=language,
        transcript=entries,
    )


def _to_payload(item: Mapping[str, Any]) -> CaptionPayload:
    return CaptionPayload(
        text=str(item.get("text", "")),
        offset_ms=float(item.get("start", 0.0)) * 1000,
        duration_ms=float(item.get("duration") or 0.0) * 1000,
    )


def _describe(exc: Exception) -> str:
    # youtube-transcript-api errors render a multi-paragraph explanation; keep the headline.
    message = str(exc).strip()
    headline = message.splitlines()[0] if message else ""
    return headline or type(exc).__name__


__all__ = ["ProviderError", "TranscriptFetcher", "YouTubeTranscriptFetcher", "build_video_record"]
