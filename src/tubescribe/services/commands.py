"""Command facade composing resolution, fetching, storage and search into named operations."""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Union

from rich.console import Console

from tubescribe.config.settings import Settings, get_settings
from tubescribe.models.command import CommandKind, CommandResult, CommandStatus, TranscriptFormat
from tubescribe.models.transcript import VideoRecord
from tubescribe.services.search import InvalidQueryError, SearchService
from tubescribe.services.store import InsertOutcome, TranscriptStore
from tubescribe.services.transcript import (
    ProviderError,
    TranscriptFetcher,
    YouTubeTranscriptFetcher,
    build_video_record,
)
from tubescribe.utils.validation import extract_url_span, resolve_video_id


class TranscriptCommands:
    """Operations exposed to the tool server and CLI.

    Every expected failure is reported through :class:`CommandResult.status`; only unexpected faults
    raise. The facade owns its :class:`TranscriptStore` unless one is injected. Caption fetches run on a
    dedicated thread pool, which is not joined when an event loop shuts down.
    """

    def __init__(
        self,
        *,
        store: Optional[TranscriptStore] = None,
        fetcher: Optional[TranscriptFetcher] = None,
        search_service: Optional[SearchService] = None,
        settings: Optional[Settings] = None,
        console: Optional[Console] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._console = console or Console(stderr=True)
        self._store = store if store is not None else TranscriptStore()
        self._fetcher = fetcher or YouTubeTranscriptFetcher(settings=self._settings, console=self._console)
        self._search_service = search_service or SearchService(console=self._console)
        self._executor = executor or ThreadPoolExecutor(thread_name_prefix="tubescribe-fetch")
        self._add_locks: Dict[str, asyncio.Lock] = {}
        self._add_lock_users: Dict[str, int] = {}

    @property
    def store(self) -> TranscriptStore:
        return self._store

    # ------------------------------------------------------------------ #
    # Ingestion                                                          #
    # ------------------------------------------------------------------ #
    async def add_video(self, reference: str, language: Optional[str] = None) -> CommandResult:
        """Resolve ``reference``, fetch its captions and store the transcript.

        Parameters
        ----------
        reference:
            YouTube URL (watch, short or embed form) or a bare video ID.
        language:
            Caption language; defaults to the configured language.

        Returns
        -------
        CommandResult
            ``SUCCESS`` with the stored record, ``ALREADY_LOADED`` with the existing record,
            ``INVALID_REFERENCE`` or ``PROVIDER_ERROR``.
        """

        language = language or self._settings.default_language
        video_id = resolve_video_id(reference)
        if video_id is None:
            return CommandResult(
                kind=CommandKind.ADD_VIDEO,
                status=CommandStatus.INVALID_REFERENCE,
                reference=reference,
            )

        lock = self._add_locks.setdefault(video_id, asyncio.Lock())
        self._add_lock_users[video_id] = self._add_lock_users.get(video_id, 0) + 1
        try:
            async with lock:
                existing = self._store.get(video_id)
                if existing is not None:
                    return CommandResult(
                        kind=CommandKind.ADD_VIDEO,
                        status=CommandStatus.ALREADY_LOADED,
                        reference=reference,
                        video_id=video_id,
                        record=existing,
                    )

                loop = asyncio.get_running_loop()
                try:
                    captions = await asyncio.wait_for(
                        loop.run_in_executor(self._executor, self._fetcher.fetch, video_id, language),
                        timeout=self._settings.fetch_timeout_seconds,
                    )
                except ProviderError as exc:
                    return self._provider_failure(reference, video_id, str(exc))
                except asyncio.TimeoutError:
                    self._console.log(
                        f"[red]Caption fetch timed out[/red] after {self._settings.fetch_timeout_seconds:.0f}s "
                        f"(video_id={video_id})"
                    )
                    return self._provider_failure(
                        reference,
                        video_id,
                        f"Timed out after {self._settings.fetch_timeout_seconds:g} seconds",
                    )

                record = build_video_record(video_id, language, captions)
                if self._store.insert(record) is InsertOutcome.ALREADY_EXISTS:
                    return CommandResult(
                        kind=CommandKind.ADD_VIDEO,
                        status=CommandStatus.ALREADY_LOADED,
                        reference=reference,
                        video_id=video_id,
                        record=self._store.get(video_id),
                    )
        finally:
            self._add_lock_users[video_id] -= 1
            if not self._add_lock_users[video_id]:
                del self._add_lock_users[video_id]
                del self._add_locks[video_id]

        self._console.log(
            f"[green]Loaded[/green] {record.entry_count} transcript entries "
            f"(video_id={video_id}, language={language})"
        )
        return CommandResult(
            kind=CommandKind.ADD_VIDEO,
            status=CommandStatus.SUCCESS,
            reference=reference,
            video_id=video_id,
            record=record,
        )

    async def transcribe_from_command(self, command: str, language: Optional[str] = None) -> CommandResult:
        """Pull the first YouTube URL out of ``command`` and add that video."""

        url = extract_url_span(command)
        if url is None:
            return CommandResult(
                kind=CommandKind.TRANSCRIBE,
                status=CommandStatus.URL_NOT_FOUND,
                reference=command,
            )

        result = await self.add_video(url, language)
        return result.model_copy(update={"kind": CommandKind.TRANSCRIBE})

    # ------------------------------------------------------------------ #
    # Queries                                                            #
    # ------------------------------------------------------------------ #
    def search_transcripts(
        self,
        query: str,
        video_ids: Optional[Sequence[str]] = None,
        context_window: Optional[int] = None,
    ) -> CommandResult:
        """Search loaded transcripts, optionally restricted to ``video_ids``.

        Identifiers may be given as URLs. Unknown identifiers are skipped; an empty or missing
        selection searches every loaded video.
        """

        if len(self._store) == 0:
            return CommandResult(kind=CommandKind.SEARCH, status=CommandStatus.EMPTY_STORE, query=query)

        window = self._settings.context_entries if context_window is None else context_window
        searched_ids = self._candidate_ids(video_ids)
        candidates: List[VideoRecord] = []
        for video_id in searched_ids:
            record = self._store.get(video_id)
            if record is not None:
                candidates.append(record)

        try:
            matches = self._search_service.search(candidates, query, window)
        except InvalidQueryError as exc:
            return CommandResult(
                kind=CommandKind.SEARCH,
                status=CommandStatus.INVALID_QUERY,
                query=query,
                detail=str(exc),
            )

        status = CommandStatus.SUCCESS if matches else CommandStatus.NO_MATCHES
        return CommandResult(
            kind=CommandKind.SEARCH,
            status=status,
            query=query,
            searched_ids=tuple(searched_ids),
            matches=tuple(matches),
            count=len(matches),
        )

    def list_videos(self) -> CommandResult:
        records = self._store.list_all()
        if not records:
            return CommandResult(kind=CommandKind.LIST, status=CommandStatus.EMPTY_STORE)
        return CommandResult(
            kind=CommandKind.LIST,
            status=CommandStatus.SUCCESS,
            records=tuple(records),
            count=len(records),
        )

    def get_transcript(
        self,
        video_id: str,
        transcript_format: Union[TranscriptFormat, str] = TranscriptFormat.TEXT,
    ) -> CommandResult:
        """Return the full transcript of a loaded video in the requested format.

        Raises
        ------
        ValueError
            If ``transcript_format`` is not one of :class:`TranscriptFormat`.
        """

        output_format = TranscriptFormat(transcript_format)
        key = self._normalise_id(video_id)
        record = self._store.get(key)
        if record is None:
            return CommandResult(
                kind=CommandKind.GET_TRANSCRIPT,
                status=CommandStatus.NOT_FOUND,
                reference=video_id,
                video_id=key,
            )
        return CommandResult(
            kind=CommandKind.GET_TRANSCRIPT,
            status=CommandStatus.SUCCESS,
            reference=video_id,
            video_id=key,
            record=record,
            count=record.entry_count,
            transcript_format=output_format,
        )

    # ------------------------------------------------------------------ #
    # Removal                                                            #
    # ------------------------------------------------------------------ #
    def remove_video(self, video_id: str) -> CommandResult:
        key = self._normalise_id(video_id)
        record = self._store.remove(key)
        if record is None:
            return CommandResult(
                kind=CommandKind.REMOVE,
                status=CommandStatus.NOT_FOUND,
                reference=video_id,
                video_id=key,
            )
        self._console.log(f"Removed video (video_id={key})")
        return CommandResult(
            kind=CommandKind.REMOVE,
            status=CommandStatus.SUCCESS,
            reference=video_id,
            video_id=key,
            record=record,
        )

    def clear_all(self) -> CommandResult:
        count = self._store.clear()
        self._console.log(f"Cleared {count} videos from memory")
        return CommandResult(kind=CommandKind.CLEAR, status=CommandStatus.SUCCESS, count=count)

    # ------------------------------------------------------------------ #
    # Internal helpers                                                   #
    # ------------------------------------------------------------------ #
    def _provider_failure(self, reference: str, video_id: str, message: str) -> CommandResult:
        return CommandResult(
            kind=CommandKind.ADD_VIDEO,
            status=CommandStatus.PROVIDER_ERROR,
            reference=reference,
            video_id=video_id,
            detail=message,
        )

    def _candidate_ids(self, video_ids: Optional[Sequence[str]]) -> List[str]:
        if not video_ids:
            return self._store.ids()

        seen: List[str] = []
        for raw in video_ids:
            key = self._normalise_id(raw)
            if key not in seen:
                seen.append(key)
        return seen

    @staticmethod
    def _normalise_id(value: str) -> str:
        return resolve_video_id(value) or value.strip()


__all__ = ["TranscriptCommands"]
