"""Plain-text presentation of command results."""

from __future__ import annotations

import json
import math
from typing import Callable, Dict, List, Optional, Tuple

from tubescribe.models.command import CommandKind, CommandResult, CommandStatus, TranscriptFormat
from tubescribe.models.search import SearchMatch
from tubescribe.models.transcript import VideoRecord
from tubescribe.utils.validation import SUPPORTED_FORMATS

ERROR_PREFIX = "Error:"

EXAMPLE_COMMANDS = (
    "transcribe this url: https://www.youtube.com/watch?v=P2DfG5JEAmA",
    "add this video: https://youtu.be/P2DfG5JEAmA",
)


def format_clock(seconds: float) -> str:
    """Render ``seconds`` as a zero-padded ``MM:SS`` clock (minutes are not wrapped into hours)."""

    total = max(0.0, seconds)
    minutes = math.floor(total / 60)
    remainder = math.floor(total % 60)
    return f"{minutes:02d}:{remainder:02d}"


class TextFormatter:
    """Render :class:`CommandResult` values as the text returned to tool callers.

    Errors start with ``"Error:"``. Informational outcomes such as an empty store, an already
    loaded video or a search without matches are plain text.
    """

    def __init__(self) -> None:
        self._renderers: Dict[Tuple[CommandKind, CommandStatus], Callable[[CommandResult], str]] = {
            (CommandKind.ADD_VIDEO, CommandStatus.SUCCESS): self._render_loaded,
            (CommandKind.ADD_VIDEO, CommandStatus.ALREADY_LOADED): self._render_already_loaded,
            (CommandKind.ADD_VIDEO, CommandStatus.INVALID_REFERENCE): self._render_invalid_reference,
            (CommandKind.ADD_VIDEO, CommandStatus.PROVIDER_ERROR): self._render_provider_error,
            (CommandKind.TRANSCRIBE, CommandStatus.URL_NOT_FOUND): self._render_url_not_found,
            (CommandKind.SEARCH, CommandStatus.SUCCESS): self._render_matches,
            (CommandKind.SEARCH, CommandStatus.EMPTY_STORE): lambda _: (
                "No videos loaded. Use 'add_youtube_video' to add videos first."
            ),
            (CommandKind.SEARCH, CommandStatus.INVALID_QUERY): lambda result: (
                f"{ERROR_PREFIX} {result.detail or 'Search query cannot be empty'}"
            ),
            (CommandKind.SEARCH, CommandStatus.NO_MATCHES): self._render_no_matches,
            (CommandKind.LIST, CommandStatus.SUCCESS): self._render_video_list,
            (CommandKind.LIST, CommandStatus.EMPTY_STORE): lambda _: "No videos currently loaded.",
            (CommandKind.GET_TRANSCRIPT, CommandStatus.SUCCESS): self._render_transcript,
            (CommandKind.GET_TRANSCRIPT, CommandStatus.NOT_FOUND): lambda result: (
                f"{ERROR_PREFIX} Video {result.video_id} not found. Use 'list_videos' to see loaded videos."
            ),
            (CommandKind.REMOVE, CommandStatus.SUCCESS): self._render_removed,
            (CommandKind.REMOVE, CommandStatus.NOT_FOUND): lambda result: (
                f"{ERROR_PREFIX} Video {result.video_id} not found."
            ),
            (CommandKind.CLEAR, CommandStatus.SUCCESS): lambda result: (
                f"Cleared {result.count} video{'' if result.count == 1 else 's'} from memory."
            ),
        }

    def render(self, result: CommandResult) -> str:
        kind = CommandKind.ADD_VIDEO if result.kind is CommandKind.TRANSCRIBE else result.kind
        renderer = self._renderers.get((result.kind, result.status)) or self._renderers.get((kind, result.status))
        if renderer is None:
            raise ValueError(f"No renderer for {result.kind.value} result with status {result.status.value}")
        return renderer(result)

    # ------------------------------------------------------------------ #
    # Ingestion                                                          #
    # ------------------------------------------------------------------ #
    @staticmethod
    def _render_loaded(result: CommandResult) -> str:
        record = _require_record(result)
        return (
            f"Successfully loaded video {record.id}\n"
            f"- URL: {record.url}\n"
            f"- Transcript entries: {record.entry_count}\n"
            f"- Language: {record.language}\n"
            f"- Duration: {record.total_duration_seconds:.1f} seconds"
        )

    @staticmethod
    def _render_already_loaded(result: CommandResult) -> str:
        return f"Video {result.video_id} is already loaded. Use 'list_videos' to see all loaded videos."

    @staticmethod
    def _render_invalid_reference(result: CommandResult) -> str:
        formats = "\n".join(f"- {item}" for item in SUPPORTED_FORMATS)
        return (
            f"{ERROR_PREFIX} Could not extract video ID from URL: {result.reference}\n\n"
            f"Supported URL formats:\n{formats}"
        )

    @staticmethod
    def _render_provider_error(result: CommandResult) -> str:
        return f"{ERROR_PREFIX} Failed to load video {result.video_id}: {result.detail or 'unknown provider error'}"

    @staticmethod
    def _render_url_not_found(result: CommandResult) -> str:
        examples = "\n".join(f'- "{example}"' for example in EXAMPLE_COMMANDS)
        return (
            f'{ERROR_PREFIX} Could not find a YouTube URL in the command: "{result.reference}"\n\n'
            f"Please include a YouTube URL in your command, for example:\n{examples}"
        )

    # ------------------------------------------------------------------ #
    # Search                                                             #
    # ------------------------------------------------------------------ #
    @staticmethod
    def _render_no_matches(result: CommandResult) -> str:
        ids = result.searched_ids
        scope = ", ".join(ids) if 0 < len(ids) <= 3 else f"{len(ids)} videos"
        return f"No matches found for '{result.query}' in {scope}"

    @staticmethod
    def _render_matches(result: CommandResult) -> str:
        lines: List[str] = [f"Found {len(result.matches)} matches for '{result.query}':", ""]
        current_video: Optional[str] = None
        for match in result.matches:
            if match.video_id != current_video:
                current_video = match.video_id
                lines.append(f"{match.video_title} ({match.video_id})")
                lines.append(f"   {match.video_url}")
                lines.append("")
            lines.extend(_match_lines(match))
            lines.append("")
        return "\n".join(lines) + "\n"

    # ------------------------------------------------------------------ #
    # Listing and transcripts                                            #
    # ------------------------------------------------------------------ #
    @staticmethod
    def _render_video_list(result: CommandResult) -> str:
        lines: List[str] = [f"Loaded videos ({len(result.records)}):", ""]
        for record in result.records:
            lines.extend(
                [
                    record.title,
                    f"   ID: {record.id}",
                    f"   URL: {record.url}",
                    f"   Duration: {format_clock(record.total_duration_seconds)}",
                    f"   Transcript: {record.entry_count} entries ({record.language})",
                    "",
                ]
            )
        return "\n".join(lines) + "\n"

    @staticmethod
    def _render_transcript(result: CommandResult) -> str:
        record = _require_record(result)
        if result.transcript_format is TranscriptFormat.JSON:
            payload = [entry.to_payload() for entry in record.transcript]
            return f"Transcript for {record.id} (JSON format):\n\n{json.dumps(payload, ensure_ascii=False, indent=2)}"

        lines = [f"Transcript for {record.title} ({record.id}):", f"URL: {record.url}", ""]
        lines.extend(f"[{format_clock(entry.start_seconds)}] {entry.text}" for entry in record.transcript)
        return "\n".join(lines) + "\n"

    @staticmethod
    def _render_removed(result: CommandResult) -> str:
        record = _require_record(result)
        return f"Removed video: {record.title} ({record.id})"


def _require_record(result: CommandResult) -> VideoRecord:
    if result.record is None:
        raise ValueError(f"{result.kind.value} result with status {result.status.value} carries no record")
    return result.record


def _match_lines(match: SearchMatch) -> List[str]:
    lines = [
        f"  {format_clock(match.timestamp)} - {match.timestamp_url}",
        f"     {match.matched_text}",
    ]
    if match.context_text != match.matched_text:
        lines.append(f"     Context: ...{match.context_text}...")
    return lines


__all__ = ["ERROR_PREFIX", "TextFormatter", "format_clock"]
