"""Typed outcomes returned by the command facade."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from pydantic import Field

from tubescribe.models.base import TubescribeBaseModel
from tubescribe.models.search import SearchMatch
from tubescribe.models.transcript import VideoRecord


class CommandStatus(str, Enum):
    """Outcome categories for facade operations."""

    SUCCESS = "success"
    ALREADY_LOADED = "already_loaded"
    INVALID_REFERENCE = "invalid_reference"
    URL_NOT_FOUND = "url_not_found"
    PROVIDER_ERROR = "provider_error"
    NOT_FOUND = "not_found"
    EMPTY_STORE = "empty_store"
    INVALID_QUERY = "invalid_query"
    NO_MATCHES = "no_matches"

    @property
    def is_error(self) -> bool:
        return self in _ERROR_STATUSES


_ERROR_STATUSES = frozenset(
    {
        CommandStatus.INVALID_REFERENCE,
        CommandStatus.URL_NOT_FOUND,
        CommandStatus.PROVIDER_ERROR,
        CommandStatus.NOT_FOUND,
        CommandStatus.INVALID_QUERY,
    }
)


class CommandKind(str, Enum):
    """Facade operations, used by the presentation layer to pick a renderer."""

    ADD_VIDEO = "add_video"
    TRANSCRIBE = "transcribe"
    SEARCH = "search"
    LIST = "list"
    GET_TRANSCRIPT = "get_transcript"
    REMOVE = "remove"
    CLEAR = "clear"


class TranscriptFormat(str, Enum):
    """Output formats supported when returning a full transcript."""

    JSON = "json"
    TEXT = "text"


class CommandResult(TubescribeBaseModel):
    """Structured result of a single facade operation.

    Only the fields relevant to ``kind`` and ``status`` are populated. ``reference`` carries the
    caller's raw input (URL, command text or identifier) so error renderers can echo it back.
    """

    kind: CommandKind
    status: CommandStatus
    reference: Optional[str] = None
    video_id: Optional[str] = None
    record: Optional[VideoRecord] = None
    records: Tuple[VideoRecord, ...] = ()
    matches: Tuple[SearchMatch, ...] = ()
    query: Optional[str] = None
    searched_ids: Tuple[str, ...] = ()
    count: int = Field(default=0, ge=0)
    transcript_format: Optional[TranscriptFormat] = None
    detail: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.status.is_error


__all__ = ["CommandKind", "CommandResult", "CommandStatus", "TranscriptFormat"]
