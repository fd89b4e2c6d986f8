"""Pydantic models for transcript ingestion and storage."""

from __future__ import annotations

from typing import Dict, Tuple

from pydantic import Field, computed_field

from tubescribe.models.base import TubescribeBaseModel
from tubescribe.utils.validation import VIDEO_ID_PATTERN


class CaptionPayload(TubescribeBaseModel):
    """Caption unit as returned by a fetch adapter, timed in milliseconds."""

    text: str
    offset_ms: float = Field(ge=0.0)
    duration_ms: float = Field(default=0.0, ge=0.0)


class TranscriptEntry(TubescribeBaseModel):
    """Single caption unit with its start offset and duration in seconds."""

    text: str
    start_seconds: float = Field(ge=0.0)
    duration_seconds: float = Field(default=0.0, ge=0.0)

    def to_payload(self) -> Dict[str, object]:
        """Return the ``{"text", "start", "duration"}`` mapping used for JSON output."""

        return {"text": self.text, "start": self.start_seconds, "duration": self.duration_seconds}


class VideoRecord(TubescribeBaseModel):
    """A loaded video and its full transcript.

    Records are built once per identifier when a video is first added and are never mutated
    afterwards. The title is a placeholder derived from the identifier; no metadata is fetched.
    """

    id: str = Field(pattern=VIDEO_ID_PATTERN)
    url: str
    title: str
    language: str = Field(min_length=1)
    transcript: Tuple[TranscriptEntry, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_duration_seconds(self) -> float:
        if not self.transcript:
            return 0.0
        last = self.transcript[-1]
        return last.start_seconds + last.duration_seconds

    @property
    def entry_count(self) -> int:
        return len(self.transcript)


__all__ = ["CaptionPayload", "TranscriptEntry", "VideoRecord"]
