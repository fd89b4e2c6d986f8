"""Models describing transcript search output."""

from __future__ import annotations

import math

from pydantic import Field

from tubescribe.models.base import TubescribeBaseModel


class SearchMatch(TubescribeBaseModel):
    """One transcript entry matching a query, with the text of its neighbouring entries."""

    video_id: str
    video_url: str
    video_title: str
    timestamp: float = Field(ge=0.0)
    duration_seconds: float = Field(default=0.0, ge=0.0)
    matched_text: str
    context_text: str
    match_index: int = Field(ge=0)

    @property
    def timestamp_url(self) -> str:
        """Watch URL that starts playback at the match (whole seconds)."""

        return f"{self.video_url}&t={math.floor(self.timestamp)}s"


__all__ = ["SearchMatch"]
