"""In-memory transcript store keyed by video identifier."""

from __future__ import annotations

import threading
from enum import Enum
from typing import Dict, Iterator, List, Optional

from tubescribe.models.transcript import VideoRecord


class InsertOutcome(str, Enum):
    """Result of attempting to add a record to the store."""

    INSERTED = "inserted"
    ALREADY_EXISTS = "already_exists"


class TranscriptStore:
    """Process-lifetime mapping from video ID to its immutable :class:`VideoRecord`.

    Enumeration follows insertion order. Existing records are never overwritten; re-inserting an
    identifier reports :attr:`InsertOutcome.ALREADY_EXISTS` and leaves the stored record intact.
    """

    def __init__(self) -> None:
        self._records: Dict[str, VideoRecord] = {}
        self._lock = threading.RLock()

    def has(self, video_id: str) -> bool:
        with self._lock:
            return video_id in self._records

    def get(self, video_id: str) -> Optional[VideoRecord]:
        with self._lock:
            return self._records.get(video_id)

    def insert(self, record: VideoRecord) -> InsertOutcome:
        """Store ``record`` unless its identifier is already present."""

        with self._lock:
            if record.id in self._records:
                return InsertOutcome.ALREADY_EXISTS
            self._records[record.id] = record
            return InsertOutcome.INSERTED

    def remove(self, video_id: str) -> Optional[VideoRecord]:
        """Remove and return the record for ``video_id``, or ``None`` when absent."""

        with self._lock:
            return self._records.pop(video_id, None)

    def clear(self) -> int:
        """Drop every record and return how many were removed."""

        with self._lock:
            count = len(self._records)
            self._records.clear()
            return count

    def list_all(self) -> List[VideoRecord]:
        with self._lock:
            return list(self._records.values())

    def ids(self) -> List[str]:
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, video_id: object) -> bool:
        with self._lock:
            return video_id in self._records

    def __iter__(self) -> Iterator[VideoRecord]:
        return iter(self.list_all())


__all__ = ["InsertOutcome", "TranscriptStore"]
