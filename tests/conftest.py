"""Shared fixtures: a scripted fetch adapter and quiet consoles."""

from __future__ import annotations

import io
from typing import Dict, List, Sequence, Tuple, Union

import pytest
from rich.console import Console

from tubescribe.config.settings import Settings
from tubescribe.models.transcript import CaptionPayload
from tubescribe.services.commands import TranscriptCommands
from tubescribe.services.store import TranscriptStore
from tubescribe.services.transcript import ProviderError

VIDEO_A = "P2DfG5JEAmA"
VIDEO_B = "dQw4w9WgXcQ"


def make_captions(*texts: str, step_ms: float = 2000.0, duration_ms: float = 1500.0) -> List[CaptionPayload]:
    return [
        CaptionPayload(text=text, offset_ms=index * step_ms, duration_ms=duration_ms)
        for index, text in enumerate(texts)
    ]


class FakeFetcher:
    """Fetch adapter returning scripted captions or raising scripted errors."""

    def __init__(self, responses: Dict[str, Union[Sequence[CaptionPayload], Exception]]) -> None:
        self.responses = dict(responses)
        self.calls: List[Tuple[str, str]] = []

    def fetch(self, video_id: str, language: str) -> Sequence[CaptionPayload]:
        self.calls.append((video_id, language))
        response = self.responses.get(video_id)
        if response is None:
            raise ProviderError(video_id, f"No transcript found for {video_id}")
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def quiet_console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        default_language="en",
        context_entries=5,
        fetch_timeout_seconds=5.0,
        fetch_retry_attempts=2,
        fetch_retry_backoff_seconds=0.0,
    )


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher(
        {
            VIDEO_A: make_captions("a cat", "ran fast", "a dog"),
            VIDEO_B: make_captions("never gonna give you up", "never gonna let you down"),
        }
    )


@pytest.fixture
def commands(fetcher: FakeFetcher, settings: Settings, quiet_console: Console) -> TranscriptCommands:
    return TranscriptCommands(
        store=TranscriptStore(),
        fetcher=fetcher,
        settings=settings,
        console=quiet_console,
    )
