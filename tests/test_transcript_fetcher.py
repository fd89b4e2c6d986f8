from __future__ import annotations

import io
from typing import Any, Dict, List

import pytest
from rich.console import Console
from youtube_transcript_api._errors import (
    AgeRestricted,
    InvalidVideoId,
    TranscriptsDisabled,
    VideoUnavailable,
    VideoUnplayable,
)

from tubescribe.config.settings import Settings
from tubescribe.services.transcript import ProviderError, YouTubeTranscriptFetcher, build_video_record

from tests.conftest import VIDEO_A, make_captions


class _Fetched:
    def __init__(self, raw: List[Dict[str, Any]]) -> None:
        self._raw = raw

    def to_raw_data(self) -> List[Dict[str, Any]]:
        return list(self._raw)


class _StubTranscriptApi:
    def __init__(self, outcomes: List[Any]) -> None:
        self._outcomes = list(outcomes)
        self.calls: List[Any] = []

    def fetch(self, video_id: str, languages: Any = ("en",)) -> _Fetched:
        self.calls.append((video_id, tuple(languages)))
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _fetcher(settings: Settings, api: _StubTranscriptApi) -> YouTubeTranscriptFetcher:
    return YouTubeTranscriptFetcher(settings=settings, console=Console(file=io.StringIO()), transcript_api=api)


def test_fetch_converts_seconds_to_milliseconds(settings: Settings) -> None:
    api = _StubTranscriptApi(
        [
            _Fetched(
                [
                    {"text": "hello", "start": 1.25, "duration": 2.5},
                    {"text": "world", "start": 3.75, "duration": 0},
                ]
            )
        ]
    )

    captions = _fetcher(settings, api).fetch(VIDEO_A, "es")

    assert api.calls == [(VIDEO_A, ("es",))]
    assert [(caption.text, caption.offset_ms, caption.duration_ms) for caption in captions] == [
        ("hello", pytest.approx(1250.0), pytest.approx(2500.0)),
        ("world", pytest.approx(3750.0), 0.0),
    ]


def test_transient_failures_are_retried(settings: Settings) -> None:
    api = _StubTranscriptApi([ConnectionError("reset"), _Fetched([{"text": "ok", "start": 0.0, "duration": 1.0}])])

    captions = _fetcher(settings, api).fetch(VIDEO_A, "en")

    assert len(api.calls) == 2
    assert captions[0].text == "ok"


def test_retries_exhausted_raise_provider_error(settings: Settings) -> None:
    api = _StubTranscriptApi([ConnectionError("reset"), ConnectionError("still down")])

    with pytest.raises(ProviderError) as excinfo:
        _fetcher(settings, api).fetch(VIDEO_A, "en")

    assert excinfo.value.video_id == VIDEO_A
    assert "still down" in str(excinfo.value)
    assert len(api.calls) == settings.fetch_retry_attempts


@pytest.mark.parametrize(
    "error",
    [
        VideoUnavailable(VIDEO_A),
        TranscriptsDisabled(VIDEO_A),
        InvalidVideoId(VIDEO_A),
        AgeRestricted(VIDEO_A),
        VideoUnplayable(VIDEO_A, "Video unavailable", []),
    ],
    ids=lambda error: type(error).__name__,
)
def test_permanent_failures_are_not_retried(settings: Settings, error: Exception) -> None:
    api = _StubTranscriptApi([error, _Fetched([])])

    with pytest.raises(ProviderError):
        _fetcher(settings, api).fetch(VIDEO_A, "en")

    assert len(api.calls) == 1


def test_build_video_record_divides_milliseconds() -> None:
    record = build_video_record(VIDEO_A, "en", make_captions("one", "two", step_ms=1500.0, duration_ms=750.0))

    assert record.url == f"https://www.youtube.com/watch?v={VIDEO_A}"
    assert record.title == f"Video {VIDEO_A}"
    assert [entry.start_seconds for entry in record.transcript] == [0.0, 1.5]
    assert [entry.duration_seconds for entry in record.transcript] == [0.75, 0.75]
    assert record.total_duration_seconds == pytest.approx(2.25)
    assert record.entry_count == 2


def test_empty_transcript_has_zero_duration() -> None:
    record = build_video_record(VIDEO_A, "en", [])

    assert record.total_duration_seconds == 0.0
    assert record.model_dump()["total_duration_seconds"] == 0.0
