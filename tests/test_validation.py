from __future__ import annotations

import pytest
from pydantic import ValidationError

from tubescribe.models.transcript import VideoRecord
from tubescribe.utils.validation import (
    InvalidYouTubeURLError,
    extract_url_span,
    extract_video_id,
    is_video_id,
    resolve_video_id,
    watch_url,
)


@pytest.mark.parametrize(
    "reference",
    [
        "P2DfG5JEAmA",
        "  P2DfG5JEAmA  ",
        "https://www.youtube.com/watch?v=P2DfG5JEAmA",
        "https://www.youtube.com/watch?v=P2DfG5JEAmA&t=447s",
        "https://youtube.com/watch?feature=shared&v=P2DfG5JEAmA",
        "https://m.youtube.com/watch?v=P2DfG5JEAmA&list=PL123",
        "https://youtu.be/P2DfG5JEAmA",
        "https://youtu.be/P2DfG5JEAmA?si=abc&t=12",
        "https://www.youtube.com/embed/P2DfG5JEAmA?start=30",
        "youtube.com/watch?v=P2DfG5JEAmA",
    ],
)
def test_resolve_video_id_accepts_known_shapes(reference: str) -> None:
    assert resolve_video_id(reference) == "P2DfG5JEAmA"


@pytest.mark.parametrize(
    "reference",
    [
        "",
        "   ",
        "not a video",
        "P2DfG5JEAm",
        "P2DfG5JEAmA!",
        "https://vimeo.com/12345678901",
        "https://youtu.be/short",
    ],
)
def test_resolve_video_id_returns_none_for_unknown_shapes(reference: str) -> None:
    assert resolve_video_id(reference) is None


def test_watch_pattern_takes_priority_over_bare_id() -> None:
    assert resolve_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ") == "dQw4w9WgXcQ"


def test_extract_url_span_finds_embedded_url() -> None:
    assert extract_url_span("please transcribe: https://youtu.be/P2DfG5JEAmA") == "https://youtu.be/P2DfG5JEAmA"


def test_extract_url_span_keeps_query_parameters() -> None:
    command = "transcribe this url: https://www.youtube.com/watch?v=P2DfG5JEAmA&t=447s thanks"
    span = extract_url_span(command)
    assert span == "https://www.youtube.com/watch?v=P2DfG5JEAmA&t=447s"
    assert resolve_video_id(span) == "P2DfG5JEAmA"


def test_extract_url_span_returns_none_without_url() -> None:
    assert extract_url_span("invalid command without url") is None


def test_extract_url_span_prefers_first_occurrence() -> None:
    text = "compare https://youtu.be/P2DfG5JEAmA with https://youtu.be/dQw4w9WgXcQ"
    assert extract_url_span(text) == "https://youtu.be/P2DfG5JEAmA"


def test_extract_url_span_prefers_scheme_pattern_over_bare_host() -> None:
    text = "youtu.be/dQw4w9WgXcQ or https://www.youtube.com/watch?v=P2DfG5JEAmA"
    assert extract_url_span(text) == "https://www.youtube.com/watch?v=P2DfG5JEAmA"


def test_extract_url_span_without_scheme() -> None:
    assert extract_url_span("add youtube.com/watch?v=P2DfG5JEAmA now") == "youtube.com/watch?v=P2DfG5JEAmA"


def test_extract_url_span_handles_embed_links() -> None:
    text = "grab https://www.youtube.com/embed/P2DfG5JEAmA please"
    assert extract_url_span(text) == "https://www.youtube.com/embed/P2DfG5JEAmA"


def test_extract_video_id_raises_for_invalid_reference() -> None:
    with pytest.raises(InvalidYouTubeURLError):
        extract_video_id("https://example.com/watch?v=nothing")


def test_helpers() -> None:
    assert is_video_id("P2DfG5JEAmA")
    assert not is_video_id("P2DfG5JEAmA ")
    assert watch_url("P2DfG5JEAmA") == "https://www.youtube.com/watch?v=P2DfG5JEAmA"


@pytest.mark.parametrize("video_id", ["P2DfG5JEAm", "P2DfG5JEAmA!", "P2DfG 5JEAm"])
def test_video_record_rejects_ids_the_resolver_rejects(video_id: str) -> None:
    assert not is_video_id(video_id)

    with pytest.raises(ValidationError):
        VideoRecord(id=video_id, url=watch_url(video_id), title=f"Video {video_id}", language="en", transcript=())
