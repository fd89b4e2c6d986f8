"""Resolution of YouTube URLs, free text and raw identifiers to canonical video IDs."""

from __future__ import annotations

import re
from typing import Optional, Pattern, Sequence


class InvalidYouTubeURLError(ValueError):
    """Raised when a provided reference is not a valid YouTube video link or ID."""


_ID_CHARS = r"[0-9A-Za-z_-]{11}"
VIDEO_ID_PATTERN = f"^{_ID_CHARS}$"

_ID = f"({_ID_CHARS})"
_VIDEO_ID_PATTERN = re.compile(VIDEO_ID_PATTERN)

# Tried in order; each captures the identifier in group 1.
_ID_MATCHERS: Sequence[Pattern[str]] = (
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)" + _ID),
    re.compile(r"youtube\.com/watch\?.*v=" + _ID),
)

# Tried in order against free text; the whole match is the URL span.
_URL_SPAN_MATCHERS: Sequence[Pattern[str]] = (
    re.compile(r"https?://(?:www\.|m\.)?(?:youtube\.com/watch\?\S*v=|youtu\.be/)" + _ID + r"\S*"),
    re.compile(r"youtube\.com/watch\?\S*v=" + _ID + r"\S*"),
    re.compile(r"youtu\.be/" + _ID + r"\S*"),
    re.compile(r"(?:https?://)?(?:www\.|m\.)?youtube\.com/embed/" + _ID + r"\S*"),
)

WATCH_URL_TEMPLATE = "https://www.youtube.com/watch?v={video_id}"

SUPPORTED_FORMATS = (
    "https://www.youtube.com/watch?v=VIDEO_ID",
    "https://youtu.be/VIDEO_ID",
    "https://www.youtube.com/watch?v=VIDEO_ID&t=123s",
    "https://www.youtube.com/embed/VIDEO_ID",
    "VIDEO_ID (11 characters)",
)


def is_video_id(candidate: str) -> bool:
    """Return ``True`` when ``candidate`` is exactly an 11-character identifier."""

    return bool(_VIDEO_ID_PATTERN.fullmatch(candidate))


def resolve_video_id(reference: str) -> Optional[str]:
    """Return the video ID embedded in ``reference`` or ``None`` when no known shape matches.

    ``reference`` may be a watch, short or embed URL (extra query parameters such as ``t=447s``
    are ignored) or a bare identifier.

    Examples::

        >>> resolve_video_id("https://www.youtube.com/watch?v=P2DfG5JEAmA&t=447s")
        'P2DfG5JEAmA'
        >>> resolve_video_id("not a video") is None
        True
    """

    stripped = reference.strip()
    for matcher in _ID_MATCHERS:
        match = matcher.search(stripped)
        if match:
            return match.group(1)

    if is_video_id(stripped):
        return stripped
    return None


def extract_url_span(text: str) -> Optional[str]:
    """Find the first YouTube URL mentioned in natural-language ``text``.

    The URL substring itself is returned (not the identifier) so that it can be handed to
    :func:`resolve_video_id`. Patterns are tried in priority order and within a pattern the
    earliest occurrence wins.
    """

    for matcher in _URL_SPAN_MATCHERS:
        match = matcher.search(text)
        if match:
            return match.group(0)
    return None


def extract_video_id(url: str) -> str:
    """Extract and validate a YouTube video ID from a URL or raw ID string."""

    video_id = resolve_video_id(url)
    if video_id is None:
        raise InvalidYouTubeURLError(f"Invalid YouTube URL or video ID: {url!r}")
    return video_id


def watch_url(video_id: str) -> str:
    """Return the canonical watch URL for ``video_id``."""

    return WATCH_URL_TEMPLATE.format(video_id=video_id)


__all__ = [
    "InvalidYouTubeURLError",
    "SUPPORTED_FORMATS",
    "VIDEO_ID_PATTERN",
    "extract_url_span",
    "extract_video_id",
    "is_video_id",
    "resolve_video_id",
    "watch_url",
]
