from __future__ import annotations

import asyncio
from typing import Any

from tubescribe.config.settings import Settings
from tubescribe.models.command import CommandResult
from tubescribe.server import create_server
from tubescribe.services.commands import TranscriptCommands

from tests.conftest import VIDEO_A

TOOL_NAMES = {
    "transcribe_youtube",
    "add_youtube_video",
    "search_transcripts",
    "list_videos",
    "get_video_transcript",
    "remove_video",
    "clear_all_videos",
}


def _call(server: Any, name: str, arguments: dict) -> str:
    result = asyncio.run(server.call_tool(name, arguments))
    content = result[0] if isinstance(result, tuple) else result
    return content[0].text


def test_all_tools_are_registered(commands: TranscriptCommands, settings: Settings) -> None:
    server = create_server(commands, settings=settings)

    tools = {tool.name: tool for tool in asyncio.run(server.list_tools())}

    assert set(tools) == TOOL_NAMES
    search_schema = tools["search_transcripts"].inputSchema
    assert set(search_schema["properties"]) == {"query", "videoIds", "contextWords"}
    assert search_schema["required"] == ["query"]
    assert tools["get_video_transcript"].inputSchema["required"] == ["videoId"]
    assert "required" not in tools["list_videos"].inputSchema or not tools["list_videos"].inputSchema["required"]


def test_tools_return_rendered_text(commands: TranscriptCommands, settings: Settings) -> None:
    server = create_server(commands, settings=settings)

    added = _call(server, "add_youtube_video", {"url": f"https://youtu.be/{VIDEO_A}"})
    found = _call(server, "search_transcripts", {"query": "cat", "contextWords": 0})
    cleared = _call(server, "clear_all_videos", {})

    assert added.startswith(f"Successfully loaded video {VIDEO_A}")
    assert found.startswith("Found 1 matches for 'cat':")
    assert cleared == "Cleared 1 video from memory."


def test_unexpected_faults_become_error_text(commands: TranscriptCommands, settings: Settings) -> None:
    class BrokenCommands(TranscriptCommands):
        def list_videos(self) -> CommandResult:
            raise RuntimeError("store exploded")

    broken = BrokenCommands(fetcher=commands._fetcher, settings=settings, console=commands._console)
    server = create_server(broken, settings=settings)

    assert _call(server, "list_videos", {}) == "Error: store exploded"
