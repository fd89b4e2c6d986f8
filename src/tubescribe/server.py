"""Model Context Protocol tool server exposing the transcript commands.

Seven tools are registered on a :class:`FastMCP` instance. Each returns plain text rendered by
:class:`~tubescribe.utils.formatting.TextFormatter`; failures come back as text starting with
``"Error:"`` rather than as protocol errors. Run it over stdio with ``tubescribe serve``.
"""

from __future__ import annotations

from typing import Awaitable, Callable, List, Literal, Optional

from mcp.server.fastmcp import FastMCP
from rich.console import Console

from tubescribe.config.settings import Settings, get_settings
from tubescribe.models.command import CommandResult
from tubescribe.services.commands import TranscriptCommands
from tubescribe.utils.formatting import ERROR_PREFIX, TextFormatter


def create_server(
    commands: Optional[TranscriptCommands] = None,
    *,
    settings: Optional[Settings] = None,
    console: Optional[Console] = None,
    formatter: Optional[TextFormatter] = None,
) -> FastMCP:
    """Build a :class:`FastMCP` server whose tools delegate to ``commands``."""

    settings = settings or get_settings()
    console = console or Console(stderr=True)
    commands = commands or TranscriptCommands(settings=settings, console=console)
    formatter = formatter or TextFormatter()

    server = FastMCP(settings.server_name, log_level=settings.log_level.upper())

    def respond(tool_name: str, produce: Callable[[], CommandResult]) -> str:
        try:
            return formatter.render(produce())
        except Exception as exc:
            console.log(f"[red]Error in {tool_name}:[/red] {exc}")
            return f"{ERROR_PREFIX} {exc}"

    async def respond_async(tool_name: str, produce: Callable[[], Awaitable[CommandResult]]) -> str:
        try:
            return formatter.render(await produce())
        except Exception as exc:
            console.log(f"[red]Error in {tool_name}:[/red] {exc}")
            return f"{ERROR_PREFIX} {exc}"

    @server.tool()
    async def transcribe_youtube(command: str, language: str = settings.default_language) -> str:
        """Process natural language commands to transcribe YouTube videos.

        Handles commands like 'transcribe this url: [YouTube URL]' or 'add this video: [URL]'.

        Args:
            command: Natural language command containing a YouTube URL.
            language: Preferred transcript language (e.g. 'en', 'es').
        """
        return await respond_async(
            "transcribe_youtube",
            lambda: commands.transcribe_from_command(command, language),
        )

    @server.tool()
    async def add_youtube_video(url: str, language: str = settings.default_language) -> str:
        """Add a YouTube video and extract its transcript for searching.

        Args:
            url: YouTube video URL or video ID.
            language: Preferred transcript language (e.g. 'en', 'es').
        """
        return await respond_async("add_youtube_video", lambda: commands.add_video(url, language))

    @server.tool()
    def search_transcripts(
        query: str,
        videoIds: Optional[List[str]] = None,  # noqa: N803
        contextWords: int = settings.context_entries,  # noqa: N803
    ) -> str:
        """Search for text across all loaded video transcripts.

        Args:
            query: Text to search for in transcripts.
            videoIds: Specific video IDs to search in. Searches all videos when omitted.
            contextWords: Number of surrounding transcript entries to include for context.
        """
        return respond(
            "search_transcripts",
            lambda: commands.search_transcripts(query, video_ids=videoIds, context_window=contextWords),
        )

    @server.tool()
    def list_videos() -> str:
        """List all loaded videos with their basic information."""
        return respond("list_videos", commands.list_videos)

    @server.tool()
    def get_video_transcript(
        videoId: str,  # noqa: N803
        format: Literal["json", "text"] = "text",  # noqa: A002
    ) -> str:
        """Get the full transcript of a specific video.

        Args:
            videoId: YouTube video ID.
            format: Output format for the transcript.
        """
        return respond("get_video_transcript", lambda: commands.get_transcript(videoId, format))

    @server.tool()
    def remove_video(videoId: str) -> str:  # noqa: N803
        """Remove a video from the loaded videos.

        Args:
            videoId: YouTube video ID to remove.
        """
        return respond("remove_video", lambda: commands.remove_video(videoId))

    @server.tool()
    def clear_all_videos() -> str:
        """Remove all loaded videos."""
        return respond("clear_all_videos", commands.clear_all)

    return server


def main() -> None:
    """Run the tool server over stdio."""

    create_server().run()


__all__ = ["create_server", "main"]
