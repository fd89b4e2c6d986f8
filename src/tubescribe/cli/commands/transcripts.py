"""CLI commands for serving, resolving, fetching and searching YouTube transcripts."""

from __future__ import annotations

import asyncio
from functools import lru_cache
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from tubescribe.models.command import CommandResult, CommandStatus, TranscriptFormat
from tubescribe.server import create_server
from tubescribe.services.commands import TranscriptCommands
from tubescribe.utils.formatting import TextFormatter
from tubescribe.utils.validation import InvalidYouTubeURLError, extract_video_id


class CommandExitCode:
    """Mapping of meaningful CLI exit codes."""

    SUCCESS = 0
    INVALID_INPUT = 1
    PROVIDER_ERROR = 2
    NOT_FOUND = 3


_STATUS_EXIT_CODES = {
    CommandStatus.SUCCESS: CommandExitCode.SUCCESS,
    CommandStatus.ALREADY_LOADED: CommandExitCode.SUCCESS,
    CommandStatus.INVALID_REFERENCE: CommandExitCode.INVALID_INPUT,
    CommandStatus.URL_NOT_FOUND: CommandExitCode.INVALID_INPUT,
    CommandStatus.INVALID_QUERY: CommandExitCode.INVALID_INPUT,
    CommandStatus.PROVIDER_ERROR: CommandExitCode.PROVIDER_ERROR,
    CommandStatus.NOT_FOUND: CommandExitCode.NOT_FOUND,
    CommandStatus.EMPTY_STORE: CommandExitCode.NOT_FOUND,
    CommandStatus.NO_MATCHES: CommandExitCode.NOT_FOUND,
}


def register(app: typer.Typer, console: Console, commands: Optional[TranscriptCommands] = None) -> None:
    """Register transcript commands on ``app``."""

    formatter = TextFormatter()

    @lru_cache(maxsize=1)
    def get_commands() -> TranscriptCommands:
        return commands or TranscriptCommands(console=console)

    def load(reference: str, language: Optional[str]) -> CommandResult:
        result = asyncio.run(get_commands().add_video(reference, language))
        if result.is_error:
            console.print(f"[red]{escape(formatter.render(result))}[/red]", highlight=False)
            raise typer.Exit(code=_STATUS_EXIT_CODES[result.status])
        return result

    @app.command("serve")
    def serve() -> None:
        """Run the transcript tool server over stdio."""

        console.log("tubescribe tool server running on stdio")
        create_server(get_commands(), console=console).run()

    @app.command("resolve")
    def resolve(
        reference: str = typer.Argument(..., help="YouTube URL or video ID"),
    ) -> None:
        """Print the canonical 11-character video ID for a URL or ID."""

        try:
            video_id = extract_video_id(reference)
        except InvalidYouTubeURLError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(code=CommandExitCode.INVALID_INPUT) from exc
        typer.echo(video_id)

    @app.command("fetch")
    def fetch(
        reference: str = typer.Argument(..., help="YouTube URL or video ID to transcribe"),
        language: Optional[str] = typer.Option(None, "--language", "-l", help="Caption language code"),
        output_format: TranscriptFormat = typer.Option(
            TranscriptFormat.TEXT, "--format", "-f", help="Transcript output format"
        ),
    ) -> None:
        """Fetch a video's transcript and print it."""

        loaded = load(reference, language)
        result = get_commands().get_transcript(loaded.video_id or reference, output_format)
        typer.echo(formatter.render(result), nl=False)

    @app.command("search")
    def search(
        query: str = typer.Argument(..., help="Text to search for"),
        videos: List[str] = typer.Option(..., "--video", "-v", help="YouTube URL or ID to load (repeatable)"),
        context: Optional[int] = typer.Option(None, "--context", "-c", help="Surrounding entries per match"),
        language: Optional[str] = typer.Option(None, "--language", "-l", help="Caption language code"),
    ) -> None:
        """Load one or more videos and search their transcripts."""

        for reference in videos:
            load(reference, language)

        result = get_commands().search_transcripts(query, context_window=context)
        text = formatter.render(result)
        if result.is_error:
            console.print(f"[red]{escape(text)}[/red]", highlight=False)
        else:
            typer.echo(text)
        code = _STATUS_EXIT_CODES[result.status]
        if code != CommandExitCode.SUCCESS:
            raise typer.Exit(code=code)


__all__ = ["CommandExitCode", "register"]
