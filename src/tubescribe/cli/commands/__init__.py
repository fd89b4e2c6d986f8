"""Command registration utilities for the tubescribe CLI."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from tubescribe.cli.commands import transcripts
from tubescribe.services.commands import TranscriptCommands


def register_commands(app: typer.Typer, console: Console, commands: Optional[TranscriptCommands] = None) -> None:
    """Attach command groups to the provided Typer application."""

    transcripts.register(app, console, commands)

    @app.callback()
    def main_callback() -> None:
        """Index YouTube transcripts in memory and search them."""


__all__ = ["register_commands"]
