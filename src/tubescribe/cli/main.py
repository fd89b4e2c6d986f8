"""Typer application for the ``tubescribe`` command."""

from __future__ import annotations

from typing import List, Optional

import typer
from rich.console import Console

from tubescribe.cli.commands import register_commands
from tubescribe.services.commands import TranscriptCommands


class CLIApplication:
    """Typer app bound to one transcript facade and a stderr log console.

    Pass ``commands`` to share an existing :class:`TranscriptCommands` (and its loaded
    transcripts); otherwise one is built lazily the first time a command needs it.
    """

    def __init__(self, console: Optional[Console] = None, commands: Optional[TranscriptCommands] = None) -> None:
        self.console = console or Console(stderr=True)
        self._app = typer.Typer(add_completion=False, rich_markup_mode="rich", no_args_is_help=True)
        register_commands(self._app, self.console, commands)

    @property
    def app(self) -> typer.Typer:
        return self._app

    def run(self, *, prog_name: Optional[str] = None, args: Optional[List[str]] = None) -> None:
        """Dispatch ``args`` (``sys.argv`` when omitted) to the registered commands."""

        self._app(prog_name=prog_name, args=args)


def create_app(console: Optional[Console] = None, commands: Optional[TranscriptCommands] = None) -> typer.Typer:
    """Build the Typer app, for tests and embedding."""

    return CLIApplication(console=console, commands=commands).app


def main() -> None:
    """Entry point of the ``tubescribe`` script and ``python -m tubescribe``."""

    CLIApplication().run(prog_name="tubescribe")


__all__ = ["CLIApplication", "create_app", "main"]
