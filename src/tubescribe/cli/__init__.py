"""Command-line interface package for tubescribe."""

from tubescribe.cli.main import CLIApplication, create_app, main

__all__ = ["CLIApplication", "create_app", "main"]
