"""CLI commands for marketlens."""

from marketlens.cli.main import cli, main

__all__ = ["cli", "main"]
