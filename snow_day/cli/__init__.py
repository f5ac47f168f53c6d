"""Command-line entry point for the Snow Day Calculator."""

from snow_day.cli.commands import main

__all__ = ["main"]
