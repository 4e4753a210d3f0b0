"""Command-line interface."""
from dto_openapi.cli.commands import cli

__all__ = ["cli"]
