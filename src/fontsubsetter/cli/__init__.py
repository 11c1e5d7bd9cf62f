"""Command-line interface for fontsubsetter.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Runs with no arguments using the default directories
- Paths configurable by option or environment variable
- Per-font result lines and a run summary
- Verbose/quiet output modes
"""

from fontsubsetter.cli.app import cli, main

__all__ = ["cli", "main"]
