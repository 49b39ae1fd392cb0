"""Command-line interface for seamline.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Document inspection with rebuild diagnostics
- Legacy offset to ratio normalization
- Hit testing and scripted sewing drags
- Synthetic layout generation
"""

from seamline.cli.app import cli, main

__all__ = ["cli", "main"]
