"""Shared console helpers for the command line."""

from __future__ import annotations

from typing import NoReturn

import typer
from rich.console import Console

console = Console()
error_console = Console(stderr=True)


def exit_error(message: str, code: int = 1) -> NoReturn:
    """Print an error and exit with code."""
    error_console.print(f"[red]Error:[/] {message}")
    raise typer.Exit(code)


def show_crlf(text: str) -> str:
    """Make line terminators visible: ``\\r\\n`` is written as ``\\r\\n`` plus a newline."""
    return text.replace("\r\n", "\\r\\n\n")


__all__ = ["console", "error_console", "exit_error", "show_crlf"]
