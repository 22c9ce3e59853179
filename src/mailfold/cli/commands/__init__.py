"""Command implementations registered on the mailfold app."""

from mailfold.cli.commands.compose import compose
from mailfold.cli.commands.header import build_header, render_header

__all__ = ["build_header", "compose", "render_header"]
