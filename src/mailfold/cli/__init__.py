"""Command line interface for mailfold."""

from mailfold.cli.app import app

__all__ = ["app"]
