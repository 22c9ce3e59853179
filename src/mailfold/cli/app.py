"""The ``mailfold`` command line."""

from __future__ import annotations

from typing import Annotated

import typer

from mailfold import meta
from mailfold.cli.commands import compose, render_header
from mailfold.cli.common import console
from mailfold.logging import init_logging

app = typer.Typer(
    name=meta.__app_name__,
    help="Compose RFC 5322 / MIME messages with correctly folded headers.",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"{meta.__app_name__} {meta.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
    log_preset: Annotated[
        str | None,
        typer.Option("--log-preset", help="Logging preset: dev, debug or prod."),
    ] = None,
) -> None:
    """Compose RFC 5322 / MIME messages with correctly folded headers."""
    if log_preset is not None:
        init_logging(preset=log_preset)


app.command("header")(render_header)
app.command("compose")(compose)


__all__ = ["app"]
