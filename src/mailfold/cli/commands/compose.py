"""Compose a complete message."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from mailfold.cli.common import console, exit_error, show_crlf
from mailfold.exceptions import AttachmentError
from mailfold.message import MessageBuilder


def _error_table(errors: list) -> Table:
    table = Table(title="Validation errors", show_header=True, header_style="bold red")
    table.add_column("Field", style="cyan")
    table.add_column("Reason")
    for error in errors:
        table.add_row(error.header_name, error.reason)
    return table


def compose(
    sender: Annotated[str, typer.Option("--from", help="From address.")],
    to: Annotated[list[str], typer.Option("--to", help="Recipient, repeatable.")],
    cc: Annotated[list[str] | None, typer.Option("--cc", help="Carbon copy, repeatable.")] = None,
    bcc: Annotated[list[str] | None, typer.Option("--bcc", help="Blind carbon copy, repeatable.")] = None,
    subject: Annotated[str | None, typer.Option("--subject", "-s", help="Subject.")] = None,
    body: Annotated[str | None, typer.Option("--body", "-b", help="Body text.")] = None,
    body_file: Annotated[
        Path | None,
        typer.Option("--body-file", exists=True, dir_okay=False, help="Read the body from a file."),
    ] = None,
    content_type: Annotated[
        str | None,
        typer.Option("--content-type", "-t", help="plain, html or a media type. Sniffed when omitted."),
    ] = None,
    attach: Annotated[list[Path] | None, typer.Option("--attach", "-a", help="Attachment, repeatable.")] = None,
    inline: Annotated[
        list[Path] | None,
        typer.Option("--inline", help="Inline attachment referenced as cid:<file name>, repeatable."),
    ] = None,
    message_id: Annotated[
        bool,
        typer.Option("--message-id/--no-message-id", help="Add a Date and a generated Message-ID."),
    ] = True,
    strict: Annotated[bool, typer.Option("--strict", help="Refuse to print an invalid message.")] = False,
    crlf: Annotated[bool, typer.Option("--show-crlf", help="Print line terminators as \\r\\n.")] = False,
) -> None:
    """Print an RFC 5322 message built from the options.

    Examples:
        mailfold compose --from alice@example.com --to bob@example.com -s Hi -b "Hello Bob"

        mailfold compose --from alice@example.com --to bob@example.com --attach report.pdf --strict
    """
    if body is not None and body_file is not None:
        exit_error("--body and --body-file are mutually exclusive")

    builder = MessageBuilder()
    builder.sender(sender).to(*to)
    if cc:
        builder.cc(*cc)
    if bcc:
        builder.bcc(*bcc)
    if subject is not None:
        builder.subject(subject)
    if message_id:
        builder.date().message_id()

    text = body_file.read_text(encoding="utf-8") if body_file is not None else body
    if text is not None:
        builder.body(text, content_type)

    try:
        for path in attach or []:
            builder.attach(path)
        for path in inline or []:
            builder.attach_inline(path.name, path)
    except AttachmentError as exc:
        exit_error(str(exc))

    if strict:
        errors = builder.validate()
        if errors:
            console.print(_error_table(errors))
            raise typer.Exit(1)

    raw = builder.raw()
    typer.echo(show_crlf(raw) if crlf else raw, nl=False)


__all__ = ["compose"]
