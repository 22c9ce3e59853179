"""Render one header field."""

from __future__ import annotations

from typing import Annotated

import typer

from mailfold.cli.common import exit_error, show_crlf
from mailfold.codecs import Encoding
from mailfold.exceptions import HeaderValidationError
from mailfold.header import (
    Address,
    AddressField,
    ContentID,
    CustomHeader,
    Header,
    MessageID,
    Subject,
    canonical_header_key,
)


def build_header(name: str, value: str, *, encode: bool = False, encoding: Encoding = Encoding.Q) -> Header:
    """Pick the renderer matching a field name.

    Args:
        name: Field name, matched case-insensitively.
        value: Field body.
        encode: Allow encoded-words for custom fields.
        encoding: Encoded-word encoding.
    """
    key = canonical_header_key(name)
    if key in {field.value for field in AddressField}:
        return Address(AddressField(key), value)
    if key == "Subject":
        return Subject(value, encoding)
    if key == "Message-Id":
        return MessageID(value)
    if key == "Content-Id":
        return ContentID(value)
    return CustomHeader(name, value, encode, encoding)


def render_header(
    name: Annotated[str, typer.Argument(help="Field name, e.g. Subject or To.")],
    value: Annotated[str, typer.Argument(help="Field body.")],
    encode: Annotated[
        bool,
        typer.Option("--encode", "-e", help="Allow RFC 2047 encoded-words for custom fields."),
    ] = False,
    encoding: Annotated[
        Encoding,
        typer.Option("--encoding", help="Encoded-word encoding (q or b)."),
    ] = Encoding.Q,
    crlf: Annotated[
        bool,
        typer.Option("--show-crlf", help="Print line terminators as \\r\\n."),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Validate the field and fail on errors."),
    ] = False,
) -> None:
    """Render a header field folded to 78-octet lines.

    Examples:
        mailfold header Subject "Quarterly report"

        mailfold header To "Bob <bob@example.com>, eve@example.com" --show-crlf
    """
    header = build_header(name, value, encode=encode, encoding=encoding)
    if strict:
        try:
            header.validate()
        except HeaderValidationError as exc:
            exit_error(str(exc))
    text = header.render()
    typer.echo(show_crlf(text) if crlf else text, nl=False)


__all__ = ["build_header", "render_header"]
