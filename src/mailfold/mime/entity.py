"""MIME entities: folded header fields followed by a body."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from mailfold.codecs import encode_quoted_printable_body
from mailfold.header import ContentTransferEncoding, ContentType, Header
from mailfold.limits import CRLF, MAX_LINE_OCTETS
from mailfold.mime.sniff import detect_content_type

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass
class Entity:
    """Header fields, a blank line, then the body.

    Attributes:
        headers: Fields in output order.
        body: Body text, or a multipart body.

    Examples:
        >>> from mailfold.header import Subject
        >>> str(Entity([Subject("hi")], "hello"))
        'Subject: hi\\r\\n\\r\\nhello'
    """

    headers: list[Header] = field(default_factory=list)
    body: str | MultipartBody = ""

    def render(self) -> str:
        """Complete entity text."""
        return "".join(header.render() for header in self.headers) + CRLF + str(self.body)

    def __str__(self) -> str:
        return self.render()


@dataclass
class MultipartBody:
    """Parts separated by ``--boundary`` delimiters (RFC 2046 section 5.1).

    Attributes:
        boundary: Delimiter without the leading dashes.
        parts: Body parts in order.
    """

    boundary: str
    parts: Sequence[Entity]

    def render(self) -> str:
        """Delimited parts and the closing delimiter."""
        delimiter = f"--{self.boundary}"
        chunks = [f"{delimiter}{CRLF}{part.render()}" for part in self.parts]
        return CRLF.join(chunks) + f"{CRLF}{delimiter}--"

    def __str__(self) -> str:
        return self.render()


def _is_7bit(text: str) -> bool:
    if not text.isascii():
        return False
    return all(len(line) <= MAX_LINE_OCTETS for line in text.split(CRLF))


def text_entity(text: str, media_type: str | None = None) -> Entity:
    """A text body part.

    Line breaks (CRLF, bare CR or bare LF) are normalized to CRLF. The
    media type is sniffed when not given. Text that is not 7-bit safe
    (non-ASCII or lines over 998 octets) is sent quoted-printable.

    Args:
        text: Body text.
        media_type: Explicit ``type/subtype``.
    """
    text = _LINE_BREAK.sub(CRLF, text)
    data = text.encode("utf-8")
    if media_type is None:
        media_type, charset = detect_content_type(data)
    else:
        charset = "utf-8" if media_type.startswith("text/") else ""
    headers: list[Header] = [ContentType(media_type, {"charset": charset} if charset else {})]
    if _is_7bit(text):
        return Entity(headers, text)
    headers.append(ContentTransferEncoding("quoted-printable"))
    return Entity(headers, encode_quoted_printable_body(text))


__all__ = ["Entity", "MultipartBody", "text_entity"]
