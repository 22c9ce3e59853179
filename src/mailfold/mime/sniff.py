"""Content type detection for MIME parts.

The file name extension is consulted first through :mod:`mimetypes`.
Without a usable name the first 512 octets are matched against a small
table of signatures, then classified as UTF-8 text or binary.
"""

from __future__ import annotations

import mimetypes
from pathlib import PurePath

#: Octets inspected by :func:`detect_content_type`.
SNIFF_LENGTH = 512

DEFAULT_CHARSET = "utf-8"

_HTML_TAGS = (
    b"<!DOCTYPE HTML",
    b"<HTML",
    b"<HEAD",
    b"<SCRIPT",
    b"<IFRAME",
    b"<H1",
    b"<DIV",
    b"<FONT",
    b"<TABLE",
    b"<A",
    b"<STYLE",
    b"<TITLE",
    b"<B",
    b"<BODY",
    b"<BR",
    b"<P",
    b"<!--",
)

_SIGNATURES = (
    (b"%PDF-", "application/pdf"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"PK\x03\x04", "application/zip"),
    (b"\x1f\x8b\x08", "application/gzip"),
    (b"%!PS-Adobe-", "application/postscript"),
)

_BINARY_OCTETS = frozenset([*range(0x00, 0x09), 0x0B, *range(0x0E, 0x1B), *range(0x1C, 0x20)])


def _is_html(head: bytes) -> bool:
    stripped = head.lstrip(b"\t\n\x0c\r ")
    upper = stripped[:16].upper()
    for tag in _HTML_TAGS:
        if upper.startswith(tag) and len(stripped) > len(tag) and stripped[len(tag)] in b" >":
            return True
    return False


def _is_text(head: bytes) -> bool:
    if any(octet in _BINARY_OCTETS for octet in head):
        return False
    try:
        head.decode(DEFAULT_CHARSET)
    except UnicodeDecodeError as exc:
        # A sequence cut by the sniff window is still text.
        return exc.start >= len(head) - 3 and len(head) == SNIFF_LENGTH
    return True


def detect_content_type(data: bytes, filename: str | None = None) -> tuple[str, str]:
    """Detect the media type and charset of data.

    Args:
        data: Content to inspect.
        filename: Optional file name, its extension wins when known.

    Returns:
        ``(media_type, charset)``. charset is ``utf-8`` for ``text/*``
        types and empty otherwise.

    Examples:
        >>> detect_content_type(b"<b>attack at dawn</b>")
        ('text/html', 'utf-8')
        >>> detect_content_type(b"%PDF-1.7 ...")
        ('application/pdf', '')
    """
    if filename:
        guessed, _ = mimetypes.guess_type(PurePath(filename).name, strict=False)
        if guessed:
            return guessed, DEFAULT_CHARSET if guessed.startswith("text/") else ""

    head = data[:SNIFF_LENGTH]
    if _is_html(head):
        return "text/html", DEFAULT_CHARSET
    if head.lstrip().startswith(b"<?xml"):
        return "text/xml", DEFAULT_CHARSET
    for signature, media_type in _SIGNATURES:
        if head.startswith(signature):
            return media_type, ""
    if head.startswith(b"RIFF") and head[8:12] == b"WEBP":
        return "image/webp", ""
    if _is_text(head):
        return "text/plain", DEFAULT_CHARSET
    return "application/octet-stream", ""


__all__ = ["DEFAULT_CHARSET", "SNIFF_LENGTH", "detect_content_type"]
