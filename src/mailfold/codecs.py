"""RFC 2047 word codecs, RFC 2231 percent codec and body transfer encoders.

The low-level octet transforms are delegated to the standard library
``email.quoprimime`` and ``email.base64mime`` modules. This module adds the
pieces the folding engine needs on top of them: encoded length without
materialising output, per code point cost for bisection, multi-word
encoding capped at 75 octets per word, and recognition of existing
encoded-words.

Examples:
    >>> encode_word("héllo", Encoding.Q)
    '=?utf-8?q?h=C3=A9llo?='
    >>> percent_encode("méow.txt")
    'm%C3%A9ow.txt'
"""

from __future__ import annotations

import base64
import binascii
import re
import string
from email import base64mime, quoprimime
from enum import Enum
from urllib.parse import quote

#: Charset announced in every encoded-word and extended parameter.
CHARSET = "utf-8"

#: Octets taken by ``=?utf-8?q?`` and ``?=``.
ENCODED_WORD_OVERHEAD = len(f"=?{CHARSET}?q?") + len("?=")

# attribute-char minus the characters quote() always keeps (RFC 2231 section 7)
_ATTRIBUTE_SAFE = "!#$&+^`{|}"
_PERCENT_KEPT = (string.ascii_letters + string.digits + "_.-~" + _ATTRIBUTE_SAFE).encode("ascii")

_ENCODED_WORD = re.compile(r"=\?([^?\s]+)\?([qQbB])\?([^?\s]*)\?=")
_NEEDS_ENCODING = re.compile(r"[^\t\x20-\x7e]|=\?")


class Encoding(str, Enum):
    """RFC 2047 encoded-word encodings."""

    Q = "q"
    B = "b"


def needs_encoding(text: str) -> bool:
    """Tell whether text cannot be sent raw in an unstructured header.

    Any character outside printable US-ASCII (HTAB excepted) requires
    encoding, as does the ``=?`` sequence that would otherwise be decoded as
    an encoded-word by the receiver.
    """
    return _NEEDS_ENCODING.search(text) is not None


def encoded_length(data: bytes, encoding: Encoding) -> int:
    """Length of the encoded payload, envelope excluded."""
    if encoding is Encoding.B:
        return base64mime.header_length(data)
    return quoprimime.header_length(data)


def char_cost(ch: str, encoding: Encoding) -> int:
    """Cost of one code point: encoded octets for Q, raw octets for B.

    Base64 costs are converted to encoded length by the caller with the 3:4
    block ratio, since a single code point does not map to whole blocks.
    """
    data = ch.encode(CHARSET)
    if encoding is Encoding.B:
        return len(data)
    return quoprimime.header_length(data)


def encode_word(text: str, encoding: Encoding) -> str:
    """Encode text as a single encoded-word, regardless of its length."""
    data = text.encode(CHARSET)
    if encoding is Encoding.B:
        return base64mime.header_encode(data, charset=CHARSET)
    return quoprimime.header_encode(data, charset=CHARSET)


def encode_words(text: str, encoding: Encoding, max_length: int = 75) -> str:
    """Encode text as space-separated encoded-words of at most max_length.

    Words are split on code point boundaries, so every word decodes to
    valid UTF-8 on its own.

    Args:
        text: Decoded text.
        encoding: Q or B.
        max_length: Longest allowed encoded-word, envelope included.

    Returns:
        The encoded words joined by single spaces, or ``""`` for empty text.
    """
    budget = max_length - ENCODED_WORD_OVERHEAD
    if encoding is Encoding.B:
        budget = budget // 4 * 3

    words: list[str] = []
    start = 0
    used = 0
    for index, ch in enumerate(text):
        cost = char_cost(ch, encoding)
        if used + cost > budget and index > start:
            words.append(encode_word(text[start:index], encoding))
            start = index
            used = 0
        used += cost
    if start < len(text):
        words.append(encode_word(text[start:], encoding))
    return " ".join(words)


def _word_length(used: int, encoding: Encoding) -> int:
    if encoding is Encoding.B:
        used = (used + 2) // 3 * 4
    return ENCODED_WORD_OVERHEAD + used


def encoded_words_length(text: str, encoding: Encoding, max_length: int = 75, limit: int | None = None) -> int:
    """Octet length of :func:`encode_words` output, without building it.

    Args:
        text: Decoded text.
        encoding: Q or B.
        max_length: Longest allowed encoded-word, envelope included.
        limit: Stop counting once the length is known to exceed it. The
            returned value is then some length above limit.

    Returns:
        The exact length, or a length above limit when counting stopped early.

    Examples:
        >>> encoded_words_length("héllo", Encoding.Q)
        22
    """
    budget = max_length - ENCODED_WORD_OVERHEAD
    if encoding is Encoding.B:
        budget = budget // 4 * 3

    total = 0
    used = 0
    count = 0
    for ch in text:
        cost = char_cost(ch, encoding)
        if used + cost > budget and count:
            # One separating space per word already closed.
            total += _word_length(used, encoding) + 1
            if limit is not None and total - 1 > limit:
                return total - 1
            used = 0
            count = 0
        used += cost
        count += 1
    return total + _word_length(used, encoding) if count else 0


def decode_word(word: str) -> tuple[str, Encoding] | None:
    """Decode a single UTF-8 encoded-word.

    Args:
        word: Candidate encoded-word such as ``=?utf-8?q?foo?=``.

    Returns:
        The decoded text and its encoding, or None when word is not a
        well-formed UTF-8 encoded-word.
    """
    match = _ENCODED_WORD.fullmatch(word)
    if match is None:
        return None
    charset, kind, payload = match.groups()
    if charset.lower() != CHARSET:
        return None
    encoding = Encoding(kind.lower())
    try:
        if encoding is Encoding.B:
            data = base64.b64decode(payload, validate=True)
        else:
            data = quoprimime.header_decode(payload).encode("latin-1")
        return data.decode(CHARSET), encoding
    except (binascii.Error, UnicodeError):
        return None


def percent_encode(text: str) -> str:
    """Percent-encode text for an RFC 2231 extended parameter value."""
    return quote(text, safe=_ATTRIBUTE_SAFE, encoding=CHARSET)


def percent_encoded_length(text: str) -> int:
    """Length of :func:`percent_encode` output, without building it."""
    data = text.encode(CHARSET)
    escaped = data.translate(None, _PERCENT_KEPT)
    return len(data) + 2 * len(escaped)


def encode_base64_body(data: bytes, line_length: int = 76) -> str:
    """Base64 body with CRLF-separated lines of ``line_length`` characters."""
    if not data:
        return ""
    encoded = base64mime.body_encode(data, maxlinelen=line_length, eol="\r\n")
    return encoded.removesuffix("\r\n")


def encode_quoted_printable_body(text: str, line_length: int = 76) -> str:
    """Quoted-printable body of UTF-8 text with CRLF line breaks."""
    # quoprimime maps latin-1 code points to octets, feed it the UTF-8 bytes
    raw = text.encode(CHARSET).decode("latin-1")
    return quoprimime.body_encode(raw, maxlinelen=line_length, eol="\r\n")


__all__ = [
    "CHARSET",
    "ENCODED_WORD_OVERHEAD",
    "Encoding",
    "char_cost",
    "decode_word",
    "encode_base64_body",
    "encode_quoted_printable_body",
    "encode_word",
    "encode_words",
    "encoded_length",
    "encoded_words_length",
    "needs_encoding",
    "percent_encode",
    "percent_encoded_length",
]
