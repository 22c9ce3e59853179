"""Grammar predicates for RFC 5322, RFC 2045 and RFC 2231 productions.

Character-class predicates answer "does every character of the string
belong to the class" and are therefore true for the empty string.
Production predicates (:func:`is_mime_token`, :func:`is_msg_id`,
:func:`is_quoted_string`, :func:`is_dot_atom_text`) match the whole
string against the grammar and require at least one character where the
grammar does.

Examples:
    >>> is_atext("john.doe")
    False
    >>> is_dot_atom_text("john.doe")
    True
    >>> is_mime_token("text/plain")
    False
"""

from __future__ import annotations

import re
import string

# ============================================================================
# Character classes
# ============================================================================

#: RFC 5322 section 3.2.3 atext.
ATEXT = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-/=?^_`{|}~")

#: RFC 5322 section 3.2.3 specials.
SPECIALS = frozenset('()<>[]:;@\\,."')

#: RFC 2045 section 5.1 tspecials.
TSPECIALS = frozenset('()<>@,;:\\"/[]?=')

_VCHAR = frozenset(chr(code) for code in range(0x21, 0x7F))
_WSP = frozenset(" \t")
_CTL = frozenset([*(chr(code) for code in range(0x20)), "\x7f"])
_DTEXT = frozenset(chr(code) for code in [*range(33, 91), *range(94, 127)])
_FTEXT = frozenset(chr(code) for code in [*range(33, 58), *range(59, 127)])
_MIME_TOKEN_CHARS = frozenset(chr(code) for code in range(0x21, 0x7F)) - TSPECIALS
_ATTRIBUTE_CHARS = _MIME_TOKEN_CHARS - frozenset("*'%")

# ============================================================================
# Productions
# ============================================================================

_QTEXT = r"[\x21\x23-\x5b\x5d-\x7e]"
_QUOTED_PAIR = r"\\[\x21-\x7e \t]"
_QUOTED_STRING = re.compile(rf'"(?:[ \t]|{_QTEXT}|{_QUOTED_PAIR})*"')

_ATEXT_CLASS = r"[A-Za-z0-9!#$%&'*+\-/=?^_`{|}~]"
_DOT_ATOM_TEXT = re.compile(rf"{_ATEXT_CLASS}+(?:\.{_ATEXT_CLASS}+)*")

_ID_LEFT = rf"{_ATEXT_CLASS}+(?:\.{_ATEXT_CLASS}+)*"
_NO_FOLD_LITERAL = r"\[[\x21-\x5a\x5e-\x7e]*\]"
_ID_RIGHT = rf"(?:{_ATEXT_CLASS}+(?:\.{_ATEXT_CLASS}+)*|{_NO_FOLD_LITERAL})"
_MSG_ID = re.compile(rf"<{_ID_LEFT}@{_ID_RIGHT}>")


def is_ascii(text: str) -> bool:
    """Every character is 7-bit US-ASCII."""
    return text.isascii()


def is_vchar(text: str) -> bool:
    """Every character is a visible ASCII character (RFC 5234 VCHAR)."""
    return all(ch in _VCHAR for ch in text)


def is_wsp(text: str) -> bool:
    """Every character is SP or HTAB."""
    return all(ch in _WSP for ch in text)


def is_ctl(text: str) -> bool:
    """Every character is an ASCII control character."""
    return all(ch in _CTL for ch in text)


def is_specials(text: str) -> bool:
    """Every character is an RFC 5322 special."""
    return all(ch in SPECIALS for ch in text)


def is_tspecials(text: str) -> bool:
    """Every character is an RFC 2045 tspecial."""
    return all(ch in TSPECIALS for ch in text)


def is_atext(text: str) -> bool:
    """Every character is RFC 5322 atext."""
    return all(ch in ATEXT for ch in text)


def is_dtext(text: str) -> bool:
    """Every character is RFC 5322 dtext (printable ASCII except ``[]\\``)."""
    return all(ch in _DTEXT for ch in text)


def is_ftext(text: str) -> bool:
    """Every character is RFC 5322 ftext (printable ASCII except colon)."""
    return all(ch in _FTEXT for ch in text)


def is_mime_param_attribute_char(text: str) -> bool:
    """Every character is an RFC 2231 attribute-char."""
    return all(ch in _ATTRIBUTE_CHARS for ch in text)


def is_mime_token(text: str) -> bool:
    """Text is a non-empty RFC 2045 token."""
    return bool(text) and all(ch in _MIME_TOKEN_CHARS for ch in text)


def is_quoted_string(text: str) -> bool:
    """Text is a complete RFC 5322 quoted-string, interior WSP allowed."""
    return _QUOTED_STRING.fullmatch(text) is not None


def is_word_encodable(text: str) -> bool:
    """Every character is printable or SP/HTAB, Unicode aware.

    Such text can be carried by encoded-words in an unstructured field.
    CR, LF and C1 controls are rejected.
    """
    return all(ch.isprintable() or ch in _WSP for ch in text)


def is_dot_atom_text(text: str) -> bool:
    """Text is RFC 5322 dot-atom-text."""
    return _DOT_ATOM_TEXT.fullmatch(text) is not None


def is_no_fold_literal(text: str) -> bool:
    """Text is an RFC 5322 no-fold-literal (``[`` dtext ``]``)."""
    return re.fullmatch(_NO_FOLD_LITERAL, text) is not None


def is_msg_id(text: str) -> bool:
    """Text is an RFC 5322 msg-id (``<id-left@id-right>``)."""
    return _MSG_ID.fullmatch(text) is not None


__all__ = [
    "ATEXT",
    "SPECIALS",
    "TSPECIALS",
    "is_ascii",
    "is_atext",
    "is_ctl",
    "is_dot_atom_text",
    "is_dtext",
    "is_ftext",
    "is_mime_param_attribute_char",
    "is_mime_token",
    "is_msg_id",
    "is_no_fold_literal",
    "is_quoted_string",
    "is_specials",
    "is_tspecials",
    "is_vchar",
    "is_word_encodable",
    "is_wsp",
]
