"""Header field contract and name/value helpers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from mailfold.exceptions import HeaderValidationError
from mailfold.limits import MAX_HEADER_NAME_LENGTH
from mailfold.syntax import is_ftext


class Header(ABC):
    """A header field that can be validated and rendered.

    Rendering and validation are independent: :meth:`render` always
    produces CRLF-terminated text, falling back to the raw input when it
    cannot be interpreted, while :meth:`validate` reports what is wrong.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Field name as written before the colon."""

    @abstractmethod
    def validate(self) -> None:
        """Check the field.

        Raises:
            HeaderValidationError: If the field is malformed.
        """

    @abstractmethod
    def render(self) -> str:
        """Folded, CRLF-terminated field text."""

    def is_valid(self) -> bool:
        """Whether :meth:`validate` passes."""
        try:
            self.validate()
        except HeaderValidationError:
            return False
        return True

    def __str__(self) -> str:
        return self.render()


def canonical_header_key(key: str) -> str:
    """Canonical MIME form of a field name (``reply-TO`` -> ``Reply-To``).

    Names holding a space or a non-token character are returned unchanged.

    Examples:
        >>> canonical_header_key("content-type")
        'Content-Type'
    """
    if not key or not is_ftext(key):
        return key
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


def is_valid_header_name(name: str) -> bool:
    """Non-empty ftext of at most 77 octets."""
    return 0 < len(name) <= MAX_HEADER_NAME_LENGTH and is_ftext(name)


def is_valid_header_value(value: str) -> bool:
    """Printable US-ASCII plus SP and HTAB."""
    return all(" " <= ch <= "~" or ch == "\t" for ch in value)


__all__ = [
    "Header",
    "canonical_header_key",
    "is_valid_header_name",
    "is_valid_header_value",
]
