"""Unstructured fields: Subject and arbitrary custom headers."""

from __future__ import annotations

from dataclasses import dataclass

from mailfold.codecs import Encoding, needs_encoding
from mailfold.exceptions import HeaderValidationError
from mailfold.folding import Token, WordEncodable, fold, fws
from mailfold.header.base import Header, is_valid_header_name, is_valid_header_value
from mailfold.limits import MAX_LINE_LENGTH
from mailfold.syntax import is_word_encodable

# Longest word that can stand on a continuation line after the space.
_MAX_WORD_LENGTH = MAX_LINE_LENGTH - 1


def _value_tokens(value: str, word_encodable: bool, encoding: Encoding) -> list[Token]:
    words = value.split(" ")
    if word_encodable and (needs_encoding(value) or any(len(word) > _MAX_WORD_LENGTH for word in words)):
        # Spaces between adjacent encoded-words are dropped on decode, so the
        # value travels as one fragment.
        return [WordEncodable(value, encoding, False, 2)]
    tokens: list[Token] = []
    for index, word in enumerate(words):
        if index:
            tokens.extend(fws(1))
        if word:
            tokens.append(word)
    return tokens


@dataclass(frozen=True)
class CustomHeader(Header):
    """An arbitrary unstructured field.

    Plain text folds at its own spaces. With ``word_encodable`` set, text
    that cannot travel raw (non-ASCII, ``=?``, words too long for a line) is
    carried as RFC 2047 encoded-words instead.

    Attributes:
        field_name: Field name, written as given.
        value: Field body.
        word_encodable: Allow encoded-words for the body.
        encoding: Encoding used for encoded-words.

    Examples:
        >>> CustomHeader("X-Mailer", "mailfold").render()
        'X-Mailer: mailfold\\r\\n'
    """

    field_name: str
    value: str
    word_encodable: bool = False
    encoding: Encoding = Encoding.Q

    @property
    def name(self) -> str:
        """Field name."""
        return self.field_name

    def validate(self) -> None:
        """Check the field name and body characters.

        Raises:
            HeaderValidationError: If the name is not ftext of at most 77
                octets, or the body holds characters it cannot carry.
        """
        if not is_valid_header_name(self.field_name):
            raise HeaderValidationError(self.field_name, "field name must be 1-77 printable characters except colon")
        if self.word_encodable:
            if not is_word_encodable(self.value):
                raise HeaderValidationError(self.field_name, "value holds non-printable characters")
        elif not is_valid_header_value(self.value):
            raise HeaderValidationError(self.field_name, "value must be printable US-ASCII")

    def render(self) -> str:
        """Folded field."""
        return fold(f"{self.field_name}:", *fws(1), *_value_tokens(self.value, self.word_encodable, self.encoding))


class Subject(CustomHeader):
    """Subject field, encoded-words enabled.

    Examples:
        >>> Subject("héllo").render()
        'Subject: =?utf-8?q?h=C3=A9llo?=\\r\\n'
    """

    def __init__(self, value: str, encoding: Encoding = Encoding.Q) -> None:
        super().__init__("Subject", value, True, encoding)


__all__ = ["CustomHeader", "Subject"]
