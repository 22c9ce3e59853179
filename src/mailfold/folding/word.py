"""Word-encodable fragment (RFC 2047 encoded-words)."""

from __future__ import annotations

from dataclasses import dataclass

from mailfold.codecs import (
    ENCODED_WORD_OVERHEAD,
    Encoding,
    char_cost,
    encode_word,
    encode_words,
    encoded_words_length,
    needs_encoding,
)
from mailfold.folding.base import FoldResult, octets
from mailfold.limits import MAX_ENCODED_WORD_LENGTH


@dataclass(frozen=True, slots=True)
class WordEncodable:
    """Text rendered raw when possible and as encoded-words otherwise.

    When the folder finds no marker to fold at, the fragment splits itself
    between two code points: the head is emitted as one encoded-word that
    fits the remaining budget and the tail becomes a new forced fragment
    carried to the continuation line.

    Attributes:
        decoded: The text to carry.
        encoding: Q (quoted-printable) or B (base64).
        must_encode: Encode even when the text is plain US-ASCII.
        priority: Split eligibility, ``<= 0`` never splits.

    Examples:
        >>> WordEncodable("hello").value()
        'hello'
        >>> WordEncodable("héllo").value()
        '=?utf-8?q?h=C3=A9llo?='
    """

    decoded: str
    encoding: Encoding = Encoding.Q
    must_encode: bool = False
    priority: int = 1

    @property
    def encoded(self) -> bool:
        """Whether :meth:`value` is encoded-words rather than raw text."""
        return self.must_encode or needs_encoding(self.decoded)

    def value(self) -> str:
        """Raw text, or encoded-words of at most 75 octets each."""
        if not self.encoded:
            return self.decoded
        return encode_words(self.decoded, self.encoding, MAX_ENCODED_WORD_LENGTH)

    def length(self) -> int:
        """Octet length of :meth:`value`, counted without rendering it."""
        if not self.encoded:
            return octets(self.decoded)
        return encoded_words_length(self.decoded, self.encoding, MAX_ENCODED_WORD_LENGTH)

    def fits(self, budget: int) -> bool:
        """Whether :meth:`value` takes at most budget octets.

        Counting stops at budget, so long text costs no more than short text.
        """
        if not self.encoded:
            return octets(self.decoded) <= budget
        return encoded_words_length(self.decoded, self.encoding, MAX_ENCODED_WORD_LENGTH, budget) <= budget

    def fold(self, budget: int) -> FoldResult:
        """Split off the longest encoded head that fits in budget octets.

        Args:
            budget: Octets left on the current line.

        Returns:
            ``FoldResult(value, None, False)`` when the fragment fits or
            cannot be split, otherwise the encoded head, the forced tail and
            ``folded=True``.
        """
        if self.fits(budget):
            return FoldResult(self.value())

        content = min(budget, MAX_ENCODED_WORD_LENGTH) - ENCODED_WORD_OVERHEAD
        if self.encoding is Encoding.B:
            content = content // 4 * 3
        if content <= 0:
            return FoldResult(self.value())

        used = 0
        count = 0
        for ch in self.decoded:
            cost = char_cost(ch, self.encoding)
            if used + cost > content:
                break
            used += cost
            count += 1
        if count == 0:
            return FoldResult(self.value())

        head = encode_word(self.decoded[:count], self.encoding)
        if count == len(self.decoded):
            return FoldResult(head, None, True)
        tail = WordEncodable(self.decoded[count:], self.encoding, True, self.priority)
        return FoldResult(head, tail, True)


__all__ = ["WordEncodable"]
