"""Line folder: turns a token stream into RFC 5322 folded header text.

The folder keeps an accumulator of tokens that are not yet written. Every
time a literal or fragment is appended it checks whether the unflushed
content still fits on the current physical line, and if not it folds:

1. Walk the accumulator left to right with the cumulative line length
   (octets already written on the line plus unflushed octets), keeping the
   lowest positive marker seen so far.
2. At the first index where the line overflows, scan backward for the
   nearest marker equal to that lowest priority that leaves
   non-whitespace content on both sides of the break.
3. Failing that, scan backward for the nearest fragment that agrees to
   split itself at the octets left before it.
4. Flush up to the fold point, write ``CRLF SP`` and start over with the
   remaining tokens. A single ``" "`` literal right after a folded marker
   is the folding white space and is dropped.

When neither step finds a fold point at any overflowing index, the line is
left over-length.

Examples:
    >>> import io
    >>> out = io.StringIO()
    >>> folder = Folder(out)
    >>> folder.write("Subject:", *fws(1), "hello")
    >>> folder.close()
    >>> out.getvalue()
    'Subject: hello\\r\\n'
"""

from __future__ import annotations

import io
import logging
import re
from typing import TYPE_CHECKING, Protocol

from mailfold.codecs import decode_word, encode_word
from mailfold.exceptions import FoldSinkError
from mailfold.folding.base import FoldResult, Token, fws, octets
from mailfold.folding.param import MIMEParam
from mailfold.folding.word import WordEncodable
from mailfold.limits import CRLF, FOLD, LEAST_PRIORITY, MAX_LINE_LENGTH
from mailfold.logging import TRACE_LEVEL

if TYPE_CHECKING:
    from collections.abc import Sequence

log = logging.getLogger(__name__)

_FRAGMENTS = (WordEncodable, MIMEParam)
_ENCODED_WORDS = re.compile(r"=\?[^?\s]+\?[qQbB]\?[^?\s]*\?=(?: =\?[^?\s]+\?[qQbB]\?[^?\s]*\?=)*")


class SupportsWrite(Protocol):
    """Minimal sink interface, satisfied by text files and ``io.StringIO``.

    Only ``OSError`` and ``ValueError`` raised by ``write`` are latched by the
    folder. Any other exception propagates out of :meth:`Folder.write`.
    """

    def write(self, text: str, /) -> object:
        """Write text to the sink."""
        ...


def _render(tokens: Sequence[Token]) -> str:
    parts = []
    for token in tokens:
        if isinstance(token, str):
            parts.append(token)
        elif isinstance(token, _FRAGMENTS):
            parts.append(token.value())
    return "".join(parts)


def _is_content(token: Token) -> bool:
    """Whether token renders at least one non-whitespace character."""
    if isinstance(token, str):
        return token.strip(" \t") != ""
    if isinstance(token, MIMEParam):
        # Always renders at least "attribute=".
        return True
    if isinstance(token, WordEncodable):
        if token.encoded:
            return token.decoded != ""
        return token.decoded.strip(" \t") != ""
    return False


def _ingest(literal: str) -> list[Token]:
    """Decompose a run of encoded-words into individually foldable tokens.

    Encoded-words that this package would produce itself become forced
    :class:`WordEncodable` fragments so they can still be split as a last
    resort. Any other literal is kept atomic.
    """
    if _ENCODED_WORDS.fullmatch(literal) is None:
        return [literal]
    tokens: list[Token] = []
    for index, word in enumerate(literal.split(" ")):
        if index:
            tokens.extend((LEAST_PRIORITY, " "))
        decoded = decode_word(word)
        if decoded is not None and encode_word(*decoded) == word:
            tokens.append(WordEncodable(decoded[0], decoded[1], True, LEAST_PRIORITY))
        else:
            tokens.append(word)
    return tokens


class Folder:
    """Single-use accumulator writing folded header text to a sink.

    States: open, closed, failed. The first sink error is latched in
    :attr:`error` and turns every later :meth:`write` and :meth:`close` into
    a no-op. Check it once after closing, or call :meth:`raise_for_error`.

    Args:
        sink: Object with a ``write(str)`` method.
        max_line_length: Physical line budget, CRLF excluded.

    Examples:
        >>> import io
        >>> out = io.StringIO()
        >>> folder = Folder(out)
        >>> folder.write("To:", *fws(1), "<alice@example.com>")
        >>> folder.close()
        >>> folder.error is None
        True
    """

    def __init__(self, sink: SupportsWrite, *, max_line_length: int = MAX_LINE_LENGTH) -> None:
        self._sink = sink
        self._max_line_length = max_line_length
        self._written = 0
        self._acc: list[Token] = []
        self._closed = False
        self.error: FoldSinkError | None = None

    @property
    def closed(self) -> bool:
        """True once :meth:`close` completed."""
        return self._closed

    @property
    def failed(self) -> bool:
        """True once a sink write failed."""
        return self.error is not None

    def write(self, *tokens: Token) -> None:
        """Append tokens and fold as needed.

        Args:
            *tokens: Literals, priority markers and fragments.

        Raises:
            TypeError: If a token is not one of the supported variants.
        """
        for token in tokens:
            if self.error is not None or self._closed:
                return
            if isinstance(token, bool) or not isinstance(token, (str, int, *_FRAGMENTS)):
                raise TypeError(f"Unsupported fold token: {token!r}")
            if isinstance(token, int):
                self._acc.append(token)
                continue
            if isinstance(token, str):
                self._acc.extend(_ingest(token))
            else:
                self._acc.append(token)
            self._fold()

    def close(self) -> None:
        """Flush pending content and terminate the field with CRLF."""
        if self._closed or self.error is not None:
            return
        if self._emit(_render(self._acc) + CRLF):
            self._acc = []
            self._closed = True

    def raise_for_error(self) -> None:
        """Raise the latched sink error, if any.

        Raises:
            FoldSinkError: If a sink write failed.
        """
        if self.error is not None:
            raise self.error

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _emit(self, text: str) -> bool:
        try:
            self._sink.write(text)
        except (OSError, ValueError) as exc:
            log.debug("Fold sink write failed: %s", exc)
            error = FoldSinkError(f"Cannot write folded header: {exc}")
            error.__cause__ = exc
            self.error = error
            return False
        return True

    def _fold(self) -> None:
        while self.error is None:
            point = self._find_fold_point()
            if point is None:
                return
            index, result = point
            if result is None:
                self._fold_at_marker(index)
            else:
                self._fold_fragment(index, result)

    def _find_fold_point(self) -> tuple[int, FoldResult | None] | None:
        length = self._written
        best: int | None = None
        for index, token in enumerate(self._acc):
            if isinstance(token, int):
                if token > 0 and (best is None or token < best):
                    best = token
                continue
            if isinstance(token, str):
                length += octets(token)
            elif token.fits(self._max_line_length - length):
                length += token.length()
            else:
                # Overflow, the exact length no longer matters.
                length = self._max_line_length + 1
            if length <= self._max_line_length:
                continue
            if best is not None:
                marker = self._find_marker(index, best)
                if marker is not None:
                    return marker, None
            split = self._find_split(index)
            if split is not None:
                return split
        return None

    def _find_marker(self, end: int, priority: int) -> int | None:
        for index in range(end - 1, -1, -1):
            token = self._acc[index]
            if isinstance(token, int) and token == priority and self._can_fold(index):
                return index
        return None

    def _can_fold(self, index: int) -> bool:
        left = any(_is_content(token) for token in self._acc[:index])
        right = any(_is_content(token) for token in self._acc[index + 1 :])
        return left and right

    def _find_split(self, end: int) -> tuple[int, FoldResult] | None:
        for index in range(end, -1, -1):
            token = self._acc[index]
            if not isinstance(token, _FRAGMENTS) or token.priority <= 0:
                continue
            offset = self._written + octets(_render(self._acc[:index]))
            result = token.fold(self._max_line_length - offset)
            if result.folded:
                return index, result
        return None

    def _fold_at_marker(self, index: int) -> None:
        if log.isEnabledFor(TRACE_LEVEL):
            log.log(TRACE_LEVEL, "Folding at marker %d (priority %s)", index, self._acc[index])
        if not self._emit(_render(self._acc[:index]) + FOLD):
            return
        rest = self._acc[index + 1 :]
        if rest and rest[0] == " ":
            rest = rest[1:]
        self._acc = rest
        self._written = octets(FOLD) - len(CRLF)

    def _fold_fragment(self, index: int, result: FoldResult) -> None:
        if result.remainder is None:
            self._acc[index] = result.emitted
            return
        if log.isEnabledFor(TRACE_LEVEL):
            log.log(TRACE_LEVEL, "Splitting %s at %d octets", type(self._acc[index]).__name__, octets(result.emitted))
        if not self._emit(_render(self._acc[:index]) + result.emitted + FOLD):
            return
        self._acc = [result.remainder, *self._acc[index + 1 :]]
        self._written = octets(FOLD) - len(CRLF)


def fold(*tokens: Token, max_line_length: int = MAX_LINE_LENGTH) -> str:
    """Fold tokens into a complete CRLF-terminated header field.

    Examples:
        >>> fold("Subject:", *fws(1), "hi")
        'Subject: hi\\r\\n'
    """
    out = io.StringIO()
    folder = Folder(out, max_line_length=max_line_length)
    folder.write(*tokens)
    folder.close()
    folder.raise_for_error()
    return out.getvalue()


__all__ = ["Folder", "SupportsWrite", "fold", "fws"]
