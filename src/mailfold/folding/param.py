"""MIME parameter fragment (RFC 2045 regular and RFC 2231 extended forms)."""

from __future__ import annotations

from dataclasses import dataclass

from mailfold.codecs import CHARSET, percent_encode, percent_encoded_length
from mailfold.folding.base import FoldResult, octets
from mailfold.syntax import is_mime_token, is_quoted_string


def dequote(value: str) -> str:
    """Strip the quotes and quoted-pair escapes of a quoted-string."""
    if len(value) < 2 or value[0] != '"' or value[-1] != '"':
        return value
    inner = value[1:-1]
    result = []
    escaped = False
    for ch in inner:
        if ch == "\\" and not escaped:
            escaped = True
            continue
        escaped = False
        result.append(ch)
    return "".join(result)


@dataclass(frozen=True, slots=True)
class MIMEParam:
    """A ``name=value`` parameter that folds into RFC 2231 continuations.

    The regular form is kept whenever the value is a token or can be quoted:
    ``name=value`` or ``name="value"``. Anything else uses the extended form
    ``name*=utf-8''<percent-encoded>``. When the parameter does not fit on
    the line it is split into ``name*0*=utf-8''...``, ``name*1*=...`` and so
    on, one whole percent-encoded code point at a time.

    Attributes:
        attribute: Parameter name.
        raw: Parameter value as supplied (quoted-strings are accepted).
        priority: Split eligibility, ``<= 0`` never splits.
        section: None for the whole parameter, ``n >= 1`` for the n-th
            continuation produced by a previous split.

    Examples:
        >>> MIMEParam("filename", "foo bar.txt").value()
        'filename="foo bar.txt"'
        >>> MIMEParam("filename", "méow.txt").value()
        "filename*=utf-8''m%C3%A9ow.txt"
    """

    attribute: str
    raw: str
    priority: int = 1
    section: int | None = None

    @property
    def extended(self) -> bool:
        """Whether the value needs the RFC 2231 extended form."""
        if self.section is not None:
            return True
        if self.raw in ("", '""') or is_mime_token(self.raw) or is_quoted_string(self.raw):
            return False
        return not is_quoted_string(f'"{self.raw}"')

    def value(self) -> str:
        """Rendered ``name=value`` text."""
        if self.section is not None:
            return f"{self.attribute}*{self.section}*={percent_encode(self.raw)}"
        if self.extended:
            return f"{self.attribute}*={CHARSET}''{percent_encode(dequote(self.raw))}"
        if self.raw in ("", '""'):
            return f'{self.attribute}=""'
        if is_mime_token(self.raw) or is_quoted_string(self.raw):
            return f"{self.attribute}={self.raw}"
        return f'{self.attribute}="{self.raw}"'

    def length(self) -> int:
        """Octet length of :meth:`value`, counted without rendering it."""
        if self.section is not None:
            return octets(f"{self.attribute}*{self.section}*=") + percent_encoded_length(self.raw)
        if self.extended:
            return octets(f"{self.attribute}*={CHARSET}''") + percent_encoded_length(dequote(self.raw))
        return octets(self.value())

    def fits(self, budget: int) -> bool:
        """Whether :meth:`value` takes at most budget octets."""
        return self.length() <= budget

    def fold(self, budget: int) -> FoldResult:
        """Split off the continuation segment that fits in budget octets.

        Args:
            budget: Octets left on the current line.

        Returns:
            ``FoldResult(value, None, False)`` when the parameter fits or
            cannot be split. Otherwise the segment to emit, the next
            continuation (None when the first segment holds everything)
            and ``folded=True``.
        """
        if self.fits(budget) or self.raw in ("", '""'):
            return FoldResult(self.value())

        if self.section is None:
            text = dequote(self.raw)
            prefix = f"{self.attribute}*0*={CHARSET}''"
            section = 0
        else:
            text = self.raw
            prefix = f"{self.attribute}*{self.section}*="
            section = self.section

        room = budget - len(prefix)
        used = 0
        count = 0
        for ch in text:
            cost = len(percent_encode(ch))
            if used + cost > room:
                break
            used += cost
            count += 1
        if count == 0:
            return FoldResult(self.value())

        if count == len(text):
            # Only section 0 gets here: a lone section drops its index.
            return FoldResult(f"{self.attribute}*={CHARSET}''{percent_encode(text)}", None, True)
        head = prefix + percent_encode(text[:count])
        tail = MIMEParam(self.attribute, text[count:], self.priority, section + 1)
        return FoldResult(head, tail, True)


__all__ = ["MIMEParam", "dequote"]
