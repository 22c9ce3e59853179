"""Shared primitives of the folding engine.

The folder consumes a closed set of tokens:

* ``str``: literal text, atomic unless it is made of encoded-words.
* ``int``: fold-priority marker. Lower values are preferred, values
  ``<= 0`` are never folded at.
* :class:`~mailfold.folding.word.WordEncodable` and
  :class:`~mailfold.folding.param.MIMEParam`: fragments that know how to
  split themselves when no marker is available.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeAlias, Union, runtime_checkable

if TYPE_CHECKING:
    from mailfold.folding.param import MIMEParam
    from mailfold.folding.word import WordEncodable


@dataclass(frozen=True, slots=True)
class FoldResult:
    """Outcome of :meth:`Foldable.fold`.

    Attributes:
        emitted: Text to write on the current line.
        remainder: Fragment carried to the next line, if any.
        folded: False when the fragment fits or refuses to split.
    """

    emitted: str
    remainder: Foldable | None = None
    folded: bool = False


@runtime_checkable
class Foldable(Protocol):
    """Interface shared by the splittable fragment variants."""

    @property
    def priority(self) -> int:
        """Split eligibility, ``<= 0`` means never split."""
        ...

    def value(self) -> str:
        """Rendered text of the whole fragment."""
        ...

    def length(self) -> int:
        """Octet length of :meth:`value`."""
        ...

    def fits(self, budget: int) -> bool:
        """Whether :meth:`value` takes at most budget octets."""
        ...

    def fold(self, budget: int) -> FoldResult:
        """Split the fragment so its first part fits in budget octets."""
        ...


Token: TypeAlias = Union[str, int, "WordEncodable", "MIMEParam"]


def octets(text: str) -> int:
    """UTF-8 length of text."""
    return len(text.encode("utf-8"))


def fws(priority: int) -> tuple[int, str]:
    """Folding white space: a marker followed by the space it replaces.

    Examples:
        >>> folder.write("To:", *fws(1), "<a@b>")  # doctest: +SKIP
    """
    return (priority, " ")


__all__ = [
    "FoldResult",
    "Foldable",
    "Token",
    "fws",
    "octets",
]
