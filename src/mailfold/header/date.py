"""Date field and RFC 5322 date-time formatting."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

import pendulum

from mailfold.folding import fold, fws
from mailfold.header.base import Header

_DATE_FORMAT = "ddd, D MMM YYYY HH:mm:ss ZZ"


def format_datetime(value: datetime) -> str:
    """RFC 5322 date-time, naive values are taken as UTC.

    Examples:
        >>> import pendulum
        >>> format_datetime(pendulum.datetime(1990, 4, 3, 5, 30, 15, tz=pendulum.fixed_timezone(36000)))
        'Tue, 3 Apr 1990 05:30:15 +1000'
    """
    return pendulum.instance(value).format(_DATE_FORMAT, locale="en")


@dataclass(frozen=True)
class Date(Header):
    """The Date field.

    Attributes:
        value: Origination date, the current time when omitted.
    """

    value: datetime = field(default_factory=pendulum.now)

    @property
    def name(self) -> str:
        """Field name."""
        return "Date"

    def validate(self) -> None:
        """A datetime always renders to a valid date-time."""

    def render(self) -> str:
        """Folded field."""
        return fold(f"{self.name}:", *fws(1), format_datetime(self.value))


__all__ = ["Date", "format_datetime"]
