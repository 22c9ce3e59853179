"""MIME fields: MIME-Version, Content-Type, Content-Transfer-Encoding, Content-Disposition.

Parameters are rendered as :class:`~mailfold.folding.MIMEParam` fragments,
each preceded by ``;`` and a folding white space, so long or non-ASCII
values fold into RFC 2231 continuations.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from mailfold.exceptions import HeaderValidationError
from mailfold.folding import MIMEParam, Token, fold, fws
from mailfold.header.base import Header
from mailfold.header.date import format_datetime
from mailfold.syntax import is_mime_param_attribute_char, is_mime_token

#: Mechanisms defined by RFC 2045 section 6.1.
TRANSFER_ENCODINGS = frozenset({"7bit", "8bit", "binary", "quoted-printable", "base64"})


def _param_tokens(params: Mapping[str, str]) -> list[Token]:
    tokens: list[Token] = []
    for attribute, value in params.items():
        tokens.extend((";", *fws(1), MIMEParam(attribute, value, 1)))
    return tokens


def _validate_params(header_name: str, params: Mapping[str, str]) -> None:
    for attribute in params:
        if not attribute or not is_mime_param_attribute_char(attribute):
            raise HeaderValidationError(header_name, f"invalid parameter name {attribute!r}")


@dataclass(frozen=True)
class MIMEVersion(Header):
    """The ``MIME-Version: 1.0`` field."""

    @property
    def name(self) -> str:
        """Field name."""
        return "MIME-Version"

    def validate(self) -> None:
        """Always valid."""

    def render(self) -> str:
        """Field text."""
        return fold(f"{self.name}:", *fws(1), "1.0")


@dataclass(frozen=True)
class ContentType(Header):
    """The Content-Type field.

    Attributes:
        media_type: ``type/subtype``.
        params: Parameters in rendering order.

    Examples:
        >>> ContentType("text/plain", {"charset": "utf-8"}).render()
        'Content-Type: text/plain; charset=utf-8\\r\\n'
    """

    media_type: str
    params: Mapping[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        """Field name."""
        return "Content-Type"

    @classmethod
    def detect(cls, data: bytes, filename: str | None = None) -> ContentType:
        """Build the field from sniffed content.

        Args:
            data: Content to inspect.
            filename: Optional file name used for extension lookup.
        """
        from mailfold.mime.sniff import detect_content_type

        media_type, charset = detect_content_type(data, filename)
        return cls(media_type, {"charset": charset} if charset else {})

    def validate(self) -> None:
        """Check ``type/subtype`` and parameter names.

        Raises:
            HeaderValidationError: If the media type or a parameter name is
                malformed.
        """
        kind, _, subtype = self.media_type.partition("/")
        if not is_mime_token(kind) or not is_mime_token(subtype):
            raise HeaderValidationError(self.name, f"invalid media type {self.media_type!r}")
        _validate_params(self.name, self.params)

    def render(self) -> str:
        """Folded field."""
        return fold(f"{self.name}:", *fws(1), self.media_type, *_param_tokens(self.params))


@dataclass(frozen=True)
class ContentTransferEncoding(Header):
    """The Content-Transfer-Encoding field.

    Attributes:
        mechanism: ``7bit``, ``8bit``, ``binary``, ``quoted-printable``,
            ``base64`` or an ``x-`` token.
    """

    mechanism: str

    @property
    def name(self) -> str:
        """Field name."""
        return "Content-Transfer-Encoding"

    def validate(self) -> None:
        """Check the mechanism.

        Raises:
            HeaderValidationError: If the mechanism is unknown.
        """
        mechanism = self.mechanism.lower()
        if mechanism in TRANSFER_ENCODINGS:
            return
        if mechanism.startswith("x-") and is_mime_token(mechanism):
            return
        raise HeaderValidationError(self.name, f"unknown mechanism {self.mechanism!r}")

    def render(self) -> str:
        """Folded field."""
        return fold(f"{self.name}:", *fws(1), self.mechanism)


@dataclass(frozen=True)
class ContentDisposition(Header):
    """The Content-Disposition field (RFC 2183).

    Attributes:
        inline: ``inline`` disposition instead of ``attachment``.
        filename: File name parameter, omitted when empty.
        params: Extra parameters, written after the dates and size.
        creation_date: ``creation-date`` parameter.
        modification_date: ``modification-date`` parameter.
        read_date: ``read-date`` parameter.
        size: ``size`` parameter, in octets.

    Examples:
        >>> ContentDisposition(filename="report.pdf").render()
        'Content-Disposition: attachment; filename=report.pdf\\r\\n'
    """

    inline: bool = False
    filename: str = ""
    params: Mapping[str, str] = field(default_factory=dict)
    creation_date: datetime | None = None
    modification_date: datetime | None = None
    read_date: datetime | None = None
    size: int | None = None

    @property
    def name(self) -> str:
        """Field name."""
        return "Content-Disposition"

    @property
    def disposition(self) -> str:
        """``inline`` or ``attachment``."""
        return "inline" if self.inline else "attachment"

    def all_params(self) -> dict[str, str]:
        """Parameters in rendering order."""
        params: dict[str, str] = {}
        if self.filename:
            params["filename"] = self.filename
        for attribute, value in (
            ("creation-date", self.creation_date),
            ("modification-date", self.modification_date),
            ("read-date", self.read_date),
        ):
            if value is not None:
                params[attribute] = format_datetime(value)
        if self.size is not None:
            params["size"] = str(self.size)
        params.update(self.params)
        return params

    def validate(self) -> None:
        """Check parameter names and size.

        Raises:
            HeaderValidationError: If a parameter name is malformed or the
                size is negative.
        """
        if self.size is not None and self.size < 0:
            raise HeaderValidationError(self.name, "size must not be negative")
        _validate_params(self.name, self.all_params())

    def render(self) -> str:
        """Folded field."""
        return fold(f"{self.name}:", *fws(1), self.disposition, *_param_tokens(self.all_params()))


__all__ = [
    "TRANSFER_ENCODINGS",
    "ContentDisposition",
    "ContentTransferEncoding",
    "ContentType",
    "MIMEVersion",
]
