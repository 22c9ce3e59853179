"""Address list fields: From, Sender, Reply-To, To, Cc, Bcc.

Parsing is delegated to :mod:`email.headerregistry`; this module turns
the parsed mailboxes into fold tokens:

* quoted display name: ``[1] "word[3] word" [2] <addr-spec> [1]``
* non-ASCII display name: ``encoded-words [2] <addr-spec> [1]``
* no display name: ``[1] <addr-spec> [1]``

Mailboxes are separated by ``,``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from email import errors as email_errors
from email.headerregistry import Address as EmailAddress
from email.headerregistry import HeaderRegistry
from enum import Enum

from mailfold.codecs import Encoding
from mailfold.exceptions import AddressSyntaxError, HeaderValidationError
from mailfold.folding import Token, WordEncodable, fold, fws
from mailfold.header.base import Header
from mailfold.limits import CRLF, MAX_DOMAIN_LENGTH, MAX_LOCAL_PART_LENGTH

log = logging.getLogger(__name__)

_REGISTRY = HeaderRegistry()


class AddressField(str, Enum):
    """Header fields holding mailboxes."""

    FROM = "From"
    SENDER = "Sender"
    REPLY_TO = "Reply-To"
    TO = "To"
    CC = "Cc"
    BCC = "Bcc"


@dataclass(frozen=True, slots=True)
class Mailbox:
    """One parsed mailbox.

    Attributes:
        display_name: Decoded display name, empty when absent.
        local_part: Unquoted local part.
        domain: Domain or domain literal.
    """

    display_name: str
    local_part: str
    domain: str

    @property
    def addr_spec(self) -> str:
        """``local@domain``, local part quoted when needed."""
        return EmailAddress(username=self.local_part, domain=self.domain).addr_spec


def parse_address_list(value: str) -> list[Mailbox]:
    """Parse an RFC 5322 address list.

    Args:
        value: Raw field body, e.g. ``"Bob <bob@example.com>, eve@example.com"``.

    Returns:
        The mailboxes in order.

    Raises:
        AddressSyntaxError: If the list is empty, has parse defects, or uses
            group syntax.
    """
    if not value.strip():
        raise AddressSyntaxError(value, "empty address list")
    try:
        header = _REGISTRY("To", value)
    except (ValueError, IndexError, email_errors.HeaderParseError) as exc:
        raise AddressSyntaxError(value, str(exc)) from exc

    if header.defects:
        raise AddressSyntaxError(value, str(header.defects[0]))

    mailboxes = []
    for group in header.groups:
        if group.display_name is not None:
            raise AddressSyntaxError(value, "group syntax is not supported")
        for address in group.addresses:
            if not address.username or not address.domain:
                raise AddressSyntaxError(value, f"incomplete address {address.addr_spec!r}")
            mailboxes.append(Mailbox(address.display_name, address.username, address.domain))
    if not mailboxes:
        raise AddressSyntaxError(value, "no mailbox found")
    return mailboxes


def quote_string(text: str) -> str:
    """Wrap text in double quotes, escaping backslash and quote."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _is_printable_ascii(text: str) -> bool:
    return all(" " <= ch <= "~" or ch == "\t" for ch in text)


def mailbox_tokens(mailbox: Mailbox) -> list[Token]:
    """Fold tokens for one mailbox."""
    angle = f"<{mailbox.addr_spec}>"
    name = mailbox.display_name
    if not name:
        return [1, angle, 1]
    if _is_printable_ascii(name):
        tokens: list[Token] = [1]
        for index, word in enumerate(quote_string(name).split(" ")):
            if index:
                tokens.extend(fws(3))
            tokens.append(word)
        return [*tokens, *fws(2), angle, 1]
    return [WordEncodable(name, Encoding.Q, True, 2), *fws(2), angle, 1]


@dataclass(frozen=True)
class Address(Header):
    """An address list field.

    Attributes:
        field: Which address field this is.
        value: Raw address list as supplied by the caller.

    Examples:
        >>> print(Address(AddressField.TO, "Bob <bob@example.com>").render(), end="")
        To: "Bob" <bob@example.com>
    """

    field: AddressField
    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "field", AddressField(self.field))

    @property
    def name(self) -> str:
        """Field name."""
        return self.field.value

    def mailboxes(self) -> list[Mailbox]:
        """Parsed mailboxes.

        Raises:
            AddressSyntaxError: If the value cannot be parsed.
        """
        return parse_address_list(self.value)

    def validate(self) -> None:
        """Check syntax, SMTP length limits and the single Sender rule.

        Raises:
            HeaderValidationError: If any check fails.
        """
        try:
            mailboxes = self.mailboxes()
        except AddressSyntaxError as exc:
            raise HeaderValidationError(self.name, exc.reason) from exc

        if self.field is AddressField.SENDER and len(mailboxes) != 1:
            raise HeaderValidationError(self.name, f"expected exactly one mailbox, got {len(mailboxes)}")
        for mailbox in mailboxes:
            if len(mailbox.local_part.encode("utf-8")) > MAX_LOCAL_PART_LENGTH:
                raise HeaderValidationError(
                    self.name, f"local part of {mailbox.addr_spec!r} exceeds {MAX_LOCAL_PART_LENGTH} octets"
                )
            if len(mailbox.domain.encode("utf-8")) > MAX_DOMAIN_LENGTH:
                raise HeaderValidationError(
                    self.name, f"domain of {mailbox.addr_spec!r} exceeds {MAX_DOMAIN_LENGTH} octets"
                )

    def render(self) -> str:
        """Folded field, or the raw value when it cannot be parsed."""
        try:
            mailboxes = self.mailboxes()
        except AddressSyntaxError as exc:
            log.debug("Rendering raw %s value: %s", self.name, exc.reason)
            return f"{self.name}: {self.value}{CRLF}"
        if self.field is AddressField.SENDER and len(mailboxes) != 1:
            return f"{self.name}: {self.value}{CRLF}"

        tokens: list[Token] = [f"{self.name}: "]
        for index, mailbox in enumerate(mailboxes):
            if index:
                tokens.append(",")
            tokens.extend(mailbox_tokens(mailbox))
        return fold(*tokens)


__all__ = [
    "Address",
    "AddressField",
    "Mailbox",
    "mailbox_tokens",
    "parse_address_list",
    "quote_string",
]
