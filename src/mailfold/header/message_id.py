"""Message-ID and Content-ID fields."""

from __future__ import annotations

from dataclasses import dataclass
from email.utils import make_msgid

from mailfold.exceptions import HeaderValidationError
from mailfold.folding import fold, fws
from mailfold.header.base import Header, is_valid_header_value
from mailfold.limits import MAX_MSG_ID_LENGTH
from mailfold.syntax import is_msg_id


def normalize_msg_id(value: str) -> str:
    """Coerce a bare identifier into ``<id-left@id-right>`` shape.

    Surrounding whitespace is dropped, ``@`` is appended when missing and
    angle brackets are added when neither bracket is present. Values with
    unbalanced brackets are left as they are.

    Examples:
        >>> normalize_msg_id("message-id")
        '<message-id@>'
        >>> normalize_msg_id("local@example.com")
        '<local@example.com>'
    """
    msg_id = value.strip()
    if "@" not in msg_id:
        msg_id += "@"
    if "<" not in msg_id and ">" not in msg_id:
        msg_id = f"<{msg_id}>"
    return msg_id


@dataclass(frozen=True)
class MessageID(Header):
    """The Message-ID field.

    The identifier is a single unbreakable token: it is moved to a
    continuation line when needed but never split.

    Attributes:
        raw: Identifier as supplied.
    """

    raw: str

    @property
    def name(self) -> str:
        """Field name."""
        return "Message-ID"

    @property
    def msg_id(self) -> str:
        """Normalized identifier."""
        return normalize_msg_id(self.raw)

    @classmethod
    def generate(cls, domain: str | None = None) -> MessageID:
        """Create a field holding a fresh unique identifier.

        Args:
            domain: Right-hand side of the id, the local host name when None.
        """
        return cls(make_msgid(domain=domain))

    def validate(self) -> None:
        """Check length, characters and msg-id grammar.

        Raises:
            HeaderValidationError: If the identifier is invalid.
        """
        msg_id = self.msg_id
        if len(msg_id.encode("utf-8")) > MAX_MSG_ID_LENGTH:
            raise HeaderValidationError(self.name, f"identifier exceeds {MAX_MSG_ID_LENGTH} octets")
        if not is_valid_header_value(msg_id):
            raise HeaderValidationError(self.name, "identifier holds non-printable characters")
        if not is_msg_id(msg_id):
            raise HeaderValidationError(self.name, f"{msg_id!r} is not a valid msg-id")

    def render(self) -> str:
        """Folded field."""
        return fold(f"{self.name}:", *fws(1), self.msg_id)


class ContentID(MessageID):
    """The Content-ID field of a MIME part, referenced as ``cid:``."""

    @property
    def name(self) -> str:
        """Field name."""
        return "Content-ID"


__all__ = ["ContentID", "MessageID", "normalize_msg_id"]
