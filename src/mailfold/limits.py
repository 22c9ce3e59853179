"""Protocol constants and config-driven limits.

Two kinds of values live here:

* Protocol constants (RFC 5322, RFC 2045-2047, RFC 2231, RFC 5321). They are
  fixed by the standards and never read from configuration.
* Operational limits (attachment size and count, header word encoding). They
  are read from the ``mail`` section of ``mailfold.conf.yml`` and clamped to
  hard bounds so a bad config cannot disable the safeguards.

Examples:
    >>> from mailfold.limits import get_mail_limits
    >>> limits = get_mail_limits(config={})
    >>> limits.max_attachments
    20
"""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mailfold.codecs import Encoding

log = logging.getLogger(__name__)

# ============================================================================
# Protocol constants
# ============================================================================

#: Recommended physical line length, excluding CRLF (RFC 5322 section 2.1.1).
MAX_LINE_LENGTH = 78

#: Hard physical line length, excluding CRLF (RFC 5322 section 2.1.1).
MAX_LINE_OCTETS = 998

#: Maximum length of one encoded-word (RFC 2047 section 2).
MAX_ENCODED_WORD_LENGTH = 75

#: Line terminator.
CRLF = "\r\n"

#: Token written in place of a folded marker: CRLF plus one space.
FOLD = "\r\n "

#: Highest possible fold priority, used for last-resort fold points.
LEAST_PRIORITY = sys.maxsize

#: Longest header field name that still leaves room for ``:`` on a line.
MAX_HEADER_NAME_LENGTH = MAX_LINE_LENGTH - 1

#: Longest msg-id, one octet is reserved for the continuation space.
MAX_MSG_ID_LENGTH = MAX_LINE_LENGTH - 1

#: SMTP local-part limit (RFC 5321 section 4.5.3.1.1).
MAX_LOCAL_PART_LENGTH = 64

#: SMTP domain limit (RFC 5321 section 4.5.3.1.2).
MAX_DOMAIN_LENGTH = 255

#: Boundary length limit (RFC 2046 section 5.1.1).
MAX_BOUNDARY_LENGTH = 70

#: Base64 body line length (RFC 2045 section 6.8).
BASE64_LINE_LENGTH = 76

# ============================================================================
# Operational limits
# ============================================================================

DEFAULT_MAX_ATTACHMENT_SIZE = 25 * 1024 * 1024
HARD_MAX_ATTACHMENT_SIZE = 50 * 1024 * 1024

DEFAULT_MAX_ATTACHMENTS = 20
HARD_MAX_ATTACHMENTS = 50

DEFAULT_HEADER_ENCODING = "q"

_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([KMG]?)(?:i?B)?\s*$", re.IGNORECASE)
_SIZE_UNITS = {"": 1, "K": 1024, "M": 1024**2, "G": 1024**3}


def parse_size(value: Any) -> int | None:
    """Parse a human-readable size (``10M``, ``512K``, ``2048``).

    Args:
        value: Integer byte count or size string.

    Returns:
        Size in bytes, or None when the value cannot be parsed.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    match = _SIZE_PATTERN.match(value)
    if match is None:
        return None
    number, unit = match.groups()
    return int(float(number) * _SIZE_UNITS[unit.upper()])


def format_size(size: int) -> str:
    """Format a byte count for display (``25.0 MiB``)."""
    amount = float(size)
    for unit in ("B", "KiB", "MiB"):
        if amount < 1024:
            return f"{amount:.1f} {unit}" if unit != "B" else f"{int(amount)} B"
        amount /= 1024
    return f"{amount:.1f} GiB"


@dataclass(frozen=True, slots=True)
class MailLimits:
    """Attachment limits applied by the message builder.

    Attributes:
        max_attachment_size: Largest accepted attachment in bytes.
        max_attachments: Largest accepted number of attachments.
    """

    max_attachment_size: int
    max_attachments: int

    @property
    def max_attachment_size_display(self) -> str:
        """Human-readable attachment size limit."""
        return format_size(self.max_attachment_size)


def _section(config: Mapping[str, Any] | None, *path: str) -> Mapping[str, Any]:
    if config is None:
        from mailfold.config import get_config

        config = get_config()
    node: Any = config
    for key in path:
        if not isinstance(node, Mapping):
            return {}
        node = node.get(key) or {}
    return node if isinstance(node, Mapping) else {}


def get_mail_limits(config: Mapping[str, Any] | None = None) -> MailLimits:
    """Read attachment limits from the ``mail.limits`` config section.

    Values are clamped: size to ``HARD_MAX_ATTACHMENT_SIZE``, count to
    ``[1, HARD_MAX_ATTACHMENTS]``. Unparsable values fall back to defaults.

    Args:
        config: Configuration mapping. When None, the loaded global
            configuration is used.

    Returns:
        Clamped MailLimits.
    """
    section = _section(config, "mail", "limits")

    size = parse_size(section.get("max_attachment_size", DEFAULT_MAX_ATTACHMENT_SIZE))
    if size is None or size <= 0:
        log.debug("Invalid max_attachment_size %r, using default", section.get("max_attachment_size"))
        size = DEFAULT_MAX_ATTACHMENT_SIZE

    try:
        count = int(section.get("max_attachments", DEFAULT_MAX_ATTACHMENTS))
    except (TypeError, ValueError):
        log.debug("Invalid max_attachments %r, using default", section.get("max_attachments"))
        count = DEFAULT_MAX_ATTACHMENTS

    return MailLimits(
        max_attachment_size=min(size, HARD_MAX_ATTACHMENT_SIZE),
        max_attachments=max(1, min(count, HARD_MAX_ATTACHMENTS)),
    )


def get_header_encoding(config: Mapping[str, Any] | None = None) -> Encoding:
    """Read the encoded-word encoding from ``mail.headers.encoding``.

    Args:
        config: Configuration mapping. When None, the loaded global
            configuration is used.

    Returns:
        Configured Encoding, ``Encoding.Q`` when unset or invalid.
    """
    from mailfold.codecs import Encoding

    raw = _section(config, "mail", "headers").get("encoding", DEFAULT_HEADER_ENCODING)
    try:
        return Encoding(str(raw).lower())
    except ValueError:
        log.debug("Invalid header encoding %r, using %s", raw, DEFAULT_HEADER_ENCODING)
        return Encoding(DEFAULT_HEADER_ENCODING)


__all__ = [
    "BASE64_LINE_LENGTH",
    "CRLF",
    "DEFAULT_HEADER_ENCODING",
    "DEFAULT_MAX_ATTACHMENTS",
    "DEFAULT_MAX_ATTACHMENT_SIZE",
    "FOLD",
    "HARD_MAX_ATTACHMENTS",
    "HARD_MAX_ATTACHMENT_SIZE",
    "LEAST_PRIORITY",
    "MAX_BOUNDARY_LENGTH",
    "MAX_DOMAIN_LENGTH",
    "MAX_ENCODED_WORD_LENGTH",
    "MAX_HEADER_NAME_LENGTH",
    "MAX_LINE_LENGTH",
    "MAX_LINE_OCTETS",
    "MAX_LOCAL_PART_LENGTH",
    "MAX_MSG_ID_LENGTH",
    "MailLimits",
    "format_size",
    "get_header_encoding",
    "get_mail_limits",
    "parse_size",
]
