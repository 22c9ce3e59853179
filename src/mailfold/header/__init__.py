"""Header field renderers.

Every renderer builds a token sequence for the folding engine and offers a
separate :meth:`~mailfold.header.base.Header.validate` pass. Rendering never
fails on malformed input.

Examples:
    >>> from mailfold.header import Address, AddressField, Subject
    >>> print(Subject("Quarterly report").render(), end="")
    Subject: Quarterly report
"""

from mailfold.header.address import (
    Address,
    AddressField,
    Mailbox,
    mailbox_tokens,
    parse_address_list,
    quote_string,
)
from mailfold.header.base import (
    Header,
    canonical_header_key,
    is_valid_header_name,
    is_valid_header_value,
)
from mailfold.header.date import Date, format_datetime
from mailfold.header.message_id import ContentID, MessageID, normalize_msg_id
from mailfold.header.mime import (
    TRANSFER_ENCODINGS,
    ContentDisposition,
    ContentTransferEncoding,
    ContentType,
    MIMEVersion,
)
from mailfold.header.unstructured import CustomHeader, Subject

__all__ = [
    "TRANSFER_ENCODINGS",
    "Address",
    "AddressField",
    "ContentDisposition",
    "ContentID",
    "ContentTransferEncoding",
    "ContentType",
    "CustomHeader",
    "Date",
    "Header",
    "MIMEVersion",
    "Mailbox",
    "MessageID",
    "Subject",
    "canonical_header_key",
    "format_datetime",
    "is_valid_header_name",
    "is_valid_header_value",
    "mailbox_tokens",
    "normalize_msg_id",
    "parse_address_list",
    "quote_string",
]
