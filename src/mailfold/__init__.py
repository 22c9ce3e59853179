"""mailfold: RFC 5322 / MIME message composition with header line folding.

Examples:
    >>> from mailfold import MessageBuilder
    >>> builder = MessageBuilder().sender("alice@example.com").to("bob@example.com")  # doctest: +SKIP
    >>> print(builder.subject("Hello").body("Hi Bob").raw())  # doctest: +SKIP
"""

from mailfold.codecs import Encoding
from mailfold.config import clear_config, get_config, load_config
from mailfold.exceptions import (
    AddressSyntaxError,
    AttachmentError,
    ConfigError,
    ConfigFileNotFoundError,
    ConfigFormatError,
    FoldSinkError,
    HeaderError,
    HeaderValidationError,
    MailfoldError,
)
from mailfold.folding import Folder, MIMEParam, WordEncodable, fold, fws
from mailfold.header import (
    Address,
    AddressField,
    ContentDisposition,
    ContentID,
    ContentTransferEncoding,
    ContentType,
    CustomHeader,
    Date,
    Header,
    MessageID,
    MIMEVersion,
    Subject,
)
from mailfold.limits import MailLimits, get_mail_limits
from mailfold.logging import LogManager, get_logger, init_logging
from mailfold.message import Attachment, MessageBuilder
from mailfold.meta import __version__

__all__ = [
    "Address",
    "AddressField",
    "AddressSyntaxError",
    "Attachment",
    "AttachmentError",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "ContentDisposition",
    "ContentID",
    "ContentTransferEncoding",
    "ContentType",
    "CustomHeader",
    "Date",
    "Encoding",
    "FoldSinkError",
    "Folder",
    "Header",
    "HeaderError",
    "HeaderValidationError",
    "LogManager",
    "MIMEParam",
    "MIMEVersion",
    "MailLimits",
    "MailfoldError",
    "MessageBuilder",
    "MessageID",
    "Subject",
    "WordEncodable",
    "__version__",
    "clear_config",
    "fold",
    "fws",
    "get_config",
    "get_logger",
    "get_mail_limits",
    "init_logging",
    "load_config",
]
