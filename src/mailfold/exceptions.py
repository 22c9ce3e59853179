"""Specialized exceptions raised by mailfold.

Exception hierarchy::

    MailfoldError
        ConfigError
            ConfigFileNotFoundError (config file path does not exist)
            ConfigFormatError (invalid YAML or non-mapping root)
        HeaderError
            HeaderValidationError (field failed validation, also ValueError)
            AddressSyntaxError (address list cannot be parsed, also ValueError)
        FoldSinkError (output sink write failed, also OSError)
        AttachmentError (attachment rejected by limits, also ValueError)

Rendering never raises for malformed input. Validation raises
:class:`HeaderValidationError`, and sink failures are latched by the
folder as :class:`FoldSinkError`.
"""

from __future__ import annotations


class MailfoldError(Exception):
    """Base exception for all mailfold errors."""


class ConfigError(MailfoldError):
    """Base exception for configuration errors."""


class ConfigFileNotFoundError(ConfigError, FileNotFoundError):
    """Configuration file requested explicitly does not exist.

    Attributes:
        path: Path that was looked up.
    """

    def __init__(self, path: str) -> None:
        """Initialize ConfigFileNotFoundError.

        Args:
            path: Path that was looked up.
        """
        super().__init__(f"Config file not found: {path}")
        self.path = path


class ConfigFormatError(ConfigError, ValueError):
    """Configuration file is not valid YAML or its root is not a mapping."""


class HeaderError(MailfoldError):
    """Base exception for header field errors."""


class HeaderValidationError(HeaderError, ValueError):
    """A header field failed validation.

    Attributes:
        header_name: Name of the offending field (e.g. ``Sender``).
        reason: Description of the violation.
    """

    def __init__(self, header_name: str, reason: str) -> None:
        """Initialize HeaderValidationError.

        Args:
            header_name: Name of the offending field.
            reason: Description of the violation.
        """
        super().__init__(f"Invalid '{header_name}' header: {reason}")
        self.header_name = header_name
        self.reason = reason


class AddressSyntaxError(HeaderError, ValueError):
    """An address list could not be parsed.

    Attributes:
        value: The raw address list.
        reason: Parser diagnostic.
    """

    def __init__(self, value: str, reason: str) -> None:
        """Initialize AddressSyntaxError.

        Args:
            value: The raw address list.
            reason: Parser diagnostic.
        """
        super().__init__(f"Cannot parse address list {value!r}: {reason}")
        self.value = value
        self.reason = reason


class FoldSinkError(MailfoldError, OSError):
    """Writing folded output to the sink failed.

    The original exception is chained as ``__cause__``.
    """


class AttachmentError(MailfoldError, ValueError):
    """An attachment was rejected (size or count limit, unreadable file).

    Attributes:
        filename: Name of the rejected attachment.
        reason: Description of the rejection.
    """

    def __init__(self, filename: str, reason: str) -> None:
        """Initialize AttachmentError.

        Args:
            filename: Name of the rejected attachment.
            reason: Description of the rejection.
        """
        super().__init__(f"Attachment '{filename}' rejected: {reason}")
        self.filename = filename
        self.reason = reason


__all__ = [
    "AddressSyntaxError",
    "AttachmentError",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "FoldSinkError",
    "HeaderError",
    "HeaderValidationError",
    "MailfoldError",
]
