"""Message composition: attachments and the fluent message builder.

Examples:
    >>> from mailfold import MessageBuilder
    >>> raw = (
    ...     MessageBuilder()
    ...     .sender("alice@example.com")
    ...     .to("bob@example.com")
    ...     .subject("Lunch")
    ...     .body("Noon at the usual place?")
    ...     .raw()
    ... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from mailfold.codecs import Encoding, encode_base64_body
from mailfold.exceptions import AttachmentError, HeaderValidationError
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
from mailfold.limits import MailLimits, get_header_encoding, get_mail_limits
from mailfold.mime import Entity, multipart_mixed, multipart_related, text_entity

log = logging.getLogger(__name__)

_CONTENT_TYPE_ALIASES = {"plain": "text/plain", "html": "text/html"}


@dataclass(frozen=True)
class Attachment:
    """A file carried by the message.

    Attributes:
        filename: Name announced in Content-Disposition.
        data: File content.
        inline: Displayed inline (``multipart/related``) instead of attached.
        content_id: Identifier referenced as ``cid:`` from an HTML body.
    """

    filename: str
    data: bytes
    inline: bool = False
    content_id: str = ""

    @classmethod
    def from_path(cls, path: str | Path, *, inline: bool = False, content_id: str = "") -> Attachment:
        """Read an attachment from disk.

        Args:
            path: File to read.
            inline: Display inline.
            content_id: Content-ID for inline references.

        Raises:
            AttachmentError: If the file cannot be read.
        """
        file_path = Path(path)
        try:
            data = file_path.read_bytes()
        except OSError as exc:
            raise AttachmentError(file_path.name, f"cannot read {file_path}: {exc.strerror or exc}") from exc
        return cls(file_path.name, data, inline, content_id)

    def headers(self) -> list[Header]:
        """Content-Type, Content-Disposition, Content-Transfer-Encoding and Content-ID."""
        headers: list[Header] = [
            ContentType.detect(self.data, self.filename),
            ContentDisposition(inline=self.inline, filename=self.filename),
            ContentTransferEncoding("base64"),
        ]
        if self.content_id:
            headers.append(ContentID(self.content_id))
        return headers

    def entity(self) -> Entity:
        """MIME part with a base64 body."""
        return Entity(self.headers(), encode_base64_body(self.data))


class MessageBuilder:
    """Fluent builder for RFC 5322 messages.

    Setters only record values: malformed input is reported by
    :meth:`validate` and rendered as-is by :meth:`raw`. Attachment limits
    are enforced when attaching.

    Args:
        limits: Attachment limits, read from configuration when None.
        encoding: Encoded-word encoding for Subject and encodable custom
            headers, read from configuration when None.
        rng: Random source for multipart boundaries.

    Examples:
        >>> builder = MessageBuilder(limits=MailLimits(1024, 2), encoding=Encoding.Q)
        >>> builder.sender("alice@example.com").to("bob@example.com").subject("Hi")  # doctest: +ELLIPSIS
        <mailfold.message.MessageBuilder object at ...>
    """

    def __init__(
        self,
        *,
        limits: MailLimits | None = None,
        encoding: Encoding | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._limits = limits if limits is not None else get_mail_limits()
        self._encoding = encoding if encoding is not None else get_header_encoding()
        self._rng = rng
        self._addresses: dict[AddressField, str] = {}
        self._subject: str | None = None
        self._date: datetime | None = None
        self._message_id: str | None = None
        self._custom: list[CustomHeader] = []
        self._body: str | None = None
        self._content_type: str | None = None
        self._attachments: list[Attachment] = []

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def _set_address(self, field: AddressField, addresses: tuple[str, ...]) -> MessageBuilder:
        value = ", ".join(address for address in addresses if address)
        if value:
            self._addresses[field] = value
        else:
            self._addresses.pop(field, None)
        return self

    def sender(self, address: str) -> MessageBuilder:
        """Set From."""
        return self._set_address(AddressField.FROM, (address,))

    def on_behalf_of(self, address: str) -> MessageBuilder:
        """Set Sender, the agent submitting the message for From."""
        return self._set_address(AddressField.SENDER, (address,))

    def reply_to(self, *addresses: str) -> MessageBuilder:
        """Set Reply-To."""
        return self._set_address(AddressField.REPLY_TO, addresses)

    def to(self, *addresses: str) -> MessageBuilder:
        """Set To, each argument may itself be a comma-separated list."""
        return self._set_address(AddressField.TO, addresses)

    def cc(self, *addresses: str) -> MessageBuilder:
        """Set Cc."""
        return self._set_address(AddressField.CC, addresses)

    def bcc(self, *addresses: str) -> MessageBuilder:
        """Set Bcc."""
        return self._set_address(AddressField.BCC, addresses)

    def subject(self, subject: str) -> MessageBuilder:
        """Set Subject."""
        self._subject = subject
        return self

    def date(self, value: datetime | None = None) -> MessageBuilder:
        """Add a Date field, the current time when value is None."""
        self._date = value if value is not None else Date().value
        return self

    def message_id(self, value: str | None = None, *, domain: str | None = None) -> MessageBuilder:
        """Add a Message-ID field, a generated one when value is None."""
        self._message_id = value if value is not None else MessageID.generate(domain).raw
        return self

    def header(self, name: str, value: str, *, encode: bool = False) -> MessageBuilder:
        """Add a custom field, written after the standard ones.

        Args:
            name: Field name, written as given.
            value: Field body.
            encode: Allow encoded-words for non-ASCII bodies.
        """
        self._custom.append(CustomHeader(name, value, encode, self._encoding))
        return self

    def body(self, content: str, content_type: str | None = None) -> MessageBuilder:
        """Set the body.

        Args:
            content: Body text.
            content_type: ``plain``, ``html`` or a full media type. Sniffed
                from the content when None.
        """
        self._body = content
        self._content_type = _CONTENT_TYPE_ALIASES.get(content_type or "", content_type)
        return self

    def attach(self, *files: str | Path | Attachment) -> MessageBuilder:
        """Attach files or prepared attachments.

        Raises:
            AttachmentError: If nothing is given, a file cannot be read, or a
                limit is exceeded.
        """
        if not files:
            raise AttachmentError("", "no file given")
        for item in files:
            attachment = item if isinstance(item, Attachment) else Attachment.from_path(item)
            self._add(attachment)
        return self

    def attach_data(self, filename: str, data: bytes) -> MessageBuilder:
        """Attach in-memory content."""
        self._add(Attachment(filename, data))
        return self

    def attach_inline(self, content_id: str, file: str | Path) -> MessageBuilder:
        """Attach a file displayed inline and referenced as ``cid:<content_id>``.

        Raises:
            AttachmentError: If the content id is empty, the file cannot be
                read, or a limit is exceeded.
        """
        if not content_id.strip():
            raise AttachmentError(Path(file).name, "inline attachments require a content id")
        self._add(Attachment.from_path(file, inline=True, content_id=content_id))
        return self

    def _add(self, attachment: Attachment) -> None:
        if len(self._attachments) >= self._limits.max_attachments:
            raise AttachmentError(attachment.filename, f"more than {self._limits.max_attachments} attachments")
        if len(attachment.data) > self._limits.max_attachment_size:
            raise AttachmentError(attachment.filename, f"larger than {self._limits.max_attachment_size_display}")
        self._attachments.append(attachment)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def headers(self) -> list[Header]:
        """Message-level fields in output order (MIME fields excluded)."""
        headers: list[Header] = [
            Address(field, self._addresses[field]) for field in AddressField if field in self._addresses
        ]
        if self._subject is not None:
            headers.append(Subject(self._subject, self._encoding))
        if self._date is not None:
            headers.append(Date(self._date))
        if self._message_id is not None:
            headers.append(MessageID(self._message_id))
        headers.extend(self._custom)
        return headers

    def validate(self) -> list[HeaderValidationError]:
        """Validate every message-level field.

        Returns:
            One error per invalid field, empty when the message is valid.
        """
        errors: list[HeaderValidationError] = []
        if AddressField.FROM not in self._addresses:
            errors.append(HeaderValidationError("From", "field is required"))
        for header in self.headers():
            try:
                header.validate()
            except HeaderValidationError as exc:
                errors.append(exc)
        return errors

    def build(self) -> Entity:
        """Assemble the entity tree.

        A lone part, body or attachment, is merged into the message entity.
        Inline attachments share a ``multipart/related`` with the body;
        regular attachments go into ``multipart/mixed``, wrapping the
        related part when there is one.
        """
        headers = self.headers()
        related = [text_entity(self._body, self._content_type)] if self._body is not None else []
        related.extend(attachment.entity() for attachment in self._attachments if attachment.inline)
        attached = [attachment.entity() for attachment in self._attachments if not attachment.inline]

        if not related and not attached:
            return Entity(headers, "")
        top = [MIMEVersion(), *headers]
        if len(related) + len(attached) == 1:
            (part,) = related or attached
            return Entity([*top, *part.headers], part.body)
        if not attached:
            return multipart_related(related, top, self._rng)
        if len(related) > 1:
            related = [multipart_related(related, rng=self._rng)]
        log.debug("Building multipart/mixed with %d attachments", len(attached))
        return multipart_mixed([*related, *attached], top, self._rng)

    def raw(self) -> str:
        """The complete message text."""
        return self.build().render()


__all__ = ["Attachment", "MessageBuilder"]
