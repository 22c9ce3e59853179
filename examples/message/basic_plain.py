"""Plain-text message composition using :class:`mailfold.MessageBuilder`."""

from __future__ import annotations

from mailfold import MessageBuilder


def build_plain_message() -> None:
    """Construct a plain-text message and print the RFC 5322 text."""
    raw = (
        MessageBuilder()
        .sender("Alice Example <alice@example.com>")
        .to("bob@example.com", "Carol <carol@example.com>")
        .subject("Plain greetings from a sender with a rather long subject line that has to fold")
        .date()
        .message_id(domain="example.com")
        .body("Hello from mailfold!\r\nThis message uses the plain content type.", content_type="plain")
        .raw()
    )
    print(raw)


if __name__ == "__main__":  # pragma: no cover - manual example
    build_plain_message()
