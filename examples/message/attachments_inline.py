"""Demonstrate attachments and inline resources with :class:`MessageBuilder`."""

from __future__ import annotations

from base64 import b64decode
from pathlib import Path
from tempfile import TemporaryDirectory

from mailfold import MessageBuilder

_LOGO_BASE64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/x8AAusB9Y9dOAoAAAAASUVORK5CYII="


def build_message_with_attachments() -> None:
    """Create a message with an attachment, an inline PNG and a long non-ASCII file name."""
    with TemporaryDirectory() as tmp_dir:
        workdir = Path(tmp_dir)

        report_path = workdir / "rapport-quotidien-des-métriques-de-conversion-pour-l-équipe.txt"
        report_path.write_text("Daily metrics: 42 conversions", encoding="utf-8")

        logo_path = workdir / "logo.png"
        logo_path.write_bytes(b64decode(_LOGO_BASE64))

        builder = (
            MessageBuilder()
            .sender("sender@example.com")
            .to("ops@example.com")
            .subject("Rapport quotidien des métriques")
            .body(
                '<p>Please find the report attached.</p><img src="cid:company-logo@example.com" alt="logo" />',
                content_type="html",
            )
            .attach(report_path)
            .attach_inline("company-logo@example.com", logo_path)
        )
        for error in builder.validate():
            print(f"invalid: {error}")
        print(builder.raw())


if __name__ == "__main__":  # pragma: no cover - manual example
    build_message_with_attachments()
