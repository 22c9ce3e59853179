"""Tests for content type detection."""

from __future__ import annotations

import pytest

from mailfold.mime import detect_content_type


class TestSignatures:
    """Detection from content."""

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            (b"<b>attack at dawn</b>", "text/html"),
            (b"  <!DOCTYPE html><html></html>", "text/html"),
            (b"<a href='x'>x</a>", "text/html"),
            (b"<body>", "text/html"),
            (b'<?xml version="1.0"?><a/>', "text/xml"),
        ],
    )
    def test_markup(self, data: bytes, expected: str) -> None:
        """Markup is text with a UTF-8 charset."""
        assert detect_content_type(data) == (expected, "utf-8")

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            (b"%PDF-1.7\n", "application/pdf"),
            (b"\x89PNG\r\n\x1a\n\x00\x00", "image/png"),
            (b"GIF89a\x01\x00", "image/gif"),
            (b"\xff\xd8\xff\xe0", "image/jpeg"),
            (b"PK\x03\x04\x14\x00", "application/zip"),
            (b"\x1f\x8b\x08\x00", "application/gzip"),
            (b"RIFF\x00\x00\x00\x00WEBPVP8 ", "image/webp"),
            (b"\x00\x01\x02\x03", "application/octet-stream"),
        ],
    )
    def test_binary(self, data: bytes, expected: str) -> None:
        """Binary formats carry no charset."""
        assert detect_content_type(data) == (expected, "")

    def test_plain_text(self) -> None:
        """Decodable text without markup is text/plain."""
        assert detect_content_type("héllo\r\nworld".encode()) == ("text/plain", "utf-8")

    def test_empty(self) -> None:
        """Empty content is text."""
        assert detect_content_type(b"") == ("text/plain", "utf-8")

    def test_invalid_utf8(self) -> None:
        """Undecodable octets make the content binary."""
        assert detect_content_type(b"abc\xff\xfe") == ("application/octet-stream", "")

    def test_sequence_cut_by_window(self) -> None:
        """A code point cut at the sniff window is still text."""
        data = b"a" * 511 + "é".encode()
        assert detect_content_type(data) == ("text/plain", "utf-8")


class TestFilename:
    """Detection from the file name."""

    def test_extension_wins(self) -> None:
        """A known extension overrides sniffing."""
        assert detect_content_type(b"hello", "report.pdf") == ("application/pdf", "")

    def test_text_extension_has_charset(self) -> None:
        """text/* types get a charset."""
        assert detect_content_type(b"a,b", "data.txt") == ("text/plain", "utf-8")

    def test_unknown_extension_falls_back(self) -> None:
        """Unknown extensions fall back to sniffing."""
        assert detect_content_type(b"%PDF-1.4", "file.unknownext") == ("application/pdf", "")
