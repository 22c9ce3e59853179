"""Tests for MIME header fields."""

from __future__ import annotations

import time

import pendulum
import pytest

from mailfold.exceptions import HeaderValidationError
from mailfold.header import (
    ContentDisposition,
    ContentTransferEncoding,
    ContentType,
    MIMEVersion,
)


class TestMIMEVersion:
    """The MIME-Version field."""

    def test_render(self) -> None:
        """Always version 1.0."""
        assert MIMEVersion().render() == "MIME-Version: 1.0\r\n"
        assert MIMEVersion().is_valid()


class TestContentType:
    """The Content-Type field."""

    def test_render(self) -> None:
        """Parameters follow the media type."""
        header = ContentType("text/plain", {"charset": "utf-8"})
        assert header.render() == "Content-Type: text/plain; charset=utf-8\r\n"

    def test_long_parameters_continue(self) -> None:
        """Each long parameter folds into its own continuation sections."""
        header = ContentType("text/plain", {"charset": "utf-8", "foo": "i" * 80, "bar": "i" * 80})
        assert header.render() == (
            "Content-Type: text/plain; charset=utf-8;\r\n"
            f" foo*0*=utf-8''{'i' * 63}\r\n"
            f" foo*1*={'i' * 17};\r\n"
            f" bar*0*=utf-8''{'i' * 63}\r\n"
            f" bar*1*={'i' * 17}\r\n"
        )

    def test_non_ascii_parameter(self) -> None:
        """Non-ASCII values use the extended form."""
        header = ContentType("application/pdf", {"name": "résumé.pdf"})
        assert header.render() == "Content-Type: application/pdf; name*=utf-8''r%C3%A9sum%C3%A9.pdf\r\n"

    def test_detect(self) -> None:
        """Media type and charset are sniffed."""
        assert ContentType.detect(b"%PDF-1.7") == ContentType("application/pdf", {})
        assert ContentType.detect(b"hello") == ContentType("text/plain", {"charset": "utf-8"})

    @pytest.mark.parametrize("media_type", ["text", "text/", "/plain", "text/pl ain", "te(x)t/plain"])
    def test_invalid_media_type(self, media_type: str) -> None:
        """type and subtype must be tokens."""
        with pytest.raises(HeaderValidationError, match="invalid media type"):
            ContentType(media_type).validate()

    def test_invalid_parameter_name(self) -> None:
        """Parameter names must be attribute-chars."""
        with pytest.raises(HeaderValidationError, match="invalid parameter name"):
            ContentType("text/plain", {"char set": "utf-8"}).validate()


class TestContentTransferEncoding:
    """The Content-Transfer-Encoding field."""

    @pytest.mark.parametrize("mechanism", ["7bit", "8bit", "binary", "quoted-printable", "BASE64", "x-uuencode"])
    def test_valid(self, mechanism: str) -> None:
        """Standard mechanisms and x- tokens are accepted."""
        ContentTransferEncoding(mechanism).validate()

    def test_invalid(self) -> None:
        """Unknown mechanisms are rejected."""
        with pytest.raises(HeaderValidationError, match="unknown mechanism"):
            ContentTransferEncoding("gzip").validate()

    def test_render(self) -> None:
        """The mechanism follows the field name."""
        assert ContentTransferEncoding("base64").render() == "Content-Transfer-Encoding: base64\r\n"


class TestContentDisposition:
    """The Content-Disposition field."""

    def test_attachment(self) -> None:
        """Attachment disposition with a file name."""
        header = ContentDisposition(filename="report.pdf")
        assert header.render() == "Content-Disposition: attachment; filename=report.pdf\r\n"

    def test_inline(self) -> None:
        """Inline disposition without parameters."""
        assert ContentDisposition(inline=True).render() == "Content-Disposition: inline\r\n"

    def test_dates(self) -> None:
        """Dates are quoted RFC 5322 date-times."""
        header = ContentDisposition(
            filename="genome.jpeg",
            modification_date=pendulum.datetime(1997, 2, 12, 16, 29, 51, tz=pendulum.fixed_timezone(-5 * 3600)),
        )
        assert header.render() == (
            "Content-Disposition: attachment; filename=genome.jpeg;\r\n"
            ' modification-date="Wed, 12 Feb 1997 16:29:51 -0500"\r\n'
        )

    def test_parameter_order(self) -> None:
        """filename, dates, size, then extra parameters."""
        value = pendulum.datetime(2020, 1, 2, tz="UTC")
        header = ContentDisposition(
            filename="a.txt",
            params={"x-note": "hi"},
            read_date=value,
            creation_date=value,
            size=12,
        )
        assert list(header.all_params()) == ["filename", "creation-date", "read-date", "size", "x-note"]

    def test_negative_size(self) -> None:
        """Sizes cannot be negative."""
        with pytest.raises(HeaderValidationError, match="negative"):
            ContentDisposition(size=-1).validate()

    def test_valid(self) -> None:
        """A plain attachment passes."""
        assert ContentDisposition(filename="a b.txt", size=0).is_valid()

    def test_very_long_filename_is_fast(self) -> None:
        """Long non-ASCII file names fold into continuations in linear time."""
        start = time.perf_counter()
        rendered = ContentDisposition(filename="é" * 30_000).render()
        assert time.perf_counter() - start < 3.0
        lines = rendered.removesuffix("\r\n").split("\r\n")
        assert lines[0] == "Content-Disposition: attachment;"
        assert lines[1].startswith(" filename*0*=utf-8''%C3%A9")
        assert all(len(line.encode()) <= 78 for line in lines)
