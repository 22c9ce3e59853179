"""Tests for MIME entities."""

from __future__ import annotations

from mailfold.header import ContentTransferEncoding, ContentType, Subject
from mailfold.mime import Entity, MultipartBody, text_entity


class TestEntity:
    """Header block and body."""

    def test_render(self) -> None:
        """Fields, a blank line, then the body."""
        assert str(Entity([Subject("hi")], "hello")) == "Subject: hi\r\n\r\nhello"

    def test_empty(self) -> None:
        """No fields and no body is a lone blank line."""
        assert Entity().render() == "\r\n"


class TestMultipartBody:
    """Delimited parts."""

    def test_render(self) -> None:
        """Parts are wrapped in boundary delimiters."""
        body = MultipartBody("b", [Entity([], "x"), Entity([], "y")])
        assert body.render() == "--b\r\n\r\nx\r\n--b\r\n\r\ny\r\n--b--"


class TestTextEntity:
    """Text body parts."""

    def test_ascii(self) -> None:
        """7-bit text is sent as-is."""
        entity = text_entity("hello")
        assert entity.headers == [ContentType("text/plain", {"charset": "utf-8"})]
        assert entity.body == "hello"

    def test_non_ascii_is_quoted_printable(self) -> None:
        """8-bit text is quoted-printable encoded."""
        entity = text_entity("héllo")
        assert entity.render() == (
            "Content-Type: text/plain; charset=utf-8\r\n"
            "Content-Transfer-Encoding: quoted-printable\r\n"
            "\r\n"
            "h=C3=A9llo"
        )

    def test_long_line_is_quoted_printable(self) -> None:
        """Lines over 998 octets are not 7-bit safe."""
        entity = text_entity("a" * 1000)
        assert ContentTransferEncoding("quoted-printable") in entity.headers
        assert all(len(line) <= 76 for line in str(entity.body).split("\r\n"))

    def test_line_breaks_normalized(self) -> None:
        """Bare LF and bare CR line breaks become CRLF, CRLF stays as is."""
        entity = text_entity("one\ntwo\rthree\r\nfour")
        assert entity.body == "one\r\ntwo\r\nthree\r\nfour"
        assert len(entity.headers) == 1

    def test_long_lf_line_is_quoted_printable(self) -> None:
        """The 998-octet limit applies to lines ended by a bare LF too."""
        entity = text_entity("short\n" + "a" * 1000)
        assert ContentTransferEncoding("quoted-printable") in entity.headers
        assert "\n" not in str(entity.body).replace("\r\n", "")

    def test_non_ascii_lf_lines(self) -> None:
        """Quoted-printable bodies also end their lines with CRLF."""
        entity = text_entity("héllo\nwörld")
        assert entity.body == "h=C3=A9llo\r\nw=C3=B6rld"

    def test_html_detected(self) -> None:
        """The media type is sniffed when not given."""
        assert text_entity("<b>hi</b>").headers[0] == ContentType("text/html", {"charset": "utf-8"})

    def test_explicit_type(self) -> None:
        """Non-text types get no charset."""
        assert text_entity("{}", "application/json").headers[0] == ContentType("application/json", {})
