"""Tests for Subject and custom headers."""

from __future__ import annotations

import time
from email.header import decode_header, make_header

import pytest

from mailfold.codecs import Encoding
from mailfold.exceptions import HeaderValidationError
from mailfold.header import CustomHeader, Subject

WORD = "=?utf-8?q?" + "=C3=A9" * 10 + "?="


class TestCustomHeader:
    """Unstructured custom fields."""

    def test_short(self) -> None:
        """A short value stays on one line."""
        assert CustomHeader("X-Mailer", "mailfold").render() == "X-Mailer: mailfold\r\n"

    def test_folds_at_spaces(self) -> None:
        """Plain text folds at its own spaces."""
        value = " ".join(["word"] * 20)
        expected = "X-Long: " + " ".join(["word"] * 14) + "\r\n " + " ".join(["word"] * 6) + "\r\n"
        assert CustomHeader("X-Long", value).render() == expected

    def test_non_ascii_without_encoding_is_raw(self) -> None:
        """Without word encoding the value is written as given."""
        assert CustomHeader("X-Note", "héllo").render() == "X-Note: héllo\r\n"

    def test_non_ascii_with_encoding(self) -> None:
        """Word encoding turns the value into encoded-words."""
        assert CustomHeader("X-Note", "héllo", True).render() == "X-Note: =?utf-8?q?h=C3=A9llo?=\r\n"

    def test_base64_encoding(self) -> None:
        """The encoding can be switched to B."""
        header = CustomHeader("X-Note", "héllo", True, Encoding.B)
        assert header.render() == "X-Note: =?utf-8?b?aMOpbGxv?=\r\n"

    def test_name_written_as_given(self) -> None:
        """Custom field names are not canonicalized."""
        assert CustomHeader("x-lower", "v").name == "x-lower"


class TestCustomHeaderValidate:
    """Validation of custom fields."""

    def test_valid(self) -> None:
        """Printable ASCII passes."""
        CustomHeader("X-Mailer", "mailfold 1.0\tbeta").validate()

    @pytest.mark.parametrize("name", ["", "X:Bad", "X Bad", "X" * 78, "Xé"])
    def test_invalid_name(self, name: str) -> None:
        """Field names must be 1-77 ftext characters."""
        with pytest.raises(HeaderValidationError, match="field name"):
            CustomHeader(name, "value").validate()

    def test_non_ascii_needs_encoding(self) -> None:
        """Raw values are limited to printable US-ASCII."""
        with pytest.raises(HeaderValidationError, match="printable US-ASCII"):
            CustomHeader("X-Note", "héllo").validate()

    def test_encodable_value(self) -> None:
        """Any printable Unicode is fine with word encoding."""
        CustomHeader("X-Note", "héllo wörld ✓", True).validate()

    def test_line_break_rejected(self) -> None:
        """CR and LF are rejected even with word encoding."""
        header = CustomHeader("X-Note", "a\r\nBcc: eve@example.com", True)
        with pytest.raises(HeaderValidationError, match="non-printable"):
            header.validate()
        assert not header.is_valid()


class TestSubject:
    """The Subject field."""

    def test_ascii(self) -> None:
        """Plain subjects are written raw."""
        assert Subject("Quarterly report").render() == "Subject: Quarterly report\r\n"

    def test_non_ascii(self) -> None:
        """Non-ASCII subjects are encoded."""
        assert Subject("Eve is éavesdropping").render() == "Subject: =?utf-8?q?Eve_is_=C3=A9avesdropping?=\r\n"

    def test_encoded_word_lookalike(self) -> None:
        """Text containing ``=?`` is encoded to survive decoding."""
        assert Subject("a =?b").render() == "Subject: =?utf-8?q?a_=3D=3Fb?=\r\n"

    def test_long_non_ascii(self) -> None:
        """Long encoded subjects split into 75-octet words on their own lines."""
        assert Subject("é" * 30).render() == f"Subject:\r\n {WORD}\r\n {WORD}\r\n {WORD}\r\n"

    def test_overlong_ascii_word(self) -> None:
        """A word longer than a line is encoded so it can be split."""
        expected = f"Subject:\r\n =?utf-8?q?{'x' * 63}?=\r\n =?utf-8?q?{'x' * 37}?=\r\n"
        assert Subject("x" * 100).render() == expected

    def test_base64(self) -> None:
        """Subjects honour the configured encoding."""
        assert Subject("é", Encoding.B).render() == "Subject: =?utf-8?b?w6k=?=\r\n"

    def test_very_long_subject_is_fast(self) -> None:
        """Rendering time grows linearly with the subject length."""
        start = time.perf_counter()
        rendered = Subject("é" * 30_000).render()
        assert time.perf_counter() - start < 3.0
        lines = rendered.removesuffix("\r\n").split("\r\n")
        assert len(lines) > 1000
        assert all(len(line.encode()) <= 78 for line in lines)

    def test_is_custom_header(self) -> None:
        """Subject validates like an encodable custom header."""
        subject = Subject("héllo")
        assert isinstance(subject, CustomHeader)
        assert subject.name == "Subject"
        assert subject.word_encodable
        assert subject.is_valid()


ROUND_TRIP_TEXTS = [
    "Eve is éavesdropping on the quarterly report",
    "a_b=c?d\té " * 12,
    "日本語のテキストを折り返す" * 6,
    "Grüße 😀 aus Köln 🎉 " * 8,
    "ñ" * 200,
    "x" * 150 + "é",
    "plain ascii words with_under=scores? and\ttabs " * 4,
]


class TestRoundTrip:
    """Folded subjects decode back to the original text."""

    @pytest.mark.parametrize("encoding", [Encoding.Q, Encoding.B])
    @pytest.mark.parametrize("text", ROUND_TRIP_TEXTS)
    def test_decodes_to_original(self, text: str, encoding: Encoding) -> None:
        """Unfolding and RFC 2047 decoding gives the subject back."""
        text = text.strip()
        rendered = Subject(text, encoding).render()
        unfolded = rendered.removesuffix("\r\n").replace("\r\n ", " ")
        value = unfolded.removeprefix("Subject: ")
        assert str(make_header(decode_header(value))) == text

    @pytest.mark.parametrize("encoding", [Encoding.Q, Encoding.B])
    @pytest.mark.parametrize("text", ROUND_TRIP_TEXTS)
    def test_lines_within_limit(self, text: str, encoding: Encoding) -> None:
        """No physical line exceeds 78 octets or is blank."""
        lines = Subject(text.strip(), encoding).render().removesuffix("\r\n").split("\r\n")
        for line in lines:
            assert len(line.encode("utf-8")) <= 78
            assert line.strip(" \t")
