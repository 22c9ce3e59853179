"""Tests for encoded-word, percent and body codecs."""

from __future__ import annotations

import pytest

from mailfold.codecs import (
    ENCODED_WORD_OVERHEAD,
    Encoding,
    char_cost,
    decode_word,
    encode_base64_body,
    encode_quoted_printable_body,
    encode_word,
    encode_words,
    encoded_length,
    encoded_words_length,
    needs_encoding,
    percent_encode,
    percent_encoded_length,
)


class TestNeedsEncoding:
    """Detection of text that cannot travel raw."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("hello", False),
            ("tab\there", False),
            ("", False),
            ("héllo", True),
            ("a=?b", True),
            ("line\nbreak", True),
            ("\x7f", True),
        ],
    )
    def test_needs_encoding(self, text: str, expected: bool) -> None:
        """Non-ASCII, controls and ``=?`` require encoding."""
        assert needs_encoding(text) is expected


class TestEncodeWord:
    """Single and multiple encoded-words."""

    def test_overhead(self) -> None:
        """The envelope takes 12 octets."""
        assert ENCODED_WORD_OVERHEAD == 12

    def test_q(self) -> None:
        """Q encodes spaces as underscores."""
        assert encode_word("héllo wörld", Encoding.Q) == "=?utf-8?q?h=C3=A9llo_w=C3=B6rld?="

    def test_b(self) -> None:
        """B encodes base64."""
        assert encode_word("foo bar", Encoding.B) == "=?utf-8?b?Zm9vIGJhcg==?="

    def test_empty(self) -> None:
        """Empty text yields no word."""
        assert encode_words("", Encoding.Q) == ""

    def test_words_are_capped(self) -> None:
        """Text is split into words of at most 75 octets."""
        words = encode_words("i" * 100, Encoding.Q).split(" ")
        assert words == [f"=?utf-8?q?{'i' * 63}?=", f"=?utf-8?q?{'i' * 37}?="]

    def test_base64_words_hold_45_octets(self) -> None:
        """B words carry whole 3-octet blocks."""
        words = encode_words("b" * 50, Encoding.B).split(" ")
        assert [len(word) for word in words] == [72, 20]

    def test_custom_cap(self) -> None:
        """The word cap is configurable."""
        words = encode_words("é" * 4, Encoding.Q, max_length=24).split(" ")
        assert words == ["=?utf-8?q?=C3=A9=C3=A9?="] * 2

    def test_code_points_never_split(self) -> None:
        """Each word decodes on its own."""
        for word in encode_words("日本語のテキスト" * 5, Encoding.B).split(" "):
            assert decode_word(word) is not None


class TestLengths:
    """Length helpers used for bisection."""

    def test_char_cost(self) -> None:
        """Q costs encoded octets, B costs raw octets."""
        assert char_cost("a", Encoding.Q) == 1
        assert char_cost(" ", Encoding.Q) == 1
        assert char_cost("é", Encoding.Q) == 6
        assert char_cost("é", Encoding.B) == 2

    def test_encoded_length(self) -> None:
        """Payload length without the envelope."""
        assert encoded_length(b"foo", Encoding.B) == 4
        assert encoded_length("é".encode(), Encoding.Q) == 6

    @pytest.mark.parametrize("encoding", [Encoding.Q, Encoding.B])
    @pytest.mark.parametrize(
        "text",
        ["", "a", "héllo", "é" * 40, "a_b=c?d\te", "日本語のテキスト" * 9, "\U0001f600x" * 30, "plain " * 30],
    )
    def test_encoded_words_length(self, text: str, encoding: Encoding) -> None:
        """Counted length equals the rendered length."""
        assert encoded_words_length(text, encoding) == len(encode_words(text, encoding))

    def test_encoded_words_length_stops_at_limit(self) -> None:
        """Counting stops early with a value above the limit."""
        text = "é" * 10_000
        full = encoded_words_length(text, Encoding.Q)
        bounded = encoded_words_length(text, Encoding.Q, limit=100)
        assert 100 < bounded < full
        assert encoded_words_length("héllo", Encoding.Q, limit=100) == 22

    @pytest.mark.parametrize("text", ["", "report.pdf", "a b/é*'%", "a-b_c.d!#$&+^`{|}~", "日本\U0001f600"])
    def test_percent_encoded_length(self, text: str) -> None:
        """Counted length equals the percent-encoded length."""
        assert percent_encoded_length(text) == len(percent_encode(text))


class TestDecodeWord:
    """Recognition of existing encoded-words."""

    @pytest.mark.parametrize(
        ("word", "expected"),
        [
            ("=?utf-8?q?h=C3=A9llo_world?=", ("héllo world", Encoding.Q)),
            ("=?UTF-8?Q?foo?=", ("foo", Encoding.Q)),
            ("=?utf-8?b?Zm9vIGJhcg==?=", ("foo bar", Encoding.B)),
        ],
    )
    def test_valid(self, word: str, expected: tuple[str, Encoding]) -> None:
        """Well-formed UTF-8 words decode."""
        assert decode_word(word) == expected

    @pytest.mark.parametrize(
        "word",
        ["plain", "=?iso-8859-1?q?foo?=", "=?utf-8?x?foo?=", "=?utf-8?b?!!!?=", "=?utf-8?q?=FF?="],
    )
    def test_invalid(self, word: str) -> None:
        """Anything else is not recognised."""
        assert decode_word(word) is None


class TestPercentEncode:
    """RFC 2231 percent-encoding."""

    def test_attribute_chars_kept(self) -> None:
        """attribute-chars are not escaped."""
        assert percent_encode("a-b_c.d!#$&+^`{|}~") == "a-b_c.d!#$&+^`{|}~"

    def test_escapes(self) -> None:
        """Spaces, specials and non-ASCII are escaped."""
        assert percent_encode("a b/é*'%") == "a%20b%2F%C3%A9%2A%27%25"


class TestBodyEncoders:
    """Body transfer encodings."""

    def test_base64_lines(self) -> None:
        """Base64 lines are 76 characters, no trailing CRLF."""
        body = encode_base64_body(b"x" * 100)
        assert [len(line) for line in body.split("\r\n")] == [76, 60]

    def test_base64_empty(self) -> None:
        """Empty data has an empty body."""
        assert encode_base64_body(b"") == ""

    def test_quoted_printable(self) -> None:
        """UTF-8 octets are escaped individually."""
        assert encode_quoted_printable_body("héllo") == "h=C3=A9llo"

    def test_quoted_printable_crlf(self) -> None:
        """Line breaks are CRLF."""
        assert encode_quoted_printable_body("é\nb") == "=C3=A9\r\nb"
