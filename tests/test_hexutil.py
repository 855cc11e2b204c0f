"""
Unit Tests for Hex Primitives
=============================
"""

import pytest

from btcscript_sdk.errors import CodecError, InvalidHexFormat, OddLengthHex
from btcscript_sdk.hexutil import (
    byte_count_info,
    bytes_to_hex,
    clean_hex,
    hex_to_bytes,
    is_hex,
)


class TestHexParsing:
    """Tests for hex string parsing."""

    def test_basic(self):
        assert hex_to_bytes("76a9") == bytes([0x76, 0xA9])

    def test_uppercase_accepted(self):
        assert hex_to_bytes("76A9") == bytes([0x76, 0xA9])

    def test_whitespace_stripped(self):
        """Pasted dumps with spaces and newlines parse."""
        assert hex_to_bytes(" 76 a9\n14\t") == bytes([0x76, 0xA9, 0x14])

    def test_empty(self):
        assert hex_to_bytes("") == b""
        assert hex_to_bytes("   ") == b""

    def test_invalid_character(self):
        with pytest.raises(InvalidHexFormat):
            hex_to_bytes("76zz")

    def test_prefix_is_invalid(self):
        """The interchange format has no 0x prefix."""
        with pytest.raises(InvalidHexFormat):
            hex_to_bytes("0x76")

    def test_odd_length(self):
        with pytest.raises(OddLengthHex) as exc_info:
            hex_to_bytes("76a")
        assert "odd-length" in str(exc_info.value)

    def test_errors_are_codec_errors(self):
        """Callers can catch every hex failure as CodecError."""
        for bad in ("zz", "abc"):
            with pytest.raises(CodecError):
                hex_to_bytes(bad)


class TestHexFormatting:
    """Tests for formatting helpers."""

    def test_bytes_to_hex_lowercase(self):
        assert bytes_to_hex(bytes([0xAB, 0xCD])) == "abcd"

    def test_clean_hex(self):
        assert clean_hex(" AB cd\n") == "abcd"

    def test_is_hex(self):
        assert is_hex("0123456789abcdefABCDEF")
        assert is_hex("")
        assert not is_hex("0g")

    def test_byte_count_info(self):
        assert byte_count_info("76a988ac") == "4 bytes"
        assert byte_count_info("") == ""
