# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the script ASM lexer.
#
# Test coverage includes:
#   - The five classification rules and their priority order
#   - Line/column tracking
#   - Specific errors for malformed tokens of a known shape
# =============================================================================

import pytest

from btcscript_sdk.assembler.lexer import Lexer, TokenKind, split_words, tokenize
from btcscript_sdk.errors import (
    InvalidHexData,
    OddLengthHex,
    UnknownOpcode,
    UnrecognizedToken,
)


# =============================================================================
# Classification Tests
# =============================================================================

class TestClassification:
    """Each word is classified by the first matching rule."""

    def test_empty_source(self):
        assert tokenize("") == []
        assert tokenize("  \n\t ") == []

    def test_bracketed_data(self):
        (token,) = tokenize("<00ff>")
        assert token.kind == TokenKind.DATA
        assert token.data == bytes([0x00, 0xFF])
        assert token.opcode is None

    def test_negative_one(self):
        (token,) = tokenize("-1")
        assert token.kind == TokenKind.SMALL_INT
        assert token.opcode == 0x4F

    @pytest.mark.parametrize("word,opcode", [
        ("0", 0x00),
        ("1", 0x51),
        ("9", 0x59),
        ("10", 0x5A),
        ("16", 0x60),
    ])
    def test_small_integers(self, word, opcode):
        (token,) = tokenize(word)
        assert token.kind == TokenKind.SMALL_INT
        assert token.opcode == opcode

    def test_mnemonic(self):
        (token,) = tokenize("OP_CHECKSIG")
        assert token.kind == TokenKind.OPCODE
        assert token.opcode == 0xAC

    def test_bare_hex(self):
        (token,) = tokenize("aabb")
        assert token.kind == TokenKind.BARE_HEX
        assert token.data == bytes([0xAA, 0xBB])

    def test_small_int_beats_bare_hex(self):
        """'10' is the number ten, not the byte 0x10."""
        (token,) = tokenize("10")
        assert token.kind == TokenKind.SMALL_INT

    def test_out_of_range_number_is_bare_hex(self):
        """'17' matches no small-int rule, so it is an even-length hex push."""
        (token,) = tokenize("17")
        assert token.kind == TokenKind.BARE_HEX
        assert token.data == bytes([0x17])

    def test_leading_zero_is_bare_hex(self):
        (token,) = tokenize("00")
        assert token.kind == TokenKind.BARE_HEX

    def test_encoded_lengths(self):
        tokens = tokenize("OP_DUP 5 <" + "00" * 80 + ">")
        assert [t.encoded_length for t in tokens] == [1, 1, 82]


# =============================================================================
# Position Tracking Tests
# =============================================================================

class TestPositions:
    """Tests for line/column tracking."""

    def test_line_and_column(self):
        tokens = tokenize("OP_DUP  OP_DROP\n  16")
        assert [(t.line, t.column) for t in tokens] == [(1, 1), (1, 9), (2, 3)]

    def test_tokenize_lines_keeps_empty_lines(self):
        lines = Lexer("OP_DUP\n\n1 2").tokenize_lines()
        assert [len(line) for line in lines] == [1, 0, 2]

    def test_split_words(self):
        assert split_words("  OP_DUP\n\tzz <> ") == ["OP_DUP", "zz", "<>"]


# =============================================================================
# Error Tests
# =============================================================================

class TestErrors:
    """Malformed tokens raise specific errors with their location."""

    @pytest.mark.parametrize("word", ["<>", "<abc>", "<zz>", "<0x00>"])
    def test_invalid_bracketed_data(self, word):
        with pytest.raises(InvalidHexData):
            tokenize(word)

    def test_unknown_mnemonic(self):
        with pytest.raises(UnknownOpcode) as exc_info:
            tokenize("OP_DUP OP_FOO")
        assert exc_info.value.location.column == 8

    def test_odd_bare_hex(self):
        with pytest.raises(OddLengthHex):
            tokenize("abc")

    @pytest.mark.parametrize("word", ["hello", "op_dup", "-2", "OP_", "<00"])
    def test_unrecognized(self, word):
        with pytest.raises(UnrecognizedToken):
            tokenize(word)

    def test_error_shows_source_line_and_caret(self):
        with pytest.raises(UnrecognizedToken) as exc_info:
            tokenize("OP_DUP\nOP_DROP hello", "script.asm")
        text = str(exc_info.value)
        assert text.startswith("script.asm:2:9: error: unrecognized token: hello")
        assert "    OP_DROP hello" in text
        assert "            ^" in text
