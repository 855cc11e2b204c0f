"""
Unit Tests for the Script Assembler
===================================

Covers token encoding, minimal push selection at every boundary, the
end-to-end P2PKH example and abort-on-first-error behavior.
"""

import pytest

from btcscript_sdk.assembler import (
    ScriptAssembler,
    asm_to_hex,
    assemble,
    normalize_asm,
)
from btcscript_sdk.errors import CodecError, UnknownOpcode, UnrecognizedToken

P2PKH_ASM = (
    "OP_DUP OP_HASH160 <00112233445566778899aabbccddeeff00112233> "
    "OP_EQUALVERIFY OP_CHECKSIG"
)
P2PKH_HEX = "76a91400112233445566778899aabbccddeeff0011223388ac"


# =============================================================================
# Basic Encoding Tests
# =============================================================================

class TestEncoding:
    """Tests for encoding individual token kinds."""

    def test_empty_source(self):
        assert assemble("") == b""
        assert assemble(" \n ") == b""

    def test_small_integers(self):
        """-1 0 1 16 encode to OP_1NEGATE OP_0 OP_1 OP_16."""
        assert assemble("-1 0 1 16") == bytes([0x4F, 0x00, 0x51, 0x60])

    def test_opcodes(self):
        assert assemble("OP_DUP OP_CHECKSIG") == bytes([0x76, 0xAC])

    def test_alias(self):
        assert assemble("OP_FALSE OP_TRUE") == bytes([0x00, 0x51])

    def test_bracketed_push(self):
        assert assemble("<aabbcc>") == bytes([0x03, 0xAA, 0xBB, 0xCC])

    def test_bare_hex_push(self):
        """Bare hex is an implicit data push, identical to the bracketed form."""
        assert assemble("aabbcc") == assemble("<aabbcc>")

    def test_uppercase_hex_data(self):
        assert assemble("<AABB>") == bytes([0x02, 0xAA, 0xBB])

    def test_whitespace_variants(self):
        """Any whitespace separates tokens."""
        assert assemble("OP_DUP\tOP_DROP\n\n  OP_NOP") == bytes([0x76, 0x75, 0x61])

    def test_end_to_end_p2pkh(self):
        assert asm_to_hex(P2PKH_ASM) == P2PKH_HEX


# =============================================================================
# Push Boundary Tests
# =============================================================================

class TestPushBoundaries:
    """The shortest prefix form is always chosen."""

    @pytest.mark.parametrize("length,prefix", [
        (75, bytes([75])),
        (76, bytes([0x4C, 76])),
        (255, bytes([0x4C, 0xFF])),
        (256, bytes([0x4D, 0x00, 0x01])),
        (65535, bytes([0x4D, 0xFF, 0xFF])),
        (65536, bytes([0x4E, 0x00, 0x00, 0x01, 0x00])),
    ])
    def test_prefix_form(self, length, prefix):
        payload = bytes(range(256)) * (length // 256) + bytes(range(length % 256))
        code = assemble(f"<{payload.hex()}>")
        assert code == prefix + payload


# =============================================================================
# Error Handling Tests
# =============================================================================

class TestErrors:
    """The first bad token aborts the whole call."""

    def test_unknown_opcode(self):
        with pytest.raises(UnknownOpcode):
            assemble("OP_DUP OP_NOTREAL")

    def test_no_partial_output(self):
        """A failure after valid tokens still yields no bytes."""
        assembler = ScriptAssembler()
        with pytest.raises(CodecError):
            assembler.assemble("OP_DUP OP_DUP garbage!")

    def test_filename_in_location(self):
        with pytest.raises(UnrecognizedToken) as exc_info:
            ScriptAssembler("lock.asm").assemble("what")
        assert exc_info.value.location.filename == "lock.asm"

    def test_assemble_file(self, tmp_path):
        source = tmp_path / "p2pkh.asm"
        source.write_text(P2PKH_ASM + "\n")
        assert ScriptAssembler().assemble_file(source).hex() == P2PKH_HEX

    def test_assemble_file_error_names_file(self, tmp_path):
        source = tmp_path / "bad.asm"
        source.write_text("OP_DUP\nOP_BAD\n")
        with pytest.raises(UnknownOpcode) as exc_info:
            ScriptAssembler().assemble_file(source)
        assert exc_info.value.location.filename == str(source)
        assert exc_info.value.location.line == 2


class TestNormalize:
    """Tests for whitespace normalization."""

    def test_one_token_per_line(self):
        assert normalize_asm("  OP_DUP   OP_DROP\n\n1 ") == "OP_DUP\nOP_DROP\n1"

    def test_empty(self):
        assert normalize_asm(" \n ") == ""
