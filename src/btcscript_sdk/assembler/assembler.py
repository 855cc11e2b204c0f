"""
Script Assembler
================

Converts ASM text into canonical script bytecode.

Each token is encoded independently and in order:

- OPCODE tokens emit their table byte
- SMALL_INT tokens emit OP_1NEGATE, OP_0 or OP_1..OP_16
- DATA and BARE_HEX tokens emit the minimal push prefix plus payload

There is no reordering or optimization beyond the choice of push prefix.
The first invalid token aborts the whole call; no partial output is
returned.

Example
-------
>>> from btcscript_sdk.assembler import asm_to_hex
>>> asm_to_hex("OP_DUP OP_HASH160 <00112233445566778899aabbccddeeff00112233> "
...            "OP_EQUALVERIFY OP_CHECKSIG")
'76a91400112233445566778899aabbccddeeff0011223388ac'
"""

import logging
import re
from pathlib import Path

from btcscript_sdk.assembler.lexer import Lexer, Token
from btcscript_sdk.assembler.opcodes import OPCODES, OpcodeTable, push_prefix
from btcscript_sdk.errors import CodecError
from btcscript_sdk.hexutil import bytes_to_hex

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def encode_token(token: Token) -> bytes:
    """Return the bytes a single classified token assembles to."""
    if token.kind.is_push:
        return push_prefix(len(token.data)) + token.data
    return bytes([token.opcode])


class ScriptAssembler:
    """
    Assembler for Bitcoin script ASM.

    The assembler is stateless apart from its opcode table and the
    filename used in diagnostics, so one instance can be reused.

    Attributes:
        filename: Source name used in error locations
    """

    def __init__(self, filename: str = "<asm>", table: OpcodeTable = OPCODES):
        self.filename = filename
        self._table = table

    def tokenize(self, source: str) -> list[Token]:
        """Classify all tokens of ``source`` (raises on the first bad one)."""
        return list(Lexer(source, self.filename, self._table).tokenize())

    def assemble(self, source: str) -> bytes:
        """
        Assemble ASM text into bytecode.

        Args:
            source: Whitespace-separated ASM tokens

        Returns:
            The concatenated bytecode

        Raises:
            CodecError: On the first token that cannot be encoded
        """
        out = bytearray()
        try:
            for token in Lexer(source, self.filename, self._table).tokenize():
                out += encode_token(token)
        except CodecError as e:
            logger.debug(f"Assembly failed: {e.message}")
            raise

        return bytes(out)

    def assemble_file(self, filepath: str | Path) -> bytes:
        """
        Assemble the contents of an ASM file.

        Raises:
            CodecError: If assembly fails
            FileNotFoundError: If the file does not exist
        """
        filepath = Path(filepath)
        source = filepath.read_text(encoding="utf-8")
        return ScriptAssembler(str(filepath), self._table).assemble(source)


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<asm>") -> bytes:
    """Assemble ASM text into bytecode."""
    return ScriptAssembler(filename).assemble(source)


def asm_to_hex(source: str, filename: str = "<asm>") -> str:
    """Assemble ASM text and return lowercase hex."""
    return bytes_to_hex(assemble(source, filename))


def normalize_asm(source: str) -> str:
    """
    Collapse whitespace runs to single newlines, one token per line.

    Two ASM texts with the same token sequence normalize identically.
    """
    return _WHITESPACE_RE.sub("\n", source.strip())
