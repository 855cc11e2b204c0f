"""
Script Assembly Lexer
=====================

This module converts ASM text into a stream of classified tokens.

Tokens are whitespace-separated words; there are no comments, operators
or multi-word constructs. Each word is classified by the first rule that
matches, in this priority order:

| Priority | Form                   | Kind        | Example          |
|----------|------------------------|-------------|------------------|
| 1        | <hex digits>           | DATA        | <0011aabb>       |
| 2        | -1                     | SMALL_INT   | -1               |
| 3        | 0, 1..16 (decimal)     | SMALL_INT   | 16               |
| 4        | OP_[A-Z0-9_]+          | OPCODE      | OP_CHECKSIG      |
| 5        | even-length hex digits | BARE_HEX    | 0011aabb         |

Anything else is rejected with UnrecognizedToken. Malformed tokens of a
known shape get a more specific error (InvalidHexData for a bad <...>,
UnknownOpcode for an OP_* name not in the table, OddLengthHex for bare
hex with an odd digit count).

Example
-------
>>> from btcscript_sdk.assembler.lexer import Lexer
>>> for token in Lexer("OP_DUP <00ff>\\n16").tokenize():
...     print(token)
Token(OPCODE, 'OP_DUP', 1:1)
Token(DATA, '<00ff>', 1:8)
Token(SMALL_INT, '16', 2:1)
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator
import re

from btcscript_sdk.assembler.opcodes import OPCODES, OP_0, OP_1, OP_1NEGATE, OpcodeTable, push_size
from btcscript_sdk.errors import (
    InvalidHexData,
    OddLengthHex,
    SourceLocation,
    UnknownOpcode,
    UnrecognizedToken,
)
from btcscript_sdk.hexutil import is_hex


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """Lexical category of an ASM token."""
    DATA = auto()       # <hex> data push
    SMALL_INT = auto()  # -1, 0..16
    OPCODE = auto()     # OP_* mnemonic
    BARE_HEX = auto()   # hex digits without brackets, an implicit push

    @property
    def is_push(self) -> bool:
        """True for the two data-push kinds."""
        return self in (TokenKind.DATA, TokenKind.BARE_HEX)


_WORD_RE = re.compile(r"\S+")
_BRACKET_RE = re.compile(r"<(.*)>", re.DOTALL)
_SMALL_INT_RE = re.compile(r"0|1[0-6]?|[1-9]")
_MNEMONIC_RE = re.compile(r"OP_[A-Z0-9_]+")


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single classified ASM token.

    Attributes:
        kind: The TokenKind classification
        text: The token exactly as written
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source (for error reporting)
        opcode: Opcode byte for OPCODE and SMALL_INT tokens, None for pushes
        data: Payload bytes for DATA and BARE_HEX tokens, empty otherwise
    """
    kind: TokenKind
    text: str
    line: int
    column: int
    filename: str = "<asm>"
    opcode: int | None = None
    data: bytes = field(default=b"", repr=False)

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    @property
    def encoded_length(self) -> int:
        """Number of bytes this token assembles to."""
        if self.kind.is_push:
            return push_size(len(self.data))
        return 1


def split_words(source: str) -> list[str]:
    """
    Split ASM text into raw words without classifying them.

    This is the token stream compared between edits to decide whether
    a debug session is still valid.
    """
    return _WORD_RE.findall(source)


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes script ASM source.

    Usage:
        lexer = Lexer(source_text, "<asm>")
        tokens = list(lexer.tokenize())

    The first malformed token aborts tokenization with a CodecError that
    carries its line, column and source line.

    Attributes:
        source: The source text being tokenized
        filename: Name of the source (for error reporting)
    """

    def __init__(self, source: str, filename: str = "<asm>", table: OpcodeTable = OPCODES):
        self.source = source
        self.filename = filename
        self._table = table

    def tokenize(self) -> Iterator[Token]:
        """Yield tokens in source order."""
        for line_no, line_text in enumerate(self.source.split("\n"), start=1):
            for match in _WORD_RE.finditer(line_text):
                yield self._classify(match.group(), line_no, match.start() + 1, line_text)

    def tokenize_lines(self) -> list[list[Token]]:
        """Return the tokens of each source line, one list per line."""
        lines: list[list[Token]] = []
        for line_no, line_text in enumerate(self.source.split("\n"), start=1):
            lines.append([
                self._classify(match.group(), line_no, match.start() + 1, line_text)
                for match in _WORD_RE.finditer(line_text)
            ])
        return lines

    def _classify(self, word: str, line: int, column: int, line_text: str) -> Token:
        """Classify one word, or raise the matching CodecError."""
        location = SourceLocation(self.filename, line, column)

        # 1. <hex> data push
        bracket = _BRACKET_RE.fullmatch(word)
        if bracket:
            digits = bracket.group(1)
            if not digits or not is_hex(digits) or len(digits) % 2 != 0:
                raise InvalidHexData(word, location=location, source_line=line_text)
            return Token(TokenKind.DATA, word, line, column, self.filename,
                         data=bytes.fromhex(digits))

        # 2. -1
        if word == "-1":
            return Token(TokenKind.SMALL_INT, word, line, column, self.filename,
                         opcode=OP_1NEGATE)

        # 3. 0, 1..16
        if _SMALL_INT_RE.fullmatch(word):
            n = int(word)
            opcode = OP_0 if n == 0 else OP_1 + (n - 1)
            return Token(TokenKind.SMALL_INT, word, line, column, self.filename,
                         opcode=opcode)

        # 4. OP_* mnemonic
        if _MNEMONIC_RE.fullmatch(word):
            try:
                opcode = self._table.name_to_byte(word)
            except UnknownOpcode as e:
                raise UnknownOpcode(
                    word, location=location, source_line=line_text, similar=e.similar
                ) from None
            return Token(TokenKind.OPCODE, word, line, column, self.filename,
                         opcode=opcode)

        # 5. Bare hex, an implicit data push
        if is_hex(word):
            if len(word) % 2 != 0:
                raise OddLengthHex(word, location=location, source_line=line_text)
            return Token(TokenKind.BARE_HEX, word, line, column, self.filename,
                         data=bytes.fromhex(word))

        raise UnrecognizedToken(word, location=location, source_line=line_text)


def tokenize(source: str, filename: str = "<asm>") -> list[Token]:
    """Convenience function returning all tokens of ``source``."""
    return list(Lexer(source, filename).tokenize())


