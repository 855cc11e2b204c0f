"""
Source <-> Bytecode Offset Mapping
==================================

Correlates positions in ASM text with byte offsets in the assembled
program, in both directions:

- **Line table**: for each source line, the byte offset at which that
  line's first token starts. Breakpoints (line numbers) are translated
  through it into byte offsets for the execution engine.

- **PC map**: for each token, its starting byte offset mapped to the
  token's 0-based index in the flattened token stream, plus a sentinel
  at the total program length mapping to the last token. Trace program
  counters are translated through it back to a token to highlight.

Both tables use the assembler's own lexer and encoded lengths, so they
always agree with the bytecode actually produced. Source text that fails
assembly has no mapping; OffsetMap.from_source raises the codec error.

Example:
    >>> offsets = OffsetMap.from_source("OP_DUP\\n<0011>\\nOP_DROP")
    >>> offsets.line_table
    (0, 1, 4)
    >>> offsets.pc_map
    {0: 0, 1: 1, 4: 2, 5: 2}

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional
import logging

from btcscript_sdk.assembler.lexer import Lexer, Token

logger = logging.getLogger(__name__)


# =============================================================================
# Table Construction
# =============================================================================

def _line_tokens(source: str, filename: str = "<asm>") -> list[list[Token]]:
    return Lexer(source, filename).tokenize_lines()


def compute_line_table(source: str) -> list[int]:
    """
    Compute the starting byte offset of every source line.

    Entry ``k - 1`` belongs to line ``k``. A line without tokens records
    the offset at which the next token would start.

    Raises:
        CodecError: If the source does not assemble
    """
    table = []
    cursor = 0
    for tokens in _line_tokens(source):
        table.append(cursor)
        for token in tokens:
            cursor += token.encoded_length
    return table


def compute_pc_token_map(source: str) -> dict[int, int]:
    """
    Map each token's starting byte offset to its token index.

    After the last token, the final cumulative offset maps to
    ``token_count - 1`` (end-of-program sentinel). Empty source gives
    an empty map.

    Raises:
        CodecError: If the source does not assemble
    """
    pc_map: dict[int, int] = {}
    cursor = 0
    index = -1
    for tokens in _line_tokens(source):
        for token in tokens:
            index += 1
            pc_map[cursor] = index
            cursor += token.encoded_length
    if index >= 0:
        pc_map[cursor] = index
    return pc_map


# =============================================================================
# Translation
# =============================================================================

def translate_breakpoints(lines: Iterable[int], line_table: list[int] | tuple[int, ...]) -> list[int]:
    """
    Translate 1-based line numbers to byte offsets, preserving order.

    Lines outside the table are skipped.
    """
    offsets = []
    for line in lines:
        if 1 <= line <= len(line_table):
            offsets.append(line_table[line - 1])
        else:
            logger.debug(f"Breakpoint on line {line} is outside the source, ignored")
    return offsets


def translate_program_counter(pc: int, pc_map: dict[int, int]) -> Optional[int]:
    """Return the token index starting at byte offset ``pc``, or None."""
    return pc_map.get(pc)


# =============================================================================
# Offset Map
# =============================================================================

@dataclass(frozen=True)
class OffsetMap:
    """
    Both offset tables for one version of the source text.

    Instances are immutable; a new one is built for every confirmed edit
    that still assembles.

    Attributes:
        line_table: Starting byte offset of each line (index = line - 1)
        pc_map: Token start offset -> token index, plus the end sentinel
        token_lines: Source line of each token, by token index
        total_length: Size of the assembled program in bytes
    """
    line_table: tuple[int, ...] = ()
    pc_map: dict[int, int] = field(default_factory=dict, hash=False)
    token_lines: tuple[int, ...] = ()
    total_length: int = 0

    @classmethod
    def from_source(cls, source: str, filename: str = "<asm>") -> "OffsetMap":
        """
        Build both tables from ASM text in a single scan.

        Raises:
            CodecError: If the source does not assemble
        """
        line_table = []
        pc_map: dict[int, int] = {}
        token_lines = []
        cursor = 0

        for line_no, tokens in enumerate(_line_tokens(source, filename), start=1):
            line_table.append(cursor)
            for token in tokens:
                pc_map[cursor] = len(token_lines)
                token_lines.append(line_no)
                cursor += token.encoded_length

        if token_lines:
            pc_map[cursor] = len(token_lines) - 1

        logger.debug(
            f"Offset map: {len(line_table)} lines, {len(token_lines)} tokens, {cursor} bytes"
        )
        return cls(
            line_table=tuple(line_table),
            pc_map=pc_map,
            token_lines=tuple(token_lines),
            total_length=cursor,
        )

    @property
    def token_count(self) -> int:
        return len(self.token_lines)

    def breakpoint_offsets(self, lines: Iterable[int]) -> list[int]:
        """Translate breakpoint lines (in the given order) to byte offsets."""
        return translate_breakpoints(lines, self.line_table)

    def token_at(self, pc: int) -> Optional[int]:
        """Token index starting at ``pc``, or None."""
        return translate_program_counter(pc, self.pc_map)

    def line_of_token(self, index: int) -> Optional[int]:
        """Source line (1-based) of the token at ``index``, or None."""
        if 0 <= index < len(self.token_lines):
            return self.token_lines[index]
        return None

    def first_token_offset(self, line: int) -> Optional[int]:
        """
        Smallest pc-map offset whose token is the first token of ``line``.

        None for lines without tokens.
        """
        try:
            first_index = self.token_lines.index(line)
        except ValueError:
            return None
        return min(offset for offset, index in self.pc_map.items() if index == first_index)


def first_token_offsets(source: str) -> list[Optional[int]]:
    """
    For every source line, the pc-map offset of the line's first token.

    Lines without tokens give None. For lines with tokens the result
    equals the line table entry.
    """
    offsets = OffsetMap.from_source(source)
    return [offsets.first_token_offset(line) for line in range(1, len(offsets.line_table) + 1)]
