"""
Script Disassembler
===================

Walks script bytecode with a single forward cursor and reconstructs the
canonical ASM token stream, one instruction at a time:

| Byte(s)                      | Token                      |
|------------------------------|----------------------------|
| 0x01-0x4B + N data bytes     | <hex>                      |
| OP_PUSHDATA1/2/4 + len + data| <hex>                      |
| OP_PUSHDATA1/2/4 + zero len  | 0                          |
| OP_0                         | 0                          |
| OP_1NEGATE                   | -1                         |
| OP_1 .. OP_16                | 1 .. 16                    |
| any other table opcode       | its canonical mnemonic     |
| anything else                | UnknownOpcodeByte (error)  |

The canonical ASM (tokens joined by newlines) is not required to equal a
hand-written input: alias spellings collapse to the first-declared name
and push prefixes are re-minimized when reassembled. After one pass the
form is a fixed point of assemble/disassemble.

Usage:
    disasm = ScriptDisassembler()
    for instr in disasm.disassemble(bytes.fromhex("76a988ac")):
        print(instr)

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from typing import Optional
import logging

from btcscript_sdk.assembler.opcodes import (
    OP_0,
    OP_1,
    OP_16,
    OP_1NEGATE,
    OPCODES,
    OpcodeTable,
    PushForm,
)
from btcscript_sdk.errors import CodecError, TruncatedPush, UnknownOpcodeByte
from btcscript_sdk.hexutil import bytes_to_hex, hex_to_bytes

logger = logging.getLogger(__name__)


# =============================================================================
# Data Structures
# =============================================================================

@dataclass(frozen=True)
class DisassembledInstruction:
    """
    A single decoded script instruction.

    Attributes:
        offset: Byte offset of the instruction in the bytecode
        opcode: The opcode byte
        token: Canonical ASM token
        size: Total instruction size in bytes (prefix and data included)
        raw_bytes: All bytes comprising this instruction
        push_form: Prefix form for data pushes, None otherwise
        data: Push payload (empty for non-push instructions)
    """
    offset: int
    opcode: int
    token: str
    size: int
    raw_bytes: bytes
    push_form: Optional[PushForm] = None
    data: bytes = b""

    @property
    def is_push(self) -> bool:
        return self.push_form is not None

    def __str__(self) -> str:
        """Format as listing line: OFFSET: BYTES  TOKEN"""
        hex_bytes = bytes_to_hex(self.raw_bytes)
        if len(hex_bytes) > 16:
            hex_bytes = hex_bytes[:14] + ".."
        return f"{self.offset:04x}: {hex_bytes:<16}  {self.token}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "offset": self.offset,
            "opcode": f"0x{self.opcode:02x}",
            "token": self.token,
            "size": self.size,
            "push_form": self.push_form.name if self.push_form else None,
            "bytes": bytes_to_hex(self.raw_bytes),
        }


# =============================================================================
# Script Disassembler
# =============================================================================

class ScriptDisassembler:
    """
    Disassembler for script bytecode.

    Decoding is strict: a truncated push or a byte with no opcode table
    entry aborts the whole call. Callers never see a half-decoded script.

    Attributes:
        filename: Name used in error locations ("<hex>" by default)
    """

    def __init__(self, filename: str = "<hex>", table: OpcodeTable = OPCODES):
        self.filename = filename
        self._table = table

    def disassemble_one(self, data: bytes, offset: int = 0) -> DisassembledInstruction:
        """
        Decode the instruction starting at ``offset``.

        Raises:
            ValueError: If offset is outside the data
            TruncatedPush: If a push runs past the end of the data
            UnknownOpcodeByte: If the byte is not a known opcode
        """
        if not 0 <= offset < len(data):
            raise ValueError(f"Offset {offset} beyond data length {len(data)}")

        opcode = data[offset]
        form = PushForm.from_opcode(opcode)

        if form is not None:
            return self._decode_push(data, offset, opcode, form)

        if opcode == OP_0:
            token = "0"
        elif opcode == OP_1NEGATE:
            token = "-1"
        elif OP_1 <= opcode <= OP_16:
            token = str(opcode - OP_1 + 1)
        else:
            name = self._table.byte_to_name(opcode)
            if name is None:
                raise UnknownOpcodeByte(opcode, offset, self.filename)
            token = name

        return DisassembledInstruction(
            offset=offset,
            opcode=opcode,
            token=token,
            size=1,
            raw_bytes=bytes(data[offset:offset + 1]),
        )

    def _decode_push(
        self,
        data: bytes,
        offset: int,
        opcode: int,
        form: PushForm,
    ) -> DisassembledInstruction:
        """Decode a push in any of its four prefix forms."""
        cursor = offset + 1

        if form is PushForm.INLINE:
            length = opcode
        else:
            field = data[cursor:cursor + form.length_size]
            if len(field) != form.length_size:
                raise TruncatedPush(form, offset, form.length_size, len(field), self.filename)
            length = int.from_bytes(field, "little")
            cursor += form.length_size

        payload = data[cursor:cursor + length]
        if len(payload) != length:
            raise TruncatedPush(form, offset, length, len(payload), self.filename)

        # An empty PUSHDATA has no <hex> spelling; it pushes what OP_0 pushes.
        end = cursor + length
        return DisassembledInstruction(
            offset=offset,
            opcode=opcode,
            token=f"<{bytes_to_hex(payload)}>" if payload else "0",
            size=end - offset,
            raw_bytes=bytes(data[offset:end]),
            push_form=form,
            data=bytes(payload),
        )

    def disassemble(self, data: bytes) -> list[DisassembledInstruction]:
        """
        Decode every instruction in ``data``.

        Raises:
            CodecError: On the first truncated push or unknown byte
        """
        instructions = []
        offset = 0

        try:
            while offset < len(data):
                instr = self.disassemble_one(data, offset)
                instructions.append(instr)
                offset += instr.size
        except CodecError as e:
            logger.debug(f"Disassembly failed: {e.message}")
            raise

        return instructions


# =============================================================================
# Convenience Functions
# =============================================================================

def bytes_to_asm(data: bytes) -> str:
    """Disassemble bytecode to canonical ASM, one token per line."""
    return "\n".join(instr.token for instr in ScriptDisassembler().disassemble(data))


def hex_to_asm(hex_text: str) -> str:
    """Disassemble a hex string to canonical ASM ("" for empty input)."""
    data = hex_to_bytes(hex_text)
    if not data:
        return ""
    return bytes_to_asm(data)


def canonical_tokens(data: bytes) -> list[str]:
    """Return the canonical token stream of ``data``."""
    return [instr.token for instr in ScriptDisassembler().disassemble(data)]
