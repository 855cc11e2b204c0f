"""
Bitcoin Script Disassembler
===========================

Decodes script bytecode back into canonical ASM, one token per line.

Usage:
    from btcscript_sdk.disassembler import ScriptDisassembler, hex_to_asm

    print(hex_to_asm("76a914" + "00" * 20 + "88ac"))

    disasm = ScriptDisassembler()
    for instr in disasm.disassemble(code):
        print(instr.offset, instr.token)

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from .script import (
    DisassembledInstruction,
    ScriptDisassembler,
    bytes_to_asm,
    canonical_tokens,
    hex_to_asm,
)

__all__ = [
    "DisassembledInstruction",
    "ScriptDisassembler",
    "bytes_to_asm",
    "canonical_tokens",
    "hex_to_asm",
]
