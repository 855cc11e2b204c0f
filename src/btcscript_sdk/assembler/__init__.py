"""
Bitcoin Script Assembler
========================

This package converts human-readable script assembly ("ASM") into the
canonical script bytecode.

Main Components
---------------
- **opcodes**: The fixed opcode table and push-encoding rules
- **lexer**: Splits ASM text into classified tokens with source locations
- **assembler**: Encodes token streams into bytecode

Example Usage
-------------
>>> from btcscript_sdk.assembler import assemble
>>> assemble("-1 0 1 16").hex()
'4f005160'

Supported Syntax
----------------
- Opcode mnemonics: OP_DUP, OP_CHECKSIG, ... (upper case)
- Small integers: -1, 0 .. 16
- Data pushes: <hex> or bare even-length hex
"""

from btcscript_sdk.assembler.assembler import (
    ScriptAssembler,
    asm_to_hex,
    assemble,
    encode_token,
    normalize_asm,
)
from btcscript_sdk.assembler.lexer import Lexer, Token, TokenKind, split_words, tokenize
from btcscript_sdk.assembler.opcodes import (
    MAX_INLINE_PUSH,
    OPCODE_LIST,
    OPCODES,
    OpcodeTable,
    PushForm,
    byte_to_name,
    name_to_byte,
    push_prefix,
    push_size,
)

__all__ = [
    # Assembler
    "ScriptAssembler",
    "assemble",
    "asm_to_hex",
    "encode_token",
    "normalize_asm",
    # Lexer
    "Lexer",
    "Token",
    "TokenKind",
    "split_words",
    "tokenize",
    # Opcodes
    "MAX_INLINE_PUSH",
    "OPCODE_LIST",
    "OPCODES",
    "OpcodeTable",
    "PushForm",
    "byte_to_name",
    "name_to_byte",
    "push_prefix",
    "push_size",
]
