"""
Export Renderers
================

Read-only projections of a script into other textual notations:

- **Python list**: the canonical token stream as a list literal, data
  pushes rendered as ``0x``-prefixed hex numbers

      [OP_DUP, OP_HASH160, 0x0011..33, OP_EQUALVERIFY, OP_CHECKSIG]

- **C/C++ initializer**: the raw bytes as a brace initializer

      {0x76, 0xa9, 0x14, ...}

Both views are regenerated from the bytecode whenever the source
changes. They never feed back into the assembler.
"""

from dataclasses import dataclass

from btcscript_sdk.assembler import assemble
from btcscript_sdk.disassembler import canonical_tokens
from btcscript_sdk.hexutil import hex_to_bytes


def tokens_to_python(tokens: list[str]) -> str:
    """Render a canonical token stream as a Python list literal."""
    terms = []
    for token in tokens:
        if token.startswith("<") and token.endswith(">"):
            terms.append(f"0x{token[1:-1]}")
        else:
            terms.append(token)
    return "[" + ", ".join(terms) + "]"


def bytes_to_python(data: bytes) -> str:
    """Disassemble ``data`` and render the Python list view."""
    return tokens_to_python(canonical_tokens(data))


def asm_to_python(asm: str) -> str:
    """
    Render ASM text as a Python list literal.

    The text is assembled and disassembled first, so the listing always
    shows canonical tokens (aliases collapsed, bare hex bracketed).
    """
    return bytes_to_python(assemble(asm))


def bytes_to_cpp(data: bytes) -> str:
    """Render bytes as a brace initializer ("" for empty input)."""
    if not data:
        return ""
    return "{" + ", ".join(f"0x{b:02x}" for b in data) + "}"


def hex_to_cpp(hex_text: str) -> str:
    """Render a hex string as a brace initializer ("" for empty input)."""
    return bytes_to_cpp(hex_to_bytes(hex_text))


@dataclass(frozen=True)
class ExportBundle:
    """Both export views of one bytecode."""
    python: str
    cpp: str


def render_exports(data: bytes) -> ExportBundle:
    """Render every export view of ``data``."""
    return ExportBundle(python=bytes_to_python(data), cpp=bytes_to_cpp(data))
