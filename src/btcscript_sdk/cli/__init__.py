"""
Bitcoin Script SDK Command-Line Interface
=========================================

This package provides command-line tools for the Bitcoin Script SDK:

- **btcasm**: ASM assembler with export formats
- **btcdisasm**: Bytecode disassembler
- **btcdbg**: Offset tables and engine-driven step-through debugging

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["btcasm", "btcdisasm", "btcdbg"]
