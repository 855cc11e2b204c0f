"""
Bitcoin Script SDK - Script Codec and Debugger Toolkit
======================================================

This package provides the tooling behind a Bitcoin Script editor and
step-through debugger: a two-way codec between human-readable script
assembly (ASM) and script bytecode, export views, and the bookkeeping
needed to drive an external execution engine.

Main Components
---------------
- **assembler**: ASM -> bytecode (btcasm)
    Opcode table, lexer and minimal push encoding

- **disassembler**: bytecode -> canonical ASM (btcdisasm)

- **export**: Python list and C/C++ initializer views of a script

- **debugger**: Offset mapping, run protocol, session state machine and
  the editor workspace (btcdbg)

- **engine**: HTTP client for the external execution engine

Quick Start
-----------
Assemble and disassemble:
    >>> from btcscript_sdk import asm_to_hex, hex_to_asm
    >>> asm_to_hex("OP_DUP OP_HASH160")
    '76a9'
    >>> print(hex_to_asm("76a9"))
    OP_DUP
    OP_HASH160

Step through a run:
    >>> from btcscript_sdk import EngineClient, Workspace
    >>> ws = Workspace("1 OP_DUP OP_ADD")
    >>> ws.step_forward(EngineClient())       # doctest: +SKIP
    >>> ws.view().stack_text                  # doctest: +SKIP

Or use the command-line tools:
    $ btcasm -e "OP_DUP OP_HASH160"
    $ btcdisasm -x 76a988ac
    $ btcdbg run script.asm --steps
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from btcscript_sdk.assembler import (
    OPCODES,
    PushForm,
    ScriptAssembler,
    asm_to_hex,
    assemble,
    normalize_asm,
)
from btcscript_sdk.disassembler import (
    ScriptDisassembler,
    bytes_to_asm,
    hex_to_asm,
)
from btcscript_sdk.export import (
    ExportBundle,
    asm_to_python,
    bytes_to_cpp,
    hex_to_cpp,
    render_exports,
)
from btcscript_sdk.hexutil import bytes_to_hex, clean_hex, hex_to_bytes
from btcscript_sdk.config import EngineConfig
from btcscript_sdk.debugger import (
    DebugSession,
    DebugView,
    OffsetMap,
    RunRequest,
    RunResponse,
    RunStatus,
    SessionState,
    TerminalStatus,
    TraceStep,
    View,
    Workspace,
    translate_breakpoints,
    translate_program_counter,
)
from btcscript_sdk.engine import EngineClient
from btcscript_sdk.errors import (
    ScriptSDKError,
    SourceLocation,
    CodecError,
    InvalidHexFormat,
    OddLengthHex,
    InvalidHexData,
    UnknownOpcode,
    UnrecognizedToken,
    UnknownOpcodeByte,
    TruncatedPush,
    SessionError,
    EngineError,
    EngineConnectionError,
    EngineProtocolError,
)

__all__ = [
    # Version info
    "__version__",
    # Codec
    "OPCODES",
    "PushForm",
    "ScriptAssembler",
    "assemble",
    "asm_to_hex",
    "normalize_asm",
    "ScriptDisassembler",
    "bytes_to_asm",
    "hex_to_asm",
    "bytes_to_hex",
    "clean_hex",
    "hex_to_bytes",
    # Export
    "ExportBundle",
    "asm_to_python",
    "bytes_to_cpp",
    "hex_to_cpp",
    "render_exports",
    # Debugger
    "DebugSession",
    "DebugView",
    "OffsetMap",
    "RunRequest",
    "RunResponse",
    "RunStatus",
    "SessionState",
    "TerminalStatus",
    "TraceStep",
    "View",
    "Workspace",
    "translate_breakpoints",
    "translate_program_counter",
    # Engine
    "EngineConfig",
    "EngineClient",
    # Exception hierarchy
    "ScriptSDKError",
    "SourceLocation",
    "CodecError",
    "InvalidHexFormat",
    "OddLengthHex",
    "InvalidHexData",
    "UnknownOpcode",
    "UnrecognizedToken",
    "UnknownOpcodeByte",
    "TruncatedPush",
    "SessionError",
    "EngineError",
    "EngineConnectionError",
    "EngineProtocolError",
]
