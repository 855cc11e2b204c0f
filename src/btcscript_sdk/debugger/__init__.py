"""
Script Debugger Support
=======================

Everything between the codec and an external execution engine:

- **offsets**: source line <-> byte offset <-> token index tables
- **trace**: run request/response types exchanged with the engine
- **session**: the immutable step-through state machine
- **workspace**: editor state tying the codec, offsets and session together

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from btcscript_sdk.debugger.offsets import (
    OffsetMap,
    compute_line_table,
    compute_pc_token_map,
    first_token_offsets,
    translate_breakpoints,
    translate_program_counter,
)
from btcscript_sdk.debugger.session import (
    DebugSession,
    DebugView,
    SessionState,
    TerminalStatus,
)
from btcscript_sdk.debugger.trace import RunRequest, RunResponse, RunStatus, TraceStep
from btcscript_sdk.debugger.workspace import View, Workspace

__all__ = [
    # Offsets
    "OffsetMap",
    "compute_line_table",
    "compute_pc_token_map",
    "first_token_offsets",
    "translate_breakpoints",
    "translate_program_counter",
    # Session
    "DebugSession",
    "DebugView",
    "SessionState",
    "TerminalStatus",
    # Trace
    "RunRequest",
    "RunResponse",
    "RunStatus",
    "TraceStep",
    # Workspace
    "View",
    "Workspace",
]
