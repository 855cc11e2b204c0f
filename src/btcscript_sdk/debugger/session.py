"""
Debug Session State Machine
===========================

Tracks the position within a received execution trace and derives what
a debugger front end shows at each step.

States
------
::

    IDLE ──load──> ACTIVE ──step_forward (reaches end)──> TERMINAL
      ^    └────────load (empty trace / jump to end)────────┘  │
      └──────────────── on_source_changed ─────────────────────┘

- **IDLE**: no trace. Step index 0, nothing highlighted.
- **ACTIVE**: ``1 <= step < len(trace)``.
- **TERMINAL**: ``step == len(trace)``, tagged with the run status.

Every transition returns a new DebugSession; instances are never
mutated. The step index always stays within ``[0, len(trace)]``.

Usage:
    session = DebugSession.idle().load(response, tokens, offsets)
    session = session.step_forward()
    view = session.view()
    print(view.highlight_token, view.stack_text)

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional, Sequence
import logging

from btcscript_sdk.debugger.offsets import OffsetMap
from btcscript_sdk.debugger.trace import RunResponse, RunStatus, TraceStep

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = auto()
    ACTIVE = auto()
    TERMINAL = auto()


class TerminalStatus(Enum):
    """Outcome shown once the session reaches the end of its trace."""
    NONE = "none"
    SUCCESS = "success"
    ERROR = "error"


# =============================================================================
# Derived View
# =============================================================================

@dataclass(frozen=True)
class DebugView:
    """
    Everything a front end displays for one session position.

    Attributes:
        state: Session state
        step: Current step index (0 = not started)
        program_counter: Byte offset reported by the current step, or None
        token_index: 0-based index of the token at program_counter, or None
        highlight_token: Highlight index. While ACTIVE this is
            ``token_index + 1`` (1-based, "about to execute"); in TERMINAL
            it is ``token_index`` itself. 0 means nothing to highlight.
        highlight_line: Source line to highlight, or None
        stack_text: Main stack joined with newlines
        altstack_text: Alt stack joined with newlines
        terminal_status: SUCCESS/ERROR in TERMINAL, NONE otherwise
        error_detail: Engine error string when terminal_status is ERROR
    """
    state: SessionState
    step: int = 0
    program_counter: Optional[int] = None
    token_index: Optional[int] = None
    highlight_token: int = 0
    highlight_line: Optional[int] = None
    stack_text: str = ""
    altstack_text: str = ""
    terminal_status: TerminalStatus = TerminalStatus.NONE
    error_detail: str = ""


# =============================================================================
# Session
# =============================================================================

@dataclass(frozen=True)
class DebugSession:
    """
    Immutable debug session value.

    Attributes:
        trace: Execution steps, or None while IDLE
        current_step: Step index in ``[0, len(trace)]``
        status: Overall run status reported with the trace
        error_detail: Engine error string for failed runs
        tokens: Source words recorded when the trace was loaded
        offsets: Offset map of the source the trace belongs to
    """
    trace: Optional[tuple[TraceStep, ...]] = None
    current_step: int = 0
    status: Optional[RunStatus] = None
    error_detail: str = ""
    tokens: tuple[str, ...] = ()
    offsets: Optional[OffsetMap] = None

    @classmethod
    def idle(cls) -> "DebugSession":
        return cls()

    # -------------------------------------------------------------------------
    # State queries
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        if self.trace is None:
            return SessionState.IDLE
        if self.current_step >= len(self.trace):
            return SessionState.TERMINAL
        return SessionState.ACTIVE

    @property
    def has_trace(self) -> bool:
        return self.trace is not None

    @property
    def trace_length(self) -> int:
        return len(self.trace) if self.trace is not None else 0

    @property
    def terminal_status(self) -> TerminalStatus:
        if self.state is not SessionState.TERMINAL:
            return TerminalStatus.NONE
        if self.status is RunStatus.SUCCESS:
            return TerminalStatus.SUCCESS
        return TerminalStatus.ERROR

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def load(
        self,
        response: RunResponse,
        tokens: Sequence[str],
        offsets: Optional[OffsetMap],
        jump_to_end: bool = False,
    ) -> "DebugSession":
        """
        Replace the session wholesale with a freshly received trace.

        The step starts at 1, or at the end of the trace when
        ``jump_to_end`` is set. An empty trace loads straight into
        TERMINAL.
        """
        length = len(response.trace)
        step = length if jump_to_end else min(1, length)
        session = DebugSession(
            trace=response.trace,
            current_step=step,
            status=response.status,
            error_detail=response.error,
            tokens=tuple(tokens),
            offsets=offsets,
        )
        logger.debug(
            f"Loaded trace: {length} steps, status {response.status.value}, "
            f"step {step} ({session.state.name})"
        )
        return session

    def step_forward(self) -> "DebugSession":
        """Advance one step, clamped at the end of the trace."""
        if self.trace is None:
            return self
        step = min(self.current_step + 1, len(self.trace))
        if step == self.current_step:
            return self
        session = replace(self, current_step=step)
        if session.state is SessionState.TERMINAL:
            logger.info(f"Reached end of trace: {session.terminal_status.value}")
        return session

    def step_backward(self) -> "DebugSession":
        """Go back one step, never below step 1 once a trace exists."""
        if self.trace is None:
            return self
        step = max(self.current_step - 1, min(1, len(self.trace)))
        if step == self.current_step:
            return self
        return replace(self, current_step=step)

    def on_source_changed(self, tokens: Sequence[str]) -> "DebugSession":
        """Return to IDLE if the token stream differs from the loaded one."""
        if self.trace is None or tuple(tokens) == self.tokens:
            return self
        logger.debug("Source tokens changed, debug session reset")
        return DebugSession.idle()

    # -------------------------------------------------------------------------
    # View derivation
    # -------------------------------------------------------------------------

    def view(self) -> DebugView:
        """Derive highlight, stacks and status for the current step."""
        state = self.state
        if self.trace is None:
            return DebugView(state=state)

        terminal_status = self.terminal_status
        error_detail = self.error_detail if terminal_status is TerminalStatus.ERROR else ""

        if self.current_step == 0:
            return DebugView(
                state=state,
                terminal_status=terminal_status,
                error_detail=error_detail,
            )

        record = self.trace[self.current_step - 1]
        token_index = self.offsets.token_at(record.pc) if self.offsets else None

        highlight_token = 0
        highlight_line = None
        if token_index is not None:
            highlight_line = self.offsets.line_of_token(token_index)
            if state is SessionState.TERMINAL:
                highlight_token = token_index
            else:
                highlight_token = token_index + 1

        return DebugView(
            state=state,
            step=self.current_step,
            program_counter=record.pc,
            token_index=token_index,
            highlight_token=highlight_token,
            highlight_line=highlight_line,
            stack_text=record.stack_text,
            altstack_text=record.altstack_text,
            terminal_status=terminal_status,
            error_detail=error_detail,
        )
