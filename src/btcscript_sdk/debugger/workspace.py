"""
Script Workspace
================

Owns everything an editor front end keeps about one script: the ASM and
hex texts, the derived export views, status messages, breakpoints, the
last-known-good offset map and the debug session.

Every confirmed edit goes through refresh(), which:

1. Compiles from the active view (ASM -> hex, or hex -> ASM)
2. Renders the export views and the byte count, or records the error
3. Rebuilds the offset map, but only when the source assembles
4. Resets the debug session if the token stream changed

Running is split in two so a front end can issue the engine request on
its own schedule::

    ticket = workspace.begin_run()
    ...                                   # request in flight
    workspace.complete_run(ticket, response)

Only the most recent ticket is applied; older responses are dropped.
run(), step_forward() and step_backward() do the whole round trip
synchronously with an EngineClient.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from enum import Enum
from typing import Optional, Protocol
import logging

from btcscript_sdk.assembler import assemble, asm_to_hex, split_words
from btcscript_sdk.debugger.offsets import OffsetMap
from btcscript_sdk.debugger.session import DebugSession, DebugView
from btcscript_sdk.debugger.trace import RunRequest, RunResponse
from btcscript_sdk.disassembler import bytes_to_asm
from btcscript_sdk.errors import CodecError, EngineError, SessionError
from btcscript_sdk.export import render_exports
from btcscript_sdk.hexutil import byte_count_info, bytes_to_hex, hex_to_bytes
from btcscript_sdk.samples import sample_asm

logger = logging.getLogger(__name__)


class View(Enum):
    """Which editor is the source of truth."""
    ASM = "asm"
    HEX = "hex"


class RunClient(Protocol):
    def run(self, request: RunRequest) -> RunResponse: ...


class Workspace:
    """
    Editor state for a single script.

    Attributes:
        asm: ASM source text
        hex: Lowercase hex of the program
        python: Python list export
        cpp: C/C++ initializer export
        error: Description of the current codec error ("" when none)
        info: Status line (byte count, run outcome or connection notice)
        active_view: The editor edits are compiled from
        breakpoints: Breakpoint line numbers (1-based)
        session: Debug session
        offsets: Offset map of the last source that assembled
    """

    def __init__(self, asm: str = "", hex_text: str = "", active_view: View = View.ASM):
        self.asm = asm
        self.hex = hex_text
        self.python = ""
        self.cpp = ""
        self.error = ""
        self.info = ""
        self.active_view = active_view
        self.breakpoints: set[int] = set()
        self.session = DebugSession.idle()
        self.offsets = OffsetMap()
        self.last_error: Optional[CodecError] = None
        self._ticket = 0
        self._pending: Optional[tuple[int, tuple[str, ...], OffsetMap]] = None
        self.refresh()

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def edit_asm(self, text: str) -> None:
        """Replace the ASM text (makes ASM the active view)."""
        self.asm = text
        self.active_view = View.ASM
        self.refresh()

    def edit_hex(self, text: str) -> None:
        """Replace the hex text (makes HEX the active view)."""
        self.hex = text
        self.active_view = View.HEX
        self.refresh()

    def switch_view(self, view: View) -> None:
        self.active_view = view
        self.refresh()

    def clear(self) -> None:
        """Empty the active editor."""
        if self.active_view is View.ASM:
            self.edit_asm("")
        else:
            self.edit_hex("")

    def load_sample(self, name: str) -> None:
        """
        Load a sample script into the ASM editor.

        Raises:
            KeyError: If there is no such sample
        """
        self.edit_asm(sample_asm(name))

    def refresh(self) -> None:
        """Recompute everything derived from the active editor."""
        try:
            if self.active_view is View.ASM:
                data = assemble(self.asm)
                asm = self.asm
            else:
                data = hex_to_bytes(self.hex)
                asm = self._asm_for(data)
            exports = render_exports(data)
            offsets = OffsetMap.from_source(asm)
        except CodecError as e:
            logger.debug(f"Refresh failed: {e.message}")
            self.error = str(e)
            self.last_error = e
            self.info = ""
        else:
            self.asm = asm
            self.hex = bytes_to_hex(data)
            self.python = exports.python
            self.cpp = exports.cpp
            self.offsets = offsets
            self.error = ""
            self.last_error = None
            self.info = byte_count_info(self.hex)

        self.session = self.session.on_source_changed(split_words(self.asm))

    def _asm_for(self, data: bytes) -> str:
        """ASM to show for ``data``, keeping the current text if it matches."""
        try:
            current = asm_to_hex(self.asm)
        except CodecError:
            current = None
        if current == bytes_to_hex(data):
            return self.asm
        return bytes_to_asm(data) if data else ""

    # -------------------------------------------------------------------------
    # Breakpoints
    # -------------------------------------------------------------------------

    def toggle_breakpoint(self, line: int) -> bool:
        """Toggle a breakpoint; returns True if the line now has one."""
        if line in self.breakpoints:
            self.breakpoints.discard(line)
            return False
        self.breakpoints.add(line)
        return True

    def breakpoint_offsets(self) -> list[int]:
        """Byte offsets of the breakpoints, in line order."""
        return self.offsets.breakpoint_offsets(sorted(self.breakpoints))

    # -------------------------------------------------------------------------
    # Running
    # -------------------------------------------------------------------------

    def run_request(self) -> Optional[RunRequest]:
        """The request for the current program, or None while in error."""
        if self.error:
            return None
        return RunRequest(self.hex, tuple(self.breakpoint_offsets()))

    def begin_run(self) -> Optional[int]:
        """
        Start a run of the current program.

        Returns a ticket to pass to complete_run()/fail_run(), or None if
        the source does not currently assemble. Starting a new run
        supersedes any run still in flight.
        """
        self.refresh()
        if self.error:
            logger.debug("Run refused: source has errors")
            return None
        self._ticket += 1
        self._pending = (self._ticket, tuple(split_words(self.asm)), self.offsets)
        return self._ticket

    def complete_run(self, ticket: int, response: RunResponse, jump_to_end: bool = False) -> bool:
        """
        Load a run response into the session.

        Returns False (and changes nothing) if ``ticket`` is not the
        latest run. If the source changed while the run was in flight,
        the loaded session is reset straight away.
        """
        if self._pending is None or self._pending[0] != ticket:
            logger.debug(f"Dropping response for superseded run {ticket}")
            return False

        _, tokens, offsets = self._pending
        self._pending = None
        self.session = (
            DebugSession.idle()
            .load(response, tokens, offsets, jump_to_end)
            .on_source_changed(split_words(self.asm))
        )
        self.active_view = View.ASM
        self.info = "Success!" if response.succeeded else response.error
        return True

    def fail_run(self, ticket: int, error: Exception) -> bool:
        """Record a connection notice for a failed run; the session is untouched."""
        if self._pending is None or self._pending[0] != ticket:
            return False
        self._pending = None
        logger.warning(f"Run {ticket} failed: {error}")
        self.info = f"Server connection error: {error}"
        return True

    def run(self, client: RunClient, jump_to_end: bool = True) -> bool:
        """
        Run the program on the engine and load the result.

        Returns True if a response was loaded.
        """
        ticket = self.begin_run()
        if ticket is None:
            return False
        try:
            response = client.run(self.run_request())
        except EngineError as e:
            self.fail_run(ticket, e)
            return False
        return self.complete_run(ticket, response, jump_to_end)

    def step_forward(self, client: Optional[RunClient] = None) -> bool:
        """
        Step forward, or start a run at step 1 when no trace is loaded.

        Raises:
            SessionError: If a run is needed but no client was given
        """
        if self.error:
            return False
        if not self.session.has_trace:
            return self._start(client)
        self.session = self.session.step_forward()
        return True

    def step_backward(self, client: Optional[RunClient] = None) -> bool:
        """
        Step backward, or start a run at step 1 when no trace is loaded.

        Raises:
            SessionError: If a run is needed but no client was given
        """
        if self.error:
            return False
        if not self.session.has_trace:
            return self._start(client)
        self.session = self.session.step_backward()
        return True

    def _start(self, client: Optional[RunClient]) -> bool:
        if client is None:
            raise SessionError("no trace loaded and no engine client to request one")
        return self.run(client, jump_to_end=False)

    def view(self) -> DebugView:
        return self.session.view()
