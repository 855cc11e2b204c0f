"""
Unit Tests for the Script Workspace
===================================

Test coverage includes:
- Compiling from the ASM and HEX views
- Last-known-good offsets while the source has errors
- Session reset on edits
- Run tickets (last request wins) and connection failures
- Step actions that start a run
"""

import pytest

from btcscript_sdk.debugger.session import SessionState, TerminalStatus
from btcscript_sdk.debugger.trace import RunRequest, RunResponse
from btcscript_sdk.debugger.workspace import View, Workspace
from btcscript_sdk.errors import EngineConnectionError, SessionError

SOURCE = "1\nOP_DUP OP_ADD"


class StubClient:
    """Engine stand-in returning canned responses."""

    def __init__(self, *results):
        self.results = list(results)
        self.requests: list[RunRequest] = []

    def run(self, request: RunRequest) -> RunResponse:
        self.requests.append(request)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def success(success_payload):
    return RunResponse.from_json(success_payload)


# =============================================================================
# Editing Tests
# =============================================================================

class TestEditing:
    """Tests for compiling edits."""

    def test_asm_view(self):
        ws = Workspace(SOURCE)
        assert ws.hex == "517693"
        assert ws.python == "[1, OP_DUP, OP_ADD]"
        assert ws.cpp == "{0x51, 0x76, 0x93}"
        assert ws.info == "3 bytes"
        assert ws.error == ""
        assert ws.offsets.line_table == (0, 1)

    def test_empty(self):
        ws = Workspace()
        assert ws.hex == ""
        assert ws.info == ""
        assert ws.cpp == ""

    def test_asm_error(self):
        ws = Workspace(SOURCE)
        ws.edit_asm("1 OP_NOPE")
        assert "unknown opcode: OP_NOPE" in ws.error
        assert ws.info == ""
        assert ws.hex == "517693"

    def test_offsets_kept_while_in_error(self):
        """A failing edit leaves the last good offset map in place."""
        ws = Workspace(SOURCE)
        good = ws.offsets
        ws.edit_asm("1 OP_NOPE")
        assert ws.offsets is good
        ws.edit_asm("OP_DUP")
        assert ws.error == ""
        assert ws.offsets.line_table == (0,)

    def test_hex_view_regenerates_asm(self):
        ws = Workspace()
        ws.edit_hex("76 A9")
        assert ws.active_view is View.HEX
        assert ws.hex == "76a9"
        assert ws.asm == "OP_DUP\nOP_HASH160"
        assert ws.info == "2 bytes"

    def test_hex_view_keeps_matching_asm(self):
        """Hand-written ASM survives if it already assembles to the hex."""
        ws = Workspace("OP_TRUE   OP_FALSE")
        ws.edit_hex("5100")
        assert ws.asm == "OP_TRUE   OP_FALSE"

    def test_hex_error(self):
        ws = Workspace(SOURCE)
        ws.edit_hex("4c0501")
        assert "PUSHDATA1 truncated" in ws.error
        assert ws.asm == SOURCE

    def test_switch_view_recompiles(self):
        ws = Workspace(SOURCE)
        ws.hex = "76"
        ws.switch_view(View.HEX)
        assert ws.asm == "OP_DUP"

    def test_clear(self):
        ws = Workspace(SOURCE)
        ws.clear()
        assert ws.asm == ""
        assert ws.hex == ""

    def test_load_sample(self):
        ws = Workspace()
        ws.load_sample("p2pkh")
        assert ws.hex == "76a91400112233445566778899aabbccddeeff0011223388ac"

    def test_unknown_sample(self):
        with pytest.raises(KeyError):
            Workspace().load_sample("nope")


# =============================================================================
# Breakpoint Tests
# =============================================================================

class TestBreakpoints:
    def test_toggle(self):
        ws = Workspace(SOURCE)
        assert ws.toggle_breakpoint(2) is True
        assert ws.toggle_breakpoint(2) is False
        assert ws.breakpoints == set()

    def test_offsets_in_line_order(self):
        ws = Workspace("1\n2\nOP_ADD")
        ws.toggle_breakpoint(3)
        ws.toggle_breakpoint(1)
        ws.toggle_breakpoint(7)
        assert ws.breakpoint_offsets() == [0, 2]

    def test_run_request(self):
        ws = Workspace("1\n2\nOP_ADD")
        ws.toggle_breakpoint(2)
        assert ws.run_request() == RunRequest("515293", (1,))

    def test_no_request_while_in_error(self):
        ws = Workspace("OP_BAD")
        assert ws.run_request() is None


# =============================================================================
# Run Tests
# =============================================================================

class TestRuns:
    """Tests for run tickets and engine failures."""

    def test_run_jumps_to_end(self, success):
        ws = Workspace(SOURCE)
        assert ws.run(StubClient(success)) is True
        assert ws.session.state is SessionState.TERMINAL
        assert ws.view().terminal_status is TerminalStatus.SUCCESS
        assert ws.info == "Success!"

    def test_run_reports_engine_error(self, error_payload):
        ws = Workspace(SOURCE)
        ws.run(StubClient(RunResponse.from_json(error_payload)))
        assert ws.info == "OP_VERIFY failed"
        assert ws.view().error_detail == "OP_VERIFY failed"

    def test_connection_failure_leaves_session(self, success):
        ws = Workspace(SOURCE)
        ws.run(StubClient(success))
        before = ws.session
        assert ws.run(StubClient(EngineConnectionError("refused"))) is False
        assert ws.session is before
        assert ws.info == "Server connection error: refused"

    def test_run_refused_while_in_error(self):
        ws = Workspace("OP_BAD")
        client = StubClient()
        assert ws.run(client) is False
        assert client.requests == []

    def test_last_request_wins(self, success, error_payload):
        ws = Workspace(SOURCE)
        first = ws.begin_run()
        second = ws.begin_run()
        assert ws.complete_run(first, success) is False
        assert ws.session.state is SessionState.IDLE
        assert ws.complete_run(second, RunResponse.from_json(error_payload)) is True
        assert ws.session.status.value == "error"

    def test_ticket_used_once(self, success):
        ws = Workspace(SOURCE)
        ticket = ws.begin_run()
        assert ws.complete_run(ticket, success) is True
        assert ws.complete_run(ticket, success) is False

    def test_stale_failure_ignored(self, success):
        ws = Workspace(SOURCE)
        first = ws.begin_run()
        ws.begin_run()
        assert ws.fail_run(first, EngineConnectionError("late")) is False
        assert ws.info == "3 bytes"

    def test_edit_during_run_discards_trace(self, success):
        ws = Workspace(SOURCE)
        ticket = ws.begin_run()
        ws.edit_asm("1 OP_DUP OP_SUB")
        ws.complete_run(ticket, success)
        assert ws.session.state is SessionState.IDLE


# =============================================================================
# Stepping Tests
# =============================================================================

class TestStepping:
    """Tests for step actions through the workspace."""

    def test_first_step_starts_run_at_step_one(self, success):
        ws = Workspace(SOURCE)
        client = StubClient(success)
        assert ws.step_forward(client) is True
        assert ws.session.current_step == 1
        assert len(client.requests) == 1

    def test_backward_also_starts_run(self, success):
        ws = Workspace(SOURCE)
        ws.step_backward(StubClient(success))
        assert ws.session.current_step == 1

    def test_steps_after_load_use_trace(self, success):
        ws = Workspace(SOURCE)
        client = StubClient(success)
        ws.step_forward(client)
        ws.step_forward(client)
        ws.step_forward(client)
        assert ws.session.current_step == 3
        ws.step_backward(client)
        assert ws.session.current_step == 2
        assert len(client.requests) == 1

    def test_step_without_client(self):
        ws = Workspace(SOURCE)
        with pytest.raises(SessionError):
            ws.step_forward()

    def test_step_refused_while_in_error(self, success):
        ws = Workspace(SOURCE)
        ws.step_forward(StubClient(success))
        ws.edit_asm("OP_BAD")
        assert ws.step_forward() is False

    def test_edit_resets_session(self, success):
        """Editing tokens after a load returns to IDLE, even if reverted."""
        ws = Workspace(SOURCE)
        ws.run(StubClient(success))
        ws.edit_asm("1 OP_DUP OP_SUB")
        assert ws.session.state is SessionState.IDLE
        ws.edit_asm(SOURCE)
        assert ws.session.state is SessionState.IDLE
        assert ws.view().stack_text == ""

    def test_whitespace_edit_keeps_session(self, success):
        ws = Workspace(SOURCE)
        ws.run(StubClient(success))
        ws.edit_asm("1 OP_DUP    OP_ADD")
        assert ws.session.state is SessionState.TERMINAL
