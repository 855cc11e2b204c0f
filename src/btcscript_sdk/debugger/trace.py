"""
Execution Trace and Run Protocol
================================

Data types exchanged with the external script execution engine.

Request (core -> engine)::

    {"input": "76a988ac", "breakpoints": [0, 3]}

Response (engine -> core)::

    {"status": "success",
     "trace": [{"pc": 0, "stack": ["01"], "altstack": []}, ...]}

    {"status": "error", "error": "OP_EQUALVERIFY failed",
     "trace": [...possibly partial...]}

Responses are validated as a whole: a body that breaks the contract
raises EngineProtocolError and no part of it is used.

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from btcscript_sdk.errors import EngineProtocolError


class RunStatus(Enum):
    """Overall outcome reported by the engine."""
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class TraceStep:
    """
    One execution step as reported by the engine.

    Attributes:
        pc: Byte offset of the instruction about to execute
        stack: Main stack contents, bottom first
        altstack: Alt stack contents, bottom first
    """
    pc: int
    stack: tuple[str, ...] = ()
    altstack: tuple[str, ...] = ()

    @property
    def stack_text(self) -> str:
        return "\n".join(self.stack)

    @property
    def altstack_text(self) -> str:
        return "\n".join(self.altstack)

    def to_dict(self) -> dict:
        return {"pc": self.pc, "stack": list(self.stack), "altstack": list(self.altstack)}

    @classmethod
    def from_dict(cls, record: Any, index: int = 0) -> "TraceStep":
        """
        Validate and convert one trace record.

        Raises:
            EngineProtocolError: If the record breaks the step contract
        """
        if not isinstance(record, dict):
            raise EngineProtocolError(f"trace step {index} is not an object")

        pc = record.get("pc")
        if not isinstance(pc, int) or isinstance(pc, bool) or pc < 0:
            raise EngineProtocolError(f"trace step {index} has invalid pc: {pc!r}")

        stacks = []
        for key in ("stack", "altstack"):
            items = record.get(key, [])
            if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
                raise EngineProtocolError(f"trace step {index} has invalid {key}")
            stacks.append(tuple(items))

        return cls(pc=pc, stack=stacks[0], altstack=stacks[1])


@dataclass(frozen=True)
class RunRequest:
    """
    A request to execute one assembled program.

    Attributes:
        input: Cleaned lowercase hex of the program
        breakpoints: Byte offsets at which the engine may halt, or None
            to leave the field out of the request
    """
    input: str
    breakpoints: tuple[int, ...] | None = None

    def to_json(self) -> dict:
        """Return the JSON-serializable request body."""
        body: dict[str, Any] = {"input": self.input}
        if self.breakpoints is not None:
            body["breakpoints"] = list(self.breakpoints)
        return body


@dataclass(frozen=True)
class RunResponse:
    """
    A validated engine response.

    Attributes:
        status: Overall run status
        trace: Execution steps in order (possibly partial on error)
        error: Engine-reported failure description ("" on success)
    """
    status: RunStatus
    trace: tuple[TraceStep, ...] = field(default_factory=tuple)
    error: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status is RunStatus.SUCCESS

    def to_json(self) -> dict:
        body: dict[str, Any] = {
            "status": self.status.value,
            "trace": [step.to_dict() for step in self.trace],
        }
        if self.status is RunStatus.ERROR:
            body["error"] = self.error
        return body

    @classmethod
    def from_json(cls, payload: Any) -> "RunResponse":
        """
        Validate a decoded response body.

        A missing trace is read as an empty one; an error response
        without an ``error`` string gets a generic description.

        Raises:
            EngineProtocolError: If the body breaks the response contract
        """
        if not isinstance(payload, dict):
            raise EngineProtocolError("response body is not a JSON object")

        try:
            status = RunStatus(payload.get("status"))
        except ValueError:
            raise EngineProtocolError(
                f"unknown response status: {payload.get('status')!r}"
            ) from None

        records = payload.get("trace")
        if records is None:
            records = []
        if not isinstance(records, list):
            raise EngineProtocolError("response trace is not a list")

        trace = tuple(TraceStep.from_dict(record, i) for i, record in enumerate(records))

        error = ""
        if status is RunStatus.ERROR:
            error = payload.get("error")
            if not isinstance(error, str) or not error:
                error = "execution failed"

        return cls(status=status, trace=trace, error=error)
