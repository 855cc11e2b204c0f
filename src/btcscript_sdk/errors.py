"""
Bitcoin Script SDK Error Hierarchy
==================================

This module defines the exception hierarchy for the entire SDK. All
exceptions inherit from ScriptSDKError, allowing callers to catch every
SDK-related error with a single except clause if desired.

Exception Hierarchy
-------------------
ScriptSDKError (base)
├── CodecError (ASM <-> bytecode conversion)
│   ├── InvalidHexFormat - hex string contains non-hex characters
│   ├── OddLengthHex - hex string or bare hex token has odd length
│   ├── InvalidHexData - bracketed <...> push is not even-length hex
│   ├── UnknownOpcode - OP_* mnemonic not in the opcode table
│   ├── UnrecognizedToken - token matches no assembler rule
│   ├── UnknownOpcodeByte - byte value with no opcode during decode
│   └── TruncatedPush - declared push length exceeds remaining bytes
├── SessionError (debug session misuse)
└── EngineError (external execution engine)
    ├── EngineConnectionError - connection refused, timeout, HTTP failure
    └── EngineProtocolError - malformed response body

Design Philosophy
-----------------
Codec errors are input-validation failures. Each one identifies the
offending token (by line and column in ASM text) or byte (by offset in
the bytecode), so a caller can show a single precise diagnostic:

    <asm>:1:1: error: unknown opcode: OP_DUPP
        OP_DUPP OP_HASH160
        ^
    hint: did you mean 'OP_DUP'?
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from btcscript_sdk.assembler.opcodes import PushForm


# =============================================================================
# Base Exception Class
# =============================================================================

class ScriptSDKError(Exception):
    """
    Base exception for all SDK errors.

        try:
            assemble(source)
        except ScriptSDKError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A location in ASM text (line/column) or in bytecode (byte offset).

    Attributes:
        filename: Name of the source ("<asm>" or "<hex>" for string input)
        line: Line number (1-indexed), 0 when the location is a byte offset
        column: Column number (1-indexed), 0 when the location is a byte offset
        offset: Byte offset into the bytecode, or None for text locations
    """
    filename: str
    line: int = 0
    column: int = 0
    offset: Optional[int] = None

    def __str__(self) -> str:
        if self.offset is not None:
            return f"{self.filename}:+{self.offset}"
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Codec Exceptions
# =============================================================================

class CodecError(ScriptSDKError):
    """
    Base exception for assembly and disassembly failures.

    Attributes:
        message: The error description
        location: Where the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            <asm>:1:8: error: odd-length hex: abc
                OP_DUP abc
                       ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class InvalidHexFormat(CodecError):
    """
    Hex string contains characters other than 0-9, a-f, A-F.

    Raised when parsing HEX input (whitespace is stripped first).
    """

    def __init__(self, text: str, location: Optional[SourceLocation] = None):
        self.text = text
        super().__init__("invalid hex format", location=location)


class OddLengthHex(CodecError):
    """
    Hex string or bare hex token with an odd number of digits.

    Bytes are two hex digits each, so an odd count cannot be decoded.
    """

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"odd-length hex: {text}",
            location=location,
            hint="every byte needs two hex digits",
            source_line=source_line,
        )


class InvalidHexData(CodecError):
    """Bracketed data push whose contents are not even-length hex."""

    def __init__(
        self,
        token: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.token = token
        super().__init__(
            f"invalid hex data: {token}",
            location=location,
            source_line=source_line,
        )


class UnknownOpcode(CodecError):
    """
    OP_* mnemonic that is not in the opcode table.

    Only the fixed opcode table is supported; mnemonics are matched
    exactly (upper case).
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar: Optional[list[str]] = None,
    ):
        self.name = name
        self.similar = similar or []

        hint = None
        if self.similar:
            suggestions = ", ".join(f"'{s}'" for s in self.similar[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"unknown opcode: {name}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnrecognizedToken(CodecError):
    """Token that is neither an opcode, a small integer, nor hex data."""

    def __init__(
        self,
        token: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.token = token
        super().__init__(
            f"unrecognized token: {token}",
            location=location,
            hint="use OP_* names, -1..16, <hex> or bare even-length hex",
            source_line=source_line,
        )


class UnknownOpcodeByte(CodecError):
    """
    Byte value with no opcode table entry, found while disassembling.

    Unknown bytes are a hard failure; they are never rendered as raw hex.
    """

    def __init__(self, byte: int, offset: int, filename: str = "<hex>"):
        self.byte = byte
        self.offset = offset
        super().__init__(
            f"unknown opcode byte 0x{byte:02x}",
            location=SourceLocation(filename, offset=offset),
        )


class TruncatedPush(CodecError):
    """
    A push declares more data bytes than remain in the bytecode.

    Attributes:
        kind: Which prefix form was truncated (a PushForm)
        offset: Byte offset of the push opcode
        declared: Number of data bytes the prefix declares
        available: Number of bytes actually left
    """

    def __init__(
        self,
        kind: "PushForm",
        offset: int,
        declared: int,
        available: int,
        filename: str = "<hex>",
    ):
        self.kind = kind
        self.offset = offset
        self.declared = declared
        self.available = available

        super().__init__(
            f"{kind.label} truncated: declares {declared} bytes, {available} available",
            location=SourceLocation(filename, offset=offset),
        )


# =============================================================================
# Debug Session Exceptions
# =============================================================================

class SessionError(ScriptSDKError):
    """
    Invalid use of a debug session.

    Raised, for example, when a step action needs a new run but no
    engine client was supplied.
    """
    pass


# =============================================================================
# Engine Exceptions
# =============================================================================

class EngineError(ScriptSDKError):
    """Base exception for failures reaching the external execution engine."""
    pass


class EngineConnectionError(EngineError):
    """
    Cannot reach the execution engine.

    Raised when:
    - The connection is refused
    - The request times out
    - The HTTP response carries no usable body
    """
    pass


class EngineProtocolError(EngineError):
    """
    The engine answered with a body that does not follow the run contract.

    Raised when the body is not JSON, the status is unknown, or a trace
    step is missing its pc/stack/altstack fields.
    """
    pass
