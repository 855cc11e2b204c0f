"""
Hex String Primitives
=====================

Strict parsing and formatting of the lowercase hex interchange format:
no ``0x`` prefix, no separators. Whitespace in input is tolerated and
stripped before validation, so pasted hex dumps with line breaks parse.

    >>> hex_to_bytes("76 A9\\n14")
    b'v\\xa9\\x14'
    >>> bytes_to_hex(b"\\x76\\xa9")
    '76a9'
"""

import re

from btcscript_sdk.errors import InvalidHexFormat, OddLengthHex

_HEX_RE = re.compile(r"[0-9a-fA-F]*")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_hex(text: str) -> str:
    """Remove all whitespace and lowercase."""
    return _WHITESPACE_RE.sub("", text).lower()


def is_hex(text: str) -> bool:
    """Return True if ``text`` contains only hex digits (empty counts)."""
    return _HEX_RE.fullmatch(text) is not None


def hex_to_bytes(text: str) -> bytes:
    """
    Parse a hex string into bytes.

    Raises:
        InvalidHexFormat: If a non-hex character is present
        OddLengthHex: If the digit count is odd
    """
    cleaned = clean_hex(text)
    if not is_hex(cleaned):
        raise InvalidHexFormat(text)
    if len(cleaned) % 2 != 0:
        raise OddLengthHex(cleaned)
    return bytes.fromhex(cleaned)


def bytes_to_hex(data: bytes) -> str:
    """Format bytes as lowercase hex without prefix or separators."""
    return bytes(data).hex()


def byte_count_info(hex_text: str) -> str:
    """Status line giving the byte size of a hex string ("" when empty)."""
    cleaned = clean_hex(hex_text)
    if not cleaned:
        return ""
    return f"{len(cleaned) // 2} bytes"
