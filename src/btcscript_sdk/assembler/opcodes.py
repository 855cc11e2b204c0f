"""
Bitcoin Script Opcode Table
===========================

This module defines the fixed set of script opcodes understood by the
assembler and disassembler, plus the data-push encoding rules.

Opcodes
-------
Every opcode is a single byte. Some byte values have more than one
mnemonic (OP_0/OP_FALSE, OP_1/OP_TRUE). The table is built in declaration
order and the first-declared name is the canonical one for decoding, so:

    OP_FALSE -> 0x00 -> OP_0

ASM -> HEX -> ASM round-trips are therefore stable, but decoding never
reproduces an alias spelling.

Data Pushes
-----------
Byte values 0x01-0x4B push that many following bytes. Longer payloads
use an explicit length field after a PUSHDATA opcode:

| Payload length  | Encoding                          | Prefix bytes |
|-----------------|-----------------------------------|--------------|
| 0 - 75          | <len>                             | 1            |
| 76 - 255        | OP_PUSHDATA1 <len:1>              | 2            |
| 256 - 65535     | OP_PUSHDATA2 <len:2 little-endian>| 3            |
| 65536 and above | OP_PUSHDATA4 <len:4 little-endian>| 5            |

The assembler always chooses the minimal form. The disassembler accepts
all four forms but makes no attempt to preserve a non-minimal one.

Reference
---------
- Bitcoin Wiki, Script: https://en.bitcoin.it/wiki/Script

Copyright (c) 2025-2026 Hugo José Pinto & Contributors
"""

from enum import Enum
from typing import Final, Optional

from btcscript_sdk.errors import UnknownOpcode


# =============================================================================
# Opcode Declarations
# =============================================================================
# Declaration order matters: for byte values with aliases, the first name
# listed is the one byte_to_name() returns.
# =============================================================================

OPCODE_LIST: Final[tuple[tuple[str, int], ...]] = (
    # Constants
    ("OP_0", 0x00),
    ("OP_FALSE", 0x00),
    ("OP_TRUE", 0x51),
    ("OP_PUSHDATA1", 0x4C),
    ("OP_PUSHDATA2", 0x4D),
    ("OP_PUSHDATA4", 0x4E),
    ("OP_1NEGATE", 0x4F),
    ("OP_RESERVED", 0x50),
    ("OP_1", 0x51), ("OP_2", 0x52), ("OP_3", 0x53), ("OP_4", 0x54),
    ("OP_5", 0x55), ("OP_6", 0x56), ("OP_7", 0x57), ("OP_8", 0x58),
    ("OP_9", 0x59), ("OP_10", 0x5A), ("OP_11", 0x5B), ("OP_12", 0x5C),
    ("OP_13", 0x5D), ("OP_14", 0x5E), ("OP_15", 0x5F), ("OP_16", 0x60),

    # Flow control
    ("OP_NOP", 0x61),
    ("OP_IF", 0x63),
    ("OP_NOTIF", 0x64),
    ("OP_ELSE", 0x67),
    ("OP_ENDIF", 0x68),
    ("OP_VERIFY", 0x69),
    ("OP_RETURN", 0x6A),

    # Stack
    ("OP_TOALTSTACK", 0x6B),
    ("OP_FROMALTSTACK", 0x6C),
    ("OP_IFDUP", 0x73),
    ("OP_DEPTH", 0x74),
    ("OP_DROP", 0x75),
    ("OP_DUP", 0x76),
    ("OP_NIP", 0x77),
    ("OP_OVER", 0x78),
    ("OP_PICK", 0x79),
    ("OP_ROLL", 0x7A),
    ("OP_ROT", 0x7B),
    ("OP_SWAP", 0x7C),
    ("OP_TUCK", 0x7D),

    # Bitwise logic
    ("OP_EQUAL", 0x87),
    ("OP_EQUALVERIFY", 0x88),

    # Arithmetic
    ("OP_1ADD", 0x8B),
    ("OP_1SUB", 0x8C),
    ("OP_NEGATE", 0x8F),
    ("OP_ABS", 0x90),
    ("OP_NOT", 0x91),
    ("OP_0NOTEQUAL", 0x92),
    ("OP_ADD", 0x93),
    ("OP_SUB", 0x94),
    ("OP_BOOLAND", 0x9A),
    ("OP_BOOLOR", 0x9B),
    ("OP_NUMEQUAL", 0x9C),
    ("OP_NUMEQUALVERIFY", 0x9D),
    ("OP_NUMNOTEQUAL", 0x9E),
    ("OP_LESSTHAN", 0x9F),
    ("OP_GREATERTHAN", 0xA0),
    ("OP_LESSTHANOREQUAL", 0xA1),
    ("OP_GREATERTHANOREQUAL", 0xA2),
    ("OP_MIN", 0xA3),
    ("OP_MAX", 0xA4),
    ("OP_WITHIN", 0xA5),

    # Crypto
    ("OP_RIPEMD160", 0xA6),
    ("OP_SHA1", 0xA7),
    ("OP_SHA256", 0xA8),
    ("OP_HASH160", 0xA9),
    ("OP_HASH256", 0xAA),
    ("OP_CODESEPARATOR", 0xAB),
    ("OP_CHECKSIG", 0xAC),
    ("OP_CHECKSIGVERIFY", 0xAD),
    ("OP_CHECKMULTISIG", 0xAE),
    ("OP_CHECKMULTISIGVERIFY", 0xAF),

    # Expansion
    ("OP_NOP1", 0xB0),
    ("OP_CHECKLOCKTIMEVERIFY", 0xB1),  # a.k.a. OP_NOP2 before BIP65
    ("OP_CHECKSEQUENCEVERIFY", 0xB2),  # a.k.a. OP_NOP3 before BIP112
    ("OP_NOP4", 0xB3),
    ("OP_NOP5", 0xB4),
    ("OP_NOP6", 0xB5),
    ("OP_NOP7", 0xB6),
    ("OP_NOP8", 0xB7),
    ("OP_NOP9", 0xB8),
    ("OP_NOP10", 0xB9),
)


# =============================================================================
# Well-Known Opcode Values
# =============================================================================

OP_0: Final[int] = 0x00
OP_PUSHDATA1: Final[int] = 0x4C
OP_PUSHDATA2: Final[int] = 0x4D
OP_PUSHDATA4: Final[int] = 0x4E
OP_1NEGATE: Final[int] = 0x4F
OP_1: Final[int] = 0x51
OP_16: Final[int] = 0x60

# Largest payload encoded by its own length byte (0x01-0x4B)
MAX_INLINE_PUSH: Final[int] = 75


# =============================================================================
# Push Encoding
# =============================================================================

class PushForm(Enum):
    """
    Length-prefix form of a data push.

    The value is the opcode byte that introduces the push (None for the
    inline form, whose opcode is the length itself).
    """
    INLINE = None
    PUSHDATA1 = OP_PUSHDATA1
    PUSHDATA2 = OP_PUSHDATA2
    PUSHDATA4 = OP_PUSHDATA4

    @property
    def length_size(self) -> int:
        """Size of the explicit length field (0 for inline pushes)."""
        return {
            PushForm.INLINE: 0,
            PushForm.PUSHDATA1: 1,
            PushForm.PUSHDATA2: 2,
            PushForm.PUSHDATA4: 4,
        }[self]

    @property
    def prefix_length(self) -> int:
        """Bytes taken by the opcode and length field together."""
        return 1 + self.length_size

    @property
    def label(self) -> str:
        """Name used in diagnostics."""
        return "PUSHDATA" if self is PushForm.INLINE else self.name

    @classmethod
    def for_length(cls, length: int) -> "PushForm":
        """Return the minimal push form for a payload of ``length`` bytes."""
        if length < 0:
            raise ValueError(f"Push length must be non-negative, got {length}")
        if length <= MAX_INLINE_PUSH:
            return cls.INLINE
        if length <= 0xFF:
            return cls.PUSHDATA1
        if length <= 0xFFFF:
            return cls.PUSHDATA2
        if length <= 0xFFFFFFFF:
            return cls.PUSHDATA4
        raise ValueError(f"Push length {length} exceeds PUSHDATA4 range")

    @classmethod
    def from_opcode(cls, opcode: int) -> Optional["PushForm"]:
        """Return the push form an opcode byte introduces, or None."""
        if 0x01 <= opcode <= MAX_INLINE_PUSH:
            return cls.INLINE
        for form in (cls.PUSHDATA1, cls.PUSHDATA2, cls.PUSHDATA4):
            if form.value == opcode:
                return form
        return None


def push_prefix(length: int) -> bytes:
    """
    Encode the minimal push prefix for a payload of ``length`` bytes.

    Examples:
        >>> push_prefix(20).hex()
        '14'
        >>> push_prefix(76).hex()
        '4c4c'
        >>> push_prefix(256).hex()
        '4d0001'
    """
    form = PushForm.for_length(length)
    if form is PushForm.INLINE:
        return bytes([length])
    return bytes([form.value]) + length.to_bytes(form.length_size, "little")


def push_size(length: int) -> int:
    """Total encoded size of a push of ``length`` bytes, prefix included."""
    return PushForm.for_length(length).prefix_length + length


# =============================================================================
# Opcode Table
# =============================================================================

class OpcodeTable:
    """
    Bidirectional mnemonic <-> byte table.

    Built once from a declaration-ordered list of (name, byte) pairs:
    a 256-entry byte->name tuple (None where unassigned) and a name->byte
    dict. The first name declared for a byte value wins on decode.

    Usage:
        table = OpcodeTable(OPCODE_LIST)
        table.name_to_byte("OP_FALSE")   # 0x00
        table.byte_to_name(0x00)         # "OP_0"
    """

    def __init__(self, declarations: tuple[tuple[str, int], ...] = OPCODE_LIST):
        by_name: dict[str, int] = {}
        by_byte: list[Optional[str]] = [None] * 256

        for name, value in declarations:
            if not 0 <= value <= 0xFF:
                raise ValueError(f"Opcode {name} has out-of-range value {value}")
            if name in by_name:
                raise ValueError(f"Opcode {name} declared twice")
            by_name[name] = value
            # Keep the first name declared for each byte
            if by_byte[value] is None:
                by_byte[value] = name

        self._by_name = by_name
        self._by_byte = tuple(by_byte)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    @property
    def names(self) -> tuple[str, ...]:
        """All mnemonics, in declaration order."""
        return tuple(self._by_name)

    def name_to_byte(self, name: str) -> int:
        """
        Look up the byte value of a mnemonic.

        Raises:
            UnknownOpcode: If the mnemonic is not in the table
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownOpcode(name, similar=self.find_similar(name)) from None

    def byte_to_name(self, value: int) -> Optional[str]:
        """Return the canonical mnemonic for a byte, or None if unassigned."""
        if not 0 <= value <= 0xFF:
            return None
        return self._by_byte[value]

    def find_similar(self, name: str) -> list[str]:
        """
        Find mnemonics close to ``name`` for error hints.

        Matches case-insensitive equality or an edit distance of at
        most two between names of similar length.
        """
        name_upper = name.upper()
        similar = []

        for candidate in self._by_name:
            if candidate == name_upper or (
                abs(len(candidate) - len(name)) <= 1
                and _edit_distance(name_upper, candidate) <= 2
            ):
                similar.append(candidate)

        return similar[:3]


def _edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    distances = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        new_distances = [i + 1]
        for j, c2 in enumerate(s2):
            if c1 == c2:
                new_distances.append(distances[j])
            else:
                new_distances.append(1 + min(distances[j], distances[j + 1], new_distances[-1]))
        distances = new_distances
    return distances[-1]


# Shared table instance, built at import time
OPCODES: Final[OpcodeTable] = OpcodeTable(OPCODE_LIST)


def name_to_byte(name: str) -> int:
    """Module-level shortcut for ``OPCODES.name_to_byte``."""
    return OPCODES.name_to_byte(name)


def byte_to_name(value: int) -> Optional[str]:
    """Module-level shortcut for ``OPCODES.byte_to_name``."""
    return OPCODES.byte_to_name(value)
