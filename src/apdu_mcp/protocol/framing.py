"""Command APDU frame builder and parser.

Frame layout::

    +-----+-----+----+----+----------+-------------+----+
    | CLA | INS | P1 | P2 |   Lc     |    Data     | Le |
    | 1 B | 1 B | 1 B| 1 B| 1 B opt. | Lc B (opt.) | 1 B|
    +-----+-----+----+----+----------+-------------+----+

- Lc and Data are present only when the data field is non-empty
- Lc is the data length truncated to one byte (``len(data) % 256``)
- Le is always emitted when building a frame; when parsing, a missing
  Le decodes as 0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..errors import ApduError, DataLengthMismatchError, InvalidLengthError
from ..utils.hexstr import parse_hex

logger = logging.getLogger(__name__)

HEADER_SIZE = 4
LC_OFFSET = 4
DATA_OFFSET = 5


@dataclass(frozen=True)
class Command:
    """A command APDU.

    The data field must not exceed 255 bytes; longer data is not rejected
    but its Lc byte wraps to the low 8 bits of the real length.
    """

    cla: int
    ins: int
    p1: int
    p2: int
    data: bytes = b""
    le: int = 0

    def __post_init__(self) -> None:
        for name in ("cla", "ins", "p1", "p2", "le"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFF:
                raise ValueError(f"{name} must be 0-255, got {value}")
        object.__setattr__(self, "data", bytes(self.data))

    def __repr__(self) -> str:
        return (
            f"Command(cla=0x{self.cla:02X}, ins=0x{self.ins:02X}, "
            f"p1=0x{self.p1:02X}, p2=0x{self.p2:02X}, "
            f"data={self.data.hex(' ') if self.data else '(empty)'}, "
            f"le=0x{self.le:02X})"
        )

    def __str__(self) -> str:
        return format_command(self)

    def __bytes__(self) -> bytes:
        return encode_command(self)

    def to_bytes(self) -> bytes:
        return encode_command(self)

    @classmethod
    def from_bytes(cls, raw: bytes) -> Command:
        return decode_command(raw)

    @classmethod
    def from_hex(cls, text: str) -> Command:
        return command_from_hex(text)


def encode_command(command: Command) -> bytes:
    """Encode a command into its wire representation.

    Never fails: an over-long data field is encoded with a wrapped Lc.
    """
    frame = bytes([command.cla, command.ins, command.p1, command.p2])
    if command.data:
        frame += bytes([len(command.data) & 0xFF]) + command.data
    return frame + bytes([command.le])


def decode_command(raw: bytes) -> Command:
    """Parse raw bytes into a Command.

    Args:
        raw: A complete command frame.

    Raises:
        InvalidLengthError: If the header is incomplete or trailing bytes
            exceed Lc plus one Le byte.
        DataLengthMismatchError: If Lc declares more data than available.
    """
    raw = bytes(raw)
    if len(raw) < HEADER_SIZE:
        logger.debug("Command frame too short: %d bytes", len(raw))
        raise InvalidLengthError(
            f"Command frame needs at least {HEADER_SIZE} bytes, got {len(raw)}"
        )

    cla, ins, p1, p2 = raw[:HEADER_SIZE]

    if len(raw) == HEADER_SIZE:
        return Command(cla, ins, p1, p2)
    if len(raw) == HEADER_SIZE + 1:
        return Command(cla, ins, p1, p2, le=raw[LC_OFFSET])

    lc = raw[LC_OFFSET]
    available = len(raw) - DATA_OFFSET
    if available < lc:
        logger.debug("Lc=%d but only %d data bytes present", lc, available)
        raise DataLengthMismatchError(
            f"Lc byte declares {lc} data bytes, only {available} present"
        )
    if len(raw) > DATA_OFFSET + lc + 1:
        logger.debug("Command frame has %d trailing bytes", available - lc)
        raise InvalidLengthError(
            f"Command frame is {len(raw)} bytes, at most "
            f"{DATA_OFFSET + lc + 1} allowed for Lc={lc}"
        )

    data = raw[DATA_OFFSET : DATA_OFFSET + lc]
    le = raw[DATA_OFFSET + lc] if len(raw) > DATA_OFFSET + lc else 0
    return Command(cla, ins, p1, p2, data=data, le=le)


def command_from_hex(text: str) -> Command:
    """Parse a hex string into a Command.

    Spaces, tabs, newlines and carriage returns are ignored anywhere in
    the string.

    Raises:
        HexParseError: If the text is not valid hex.
        InvalidLengthError, DataLengthMismatchError: As for
            :func:`decode_command`.
    """
    return decode_command(parse_hex(text))


def must_command_from_hex(text: str) -> Command:
    """Parse a trusted hex literal into a Command.

    Any parse failure is treated as a programming error and raised as
    ``AssertionError``. Never call this with externally supplied text;
    use :func:`command_from_hex` instead.
    """
    try:
        return command_from_hex(text)
    except ApduError as e:
        raise AssertionError(f"Invalid APDU literal {text!r}: {e}") from e


def format_command(command: Command) -> str:
    """Encode a command and render it as lowercase hex without separators."""
    return encode_command(command).hex()
