"""Status words (SW1 SW2) terminating every response APDU.

The description table covers the interindustry codes of ISO 7816-4
plus the common 0x61XX / 0x6CXX procedure families.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from ..errors import InvalidLengthError

SW_SUCCESS = 0x9000

STATUS_WORDS: MappingProxyType[int, str] = MappingProxyType({
    0x6100: "Response bytes still available",
    0x6200: "State of non-volatile memory unchanged",
    0x6281: "Part of returned data may be corrupted",
    0x6282: "End of file/record reached before reading Le bytes",
    0x6283: "Selected file invalidated",
    0x6284: "FCI not formatted according to ISO 7816-4",
    0x6285: "Selected file in termination state",
    0x6286: "No input data available from a sensor on the card",
    0x6300: "State of non-volatile memory changed",
    0x6381: "File filled up by the last write",
    0x6400: "Execution error, state of non-volatile memory unchanged",
    0x6401: "Immediate response required by the card",
    0x6500: "Execution error, state of non-volatile memory changed",
    0x6581: "Memory failure",
    0x6600: "Security-related issue",
    0x6700: "Wrong length",
    0x6800: "Functions in CLA not supported",
    0x6881: "Logical channel not supported",
    0x6882: "Secure messaging not supported",
    0x6883: "Last command of the chain expected",
    0x6884: "Command chaining not supported",
    0x6900: "Command not allowed",
    0x6981: "Command incompatible with file structure",
    0x6982: "Security status not satisfied",
    0x6983: "Authentication method blocked",
    0x6984: "Reference data not usable",
    0x6985: "Conditions of use not satisfied",
    0x6986: "Command not allowed (no current EF)",
    0x6987: "Expected secure messaging data objects missing",
    0x6988: "Incorrect secure messaging data objects",
    0x6A00: "Wrong parameters P1-P2",
    0x6A80: "Incorrect parameters in the command data field",
    0x6A81: "Function not supported",
    0x6A82: "File not found",
    0x6A83: "Record not found",
    0x6A84: "Not enough memory space in the file",
    0x6A85: "Nc inconsistent with TLV structure",
    0x6A86: "Incorrect parameters P1-P2",
    0x6A87: "Nc inconsistent with parameters P1-P2",
    0x6A88: "Referenced data or reference data not found",
    0x6A89: "File already exists",
    0x6A8A: "DF name already exists",
    0x6B00: "Wrong parameters P1-P2",
    0x6C00: "Wrong Le field",
    0x6D00: "Instruction code not supported or invalid",
    0x6E00: "Class not supported",
    0x6F00: "No precise diagnosis",
    0x9000: "Success",
})


def lookup_description(value: int) -> str:
    """Return the table description for a 16-bit status word, or ``Unknown``."""
    return STATUS_WORDS.get(value, "Unknown")


@dataclass(frozen=True)
class StatusWord:
    """The two trailing status bytes of a response."""

    sw1: int
    sw2: int

    def __post_init__(self) -> None:
        for name in ("sw1", "sw2"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFF:
                raise ValueError(f"{name} must be 0-255, got {value}")

    @property
    def value(self) -> int:
        return self.sw1 << 8 | self.sw2

    def is_success(self) -> bool:
        """Only exactly 0x9000 counts as success."""
        return self.value == SW_SUCCESS

    def is_error(self) -> bool:
        """Classify the status word.

        0x9000 and the whole 0x9FXX family are not errors; every other
        code is. This is looser than :meth:`is_success`, which accepts
        0x9000 only.
        """
        return not (self.sw1 == 0x9F or self.value == SW_SUCCESS)

    def describe(self) -> str:
        """Render as ``"6A82 (File not found)"``."""
        return f"{self.value:04X} ({lookup_description(self.value)})"

    def __str__(self) -> str:
        return self.describe()

    def __bytes__(self) -> bytes:
        return bytes([self.sw1, self.sw2])

    @classmethod
    def from_bytes(cls, data: bytes) -> StatusWord:
        if len(data) != 2:
            raise InvalidLengthError(
                f"Status word must be 2 bytes, got {len(data)}"
            )
        return cls(data[0], data[1])
