"""Exception classes for apdu_mcp."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .protocol.status import StatusWord


class ApduError(Exception):
    """Base exception for apdu_mcp codec failures."""


class InvalidLengthError(ApduError):
    """Frame length is structurally impossible for its frame type."""


class DataLengthMismatchError(ApduError):
    """Lc byte declares more data than the frame carries."""


class HexParseError(ApduError):
    """Textual input is not valid hexadecimal."""


class StatusError(ApduError):
    """Response status word does not indicate success.

    Attributes:
        status_word: The status word that triggered the error.
        data: Response data decoded before the status word.
    """

    def __init__(self, status_word: StatusWord, data: bytes = b"") -> None:
        self.status_word = status_word
        self.data = data
        super().__init__(status_word.describe())
