"""Response APDU parsing.

Frame layout::

    +-----------------+-----+-----+
    |      Data       | SW1 | SW2 |
    | 0..N bytes      | 1 B | 1 B |
    +-----------------+-----+-----+
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..errors import InvalidLengthError, StatusError
from .status import StatusWord

logger = logging.getLogger(__name__)

STATUS_WORD_SIZE = 2


@dataclass(frozen=True)
class Response:
    """A decoded response APDU."""

    data: bytes
    status_word: StatusWord

    def __repr__(self) -> str:
        return (
            f"Response(data={self.data.hex(' ') if self.data else '(empty)'}, "
            f"status_word={self.status_word})"
        )

    def raise_for_status(self) -> None:
        """Raise :class:`StatusError` unless the status word is exactly 0x9000.

        The raised error keeps the response data for diagnostics.
        """
        if not self.status_word.is_success():
            raise StatusError(self.status_word, data=self.data)


def decode_response(raw: bytes) -> Response:
    """Split a raw response into data and status word.

    Raises:
        InvalidLengthError: If fewer than two bytes are supplied.
    """
    raw = bytes(raw)
    if len(raw) < STATUS_WORD_SIZE:
        logger.debug("Response frame too short: %d bytes", len(raw))
        raise InvalidLengthError(
            f"Response frame needs at least {STATUS_WORD_SIZE} bytes, "
            f"got {len(raw)}"
        )
    return Response(
        data=raw[:-STATUS_WORD_SIZE],
        status_word=StatusWord.from_bytes(raw[-STATUS_WORD_SIZE:]),
    )


def parse_response(raw: bytes) -> bytes:
    """Decode a response and return its data if the status is 0x9000.

    Raises:
        InvalidLengthError: As for :func:`decode_response`.
        StatusError: For any other status word. ``StatusError.data``
            still carries the response data.
    """
    response = decode_response(raw)
    response.raise_for_status()
    return response.data
