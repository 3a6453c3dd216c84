"""Hex text helpers shared by the codec and the MCP server."""

from __future__ import annotations

import binascii

from ..errors import HexParseError

# Only these are tolerated inside hex text; anything else is a bad digit.
_STRIP_TABLE = str.maketrans("", "", " \t\n\r")


def strip_whitespace(text: str) -> str:
    """Remove spaces, tabs, newlines and carriage returns anywhere in *text*."""
    return text.translate(_STRIP_TABLE)


def parse_hex(text: str) -> bytes:
    """Decode whitespace-tolerant hex text into bytes.

    Raises:
        HexParseError: If the cleaned text has odd length or a non-hex digit.
    """
    cleaned = strip_whitespace(text)
    try:
        return binascii.unhexlify(cleaned)
    except ValueError as e:
        raise HexParseError(f"Invalid hex string {text!r}: {e}") from e
