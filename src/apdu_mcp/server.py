"""MCP server entry point for the APDU codec.

Exposes tools, resources, and prompts via the Model Context Protocol
using the official Python MCP SDK with stdio transport. The server only
encodes and decodes frames; it never talks to a card reader.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .errors import ApduError, StatusError
from .protocol.commands import build_select
from .protocol.framing import Command, command_from_hex
from .protocol.parser import decode_response as _decode_response
from .protocol.parser import parse_response as _parse_response
from .protocol.status import STATUS_WORDS, StatusWord
from .utils.hexstr import parse_hex

logger = logging.getLogger(__name__)

SERVER_NAME = "apdu-codec"

mcp = FastMCP(
    SERVER_NAME,
    instructions="Encode and decode ISO 7816-4 command and response APDUs",
)


def _error(e: Exception) -> dict[str, Any]:
    """Turn a codec or range error into a tool result."""
    logger.warning("%s: %s", type(e).__name__, e)
    return {"error": str(e), "kind": type(e).__name__}


def _command_to_dict(command: Command) -> dict[str, Any]:
    return {
        "cla": f"0x{command.cla:02X}",
        "ins": f"0x{command.ins:02X}",
        "p1": f"0x{command.p1:02X}",
        "p2": f"0x{command.p2:02X}",
        "data": command.data.hex(),
        "lc": len(command.data),
        "le": f"0x{command.le:02X}",
        "hex": str(command),
    }


def _status_to_dict(sw: StatusWord) -> dict[str, Any]:
    return {
        "status_word": f"{sw.value:04X}",
        "description": sw.describe(),
        "is_error": sw.is_error(),
        "is_success": sw.is_success(),
    }


# ─── COMMAND TOOLS ───────────────────────────────────────────────────

@mcp.tool()
def encode_command(
    cla: int,
    ins: int,
    p1: int,
    p2: int,
    data: str = "",
    le: int = 0,
) -> dict[str, Any]:
    """Encode a command APDU into wire bytes.

    Args:
        cla: Class byte (0-255).
        ins: Instruction byte (0-255).
        p1: Parameter 1 (0-255).
        p2: Parameter 2 (0-255).
        data: Optional command data as hex (whitespace allowed, max 255 bytes).
        le: Expected response length byte (0-255).
    """
    try:
        payload = parse_hex(data)
        if len(payload) > 0xFF:
            raise ValueError("Command data must be at most 255 bytes")
        command = Command(cla, ins, p1, p2, data=payload, le=le)
    except (ApduError, ValueError) as e:
        return _error(e)

    logger.debug("Encoded command %r", command)
    result = _command_to_dict(command)
    result["length"] = len(command.to_bytes())
    return result


@mcp.tool()
def decode_command(apdu: str) -> dict[str, Any]:
    """Decode a hex command APDU into its header, data and Le fields.

    Args:
        apdu: Command frame as hex (whitespace allowed).
    """
    try:
        command = command_from_hex(apdu)
    except ApduError as e:
        return _error(e)
    return _command_to_dict(command)


@mcp.tool()
def select_application(aid: str) -> dict[str, Any]:
    """Build a SELECT-by-name command for an application identifier.

    Args:
        aid: Application identifier as hex, e.g. "A0000000031010".
    """
    try:
        aid_bytes = parse_hex(aid)
    except ApduError as e:
        return _error(e)
    if not aid_bytes:
        return _error(ValueError("AID must not be empty"))
    return _command_to_dict(build_select(aid_bytes))


# ─── RESPONSE TOOLS ──────────────────────────────────────────────────

@mcp.tool()
def decode_response(response: str) -> dict[str, Any]:
    """Split a hex response APDU into data and status word.

    Args:
        response: Response frame as hex (whitespace allowed).
    """
    try:
        decoded = _decode_response(parse_hex(response))
    except ApduError as e:
        return _error(e)

    result = {"data": decoded.data.hex()}
    result.update(_status_to_dict(decoded.status_word))
    return result


@mcp.tool()
def parse_response(response: str) -> dict[str, Any]:
    """Return the response data, or an error unless the status is exactly 9000.

    On error the partial response data is still included.

    Args:
        response: Response frame as hex (whitespace allowed).
    """
    try:
        data = _parse_response(parse_hex(response))
    except StatusError as e:
        result = _error(e)
        result["data"] = e.data.hex()
        result["status_word"] = f"{e.status_word.value:04X}"
        return result
    except ApduError as e:
        return _error(e)
    return {"data": data.hex(), "success": True}


@mcp.tool()
def describe_status(status_word: str) -> dict[str, Any]:
    """Describe a two-byte status word.

    Args:
        status_word: SW1 SW2 as hex, e.g. "6A82".
    """
    try:
        sw = StatusWord.from_bytes(parse_hex(status_word))
    except ApduError as e:
        return _error(e)
    return _status_to_dict(sw)


# ─── RESOURCES ───────────────────────────────────────────────────────

@mcp.resource("apdu://status-words")
def resource_status_words() -> str:
    """The full status word description table."""
    entries = [
        {"status_word": f"{code:04X}", "description": description}
        for code, description in sorted(STATUS_WORDS.items())
    ]
    return json.dumps({"status_words": entries, "count": len(entries)})


@mcp.resource("apdu://wire-format")
def resource_wire_format() -> str:
    """Byte layouts of command and response frames."""
    return json.dumps({
        "command": "[CLA:1][INS:1][P1:1][P2:1]([Lc:1][Data:Lc])?[Le:1]",
        "response": "[Data:0..N][SW1:1][SW2:1]",
        "notes": [
            "Lc and Data are present only when Data is non-empty",
            "Le is always encoded; a missing Le decodes as 0",
            "Only 9000 is success when parsing; 9FXX is also non-error "
            "when classifying",
        ],
    })


# ─── PROMPTS ─────────────────────────────────────────────────────────

@mcp.prompt()
def explain_exchange(command_hex: str, response_hex: str) -> str:
    """Explain one command/response exchange with a card."""
    return f"""Decode the command {command_hex} with decode_command and the
response {response_hex} with decode_response.

Explain:
- Which instruction was sent (CLA, INS, P1, P2) and what the data field holds
- Whether Le was set and how the response length compares to it
- What the status word means, using describe_status
- Whether a follow-up command is expected (e.g. 61XX or 6CXX status words)"""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting %s MCP server", SERVER_NAME)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
