"""Tests for the MCP tool surface."""

from __future__ import annotations

import json
import sys
from unittest.mock import MagicMock, patch


def _get_server_module():
    """Import server module with FastMCP mocked to avoid init issues."""
    mock_fastmcp_cls = MagicMock()
    mock_fastmcp_instance = MagicMock()
    # Make the @mcp.tool() decorator a no-op that returns the function unchanged
    mock_fastmcp_instance.tool.return_value = lambda fn: fn
    mock_fastmcp_instance.resource.return_value = lambda fn: fn
    mock_fastmcp_instance.prompt.return_value = lambda fn: fn
    mock_fastmcp_cls.return_value = mock_fastmcp_instance

    with patch.dict(sys.modules, {}):
        with patch("mcp.server.fastmcp.FastMCP", mock_fastmcp_cls):
            sys.modules.pop("apdu_mcp.server", None)
            import apdu_mcp.server as server_mod

    return server_mod


def test_encode_command():
    server = _get_server_module()
    result = server.encode_command(0x11, 0x22, 0x33, 0x44, data="88 99", le=0x77)
    assert result["hex"] == "1122334402889977"
    assert result["lc"] == 2
    assert result["length"] == 8


def test_encode_command_out_of_range():
    """Bad input is reported, not raised."""
    server = _get_server_module()
    result = server.encode_command(0x100, 0x00, 0x00, 0x00)
    assert result["kind"] == "ValueError"


def test_encode_command_rejects_oversized_data():
    server = _get_server_module()
    result = server.encode_command(0x00, 0xD6, 0x00, 0x00, data="00" * 256)
    assert "255" in result["error"]


def test_encode_command_bad_hex():
    server = _get_server_module()
    result = server.encode_command(0x00, 0xA4, 0x04, 0x00, data="zz")
    assert result["kind"] == "HexParseError"


def test_decode_command():
    server = _get_server_module()
    result = server.decode_command("11223344 02 7788 99")
    assert result["cla"] == "0x11"
    assert result["data"] == "7788"
    assert result["le"] == "0x99"


def test_decode_command_errors():
    server = _get_server_module()
    assert server.decode_command("1122")["kind"] == "InvalidLengthError"
    assert server.decode_command("1122334403 77")["kind"] == "DataLengthMismatchError"
    assert server.decode_command("000W")["kind"] == "HexParseError"


def test_select_application():
    server = _get_server_module()
    result = server.select_application("A0000000031010")
    assert result["hex"] == "00a4040007a000000003101000"
    assert result["ins"] == "0xA4"


def test_select_application_empty_aid():
    server = _get_server_module()
    assert "error" in server.select_application("")


def test_decode_response():
    server = _get_server_module()
    result = server.decode_response("112233 9F00")
    assert result["data"] == "112233"
    assert result["status_word"] == "9F00"
    assert result["is_error"] is False
    assert result["is_success"] is False


def test_parse_response_success():
    server = _get_server_module()
    assert server.parse_response("0102 9000") == {"data": "0102", "success": True}


def test_parse_response_status_error_keeps_data():
    server = _get_server_module()
    result = server.parse_response("112233 6A82")
    assert result["kind"] == "StatusError"
    assert result["error"] == "6A82 (File not found)"
    assert result["data"] == "112233"
    assert result["status_word"] == "6A82"


def test_parse_response_too_short():
    server = _get_server_module()
    assert server.parse_response("90")["kind"] == "InvalidLengthError"


def test_describe_status():
    server = _get_server_module()
    result = server.describe_status("6A82")
    assert result["description"] == "6A82 (File not found)"
    assert result["is_error"] is True
    assert server.describe_status("90")["kind"] == "InvalidLengthError"


def test_status_words_resource():
    server = _get_server_module()
    payload = json.loads(server.resource_status_words())
    codes = {e["status_word"]: e["description"] for e in payload["status_words"]}
    assert codes["6A82"] == "File not found"
    assert payload["count"] == len(payload["status_words"])


def test_wire_format_resource():
    server = _get_server_module()
    payload = json.loads(server.resource_wire_format())
    assert "Le" in payload["command"]
    assert "SW1" in payload["response"]


def test_explain_exchange_prompt():
    server = _get_server_module()
    text = server.explain_exchange("00a4040002112200", "9000")
    assert "00a4040002112200" in text
    assert "9000" in text
