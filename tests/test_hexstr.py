"""Tests for hex text helpers."""

import pytest

from apdu_mcp.errors import HexParseError
from apdu_mcp.utils.hexstr import parse_hex, strip_whitespace


def test_strip_whitespace():
    assert strip_whitespace(" a\tb\nc\rd ") == "abcd"


def test_strip_whitespace_keeps_other_characters():
    assert strip_whitespace("a\fb\vc") == "a\fb\vc"


def test_parse_hex():
    assert parse_hex("de ad\nbe\tef") == b"\xde\xad\xbe\xef"
    assert parse_hex("") == b""


def test_parse_hex_chains_cause():
    with pytest.raises(HexParseError) as excinfo:
        parse_hex("0g")
    assert isinstance(excinfo.value.__cause__, ValueError)
