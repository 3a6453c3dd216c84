"""Protocol layer: command framing, response parsing, and status words."""

from .framing import (
    Command,
    command_from_hex,
    decode_command,
    encode_command,
    format_command,
    must_command_from_hex,
)
from .commands import build_select, build_select_frame
from .parser import Response, decode_response, parse_response
from .status import STATUS_WORDS, StatusWord
