"""ISO 7816-4 constants and the generic SELECT command builder."""

from __future__ import annotations

from .framing import Command, encode_command

CLA_ISO = 0x00
INS_SELECT = 0xA4
P1_SELECT_BY_NAME = 0x04
P2_FIRST_OCCURRENCE = 0x00


def build_select(aid: bytes) -> Command:
    """Build a SELECT command that selects an application by its AID.

    Args:
        aid: Application identifier, sent as the command data field.
    """
    return Command(
        cla=CLA_ISO,
        ins=INS_SELECT,
        p1=P1_SELECT_BY_NAME,
        p2=P2_FIRST_OCCURRENCE,
        data=aid,
    )


def build_select_frame(aid: bytes) -> bytes:
    """Build an encoded SELECT frame ready to hand to a transport."""
    return encode_command(build_select(aid))
