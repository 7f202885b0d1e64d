# =============================================================================
# varint_codec.py — 29-bit Expandable Integer Decoder
# =============================================================================
#
# Wire form (big-endian group order, MSB of each byte = "more follows"):
#
#   1 byte : 0xxxxxxx                              →  7 data bits
#   2 bytes: 1xxxxxxx 0xxxxxxx                     → 14 data bits
#   3 bytes: 1xxxxxxx 1xxxxxxx 0xxxxxxx            → 21 data bits
#   4 bytes: 1xxxxxxx 1xxxxxxx 1xxxxxxx xxxxxxxx   → 29 data bits
#
# The 4th byte has no continuation flag; all 8 of its bits are data.
#
# SIGN RULE (format quirk, do not "fix"):
#   Only the 4-byte form can be negative.  When 29 bits were read and bit 28
#   is set, the value is a 29-bit two's-complement integer.  A 1-3 byte value
#   is always non-negative, whatever its top bit.
#
#   e.g.  7F          → 127
#         81 00       → 128
#         FF FF FF FF → -1
#         C0 80 80 00 → -268435456  (-2^28, the most negative value)
# =============================================================================

from __future__ import annotations

from SOPE.SMM.constants import (
    VARINT_GROUP_BITS, VARINT_MAX_GROUPS, VARINT_TERMINAL_BITS,
    VARINT_CONTINUE, VARINT_GROUP_MASK, VARINT_SIGNED_BITS,
)

from .byte_cursor import ByteCursor


def decode_varint(cursor: ByteCursor) -> tuple[int, int]:
    """
    Decode one expandable integer.

    Returns
    -------
    value     : int  — signed only in the 29-bit form
    data_bits : int  — 7, 14, 21 or 29
    """
    val = 0
    data_bits = 0
    finished = True

    for _ in range(VARINT_MAX_GROUPS):
        part = cursor.read_u8()
        finished = not (part & VARINT_CONTINUE)
        val = (val << VARINT_GROUP_BITS) | (part & VARINT_GROUP_MASK)
        data_bits += VARINT_GROUP_BITS
        if finished:
            break

    if not finished:
        part = cursor.read_u8()
        val = (val << VARINT_TERMINAL_BITS) | part
        data_bits += VARINT_TERMINAL_BITS

    if data_bits == VARINT_SIGNED_BITS and val >> (data_bits - 1) == 1:
        val -= 1 << VARINT_SIGNED_BITS

    return val, data_bits


def read_varint(cursor: ByteCursor) -> int:
    return decode_varint(cursor)[0]
