# =============================================================================
# double_codec.py — IEEE-754 Double Decoder
# =============================================================================
#
# The file stores doubles most-significant byte first.  We read the 8 bytes,
# reverse them, and unpack as little-endian: the net result is a big-endian
# decode, written out so the byte order is obvious next to the hex dump.
#
# No validation: NaN payloads, signed zero and infinities pass straight
# through as whatever bit pattern was stored.
# =============================================================================

from __future__ import annotations

import struct

from SOPE.SMM.constants import DOUBLE_SIZE

from .byte_cursor import ByteCursor


def read_double(cursor: ByteCursor) -> float:
    raw = cursor.read_bytes(DOUBLE_SIZE)
    return struct.unpack('<d', raw[::-1])[0]
