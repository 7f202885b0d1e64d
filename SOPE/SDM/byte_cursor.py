# =============================================================================
# byte_cursor.py — Bounds-checked Sequential Reader
# =============================================================================
#
# Wraps the whole .sol file (already in memory) and a read offset.
#
# Two limits are tracked and they are NOT the same thing:
#   - len(data)  — the physical buffer.
#   - end        — the logical end-of-document from the preamble.  The record
#                  loop stops there; remaining() answers against it.
#
# Every read is bounded by whichever of the two comes first, and running past
# either is OutOfBounds.  Bytes after the logical end are never decoded.  A
# declared length that overshoots the buffer is only caught when a read
# actually runs off the buffer, never up front.
# =============================================================================

from __future__ import annotations

import struct

from .errors import OutOfBounds, InvalidEncoding

_U16 = struct.Struct('>H')
_U32 = struct.Struct('>I')


class ByteCursor:
    """
    Single-owner reader over an immutable byte buffer.

    Usage:
        cur = ByteCursor(raw)
        magic  = cur.read_u16()
        length = cur.read_u32()
        cur.set_end(cur.pos + length)
        while cur.remaining():
            ...
    """

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)  # accept memoryview, bytearray, etc.
        self.pos  = 0
        self.end  = len(self.data)

    # ── Limits ──────────────────────────────────────────────────────────────

    def set_end(self, end: int) -> None:
        """Set the logical end-of-document.  Reads may not cross it."""
        self.end = end

    def remaining(self) -> bool:
        return self.pos < self.end

    def available(self) -> int:
        """Bytes physically left in the buffer."""
        return len(self.data) - self.pos

    def _require(self, n: int) -> None:
        if n < 0:
            raise OutOfBounds(f"negative read length {n}", self.pos)
        if self.pos + n > len(self.data):
            raise OutOfBounds(
                f"read of {n} byte(s) past end of buffer ({len(self.data)} bytes)",
                self.pos,
            )
        if self.pos + n > self.end:
            raise OutOfBounds(
                f"read of {n} byte(s) past declared end of document (offset {self.end})",
                self.pos,
            )

    # ── Fixed-width reads (big-endian) ──────────────────────────────────────

    def read_u8(self) -> int:
        self._require(1)
        b = self.data[self.pos]
        self.pos += 1
        return b

    def read_u16(self) -> int:
        self._require(2)
        v = _U16.unpack_from(self.data, self.pos)[0]
        self.pos += 2
        return v

    def read_u32(self) -> int:
        self._require(4)
        v = _U32.unpack_from(self.data, self.pos)[0]
        self.pos += 4
        return v

    # ── Raw / string reads ──────────────────────────────────────────────────

    def read_bytes(self, n: int) -> bytes:
        self._require(n)
        b = self.data[self.pos:self.pos + n]
        self.pos += n
        return b

    def read_utf8(self, n: int) -> str:
        start = self.pos
        raw = self.read_bytes(n)
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidEncoding(
                f"{n}-byte string is not valid UTF-8: {e.reason}", start
            ) from e

    def rewind(self, n: int = 1) -> None:
        """Step back n bytes.  Only the skip heuristic needs this."""
        if n > self.pos:
            raise OutOfBounds(f"cannot rewind {n} byte(s) from offset {self.pos}", self.pos)
        self.pos -= n

    def __repr__(self) -> str:
        return f"ByteCursor(pos={self.pos}, end={self.end}, size={len(self.data)})"
