# =============================================================================
# record_decoder.py — Key/Value Record Decoder
# =============================================================================
#
# One call to decode_record() consumes exactly one record:
#
#   [VarInt key descriptor][key bytes if inline][u8 tag][payload][u8 padding]
#
# Descriptor (keys AND string values use the same scheme):
#   low bit 1 → inline:  remaining bits = UTF-8 byte length, bytes follow,
#                        string is appended to the StringTable
#   low bit 0 → indexed: remaining bits = StringTable index
#
# Tag dispatch:
#   0x00 Undefined   0x01 Null   0x02 false   0x03 true    — no payload
#   0x04 Integer     — one VarInt
#   0x05 Double      — 8 bytes, big-endian
#   0x06 String      — descriptor as above
#   0x07-0x11        — recognised, NOT decoded, payload skipped (see below)
#   anything else    — UnknownType
#
# Padding: one byte after every value unless that value ended exactly on the
# logical end-of-document.  Its content is not checked.
#
# ── SKIPPED TYPES: KNOWN LIMITATION ──────────────────────────────────────────
# Array / object / date / byte-array / vector / dictionary payloads are not
# parsed.  To stay aligned we scan forward to the next 0x00 byte and step
# back one, so that zero is re-read as this record's padding byte (or the
# next key descriptor).  This is a heuristic, not a structural skip: a payload
# that contains a 0x00 before its real end will leave the cursor misaligned
# and the following records will decode as garbage or fail.  It never raises
# by itself.  Each skip is reported to the sink with its byte count so a
# misaligned file can be spotted in the trace.
# =============================================================================

from __future__ import annotations

from SOPE.SMM.constants import (
    TYPE_UNDEFINED, TYPE_NULL, TYPE_BOOL_FALSE, TYPE_BOOL_TRUE,
    TYPE_INT, TYPE_DOUBLE, TYPE_STRING,
    SKIPPED_TAGS, TAG_NAMES, DESCRIPTOR_INLINE_FLAG,
)

from .byte_cursor import ByteCursor
from .double_codec import read_double
from .errors import UnknownType
from .string_table import StringTable
from .values import (
    SOValue, SORecord, DecodeEvent, DecodeSink,
    UNDEFINED, NULL, FALSE, TRUE,
    integer, double, string, skipped,
)
from .varint_codec import read_varint


class RecordDecoder:
    """
    Decodes records from a cursor that has already been positioned past the
    preamble, sharing one StringTable across every record of the document.

    Parameters
    ----------
    cursor : ByteCursor
        Reader whose ``end`` is the logical end-of-document.
    table : StringTable
        Back-reference table for this parse.
    sink : callable, optional
        Receives one DecodeEvent per key and per value.
    """

    def __init__(
        self,
        cursor: ByteCursor,
        table: StringTable,
        sink: DecodeSink | None = None,
    ) -> None:
        self.cursor = cursor
        self.table  = table
        self.sink   = sink

        self._handlers = {
            TYPE_UNDEFINED:  lambda: UNDEFINED,
            TYPE_NULL:       lambda: NULL,
            TYPE_BOOL_FALSE: lambda: FALSE,
            TYPE_BOOL_TRUE:  lambda: TRUE,
            TYPE_INT:        lambda: integer(read_varint(self.cursor)),
            TYPE_DOUBLE:     lambda: double(read_double(self.cursor)),
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def decode_record(self) -> SORecord:
        cur = self.cursor

        key_pos = cur.pos
        key, inline, _ = self._read_string()
        self._emit(key_pos, "key", key, f"{key} (inline: {inline})", inline)

        value = self.decode_value()

        if cur.remaining():
            cur.read_u8()   # padding

        return SORecord(key, value)

    def decode_value(self) -> SOValue:
        cur = self.cursor
        tag_pos = cur.pos
        tag = cur.read_u8()

        if tag == TYPE_STRING:
            return self._read_string_value(tag_pos)

        handler = self._handlers.get(tag)
        if handler is not None:
            value = handler()
            self._emit(tag_pos, "value", TAG_NAMES[tag], str(value))
            return value

        if tag in SKIPPED_TAGS:
            n = self._skip_payload()
            self._emit(
                tag_pos, "skip", TAG_NAMES[tag],
                f"type not implemented, skipped {n} byte(s)",
            )
            return skipped(tag)

        raise UnknownType(tag, tag_pos)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read_string(self) -> tuple[str, bool, int]:
        """
        Read a descriptor and the string it names.

        Returns
        -------
        s      : str
        inline : bool  — False when s came from the table
        n      : int   — byte length if inline, table index otherwise
        """
        cur = self.cursor
        desc_pos = cur.pos
        desc = read_varint(cur)
        inline = bool(desc & DESCRIPTOR_INLINE_FLAG)
        n = desc >> 1

        if inline:
            s = cur.read_utf8(n)
            self.table.append(s)
        else:
            s = self.table.resolve(n, desc_pos)
        return s, inline, n

    def _read_string_value(self, tag_pos: int) -> SOValue:
        s, inline, n = self._read_string()
        if inline:
            detail = f"{s!r} ({n})"
        else:
            detail = f"reference to string {n}: {s!r}"
        self._emit(tag_pos, "value", TAG_NAMES[TYPE_STRING], detail, inline)
        return string(s)

    def _skip_payload(self) -> int:
        """Advance to the next 0x00 byte and leave it unread.

        Bounded by the logical end; if no zero byte turns up the cursor stops
        at the end.  Returns the number of bytes consumed.
        """
        cur = self.cursor
        start = cur.pos
        while cur.remaining():
            if cur.read_u8() == 0:
                cur.rewind(1)
                break
        return cur.pos - start

    def _emit(
        self,
        offset: int,
        stage: str,
        name: str,
        detail: str,
        inline: bool | None = None,
    ) -> None:
        if self.sink is not None:
            self.sink(DecodeEvent(offset, stage, name, detail, inline))
