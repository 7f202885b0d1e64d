# =============================================================================
# document_parser.py — .sol Document Parser
# =============================================================================
#
# State machine:
#
#   READING_PREAMBLE  → u16, u32 L, u32, u16, u32     (16 bytes)
#                       logical end = 6 + L
#   READING_NAME      → u16 length, UTF-8 name, u32 type marker
#   READING_RECORDS   → RecordDecoder.decode_record() while pos < end
#   DONE              → return the SharedObject
#
# Any error in any state aborts the parse and propagates unchanged; the caller
# never sees a half-filled document from a failed parse.  When a caller passes
# its own document to merge into, records are collected first and only
# appended once the whole file has decoded cleanly.
#
# Main API:
#   parse(path, document=None, sink=None)       -> SharedObject
#   parse_bytes(data, document=None, sink=None) -> SharedObject
# =============================================================================

from __future__ import annotations

import os

from SOPE.SMM.constants import DECLARED_LENGTH_BASE

from .byte_cursor import ByteCursor
from .errors import FileUnavailable
from .record_decoder import RecordDecoder
from .string_table import StringTable
from .values import SharedObject, SORecord, DecodeEvent, DecodeSink

READING_PREAMBLE = "ReadingPreamble"
READING_NAME     = "ReadingDocumentName"
READING_RECORDS  = "ReadingRecords"
DONE             = "Done"


class DocumentParser:
    """
    One-shot parser for a single in-memory .sol image.

    Parameters
    ----------
    data : bytes-like
        The complete file contents.
    sink : callable, optional
        Receives a DecodeEvent for every preamble field, key and value.
    """

    def __init__(self, data: bytes, sink: DecodeSink | None = None) -> None:
        self.cursor = ByteCursor(data)
        self.table  = StringTable()
        self.sink   = sink
        self.state  = READING_PREAMBLE

    def parse(self, document: SharedObject | None = None) -> SharedObject:
        cur = self.cursor

        # ── Preamble ────────────────────────────────────────────────────
        cur.read_u16()                       # reserved
        length_pos = cur.pos
        declared_length = cur.read_u32()
        cur.set_end(DECLARED_LENGTH_BASE + declared_length)
        cur.read_u32()                       # reserved
        cur.read_u16()                       # reserved
        cur.read_u32()                       # reserved
        self._emit(length_pos, "preamble", "data size", str(declared_length))

        # ── Document name + type marker ─────────────────────────────────
        self.state = READING_NAME
        name_pos = cur.pos
        name = cur.read_utf8(cur.read_u16())
        self._emit(name_pos, "name", "SO name", name)
        marker_pos = cur.pos
        type_marker = cur.read_u32()
        self._emit(marker_pos, "name", "SO type", str(type_marker))

        # ── Records ─────────────────────────────────────────────────────
        self.state = READING_RECORDS
        decoder = RecordDecoder(cur, self.table, self.sink)
        records: list[SORecord] = []
        while cur.remaining():
            records.append(decoder.decode_record())

        self.state = DONE
        if document is None:
            document = SharedObject(name, type_marker, declared_length)
        else:
            document.name            = name
            document.type_marker     = type_marker
            document.declared_length = declared_length
        for record in records:
            document.append(record)
        return document

    def _emit(self, offset: int, stage: str, name: str, detail: str) -> None:
        if self.sink is not None:
            self.sink(DecodeEvent(offset, stage, name, detail))


def parse_bytes(
    data: bytes,
    document: SharedObject | None = None,
    sink: DecodeSink | None = None,
) -> SharedObject:
    """
    Decode a complete .sol image already in memory.

    Parameters
    ----------
    data : bytes-like
    document : SharedObject, optional
        Existing document to append into.  Records are added after the ones
        it already holds; nothing is deduplicated or overwritten.
    sink : callable, optional
        Diagnostic sink (see DecodeEvent).

    Raises
    ------
    SOParseError
        OutOfBounds, InvalidEncoding, DanglingReference or UnknownType.
    """
    return DocumentParser(data, sink).parse(document)


def parse(
    path: str | os.PathLike,
    document: SharedObject | None = None,
    sink: DecodeSink | None = None,
) -> SharedObject:
    """
    Read a .sol file from disk and decode it.

    Raises FileUnavailable when the path is missing or cannot be read,
    otherwise as parse_bytes().
    """
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise FileUnavailable(f"shared object {os.fspath(path)!r} unavailable: {e.strerror}") from e
    return parse_bytes(data, document, sink)
