# =============================================================================
# errors.py — Decode Failure Kinds
# =============================================================================
#
# Every failure aborts the whole parse; there is no partial document.
# The one exception is the skipped-type heuristic in record_decoder.py,
# which never raises.
#
#   FileUnavailable   — path missing / unreadable (raised by parse(path))
#   OutOfBounds       — read past the buffer or the declared document end
#   InvalidEncoding   — string bytes are not valid UTF-8
#   DanglingReference — string-table index not (yet) present
#   UnknownType       — type tag outside 0x00-0x11
# =============================================================================

from __future__ import annotations


class SOParseError(ValueError):
    """Base class for everything the decoder raises.

    ``offset`` is the byte position where the problem was detected, or
    None when it has no meaningful position (e.g. the file never opened).
    """

    kind = "SOParseError"

    def __init__(self, message: str, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset

    @property
    def message(self) -> str:
        return super().__str__()

    def __str__(self) -> str:
        if self.offset is None:
            return self.message
        return f"{self.message} (offset {self.offset})"


class FileUnavailable(SOParseError):
    kind = "FileUnavailable"


class OutOfBounds(SOParseError):
    kind = "OutOfBounds"


class InvalidEncoding(SOParseError):
    kind = "InvalidEncoding"


class DanglingReference(SOParseError):
    kind = "DanglingReference"


class UnknownType(SOParseError):
    kind = "UnknownType"

    def __init__(self, tag: int, offset: int | None = None) -> None:
        super().__init__(f"unknown type tag 0x{tag:02X}", offset)
        self.tag = tag
