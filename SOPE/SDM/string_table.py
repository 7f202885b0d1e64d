# =============================================================================
# string_table.py — String Back-Reference Table
# =============================================================================
#
# Every inline key and every inline string value is appended here, in the
# order it is read.  Later records may point at an entry by its 0-based index
# instead of repeating the bytes.
#
#   - Append-only for the life of one parse; never pruned or deduplicated
#     (appending "a" twice gives two entries).
#   - Indices are only meaningful inside the parse that built the table.
#   - A reference must point at an entry that already exists; a forward
#     reference is a DanglingReference.
# =============================================================================

from __future__ import annotations

from .errors import DanglingReference


class StringTable:

    def __init__(self) -> None:
        self._strings: list[str] = []

    def append(self, s: str) -> None:
        self._strings.append(s)

    def resolve(self, index: int, offset: int | None = None) -> str:
        if not 0 <= index < len(self._strings):
            raise DanglingReference(
                f"string reference {index} outside table of {len(self._strings)} entr"
                f"{'y' if len(self._strings) == 1 else 'ies'}",
                offset,
            )
        return self._strings[index]

    def __len__(self) -> int:
        return len(self._strings)

    def __iter__(self):
        return iter(self._strings)
