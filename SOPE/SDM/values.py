# =============================================================================
# values.py — SharedObject Data Model
# =============================================================================
#
#   SOValue      — (tag, data): the tag byte as read + the decoded payload
#   SORecord     — (key, value): one named value, immutable
#   SharedObject — ordered records + preamble info, first-match get()
#   DecodeEvent  — one diagnostic line handed to the caller's sink
#
# Keys are NOT unique.  Records keep read order and duplicates are preserved;
# get() returns the first match and an Undefined value when nothing matches.
# =============================================================================

from __future__ import annotations

import math
from typing import Callable, Iterator, NamedTuple

from SOPE.SMM.constants import (
    TYPE_UNDEFINED, TYPE_NULL, TYPE_BOOL_FALSE, TYPE_BOOL_TRUE,
    TYPE_INT, TYPE_DOUBLE, TYPE_STRING,
    TAG_NAMES, TAG_KINDS, KIND_SKIPPED,
)


class SOValue(NamedTuple):
    tag:  int                                 # type tag byte (0x00-0x11)
    data: bool | int | float | str | None = None   # None for payload-less / skipped

    @property
    def kind(self) -> str:
        return TAG_KINDS[self.tag]

    @property
    def type_name(self) -> str:
        return TAG_NAMES[self.tag]

    @property
    def is_undefined(self) -> bool:
        return self.tag == TYPE_UNDEFINED

    @property
    def is_skipped(self) -> bool:
        return self.kind == KIND_SKIPPED

    def to_json(self):
        """JSON-safe payload.  Non-finite doubles become strings."""
        if isinstance(self.data, float) and not math.isfinite(self.data):
            if math.isnan(self.data):
                return "NaN"
            return "Infinity" if self.data > 0 else "-Infinity"
        return self.data

    def __str__(self) -> str:
        if self.is_skipped:
            return f"<{self.type_name} skipped>"
        if self.data is None:
            return self.kind
        return repr(self.data) if isinstance(self.data, str) else str(self.data)


UNDEFINED = SOValue(TYPE_UNDEFINED)
NULL      = SOValue(TYPE_NULL)
FALSE     = SOValue(TYPE_BOOL_FALSE, False)
TRUE      = SOValue(TYPE_BOOL_TRUE, True)


def integer(value: int) -> SOValue:
    return SOValue(TYPE_INT, value)


def double(value: float) -> SOValue:
    return SOValue(TYPE_DOUBLE, value)


def string(value: str) -> SOValue:
    return SOValue(TYPE_STRING, value)


def skipped(tag: int) -> SOValue:
    return SOValue(tag)


class SORecord(NamedTuple):
    key:   str
    value: SOValue


class DecodeEvent(NamedTuple):
    offset: int            # byte offset where the field started
    stage:  str            # "preamble" | "name" | "key" | "value" | "skip"
    name:   str            # field / key name
    detail: str            # human-readable value
    inline: bool | None = None   # keys and strings only


DecodeSink = Callable[[DecodeEvent], None]


class SharedObject:
    """
    Decoded contents of one .sol file.

    Parameters
    ----------
    name : str
        Document name from the preamble.
    type_marker : int
        32-bit marker that follows the name.  Kept for diagnostics.
    declared_length : int
        Byte count the preamble declared for everything after its length field.
    """

    def __init__(
        self,
        name: str = "",
        type_marker: int = 0,
        declared_length: int = 0,
    ) -> None:
        self.name            = name
        self.type_marker     = type_marker
        self.declared_length = declared_length
        self._records: list[SORecord] = []

    @property
    def records(self) -> tuple[SORecord, ...]:
        return tuple(self._records)

    def append(self, record: SORecord) -> None:
        self._records.append(record)

    def get(self, key: str) -> SOValue:
        for record in self._records:
            if record.key == key:
                return record.value
        return UNDEFINED

    def keys(self) -> list[str]:
        return [r.key for r in self._records]

    def __contains__(self, key: str) -> bool:
        return any(r.key == key for r in self._records)

    def __iter__(self) -> Iterator[SORecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return (
            f"SharedObject(name={self.name!r}, type_marker={self.type_marker}, "
            f"records={len(self._records)})"
        )

    def to_dict(self) -> dict:
        return {
            "name":            self.name,
            "type_marker":     self.type_marker,
            "declared_length": self.declared_length,
            "records": [
                {
                    "key":   r.key,
                    "kind":  r.value.kind,
                    "tag":   r.value.tag,
                    "value": r.value.to_json(),
                }
                for r in self._records
            ],
        }
