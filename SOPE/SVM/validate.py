#!/usr/bin/env python3
# =============================================================================
# validate.py — SDM Self-Validation Suite
# =============================================================================
#
# Run directly:  python -m SOPE.SVM.validate
#             or python SOPE/SVM/validate.py (from project root)
#
# Tests:
#   1. Constants integrity  — tag sets disjoint, every tag named, layout sums
#   2. VarInt codec         — 1-3 byte forms unsigned, 4-byte form signed
#   3. Double codec         — big-endian bit patterns survive, NaN included
#   4. String table         — append/resolve, dangling references rejected
#   5. Document scenarios   — empty doc, bool, int, string back-reference,
#                             skipped type, unknown type
# =============================================================================

import sys
import os
import math
import struct

# Allow running from project root without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from SOPE.SMM.constants import (
    PREAMBLE_SIZE, DECLARED_LENGTH_BASE,
    DECODED_TAGS, SKIPPED_TAGS, KNOWN_TAGS, TAG_NAMES, TAG_KINDS,
    TYPE_BOOL_TRUE, TYPE_INT, TYPE_STRING, TYPE_ARRAY,
)
from SOPE.SDM.byte_cursor import ByteCursor
from SOPE.SDM.varint_codec import decode_varint
from SOPE.SDM.double_codec import read_double
from SOPE.SDM.string_table import StringTable
from SOPE.SDM.document_parser import parse_bytes
from SOPE.SDM.errors import DanglingReference, UnknownType, OutOfBounds

PASS = "[PASS]"
FAIL = "[FAIL]"

failures = 0

def check(label: str, condition: bool, detail: str = "") -> bool:
    global failures
    if condition:
        print(f"  {PASS} {label}")
    else:
        print(f"  {FAIL} {label}{(' -- ' + detail) if detail else ''}")
        failures += 1
    return condition


def raises(exc_type, fn, *args) -> bool:
    try:
        fn(*args)
    except exc_type:
        return True
    return False


def sol(body: bytes, name: str = "") -> bytes:
    """Wrap a record body in a preamble whose declared length matches it."""
    name_b = name.encode("utf-8")
    tail = (b"\x00" * 10 + struct.pack(">H", len(name_b)) + name_b
            + struct.pack(">I", 3) + body)
    return b"\x00\xbf" + struct.pack(">I", len(tail)) + tail


# =============================================================================
# TEST 1 — Constants Integrity
# =============================================================================
print("\n" + "="*60)
print("TEST 1 — Constants Integrity")
print("="*60)

check("PREAMBLE_SIZE = 16",             PREAMBLE_SIZE == 16, f"got {PREAMBLE_SIZE}")
check("DECLARED_LENGTH_BASE = 6",       DECLARED_LENGTH_BASE == 6)
check("Decoded and skipped tags are disjoint",
      not (DECODED_TAGS & SKIPPED_TAGS))
check("Known tags are 0x00-0x11 contiguous",
      KNOWN_TAGS == set(range(0x12)), f"got {sorted(KNOWN_TAGS)}")
check("Every known tag has a name",     all(t in TAG_NAMES for t in KNOWN_TAGS))
check("Every known tag has a kind",     all(t in TAG_KINDS for t in KNOWN_TAGS))


# =============================================================================
# TEST 2 — VarInt Codec
# =============================================================================
print("\n" + "="*60)
print("TEST 2 — VarInt Codec")
print("="*60)

VARINT_CASES = [
    (b"\x00",             0,          7),
    (b"\x7f",             127,        7),
    (b"\x81\x00",         128,        14),
    (b"\xff\x7f",         16383,      14),
    (b"\x81\x80\x00",     16384,      21),
    (b"\xff\xff\x7f",     2**21 - 1,  21),
    (b"\x80\xc0\x80\x00", 2**21,      29),
    (b"\xbf\xff\xff\xff", 2**28 - 1,  29),
    (b"\xc0\x80\x80\x00", -(2**28),   29),
    (b"\xff\xff\xff\xff", -1,         29),
]
for raw, expected, bits in VARINT_CASES:
    got, got_bits = decode_varint(ByteCursor(raw))
    check(f"VarInt {raw.hex(' '):<12} = {expected}",
          got == expected and got_bits == bits,
          f"got {got} ({got_bits} bits)")

check("VarInt 21-bit form with top bit set stays positive",
      decode_varint(ByteCursor(b"\xff\xff\x7f"))[0] > 0)
check("VarInt truncated stream raises OutOfBounds",
      raises(OutOfBounds, decode_varint, ByteCursor(b"\x80\x80")))


# =============================================================================
# TEST 3 — Double Codec
# =============================================================================
print("\n" + "="*60)
print("TEST 3 — Double Codec")
print("="*60)

for value in (0.0, -0.0, 1.5, -2.25, 1e300, 5e-324, math.inf, -math.inf):
    raw = struct.pack(">d", value)
    got = read_double(ByteCursor(raw))
    check(f"Double {value!r} round-trips bit-for-bit",
          struct.pack(">d", got) == raw, f"got {got!r}")

nan_raw = bytes.fromhex("7ff8000000000123")
nan_got = read_double(ByteCursor(nan_raw))
check("Double NaN payload preserved",
      math.isnan(nan_got) and struct.pack(">d", nan_got) == nan_raw,
      f"got {struct.pack('>d', nan_got).hex()}")


# =============================================================================
# TEST 4 — String Table
# =============================================================================
print("\n" + "="*60)
print("TEST 4 — String Table")
print("="*60)

table = StringTable()
for s in ("alpha", "", "ünïcødé", "alpha"):
    table.append(s)
    check(f"append/resolve {s!r}", table.resolve(len(table) - 1) == s)
check("Duplicate appends kept separately", len(table) == 4)
check("resolve(len) raises DanglingReference",
      raises(DanglingReference, table.resolve, len(table)))
check("resolve(-1) raises DanglingReference",
      raises(DanglingReference, table.resolve, -1))


# =============================================================================
# TEST 5 — Document Scenarios
# =============================================================================
print("\n" + "="*60)
print("TEST 5 — Document Scenarios")
print("="*60)

doc = parse_bytes(sol(b""))
check("Empty preamble → zero records", len(doc) == 0, f"got {len(doc)}")

doc = parse_bytes(sol(b"\x09flag" + bytes([TYPE_BOOL_TRUE])))
check("flag = true", doc.get("flag").data is True, f"got {doc.get('flag')}")

doc = parse_bytes(sol(b"\x03n" + bytes([TYPE_INT]) + b"\x81\x00"))
check("n = 128", doc.get("n").data == 128, f"got {doc.get('n')}")

body = (b"\x03k" + bytes([TYPE_STRING]) + b"\x05hi" + b"\x00"
        + b"\x02" + bytes([TYPE_INT]) + b"\x05")
doc = parse_bytes(sol(body))
check("Indexed key resolves to earlier string value",
      doc.records[1].key == "hi", f"got {doc.keys()}")

body = (b"\x03a" + bytes([TYPE_ARRAY]) + b"\x05\x01\x02" + b"\x00"
        + b"\x03b" + bytes([TYPE_INT]) + b"\x07")
doc = parse_bytes(sol(body))
check("Skipped array keeps next record aligned",
      doc.get("a").is_skipped and doc.get("b").data == 7,
      f"got {[str(r.value) for r in doc]}")

check("Unknown tag 0xFF raises UnknownType",
      raises(UnknownType, parse_bytes, sol(b"\x03x\xff")))

check("Missing key reads back as Undefined",
      parse_bytes(sol(b"")).get("missing").is_undefined)

short = bytearray(sol(b"\x03s" + bytes([TYPE_STRING]) + b"\x0bhello"))
short[2:6] = struct.pack(">I", struct.unpack(">I", short[2:6])[0] - 3)
check("Value crossing the declared end raises OutOfBounds",
      raises(OutOfBounds, parse_bytes, bytes(short)))


# =============================================================================
# Summary
# =============================================================================
print("\n" + "="*60)
if failures == 0:
    print(f"  ALL TESTS PASSED")
else:
    print(f"  {failures} TEST(S) FAILED")
print("="*60 + "\n")
sys.exit(0 if failures == 0 else 1)
