"""
Byte-precise sequential dump of a .sol shared object file.
Every preamble field, key and value is printed with its offset and the exact
bytes it was decoded from, so misaligned records (e.g. after a skipped
array/object payload) can be spotted by eye.
"""
import sys, os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from SOPE.SDM.document_parser import parse_bytes
from SOPE.SDM.errors import SOParseError, FileUnavailable


def dump(path, max_bytes=32):
    print(f"\n{'='*72}")
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        error = FileUnavailable(f"shared object {path!r} unavailable: {e.strerror}")
        print(f"FILE: {os.path.basename(path)}")
        print('='*72)
        print(f"[     -] *** {error.kind}: {error}")
        return False
    print(f"FILE: {os.path.basename(path)}  ({len(data):,} bytes)")
    print('='*72)

    print(f"First 18 bytes (preamble + name length): {data[:18].hex(' ')}")

    events = []
    error = None
    try:
        parse_bytes(data, sink=events.append)
    except SOParseError as e:
        error = e

    # Each field runs from its own offset to the next field's offset
    bounds = [ev.offset for ev in events[1:]] + [len(data)]
    for ev, nxt in zip(events, bounds):
        raw = data[ev.offset:min(nxt, ev.offset + max_bytes)]
        more = '…' if nxt - ev.offset > max_bytes else ''
        flag = '' if ev.inline is None else (' inline' if ev.inline else ' ref')
        print(f"[{ev.offset:>6}] {ev.stage:<8} {ev.name}{flag}: {ev.detail}")
        print(f"           bytes: {raw.hex(' ')}{more}")

    if error is not None:
        at = error.offset if error.offset is not None else 0
        print(f"[{at:>6}] *** {error.kind}: {error}")
        print(f"           context -5..+16: {data[max(0, at-5):at+16].hex(' ')}")
        return False
    print("[   end] clean decode")
    return True


if __name__ == '__main__':
    if len(sys.argv) < 2:
        print("usage: python tools/dump_sol.py <file.sol> [<file.sol> ...]")
        sys.exit(2)
    ok = True
    for p in sys.argv[1:]:
        ok = dump(p) and ok
    sys.exit(0 if ok else 1)
