#!/usr/bin/env python3
# =============================================================================
# sol_inspector.py — Shared Object Inspector
# =============================================================================
#
# Loads one .sol file, decodes it, and reports what it holds.  Point it at a
# file directly, or give it an AIR application id and it will look in the
# on-device store location.
#
# Usage:
#   python -m SOPE.SVM.sol_inspector <path_to_sol>
#   python -m SOPE.SVM.sol_inspector --app-id com.example.game
#   python -m SOPE.SVM.sol_inspector --app-id com.example.game --so-name scores
#   python -m SOPE.SVM.sol_inspector <path_to_sol> --get int_param --get name
#   python -m SOPE.SVM.sol_inspector <path_to_sol> --trace
#   python -m SOPE.SVM.sol_inspector <path_to_sol> --json
#
# Output sections:
#   [1] File info     — path, size on disk
#   [2] Preamble      — declared length, document name, type marker
#   [3] Records       — every key with its kind and value
#   [4] Lookup        — values of the --get keys (Undefined if absent)
#   [5] VERDICT       — PASS / FAIL with the first decode error
#
# Exit status: 0 = clean parse, 1 = file missing or decode error.
# =============================================================================

from __future__ import annotations
import sys, os, argparse, json

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from SOPE.SMM.constants import DEFAULT_SO_NAME, ANDROID_DATA_ROOT
from SOPE.SDM.document_parser import parse
from SOPE.SDM.errors import SOParseError
from SOPE.SDM.store_path import shared_object_path
from SOPE.SDM.values import DecodeEvent

DIVIDER = "=" * 68


def print_event(event: DecodeEvent) -> None:
    """Sink that narrates each decoded field as it is read."""
    inline = "" if event.inline is None else f"  [{'inline' if event.inline else 'ref'}]"
    print(f"  [{event.offset:>6}] {event.stage:<8} {event.name}: {event.detail}{inline}")


def run_inspect(
    sol_path: str,
    lookups: list[str],
    trace: bool,
    as_json: bool,
) -> bool:
    """
    Decode one .sol file and print the report.
    Returns True if the file decoded cleanly, False otherwise.
    """
    if as_json:
        try:
            so = parse(sol_path)
        except SOParseError as e:
            print(json.dumps({"error": str(e), "kind": e.kind, "offset": e.offset}))
            return False
        print(json.dumps(so.to_dict(), indent=2))
        return True

    # -----------------------------------------------------------------------
    # [1] File info
    # -----------------------------------------------------------------------
    print(f"\n{DIVIDER}")
    print(f"  Shared Object Inspector")
    print(DIVIDER)
    print(f"  File     : {sol_path}")
    if os.path.exists(sol_path):
        print(f"  Size     : {os.path.getsize(sol_path):,} bytes")

    if trace:
        print(f"\n  -- Decode Trace --")

    try:
        so = parse(sol_path, sink=print_event if trace else None)
    except SOParseError as e:
        print(f"\n{DIVIDER}")
        if e.offset is None:
            print(f"  [!!] {e.kind}: {e.message}")
        else:
            print(f"  [!!] {e.kind} at offset {e.offset}: {e.message}")
        print(f"  VERDICT: FAIL — file could not be decoded")
        print(f"{DIVIDER}\n")
        return False

    # -----------------------------------------------------------------------
    # [2] Preamble
    # -----------------------------------------------------------------------
    print(f"\n  -- Preamble --")
    print(f"  Data size : {so.declared_length:,} bytes")
    print(f"  SO name   : {so.name!r}")
    print(f"  SO type   : {so.type_marker}")

    # -----------------------------------------------------------------------
    # [3] Records
    # -----------------------------------------------------------------------
    print(f"\n  -- Records ({len(so)}) --")
    skipped = 0
    for i, rec in enumerate(so):
        if rec.value.is_skipped:
            skipped += 1
        print(f"  {i:>4}  {rec.key:<32} {rec.value.kind:<9} {rec.value}")
    if skipped:
        print(f"  [INFO] {skipped} record(s) of undecoded types were skipped; "
              f"later records may be misaligned if those payloads held 0x00 bytes")

    # -----------------------------------------------------------------------
    # [4] Lookup
    # -----------------------------------------------------------------------
    if lookups:
        print(f"\n  -- Lookup --")
        for key in lookups:
            value = so.get(key)
            print(f"  Parameter {key}: {value}")

    # -----------------------------------------------------------------------
    # [5] Verdict
    # -----------------------------------------------------------------------
    print(f"\n{DIVIDER}")
    print(f"  VERDICT: PASS — {len(so)} record(s) decoded")
    print(f"{DIVIDER}\n")
    return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------
def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Flash / AIR Shared Object (.sol) Inspector",
    )
    parser.add_argument("sol", nargs="?", help="Path to a .sol file")
    parser.add_argument(
        "--app-id",
        help="AIR application id; reads the file from the on-device store",
    )
    parser.add_argument(
        "--so-name", default=DEFAULT_SO_NAME,
        help=f"Shared object name under --app-id, default {DEFAULT_SO_NAME}",
    )
    parser.add_argument(
        "--root", default=ANDROID_DATA_ROOT,
        help=f"Data root used with --app-id, default {ANDROID_DATA_ROOT}",
    )
    parser.add_argument(
        "--get", action="append", default=[], metavar="KEY",
        help="Print the value of KEY (repeatable)",
    )
    parser.add_argument(
        "--trace", action="store_true",
        help="Print every decoded field with its byte offset",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print the decoded document as JSON instead of a report",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.sol and args.app_id:
        parser.error("give either a path or --app-id, not both")
    if args.app_id:
        sol_path = shared_object_path(args.app_id, args.so_name, args.root)
    elif args.sol:
        sol_path = args.sol
    else:
        parser.error("a .sol path or --app-id is required")

    ok = run_inspect(
        sol_path=sol_path,
        lookups=args.get,
        trace=args.trace,
        as_json=args.json,
    )
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
