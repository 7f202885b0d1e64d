# =============================================================================
# SDM — Stream Decode Module
# Subfolder of SOPE (Shared Object Parsing Engine)
# =============================================================================
#
# Turns the raw bytes of a .sol file into a SharedObject.
#
# Modules (leaf-first):
#   errors.py          — SOParseError and the five failure kinds
#   values.py          — SOValue / SORecord / SharedObject / DecodeEvent
#   byte_cursor.py     — bounds-checked big-endian reader over the file bytes
#   varint_codec.py    — 29-bit expandable integer decoder
#   double_codec.py    — byte-swapped IEEE-754 double decoder
#   string_table.py    — append-only back-reference table
#   record_decoder.py  — one key/value record per call, tag dispatch
#   document_parser.py — preamble → name → records state machine; parse()
#   store_path.py      — on-device .sol location helper
#
# Constants live in SOPE/SMM/constants.py
# Inspection tools live in SOPE/SVM/
# =============================================================================
