# =============================================================================
# Shared Object Parsing Engine (SOPE)
# Reads Flash / AIR local-storage files (.sol) into typed key/value records.
# =============================================================================
#
# ── PYTHON OWNS THE DECODE, NOTHING ELSE ─────────────────────────────────────
#
# RESPONSIBLE for:
#   - Byte-exact reading of the .sol preamble and record stream
#       Big-endian fixed-width fields, 29-bit expandable integers,
#       byte-swapped doubles, UTF-8 strings.
#   - The string back-reference table
#       Every inline key / string is remembered in read order so later
#       records can point at it by index.
#   - Type-tag dispatch
#       undefined, null, boolean, integer, double and string are decoded.
#       XML, date, array, object, byte-array, vector and dictionary are
#       recognised and skipped (see SDM/record_decoder.py for the caveat).
#
# NOT responsible for:
#   - Writing .sol files (read-only engine)
#   - Console output.  The decoder hands DecodeEvents to an optional sink;
#     the SVM inspector is the one that prints.
#
# ── DATA FLOW ─────────────────────────────────────────────────────────────────
#   path  → document_parser.parse()        (one-shot whole-file read)
#   bytes → ByteCursor                     (offset + logical end)
#         → record_decoder.decode_record() (per key/value pair)
#         → SharedObject                   (ordered records, first-match get)
#
# ── Module layout ─────────────────────────────────────────────────────────────
#   SMM/  — Stream Map Module: every tag number and layout constant
#   SDM/  — Stream Decode Module: cursor, codecs, string table, decoders
#   SVM/  — Stream Verification Module: CLI inspector + self-validation suite
#   SBM/  — Shared-object Bridge Module: Flask HTTP bridge
# =============================================================================
