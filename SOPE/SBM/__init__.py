# =============================================================================
# SBM — Shared-object Bridge Module
# =============================================================================
#
# HTTP front door for the decoder, so a browser or another process can hand
# over a .sol file and get JSON back without touching Python directly.
#
# Sub-modules
# -----------
# bridge_server.py  — Flask app factory.  Exposes:
#
#       POST /py-bridge/parse   multipart field `sol` → SharedObject.to_dict()
#       GET  /py-bridge/health  → {"status": "ok"}
#
# Run it with tools/py_bridge_server.py.
# =============================================================================
