# =============================================================================
# SOPE/SBM/bridge_server.py — .sol → JSON HTTP Bridge (Flask)
# =============================================================================
#
# The upload is decoded entirely in memory; nothing is written to disk.
#
# Responses:
#   200  SharedObject.to_dict()
#   400  {"error"}                    — no `sol` file field in the request
#   422  {"error", "kind", "offset"}  — the file did not decode
# =============================================================================

from __future__ import annotations

from flask import Flask, request, jsonify

from SOPE.SDM.document_parser import parse_bytes
from SOPE.SDM.errors import SOParseError


def create_app() -> Flask:
    app = Flask(__name__)

    @app.route('/py-bridge/parse', methods=['POST'])
    def parse_upload():
        if 'sol' not in request.files:
            return jsonify({'error': 'missing file field `sol`'}), 400
        data = request.files['sol'].read()
        try:
            so = parse_bytes(data)
        except SOParseError as e:
            return jsonify({'error': str(e), 'kind': e.kind, 'offset': e.offset}), 422
        return jsonify(so.to_dict())

    @app.route('/py-bridge/health', methods=['GET'])
    def health():
        return jsonify({'status': 'ok'})

    return app
