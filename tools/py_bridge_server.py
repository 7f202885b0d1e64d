import sys
import os
import argparse
import importlib


# Fail loudly and helpfully if required Python packages are missing.
def _require_modules(mods):
    missing = []
    for m in mods:
        try:
            importlib.import_module(m)
        except ImportError:
            missing.append(m)
    if missing:
        print("\nERROR: Missing required Python package(s): {}".format(', '.join(missing)))
        print("Install them with:")
        print("  python -m pip install -r tools/requirements.txt")
        print("If you don't have Python, download it from https://www.python.org/downloads/")
        sys.exit(1)


_require_modules(['flask'])

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from SOPE.SBM.bridge_server import create_app

app = create_app()


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='.sol to JSON HTTP bridge')
    parser.add_argument('--host', default='127.0.0.1')
    parser.add_argument('--port', type=int, default=5000)
    args = parser.parse_args()
    # Run on localhost:5000 by default
    app.run(host=args.host, port=args.port)
