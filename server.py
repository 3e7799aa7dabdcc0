# ==============================================================================
# File: server.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 3
_CHANGELOG_ENTRIES = [
    "Initial implementation of the read-only bundle viewer.",
    "Added /api/bundle with the per-file list and diagnostics.",
    "Added /api/config (GET and POST) for the include-path list.",
    "Answer 409 instead of crashing when no configuration can be built.",
]
_PATCH_VERSION = len(_CHANGELOG_ENTRIES)
# ------------------------------------------------------------------------------
from pathlib import Path
import argparse
import sys

from flask import Flask, Response, abort, jsonify, request

import config
from bundle_builder import BundleBuilder
from bundle_config import MODE_INCLUDE
from bundle_errors import BundlerError
from config_manager import ConfigManager, normalize_include_path
from debug_print import my_debug_print

print = my_debug_print.print

app = Flask(__name__)

# Global instances (initialized in init_server)
ROOT_DIR = None
CONFIG = None


def init_server(root_dir, config_manager: ConfigManager):
    global ROOT_DIR, CONFIG
    ROOT_DIR = Path(root_dir).resolve()
    CONFIG = config_manager


def _build():
    if CONFIG is None:
        abort(503, description="Server not initialised.")
    try:
        bundle_config = CONFIG.build_configuration()
    except BundlerError as e:
        abort(409, description=str(e))
    if not bundle_config.included_paths and bundle_config.mode == MODE_INCLUDE:
        abort(409, description="No include paths configured.")
    return BundleBuilder(ROOT_DIR, bundle_config).build()


# --- ROUTES ---

@app.route('/')
def index():
    result = _build()
    return Response(result.text, content_type='text/plain; charset=utf-8')


@app.route('/api/bundle')
def api_bundle():
    result = _build()
    return jsonify({
        'files': result.files,
        'diagnostics': [d.to_dict() for d in result.diagnostics],
        'cancelled': result.cancelled,
        'text': result.text,
    })


@app.route('/api/config', methods=['GET'])
def api_get_config():
    if CONFIG is None:
        abort(503, description="Server not initialised.")
    try:
        return jsonify(CONFIG.build_configuration().to_settings())
    except BundlerError as e:
        abort(409, description=str(e))


@app.route('/api/config', methods=['POST'])
def api_update_config():
    if CONFIG is None:
        abort(503, description="Server not initialised.")
    payload = request.get_json(silent=True) or {}
    paths = payload.get('includedPaths')
    if not isinstance(paths, list):
        return jsonify({'error': "'includedPaths' must be a list."}), 400

    try:
        normalized = [normalize_include_path(p) for p in paths if isinstance(p, str)]
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    if len(normalized) != len(paths):
        return jsonify({'error': "'includedPaths' must contain only strings."}), 400

    CONFIG.save_included_paths(normalized)
    return jsonify({'includedPaths': normalized})


def run_server(root_dir, config_manager: ConfigManager, port: int = config.SERVER_PORT):
    """Entry point called by main.py"""
    init_server(root_dir, config_manager)
    print(f"Starting bundle viewer on http://{config.SERVER_HOST}:{port}")
    print("Press CTRL+C to stop.")
    app.run(host=config.SERVER_HOST, port=port, debug=False)


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Read-only bundle viewer for logic_bundler.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    parser.add_argument('--root', type=str, default='.', help='Project root to serve.')
    parser.add_argument('--port', type=int, default=config.SERVER_PORT, help='Port to listen on.')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Bundle Viewer Server")
        sys.exit(0)

    run_server(args.root, ConfigManager(root_dir=Path(args.root)), args.port)
