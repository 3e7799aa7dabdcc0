# ==============================================================================
# File: config.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 3
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Static settings for the logic bundler.",
    "Moved the banner and file marker format here from the builder.",
    "Added the settings file name used by ConfigManager.",
]
# ------------------------------------------------------------------------------
import argparse
import sys

# --- Settings File ---
# Workspace-scoped settings, stored next to the scanned project.
SETTINGS_FILE_NAME = 'bundler_config.json'

# --- Bundle Format ---
DEFAULT_EXTENSION = '.php'
DEFAULT_BANNER = "<?php\n\n// LARAVEL LOGIC CODE BUNDLE\n\n"
FILE_MARKER = "// FILE: "
OUTPUT_FILE_NAME = 'logic_bundle.php'

# --- Path Handling ---
PATH_SEPARATOR = '/'
READ_ENCODING = 'utf-8'

# --- Viewer ---
SERVER_HOST = '127.0.0.1'
SERVER_PORT = 5000


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Configuration file for the logic_bundler Project. Holds static settings.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Static Configuration and Global Settings")
        sys.exit(0)
    else:
        parser.print_help()
