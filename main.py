# ==============================================================================
# File: main.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 3
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial implementation.",
    "Integrated all bundle components (matcher, collector, resolver, builder).",
    "Added the configure and serve commands.",
    "Added --use-defaults, --exclude-mode and --no-relationships overrides.",
    "Exit status 2 when no configuration is available (nothing is produced).",
    "--exclude-mode is applied before the configuration prompt; --use-defaults always has include paths.",
    "The output file is skipped by the walk; -o without a value writes the default bundle name into the root.",
]
# ------------------------------------------------------------------------------
from dataclasses import replace
from pathlib import Path
from typing import List, Optional
import argparse
import sys

import config
from bundle_builder import BundleBuilder, report_diagnostics
from bundle_config import MODE_EXCLUDE
from bundle_errors import BundlerError, CONFIGURATION_MISSING
from config_manager import ConfigManager, choose_from_console, configure_interactively
from debug_print import my_debug_print

print = my_debug_print.print

EXIT_OK = 0
EXIT_CONFIGURATION_MISSING = 2
EXIT_CONFIGURATION_ERROR = 3


def _manager(args) -> ConfigManager:
    root = Path(args.root)
    return ConfigManager(Path(args.config) if args.config else None, root_dir=root)


def run_bundle(args) -> int:
    """Builds the bundle and writes it to --output or stdout."""
    root = Path(args.root)
    if not root.is_dir():
        print(f"Error: Root directory '{root}' does not exist.")
        return EXIT_CONFIGURATION_MISSING

    manager = _manager(args)
    mode = MODE_EXCLUDE if args.exclude_mode else None
    try:
        if args.use_defaults:
            bundle_config = manager.default_configuration()
            if mode:
                bundle_config = replace(bundle_config, mode=mode)
        else:
            bundle_config = manager.get_configuration(choose_from_console, mode=mode)
    except BundlerError as e:
        print(f"Error: {e}")
        return EXIT_CONFIGURATION_ERROR

    if bundle_config is None:
        print(f"[{CONFIGURATION_MISSING}] No configuration selected, no bundle produced.")
        return EXIT_CONFIGURATION_MISSING

    if args.no_relationships:
        bundle_config = replace(bundle_config, follow_relationships=False)

    # '-o' without a value writes the default bundle name into the root
    output_path = None
    if args.output is not None:
        output_path = Path(args.output) if args.output else root / config.OUTPUT_FILE_NAME

    skip_paths = [output_path] if output_path else []
    result = BundleBuilder(root, bundle_config, show_progress=not args.quiet, skip_paths=skip_paths).build()

    if output_path:
        with open(output_path, 'w', encoding='utf-8') as outfile:
            outfile.write(result.text)
        print(f"Bundle complete: {output_path}")
    else:
        sys.stdout.write(result.text)
        sys.stdout.flush()

    report_diagnostics(result)
    return EXIT_OK


def run_configure(args) -> int:
    manager = _manager(args)
    if not configure_interactively(manager):
        print("Configuration unchanged.")
    return EXIT_OK


def run_serve(args) -> int:
    from server import run_server
    run_server(Path(args.root), _manager(args), args.port)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Logic Bundler: flattens a project's logic layer into one text file.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    parser.add_argument('--debug', action='store_true', help='Prefix console messages with timestamp and caller.')

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--root', type=str, default='.', help="Project root (default: current directory).")
    common.add_argument('--config', type=str, help="Settings file (default: <root>/bundler_config.json).")

    subparsers = parser.add_subparsers(dest='command')

    bundle_parser = subparsers.add_parser('bundle', parents=[common], help='Build the bundle.')
    bundle_parser.add_argument('--output', '-o', type=str, nargs='?', const='', help=f'Write the bundle to this file instead of stdout (no value: <root>/{config.OUTPUT_FILE_NAME}).')
    bundle_parser.add_argument('--use-defaults', action='store_true', help='Do not prompt; fall back to the default include paths.')
    bundle_parser.add_argument('--exclude-mode', action='store_true', help='Walk the whole root and apply excludedPaths instead of includedPaths.')
    bundle_parser.add_argument('--no-relationships', action='store_true', help='Do not pull in related files.')
    bundle_parser.add_argument('--quiet', action='store_true', help='Hide the progress bar.')
    bundle_parser.set_defaults(func=run_bundle)

    configure_parser = subparsers.add_parser('configure', parents=[common], help='Choose the folders to include.')
    configure_parser.set_defaults(func=run_configure)

    serve_parser = subparsers.add_parser('serve', parents=[common], help='Serve the bundle as a read-only document.')
    serve_parser.add_argument('--port', type=int, default=config.SERVER_PORT, help='Port to listen on.')
    serve_parser.set_defaults(func=run_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Main Bundler Entry Point")
        return EXIT_OK

    if args.debug:
        my_debug_print.control_debug(True)

    if not getattr(args, 'func', None):
        parser.print_help()
        return EXIT_OK
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
