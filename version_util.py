# ==============================================================================
# File: version_util.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 3
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial implementation.",
    "Patch number is the length of the module's _CHANGELOG_ENTRIES list.",
    "Added --get_all to audit the version and changelog format of every bundler file.",
    "get_file_version returns the version triple so the audit and tests share one code path.",
]
# ------------------------------------------------------------------------------

# Full scope of the project for the --get_all command (relative to the project root).
VERSION_CHECK_FILES = [
    "version_util.py",
    "config.py",
    "config_manager.py",
    "debug_print.py",
    "bundle_errors.py",
    "bundle_config.py",
    "path_matcher.py",
    "relationship_resolver.py",
    "file_collector.py",
    "bundle_builder.py",
    "server.py",
    "main.py",
    "test/test_all.py",
    "test/test_path_matcher.py",
    "test/test_relationship_resolver.py",
    "test/test_file_collector.py",
    "test/test_bundle_builder.py",
    "test/test_config_manager.py",
    "test/test_server.py",
    "test/test_main.py",
]

from pathlib import Path
from typing import Optional, Tuple
import sys
import argparse
import importlib.util

# --- Helper Functions for Dynamic Import ---

def _load_module_by_path(filepath: Path):
    """Dynamically loads a module given its file path to access its variables."""
    module_name = f"_version_probe_{filepath.stem}"
    spec = importlib.util.spec_from_file_location(module_name, filepath)
    if spec is None:
        raise ImportError(f"Could not load spec for {filepath}")

    module = importlib.util.module_from_spec(spec)
    # The probe name keeps the already-imported module untouched
    spec.loader.exec_module(module)
    return module


def get_file_version(filepath: Path) -> Tuple[object, object, Optional[int]]:
    """(major, minor, patch). Patch is None when the changelog list is missing."""
    module = _load_module_by_path(Path(filepath).resolve())
    major = getattr(module, '_MAJOR_VERSION', 'ERR')
    minor = getattr(module, '_MINOR_VERSION', 'ERR')
    changelog_list = getattr(module, '_CHANGELOG_ENTRIES', None)
    patch = len(changelog_list) if changelog_list is not None else None
    return major, minor, patch


def get_all_file_versions(project_root: Path):
    """Prints the version and changelog format status of every project file."""
    print("=" * 75)
    print("PROJECT VERSION AUDIT: Independent Versioning Status")
    print(f"Project Root: {project_root.resolve()}")
    print("=" * 75)
    print(f"{'FILE':<38}{'VERSION (M.m.P)':<18}{'CHANGELOG FORMAT':<18}")
    print("-" * 75)

    for filename in VERSION_CHECK_FILES:
        filepath = project_root / filename
        if not filepath.exists():
            print(f"{filename:<38}{'---':<18}{'FILE NOT FOUND':<18}")
            continue

        try:
            major, minor, patch = get_file_version(filepath)
        except Exception:
            # Any import-time failure (syntax error, missing dependency) is reported, not raised
            print(f"{filename:<38}{'---':<18}{'IMPORT FAILED':<18}")
            continue

        if patch is None:
            full_version = f"{major}.{minor}.???"
            format_status = "❌ COMMENTS/MISSING"
        else:
            full_version = f"{major}.{minor}.{patch}"
            format_status = "✅ LIST-BASED"
        print(f"{filename:<38}{full_version:<18}{format_status:<18}")

    print("=" * 75)


def print_version_info(file_path: str, component_name: str, print_changelog: bool = True):
    """
    Prints the version information and changelog for a single file
    by dynamically loading its variables.
    """
    file_path_obj = Path(file_path).resolve()

    try:
        module = _load_module_by_path(file_path_obj)
        major = getattr(module, '_MAJOR_VERSION', 'ERR')
        minor = getattr(module, '_MINOR_VERSION', 'ERR')
        changelog_list = getattr(module, '_CHANGELOG_ENTRIES', [])
    except Exception as e:
        print(f"Component: {component_name}")
        print(f"Project: {file_path_obj.parent.name}")
        print(f"Version: Error printing version info (Import failed): {e}")
        return

    print(f"Component: {component_name}")
    print(f"Project: {file_path_obj.parent.name}")
    print(f"Version: {major}.{minor}.{len(changelog_list)}")

    if print_changelog:
        print("\nCHANGELOG:")
        for i, entry in enumerate(changelog_list, 1):
            print(f"    {i}. {entry}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Version Utility")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information for this utility and exit.')
    parser.add_argument('--get_all', action='store_true', help='Perform a version audit across all project files.')
    args = parser.parse_args()

    project_root = Path(__file__).resolve().parent

    if args.version:
        print_version_info(__file__, "Version Utility (self-check)")
        sys.exit(0)
    elif args.get_all:
        get_all_file_versions(project_root)
        sys.exit(0)
    else:
        parser.print_help()
        sys.exit(0)
