# ==============================================================================
# File: path_matcher.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 3
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial implementation of the include-list matcher.",
    "Added the exclude-list mode from the standalone bundle script.",
    "FIX: Exclusion prefixes are separator-aware, 'app/Http' no longer excludes 'app/HttpClient'.",
    "Backslashes and leading './' are normalised before comparing.",
]
# ------------------------------------------------------------------------------
from typing import Tuple
import argparse
import posixpath
import sys

import config
from bundle_config import BundleConfiguration, MODE_EXCLUDE

SEP = config.PATH_SEPARATOR


def normalize_relative_path(path: str) -> str:
    """POSIX form without './', '..' hops or a leading '/'. A trailing separator is kept."""
    path = path.replace('\\', SEP).lstrip(SEP)
    if not path:
        return ''
    trailing = path.endswith(SEP)
    path = posixpath.normpath(path)
    if path == '.':
        return ''
    return path + SEP if trailing else path


def is_under(relative_path: str, directory: str) -> bool:
    """True when relative_path is the directory itself or lies beneath it."""
    directory = normalize_relative_path(directory).rstrip(SEP)
    relative_path = normalize_relative_path(relative_path)
    if not directory:
        return True
    return relative_path == directory or relative_path.startswith(directory + SEP)


class PathMatcher:
    """
    Decides whether a root-relative file path belongs in the bundle.

    Include mode: the file must live under one of the included directories.
    Exclude mode: every file is eligible unless an exclusion entry matches.
    Entries ending in '/' cover the directory and everything below it;
    entries without one match that exact path only. In both modes the file
    must carry the configured extension.
    """

    def __init__(self, bundle_config: BundleConfiguration):
        self.mode = bundle_config.mode
        self.extension = bundle_config.extension
        self.included_paths = bundle_config.included_paths
        self.excluded_paths = tuple(normalize_relative_path(p) for p in bundle_config.excluded_paths)

    def has_extension(self, relative_path: str) -> bool:
        return relative_path.endswith(self.extension)

    def is_excluded(self, relative_path: str) -> bool:
        relative_path = normalize_relative_path(relative_path)
        for entry in self.excluded_paths:
            if entry.endswith(SEP):
                if is_under(relative_path, entry):
                    return True
            elif relative_path == entry:
                return True
        return False

    def is_included(self, relative_path: str) -> bool:
        return any(is_under(relative_path, directory) for directory in self.included_paths)

    def is_eligible(self, relative_path: str) -> bool:
        if not self.has_extension(relative_path):
            return False
        if self.is_excluded(relative_path):
            return False
        if self.mode == MODE_EXCLUDE:
            return True
        return self.is_included(relative_path)

    def scan_roots(self) -> Tuple[str, ...]:
        """Root-relative directories to walk, in output order."""
        if self.mode == MODE_EXCLUDE:
            return ('',)
        return self.included_paths


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Path matcher for logic_bundler: include/exclude eligibility checks.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    parser.add_argument('paths', nargs='*', help='Relative paths to test against the default configuration.')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Path Matcher")
        sys.exit(0)

    from bundle_config import DEFAULT_CONFIGURATION
    matcher = PathMatcher(DEFAULT_CONFIGURATION)
    for p in args.paths:
        print(f"{p}: {'eligible' if matcher.is_eligible(p) else 'skipped'}")
