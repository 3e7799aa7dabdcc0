# ==============================================================================
# File: bundle_builder.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 3
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial implementation, adapted from the standalone bundle_project script.",
    "Related files are emitted directly after the file that names them (depth-first).",
    "CRITICAL FIX: Files are marked visited before their related files are resolved, so Controller <-> Service cycles terminate.",
    "Visited set is keyed by the resolved file identity, not the include-path spelling, so duplicate include paths no longer double-emit.",
    "Missing include paths and unreadable files are recorded as diagnostics and the run continues.",
    "Added tqdm progress per include path and the cooperative CancellationToken.",
    "Unified the include-list and exclude-list variants behind PathMatcher.",
    "Added skip_paths so a bundle written inside the root is never bundled itself.",
    "Visited key falls back to the resolved path when the filesystem reports no inode number.",
]
# ------------------------------------------------------------------------------
from dataclasses import dataclass, field
from pathlib import Path
from typing import Hashable, Iterable, List, Optional, Set, Tuple
import argparse
import os
import sys
import threading

from tqdm import tqdm

import config
from bundle_config import BundleConfiguration
from bundle_errors import (
    BundleDiagnostic,
    CANCELLED,
    FILE_READ_FAILURE,
    PATH_NOT_FOUND,
    format_diagnostics,
)
from debug_print import my_debug_print
from file_collector import FileCollector
from path_matcher import PathMatcher
from relationship_resolver import RelationshipResolver

print = my_debug_print.print


class CancellationToken:
    """Checked between file emissions. Setting it stops the run after the current file."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class BundleResult:
    text: str
    entries: List[Tuple[str, str]] = field(default_factory=list)
    diagnostics: List[BundleDiagnostic] = field(default_factory=list)
    cancelled: bool = False

    @property
    def files(self) -> List[str]:
        return [relative_path for relative_path, _ in self.entries]


def render_file_block(relative_path: str, content: str) -> str:
    return f"\n{config.FILE_MARKER}{relative_path}\n{content}\n"


class BundleBuilder:
    """
    Produces one bundle: every eligible file under the scan roots, each one
    immediately followed by the related files its name points at.
    """

    def __init__(self, root_dir, bundle_config: BundleConfiguration,
                 show_progress: bool = False, cancel_token: Optional[CancellationToken] = None,
                 skip_paths: Iterable = ()):
        self.root_dir = Path(root_dir).resolve()
        self.config = bundle_config
        self.show_progress = show_progress
        self.cancel_token = cancel_token
        # Never emitted, e.g. the bundle file itself when it is written inside the root
        self.skip_paths = [Path(p) for p in skip_paths]

        self.matcher = PathMatcher(bundle_config)
        self.resolver = RelationshipResolver(self.root_dir, bundle_config)
        self.collector = FileCollector(bundle_config.extension)

        self.visited: Set[Hashable] = set()
        self.entries: List[Tuple[str, str]] = []
        self.diagnostics: List[BundleDiagnostic] = []
        self.cancelled = False

    def _relative(self, file_path: Path) -> str:
        return Path(os.path.relpath(file_path, self.root_dir)).as_posix()

    @staticmethod
    def _visit_key(file_path: Path) -> Hashable:
        # Same file reached through another spelling (case, symlink, './') gets the same key.
        # Hard links share an inode and are emitted once.
        try:
            stats = os.stat(file_path)
        except OSError:
            stats = None
        if stats is not None and stats.st_ino:
            return (stats.st_dev, stats.st_ino)
        # Some FAT/SMB/FUSE mounts report st_ino == 0 for every file
        return os.path.normcase(os.path.realpath(file_path))

    def _check_cancelled(self) -> bool:
        if self.cancel_token is not None and self.cancel_token.is_cancelled and not self.cancelled:
            self.cancelled = True
            self.diagnostics.append(BundleDiagnostic(CANCELLED, None, "Run cancelled, bundle is partial."))
        return self.cancelled

    def emit(self, file_path: Path) -> str:
        """Renders file_path and, depth-first, its unvisited related files."""
        if self._check_cancelled():
            return ""
        key = self._visit_key(file_path)
        if key in self.visited:
            return ""
        self.visited.add(key)

        relative_path = self._relative(file_path)
        try:
            with open(file_path, 'r', encoding=config.READ_ENCODING, errors='replace') as infile:
                content = infile.read()
        except OSError as e:
            self.diagnostics.append(BundleDiagnostic(FILE_READ_FAILURE, relative_path, str(e.strerror or e)))
            print(f"Skipping {relative_path}: {e}")
            return ""

        self.entries.append((relative_path, content))
        output = render_file_block(relative_path, content)

        if self.config.follow_relationships:
            for related_path in self.resolver.resolve(file_path.name):
                if self.matcher.is_excluded(self._relative(related_path)):
                    continue
                if self._visit_key(related_path) not in self.visited:
                    output += self.emit(related_path)
        return output

    def build(self) -> BundleResult:
        # Fresh per run
        self.visited = set()
        self.entries = []
        self.diagnostics = []
        self.cancelled = False
        self.collector.errors = []
        for skip_path in self.skip_paths:
            self.visited.add(self._visit_key(skip_path))
        parts = [self.config.banner]

        for included_path in self.matcher.scan_roots():
            if self._check_cancelled():
                break
            full_path = self.root_dir / included_path
            if not full_path.is_dir():
                self.diagnostics.append(BundleDiagnostic(PATH_NOT_FOUND, included_path, "Included path does not exist."))
                continue

            files = list(self.collector.collect(full_path))
            for file_path in tqdm(files, desc=included_path or '.', unit='file',
                                  disable=not self.show_progress, file=sys.stderr, leave=False):
                if not self.matcher.is_eligible(self._relative(file_path)):
                    continue
                if self._visit_key(file_path) in self.visited:
                    continue
                parts.append(self.emit(file_path))

        # Directory errors are gathered by the collector while it walks
        self.diagnostics.extend(self.collector.errors)

        return BundleResult(
            text="".join(parts),
            entries=list(self.entries),
            diagnostics=list(self.diagnostics),
            cancelled=self.cancelled,
        )


def bundle(root_path, bundle_config: BundleConfiguration) -> str:
    """The single invocation surface: root + configuration in, bundle text out."""
    return BundleBuilder(root_path, bundle_config).build().text


def report_diagnostics(result: BundleResult):
    print(f"Bundled {len(result.entries)} file(s).")
    if result.diagnostics:
        print(format_diagnostics(result.diagnostics))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Bundle Builder for logic_bundler: concatenates the logic layer of a project.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    parser.add_argument('--root', type=str, help='Project root to bundle with the default configuration.')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Bundle Builder")
        sys.exit(0)
    elif args.root:
        from bundle_config import DEFAULT_CONFIGURATION
        result = BundleBuilder(args.root, DEFAULT_CONFIGURATION, show_progress=True).build()
        sys.stdout.write(result.text)
        report_diagnostics(result)
    else:
        parser.print_help()
