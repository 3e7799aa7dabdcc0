# ==============================================================================
# File: file_collector.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 3
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial implementation of recursive file discovery, adapted from the media scanner.",
    "Switched from os.walk to os.scandir so files and subdirectories keep their listing order.",
    "A missing root now yields nothing instead of raising.",
    "Unreadable directories are recorded as UnhandledIOError and their siblings are still visited.",
    "Symlinked directories are no longer followed, preventing loops.",
]
# ------------------------------------------------------------------------------
from pathlib import Path
from typing import Iterator, List
import argparse
import os
import sys

from bundle_errors import BundleDiagnostic, UNHANDLED_IO_ERROR
from debug_print import my_debug_print

print = my_debug_print.print


class FileCollector:
    """
    Enumerates every file with the configured extension beneath a directory.

    Entries are visited in the order the operating system lists them and a
    subdirectory is descended into at the position it is listed, so a run on
    an unchanged tree always yields the same sequence.
    """

    def __init__(self, extension: str):
        self.extension = extension
        self.errors: List[BundleDiagnostic] = []
        self.files_found_count = 0
        self.directories_scanned_count = 0

    def collect(self, directory: Path) -> Iterator[Path]:
        directory = Path(directory)
        if not directory.is_dir():
            return
        yield from self._walk(directory)

    def _walk(self, directory: Path) -> Iterator[Path]:
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            self.errors.append(BundleDiagnostic(UNHANDLED_IO_ERROR, str(directory), f"Cannot list directory: {e.strerror or e}"))
            print(f"Warning: Cannot access {directory}: {e.strerror or e}")
            return

        self.directories_scanned_count += 1
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    yield from self._walk(Path(entry.path))
                elif entry.name.endswith(self.extension) and entry.is_file():
                    self.files_found_count += 1
                    yield Path(entry.path)
            except OSError as e:
                self.errors.append(BundleDiagnostic(UNHANDLED_IO_ERROR, entry.path, f"Cannot inspect entry: {e.strerror or e}"))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="File Collector for logic_bundler: lists files with an extension under a directory.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    parser.add_argument('--dir', type=str, help='Directory to scan.')
    parser.add_argument('--ext', type=str, default='.php', help='Extension to collect (default: .php).')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Recursive File Collector")
        sys.exit(0)
    elif args.dir:
        collector = FileCollector(args.ext)
        for path in collector.collect(Path(args.dir)):
            sys.stdout.write(f"{path}\n")
        print(f"\nScan complete. Directories scanned: {collector.directories_scanned_count}, files found: {collector.files_found_count}")
    else:
        parser.print_help()
