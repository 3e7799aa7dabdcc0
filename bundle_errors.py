# ==============================================================================
# File: bundle_errors.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 3
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial implementation of the diagnostic record and error kinds.",
    "Added CANCELLED for cooperative cancellation of long runs.",
    "Added format_diagnostics for the end-of-run summary.",
]
# ------------------------------------------------------------------------------
from dataclasses import dataclass
from typing import List, Optional
import argparse
import sys

# --- Diagnostic Kinds ---
CONFIGURATION_MISSING = "ConfigurationMissing"
PATH_NOT_FOUND = "PathNotFound"
FILE_READ_FAILURE = "FileReadFailure"
UNHANDLED_IO_ERROR = "UnhandledIOError"
CANCELLED = "Cancelled"


class BundlerError(Exception):
    """Base class for errors raised by the bundler."""


class ConfigurationError(BundlerError):
    """A settings value has the wrong shape and cannot be turned into a configuration."""


@dataclass(frozen=True)
class BundleDiagnostic:
    """One per-item problem recorded during a run. Never fatal."""
    kind: str
    path: Optional[str]
    message: str

    def __str__(self) -> str:
        if self.path:
            return f"[{self.kind}] {self.path}: {self.message}"
        return f"[{self.kind}] {self.message}"

    def to_dict(self) -> dict:
        return {'kind': self.kind, 'path': self.path, 'message': self.message}


def format_diagnostics(diagnostics: List[BundleDiagnostic]) -> str:
    """Renders the end-of-run summary."""
    if not diagnostics:
        return "No problems reported."
    lines = [f"{len(diagnostics)} problem(s) reported:"]
    for diagnostic in diagnostics:
        lines.append(f"    {diagnostic}")
    return "\n".join(lines)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Diagnostic kinds for logic_bundler.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Bundle Errors and Diagnostics")
        sys.exit(0)
    else:
        parser.print_help()
