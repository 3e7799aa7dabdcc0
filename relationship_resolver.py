# ==============================================================================
# File: relationship_resolver.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 3
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial implementation of naming-convention lookups (Controller -> Service/Repository).",
    "Rules are read from BundleConfiguration instead of a module-level table.",
    "FIX: Base name strips only the matched suffix, the role token is re-added by the template.",
    "Every rule is evaluated, overlapping patterns concatenate their candidates.",
]
# ------------------------------------------------------------------------------
from pathlib import Path
from typing import List, Tuple
import argparse
import sys

from bundle_config import BundleConfiguration, RelationshipRule


class RelationshipResolver:
    """
    Maps a filename to the existing files its naming convention points at.

    For ``UserController.php`` and the default rules the base name is
    ``User`` and the candidates are ``app/Services/UserService.php`` and
    ``app/Repositories/UserRepository.php``. Candidates that do not exist
    are dropped without an error.
    """

    def __init__(self, root_dir: Path, bundle_config: BundleConfiguration):
        self.root_dir = Path(root_dir)
        self.rules = bundle_config.file_relationships
        self.extension = bundle_config.extension

    @staticmethod
    def base_name(filename: str, rule: RelationshipRule) -> str:
        return rule.regex.sub('', filename, count=1)

    def candidate_names(self, filename: str) -> List[Tuple[str, str]]:
        """(directory, name) pairs for every matching rule, existence not checked."""
        candidates = []
        for rule in self.rules:
            if not rule.regex.search(filename):
                continue
            base = self.base_name(filename, rule)
            for producer in rule.related:
                candidates.append((producer.directory, producer.candidate_name(base, self.extension)))
        return candidates

    def resolve(self, filename: str) -> List[Path]:
        related_files = []
        for directory, name in self.candidate_names(filename):
            candidate = self.root_dir / directory / name
            if candidate.is_file():
                related_files.append(candidate)
        return related_files


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Relationship resolver for logic_bundler: lists related files for a filename.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    parser.add_argument('--root', type=str, default='.', help='Project root.')
    parser.add_argument('filenames', nargs='*', help='Bare filenames, e.g. UserController.php')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Relationship Resolver")
        sys.exit(0)

    from bundle_config import DEFAULT_CONFIGURATION
    resolver = RelationshipResolver(Path(args.root).resolve(), DEFAULT_CONFIGURATION)
    for name in args.filenames:
        print(f"{name}:")
        for directory, candidate in resolver.candidate_names(name):
            print(f"    {directory}/{candidate}")
