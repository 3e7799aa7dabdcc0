# ==============================================================================
# File: bundle_config.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 3
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial implementation of BundleConfiguration and the default Laravel rules.",
    "Relationship rules are now declarative records (pattern + name templates) instead of callables.",
    "Added the configurable extension and the exclusion mode fields.",
    "Added from_settings/to_settings for the JSON settings file.",
    "FIX: Controllers related to a Service are looked up under app/Http/Controllers, where they are collected from.",
]
# ------------------------------------------------------------------------------
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple
import argparse
import json
import re
import sys

import config
from bundle_errors import ConfigurationError

MODE_INCLUDE = "include"
MODE_EXCLUDE = "exclude"
VALID_MODES = (MODE_INCLUDE, MODE_EXCLUDE)

DEFAULT_INCLUDED_PATHS = (
    'app/Http/Controllers/',
    'app/Services/',
    'app/Models/',
    'app/Repositories/',
    'app/Actions/',
)


@dataclass(frozen=True)
class RelatedFileProducer:
    """Where to look for a related file and how to name it from the base name."""
    directory: str
    template: str

    def candidate_name(self, base_name: str, extension: str) -> str:
        return self.template.format(base=base_name, ext=extension)


@dataclass(frozen=True)
class RelationshipRule:
    kind: str
    pattern: str
    related: Tuple[RelatedFileProducer, ...] = ()

    @property
    def regex(self) -> 're.Pattern':
        return re.compile(self.pattern)


@dataclass(frozen=True)
class BundleConfiguration:
    """
    Everything one bundle run needs. Built once per invocation and never
    mutated; use dataclasses.replace() to derive a variant.
    """
    included_paths: Tuple[str, ...] = ()
    file_relationships: Tuple[RelationshipRule, ...] = ()
    extension: str = config.DEFAULT_EXTENSION
    mode: str = MODE_INCLUDE
    excluded_paths: Tuple[str, ...] = ()
    follow_relationships: bool = True
    banner: str = config.DEFAULT_BANNER

    def with_included_paths(self, paths: List[str]) -> 'BundleConfiguration':
        return replace(self, included_paths=tuple(paths))

    def to_settings(self) -> Dict[str, Any]:
        """The JSON shape stored in the settings file."""
        return {
            'mode': self.mode,
            'extension': self.extension,
            'includedPaths': list(self.included_paths),
            'excludedPaths': list(self.excluded_paths),
            'followRelationships': self.follow_relationships,
            'banner': self.banner,
            'fileRelationships': [
                {
                    'kind': rule.kind,
                    'pattern': rule.pattern,
                    'related': [{'directory': p.directory, 'template': p.template} for p in rule.related],
                }
                for rule in self.file_relationships
            ],
        }


def default_relationships(extension: str = config.DEFAULT_EXTENSION) -> Tuple[RelationshipRule, ...]:
    """Controller <-> Service <-> Repository/Action naming convention."""
    return (
        RelationshipRule(
            kind='Controllers',
            pattern=re.escape('Controller' + extension) + '$',
            related=(
                RelatedFileProducer('app/Services', '{base}Service{ext}'),
                RelatedFileProducer('app/Repositories', '{base}Repository{ext}'),
            ),
        ),
        RelationshipRule(
            kind='Services',
            pattern=re.escape('Service' + extension) + '$',
            related=(
                RelatedFileProducer('app/Http/Controllers', '{base}Controller{ext}'),
                RelatedFileProducer('app/Actions', '{base}Action{ext}'),
            ),
        ),
    )


DEFAULT_CONFIGURATION = BundleConfiguration(
    included_paths=DEFAULT_INCLUDED_PATHS,
    file_relationships=default_relationships(),
)


def _rule_from_settings(raw: Dict[str, Any]) -> RelationshipRule:
    if not isinstance(raw, dict) or 'pattern' not in raw:
        raise ConfigurationError(f"Relationship rule must be an object with a 'pattern': {raw!r}")
    try:
        re.compile(raw['pattern'])
    except re.error as e:
        raise ConfigurationError(f"Invalid pattern {raw['pattern']!r}: {e}") from e

    producers = []
    for item in raw.get('related', []):
        if not isinstance(item, dict) or 'directory' not in item or 'template' not in item:
            raise ConfigurationError(f"Related entry needs 'directory' and 'template': {item!r}")
        producer = RelatedFileProducer(str(item['directory']), str(item['template']))
        try:
            producer.candidate_name('Check', '.ext')
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigurationError(f"Invalid template {producer.template!r}: {e}") from e
        producers.append(producer)

    return RelationshipRule(kind=str(raw.get('kind', raw['pattern'])), pattern=raw['pattern'], related=tuple(producers))


def _string_list(settings: Dict[str, Any], key: str) -> Optional[Tuple[str, ...]]:
    value = settings.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f"'{key}' must be a list of strings.")
    return tuple(value)


def from_settings(settings: Dict[str, Any], base: BundleConfiguration = DEFAULT_CONFIGURATION) -> BundleConfiguration:
    """
    Merges a settings dictionary over ``base``. Keys that are absent keep the
    base value. When the extension changes and no rules are given, the default
    rules are rebuilt for the new extension.
    """
    extension = settings.get('extension', base.extension)
    if not isinstance(extension, str) or not extension:
        raise ConfigurationError("'extension' must be a non-empty string.")
    if not extension.startswith('.'):
        extension = '.' + extension

    mode = settings.get('mode', base.mode)
    if mode not in VALID_MODES:
        raise ConfigurationError(f"'mode' must be one of {VALID_MODES}, got {mode!r}.")

    raw_rules = settings.get('fileRelationships')
    if raw_rules is None:
        rules = default_relationships(extension) if extension != base.extension else base.file_relationships
    elif isinstance(raw_rules, list):
        rules = tuple(_rule_from_settings(r) for r in raw_rules)
    else:
        raise ConfigurationError("'fileRelationships' must be a list of rules.")

    follow = settings.get('followRelationships', base.follow_relationships)
    if not isinstance(follow, bool):
        raise ConfigurationError("'followRelationships' must be true or false.")

    banner = settings.get('banner', base.banner)
    if not isinstance(banner, str):
        raise ConfigurationError("'banner' must be a string.")

    included = _string_list(settings, 'includedPaths')
    excluded = _string_list(settings, 'excludedPaths')

    return BundleConfiguration(
        included_paths=included if included is not None else base.included_paths,
        file_relationships=rules,
        extension=extension,
        mode=mode,
        excluded_paths=excluded if excluded is not None else base.excluded_paths,
        follow_relationships=follow,
        banner=banner,
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Bundle configuration model for logic_bundler.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    parser.add_argument('--defaults', action='store_true', help='Print the default configuration as JSON.')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Bundle Configuration Model")
        sys.exit(0)
    elif args.defaults:
        sys.stdout.write(json.dumps(DEFAULT_CONFIGURATION.to_settings(), indent=4) + "\n")
    else:
        parser.print_help()
