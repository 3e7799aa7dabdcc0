# ==============================================================================
# File: config_manager.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 3
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial creation to manage bundler settings loaded from a JSON file.",
    "Settings file is now workspace-scoped (stored in the project root).",
    "Added save_included_paths to persist the include list.",
    "Added build_configuration, merging saved values over the defaults.",
    "Added get_configuration with the 'use defaults?' prompt when nothing is saved.",
    "Added normalize_include_path validation (non-empty, relative, separator-terminated).",
    "Added configure_interactively, the include-path selection dialog.",
    "Added default_configuration so every 'use defaults' path falls back to the default include list.",
    "get_configuration takes a mode override; exclusion mode never prompts.",
    "Console prompts treat a closed stdin (EOF) as a declined answer.",
]
# ------------------------------------------------------------------------------
from dataclasses import replace
import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
import argparse
import posixpath
import sys

import config
from bundle_config import (
    BundleConfiguration,
    DEFAULT_CONFIGURATION,
    DEFAULT_INCLUDED_PATHS,
    MODE_INCLUDE,
    from_settings,
)
from debug_print import my_debug_print

print = my_debug_print.print

USE_DEFAULTS = 'Yes, use defaults'
CONFIGURE_NOW = 'No, configure now'
ADD_NEW_PATH = 'Add new path...'


def normalize_include_path(raw_path: str) -> str:
    """
    Validates a user-entered include path and returns it separator-terminated.
    Raises ValueError for empty input, absolute paths and paths leaving the root.
    """
    if raw_path is None or not raw_path.strip():
        raise ValueError("Path must not be empty.")
    path = raw_path.strip().replace('\\', config.PATH_SEPARATOR)
    if path.startswith(config.PATH_SEPARATOR) or (len(path) > 1 and path[1] == ':'):
        raise ValueError(f"Path must be relative to the project root: {raw_path}")
    normalized = posixpath.normpath(path)
    if normalized == '..' or normalized.startswith('../'):
        raise ValueError(f"Path must stay inside the project root: {raw_path}")
    if normalized == '.':
        raise ValueError("Path must name a directory below the project root.")
    return normalized + config.PATH_SEPARATOR


class ConfigManager:
    """
    Loads and saves the workspace settings file (bundler_config.json).
    Provides structured access to the saved values and turns them into a
    BundleConfiguration.
    """

    def __init__(self, config_path: Path = None, root_dir: Path = None):
        self.root_dir = Path(root_dir) if root_dir else Path('.')
        self.config_path = Path(config_path) if config_path else self.root_dir / config.SETTINGS_FILE_NAME
        self._data: Dict[str, Any] = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Loads and attempts to parse the JSON configuration file."""
        if not self.config_path.exists():
            print(f"Note: No settings file at {self.config_path}. Using default empty settings.")
            return {}

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            print(f"Error: Invalid JSON format in {self.config_path}: {e}")
            return {}
        except OSError as e:
            print(f"Error: Could not read {self.config_path}: {e}")
            return {}

        if not isinstance(data, dict):
            print(f"Error: Settings in {self.config_path} must be a JSON object.")
            return {}
        return data

    def reload(self):
        self._data = self._load_config()

    def _save(self):
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(self._data, f, indent=4)
            f.write("\n")

    @property
    def INCLUDED_PATHS(self) -> List[str]:
        """Saved include paths, empty when nothing has been configured."""
        return list(self._data.get('includedPaths') or [])

    @property
    def EXCLUDED_PATHS(self) -> List[str]:
        return list(self._data.get('excludedPaths') or [])

    @property
    def MODE(self) -> str:
        return self._data.get('mode', MODE_INCLUDE)

    @property
    def EXTENSION(self) -> str:
        return self._data.get('extension', config.DEFAULT_EXTENSION)

    @property
    def SETTINGS(self) -> Dict[str, Any]:
        return dict(self._data)

    def save_included_paths(self, paths: List[str]):
        """Persists the include list (the only value the dialog changes)."""
        self._data['includedPaths'] = list(paths)
        self._save()
        print(f"Bundler configuration updated: {self.config_path}")

    def build_configuration(self, base: BundleConfiguration = DEFAULT_CONFIGURATION) -> BundleConfiguration:
        """Saved values over ``base``. Raises ConfigurationError for malformed values."""
        return from_settings(self._data, base)

    def default_configuration(self) -> BundleConfiguration:
        """Saved values, with the default include list when none (or an empty one) is saved."""
        bundle_config = self.build_configuration()
        if not bundle_config.included_paths:
            bundle_config = bundle_config.with_included_paths(DEFAULT_INCLUDED_PATHS)
        return bundle_config

    def get_configuration(self, prompt: Callable[[str, List[str]], Optional[str]],
                          input_func: Optional[Callable[[str], str]] = None,
                          mode: Optional[str] = None) -> Optional[BundleConfiguration]:
        """
        Returns the configuration for a run, or None when the user declines
        (ConfigurationMissing). ``prompt(question, choices)`` returns the
        chosen entry or None. ``mode`` replaces the saved mode before deciding
        whether to ask.
        """
        bundle_config = self.build_configuration()
        if mode is not None:
            bundle_config = replace(bundle_config, mode=mode)
        if bundle_config.mode != MODE_INCLUDE or self.INCLUDED_PATHS:
            return bundle_config

        answer = prompt('No configuration found. Use default settings?', [USE_DEFAULTS, CONFIGURE_NOW])
        if not answer:
            return None
        if answer == CONFIGURE_NOW:
            if not configure_interactively(self, input_func):
                return None
            return self.get_configuration(prompt, input_func, mode)
        return replace(self.default_configuration(), mode=bundle_config.mode)


def choose_from_console(question: str, choices: List[str], input_func: Optional[Callable[[str], str]] = None) -> Optional[str]:
    """Numbered console picker. Empty input or an unknown answer cancels."""
    input_func = input_func or input
    print(question)
    for i, choice in enumerate(choices, 1):
        print(f"    {i}. {choice}")
    try:
        answer = input_func("Select an option: ").strip()
    except EOFError:
        print("No answer (end of input).")
        return None
    if answer.isdigit() and 1 <= int(answer) <= len(choices):
        return choices[int(answer) - 1]
    return None


def configure_interactively(manager: ConfigManager, input_func: Optional[Callable[[str], str]] = None) -> bool:
    """
    Include-path dialog. Every current path starts selected; the user types
    the numbers to keep (empty keeps all, '-' keeps none) and may add a new
    path. Returns False when nothing was saved.
    """
    input_func = input_func or input
    current_paths = manager.INCLUDED_PATHS or list(DEFAULT_CONFIGURATION.included_paths)
    options = current_paths + [ADD_NEW_PATH]

    print("Select folders to include in bundle:")
    for i, option in enumerate(options, 1):
        print(f"    {i}. {option}")
    try:
        answer = input_func("Numbers to keep, comma separated (Enter keeps all, 'q' cancels): ").strip()
    except EOFError:
        return False
    if answer.lower() == 'q':
        return False

    if not answer:
        selected = list(current_paths)
    elif answer == '-':
        selected = []
    else:
        selected = []
        for token in answer.split(','):
            token = token.strip()
            if token.isdigit() and 1 <= int(token) <= len(options):
                selected.append(options[int(token) - 1])
            else:
                print(f"Ignoring invalid selection: {token}")

    final_paths = [p for p in selected if p != ADD_NEW_PATH]
    if ADD_NEW_PATH in selected:
        try:
            new_path = input_func("Enter new path (relative to project root, e.g. app/CustomFolder/): ")
        except EOFError:
            new_path = ''
        if new_path:
            try:
                final_paths.append(normalize_include_path(new_path))
            except ValueError as e:
                print(f"Error: {e}")

    manager.save_included_paths(final_paths)
    return True


if __name__ == "__main__":

    parser = argparse.ArgumentParser(description="Config Manager for logic_bundler: Loads and saves bundler settings.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Configuration Manager")
    else:
        manager = ConfigManager()
        print(f"Loaded config from: {manager.config_path.resolve()}")
        print(f"Mode: {manager.MODE}")
        print(f"Extension: {manager.EXTENSION}")
        print(f"Included Paths: {manager.INCLUDED_PATHS or 'N/A'}")
        print(f"Excluded Paths: {manager.EXCLUDED_PATHS or 'N/A'}")
