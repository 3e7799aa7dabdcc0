# ==============================================================================
# File: test_all.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 3
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial creation as the primary test runner for the bundler suites.",
    "Added --get_versions to check version synchronization across project files.",
    "Added ResultCollector and the summary/detail tables printed after the run.",
    "Detail table now only lists failing tests unless --full_report is given.",
]
# ------------------------------------------------------------------------------
from pathlib import Path
from typing import List, Optional, Tuple
import argparse
import importlib
import subprocess
import sys
import unittest

# --- BOOTSTRAP PATHS ---
PROJECT_ROOT = Path(__file__).resolve().parent.parent
TEST_DIR = Path(__file__).resolve().parent
for _path in (PROJECT_ROOT, TEST_DIR):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

TEST_MODULES = [
    "test_path_matcher",
    "test_relationship_resolver",
    "test_file_collector",
    "test_bundle_builder",
    "test_config_manager",
    "test_server",
    "test_main",
]

PASS = 'PASS'
FAIL = 'FAIL'
ERROR = 'ERROR'
SKIP = 'SKIP'

# (suite, test name, status, one-line detail)
ResultRow = Tuple[str, str, str, str]


class ResultCollector(unittest.TextTestResult):
    """TextTestResult that also keeps one row per test for the final tables."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.rows: List[ResultRow] = []

    def _row(self, test, status, err=None) -> ResultRow:
        suite = getattr(test, '__module__', 'Internal')
        name = getattr(test, '_testMethodName', str(test))
        detail = ""
        if err:
            lines = [line.strip() for line in self._exc_info_to_string(err, test).splitlines() if line.strip()]
            detail = lines[-1] if lines else ""
        return suite, name, status, detail

    def addSuccess(self, test):
        super().addSuccess(test)
        self.rows.append(self._row(test, PASS))

    def addFailure(self, test, err):
        super().addFailure(test, err)
        self.rows.append(self._row(test, FAIL, err))

    def addError(self, test, err):
        super().addError(test, err)
        self.rows.append(self._row(test, ERROR, err))

    def addSkip(self, test, reason):
        super().addSkip(test, reason)
        self.rows.append(self._row(test, SKIP)[:3] + (reason,))


def readable_test_name(test_name: str) -> str:
    """test_03_related_files_follow -> '03: Related Files Follow'"""
    parts = test_name.split('_', 2)
    if len(parts) == 3 and parts[0] == 'test' and parts[1].isdigit():
        return f"{parts[1].zfill(2)}: {parts[2].replace('_', ' ').title()}"
    return test_name.replace('_', ' ').title()


def render_table(header: List[str], rows: List[List[str]]) -> str:
    """Pipe table with every column padded to its widest cell."""
    widths = [len(h) + 2 for h in header]
    for row in rows:
        widths = [max(w, len(cell) + 2) for w, cell in zip(widths, row)]

    lines = ["|" + "|".join(h.center(w) for h, w in zip(header, widths)) + "|"]
    lines.append("|" + "|".join('-' * w for w in widths) + "|")
    for row in rows:
        lines.append("|" + "|".join(f" {cell}".ljust(w) for cell, w in zip(row, widths)) + "|")
    return "\n".join(lines)


def format_results_table(rows: List[ResultRow], tests_run: int, full_report: bool = False) -> str:
    passed = sum(1 for row in rows if row[2] == PASS)
    failed = sum(1 for row in rows if row[2] in (FAIL, ERROR))
    percentage = (passed / tests_run) * 100 if tests_run else 0

    summary = render_table(["Metric", "Value"], [
        ["Tests Run", str(tests_run)],
        ["Passed", str(passed)],
        ["Failed / Errored", str(failed)],
        ["Passing Percentage", f"{percentage:.2f}%"],
    ])

    shown = rows if full_report else [row for row in rows if row[2] != PASS]
    if not shown:
        return summary + "\n"

    detail_rows = [
        [suite.replace('test_', '').replace('_', ' ').title(), readable_test_name(name), status, detail.replace('|', '/')]
        for suite, name, status, detail in shown
    ]
    detail = render_table(["Test Suite", "Test Name", "Status", "Details"], detail_rows)
    return f"{summary}\n\n### Detailed Test Report\n\n{detail}\n"


class ReportingTestRunner(unittest.TextTestRunner):
    resultclass = ResultCollector

    def __init__(self, full_report: bool = False, **kwargs):
        kwargs.setdefault('stream', sys.stderr)
        kwargs.setdefault('verbosity', 2)
        super().__init__(**kwargs)
        self.full_report = full_report

    def run(self, test):
        result = super().run(test)
        print("\n" + "=" * 80)
        print("FINAL TEST EXECUTION SUMMARY")
        print("=" * 80)
        print(format_results_table(result.rows, result.testsRun, self.full_report))
        print("=" * 80 + "\n")
        return result


def load_suite(module_names: List[str]) -> unittest.TestSuite:
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()
    for module_name in module_names:
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            print(f"ERROR: Could not import test module {module_name}: {e}")
            continue
        suite.addTests(loader.loadTestsFromModule(module))
    return suite


def run_tests(full_report: bool = False) -> bool:
    print("=" * 60)
    print("RUNNING UNIT TESTS")
    print("=" * 60)
    result = ReportingTestRunner(full_report=full_report).run(load_suite(TEST_MODULES))
    return result.wasSuccessful()


def run_version_check(file_path: Path) -> Optional[str]:
    """Runs ``file_path -v`` in a subprocess and returns its 'Version:' line."""
    try:
        result = subprocess.run(
            [sys.executable, str(file_path), '-v'],
            capture_output=True, text=True, encoding='utf-8', check=True,
        )
    except subprocess.CalledProcessError as e:
        return f"ERROR: {file_path.name} exited with {e.returncode}: {e.stderr.strip()}"
    for line in result.stdout.splitlines():
        if line.startswith("Version:"):
            return line.strip()
    return f"ERROR: Version tag not found in output for {file_path.name}"


def execute_version_check() -> bool:
    """Reports whether every file in VERSION_CHECK_FILES shares one major.minor version."""
    from version_util import VERSION_CHECK_FILES

    print("=" * 60)
    print("PROJECT VERSION SYNCHRONIZATION CHECK")
    print("=" * 60)

    versions = {}
    for filename in VERSION_CHECK_FILES:
        filepath = PROJECT_ROOT / filename
        if not filepath.exists():
            versions[filename] = f"FILE NOT FOUND: {filename}"
            continue
        versions[filename] = run_version_check(filepath)

    for filename, version in versions.items():
        marker = "OK " if version.startswith("Version:") else "BAD"
        print(f"[{marker}] {filename:<40} {version}")

    major_minor = {
        '.'.join(v.split(':', 1)[1].strip().split('.')[:2])
        for v in versions.values() if v.startswith("Version:")
    }
    print("\n--- Summary ---")
    if len(major_minor) == 1 and all(v.startswith("Version:") for v in versions.values()):
        print(f"SUCCESS: All {len(versions)} files are on {major_minor.pop()}.x")
        return True
    print(f"INCONSISTENCY DETECTED: {sorted(major_minor) or 'no readable versions'}")
    return False


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Test runner for the logic bundler. Runs every unit test suite by default.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information for the test runner script.')
    parser.add_argument('--get_versions', action='store_true', help='Only check version synchronization across project files.')
    parser.add_argument('--full_report', action='store_true', help='List passing tests in the detail table too.')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Test Runner")
        sys.exit(0)

    if args.get_versions:
        ok = execute_version_check()
    else:
        ok = run_tests(args.full_report)
    sys.exit(0 if ok else 1)
