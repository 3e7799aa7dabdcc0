# ==============================================================================
# File: debug_print.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 3
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial port of the DebugPrint helper into the bundler.",
    "Console output now goes to stderr so a bundle written to stdout stays clean.",
    "Removed the class/variable dump helpers, only the print replacement is used.",
    "Added the stream override so tests can capture output.",
]
# ------------------------------------------------------------------------------
import argparse
import datetime
import inspect
import os
import sys


class DebugPrint:
    """
    Drop-in replacement for print().

    With debugging disabled it behaves like print(file=sys.stderr). With
    debugging enabled every line is prefixed with a timestamp and the caller
    as ``file:Class.method()`` (plus ``[line]`` when line numbers are on).
    """
    Initialized = False

    def __init__(self):
        super().__init__()
        self.Initialized = True
        self._initialized = False
        self.debug_enabled = False
        self.add_line_nos = False
        self.stream = None

    def _emit(self, *args, **kwargs):
        kwargs.setdefault('file', self.stream or sys.stderr)
        print(*args, **kwargs)

    def _caller_prefix(self) -> str:
        # 0 is this method, 1 is print(), 2 is the caller
        frame = inspect.stack()[2][0]
        the_file = os.path.basename(frame.f_code.co_filename)
        try:
            the_class = frame.f_code.co_qualname.split('.')[0]
        except AttributeError:
            # co_qualname is 3.11+
            the_class = os.path.splitext(the_file)[0]
        the_method = frame.f_code.co_name
        if self.add_line_nos:
            return f"{the_file}:{the_class}.{the_method}()[{frame.f_lineno}]"
        return f"{the_file}:{the_class}.{the_method}()"

    def print(self, *args, **kwargs):
        ret_val = "Failure"
        if self._initialized:
            if self.debug_enabled:
                self._emit(f"{datetime.datetime.now()} {self._caller_prefix()}", *args, **kwargs)
            else:
                self._emit(*args, **kwargs)
            ret_val = "Success"
        return ret_val

    def control_debug(self, debug: bool = True, line_nos: bool = None):
        ret_val = "Failure"
        if self._initialized:
            self.debug_enabled = debug
            if line_nos is not None:
                self.add_line_nos = line_nos
            ret_val = "Success"
        return ret_val

    def initialize(self, debug: bool = False, line_nos: bool = None, stream=None):
        ret_val = "Failure"
        if self.Initialized and not self._initialized:
            self.debug_enabled = debug
            if line_nos is not None:
                self.add_line_nos = line_nos
            self.stream = stream
            self._initialized = True
            ret_val = "Success"
        return ret_val


# Shared instance: modules bind `print = my_debug_print.print`
my_debug_print = DebugPrint()
my_debug_print.initialize()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Debug print helper for logic_bundler.")
    parser.add_argument('-v', '--version', action='store_true', help='Show version information and exit.')
    args = parser.parse_args()

    if args.version:
        from version_util import print_version_info
        print_version_info(__file__, "Debug Print Helper")
        sys.exit(0)

    my_debug_print.control_debug(True, line_nos=True)
    my_debug_print.print("DebugPrint Initialization Status : Success")
