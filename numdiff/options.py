"""Command-line options for the numeric diff tool: parsing and validation."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from typing import IO, Iterable

VERSION = "1.0.0"

USAGE = (
    "Usage: numeric-diff [options] file1 file2\n"
    "Options:\n"
    "  -y,  --side-by-side             Show files side by side (default: off)\n"
    "  -ys, --suppress-common-lines    Suppress lines that are the same (implies side-by-side, default: off)\n"
    "  -t,  --tolerance <value>        Set tolerance for numeric comparison (default: 1e-2)\n"
    "  -T,  --threshold <value>        Set threshold for reporting differences (default: 1e-6)\n"
    "  -c,  --comment-string <char>    Set comment character (default: #)\n"
    "  -w,  --single-column-width <n>  Set maximum line length (default: 60)\n"
    "  -s,  --report-identical-files   Only show equal lines (default: off)\n"
    "  -q,  --quiet                    Suppress output (default: off)\n"
    "  -d,  --color-different-digits   Color differing digits (default: off)\n"
    "  -C,  --columns <list>           Compare only specified columns (comma-separated, 1-based, default: all)\n"
    "  -v,  --version                  Show program version and exit\n"
    "  -h,  --help                     Show this help message\n"
)

MIN_COLUMN_WIDTH, MAX_COLUMN_WIDTH = 10, 200
MIN_TOLERANCE, MAX_TOLERANCE = 1e-15, 1e3
MIN_THRESHOLD, MAX_THRESHOLD = 0.0, 1e3

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

_SIDE_BY_SIDE = {"-y", "--side-by-side"}
_SUPPRESS = {"-ys", "--suppress-common-lines"}
_TOLERANCE = {"-t", "--tolerance"}
_THRESHOLD = {"-threshold", "-T", "--threshold"}
_COMMENT = {"--comment", "-c", "--comment-string"}
_WIDTH = {"-w", "--single-column-width"}
_ONLY_EQUAL = {"--only-equal", "-s"}
_QUIET = {"-q", "--quiet"}
_COLOR = {"-d", "--color-different-digits"}
_COLUMNS = {"-C", "--columns"}
_VERSION = {"-v", "--version"}


class OptionError(ValueError):
    """Raised when the command line is malformed or an option is out of range."""


class VersionRequested(Exception):
    """Raised when the version was asked for; the message is the version line."""


def _fmt(value: float) -> str:
    return f"{value:g}"


def _atof(text: str) -> float:
    """Parse the leading number of ``text``; 0.0 if there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _atoi(text: str) -> int:
    """Parse the leading integer of ``text``; 0 if there is none."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


@dataclass
class DiffOptions:
    """Settings for one comparison of two files."""

    file1: str = ""
    file2: str = ""
    side_by_side: bool = False
    tolerance: float = 1e-2
    threshold: float = 1e-6
    comment_char: str = "#"
    suppress_common_lines: bool = False
    only_equal: bool = False
    quiet: bool = False
    line_length: int = 60
    color_diff_digits: bool = False
    columns_to_compare: set[int] = field(default_factory=set)

    def validate(self) -> None:
        """Raise OptionError if the files or any value are not acceptable."""
        if not self.file1 or not self.file2:
            raise OptionError("Error: Two input files must be specified.")
        if self.file1 == self.file2:
            raise OptionError("Error: The two input files must be different.")
        if not MIN_COLUMN_WIDTH <= self.line_length <= MAX_COLUMN_WIDTH:
            raise OptionError(
                f"Error: Column width ({self.line_length}) must be between "
                f"{MIN_COLUMN_WIDTH} and {MAX_COLUMN_WIDTH}."
            )
        if self.tolerance < MIN_TOLERANCE or self.tolerance > MAX_TOLERANCE:
            raise OptionError(
                f"Error: Tolerance ({_fmt(self.tolerance)}) must be between "
                f"{_fmt(MIN_TOLERANCE)} and {_fmt(MAX_TOLERANCE)}."
            )
        if self.threshold < MIN_THRESHOLD or self.threshold > MAX_THRESHOLD:
            raise OptionError(
                f"Error: Threshold ({_fmt(self.threshold)}) must be between "
                f"{_fmt(MIN_THRESHOLD)} and {_fmt(MAX_THRESHOLD)}."
            )


def parse_columns(text: str) -> set[int]:
    """Parse a comma-separated list of 1-based column numbers."""
    pieces = text.split(",")
    if pieces and pieces[-1] == "":
        pieces.pop()
    columns: set[int] = set()
    for piece in pieces:
        match = _INT_PREFIX.match(piece)
        if match is None:
            raise OptionError(f"Error: Invalid column number '{piece}'.")
        number = int(match.group(1))
        if number < 1:
            raise OptionError(
                f"Error: Column numbers must be at least 1 (got {number})."
            )
        columns.add(number)
    return columns


def parse_args(argv: Iterable[str]) -> DiffOptions:
    """Build options from command-line arguments (without the program name)."""
    opts = DiffOptions()
    args = iter(argv)

    def value_for(flag: str) -> str:
        try:
            return next(args)
        except StopIteration:
            raise OptionError(f"Error: Missing value for {flag} option.") from None

    for arg in args:
        if arg in _VERSION:
            raise VersionRequested(f"numeric-diff version {VERSION}")
        if arg in _SIDE_BY_SIDE:
            opts.side_by_side = True
        elif arg in _SUPPRESS:
            opts.suppress_common_lines = True
            opts.side_by_side = True
        elif arg in _TOLERANCE:
            opts.tolerance = _atof(value_for(arg))
        elif arg in _THRESHOLD:
            opts.threshold = _atof(value_for(arg))
        elif arg in _COMMENT:
            opts.comment_char = value_for(arg)
        elif arg in _WIDTH:
            opts.line_length = _atoi(value_for(arg))
        elif arg in _ONLY_EQUAL:
            opts.only_equal = True
        elif arg in _QUIET:
            opts.quiet = True
        elif arg in _COLOR:
            opts.color_diff_digits = True
        elif arg in _COLUMNS:
            opts.columns_to_compare |= parse_columns(value_for(arg))
        elif not opts.file1:
            opts.file1 = arg
        elif not opts.file2:
            opts.file2 = arg
        else:
            raise OptionError(f"Unknown or extra argument: {arg}")
    return opts


def print_usage(stream: IO[str] | None = None) -> None:
    """Write the usage text to ``stream`` (standard output by default)."""
    out = sys.stdout if stream is None else stream
    out.write(USAGE + "\n")