"""Line-by-line numeric comparison of two data files."""

from __future__ import annotations

import re
import sys
from contextlib import ExitStack
from itertools import zip_longest
from typing import IO, Iterable, Iterator, Sequence

from numdiff.options import DiffOptions

RED = "\033[31m"
RESET = "\033[0m"

# Returned for a pair where one value is below the threshold and the other is not.
BELOW_THRESHOLD_MISMATCH = 1e99

_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_HEX = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?"
)
_SPECIAL = re.compile(
    r"[+-]?(?:inf(?:inity)?|nan(?:\([0-9A-Za-z_]*\))?)", re.IGNORECASE
)
_FIELD = re.compile(r"[^ \t\n\v\f\r]+")
_ANSI = re.compile(r"\x1b\[[^m]*m?")
_ANSI_OR_CHAR = re.compile(r"\x1b\[[^m]*m?|.", re.DOTALL)


class FileAccessError(Exception):
    """Raised when one or both input files cannot be opened."""

    def __init__(self, paths: Sequence[str]) -> None:
        self.paths = list(paths)
        super().__init__(
            "\n".join(
                f"Error: '{path}' does not exist or cannot be accessed."
                for path in self.paths
            )
        )


def is_comment(line: str, comment: str) -> bool:
    """True if the first non-blank character of ``line`` starts ``comment``."""
    if not comment:
        return False
    body = line.lstrip(" \t")
    return bool(body) and body.startswith(comment)


def is_numeric(text: str) -> bool:
    """True if the whole of ``text`` is a floating-point number."""
    return any(
        pattern.fullmatch(text) for pattern in (_DECIMAL, _HEX, _SPECIAL)
    )


def _to_float(text: str) -> float:
    if _HEX.fullmatch(text):
        return float.fromhex(text)
    if _SPECIAL.fullmatch(text) and "nan" in text.lower():
        return float("nan")
    return float(text)


def tokenize(line: str) -> list[str]:
    """Split a line into whitespace-separated tokens."""
    return _FIELD.findall(line)


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from ``text``."""
    return _ANSI.sub("", text)


def ensure_ansi_reset(text: str) -> str:
    """Append a reset code if the last red code in ``text`` is not reset."""
    last_red = text.rfind(RED)
    last_reset = text.rfind(RESET)
    if last_red != -1 and (last_reset == -1 or last_reset < last_red):
        return text + RESET
    return text


def visible_prefix(text: str, n: int) -> str:
    """Keep the first ``n`` visible characters of ``text``, with its escape codes."""
    parts: list[str] = []
    visible = 0
    for match in _ANSI_OR_CHAR.finditer(text):
        piece = match.group()
        if piece.startswith("\x1b["):
            parts.append(piece)
        elif visible < n:
            parts.append(piece)
            visible += 1
        else:
            break
    return ensure_ansi_reset("".join(parts))


def _red(text: str) -> str:
    return f"{RED}{text}{RESET}"


def colorize_diff_digits(s1: str, s2: str) -> tuple[str, str]:
    """Color red the part of each number from the first differing character on."""
    mant1, exp1 = _split_exponent(s1)
    mant2, exp2 = _split_exponent(s2)
    shortest = min(len(mant1), len(mant2))
    diff_start = next(
        (i for i, (a, b) in enumerate(zip(mant1, mant2)) if a != b), shortest
    )

    def colored(mantissa: str) -> str:
        if diff_start < len(mantissa):
            return mantissa[:diff_start] + _red(mantissa[diff_start:])
        return mantissa

    out1, out2 = colored(mant1), colored(mant2)
    if exp1 or exp2:
        mantissa_differs = diff_start < shortest or len(mant1) != len(mant2)
        if not mantissa_differs and exp1 == exp2:
            out1 += exp1
            out2 += exp2
        else:
            if exp1:
                out1 += _red(exp1)
            if exp2:
                out2 += _red(exp2)
    return out1, out2


def _split_exponent(text: str) -> tuple[str, str]:
    match = re.search(r"[eE]", text)
    if match is None:
        return text, ""
    return text[: match.start()], text[match.start():]


def _g(value: float) -> str:
    return f"{value:g}"


class NumericDiff:
    """Compare two numeric data files and report differences beyond a tolerance."""

    def __init__(self, options: DiffOptions, out: IO[str] | None = None) -> None:
        self.options = options
        self._out = out
        self.diff_lines = 0
        self.max_percentage_error = 0.0

    @property
    def _stream(self) -> IO[str]:
        return sys.stdout if self._out is None else self._out

    def _data_lines(self, handle: Iterable[str]) -> Iterator[str]:
        comment = self.options.comment_char
        for raw in handle:
            line = raw[:-1] if raw.endswith("\n") else raw
            if comment and is_comment(line, comment):
                continue
            yield line

    def run(self) -> int:
        """Compare the files, print the report and return the number of differing lines."""
        opts = self.options
        self.diff_lines = 0
        self.max_percentage_error = 0.0
        with ExitStack() as stack:
            handles = []
            problems = []
            for path in (opts.file1, opts.file2):
                try:
                    handles.append(
                        stack.enter_context(
                            open(path, encoding="utf-8", errors="replace", newline="\n")
                        )
                    )
                except OSError:
                    problems.append(path)
            if problems:
                raise FileAccessError(problems)
            first, second = handles
            for line1, line2 in zip_longest(
                self._data_lines(first), self._data_lines(second), fillvalue=""
            ):
                self.compare_line(line1, line2)

        if opts.quiet:
            if self.diff_lines:
                self._write_header()
                self._write_differ()
            return self.diff_lines

        if opts.only_equal:
            self._write_header()
            if self.diff_lines == 0:
                self._stream.write("Files are EQUAL within tolerance.\n")
            else:
                self._write_differ()
        return self.diff_lines

    def _write_header(self) -> None:
        opts = self.options
        self._stream.write(f"Comparing {opts.file1} and {opts.file2}\n")
        self._stream.write(
            f"Tolerance: {_g(opts.tolerance)}, Threshold: {_g(opts.threshold)}\n"
        )

    def _write_differ(self) -> None:
        self._stream.write(
            f"Files DIFFER: {self.diff_lines} lines differ, "
            f"max percentage error: {_g(self.max_percentage_error)}%\n"
        )

    def compare_line(self, line1: str, line2: str) -> bool:
        """Compare two lines, print them as configured, and return whether they differ."""
        opts = self.options
        fields1 = tokenize(line1)
        fields2 = tokenize(line2)
        col_widths = [max(len(a), len(b)) for a, b in zip(fields1, fields2)]

        output1: list[str] = []
        output2: list[str] = []
        errors: list[str] = []
        any_error = False
        max_diff = 0.0
        for column, (t1, t2, width) in enumerate(
            zip(fields1, fields2, col_widths), start=1
        ):
            if opts.columns_to_compare and column not in opts.columns_to_compare:
                continue
            if is_numeric(t1) and is_numeric(t2):
                diff = self.percentage_difference(_to_float(t1), _to_float(t2))
                if abs(diff) > opts.tolerance:
                    any_error = True
                    max_diff = max(max_diff, abs(diff))
                    if opts.color_diff_digits:
                        t1, t2 = colorize_diff_digits(t1, t2)
                    else:
                        t1, t2 = _red(t1), _red(t2)
                    output1.append(t1)
                    output2.append(t2)
                    errors.append(f"{diff:>{width}g}%")
                    continue
            output1.append(t1)
            output2.append(t2)
            errors.append(" " * width)

        if any_error:
            self.diff_lines += 1
            self.max_percentage_error = max(self.max_percentage_error, max_diff)

        if opts.only_equal:
            return any_error

        if opts.side_by_side:
            if any_error or not opts.suppress_common_lines:
                self._print_side_by_side(output1, output2, col_widths)
        else:
            self._print_diff(" ".join(output1), " ".join(output2), " ".join(errors))
        return any_error

    def _print_side_by_side(
        self, fields1: list[str], fields2: list[str], col_widths: list[int]
    ) -> None:
        line_length = self.options.line_length
        cells1: list[str] = []
        cells2: list[str] = []
        for i, (t1, t2) in enumerate(zip_longest(fields1, fields2, fillvalue="")):
            plain1, plain2 = strip_ansi(t1), strip_ansi(t2)
            width = col_widths[i] if i < len(col_widths) else line_length
            width = max(width, len(plain1), len(plain2))
            cells1.append(t1 + " " * (width - len(plain1)))
            cells2.append(t2 + " " * (width - len(plain2)))
        left = " ".join(cells1)
        right = " ".join(cells2)
        separator = "   |   " if RED in left or RED in right else "       "
        left = visible_prefix(left, line_length)
        right = visible_prefix(right, line_length)
        self._stream.write(f"{left}{separator}{right}\n")

    def _print_diff(self, output1: str, output2: str, errors: str) -> None:
        if RED in output1 or RED in output2:
            self._stream.write(f"\n< {output1}\n> {output2}\n>>{errors}\n")

    def percentage_difference(self, value1: float, value2: float) -> float:
        """Relative difference in percent, zero when within threshold or tolerance."""
        threshold = self.options.threshold
        small1 = abs(value1) < threshold
        small2 = abs(value2) < threshold
        if small1 and small2:
            return 0.0
        if (small1 and abs(value2) >= threshold) or (
            small2 and abs(value1) >= threshold
        ):
            return BELOW_THRESHOLD_MISMATCH
        denominator = max(abs(value1), abs(value2))
        if denominator == 0:
            return float("nan")
        percentage = abs(value1 - value2) / denominator * 100.0
        if percentage < self.options.tolerance:
            return 0.0
        return percentage