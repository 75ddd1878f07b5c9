"""Command-line entry point for the numeric diff tool."""

from __future__ import annotations

import sys
from typing import Sequence

from numdiff.differ import FileAccessError, NumericDiff
from numdiff.options import USAGE, OptionError, VersionRequested, parse_args, print_usage

_HELP = {"-h", "--help"}


def main(argv: Sequence[str] | None = None) -> int:
    """Run the tool; return the number of differing lines, or an error status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if any(arg in _HELP for arg in args):
        print_usage(sys.stdout)
        return 0

    try:
        options = parse_args(args)
        options.validate()
    except VersionRequested as request:
        sys.stdout.write(f"{request}\n")
        return 0
    except OptionError as error:
        sys.stderr.write(f"{error}\n{USAGE}")
        return 1

    try:
        return NumericDiff(options).run()
    except FileAccessError as error:
        sys.stderr.write(f"{error}\n")
        return -1


if __name__ == "__main__":
    sys.exit(main())