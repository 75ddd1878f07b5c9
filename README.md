# numdiff

Compare two numerical data files line by line, token by token, and report
the values whose relative difference exceeds a tolerance.

- Lines whose first non-blank text is the comment marker (default `#`) are
  skipped in both files before the remaining lines are paired up.
- If one file has more data lines than the other, the extra lines are
  compared against an empty line.
- Tokens are split on whitespace. Tokens that are not numbers are carried
  through unchanged and never count as a difference.
- The relative difference is `|a - b| / max(|a|, |b|) * 100`, in percent.
  It is reported only when it exceeds the tolerance.
- Values whose magnitude is below the threshold count as zero. If one value
  is below the threshold and the other is not, the difference is reported
  as `1e+99%`.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Command line

```
diff-numerics [options] file1 file2
```

| Option | Meaning |
| --- | --- |
| `-y`, `--side-by-side` | Show the two files side by side |
| `-ys`, `--suppress-common-lines` | Side by side, showing only lines that differ |
| `-t`, `--tolerance <value>` | Relative tolerance in percent (default `1e-2`, range `1e-15` to `1000`) |
| `-T`, `-threshold`, `--threshold <value>` | Magnitudes below this count as zero (default `1e-6`, range `0` to `1000`) |
| `-c`, `--comment`, `--comment-string <str>` | Comment marker (default `#`) |
| `-w`, `--single-column-width <n>` | Maximum visible width of each side in side-by-side mode (default 60, range 10–200) |
| `-s`, `--only-equal` | Print only a summary stating whether the files are equal |
| `-q`, `--quiet` | Print nothing if the files are equal, a summary otherwise |
| `-d`, `--color-different-digits` | Colour only the characters from the first differing digit on |
| `-C`, `--columns <list>` | Compare and show only the listed columns (comma separated, 1-based) |
| `-v`, `--version` | Print `numeric-diff version 1.0.0` and exit |
| `-h`, `--help` | Show the help text and exit |

In the default mode each line that differs is printed as

```

< values from file1
> values from file2
>>percentage differences under the differing values
```

with the differing values in red. Side-by-side mode prints every line (or
only differing ones with `-ys`), separated by `   |   ` when the line holds
a difference.

The exit status is the number of lines that differ, `0` when the files
agree, and `1` for invalid arguments. It is `-1` when a file cannot be
read; most shells report that as `255`.

Example:

```
diff-numerics -y -t 1e-3 run_a.dat run_b.dat
diff-numerics -s -C 1,2,4 run_a.dat run_b.dat
```

## Library use

```python
import sys

from numdiff.options import DiffOptions
from numdiff.differ import NumericDiff

opts = DiffOptions(file1="run_a.dat", file2="run_b.dat", tolerance=1e-3)
opts.validate()
differing = NumericDiff(opts, sys.stdout).run()
```

- `numdiff.options.parse_args` turns a list of command-line arguments
  (without the program name) into `DiffOptions`. It raises `OptionError`
  for a missing option value, a bad column list or an extra argument, and
  `VersionRequested` for `-v`.
- `DiffOptions.validate` raises `OptionError` for invalid settings.
- `NumericDiff.run` raises `FileAccessError` when a file cannot be opened,
  and otherwise returns the number of differing lines. After a run,
  `diff_lines` and `max_percentage_error` hold the summary figures.
- `NumericDiff.compare_line` compares and prints a single pair of lines;
  `NumericDiff.percentage_difference` gives the difference of two values.
- `numdiff.differ` also offers the helpers `tokenize`, `is_numeric`,
  `is_comment`, `strip_ansi`, `visible_prefix`, `ensure_ansi_reset` and
  `colorize_diff_digits`.
- `numdiff.cli.main` runs the command with a given argument list.