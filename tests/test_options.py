import io

import pytest

from numdiff.options import (
    USAGE,
    DiffOptions,
    OptionError,
    VersionRequested,
    parse_args,
    parse_columns,
    print_usage,
)

FILE1 = "delta_3D2_2.dat"
FILE2 = "delta_3D2.dat"


def test_defaults():
    opts = parse_args([FILE1, FILE2])
    assert opts.file1 == FILE1
    assert opts.file2 == FILE2
    assert opts.tolerance == 1e-2
    assert opts.threshold == 1e-6
    assert opts.comment_char == "#"
    assert opts.line_length == 60
    assert not opts.side_by_side
    assert not opts.suppress_common_lines
    assert opts.columns_to_compare == set()


def test_suppress_common_lines_implies_side_by_side():
    opts = parse_args(["-ys", FILE1, FILE2])
    assert opts.suppress_common_lines is True
    assert opts.side_by_side is True


def test_flags_and_values():
    opts = parse_args(
        ["-y", "-t", "0.5", "--threshold", "1e-9", "-c", "%", "-w", "80",
         "-s", "-q", "-d", "-C", "1,2,4", FILE1, FILE2]
    )
    assert opts.side_by_side
    assert opts.tolerance == 0.5
    assert opts.threshold == 1e-9
    assert opts.comment_char == "%"
    assert opts.line_length == 80
    assert opts.only_equal and opts.quiet and opts.color_diff_digits
    assert opts.columns_to_compare == {1, 2, 4}


def test_non_numeric_tolerance_becomes_zero():
    opts = parse_args(["-t", "abc", FILE1, FILE2])
    assert opts.tolerance == 0.0
    with pytest.raises(OptionError, match="Error: Tolerance"):
        opts.validate()


def test_missing_value():
    with pytest.raises(OptionError, match="Missing value for -t option"):
        parse_args([FILE1, FILE2, "-t"])


def test_extra_argument():
    with pytest.raises(OptionError, match="Unknown or extra argument: third"):
        parse_args([FILE1, FILE2, "third"])


def test_version_requested():
    with pytest.raises(VersionRequested, match="numeric-diff version 1.0.0"):
        parse_args(["-v", FILE1, FILE2])


@pytest.mark.parametrize("width", ["5", "500"])
def test_invalid_column_width(width):
    opts = parse_args(["-w", width, FILE1, FILE2])
    with pytest.raises(OptionError, match="Error: Column width"):
        opts.validate()


@pytest.mark.parametrize("tol", ["1e-20", "1e5"])
def test_invalid_tolerance(tol):
    opts = parse_args(["-t", tol, FILE1, FILE2])
    with pytest.raises(OptionError, match="Error: Tolerance"):
        opts.validate()


@pytest.mark.parametrize("thr", ["-1", "1e5"])
def test_invalid_threshold(thr):
    opts = parse_args(["-T", thr, FILE1, FILE2])
    with pytest.raises(OptionError, match="Error: Threshold"):
        opts.validate()


def test_tolerance_message_format():
    opts = DiffOptions(file1=FILE1, file2=FILE2, tolerance=1e-20)
    with pytest.raises(OptionError) as info:
        opts.validate()
    assert str(info.value) == (
        "Error: Tolerance (1e-20) must be between 1e-15 and 1000."
    )


def test_same_file_error():
    opts = parse_args([FILE1, FILE1])
    with pytest.raises(OptionError) as info:
        opts.validate()
    assert str(info.value) == "Error: The two input files must be different."


def test_missing_file_error():
    opts = parse_args([FILE1])
    with pytest.raises(OptionError) as info:
        opts.validate()
    assert str(info.value) == "Error: Two input files must be specified."


def test_valid_options_pass():
    opts = DiffOptions(file1=FILE1, file2=FILE2)
    opts.validate()
    assert opts.line_length == 60


def test_parse_columns():
    assert parse_columns("1,2,4") == {1, 2, 4}
    assert parse_columns("3,3,1,") == {1, 3}


def test_parse_columns_rejects_zero():
    with pytest.raises(OptionError, match="at least 1 \\(got 0\\)"):
        parse_columns("1,0")


def test_parse_columns_rejects_garbage():
    with pytest.raises(OptionError):
        parse_columns("a,b")


def test_print_usage():
    buf = io.StringIO()
    print_usage(buf)
    text = buf.getvalue()
    assert text == USAGE + "\n"
    assert text.startswith("Usage: numeric-diff [options] file1 file2")