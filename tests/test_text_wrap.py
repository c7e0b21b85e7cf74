import pytest

from menukit.text_wrap import split_string, truncate_string_list


@pytest.mark.parametrize(
    ("text", "max_width", "expected"),
    [
        ("", 10, []),
        ("description", 15, ["description"]),
        ("this is a description", 10, ["this is a", "descriptio", "n"]),
        (
            "this is another description",
            2,
            ["th", "is", "is", "an", "ot", "he", "r", "de", "sc", "ri", "pt", "io", "n"],
        ),
        ("this is a description", 12, ["this is a", "description"]),
        ("test", 1, ["t", "e", "s", "t"]),
        (
            "😊a😊 😊bc de😊fg",
            2,
            ["😊", "a", "😊", "😊", "bc", "de", "😊", "fg"],
        ),
        ("😊", 1, []),
        ("t😊e😊s😊t", 1, ["t", "e", "s", "t"]),
    ],
)
def test_split_string(text, max_width, expected):
    assert split_string(text, max_width) == expected


def test_split_string_collapses_whitespace():
    assert split_string("  alpha \n\t beta  ", 20) == ["alpha beta"]


@pytest.mark.parametrize("max_width", [1, 2, 3, 5, 8, 13])
def test_split_string_lines_fit_width(max_width):
    text = "the quick brown fox jumps over the extraordinarily lazy dog"
    lines = split_string(text, max_width)
    assert lines
    assert all(len(line) <= max_width for line in lines)
    assert "".join(lines).replace(" ", "") == text.replace(" ", "")


@pytest.mark.parametrize(
    ("lines", "truncation_chars", "expected"),
    [
        (
            ["this is a description", "that will be truncate", "d"],
            "...",
            ["this is a description", "that will be trunca..", "."],
        ),
        (
            ["this is a description", "that will be truncate", "d"],
            "....",
            ["this is a description", "that will be trunc...", "."],
        ),
        (
            ["😊a😊 😊bc de😊fg", "😊a😊 😊bc de😊fg", "😊a😊 😊bc de😊fg"],
            "...",
            ["😊a😊 😊bc de😊fg", "😊a😊 😊bc de😊fg", "😊a😊 😊bc de..."],
        ),
        (["t", "e", "s", "t"], "..", ["t", "e", ".", "."]),
        (["😊", "😊", "s", "t"], "..😊", ["😊", ".", ".", "😊"]),
        ([""], "test", [""]),
        (["t", "e", "s", "t"], "", ["t", "e", "s", "t"]),
    ],
)
def test_truncate_string_list(lines, truncation_chars, expected):
    assert truncate_string_list(lines, truncation_chars) == expected


def test_truncate_string_list_leaves_input_unchanged():
    lines = ["abc", "def"]
    result = truncate_string_list(lines, "..")
    assert result == ["abc", "d.."]
    assert lines == ["abc", "def"]


def test_truncate_string_list_empty_list():
    assert truncate_string_list([], "...") == []