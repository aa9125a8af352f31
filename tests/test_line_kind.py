"""Tests for parsers/line_kind.py."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from parsers.line_kind import LineKind, classify_line


@pytest.mark.parametrize("line", ["", " ", "\t  ", "　"])
def test_blank(line):
    assert classify_line(line) is LineKind.BLANK


@pytest.mark.parametrize(
    "line",
    [
        "[ ] todo",
        "[x] done",
        "［x］ full width",
        "    - [!] nested",
        "\t• [@] tabbed",
        "[x]",
        "# [ ] number sign",
    ],
)
def test_item_open(line):
    assert classify_line(line) is LineKind.ITEM_OPEN


@pytest.mark.parametrize(
    "line",
    [
        "alpha2",
        "    indented text",
        "#personal",
        "[x",
        "[] nothing",
        "text then [x] box",
    ],
)
def test_continuation(line):
    assert classify_line(line) is LineKind.CONTINUATION


def test_label_bullet_is_continuation_when_strict():
    assert classify_line("# [ ] number sign", allow_label_bullet=False) is LineKind.CONTINUATION
    assert classify_line("* [ ] asterisk", allow_label_bullet=False) is LineKind.ITEM_OPEN


def test_stateless():
    lines = ["[ ] a", "b", "", "[x] c"]
    first = [classify_line(line) for line in lines]
    second = [classify_line(line) for line in reversed(lines)]
    assert first == list(reversed(second))
