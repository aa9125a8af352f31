"""
Line classification for checklist documents.

Every physical line falls into exactly one kind. Classification looks at
one line at a time and keeps no state between calls.
"""

from enum import Enum

from parsers.grammar import item_open_pattern


class LineKind(Enum):
    BLANK = "blank"
    ITEM_OPEN = "item_open"
    CONTINUATION = "continuation"


def is_blank(line: str) -> bool:
    """True for empty lines and lines made only of whitespace."""
    return not line.strip()


def classify_line(line: str, allow_label_bullet: bool = True) -> LineKind:
    """
    Classify one line of a checklist document.

    Args:
        line: Line text without its terminator
        allow_label_bullet: Accept ``#``/``＃`` as a list bullet before the checkbox

    Returns:
        LineKind.ITEM_OPEN if the line carries a checkbox in the opening
        position, LineKind.BLANK if it is whitespace only, otherwise
        LineKind.CONTINUATION
    """
    if item_open_pattern(allow_label_bullet).match(line):
        return LineKind.ITEM_OPEN
    if is_blank(line):
        return LineKind.BLANK
    return LineKind.CONTINUATION
