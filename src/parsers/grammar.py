"""
Inline grammar for item-opening lines.

An item-opening line looks like::

    <indent><bullet?><space?><checkbox><space?><memo>

where the checkbox is an open bracket, exactly one mark character and a
shut bracket. Each bracket may be ASCII or full-width, independently of the
other, so ``[x]``, ``［x］`` and ``[x］`` are all the same checkbox. The mark
may be any character at all; it is never checked against a status alphabet.

A line that does not fit the grammar is simply "no match" (``None``). Nothing
in this module raises on text input.
"""

import re
from typing import Optional, Tuple

from models.item import CheckboxLine, ItemOpenMatch
from parsers.labels import LABEL_OPEN_CHARS

CHECKBOX_OPEN_CHARS = "[［"   # [ and ［
CHECKBOX_SHUT_CHARS = "]］"   # ] and ］
LIST_BULLET_CHARS = "*+-•"   # * + - •

_CHECKBOX = (
    rf"(?P<open>[{re.escape(CHECKBOX_OPEN_CHARS)}])"
    r"(?P<mark>.)"
    rf"(?P<shut>[{re.escape(CHECKBOX_SHUT_CHARS)}])"
)


def _item_open_pattern(bullets: str) -> "re.Pattern[str]":
    return re.compile(
        r"^(?P<indent>\s*)"
        rf"(?P<bullet>[{re.escape(bullets)}])?"
        r"\s*"
        + _CHECKBOX
        + r"\s*(?P<memo>.*)$",
        re.DOTALL,
    )


CHECKBOX_RE = re.compile(_CHECKBOX, re.DOTALL)

# "#" doubles as a bullet by default; the strict pattern leaves it to labels
ITEM_OPEN_RE = _item_open_pattern(LIST_BULLET_CHARS + LABEL_OPEN_CHARS)
ITEM_OPEN_STRICT_RE = _item_open_pattern(LIST_BULLET_CHARS)


def item_open_pattern(allow_label_bullet: bool = True) -> "re.Pattern[str]":
    """Return the compiled item-opening pattern for the chosen bullet set."""
    return ITEM_OPEN_RE if allow_label_bullet else ITEM_OPEN_STRICT_RE


def calculate_nest(indent: str) -> int:
    """
    Convert a leading-whitespace run to a nesting depth.

    One level per tab plus one level per four spaces, summed. Leftover
    spaces and any other whitespace characters count for nothing.
    """
    return indent.count("\t") + indent.count(" ") // 4


def parse_checkbox(text: str) -> Optional[Tuple[str, str, str, str]]:
    """
    Parse a checkbox at the very start of ``text``.

    Returns:
        (checkbox_open, mark, checkbox_shut, rest) or None if ``text`` does
        not start with a checkbox
    """
    m = CHECKBOX_RE.match(text)
    if not m:
        return None
    return m.group("open"), m.group("mark"), m.group("shut"), text[m.end():]


def match_item_open(line: str, allow_label_bullet: bool = True) -> Optional[ItemOpenMatch]:
    """
    Split an item-opening line into its tokens.

    Args:
        line: One line of text without its terminator
        allow_label_bullet: Accept ``#``/``＃`` as a list bullet

    Returns:
        ItemOpenMatch, or None if the line is not item-opening
    """
    m = item_open_pattern(allow_label_bullet).match(line)
    if not m:
        return None

    indent = m.group("indent")
    return ItemOpenMatch(
        indent=indent,
        bullet=m.group("bullet"),
        checkbox_open=m.group("open"),
        mark=m.group("mark"),
        checkbox_shut=m.group("shut"),
        memo=m.group("memo").strip(),
        nest=calculate_nest(indent),
    )


def parse_checkbox_line(line: str, allow_label_bullet: bool = True) -> Optional[CheckboxLine]:
    """
    Parse one item-opening line into (nest, mark, memo).

    >>> parse_checkbox_line("    - [x] ship it")
    CheckboxLine(nest=1, mark='x', memo='ship it')
    >>> parse_checkbox_line("just text") is None
    True
    """
    match = match_item_open(line, allow_label_bullet)
    if match is None:
        return None
    return match.to_checkbox_line()
