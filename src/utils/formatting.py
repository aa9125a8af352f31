"""
Canonical text rendering for checklist items.

This module is the single source of truth for how an Item is written back as
checklist text. Output always uses ASCII brackets, four spaces per nesting
level, and a blank line between records so the text parses back to the same
records.
"""

from typing import Iterable, Sequence, Union

from models.item import Item, Label

INDENT = "    "  # 4 spaces per nesting level


def render_label(label: Union[Label, Sequence[str], str]) -> str:
    """
    Render a label back to hashtag form.

    Args:
        label: A Label, a tuple of 1-3 phrases, or a single phrase

    Returns:
        Label text (e.g. "#personal", "#priority:1", "#order:a:b")
    """
    if isinstance(label, Label):
        phrases = label.phrases
    elif isinstance(label, str):
        phrases = (label,)
    else:
        phrases = tuple(label)
    return "#" + ":".join(phrases)


def render_labels(item: Item) -> str:
    """Render all of an item's labels to a space-separated string."""
    labels = list(item.label1s) + list(item.label2s) + list(item.label3s)
    return " ".join(render_label(label) for label in labels)


def format_item(item: Item, bullet: str = "") -> str:
    """
    Format an item as checklist text.

    The first memo line follows the checkbox; further memo lines are written
    one level deeper than the item itself.

    Args:
        item: Item to format
        bullet: Optional list bullet to put before the checkbox (e.g. "-")
    """
    indent = INDENT * item.nest
    prefix = f"{bullet} " if bullet else ""
    first, *rest = item.memo.split("\n")

    head = f"{indent}{prefix}[{item.mark}]"
    lines = [f"{head} {first}" if first else head]
    lines.extend(f"{indent}{INDENT}{line}" for line in rest)
    return "\n".join(lines)


def format_items(items: Iterable[Item], bullet: str = "") -> str:
    """Format items separated by blank lines."""
    return "\n\n".join(format_item(item, bullet) for item in items)
