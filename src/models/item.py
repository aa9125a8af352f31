"""
Core checklist data models.

An Item is one task parsed from a checklist document. Items are built up by
the accumulator in parsers.item_parser and are immutable once emitted; the
mark is stored verbatim and never interpreted here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, NamedTuple, Optional, Tuple

# Mark used for records that were not opened by a checkbox
SENTINEL_MARK = "?"


@dataclass(frozen=True)
class Label:
    """
    A hashtag-style label found in a memo.

    ``start``/``end`` are str (code point) indices into the scanned text, not
    UTF-8 byte offsets, so ``text[start:end]`` is the label exactly as written
    (e.g. ``"#priority:1"``).
    """

    phrases: Tuple[str, ...]
    start: int
    end: int

    @property
    def arity(self) -> int:
        return len(self.phrases)


class CheckboxLine(NamedTuple):
    """Result of parsing a single item-opening line."""

    nest: int
    mark: str
    memo: str


@dataclass(frozen=True)
class ItemOpenMatch:
    """Every token of an item-opening line, as written."""

    indent: str
    bullet: Optional[str]
    checkbox_open: str
    mark: str
    checkbox_shut: str
    memo: str
    nest: int = 0

    def to_checkbox_line(self) -> CheckboxLine:
        return CheckboxLine(self.nest, self.mark, self.memo)


@dataclass(frozen=True)
class Item:
    """
    A single task record parsed from a checklist.

    Fields:
        nest: Depth derived from the opening line's leading whitespace.
        mark: The character between the checkbox brackets (" ", "x", "!", ...).
        memo: Task text; continuation lines are joined with "\\n".
        label1s: Single-phrase labels, e.g. ``#personal`` -> "personal".
        label2s: Two-phrase labels, e.g. ``#priority:1`` -> ("priority", "1").
        label3s: Three-phrase labels, e.g. ``#due:2024:q3``.
    """

    nest: int = 0
    mark: str = SENTINEL_MARK
    memo: str = ""
    label1s: Tuple[str, ...] = field(default_factory=tuple)
    label2s: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)
    label3s: Tuple[Tuple[str, str, str], ...] = field(default_factory=tuple)

    @property
    def has_labels(self) -> bool:
        return bool(self.label1s or self.label2s or self.label3s)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "nest": self.nest,
            "mark": self.mark,
            "memo": self.memo,
            "label1s": list(self.label1s),
            "label2s": [list(label) for label in self.label2s],
            "label3s": [list(label) for label in self.label3s],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Item:
        """
        Build an Item from a dict produced by ``to_dict`` (or hand-written JSON).

        Missing keys fall back to the defaults.

        Raises:
            ValueError: if ``mark`` is not a single character or ``nest`` is negative
        """
        nest = int(data.get("nest", 0))
        mark = data.get("mark", SENTINEL_MARK)
        if nest < 0:
            raise ValueError(f"nest must be >= 0, got {nest}")
        if not isinstance(mark, str) or len(mark) != 1:
            raise ValueError(f"mark must be a single character, got {mark!r}")

        return cls(
            nest=nest,
            mark=mark,
            memo=str(data.get("memo", "")),
            label1s=tuple(str(p) for p in data.get("label1s", ())),
            label2s=tuple(tuple(str(p) for p in lbl) for lbl in data.get("label2s", ())),
            label3s=tuple(tuple(str(p) for p in lbl) for lbl in data.get("label3s", ())),
        )

    def __str__(self) -> str:
        from utils.formatting import format_item

        return format_item(self)
