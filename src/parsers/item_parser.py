"""
Parser for plain-text checklist documents.

Main API:
    parse_document(lines)  -> List[Item]
    parse_content(text)    -> List[Item]
    parse_file(path)       -> List[Item]
    write_file(path, items) -> None

Each line is classified on its own (see parsers.line_kind) and folded into
an ItemAccumulator:

    IDLE         + blank        -> IDLE
    IDLE         + item-open    -> ACCUMULATING (new record from the checkbox)
    IDLE         + continuation -> ACCUMULATING (record with mark "?")
    ACCUMULATING + item-open    -> emit, then start the next record
    ACCUMULATING + blank        -> emit, IDLE
    ACCUMULATING + continuation -> append the trimmed line to the memo

End of input emits whatever is still pending. Every line has a transition,
so parsing never fails on text input.
"""

import io
import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, TextIO

from models.item import SENTINEL_MARK, Item
from parsers.grammar import match_item_open
from parsers.labels import extract_labels, group_labels
from parsers.line_kind import LineKind, classify_line
from utils.formatting import format_items

log = logging.getLogger(__name__)


class State(Enum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"


class ItemAccumulator:
    """
    Stateful fold from lines to Items.

    Feed lines one at a time; each call returns the record completed by that
    line, if any. Call finish() after the last line to flush the pending one.

    Usage:
        acc = ItemAccumulator()
        for line in lines:
            item = acc.feed(line)
            if item:
                ...
        item = acc.finish()
    """

    def __init__(self, labels: bool = True, allow_label_bullet: bool = True) -> None:
        self._labels = labels
        self._allow_label_bullet = allow_label_bullet
        self.state = State.IDLE
        self._nest = 0
        self._mark = SENTINEL_MARK
        self._memo_lines: List[str] = []

    def feed(self, line: str) -> Optional[Item]:
        """Consume one line and return the record it completed, if any."""
        kind = classify_line(line, self._allow_label_bullet)
        log.debug("line %r: %s", line, kind.value)

        if kind is LineKind.BLANK:
            return self.finish()

        if kind is LineKind.ITEM_OPEN:
            emitted = self.finish()
            match = match_item_open(line, self._allow_label_bullet)
            self._start(match.nest, match.mark, match.memo)
            return emitted

        if self.state is State.IDLE:
            # Text with no checkbox in front of it still becomes a record
            self._start(0, SENTINEL_MARK, line.strip())
        else:
            self._memo_lines.append(line.strip())
        return None

    def finish(self) -> Optional[Item]:
        """Emit the pending record (if any) and return to IDLE."""
        if self.state is State.IDLE:
            return None

        memo = "\n".join(self._memo_lines)
        label1s, label2s, label3s = group_labels(extract_labels(memo)) if self._labels else ((), (), ())
        item = Item(
            nest=self._nest,
            mark=self._mark,
            memo=memo,
            label1s=label1s,
            label2s=label2s,
            label3s=label3s,
        )

        self.state = State.IDLE
        self._nest = 0
        self._mark = SENTINEL_MARK
        self._memo_lines = []

        log.debug("emit %r", item)
        return item

    def _start(self, nest: int, mark: str, memo: str) -> None:
        self.state = State.ACCUMULATING
        self._nest = nest
        self._mark = mark
        self._memo_lines = [memo]


def iter_items(
    lines: Iterable[str],
    labels: bool = True,
    allow_label_bullet: bool = True,
) -> Iterator[Item]:
    """Lazily yield Items from any iterable of lines (terminators already removed)."""
    acc = ItemAccumulator(labels=labels, allow_label_bullet=allow_label_bullet)
    for line in lines:
        item = acc.feed(line)
        if item is not None:
            yield item
    item = acc.finish()
    if item is not None:
        yield item


def parse_document(
    lines: Iterable[str],
    labels: bool = True,
    allow_label_bullet: bool = True,
) -> List[Item]:
    """
    Parse a whole checklist document.

    Args:
        lines: Document lines without terminators
        labels: Fill each record's label fields from its memo
        allow_label_bullet: Accept ``#``/``＃`` as a list bullet

    Returns:
        Items in document order
    """
    return list(iter_items(lines, labels=labels, allow_label_bullet=allow_label_bullet))


def parse_content(content: str, **kwargs) -> List[Item]:
    """
    Parse checklist text.

    Lines end at LF, CRLF or CR only, the same as when reading a file.
    """
    return load_items(io.StringIO(content, newline=None), **kwargs)


def load_items(reader: TextIO, **kwargs) -> List[Item]:
    """Parse lines read from an open text stream."""
    return parse_document((line.rstrip("\r\n") for line in reader), **kwargs)


def parse_file(file_path: Path, **kwargs) -> List[Item]:
    """
    Parse a checklist file (UTF-8).

    I/O and decoding errors propagate to the caller.
    """
    with open(file_path, encoding="utf-8") as f:
        items = load_items(f, **kwargs)
    log.debug("Parsed %d items from %s", len(items), file_path)
    return items


def write_file(file_path: Path, items: Iterable[Item]) -> None:
    """Write Items back to a checklist file in the canonical text format."""
    text = format_items(items)
    file_path.write_text(text + "\n" if text else "", encoding="utf-8")
