"""
Hashtag-style labels inside memos.

A label is a label-open character followed by one to three phrases joined by
a splitter::

    #personal        -> ("personal",)
    #priority:1      -> ("priority", "1")
    ＃order：a：b      -> ("order", "a", "b")

Both the ASCII and the full-width forms of ``#`` and ``:`` are accepted. A
phrase is a maximal run of letters and digits of any script (``_`` is not a
phrase character). A splitter with no phrase after it is left in the text.

Labels are captured as raw text; nothing here assigns them a meaning.
"""

import re
from typing import Iterable, List, Tuple

from models.item import Label

LABEL_OPEN_CHARS = "#＃"      # # and ＃
LABEL_SPLITTER_CHARS = ":："  # : and ：

_PHRASE = r"([^\W_]+)"
_SPLIT = rf"[{LABEL_SPLITTER_CHARS}]"

LABEL_RE = re.compile(
    rf"[{LABEL_OPEN_CHARS}]{_PHRASE}(?:{_SPLIT}{_PHRASE})?(?:{_SPLIT}{_PHRASE})?"
)

_SPACE_RUN_RE = re.compile(r"[ \t]+")


def extract_labels(text: str) -> List[Label]:
    """
    Find every label in ``text``, in order of appearance.

    Each Label carries its phrases and the span it occupies in ``text``. Spans
    count code points, not UTF-8 bytes: in ``"東京 #a"`` the label starts at 3.
    """
    labels = []
    for m in LABEL_RE.finditer(text):
        phrases = tuple(p for p in m.groups() if p is not None)
        labels.append(Label(phrases=phrases, start=m.start(), end=m.end()))
    return labels


def split_labels(text: str) -> Tuple[str, List[Label]]:
    """
    Separate a memo into its clean text and its labels.

    The label sources are cut out, runs of spaces are collapsed, each line is
    trimmed and lines left empty are dropped. Running this again on the clean
    text returns it unchanged with no labels.

    Returns:
        (clean_text, labels)
    """
    labels = extract_labels(text)

    pieces = []
    pos = 0
    for label in labels:
        pieces.append(text[pos:label.start])
        pos = label.end
    pieces.append(text[pos:])

    lines = []
    for line in "".join(pieces).split("\n"):
        line = _SPACE_RUN_RE.sub(" ", line).strip()
        if line:
            lines.append(line)

    return "\n".join(lines), labels


def group_labels(
    labels: Iterable[Label],
) -> Tuple[Tuple[str, ...], Tuple[Tuple[str, str], ...], Tuple[Tuple[str, str, str], ...]]:
    """Bucket labels by phrase count: (label1s, label2s, label3s)."""
    label1s, label2s, label3s = [], [], []
    for label in labels:
        if label.arity == 1:
            label1s.append(label.phrases[0])
        elif label.arity == 2:
            label2s.append(label.phrases)
        else:
            label3s.append(label.phrases)
    return tuple(label1s), tuple(label2s), tuple(label3s)
