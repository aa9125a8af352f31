"""Parsed checklist documents held by the document cache."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from models.item import Item


@dataclass
class CachedDocument:
    """A parsed checklist file and the mtime it was parsed at."""

    file_path: Path
    items: List[Item] = field(default_factory=list)
    mtime: float = 0.0

    @property
    def item_count(self) -> int:
        return len(self.items)
