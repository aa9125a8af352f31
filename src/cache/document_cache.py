"""
Thread-safe in-memory cache of parsed checklist documents.

Design:
    Primary store: Dict[Path, CachedDocument]   (parsed items + mtime)

A document is reparsed only when its mtime moves past the cached one.
All mutations acquire _lock (threading.RLock); the REST server thread and
the MCP loop share one instance.
"""

import logging
import re
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from models.document import CachedDocument
from models.item import Item
from parsers.item_parser import parse_file, write_file
from parsers.line_kind import LineKind, classify_line

log = logging.getLogger(__name__)

# line terminators recognised when a checklist file is read back
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def _check_mark(mark: str) -> None:
    if len(mark) != 1 or mark.splitlines() != [mark]:
        raise ValueError(f"mark must be a single non-newline character, got {mark!r}")


def _normalize_memo(memo: str) -> str:
    """
    Trim each memo line the way the parser does on read-back.

    Raises:
        ValueError: if a line after the first is blank or would open an item
            of its own, since the written file would then hold extra records
    """
    first, *rest = [line.strip() for line in _NEWLINE_RE.split(memo)]
    for line in rest:
        kind = classify_line(line)
        if kind is LineKind.BLANK:
            raise ValueError("memo must not contain blank lines")
        if kind is not LineKind.CONTINUATION:
            raise ValueError(f"memo line {line!r} would start a new item")
    return "\n".join([first] + rest)


class DocumentCache:
    """
    Parsed checklists keyed by resolved path.

    Usage:
        cache = DocumentCache(root)
        items = cache.get(Path("todo.txt"))
        cache.add_item(Path("todo.txt"), "call the bank", mark=" ")
    """

    def __init__(self, root: Optional[Path] = None) -> None:
        self._lock = threading.RLock()
        self._documents: Dict[Path, CachedDocument] = {}
        self._root = root
        self._started = datetime.now()

    # ------------------------------------------------------------------
    # Path handling
    # ------------------------------------------------------------------

    def resolve(self, path: Path) -> Path:
        """Resolve ``path`` against the cache root when it is relative."""
        path = Path(path)
        if not path.is_absolute() and self._root is not None:
            path = self._root / path
        return path.resolve()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, path: Path) -> List[Item]:
        """
        Return the items of a checklist file, reparsing if it changed on disk.

        Raises:
            FileNotFoundError: if the file does not exist
        """
        path = self.resolve(path)
        mtime = path.stat().st_mtime

        with self._lock:
            cached = self._documents.get(path)
            if cached and cached.mtime >= mtime:
                return list(cached.items)

            items = parse_file(path)
            self._documents[path] = CachedDocument(file_path=path, items=items, mtime=mtime)
            log.debug("Loaded %s (%d items)", path, len(items))
            return list(items)

    def is_stale(self, path: Path) -> bool:
        """Return True if the file has been modified since it was last parsed."""
        path = self.resolve(path)
        try:
            mtime = path.stat().st_mtime
        except OSError:
            return False
        with self._lock:
            cached = self._documents.get(path)
            return cached is None or cached.mtime < mtime

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_item(self, path: Path, memo: str, *, mark: str = " ", nest: int = 0) -> Item:
        """
        Append a new item to a checklist file and write it back.

        The file is created if it does not exist yet. Memo lines are trimmed.

        Returns:
            The appended Item as it reads back from disk

        Raises:
            ValueError: for a bad mark or nest, or a memo that would not read
                back as a single item
        """
        _check_mark(mark)
        if nest < 0:
            raise ValueError(f"nest must be >= 0, got {nest}")
        path = self.resolve(path)
        new_item = Item(nest=nest, mark=mark, memo=_normalize_memo(memo))

        with self._lock:
            items = self.get(path) if path.exists() else []
            items.append(new_item)
            self._store(path, items)
            return self._documents[path].items[-1]

    def delete_item(self, path: Path, index: int) -> Item:
        """
        Remove the item at ``index`` from a checklist file and write it back.

        Raises:
            FileNotFoundError: if the file does not exist
            IndexError: if ``index`` is out of range
        """
        path = self.resolve(path)
        with self._lock:
            items = self.get(path)
            if not 0 <= index < len(items):
                raise IndexError(f"Item index {index} out of range (0..{len(items) - 1})")
            removed = items.pop(index)
            self._store(path, items)
            return removed

    def _store(self, path: Path, items: List[Item]) -> None:
        """Write items to disk and re-read them so the cache matches the file."""
        write_file(path, items)
        self.invalidate(path)
        self.get(path)
        log.info("Wrote %d items to %s", len(items), path)

    def invalidate(self, path: Path) -> None:
        """Drop a document from the cache."""
        with self._lock:
            if self._documents.pop(self.resolve(path), None) is not None:
                log.debug("Evicted %s", path)

    def status(self) -> dict:
        with self._lock:
            return {
                "documents_cached": len(self._documents),
                "items_cached": sum(doc.item_count for doc in self._documents.values()),
                "root": str(self._root) if self._root else None,
                "started": self._started.isoformat(),
            }
