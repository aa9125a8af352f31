"""
Tests for tools/checklist_tools.py.

Uses a real DocumentCache backed by a temporary directory.
Exercises the MCP tool functions directly (bypasses transport).
"""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from cache.document_cache import DocumentCache
from tools.checklist_tools import (
    handle_checkbox_line,
    handle_extract_labels,
    handle_item_add,
    handle_parse_text,
    register_checklist_tools,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_root(tmp_path: Path) -> Path:
    root = tmp_path / "lists"
    root.mkdir()
    (root / "todo.txt").write_text(
        "- [ ] Buy groceries #errand\n"
        "    - [!] Milk\n"
        "      the oat one\n"
        "\n"
        "［x］ File taxes #money:2025\n",
        encoding="utf-8",
    )
    return root


class _FakeMCP:
    """Minimal fake to capture tool registrations."""

    def __init__(self):
        self._tools = {}

    def tool(self, *args, **kwargs):
        """Decorator that records functions by name."""
        def decorator(fn):
            self._tools[fn.__name__] = fn
            return fn
        return decorator

    def get(self, name: str):
        return self._tools[name]


@pytest.fixture
def setup(tmp_path):
    root = _make_root(tmp_path)
    cache = DocumentCache(root)

    mcp = _FakeMCP()
    register_checklist_tools(mcp, cache)

    return mcp, cache, root


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

class TestHandlers:
    def test_parse_text(self):
        result = handle_parse_text("[ ] a\nb\n\n[x] c #home")
        assert result["count"] == 2
        assert result["items"][0]["memo"] == "a\nb"
        assert result["items"][1]["label1s"] == ["home"]

    def test_parse_text_strict_bullets(self):
        result = handle_parse_text("[ ] a\n# [ ] b", allow_label_bullet=False)
        assert result["count"] == 1
        assert result["items"][0]["memo"] == "a\n# [ ] b"

    def test_checkbox_line(self):
        result = handle_checkbox_line("\t+ ［@］ waiting")
        assert result == {
            "nest": 1,
            "mark": "@",
            "memo": "waiting",
            "bullet": "+",
            "checkbox_open": "［",
            "checkbox_shut": "］",
        }

    def test_checkbox_line_no_match(self):
        assert "error" in handle_checkbox_line("no checkbox here")

    def test_extract_labels(self):
        result = handle_extract_labels("body #priority:1")
        assert result["labels"] == [{"phrases": ["priority", "1"], "start": 5, "end": 16}]
        assert result["clean"] == "body"

    def test_item_add_rejects_bad_mark(self, setup):
        _, cache, _ = setup
        with pytest.raises(ValueError):
            handle_item_add(cache, path="todo.txt", memo="x", mark="ab")

    def test_item_add_rejects_negative_nest(self, setup):
        _, cache, _ = setup
        with pytest.raises(ValueError):
            handle_item_add(cache, path="todo.txt", memo="x", nest=-1)


# ---------------------------------------------------------------------------
# MCP tools
# ---------------------------------------------------------------------------

class TestTools:
    def test_parse(self, setup):
        mcp, _, _ = setup
        data = json.loads(mcp.get("checklist_parse")(content="[x] foo"))
        assert data["items"] == [
            {"nest": 0, "mark": "x", "memo": "foo", "label1s": [], "label2s": [], "label3s": []}
        ]

    def test_checkbox(self, setup):
        mcp, _, _ = setup
        data = json.loads(mcp.get("checklist_checkbox")(line="    - [x] sub"))
        assert (data["nest"], data["mark"], data["memo"]) == (1, "x", "sub")

    def test_labels(self, setup):
        mcp, _, _ = setup
        data = json.loads(mcp.get("checklist_labels")(text="＃場所：東京"))
        assert data["labels"][0]["phrases"] == ["場所", "東京"]

    def test_get(self, setup):
        mcp, _, root = setup
        data = json.loads(mcp.get("checklist_get")(path="todo.txt"))
        assert data["path"] == str((root / "todo.txt").resolve())
        assert data["count"] == 3
        memos = [i["memo"] for i in data["items"]]
        assert memos == ["Buy groceries #errand", "Milk\nthe oat one", "File taxes #money:2025"]
        assert data["items"][1]["nest"] == 1
        assert data["items"][2]["label2s"] == [["money", "2025"]]

    def test_get_reports_reload(self, setup):
        mcp, _, _ = setup
        first = json.loads(mcp.get("checklist_get")(path="todo.txt"))
        second = json.loads(mcp.get("checklist_get")(path="todo.txt"))
        assert first["reloaded"] is True
        assert second["reloaded"] is False

    def test_get_missing(self, setup):
        mcp, _, _ = setup
        data = json.loads(mcp.get("checklist_get")(path="nope.txt"))
        assert "error" in data

    def test_add_then_get(self, setup):
        mcp, _, _ = setup
        added = json.loads(mcp.get("checklist_add")(path="todo.txt", memo="Call bank", mark=" "))
        assert added["memo"] == "Call bank"
        data = json.loads(mcp.get("checklist_get")(path="todo.txt"))
        assert data["count"] == 4
        assert data["items"][-1]["memo"] == "Call bank"

    def test_add_bad_mark_returns_error(self, setup):
        mcp, _, _ = setup
        data = json.loads(mcp.get("checklist_add")(path="todo.txt", memo="x", mark=""))
        assert "error" in data

    def test_add_memo_with_checkbox_line_returns_error(self, setup):
        mcp, _, _ = setup
        data = json.loads(mcp.get("checklist_add")(path="todo.txt", memo="buy\n[x] milk"))
        assert "error" in data
        assert json.loads(mcp.get("checklist_get")(path="todo.txt"))["count"] == 3

    def test_delete(self, setup):
        mcp, _, _ = setup
        removed = json.loads(mcp.get("checklist_delete")(path="todo.txt", index=1))
        assert removed["memo"] == "Milk\nthe oat one"
        data = json.loads(mcp.get("checklist_get")(path="todo.txt"))
        assert [i["memo"] for i in data["items"]] == ["Buy groceries #errand", "File taxes #money:2025"]

    def test_delete_out_of_range(self, setup):
        mcp, _, _ = setup
        data = json.loads(mcp.get("checklist_delete")(path="todo.txt", index=9))
        assert "error" in data

    def test_cache_status(self, setup):
        mcp, _, _ = setup
        mcp.get("checklist_get")(path="todo.txt")
        data = json.loads(mcp.get("cache_status")())
        assert data["documents_cached"] == 1
        assert data["items_cached"] == 3
