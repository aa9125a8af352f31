"""
Checklist tool handlers.

Core logic lives in handle_* functions (return dicts).
MCP wrappers in register_checklist_tools() serialize to JSON strings.
"""

import json
import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from parsers.grammar import match_item_open
from parsers.item_parser import parse_content
from parsers.labels import split_labels

log = logging.getLogger(__name__)


def _label_to_dict(label) -> dict:
    return {"phrases": list(label.phrases), "start": label.start, "end": label.end}


# ---------------------------------------------------------------------------
# Handler functions (return dicts, shared by MCP tools and REST API)
# ---------------------------------------------------------------------------


def handle_parse_text(
    content: str,
    *,
    labels: bool = True,
    allow_label_bullet: bool = True,
) -> dict:
    items = parse_content(content, labels=labels, allow_label_bullet=allow_label_bullet)
    return {
        "count": len(items),
        "items": [item.to_dict() for item in items],
    }


def handle_checkbox_line(line: str, *, allow_label_bullet: bool = True) -> dict:
    match = match_item_open(line, allow_label_bullet)
    if match is None:
        return {"error": "Line does not open a checklist item"}
    return {
        "nest": match.nest,
        "mark": match.mark,
        "memo": match.memo,
        "bullet": match.bullet,
        "checkbox_open": match.checkbox_open,
        "checkbox_shut": match.checkbox_shut,
    }


def handle_extract_labels(text: str) -> dict:
    clean, labels = split_labels(text)
    return {
        "labels": [_label_to_dict(label) for label in labels],
        "clean": clean,
    }


def handle_document_get(cache, *, path: str) -> dict:
    reloaded = cache.is_stale(Path(path))
    try:
        items = cache.get(Path(path))
    except FileNotFoundError:
        return {"error": f"Checklist '{path}' not found"}
    except (OSError, UnicodeDecodeError) as e:
        log.warning("Failed to read %s: %s", path, e)
        return {"error": f"Could not read '{path}': {e}"}
    return {
        "path": str(cache.resolve(Path(path))),
        "count": len(items),
        "reloaded": reloaded,
        "items": [item.to_dict() for item in items],
    }


def handle_item_add(
    cache,
    *,
    path: str,
    memo: str,
    mark: str = " ",
    nest: int = 0,
) -> dict:
    item = cache.add_item(Path(path), memo, mark=mark, nest=nest)
    result = item.to_dict()
    result["path"] = str(cache.resolve(Path(path)))
    return result


def handle_item_delete(cache, *, path: str, index: int) -> dict:
    try:
        item = cache.delete_item(Path(path), index)
    except FileNotFoundError:
        return {"error": f"Checklist '{path}' not found"}
    except IndexError as e:
        return {"error": str(e)}
    result = item.to_dict()
    result["path"] = str(cache.resolve(Path(path)))
    return result


def handle_cache_status(cache) -> dict:
    return cache.status()


# ---------------------------------------------------------------------------
# MCP tool registration (thin wrappers)
# ---------------------------------------------------------------------------


def register_checklist_tools(mcp: FastMCP, cache) -> None:
    """Register all checklist MCP tools onto the FastMCP instance."""

    @mcp.tool()
    def checklist_parse(
        content: str,
        labels: bool = True,
        allow_label_bullet: bool = True,
    ) -> str:
        """
        Parse checklist text into task records.

        One task per line that carries a checkbox (``[ ]``, ``[x]``, ``［!］`` ...).
        Following non-blank lines without a checkbox continue the task's memo;
        a blank line ends it.

        Args:
            content: Checklist text
            labels: Fill label1s/label2s/label3s from #labels in each memo
            allow_label_bullet: Treat a leading "#" before the checkbox as a list bullet

        Returns:
            JSON object with "count" and "items"
        """
        return json.dumps(
            handle_parse_text(content, labels=labels, allow_label_bullet=allow_label_bullet),
            indent=2,
            ensure_ascii=False,
        )

    @mcp.tool()
    def checklist_checkbox(line: str, allow_label_bullet: bool = True) -> str:
        """
        Parse a single checklist line.

        Args:
            line: One line of text
            allow_label_bullet: Treat a leading "#" before the checkbox as a list bullet

        Returns:
            JSON with nest, mark, memo and the bracket/bullet characters, or an error
        """
        return json.dumps(
            handle_checkbox_line(line, allow_label_bullet=allow_label_bullet),
            indent=2,
            ensure_ascii=False,
        )

    @mcp.tool()
    def checklist_labels(text: str) -> str:
        """
        Extract #labels (1-3 phrases, e.g. #home, #priority:1) from text.

        Args:
            text: Memo text to scan

        Returns:
            JSON with "labels" (phrases + span) and the "clean" text without them
        """
        return json.dumps(handle_extract_labels(text), indent=2, ensure_ascii=False)

    @mcp.tool()
    def checklist_get(path: str) -> str:
        """
        Read and parse a checklist file.

        Args:
            path: Path to the file (relative paths resolve against CHECKLIST_ROOT)

        Returns:
            JSON object with "path", "count", "reloaded" (file was reparsed) and
            "items", or an error
        """
        return json.dumps(handle_document_get(cache, path=path), indent=2, ensure_ascii=False)

    @mcp.tool()
    def checklist_add(path: str, memo: str, mark: str = " ", nest: int = 0) -> str:
        """
        Append a task to a checklist file (created if missing).

        Args:
            path: Path to the checklist file
            memo: Task text
            mark: Checkbox mark, a single character (default " ")
            nest: Nesting depth (default 0)

        Returns:
            JSON object with the new item
        """
        try:
            return json.dumps(
                handle_item_add(cache, path=path, memo=memo, mark=mark, nest=nest),
                indent=2,
                ensure_ascii=False,
            )
        except Exception as e:
            return json.dumps({"error": str(e)})

    @mcp.tool()
    def checklist_delete(path: str, index: int) -> str:
        """
        Delete a task from a checklist file by position.

        Args:
            path: Path to the checklist file
            index: 0-based item index as returned by checklist_get

        Returns:
            JSON object with the removed item, or an error
        """
        return json.dumps(
            handle_item_delete(cache, path=path, index=index), indent=2, ensure_ascii=False
        )

    @mcp.tool()
    def cache_status() -> str:
        """
        Show document cache statistics.

        Returns:
            JSON with cached document count, item count and cache root
        """
        return json.dumps(handle_cache_status(cache), indent=2)
