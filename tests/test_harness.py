"""Tests for the harness.py command line."""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from harness import main, summarize
from models.item import Item

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def test_summary_lines(capsys):
    assert main([str(FIXTURES_DIR / "todo.txt")]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "[ ] Plan the trip #personal #priority:1  #personal #priority:1"
    assert out[1] == "  [!] Book flights (+1 lines)"
    assert out[-1] == "6 items"


def test_json_output(capsys):
    assert main([str(FIXTURES_DIR / "1-content-and-0-between.txt"), "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert [d["memo"] for d in data] == ["alpha1", "bravo1", "charlie1"]


def test_no_labels(capsys):
    main([str(FIXTURES_DIR / "todo.txt"), "--json", "--no-labels"])
    data = json.loads(capsys.readouterr().out)
    assert all(d["label1s"] == [] for d in data)


def test_strict_bullets(capsys):
    main([str(FIXTURES_DIR / "list-item-symbols.txt"), "--strict-bullets"])
    assert capsys.readouterr().out.splitlines()[-1] == "4 items"


def test_missing_file(capsys, tmp_path):
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert "Error" in capsys.readouterr().err


def test_summarize_three_phrase_label():
    item = Item(mark="x", memo="done", label3s=(("due", "2024", "q3"),))
    assert summarize(item) == "[x] done  #due:2024:q3"
