"""
Command-line harness for trying the checklist parser without MCP integration.

Usage:
    python harness.py <FILE> [--json] [--no-labels] [--strict-bullets]

Prints one line per parsed item (or the items as a JSON array).
"""

import argparse
import json
import sys
from pathlib import Path

# Add src/ to path so imports work
sys.path.insert(0, str(Path(__file__).parent / "src"))

from parsers.item_parser import parse_file
from utils.formatting import render_labels


def summarize(item) -> str:
    """One-line summary of an item: nest, mark, first memo line, labels."""
    first, _, rest = item.memo.partition("\n")
    more = f" (+{rest.count(chr(10)) + 1} lines)" if rest else ""
    labels = render_labels(item)
    line = f"{'  ' * item.nest}[{item.mark}] {first}{more}"
    return f"{line}  {labels}" if labels else line


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Parse a plain-text checklist and print its items")
    parser.add_argument("file", type=Path, help="Checklist file to parse")
    parser.add_argument("--json", action="store_true", help="Print items as a JSON array")
    parser.add_argument("--no-labels", action="store_true", help="Do not extract #labels")
    parser.add_argument(
        "--strict-bullets",
        action="store_true",
        help="Do not accept '#' as a list bullet before the checkbox",
    )
    args = parser.parse_args(argv)

    try:
        items = parse_file(
            args.file,
            labels=not args.no_labels,
            allow_label_bullet=not args.strict_bullets,
        )
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False))
    else:
        for item in items:
            print(summarize(item))
        print(f"{len(items)} items")

    return 0


if __name__ == "__main__":
    sys.exit(main())
