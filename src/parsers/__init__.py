from .grammar import calculate_nest, match_item_open, parse_checkbox, parse_checkbox_line
from .labels import extract_labels, group_labels, split_labels
from .line_kind import LineKind, classify_line
from .item_parser import (
    ItemAccumulator,
    iter_items,
    load_items,
    parse_content,
    parse_document,
    parse_file,
    write_file,
)

__all__ = [
    "parse_document",
    "parse_checkbox_line",
    "extract_labels",
    "calculate_nest",
    "match_item_open",
    "parse_checkbox",
    "split_labels",
    "group_labels",
    "LineKind",
    "classify_line",
    "ItemAccumulator",
    "iter_items",
    "load_items",
    "parse_content",
    "parse_file",
    "write_file",
]
