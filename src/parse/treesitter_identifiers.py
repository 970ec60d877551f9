"""Tree-sitter based identifier occurrence extraction for Go and TypeScript."""

from __future__ import annotations

from typing import TYPE_CHECKING

from model.symbols import Range
from parse.treesitter_symbols import parse_source
from utils import language_for_path

if TYPE_CHECKING:
    from pathlib import Path

    from tree_sitter import Node

_IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "field_identifier",
        "type_identifier",
        "property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
    }
)


def _iter_identifier_nodes(root: Node) -> list[Node]:
    found: list[Node] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in _IDENTIFIER_TYPES:
            found.append(node)
            continue
        stack.extend(reversed(node.children))
    return found


def extract_identifier_ranges(file_path: Path, name: str) -> list[Range]:
    """Return the ranges of every identifier spelled ``name`` in a file.

    Occurrences inside comments and string literals are not identifiers and
    are skipped. Results are in source order.
    """
    language = language_for_path(file_path)
    if language is None or not name:
        return []

    try:
        source_bytes = file_path.read_bytes()
    except OSError:
        return []

    # Cheap pre-filter before paying for a parse.
    if name.encode("utf8") not in source_bytes:
        return []

    root_node = parse_source(source_bytes, language)
    return [
        Range.from_points(tuple(node.start_point), tuple(node.end_point))
        for node in _iter_identifier_nodes(root_node)
        if node.text is not None and node.text.decode("utf8", errors="ignore") == name
    ]


__all__ = ["extract_identifier_ranges"]
