"""Parsing utilities for Go and TypeScript sources."""

from parse.line_patterns import (
    extract_json_tag,
    identifier_at,
    is_go_enum_const,
    is_go_enum_type,
    is_go_exported,
    is_ts_enum_const,
    is_ts_exported_line,
    ts_enum_type_name,
)
from parse.treesitter_identifiers import extract_identifier_ranges
from parse.treesitter_symbols import (
    extract_symbols_from_source,
    extract_symbols_treesitter,
)

__all__ = [
    "extract_identifier_ranges",
    "extract_json_tag",
    "extract_symbols_from_source",
    "extract_symbols_treesitter",
    "identifier_at",
    "is_go_enum_const",
    "is_go_enum_type",
    "is_go_exported",
    "is_ts_enum_const",
    "is_ts_exported_line",
    "ts_enum_type_name",
]
