"""Identifier casing conventions between Go and TypeScript."""

from naming.conventions import candidate_names, capitalize_first, lowercase_first

__all__ = ["candidate_names", "capitalize_first", "lowercase_first"]
