"""Cross-language reference and implementation resolution."""

from resolve.counterparts import counterpart_declarations, dedupe_locations
from resolve.dispatcher import CrossLanguageResolver
from resolve.guard import RequestGuard
from resolve.implementations import find_implementations
from resolve.references import find_references

__all__ = [
    "CrossLanguageResolver",
    "RequestGuard",
    "counterpart_declarations",
    "dedupe_locations",
    "find_implementations",
    "find_references",
]
