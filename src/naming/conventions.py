"""Casing conversions between Go and TypeScript identifiers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from model.symbols import Language


def capitalize_first(name: str) -> str:
    """Uppercase the first character, leaving the rest untouched.

    Examples:
        >>> capitalize_first("getArticle")
        'GetArticle'
        >>> capitalize_first("")
        ''
    """
    if not name:
        return name
    return name[0].upper() + name[1:]


def lowercase_first(name: str) -> str:
    """Lowercase the first character, leaving the rest untouched.

    Examples:
        >>> lowercase_first("GetArticle")
        'getArticle'
        >>> lowercase_first("ID")
        'iD'
    """
    if not name:
        return name
    return name[0].lower() + name[1:]


def candidate_names(name: str, target_language: Language) -> list[str]:
    """Return the names to look for in the target language, best first.

    The converted form comes first; the unchanged name is kept as a fallback
    so already-aligned pairs (``ID`` <-> ``ID``) still match.
    """
    converted = (
        lowercase_first(name) if target_language.is_typescript else capitalize_first(name)
    )
    if converted == name:
        return [name]
    return [converted, name]
