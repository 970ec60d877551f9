"""Route a classification to its matcher and collect counterpart declarations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from match.matchers import (
    match_data_shape,
    match_enum_const,
    match_enum_type,
    match_field,
    match_function,
    match_interface,
    match_interface_method,
)
from model.infos import (
    EnumConstInfo,
    EnumTypeInfo,
    FieldInfo,
    InterfaceInfo,
    InterfaceMethodInfo,
    SymbolInfo,
)
from model.symbols import Language, SymbolKind
from utils import language_for_path

if TYPE_CHECKING:
    from collections.abc import Iterable

    from match.matchers import MatchContext
    from model.infos import Classification
    from model.symbols import Location

logger = logging.getLogger(__name__)

_SHAPE_KINDS = (SymbolKind.STRUCT, SymbolKind.INTERFACE)


async def counterpart_declarations(
    ctx: MatchContext, classification: Classification
) -> list[Location]:
    """Declaration locations in the other language, best match first."""
    if isinstance(classification, EnumTypeInfo):
        matches = await match_enum_type(ctx, classification)
        return [m.symbol.location() for m in matches]

    if isinstance(classification, EnumConstInfo):
        matches = await match_enum_const(ctx, classification)
        return [m.symbol.location() for m in matches]

    if isinstance(classification, InterfaceInfo):
        if classification.has_methods:
            interfaces = await match_interface(ctx, classification)
            return [i.symbol.location() for i in interfaces]
        candidates = await match_data_shape(
            ctx,
            name=classification.name,
            kind=classification.symbol.kind,
            path=classification.path,
            exported=classification.exported,
        )
        return [c.location() for c in candidates]

    if isinstance(classification, InterfaceMethodInfo):
        candidates = await match_interface_method(ctx, classification)
        return [c.location() for c in candidates]

    if isinstance(classification, FieldInfo):
        matched = await match_field(ctx, classification)
        return [matched.field.location()] if matched is not None else []

    if isinstance(classification, SymbolInfo):
        if classification.kind is SymbolKind.FUNCTION:
            candidates = await match_function(ctx, classification)
        elif classification.kind in _SHAPE_KINDS:
            candidates = await match_data_shape(
                ctx,
                name=classification.name,
                kind=classification.kind,
                path=classification.location.path,
                exported=classification.exported,
            )
        else:
            return []
        return [c.location() for c in candidates]

    raise AssertionError(f"Unhandled classification: {type(classification).__name__}")


def expands_to_implementations(classification: Classification) -> bool:
    """True when matched declarations should also contribute their implementations.

    Behavioural interfaces and their methods do; so does a Go struct, whose
    TypeScript interface counterpart may be implemented by classes.
    """
    if isinstance(classification, InterfaceMethodInfo):
        return True
    if isinstance(classification, InterfaceInfo):
        if classification.has_methods:
            return True
        return (
            classification.symbol.kind is SymbolKind.STRUCT
            and language_for_path(classification.path) is Language.GO
        )
    if isinstance(classification, SymbolInfo):
        return (
            classification.kind is SymbolKind.STRUCT
            and language_for_path(classification.location.path) is Language.GO
        )
    return False


def dedupe_locations(locations: Iterable[Location]) -> list[Location]:
    """Drop repeated (path, line, character) starts, keeping first occurrences."""
    seen: set[tuple[str, int, int]] = set()
    unique: list[Location] = []
    for location in locations:
        key = location.dedup_key()
        if key in seen:
            continue
        seen.add(key)
        unique.append(location)
    return unique


__all__ = ["counterpart_declarations", "dedupe_locations", "expands_to_implementations"]
