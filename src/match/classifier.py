"""Classify the symbol under a cursor into exactly one matching category.

Categories are tried in a fixed order, most specific first: enum type, enum
constant, interface, interface method, field, function/type. Each category
is tried at the cursor itself, then (when the word under the cursor could
name such a symbol) at the cursor's definition, so usage sites resolve like
declarations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from match.candidates import symbol_exported
from model.infos import (
    EnumConstInfo,
    EnumTypeInfo,
    FieldInfo,
    InterfaceInfo,
    InterfaceMethodInfo,
    SymbolInfo,
)
from model.symbols import Language, Position, Range, Symbol, SymbolKind
from parse.line_patterns import (
    extract_json_tag,
    has_two_uppercase_letters,
    identifier_at,
    is_go_enum_const,
    is_go_enum_type,
    is_go_exported,
    is_ts_enum_const,
    is_ts_export_type_line,
    is_ts_exported_line,
    ts_enum_type_name,
)
from utils import language_for_path

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from pathlib import Path

    from model.infos import Classification
    from source.protocol import SymbolSource

logger = logging.getLogger(__name__)

GO_ENUM_TYPE_KINDS = (SymbolKind.TYPE_ALIAS, SymbolKind.CLASS)
_GO_CONST_KINDS = (SymbolKind.CONSTANT,)
_TS_CONST_KINDS = (SymbolKind.CONSTANT, SymbolKind.VARIABLE)
_GO_FIELD_CONTAINERS = (SymbolKind.STRUCT,)
_TS_FIELD_CONTAINERS = (SymbolKind.INTERFACE, SymbolKind.TYPE_ALIAS)
FIELD_KINDS = (SymbolKind.FIELD, SymbolKind.PROPERTY)
_DECLARATION_KINDS = (SymbolKind.FUNCTION, SymbolKind.STRUCT, SymbolKind.INTERFACE)


def enum_const_kinds(language: Language) -> tuple[SymbolKind, ...]:
    return _GO_CONST_KINDS if language is Language.GO else _TS_CONST_KINDS


def field_container_kinds(language: Language) -> tuple[SymbolKind, ...]:
    return _GO_FIELD_CONTAINERS if language is Language.GO else _TS_FIELD_CONTAINERS


@dataclass
class _Document:
    """One document's symbol tree, as seen by a single classification."""

    source: SymbolSource
    path: Path
    language: Language
    symbols: list[Symbol]

    async def line(self, number: int) -> str:
        return await self.source.get_line_text(self.path, number)


def _touches(symbol: Symbol, position: Position) -> bool:
    return symbol.selection_range.contains(position) or symbol.range.contains(position)


async def _enum_type_at(
    doc: _Document, position: Position, expected: str | None
) -> EnumTypeInfo | None:
    if doc.language is Language.GO:
        for symbol in doc.symbols:
            if symbol.kind not in GO_ENUM_TYPE_KINDS or not _touches(symbol, position):
                continue
            if expected is not None and symbol.name != expected:
                continue
            if is_go_enum_type(symbol.name, await doc.line(symbol.range.start.line)):
                return EnumTypeInfo(name=symbol.name, symbol=symbol, path=doc.path)
        return None

    line = await doc.line(position.line)
    name = ts_enum_type_name(line, await doc.line(position.line + 1))
    if name is None:
        return None
    if expected is not None and name != expected:
        return None

    symbol = next((s for s in doc.symbols if s.name == name), None)
    if symbol is None:
        span = Range.from_points((position.line, 0), (position.line, len(line)))
        symbol = Symbol(
            name=name,
            kind=SymbolKind.TYPE_ALIAS,
            language=doc.language,
            path=doc.path,
            range=span,
            selection_range=span,
        )
    return EnumTypeInfo(name=name, symbol=symbol, path=doc.path)


async def _enum_const_at(
    doc: _Document, position: Position, expected: str | None
) -> EnumConstInfo | None:
    kinds = enum_const_kinds(doc.language)
    for symbol in doc.symbols:
        if symbol.kind not in kinds or not _touches(symbol, position):
            continue
        if expected is not None and symbol.name != expected:
            continue
        line = await doc.line(symbol.range.start.line)
        if doc.language is Language.GO:
            matched = is_go_enum_const(symbol.name, line)
        else:
            matched = is_ts_enum_const(symbol.name, line)
        if matched:
            return EnumConstInfo(name=symbol.name, symbol=symbol, path=doc.path)
    return None


async def _interface_at(
    doc: _Document, position: Position, expected: str | None
) -> InterfaceInfo | None:
    for symbol in doc.symbols:
        if not symbol.selection_range.contains(position):
            continue
        if expected is not None and symbol.name != expected:
            continue

        has_methods = any(c.kind is SymbolKind.METHOD for c in symbol.children)
        if doc.language is Language.GO:
            if symbol.kind is SymbolKind.STRUCT:
                has_methods = False
            elif symbol.kind is not SymbolKind.INTERFACE:
                continue
            exported = is_go_exported(symbol.name)
        elif symbol.kind is SymbolKind.INTERFACE:
            exported = is_ts_exported_line(await doc.line(symbol.range.start.line))
        elif symbol.kind is SymbolKind.TYPE_ALIAS:
            if not is_ts_export_type_line(await doc.line(symbol.range.start.line)):
                continue
            exported = True
        else:
            continue

        return InterfaceInfo(
            name=symbol.name,
            symbol=symbol,
            path=doc.path,
            exported=exported,
            has_methods=has_methods,
        )
    return None


async def _interface_method_at(
    doc: _Document, position: Position, expected: str | None
) -> InterfaceMethodInfo | None:
    for symbol in doc.symbols:
        if symbol.kind is not SymbolKind.INTERFACE or not symbol.range.contains(position):
            continue
        for child in symbol.children:
            if child.kind is not SymbolKind.METHOD or not _touches(child, position):
                continue
            if expected is not None and child.name != expected:
                continue
            return InterfaceMethodInfo(
                name=child.name,
                method=child,
                interface=symbol,
                path=doc.path,
                exported=await symbol_exported(doc.source, symbol),
            )
    return None


async def _field_at(
    doc: _Document, position: Position, expected: str | None
) -> FieldInfo | None:
    containers = field_container_kinds(doc.language)
    for symbol in doc.symbols:
        if symbol.kind not in containers or not symbol.range.contains(position):
            continue
        for child in symbol.children:
            if child.kind not in FIELD_KINDS or not _touches(child, position):
                continue
            if expected is not None and child.name != expected:
                continue
            json_tag = None
            if doc.language is Language.GO:
                json_tag = extract_json_tag(await doc.line(child.range.start.line))
            return FieldInfo(
                name=child.name,
                parent=symbol,
                field=child,
                path=doc.path,
                json_tag=json_tag,
            )
    return None


def _find_declaration(
    symbols: list[Symbol], position: Position, expected: str | None
) -> Symbol | None:
    for symbol in symbols:
        if (
            symbol.kind in _DECLARATION_KINDS
            and symbol.selection_range.contains(position)
            and (expected is None or symbol.name == expected)
        ):
            return symbol
        nested = _find_declaration(symbol.children, position, expected)
        if nested is not None:
            return nested
    return None


async def _declaration_at(
    doc: _Document, position: Position, expected: str | None
) -> SymbolInfo | None:
    symbol = _find_declaration(doc.symbols, position, expected)
    if symbol is None:
        return None
    return SymbolInfo(
        name=symbol.name,
        kind=symbol.kind,
        location=symbol.location(),
        exported=await symbol_exported(doc.source, symbol),
    )


def _may_name_enum_type(word: str) -> bool:
    return word[:1].isupper()


def _may_name_enum_const(word: str) -> bool:
    return word[:1].isupper() and has_two_uppercase_letters(word)


def _any_word(word: str) -> bool:
    return True


_CATEGORIES: list[
    tuple[
        Callable[[_Document, Position, str | None], Awaitable[Classification | None]],
        Callable[[str], bool],
    ]
] = [
    (_enum_type_at, _may_name_enum_type),
    (_enum_const_at, _may_name_enum_const),
    (_interface_at, _any_word),
    (_interface_method_at, _any_word),
    (_field_at, _any_word),
    (_declaration_at, _any_word),
]


@dataclass
class _UsageSite:
    """Lazily resolves the definition behind a usage site, at most once."""

    source: SymbolSource
    path: Path
    position: Position
    _resolved: bool = field(default=False, init=False)
    _target: tuple[_Document, Position] | None = field(default=None, init=False)

    async def definition(self) -> tuple[_Document, Position] | None:
        if not self._resolved:
            self._resolved = True
            self._target = await self._lookup()
        return self._target

    async def _lookup(self) -> tuple[_Document, Position] | None:
        try:
            definitions = await self.source.get_definitions(self.path, self.position)
            if not definitions:
                return None
            target = definitions[0]
            language = language_for_path(target.path)
            if language is None:
                return None
            symbols = await self.source.get_document_symbols(target.path)
        except Exception:
            logger.warning(
                "Definition lookup failed (path=%s line=%d)",
                self.path,
                self.position.line,
                exc_info=True,
            )
            return None
        doc = _Document(self.source, target.path, language, symbols)
        return doc, target.range.start


async def classify(
    source: SymbolSource, path: Path, position: Position
) -> Classification | None:
    """Return the classification of the symbol at ``position``, or None.

    The first category that matches wins; a symbol that fits several (a Go
    struct that is also a plain type declaration) is reported once, as the
    more specific category.
    """
    language = language_for_path(path)
    if language is None:
        return None

    try:
        symbols = await source.get_document_symbols(path)
        line = await source.get_line_text(path, position.line)
    except Exception:
        logger.warning("Reading %s failed", path, exc_info=True)
        return None

    word = identifier_at(line, position.character)
    doc = _Document(source, path, language, symbols)
    usage = _UsageSite(source, path, position)

    for finder, may_name in _CATEGORIES:
        found = await finder(doc, position, None)
        if found is not None:
            return found

        if word is None or not may_name(word):
            continue
        target = await usage.definition()
        if target is None:
            continue
        target_doc, target_position = target
        found = await finder(target_doc, target_position, word)
        if found is not None:
            return found

    return None


__all__ = [
    "FIELD_KINDS",
    "GO_ENUM_TYPE_KINDS",
    "classify",
    "enum_const_kinds",
    "field_container_kinds",
]
