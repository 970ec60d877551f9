"""Per-category matchers: find the other language's counterpart declarations.

Every matcher searches only the files of the other language that sit in the
same directory as the source symbol.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from match.candidates import (
    Candidate,
    scan_candidates,
    score_candidate,
    select_best,
    symbol_exported,
)
from match.classifier import (
    FIELD_KINDS,
    GO_ENUM_TYPE_KINDS,
    enum_const_kinds,
    field_container_kinds,
)
from match.scope import sibling_files
from model.infos import EnumConstInfo, EnumTypeInfo, FieldInfo, InterfaceInfo
from model.symbols import Language, SymbolKind
from naming.conventions import candidate_names
from parse.line_patterns import (
    extract_json_tag,
    is_go_enum_const,
    is_go_enum_type,
    is_ts_enum_const,
    ts_enum_type_name,
)
from rules.config import ReadinessConfig
from source.protocol import is_cancelled
from source.readiness import prepare_typescript_files
from utils import counterpart_language, language_for_path

if TYPE_CHECKING:
    from pathlib import Path

    from model.infos import InterfaceMethodInfo, SymbolInfo
    from model.symbols import Symbol
    from source.protocol import CancellationToken, SymbolSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchContext:
    """What every matcher needs besides the classified symbol."""

    source: SymbolSource
    strict_export: bool = False
    readiness: ReadinessConfig = field(default_factory=ReadinessConfig)
    token: CancellationToken | None = None


async def _target_files(
    ctx: MatchContext, path: Path
) -> tuple[Language, list[Path]] | None:
    language = language_for_path(path)
    if language is None:
        return None
    target = counterpart_language(language)
    files = await sibling_files(ctx.source, path, target)
    if files and target.is_typescript:
        await prepare_typescript_files(ctx.source, files, ctx.readiness)
    return target, files


async def _symbols_by_file(ctx: MatchContext, files: list[Path]):
    """Yield ``(path, symbols)`` per file; unreadable files are skipped."""
    for path in files:
        if is_cancelled(ctx.token):
            return
        try:
            symbols = await ctx.source.get_document_symbols(path)
        except Exception:
            logger.warning("Reading symbols of %s failed", path, exc_info=True)
            continue
        yield path, symbols


async def match_function(ctx: MatchContext, info: SymbolInfo) -> list[Candidate]:
    """Best-scoring top-level functions named like ``info`` in the other language."""
    scope = await _target_files(ctx, info.location.path)
    if scope is None:
        return []
    target, files = scope
    if not files:
        return []

    candidates = await scan_candidates(
        ctx.source,
        files,
        candidate_names(info.name, target),
        source_exported=info.exported,
        source_kind=SymbolKind.FUNCTION,
        target_language=target,
        strict_export=ctx.strict_export,
        token=ctx.token,
    )
    return select_best(candidates)


async def match_data_shape(
    ctx: MatchContext,
    *,
    name: str,
    kind: SymbolKind,
    path: Path,
    exported: bool,
) -> list[Candidate]:
    """Pair a Go struct with a TypeScript interface, or the other way round.

    Unexported shapes are never paired.
    """
    if not exported:
        return []
    scope = await _target_files(ctx, path)
    if scope is None:
        return []
    target, files = scope
    if not files:
        return []

    candidates = await scan_candidates(
        ctx.source,
        files,
        candidate_names(name, target),
        source_exported=exported,
        source_kind=kind,
        target_language=target,
        token=ctx.token,
    )
    return select_best(candidates)


async def match_interface(ctx: MatchContext, info: InterfaceInfo) -> list[InterfaceInfo]:
    """Exported behavioural interfaces with the identical name and methods."""
    if not info.has_methods:
        return []
    scope = await _target_files(ctx, info.path)
    if scope is None:
        return []
    _, files = scope

    matches: list[InterfaceInfo] = []
    async for path, symbols in _symbols_by_file(ctx, files):
        for symbol in symbols:
            if symbol.kind is not SymbolKind.INTERFACE or symbol.name != info.name:
                continue
            if not any(c.kind is SymbolKind.METHOD for c in symbol.children):
                continue
            if not await symbol_exported(ctx.source, symbol):
                continue
            matches.append(
                InterfaceInfo(
                    name=symbol.name,
                    symbol=symbol,
                    path=path,
                    exported=True,
                    has_methods=True,
                )
            )
    return matches


async def match_interface_method(
    ctx: MatchContext, info: InterfaceMethodInfo
) -> list[Candidate]:
    """Methods of the counterpart interface, scored like functions."""
    parent = InterfaceInfo(
        name=info.interface.name,
        symbol=info.interface,
        path=info.path,
        exported=info.exported,
        has_methods=True,
    )
    interfaces = await match_interface(ctx, parent)
    if not interfaces:
        return []

    target = counterpart_language(language_for_path(info.path))
    names = candidate_names(info.name, target)
    candidates = [
        Candidate(
            symbol=child,
            path=interface.path,
            score=score_candidate(child.name, names, interface.exported, info.exported),
        )
        for interface in interfaces
        for child in interface.symbol.children
        if child.kind is SymbolKind.METHOD and child.name in names
    ]
    return select_best(candidates)


def _field_named(container: Symbol, name: str) -> Symbol | None:
    return next(
        (c for c in container.children if c.kind in FIELD_KINDS and c.name == name),
        None,
    )


async def _go_field_for(
    ctx: MatchContext, path: Path, struct: Symbol, name: str
) -> FieldInfo | None:
    for child in struct.children:
        if child.kind not in FIELD_KINDS:
            continue
        line = await ctx.source.get_line_text(path, child.range.start.line)
        tag = extract_json_tag(line)
        if tag == name:
            return FieldInfo(
                name=child.name, parent=struct, field=child, path=path, json_tag=tag
            )

    found = _field_named(struct, name)
    if found is None:
        return None
    line = await ctx.source.get_line_text(path, found.range.start.line)
    return FieldInfo(
        name=found.name,
        parent=struct,
        field=found,
        path=path,
        json_tag=extract_json_tag(line),
    )


async def match_field(ctx: MatchContext, info: FieldInfo) -> FieldInfo | None:
    """The counterpart field of a Go struct field or TypeScript property.

    Go to TypeScript looks up the JSON tag (the field name when untagged).
    TypeScript to Go prefers a field whose JSON tag equals the property name,
    then a field with the same name. The first hit wins.
    """
    scope = await _target_files(ctx, info.path)
    if scope is None:
        return None
    target, files = scope
    containers = field_container_kinds(target)
    parent_names = candidate_names(info.parent.name, target)

    async for path, symbols in _symbols_by_file(ctx, files):
        for symbol in symbols:
            if symbol.kind not in containers or symbol.name not in parent_names:
                continue

            if target.is_typescript:
                found = _field_named(symbol, info.json_tag or info.name)
                if found is not None:
                    return FieldInfo(
                        name=found.name, parent=symbol, field=found, path=path
                    )
                continue

            try:
                matched = await _go_field_for(ctx, path, symbol, info.name)
            except Exception:
                logger.warning("Reading fields of %s failed", path, exc_info=True)
                break
            if matched is not None:
                return matched
    return None


async def _valid_enum_consts(
    ctx: MatchContext, path: Path, symbols: list[Symbol], info: EnumConstInfo
) -> list[EnumConstInfo]:
    language = language_for_path(path)
    matches: list[EnumConstInfo] = []
    for symbol in symbols:
        if symbol.kind not in enum_const_kinds(language) or symbol.name != info.name:
            continue
        line = await ctx.source.get_line_text(path, symbol.range.start.line)
        if language is Language.GO:
            valid = is_go_enum_const(symbol.name, line)
        else:
            valid = is_ts_enum_const(symbol.name, line)
        if valid:
            matches.append(EnumConstInfo(name=symbol.name, symbol=symbol, path=path))
    return matches


async def match_enum_const(
    ctx: MatchContext, info: EnumConstInfo
) -> list[EnumConstInfo]:
    """Enum-like constants with the identical name and a valid enum shape."""
    scope = await _target_files(ctx, info.path)
    if scope is None:
        return []
    _, files = scope

    matches: list[EnumConstInfo] = []
    async for path, symbols in _symbols_by_file(ctx, files):
        try:
            matches.extend(await _valid_enum_consts(ctx, path, symbols, info))
        except Exception:
            logger.warning("Reading constants of %s failed", path, exc_info=True)
    return matches


async def _valid_enum_types(
    ctx: MatchContext, path: Path, symbols: list[Symbol], info: EnumTypeInfo
) -> list[EnumTypeInfo]:
    matches: list[EnumTypeInfo] = []
    for symbol in symbols:
        if symbol.name != info.name:
            continue
        start = symbol.range.start.line
        line = await ctx.source.get_line_text(path, start)
        if language_for_path(path) is Language.GO:
            valid = symbol.kind in GO_ENUM_TYPE_KINDS and is_go_enum_type(
                symbol.name, line
            )
        else:
            next_line = await ctx.source.get_line_text(path, start + 1)
            valid = ts_enum_type_name(line, next_line) == symbol.name
        if valid:
            matches.append(EnumTypeInfo(name=symbol.name, symbol=symbol, path=path))
    return matches


async def match_enum_type(ctx: MatchContext, info: EnumTypeInfo) -> list[EnumTypeInfo]:
    """Enum-like type aliases with the identical name and a valid enum shape."""
    scope = await _target_files(ctx, info.path)
    if scope is None:
        return []
    _, files = scope

    matches: list[EnumTypeInfo] = []
    async for path, symbols in _symbols_by_file(ctx, files):
        try:
            matches.extend(await _valid_enum_types(ctx, path, symbols, info))
        except Exception:
            logger.warning("Reading type aliases of %s failed", path, exc_info=True)
    return matches


__all__ = [
    "MatchContext",
    "match_data_shape",
    "match_enum_const",
    "match_enum_type",
    "match_field",
    "match_function",
    "match_interface",
    "match_interface_method",
]
