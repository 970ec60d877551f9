"""Candidate scanning and scoring for cross-language declaration matching."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from model.symbols import Language, Location, SymbolKind
from parse.line_patterns import is_go_exported, is_ts_exported_line
from source.protocol import is_cancelled

if TYPE_CHECKING:
    from pathlib import Path

    from model.symbols import Symbol
    from source.protocol import CancellationToken, SymbolSource

logger = logging.getLogger(__name__)

EXACT_SHAPE_SCORE = 100
CONVERTED_SHAPE_SCORE = 90

_SHAPE_KINDS = (SymbolKind.STRUCT, SymbolKind.INTERFACE)


@dataclass(frozen=True)
class Candidate:
    """A declaration in the other language that may correspond to the source."""

    symbol: Symbol
    path: Path
    score: int

    def location(self) -> Location:
        return Location.at(self.path, self.symbol.selection_range.start)


def score_candidate(
    candidate_name: str,
    accepted_names: list[str],
    candidate_exported: bool,
    source_exported: bool,
) -> int:
    """Score a function-like candidate; higher is better.

    ``accepted_names[0]`` is the converted name, tried first:

    - 3: converted name and same export state
    - 2: same export state only
    - 1: converted name only
    - 0: neither
    """
    exact = candidate_name == accepted_names[0]
    same_export = candidate_exported == source_exported

    if exact and same_export:
        return 3
    if same_export:
        return 2
    if exact:
        return 1
    return 0


def shape_score(candidate_name: str, source_name: str) -> int:
    """Score a struct/interface candidate: identical name beats converted name."""
    if candidate_name == source_name:
        return EXACT_SHAPE_SCORE
    return CONVERTED_SHAPE_SCORE


def select_best(candidates: list[Candidate]) -> list[Candidate]:
    """Return every candidate sharing the top score, best first.

    Ties are kept: all top-scoring declarations are equally valid matches.
    """
    if not candidates:
        return []
    ordered = sorted(candidates, key=lambda c: c.score, reverse=True)
    best = ordered[0].score
    return [c for c in ordered if c.score == best]


async def symbol_exported(source: SymbolSource, symbol: Symbol) -> bool:
    """Export state from the name (Go) or the declaration line (TypeScript)."""
    if symbol.language is Language.GO:
        return is_go_exported(symbol.name)
    line = await source.get_line_text(symbol.path, symbol.range.start.line)
    return is_ts_exported_line(line)


def is_symbol_nested(symbol: Symbol, parent: Symbol) -> bool:
    return parent.range.contains_range(symbol.range) and parent.range != symbol.range


def is_top_level_function(symbol: Symbol, all_symbols: list[Symbol]) -> bool:
    """True unless ``symbol`` sits inside another function or a member function."""
    if symbol.kind is not SymbolKind.FUNCTION:
        return False

    for parent in all_symbols:
        if parent is symbol:
            continue
        if parent.kind is SymbolKind.FUNCTION and is_symbol_nested(symbol, parent):
            return False
        for child in parent.children:
            if child.kind is SymbolKind.FUNCTION and is_symbol_nested(symbol, child):
                return False

    return True


def target_kind_for(
    source_kind: SymbolKind, target_language: Language
) -> SymbolKind | None:
    """Route a source declaration kind to the kind accepted in the other language.

    Functions pair with functions; a TypeScript data-shape interface pairs with
    a Go struct and the other way round.
    """
    if source_kind is SymbolKind.FUNCTION:
        return SymbolKind.FUNCTION
    if target_language is Language.GO and source_kind in (
        SymbolKind.INTERFACE,
        SymbolKind.TYPE_ALIAS,
    ):
        return SymbolKind.STRUCT
    if target_language.is_typescript and source_kind is SymbolKind.STRUCT:
        return SymbolKind.INTERFACE
    return None


async def scan_candidates(
    source: SymbolSource,
    files: list[Path],
    accepted_names: list[str],
    *,
    source_exported: bool,
    source_kind: SymbolKind,
    target_language: Language,
    strict_export: bool = False,
    token: CancellationToken | None = None,
) -> list[Candidate]:
    """Collect scored candidates from every file, sorted best first.

    ``accepted_names`` lists the converted name first and the unchanged
    source name last. Struct/interface candidates must be exported;
    ``strict_export`` additionally drops function candidates whose export
    state differs from the source's. A file whose symbols cannot be read is
    skipped.
    """
    target_kind = target_kind_for(source_kind, target_language)
    if target_kind is None:
        return []

    source_name = accepted_names[-1]
    candidates: list[Candidate] = []

    for path in files:
        if is_cancelled(token):
            break
        try:
            symbols = await source.get_document_symbols(path)
            for symbol in symbols:
                if symbol.kind is not target_kind:
                    continue
                if symbol.name not in accepted_names:
                    continue
                if target_kind is SymbolKind.FUNCTION and not is_top_level_function(
                    symbol, symbols
                ):
                    continue

                exported = await symbol_exported(source, symbol)
                if target_kind in _SHAPE_KINDS:
                    if not exported:
                        continue
                    score = shape_score(symbol.name, source_name)
                else:
                    if strict_export and exported != source_exported:
                        continue
                    score = score_candidate(
                        symbol.name, accepted_names, exported, source_exported
                    )

                candidates.append(Candidate(symbol=symbol, path=path, score=score))
        except Exception:
            logger.warning("Scanning %s failed", path, exc_info=True)
            continue

    candidates.sort(key=lambda c: c.score, reverse=True)
    return candidates


__all__ = [
    "CONVERTED_SHAPE_SCORE",
    "EXACT_SHAPE_SCORE",
    "Candidate",
    "is_symbol_nested",
    "is_top_level_function",
    "scan_candidates",
    "score_candidate",
    "select_best",
    "shape_score",
    "symbol_exported",
    "target_kind_for",
]
