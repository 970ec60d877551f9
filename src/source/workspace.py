"""A symbol source answering queries from Go/TypeScript files on disk.

Declarations come from tree-sitter symbol trees; definitions, references and
implementations are resolved by name across files of the same language. This
is a best-effort stand-in for real language servers that keeps the engine
usable from a command line.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from model.symbols import Language, Location, SymbolKind
from parse.line_patterns import identifier_at
from parse.treesitter_identifiers import extract_identifier_ranges
from parse.treesitter_symbols import extract_symbols_treesitter
from scan.files import find_source_files, list_sibling_files
from utils import language_for_path

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

    from model.symbols import Position, Symbol
    from rules.config import TwinrefConfig

logger = logging.getLogger(__name__)

_GO_SUFFIXES = (".go",)
_TYPESCRIPT_SUFFIXES = (".ts", ".tsx")
_TYPE_DECLARATION_KINDS = (SymbolKind.STRUCT, SymbolKind.TYPE_ALIAS)


def _walk(symbols: list[Symbol]) -> Iterator[Symbol]:
    for symbol in symbols:
        yield symbol
        yield from _walk(symbol.children)


def _symbol_at(symbols: list[Symbol], position: Position) -> Symbol | None:
    """Innermost symbol whose full range contains ``position``."""
    for symbol in symbols:
        if symbol.range.contains(position):
            return _symbol_at(symbol.children, position) or symbol
    return None


class WorkspaceSymbolSource:
    """Tree-sitter backed symbol source rooted at a workspace directory."""

    def __init__(
        self,
        root: Path,
        *,
        exclude_patterns: list[str] | None = None,
        nested_gitignore: bool = False,
    ) -> None:
        self.root = root
        self.exclude_patterns = exclude_patterns or []
        self.nested_gitignore = nested_gitignore

    @classmethod
    def from_config(cls, root: Path, config: TwinrefConfig) -> WorkspaceSymbolSource:
        return cls(
            root,
            exclude_patterns=config.exclude,
            nested_gitignore=config.nested_gitignore,
        )

    def _same_language_files(self, path: Path) -> list[Path]:
        """Workspace files of ``path``'s language, nearest first."""
        language = language_for_path(path)
        if language is None:
            return []
        suffixes = _GO_SUFFIXES if language is Language.GO else _TYPESCRIPT_SUFFIXES
        files = list(
            find_source_files(
                self.root,
                suffixes=suffixes,
                exclude_patterns=self.exclude_patterns,
                nested_gitignore=self.nested_gitignore,
            )
        )
        resolved = path.resolve()

        def proximity(candidate: Path) -> int:
            candidate_resolved = candidate.resolve()
            if candidate_resolved == resolved:
                return 0
            if candidate_resolved.parent == resolved.parent:
                return 1
            return 2

        ordered = sorted(files, key=proximity)
        if not any(proximity(f) == 0 for f in ordered) and path.is_file():
            ordered.insert(0, path)
        return ordered

    async def _identifier(self, path: Path, position: Position) -> str | None:
        line = await self.get_line_text(path, position.line)
        return identifier_at(line, position.character)

    async def get_document_symbols(self, path: Path) -> list[Symbol]:
        return extract_symbols_treesitter(path)

    async def get_line_text(self, path: Path, line: int) -> str:
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError):
            logger.debug("Unreadable document (path=%s)", path)
            return ""
        if 0 <= line < len(lines):
            return lines[line]
        return ""

    async def list_sibling_files(
        self, directory: Path, patterns: Iterable[str]
    ) -> list[Path]:
        return list_sibling_files(directory, patterns)

    async def ensure_ready(self, paths: Iterable[Path]) -> None:
        # Parsing is synchronous; every file is ready as soon as it is read.
        return None

    async def get_definitions(self, path: Path, position: Position) -> list[Location]:
        name = await self._identifier(path, position)
        if name is None:
            return []

        locations: list[Location] = []
        for file_path in self._same_language_files(path):
            for symbol in _walk(extract_symbols_treesitter(file_path)):
                if symbol.name == name:
                    locations.append(symbol.location())
        return locations

    async def get_references(self, path: Path, position: Position) -> list[Location]:
        name = await self._identifier(path, position)
        if name is None:
            return []

        locations: list[Location] = []
        for file_path in self._same_language_files(path):
            locations.extend(
                Location(path=file_path, range=found)
                for found in extract_identifier_ranges(file_path, name)
            )
        return locations

    async def get_implementations(
        self, path: Path, position: Position
    ) -> list[Location]:
        language = language_for_path(path)
        symbols = extract_symbols_treesitter(path)
        target = _symbol_at(symbols, position)
        if language is None or target is None:
            return []

        if target.kind is SymbolKind.INTERFACE:
            interface, method_name = target, None
        elif target.kind is SymbolKind.METHOD:
            parent = next(
                (
                    s
                    for s in symbols
                    if s.kind is SymbolKind.INTERFACE and target in s.children
                ),
                None,
            )
            if parent is None:
                return []
            interface, method_name = parent, target.name
        else:
            return []

        if language is Language.GO:
            return self._go_implementations(path, interface, method_name)
        return self._typescript_implementations(path, interface, method_name)

    def _typescript_implementations(
        self, path: Path, interface: Symbol, method_name: str | None
    ) -> list[Location]:
        locations: list[Location] = []
        for file_path in self._same_language_files(path):
            for symbol in extract_symbols_treesitter(file_path):
                if symbol.kind is not SymbolKind.CLASS:
                    continue
                implemented = [n.strip() for n in symbol.detail.split(",")]
                if interface.name not in implemented:
                    continue
                if method_name is None:
                    locations.append(symbol.location())
                    continue
                locations.extend(
                    child.location()
                    for child in symbol.children
                    if child.kind is SymbolKind.METHOD and child.name == method_name
                )
        return locations

    def _go_implementations(
        self, path: Path, interface: Symbol, method_name: str | None
    ) -> list[Location]:
        """Types whose method set covers the interface (implicit satisfaction)."""
        required = {
            child.name for child in interface.children if child.kind is SymbolKind.METHOD
        }
        if not required:
            return []

        methods_by_receiver: dict[str, list[Symbol]] = {}
        types_by_name: dict[str, Symbol] = {}
        for file_path in self._same_language_files(path):
            for symbol in extract_symbols_treesitter(file_path):
                if symbol.kind is SymbolKind.METHOD and symbol.detail:
                    methods_by_receiver.setdefault(symbol.detail, []).append(symbol)
                elif symbol.kind in _TYPE_DECLARATION_KINDS:
                    types_by_name.setdefault(symbol.name, symbol)

        locations: list[Location] = []
        for receiver, methods in sorted(methods_by_receiver.items()):
            if not required <= {m.name for m in methods}:
                continue
            if method_name is not None:
                locations.extend(m.location() for m in methods if m.name == method_name)
            elif receiver in types_by_name:
                locations.append(types_by_name[receiver].location())
        return locations


__all__ = ["WorkspaceSymbolSource"]
