"""The symbol source contract consumed by the matching engine.

A symbol source is whatever answers document-symbol, definition, reference
and implementation queries for a workspace: an editor's language servers, or
the tree-sitter backed :class:`source.workspace.WorkspaceSymbolSource`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from model.symbols import Location, Position, Symbol


class SymbolSourceError(Exception):
    """Raised by a symbol source when a query cannot be answered."""


class SymbolSource(Protocol):
    """Language-analysis capability for a two-language workspace."""

    async def get_document_symbols(self, path: Path) -> list[Symbol]:
        """Return the hierarchical symbol tree of a document."""
        ...

    async def get_definitions(self, path: Path, position: Position) -> list[Location]:
        """Return definition locations for the identifier at ``position``."""
        ...

    async def get_references(self, path: Path, position: Position) -> list[Location]:
        """Return reference locations (declaration included) at ``position``."""
        ...

    async def get_implementations(
        self, path: Path, position: Position
    ) -> list[Location]:
        """Return implementations of the interface or method at ``position``."""
        ...

    async def list_sibling_files(
        self, directory: Path, patterns: Iterable[str]
    ) -> list[Path]:
        """List files directly inside ``directory`` matching a glob pattern."""
        ...

    async def get_line_text(self, path: Path, line: int) -> str:
        """Return the text of a zero-based line, or ``""`` past the end."""
        ...

    async def ensure_ready(self, paths: Iterable[Path]) -> None:
        """Return once ``paths`` are indexed and safe to query."""
        ...


class CancellationToken:
    """Cooperative cancellation flag checked between per-file steps."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def is_cancellation_requested(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


def is_cancelled(token: CancellationToken | None) -> bool:
    return token is not None and token.is_cancellation_requested


__all__ = ["CancellationToken", "SymbolSource", "SymbolSourceError", "is_cancelled"]
