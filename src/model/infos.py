"""Per-request classification records.

The classifier produces exactly one of these records for a cursor position;
every matcher and aggregator consumes the tagged union rather than
re-deriving the category from the symbol tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from pathlib import Path

    from model.symbols import Location, Symbol, SymbolKind


@dataclass(frozen=True)
class SymbolInfo:
    """A function, struct or interface declaration."""

    name: str
    kind: SymbolKind
    location: Location
    exported: bool


@dataclass(frozen=True)
class FieldInfo:
    """A Go struct field or a TypeScript interface property."""

    name: str
    parent: Symbol
    field: Symbol
    path: Path
    json_tag: str | None = None


@dataclass(frozen=True)
class InterfaceInfo:
    """A Go struct/interface or TypeScript interface/type alias, as a type."""

    name: str
    symbol: Symbol
    path: Path
    exported: bool
    has_methods: bool


@dataclass(frozen=True)
class InterfaceMethodInfo:
    """A method declared inside an interface.

    ``exported`` mirrors the parent interface, not the method itself.
    """

    name: str
    method: Symbol
    interface: Symbol
    path: Path
    exported: bool


@dataclass(frozen=True)
class EnumConstInfo:
    """An enum-like constant (one variant of an application enum)."""

    name: str
    symbol: Symbol
    path: Path
    exported: bool = True


@dataclass(frozen=True)
class EnumTypeInfo:
    """An enum-like type alias."""

    name: str
    symbol: Symbol
    path: Path
    exported: bool = True


Classification = Union[
    EnumTypeInfo,
    EnumConstInfo,
    InterfaceInfo,
    InterfaceMethodInfo,
    FieldInfo,
    SymbolInfo,
]


__all__ = [
    "Classification",
    "EnumConstInfo",
    "EnumTypeInfo",
    "FieldInfo",
    "InterfaceInfo",
    "InterfaceMethodInfo",
    "SymbolInfo",
]
