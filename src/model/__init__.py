"""Data model for symbol trees and classification records."""

from model.infos import (
    Classification,
    EnumConstInfo,
    EnumTypeInfo,
    FieldInfo,
    InterfaceInfo,
    InterfaceMethodInfo,
    SymbolInfo,
)
from model.symbols import Language, Location, Position, Range, Symbol, SymbolKind

__all__ = [
    "Classification",
    "EnumConstInfo",
    "EnumTypeInfo",
    "FieldInfo",
    "InterfaceInfo",
    "InterfaceMethodInfo",
    "Language",
    "Location",
    "Position",
    "Range",
    "Symbol",
    "SymbolInfo",
    "SymbolKind",
]
