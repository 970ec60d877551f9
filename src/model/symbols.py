"""Symbol tree models shared by symbol sources and the matching engine.

Positions are zero-based (line, character), the editor convention. A Symbol
is a snapshot of one declaration and never outlives the request that built it.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Language(str, Enum):
    """Languages the engine pairs with each other."""

    GO = "go"
    TYPESCRIPT = "typescript"
    TYPESCRIPT_REACT = "typescriptreact"

    @property
    def is_typescript(self) -> bool:
        return self is not Language.GO


class SymbolKind(str, Enum):
    """Declaration kinds reported by a symbol source."""

    FUNCTION = "function"
    METHOD = "method"
    STRUCT = "struct"
    INTERFACE = "interface"
    CLASS = "class"
    FIELD = "field"
    PROPERTY = "property"
    CONSTANT = "constant"
    VARIABLE = "variable"
    TYPE_ALIAS = "type_alias"


class Position(BaseModel):
    """Zero-based line/character position."""

    model_config = ConfigDict(frozen=True)

    line: int
    character: int

    def key(self) -> tuple[int, int]:
        return (self.line, self.character)


class Range(BaseModel):
    """Inclusive start/end span in a document."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    def contains(self, position: Position) -> bool:
        return self.start.key() <= position.key() <= self.end.key()

    def contains_range(self, other: Range) -> bool:
        return self.contains(other.start) and self.contains(other.end)

    @classmethod
    def from_points(cls, start: tuple[int, int], end: tuple[int, int]) -> Range:
        return cls(
            start=Position(line=start[0], character=start[1]),
            end=Position(line=end[0], character=end[1]),
        )


class Location(BaseModel):
    """A range inside a specific file."""

    model_config = ConfigDict(frozen=True)

    path: Path
    range: Range

    def dedup_key(self) -> tuple[str, int, int]:
        return (self.path.as_posix(), self.range.start.line, self.range.start.character)

    @classmethod
    def at(cls, path: Path, position: Position) -> Location:
        return cls(path=path, range=Range(start=position, end=position))


class Symbol(BaseModel):
    """A declaration in a document symbol tree."""

    name: str
    kind: SymbolKind
    language: Language
    path: Path
    range: Range = Field(description="Full declaration span")
    selection_range: Range = Field(description="Span of the declared name")
    detail: str = Field(
        default="",
        description="Source-specific extra text (receiver type, implements list)",
    )
    children: list[Symbol] = Field(default_factory=list)

    @property
    def declaration_position(self) -> Position:
        return self.selection_range.start

    def location(self) -> Location:
        return Location.at(self.path, self.selection_range.start)


Symbol.model_rebuild()


__all__ = ["Language", "Location", "Position", "Range", "Symbol", "SymbolKind"]
