"""Symbol source contract and implementations."""

from source.protocol import (
    CancellationToken,
    SymbolSource,
    SymbolSourceError,
    is_cancelled,
)
from source.readiness import poll_until_stable, prepare_typescript_files
from source.workspace import WorkspaceSymbolSource

__all__ = [
    "CancellationToken",
    "SymbolSource",
    "SymbolSourceError",
    "WorkspaceSymbolSource",
    "is_cancelled",
    "poll_until_stable",
    "prepare_typescript_files",
]
