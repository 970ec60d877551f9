"""Entry point for cross-language reference and implementation requests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from match.matchers import MatchContext
from resolve.guard import RequestGuard
from resolve.implementations import find_implementations
from resolve.references import find_references
from rules.config import TwinrefConfig
from source.protocol import is_cancelled
from utils import language_for_path

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from pathlib import Path

    from model.symbols import Location, Position
    from source.protocol import CancellationToken, SymbolSource

logger = logging.getLogger(__name__)


class CrossLanguageResolver:
    """Answers references/implementations requests across Go and TypeScript.

    Results cover only the other language; a host merges them with its own
    same-language results. Requests never raise: every failure degrades to an
    empty list.
    """

    def __init__(
        self,
        source: SymbolSource,
        config: TwinrefConfig | None = None,
        guard: RequestGuard | None = None,
    ) -> None:
        self.source = source
        self.config = config or TwinrefConfig()
        self.guard = guard or RequestGuard()

    async def resolve_references(
        self,
        path: Path,
        position: Position,
        token: CancellationToken | None = None,
    ) -> list[Location]:
        return await self._run("references", find_references, path, position, token)

    async def resolve_implementations(
        self,
        path: Path,
        position: Position,
        token: CancellationToken | None = None,
    ) -> list[Location]:
        return await self._run(
            "implementations", find_implementations, path, position, token
        )

    async def _run(
        self,
        request: str,
        finder: Callable[[MatchContext, Path, Position], Awaitable[list[Location]]],
        path: Path,
        position: Position,
        token: CancellationToken | None,
    ) -> list[Location]:
        if not self.config.enabled:
            return []
        if language_for_path(path) is None:
            return []

        with self.guard.hold() as acquired:
            if not acquired:
                logger.debug("Skipping nested %s request (path=%s)", request, path)
                return []

            ctx = MatchContext(
                source=self.source,
                strict_export=self.config.strict_export,
                readiness=self.config.readiness,
                token=token,
            )
            try:
                locations = await finder(ctx, path, position)
            except Exception:
                logger.exception(
                    "Cross-language %s failed (path=%s line=%d character=%d)",
                    request,
                    path,
                    position.line,
                    position.character,
                )
                return []

        if is_cancelled(token):
            return []
        return locations


__all__ = ["CrossLanguageResolver"]
