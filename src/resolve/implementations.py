"""Cross-language implementations aggregation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from match.classifier import classify
from resolve.counterparts import (
    counterpart_declarations,
    dedupe_locations,
    expands_to_implementations,
)
from source.protocol import is_cancelled

if TYPE_CHECKING:
    from pathlib import Path

    from match.matchers import MatchContext
    from model.symbols import Location, Position

logger = logging.getLogger(__name__)


async def find_implementations(
    ctx: MatchContext, path: Path, position: Position
) -> list[Location]:
    """Counterpart declarations, plus what implements them when they are interfaces."""
    classification = await classify(ctx.source, path, position)
    if classification is None:
        return []

    declarations = await counterpart_declarations(ctx, classification)
    locations: list[Location] = list(declarations)

    if expands_to_implementations(classification):
        for declaration in declarations:
            if is_cancelled(ctx.token):
                return []
            try:
                locations.extend(
                    await ctx.source.get_implementations(
                        declaration.path, declaration.range.start
                    )
                )
            except Exception:
                logger.warning(
                    "Implementation lookup failed (path=%s line=%d)",
                    declaration.path,
                    declaration.range.start.line,
                    exc_info=True,
                )

    if is_cancelled(ctx.token):
        return []
    return dedupe_locations(locations)


__all__ = ["find_implementations"]
