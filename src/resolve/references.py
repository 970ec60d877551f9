"""Cross-language references aggregation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from match.classifier import classify
from resolve.counterparts import counterpart_declarations, dedupe_locations
from source.protocol import is_cancelled

if TYPE_CHECKING:
    from pathlib import Path

    from match.matchers import MatchContext
    from model.symbols import Location, Position

logger = logging.getLogger(__name__)


async def find_references(
    ctx: MatchContext, path: Path, position: Position
) -> list[Location]:
    """References to the other-language counterparts of the symbol at ``position``.

    The host's own same-language references are not included; they are
    merged by the caller.
    """
    classification = await classify(ctx.source, path, position)
    if classification is None:
        return []

    declarations = await counterpart_declarations(ctx, classification)
    logger.debug(
        "Counterparts found (kind=%s name=%s count=%d)",
        type(classification).__name__,
        classification.name,
        len(declarations),
    )

    locations: list[Location] = []
    for declaration in declarations:
        if is_cancelled(ctx.token):
            return []
        try:
            locations.extend(
                await ctx.source.get_references(declaration.path, declaration.range.start)
            )
        except Exception:
            logger.warning(
                "Reference lookup failed (path=%s line=%d)",
                declaration.path,
                declaration.range.start.line,
                exc_info=True,
            )

    if is_cancelled(ctx.token):
        return []
    return dedupe_locations(locations)


__all__ = ["find_references"]
