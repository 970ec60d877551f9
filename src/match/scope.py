"""Directory scope: which files of the other language may hold a counterpart."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from utils import sibling_patterns

if TYPE_CHECKING:
    from pathlib import Path

    from model.symbols import Language
    from source.protocol import SymbolSource

logger = logging.getLogger(__name__)


async def sibling_files(
    source: SymbolSource, path: Path, target_language: Language
) -> list[Path]:
    """List ``target_language`` files in the same directory as ``path``.

    Only the immediate directory is searched: pairs split across directories
    (a ``dto/`` subfolder, a parent package) are not found.
    """
    patterns = sibling_patterns(target_language)
    try:
        return await source.list_sibling_files(path.parent, patterns)
    except Exception:
        logger.warning(
            "Listing sibling files failed (directory=%s patterns=%s)",
            path.parent,
            ",".join(patterns),
            exc_info=True,
        )
        return []


__all__ = ["sibling_files"]
