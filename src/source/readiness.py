"""Readiness strategies for TypeScript symbol sources.

A TypeScript language service indexes opened files asynchronously. Scanning
before it settles yields empty or partial symbol trees, so every TypeScript
scan first runs one of these strategies.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from model.symbols import Symbol
    from rules.config import ReadinessConfig
    from source.protocol import SymbolSource

logger = logging.getLogger(__name__)


async def _snapshot(source: SymbolSource, files: list[Path]) -> list[list[Symbol]]:
    return [await source.get_document_symbols(path) for path in files]


async def poll_until_stable(
    source: SymbolSource,
    files: list[Path],
    *,
    interval_ms: int,
    max_polls: int,
) -> bool:
    """Re-fetch symbol trees until two consecutive snapshots agree.

    Returns True when the trees stabilised, False when ``max_polls`` ran out.
    """
    previous: list[list[Symbol]] | None = None
    for _ in range(max_polls):
        current = await _snapshot(source, files)
        if current == previous:
            return True
        previous = current
        await asyncio.sleep(interval_ms / 1000)
    return False


async def prepare_typescript_files(
    source: SymbolSource, files: list[Path], config: ReadinessConfig
) -> None:
    """Run the configured readiness strategy; failures are logged, never raised."""
    if not files:
        return

    try:
        if config.strategy == "signal":
            await source.ensure_ready(files)
        elif config.strategy == "poll":
            stable = await poll_until_stable(
                source,
                files,
                interval_ms=config.poll_interval_ms,
                max_polls=config.max_polls,
            )
            if not stable:
                logger.debug(
                    "Symbol trees still changing after %d polls (files=%d)",
                    config.max_polls,
                    len(files),
                )
        else:
            # Touch each document so the host loads it, then give it a grace period.
            for path in files:
                await source.get_line_text(path, 0)
            await asyncio.sleep(config.delay_ms / 1000)
    except Exception:
        logger.warning(
            "TypeScript readiness wait failed (strategy=%s)",
            config.strategy,
            exc_info=True,
        )


__all__ = ["poll_until_stable", "prepare_typescript_files"]
