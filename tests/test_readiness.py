from __future__ import annotations

import logging
from pathlib import Path

import pytest

from model.symbols import SymbolKind
from rules.config import ReadinessConfig
from source.readiness import poll_until_stable, prepare_typescript_files
from symbol_fakes import FakeSymbolSource, make_symbol

_TS = Path("/ws/api/article.ts")
_LINES = ["export function getArticle() {}"]


class IndexingSource(FakeSymbolSource):
    """Reports one more symbol per query until ``settle_after`` queries."""

    def __init__(self, settle_after: int) -> None:
        super().__init__()
        self.settle_after = settle_after
        self.queries = 0
        self.add_document(_TS, _LINES, [])
        self._symbol = make_symbol(_TS, _LINES, "getArticle", SymbolKind.FUNCTION, 0)

    async def get_document_symbols(self, path: Path):
        self.queries += 1
        return [self._symbol] * min(self.queries, self.settle_after)


@pytest.mark.asyncio
async def test_poll_stops_once_trees_agree() -> None:
    source = IndexingSource(settle_after=2)

    stable = await poll_until_stable(source, [_TS], interval_ms=0, max_polls=10)

    assert stable is True
    assert source.queries == 3


@pytest.mark.asyncio
async def test_poll_gives_up_after_max_polls() -> None:
    source = IndexingSource(settle_after=100)

    stable = await poll_until_stable(source, [_TS], interval_ms=0, max_polls=3)

    assert stable is False
    assert source.queries == 3


@pytest.mark.asyncio
async def test_signal_strategy_waits_on_source() -> None:
    source = FakeSymbolSource()

    await prepare_typescript_files(source, [_TS], ReadinessConfig(strategy="signal"))

    assert source.ready_calls == [[_TS]]


@pytest.mark.asyncio
async def test_delay_strategy_opens_each_file() -> None:
    source = FakeSymbolSource()
    opened: list[Path] = []

    async def get_line_text(path: Path, line: int) -> str:
        opened.append(path)
        return ""

    source.get_line_text = get_line_text
    other = _TS.with_name("user.ts")

    await prepare_typescript_files(
        source, [_TS, other], ReadinessConfig(strategy="delay", delay_ms=0)
    )

    assert opened == [_TS, other]
    assert source.ready_calls == []


@pytest.mark.asyncio
async def test_no_files_is_a_no_op() -> None:
    source = FakeSymbolSource()

    await prepare_typescript_files(source, [], ReadinessConfig())

    assert source.ready_calls == []


@pytest.mark.asyncio
async def test_readiness_failure_is_logged_not_raised(
    caplog: pytest.LogCaptureFixture,
) -> None:
    source = FakeSymbolSource()

    async def ensure_ready(paths) -> None:
        raise TimeoutError("indexer stuck")

    source.ensure_ready = ensure_ready

    with caplog.at_level(logging.WARNING, logger="source.readiness"):
        await prepare_typescript_files(source, [_TS], ReadinessConfig())

    assert "TypeScript readiness wait failed" in caplog.text
