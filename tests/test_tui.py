"""Terminal dashboard: error banner, retry, sort/source cycling."""

import pytest

from conftest import make_market
from predash.ingestion.aggregator import MarketAggregator
from predash.ingestion.base import ProviderClient
from predash.models import MarketSource, ProviderConfig
from predash.tui.app import MarketTable, PreDashTUI, StatusBanner


class FlakyClient(ProviderClient):
    """Raises on the first ``failures`` fetches, then returns canned markets."""

    def __init__(self, source, markets, failures=0):
        super().__init__(ProviderConfig(base_url="https://fake.test"))
        self.source = source
        self._markets = list(markets)
        self._failures = failures
        self.calls = 0

    async def fetch_raw_markets(self, **params):
        return []

    def normalize_market(self, raw):
        raise NotImplementedError

    async def fetch_markets(self, **params):
        self.calls += 1
        if self.calls <= self._failures:
            raise RuntimeError("upstream down")
        return list(self._markets)


def _app(kalshi_failures=0):
    kalshi = FlakyClient(
        MarketSource.KALSHI,
        [
            make_market(id="kalshi-A", volume=100, yes_price=0.6, no_price=0.5),
            make_market(id="kalshi-B", volume=300),
        ],
        failures=kalshi_failures,
    )
    poly = FlakyClient(
        MarketSource.POLYMARKET,
        [make_market(id="polymarket-X", source=MarketSource.POLYMARKET, volume=200)],
    )
    return PreDashTUI(MarketAggregator([kalshi, poly]), refresh_interval_sec=3600), kalshi


async def _settle(app, pilot):
    await app.workers.wait_for_complete()
    await pilot.pause()


@pytest.mark.anyio
async def test_error_banner_then_retry_clears_it():
    app, kalshi = _app(kalshi_failures=1)
    async with app.run_test() as pilot:
        await _settle(app, pilot)
        banner = app.query_one(StatusBanner)
        table = app.query_one(MarketTable)
        assert banner.errors == "kalshi: upstream down"
        assert table.row_count == 1

        await pilot.press("r")
        await _settle(app, pilot)
        assert kalshi.calls == 2
        assert banner.errors == ""
        assert table.row_count == 3


@pytest.mark.anyio
async def test_sort_direction_and_source_cycling():
    app, _ = _app()
    async with app.run_test() as pilot:
        await _settle(app, pilot)
        banner = app.query_one(StatusBanner)
        table = app.query_one(MarketTable)
        assert "source: all  |  sort: volume desc" in banner.status
        assert [row.key.value for row in table.ordered_rows] == ["kalshi-B", "polymarket-X", "kalshi-A"]

        await pilot.press("d")
        assert "sort: volume asc" in banner.status
        assert [row.key.value for row in table.ordered_rows] == ["kalshi-A", "polymarket-X", "kalshi-B"]

        await pilot.press("s")
        assert "sort: price asc" in banner.status

        await pilot.press("f")
        assert "source: kalshi" in banner.status
        assert table.row_count == 2

        await pilot.press("f", "f")
        assert "source: all" in banner.status
        assert table.row_count == 3


@pytest.mark.anyio
async def test_search_filters_rows():
    app, _ = _app()
    async with app.run_test() as pilot:
        await _settle(app, pilot)
        app.query_one("#search").value = "no such market"
        await pilot.pause()
        assert app.query_one(MarketTable).row_count == 0
        assert app.query_one(StatusBanner).status == "No markets found matching your filters."
