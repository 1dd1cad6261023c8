"""Textual TUI dashboard - status banner, filterable market table."""

from __future__ import annotations

from typing import Any, get_args

from textual.app import App, ComposeResult
from textual.reactive import reactive
from textual.widgets import DataTable, Footer, Header, Input, Static

from predash.dashboard.edge import is_high_edge, market_edge
from predash.dashboard.filters import MarketFilters, MarketSort, SortField, filter_and_sort
from predash.dashboard.formatting import format_date, format_price, format_volume
from predash.ingestion.aggregator import AggregationResult, MarketAggregator
from predash.models import MarketSource, UnifiedMarket

SORT_FIELDS: tuple[str, ...] = get_args(SortField)
SOURCE_CYCLE = ("all", *(s.value for s in MarketSource))
COLUMNS = ("Source", "Title", "Yes", "No", "Edge", "Volume", "Closes", "Status")


class StatusBanner(Static):
    """Fetch state, active filter/sort, and provider errors with a retry hint."""

    status = reactive("Loading markets...")
    errors = reactive("")

    def render(self) -> str:
        text = f"[bold]Status[/] {self.status}"
        if self.errors:
            text += f"\n[red]Error loading markets: {self.errors}[/]  (press [bold]r[/] to retry)"
        return text


class MarketTable(DataTable):
    """Table of unified markets; high-edge rows are highlighted."""

    def on_mount(self) -> None:
        self.cursor_type = "row"
        self.add_columns(*COLUMNS)

    def show(self, markets: list[UnifiedMarket]) -> None:
        self.clear()
        for m in markets:
            title = m.title[:60] + "..." if len(m.title) > 60 else m.title
            e = market_edge(m)
            edge_s = f"[bold yellow]{e:.3f}[/]" if is_high_edge(m) else f"{e:.3f}"
            self.add_row(
                m.source.value,
                title,
                format_price(m.yes_price),
                format_price(m.no_price),
                edge_s,
                format_volume(m.volume),
                format_date(m.end_date),
                m.status.value if m.status else "-",
                key=m.id,
            )


class PreDashTUI(App[None]):
    """PreDash TUI - Kalshi and Polymarket listings in one table."""

    TITLE = "PreDash"
    # Table first so single-key bindings are not typed into the search box.
    AUTO_FOCUS = "#markets"
    BINDINGS = [
        ("q", "quit", "Quit"),
        ("r", "refresh", "Refresh"),
        ("s", "cycle_sort", "Sort field"),
        ("d", "toggle_direction", "Direction"),
        ("f", "cycle_source", "Source"),
    ]

    def __init__(self, aggregator: MarketAggregator, refresh_interval_sec: float = 60, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._aggregator = aggregator
        self._refresh_interval_sec = refresh_interval_sec
        self._result = AggregationResult()
        self._market_filters = MarketFilters()
        self._sort = MarketSort()

    def compose(self) -> ComposeResult:
        yield Header()
        yield StatusBanner(id="status")
        yield Input(placeholder="Search titles and descriptions", id="search")
        yield MarketTable(id="markets")
        yield Footer()

    def on_mount(self) -> None:
        self.run_worker(self._fetch(), exclusive=True)
        self.set_interval(self._refresh_interval_sec, self.action_refresh)

    async def _fetch(self) -> None:
        banner = self.query_one(StatusBanner)
        banner.status = "Loading markets..."
        self._result = await self._aggregator.get_unified_markets()
        banner.errors = "; ".join(f"{src}: {msg}" for src, msg in self._result.errors.items())
        self._render_table()

    def _render_table(self) -> None:
        rows = filter_and_sort(self._result.markets, self._market_filters, self._sort)
        banner = self.query_one(StatusBanner)
        if rows:
            banner.status = (
                f"{len(rows)}/{len(self._result.markets)} markets  |  "
                f"source: {self._market_filters.source}  |  sort: {self._sort.field} {self._sort.direction}"
            )
        else:
            banner.status = "No markets found matching your filters."
        self.query_one(MarketTable).show(rows)

    def on_input_changed(self, event: Input.Changed) -> None:
        self._market_filters = self._market_filters.model_copy(update={"search": event.value})
        self._render_table()

    def action_refresh(self) -> None:
        self.run_worker(self._fetch(), exclusive=True)

    def action_cycle_sort(self) -> None:
        i = SORT_FIELDS.index(self._sort.field)
        self._sort = self._sort.model_copy(update={"field": SORT_FIELDS[(i + 1) % len(SORT_FIELDS)]})
        self._render_table()

    def action_toggle_direction(self) -> None:
        direction = "asc" if self._sort.direction == "desc" else "desc"
        self._sort = self._sort.model_copy(update={"direction": direction})
        self._render_table()

    def action_cycle_source(self) -> None:
        i = SOURCE_CYCLE.index(self._market_filters.source)
        self._market_filters = self._market_filters.model_copy(update={"source": SOURCE_CYCLE[(i + 1) % len(SOURCE_CYCLE)]})
        self._render_table()

    async def on_unmount(self) -> None:
        await self._aggregator.close()


def run_tui(settings: Any) -> None:
    """Entry point: build the aggregator from settings and run the TUI."""
    aggregator = MarketAggregator.from_settings(settings)
    app = PreDashTUI(aggregator, refresh_interval_sec=settings.refresh_interval_sec)
    app.run()
