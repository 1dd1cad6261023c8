"""Markets subcommand: list, show."""

from __future__ import annotations

import asyncio
import json

import typer
from pydantic import ValidationError

from predash.dashboard.edge import is_high_edge, market_edge
from predash.dashboard.filters import MarketFilters, MarketSort, filter_and_sort
from predash.dashboard.formatting import format_date, format_price, format_volume
from predash.ingestion.aggregator import AggregationResult, MarketAggregator
from predash.models import UnifiedMarket

app = typer.Typer(help="Fetch, filter and sort unified markets")


async def _fetch_all(settings) -> AggregationResult:
    async with MarketAggregator.from_settings(settings) as aggregator:
        return await aggregator.get_unified_markets()


async def _fetch_one(settings, market_id: str) -> UnifiedMarket | None:
    async with MarketAggregator.from_settings(settings) as aggregator:
        return await aggregator.get_market_by_id(market_id)


def _row(m: UnifiedMarket) -> str:
    flag = "*" if is_high_edge(m) else " "
    title = m.title[:60]
    return (
        f"{flag} {m.source.value:<10} {format_price(m.yes_price):>6} {format_price(m.no_price):>6}"
        f"  {format_volume(m.volume):>9}  {format_date(m.end_date):<12}  {title}"
    )


@app.command("list")
def list_markets(
    ctx: typer.Context,
    source: str = typer.Option("all", "--source", help="kalshi, polymarket or all"),
    category: str = typer.Option("all", "--category", help="sports, entertainment, other or all"),
    status: str = typer.Option("all", "--status", help="open, closed, settled or all"),
    search: str = typer.Option("", "--search", "-s", help="Case-insensitive title/description match"),
    min_volume: float | None = typer.Option(None, "--min-volume", help="Minimum volume"),
    max_price: float | None = typer.Option(None, "--max-price", help="Maximum yes price (0-1)"),
    sort: str = typer.Option("volume", "--sort", help="volume, price, closeTime, createdTime or edge"),
    direction: str = typer.Option("desc", "--direction", help="asc or desc"),
    mock: bool = typer.Option(False, "--mock", help="Serve static mock listings, no network"),
    as_json: bool = typer.Option(False, "--json", help="Print markets as JSON"),
) -> None:
    """Fetch both providers, then filter and sort."""
    settings = ctx.obj["settings"]
    if mock:
        settings = settings.with_mock()
    filters = MarketFilters(
        source=source,
        category=category,
        status=status,
        search=search,
        min_volume=min_volume,
        max_price=max_price,
    )
    try:
        order = MarketSort(field=sort, direction=direction)
    except ValidationError as e:
        raise typer.BadParameter(f"invalid sort {sort!r} / direction {direction!r}") from e
    result = asyncio.run(_fetch_all(settings))
    markets = filter_and_sort(result.markets, filters, order)
    if as_json:
        typer.echo(json.dumps([m.model_dump(mode="json") for m in markets], indent=2))
    else:
        for m in markets:
            typer.echo(_row(m))
        typer.echo(f"Total: {len(markets)} markets (* edge > 5%)")
    for src, err in result.errors.items():
        typer.echo(f"Error loading {src} markets: {err}", err=True)
    if result.errors and not result.markets:
        raise typer.Exit(1)


@app.command("show")
def show_market(
    ctx: typer.Context,
    market_id: str = typer.Argument(..., help="Unified id, e.g. kalshi-KXNFL-CHIEFS-WIN"),
    mock: bool = typer.Option(False, "--mock", help="Serve static mock listings, no network"),
) -> None:
    """Show one market with its edge."""
    settings = ctx.obj["settings"]
    if mock:
        settings = settings.with_mock()
    market = asyncio.run(_fetch_one(settings, market_id))
    if market is None:
        typer.echo(f"Market {market_id} not found")
        raise typer.Exit(1)
    typer.echo(f"{market.title}")
    if market.description:
        typer.echo(f"  {market.description}")
    typer.echo(f"  source:    {market.source.value}")
    typer.echo(f"  category:  {market.category or '-'}")
    typer.echo(f"  status:    {market.status.value if market.status else '-'}")
    typer.echo(f"  yes / no:  {format_price(market.yes_price)} / {format_price(market.no_price)}")
    typer.echo(f"  edge:      {market_edge(market):.3f}{'  (high)' if is_high_edge(market) else ''}")
    typer.echo(f"  volume:    {format_volume(market.volume)}")
    typer.echo(f"  liquidity: {format_volume(market.liquidity)}")
    typer.echo(f"  closes:    {format_date(market.end_date)}")
    if market.url:
        typer.echo(f"  url:       {market.url}")
