"""Edge calculator and display formatting."""

from conftest import make_market
from predash.dashboard.edge import HIGH_EDGE_THRESHOLD, edge, is_high_edge, market_edge
from predash.dashboard.formatting import format_date, format_price, format_volume


def test_edge_values():
    assert edge(0.75, 0.25) == 0.0
    assert edge(0.6, 0.6) == 0.2
    assert edge(0.3, 0.5) == 0.2
    assert edge(0.5, 0.5) == 0.0


def test_high_edge_threshold():
    assert HIGH_EDGE_THRESHOLD == 0.05
    assert is_high_edge(make_market(yes_price=0.6, no_price=0.5))
    assert not is_high_edge(make_market(yes_price=0.67, no_price=0.35))
    assert not is_high_edge(make_market(yes_price=0.5, no_price=0.55))
    assert market_edge(make_market(yes_price=0.67, no_price=0.35)) == 0.02


def test_format_price():
    assert format_price(0.675) == "67.5%"
    assert format_price(0.0) == "0.0%"


def test_format_volume():
    assert format_volume(None) == "N/A"
    assert format_volume(0) == "N/A"
    assert format_volume(950) == "$950"
    assert format_volume(150000) == "$150.0K"
    assert format_volume(1200000) == "$1.20M"


def test_format_date():
    assert format_date("2024-12-31T23:59:59Z") == "Dec 31, 2024"
    assert format_date(None) == "N/A"
    assert format_date("not a date") == "N/A"


def test_high_edge_accepts_price_pair():
    assert is_high_edge((0.6, 0.5))
    assert not is_high_edge((0.67, 0.35))
    assert is_high_edge((0.67, 0.35), threshold=0.01)
