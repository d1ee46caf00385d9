"""Tests for presentation formatting."""

import numpy as np
import pytest

from menu_costing import CostingConfig, CostingSnapshot, run_pricing
from menu_costing.formatters import (
    format_averages_for_console,
    format_currency,
    format_matrix_for_console,
    format_percent,
)
from menu_costing.units import UNRESOLVED


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1234.5, "$1,234.50"),
        (0.0, "$0.00"),
        (1.903125, "$1.90"),
        (-0.5, "-$0.50"),
        (None, "–"),
        (UNRESOLVED, "–"),
        (np.nan, "–"),
    ],
)
def test_format_currency(value, expected: str) -> None:
    assert format_currency(value) == expected


def test_format_currency_custom_placeholder() -> None:
    assert format_currency(None, placeholder="n/a") == "n/a"


def test_format_percent() -> None:
    assert format_percent(31.456) == "31.5%"
    assert format_percent(-12.0) == "-12.0%"
    assert format_percent(None) == "–"
    assert format_percent(float("nan")) == "–"


def test_format_matrix_for_console(snapshot: CostingSnapshot) -> None:
    text = format_matrix_for_console(run_pricing(snapshot).matrix)

    assert "DRINKS" in text
    assert "FOOD ITEMS" in text
    assert "Latte / 12oz: cost $1.90, sale $4.50, margin 57.7%, profit $2.60" in text
    assert "Vanilla Latte / 12oz: cost –, sale $5.00, margin –, profit –" in text
    assert "Mocha / 12oz: cost $1.25, sale –, margin –, profit -$1.25" in text


def test_format_averages_for_console(snapshot: CostingSnapshot) -> None:
    text = format_averages_for_console(run_pricing(snapshot))

    assert text.startswith("Store Averages")
    assert "12oz" in text
    assert "Slice" in text
    assert "Drinks" in text
    assert "Food" in text
    assert "Overall" in text
    assert "(healthy)" in text


def test_format_empty_result() -> None:
    result = run_pricing(CostingSnapshot())

    assert format_averages_for_console(result) == "No priced recipes."
    assert format_matrix_for_console(result.matrix) == "No priced recipes."


def test_averages_use_configured_margin_bands(snapshot: CostingSnapshot) -> None:
    """Bands in the console summary follow the thresholds the pass ran with."""
    result = run_pricing(snapshot, CostingConfig(healthy_margin_above=99, watch_margin_from=98))

    text = format_averages_for_console(result)

    assert "(healthy)" not in text
    assert "(risk)" in text
