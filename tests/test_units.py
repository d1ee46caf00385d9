"""Tests for purchase-unit to usage-unit cost conversion."""

import pytest

from menu_costing.models import Ingredient, IngredientType
from menu_costing.units import (
    UNRESOLVED,
    can_convert,
    conversion_factor,
    cost_per_usage_unit,
    ingredient_unit_cost,
    is_unresolved,
)


def test_pound_to_ounce_round_trip() -> None:
    """$10.00 for 1 lb used in oz costs $0.625/oz; a 2 oz line contributes $1.25."""
    per_oz = cost_per_usage_unit(10.0, 1, "lb", "oz")

    assert per_oz == pytest.approx(0.625)
    assert 2 * per_oz == pytest.approx(1.25)


def test_same_or_empty_usage_unit_divides_by_quantity() -> None:
    assert cost_per_usage_unit(12.0, 4, "gal", "gal") == pytest.approx(3.0)
    assert cost_per_usage_unit(12.0, 4, "gal", "") == pytest.approx(3.0)
    assert cost_per_usage_unit(12.0, 4, "gal", None) == pytest.approx(3.0)


def test_units_are_case_insensitive_and_trimmed() -> None:
    assert cost_per_usage_unit(10.0, 1, " LB ", "Oz") == pytest.approx(0.625)
    assert conversion_factor("KG", " g") == pytest.approx(1000.0)


@pytest.mark.parametrize(
    ("from_unit", "to_unit", "factor"),
    [
        ("oz", "g", 28.3495),
        ("oz", "ml", 29.5735),
        ("lb", "oz", 16.0),
        ("lb", "grams", 453.592),
        ("gal", "oz", 128.0),
        ("gal", "ml", 3785.41),
        ("gal", "l", 3.78541),
        ("l", "ml", 1000.0),
        ("l", "oz", 33.814),
        ("kg", "lb", 2.20462),
        ("kg", "oz", 35.274),
    ],
)
def test_conversion_table(from_unit: str, to_unit: str, factor: float) -> None:
    assert conversion_factor(from_unit, to_unit) == pytest.approx(factor)
    assert can_convert(from_unit, to_unit)


def test_gallon_of_milk_per_ounce() -> None:
    assert cost_per_usage_unit(4.0, 1, "gal", "oz") == pytest.approx(4.0 / 128)


def test_missing_conversion_is_unresolved_not_zero() -> None:
    result = cost_per_usage_unit(3.0, 1, "each", "oz")

    assert result is UNRESOLVED
    assert is_unresolved(result)
    assert result != 0


def test_table_is_directional() -> None:
    """Only the listed direction exists; g -> oz is not in the table."""
    assert conversion_factor("g", "oz") is None
    assert cost_per_usage_unit(5.0, 500, "g", "oz") is UNRESOLVED
    assert not can_convert("g", "oz")


def test_ingredient_unit_cost_uses_usage_unit() -> None:
    milk = Ingredient("milk", "Milk", "Dairy", IngredientType.FOH, 4.0, 1, "gal", "oz")
    assert ingredient_unit_cost(milk) == pytest.approx(0.03125)


def test_ingredient_unit_cost_defaults_to_purchase_unit() -> None:
    cups = Ingredient("cup", "Cup", "Cups", IngredientType.DISPOSABLE, 10.0, 100, "each")
    assert cups.effective_usage_unit == "each"
    assert ingredient_unit_cost(cups) == pytest.approx(0.10)


def test_ingredient_unit_cost_zero_quantity_costs_nothing() -> None:
    broken = Ingredient("x", "Broken", "Misc", IngredientType.SUPPLY, 10.0, 0, "each")
    assert ingredient_unit_cost(broken) == 0.0
