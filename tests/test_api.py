"""Tests for the public run_pricing entry point."""

import pytest

from menu_costing import UNRESOLVED, CostingConfig, CostingEngine, CostingSnapshot, run_pricing
from menu_costing.models import Recipe


def test_run_pricing_result(snapshot: CostingSnapshot) -> None:
    result = run_pricing(snapshot)

    assert len(result.matrix) == 6
    assert list(result.size_averages["size_id"]) == ["s12", "s16", "slice"]
    assert result.overall.count == 3
    assert result.drink_overall.count == 2
    assert result.food_overall.count == 1


def test_run_pricing_metadata(snapshot: CostingSnapshot) -> None:
    metadata = run_pricing(snapshot).metadata

    assert metadata["cost_per_minute"] == pytest.approx(0.10)
    assert metadata["monthly_overhead"] == pytest.approx(1454.88)
    assert metadata["rows"] == 6
    assert metadata["rows_ok"] == 4
    assert metadata["rows_unresolved"] == 1
    assert metadata["rows_no_data"] == 1


def test_run_pricing_does_not_mutate_snapshot(snapshot: CostingSnapshot) -> None:
    before = (snapshot.recipes, snapshot.pricing, snapshot.ingredients)

    run_pricing(snapshot)

    assert (snapshot.recipes, snapshot.pricing, snapshot.ingredients) == before


def test_run_pricing_is_repeatable(snapshot: CostingSnapshot) -> None:
    first = run_pricing(snapshot).matrix
    second = run_pricing(snapshot).matrix

    assert first.equals(second)


def test_run_pricing_with_config(snapshot: CostingSnapshot) -> None:
    result = run_pricing(snapshot, CostingConfig(healthy_margin_above=70, watch_margin_from=60))
    latte_16 = result.matrix[(result.matrix["recipe_id"] == "latte") & (result.matrix["size_id"] == "s16")]

    assert latte_16["margin_band"].iloc[0] == "watch"


def test_empty_snapshot() -> None:
    result = run_pricing(CostingSnapshot())

    assert result.matrix.empty
    assert result.overall.count == 0
    assert result.overall.avg_margin is None
    assert result.metadata["rows"] == 0
    assert result.metadata["cost_per_minute"] == 0


def test_engine_components_share_snapshot(snapshot: CostingSnapshot) -> None:
    engine = CostingEngine.from_snapshot(snapshot)

    assert engine.sizes.snapshot is snapshot
    assert engine.sizes.batches is engine.batches
    assert engine.pricing.resolver is engine.sizes
    assert engine.batches.overhead is engine.overhead


def test_engine_resolves_each_outcome(snapshot: CostingSnapshot) -> None:
    engine = CostingEngine.from_snapshot(snapshot)
    tea: Recipe = snapshot.recipe("tea")

    assert engine.sizes.cost_for_size(snapshot.recipe("latte"), "s16") == pytest.approx(1.625)
    assert engine.sizes.cost_for_size(snapshot.recipe("vanilla-latte"), "s12") is UNRESOLVED
    assert engine.sizes.cost_for_size(tea, "s12") is None


def test_blank_product_type_is_a_drink() -> None:
    snapshot = CostingSnapshot.from_dict(
        {
            "ingredients": [{"id": "1", "name": "Beans", "cost": 10, "quantity": 1, "unit": "lb", "usage_unit": "oz"}],
            "sizes": [{"id": "s12", "name": "12oz", "size_value": 12, "product_type": ""}],
            "recipes": [
                {"id": "r1", "name": "Espresso", "lines": [{"size_id": "s12", "ingredient_id": "1", "quantity": 2}]}
            ],
            "pricing": [{"recipe_id": "r1", "size_id": "s12", "sale_price": 3.0}],
        }
    )

    result = run_pricing(snapshot)

    assert result.overall.count == 1
    assert result.drink_overall.count == 1
    assert result.food_overall.count == 0
    assert result.drink_overall.avg_cost == pytest.approx(1.25)


def test_result_carries_config(snapshot: CostingSnapshot) -> None:
    config = CostingConfig(healthy_margin_above=60, watch_margin_from=50)

    assert run_pricing(snapshot, config).config is config
