"""Purchase-unit to usage-unit cost conversion.

Ingredients are bought in one unit (a 1 lb bag, a 1 gal jug) and consumed
by recipes in another (oz, ml). This module converts a purchase price into
a cost per usage unit through a sparse table of multiplicative factors.

A conversion the table does not cover is not an error: it returns the
UNRESOLVED sentinel, and callers must branch on it explicitly rather than
fall back to the raw cost per purchase unit.

Examples:
    >>> cost_per_usage_unit(10.0, 1, "lb", "oz")
    0.625
    >>> cost_per_usage_unit(10.0, 1, "each", "oz") is UNRESOLVED
    True

"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple, Union

from menu_costing.models import Ingredient


class Unresolved(Enum):
    """Sentinel type for a cost that cannot be computed."""

    UNRESOLVED = "unresolved"

    def __repr__(self) -> str:
        return "UNRESOLVED"


UNRESOLVED = Unresolved.UNRESOLVED

Cost = Union[float, Unresolved]

# Multiplicative factors: one <from> unit equals factor <to> units
UNIT_CONVERSIONS: Dict[str, Dict[str, float]] = {
    "oz": {"g": 28.3495, "grams": 28.3495, "gram": 28.3495, "oz": 1.0, "ml": 29.5735},
    "lb": {"oz": 16.0, "g": 453.592, "grams": 453.592, "gram": 453.592, "lb": 1.0},
    "gal": {"oz": 128.0, "ml": 3785.41, "l": 3.78541, "gal": 1.0},
    "l": {"ml": 1000.0, "oz": 33.814, "l": 1.0},
    "kg": {"g": 1000.0, "grams": 1000.0, "gram": 1000.0, "oz": 35.274, "lb": 2.20462, "kg": 1.0},
}

_FLAT_CONVERSIONS: Dict[Tuple[str, str], float] = {
    (from_unit, to_unit): factor
    for from_unit, targets in UNIT_CONVERSIONS.items()
    for to_unit, factor in targets.items()
}


def normalize_unit(unit: Optional[str]) -> str:
    """Lower-case and trim a unit label; None becomes ""."""
    return (unit or "").strip().lower()


def conversion_factor(from_unit: str, to_unit: str) -> Optional[float]:
    """Return how many `to_unit` make one `from_unit`, or None if unknown.

    Args:
        from_unit: Purchase unit (case-insensitive, surrounding spaces ignored).
        to_unit: Usage unit (case-insensitive, surrounding spaces ignored).

    Returns:
        The factor, 1.0 for identical units, or None when the pair is not covered.

    """
    source = normalize_unit(from_unit)
    target = normalize_unit(to_unit)
    if source == target:
        return 1.0
    return _FLAT_CONVERSIONS.get((source, target))


def can_convert(from_unit: str, to_unit: str) -> bool:
    return conversion_factor(from_unit, to_unit) is not None


def cost_per_usage_unit(
    cost: float,
    purchase_qty: float,
    purchase_unit: str,
    usage_unit: Optional[str],
) -> Cost:
    """Convert a purchase price into a cost per usage unit.

    Args:
        cost: Price paid for purchase_qty units.
        purchase_qty: Quantity purchased, in purchase_unit (must be > 0).
        purchase_unit: Unit the purchase is expressed in.
        usage_unit: Unit recipes consume. Empty or equal to purchase_unit
            means no conversion.

    Returns:
        Cost per usage unit, or UNRESOLVED when no factor exists for the pair.

    Examples:
        >>> cost_per_usage_unit(12.0, 4, "gal", "")
        3.0
        >>> cost_per_usage_unit(10.0, 1, "LB ", "oz")
        0.625

    """
    if not normalize_unit(usage_unit) or normalize_unit(usage_unit) == normalize_unit(purchase_unit):
        return cost / purchase_qty

    factor = conversion_factor(purchase_unit, usage_unit or "")
    if factor is None:
        return UNRESOLVED
    return cost / (purchase_qty * factor)


def is_unresolved(value: object) -> bool:
    return value is UNRESOLVED


def ingredient_unit_cost(ingredient: Ingredient) -> Cost:
    """Cost of one usage unit of an ingredient.

    An ingredient with no cost or no purchase quantity costs 0 per unit.
    """
    if not ingredient.purchase_cost or ingredient.purchase_quantity <= 0:
        return 0.0
    return cost_per_usage_unit(
        ingredient.purchase_cost,
        ingredient.purchase_quantity,
        ingredient.purchase_unit,
        ingredient.effective_usage_unit,
    )
