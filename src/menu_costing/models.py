"""Typed entity model for the costing engine.

Every entity the data-access layer hands over is represented here as a
frozen dataclass with all optional fields declared up front. The closed
sets (ingredient types, overhead frequencies) are enums, and a recipe
line's reference is a tagged union of IngredientRef and BatchRecipeRef.

Entities are never mutated by the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Tuple, Union

import pandas as pd


class IngredientType(str, Enum):
    """Where an ingredient is used."""

    FOH = "FOH Ingredient"
    BOH = "BOH Ingredient"
    DISPOSABLE = "Disposable"
    SUPPLY = "Supply"

    @classmethod
    def parse(cls, value: str) -> IngredientType:
        """Parse a type label, accepting both "FOH" and "FOH Ingredient" forms.

        Raises:
            ValueError: If the label matches no type.
        """
        text = value.strip().lower()
        for member in cls:
            if text in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown ingredient type '{value}'")


class Frequency(str, Enum):
    """How often a recurring overhead amount is paid."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


# Display/sort order of frequencies, shortest period first
FREQUENCY_ORDER = [
    Frequency.DAILY,
    Frequency.WEEKLY,
    Frequency.BI_WEEKLY,
    Frequency.MONTHLY,
    Frequency.QUARTERLY,
    Frequency.ANNUAL,
]


def is_food_type(product_type: Optional[str]) -> bool:
    """True for the "food" product type; blank or any other label counts as a drink."""
    return isinstance(product_type, str) and product_type.strip().lower() == "food"


@dataclass(frozen=True)
class Ingredient:
    """A purchasable ingredient, packaging item or supply.

    Attributes:
        id: Ingredient identifier.
        name: Display name.
        category: Category name.
        type: Usage classification (FOH, BOH, Disposable, Supply).
        purchase_cost: Price paid for one purchase of purchase_quantity units.
        purchase_quantity: Units received per purchase (expected > 0).
        purchase_unit: Unit the quantity is expressed in (e.g. "lb").
        usage_unit: Unit recipes consume it in. None means the purchase unit.
        vendor: Optional vendor name.
        updated_at: ISO timestamp of the last price update, if known.
    """

    id: str
    name: str
    category: str
    type: IngredientType
    purchase_cost: float
    purchase_quantity: float
    purchase_unit: str
    usage_unit: Optional[str] = None
    vendor: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def effective_usage_unit(self) -> str:
        """Usage unit, falling back to the purchase unit."""
        return self.usage_unit or self.purchase_unit

    def is_price_stale(self, today: date, months: int = 3) -> bool:
        """Return True if the price was last updated more than `months` ago.

        Ingredients with no recorded update are always stale.
        """
        if not self.updated_at:
            return True
        updated = pd.to_datetime(self.updated_at)
        if updated.tzinfo is not None:
            updated = updated.tz_convert(None)
        cutoff = pd.Timestamp(today) - pd.DateOffset(months=months)
        return updated < cutoff


@dataclass(frozen=True)
class IngredientRef:
    """Line reference to a raw ingredient."""

    id: str


@dataclass(frozen=True)
class BatchRecipeRef:
    """Line reference to a batch recipe consumed as an ingredient."""

    id: str


LineRef = Union[IngredientRef, BatchRecipeRef]


@dataclass(frozen=True)
class RecipeSizeLine:
    """Quantity of one ingredient or batch recipe used by a recipe at one size."""

    recipe_id: str
    size_id: str
    ref: LineRef
    quantity: float
    unit: Optional[str] = None


@dataclass(frozen=True)
class Recipe:
    """A menu item or a batch preparation.

    Attributes:
        id: Recipe identifier.
        name: Display name.
        category: Category name.
        is_batch: True for bulk preparations (syrups, bases) priced per yield unit.
        minutes_per_unit: Prep-time override used for overhead allocation.
        default_base_template_id: Legacy recipe-wide template. Costing only uses
            the per-size RecipeSizeBase mappings.
        lines: All ingredient lines of the recipe, across sizes.
    """

    id: str
    name: str
    category: str
    is_batch: bool = False
    minutes_per_unit: Optional[float] = None
    default_base_template_id: Optional[str] = None
    lines: Tuple[RecipeSizeLine, ...] = ()

    def lines_for_size(self, size_id: str) -> list[RecipeSizeLine]:
        return [line for line in self.lines if line.size_id == size_id]


@dataclass(frozen=True)
class ProductSize:
    """A sellable size (12oz, Large, Slice) or a batch size (Bulk 64oz).

    Attributes:
        id: Size identifier.
        name: Display name.
        size_value: Declared volume/quantity; for batch sizes this is the yield.
        product_type: "drink" or "food".
        display_order: Declared order; ties keep snapshot order.
        is_batch: Explicit batch-size flag. Sizes whose name contains the
            configured marker are batch sizes too.
    """

    id: str
    name: str
    size_value: float = 0.0
    product_type: str = "drink"
    display_order: int = 0
    is_batch: bool = False

    def is_batch_size(self, marker: str = "bulk") -> bool:
        return self.is_batch or marker.lower() in self.name.lower()

    @property
    def is_food(self) -> bool:
        return is_food_type(self.product_type)


@dataclass(frozen=True)
class BaseTemplateLine:
    """Shared component (cup, lid, sleeve) used at one size of a template."""

    template_id: str
    size_id: str
    ingredient_id: str
    quantity: float
    unit: Optional[str] = None


@dataclass(frozen=True)
class BaseTemplate:
    """Named set of size-scoped shared components."""

    id: str
    name: str
    category: str = ""
    lines: Tuple[BaseTemplateLine, ...] = ()

    def lines_for_size(self, size_id: str) -> list[BaseTemplateLine]:
        return [line for line in self.lines if line.size_id == size_id]


@dataclass(frozen=True)
class RecipeSizeBase:
    """Selects which base template supplies shared components for a recipe size."""

    recipe_id: str
    size_id: str
    base_template_id: str


@dataclass(frozen=True)
class OverheadItem:
    """A recurring fixed cost (rent, labor, utilities)."""

    id: str
    name: str
    amount: float
    frequency: Frequency


@dataclass(frozen=True)
class OverheadSettings:
    """Store hours and the global prep-time default.

    Attributes:
        operating_days_per_week: Days open per week (1-7).
        hours_open_per_day: Hours open per day (1-24).
        default_minutes_per_unit: Global minutes per product, used when a
            recipe has no override.
    """

    operating_days_per_week: int = 7
    hours_open_per_day: int = 8
    default_minutes_per_unit: Optional[float] = None


@dataclass(frozen=True)
class SizePricing:
    """Configured sale price for a recipe size."""

    recipe_id: str
    size_id: str
    sale_price: float


@dataclass(frozen=True)
class PeriodAmounts:
    """One overhead amount expressed over every display period."""

    daily: float = 0.0
    weekly: float = 0.0
    monthly: float = 0.0
    quarterly: float = 0.0
    annual: float = 0.0

    def __add__(self, other: PeriodAmounts) -> PeriodAmounts:
        return PeriodAmounts(
            daily=self.daily + other.daily,
            weekly=self.weekly + other.weekly,
            monthly=self.monthly + other.monthly,
            quarterly=self.quarterly + other.quarterly,
            annual=self.annual + other.annual,
        )


@dataclass(frozen=True)
class SizeCostBreakdown:
    """Cost components of one (recipe, size) pair.

    Attributes:
        ingredient_cost: Direct ingredient lines.
        batch_cost: Lines referencing batch recipes.
        base_cost: Base template lines.
        overhead: Overhead allocation (charged once per unit).
        base_template_id: Template that supplied base_cost, if any.
    """

    ingredient_cost: float = 0.0
    batch_cost: float = 0.0
    base_cost: float = 0.0
    overhead: float = 0.0
    base_template_id: Optional[str] = None

    @property
    def materials(self) -> float:
        """Everything except overhead (the "Ingredient Cost" export column)."""
        return self.ingredient_cost + self.batch_cost + self.base_cost

    @property
    def total(self) -> float:
        return self.materials + self.overhead


@dataclass(frozen=True)
class PricingAverages:
    """Mean cost/sale/profit/margin over priced pairs.

    `count` is the number of pairs included; when it is 0 every mean is None.
    """

    count: int = 0
    avg_cost: Optional[float] = None
    avg_sale: Optional[float] = None
    avg_profit: Optional[float] = None
    avg_margin: Optional[float] = None
