"""Menu costing - recipe cost resolution and pricing for café back offices.

This package derives a sellable product's true unit cost from raw
ingredient costs, shared packaging components, batch recipes and
time-based overhead, then derives profit and margin against the
configured sale price.

Module Structure:
    menu_costing.models: Typed entities (Ingredient, Recipe, BaseTemplate, ...)
    menu_costing.snapshot: CostingSnapshot, the read-only input of one pass
    menu_costing.units: Purchase-unit to usage-unit cost conversion
    menu_costing.overhead: OverheadAllocator (monthly canonicalization, cost per minute)
    menu_costing.batch: BatchRecipeResolver (cost per yield unit)
    menu_costing.resolver: SizeCostResolver (unit cost of a recipe size)
    menu_costing.pricing: PricingAnalytics (profit, margin, averages)
    menu_costing.export: CSV export of ingredients and recipe pricing
    menu_costing.formatters: Currency/percent and console formatting

Quick Start:
    >>> from menu_costing import load_snapshot, run_pricing
    >>>
    >>> snapshot = load_snapshot("snapshot.json")
    >>> result = run_pricing(snapshot)
    >>> print(result.matrix[["recipe_name", "size_name", "total_cost", "margin"]])
    >>> print(result.overall.avg_margin)

Cost outcomes:
    A recipe size resolves to a number, to UNRESOLVED when an ingredient's
    unit conversion is unknown, or to None when it has nothing to cost.
    Presentation layers render a placeholder for the latter two.
"""

__version__ = "0.1.0"

from menu_costing.api import CostingEngine, PricingResult, run_pricing
from menu_costing.config import CostingConfig
from menu_costing.exceptions import ConfigError, CostingError, DataQualityError
from menu_costing.snapshot import CostingSnapshot, load_snapshot
from menu_costing.units import UNRESOLVED

__all__ = [
    "UNRESOLVED",
    "ConfigError",
    "CostingConfig",
    "CostingEngine",
    "CostingError",
    "CostingSnapshot",
    "DataQualityError",
    "PricingResult",
    "__version__",
    "load_snapshot",
    "run_pricing",
]
