"""Public API for the menu costing engine.

This module wires the costing components against one snapshot and exposes
a single in-memory entry point, run_pricing, for presentation layers and
the CSV export.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import pandas as pd

from menu_costing.batch import BatchRecipeResolver
from menu_costing.config import CostingConfig
from menu_costing.models import PricingAverages
from menu_costing.overhead import OverheadAllocator
from menu_costing.pricing import (
    STATUS_NO_DATA,
    STATUS_OK,
    STATUS_UNRESOLVED,
    PricingAnalytics,
)
from menu_costing.resolver import SizeCostResolver
from menu_costing.snapshot import CostingSnapshot

logger = logging.getLogger(__name__)


@dataclass
class CostingEngine:
    """The costing components bound to one snapshot.

    Attributes:
        snapshot: Entity snapshot every component reads.
        config: Costing configuration shared by all components.
        overhead: Overhead canonicalization and allocation.
        batches: Batch recipe per-yield-unit costing.
        sizes: Recipe size cost resolution.
        pricing: Profit, margin and averages.
    """

    snapshot: CostingSnapshot
    config: CostingConfig
    overhead: OverheadAllocator
    batches: BatchRecipeResolver
    sizes: SizeCostResolver
    pricing: PricingAnalytics

    @classmethod
    def from_snapshot(
        cls,
        snapshot: CostingSnapshot,
        config: Optional[CostingConfig] = None,
    ) -> CostingEngine:
        """Build every component against the snapshot.

        Args:
            snapshot: Entity snapshot for this pass.
            config: Costing configuration. None uses defaults.

        Returns:
            CostingEngine instance.

        """
        if config is None:
            config = CostingConfig()

        overhead = OverheadAllocator(snapshot.overhead_items, snapshot.overhead_settings, config)
        batches = BatchRecipeResolver(snapshot, overhead, config)
        sizes = SizeCostResolver(snapshot, overhead, batches, config)
        pricing = PricingAnalytics(snapshot, sizes, config)
        return cls(
            snapshot=snapshot,
            config=config,
            overhead=overhead,
            batches=batches,
            sizes=sizes,
            pricing=pricing,
        )


@dataclass
class PricingResult:
    """Result of a pricing pass.

    Attributes:
        matrix: One row per sellable recipe size (see pricing.MATRIX_COLUMNS).
        size_averages: Per-size averages over priced rows.
        overall: Store average across all sizes with data.
        drink_overall: Store average across every size that is not food.
        food_overall: Store average across food sizes.
        config: Configuration the pass ran with (margin band thresholds included).
        metadata: Pass summary (cost_per_minute, monthly_overhead, row counts by status).
    """

    matrix: pd.DataFrame
    size_averages: pd.DataFrame
    overall: PricingAverages
    drink_overall: PricingAverages
    food_overall: PricingAverages
    config: CostingConfig = field(default_factory=CostingConfig)
    metadata: Dict[str, object] = field(default_factory=dict)


def run_pricing(
    snapshot: CostingSnapshot,
    config: Optional[CostingConfig] = None,
) -> PricingResult:
    """Run a full pricing pass in memory.

    This function:
    - does NOT read or write any files,
    - does NOT mutate the snapshot,
    - MAY log progress via the logging module.

    Args:
        snapshot: Entity snapshot supplied by the data-access layer.
        config: Costing configuration. If None, uses defaults.

    Returns:
        PricingResult containing:
        - matrix: raw decimals per recipe size (never formatted)
        - size_averages and the overall, drink and food store averages
        - metadata: pass summary

    """
    engine = CostingEngine.from_snapshot(snapshot, config)

    matrix = engine.pricing.pricing_matrix()
    size_averages = engine.pricing.averages_by_size(matrix)

    status_counts = matrix["status"].value_counts().to_dict() if not matrix.empty else {}
    metadata: Dict[str, object] = {
        "cost_per_minute": engine.overhead.cost_per_minute,
        "monthly_overhead": engine.overhead.monthly_total,
        "rows": len(matrix),
        "rows_ok": int(status_counts.get(STATUS_OK, 0)),
        "rows_unresolved": int(status_counts.get(STATUS_UNRESOLVED, 0)),
        "rows_no_data": int(status_counts.get(STATUS_NO_DATA, 0)),
    }

    logger.info(
        "Priced %d recipe size(s): %d ok, %d unresolved, %d without data",
        metadata["rows"],
        metadata["rows_ok"],
        metadata["rows_unresolved"],
        metadata["rows_no_data"],
    )

    return PricingResult(
        matrix=matrix,
        size_averages=size_averages,
        overall=engine.pricing.overall_average(size_averages),
        drink_overall=engine.pricing.overall_average(size_averages, product_type="drink"),
        food_overall=engine.pricing.overall_average(size_averages, product_type="food"),
        config=engine.config,
        metadata=metadata,
    )
