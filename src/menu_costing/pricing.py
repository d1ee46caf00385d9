"""Profit, margin and store averages.

This module derives profit and margin from a resolved cost and a configured
sale price, builds the pricing matrix (one row per sellable recipe size),
and averages it per size and overall.

Unpriced pairs (sale price 0) have no margin. They are excluded from every
average entirely rather than counted as 0%.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

import numpy as np
import pandas as pd

from menu_costing.config import HEALTHY_MARGIN_ABOVE, WATCH_MARGIN_FROM, CostingConfig
from menu_costing.models import PricingAverages, is_food_type
from menu_costing.resolver import SizeCostResolver
from menu_costing.snapshot import CostingSnapshot
from menu_costing.units import UNRESOLVED

logger = logging.getLogger(__name__)

MATRIX_COLUMNS = [
    "recipe_id",
    "recipe_name",
    "category",
    "size_id",
    "size_name",
    "product_type",
    "base_template",
    "status",
    "ingredient_cost",
    "overhead",
    "total_cost",
    "sale_price",
    "profit",
    "margin",
    "margin_band",
]

SIZE_AVERAGE_COLUMNS = [
    "size_id",
    "size_name",
    "product_type",
    "count",
    "avg_cost",
    "avg_sale",
    "avg_profit",
    "avg_margin",
]

# Row status values in the pricing matrix
STATUS_OK = "ok"
STATUS_UNRESOLVED = "unresolved"
STATUS_NO_DATA = "no_data"


class MarginBand(str, Enum):
    """Health classification of a margin."""

    HEALTHY = "healthy"
    WATCH = "watch"
    RISK = "risk"


def profit(cost: float, sale_price: float) -> float:
    return sale_price - cost


def margin(cost: float, sale_price: float) -> Optional[float]:
    """Profit as a percentage of the sale price, None when the sale price is not positive."""
    if sale_price <= 0:
        return None
    return profit(cost, sale_price) / sale_price * 100


def classify(
    margin_pct: Optional[float],
    healthy_above: float = HEALTHY_MARGIN_ABOVE,
    watch_from: float = WATCH_MARGIN_FROM,
) -> Optional[MarginBand]:
    """Classify a margin as healthy (> 31), watch (25-31) or risk (< 25).

    Examples:
        >>> classify(31.5).value
        'healthy'
        >>> classify(28).value
        'watch'
        >>> classify(None) is None
        True

    """
    if margin_pct is None or pd.isna(margin_pct):
        return None
    if margin_pct > healthy_above:
        return MarginBand.HEALTHY
    if margin_pct >= watch_from:
        return MarginBand.WATCH
    return MarginBand.RISK


def _priced(frame: pd.DataFrame) -> pd.DataFrame:
    """Rows with a positive sale price and a resolved cost, with profit and margin."""
    if frame.empty:
        return frame.assign(profit=pd.Series(dtype=float), margin=pd.Series(dtype=float))
    mask = (frame["sale_price"] > 0) & frame["total_cost"].notna()
    priced = frame.loc[mask, :].copy()
    priced["profit"] = priced["sale_price"] - priced["total_cost"]
    priced["margin"] = priced["profit"] / priced["sale_price"] * 100
    return priced


def averages(frame: pd.DataFrame) -> PricingAverages:
    """Mean cost, sale, profit and margin over priced pairs.

    Args:
        frame: Rows with at least total_cost and sale_price columns (for
            example the pricing matrix or a slice of it). Rows with a sale
            price of 0 or an unresolved (NaN) cost are left out of the
            denominator.

    Returns:
        PricingAverages; all means are None when no row is priced.

    """
    priced = _priced(frame)
    if priced.empty:
        return PricingAverages()
    return PricingAverages(
        count=len(priced),
        avg_cost=float(priced["total_cost"].mean()),
        avg_sale=float(priced["sale_price"].mean()),
        avg_profit=float(priced["profit"].mean()),
        avg_margin=float(priced["margin"].mean()),
    )


def averages_by_size(matrix: pd.DataFrame) -> pd.DataFrame:
    """Per-size averages over priced pairs of the pricing matrix.

    Every size present in the matrix gets a row; sizes with no priced pair
    have count 0 and NaN averages.

    Returns:
        DataFrame with columns size_id, size_name, product_type, count,
        avg_cost, avg_sale, avg_profit, avg_margin.

    """
    if matrix.empty:
        return pd.DataFrame(columns=SIZE_AVERAGE_COLUMNS)

    sizes = matrix[["size_id", "size_name", "product_type"]].drop_duplicates("size_id")
    grouped = (
        _priced(matrix)
        .groupby("size_id", sort=False)
        .agg(
            count=("total_cost", "size"),
            avg_cost=("total_cost", "mean"),
            avg_sale=("sale_price", "mean"),
            avg_profit=("profit", "mean"),
            avg_margin=("margin", "mean"),
        )
        .reset_index()
    )
    result = sizes.merge(grouped, on="size_id", how="left")
    result["count"] = result["count"].fillna(0).astype(int)
    return result[SIZE_AVERAGE_COLUMNS].reset_index(drop=True)


def overall_average(size_averages: pd.DataFrame, product_type: Optional[str] = None) -> PricingAverages:
    """Store-wide average: the mean of the per-size averages that have data.

    Args:
        size_averages: Output of averages_by_size.
        product_type: "food" restricts to food sizes; any other value restricts to
            every size that is not food (blank types count as drinks). None uses all sizes.

    Returns:
        PricingAverages whose count is the number of sizes averaged.

    """
    if size_averages.empty:
        return PricingAverages()

    df = size_averages[size_averages["count"] > 0]
    if product_type is not None:
        food = df["product_type"].map(is_food_type).astype(bool)
        df = df[food] if is_food_type(product_type) else df[~food]
    if df.empty:
        return PricingAverages()

    return PricingAverages(
        count=len(df),
        avg_cost=float(df["avg_cost"].mean()),
        avg_sale=float(df["avg_sale"].mean()),
        avg_profit=float(df["avg_profit"].mean()),
        avg_margin=float(df["avg_margin"].mean()),
    )


class PricingAnalytics:
    """Builds the pricing matrix for a snapshot and summarizes it."""

    def __init__(
        self,
        snapshot: CostingSnapshot,
        resolver: SizeCostResolver,
        config: Optional[CostingConfig] = None,
    ) -> None:
        self.snapshot = snapshot
        self.resolver = resolver
        self.config = config or CostingConfig()

    profit = staticmethod(profit)
    margin = staticmethod(margin)

    def classify(self, margin_pct: Optional[float]) -> Optional[MarginBand]:
        return classify(
            margin_pct,
            healthy_above=self.config.healthy_margin_above,
            watch_from=self.config.watch_margin_from,
        )

    def pricing_matrix(self) -> pd.DataFrame:
        """One row per sellable recipe size.

        Batch recipes and batch sizes are manufacturing inputs, not products,
        and are left out. A pair appears when it has costable content or a
        configured sale price.

        Returns:
            DataFrame with MATRIX_COLUMNS. Cost, profit and margin columns are
            NaN for rows whose status is "unresolved" or "no_data"; margin is
            NaN for unpriced rows.

        """
        marker = self.config.batch_size_marker
        sizes = [s for s in self.snapshot.sizes_in_order if not s.is_batch_size(marker)]
        recipes = [r for r in self.snapshot.recipes if not r.is_batch]

        rows = []
        for recipe in recipes:
            for size in sizes:
                sale_price = self.snapshot.sale_price(recipe.id, size.id)
                breakdown = self.resolver.breakdown_for_size(recipe, size.id)
                if breakdown is None and sale_price <= 0:
                    continue

                template = self.resolver.template_for(recipe, size.id)
                row = {
                    "recipe_id": recipe.id,
                    "recipe_name": recipe.name,
                    "category": recipe.category,
                    "size_id": size.id,
                    "size_name": size.name,
                    "product_type": size.product_type,
                    "base_template": template.name if template is not None else None,
                    "ingredient_cost": np.nan,
                    "overhead": np.nan,
                    "total_cost": np.nan,
                    "sale_price": sale_price,
                    "profit": np.nan,
                    "margin": np.nan,
                    "margin_band": None,
                }

                if breakdown is None:
                    row["status"] = STATUS_NO_DATA
                elif breakdown is UNRESOLVED:
                    row["status"] = STATUS_UNRESOLVED
                else:
                    pct = self.margin(breakdown.total, sale_price)
                    band = self.classify(pct)
                    row.update(
                        {
                            "status": STATUS_OK,
                            "ingredient_cost": breakdown.materials,
                            "overhead": breakdown.overhead,
                            "total_cost": breakdown.total,
                            "profit": self.profit(breakdown.total, sale_price),
                            "margin": pct if pct is not None else np.nan,
                            "margin_band": band.value if band is not None else None,
                        }
                    )
                rows.append(row)

        if not rows:
            return pd.DataFrame(columns=MATRIX_COLUMNS)

        df = pd.DataFrame(rows, columns=MATRIX_COLUMNS)
        unresolved = int((df["status"] == STATUS_UNRESOLVED).sum())
        if unresolved:
            logger.warning("%d recipe size(s) have unresolved unit conversions", unresolved)
        return df

    averages = staticmethod(averages)
    averages_by_size = staticmethod(averages_by_size)
    overall_average = staticmethod(overall_average)
