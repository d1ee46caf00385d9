"""Console output formatting utilities."""

from __future__ import annotations

import pandas as pd

from menu_costing.api import PricingResult
from menu_costing.config import CostingConfig
from menu_costing.formatters.numbers import format_currency, format_percent
from menu_costing.models import PricingAverages
from menu_costing.pricing import STATUS_OK, classify


def _average_line(label: str, avg: PricingAverages, config: CostingConfig) -> str:
    if avg.count == 0:
        return f"  {label:<12} no priced items"
    band = classify(avg.avg_margin, config.healthy_margin_above, config.watch_margin_from)
    return (
        f"  {label:<12} cost {format_currency(avg.avg_cost):>9}  "
        f"sale {format_currency(avg.avg_sale):>9}  "
        f"profit {format_currency(avg.avg_profit):>9}  "
        f"margin {format_percent(avg.avg_margin):>7} ({band.value})"
    )


def format_averages_for_console(result: PricingResult) -> str:
    """Build a human-readable summary of store averages.

    Args:
        result: PricingResult from run_pricing.

    Returns:
        Text with one line per size and the overall drink/food averages.
    """
    if result.matrix.empty:
        return "No priced recipes."

    lines = ["Store Averages", "=" * 60]
    for _, row in result.size_averages.iterrows():
        avg = PricingAverages(
            count=int(row["count"]),
            avg_cost=None if pd.isna(row["avg_cost"]) else float(row["avg_cost"]),
            avg_sale=None if pd.isna(row["avg_sale"]) else float(row["avg_sale"]),
            avg_profit=None if pd.isna(row["avg_profit"]) else float(row["avg_profit"]),
            avg_margin=None if pd.isna(row["avg_margin"]) else float(row["avg_margin"]),
        )
        lines.append(_average_line(str(row["size_name"]), avg, result.config))

    lines.append("")
    lines.append(_average_line("Drinks", result.drink_overall, result.config))
    if result.food_overall.count:
        lines.append(_average_line("Food", result.food_overall, result.config))
    lines.append(_average_line("Overall", result.overall, result.config))
    return "\n".join(lines)


def format_matrix_for_console(matrix: pd.DataFrame) -> str:
    """Render pricing matrix rows as "recipe / size: cost, sale, margin, profit" lines."""
    if matrix.empty:
        return "No priced recipes."

    lines = []
    for category, group in matrix.groupby("category", sort=False):
        lines.append(str(category or "Uncategorized").upper())
        for _, row in group.iterrows():
            ok = row["status"] == STATUS_OK
            cost = format_currency(row["total_cost"] if ok else None)
            sale = format_currency(row["sale_price"] if row["sale_price"] > 0 else None)
            lines.append(
                f"  {row['recipe_name']} / {row['size_name']}: "
                f"cost {cost}, sale {sale}, margin {format_percent(row['margin'])}, "
                f"profit {format_currency(row['profit'])}"
            )
    return "\n".join(lines)
