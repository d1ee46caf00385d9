"""CSV export of ingredients and recipe pricing.

The recipe pricing export consumes the pricing matrix produced by the
engine and only formats it, so exported rows carry exactly the numbers the
pricing screen shows. Money columns are fixed 2-decimal strings; values
the engine could not compute (unresolved conversions, missing data,
undefined margins) are left blank.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from menu_costing.snapshot import CostingSnapshot
from menu_costing.units import UNRESOLVED, ingredient_unit_cost

logger = logging.getLogger(__name__)

RECIPE_EXPORT_COLUMNS = {
    "recipe_name": "Recipe Name",
    "category": "Category",
    "size_name": "Size",
    "base_template": "Base Template",
    "ingredient_cost": "Ingredient Cost",
    "overhead": "Overhead",
    "total_cost": "Total Cost",
    "sale_price": "Sale Price",
    "margin": "Margin %",
    "profit": "Profit",
}

MONEY_COLUMNS = ["ingredient_cost", "overhead", "total_cost", "sale_price", "margin", "profit"]

INGREDIENT_EXPORT_COLUMNS = [
    "Name",
    "Category",
    "Type",
    "Cost",
    "Quantity",
    "Unit",
    "Cost Per Unit",
    "Usage Unit",
    "Cost Per Usage",
    "Vendor",
    "Last Updated",
]


def _fixed(value: object, decimals: int = 2) -> str:
    if value is None or pd.isna(value):
        return ""
    return f"{float(value):.{decimals}f}"


def recipes_pricing_frame(matrix: pd.DataFrame) -> pd.DataFrame:
    """Format the pricing matrix as export rows.

    Args:
        matrix: Output of PricingAnalytics.pricing_matrix (or PricingResult.matrix).

    Returns:
        DataFrame with the export headers and string values.

    """
    if matrix.empty:
        return pd.DataFrame(columns=list(RECIPE_EXPORT_COLUMNS.values()))

    df = matrix[list(RECIPE_EXPORT_COLUMNS)].copy()
    df["base_template"] = df["base_template"].fillna("None")
    for column in MONEY_COLUMNS:
        df[column] = df[column].map(_fixed)
    return df.rename(columns=RECIPE_EXPORT_COLUMNS).reset_index(drop=True)


def export_recipes_pricing(matrix: pd.DataFrame, path: str | Path) -> Path:
    """Write the recipe pricing CSV.

    Args:
        matrix: Pricing matrix to export.
        path: Destination CSV file. Parent directories are created.

    Returns:
        Path of the written file.

    """
    if isinstance(path, str):
        path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    df = recipes_pricing_frame(matrix)
    df.to_csv(path, index=False, encoding="utf-8")
    logger.info("Exported %d recipe pricing row(s) to %s", len(df), path)
    return path


def ingredients_frame(snapshot: CostingSnapshot) -> pd.DataFrame:
    """Ingredient list with cost per purchase unit and per usage unit (4 decimals).

    Cost Per Usage is blank when the purchase-to-usage conversion is unresolved.
    """
    rows = []
    for ing in snapshot.ingredients:
        quantity = ing.purchase_quantity if ing.purchase_quantity > 0 else 1.0
        per_usage = ingredient_unit_cost(ing)
        rows.append(
            {
                "Name": ing.name,
                "Category": ing.category,
                "Type": ing.type.value,
                "Cost": ing.purchase_cost,
                "Quantity": ing.purchase_quantity,
                "Unit": ing.purchase_unit,
                "Cost Per Unit": _fixed(ing.purchase_cost / quantity, 4),
                "Usage Unit": ing.effective_usage_unit,
                "Cost Per Usage": "" if per_usage is UNRESOLVED else _fixed(per_usage, 4),
                "Vendor": ing.vendor or "",
                "Last Updated": ing.updated_at or "",
            }
        )
    return pd.DataFrame(rows, columns=INGREDIENT_EXPORT_COLUMNS)


def export_ingredients(snapshot: CostingSnapshot, path: str | Path) -> Path:
    """Write the ingredients CSV and return its path."""
    if isinstance(path, str):
        path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    df = ingredients_frame(snapshot)
    df.to_csv(path, index=False, encoding="utf-8")
    logger.info("Exported %d ingredient(s) to %s", len(df), path)
    return path
