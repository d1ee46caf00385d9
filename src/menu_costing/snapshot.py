"""Read-only entity snapshot for one costing pass.

The data-access layer supplies every collection the engine needs at once.
CostingSnapshot bundles them, indexes them by id, and answers the lookups
the resolvers perform. It is never mutated: the engine only reads it.

Snapshots can be built directly from model objects or from the JSON-shaped
records the data-access layer returns (see CostingSnapshot.from_dict).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from menu_costing.exceptions import DataQualityError
from menu_costing.models import (
    BaseTemplate,
    BaseTemplateLine,
    BatchRecipeRef,
    Frequency,
    Ingredient,
    IngredientRef,
    IngredientType,
    OverheadItem,
    OverheadSettings,
    ProductSize,
    Recipe,
    RecipeSizeBase,
    RecipeSizeLine,
    SizePricing,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CostingSnapshot:
    """All entity collections for one resolution pass.

    Attributes:
        ingredients: Purchasable ingredients.
        recipes: Recipes with their nested size lines (batch recipes included).
        sizes: Product and batch sizes, in declared order.
        base_templates: Base templates with their nested lines.
        recipe_size_bases: Per-size template selections.
        overhead_items: Recurring overhead costs.
        overhead_settings: Store hours and global minutes default.
        pricing: Configured sale prices.
    """

    ingredients: Tuple[Ingredient, ...] = ()
    recipes: Tuple[Recipe, ...] = ()
    sizes: Tuple[ProductSize, ...] = ()
    base_templates: Tuple[BaseTemplate, ...] = ()
    recipe_size_bases: Tuple[RecipeSizeBase, ...] = ()
    overhead_items: Tuple[OverheadItem, ...] = ()
    overhead_settings: OverheadSettings = OverheadSettings()
    pricing: Tuple[SizePricing, ...] = ()

    # Indexes (built lazily, first entry wins on duplicate ids)

    @cached_property
    def _ingredients_by_id(self) -> Dict[str, Ingredient]:
        return _index(self.ingredients, lambda i: i.id)

    @cached_property
    def _recipes_by_id(self) -> Dict[str, Recipe]:
        return _index(self.recipes, lambda r: r.id)

    @cached_property
    def _sizes_by_id(self) -> Dict[str, ProductSize]:
        return _index(self.sizes, lambda s: s.id)

    @cached_property
    def _templates_by_id(self) -> Dict[str, BaseTemplate]:
        return _index(self.base_templates, lambda t: t.id)

    @cached_property
    def _template_ids(self) -> Dict[Tuple[str, str], str]:
        return _index(self.recipe_size_bases, lambda b: (b.recipe_id, b.size_id), lambda b: b.base_template_id)

    @cached_property
    def _prices(self) -> Dict[Tuple[str, str], float]:
        return _index(self.pricing, lambda p: (p.recipe_id, p.size_id), lambda p: p.sale_price)

    def ingredient(self, ingredient_id: str) -> Optional[Ingredient]:
        return self._ingredients_by_id.get(ingredient_id)

    def recipe(self, recipe_id: str) -> Optional[Recipe]:
        return self._recipes_by_id.get(recipe_id)

    def size(self, size_id: str) -> Optional[ProductSize]:
        return self._sizes_by_id.get(size_id)

    def template(self, template_id: str) -> Optional[BaseTemplate]:
        return self._templates_by_id.get(template_id)

    def template_id_for(self, recipe_id: str, size_id: str) -> Optional[str]:
        """Base template selected for a recipe size, or None when there is no mapping."""
        return self._template_ids.get((recipe_id, size_id))

    def sale_price(self, recipe_id: str, size_id: str) -> float:
        """Configured sale price, 0 when the pair is not priced."""
        return float(self._prices.get((recipe_id, size_id)) or 0.0)

    @cached_property
    def sizes_in_order(self) -> List[ProductSize]:
        """Sizes sorted by display_order, ties keeping snapshot order."""
        return sorted(self.sizes, key=lambda s: s.display_order)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> CostingSnapshot:
        """Build a snapshot from JSON-shaped records.

        Accepts the field names used by the model as well as the column names
        of the data store (cost/quantity/unit for ingredients, size_value and
        product_type for sizes, is_bulk_recipe and minutes_per_drink for
        recipes, syrup_recipe_id for lines that reference a batch recipe).

        Args:
            payload: Mapping with optional keys ingredients, recipes, sizes,
                base_templates, recipe_size_bases, overhead_items,
                overhead_settings, pricing.

        Returns:
            CostingSnapshot instance.

        Raises:
            DataQualityError: If a record is missing a required field or carries
                an unknown ingredient type or overhead frequency.

        Examples:
            >>> snap = CostingSnapshot.from_dict({"sizes": [{"id": "s1", "name": "12oz"}]})
            >>> snap.size("s1").name
            '12oz'

        """
        try:
            snapshot = cls(
                ingredients=tuple(_ingredient(r) for r in payload.get("ingredients") or []),
                recipes=tuple(_recipe(r) for r in payload.get("recipes") or []),
                sizes=tuple(_size(r) for r in payload.get("sizes") or payload.get("product_sizes") or []),
                base_templates=tuple(_template(r) for r in payload.get("base_templates") or []),
                recipe_size_bases=tuple(
                    RecipeSizeBase(
                        recipe_id=str(r["recipe_id"]),
                        size_id=str(r["size_id"]),
                        base_template_id=str(r["base_template_id"]),
                    )
                    for r in payload.get("recipe_size_bases") or []
                    if r.get("base_template_id")
                ),
                overhead_items=tuple(_overhead_item(r) for r in payload.get("overhead_items") or []),
                overhead_settings=_settings(payload.get("overhead_settings") or {}),
                pricing=tuple(
                    SizePricing(
                        recipe_id=str(r["recipe_id"]),
                        size_id=str(r["size_id"]),
                        sale_price=_number(r.get("sale_price")),
                    )
                    for r in payload.get("pricing") or []
                ),
            )
        except KeyError as e:
            raise DataQualityError(f"Missing required field {e} in snapshot record") from e
        except ValueError as e:
            raise DataQualityError(str(e)) from e

        logger.debug(
            "Loaded snapshot: %d ingredients, %d recipes, %d sizes, %d templates",
            len(snapshot.ingredients),
            len(snapshot.recipes),
            len(snapshot.sizes),
            len(snapshot.base_templates),
        )
        return snapshot


def load_snapshot(path: str | Path) -> CostingSnapshot:
    """Load a snapshot from a JSON file.

    Args:
        path: Path to a JSON document in the CostingSnapshot.from_dict shape.

    Returns:
        CostingSnapshot instance.

    Raises:
        FileNotFoundError: If the file does not exist.
        DataQualityError: If the document is not valid JSON or has malformed records.

    """
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DataQualityError(f"Snapshot file {path} is not valid JSON: {e}") from e

    return CostingSnapshot.from_dict(data)


# ============================================================================
# Record parsing
# ============================================================================


def _index(items, key, value=None) -> dict:
    index: dict = {}
    for item in items:
        index.setdefault(key(item), value(item) if value else item)
    return index


def _pick(record: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return default


def _number(value: Any, default: float = 0.0) -> float:
    """Coerce a numeric field that may arrive as a string ("3.50")."""
    if value is None or value == "":
        return default
    return float(value)


def _optional_number(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _ingredient(record: Mapping[str, Any]) -> Ingredient:
    raw_type = _pick(record, "type", "ingredient_type", default="FOH")
    return Ingredient(
        id=str(record["id"]),
        name=str(record["name"]),
        category=str(_pick(record, "category", "category_name", default="")),
        type=IngredientType.parse(str(raw_type)),
        purchase_cost=_number(_pick(record, "purchase_cost", "cost")),
        purchase_quantity=_number(_pick(record, "purchase_quantity", "quantity")),
        purchase_unit=str(_pick(record, "purchase_unit", "unit", default="")),
        usage_unit=_pick(record, "usage_unit") or None,
        vendor=_pick(record, "vendor"),
        updated_at=_pick(record, "updated_at"),
    )


def _line(record: Mapping[str, Any], recipe_id: str) -> RecipeSizeLine:
    batch_id = _pick(record, "batch_recipe_id", "syrup_recipe_id")
    ingredient_id = _pick(record, "ingredient_id")
    if batch_id is not None:
        ref = BatchRecipeRef(str(batch_id))
    elif ingredient_id is not None:
        ref = IngredientRef(str(ingredient_id))
    else:
        raise ValueError(f"Recipe line of '{recipe_id}' references neither an ingredient nor a batch recipe")
    return RecipeSizeLine(
        recipe_id=recipe_id,
        size_id=str(record["size_id"]),
        ref=ref,
        quantity=_number(record.get("quantity")),
        unit=record.get("unit"),
    )


def _recipe(record: Mapping[str, Any]) -> Recipe:
    recipe_id = str(record["id"])
    lines = _pick(record, "lines", "recipe_ingredients", default=[])
    return Recipe(
        id=recipe_id,
        name=str(record["name"]),
        category=str(_pick(record, "category", "category_name", default="")),
        is_batch=bool(_pick(record, "is_batch", "is_bulk_recipe", default=False)),
        minutes_per_unit=_optional_number(_pick(record, "minutes_per_unit", "minutes_per_drink")),
        default_base_template_id=_pick(record, "default_base_template_id", "base_template_id"),
        lines=tuple(_line(line, recipe_id) for line in lines),
    )


def _size(record: Mapping[str, Any]) -> ProductSize:
    return ProductSize(
        id=str(record["id"]),
        name=str(record["name"]),
        size_value=_number(_pick(record, "size_value", "size_oz")),
        product_type=str(_pick(record, "product_type", "drink_type", default="drink")),
        display_order=int(_pick(record, "display_order", default=0)),
        is_batch=bool(_pick(record, "is_batch", default=False)),
    )


def _template(record: Mapping[str, Any]) -> BaseTemplate:
    template_id = str(record["id"])
    lines = _pick(record, "lines", "ingredients", default=[])
    return BaseTemplate(
        id=template_id,
        name=str(record["name"]),
        category=str(_pick(record, "category", "drink_type", default="")),
        lines=tuple(
            BaseTemplateLine(
                template_id=template_id,
                size_id=str(line["size_id"]),
                ingredient_id=str(line["ingredient_id"]),
                quantity=_number(line.get("quantity")),
                unit=line.get("unit"),
            )
            for line in lines
        ),
    )


def _overhead_item(record: Mapping[str, Any]) -> OverheadItem:
    frequency = str(record.get("frequency") or "monthly").strip().lower()
    try:
        parsed = Frequency(frequency)
    except ValueError:
        raise ValueError(
            f"Unknown overhead frequency '{frequency}' for item '{record.get('name')}'"
        ) from None
    return OverheadItem(
        id=str(record["id"]),
        name=str(record["name"]),
        amount=_number(record.get("amount")),
        frequency=parsed,
    )


def _settings(record: Mapping[str, Any]) -> OverheadSettings:
    return OverheadSettings(
        operating_days_per_week=int(_pick(record, "operating_days_per_week", default=7)),
        hours_open_per_day=int(_pick(record, "hours_open_per_day", default=8)),
        default_minutes_per_unit=_optional_number(
            _pick(record, "default_minutes_per_unit", "minutes_per_drink")
        ),
    )
