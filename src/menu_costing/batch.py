"""Per-yield-unit costing of batch recipes.

A batch recipe is a bulk preparation (a house syrup, a cold-brew
concentrate) made at a batch size such as "Bulk 64oz" and then consumed by
other recipes by the ounce. Its cost per yield unit is the batch's
ingredient cost plus the overhead of the time spent making it, divided by
the batch size's declared yield.

Resolution is single-level: a batch recipe line that references another
batch recipe contributes nothing here.
"""

from __future__ import annotations

import logging
from typing import Optional

from menu_costing.config import CostingConfig
from menu_costing.models import BatchRecipeRef, ProductSize, Recipe
from menu_costing.overhead import OverheadAllocator
from menu_costing.snapshot import CostingSnapshot
from menu_costing.units import UNRESOLVED, Cost, ingredient_unit_cost

logger = logging.getLogger(__name__)


class BatchRecipeResolver:
    """Prices batch recipes per unit of their own yield."""

    def __init__(
        self,
        snapshot: CostingSnapshot,
        overhead: OverheadAllocator,
        config: Optional[CostingConfig] = None,
    ) -> None:
        self.snapshot = snapshot
        self.overhead = overhead
        self.config = config or CostingConfig()

    def batch_size_for(self, recipe: Recipe) -> Optional[ProductSize]:
        """Return the first batch size, in declared order, that has lines for the recipe."""
        sized = {line.size_id for line in recipe.lines}
        for size in self.snapshot.sizes_in_order:
            if size.id in sized and size.is_batch_size(self.config.batch_size_marker):
                return size
        return None

    def cost_per_yield_unit(self, batch_recipe_id: str) -> Cost:
        """Cost of one yield unit (e.g. one oz) of a batch recipe.

        Args:
            batch_recipe_id: Id of the batch recipe.

        Returns:
            (ingredient cost at the batch size + overhead for minutes_per_unit) / yield.
            0 when the recipe is missing, not a batch recipe, has no batch size,
            or its yield is not positive. UNRESOLVED when an ingredient's unit
            conversion cannot be resolved.

        """
        recipe = self.snapshot.recipe(batch_recipe_id)
        if recipe is None or not recipe.is_batch:
            logger.debug("Batch recipe %s not found or not flagged as batch", batch_recipe_id)
            return 0.0

        batch_size = self.batch_size_for(recipe)
        batch_yield = batch_size.size_value if batch_size is not None else 0.0
        if batch_yield <= 0:
            logger.debug("Batch recipe %s has no batch size with a positive yield", recipe.id)
            return 0.0

        total = 0.0
        for line in recipe.lines_for_size(batch_size.id):
            if isinstance(line.ref, BatchRecipeRef):
                logger.debug("Nested batch recipe %s in %s is not resolved", line.ref.id, recipe.id)
                continue
            ingredient = self.snapshot.ingredient(line.ref.id)
            if ingredient is None:
                logger.debug("Ingredient %s of batch %s not found", line.ref.id, recipe.id)
                continue
            unit_cost = ingredient_unit_cost(ingredient)
            if unit_cost is UNRESOLVED:
                logger.debug(
                    "Cannot convert %s from %s to %s in batch recipe %s",
                    ingredient.name,
                    ingredient.purchase_unit,
                    ingredient.effective_usage_unit,
                    recipe.name,
                )
                return UNRESOLVED
            total += line.quantity * unit_cost

        if recipe.minutes_per_unit is not None:
            total += self.overhead.allocate_for_product(recipe.minutes_per_unit)

        return total / batch_yield
