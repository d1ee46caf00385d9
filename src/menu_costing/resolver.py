"""Unit cost of one (recipe, size) pair.

The total cost of a sellable size aggregates four sources:

1. Direct ingredient lines, converted from purchase to usage unit
2. Batch recipe lines, priced per yield unit by BatchRecipeResolver
3. Base template lines (cup, lid, sleeve) selected per size via RecipeSizeBase
4. Overhead, charged once when a base template is attached, or for the
   recipe's own prep time on the batch self-costing path

Three outcomes are kept distinct: a computed cost (possibly 0.00), UNRESOLVED
when a unit conversion is missing, and None when the pair has nothing to cost.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from menu_costing.batch import BatchRecipeResolver
from menu_costing.config import CostingConfig
from menu_costing.models import BaseTemplate, BatchRecipeRef, Recipe, SizeCostBreakdown
from menu_costing.overhead import OverheadAllocator
from menu_costing.snapshot import CostingSnapshot
from menu_costing.units import UNRESOLVED, Cost, Unresolved, ingredient_unit_cost

logger = logging.getLogger(__name__)

SizeCost = Union[float, Unresolved, None]


class SizeCostResolver:
    """Resolves the unit cost of recipe sizes against one snapshot.

    Example:
        >>> from menu_costing.snapshot import CostingSnapshot
        >>> from menu_costing.overhead import OverheadAllocator
        >>> snapshot = CostingSnapshot()
        >>> resolver = SizeCostResolver(snapshot, OverheadAllocator([]))
        >>> from menu_costing.models import Recipe
        >>> resolver.cost_for_size(Recipe("r1", "Latte", "Drinks"), "12oz") is None
        True

    """

    def __init__(
        self,
        snapshot: CostingSnapshot,
        overhead: OverheadAllocator,
        batches: Optional[BatchRecipeResolver] = None,
        config: Optional[CostingConfig] = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            snapshot: Entity snapshot to resolve against.
            overhead: Overhead allocator built from the same snapshot.
            batches: Batch recipe resolver. None builds one from snapshot and overhead.
            config: Costing configuration. None uses defaults.

        """
        self.snapshot = snapshot
        self.overhead = overhead
        self.config = config or CostingConfig()
        self.batches = batches or BatchRecipeResolver(snapshot, overhead, self.config)

    def template_for(self, recipe: Recipe, size_id: str) -> Optional[BaseTemplate]:
        """Base template attached to a recipe size, or None."""
        template_id = self.snapshot.template_id_for(recipe.id, size_id)
        if template_id is None:
            return None
        template = self.snapshot.template(template_id)
        if template is None:
            logger.debug("Base template %s for %s/%s not found", template_id, recipe.id, size_id)
        return template

    def has_costable_content(self, recipe: Recipe, size_id: str) -> bool:
        """True if the size has at least one direct line or base template line."""
        if recipe.lines_for_size(size_id):
            return True
        template = self.template_for(recipe, size_id)
        return template is not None and bool(template.lines_for_size(size_id))

    def breakdown_for_size(
        self,
        recipe: Recipe,
        size_id: str,
        skip_base_template: bool = False,
    ) -> Union[SizeCostBreakdown, Unresolved, None]:
        """Resolve the cost components of one recipe size.

        Args:
            recipe: Recipe to cost.
            size_id: Size to cost.
            skip_base_template: Ignore the base template and charge the recipe's
                own minutes_per_unit instead (batch recipe self-costing).

        Returns:
            SizeCostBreakdown, UNRESOLVED if any line's unit conversion cannot be
            resolved, or None if there is nothing to cost for this size.

        """
        direct_lines = recipe.lines_for_size(size_id)
        template = None if skip_base_template else self.template_for(recipe, size_id)
        template_lines = template.lines_for_size(size_id) if template is not None else []

        if not direct_lines and not template_lines:
            return None

        ingredient_cost = 0.0
        batch_cost = 0.0
        for line in direct_lines:
            if isinstance(line.ref, BatchRecipeRef):
                per_unit = self.batches.cost_per_yield_unit(line.ref.id)
                if per_unit is UNRESOLVED:
                    return UNRESOLVED
                batch_cost += line.quantity * per_unit
                continue

            per_unit = self._unit_cost(line.ref.id, recipe)
            if per_unit is UNRESOLVED:
                return UNRESOLVED
            ingredient_cost += line.quantity * per_unit

        base_cost = 0.0
        for base_line in template_lines:
            per_unit = self._unit_cost(base_line.ingredient_id, recipe)
            if per_unit is UNRESOLVED:
                return UNRESOLVED
            base_cost += base_line.quantity * per_unit

        overhead = 0.0
        if template is not None:
            overhead = self.overhead.allocate_for_product(recipe.minutes_per_unit)
        elif skip_base_template and recipe.minutes_per_unit is not None:
            overhead = self.overhead.allocate_for_product(recipe.minutes_per_unit)

        return SizeCostBreakdown(
            ingredient_cost=ingredient_cost,
            batch_cost=batch_cost,
            base_cost=base_cost,
            overhead=overhead,
            base_template_id=template.id if template is not None else None,
        )

    def cost_for_size(
        self,
        recipe: Recipe,
        size_id: str,
        skip_base_template: bool = False,
    ) -> SizeCost:
        """Total unit cost of one recipe size.

        Returns:
            Total cost, UNRESOLVED, or None when the size has no costable content.
            A size with no content never reports 0.00.

        """
        breakdown = self.breakdown_for_size(recipe, size_id, skip_base_template)
        if breakdown is None or breakdown is UNRESOLVED:
            return breakdown
        return breakdown.total

    def _unit_cost(self, ingredient_id: str, recipe: Recipe) -> Cost:
        ingredient = self.snapshot.ingredient(ingredient_id)
        if ingredient is None:
            logger.debug("Ingredient %s used by %s not found", ingredient_id, recipe.id)
            return 0.0
        unit_cost = ingredient_unit_cost(ingredient)
        if unit_cost is UNRESOLVED:
            logger.debug(
                "Cannot convert %s from %s to %s for recipe %s",
                ingredient.name,
                ingredient.purchase_unit,
                ingredient.effective_usage_unit,
                recipe.name,
            )
        return unit_cost
