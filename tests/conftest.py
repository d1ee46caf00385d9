"""Shared fixtures: a small café snapshot.

Overhead is set up so that cost per minute is exactly $0.10:
7 days x 8 hours x 4.33 weeks = 14,548.8 open minutes per month, and a
single monthly item of $1,454.88.

Resolved unit costs:
    espresso  $10.00 / 1 lb  -> $0.625 / oz
    milk      $4.00  / 1 gal -> $0.03125 / oz
    sugar     $2.00  / 1 lb  -> $2.00 / lb
    cup       $10.00 / 100   -> $0.10 each
    lid       $5.00  / 100   -> $0.05 each
    vanilla   each -> oz     -> UNRESOLVED
"""

import pytest

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
from menu_costing.snapshot import CostingSnapshot


def ing_line(recipe_id: str, size_id: str, ingredient_id: str, quantity: float) -> RecipeSizeLine:
    return RecipeSizeLine(recipe_id, size_id, IngredientRef(ingredient_id), quantity)


def batch_line(recipe_id: str, size_id: str, batch_id: str, quantity: float) -> RecipeSizeLine:
    return RecipeSizeLine(recipe_id, size_id, BatchRecipeRef(batch_id), quantity)


@pytest.fixture
def ingredients() -> tuple:
    return (
        Ingredient("espresso", "Espresso Beans", "Coffee", IngredientType.FOH, 10.0, 1, "lb", "oz"),
        Ingredient("milk", "Whole Milk", "Dairy", IngredientType.FOH, 4.0, 1, "gal", "oz"),
        Ingredient("sugar", "Cane Sugar", "Dry Goods", IngredientType.BOH, 2.0, 1, "lb"),
        Ingredient("cup12", "12oz Hot Cup", "Cups", IngredientType.DISPOSABLE, 10.0, 100, "each"),
        Ingredient("lid", "Hot Lid", "Cups", IngredientType.DISPOSABLE, 5.0, 100, "each"),
        Ingredient("vanilla", "Vanilla Bean", "Flavor", IngredientType.BOH, 3.0, 1, "each", "oz"),
        Ingredient("flour", "Flour", "Dry Goods", IngredientType.BOH, 20.0, 50, "lb", "oz"),
    )


@pytest.fixture
def sizes() -> tuple:
    return (
        ProductSize("s12", "12oz", 12, "drink", 1),
        ProductSize("s16", "16oz", 16, "drink", 2),
        ProductSize("bulk32", "Bulk 32oz", 32, "drink", 10),
        ProductSize("slice", "Slice", 1, "food", 20),
    )


@pytest.fixture
def syrup() -> Recipe:
    return Recipe(
        "syrup",
        "Simple Syrup",
        "House-Made",
        is_batch=True,
        minutes_per_unit=2,
        lines=(ing_line("syrup", "bulk32", "sugar", 1),),
    )


@pytest.fixture
def latte() -> Recipe:
    return Recipe(
        "latte",
        "Latte",
        "Drinks",
        lines=(
            ing_line("latte", "s12", "espresso", 2),
            ing_line("latte", "s12", "milk", 8),
            batch_line("latte", "s12", "syrup", 1.5),
            ing_line("latte", "s16", "espresso", 2),
            ing_line("latte", "s16", "milk", 12),
        ),
    )


@pytest.fixture
def recipes(syrup: Recipe, latte: Recipe) -> tuple:
    vanilla_latte = Recipe(
        "vanilla-latte",
        "Vanilla Latte",
        "Drinks",
        lines=(
            ing_line("vanilla-latte", "s12", "espresso", 2),
            ing_line("vanilla-latte", "s12", "vanilla", 1),
        ),
    )
    tea = Recipe("tea", "Hot Tea", "Drinks")
    mocha = Recipe("mocha", "Mocha", "Drinks", lines=(ing_line("mocha", "s12", "espresso", 2),))
    muffin = Recipe(
        "muffin",
        "Muffin",
        "Food Items",
        minutes_per_unit=3,
        lines=(ing_line("muffin", "slice", "flour", 4),),
    )
    return (syrup, latte, vanilla_latte, tea, mocha, muffin)


@pytest.fixture
def hot_cup() -> BaseTemplate:
    return BaseTemplate(
        "hot",
        "Hot Cup",
        "drink",
        lines=(
            BaseTemplateLine("hot", "s12", "cup12", 1),
            BaseTemplateLine("hot", "s12", "lid", 1),
        ),
    )


@pytest.fixture
def snapshot(ingredients, sizes, recipes, hot_cup) -> CostingSnapshot:
    return CostingSnapshot(
        ingredients=ingredients,
        recipes=recipes,
        sizes=sizes,
        base_templates=(hot_cup,),
        recipe_size_bases=(RecipeSizeBase("latte", "s12", "hot"),),
        overhead_items=(OverheadItem("rent", "Rent", 1454.88, Frequency.MONTHLY),),
        overhead_settings=OverheadSettings(7, 8, default_minutes_per_unit=1.5),
        pricing=(
            SizePricing("latte", "s12", 4.50),
            SizePricing("latte", "s16", 5.00),
            SizePricing("vanilla-latte", "s12", 5.00),
            SizePricing("tea", "s12", 4.00),
            SizePricing("muffin", "slice", 3.00),
        ),
    )
