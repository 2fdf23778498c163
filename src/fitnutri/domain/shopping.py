"""Domain models for the shopping list."""

from dataclasses import dataclass

from fitnutri.domain.recipes import IngredientCategory


@dataclass(frozen=True)
class ShoppingItem:
    """An ingredient to buy, tied to the recipe it came from."""

    name: str
    amount: float
    unit: str
    recipe_id: str
    recipe_name: str
    category: IngredientCategory | str = IngredientCategory.OTHER
    checked: bool = False
