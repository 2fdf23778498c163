"""Shopping list built from recipe ingredients."""

from dataclasses import dataclass, replace

from fitnutri.domain.recipes import IngredientCategory, Recipe
from fitnutri.domain.shopping import ShoppingItem
from fitnutri.domain.state import AppState
from fitnutri.services.nutrition import round_one_decimal
from fitnutri.services.persistence import StateRepository, persist_shopping_list


@dataclass
class ShoppingListService:
    """Insertion-ordered shopping list; identical ingredients are not merged."""

    state: AppState
    repository: StateRepository

    def get_shopping_list(self) -> list[ShoppingItem]:
        """Return the list in its underlying order."""
        return list(self.state.shopping_list)

    def add_to_shopping_list(self, items: list[ShoppingItem]) -> list[ShoppingItem]:
        """Append items verbatim."""
        return self._store([*self.state.shopping_list, *items])

    def remove_from_shopping_list(self, recipe_id: str) -> list[ShoppingItem]:
        """Remove every item that came from a recipe."""
        return self._store(
            [item for item in self.state.shopping_list if item.recipe_id != recipe_id]
        )

    def toggle_shopping_item(self, index: int) -> ShoppingItem | None:
        """Flip the checked flag of the item at ``index``.

        Indexes outside the list, including negative ones, change nothing.
        """
        if not 0 <= index < len(self.state.shopping_list):
            return None
        items = list(self.state.shopping_list)
        toggled = replace(items[index], checked=not items[index].checked)
        items[index] = toggled
        self._store(items)
        return toggled

    def clear_shopping_list(self) -> list[ShoppingItem]:
        """Empty the list."""
        return self._store([])

    def find_item_index(self, name: str, recipe_id: str) -> int | None:
        """Return the position of the first item matching name and recipe."""
        for index, item in enumerate(self.state.shopping_list):
            if item.name == name and item.recipe_id == recipe_id:
                return index
        return None

    def contains_recipe(self, recipe_id: str) -> bool:
        """Return True when any item came from the recipe."""
        return any(item.recipe_id == recipe_id for item in self.state.shopping_list)

    def toggle_recipe(self, recipe: Recipe, servings: float) -> list[ShoppingItem]:
        """Remove the recipe's items if present, otherwise add them."""
        if self.contains_recipe(recipe.id):
            return self.remove_from_shopping_list(recipe.id)
        return self.add_to_shopping_list(items_for_recipe(recipe, servings))

    def grouped_by_category(self) -> dict[str, list[ShoppingItem]]:
        """Group items by ingredient category in aisle order."""
        groups: dict[str, list[ShoppingItem]] = {}
        for item in self.state.shopping_list:
            category = item.category or IngredientCategory.OTHER
            groups.setdefault(str(category), []).append(item)
        ordered = {
            str(category): groups.pop(str(category))
            for category in IngredientCategory
            if str(category) in groups
        }
        ordered.update(groups)
        return ordered

    def progress(self) -> tuple[int, int]:
        """Return (checked, total) item counts."""
        items = self.state.shopping_list
        return sum(1 for item in items if item.checked), len(items)

    def _store(self, items: list[ShoppingItem]) -> list[ShoppingItem]:
        self.state.shopping_list = items
        persist_shopping_list(self.repository, items)
        return list(items)


def items_for_recipe(recipe: Recipe, servings: float) -> list[ShoppingItem]:
    """Build unchecked shopping items with amounts scaled to ``servings``."""
    multiplier = servings / recipe.servings
    return [
        ShoppingItem(
            name=ingredient.name,
            amount=round_one_decimal(ingredient.amount * multiplier),
            unit=ingredient.unit,
            category=ingredient.category,
            recipe_id=recipe.id,
            recipe_name=recipe.title,
            checked=False,
        )
        for ingredient in recipe.ingredients
    ]
