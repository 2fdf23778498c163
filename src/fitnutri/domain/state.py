"""Session-wide application state."""

from dataclasses import dataclass, field

from fitnutri.domain.profiles import UserProfile
from fitnutri.domain.recipes import Recipe, RecipeReport
from fitnutri.domain.shopping import ShoppingItem


@dataclass
class AppState:
    """Mutable holder of the current snapshots for one session."""

    profile: UserProfile | None = None
    recipes: list[Recipe] = field(default_factory=list)
    shopping_list: list[ShoppingItem] = field(default_factory=list)
    reports: list[RecipeReport] = field(default_factory=list)
