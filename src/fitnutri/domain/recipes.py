"""Domain models for community recipes."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from fitnutri.domain.nutrition import DietType


class MealCategory(StrEnum):
    """Meal time a recipe belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class RecipeTag(StrEnum):
    """Descriptive recipe tags used for filtering."""

    SWEET = "sweet"
    SAVORY = "savory"
    PASTRY = "pastry"
    SOUP = "soup"


class IngredientCategory(StrEnum):
    """Shopping aisle of an ingredient."""

    DAIRY = "dairy"
    VEGETABLES = "vegetables"
    MEAT = "meat"
    GRAINS = "grains"
    SPICES = "spices"
    OTHER = "other"


class RecipeStatus(StrEnum):
    """Moderation status of a submitted recipe."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReportStatus(StrEnum):
    """Review status of a recipe report."""

    PENDING = "pending"
    REVIEWED = "reviewed"


REPORT_REASONS = (
    "wrong-ingredients",
    "wrong-instructions",
    "wrong-macros",
    "inappropriate",
    "other",
)


@dataclass(frozen=True)
class Ingredient:
    """Recipe ingredient with amount and unit."""

    name: str
    amount: float
    unit: str
    category: IngredientCategory | str = IngredientCategory.OTHER


@dataclass(frozen=True)
class RecipeMacros:
    """Per-serving macros of a recipe."""

    protein: float
    carbs: float
    fat: float
    calories: float


@dataclass(frozen=True)
class Rating:
    """A single user's rating of a recipe."""

    user_id: str
    rating: float
    created_at: datetime


@dataclass(frozen=True)
class Comment:
    """A comment left on a recipe."""

    id: str
    user_id: str
    user_name: str
    text: str
    created_at: datetime


@dataclass(frozen=True)
class Recipe:
    """A recipe with moderation status and community data."""

    id: str
    title: str
    category: MealCategory | str
    macros: RecipeMacros
    servings: int
    author_id: str
    created_at: datetime
    image: str = "/placeholder.svg"
    tags: tuple[RecipeTag | str, ...] = ()
    diet_types: tuple[DietType | str, ...] = ()
    ingredients: tuple[Ingredient, ...] = ()
    instructions: tuple[str, ...] = ()
    prep_time: int = 0
    cook_time: int = 0
    status: RecipeStatus | str = RecipeStatus.PENDING
    ratings: tuple[Rating, ...] = ()
    comments: tuple[Comment, ...] = ()
    average_rating: float = 0.0


@dataclass(frozen=True)
class RecipeSubmission:
    """Raw recipe form input before validation."""

    title: str
    category: MealCategory | str
    protein: float
    carbs: float
    fat: float
    servings: int = 1
    calories: float | None = None
    image: str | None = None
    tags: tuple[RecipeTag | str, ...] = ()
    diet_types: tuple[DietType | str, ...] = ()
    ingredients: tuple[Ingredient, ...] = ()
    instructions: tuple[str, ...] = ()
    prep_time: int = 0
    cook_time: int = 0


@dataclass(frozen=True)
class RecipeReport:
    """A user report flagging a problem with a recipe."""

    id: str
    recipe_id: str
    user_id: str
    reason: str
    details: str
    created_at: datetime
    status: ReportStatus = ReportStatus.PENDING
