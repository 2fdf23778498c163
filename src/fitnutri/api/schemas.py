"""Pydantic models for API request payloads."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fitnutri.domain.nutrition import ActivityLevel, DietType, Gender, Goal
from fitnutri.domain.profiles import ConsumptionStatus
from fitnutri.domain.recipes import (
    IngredientCategory,
    MealCategory,
    RecipeStatus,
    RecipeTag,
)


class CamelModel(BaseModel):
    """Base model accepting camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OnboardingRequest(CamelModel):
    """Onboarding wizard answers."""

    gender: Gender
    age: int = Field(gt=0)
    weight: float = Field(gt=0)
    height: float = Field(gt=0)
    activity_level: ActivityLevel
    goals: Goal
    diet_types: list[DietType] = Field(default_factory=lambda: [DietType.BALANCED])


class ProfileUpdateRequest(CamelModel):
    """Editable profile fields; omitted fields are left unchanged."""

    gender: Gender | None = None
    age: int | None = Field(default=None, gt=0)
    weight: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    activity_level: ActivityLevel | None = None
    goals: Goal | None = None
    diet_types: list[DietType] | None = None


class ConsumedMealRequest(CamelModel):
    """A meal with macros already scaled to the eaten servings."""

    recipe_id: str
    recipe_name: str
    servings: float = Field(gt=0)
    calories: int
    protein: int
    carbs: int
    fat: int
    status: ConsumptionStatus


class ConsumeRecipeRequest(CamelModel):
    """Servings of a stored recipe to log."""

    servings: float = Field(default=1, gt=0)
    status: ConsumptionStatus = ConsumptionStatus.EATEN


class IngredientPayload(CamelModel):
    """Ingredient line of a recipe submission."""

    name: str
    amount: float
    unit: str = ""
    category: IngredientCategory = IngredientCategory.OTHER


class RecipeSubmissionRequest(CamelModel):
    """Recipe submission form."""

    title: str
    category: MealCategory
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    calories: float | None = None
    servings: int = Field(default=1, gt=0)
    image: str | None = None
    tags: list[RecipeTag] = Field(default_factory=list)
    diet_types: list[DietType] = Field(default_factory=list)
    ingredients: list[IngredientPayload] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    prep_time: int = Field(default=0, ge=0)
    cook_time: int = Field(default=0, ge=0)


class CommentRequest(CamelModel):
    """A new comment."""

    user_name: str
    text: str = Field(min_length=1)


class RatingRequest(CamelModel):
    """A star rating."""

    rating: float


class ReportRequest(CamelModel):
    """A problem report against a recipe."""

    reason: str
    details: str = ""


class ShoppingRecipeRequest(CamelModel):
    """Servings used to scale a recipe's ingredients."""

    servings: float = Field(default=1, gt=0)


class ShoppingToggleRequest(CamelModel):
    """Identifies a shopping item by name and originating recipe."""

    name: str
    recipe_id: str


class StatusUpdateRequest(CamelModel):
    """Moderation decision."""

    status: RecipeStatus
