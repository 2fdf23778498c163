"""Domain models for user profiles and daily tracking."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from fitnutri.domain.nutrition import ActivityLevel, DietType, Gender, Goal


class ConsumptionStatus(StrEnum):
    """How a recipe was consumed."""

    COOKED = "cooked"
    EATEN = "eaten"


@dataclass(frozen=True)
class ConsumedMeal:
    """A recipe consumption event with already scaled macros."""

    recipe_id: str
    recipe_name: str
    servings: float
    calories: int
    protein: int
    carbs: int
    fat: int
    consumed_at: datetime
    status: ConsumptionStatus


@dataclass(frozen=True)
class DailyLog:
    """Meals consumed on a single day plus running totals."""

    date: str
    consumed_meals: tuple[ConsumedMeal, ...] = ()
    total_calories: int = 0
    total_protein: int = 0
    total_carbs: int = 0
    total_fat: int = 0

    @staticmethod
    def empty(day: str) -> "DailyLog":
        return DailyLog(date=day)


@dataclass(frozen=True)
class UserProfile:
    """Onboarded user with derived energy needs and today's log."""

    id: str
    gender: Gender
    age: int
    weight: float
    height: float
    activity_level: ActivityLevel | str
    goals: Goal | str
    diet_types: tuple[DietType | str, ...]
    bmr: int
    tdee: int
    daily_log: DailyLog
    onboarding_complete: bool = True

    @property
    def primary_diet(self) -> DietType | str:
        """First selected diet, used for macro ratios."""
        return self.diet_types[0] if self.diet_types else DietType.BALANCED


@dataclass(frozen=True)
class OnboardingData:
    """Answers collected by the onboarding wizard."""

    gender: Gender
    age: int
    weight: float
    height: float
    activity_level: ActivityLevel | str
    goals: Goal | str
    diet_types: tuple[DietType | str, ...] = (DietType.BALANCED,)
