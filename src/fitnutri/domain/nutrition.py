"""Nutrition domain models and enumerations."""

from dataclasses import dataclass
from enum import StrEnum


class Gender(StrEnum):
    """Biological sex used by the BMR formula."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    """Activity levels offered during onboarding."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "veryActive"


class Goal(StrEnum):
    """Weight goals with a fixed calorie adjustment."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


class DietType(StrEnum):
    """Diet labels shared by profiles and recipes."""

    BALANCED = "balanced"
    ZONE = "zone"
    KETO = "keto"
    VEGAN = "vegan"
    HIGH_PROTEIN = "highProtein"
    GLUTEN_FREE = "glutenFree"


@dataclass(frozen=True)
class MacroRatio:
    """Share of daily calories assigned to each macro."""

    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class Macros:
    """Macro amounts in grams."""

    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class ZoneBlocks:
    """Macro amounts expressed as Zone diet blocks."""

    protein_blocks: float
    carb_blocks: float
    fat_blocks: float


@dataclass(frozen=True)
class NutritionTargets:
    """Energy and macro targets derived from a profile."""

    bmr: int
    tdee: int
    target_calories: int
    macros: Macros
    zone_blocks: ZoneBlocks | None = None
