"""Energy and macro formulas.

Uses:
- Mifflin-St Jeor equation for Basal Metabolic Rate (BMR)
- Fixed activity multipliers for Total Daily Energy Expenditure (TDEE)
- Fixed per-goal calorie adjustments and per-diet macro splits

Unknown activity levels, goals and diets fall back to the sedentary
multiplier, a zero adjustment and the balanced split.
"""

import math

from fitnutri.domain.nutrition import (
    ActivityLevel,
    DietType,
    Gender,
    Goal,
    MacroRatio,
    Macros,
)

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.2

GOAL_CALORIE_ADJUSTMENTS: dict[str, int] = {
    Goal.LOSE: -500,
    Goal.MAINTAIN: 0,
    Goal.GAIN: 500,
}
DEFAULT_CALORIE_ADJUSTMENT = 0

BALANCED_RATIO = MacroRatio(protein=0.30, carbs=0.40, fat=0.30)

DIET_MACRO_RATIOS: dict[str, MacroRatio] = {
    DietType.BALANCED: BALANCED_RATIO,
    DietType.KETO: MacroRatio(protein=0.25, carbs=0.05, fat=0.70),
    DietType.HIGH_PROTEIN: MacroRatio(protein=0.40, carbs=0.35, fat=0.25),
    DietType.ZONE: MacroRatio(protein=0.30, carbs=0.40, fat=0.30),
    DietType.VEGAN: MacroRatio(protein=0.20, carbs=0.55, fat=0.25),
}

# Used by the remaining-macros query only; vegan differs from the table above.
REMAINING_MACRO_RATIOS: dict[str, MacroRatio] = {
    **DIET_MACRO_RATIOS,
    DietType.VEGAN: MacroRatio(protein=0.25, carbs=0.50, fat=0.25),
}

CALORIES_PER_GRAM = {
    "protein": 4,
    "carbs": 4,
    "fat": 9,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up.

    Infinities and NaN are returned unchanged.
    """
    if not math.isfinite(value):
        return value  # type: ignore[return-value]
    return math.floor(value + 0.5)


def round_one_decimal(value: float) -> float:
    """Round to one decimal place with halves going up."""
    scaled = value * 10 + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / 10


def calculate_bmr(
    gender: Gender | str, weight_kg: float, height_cm: float, age: float
) -> int:
    """Calculate Basal Metabolic Rate using the Mifflin-St Jeor equation.

    Male:   BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) + 5
    Female: BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) − 161
    """
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == Gender.MALE:
        bmr += 5
    else:
        bmr -= 161
    return round_half_up(bmr)


def calculate_tdee(bmr: float, activity_level: ActivityLevel | str | None) -> int:
    """Calculate Total Daily Energy Expenditure (BMR × activity multiplier)."""
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_MULTIPLIER)
    return round_half_up(bmr * multiplier)


def calculate_target_calories(tdee: int, goal: Goal | str | None) -> int:
    """Apply the goal's fixed calorie adjustment to TDEE."""
    return tdee + GOAL_CALORIE_ADJUSTMENTS.get(goal, DEFAULT_CALORIE_ADJUSTMENT)


def calculate_macros(
    target_calories: float, diet_type: DietType | str | None
) -> Macros:
    """Split target calories into macro grams for a diet type.

    Each macro is rounded independently, so the grams may not add back up
    to exactly ``target_calories``.
    """
    ratio = DIET_MACRO_RATIOS.get(diet_type, BALANCED_RATIO)
    return macros_for_ratio(target_calories, ratio)


def macros_for_ratio(target_calories: float, ratio: MacroRatio) -> Macros:
    """Convert calorie shares to grams using 4/4/9 kcal per gram."""
    return Macros(
        protein=round_half_up(
            target_calories * ratio.protein / CALORIES_PER_GRAM["protein"]
        ),
        carbs=round_half_up(target_calories * ratio.carbs / CALORIES_PER_GRAM["carbs"]),
        fat=round_half_up(target_calories * ratio.fat / CALORIES_PER_GRAM["fat"]),
    )
