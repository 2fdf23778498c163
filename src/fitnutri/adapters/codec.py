"""JSON document mapping for persisted and served state.

Field names follow the client's camelCase data model.
"""

from datetime import datetime
from enum import StrEnum
from typing import TypeVar

from fitnutri.domain.nutrition import (
    ActivityLevel,
    DietType,
    Gender,
    Goal,
    Macros,
    NutritionTargets,
    ZoneBlocks,
)
from fitnutri.domain.profiles import (
    ConsumedMeal,
    ConsumptionStatus,
    DailyLog,
    UserProfile,
)
from fitnutri.domain.recipes import (
    Comment,
    Ingredient,
    IngredientCategory,
    MealCategory,
    Rating,
    Recipe,
    RecipeMacros,
    RecipeReport,
    RecipeStatus,
    RecipeTag,
)
from fitnutri.domain.shopping import ShoppingItem

E = TypeVar("E", bound=StrEnum)


def _enum_or_raw(enum_type: type[E], value: object) -> E | str:
    """Return the enum member, or the raw string for unknown values."""
    try:
        return enum_type(value)
    except ValueError:
        return str(value)


def _parse_datetime(value: object) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def daily_log_to_dict(log: DailyLog) -> dict[str, object]:
    return {
        "date": log.date,
        "consumedMeals": [
            {
                "recipeId": meal.recipe_id,
                "recipeName": meal.recipe_name,
                "servings": meal.servings,
                "calories": meal.calories,
                "protein": meal.protein,
                "carbs": meal.carbs,
                "fat": meal.fat,
                "consumedAt": meal.consumed_at.isoformat(),
                "status": str(meal.status),
            }
            for meal in log.consumed_meals
        ],
        "totalCalories": log.total_calories,
        "totalProtein": log.total_protein,
        "totalCarbs": log.total_carbs,
        "totalFat": log.total_fat,
    }


def daily_log_from_dict(payload: dict[str, object]) -> DailyLog:
    meals = tuple(
        ConsumedMeal(
            recipe_id=str(meal["recipeId"]),
            recipe_name=str(meal.get("recipeName", "")),
            servings=float(meal.get("servings", 1)),
            calories=int(meal.get("calories", 0)),
            protein=int(meal.get("protein", 0)),
            carbs=int(meal.get("carbs", 0)),
            fat=int(meal.get("fat", 0)),
            consumed_at=_parse_datetime(meal["consumedAt"]),
            status=ConsumptionStatus(meal.get("status", ConsumptionStatus.EATEN)),
        )
        for meal in payload.get("consumedMeals") or []
    )
    return DailyLog(
        date=str(payload.get("date", "")),
        consumed_meals=meals,
        total_calories=int(payload.get("totalCalories", 0)),
        total_protein=int(payload.get("totalProtein", 0)),
        total_carbs=int(payload.get("totalCarbs", 0)),
        total_fat=int(payload.get("totalFat", 0)),
    )


def profile_to_dict(profile: UserProfile) -> dict[str, object]:
    return {
        "id": profile.id,
        "gender": str(profile.gender),
        "age": profile.age,
        "weight": profile.weight,
        "height": profile.height,
        "activityLevel": str(profile.activity_level),
        "goals": str(profile.goals),
        "dietTypes": [str(diet) for diet in profile.diet_types],
        "bmr": profile.bmr,
        "tdee": profile.tdee,
        "onboardingComplete": profile.onboarding_complete,
        "dailyLog": daily_log_to_dict(profile.daily_log),
    }


def profile_from_dict(payload: dict[str, object]) -> UserProfile:
    """Parse a stored profile.

    Profiles saved before multiple diets were supported carry a single
    ``dietType`` and are migrated to ``dietTypes``. A missing log is
    returned undated so the next access rolls it over.
    """
    diet_types = payload.get("dietTypes")
    if not diet_types and payload.get("dietType"):
        diet_types = [payload["dietType"]]
    daily_log = payload.get("dailyLog")
    return UserProfile(
        id=str(payload["id"]),
        gender=_enum_or_raw(Gender, payload.get("gender")),
        age=int(payload.get("age", 0)),
        weight=float(payload.get("weight", 0)),
        height=float(payload.get("height", 0)),
        activity_level=_enum_or_raw(ActivityLevel, payload.get("activityLevel")),
        goals=_enum_or_raw(Goal, payload.get("goals")),
        diet_types=tuple(
            _enum_or_raw(DietType, diet)
            for diet in diet_types or [DietType.BALANCED]
        ),
        bmr=int(payload.get("bmr", 0)),
        tdee=int(payload.get("tdee", 0)),
        onboarding_complete=bool(payload.get("onboardingComplete", False)),
        daily_log=(
            daily_log_from_dict(daily_log)
            if isinstance(daily_log, dict)
            else DailyLog.empty("")
        ),
    )


def shopping_item_to_dict(item: ShoppingItem) -> dict[str, object]:
    return {
        "name": item.name,
        "amount": item.amount,
        "unit": item.unit,
        "category": str(item.category),
        "recipeId": item.recipe_id,
        "recipeName": item.recipe_name,
        "checked": item.checked,
    }


def shopping_item_from_dict(payload: dict[str, object]) -> ShoppingItem:
    return ShoppingItem(
        name=str(payload.get("name", "")),
        amount=float(payload.get("amount", 0)),
        unit=str(payload.get("unit", "")),
        category=_enum_or_raw(
            IngredientCategory, payload.get("category") or IngredientCategory.OTHER
        ),
        recipe_id=str(payload.get("recipeId", "")),
        recipe_name=str(payload.get("recipeName", "")),
        checked=bool(payload.get("checked", False)),
    )


def ingredient_to_dict(ingredient: Ingredient) -> dict[str, object]:
    return {
        "name": ingredient.name,
        "amount": ingredient.amount,
        "unit": ingredient.unit,
        "category": str(ingredient.category),
    }


def ingredient_from_dict(payload: dict[str, object]) -> Ingredient:
    return Ingredient(
        name=str(payload.get("name", "")),
        amount=float(payload.get("amount", 0)),
        unit=str(payload.get("unit", "")),
        category=_enum_or_raw(
            IngredientCategory, payload.get("category") or IngredientCategory.OTHER
        ),
    )


def comment_to_dict(comment: Comment) -> dict[str, object]:
    return {
        "id": comment.id,
        "userId": comment.user_id,
        "userName": comment.user_name,
        "text": comment.text,
        "createdAt": comment.created_at.isoformat(),
    }


def recipe_to_dict(recipe: Recipe) -> dict[str, object]:
    return {
        "id": recipe.id,
        "title": recipe.title,
        "image": recipe.image,
        "category": str(recipe.category),
        "tags": [str(tag) for tag in recipe.tags],
        "dietTypes": [str(diet) for diet in recipe.diet_types],
        "ingredients": [ingredient_to_dict(item) for item in recipe.ingredients],
        "instructions": list(recipe.instructions),
        "macros": {
            "protein": recipe.macros.protein,
            "carbs": recipe.macros.carbs,
            "fat": recipe.macros.fat,
            "calories": recipe.macros.calories,
        },
        "prepTime": recipe.prep_time,
        "cookTime": recipe.cook_time,
        "servings": recipe.servings,
        "authorId": recipe.author_id,
        "status": str(recipe.status),
        "createdAt": recipe.created_at.isoformat(),
        "ratings": [
            {
                "userId": rating.user_id,
                "rating": rating.rating,
                "createdAt": rating.created_at.isoformat(),
            }
            for rating in recipe.ratings
        ],
        "comments": [comment_to_dict(comment) for comment in recipe.comments],
        "averageRating": recipe.average_rating,
    }


def recipe_from_dict(payload: dict[str, object]) -> Recipe:
    """Parse a stored recipe; a non-positive serving count is rejected."""
    servings = int(payload.get("servings", 1))
    if servings <= 0:
        raise ValueError(f"Recipe {payload.get('id')} has invalid servings: {servings}")
    macros = payload.get("macros") or {}
    return Recipe(
        id=str(payload["id"]),
        title=str(payload.get("title", "")),
        image=str(payload.get("image") or "/placeholder.svg"),
        category=_enum_or_raw(MealCategory, payload.get("category")),
        tags=tuple(_enum_or_raw(RecipeTag, tag) for tag in payload.get("tags") or []),
        diet_types=tuple(
            _enum_or_raw(DietType, diet)
            for diet in payload.get("dietTypes") or []
        ),
        ingredients=tuple(
            ingredient_from_dict(item)
            for item in payload.get("ingredients") or []
        ),
        instructions=tuple(str(step) for step in payload.get("instructions") or []),
        macros=RecipeMacros(
            protein=float(macros.get("protein", 0)),
            carbs=float(macros.get("carbs", 0)),
            fat=float(macros.get("fat", 0)),
            calories=float(macros.get("calories", 0)),
        ),
        prep_time=int(payload.get("prepTime", 0)),
        cook_time=int(payload.get("cookTime", 0)),
        servings=servings,
        author_id=str(payload.get("authorId", "")),
        status=_enum_or_raw(
            RecipeStatus, payload.get("status") or RecipeStatus.PENDING
        ),
        created_at=_parse_datetime(payload["createdAt"]),
        ratings=tuple(
            Rating(
                user_id=str(rating["userId"]),
                rating=float(rating["rating"]),
                created_at=_parse_datetime(rating["createdAt"]),
            )
            for rating in payload.get("ratings") or []
        ),
        comments=tuple(
            Comment(
                id=str(comment["id"]),
                user_id=str(comment.get("userId", "")),
                user_name=str(comment.get("userName", "")),
                text=str(comment.get("text", "")),
                created_at=_parse_datetime(comment["createdAt"]),
            )
            for comment in payload.get("comments") or []
        ),
        average_rating=float(payload.get("averageRating", 0)),
    )


def report_to_dict(report: RecipeReport) -> dict[str, object]:
    return {
        "id": report.id,
        "recipeId": report.recipe_id,
        "userId": report.user_id,
        "reason": report.reason,
        "details": report.details,
        "createdAt": report.created_at.isoformat(),
        "status": str(report.status),
    }


def macros_to_dict(macros: Macros) -> dict[str, int]:
    return {"protein": macros.protein, "carbs": macros.carbs, "fat": macros.fat}


def zone_blocks_to_dict(blocks: ZoneBlocks) -> dict[str, float]:
    return {
        "proteinBlocks": blocks.protein_blocks,
        "carbBlocks": blocks.carb_blocks,
        "fatBlocks": blocks.fat_blocks,
    }


def targets_to_dict(targets: NutritionTargets) -> dict[str, object]:
    return {
        "bmr": targets.bmr,
        "tdee": targets.tdee,
        "targetCalories": targets.target_calories,
        "macros": macros_to_dict(targets.macros),
        "zoneBlocks": (
            zone_blocks_to_dict(targets.zone_blocks) if targets.zone_blocks else None
        ),
    }
