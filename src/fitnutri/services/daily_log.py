"""Daily consumption log and remaining-budget queries."""

import logging
from dataclasses import dataclass, replace

from fitnutri.domain.nutrition import Macros
from fitnutri.domain.profiles import (
    ConsumedMeal,
    ConsumptionStatus,
    DailyLog,
    UserProfile,
)
from fitnutri.domain.recipes import Recipe
from fitnutri.domain.state import AppState
from fitnutri.services.clock import Clock
from fitnutri.services.nutrition import (
    BALANCED_RATIO,
    REMAINING_MACRO_RATIOS,
    calculate_target_calories,
    macros_for_ratio,
)
from fitnutri.services.persistence import StateRepository, persist_profile
from fitnutri.services.recipes import scale_calories, scale_macros

_logger = logging.getLogger(__name__)


def roll_over_if_stale(
    state: AppState, repository: StateRepository, clock: Clock
) -> UserProfile | None:
    """Replace a log dated before today with an empty one.

    Runs on access only; a profile that is never touched keeps its stale log.
    The discarded log is not archived.
    """
    profile = state.profile
    if profile is None:
        return None
    today = clock.today()
    if profile.daily_log.date == today:
        return profile
    _logger.info(
        "Daily log rollover: profile=%s from=%s to=%s",
        profile.id,
        profile.daily_log.date,
        today,
    )
    updated = replace(profile, daily_log=DailyLog.empty(today))
    state.profile = updated
    persist_profile(repository, updated)
    return updated


@dataclass
class DailyLogService:
    """Tracks today's consumed meals against the profile's targets."""

    state: AppState
    repository: StateRepository
    clock: Clock

    def ensure_current_day(self) -> UserProfile | None:
        """Run the day rollover check and return the current profile."""
        return roll_over_if_stale(self.state, self.repository, self.clock)

    def mark_meal_consumed(  # noqa: PLR0913
        self,
        *,
        recipe_id: str,
        recipe_name: str,
        servings: float,
        calories: int,
        protein: int,
        carbs: int,
        fat: int,
        status: ConsumptionStatus | str,
    ) -> DailyLog | None:
        """Append a consumed meal and add its macros to the running totals.

        Macros must already be scaled to ``servings``. Logging the same recipe
        twice appends twice.
        """
        profile = self.ensure_current_day()
        if profile is None:
            return None
        meal = ConsumedMeal(
            recipe_id=recipe_id,
            recipe_name=recipe_name,
            servings=servings,
            calories=calories,
            protein=protein,
            carbs=carbs,
            fat=fat,
            consumed_at=self.clock.now(),
            status=ConsumptionStatus(status),
        )
        log = _append_meal(profile.daily_log, meal)
        self._store(replace(profile, daily_log=log))
        return log

    def consume_recipe(
        self,
        recipe: Recipe,
        servings: float,
        status: ConsumptionStatus | str,
    ) -> DailyLog | None:
        """Log a recipe with its macros scaled to ``servings``."""
        macros = scale_macros(recipe, servings)
        return self.mark_meal_consumed(
            recipe_id=recipe.id,
            recipe_name=recipe.title,
            servings=servings,
            calories=scale_calories(recipe, servings),
            protein=macros.protein,
            carbs=macros.carbs,
            fat=macros.fat,
            status=status,
        )

    def get_daily_log(self) -> DailyLog:
        """Return today's log, or a fresh empty one when there is no profile."""
        profile = self.ensure_current_day()
        if profile is None:
            return DailyLog.empty(self.clock.today())
        return profile.daily_log

    def has_consumed_today(self, recipe_id: str) -> bool:
        """Return True when the recipe already appears in today's log."""
        return any(
            meal.recipe_id == recipe_id for meal in self.get_daily_log().consumed_meals
        )

    def get_remaining_calories(self) -> int:
        """Return target calories minus consumed calories, floored at zero."""
        profile = self.ensure_current_day()
        if profile is None:
            return 0
        target = calculate_target_calories(profile.tdee, profile.goals)
        return max(0, target - profile.daily_log.total_calories)

    def get_remaining_macros(self) -> Macros:
        """Return per-macro grams left for today, floored at zero."""
        profile = self.ensure_current_day()
        if profile is None:
            return Macros(protein=0, carbs=0, fat=0)
        target_calories = calculate_target_calories(profile.tdee, profile.goals)
        ratio = REMAINING_MACRO_RATIOS.get(profile.primary_diet, BALANCED_RATIO)
        target = macros_for_ratio(target_calories, ratio)
        log = profile.daily_log
        return Macros(
            protein=max(0, target.protein - log.total_protein),
            carbs=max(0, target.carbs - log.total_carbs),
            fat=max(0, target.fat - log.total_fat),
        )

    def reset_daily_log(self) -> DailyLog | None:
        """Discard every meal logged today."""
        profile = self.state.profile
        if profile is None:
            return None
        log = DailyLog.empty(self.clock.today())
        self._store(replace(profile, daily_log=log))
        _logger.info("Daily log reset: profile=%s", profile.id)
        return log

    def _store(self, profile: UserProfile) -> None:
        self.state.profile = profile
        persist_profile(self.repository, profile)


def _append_meal(log: DailyLog, meal: ConsumedMeal) -> DailyLog:
    return replace(
        log,
        consumed_meals=(*log.consumed_meals, meal),
        total_calories=log.total_calories + meal.calories,
        total_protein=log.total_protein + meal.protein,
        total_carbs=log.total_carbs + meal.carbs,
        total_fat=log.total_fat + meal.fat,
    )
