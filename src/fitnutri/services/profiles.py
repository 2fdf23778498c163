"""Onboarding and profile management."""

import logging
from dataclasses import dataclass, replace
from uuid import uuid4

from fitnutri.domain.errors import ProfileValidationError
from fitnutri.domain.nutrition import DietType, NutritionTargets
from fitnutri.domain.profiles import DailyLog, OnboardingData, UserProfile
from fitnutri.domain.state import AppState
from fitnutri.services.clock import Clock
from fitnutri.services.daily_log import roll_over_if_stale
from fitnutri.services.nutrition import (
    calculate_bmr,
    calculate_macros,
    calculate_target_calories,
    calculate_tdee,
)
from fitnutri.services.persistence import StateRepository, persist_profile
from fitnutri.services.zone import calculate_zone_blocks

_logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {"gender", "age", "weight", "height", "activity_level", "goals", "diet_types"}
)


@dataclass
class ProfileService:
    """Application service for the signed-in user's profile."""

    state: AppState
    repository: StateRepository
    clock: Clock

    def complete_onboarding(self, data: OnboardingData) -> UserProfile:
        """Create the profile from onboarding answers.

        BMR and TDEE are computed here once and are not refreshed by later
        edits.
        """
        if not data.diet_types:
            raise ProfileValidationError("At least one diet type is required")
        bmr = calculate_bmr(data.gender, data.weight, data.height, data.age)
        tdee = calculate_tdee(bmr, data.activity_level)
        profile = UserProfile(
            id=str(uuid4()),
            gender=data.gender,
            age=data.age,
            weight=data.weight,
            height=data.height,
            activity_level=data.activity_level,
            goals=data.goals,
            diet_types=tuple(data.diet_types),
            bmr=bmr,
            tdee=tdee,
            daily_log=DailyLog.empty(self.clock.today()),
            onboarding_complete=True,
        )
        _logger.info("Onboarding complete: profile=%s tdee=%s", profile.id, tdee)
        self._store(profile)
        return profile

    def get_profile(self) -> UserProfile | None:
        """Return the current profile after the day rollover check."""
        return roll_over_if_stale(self.state, self.repository, self.clock)

    def set_profile(self, profile: UserProfile | None) -> UserProfile | None:
        """Replace the profile; None signs the user out."""
        self._store(profile)
        return self.get_profile()

    def update_profile(self, **changes: object) -> UserProfile | None:
        """Edit profile fields without recomputing BMR or TDEE."""
        profile = self.get_profile()
        if profile is None:
            return None
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ProfileValidationError(
                f"Fields cannot be edited: {', '.join(sorted(unknown))}"
            )
        if "diet_types" in changes:
            diet_types = tuple(changes["diet_types"] or ())
            if not diet_types:
                raise ProfileValidationError("At least one diet type is required")
            changes["diet_types"] = diet_types
        updated = replace(profile, **changes)  # type: ignore[arg-type]
        self._store(updated)
        return updated

    def add_diet_type(self, diet_type: DietType | str) -> UserProfile | None:
        """Add a diet type unless it is already selected."""
        profile = self.get_profile()
        if profile is None:
            return None
        if diet_type in profile.diet_types:
            return profile
        updated = replace(profile, diet_types=(*profile.diet_types, diet_type))
        self._store(updated)
        return updated

    def remove_diet_type(self, diet_type: DietType | str) -> bool:
        """Remove a diet type; the last remaining one is never removed."""
        profile = self.get_profile()
        if profile is None or diet_type not in profile.diet_types:
            return False
        if len(profile.diet_types) == 1:
            return False
        remaining = tuple(diet for diet in profile.diet_types if diet != diet_type)
        self._store(replace(profile, diet_types=remaining))
        return True

    def get_targets(self) -> NutritionTargets | None:
        """Return energy and macro targets for the profile."""
        profile = self.get_profile()
        if profile is None:
            return None
        target_calories = calculate_target_calories(profile.tdee, profile.goals)
        macros = calculate_macros(target_calories, profile.primary_diet)
        zone_blocks = (
            calculate_zone_blocks(macros)
            if DietType.ZONE in profile.diet_types
            else None
        )
        return NutritionTargets(
            bmr=profile.bmr,
            tdee=profile.tdee,
            target_calories=target_calories,
            macros=macros,
            zone_blocks=zone_blocks,
        )

    def _store(self, profile: UserProfile | None) -> None:
        self.state.profile = profile
        persist_profile(self.repository, profile)
