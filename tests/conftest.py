"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from fitnutri.config import Settings
from fitnutri.containers import AppContainer, build_container
from fitnutri.domain.nutrition import ActivityLevel, DietType, Gender, Goal
from fitnutri.domain.profiles import DailyLog, UserProfile
from fitnutri.domain.recipes import (
    Ingredient,
    IngredientCategory,
    MealCategory,
    Recipe,
    RecipeMacros,
    RecipeStatus,
    RecipeTag,
)
from fitnutri.domain.shopping import ShoppingItem
from fitnutri.services.clock import Clock
from fitnutri.services.persistence import StateRepository

TODAY = "2024-03-10"


@dataclass
class InMemoryStateRepository(StateRepository):
    """In-memory state repository for tests."""

    profile: UserProfile | None = None
    shopping_list: list[ShoppingItem] = field(default_factory=list)
    saved_profiles: list[UserProfile | None] = field(default_factory=list)
    saved_lists: list[list[ShoppingItem]] = field(default_factory=list)
    fail: bool = False

    def load(self) -> UserProfile | None:
        return self.profile

    def save(self, profile: UserProfile | None) -> None:
        if self.fail:
            raise RuntimeError("storage unavailable")
        self.profile = profile
        self.saved_profiles.append(profile)

    def load_shopping_list(self) -> list[ShoppingItem]:
        return list(self.shopping_list)

    def save_shopping_list(self, items: list[ShoppingItem]) -> None:
        if self.fail:
            raise RuntimeError("storage unavailable")
        self.shopping_list = list(items)
        self.saved_lists.append(list(items))


@dataclass
class FrozenClock(Clock):
    """Clock that only moves when a test advances it."""

    current: datetime = field(
        default_factory=lambda: datetime(2024, 3, 10, 12, 0, tzinfo=UTC)
    )

    def now(self) -> datetime:
        return self.current

    def today(self) -> str:
        return self.current.date().isoformat()

    def advance(self, days: int = 1) -> None:
        self.current = self.current + timedelta(days=days)


def make_profile(**overrides: object) -> UserProfile:
    values: dict[str, object] = {
        "id": "user-1",
        "gender": Gender.MALE,
        "age": 25,
        "weight": 70,
        "height": 170,
        "activity_level": ActivityLevel.SEDENTARY,
        "goals": Goal.LOSE,
        "diet_types": (DietType.BALANCED,),
        "bmr": 1648,
        "tdee": 1978,
        "daily_log": DailyLog.empty(TODAY),
    }
    values.update(overrides)
    return UserProfile(**values)  # type: ignore[arg-type]


def make_recipe(**overrides: object) -> Recipe:
    values: dict[str, object] = {
        "id": "recipe-1",
        "title": "Greek Yogurt Bowl",
        "category": MealCategory.BREAKFAST,
        "macros": RecipeMacros(protein=20, carbs=30, fat=10, calories=290),
        "servings": 2,
        "author_id": "author-1",
        "created_at": datetime(2024, 3, 1, tzinfo=UTC),
        "tags": (RecipeTag.SWEET,),
        "diet_types": (DietType.BALANCED,),
        "ingredients": (
            Ingredient(
                name="Greek yogurt",
                amount=250,
                unit="g",
                category=IngredientCategory.DAIRY,
            ),
            Ingredient(
                name="Oats",
                amount=45,
                unit="g",
                category=IngredientCategory.GRAINS,
            ),
        ),
        "instructions": ("Mix everything.",),
        "status": RecipeStatus.APPROVED,
    }
    values.update(overrides)
    return Recipe(**values)  # type: ignore[arg-type]


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_token="admin-token",
    )


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def repository() -> InMemoryStateRepository:
    return InMemoryStateRepository()


@pytest.fixture()
def container(
    settings: Settings, repository: InMemoryStateRepository, clock: FrozenClock
) -> AppContainer:
    return build_container(settings, repository=repository, clock=clock)
