"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from fitnutri.adapters.seed_recipes import load_seed_recipes
from fitnutri.adapters.supabase_state_repository import SupabaseStateRepository
from fitnutri.config import Settings
from fitnutri.domain.state import AppState
from fitnutri.services.clock import Clock, SystemClock
from fitnutri.services.daily_log import DailyLogService
from fitnutri.services.persistence import StateRepository
from fitnutri.services.profiles import ProfileService
from fitnutri.services.recipes import RecipeService
from fitnutri.services.shopping import ShoppingListService
from fitnutri.services.state import load_state


@dataclass
class AppContainer:
    """Holds the session state and the services that share it."""

    settings: Settings
    clock: Clock
    repository: StateRepository
    state: AppState
    profile_service: ProfileService
    daily_log_service: DailyLogService
    recipe_service: RecipeService
    shopping_list_service: ShoppingListService


def build_container(
    settings: Settings | None = None,
    repository: StateRepository | None = None,
    clock: Clock | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_clock = clock or SystemClock(resolved_settings.timezone)
    if repository is None:
        supabase_client = create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_service_key
        )
        repository = SupabaseStateRepository(
            supabase_client, table=resolved_settings.state_table
        )
    recipes = (
        load_seed_recipes(resolved_settings.seed_recipes_path)
        if resolved_settings.seed_recipes_path
        else []
    )
    state = load_state(repository, resolved_clock, recipes)

    return AppContainer(
        settings=resolved_settings,
        clock=resolved_clock,
        repository=repository,
        state=state,
        profile_service=ProfileService(state, repository, resolved_clock),
        daily_log_service=DailyLogService(state, repository, resolved_clock),
        recipe_service=RecipeService(state, resolved_clock),
        shopping_list_service=ShoppingListService(state, repository),
    )
