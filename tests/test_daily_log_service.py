"""Tests for the daily log service."""

import pytest

from fitnutri.domain.nutrition import DietType, Goal, Macros
from fitnutri.domain.profiles import ConsumptionStatus, DailyLog, UserProfile
from fitnutri.domain.state import AppState
from fitnutri.services.daily_log import DailyLogService
from tests.conftest import (
    TODAY,
    FrozenClock,
    InMemoryStateRepository,
    make_profile,
    make_recipe,
)


def _service(
    profile: UserProfile | None = None,
    repository: InMemoryStateRepository | None = None,
    clock: FrozenClock | None = None,
) -> DailyLogService:
    return DailyLogService(
        state=AppState(profile=profile),
        repository=repository or InMemoryStateRepository(),
        clock=clock or FrozenClock(),
    )


def _log_meal(service: DailyLogService, **overrides: object) -> DailyLog | None:
    values: dict[str, object] = {
        "recipe_id": "recipe-1",
        "recipe_name": "Greek Yogurt Bowl",
        "servings": 1,
        "calories": 500,
        "protein": 30,
        "carbs": 50,
        "fat": 20,
        "status": ConsumptionStatus.EATEN,
    }
    values.update(overrides)
    return service.mark_meal_consumed(**values)  # type: ignore[arg-type]


def test_mark_meal_consumed_updates_totals_and_persists() -> None:
    repository = InMemoryStateRepository()
    service = _service(make_profile(), repository)

    _log_meal(service)
    log = _log_meal(service, recipe_id="recipe-2", calories=300, protein=10)

    assert log is not None
    assert len(log.consumed_meals) == 2
    assert log.total_calories == 800
    assert log.total_protein == 40
    assert log.total_carbs == 100
    assert log.total_fat == 40
    assert repository.profile is not None
    assert repository.profile.daily_log == log


def test_totals_equal_sum_of_meals() -> None:
    service = _service(make_profile())

    for calories in (120, 340, 75):
        _log_meal(service, calories=calories, protein=calories // 10)

    log = service.get_daily_log()
    assert log.total_calories == sum(meal.calories for meal in log.consumed_meals)
    assert log.total_protein == sum(meal.protein for meal in log.consumed_meals)


def test_logged_meals_cannot_be_appended_behind_the_totals() -> None:
    service = _service(make_profile())
    _log_meal(service, calories=300)

    log = service.get_daily_log()

    assert isinstance(log.consumed_meals, tuple)
    with pytest.raises(AttributeError):
        log.consumed_meals.append(log.consumed_meals[0])  # type: ignore[attr-defined]
    assert log.total_calories == sum(meal.calories for meal in log.consumed_meals)


def test_same_recipe_logged_twice_appends_twice() -> None:
    service = _service(make_profile())

    _log_meal(service)
    log = _log_meal(service)

    assert log is not None
    assert [meal.recipe_id for meal in log.consumed_meals] == ["recipe-1", "recipe-1"]
    assert log.total_calories == 1000


def test_meal_records_status_and_timestamp() -> None:
    clock = FrozenClock()
    service = _service(make_profile(), clock=clock)

    log = _log_meal(service, status="cooked")

    assert log is not None
    meal = log.consumed_meals[0]
    assert meal.status == ConsumptionStatus.COOKED
    assert meal.consumed_at == clock.now()


def test_consume_recipe_scales_macros_to_servings() -> None:
    service = _service(make_profile())

    log = service.consume_recipe(make_recipe(), servings=1, status="eaten")

    assert log is not None
    meal = log.consumed_meals[0]
    assert (meal.calories, meal.protein, meal.carbs, meal.fat) == (145, 10, 15, 5)
    assert service.has_consumed_today("recipe-1")
    assert not service.has_consumed_today("recipe-2")


def test_operations_without_profile_are_noops() -> None:
    repository = InMemoryStateRepository()
    service = _service(repository=repository)

    assert _log_meal(service) is None
    assert service.reset_daily_log() is None
    assert service.get_daily_log() == DailyLog.empty(TODAY)
    assert service.get_remaining_calories() == 0
    assert service.get_remaining_macros() == Macros(protein=0, carbs=0, fat=0)
    assert repository.saved_profiles == []


def test_remaining_calories_and_macros() -> None:
    service = _service(make_profile())

    assert service.get_remaining_calories() == 1478
    _log_meal(service)

    assert service.get_remaining_calories() == 978
    assert service.get_remaining_macros() == Macros(protein=81, carbs=98, fat=29)


def test_remaining_values_never_go_negative() -> None:
    service = _service(make_profile())

    _log_meal(service, calories=2000, protein=200, carbs=10, fat=80)

    assert service.get_remaining_calories() == 0
    remaining = service.get_remaining_macros()
    assert remaining.protein == 0
    assert remaining.carbs == 138
    assert remaining.fat == 0


def test_remaining_macros_use_remaining_split_for_vegan() -> None:
    service = _service(make_profile(diet_types=(DietType.VEGAN, DietType.BALANCED)))

    assert service.get_remaining_macros() == Macros(protein=92, carbs=185, fat=41)


def test_remaining_calories_follow_goal() -> None:
    service = _service(make_profile(goals=Goal.GAIN))

    assert service.get_remaining_calories() == 2478


def test_stale_log_rolls_over_on_access() -> None:
    repository = InMemoryStateRepository()
    clock = FrozenClock()
    service = _service(make_profile(), repository, clock)
    _log_meal(service)

    clock.advance()
    log = service.get_daily_log()

    assert log == DailyLog.empty("2024-03-11")
    assert service.state.profile is not None
    assert service.state.profile.daily_log.date == "2024-03-11"
    assert repository.profile is not None
    assert repository.profile.daily_log == log


def test_rollover_is_idempotent_within_a_day() -> None:
    repository = InMemoryStateRepository()
    service = _service(make_profile(daily_log=DailyLog.empty("2024-03-01")), repository)

    service.ensure_current_day()
    service.ensure_current_day()

    assert len(repository.saved_profiles) == 1


def test_meal_logged_after_midnight_goes_to_new_day() -> None:
    clock = FrozenClock()
    service = _service(make_profile(), clock=clock)
    _log_meal(service)

    clock.advance()
    log = _log_meal(service, calories=200)

    assert log is not None
    assert log.date == "2024-03-11"
    assert log.total_calories == 200


def test_reset_daily_log_clears_meals() -> None:
    repository = InMemoryStateRepository()
    service = _service(make_profile(), repository)
    _log_meal(service)

    log = service.reset_daily_log()

    assert log == DailyLog.empty(TODAY)
    assert repository.profile is not None
    assert repository.profile.daily_log.consumed_meals == ()


def test_persistence_failure_keeps_in_memory_state() -> None:
    repository = InMemoryStateRepository(fail=True)
    service = _service(make_profile(), repository)

    log = _log_meal(service)

    assert log is not None
    assert service.get_daily_log().total_calories == 500
