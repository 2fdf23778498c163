"""Tests for the public API."""

from fastapi.testclient import TestClient

from fitnutri.api.app import create_app
from fitnutri.containers import AppContainer
from fitnutri.domain.recipes import RecipeStatus
from tests.conftest import InMemoryStateRepository, make_profile, make_recipe

ONBOARDING = {
    "gender": "male",
    "age": 25,
    "weight": 70,
    "height": 170,
    "activityLevel": "sedentary",
    "goals": "lose",
    "dietTypes": ["balanced"],
}


def _client(container: AppContainer, with_profile: bool = True) -> TestClient:
    if with_profile:
        container.state.profile = make_profile()
    container.state.recipes = [make_recipe()]
    return TestClient(create_app(container))


def test_health(container: AppContainer) -> None:
    response = _client(container).get("/health")

    assert response.json() == {"status": "ok"}


def test_onboarding_creates_profile(
    container: AppContainer, repository: InMemoryStateRepository
) -> None:
    client = _client(container, with_profile=False)

    missing = client.get("/profile")
    created = client.post("/profile", json=ONBOARDING)
    targets = client.get("/profile/targets")

    assert missing.status_code == 404
    assert created.status_code == 201
    assert created.json()["bmr"] == 1643
    assert created.json()["tdee"] == 1972
    assert repository.profile is not None
    assert targets.json() == {
        "bmr": 1643,
        "tdee": 1972,
        "targetCalories": 1472,
        "macros": {"protein": 110, "carbs": 147, "fat": 49},
        "zoneBlocks": None,
    }


def test_onboarding_rejects_empty_diets(container: AppContainer) -> None:
    client = _client(container, with_profile=False)

    response = client.post("/profile", json={**ONBOARDING, "dietTypes": []})

    assert response.status_code == 400


def test_update_profile_and_diet_types(container: AppContainer) -> None:
    client = _client(container)

    updated = client.patch("/profile", json={"weight": 80})
    with_zone = client.post("/profile/diet-types/zone")
    targets = client.get("/profile/targets")
    removed = client.delete("/profile/diet-types/balanced")
    last = client.delete("/profile/diet-types/zone")

    assert updated.json()["weight"] == 80
    assert updated.json()["bmr"] == 1648
    assert with_zone.json()["dietTypes"] == ["balanced", "zone"]
    assert targets.json()["zoneBlocks"] == {
        "proteinBlocks": 15.9,
        "carbBlocks": 16.4,
        "fatBlocks": 16.3,
    }
    assert removed.json()["dietTypes"] == ["zone"]
    assert last.status_code == 409


def test_remove_diet_type_without_profile_is_not_found(
    container: AppContainer,
) -> None:
    client = _client(container, with_profile=False)

    response = client.delete("/profile/diet-types/balanced")

    assert response.status_code == 404


def test_sign_out_removes_profile(
    container: AppContainer, repository: InMemoryStateRepository
) -> None:
    client = _client(container)

    client.delete("/profile")

    assert container.state.profile is None
    assert repository.saved_profiles[-1] is None


def test_consume_recipe_updates_log_and_remaining(container: AppContainer) -> None:
    client = _client(container)

    logged = client.post(
        "/daily-log/recipes/recipe-1", json={"servings": 1, "status": "cooked"}
    )
    remaining = client.get("/daily-log/remaining")

    assert logged.json()["totalCalories"] == 145
    assert logged.json()["consumedMeals"][0]["status"] == "cooked"
    assert remaining.json() == {
        "calories": 1333,
        "macros": {"protein": 101, "carbs": 133, "fat": 44},
    }


def test_mark_meal_consumed_and_reset(container: AppContainer) -> None:
    client = _client(container)

    logged = client.post(
        "/daily-log/meals",
        json={
            "recipeId": "custom",
            "recipeName": "Leftovers",
            "servings": 1,
            "calories": 2000,
            "protein": 10,
            "carbs": 10,
            "fat": 10,
            "status": "eaten",
        },
    )
    remaining = client.get("/daily-log/remaining")
    reset = client.delete("/daily-log")

    assert logged.json()["totalCalories"] == 2000
    assert remaining.json()["calories"] == 0
    assert reset.json()["consumedMeals"] == []


def test_daily_log_without_profile(container: AppContainer) -> None:
    client = _client(container, with_profile=False)

    log = client.get("/daily-log")
    logged = client.post("/daily-log/recipes/recipe-1", json={})

    assert log.json()["consumedMeals"] == []
    assert logged.status_code == 404


def test_search_and_recipe_detail(container: AppContainer) -> None:
    client = _client(container)
    container.state.recipes = [
        make_recipe(),
        make_recipe(id="hidden", status=RecipeStatus.PENDING),
    ]

    found = client.get("/recipes", params={"q": "yogurt"})
    filtered = client.get("/recipes", params={"tag": ["soup", "pastry"]})
    detail = client.get("/recipes/recipe-1", params={"servings": 4})
    missing = client.get("/recipes/missing")

    assert [recipe["id"] for recipe in found.json()["recipes"]] == ["recipe-1"]
    assert filtered.json()["recipes"] == []
    scaled = detail.json()["scaled"]
    assert scaled["calories"] == 580
    assert scaled["protein"] == 40
    assert scaled["zoneBlocks"] is None
    assert detail.json()["consumedToday"] is False
    assert missing.status_code == 404


def test_submit_recipe(container: AppContainer) -> None:
    client = _client(container)

    created = client.post(
        "/recipes",
        json={
            "title": "Lentil Soup",
            "category": "lunch",
            "protein": 18,
            "carbs": 40,
            "fat": 6,
            "ingredients": [{"name": "Lentils", "amount": 200, "unit": "g"}],
            "instructions": ["Simmer."],
        },
    )
    invalid = client.post(
        "/recipes",
        json={
            "title": "Empty",
            "category": "lunch",
            "protein": 1,
            "carbs": 1,
            "fat": 1,
            "ingredients": [],
            "instructions": ["Nothing."],
        },
    )

    assert created.status_code == 201
    assert created.json()["status"] == "pending"
    assert created.json()["authorId"] == "user-1"
    assert created.json()["macros"]["calories"] == 286
    assert invalid.status_code == 400


def test_ratings_and_comments(container: AppContainer) -> None:
    client = _client(container)

    client.post("/recipes/recipe-1/ratings", json={"rating": 3})
    rated = client.post("/recipes/recipe-1/ratings", json={"rating": 5})
    unknown = client.post("/recipes/missing/ratings", json={"rating": 5})
    comment = client.post(
        "/recipes/recipe-1/comments", json={"userName": "Ann", "text": "Great"}
    )

    assert rated.json() == {"averageRating": 5, "ratingCount": 1, "userRating": 5}
    assert unknown.json() == {"status": "ignored"}
    assert comment.json()["userId"] == "user-1"


def test_rating_without_profile_is_ignored(container: AppContainer) -> None:
    client = _client(container, with_profile=False)

    response = client.post("/recipes/recipe-1/ratings", json={"rating": 4})

    assert response.json() == {"status": "ignored"}
    assert container.state.recipes[0].ratings == ()


def test_shopping_list_flow(
    container: AppContainer, repository: InMemoryStateRepository
) -> None:
    client = _client(container)

    added = client.post("/shopping-list/recipes/recipe-1", json={"servings": 2})
    toggled = client.post(
        "/shopping-list/toggle", json={"name": "Oats", "recipeId": "recipe-1"}
    )
    listing = client.get("/shopping-list")
    missing = client.post(
        "/shopping-list/toggle", json={"name": "Salt", "recipeId": "recipe-1"}
    )
    cleared = client.delete("/shopping-list")

    assert [item["name"] for item in added.json()["items"]] == ["Greek yogurt", "Oats"]
    assert toggled.json()["checked"] is True
    assert listing.json()["checked"] == 1
    assert listing.json()["total"] == 2
    assert list(listing.json()["groups"]) == ["dairy", "grains"]
    assert missing.status_code == 404
    assert cleared.json() == {"items": []}
    assert repository.shopping_list == []


def test_removing_recipe_from_shopping_list(container: AppContainer) -> None:
    client = _client(container)
    client.post("/shopping-list/recipes/recipe-1", json={})

    response = client.delete("/shopping-list/recipes/recipe-1")

    assert response.json() == {"items": []}
