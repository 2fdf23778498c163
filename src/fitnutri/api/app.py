"""FastAPI application factory."""

import logging

from fastapi import FastAPI, HTTPException, Query, Request, status

from fitnutri.adapters.codec import (
    comment_to_dict,
    daily_log_to_dict,
    macros_to_dict,
    profile_to_dict,
    recipe_to_dict,
    report_to_dict,
    shopping_item_to_dict,
    targets_to_dict,
    zone_blocks_to_dict,
)
from fitnutri.api.admin import router as admin_router
from fitnutri.api.schemas import (
    CommentRequest,
    ConsumedMealRequest,
    ConsumeRecipeRequest,
    OnboardingRequest,
    ProfileUpdateRequest,
    RatingRequest,
    RecipeSubmissionRequest,
    ReportRequest,
    ShoppingRecipeRequest,
    ShoppingToggleRequest,
)
from fitnutri.app_logging import configure_logging
from fitnutri.containers import AppContainer
from fitnutri.domain.errors import FitNutriError
from fitnutri.domain.nutrition import DietType
from fitnutri.domain.profiles import OnboardingData
from fitnutri.domain.recipes import (
    Ingredient,
    MealCategory,
    Recipe,
    RecipeSubmission,
    RecipeTag,
)
from fitnutri.services.recipes import scale_calories, scale_macros
from fitnutri.services.zone import calculate_zone_blocks

ANONYMOUS_USER_ID = "anonymous"
IGNORED = {"status": "ignored"}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        """Return the signed-in profile."""
        profile = _container(request).profile_service.get_profile()
        if profile is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return profile_to_dict(profile)

    @app.post("/profile", status_code=status.HTTP_201_CREATED)
    async def complete_onboarding(
        payload: OnboardingRequest, request: Request
    ) -> dict[str, object]:
        """Create the profile from onboarding answers."""
        service = _container(request).profile_service
        try:
            profile = service.complete_onboarding(
                OnboardingData(
                    gender=payload.gender,
                    age=payload.age,
                    weight=payload.weight,
                    height=payload.height,
                    activity_level=payload.activity_level,
                    goals=payload.goals,
                    diet_types=tuple(payload.diet_types),
                )
            )
        except FitNutriError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return profile_to_dict(profile)

    @app.patch("/profile")
    async def update_profile(
        payload: ProfileUpdateRequest, request: Request
    ) -> dict[str, object]:
        """Edit profile fields; BMR and TDEE are kept as computed."""
        service = _container(request).profile_service
        changes = payload.model_dump(exclude_none=True)
        try:
            profile = service.update_profile(**changes)
        except FitNutriError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        if profile is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return profile_to_dict(profile)

    @app.delete("/profile")
    async def sign_out(request: Request) -> dict[str, str]:
        """Forget the profile."""
        _container(request).profile_service.set_profile(None)
        return {"status": "ok"}

    @app.post("/profile/diet-types/{diet_type}")
    async def add_diet_type(diet_type: DietType, request: Request) -> dict[str, object]:
        """Select an additional diet type."""
        profile = _container(request).profile_service.add_diet_type(diet_type)
        if profile is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return profile_to_dict(profile)

    @app.delete("/profile/diet-types/{diet_type}")
    async def remove_diet_type(
        diet_type: DietType, request: Request
    ) -> dict[str, object]:
        """Deselect a diet type; the last one cannot be removed."""
        service = _container(request).profile_service
        if service.get_profile() is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        if not service.remove_diet_type(diet_type):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Diet type cannot be removed",
            )
        return profile_to_dict(service.get_profile())  # type: ignore[arg-type]

    @app.get("/profile/targets")
    async def get_targets(request: Request) -> dict[str, object]:
        """Return calorie, macro and zone block targets."""
        targets = _container(request).profile_service.get_targets()
        if targets is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return targets_to_dict(targets)

    @app.get("/daily-log")
    async def get_daily_log(request: Request) -> dict[str, object]:
        """Return today's log."""
        return daily_log_to_dict(_container(request).daily_log_service.get_daily_log())

    @app.post("/daily-log/meals")
    async def mark_meal_consumed(
        payload: ConsumedMealRequest, request: Request
    ) -> dict[str, object]:
        """Log a meal with pre-scaled macros."""
        log = _container(request).daily_log_service.mark_meal_consumed(
            recipe_id=payload.recipe_id,
            recipe_name=payload.recipe_name,
            servings=payload.servings,
            calories=payload.calories,
            protein=payload.protein,
            carbs=payload.carbs,
            fat=payload.fat,
            status=payload.status,
        )
        if log is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return daily_log_to_dict(log)

    @app.post("/daily-log/recipes/{recipe_id}")
    async def consume_recipe(
        recipe_id: str, payload: ConsumeRecipeRequest, request: Request
    ) -> dict[str, object]:
        """Log servings of a stored recipe."""
        state_container = _container(request)
        recipe = _require_recipe(state_container, recipe_id)
        log = state_container.daily_log_service.consume_recipe(
            recipe, payload.servings, payload.status
        )
        if log is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return daily_log_to_dict(log)

    @app.delete("/daily-log")
    async def reset_daily_log(request: Request) -> dict[str, object]:
        """Discard today's meals."""
        log = _container(request).daily_log_service.reset_daily_log()
        if log is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        logger.info("Daily log reset via API")
        return daily_log_to_dict(log)

    @app.get("/daily-log/remaining")
    async def get_remaining(request: Request) -> dict[str, object]:
        """Return calories and macros left for today."""
        service = _container(request).daily_log_service
        return {
            "calories": service.get_remaining_calories(),
            "macros": macros_to_dict(service.get_remaining_macros()),
        }

    @app.get("/recipes")
    async def search_recipes(
        request: Request,
        q: str | None = None,
        category: MealCategory | None = None,
        tag: list[RecipeTag] | None = Query(default=None),
    ) -> dict[str, object]:
        """Search approved recipes."""
        recipes = _container(request).recipe_service.search_recipes(
            query=q, category=category, tags=tag
        )
        return {"recipes": [recipe_to_dict(recipe) for recipe in recipes]}

    @app.get("/recipes/{recipe_id}")
    async def get_recipe(
        recipe_id: str, request: Request, servings: float | None = None
    ) -> dict[str, object]:
        """Return a recipe with macros scaled to the requested servings."""
        state_container = _container(request)
        recipe = _require_recipe(state_container, recipe_id)
        resolved_servings = servings or recipe.servings
        macros = scale_macros(recipe, resolved_servings)
        profile = state_container.profile_service.get_profile()
        show_zone = DietType.ZONE in recipe.diet_types or (
            profile is not None and DietType.ZONE in profile.diet_types
        )
        zone_blocks = calculate_zone_blocks(macros) if show_zone else None
        payload = recipe_to_dict(recipe)
        payload["scaled"] = {
            "servings": resolved_servings,
            "calories": scale_calories(recipe, resolved_servings),
            **macros_to_dict(macros),
            "zoneBlocks": zone_blocks_to_dict(zone_blocks) if zone_blocks else None,
        }
        payload["consumedToday"] = (
            state_container.daily_log_service.has_consumed_today(recipe_id)
        )
        payload["inShoppingList"] = (
            state_container.shopping_list_service.contains_recipe(recipe_id)
        )
        return payload

    @app.post("/recipes", status_code=status.HTTP_201_CREATED)
    async def submit_recipe(
        payload: RecipeSubmissionRequest, request: Request
    ) -> dict[str, object]:
        """Submit a recipe for moderation."""
        state_container = _container(request)
        submission = RecipeSubmission(
            title=payload.title,
            category=payload.category,
            protein=payload.protein,
            carbs=payload.carbs,
            fat=payload.fat,
            calories=payload.calories,
            servings=payload.servings,
            image=payload.image,
            tags=tuple(payload.tags),
            diet_types=tuple(payload.diet_types),
            ingredients=tuple(
                Ingredient(
                    name=item.name,
                    amount=item.amount,
                    unit=item.unit,
                    category=item.category,
                )
                for item in payload.ingredients
            ),
            instructions=tuple(payload.instructions),
            prep_time=payload.prep_time,
            cook_time=payload.cook_time,
        )
        try:
            recipe = state_container.recipe_service.submit_recipe(
                submission, author_id=_current_user_id(state_container)
            )
        except FitNutriError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return recipe_to_dict(recipe)

    @app.post("/recipes/{recipe_id}/comments")
    async def add_comment(
        recipe_id: str, payload: CommentRequest, request: Request
    ) -> dict[str, object]:
        """Comment on a recipe."""
        state_container = _container(request)
        comment = state_container.recipe_service.add_comment(
            recipe_id,
            user_id=_current_user_id(state_container),
            user_name=payload.user_name,
            text=payload.text,
        )
        if comment is None:
            return IGNORED
        return comment_to_dict(comment)

    @app.post("/recipes/{recipe_id}/ratings")
    async def add_rating(
        recipe_id: str, payload: RatingRequest, request: Request
    ) -> dict[str, object]:
        """Rate a recipe as the signed-in user."""
        state_container = _container(request)
        profile = state_container.profile_service.get_profile()
        if profile is None:
            return IGNORED
        recipe = state_container.recipe_service.add_rating(
            recipe_id, profile.id, payload.rating
        )
        if recipe is None:
            return IGNORED
        return {
            "averageRating": recipe.average_rating,
            "ratingCount": len(recipe.ratings),
            "userRating": payload.rating,
        }

    @app.post("/recipes/{recipe_id}/reports", status_code=status.HTTP_201_CREATED)
    async def report_recipe(
        recipe_id: str, payload: ReportRequest, request: Request
    ) -> dict[str, object]:
        """Report a problem with a recipe."""
        state_container = _container(request)
        report = state_container.recipe_service.report_recipe(
            recipe_id,
            user_id=_current_user_id(state_container),
            reason=payload.reason,
            details=payload.details,
        )
        if report is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return report_to_dict(report)

    @app.get("/shopping-list")
    async def get_shopping_list(request: Request) -> dict[str, object]:
        """Return the list grouped by aisle with progress."""
        service = _container(request).shopping_list_service
        checked, total = service.progress()
        return {
            "items": [
                shopping_item_to_dict(item) for item in service.get_shopping_list()
            ],
            "groups": {
                category: [shopping_item_to_dict(item) for item in items]
                for category, items in service.grouped_by_category().items()
            },
            "checked": checked,
            "total": total,
        }

    @app.post("/shopping-list/recipes/{recipe_id}")
    async def add_recipe_to_shopping_list(
        recipe_id: str, payload: ShoppingRecipeRequest, request: Request
    ) -> dict[str, object]:
        """Add a recipe's ingredients, or remove them if already listed."""
        state_container = _container(request)
        recipe = _require_recipe(state_container, recipe_id)
        items = state_container.shopping_list_service.toggle_recipe(
            recipe, payload.servings
        )
        return {"items": [shopping_item_to_dict(item) for item in items]}

    @app.delete("/shopping-list/recipes/{recipe_id}")
    async def remove_recipe_from_shopping_list(
        recipe_id: str, request: Request
    ) -> dict[str, object]:
        """Remove every item that came from a recipe."""
        items = _container(request).shopping_list_service.remove_from_shopping_list(
            recipe_id
        )
        return {"items": [shopping_item_to_dict(item) for item in items]}

    @app.post("/shopping-list/toggle")
    async def toggle_shopping_item(
        payload: ShoppingToggleRequest, request: Request
    ) -> dict[str, object]:
        """Check or uncheck an item identified by name and recipe."""
        service = _container(request).shopping_list_service
        index = service.find_item_index(payload.name, payload.recipe_id)
        item = service.toggle_shopping_item(index) if index is not None else None
        if item is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return shopping_item_to_dict(item)

    @app.delete("/shopping-list")
    async def clear_shopping_list(request: Request) -> dict[str, object]:
        """Empty the list."""
        _container(request).shopping_list_service.clear_shopping_list()
        return {"items": []}

    return app


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _require_recipe(container: AppContainer, recipe_id: str) -> Recipe:
    recipe = container.recipe_service.get_recipe(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return recipe


def _current_user_id(container: AppContainer) -> str:
    profile = container.profile_service.get_profile()
    return profile.id if profile else ANONYMOUS_USER_ID

