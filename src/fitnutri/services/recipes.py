"""Recipe store: submissions, moderation, ratings, comments and reports."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from uuid import uuid4

from fitnutri.domain.errors import RecipeValidationError
from fitnutri.domain.nutrition import DietType, Macros
from fitnutri.domain.recipes import (
    Comment,
    MealCategory,
    Rating,
    Recipe,
    RecipeMacros,
    RecipeReport,
    RecipeStatus,
    RecipeSubmission,
    RecipeTag,
    ReportStatus,
)
from fitnutri.domain.state import AppState
from fitnutri.services.clock import Clock
from fitnutri.services.nutrition import (
    CALORIES_PER_GRAM,
    round_half_up,
    round_one_decimal,
)

_logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE = "/placeholder.svg"


@dataclass
class RecipeService:
    """In-memory recipe collection for the session.

    Operations on unknown recipe ids leave every recipe untouched and
    return None.
    """

    state: AppState
    clock: Clock

    def add_recipe(self, recipe: Recipe) -> Recipe:
        """Append a recipe as pending moderation. No validation is done here."""
        pending = replace(recipe, status=RecipeStatus.PENDING)
        self.state.recipes = [*self.state.recipes, pending]
        _logger.info("Recipe submitted: id=%s title=%s", pending.id, pending.title)
        return pending

    def submit_recipe(self, submission: RecipeSubmission, author_id: str) -> Recipe:
        """Validate form input, build a recipe and add it for moderation."""
        title = submission.title.strip()
        if not title:
            raise RecipeValidationError("Recipe title is required")
        if submission.servings <= 0:
            raise RecipeValidationError("Servings must be positive")
        if any(
            not ingredient.name.strip() or ingredient.amount <= 0
            for ingredient in submission.ingredients
        ):
            raise RecipeValidationError("Every ingredient needs a name and amount")
        if any(not step.strip() for step in submission.instructions):
            raise RecipeValidationError("Instruction steps cannot be empty")
        ingredients = tuple(
            replace(ingredient, name=ingredient.name.strip())
            for ingredient in submission.ingredients
        )
        if not ingredients:
            raise RecipeValidationError("At least one ingredient is required")
        instructions = tuple(step.strip() for step in submission.instructions)
        if not instructions:
            raise RecipeValidationError("At least one instruction step is required")
        calories = submission.calories
        if calories is None:
            calories = (
                submission.protein * CALORIES_PER_GRAM["protein"]
                + submission.carbs * CALORIES_PER_GRAM["carbs"]
                + submission.fat * CALORIES_PER_GRAM["fat"]
            )
        recipe = Recipe(
            id=str(uuid4()),
            title=title,
            image=submission.image or PLACEHOLDER_IMAGE,
            category=submission.category,
            tags=tuple(submission.tags),
            diet_types=tuple(submission.diet_types) or (DietType.BALANCED,),
            ingredients=ingredients,
            instructions=instructions,
            macros=RecipeMacros(
                protein=submission.protein,
                carbs=submission.carbs,
                fat=submission.fat,
                calories=calories,
            ),
            prep_time=submission.prep_time,
            cook_time=submission.cook_time,
            servings=submission.servings,
            author_id=author_id,
            created_at=self.clock.now(),
        )
        return self.add_recipe(recipe)

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by id."""
        for recipe in self.state.recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    def list_recipes(self, status: RecipeStatus | str | None = None) -> list[Recipe]:
        """Return recipes, optionally only those with a moderation status."""
        if status is None:
            return list(self.state.recipes)
        return [recipe for recipe in self.state.recipes if recipe.status == status]

    def search_recipes(
        self,
        query: str | None = None,
        category: MealCategory | str | None = None,
        tags: list[RecipeTag | str] | None = None,
    ) -> list[Recipe]:
        """Search approved recipes by category, any of ``tags`` and text.

        The text query matches the title or any ingredient name.
        """
        needle = (query or "").lower()
        results = []
        for recipe in self.state.recipes:
            if recipe.status != RecipeStatus.APPROVED:
                continue
            if category and recipe.category != category:
                continue
            if tags and not any(tag in recipe.tags for tag in tags):
                continue
            if needle and not (
                needle in recipe.title.lower()
                or any(needle in item.name.lower() for item in recipe.ingredients)
            ):
                continue
            results.append(recipe)
        return results

    def update_recipe_status(
        self, recipe_id: str, status: RecipeStatus | str
    ) -> Recipe | None:
        """Overwrite a recipe's moderation status.

        There is no transition guard and no history of earlier statuses.
        """
        new_status = RecipeStatus(status)
        updated = self._update(
            recipe_id, lambda recipe: replace(recipe, status=new_status)
        )
        if updated is not None:
            _logger.info("Recipe moderated: id=%s status=%s", recipe_id, new_status)
        return updated

    def add_comment(
        self, recipe_id: str, user_id: str, user_name: str, text: str
    ) -> Comment | None:
        """Append a comment to a recipe."""
        comment = Comment(
            id=str(uuid4()),
            user_id=user_id,
            user_name=user_name,
            text=text,
            created_at=self.clock.now(),
        )
        updated = self._update(
            recipe_id,
            lambda recipe: replace(recipe, comments=(*recipe.comments, comment)),
        )
        return comment if updated is not None else None

    def add_rating(self, recipe_id: str, user_id: str, rating: float) -> Recipe | None:
        """Record a user's rating, replacing any earlier one from that user.

        Values outside 1-5 are accepted as given and count toward the average.
        """
        now = self.clock.now()

        def apply(recipe: Recipe) -> Recipe:
            ratings = list(recipe.ratings)
            for index, existing in enumerate(ratings):
                if existing.user_id == user_id:
                    ratings[index] = replace(existing, rating=rating, created_at=now)
                    break
            else:
                ratings.append(Rating(user_id=user_id, rating=rating, created_at=now))
            average = sum(entry.rating for entry in ratings) / len(ratings)
            return replace(
                recipe,
                ratings=tuple(ratings),
                average_rating=round_one_decimal(average),
            )

        return self._update(recipe_id, apply)

    def get_user_rating(self, recipe_id: str, user_id: str) -> float | None:
        """Return the rating a user gave a recipe, if any."""
        recipe = self.get_recipe(recipe_id)
        if recipe is None:
            return None
        for rating in recipe.ratings:
            if rating.user_id == user_id:
                return rating.rating
        return None

    def report_recipe(
        self, recipe_id: str, user_id: str, reason: str, details: str = ""
    ) -> RecipeReport | None:
        """File a report against a recipe for admin review."""
        if self.get_recipe(recipe_id) is None:
            return None
        report = RecipeReport(
            id=str(uuid4()),
            recipe_id=recipe_id,
            user_id=user_id,
            reason=reason,
            details=details,
            created_at=self.clock.now(),
        )
        self.state.reports = [*self.state.reports, report]
        _logger.info("Recipe reported: id=%s reason=%s", recipe_id, reason)
        return report

    def list_reports(
        self, status: ReportStatus | str | None = None
    ) -> list[RecipeReport]:
        """Return reports, optionally filtered by review status."""
        if status is None:
            return list(self.state.reports)
        return [report for report in self.state.reports if report.status == status]

    def mark_report_reviewed(self, report_id: str) -> RecipeReport | None:
        """Mark a report as reviewed."""
        for index, report in enumerate(self.state.reports):
            if report.id == report_id:
                reviewed = replace(report, status=ReportStatus.REVIEWED)
                reports = list(self.state.reports)
                reports[index] = reviewed
                self.state.reports = reports
                return reviewed
        return None

    def _update(
        self, recipe_id: str, change: Callable[[Recipe], Recipe]
    ) -> Recipe | None:
        for index, recipe in enumerate(self.state.recipes):
            if recipe.id == recipe_id:
                updated = change(recipe)
                recipes = list(self.state.recipes)
                recipes[index] = updated
                self.state.recipes = recipes
                return updated
        return None


def scale_macros(recipe: Recipe, servings: float) -> Macros:
    """Scale macros from the recipe's own serving count to ``servings``."""
    multiplier = servings / recipe.servings
    return Macros(
        protein=round_half_up(recipe.macros.protein * multiplier),
        carbs=round_half_up(recipe.macros.carbs * multiplier),
        fat=round_half_up(recipe.macros.fat * multiplier),
    )


def scale_calories(recipe: Recipe, servings: float) -> int:
    """Scale calories from the recipe's own serving count to ``servings``."""
    return round_half_up(recipe.macros.calories * (servings / recipe.servings))
