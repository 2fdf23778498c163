"""Domain errors."""


class FitNutriError(Exception):
    """Base class for domain errors."""


class RecipeValidationError(FitNutriError, ValueError):
    """Raised when a recipe submission is incomplete."""


class ProfileValidationError(FitNutriError, ValueError):
    """Raised when profile input breaks a profile invariant."""
