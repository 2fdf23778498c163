"""Loader for the recipe catalogue shipped with a deployment."""

import json
import logging
from pathlib import Path

from fitnutri.adapters.codec import recipe_from_dict
from fitnutri.domain.recipes import Recipe

_logger = logging.getLogger(__name__)


def load_seed_recipes(path: str | Path) -> list[Recipe]:
    """Load recipes from a JSON array of recipe documents."""
    seed_path = Path(path)
    if not seed_path.exists():
        raise FileNotFoundError(f"Seed recipes not found at {seed_path}")
    payload = json.loads(seed_path.read_text(encoding="utf-8"))
    recipes = [recipe_from_dict(item) for item in payload]
    _logger.info("Seed recipes loaded: path=%s count=%s", seed_path, len(recipes))
    return recipes
