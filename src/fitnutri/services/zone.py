"""Zone diet block conversion."""

from fitnutri.domain.nutrition import Macros, ZoneBlocks
from fitnutri.services.nutrition import round_one_decimal

# Grams per block; the fat value includes hidden fat.
ZONE_BLOCK_GRAMS = {
    "protein": 7,
    "carbs": 9,
    "fat": 3,
}


def calculate_zone_blocks(macros: Macros) -> ZoneBlocks:
    """Convert macro grams to Zone blocks, one decimal each."""
    return ZoneBlocks(
        protein_blocks=round_one_decimal(macros.protein / ZONE_BLOCK_GRAMS["protein"]),
        carb_blocks=round_one_decimal(macros.carbs / ZONE_BLOCK_GRAMS["carbs"]),
        fat_blocks=round_one_decimal(macros.fat / ZONE_BLOCK_GRAMS["fat"]),
    )
