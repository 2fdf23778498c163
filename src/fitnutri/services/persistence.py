"""Persistence contract and fire-and-forget save helpers."""

import logging
from typing import Protocol

from fitnutri.domain.profiles import UserProfile
from fitnutri.domain.shopping import ShoppingItem

_logger = logging.getLogger(__name__)


class StateRepository(Protocol):
    """Persistence interface for the session state."""

    def load(self) -> UserProfile | None:
        """Return the stored profile, if any."""

    def save(self, profile: UserProfile | None) -> None:
        """Store the profile, or remove it when None."""

    def load_shopping_list(self) -> list[ShoppingItem]:
        """Return the stored shopping list."""

    def save_shopping_list(self, items: list[ShoppingItem]) -> None:
        """Store the shopping list."""


def persist_profile(repository: StateRepository, profile: UserProfile | None) -> None:
    """Save the profile; failures are logged and in-memory state is kept."""
    try:
        repository.save(profile)
    except Exception:
        _logger.exception("Failed to persist user profile")


def persist_shopping_list(
    repository: StateRepository, items: list[ShoppingItem]
) -> None:
    """Save the shopping list; failures are logged and in-memory state is kept."""
    try:
        repository.save_shopping_list(items)
    except Exception:
        _logger.exception("Failed to persist shopping list")
