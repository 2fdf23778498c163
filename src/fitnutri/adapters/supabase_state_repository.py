"""Supabase repository storing session state as JSON documents."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from fitnutri.adapters.codec import (
    profile_from_dict,
    profile_to_dict,
    shopping_item_from_dict,
    shopping_item_to_dict,
)
from fitnutri.domain.profiles import UserProfile
from fitnutri.domain.shopping import ShoppingItem
from fitnutri.services.persistence import StateRepository

PROFILE_KEY = "fitnutri-user"
SHOPPING_LIST_KEY = "fitnutri-shopping"


@dataclass
class SupabaseStateRepository(StateRepository):
    """Supabase implementation of the state contract.

    One row per key in a ``key``/``value`` table, where ``value`` is jsonb.
    """

    client: Client
    table: str = "app_state"

    def load(self) -> UserProfile | None:
        """Return the stored profile, if any."""
        value = self._get(PROFILE_KEY)
        if not isinstance(value, dict):
            return None
        return profile_from_dict(value)

    def save(self, profile: UserProfile | None) -> None:
        """Upsert the profile row, or delete it when signed out."""
        if profile is None:
            self.client.table(self.table).delete().eq("key", PROFILE_KEY).execute()
            return
        self._put(PROFILE_KEY, profile_to_dict(profile))

    def load_shopping_list(self) -> list[ShoppingItem]:
        """Return the stored shopping list."""
        value = self._get(SHOPPING_LIST_KEY)
        if not isinstance(value, list):
            return []
        return [shopping_item_from_dict(item) for item in value]

    def save_shopping_list(self, items: list[ShoppingItem]) -> None:
        """Upsert the shopping list row."""
        self._put(SHOPPING_LIST_KEY, [shopping_item_to_dict(item) for item in items])

    def _get(self, key: str) -> object | None:
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def _put(self, key: str, value: object) -> None:
        response = (
            self.client.table(self.table)
            .upsert(
                {
                    "key": key,
                    "value": value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to store {key} in Supabase")
