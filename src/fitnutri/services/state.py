"""Session state initialisation."""

import logging
from collections.abc import Iterable

from fitnutri.domain.recipes import Recipe
from fitnutri.domain.state import AppState
from fitnutri.services.clock import Clock
from fitnutri.services.daily_log import roll_over_if_stale
from fitnutri.services.persistence import StateRepository

_logger = logging.getLogger(__name__)


def load_state(
    repository: StateRepository,
    clock: Clock,
    recipes: Iterable[Recipe] = (),
) -> AppState:
    """Build the session state from persisted data.

    A stored profile whose log is not from today starts with an empty log.
    """
    state = AppState(
        profile=repository.load(),
        recipes=list(recipes),
        shopping_list=repository.load_shopping_list(),
    )
    roll_over_if_stale(state, repository, clock)
    _logger.info(
        "State loaded: profile=%s recipes=%s shopping_items=%s",
        state.profile.id if state.profile else None,
        len(state.recipes),
        len(state.shopping_list),
    )
    return state
