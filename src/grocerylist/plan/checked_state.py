"""Persistence contract for checked-off shopping list items."""

import threading
from typing import Protocol

from grocerylist.logging_config import get_logger

logger = get_logger(__name__)


class CheckedStateStore(Protocol):
    """Stores whether a user has checked off an ingredient, keyed by normalized name."""

    def get_checked(self, user_id: str, normalized_name: str) -> bool | None:
        """Return the saved state, or None when nothing was saved."""
        ...

    def set_checked(self, user_id: str, normalized_name: str, is_checked: bool) -> None:
        """Save the state for one ingredient."""
        ...


class InMemoryCheckedStateStore:
    """Process-local store, safe to share between request threads."""

    def __init__(self) -> None:
        self._states: dict[tuple[str, str], bool] = {}
        self._lock = threading.Lock()

    def get_checked(self, user_id: str, normalized_name: str) -> bool | None:
        with self._lock:
            return self._states.get((user_id, normalized_name))

    def set_checked(self, user_id: str, normalized_name: str, is_checked: bool) -> None:
        with self._lock:
            self._states[(user_id, normalized_name)] = is_checked
        logger.debug(f"Set checked={is_checked} for {normalized_name!r} (user {user_id})")

    def clear(self) -> None:
        with self._lock:
            self._states.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)
