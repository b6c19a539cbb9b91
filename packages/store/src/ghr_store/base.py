"""Abstract session store interface.

The shell depends on BaseSessionStore, not on a concrete backend, so an
ephemeral run and a normal run share the same code path.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ghr_store.history import CommandHistory
    from ghr_store.models import SessionState


class BaseSessionStore(ABC):
    """Persistence for session state and command history.

    Loading never raises: a missing or unreadable file yields a fresh state
    or an empty history. Saving failures are reported, not raised, so quitting
    the shell always succeeds.
    """

    @abstractmethod
    def load_state(self) -> SessionState:
        """Return the saved session state, or a fresh one."""

    @abstractmethod
    def save_state(self, state: SessionState) -> None:
        """Persist the session state."""

    @abstractmethod
    def load_history(self, max_size: int = 100) -> CommandHistory:
        """Return the saved command history, capped at ``max_size``."""

    @abstractmethod
    def save_history(self, history: CommandHistory) -> None:
        """Persist the command history."""
