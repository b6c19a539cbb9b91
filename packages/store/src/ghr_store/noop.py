"""No-op session store used by ``ghr --ephemeral``.

Every run starts from a fresh state and nothing is written to the working
directory.
"""

from __future__ import annotations

from ghr_store.base import BaseSessionStore
from ghr_store.history import CommandHistory
from ghr_store.models import SessionState


class NoOpSessionStore(BaseSessionStore):
    def load_state(self) -> SessionState:
        return SessionState()

    def save_state(self, state: SessionState) -> None:
        pass  # intentional no-op

    def load_history(self, max_size: int = 100) -> CommandHistory:
        return CommandHistory(max_size=max_size)

    def save_history(self, history: CommandHistory) -> None:
        pass  # intentional no-op
