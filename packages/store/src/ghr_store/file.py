"""FileSessionStore: session state and history as two flat files.

Layout (both relative to the working directory by default, so each checkout
keeps its own review session):
  .ghr_session          JSON object, see SessionState.to_dict()
  .ghr_command_history  one command per line, oldest first
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ghr_store.base import BaseSessionStore
from ghr_store.history import CommandHistory
from ghr_store.models import SessionState

logger = logging.getLogger(__name__)


class FileSessionStore(BaseSessionStore):
    def __init__(self, session_path: str = ".ghr_session", history_path: str = ".ghr_command_history"):
        self.session_path = Path(session_path)
        self.history_path = Path(history_path)

    def load_state(self) -> SessionState:
        if not self.session_path.exists():
            return SessionState()
        try:
            data = json.loads(self.session_path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("session file does not contain a JSON object")
            state = SessionState.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not load session from %s: %s", self.session_path, e)
            print(f"Warning: Could not load session: {e}")
            return SessionState()
        logger.debug("Session loaded from %s", self.session_path)
        return state

    def save_state(self, state: SessionState) -> None:
        try:
            self.session_path.write_text(json.dumps(state.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save session to %s: %s", self.session_path, e)
            print(f"Warning: Could not save session: {e}")

    def load_history(self, max_size: int = 100) -> CommandHistory:
        if not self.history_path.exists():
            return CommandHistory(max_size=max_size)
        try:
            lines = self.history_path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            logger.warning("Could not load history from %s: %s", self.history_path, e)
            print(f"Warning: Could not load history: {e}")
            return CommandHistory(max_size=max_size)
        return CommandHistory(lines, max_size=max_size)

    def save_history(self, history: CommandHistory) -> None:
        entries = history.entries()
        try:
            self.history_path.write_text("".join(f"{e}\n" for e in entries), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save history to %s: %s", self.history_path, e)
            print(f"Warning: Could not save history: {e}")
