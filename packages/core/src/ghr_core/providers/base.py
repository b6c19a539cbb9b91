"""Base chat assistant implementing the Template Method pattern.

All providers share the same request flow:
    reply() / converse() → _call_with_retry() → _call_api()   ← only this differs per provider
                         → _validate()

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text response

Messages are kept in a provider-neutral shape, ``{"role": "user" |
"assistant", "content": str}``; each provider maps them onto its own SDK
types inside _call_api.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

_MAX_RETRIES = 3
_MAX_TOKENS = 4096


class AssistantError(RuntimeError):
    """Raised when the assistant cannot produce a usable reply."""


class BaseAssistant(ABC):
    MODEL: str = ""
    TEMPERATURE: float = 0.7
    MAX_RETRIES: int = _MAX_RETRIES
    MAX_TOKENS: int = _MAX_TOKENS

    def __init__(
        self,
        model: str | None = None,
        system_instruction: str | None = None,
        temperature: float | None = None,
        timeout: float = 30,
    ):
        self.model = model or self.MODEL
        self.system_instruction = system_instruction
        self.temperature = self.TEMPERATURE if temperature is None else temperature
        self.timeout = timeout
        self._history: list[dict] = []

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def reply(self, user_text: str) -> str:
        """Send one message without touching the conversation history."""
        messages = [{"role": "user", "content": user_text}]
        return self._validate(self._call_with_retry(self.system_instruction, messages))

    def converse(self, user_text: str) -> str:
        """Send a message as the next turn of the ongoing conversation.

        The user turn is only kept when a reply comes back, so a failed call
        leaves the history as it was.
        """
        messages = [*self._history, {"role": "user", "content": user_text}]
        text = self._validate(self._call_with_retry(self.system_instruction, messages))
        self._history = [*messages, {"role": "assistant", "content": text}]
        return text

    def clear_history(self) -> None:
        self._history = []

    @property
    def history(self) -> list[dict]:
        return [dict(m) for m in self._history]

    # ------------------------------------------------------------------ #
    # Abstract: implement in each provider                                #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, system_instruction: str | None, messages: list[dict]) -> str | None:
        """Make a single API call and return the raw text response.

        It should raise on transport failure; _call_with_retry handles
        retries and logging.
        """

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _call_with_retry(self, system_instruction: str | None, messages: list[dict]) -> str | None:
        """Retry _call_api up to MAX_RETRIES times with exponential backoff."""
        for attempt in range(self.MAX_RETRIES):
            try:
                return self._call_api(system_instruction, messages)
            except Exception as e:
                if attempt == self.MAX_RETRIES - 1:
                    logger.error(
                        "%s API failed after %d attempts: %s",
                        self.__class__.__name__,
                        self.MAX_RETRIES,
                        e,
                    )
                    raise AssistantError(f"{self.__class__.__name__} request failed: {e}") from e
                delay = 2**attempt
                logger.warning(
                    "%s API error (attempt %d/%d): %s. Retrying in %ds...",
                    self.__class__.__name__,
                    attempt + 1,
                    self.MAX_RETRIES,
                    e,
                    delay,
                )
                time.sleep(delay)
        return None

    def _validate(self, raw: str | None) -> str:
        if raw is None or not raw.strip():
            raise AssistantError(f"{self.__class__.__name__}: no text found in response.")
        return raw.strip()
