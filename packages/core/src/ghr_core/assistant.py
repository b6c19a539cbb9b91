"""Assistant construction and the review-specific prompt around it."""

from __future__ import annotations

from ghr_core.config import assistant_api_key
from ghr_core.providers.anthropic import AnthropicAssistant
from ghr_core.providers.base import BaseAssistant
from ghr_core.providers.gemini import GeminiAssistant
from ghr_core.providers.openai import OpenAIAssistant

SYSTEM_INSTRUCTION = (
    "You are a helpful code review assistant. Help developers understand code changes, "
    "identify potential issues, and suggest improvements."
)

_PROVIDERS: dict[str, type[BaseAssistant]] = {
    "gemini": GeminiAssistant,
    "anthropic": AnthropicAssistant,
    "openai": OpenAIAssistant,
}

# Diffs beyond this are truncated before being sent as conversation context.
_MAX_DIFF_CHARS = 20000


def build_assistant(config: dict) -> BaseAssistant | None:
    """Return the configured assistant, or None when no API key is set."""
    provider = config.get("assistant", "gemini")
    cls = _PROVIDERS.get(provider)
    if cls is None:
        raise ValueError(f"Unknown assistant provider: {provider!r}. Choose one of {', '.join(_PROVIDERS)}.")

    api_key = assistant_api_key(config)
    if not api_key:
        return None

    return cls(
        api_key=api_key,
        model=config.get("assistant_model"),
        system_instruction=SYSTEM_INSTRUCTION,
        temperature=config.get("assistant_temperature"),
        timeout=config.get("assistant_timeout", 30),
    )


def build_file_question(pr_number: int, filename: str, diff: str, question: str) -> str:
    """Wrap a question with the diff of the file under review."""
    if len(diff) > _MAX_DIFF_CHARS:
        diff = diff[:_MAX_DIFF_CHARS] + "\n... [diff truncated]"
    return f"""I am reviewing pull request #{pr_number}. The file under review is `{filename}`.

## Diff
{diff}

## Question
{question}"""
