from __future__ import annotations

try:
    from openai import OpenAI as _OpenAI
except ImportError:
    _OpenAI = None  # type: ignore[assignment,misc]

from ghr_core.providers.base import BaseAssistant


class OpenAIAssistant(BaseAssistant):
    MODEL = "gpt-4o"
    TEMPERATURE = 0.2

    def __init__(self, api_key: str, **kwargs):
        if _OpenAI is None:
            raise ImportError(
                "The 'openai' package is required for this provider. " "Install it with: pip install 'ghr[openai]'"
            )
        super().__init__(**kwargs)
        self.client = _OpenAI(api_key=api_key, timeout=self.timeout)

    def _call_api(self, system_instruction: str | None, messages: list[dict]) -> str | None:
        chat = [{"role": "system", "content": system_instruction}] if system_instruction else []
        chat.extend({"role": m["role"], "content": m["content"]} for m in messages)
        response = self.client.chat.completions.create(
            model=self.model,
            messages=chat,
            temperature=self.temperature,
            max_tokens=self.MAX_TOKENS,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content
