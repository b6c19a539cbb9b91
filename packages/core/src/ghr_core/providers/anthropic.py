from __future__ import annotations

from ghr_core.providers.base import BaseAssistant


class AnthropicAssistant(BaseAssistant):
    MODEL = "claude-sonnet-4-20250514"
    TEMPERATURE = 0.3

    def __init__(self, api_key: str, **kwargs):
        try:
            from anthropic import Anthropic
        except ImportError:
            raise ImportError(
                "The 'anthropic' package is required for this provider. "
                "Install it with: pip install 'ghr[anthropic]'"
            )
        super().__init__(**kwargs)
        self.client = Anthropic(api_key=api_key, timeout=self.timeout)

    def _call_api(self, system_instruction: str | None, messages: list[dict]) -> str | None:
        # Imported inside the method because the anthropic package is optional;
        # __init__ already validated it is installed before we reach here.
        from anthropic.types import TextBlock

        kwargs = {}
        if system_instruction:
            kwargs["system"] = system_instruction
        response = self.client.messages.create(
            model=self.model,
            messages=[{"role": m["role"], "content": m["content"]} for m in messages],
            temperature=self.temperature,
            max_tokens=self.MAX_TOKENS,
            **kwargs,
        )
        text_blocks = [block.text for block in response.content if isinstance(block, TextBlock)]
        return "".join(text_blocks)
