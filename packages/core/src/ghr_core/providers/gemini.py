from __future__ import annotations

from ghr_core.providers.base import BaseAssistant


class GeminiAssistant(BaseAssistant):
    MODEL = "gemini-2.5-flash"
    # Gemini accepts 0..2, but replies above 1.0 drift off-topic for review
    # questions, so the configured value is clamped to [0, 1].
    TEMPERATURE = 0.9

    def __init__(self, api_key: str, **kwargs):
        try:
            from google import genai
            from google.genai import types
        except ImportError:
            raise ImportError(
                "The 'google-genai' package is required for this provider. "
                "Install it with: pip install 'ghr[gemini]'"
            )
        super().__init__(**kwargs)
        self.temperature = min(1.0, max(0.0, self.temperature))
        # HttpOptions.timeout is in milliseconds.
        self.client = genai.Client(api_key=api_key, http_options=types.HttpOptions(timeout=int(self.timeout * 1000)))

    def _call_api(self, system_instruction: str | None, messages: list[dict]) -> str | None:
        from google.genai import types

        contents = [
            types.Content(
                # Gemini names the assistant side of the conversation "model".
                role="model" if m["role"] == "assistant" else "user",
                parts=[types.Part(text=m["content"])],
            )
            for m in messages
        ]
        response = self.client.models.generate_content(
            model=self.model,
            contents=contents,
            config=types.GenerateContentConfig(
                system_instruction=system_instruction,
                temperature=self.temperature,
                max_output_tokens=self.MAX_TOKENS,
            ),
        )
        return response.text
