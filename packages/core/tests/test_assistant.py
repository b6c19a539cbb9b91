"""Tests for assistant construction and the file question prompt."""

from unittest.mock import patch

import pytest

from ghr_core.assistant import SYSTEM_INSTRUCTION, build_assistant, build_file_question


def _config(**overrides):
    config = {
        "assistant": "gemini",
        "assistant_model": None,
        "assistant_temperature": None,
        "assistant_timeout": 30,
        "gemini_api_key": "g-key",
        "anthropic_api_key": None,
        "openai_api_key": None,
    }
    config.update(overrides)
    return config


class TestBuildAssistant:
    def test_returns_none_without_api_key(self):
        assert build_assistant(_config(gemini_api_key=None)) is None

    def test_unknown_provider_raises(self):
        with pytest.raises(ValueError, match="Unknown assistant provider"):
            build_assistant(_config(assistant="bard"))

    def test_builds_configured_provider(self):
        with patch("ghr_core.assistant.GeminiAssistant") as mock_cls:
            with patch.dict("ghr_core.assistant._PROVIDERS", {"gemini": mock_cls}):
                result = build_assistant(_config(assistant_model="gemini-2.0-pro", assistant_timeout=10))

        assert result is mock_cls.return_value
        mock_cls.assert_called_once_with(
            api_key="g-key",
            model="gemini-2.0-pro",
            system_instruction=SYSTEM_INSTRUCTION,
            temperature=None,
            timeout=10,
        )

    def test_uses_the_key_of_the_chosen_provider(self):
        with patch("ghr_core.providers.openai._OpenAI"):
            assert build_assistant(_config(assistant="openai")) is None
            assistant = build_assistant(_config(assistant="openai", openai_api_key="o-key"))
        assert assistant.model == "gpt-4o"

    @pytest.mark.parametrize(
        "provider,patch_target,expected",
        [
            ("anthropic", "anthropic.Anthropic", 0.3),
            ("openai", "ghr_core.providers.openai._OpenAI", 0.2),
            ("gemini", "google.genai.Client", 0.9),
        ],
    )
    def test_default_config_keeps_provider_temperature(self, provider, patch_target, expected):
        from ghr_core.config import DEFAULT_CONFIG

        config = {**DEFAULT_CONFIG, "assistant": provider, f"{provider}_api_key": "key"}
        with patch(patch_target):
            assistant = build_assistant(config)
        assert assistant.temperature == expected

    def test_configured_temperature_wins(self):
        with patch("anthropic.Anthropic"):
            assistant = build_assistant(_config(assistant="anthropic", anthropic_api_key="a", assistant_temperature=0.6))
        assert assistant.temperature == 0.6


class TestBuildFileQuestion:
    def test_contains_pr_file_diff_and_question(self):
        prompt = build_file_question(12, "src/app.py", "+new line", "Is this safe?")
        assert "pull request #12" in prompt
        assert "`src/app.py`" in prompt
        assert "+new line" in prompt
        assert prompt.rstrip().endswith("Is this safe?")

    def test_long_diff_is_truncated(self):
        prompt = build_file_question(1, "a.py", "x" * 30000, "q")
        assert "[diff truncated]" in prompt
        assert "x" * 30000 not in prompt
