import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "repo": None,  # owner/name; None = detect from gh CLI or git remote
    "assistant": "gemini",
    "assistant_model": None,  # None = provider default
    "assistant_temperature": None,  # None = provider default
    "assistant_timeout": 30,
    "history_max_size": 100,
    "pr_list_limit": 50,
    "session_file": ".ghr_session",
    "history_file": ".ghr_command_history",
}

ASSISTANT_KEY_ENV = {
    "gemini": "GEMINI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def load_config(config_path: str = ".ghr.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .ghr.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping, got {type(file_config).__name__}.")
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials from environment variables
    config["gemini_api_key"] = os.environ.get("GEMINI_API_KEY")
    config["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")

    return config


def assistant_api_key(config: dict) -> str | None:
    """Return the API key for the configured assistant provider, or None."""
    provider = config.get("assistant") or ""
    return config.get(f"{provider}_api_key")
