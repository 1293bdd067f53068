"""Configuration loading utilities."""

import json
from pathlib import Path
from typing import Any

from deckbridge.config.schema import DeckBridgeConfig


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".deckbridge" / "config.json"


def get_logs_dir() -> Path:
    """Get the directory rotating log files are written to."""
    return Path.home() / ".deckbridge" / "logs"


def load_config(config_path: Path | None = None) -> DeckBridgeConfig:
    """
    Load configuration from file, environment, or defaults.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object. Values from the file win over
        DECKBRIDGE_* environment variables, which win over defaults.
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("config file must be a JSON object")
            return DeckBridgeConfig(**convert_keys(data))
        except (json.JSONDecodeError, ValueError) as e:
            raise ValueError(
                f"Failed to load config from {path}: {e}. "
                "Fix the file or remove it to use defaults."
            ) from e

    return DeckBridgeConfig()


def convert_keys(data: Any) -> Any:
    """Convert camelCase keys to snake_case for Pydantic."""
    if isinstance(data, dict):
        return {camel_to_snake(k): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            result.append("_")
        result.append(char.lower())
    return "".join(result)
