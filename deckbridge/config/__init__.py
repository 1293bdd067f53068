"""Configuration module for deckbridge."""

from deckbridge.config.loader import get_config_path, get_logs_dir, load_config
from deckbridge.config.schema import DeckBridgeConfig, LoggingConfig, TransportConfig

__all__ = ["DeckBridgeConfig", "LoggingConfig", "TransportConfig", "get_config_path", "get_logs_dir", "load_config"]
