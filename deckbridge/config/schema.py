"""Configuration schema using Pydantic.

Read from ~/.deckbridge/config.json and DECKBRIDGE_* environment variables
(nested with ``__``, e.g. DECKBRIDGE_LOGGING__LEVEL=DEBUG).
"""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TransportConfig(BaseModel):
    """Socket-level settings."""
    loopback_host: str = "localhost"  # Host used when the address is a bare port
    ping_interval: float | None = None  # Keepalive pings in seconds; None leaves liveness to the host
    max_size: int | None = 16 * 1024 * 1024  # Largest inbound frame accepted, in bytes


class LoggingConfig(BaseModel):
    """Loguru sinks."""
    level: str = "INFO"
    file: bool = False  # Rotating file under ~/.deckbridge/logs
    forward_to_host: bool = False  # Ship records to the host log via logMessage
    forward_level: str = "INFO"


class DeckBridgeConfig(BaseSettings):
    """Root configuration for deckbridge."""
    transport: TransportConfig = Field(default_factory=TransportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="DECKBRIDGE_",
        env_nested_delimiter="__",
    )
