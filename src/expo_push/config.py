"""
Configuration management for the Expo push client.

Supports configuration via environment variables and .env files.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://exp.host"
SEND_PUSH_NOTIFICATIONS_PATH = "/--/api/v2/push/send"
GET_PUSH_NOTIFICATION_RECEIPTS_PATH = "/--/api/v2/push/getReceipts"

# Messages with several recipients consume one slot per recipient
PUSH_NOTIFICATION_CHUNK_LIMIT = 100
PUSH_NOTIFICATION_RECEIPT_CHUNK_LIMIT = 300

# Request bodies above this size are gzip-compressed
COMPRESSION_THRESHOLD_BYTES = 1024


class ClientConfig(BaseSettings):
    """
    Configuration settings for the Expo push client.

    All settings can be configured via environment variables with the EXPO_ prefix.
    The instance is frozen: a client reads it for every request and never mutates it.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
    )

    # Authentication
    access_token: Optional[str] = Field(
        default=None,
        description="Expo access token, required when push security is enabled"
    )

    # Endpoint
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the Expo push service"
    )

    # Concurrency and retry settings
    max_concurrent_requests: int = Field(
        default=6,
        ge=1,
        description="Maximum number of HTTP requests in flight per client"
    )
    retry_min_timeout: float = Field(
        default=1.0,
        ge=0,
        description="Delay in seconds before the first retry of a rate-limited request"
    )
    max_retry_attempts: int = Field(
        default=2,
        ge=0,
        description="Maximum retry attempts for rate-limited requests"
    )

    # Timeouts
    attempt_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for a single HTTP attempt"
    )
    total_request_timeout: float = Field(
        default=100.0,
        gt=0,
        description="Timeout in seconds for one chunk request including retries"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format"
    )

    def url_for(self, path: str) -> str:
        """Join the configured base URL with an API path."""
        return self.base_url.rstrip("/") + path


# Global config instance
_config: Optional[ClientConfig] = None


def get_config() -> ClientConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = ClientConfig()
    return _config


def set_config(config: ClientConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
