"""
Test suite for client configuration and logging setup.
"""

import io

import pydantic
import pytest
import structlog

import expo_push.config as config_module
import expo_push.logging_config as logging_config
from expo_push.config import (
    DEFAULT_BASE_URL,
    GET_PUSH_NOTIFICATION_RECEIPTS_PATH,
    SEND_PUSH_NOTIFICATIONS_PATH,
    ClientConfig,
    get_config,
    set_config,
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (
        "EXPO_ACCESS_TOKEN",
        "EXPO_BASE_URL",
        "EXPO_MAX_CONCURRENT_REQUESTS",
        "EXPO_RETRY_MIN_TIMEOUT",
        "EXPO_MAX_RETRY_ATTEMPTS",
        "EXPO_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "_config", None)


# ============================================================================
# Test Settings
# ============================================================================

class TestClientConfig:
    """Tests for ClientConfig defaults and overrides."""

    def test_defaults(self):
        config = ClientConfig(_env_file=None)

        assert config.access_token is None
        assert config.base_url == DEFAULT_BASE_URL
        assert config.max_concurrent_requests == 6
        assert config.retry_min_timeout == 1.0
        assert config.max_retry_attempts == 2
        assert config.attempt_timeout == 10.0
        assert config.total_request_timeout == 100.0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("EXPO_ACCESS_TOKEN", "secret")
        monkeypatch.setenv("EXPO_MAX_CONCURRENT_REQUESTS", "3")
        monkeypatch.setenv("EXPO_RETRY_MIN_TIMEOUT", "0.5")

        config = ClientConfig(_env_file=None)

        assert config.access_token == "secret"
        assert config.max_concurrent_requests == 3
        assert config.retry_min_timeout == 0.5

    def test_config_is_frozen(self):
        config = ClientConfig(_env_file=None)

        with pytest.raises(pydantic.ValidationError):
            config.access_token = "changed"

    @pytest.mark.parametrize("field,value", [
        ("max_concurrent_requests", 0),
        ("max_retry_attempts", -1),
        ("retry_min_timeout", -1.0),
        ("attempt_timeout", 0),
        ("total_request_timeout", 0),
    ])
    def test_invalid_values_rejected(self, field, value):
        with pytest.raises(pydantic.ValidationError):
            ClientConfig(_env_file=None, **{field: value})

    def test_url_for(self):
        config = ClientConfig(_env_file=None)

        assert config.url_for(SEND_PUSH_NOTIFICATIONS_PATH) == "https://exp.host/--/api/v2/push/send"
        assert config.url_for(GET_PUSH_NOTIFICATION_RECEIPTS_PATH) == "https://exp.host/--/api/v2/push/getReceipts"

    def test_url_for_strips_trailing_slash(self):
        config = ClientConfig(_env_file=None, base_url="http://localhost:8080/")

        assert config.url_for("/x") == "http://localhost:8080/x"


class TestGlobalConfig:
    """Tests for the global configuration instance."""

    def test_get_config_creates_once(self):
        assert get_config() is get_config()

    def test_set_config(self):
        config = ClientConfig(_env_file=None, access_token="global")

        set_config(config)

        assert get_config() is config


# ============================================================================
# Test Logging Setup
# ============================================================================

class TestLoggingSetup:
    """Tests for structured logging configuration."""

    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    @pytest.mark.parametrize("json_format", [True, False])
    def test_setup_logging_configures_structlog(self, json_format):
        logging_config.setup_logging("DEBUG", json_format=json_format)

        assert structlog.is_configured() is True
        renderer = structlog.get_config()["processors"][-1]
        expected = structlog.processors.JSONRenderer if json_format else structlog.dev.ConsoleRenderer
        assert isinstance(renderer, expected)

    def test_processors_end_with_renderer(self):
        processors = logging_config.build_processors(json_format=True)

        assert structlog.stdlib.filter_by_level in processors
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_setup_from_config(self, monkeypatch):
        calls = []
        monkeypatch.setattr(
            logging_config,
            "setup_logging",
            lambda level, json_format, stream: calls.append((level, json_format, stream)),
        )
        stream = io.StringIO()

        logging_config.setup_logging_from_config(
            ClientConfig(_env_file=None, log_level="WARNING", log_json=True),
            stream=stream,
        )

        assert calls == [("WARNING", True, stream)]
