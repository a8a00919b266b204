"""Tests for configuration and environment variable helpers."""

import pytest

from pydantic import ValidationError

from gastracker.helpers.config import (
    PollerConfig,
    get_float_env,
    get_int_env,
    get_optional_env,
    get_poller_config,
    get_required_env,
)


POLLER_KEYS = (
    "POLL_INTERVAL_SECONDS",
    "RPC_TIMEOUT_SECONDS",
    "POLL_RETRY_ATTEMPTS",
    "POLL_RETRY_DELAY_SECONDS",
    "POLL_MAX_CONCURRENCY",
    "READING_RETENTION_DAYS",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove variables read by the helpers under test."""
    for key in ("TEST_KEY", *POLLER_KEYS):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestGetRequiredEnv:
    """Tests for get_required_env function."""

    def test_returns_env_value_when_set(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test that get_required_env returns value when set."""
        clean_env.setenv("TEST_KEY", "test_value")
        assert get_required_env("TEST_KEY") == "test_value"

    def test_raises_when_not_set(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test that a missing variable raises ValueError."""
        with pytest.raises(ValueError, match="TEST_KEY environment variable is not set"):
            get_required_env("TEST_KEY")

    def test_raises_when_empty(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test that an empty variable counts as missing."""
        clean_env.setenv("TEST_KEY", "")
        with pytest.raises(ValueError):
            get_required_env("TEST_KEY")


class TestGetOptionalEnv:
    """Tests for get_optional_env function."""

    def test_returns_value(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test that the value is returned when set."""
        clean_env.setenv("TEST_KEY", "value")
        assert get_optional_env("TEST_KEY", "default") == "value"

    def test_returns_default(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test that the default is returned when unset."""
        assert get_optional_env("TEST_KEY", "default") == "default"
        assert get_optional_env("TEST_KEY") is None


class TestNumericEnv:
    """Tests for get_float_env and get_int_env."""

    def test_float_default(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test the default is used when unset."""
        assert get_float_env("TEST_KEY", 1.5) == 1.5

    def test_float_value(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test parsing a float."""
        clean_env.setenv("TEST_KEY", "2.25")
        assert get_float_env("TEST_KEY", 1.5) == 2.25

    def test_float_invalid(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test a non-numeric value raises."""
        clean_env.setenv("TEST_KEY", "soon")
        with pytest.raises(ValueError, match="TEST_KEY must be a number"):
            get_float_env("TEST_KEY", 1.5)

    def test_int_value(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test parsing an integer."""
        clean_env.setenv("TEST_KEY", "7")
        assert get_int_env("TEST_KEY", 3) == 7

    def test_int_invalid(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test a float string is not an integer."""
        clean_env.setenv("TEST_KEY", "7.5")
        with pytest.raises(ValueError, match="TEST_KEY must be an integer"):
            get_int_env("TEST_KEY", 3)


class TestPollerConfig:
    """Tests for PollerConfig and get_poller_config."""

    def test_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test default settings."""
        config = get_poller_config()

        assert config == PollerConfig()
        assert config.poll_interval == 60.0
        assert config.rpc_timeout == 10.0
        assert config.retry_attempts == 3
        assert config.retry_delay == 30.0
        assert config.max_concurrency == 10
        assert config.retention_days == 30

    def test_reads_environment(self, clean_env: pytest.MonkeyPatch) -> None:
        """Test every setting is read from its variable."""
        clean_env.setenv("POLL_INTERVAL_SECONDS", "15")
        clean_env.setenv("RPC_TIMEOUT_SECONDS", "2.5")
        clean_env.setenv("POLL_RETRY_ATTEMPTS", "5")
        clean_env.setenv("POLL_RETRY_DELAY_SECONDS", "1")
        clean_env.setenv("POLL_MAX_CONCURRENCY", "4")
        clean_env.setenv("READING_RETENTION_DAYS", "7")

        config = get_poller_config()

        assert config.poll_interval == 15.0
        assert config.rpc_timeout == 2.5
        assert config.retry_attempts == 5
        assert config.retry_delay == 1.0
        assert config.max_concurrency == 4
        assert config.retention_days == 7

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("POLL_INTERVAL_SECONDS", "-1"),
            ("RPC_TIMEOUT_SECONDS", "0"),
            ("POLL_RETRY_ATTEMPTS", "0"),
            ("POLL_MAX_CONCURRENCY", "0"),
            ("READING_RETENTION_DAYS", "0"),
        ],
    )
    def test_rejects_out_of_range(
        self, clean_env: pytest.MonkeyPatch, key: str, value: str
    ) -> None:
        """Test out of range values fail validation."""
        clean_env.setenv(key, value)
        with pytest.raises(ValidationError):
            get_poller_config()
