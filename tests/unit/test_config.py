"""Unit tests for ActivityConfig."""

from __future__ import annotations

import pytest

from ghactivity.config import LOG_LEVEL_ENV_VAR, ActivityConfig


class TestActivityConfig:
    """Tests for ActivityConfig dataclass."""

    def test_defaults(self) -> None:
        """Diagnostics default to WARN with no invalid input recorded."""
        config = ActivityConfig()
        assert config.log_level == "WARN", "Default log level should be WARN"
        assert config.invalid_log_level is None

    @pytest.mark.parametrize(
        ("env_value", "expected_level", "expected_invalid"),
        [
            pytest.param(None, "WARN", None, id="unset"),
            pytest.param("   ", "WARN", None, id="blank"),
            pytest.param("debug", "DEBUG", None, id="lowercase"),
            pytest.param("TRACE", "TRACE", None, id="trace"),
            pytest.param("chatty", "WARN", "chatty", id="invalid"),
        ],
    )
    def test_from_env_configuration(
        self,
        monkeypatch: pytest.MonkeyPatch,
        env_value: str | None,
        expected_level: str,
        expected_invalid: str | None,
    ) -> None:
        """from_env reads GHACTIVITY_LOG_LEVEL."""
        if env_value is None:
            monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)
        else:
            monkeypatch.setenv(LOG_LEVEL_ENV_VAR, env_value)

        config = ActivityConfig.from_env()

        assert config.log_level == expected_level
        assert config.invalid_log_level == expected_invalid
