"""Tests for environment-driven client settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from mt4client.constants import ProtocolConstants as c
from mt4client.settings import ClientSettings
from tests.constants import TestConstants as tc

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate from MT4_* variables and any .env in the working directory."""
    for name in (
        "MT4_ADDRESS",
        "MT4_REQUEST_TIMEOUT_MS",
        "MT4_RESPONSE_TIMEOUT_MS",
        "MT4_INDICATOR_TIMEOUT_MS",
        "MT4_OHLCV_TIMEOUT_MS",
        "MT4_CLOSE_IF_OPENED",
        "MT4_HIGH_WATER_MARK",
        "MT4_LINGER_MS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestClientSettings:
    """Test defaults and overrides."""

    def test_defaults(self) -> None:
        """Defaults match the protocol constants."""
        settings = ClientSettings()
        assert settings.address == c.Defaults.ADDRESS
        assert settings.request_timeout_ms == 10000
        assert settings.response_timeout_ms == 10000
        assert settings.indicator_timeout_ms == 5000
        assert settings.ohlcv_timeout_ms == 5000
        assert settings.close_if_opened is True
        assert settings.high_water_mark == 1
        assert settings.linger_ms == 0

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """MT4_* variables override defaults."""
        monkeypatch.setenv("MT4_ADDRESS", tc.Connection.REMOTE_ADDRESS)
        monkeypatch.setenv("MT4_RESPONSE_TIMEOUT_MS", "250")
        monkeypatch.setenv("MT4_CLOSE_IF_OPENED", "false")
        settings = ClientSettings()
        assert settings.address == tc.Connection.REMOTE_ADDRESS
        assert settings.response_timeout_ms == 250
        assert settings.close_if_opened is False

    def test_dotenv_file(self, tmp_path: Path) -> None:
        """A .env file in the working directory is read."""
        (tmp_path / ".env").write_text("MT4_LINGER_MS=100\n", encoding="utf-8")
        assert ClientSettings().linger_ms == 100

    def test_negative_timeout_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Timeouts must be non-negative."""
        monkeypatch.setenv("MT4_REQUEST_TIMEOUT_MS", "-1")
        with pytest.raises(ValidationError):
            ClientSettings()

    def test_frozen(self) -> None:
        """Settings are immutable."""
        settings = ClientSettings()
        with pytest.raises(ValidationError):
            settings.address = tc.Connection.REMOTE_ADDRESS  # type: ignore[misc]
