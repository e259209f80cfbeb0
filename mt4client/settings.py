"""Client configuration using Pydantic Settings.

Automatic environment variable loading with MT4_ prefix.

Configuration Sources (precedence high to low):
1. Explicit keyword arguments to the client constructors
2. Environment variables (MT4_*)
3. .env file
4. Defaults defined here

Usage:
    >>> from mt4client.settings import ClientSettings
    >>> settings = ClientSettings()  # loads from env
    >>> print(settings.address)  # tcp://localhost:28282 or env override
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mt4client.constants import ProtocolConstants as c


class ClientSettings(BaseSettings):
    """Terminal bridge configuration with automatic env loading.

    All fields auto-load from environment variables with MT4_ prefix,
    e.g. ``MT4_ADDRESS=tcp://10.0.0.5:28282``.
    """

    model_config = SettingsConfigDict(
        env_prefix="MT4_",
        frozen=True,
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # =========================================================================
    # NETWORK
    # =========================================================================
    address: str = c.Defaults.ADDRESS

    # =========================================================================
    # TIMEOUTS (milliseconds)
    # =========================================================================
    request_timeout_ms: int = Field(default=c.Defaults.REQUEST_TIMEOUT_MS, ge=0)
    """Bound on a single send (ZMQ SNDTIMEO)."""

    response_timeout_ms: int = Field(default=c.Defaults.RESPONSE_TIMEOUT_MS, ge=0)
    """Bound on a single receive (ZMQ RCVTIMEO)."""

    indicator_timeout_ms: int = Field(default=c.Defaults.INDICATOR_TIMEOUT_MS, ge=0)
    """Chart-load hint sent inside RUN_INDICATOR requests."""

    ohlcv_timeout_ms: int = Field(default=c.Defaults.OHLCV_TIMEOUT_MS, ge=0)
    """Load hint sent inside GET_OHLCV requests issued by the CLI."""

    # =========================================================================
    # ORDER DEFAULTS
    # =========================================================================
    close_if_opened: bool = c.Defaults.CLOSE_IF_OPENED

    # =========================================================================
    # SOCKET OPTIONS
    # =========================================================================
    high_water_mark: int = Field(default=c.Defaults.HIGH_WATER_MARK, ge=0)
    linger_ms: int = Field(default=c.Defaults.LINGER_MS, ge=-1)


__all__ = ["ClientSettings"]
