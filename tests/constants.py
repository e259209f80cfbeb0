"""Centralized test constants for the mt4client test suite.

Organized by domain namespaces.

Usage (Test Constants - tc):
    from tests.constants import TestConstants as tc
    symbol = tc.Market.SYMBOL
    ticket = tc.Orders.TICKET

Usage (Source Constants - c):
    from mt4client.constants import ProtocolConstants as c
    action = c.Request.GET_OHLCV
"""

from __future__ import annotations

from typing import Any, Final


class TestConstants:
    """Centralized constants for all tests.

    All constants accessed directly via tc.* (no additional aliases).
    """

    __test__ = False

    # =========================================================================
    # CONNECTION
    # =========================================================================

    class Connection:
        """Endpoint and timeout constants."""

        ADDRESS: Final = "tcp://localhost:28282"
        REMOTE_ADDRESS: Final = "tcp://10.0.0.5:28282"
        REQUEST_TIMEOUT_MS: Final[int] = 2000
        RESPONSE_TIMEOUT_MS: Final[int] = 3000
        INDICATOR_TIMEOUT_MS: Final[int] = 5000

    # =========================================================================
    # MARKET DATA
    # =========================================================================

    class Market:
        """Symbols, bars and prices."""

        SYMBOL: Final = "EURUSD"
        OTHER_SYMBOL: Final = "GBPUSD"
        BAR_TIME: Final[int] = 1700000000
        OHLCV_TIMEOUT_MS: Final[int] = 5000
        OHLCV_LIMIT: Final[int] = 10

        BAR: Final[dict[str, Any]] = {
            "time": 1700000000,
            "open": 1.1,
            "high": 1.2,
            "low": 1.0,
            "close": 1.15,
            "tick_volume": 42,
        }

        SYMBOL_INFO: Final[dict[str, Any]] = {
            "name": "EURUSD",
            "point": 0.00001,
            "digits": 5,
            "volume_min": 0.01,
            "volume_step": 0.01,
            "volume_max": 100.0,
            "trade_mode": 4,
            "tick": {
                "time": 1700000000,
                "bid": 1.08512,
                "ask": 1.08527,
                "last": 0.0,
                "volume": 0,
            },
        }

        SIGNAL_INFO: Final[dict[str, Any]] = {
            "name": "Steady Growth",
            "id": 12345,
            "author_login": "trader1",
            "currency": "USD",
            "gain": 12.5,
            "subscribers": 30,
        }

    # =========================================================================
    # ACCOUNT
    # =========================================================================

    class Account:
        """Account documents."""

        LOGIN: Final[int] = 1000001
        PARTIAL: Final[dict[str, Any]] = {
            "login": 1000001,
            "name": "Test Account",
            "server": "Broker-Demo",
            "currency": "USD",
            "leverage": 100,
            "balance": 10000.0,
        }

    # =========================================================================
    # ORDERS
    # =========================================================================

    class Orders:
        """Order documents and tickets."""

        TICKET: Final[int] = 12345678
        WIDE_TICKET: Final[int] = 2**40 + 7
        MAGIC: Final[int] = 123456
        LOTS: Final[float] = 0.1
        COMMENT: Final = "pytest test order"
        OPEN_TIME: Final = "2023.11.15 10:00:00"

        ORDER: Final[dict[str, Any]] = {
            "ticket": 12345678,
            "magic_number": 123456,
            "symbol": "EURUSD",
            "order_type": 0,
            "lots": 0.1,
            "open_price": 1.08527,
            "open_time": "2023.11.15 10:00:00",
            "sl": 0.0,
            "tp": 0.0,
            "profit": 1.5,
            "comment": "pytest test order",
        }

    # =========================================================================
    # ERRORS
    # =========================================================================

    class Errors:
        """Server error triples."""

        NO_CONNECTION: Final[dict[str, Any]] = {
            "error_code": 6,
            "error_code_description": "ERR_NO_CONNECTION",
            "error_message": "No connection",
        }
        UNMAPPED_CODE: Final[int] = 9999
