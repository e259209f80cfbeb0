"""Protocol constants - wire vocabulary for the terminal bridge.

All action names, envelope keys and protocol defaults are defined here.
Access via: from mt4client.constants import ProtocolConstants as c
Usage: c.Request.GET_OHLCV, c.Envelope.ERROR_CODE, c.Defaults.TIMEOUT_MS, etc.
"""

from enum import StrEnum, unique
from typing import Final


class ProtocolConstants:
    """Protocol constants organized by namespace.

    All constants are accessed via c.Namespace.CONSTANT or c.Namespace.Enum.VALUE
    """

    # ==================== REQUEST ACTIONS ====================
    @unique
    class Request(StrEnum):
        """Action discriminators understood by the terminal."""

        GET_ACCOUNT_INFO = "GET_ACCOUNT_INFO"
        GET_SYMBOLS = "GET_SYMBOLS"
        GET_SYMBOL_INFO = "GET_SYMBOL_INFO"
        GET_SIGNALS = "GET_SIGNALS"
        GET_SIGNAL_INFO = "GET_SIGNAL_INFO"
        GET_OHLCV = "GET_OHLCV"
        GET_ORDER = "GET_ORDER"
        GET_ORDERS = "GET_ORDERS"
        GET_HISTORICAL_ORDERS = "GET_HISTORICAL_ORDERS"
        DO_ORDER_SEND = "DO_ORDER_SEND"
        DO_ORDER_MODIFY = "DO_ORDER_MODIFY"
        DO_ORDER_CLOSE = "DO_ORDER_CLOSE"
        DO_ORDER_DELETE = "DO_ORDER_DELETE"
        RUN_INDICATOR = "RUN_INDICATOR"

    # ==================== ENVELOPE ====================
    class Envelope:
        """Top-level keys of request and response documents."""

        ACTION: Final = "action"
        RESPONSE: Final = "response"
        WARNING: Final = "warning"
        ERROR_CODE: Final = "error_code"
        ERROR_CODE_DESCRIPTION: Final = "error_code_description"
        ERROR_MESSAGE: Final = "error_message"

        ERROR_FIELDS: Final = (ERROR_CODE, ERROR_CODE_DESCRIPTION, ERROR_MESSAGE)

    # ==================== REQUEST PARAMETERS ====================
    class Field:
        """Parameter names used by individual requests."""

        NAMES: Final = "names"
        SYMBOL: Final = "symbol"
        TIMEFRAME: Final = "timeframe"
        LIMIT: Final = "limit"
        TIMEOUT: Final = "timeout"
        OFFSET: Final = "offset"
        TICKET: Final = "ticket"
        CLOSE_IF_OPENED: Final = "close_if_opened"
        INDICATOR: Final = "indicator"
        ARGV: Final = "argv"

    # ==================== DEFAULTS ====================
    class Defaults:
        """Protocol defaults (milliseconds unless stated)."""

        ADDRESS: Final = "tcp://localhost:28282"
        REQUEST_TIMEOUT_MS: Final = 10000
        RESPONSE_TIMEOUT_MS: Final = 10000
        INDICATOR_TIMEOUT_MS: Final = 5000
        OHLCV_TIMEOUT_MS: Final = 5000
        OHLCV_LIMIT: Final = 100
        OFFSET: Final = 0
        CLOSE_IF_OPENED: Final = True
        HIGH_WATER_MARK: Final = 1
        LINGER_MS: Final = 0

    # ==================== TICKET RANGES ====================
    class Ticket:
        """Ticket bounds for the two protocol dialects."""

        NARROW_MAX: Final = 2**31 - 1  # signed 32-bit
        WIDE_MAX: Final = 2**64 - 1  # unsigned 64-bit


__all__ = ["ProtocolConstants"]
