"""
Terminal constants as Python IntEnum classes.

This module provides type-safe enum definitions for the closed vocabularies
of the bridge protocol: order types, account and symbol modes, and the
discriminators passed to technical indicators.
Using IntEnum allows these values to be sent directly as integers while
providing type safety, IDE autocomplete, and self-documenting code.

Example:
    >>> from mt4client.enums import OrderType, AppliedPrice
    >>> order_type = OrderType.BUY_LIMIT
    >>> print(order_type.value)  # 2
    >>> print(order_type.label)  # BUY-LIMIT
    >>> print(OrderType.is_pending(order_type))  # True
"""

from __future__ import annotations

from enum import IntEnum, unique

# =============================================================================
# ACCOUNT ENUMS
# =============================================================================


@unique
class AccountStopoutMode(IntEnum):
    """Account stop out mode."""

    PERCENT = 0
    MONEY = 1


@unique
class AccountTradeMode(IntEnum):
    """Account trade mode."""

    DEMO = 0
    CONTEST = 1
    REAL = 2

    @classmethod
    def is_real_trading(cls, mode: int) -> bool:
        """Check if account allows real trading."""
        return mode == cls.REAL


# =============================================================================
# DAY OF WEEK
# =============================================================================


@unique
class DayOfWeek(IntEnum):
    """Day of week constants."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def is_weekend(cls, day: int) -> bool:
        """Check if day is weekend."""
        return day in (cls.SATURDAY, cls.SUNDAY)


# =============================================================================
# ORDER ENUMS
# =============================================================================


_ORDER_TYPE_LABELS = {
    0: "MARKET-BUY",
    1: "MARKET-SELL",
    2: "BUY-LIMIT",
    3: "BUY-STOP",
    4: "SELL-LIMIT",
    5: "SELL-STOP",
}


@unique
class OrderType(IntEnum):
    """Order type as numbered by the bridge.

    Note the bridge's own numbering: pending types are ordered
    BUY_LIMIT, BUY_STOP, SELL_LIMIT, SELL_STOP.
    """

    BUY = 0
    SELL = 1
    BUY_LIMIT = 2
    BUY_STOP = 3
    SELL_LIMIT = 4
    SELL_STOP = 5

    @property
    def label(self) -> str:
        """Human-readable label, e.g. ``MARKET-BUY``."""
        return _ORDER_TYPE_LABELS[self.value]

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_id(cls, type_id: int) -> OrderType | None:
        """Look up an order type by numeric id, None if unknown."""
        try:
            return cls(type_id)
        except ValueError:
            return None

    @classmethod
    def is_market(cls, order_type: int) -> bool:
        """Check if order type is market order."""
        return order_type in (cls.BUY, cls.SELL)

    @classmethod
    def is_pending(cls, order_type: int) -> bool:
        """Check if order type is pending order."""
        return order_type in (
            cls.BUY_LIMIT,
            cls.BUY_STOP,
            cls.SELL_LIMIT,
            cls.SELL_STOP,
        )

    @classmethod
    def is_buy(cls, order_type: int) -> bool:
        """Check if order is a buy direction."""
        return order_type in (cls.BUY, cls.BUY_LIMIT, cls.BUY_STOP)

    @classmethod
    def is_sell(cls, order_type: int) -> bool:
        """Check if order is a sell direction."""
        return order_type in (cls.SELL, cls.SELL_LIMIT, cls.SELL_STOP)


# =============================================================================
# SYMBOL ENUMS
# =============================================================================


@unique
class SymbolCalcMode(IntEnum):
    """Symbol profit calculation mode."""

    FOREX = 0
    CFD = 1
    FUTURES = 2
    CFDINDEX = 3


@unique
class SymbolSwapMode(IntEnum):
    """Symbol swap calculation mode."""

    POINTS = 0
    CURRENCY_SYMBOL = 1
    INTEREST = 2
    CURRENCY_MARGIN = 3


@unique
class SymbolTradeExecution(IntEnum):
    """Symbol trade execution mode."""

    REQUEST = 0
    INSTANT = 1
    MARKET = 2
    EXCHANGE = 3


@unique
class SymbolTradeMode(IntEnum):
    """Symbol trade mode."""

    DISABLED = 0
    LONGONLY = 1
    SHORTONLY = 2
    CLOSEONLY = 3
    FULL = 4

    @classmethod
    def can_open(cls, mode: int) -> bool:
        """Check if new positions may be opened."""
        return mode in (cls.LONGONLY, cls.SHORTONLY, cls.FULL)


# =============================================================================
# INDICATOR DISCRIMINATORS
# =============================================================================


@unique
class AppliedPrice(IntEnum):
    """Price series an indicator is computed on."""

    CLOSE = 0
    OPEN = 1
    HIGH = 2
    LOW = 3
    MEDIAN = 4  # (high + low) / 2
    TYPICAL = 5  # (high + low + close) / 3
    WEIGHTED = 6  # (high + low + close + close) / 4


@unique
class SmoothingMethod(IntEnum):
    """Moving average smoothing method."""

    SMA = 0
    EMA = 1
    SMMA = 2
    LWMA = 3


@unique
class PriceField(IntEnum):
    """Price field used by the Stochastic oscillator."""

    LOW_HIGH = 0
    CLOSE_CLOSE = 1


@unique
class ADXLine(IntEnum):
    """Output line of iADX."""

    MAIN = 0
    PLUSDI = 1
    MINUSDI = 2


@unique
class AlligatorLine(IntEnum):
    """Output line of iAlligator."""

    GATORJAW = 1
    GATORTEETH = 2
    GATORLIPS = 3


@unique
class BandsLine(IntEnum):
    """Output line of iBands, iEnvelopes, iFractals and iGator."""

    MAIN = 0
    UPPER = 1
    LOWER = 2


@unique
class IchimokuLine(IntEnum):
    """Output line of iIchimoku."""

    TENKANSEN = 1
    KIJUNSEN = 2
    SENKOUSPANA = 3
    SENKOUSPANB = 4
    CHIKOUSPAN = 5


@unique
class MACDLine(IntEnum):
    """Output line of iMACD, iRVI and iStochastic."""

    MAIN = 0
    SIGNAL = 1


# =============================================================================
# ALL ENUMS EXPORT
# =============================================================================

__all__ = [
    # Account
    "AccountStopoutMode",
    "AccountTradeMode",
    # Day of week
    "DayOfWeek",
    # Order
    "OrderType",
    # Symbol
    "SymbolCalcMode",
    "SymbolSwapMode",
    "SymbolTradeExecution",
    "SymbolTradeMode",
    # Indicators
    "ADXLine",
    "AlligatorLine",
    "AppliedPrice",
    "BandsLine",
    "IchimokuLine",
    "MACDLine",
    "PriceField",
    "SmoothingMethod",
]
