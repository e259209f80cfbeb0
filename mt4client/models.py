"""Pydantic 2 models for mt4client.

Immutable value types for the documents the terminal bridge returns.
Unknown fields in a response are ignored, missing optional fields take
their defaults.

Usage:

    # Parse a response value
    account = MT4Models.Account.from_response(payload)

    # Parse a list of bars
    bars = MT4Models.OHLCV.list_from_response(payload)
"""

from __future__ import annotations

from typing import Annotated, Any, Self

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from mt4client.constants import ProtocolConstants as c
from mt4client.enums import (
    AccountStopoutMode,
    AccountTradeMode,
    OrderType,
    SymbolCalcMode,
    SymbolSwapMode,
    SymbolTradeExecution,
    SymbolTradeMode,
)
from mt4client.types import MT4Types

# Ticket ranges of the two protocol dialects
NarrowTicket = Annotated[int, Field(ge=0, le=c.Ticket.NARROW_MAX)]
WideTicket = Annotated[int, Field(ge=0, le=c.Ticket.WIDE_MAX)]

_TICK_FIELDS = ("time", "bid", "ask", "last", "volume")


class MT4Models:
    """Container for all response models.

    All models are nested for clean namespace:
    - Base: Base class for response models
    - Account: Trading account snapshot
    - SymbolTick: Point-in-time price sample
    - Symbol: Instrument properties with embedded tick
    - OHLCV: Price bar
    - Signal: Public trading signal
    - Order: Order/position with 32-bit ticket
    - MT5Order: Order/position with 64-bit ticket
    """

    class Base(BaseModel):
        """Base class for response models.

        Provides a generic `from_response()` factory that handles:
        - None input (returns None)
        - Mappings from a decoded response
        - Objects with attributes (including other models)
        """

        model_config = ConfigDict(frozen=True, from_attributes=True)

        @classmethod
        def from_response(cls, obj: object) -> Self | None:
            """Create model from a decoded response value.

            Args:
                obj: Dict, object with matching attributes, or None.

            Returns:
                Model instance or None if obj is None.

            """
            if obj is None:
                return None
            return cls.model_validate(obj)

        @classmethod
        def list_from_response(cls, obj: object) -> list[Self]:
            """Create a list of models from a decoded JSON array (None -> [])."""
            if obj is None:
                return []
            if not isinstance(obj, list):
                msg = f"Expected a list of {cls.__name__}, got {type(obj).__name__}"
                raise TypeError(msg)
            return [cls.model_validate(item) for item in obj]

    class Account(Base):
        """Trading account state."""

        login: int
        trade_mode: AccountTradeMode = AccountTradeMode.DEMO
        name: str = ""
        server: str = ""
        currency: str = ""
        company: str = ""
        leverage: int = 0
        limit_orders: int = 0
        margin_so_mode: AccountStopoutMode = AccountStopoutMode.PERCENT
        trade_allowed: bool = False
        trade_expert: bool = False
        balance: float = 0.0
        credit: float = 0.0
        profit: float = 0.0
        equity: float = 0.0
        margin: float = 0.0
        margin_free: float = 0.0
        margin_level: float = 0.0
        margin_so_call: float = 0.0
        margin_so_so: float = 0.0

        @computed_field
        @property
        def is_real(self) -> bool:
            """Check if this is a real-money account."""
            return AccountTradeMode.is_real_trading(self.trade_mode)

    class SymbolTick(Base):
        """Price sample: (time, bid, ask, last, volume)."""

        time: int
        bid: float
        ask: float
        last: float = 0.0
        volume: int = 0

        @computed_field
        @property
        def spread(self) -> float:
            """Ask minus bid, in price units."""
            return self.ask - self.bid

    class Symbol(Base):
        """Tradable instrument properties.

        The bridge may send the current prices either as an embedded ``tick``
        object or as flat ``bid``/``ask`` fields; both forms are accepted.
        """

        name: str
        point: float = 0.0
        digits: int = 0
        volume_min: float = 0.0
        volume_step: float = 0.0
        volume_max: float = 0.0
        trade_contract_size: float = 0.0
        trade_tick_value: float = 0.0
        trade_tick_size: float = 0.0
        trade_stops_level: int = 0
        trade_freeze_level: int = 0
        select: bool = False
        visible: bool = False
        spread: int = 0
        spread_float: bool = False
        trade_mode: SymbolTradeMode = SymbolTradeMode.FULL
        trade_calc_mode: SymbolCalcMode = SymbolCalcMode.FOREX
        trade_exemode: SymbolTradeExecution = SymbolTradeExecution.INSTANT
        swap_mode: SymbolSwapMode = SymbolSwapMode.POINTS
        swap_long: float = 0.0
        swap_short: float = 0.0
        swap_rollover3days: int = 0
        margin_initial: float = 0.0
        margin_maintenance: float = 0.0
        tick: MT4Models.SymbolTick | None = None

        @model_validator(mode="before")
        @classmethod
        def _embed_flat_tick(cls, data: Any) -> Any:
            if not isinstance(data, dict) or data.get("tick") is not None:
                return data
            if "bid" not in data or "ask" not in data:
                return data
            data = dict(data)
            data["tick"] = {k: data.pop(k) for k in _TICK_FIELDS if k in data}
            data["tick"].setdefault("time", 0)
            return data

        @property
        def bid(self) -> float | None:
            """Current bid, None if no tick was sent."""
            return None if self.tick is None else self.tick.bid

        @property
        def ask(self) -> float | None:
            """Current ask, None if no tick was sent."""
            return None if self.tick is None else self.tick.ask

        def normalize_price(self, price: float) -> float:
            """Round a price to the symbol's precision."""
            return round(price, self.digits)

        def points_to_price(self, points: int) -> float:
            """Convert a distance in points to price units."""
            return self.normalize_price(points * self.point)

    class OHLCV(Base):
        """Price bar. Extra fields such as spread are ignored."""

        time: int
        open: float
        high: float
        low: float
        close: float
        tick_volume: int

        def as_tuple(self) -> tuple[int, float, float, float, float, int]:
            """Return (time, open, high, low, close, tick_volume)."""
            return (
                self.time,
                self.open,
                self.high,
                self.low,
                self.close,
                self.tick_volume,
            )

        @classmethod
        def to_rates_array(cls, bars: list[MT4Models.OHLCV]) -> MT4Types.RatesArray:
            """Pack bars into a numpy structured array (see MT4Types.RATES_DTYPE)."""
            return np.array([bar.as_tuple() for bar in bars], dtype=MT4Types.RATES_DTYPE)

    class Signal(Base):
        """Public trading signal metadata."""

        name: str
        id: int = 0
        author_login: str = ""
        broker: str = ""
        broker_server: str = ""
        currency: str = ""
        date_published: int = 0
        date_started: int = 0
        leverage: int = 0
        pips: int = 0
        rating: int = 0
        subscribers: int = 0
        trades: int = 0
        trade_mode: int = 0
        balance: float = 0.0
        equity: float = 0.0
        gain: float = 0.0
        max_drawdown: float = 0.0
        price: float = 0.0
        roi: float = 0.0

    class OrderBase(Base):
        """Fields shared by both ticket widths.

        ``order_type`` must be a known :class:`OrderType` id; anything else
        fails validation. Times are terminal-formatted strings such as
        ``"2023.11.15 10:00:00"``.
        """

        magic_number: int = 0
        symbol: str
        order_type: OrderType
        lots: float
        open_price: float = 0.0
        close_price: float = 0.0
        open_time: str | None = None
        close_time: str | None = None
        expiration: str | None = None
        sl: float = 0.0
        tp: float = 0.0
        profit: float = 0.0
        commission: float = 0.0
        swap: float = 0.0
        comment: str = ""

        @computed_field
        @property
        def is_pending(self) -> bool:
            """Check if this is a pending order rather than a position."""
            return OrderType.is_pending(self.order_type)

        @computed_field
        @property
        def is_buy(self) -> bool:
            """Check if this order is in the buy direction."""
            return OrderType.is_buy(self.order_type)

        @property
        def is_closed(self) -> bool:
            """Check if the order has a close time (historical)."""
            return bool(self.close_time)

    class Order(OrderBase):
        """Order or position from the 32-bit ticket dialect."""

        ticket: NarrowTicket

    class MT5Order(OrderBase):
        """Order or position from the 64-bit ticket dialect."""

        ticket: WideTicket


MT4Models.Symbol.model_rebuild()

__all__ = ["MT4Models", "NarrowTicket", "WideTicket"]
