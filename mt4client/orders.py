"""Order request payloads and their staged builders.

Payloads are sparse: optional fields left unset are omitted from the wire
document entirely. An absent ``sl`` means "leave unchanged", which the
terminal treats differently from an explicit ``0``.

Builders are staged so the target is always bound first:

    >>> order = (
    ...     NewOrder.builder()
    ...     .set_symbol("EURUSD")
    ...     .set_order_type(OrderType.BUY)
    ...     .set_lots(0.1)
    ...     .set_sl_points(100)
    ...     .build()
    ... )
    >>> order.to_request()
    {'symbol': 'EURUSD', 'order_type': 0, 'lots': 0.1, 'sl_points': 100}

    >>> modify = ModifyOrder.builder().set_order(existing).set_tp(1.12).build()

Absolute and points-relative stops may both be set; both are sent and the
terminal decides which wins.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field

from mt4client.enums import OrderType
from mt4client.models import MT4Models, NarrowTicket, WideTicket


class _Payload(BaseModel):
    """Base for request payloads: frozen, sparse on export."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_request(self) -> dict[str, Any]:
        """Export set fields only, enums as their integer ids."""
        return self.model_dump(mode="json", exclude_none=True)


class NewOrder(_Payload):
    """DO_ORDER_SEND payload.

    Attributes:
        symbol: Instrument name
        order_type: Market or pending order type
        lots: Volume in lots
        price: Entry price (pending orders; market orders use the quote)
        slippage: Maximum deviation in points for market orders
        sl, tp: Absolute stop-loss / take-profit prices
        sl_points, tp_points: Stop-loss / take-profit distance in points
        comment: Order comment
        magic_number: Strategy tag
    """

    symbol: str = Field(min_length=1)
    order_type: OrderType
    lots: float = Field(gt=0)
    price: float | None = Field(default=None, ge=0)
    slippage: int | None = Field(default=None, ge=0)
    sl: float | None = Field(default=None, ge=0)
    tp: float | None = Field(default=None, ge=0)
    sl_points: int | None = Field(default=None, ge=0)
    tp_points: int | None = Field(default=None, ge=0)
    comment: str | None = None
    magic_number: int | None = None

    @classmethod
    def builder(cls) -> NewOrderBuilder:
        """Start building a new order."""
        return NewOrderBuilder()


class ModifyOrder(_Payload):
    """DO_ORDER_MODIFY payload for the 32-bit ticket dialect.

    Attributes:
        ticket: Order or position to modify
        price: New entry price (pending orders only)
        sl, tp: New absolute stop-loss / take-profit
        sl_points, tp_points: New stop-loss / take-profit distance in points
    """

    ticket: NarrowTicket
    price: float | None = Field(default=None, ge=0)
    sl: float | None = Field(default=None, ge=0)
    tp: float | None = Field(default=None, ge=0)
    sl_points: int | None = Field(default=None, ge=0)
    tp_points: int | None = Field(default=None, ge=0)

    @classmethod
    def builder(cls) -> ModifyOrderBuilder[Self]:
        """Start building a modification."""
        return ModifyOrderBuilder(cls)


class MT5ModifyOrder(ModifyOrder):
    """DO_ORDER_MODIFY payload for the 64-bit ticket dialect."""

    ticket: WideTicket


# =============================================================================
# BUILDERS
# =============================================================================


class OrderOptions[PayloadT: _Payload]:
    """Final builder stage: optional fields, then build().

    Every setter accepts None to clear a previously set value.
    """

    _payload_cls: type[PayloadT]

    def __init__(self, payload_cls: type[PayloadT], fields: dict[str, Any]) -> None:
        self._payload_cls = payload_cls
        self._fields = fields

    def _set(self, name: str, value: Any) -> Self:
        if value is None:
            self._fields.pop(name, None)
        else:
            self._fields[name] = value
        return self

    def set_price(self, price: float | None) -> Self:
        """Set the absolute price."""
        return self._set("price", price)

    def set_sl(self, sl: float | None) -> Self:
        """Set the absolute stop-loss price."""
        return self._set("sl", sl)

    def set_tp(self, tp: float | None) -> Self:
        """Set the absolute take-profit price."""
        return self._set("tp", tp)

    def set_sl_points(self, sl_points: int | None) -> Self:
        """Set the stop-loss as a distance in points from the price."""
        return self._set("sl_points", sl_points)

    def set_tp_points(self, tp_points: int | None) -> Self:
        """Set the take-profit as a distance in points from the price."""
        return self._set("tp_points", tp_points)

    def build(self) -> PayloadT:
        """Validate and freeze the payload.

        Raises:
            pydantic.ValidationError: If a field is out of range.

        """
        return self._payload_cls(**self._fields)


class NewOrderOptions(OrderOptions[NewOrder]):
    """Optional fields of a new order."""

    def set_slippage(self, slippage: int | None) -> Self:
        """Set the maximum price deviation in points."""
        return self._set("slippage", slippage)

    def set_magic_number(self, magic_number: int | None) -> Self:
        """Set the strategy tag."""
        return self._set("magic_number", magic_number)

    def set_comment(self, comment: str | None) -> Self:
        """Set the order comment."""
        return self._set("comment", comment)


class NewOrderBuilder:
    """Entry stage of a new order: bind the symbol."""

    def set_symbol(self, symbol: str | MT4Models.Symbol) -> _OrderTypeStage:
        """Bind the instrument by name or Symbol."""
        name = symbol.name if isinstance(symbol, MT4Models.Symbol) else symbol
        return _OrderTypeStage({"symbol": name})


class _OrderTypeStage:
    """Second stage of a new order: order type."""

    def __init__(self, fields: dict[str, Any]) -> None:
        self._fields = fields

    def set_order_type(self, order_type: OrderType) -> _LotsStage:
        """Set the order type."""
        return _LotsStage({**self._fields, "order_type": order_type})


class _LotsStage:
    """Third stage of a new order: volume."""

    def __init__(self, fields: dict[str, Any]) -> None:
        self._fields = fields

    def set_lots(self, lots: float) -> NewOrderOptions:
        """Set the volume in lots."""
        return NewOrderOptions(NewOrder, {**self._fields, "lots": lots})


class ModifyOrderBuilder[ModifyT: ModifyOrder]:
    """Entry stage of a modification: bind the ticket."""

    def __init__(self, payload_cls: type[ModifyT]) -> None:
        self._payload_cls = payload_cls

    def set_order(
        self, order: int | MT4Models.Order | MT4Models.MT5Order
    ) -> OrderOptions[ModifyT]:
        """Bind the target by ticket number or existing order."""
        ticket = order if isinstance(order, int) else order.ticket
        return OrderOptions(self._payload_cls, {"ticket": ticket})


__all__ = [
    "MT5ModifyOrder",
    "ModifyOrder",
    "ModifyOrderBuilder",
    "NewOrder",
    "NewOrderBuilder",
    "NewOrderOptions",
    "OrderOptions",
]
