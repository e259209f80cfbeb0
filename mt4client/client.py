"""Synchronous clients for the terminal bridge.

Two dialects share one implementation:

- :class:`MT4Client` - 32-bit tickets, returns :class:`MT4Models.Order`
- :class:`MT5Client` - 64-bit tickets, returns :class:`MT4Models.MT5Order`

Every operation is one request/reply round trip over the client's own
session. There is no retry, queueing or background thread; use separate
client instances for concurrency.

Example:
    >>> from mt4client import MT4Client
    >>> with MT4Client("tcp://localhost:28282") as client:
    ...     account = client.get_account()
    ...     bars = client.get_ohlcv("EURUSD", "1h", limit=100, timeout=5000)
    ...     eurusd = client.get_symbol("EURUSD")

Failure handling:
    Server errors (:class:`ServerError`) leave the session usable. A
    transport failure (send timeout, missing reply, socket error) leaves the
    REQ socket mid-exchange, so the client refuses further requests with
    :class:`MT4ConnectionError` until shut down and replaced.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Self

from mt4client.codec import convert, decode_response, encode_request
from mt4client.constants import ProtocolConstants as c
from mt4client.exceptions import ClientClosedError, MT4ConnectionError, NoResponseError
from mt4client.models import MT4Models
from mt4client.orders import (
    ModifyOrder,
    MT5ModifyOrder,
    NewOrder,
    NewOrderOptions,
    OrderOptions,
)
from mt4client.settings import ClientSettings
from mt4client.timeframes import to_minutes
from mt4client.transport import Transport, ZmqTransport

if TYPE_CHECKING:
    from types import TracebackType

    from mt4client.indicators import Indicator
    from mt4client.timeframes import Timeframe
    from mt4client.types import MT4Types

log = logging.getLogger(__name__)

# Default config instance
_settings = ClientSettings()

_CLOSED_MSG = "Client has been shut down"
_BROKEN_MSG = "Session is unusable after a transport failure - call shutdown()"


class _ProtocolClient[OrderT: MT4Models.OrderBase, ModifyT: ModifyOrder]:
    """Operations common to both ticket widths.

    Subclasses bind the order model, the modify payload and the ticket range.
    """

    _order_model: ClassVar[type[MT4Models.OrderBase]]
    _modify_model: ClassVar[type[ModifyOrder]]
    _max_ticket: ClassVar[int]

    def __init__(
        self,
        address: str = _settings.address,
        *,
        request_timeout_ms: int = _settings.request_timeout_ms,
        response_timeout_ms: int = _settings.response_timeout_ms,
        indicator_timeout_ms: int = _settings.indicator_timeout_ms,
        close_if_opened: bool = _settings.close_if_opened,
        transport: Transport | None = None,
    ) -> None:
        """Open a session with the terminal.

        Args:
            address: ZeroMQ endpoint of the terminal bridge.
            request_timeout_ms: Send timeout in milliseconds.
            response_timeout_ms: Receive timeout in milliseconds.
            indicator_timeout_ms: Default chart-load timeout for run_indicator.
            close_if_opened: Default for order_delete.
            transport: Use this session instead of opening a ZeroMQ socket.

        """
        self._address = address
        self._indicator_timeout_ms = indicator_timeout_ms
        self._close_if_opened = close_if_opened
        if transport is None:
            transport = ZmqTransport(
                address,
                request_timeout_ms=request_timeout_ms,
                response_timeout_ms=response_timeout_ms,
                high_water_mark=_settings.high_water_mark,
                linger_ms=_settings.linger_ms,
            )
        self._transport = transport
        self._closed = False
        self._broken = False

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @property
    def closed(self) -> bool:
        """Whether shutdown() has been called."""
        return self._closed

    def shutdown(self) -> None:
        """Release the session. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._transport.close()
        log.debug("Client for %s shut down", self._address)

    def close(self) -> None:
        """Alias for shutdown()."""
        self.shutdown()

    def __enter__(self) -> Self:
        """Context manager entry."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Context manager exit - shut down."""
        self.shutdown()

    # =========================================================================
    # REQUEST PLUMBING
    # =========================================================================

    def _request(self, action: c.Request, params: dict[str, Any] | None = None) -> Any:
        """Perform one round trip and return the unwrapped response value."""
        if self._closed:
            raise ClientClosedError(_CLOSED_MSG)
        if self._broken:
            raise MT4ConnectionError(_BROKEN_MSG, address=self._address)

        request = encode_request(action, params)
        log.debug("Request: %s", request)
        try:
            raw = self._transport.send(request)
        except MT4ConnectionError:
            self._broken = True
            raise
        log.debug("Response: %s", raw)

        if raw is None:
            self._broken = True
            raise NoResponseError(action=action, address=self._address)
        return decode_response(raw, action)

    def _ticket(self, order: int | MT4Models.OrderBase) -> int:
        """Extract and range-check a ticket."""
        ticket = order if isinstance(order, int) else order.ticket  # type: ignore[attr-defined]
        if not 0 <= ticket <= self._max_ticket:
            msg = f"Ticket {ticket} out of range for {type(self).__name__}"
            raise ValueError(msg)
        return ticket

    # =========================================================================
    # ACCOUNT, SYMBOLS AND SIGNALS
    # =========================================================================

    def get_account(self) -> MT4Models.Account:
        """Get the trading account state."""
        return convert(self._request(c.Request.GET_ACCOUNT_INFO), MT4Models.Account)

    def get_symbol_names(self) -> list[str]:
        """Get the names of all symbols offered by the broker."""
        return convert(self._request(c.Request.GET_SYMBOLS), list[str])

    def get_symbols(self, *names: str) -> dict[str, MT4Models.Symbol]:
        """Get symbols by name.

        Returns:
            Name-to-symbol map; empty without a round trip if no names given.

        """
        if not names:
            return {}
        value = self._request(c.Request.GET_SYMBOL_INFO, {c.Field.NAMES: list(names)})
        return convert(value, dict[str, MT4Models.Symbol])

    def get_symbol(self, name: str) -> MT4Models.Symbol | None:
        """Get one symbol, None if the terminal omits it from the response."""
        return self.get_symbols(name).get(name)

    def get_signal_names(self) -> list[str]:
        """Get the names of all trading signals."""
        return convert(self._request(c.Request.GET_SIGNALS), list[str])

    def get_signals(self, *names: str) -> dict[str, MT4Models.Signal]:
        """Get signals by name.

        Returns:
            Name-to-signal map; empty without a round trip if no names given.

        """
        if not names:
            return {}
        value = self._request(c.Request.GET_SIGNAL_INFO, {c.Field.NAMES: list(names)})
        return convert(value, dict[str, MT4Models.Signal])

    def get_signal(self, name: str) -> MT4Models.Signal | None:
        """Get one signal, None if the terminal omits it from the response."""
        return self.get_signals(name).get(name)

    # =========================================================================
    # MARKET DATA
    # =========================================================================

    def get_ohlcv(
        self,
        symbol: str,
        timeframe: Timeframe | str,
        limit: int,
        timeout: int,
        offset: int = c.Defaults.OFFSET,
    ) -> list[MT4Models.OHLCV]:
        """Get price bars, newest last.

        Args:
            symbol: Symbol name.
            timeframe: Bar width, e.g. ``StandardTimeframe.H1`` or ``"1h"``.
            limit: Maximum number of bars.
            timeout: Milliseconds the terminal may wait for history to load.
            offset: Number of most recent bars to skip.

        Raises:
            ValueError: If timeframe is a string outside the timeframe grammar.

        """
        params = {
            c.Field.SYMBOL: symbol,
            c.Field.TIMEFRAME: to_minutes(timeframe),
            c.Field.LIMIT: limit,
            c.Field.TIMEOUT: timeout,
            c.Field.OFFSET: offset,
        }
        value = self._request(c.Request.GET_OHLCV, params)
        return convert(value, list[MT4Models.OHLCV])

    def get_ohlcv_array(
        self,
        symbol: str,
        timeframe: Timeframe | str,
        limit: int,
        timeout: int,
        offset: int = c.Defaults.OFFSET,
    ) -> MT4Types.RatesArray:
        """Get price bars as a numpy structured array (see MT4Types.RATES_DTYPE)."""
        bars = self.get_ohlcv(symbol, timeframe, limit, timeout, offset)
        return MT4Models.OHLCV.to_rates_array(bars)

    def run_indicator(self, indicator: Indicator, timeout: int | None = None) -> float:
        """Evaluate a built-in indicator.

        Args:
            indicator: Indicator built by one of the factories in
                :mod:`mt4client.indicators`.
            timeout: Milliseconds the terminal may wait for chart data;
                defaults to the client's indicator timeout.

        """
        params = {
            c.Field.INDICATOR: indicator.name,
            c.Field.ARGV: indicator.argv,
            c.Field.TIMEOUT: self._indicator_timeout_ms if timeout is None else timeout,
        }
        return convert(self._request(c.Request.RUN_INDICATOR, params), float)

    # =========================================================================
    # ORDERS
    # =========================================================================

    def get_orders(self) -> list[OrderT]:
        """Get open positions and pending orders."""
        value = self._request(c.Request.GET_ORDERS)
        return convert(value, list[self._order_model])  # type: ignore[name-defined]

    def get_orders_historical(self) -> list[OrderT]:
        """Get closed positions and deleted orders."""
        value = self._request(c.Request.GET_HISTORICAL_ORDERS)
        return convert(value, list[self._order_model])  # type: ignore[name-defined]

    def get_order(self, ticket: int) -> OrderT | None:
        """Get an order or position by ticket, None if the response is empty."""
        value = self._request(c.Request.GET_ORDER, {c.Field.TICKET: self._ticket(ticket)})
        return convert(value, self._order_model | None)

    def order_send(self, order: NewOrder | NewOrderOptions) -> OrderT:
        """Open a position or place a pending order.

        Args:
            order: Built payload, or a builder that is built here.

        Returns:
            The resulting order as reported by the terminal.

        """
        if isinstance(order, NewOrderOptions):
            order = order.build()
        value = self._request(c.Request.DO_ORDER_SEND, order.to_request())
        return convert(value, self._order_model)

    def order_modify(self, modify: ModifyOrder | OrderOptions[Any]) -> OrderT:
        """Modify a position or pending order.

        Args:
            modify: Built payload, or a builder that is built here. A payload
                of the other ticket width is revalidated for this client.

        Returns:
            A new order instance reflecting the modification.

        """
        if isinstance(modify, OrderOptions):
            modify = modify.build()
        if type(modify) is not self._modify_model:
            modify = self._modify_model.model_validate(modify.model_dump())
        value = self._request(c.Request.DO_ORDER_MODIFY, modify.to_request())
        return convert(value, self._order_model)

    def order_close(self, order: int | OrderT) -> None:
        """Close an open position, given its ticket or the order itself."""
        self._request(c.Request.DO_ORDER_CLOSE, {c.Field.TICKET: self._ticket(order)})

    def order_delete(
        self,
        order: int | OrderT,
        close_if_opened: bool | None = None,
    ) -> None:
        """Delete a pending order, given its ticket or the order itself.

        Args:
            order: Ticket or order.
            close_if_opened: If the order has already been filled, close the
                position at market (True) or fail (False). Defaults to the
                client setting.

        """
        params = {
            c.Field.TICKET: self._ticket(order),
            c.Field.CLOSE_IF_OPENED: (
                self._close_if_opened if close_if_opened is None else close_if_opened
            ),
        }
        self._request(c.Request.DO_ORDER_DELETE, params)


class MT4Client(_ProtocolClient[MT4Models.Order, ModifyOrder]):
    """Client for the 32-bit ticket dialect."""

    _order_model = MT4Models.Order
    _modify_model = ModifyOrder
    _max_ticket = c.Ticket.NARROW_MAX


class MT5Client(_ProtocolClient[MT4Models.MT5Order, MT5ModifyOrder]):
    """Client for the 64-bit ticket dialect. Tickets are never truncated."""

    _order_model = MT4Models.MT5Order
    _modify_model = MT5ModifyOrder
    _max_ticket = c.Ticket.WIDE_MAX


__all__ = ["MT4Client", "MT5Client"]
