"""Protocol definition shared by both ticket-width clients.

``MT4Client`` (32-bit tickets) and ``MT5Client`` (64-bit tickets) expose the
same operations; only the order model they return differs. Code that works
with either dialect can be typed against :class:`ClientProtocol`.

Uses @runtime_checkable for both static (mypy/pyright) and runtime
(isinstance) validation of client implementations.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from mt4client.indicators import Indicator
    from mt4client.models import MT4Models
    from mt4client.orders import NewOrder, NewOrderOptions
    from mt4client.timeframes import Timeframe
    from mt4client.types import MT4Types


@runtime_checkable
class ClientProtocol(Protocol):
    """Operations of a terminal bridge client."""

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @property
    def closed(self) -> bool:
        """Whether shutdown() has been called."""
        ...

    def shutdown(self) -> None:
        """Release the session. Idempotent."""
        ...

    def __enter__(self) -> Self: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...

    # =========================================================================
    # ACCOUNT, SYMBOLS AND SIGNALS
    # =========================================================================

    def get_account(self) -> MT4Models.Account:
        """Get the trading account state."""
        ...

    def get_symbol_names(self) -> list[str]:
        """Get the names of all symbols offered by the broker."""
        ...

    def get_symbols(self, *names: str) -> dict[str, MT4Models.Symbol]:
        """Get symbols by name."""
        ...

    def get_symbol(self, name: str) -> MT4Models.Symbol | None:
        """Get one symbol, None if the terminal omits it."""
        ...

    def get_signal_names(self) -> list[str]:
        """Get the names of all trading signals."""
        ...

    def get_signals(self, *names: str) -> dict[str, MT4Models.Signal]:
        """Get signals by name."""
        ...

    def get_signal(self, name: str) -> MT4Models.Signal | None:
        """Get one signal, None if the terminal omits it."""
        ...

    # =========================================================================
    # MARKET DATA
    # =========================================================================

    def get_ohlcv(
        self,
        symbol: str,
        timeframe: Timeframe | str,
        limit: int,
        timeout: int,
        offset: int = 0,
    ) -> list[MT4Models.OHLCV]:
        """Get up to ``limit`` bars, ``offset`` bars back from the latest."""
        ...

    def get_ohlcv_array(
        self,
        symbol: str,
        timeframe: Timeframe | str,
        limit: int,
        timeout: int,
        offset: int = 0,
    ) -> MT4Types.RatesArray:
        """Get bars as a numpy structured array."""
        ...

    def run_indicator(self, indicator: Indicator, timeout: int | None = None) -> float:
        """Evaluate a built-in indicator."""
        ...

    # =========================================================================
    # ORDERS
    # =========================================================================

    def get_orders(self) -> list[Any]:
        """Get open positions and pending orders."""
        ...

    def get_orders_historical(self) -> list[Any]:
        """Get closed and deleted orders."""
        ...

    def get_order(self, ticket: int) -> Any:
        """Get an order or position by ticket."""
        ...

    def order_send(self, order: NewOrder | NewOrderOptions) -> Any:
        """Open a position or place a pending order."""
        ...

    def order_modify(self, modify: Any) -> Any:
        """Modify a position or pending order."""
        ...

    def order_close(self, order: Any) -> None:
        """Close an open position."""
        ...

    def order_delete(self, order: Any, close_if_opened: bool | None = None) -> None:
        """Delete a pending order, optionally closing it if it has been filled."""
        ...


__all__ = ["ClientProtocol"]
