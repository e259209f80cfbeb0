"""Command-line access to a terminal bridge.

Usage:
    python -m mt4client account
    python -m mt4client symbols
    python -m mt4client symbols EURUSD GBPUSD
    python -m mt4client signals
    python -m mt4client ohlcv EURUSD 1h --limit 10
    python -m mt4client orders --history
    python -m mt4client order 12345678
    python -m mt4client --mt5 --address tcp://10.0.0.5:28282 --debug account

Output is JSON on stdout. Errors are logged to stderr and exit with status 1.

Configuration:
    MT4_ADDRESS              - Bridge endpoint (default: tcp://localhost:28282)
    MT4_REQUEST_TIMEOUT_MS   - Send timeout (default: 10000)
    MT4_RESPONSE_TIMEOUT_MS  - Receive timeout (default: 10000)
    MT4_OHLCV_TIMEOUT_MS     - History load timeout for ohlcv (default: 5000)
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING, Any

import orjson
import structlog
from pydantic import BaseModel

from mt4client.client import MT4Client, MT5Client
from mt4client.constants import ProtocolConstants as c
from mt4client.exceptions import MT4Error
from mt4client.settings import ClientSettings
from mt4client.timeframes import parse_timeframe

if TYPE_CHECKING:
    from mt4client.protocols import ClientProtocol
    from mt4client.timeframes import NonStandardTimeframe, StandardTimeframe

log = structlog.get_logger("mt4client.cli")


def _setup_logging(*, debug: bool = False) -> None:
    """Configure structlog and route library logging through it.

    Args:
        debug: Enable debug-level logging if True.

    """
    level = logging.DEBUG if debug else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=False),
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
            ],
        )
    )
    root = logging.getLogger("mt4client")
    root.handlers = [handler]
    root.setLevel(level)
    root.propagate = False


def _timeframe(text: str) -> StandardTimeframe | NonStandardTimeframe:
    timeframe = parse_timeframe(text)
    if timeframe is None:
        msg = f"invalid timeframe {text!r} (expected e.g. 15m, 1h, 1d, 1w, 1mn, 0)"
        raise argparse.ArgumentTypeError(msg)
    return timeframe


def _default(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    raise TypeError


def _emit(data: object) -> None:
    sys.stdout.write(orjson.dumps(data, default=_default, option=orjson.OPT_INDENT_2).decode())
    sys.stdout.write("\n")


def _build_parser(settings: ClientSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mt4client",
        description="Query a MetaTrader terminal through its ZeroMQ bridge",
    )
    parser.add_argument(
        "--address",
        default=settings.address,
        help=f"Bridge endpoint (default: {settings.address})",
    )
    parser.add_argument(
        "--mt5",
        action="store_true",
        help="Use the 64-bit ticket dialect",
    )
    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="Enable debug logging",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("account", help="Show the account state")

    symbols = commands.add_parser("symbols", help="List symbols or show details")
    symbols.add_argument("names", nargs="*", help="Symbols to show (default: list all)")

    signals = commands.add_parser("signals", help="List signals or show details")
    signals.add_argument("names", nargs="*", help="Signals to show (default: list all)")

    ohlcv = commands.add_parser("ohlcv", help="Show price bars")
    ohlcv.add_argument("symbol")
    ohlcv.add_argument("timeframe", type=_timeframe, help="e.g. 15m, 1h, 1d")
    ohlcv.add_argument("--limit", type=int, default=c.Defaults.OHLCV_LIMIT)
    ohlcv.add_argument("--offset", type=int, default=c.Defaults.OFFSET)
    ohlcv.add_argument(
        "--timeout",
        type=int,
        default=settings.ohlcv_timeout_ms,
        help="History load timeout in ms",
    )

    orders = commands.add_parser("orders", help="List open or historical orders")
    orders.add_argument("--history", action="store_true", help="Show closed orders")

    order = commands.add_parser("order", help="Show one order")
    order.add_argument("ticket", type=int)

    return parser


def _run(client: ClientProtocol, args: argparse.Namespace) -> object:
    match args.command:
        case "account":
            return client.get_account()
        case "symbols":
            return client.get_symbols(*args.names) if args.names else client.get_symbol_names()
        case "signals":
            return client.get_signals(*args.names) if args.names else client.get_signal_names()
        case "ohlcv":
            return client.get_ohlcv(
                args.symbol, args.timeframe, args.limit, args.timeout, args.offset
            )
        case "orders":
            return client.get_orders_historical() if args.history else client.get_orders()
        case "order":
            return client.get_order(args.ticket)
    msg = f"Unknown command: {args.command}"
    raise ValueError(msg)


def main(argv: list[str] | None = None) -> int:
    """Run one command against the bridge.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, 1 for error).

    """
    settings = ClientSettings()
    args = _build_parser(settings).parse_args(argv)
    _setup_logging(debug=args.debug)

    client_cls = MT5Client if args.mt5 else MT4Client
    log.debug("Connecting", address=args.address, dialect=client_cls.__name__)
    try:
        with client_cls(
            args.address,
            request_timeout_ms=settings.request_timeout_ms,
            response_timeout_ms=settings.response_timeout_ms,
        ) as client:
            _emit(_run(client, args))
    except (MT4Error, ValueError) as e:
        log.error("Request failed", command=args.command, error=str(e))  # noqa: TRY400
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
