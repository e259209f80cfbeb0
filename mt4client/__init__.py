"""MT4 Client Package.

A Python client for the JSON-over-ZeroMQ bridge exposed by a MetaTrader
terminal expert advisor.

Main components:
- MT4Client: Synchronous client for the 32-bit ticket dialect
- MT5Client: Synchronous client for the 64-bit ticket dialect
- MT4Models: Immutable response models
- NewOrder / ModifyOrder: Order request payloads with staged builders
- ClientSettings: Configuration management with environment variable support
"""

from importlib.metadata import version

__version__ = version("mt4client")


from mt4client.client import MT4Client, MT5Client
from mt4client.enums import OrderType
from mt4client.exceptions import ErrorCode, MT4Error, ServerError
from mt4client.indicators import INDICATORS, Indicator
from mt4client.models import MT4Models
from mt4client.orders import ModifyOrder, MT5ModifyOrder, NewOrder
from mt4client.settings import ClientSettings
from mt4client.timeframes import NonStandardTimeframe, StandardTimeframe, parse_timeframe

__all__ = [
    "INDICATORS",
    "ClientSettings",
    "ErrorCode",
    "Indicator",
    "MT4Client",
    "MT4Error",
    "MT4Models",
    "MT5Client",
    "MT5ModifyOrder",
    "ModifyOrder",
    "NewOrder",
    "NonStandardTimeframe",
    "OrderType",
    "ServerError",
    "StandardTimeframe",
    "__version__",
    "parse_timeframe",
]
