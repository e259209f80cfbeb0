"""
Custom exceptions for mt4client.

This module provides the terminal error code table and a hierarchy of
exceptions raised while talking to the terminal bridge.

Exception Hierarchy:
    MT4Error
    ├── MT4ConnectionError
    │   ├── MT4TimeoutError
    │   └── NoResponseError
    ├── ServerError
    │   ├── SymbolNotFoundError
    │   ├── OrderNotFoundError
    │   ├── InsufficientFundsError
    │   └── OrderRejectedError
    ├── ResponseDecodeError
    └── ClientClosedError
"""

from __future__ import annotations

from enum import IntEnum, unique
from typing import TYPE_CHECKING, Any, Self

from mt4client.constants import ProtocolConstants as c

if TYPE_CHECKING:
    from collections.abc import Mapping


@unique
class ErrorCode(IntEnum):
    """Numeric error codes reported by the terminal.

    Trade server codes (0-150) and MQL runtime codes (4000+). Codes not in
    this table resolve to ``UNKNOWN`` via :meth:`from_code`.
    """

    UNKNOWN = -1

    # Trade server return codes
    NO_ERROR = 0
    NO_RESULT = 1
    COMMON_ERROR = 2
    INVALID_TRADE_PARAMETERS = 3
    SERVER_BUSY = 4
    OLD_VERSION = 5
    NO_CONNECTION = 6
    NOT_ENOUGH_RIGHTS = 7
    TOO_FREQUENT_REQUESTS = 8
    MALFUNCTIONAL_TRADE = 9
    ACCOUNT_DISABLED = 64
    INVALID_ACCOUNT = 65
    TRADE_TIMEOUT = 128
    INVALID_PRICE = 129
    INVALID_STOPS = 130
    INVALID_TRADE_VOLUME = 131
    MARKET_CLOSED = 132
    TRADE_DISABLED = 133
    NOT_ENOUGH_MONEY = 134
    PRICE_CHANGED = 135
    OFF_QUOTES = 136
    BROKER_BUSY = 137
    REQUOTE = 138
    ORDER_LOCKED = 139
    LONG_POSITIONS_ONLY_ALLOWED = 140
    TOO_MANY_REQUESTS = 141
    TRADE_MODIFY_DENIED = 145
    TRADE_CONTEXT_BUSY = 146
    TRADE_EXPIRATION_DENIED = 147
    TRADE_TOO_MANY_ORDERS = 148
    TRADE_HEDGE_PROHIBITED = 149
    TRADE_PROHIBITED_BY_FIFO = 150

    # MQL runtime errors
    NO_MQLERROR = 4000
    WRONG_FUNCTION_POINTER = 4001
    ARRAY_INDEX_OUT_OF_RANGE = 4002
    NO_MEMORY_FOR_CALL_STACK = 4003
    RECURSIVE_STACK_OVERFLOW = 4004
    NOT_ENOUGH_STACK_FOR_PARAM = 4005
    NO_MEMORY_FOR_PARAM_STRING = 4006
    NO_MEMORY_FOR_TEMP_STRING = 4007
    NOT_INITIALIZED_STRING = 4008
    NOT_INITIALIZED_ARRAYSTRING = 4009
    NO_MEMORY_FOR_ARRAYSTRING = 4010
    TOO_LONG_STRING = 4011
    REMAINDER_FROM_ZERO_DIVIDE = 4012
    ZERO_DIVIDE = 4013
    UNKNOWN_COMMAND = 4014
    WRONG_JUMP = 4015
    NOT_INITIALIZED_ARRAY = 4016
    DLL_CALLS_NOT_ALLOWED = 4017
    CANNOT_LOAD_LIBRARY = 4018
    CANNOT_CALL_FUNCTION = 4019
    EXTERNAL_CALLS_NOT_ALLOWED = 4020
    NO_MEMORY_FOR_RETURNED_STR = 4021
    SYSTEM_BUSY = 4022
    DLLFUNC_CRITICALERROR = 4023
    INTERNAL_ERROR = 4024
    OUT_OF_MEMORY = 4025
    INVALID_POINTER = 4026
    FORMAT_TOO_MANY_FORMATTERS = 4027
    FORMAT_TOO_MANY_PARAMETERS = 4028
    ARRAY_INVALID = 4029
    CHART_NOREPLY = 4030
    INVALID_FUNCTION_PARAMSCNT = 4050
    INVALID_FUNCTION_PARAMVALUE = 4051
    STRING_FUNCTION_INTERNAL = 4052
    SOME_ARRAY_ERROR = 4053
    INCORRECT_SERIESARRAY_USING = 4054
    CUSTOM_INDICATOR_ERROR = 4055
    INCOMPATIBLE_ARRAYS = 4056
    GLOBAL_VARIABLES_PROCESSING = 4057
    GLOBAL_VARIABLE_NOT_FOUND = 4058
    FUNC_NOT_ALLOWED_IN_TESTING = 4059
    FUNCTION_NOT_CONFIRMED = 4060
    SEND_MAIL_ERROR = 4061
    STRING_PARAMETER_EXPECTED = 4062
    INTEGER_PARAMETER_EXPECTED = 4063
    DOUBLE_PARAMETER_EXPECTED = 4064
    ARRAY_AS_PARAMETER_EXPECTED = 4065
    HISTORY_WILL_UPDATED = 4066
    TRADE_ERROR = 4067
    RESOURCE_NOT_FOUND = 4068
    RESOURCE_NOT_SUPPORTED = 4069
    RESOURCE_DUPLICATED = 4070
    INDICATOR_CANNOT_INIT = 4071
    INDICATOR_CANNOT_LOAD = 4072
    NO_HISTORY_DATA = 4073
    NO_MEMORY_FOR_HISTORY = 4074
    NO_MEMORY_FOR_INDICATOR = 4075
    END_OF_FILE = 4099
    SOME_FILE_ERROR = 4100
    WRONG_FILE_NAME = 4101
    TOO_MANY_OPENED_FILES = 4102
    CANNOT_OPEN_FILE = 4103
    INCOMPATIBLE_FILEACCESS = 4104
    NO_ORDER_SELECTED = 4105
    UNKNOWN_SYMBOL = 4106
    INVALID_PRICE_PARAM = 4107
    INVALID_TICKET = 4108
    TRADE_NOT_ALLOWED = 4109
    LONGS_NOT_ALLOWED = 4110
    SHORTS_NOT_ALLOWED = 4111
    TRADE_EXPERT_DISABLED_BY_SERVER = 4112
    OBJECT_ALREADY_EXISTS = 4200
    UNKNOWN_OBJECT_PROPERTY = 4201
    OBJECT_DOES_NOT_EXIST = 4202
    UNKNOWN_OBJECT_TYPE = 4203
    NO_OBJECT_NAME = 4204
    OBJECT_COORDINATES_ERROR = 4205
    NO_SPECIFIED_SUBWINDOW = 4206
    SOME_OBJECT_ERROR = 4207
    CHART_PROP_INVALID = 4210
    CHART_NOT_FOUND = 4211
    CHARTWINDOW_NOT_FOUND = 4212
    CHARTINDICATOR_NOT_FOUND = 4213
    SYMBOL_SELECT = 4220
    NOTIFICATION_ERROR = 4250
    NOTIFICATION_PARAMETER = 4251
    NOTIFICATION_SETTINGS = 4252
    NOTIFICATION_TOO_FREQUENT = 4253

    @classmethod
    def from_code(cls, code: object) -> ErrorCode:
        """Resolve a wire value to a member, never raising.

        Integers and integer-like strings are looked up; anything else,
        including ``None`` and unmapped numbers, yields ``UNKNOWN``.
        """
        if isinstance(code, bool) or code is None:
            return cls.UNKNOWN
        if isinstance(code, str):
            try:
                code = int(code.strip())
            except ValueError:
                return cls.UNKNOWN
        if not isinstance(code, int):
            return cls.UNKNOWN
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def is_retriable(cls, code: int) -> bool:
        """Check if the server reported a transient condition."""
        return code in (
            cls.SERVER_BUSY,
            cls.NO_CONNECTION,
            cls.TOO_FREQUENT_REQUESTS,
            cls.TRADE_TIMEOUT,
            cls.PRICE_CHANGED,
            cls.OFF_QUOTES,
            cls.BROKER_BUSY,
            cls.REQUOTE,
            cls.TOO_MANY_REQUESTS,
            cls.TRADE_CONTEXT_BUSY,
        )


class MT4Error(Exception):
    """
    Base exception for all mt4client errors.

    Attributes:
        message: Human-readable error description
        error_code: Optional numeric error code
        details: Optional additional error details
    """

    def __init__(
        self,
        message: str,
        error_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with code and details."""
        msg = self.message
        if self.error_code is not None:
            msg = f"[{self.error_code}] {msg}"
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            msg = f"{msg} ({details_str})"
        return msg


class MT4ConnectionError(MT4Error):
    """
    Raised when the transport session fails.

    A REQ socket that failed mid-exchange cannot be reused, so the client
    refuses further requests after this error until it is shut down.
    """

    def __init__(
        self,
        message: str = "Connection to terminal failed",
        address: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if address:
            details["address"] = address
        super().__init__(message, details=details, **kwargs)


class MT4TimeoutError(MT4ConnectionError):
    """Raised when a request could not be sent within the request timeout."""

    def __init__(
        self,
        message: str = "Request timed out",
        timeout_ms: int | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if timeout_ms is not None:
            details["timeout_ms"] = timeout_ms
        super().__init__(message, details=details, **kwargs)


class NoResponseError(MT4ConnectionError):
    """Raised when no response arrived within the response timeout."""

    def __init__(
        self,
        message: str = "No response from terminal",
        action: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if action:
            details["action"] = action
        super().__init__(message, details=details, **kwargs)


class ServerError(MT4Error):
    """
    Raised when a response carries the error triple.

    Attributes:
        code: Resolved :class:`ErrorCode` (``UNKNOWN`` when absent or unmapped)
        raw_code: The numeric code as sent, if any
        description: ``error_code_description`` as sent, if any
        server_message: ``error_message`` as sent, if any
    """

    def __init__(
        self,
        code: ErrorCode = ErrorCode.UNKNOWN,
        description: str | None = None,
        server_message: str | None = None,
        raw_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        self.code = code
        self.raw_code = raw_code
        self.description = description
        self.server_message = server_message
        details = kwargs.pop("details", {})
        if code is ErrorCode.UNKNOWN:
            details["code"] = "UNKNOWN" if raw_code is None else raw_code
        else:
            details["code"] = code.name
        message = server_message or description or "Terminal reported an error"
        super().__init__(
            message,
            error_code=raw_code if raw_code is not None else int(code),
            details=details,
            **kwargs,
        )

    @classmethod
    def from_envelope(cls, envelope: Mapping[str, Any]) -> Self:
        """Build the error from a response document's error fields."""
        raw = envelope.get(c.Envelope.ERROR_CODE)
        code = ErrorCode.from_code(raw)
        raw_code = raw if isinstance(raw, int) and not isinstance(raw, bool) else None
        if raw_code is None and code is not ErrorCode.UNKNOWN:
            raw_code = int(code)
        description = envelope.get(c.Envelope.ERROR_CODE_DESCRIPTION)
        message = envelope.get(c.Envelope.ERROR_MESSAGE)
        return cls(
            code=code,
            description=None if description is None else str(description),
            server_message=None if message is None else str(message),
            raw_code=raw_code,
        )


class SymbolNotFoundError(ServerError):
    """Raised when the terminal does not know the requested symbol."""


class OrderNotFoundError(ServerError):
    """Raised when the requested ticket does not exist."""


class InsufficientFundsError(ServerError):
    """Raised when the account lacks free margin for a trade."""


class OrderRejectedError(ServerError):
    """Raised when the trade server rejects an order request."""


class ResponseDecodeError(MT4Error):
    """
    Raised when a response cannot be parsed or has an unexpected shape.

    This is distinct from :class:`ServerError`: the terminal did not report
    a failure, the client could not understand what it sent.
    """

    def __init__(
        self,
        message: str = "Malformed response",
        raw: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if raw is not None:
            details["raw"] = raw if len(raw) <= 200 else f"{raw[:200]}..."
        super().__init__(message, details=details, **kwargs)


class ClientClosedError(MT4Error):
    """Raised when a client is used after shutdown()."""

    def __init__(self, message: str = "Client has been shut down", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


# Mapping of terminal error codes to ServerError subclasses
ERROR_CODE_MAPPING: dict[ErrorCode, type[ServerError]] = {
    ErrorCode.UNKNOWN_SYMBOL: SymbolNotFoundError,
    ErrorCode.INVALID_TICKET: OrderNotFoundError,
    ErrorCode.NO_ORDER_SELECTED: OrderNotFoundError,
    ErrorCode.NOT_ENOUGH_MONEY: InsufficientFundsError,
    ErrorCode.INVALID_PRICE: OrderRejectedError,
    ErrorCode.INVALID_STOPS: OrderRejectedError,
    ErrorCode.INVALID_TRADE_VOLUME: OrderRejectedError,
    ErrorCode.MARKET_CLOSED: OrderRejectedError,
    ErrorCode.TRADE_DISABLED: OrderRejectedError,
    ErrorCode.REQUOTE: OrderRejectedError,
    ErrorCode.TRADE_MODIFY_DENIED: OrderRejectedError,
    ErrorCode.TRADE_TOO_MANY_ORDERS: OrderRejectedError,
}


def has_error(envelope: Mapping[str, Any]) -> bool:
    """Check whether any of the error fields is present."""
    return any(key in envelope for key in c.Envelope.ERROR_FIELDS)


def raise_for_error(envelope: Mapping[str, Any]) -> None:
    """
    Raise the appropriate ServerError if the response reports one.

    Args:
        envelope: Decoded response document

    Raises:
        ServerError: Subclass chosen by error code, when any of
            ``error_code``, ``error_code_description`` or ``error_message``
            is present
    """
    if not has_error(envelope):
        return

    code = ErrorCode.from_code(envelope.get(c.Envelope.ERROR_CODE))
    exception_class = ERROR_CODE_MAPPING.get(code, ServerError)
    raise exception_class.from_envelope(envelope)


__all__ = [
    "ERROR_CODE_MAPPING",
    "ClientClosedError",
    "ErrorCode",
    "InsufficientFundsError",
    "MT4ConnectionError",
    "MT4Error",
    "MT4TimeoutError",
    "NoResponseError",
    "OrderNotFoundError",
    "OrderRejectedError",
    "ResponseDecodeError",
    "ServerError",
    "SymbolNotFoundError",
    "has_error",
    "raise_for_error",
]
