"""Request/response envelope codec.

Requests are flat JSON objects whose first key is ``action``:

    {"action": "GET_OHLCV", "symbol": "EURUSD", "timeframe": 60, ...}

Responses are JSON objects with optional ``response``, ``warning`` and the
error triple ``error_code`` / ``error_code_description`` / ``error_message``.
Any error field wins over everything else; a warning is logged and the
response is returned unchanged.
"""

from __future__ import annotations

import logging
from functools import cache
from typing import TYPE_CHECKING, Any

import orjson
from pydantic import TypeAdapter, ValidationError

from mt4client.constants import ProtocolConstants as c
from mt4client.exceptions import NoResponseError, ResponseDecodeError, raise_for_error

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mt4client.types import MT4Types

log = logging.getLogger(__name__)


def encode_request(action: str, params: Mapping[str, Any] | None = None) -> str:
    """Serialize a request envelope.

    Args:
        action: Action discriminator, placed first.
        params: Request parameters. Enum members serialize as their values.

    Returns:
        JSON text for one frame.

    """
    envelope: dict[str, Any] = {c.Envelope.ACTION: str(action)}
    if params:
        envelope.update(params)
    return orjson.dumps(envelope).decode()


def decode_response(raw: str | bytes | None, action: str | None = None) -> MT4Types.JSONValue:
    """Unwrap a response envelope.

    Args:
        raw: Response frame, or None when nothing was received.
        action: Request action, for log and error context only.

    Returns:
        The value under ``response`` (None when absent).

    Raises:
        NoResponseError: If raw is empty or None.
        ResponseDecodeError: If raw is not a JSON object.
        ServerError: If any error field is present.

    """
    if not raw:
        raise NoResponseError(action=action)

    try:
        envelope = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        text = raw.decode(errors="replace") if isinstance(raw, bytes) else raw
        msg = f"Response is not valid JSON: {e}"
        raise ResponseDecodeError(msg, raw=text) from e

    if not isinstance(envelope, dict):
        msg = f"Response must be a JSON object, got {type(envelope).__name__}"
        raise ResponseDecodeError(msg)

    raise_for_error(envelope)

    warning = envelope.get(c.Envelope.WARNING)
    if warning is not None:
        log.warning("Terminal warning for %s: %s", action or "request", warning)

    return envelope.get(c.Envelope.RESPONSE)


@cache
def _adapter(tp: Any) -> TypeAdapter[Any]:
    return TypeAdapter(tp)


def convert[T](value: object, tp: type[T] | Any) -> T:
    """Validate an unwrapped response value into ``tp``.

    Args:
        value: Decoded JSON value.
        tp: Target type, e.g. ``list[MT4Models.OHLCV]`` or ``float``.

    Raises:
        ResponseDecodeError: If the value does not fit the type.

    """
    try:
        return _adapter(tp).validate_python(value)
    except ValidationError as e:
        msg = f"Unexpected response shape for {getattr(tp, '__name__', tp)}"
        raise ResponseDecodeError(msg, details={"errors": e.error_count()}) from e


__all__ = ["convert", "decode_response", "encode_request"]
