"""Type definitions for mt4client.

All type definitions organized in a single container class for:
- Clean namespace (no loose code)
- Logical grouping by category
- Single import: `from mt4client.types import MT4Types`

Usage:
    >>> from mt4client.types import MT4Types
    >>> def process_rates(data: MT4Types.RatesArray) -> None: ...

"""

from __future__ import annotations

from typing import Final

import numpy as np
from numpy.typing import NDArray


class MT4Types:
    """Bridge protocol type definitions container.

    Categories:
    - Array types: RatesArray, RATES_DTYPE
    - JSON types: JSONPrimitive, JSONValue, JSONObject

    """

    # =========================================================================
    # ARRAY TYPE ALIASES
    # =========================================================================

    type RatesArray = NDArray[np.void]
    """NumPy structured array of OHLCV bars."""

    RATES_DTYPE: Final = np.dtype(
        [
            ("time", "<i8"),
            ("open", "<f8"),
            ("high", "<f8"),
            ("low", "<f8"),
            ("close", "<f8"),
            ("tick_volume", "<i8"),
        ]
    )
    """Field layout of :attr:`RatesArray`."""

    # =========================================================================
    # JSON TYPE ALIASES
    # =========================================================================

    type JSONPrimitive = str | int | float | bool | None
    """Primitive JSON-compatible values."""

    type JSONValue = JSONPrimitive | list[JSONValue] | dict[str, JSONValue]
    """Recursive JSON-compatible value type (strict typing, no Any)."""

    type JSONObject = dict[str, JSONValue]
    """A decoded JSON object."""

