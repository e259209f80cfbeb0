"""Chart timeframes.

A timeframe is the width of one bar, in minutes. Standard periods are members
of :class:`StandardTimeframe`; any other positive width is wrapped in a
:class:`NonStandardTimeframe`. Both compare and hash by minute value, so
``StandardTimeframe.H1 == NonStandardTimeframe(60) == 60``.

Example:
    >>> from mt4client.timeframes import parse_timeframe
    >>> parse_timeframe("4h")
    <StandardTimeframe.H4: 240>
    >>> parse_timeframe("2h").minutes
    120
    >>> parse_timeframe("M15") is None
    True
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum, unique
from typing import ClassVar, Final, Protocol, runtime_checkable

# Minutes travel as a signed 32-bit integer
_MAX_MINUTES: Final = 2**31 - 1


@runtime_checkable
class Timeframe(Protocol):
    """Anything with a bar width in minutes."""

    @property
    def minutes(self) -> int: ...


@unique
class StandardTimeframe(IntEnum):
    """Timeframes the terminal offers natively (value = minutes)."""

    CURRENT = 0  # chart period of the terminal's active chart
    M1 = 1
    M5 = 5
    M15 = 15
    M30 = 30
    H1 = 60
    H4 = 240
    D1 = 1440
    W1 = 10080
    MN1 = 43200

    @property
    def minutes(self) -> int:
        """Bar width in minutes."""
        return self.value

    @classmethod
    def is_standard(cls, minutes: int) -> bool:
        """Check if a minute count names a standard timeframe."""
        return minutes in cls._value2member_map_


@dataclass(frozen=True, eq=False)
class NonStandardTimeframe:
    """Timeframe of arbitrary positive width."""

    M2: ClassVar[NonStandardTimeframe]
    M3: ClassVar[NonStandardTimeframe]
    M4: ClassVar[NonStandardTimeframe]
    M6: ClassVar[NonStandardTimeframe]
    M10: ClassVar[NonStandardTimeframe]
    M12: ClassVar[NonStandardTimeframe]
    M20: ClassVar[NonStandardTimeframe]
    H2: ClassVar[NonStandardTimeframe]
    H3: ClassVar[NonStandardTimeframe]
    H6: ClassVar[NonStandardTimeframe]
    H8: ClassVar[NonStandardTimeframe]
    H12: ClassVar[NonStandardTimeframe]

    minutes: int

    def __post_init__(self) -> None:
        if isinstance(self.minutes, bool) or not isinstance(self.minutes, int):
            msg = f"Timeframe minutes must be an integer, got {self.minutes!r}"
            raise TypeError(msg)
        if self.minutes <= 0:
            msg = f"Timeframe minutes must be positive, got {self.minutes}"
            raise ValueError(msg)
        if self.minutes > _MAX_MINUTES:
            msg = f"Timeframe minutes must not exceed {_MAX_MINUTES}, got {self.minutes}"
            raise ValueError(msg)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, int) and not isinstance(other, bool):
            return self.minutes == other
        if isinstance(other, Timeframe):
            return self.minutes == other.minutes
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.minutes)

    def __int__(self) -> int:
        return self.minutes

    def __repr__(self) -> str:
        return f"NonStandardTimeframe({self.minutes})"


NonStandardTimeframe.M2 = NonStandardTimeframe(2)
NonStandardTimeframe.M3 = NonStandardTimeframe(3)
NonStandardTimeframe.M4 = NonStandardTimeframe(4)
NonStandardTimeframe.M6 = NonStandardTimeframe(6)
NonStandardTimeframe.M10 = NonStandardTimeframe(10)
NonStandardTimeframe.M12 = NonStandardTimeframe(12)
NonStandardTimeframe.M20 = NonStandardTimeframe(20)
NonStandardTimeframe.H2 = NonStandardTimeframe(120)
NonStandardTimeframe.H3 = NonStandardTimeframe(180)
NonStandardTimeframe.H6 = NonStandardTimeframe(360)
NonStandardTimeframe.H8 = NonStandardTimeframe(480)
NonStandardTimeframe.H12 = NonStandardTimeframe(720)


_TIMEFRAME_PATTERN: Final = re.compile(r"([0-9]+)(mn|m|h|d|w)")

_UNIT_MINUTES: Final = {
    "m": 1,
    "h": 60,
    "d": 1440,
    "w": 10080,
    "mn": 43200,
}


def from_minutes(minutes: int) -> StandardTimeframe | NonStandardTimeframe:
    """Resolve a minute count to the standard member or a non-standard wrapper.

    Raises:
        ValueError: If minutes is negative.

    """
    if isinstance(minutes, int) and StandardTimeframe.is_standard(minutes):
        return StandardTimeframe(minutes)
    return NonStandardTimeframe(minutes)


def parse_timeframe(text: str) -> StandardTimeframe | NonStandardTimeframe | None:
    """Parse strings such as ``"15m"``, ``"4h"``, ``"1d"``, ``"1w"``, ``"1mn"``.

    ``"0"`` denotes the current chart period. Matching is case-sensitive and
    applied to the stripped input. Anything outside the grammar, or wider than
    a signed 32-bit minute count, yields None.
    """
    text = text.strip()
    if text == "0":
        return StandardTimeframe.CURRENT
    match = _TIMEFRAME_PATTERN.fullmatch(text)
    if match is None:
        return None
    try:
        count = int(match.group(1))
    except ValueError:
        return None
    minutes = count * _UNIT_MINUTES[match.group(2)]
    if minutes > _MAX_MINUTES:
        return None
    return from_minutes(minutes)


def to_minutes(timeframe: Timeframe | str) -> int:
    """Coerce a timeframe or timeframe string to minutes.

    Raises:
        ValueError: If a string is not a valid timeframe.

    """
    if isinstance(timeframe, str):
        parsed = parse_timeframe(timeframe)
        if parsed is None:
            msg = f"Invalid timeframe: {timeframe!r}"
            raise ValueError(msg)
        return parsed.minutes
    return timeframe.minutes


__all__ = [
    "NonStandardTimeframe",
    "StandardTimeframe",
    "Timeframe",
    "from_minutes",
    "parse_timeframe",
    "to_minutes",
]
