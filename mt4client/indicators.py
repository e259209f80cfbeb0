"""Built-in technical indicators runnable on the terminal.

Each factory returns an :class:`Indicator` whose arguments are the exact
positional list the terminal's function of the same name expects:
``symbol``, timeframe in minutes, indicator-specific parameters, ``shift``.
Discriminator parameters (applied price, smoothing method, output line)
only accept the matching enum member, never a bare integer.

Example:
    >>> from mt4client.indicators import iMA
    >>> ma = iMA("EURUSD", StandardTimeframe.H1, 14, 0, SmoothingMethod.SMA,
    ...          AppliedPrice.CLOSE, 0)
    >>> ma.arguments
    ('EURUSD', 60, 14, 0, 0, 0, 0)
    >>> value = client.run_indicator(ma)

"""

# ruff: noqa: N802

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Final

from mt4client.enums import (
    ADXLine,
    AlligatorLine,
    AppliedPrice,
    BandsLine,
    IchimokuLine,
    MACDLine,
    PriceField,
    SmoothingMethod,
)
from mt4client.timeframes import to_minutes

if TYPE_CHECKING:
    from collections.abc import Callable

    from mt4client.timeframes import Timeframe

type IndicatorArg = str | int | float
type TimeframeLike = Timeframe | str


@dataclass(frozen=True, slots=True)
class Indicator:
    """A named indicator call with its positional arguments."""

    name: str
    arguments: tuple[IndicatorArg, ...]

    @property
    def argv(self) -> list[IndicatorArg]:
        """Arguments as a list, ready for the request."""
        return list(self.arguments)


INDICATORS: Final[dict[str, Callable[..., Indicator]]] = {}
"""Indicator factories keyed by terminal function name."""


def _register[F: Callable[..., Indicator]](factory: F) -> F:
    INDICATORS[factory.__name__] = factory
    return factory


def _member(value: IntEnum, enum_cls: type[IntEnum]) -> int:
    """Wire id of an enum member; bare ints and foreign enums are rejected."""
    if not isinstance(value, enum_cls):
        msg = f"Expected {enum_cls.__name__} member, got {value!r}"
        raise TypeError(msg)
    return int(value)


# =============================================================================
# OSCILLATORS AND VOLUME
# =============================================================================


@_register
def iAC(symbol: str, timeframe: TimeframeLike, shift: int) -> Indicator:
    """Accelerator/Decelerator oscillator."""
    return Indicator("iAC", (symbol, to_minutes(timeframe), shift))


@_register
def iAD(symbol: str, timeframe: TimeframeLike, shift: int) -> Indicator:
    """Accumulation/Distribution."""
    return Indicator("iAD", (symbol, to_minutes(timeframe), shift))


@_register
def iAO(symbol: str, timeframe: TimeframeLike, shift: int) -> Indicator:
    """Awesome oscillator."""
    return Indicator("iAO", (symbol, to_minutes(timeframe), shift))


@_register
def iBWMFI(symbol: str, timeframe: TimeframeLike, shift: int) -> Indicator:
    """Market Facilitation Index by Bill Williams."""
    return Indicator("iBWMFI", (symbol, to_minutes(timeframe), shift))


@_register
def iATR(symbol: str, timeframe: TimeframeLike, period: int, shift: int) -> Indicator:
    """Average True Range."""
    return Indicator("iATR", (symbol, to_minutes(timeframe), period, shift))


@_register
def iDeMarker(
    symbol: str, timeframe: TimeframeLike, period: int, shift: int
) -> Indicator:
    """DeMarker."""
    return Indicator("iDeMarker", (symbol, to_minutes(timeframe), period, shift))


@_register
def iMFI(symbol: str, timeframe: TimeframeLike, period: int, shift: int) -> Indicator:
    """Money Flow Index."""
    return Indicator("iMFI", (symbol, to_minutes(timeframe), period, shift))


@_register
def iWPR(symbol: str, timeframe: TimeframeLike, period: int, shift: int) -> Indicator:
    """Larry Williams' Percent Range."""
    return Indicator("iWPR", (symbol, to_minutes(timeframe), period, shift))


@_register
def iOBV(
    symbol: str,
    timeframe: TimeframeLike,
    applied_price: AppliedPrice,
    shift: int,
) -> Indicator:
    """On Balance Volume."""
    return Indicator(
        "iOBV",
        (
            symbol,
            to_minutes(timeframe),
            _member(applied_price, AppliedPrice),
            shift,
        ),
    )


@_register
def iBearsPower(
    symbol: str,
    timeframe: TimeframeLike,
    period: int,
    applied_price: AppliedPrice,
    shift: int,
) -> Indicator:
    """Bears Power."""
    return Indicator(
        "iBearsPower",
        (
            symbol,
            to_minutes(timeframe),
            period,
            _member(applied_price, AppliedPrice),
            shift,
        ),
    )


@_register
def iBullsPower(
    symbol: str,
    timeframe: TimeframeLike,
    period: int,
    applied_price: AppliedPrice,
    shift: int,
) -> Indicator:
    """Bulls Power."""
    return Indicator(
        "iBullsPower",
        (
            symbol,
            to_minutes(timeframe),
            period,
            _member(applied_price, AppliedPrice),
            shift,
        ),
    )


@_register
def iCCI(
    symbol: str,
    timeframe: TimeframeLike,
    period: int,
    applied_price: AppliedPrice,
    shift: int,
) -> Indicator:
    """Commodity Channel Index."""
    return Indicator(
        "iCCI",
        (
            symbol,
            to_minutes(timeframe),
            period,
            _member(applied_price, AppliedPrice),
            shift,
        ),
    )


@_register
def iMomentum(
    symbol: str,
    timeframe: TimeframeLike,
    period: int,
    applied_price: AppliedPrice,
    shift: int,
) -> Indicator:
    """Momentum."""
    return Indicator(
        "iMomentum",
        (
            symbol,
            to_minutes(timeframe),
            period,
            _member(applied_price, AppliedPrice),
            shift,
        ),
    )


@_register
def iRSI(
    symbol: str,
    timeframe: TimeframeLike,
    period: int,
    applied_price: AppliedPrice,
    shift: int,
) -> Indicator:
    """Relative Strength Index."""
    return Indicator(
        "iRSI",
        (
            symbol,
            to_minutes(timeframe),
            period,
            _member(applied_price, AppliedPrice),
            shift,
        ),
    )


@_register
def iForce(
    symbol: str,
    timeframe: TimeframeLike,
    period: int,
    ma_method: SmoothingMethod,
    applied_price: AppliedPrice,
    shift: int,
) -> Indicator:
    """Force Index."""
    return Indicator(
        "iForce",
        (
            symbol,
            to_minutes(timeframe),
            period,
            _member(ma_method, SmoothingMethod),
            _member(applied_price, AppliedPrice),
            shift,
        ),
    )


@_register
def iRVI(
    symbol: str,
    timeframe: TimeframeLike,
    period: int,
    mode: MACDLine,
    shift: int,
) -> Indicator:
    """Relative Vigor Index (MAIN or SIGNAL line)."""
    return Indicator(
        "iRVI",
        (symbol, to_minutes(timeframe), period, _member(mode, MACDLine), shift),
    )


@_register
def iSAR(
    symbol: str,
    timeframe: TimeframeLike,
    step: float,
    maximum: float,
    shift: int,
) -> Indicator:
    """Parabolic Stop and Reverse."""
    return Indicator("iSAR", (symbol, to_minutes(timeframe), step, maximum, shift))


@_register
def iStochastic(
    symbol: str,
    timeframe: TimeframeLike,
    k_period: int,
    d_period: int,
    slowing: int,
    method: SmoothingMethod,
    price_field: PriceField,
    mode: MACDLine,
    shift: int,
) -> Indicator:
    """Stochastic oscillator (MAIN or SIGNAL line)."""
    return Indicator(
        "iStochastic",
        (
            symbol,
            to_minutes(timeframe),
            k_period,
            d_period,
            slowing,
            _member(method, SmoothingMethod),
            _member(price_field, PriceField),
            _member(mode, MACDLine),
            shift,
        ),
    )


# =============================================================================
# TREND
# =============================================================================


@_register
def iADX(
    symbol: str,
    timeframe: TimeframeLike,
    period: int,
    applied_price: AppliedPrice,
    mode: ADXLine,
    shift: int,
) -> Indicator:
    """Average Directional Movement Index."""
    return Indicator(
        "iADX",
        (
            symbol,
            to_minutes(timeframe),
            period,
            _member(applied_price, AppliedPrice),
            _member(mode, ADXLine),
            shift,
        ),
    )


@_register
def iAlligator(
    symbol: str,
    timeframe: TimeframeLike,
    jaw_period: int,
    jaw_shift: int,
    teeth_period: int,
    teeth_shift: int,
    lips_period: int,
    lips_shift: int,
    ma_method: SmoothingMethod,
    applied_price: AppliedPrice,
    mode: AlligatorLine,
    shift: int,
) -> Indicator:
    """Alligator by Bill Williams."""
    return Indicator(
        "iAlligator",
        (
            symbol,
            to_minutes(timeframe),
            jaw_period,
            jaw_shift,
            teeth_period,
            teeth_shift,
            lips_period,
            lips_shift,
            _member(ma_method, SmoothingMethod),
            _member(applied_price, AppliedPrice),
            _member(mode, AlligatorLine),
            shift,
        ),
    )


@_register
def iGator(
    symbol: str,
    timeframe: TimeframeLike,
    jaw_period: int,
    jaw_shift: int,
    teeth_period: int,
    teeth_shift: int,
    lips_period: int,
    lips_shift: int,
    ma_method: SmoothingMethod,
    applied_price: AppliedPrice,
    mode: BandsLine,
    shift: int,
) -> Indicator:
    """Gator oscillator (UPPER or LOWER histogram)."""
    return Indicator(
        "iGator",
        (
            symbol,
            to_minutes(timeframe),
            jaw_period,
            jaw_shift,
            teeth_period,
            teeth_shift,
            lips_period,
            lips_shift,
            _member(ma_method, SmoothingMethod),
            _member(applied_price, AppliedPrice),
            _member(mode, BandsLine),
            shift,
        ),
    )


@_register
def iBands(
    symbol: str,
    timeframe: TimeframeLike,
    period: int,
    deviation: float,
    bands_shift: int,
    applied_price: AppliedPrice,
    mode: BandsLine,
    shift: int,
) -> Indicator:
    """Bollinger Bands."""
    return Indicator(
        "iBands",
        (
            symbol,
            to_minutes(timeframe),
            period,
            deviation,
            bands_shift,
            _member(applied_price, AppliedPrice),
            _member(mode, BandsLine),
            shift,
        ),
    )


@_register
def iEnvelopes(
    symbol: str,
    timeframe: TimeframeLike,
    ma_period: int,
    ma_method: SmoothingMethod,
    ma_shift: int,
    applied_price: AppliedPrice,
    deviation: float,
    mode: BandsLine,
    shift: int,
) -> Indicator:
    """Envelopes (UPPER or LOWER line)."""
    return Indicator(
        "iEnvelopes",
        (
            symbol,
            to_minutes(timeframe),
            ma_period,
            _member(ma_method, SmoothingMethod),
            ma_shift,
            _member(applied_price, AppliedPrice),
            deviation,
            _member(mode, BandsLine),
            shift,
        ),
    )


@_register
def iFractals(
    symbol: str, timeframe: TimeframeLike, mode: BandsLine, shift: int
) -> Indicator:
    """Fractals (UPPER or LOWER)."""
    return Indicator(
        "iFractals",
        (symbol, to_minutes(timeframe), _member(mode, BandsLine), shift),
    )


@_register
def iIchimoku(
    symbol: str,
    timeframe: TimeframeLike,
    tenkan_sen: int,
    kijun_sen: int,
    senkou_span_b: int,
    mode: IchimokuLine,
    shift: int,
) -> Indicator:
    """Ichimoku Kinko Hyo."""
    return Indicator(
        "iIchimoku",
        (
            symbol,
            to_minutes(timeframe),
            tenkan_sen,
            kijun_sen,
            senkou_span_b,
            _member(mode, IchimokuLine),
            shift,
        ),
    )


@_register
def iMA(
    symbol: str,
    timeframe: TimeframeLike,
    ma_period: int,
    ma_shift: int,
    ma_method: SmoothingMethod,
    applied_price: AppliedPrice,
    shift: int,
) -> Indicator:
    """Moving Average."""
    return Indicator(
        "iMA",
        (
            symbol,
            to_minutes(timeframe),
            ma_period,
            ma_shift,
            _member(ma_method, SmoothingMethod),
            _member(applied_price, AppliedPrice),
            shift,
        ),
    )


@_register
def iMACD(
    symbol: str,
    timeframe: TimeframeLike,
    fast_ema_period: int,
    slow_ema_period: int,
    signal_period: int,
    applied_price: AppliedPrice,
    mode: MACDLine,
    shift: int,
) -> Indicator:
    """Moving Average Convergence/Divergence."""
    return Indicator(
        "iMACD",
        (
            symbol,
            to_minutes(timeframe),
            fast_ema_period,
            slow_ema_period,
            signal_period,
            _member(applied_price, AppliedPrice),
            _member(mode, MACDLine),
            shift,
        ),
    )


@_register
def iOsMA(
    symbol: str,
    timeframe: TimeframeLike,
    fast_ema_period: int,
    slow_ema_period: int,
    signal_period: int,
    applied_price: AppliedPrice,
    shift: int,
) -> Indicator:
    """Moving Average of Oscillator (MACD histogram)."""
    return Indicator(
        "iOsMA",
        (
            symbol,
            to_minutes(timeframe),
            fast_ema_period,
            slow_ema_period,
            signal_period,
            _member(applied_price, AppliedPrice),
            shift,
        ),
    )


@_register
def iStdDev(
    symbol: str,
    timeframe: TimeframeLike,
    ma_period: int,
    ma_shift: int,
    ma_method: SmoothingMethod,
    applied_price: AppliedPrice,
    shift: int,
) -> Indicator:
    """Standard Deviation."""
    return Indicator(
        "iStdDev",
        (
            symbol,
            to_minutes(timeframe),
            ma_period,
            ma_shift,
            _member(ma_method, SmoothingMethod),
            _member(applied_price, AppliedPrice),
            shift,
        ),
    )


__all__ = [
    "INDICATORS",
    "Indicator",
    "iAC",
    "iAD",
    "iADX",
    "iAO",
    "iATR",
    "iAlligator",
    "iBWMFI",
    "iBands",
    "iBearsPower",
    "iBullsPower",
    "iCCI",
    "iDeMarker",
    "iEnvelopes",
    "iForce",
    "iFractals",
    "iGator",
    "iIchimoku",
    "iMA",
    "iMACD",
    "iMFI",
    "iMomentum",
    "iOBV",
    "iOsMA",
    "iRSI",
    "iRVI",
    "iSAR",
    "iStdDev",
    "iStochastic",
    "iWPR",
]
