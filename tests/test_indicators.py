"""Tests for the indicator catalogue."""

from __future__ import annotations

import inspect

import pytest

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
from mt4client.indicators import (
    INDICATORS,
    Indicator,
    iAC,
    iADX,
    iAlligator,
    iBands,
    iEnvelopes,
    iIchimoku,
    iMA,
    iMACD,
    iSAR,
    iStochastic,
)
from mt4client.timeframes import NonStandardTimeframe, StandardTimeframe
from tests.constants import TestConstants as tc

# Parameter count of each terminal function, symbol and shift included
_ARITY = {
    "iAC": 3,
    "iAD": 3,
    "iAO": 3,
    "iBWMFI": 3,
    "iATR": 4,
    "iDeMarker": 4,
    "iMFI": 4,
    "iWPR": 4,
    "iOBV": 4,
    "iFractals": 4,
    "iBearsPower": 5,
    "iBullsPower": 5,
    "iCCI": 5,
    "iMomentum": 5,
    "iRSI": 5,
    "iRVI": 5,
    "iSAR": 5,
    "iForce": 6,
    "iADX": 6,
    "iMA": 7,
    "iOsMA": 7,
    "iStdDev": 7,
    "iIchimoku": 7,
    "iBands": 8,
    "iMACD": 8,
    "iEnvelopes": 9,
    "iStochastic": 9,
    "iAlligator": 12,
    "iGator": 12,
}


class TestCatalogue:
    """Test the registry of factories."""

    def test_registry_complete(self) -> None:
        """Every terminal indicator is registered under its own name."""
        assert set(INDICATORS) == set(_ARITY)
        for name, factory in INDICATORS.items():
            assert factory.__name__ == name

    @pytest.mark.parametrize(("name", "arity"), sorted(_ARITY.items()))
    def test_factory_arity(self, name: str, arity: int) -> None:
        """Factories take exactly the terminal function's parameters."""
        assert len(inspect.signature(INDICATORS[name]).parameters) == arity


class TestFactories:
    """Test argument lists of individual factories."""

    def test_moving_average(self) -> None:
        """iMA carries seven arguments in terminal order."""
        ma = iMA(
            tc.Market.SYMBOL,
            StandardTimeframe.H1,
            14,
            0,
            SmoothingMethod.SMA,
            AppliedPrice.CLOSE,
            0,
        )
        assert ma == Indicator("iMA", (tc.Market.SYMBOL, 60, 14, 0, 0, 0, 0))
        assert len(ma.argv) == 7
        assert isinstance(ma.argv, list)

    def test_timeframe_string_and_non_standard(self) -> None:
        """Timeframes are sent as minutes whatever their form."""
        assert iAC(tc.Market.SYMBOL, "4h", 1).arguments == (tc.Market.SYMBOL, 240, 1)
        assert iAC(tc.Market.SYMBOL, NonStandardTimeframe.H2, 0).arguments[1] == 120

    def test_invalid_timeframe_string(self) -> None:
        """Unparseable timeframe strings raise ValueError."""
        with pytest.raises(ValueError, match="Invalid timeframe"):
            iAC(tc.Market.SYMBOL, "hourly", 0)

    def test_discriminators_as_ids(self) -> None:
        """Enum discriminators are sent as their integer ids."""
        adx = iADX(tc.Market.SYMBOL, "1d", 14, AppliedPrice.HIGH, ADXLine.MINUSDI, 1)
        assert adx.arguments == (tc.Market.SYMBOL, 1440, 14, 2, 2, 1)
        assert all(type(arg) is not ADXLine for arg in adx.arguments)

    def test_bands(self) -> None:
        """iBands puts deviation before the bands shift."""
        bands = iBands(
            tc.Market.SYMBOL, "1h", 20, 2.0, 0, AppliedPrice.CLOSE, BandsLine.UPPER, 0
        )
        assert bands.arguments == (tc.Market.SYMBOL, 60, 20, 2.0, 0, 0, 1, 0)

    def test_envelopes(self) -> None:
        """iEnvelopes follows period, method, shift, price, deviation, line."""
        envelopes = iEnvelopes(
            tc.Market.SYMBOL,
            "1h",
            14,
            SmoothingMethod.EMA,
            0,
            AppliedPrice.MEDIAN,
            0.1,
            BandsLine.LOWER,
            0,
        )
        assert envelopes.arguments == (tc.Market.SYMBOL, 60, 14, 1, 0, 4, 0.1, 2, 0)

    def test_macd(self) -> None:
        """iMACD carries the three periods, price and line."""
        macd = iMACD(tc.Market.SYMBOL, "15m", 12, 26, 9, AppliedPrice.CLOSE, MACDLine.SIGNAL, 0)
        assert macd.arguments == (tc.Market.SYMBOL, 15, 12, 26, 9, 0, 1, 0)

    def test_stochastic(self) -> None:
        """iStochastic carries method, price field and line."""
        stochastic = iStochastic(
            tc.Market.SYMBOL,
            "1h",
            5,
            3,
            3,
            SmoothingMethod.SMA,
            PriceField.CLOSE_CLOSE,
            MACDLine.MAIN,
            0,
        )
        assert stochastic.arguments == (tc.Market.SYMBOL, 60, 5, 3, 3, 0, 1, 0, 0)

    def test_alligator(self) -> None:
        """iAlligator carries jaw, teeth and lips settings."""
        alligator = iAlligator(
            tc.Market.SYMBOL,
            "1h",
            13,
            8,
            8,
            5,
            5,
            3,
            SmoothingMethod.SMMA,
            AppliedPrice.MEDIAN,
            AlligatorLine.GATORJAW,
            0,
        )
        assert alligator.arguments[-4:] == (2, 4, 1, 0)
        assert len(alligator.argv) == 12

    def test_ichimoku(self) -> None:
        """iIchimoku line ids start at one."""
        ichimoku = iIchimoku(tc.Market.SYMBOL, "1d", 9, 26, 52, IchimokuLine.CHIKOUSPAN, 0)
        assert ichimoku.arguments == (tc.Market.SYMBOL, 1440, 9, 26, 52, 5, 0)

    def test_float_parameters(self) -> None:
        """iSAR carries float step and maximum."""
        assert iSAR(tc.Market.SYMBOL, "1h", 0.02, 0.2, 0).arguments == (
            tc.Market.SYMBOL,
            60,
            0.02,
            0.2,
            0,
        )


class TestDiscriminatorTyping:
    """Test that discriminators only accept their own enum."""

    def test_bare_int_rejected(self) -> None:
        """A bare integer is not a smoothing method."""
        with pytest.raises(TypeError, match="SmoothingMethod"):
            iMA(tc.Market.SYMBOL, "1h", 14, 0, 0, AppliedPrice.CLOSE, 0)  # type: ignore[arg-type]

    def test_foreign_enum_rejected(self) -> None:
        """A member of another enum with the same value is rejected."""
        with pytest.raises(TypeError, match="AppliedPrice"):
            iMA(
                tc.Market.SYMBOL,
                "1h",
                14,
                0,
                SmoothingMethod.SMA,
                SmoothingMethod.SMA,  # type: ignore[arg-type]
                0,
            )
