"""Property-based tests for technical indicators.

Reference values are cross-checked against pandas rolling/ewm calculations.
"""

import math

import pandas as pd
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from marketlens.indicators import (
    calculate_atr,
    calculate_ema,
    calculate_indicators,
    calculate_rsi,
    calculate_sma,
    calculate_stochastic,
    calculate_stochastic_k_series,
    calculate_true_ranges,
)
from marketlens.models import Candle, CandleWindow


# Strategy for generating realistic price series
@st.composite
def price_series(draw, min_length: int = 1, max_length: int = 200):
    """Generate a realistic price series with positive values and varied movements."""
    length = draw(st.integers(min_value=min_length, max_value=max_length))

    base_price = draw(st.floats(min_value=1.0, max_value=5000.0))

    changes = draw(st.lists(
        st.sampled_from([-0.05, -0.04, -0.03, -0.02, -0.01, -0.005, 0.0,
                         0.005, 0.01, 0.02, 0.03, 0.04, 0.05]),
        min_size=length - 1,
        max_size=length - 1
    ))

    prices = [base_price]
    for change in changes:
        prices.append(max(0.01, prices[-1] * (1 + change)))

    return prices


def make_window(closes: list[float], spread: float = 0.02) -> CandleWindow:
    """Build a window whose candles open at the close with a fixed % range."""
    return CandleWindow(candles=tuple(
        Candle(
            time=i * 60,
            open=price,
            high=price * (1 + spread),
            low=price * (1 - spread),
            close=price,
            volume=1000,
        )
        for i, price in enumerate(closes)
    ))


def flat_window(count: int, price: float = 100.0) -> CandleWindow:
    return CandleWindow(candles=tuple(
        Candle(time=i * 60, open=price, high=price, low=price, close=price)
        for i in range(count)
    ))


def rising_window() -> CandleWindow:
    """21 candles closing 100, 101, ... 120, each opening at the prior close."""
    return CandleWindow(candles=tuple(
        Candle(time=i * 60, open=close - 1, high=close, low=close - 1, close=close)
        for i, close in enumerate(range(100, 121))
    ))


class TestIndicatorRanges:
    """
    *For any* non-empty window, every indicator returns a finite value in
    its documented range.
    """

    @given(prices=price_series())
    @settings(max_examples=100, deadline=None)
    def test_values_are_finite_and_bounded(self, prices: list[float]):
        window = make_window(prices)
        snapshot = calculate_indicators(window)

        for value in snapshot.model_dump().values():
            assert math.isfinite(value)

        assert 0 <= snapshot.rsi14 <= 100
        assert 0 <= snapshot.stochastic_k <= 100
        assert 0 <= snapshot.stochastic_d <= 100
        assert snapshot.atr14 >= 0

    @given(prices=price_series(), period=st.integers(min_value=1, max_value=120))
    @settings(max_examples=100, deadline=None)
    def test_ema_stays_within_close_range(self, prices: list[float], period: int):
        """EMA is a weighted average, so it never leaves the closes' range."""
        ema = calculate_ema(make_window(prices), period)
        tolerance = 1e-9 * max(prices)
        assert min(prices) - tolerance <= ema <= max(prices) + tolerance

    @given(prices=price_series(min_length=2))
    @settings(max_examples=50, deadline=None)
    def test_window_is_not_modified(self, prices: list[float]):
        window = make_window(prices)
        before = window.model_dump()

        calculate_indicators(window)

        assert window.model_dump() == before


class TestReferenceValues:
    """
    *For any* price series, indicator values match the equivalent pandas
    calculation.
    """

    @given(prices=price_series(min_length=2), period=st.sampled_from([3, 14, 20, 50, 100]))
    @settings(max_examples=100, deadline=None)
    def test_ema_matches_pandas_ewm(self, prices: list[float], period: int):
        seed_length = min(period, len(prices))
        seed = sum(prices[:seed_length]) / seed_length

        series = pd.Series([seed] + prices[1:])
        expected = series.ewm(alpha=2 / (period + 1), adjust=False).mean().iloc[-1]

        assert calculate_ema(make_window(prices), period) == pytest.approx(expected, rel=1e-9)

    @given(prices=price_series(min_length=16, max_length=200))
    @settings(max_examples=100, deadline=None)
    def test_rsi_matches_wilder_ewm(self, prices: list[float]):
        period = 14
        changes = pd.Series(prices).diff().dropna()
        gains = changes.clip(lower=0)
        losses = (-changes).clip(lower=0)

        def wilder(values: pd.Series) -> float:
            seeded = pd.Series([values.iloc[:period].mean()] + list(values.iloc[period:]))
            return seeded.ewm(alpha=1 / period, adjust=False).mean().iloc[-1]

        avg_gain, avg_loss = wilder(gains), wilder(losses)
        expected = 100.0 if avg_loss == 0 else 100 - 100 / (1 + avg_gain / avg_loss)

        assert calculate_rsi(make_window(prices), period) == pytest.approx(expected, abs=1e-6)

    @given(prices=price_series(min_length=14, max_length=200))
    @settings(max_examples=100, deadline=None)
    def test_atr_matches_pandas_rolling_mean(self, prices: list[float]):
        window = make_window(prices)
        df = pd.DataFrame({"high": window.highs, "low": window.lows, "close": window.closes})
        prev_close = df["close"].shift(1)
        tr = pd.concat([
            df["high"] - df["low"],
            (df["high"] - prev_close).abs(),
            (df["low"] - prev_close).abs(),
        ], axis=1).max(axis=1)

        expected = tr.rolling(14).mean().iloc[-1]

        assert calculate_atr(window, 14) == pytest.approx(expected, rel=1e-9)

    @given(prices=price_series(min_length=16, max_length=200))
    @settings(max_examples=100, deadline=None)
    def test_stochastic_matches_pandas_rolling(self, prices: list[float]):
        window = make_window(prices)
        df = pd.DataFrame({"high": window.highs, "low": window.lows, "close": window.closes})
        highest = df["high"].rolling(14).max()
        lowest = df["low"].rolling(14).min()
        k = (df["close"] - lowest) / (highest - lowest) * 100
        d = k.rolling(3).mean()

        result = calculate_stochastic(window, 14, 3)

        assert result.k == pytest.approx(k.iloc[-1], abs=1e-9)
        assert result.d == pytest.approx(d.iloc[-1], abs=1e-9)


class TestEMA:
    def test_known_values(self):
        # seed = mean(1, 2, 3) = 2, then alpha = 0.5 over closes 2..5
        assert calculate_ema(make_window([1, 2, 3, 4, 5]), 3) == pytest.approx(4.125)

    def test_single_candle_returns_close(self):
        window = CandleWindow(candles=(Candle(time=0, open=50, high=52, low=49, close=51),))
        assert calculate_ema(window, 20) == 51

    def test_short_window_separates_periods(self):
        window = rising_window()
        ema20 = calculate_ema(window, 20)
        ema50 = calculate_ema(window, 50)
        ema100 = calculate_ema(window, 100)

        assert ema20 > ema50 > ema100

    def test_invalid_period(self):
        with pytest.raises(ValueError):
            calculate_ema(make_window([1, 2]), 0)


class TestRSI:
    def test_rising_closes_are_overbought(self):
        assert calculate_rsi(rising_window(), 14) >= 70

    def test_short_window_uses_available_steps(self):
        # changes +1, -0.5, +1.5 -> avg gain 2.5/3, avg loss 0.5/3, RS = 5
        rsi = calculate_rsi(make_window([10, 11, 10.5, 12]), 14)
        assert rsi == pytest.approx(100 - 100 / 6)

    def test_no_losses_is_100(self):
        assert calculate_rsi(flat_window(3), 14) == 100.0

    def test_falling_closes_are_oversold(self):
        assert calculate_rsi(make_window([float(p) for p in range(120, 99, -1)]), 14) == 0.0

    def test_single_candle_is_neutral(self):
        assert calculate_rsi(flat_window(1), 14) == 50.0


class TestStochastic:
    def test_zero_range_is_midpoint(self):
        result = calculate_stochastic(flat_window(3))
        assert result.k == 50.0
        assert result.d == 50.0

    def test_short_window_averages_all_k_values(self):
        window = CandleWindow(candles=(
            Candle(time=0, open=10, high=12, low=8, close=11),
            Candle(time=60, open=11, high=14, low=10, close=14),
        ))
        k_values = calculate_stochastic_k_series(window, 14)

        # first: (11-8)/(12-8); second over both bars: (14-8)/(14-8)
        assert k_values == pytest.approx([75.0, 100.0])

        result = calculate_stochastic(window, 14, 3)
        assert result.k == pytest.approx(100.0)
        assert result.d == pytest.approx(87.5)

    def test_close_at_high_is_100(self):
        assert calculate_stochastic(rising_window()).k == 100.0


class TestATR:
    def test_flat_candles_have_zero_atr(self):
        assert calculate_atr(flat_window(3)) == 0.0

    def test_single_candle_is_high_minus_low(self):
        window = CandleWindow(candles=(Candle(time=0, open=50, high=52, low=49, close=51),))
        assert calculate_atr(window) == 3.0

    def test_gap_uses_previous_close(self):
        window = CandleWindow(candles=(
            Candle(time=0, open=10, high=11, low=9, close=10),
            Candle(time=60, open=15, high=16, low=14, close=15),
        ))
        assert calculate_true_ranges(window) == [2.0, 6.0]
        assert calculate_atr(window, 14) == 4.0

    def test_uses_trailing_period_only(self):
        ranges = calculate_true_ranges(rising_window())
        assert ranges == [1.0] * 21
        assert calculate_atr(rising_window(), 5) == 1.0


class TestSMA:
    def test_leading_values_are_nan(self):
        result = calculate_sma([1.0, 2.0, 3.0, 4.0], 3)
        assert math.isnan(result[0]) and math.isnan(result[1])
        assert result[2:] == [2.0, 3.0]

    def test_too_short_is_all_nan(self):
        assert all(math.isnan(v) for v in calculate_sma([1.0, 2.0], 3))
