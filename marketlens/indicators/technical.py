"""Technical indicator calculations over a candle window.

Every function here is pure: it reads the window, never mutates it, and
returns a plain number (or a small frozen result). Windows shorter than an
indicator's period fall back to using all available history, so any
non-empty window yields a finite value.
"""

from marketlens.models import CandleWindow, IndicatorSnapshot, StochasticResult

EMA_PERIODS = (20, 50, 100)
RSI_PERIOD = 14
STOCHASTIC_PERIOD = 14
STOCHASTIC_SMOOTHING = 3
ATR_PERIOD = 14


def _clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, value))


def calculate_sma(values: list[float], period: int) -> list[float]:
    """Calculate Simple Moving Average.

    Args:
        values: List of values (typically close prices)
        period: Number of periods for the moving average

    Returns:
        List of SMA values. First (period-1) values will be NaN.
    """
    if len(values) < period or period < 1:
        return [float('nan')] * len(values)

    result = [float('nan')] * (period - 1)

    for i in range(period - 1, len(values)):
        window = values[i - period + 1:i + 1]
        result.append(sum(window) / period)

    return result


def calculate_ema(window: CandleWindow, period: int) -> float:
    """Calculate the latest Exponential Moving Average of closes.

    The EMA starts from the simple average of the first
    ``min(period, len(window))`` closes and is then updated with
    ``alpha = 2 / (period + 1)`` for every close after the first, so
    windows shorter than the period still separate fast and slow averages.

    Args:
        window: Candle window
        period: Number of periods for the EMA

    Returns:
        Final EMA value. A single-candle window returns its close.
    """
    if period < 1:
        raise ValueError(f"EMA period must be positive, got {period}")

    closes = window.closes
    if len(closes) < 2:
        return closes[-1]

    seed_length = min(period, len(closes))
    ema = sum(closes[:seed_length]) / seed_length
    alpha = 2 / (period + 1)

    for price in closes[1:]:
        ema = price * alpha + ema * (1 - alpha)

    return ema


def calculate_rsi(window: CandleWindow, period: int = RSI_PERIOD) -> float:
    """Calculate the latest Relative Strength Index using Wilder smoothing.

    Average gain and loss are seeded with the mean of the first ``period``
    close-to-close changes (all of them for short windows), then smoothed
    with ``avg = (avg * (period - 1) + current) / period``.

    Args:
        window: Candle window
        period: RSI period (default 14)

    Returns:
        RSI value (0-100). 100 when there are no losses; 50 for a
        single-candle window, which has no price changes at all.
    """
    if period < 1:
        raise ValueError(f"RSI period must be positive, got {period}")

    closes = window.closes
    changes = [closes[i] - closes[i - 1] for i in range(1, len(closes))]
    if not changes:
        return 50.0

    gains = [max(0.0, c) for c in changes]
    losses = [abs(min(0.0, c)) for c in changes]

    seed_length = min(period, len(changes))
    avg_gain = sum(gains[:seed_length]) / seed_length
    avg_loss = sum(losses[:seed_length]) / seed_length

    for i in range(seed_length, len(changes)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return _clamp_percent(100 - (100 / (1 + rs)))


def calculate_stochastic_k_series(window: CandleWindow, period: int) -> list[float]:
    """Calculate %K for every candle in the window.

    Each value compares the close to the high/low range of the trailing
    ``period`` candles (fewer at the start of the window).

    Args:
        window: Candle window
        period: %K lookback period

    Returns:
        List of %K values (0-100), one per candle. 50 when the range is zero.
    """
    if period < 1:
        raise ValueError(f"Stochastic period must be positive, got {period}")

    highs, lows, closes = window.highs, window.lows, window.closes
    k_values = []

    for i in range(len(closes)):
        start = max(0, i - period + 1)
        highest_high = max(highs[start:i + 1])
        lowest_low = min(lows[start:i + 1])

        if highest_high == lowest_low:
            k_values.append(50.0)  # Neutral when no range
        else:
            k = ((closes[i] - lowest_low) / (highest_high - lowest_low)) * 100
            k_values.append(_clamp_percent(k))

    return k_values


def calculate_stochastic(
    window: CandleWindow,
    period: int = STOCHASTIC_PERIOD,
    smooth_period: int = STOCHASTIC_SMOOTHING,
) -> StochasticResult:
    """Calculate the latest Stochastic Oscillator (%K and %D).

    Args:
        window: Candle window
        period: %K period (default 14)
        smooth_period: %D smoothing period (default 3)

    Returns:
        StochasticResult with the latest %K and %D. %D averages the last
        ``smooth_period`` %K values, or all of them for short windows.
    """
    if smooth_period < 1:
        raise ValueError(f"Stochastic smoothing period must be positive, got {smooth_period}")

    k_values = calculate_stochastic_k_series(window, period)
    if len(k_values) >= smooth_period:
        d = calculate_sma(k_values, smooth_period)[-1]
    else:
        d = sum(k_values) / len(k_values)

    return StochasticResult(k=k_values[-1], d=_clamp_percent(d))


def calculate_true_ranges(window: CandleWindow) -> list[float]:
    """Calculate the true range of every candle.

    Args:
        window: Candle window

    Returns:
        List of true ranges. The first candle has no previous close, so its
        true range is just high - low.
    """
    candles = window.candles
    true_ranges = [candles[0].high - candles[0].low]

    for i in range(1, len(candles)):
        prev_close = candles[i - 1].close
        tr = max(
            candles[i].high - candles[i].low,
            abs(candles[i].high - prev_close),
            abs(candles[i].low - prev_close)
        )
        true_ranges.append(tr)

    return true_ranges


def calculate_atr(window: CandleWindow, period: int = ATR_PERIOD) -> float:
    """Calculate the latest Average True Range.

    Uses a simple mean of the trailing ``period`` true ranges rather than
    Wilder smoothing.

    Args:
        window: Candle window
        period: ATR period (default 14)

    Returns:
        ATR value. A single-candle window returns its high - low.
    """
    if period < 1:
        raise ValueError(f"ATR period must be positive, got {period}")

    true_ranges = calculate_true_ranges(window)
    if len(true_ranges) >= period:
        return calculate_sma(true_ranges, period)[-1]
    return sum(true_ranges) / len(true_ranges)


def calculate_indicators(window: CandleWindow) -> IndicatorSnapshot:
    """Calculate the standard indicator set for a window.

    Args:
        window: Candle window

    Returns:
        IndicatorSnapshot with EMA 20/50/100, RSI 14, Stochastic 14/3
        and ATR 14.
    """
    fast, medium, slow = EMA_PERIODS
    stochastic = calculate_stochastic(window, STOCHASTIC_PERIOD, STOCHASTIC_SMOOTHING)

    return IndicatorSnapshot(
        ema20=calculate_ema(window, fast),
        ema50=calculate_ema(window, medium),
        ema100=calculate_ema(window, slow),
        rsi14=calculate_rsi(window, RSI_PERIOD),
        stochastic_k=stochastic.k,
        stochastic_d=stochastic.d,
        atr14=calculate_atr(window, ATR_PERIOD),
    )
