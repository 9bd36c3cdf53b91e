"""Sentiment classification, confidence and risk scoring."""

from marketlens.models import IndicatorSnapshot, Sentiment

RISK_FLOOR = 20
RISK_CEILING = 95

# Confidence weights (sum to 100 with the base)
_CONFIDENCE_BASE = 30.0
_TREND_WEIGHT = 35.0
_MOMENTUM_WEIGHT = 20.0
_STOCHASTIC_WEIGHT = 15.0

# EMA spread (in ATRs) at which the trend term saturates
_TREND_SATURATION_ATR = 2.0


def classify_sentiment(snapshot: IndicatorSnapshot) -> Sentiment:
    """Classify an indicator snapshot as bullish, bearish or neutral.

    Bullish needs stacked rising EMAs (20 > 50 > 100) with RSI and %K at or
    above 50; bearish is the mirror image. Anything else is neutral.

    Args:
        snapshot: Indicator values for one window.

    Returns:
        The sentiment.
    """
    ema20, ema50, ema100 = snapshot.ema20, snapshot.ema50, snapshot.ema100

    if ema20 > ema50 > ema100 and snapshot.rsi14 >= 50 and snapshot.stochastic_k >= 50:
        return Sentiment.BULLISH
    if ema20 < ema50 < ema100 and snapshot.rsi14 <= 50 and snapshot.stochastic_k <= 50:
        return Sentiment.BEARISH
    return Sentiment.NEUTRAL


def _trend_strength(snapshot: IndicatorSnapshot) -> float:
    """EMA 20/50 spread measured in ATRs, scaled to 0-1."""
    spread = abs(snapshot.ema20 - snapshot.ema50)
    if snapshot.atr14 <= 0:
        return 1.0 if spread > 0 else 0.0
    return min(spread / snapshot.atr14, _TREND_SATURATION_ATR) / _TREND_SATURATION_ATR


def calculate_confidence(snapshot: IndicatorSnapshot) -> int:
    """Score how strongly the indicators agree on a direction.

    Weighted sum of the EMA 20/50 spread (in ATRs), RSI distance from 50
    and %K distance from 50.

    Args:
        snapshot: Indicator values for one window.

    Returns:
        Confidence score from 0 to 100.
    """
    momentum = min(abs(snapshot.rsi14 - 50) / 50, 1.0)
    stochastic = min(abs(snapshot.stochastic_k - 50) / 50, 1.0)

    score = (
        _CONFIDENCE_BASE
        + _TREND_WEIGHT * _trend_strength(snapshot)
        + _MOMENTUM_WEIGHT * momentum
        + _STOCHASTIC_WEIGHT * stochastic
    )
    return int(max(0, min(100, round(score))))


def calculate_risk_score(confidence: float, atr: float, entry_price: float) -> int:
    """Combine confidence with relative volatility into a risk score.

    ``round(confidence + atr / entry_price * 120 - 10)``, clamped to
    [20, 95]. A non-positive entry price adds no volatility term.

    Args:
        confidence: Confidence score (0-100).
        atr: Average true range.
        entry_price: Suggested entry price.

    Returns:
        Risk score from 20 to 95.
    """
    volatility = (atr / entry_price) * 120 if entry_price > 0 else 0.0
    score = max(RISK_FLOOR, min(RISK_CEILING, confidence + volatility - 10))
    return int(round(score))
