"""Snapshot assembly: runs the full analysis pipeline for one request."""

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from marketlens.config import AnalysisConfig
from marketlens.engine.normalize import normalize_candles
from marketlens.engine.recommend import SENTIMENT_PROFILES, compose_recommendation
from marketlens.engine.signals import (
    calculate_confidence,
    calculate_risk_score,
    classify_sentiment,
)
from marketlens.indicators import calculate_indicators
from marketlens.models import (
    CandleWindow,
    IndicatorSnapshot,
    InstrumentMeta,
    MarketSnapshot,
    PriceSummary,
    Sentiment,
    Timeframe,
)

RSI_OVERBOUGHT = 70
RSI_OVERSOLD = 30


def summarize_price(window: CandleWindow) -> PriceSummary:
    """Summarize the latest price and its change against the previous candle.

    Args:
        window: Candle window.

    Returns:
        PriceSummary. The change percentage falls back to the latest close
        as divisor when the previous close is 0, and is 0 when both are.
    """
    latest, previous = window.latest, window.previous
    change = latest.close - previous.close
    divisor = previous.close or latest.close
    change_percent = (change / divisor) * 100 if divisor else 0.0

    return PriceSummary(
        last=latest.close,
        change=change,
        change_percent=change_percent,
        high=max(window.highs),
        low=min(window.lows),
        open=window.candles[0].open,
        previous_close=previous.close,
    )


def _rsi_insight(rsi: float, flat: bool = False) -> str:
    if flat:
        return "Closing prices have not moved, so RSI gives no overbought or oversold reading."
    if rsi > RSI_OVERBOUGHT:
        return "RSI is in overbought territory; a pullback is possible."
    if rsi < RSI_OVERSOLD:
        return "RSI is in oversold territory; a rebound is likely."
    return "RSI is in the neutral zone, which supports short-term trades."


def _volatility_insight(atr: float, entry_price: float, config: AnalysisConfig) -> str:
    level = "high" if atr > entry_price * config.high_volatility_ratio else "low"
    return f"Average true range (ATR) is {atr:.4f}, indicating {level} volatility."


def build_insights(
    sentiment: Sentiment,
    indicators: IndicatorSnapshot,
    entry_price: float,
    config: AnalysisConfig,
    flat: bool = False,
) -> tuple[str, ...]:
    """Build the trend, RSI zone and volatility commentary lines.

    A flat window (several candles, all closing at the same price) has no
    gains or losses, so the RSI line says so instead of reading its value
    as overbought.
    """
    return (
        SENTIMENT_PROFILES[sentiment].trend_insight,
        _rsi_insight(indicators.rsi14, flat),
        _volatility_insight(indicators.atr14, entry_price, config),
    )


def build_snapshot(
    samples: Iterable[Any],
    *,
    symbol: str,
    meta: Optional[InstrumentMeta] = None,
    timeframe: Optional[Timeframe] = None,
    display_names: Optional[Mapping[str, str]] = None,
    config: Optional[AnalysisConfig] = None,
) -> MarketSnapshot:
    """Analyze raw price samples into a market snapshot.

    Runs normalization, indicators, sentiment, confidence, trade levels and
    risk in order. Instrument metadata and display names are annotations
    only and never affect the numbers.

    Args:
        samples: Raw samples (time/open/high/low/close/volume), oldest first.
        symbol: Instrument symbol.
        meta: Instrument metadata from the data provider.
        timeframe: Interval and range the samples were requested with.
        display_names: Read-only symbol to display-name mapping.
        config: Analysis settings. Defaults to AnalysisConfig().

    Returns:
        The assembled snapshot.

    Raises:
        EmptyWindowError: If no valid candle survives normalization.
    """
    config = config or AnalysisConfig()
    names = display_names or {}

    window = normalize_candles(samples, max_candles=config.max_candles)
    indicators = calculate_indicators(window)

    sentiment = classify_sentiment(indicators)
    confidence = calculate_confidence(indicators)
    recommendation = compose_recommendation(
        sentiment, window.latest.close, indicators.atr14, confidence, config
    )
    # Risk reads the raw close, not the floored entry price
    risk_score = calculate_risk_score(confidence, indicators.atr14, window.latest.close)
    closes = window.closes
    flat = len(closes) > 1 and all(close == closes[0] for close in closes)

    return MarketSnapshot(
        symbol=symbol,
        display_name=names.get(symbol, symbol),
        meta=meta or InstrumentMeta(),
        price=summarize_price(window),
        candles=window,
        indicators=indicators,
        recommendation=recommendation,
        risk_score=risk_score,
        insights=build_insights(
            sentiment, indicators, recommendation.entry_price, config, flat
        ),
        timeframe=timeframe or Timeframe(
            interval=config.default_interval, range=config.default_range
        ),
    )
