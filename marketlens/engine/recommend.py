"""Trade level composition and the per-sentiment label table."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional

from pydantic import BaseModel

from marketlens.config import AnalysisConfig
from marketlens.models import Recommendation, Sentiment


class SentimentProfile(BaseModel):
    """Descriptive labels attached to a sentiment."""

    preferred_timeframe: str
    rationale: str
    best_sessions: tuple[str, ...]
    trend_insight: str

    model_config = {"frozen": True}


_ACTIVE_SESSIONS = (
    "Main session open",
    "One hour before the close",
    "During breakout moments",
)
_DEFENSIVE_SESSIONS = (
    "End of the European session",
    "Start of the US session",
    "High-liquidity periods",
)

SENTIMENT_PROFILES: Mapping[Sentiment, SentimentProfile] = MappingProxyType({
    Sentiment.BULLISH: SentimentProfile(
        preferred_timeframe="4-hour chart to confirm the trend",
        rationale="Positive moving-average crossovers with sustained upward momentum.",
        best_sessions=_ACTIVE_SESSIONS,
        trend_insight="The market shows positive momentum with improving short-term moving averages.",
    ),
    Sentiment.BEARISH: SentimentProfile(
        preferred_timeframe="Daily chart to filter out noise",
        rationale="Moving averages are pointing down and momentum confirms fading buying pressure.",
        best_sessions=_DEFENSIVE_SESSIONS,
        trend_insight="The market is under selling pressure; trade with extra caution at this stage.",
    ),
    Sentiment.NEUTRAL: SentimentProfile(
        preferred_timeframe="1-hour chart to capture short swings",
        rationale="Converging moving averages and neutral momentum point to sideways movement.",
        best_sessions=_DEFENSIVE_SESSIONS,
        trend_insight="The market is moving sideways; waiting for a clear breakout may be the best option.",
    ),
})


def compose_recommendation(
    sentiment: Sentiment,
    latest_close: float,
    atr: float,
    confidence: int,
    config: Optional[AnalysisConfig] = None,
) -> Recommendation:
    """Place entry, stop-loss and take-profit levels around the latest close.

    Bearish calls target below the entry with the stop above it. Bullish
    and neutral calls target above with the stop below; neutral is treated
    as a weak bullish default. Every level is floored at ``config.min_price``
    so a large ATR never produces a non-positive price.

    Args:
        sentiment: Classified sentiment.
        latest_close: Close of the latest candle (the entry).
        atr: Average true range.
        confidence: Confidence score (0-100).
        config: Analysis settings (multipliers and price floor).

    Returns:
        The recommendation.
    """
    config = config or AnalysisConfig()
    direction = -1 if sentiment is Sentiment.BEARISH else 1

    entry = max(latest_close, config.min_price)
    take_profit = entry + direction * atr * config.take_profit_atr
    stop_loss = entry - direction * atr * config.stop_loss_atr

    profile = SENTIMENT_PROFILES[sentiment]

    return Recommendation(
        sentiment=sentiment,
        confidence=confidence,
        entry_price=entry,
        stop_loss=max(stop_loss, config.min_price),
        take_profit=max(take_profit, config.min_price),
        preferred_timeframe=profile.preferred_timeframe,
        rationale=profile.rationale,
        best_sessions=profile.best_sessions,
    )
