"""Signal derivation engine: normalization, scoring and snapshot assembly."""

from marketlens.engine.assembler import build_insights, build_snapshot, summarize_price
from marketlens.engine.normalize import DEFAULT_MAX_CANDLES, normalize_candles
from marketlens.engine.recommend import (
    SENTIMENT_PROFILES,
    SentimentProfile,
    compose_recommendation,
)
from marketlens.engine.signals import (
    calculate_confidence,
    calculate_risk_score,
    classify_sentiment,
)

__all__ = [
    "DEFAULT_MAX_CANDLES",
    "SENTIMENT_PROFILES",
    "SentimentProfile",
    "build_insights",
    "build_snapshot",
    "calculate_confidence",
    "calculate_risk_score",
    "classify_sentiment",
    "compose_recommendation",
    "normalize_candles",
    "summarize_price",
]
