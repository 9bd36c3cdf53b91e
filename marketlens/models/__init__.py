"""Data models for marketlens."""

from marketlens.models.analysis import (
    IndicatorSnapshot,
    InstrumentMeta,
    PriceSummary,
    Recommendation,
    Sentiment,
    StochasticResult,
    Timeframe,
)
from marketlens.models.candle import Candle, CandleWindow
from marketlens.models.snapshot import MarketSnapshot

__all__ = [
    "Candle",
    "CandleWindow",
    "IndicatorSnapshot",
    "InstrumentMeta",
    "MarketSnapshot",
    "PriceSummary",
    "Recommendation",
    "Sentiment",
    "StochasticResult",
    "Timeframe",
]
