"""Analysis result models: indicator values, sentiment and recommendation."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Sentiment(str, Enum):
    """Directional classification derived from the indicator snapshot."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class StochasticResult(BaseModel):
    """Latest stochastic oscillator values."""

    k: float = Field(..., ge=0, le=100, description="%K")
    d: float = Field(..., ge=0, le=100, description="%D (SMA of %K)")

    model_config = {"frozen": True}


class IndicatorSnapshot(BaseModel):
    """Latest indicator values for one candle window."""

    ema20: float = Field(..., description="EMA of closes, 20 periods")
    ema50: float = Field(..., description="EMA of closes, 50 periods")
    ema100: float = Field(..., description="EMA of closes, 100 periods")
    rsi14: float = Field(..., ge=0, le=100, description="Wilder RSI, 14 periods")
    stochastic_k: float = Field(..., ge=0, le=100, description="Stochastic %K (14)")
    stochastic_d: float = Field(..., ge=0, le=100, description="Stochastic %D (3)")
    atr14: float = Field(..., ge=0, description="Average true range, 14 periods")

    model_config = {"frozen": True}


class Recommendation(BaseModel):
    """Trade levels and labels derived from sentiment, price and ATR."""

    sentiment: Sentiment = Field(..., description="Directional classification")
    confidence: int = Field(..., ge=0, le=100, description="Signal strength score")
    entry_price: float = Field(..., gt=0, description="Suggested entry price")
    stop_loss: float = Field(..., gt=0, description="Stop-loss level")
    take_profit: float = Field(..., gt=0, description="Take-profit level")
    preferred_timeframe: str = Field(..., description="Suggested chart timeframe")
    rationale: str = Field(..., description="Short explanation of the call")
    best_sessions: tuple[str, ...] = Field(..., description="Preferred trading sessions")

    model_config = {"frozen": True}


class PriceSummary(BaseModel):
    """Latest price and its change against the previous candle."""

    last: float
    change: float
    change_percent: float
    high: float = Field(..., description="Highest high in the window")
    low: float = Field(..., description="Lowest low in the window")
    open: float = Field(..., description="Open of the first candle in the window")
    previous_close: float

    model_config = {"frozen": True}


class InstrumentMeta(BaseModel):
    """Instrument annotations passed through from the data provider."""

    currency: str = Field(default="USD")
    exchange: str = Field(default="Unknown")
    market_state: str = Field(default="UNKNOWN")
    timezone: str = Field(default="UTC")
    instrument_type: Optional[str] = Field(default=None)

    model_config = {"frozen": True}


class Timeframe(BaseModel):
    """Candle interval and history range the samples were requested with."""

    interval: str = Field(..., min_length=1, description="Candle interval, e.g. '30m'")
    range: str = Field(..., min_length=1, description="History range, e.g. '5d'")

    model_config = {"frozen": True}
