"""The assembled market snapshot returned for one analysis request."""

from pydantic import BaseModel, Field

from marketlens.models.analysis import (
    IndicatorSnapshot,
    InstrumentMeta,
    PriceSummary,
    Recommendation,
    Timeframe,
)
from marketlens.models.candle import CandleWindow


def _price(value: float) -> float:
    return round(value, 4)


class MarketSnapshot(BaseModel):
    """Everything derived from one candle window, built once and never mutated."""

    symbol: str = Field(..., min_length=1, description="Instrument symbol")
    display_name: str = Field(..., description="Human-readable instrument name")
    meta: InstrumentMeta
    price: PriceSummary
    candles: CandleWindow
    indicators: IndicatorSnapshot
    recommendation: Recommendation
    risk_score: int = Field(..., ge=20, le=95, description="Risk score (20-95)")
    insights: tuple[str, ...] = Field(..., description="Human-readable insight lines")
    timeframe: Timeframe

    model_config = {"frozen": True}

    def to_document(self) -> dict:
        """Convert to the JSON-ready document served to presentation layers.

        Prices and trade levels are rounded to 4 decimals, the change
        percentage to 2.
        """
        price = self.price
        indicators = self.indicators
        rec = self.recommendation
        return {
            "symbol": self.symbol,
            "displayName": self.display_name,
            "exchangeName": self.meta.exchange,
            "currency": self.meta.currency,
            "marketState": self.meta.market_state,
            "price": {
                "last": _price(price.last),
                "change": _price(price.change),
                "changePercent": round(price.change_percent, 2),
                "high": _price(price.high),
                "low": _price(price.low),
                "open": _price(price.open),
                "previousClose": _price(price.previous_close),
            },
            "candles": [candle.model_dump() for candle in self.candles.candles],
            "indicators": {
                "ema20": indicators.ema20,
                "ema50": indicators.ema50,
                "ema100": indicators.ema100,
                "rsi14": indicators.rsi14,
                "stochasticK": indicators.stochastic_k,
                "stochasticD": indicators.stochastic_d,
                "atr14": indicators.atr14,
            },
            "recommendation": {
                "sentiment": rec.sentiment.value,
                "confidence": rec.confidence,
                "entryPrice": _price(rec.entry_price),
                "stopLoss": _price(rec.stop_loss),
                "takeProfit": _price(rec.take_profit),
                "preferredTimeframe": rec.preferred_timeframe,
                "rationale": rec.rationale,
                "bestSessions": list(rec.best_sessions),
            },
            "insights": list(self.insights),
            "riskScore": self.risk_score,
            "timeframe": {
                "interval": self.timeframe.interval,
                "range": self.timeframe.range,
            },
            "meta": {
                "timezone": self.meta.timezone,
                "exchange": self.meta.exchange,
                "instrumentType": self.meta.instrument_type,
            },
        }
