"""Candle (OHLCV) data model and the candle window used by indicators."""

from pydantic import BaseModel, Field, model_validator

from marketlens.errors import EmptyWindowError


class Candle(BaseModel):
    """Represents a single OHLCV candle."""

    time: int = Field(..., ge=0, description="Candle open time (epoch seconds)")
    open: float = Field(..., allow_inf_nan=False, description="Opening price")
    high: float = Field(..., allow_inf_nan=False, description="High price")
    low: float = Field(..., allow_inf_nan=False, description="Low price")
    close: float = Field(..., allow_inf_nan=False, description="Closing price")
    volume: float = Field(
        default=0.0, ge=0, allow_inf_nan=False, description="Traded volume (0 if unknown)"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_range(self) -> "Candle":
        if self.low > min(self.open, self.close):
            raise ValueError("low must not exceed open or close")
        if self.high < max(self.open, self.close):
            raise ValueError("high must not be below open or close")
        return self


class CandleWindow(BaseModel):
    """An ordered, non-empty run of candles, oldest first.

    The window is built fresh for every analysis and never reordered.
    Constructing an empty window raises ``EmptyWindowError``.
    """

    candles: tuple[Candle, ...] = Field(..., description="Candles, oldest first")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_not_empty(self) -> "CandleWindow":
        if not self.candles:
            raise EmptyWindowError()
        return self

    def __len__(self) -> int:
        return len(self.candles)

    @property
    def closes(self) -> list[float]:
        return [c.close for c in self.candles]

    @property
    def highs(self) -> list[float]:
        return [c.high for c in self.candles]

    @property
    def lows(self) -> list[float]:
        return [c.low for c in self.candles]

    @property
    def latest(self) -> Candle:
        """Most recent candle."""
        return self.candles[-1]

    @property
    def previous(self) -> Candle:
        """Candle before the latest one, or the latest for a single-candle window."""
        if len(self.candles) < 2:
            return self.candles[-1]
        return self.candles[-2]
