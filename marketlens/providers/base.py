"""Base data provider interface for marketlens."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel, Field

from marketlens.models import InstrumentMeta


class MarketData(BaseModel):
    """Fully materialized price history handed to the analysis engine."""

    symbol: Optional[str] = Field(default=None, description="Symbol reported by the source")
    samples: list[dict[str, Any]] = Field(
        default_factory=list, description="Raw OHLCV samples, oldest first"
    )
    meta: InstrumentMeta = Field(default_factory=InstrumentMeta)

    model_config = {"frozen": True}


class BaseProvider(ABC):
    """Abstract base class for price history sources.

    Providers complete all I/O before returning, so the engine only ever
    sees a materialized ``MarketData``.
    """

    @abstractmethod
    def get_history(self, symbol: str, interval: str, history_range: str) -> MarketData:
        """Get raw price history for a symbol.

        Args:
            symbol: Instrument symbol.
            interval: Candle interval (e.g. "30m").
            history_range: History range (e.g. "5d").

        Returns:
            MarketData with raw samples and instrument metadata.

        Raises:
            ProviderError: If the history cannot be loaded.
        """
        pass
