"""marketlens: technical indicator and signal snapshots for price history."""

from marketlens.engine import build_snapshot
from marketlens.errors import ConfigError, EmptyWindowError, MarketLensError, ProviderError
from marketlens.models import MarketSnapshot, Sentiment

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "EmptyWindowError",
    "MarketLensError",
    "MarketSnapshot",
    "ProviderError",
    "Sentiment",
    "build_snapshot",
]
