"""Exception types raised by marketlens."""


class MarketLensError(Exception):
    """Base class for all marketlens errors."""


class EmptyWindowError(MarketLensError):
    """No valid candles survived normalization.

    This is the only error the analysis engine raises. Callers should
    present it as a "no data" condition.
    """

    def __init__(self, message: str = "No valid candles in price history"):
        super().__init__(message)


class ProviderError(MarketLensError):
    """Price history could not be loaded from a data provider."""


class ConfigError(MarketLensError):
    """Configuration file is unreadable or invalid."""
