"""Technical indicators module."""

from marketlens.indicators.technical import (
    calculate_atr,
    calculate_ema,
    calculate_indicators,
    calculate_rsi,
    calculate_sma,
    calculate_stochastic,
    calculate_stochastic_k_series,
    calculate_true_ranges,
)

__all__ = [
    "calculate_atr",
    "calculate_ema",
    "calculate_indicators",
    "calculate_rsi",
    "calculate_sma",
    "calculate_stochastic",
    "calculate_stochastic_k_series",
    "calculate_true_ranges",
]
