"""Candle normalization: raw provider samples to a clean candle window."""

import math
from collections.abc import Iterable, Mapping
from typing import Any

from marketlens.errors import EmptyWindowError
from marketlens.models import Candle, CandleWindow

DEFAULT_MAX_CANDLES = 300

_FIELDS = ("time", "open", "high", "low", "close", "volume")


def _to_number(value: Any) -> float:
    """Coerce a raw value to float, NaN when it is missing or unparsable."""
    if value is None or isinstance(value, bool):
        return float('nan')
    try:
        return float(value)
    except (TypeError, ValueError):
        return float('nan')


def _finite_or(value: float, default: float) -> float:
    return value if math.isfinite(value) else default


def _read_sample(sample: Any) -> dict[str, float]:
    if isinstance(sample, Mapping):
        return {name: _to_number(sample.get(name)) for name in _FIELDS}
    return {name: _to_number(getattr(sample, name, None)) for name in _FIELDS}


def normalize_candles(
    samples: Iterable[Any],
    max_candles: int = DEFAULT_MAX_CANDLES,
) -> CandleWindow:
    """Validate and trim raw price samples into a candle window.

    Samples whose open or close is not a finite number are dropped. Missing
    high, low or volume default to 0 instead of dropping the sample. The
    candle range spans all four prices, so an inverted bar keeps both of
    its reported extremes. Input order is kept as-is and only the most recent
    ``max_candles`` samples survive.

    Args:
        samples: Mappings (or objects) with time/open/high/low/close/volume.
        max_candles: Maximum window length (default 300).

    Returns:
        CandleWindow of the surviving candles, oldest first.

    Raises:
        EmptyWindowError: If no sample survives filtering.
        ValueError: If max_candles is less than 1.
    """
    if max_candles < 1:
        raise ValueError(f"max_candles must be at least 1, got {max_candles}")

    candles = []
    last_time = 0

    for sample in samples:
        raw = _read_sample(sample)
        open_price, close = raw["open"], raw["close"]

        if not (math.isfinite(open_price) and math.isfinite(close)):
            continue

        high = _finite_or(raw["high"], 0.0)
        low = _finite_or(raw["low"], 0.0)
        volume = max(0.0, _finite_or(raw["volume"], 0.0))

        time = raw["time"]
        if math.isfinite(time) and time >= 0:
            last_time = int(time)

        candles.append(Candle(
            time=last_time,
            open=open_price,
            high=max(high, low, open_price, close),
            low=min(high, low, open_price, close),
            close=close,
            volume=volume,
        ))

    if not candles:
        raise EmptyWindowError()

    return CandleWindow(candles=tuple(candles[-max_candles:]))
