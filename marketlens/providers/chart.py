"""Parser for chart payloads in the Yahoo Finance v8 chart shape.

Only the payload format is handled here; fetching it is up to the caller.
"""

from typing import Any

from marketlens.errors import ProviderError
from marketlens.models import InstrumentMeta
from marketlens.providers.base import MarketData

# Chart meta key -> InstrumentMeta field
_META_FIELDS = {
    "currency": "currency",
    "exchangeName": "exchange",
    "marketState": "market_state",
    "exchangeTimezoneName": "timezone",
    "instrumentType": "instrument_type",
}

_QUOTE_FIELDS = ("open", "high", "low", "close", "volume")


def _at(values: Any, index: int) -> Any:
    if isinstance(values, list) and index < len(values):
        return values[index]
    return None


def parse_chart_meta(meta: Any) -> InstrumentMeta:
    """Map chart meta fields onto InstrumentMeta, keeping defaults for gaps."""
    if not isinstance(meta, dict):
        return InstrumentMeta()
    values = {
        field: meta[key]
        for key, field in _META_FIELDS.items()
        if isinstance(meta.get(key), str)
    }
    return InstrumentMeta(**values)


def parse_chart_payload(payload: Any) -> MarketData:
    """Parse a chart payload into raw samples and instrument metadata.

    Samples are emitted one per timestamp; missing quote values are left
    as None for the normalizer to handle.

    Args:
        payload: Decoded JSON chart response.

    Returns:
        MarketData for the first chart result.

    Raises:
        ProviderError: If the payload has no result, timestamps or quotes.
    """
    chart = payload.get("chart") if isinstance(payload, dict) else None
    results = chart.get("result") if isinstance(chart, dict) else None
    result = results[0] if isinstance(results, list) and results else None

    if not isinstance(result, dict):
        raise ProviderError("Market data is currently unavailable, try again later")

    timestamps = result.get("timestamp") or []
    quotes = _at((result.get("indicators") or {}).get("quote"), 0)

    if not isinstance(quotes, dict) or not timestamps:
        raise ProviderError("No price data is available for this symbol")

    samples = []
    for index, epoch in enumerate(timestamps):
        sample = {"time": epoch}
        for field in _QUOTE_FIELDS:
            sample[field] = _at(quotes.get(field), index)
        samples.append(sample)

    meta = result.get("meta")
    symbol = meta.get("symbol") if isinstance(meta, dict) else None
    if not isinstance(symbol, str):
        symbol = None

    return MarketData(symbol=symbol, samples=samples, meta=parse_chart_meta(meta))
