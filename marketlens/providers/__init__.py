"""Price history providers for marketlens."""

from marketlens.providers.base import BaseProvider, MarketData
from marketlens.providers.chart import parse_chart_meta, parse_chart_payload
from marketlens.providers.file import JsonFileProvider, parse_document

__all__ = [
    "BaseProvider",
    "JsonFileProvider",
    "MarketData",
    "parse_chart_meta",
    "parse_chart_payload",
    "parse_document",
]
