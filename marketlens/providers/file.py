"""Provider that reads saved price history from a JSON file."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from marketlens.errors import ProviderError
from marketlens.models import InstrumentMeta
from marketlens.providers.base import BaseProvider, MarketData
from marketlens.providers.chart import parse_chart_payload

logger = logging.getLogger(__name__)


def parse_document(document: Any) -> MarketData:
    """Turn a decoded JSON document into MarketData.

    Accepted shapes:
      - a chart payload (``{"chart": {"result": [...]}}``)
      - ``{"symbol": ..., "candles": [...], "meta": {...}}``
      - a bare list of candles

    Raises:
        ProviderError: If the document has none of these shapes.
    """
    if isinstance(document, dict) and "chart" in document:
        return parse_chart_payload(document)

    try:
        if isinstance(document, list):
            return MarketData(samples=document)

        if isinstance(document, dict) and isinstance(document.get("candles"), list):
            meta = document.get("meta")
            return MarketData(
                symbol=document.get("symbol"),
                samples=document["candles"],
                meta=InstrumentMeta(**meta) if isinstance(meta, dict) else InstrumentMeta(),
            )
    except ValidationError as e:
        raise ProviderError(f"Invalid price history document: {e}") from e

    raise ProviderError("Unrecognized price history document")


class JsonFileProvider(BaseProvider):
    """Reads price history previously saved to a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def get_history(self, symbol: str, interval: str, history_range: str) -> MarketData:
        """Load the saved history.

        The file already holds a single symbol and timeframe, so the
        arguments are only used for logging.
        """
        logger.debug(
            "Loading %s (%s/%s) from %s", symbol, interval, history_range, self.path
        )

        try:
            with self.path.open(encoding="utf-8") as f:
                document = json.load(f)
        except OSError as e:
            raise ProviderError(f"Cannot read {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ProviderError(f"Invalid JSON in {self.path}: {e}") from e

        data = parse_document(document)
        logger.debug("Loaded %d samples from %s", len(data.samples), self.path)
        return data
