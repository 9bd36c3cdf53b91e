"""Timeframe presets, the market catalog and default symbol display names."""

from pydantic import BaseModel, Field

DEFAULT_INTERVAL = "30m"
DEFAULT_RANGE = "5d"


class TimeframePreset(BaseModel):
    """A named interval/range pair offered to users."""

    id: str = Field(..., description="Preset identifier")
    label: str = Field(..., description="Display label")
    interval: str = Field(..., description="Candle interval")
    range: str = Field(..., description="History range")

    model_config = {"frozen": True}


class MarketSymbol(BaseModel):
    """A symbol listed in the market catalog."""

    symbol: str
    label: str

    model_config = {"frozen": True}


class MarketGroup(BaseModel):
    """A group of related symbols (indices, stocks, ...)."""

    id: str
    label: str
    symbols: tuple[MarketSymbol, ...]

    model_config = {"frozen": True}


TIMEFRAME_PRESETS: tuple[TimeframePreset, ...] = (
    TimeframePreset(id="1d", label="1 day", interval="5m", range="1d"),
    TimeframePreset(id="5d", label="5 days", interval="30m", range="5d"),
    TimeframePreset(id="1mo", label="1 month", interval="90m", range="1mo"),
    TimeframePreset(id="6mo", label="6 months", interval="1d", range="6mo"),
    TimeframePreset(id="1y", label="1 year", interval="1d", range="1y"),
)


def _group(group_id: str, label: str, *symbols: tuple[str, str]) -> MarketGroup:
    return MarketGroup(
        id=group_id,
        label=label,
        symbols=tuple(MarketSymbol(symbol=s, label=l) for s, l in symbols),
    )


MARKET_GROUPS: tuple[MarketGroup, ...] = (
    _group(
        "indices", "Indices",
        ("^GSPC", "S&P 500"),
        ("^NDX", "Nasdaq 100"),
        ("^DJI", "Dow Jones"),
        ("TADAWUL.TASI", "TASI"),
        ("DFMGI", "Dubai FM"),
    ),
    _group(
        "stocks", "Stocks",
        ("AAPL", "Apple"),
        ("MSFT", "Microsoft"),
        ("TSLA", "Tesla"),
        ("NVDA", "NVIDIA"),
    ),
    _group(
        "forex", "Forex",
        ("EURUSD=X", "EUR/USD"),
        ("GBPUSD=X", "GBP/USD"),
        ("USDJPY=X", "USD/JPY"),
    ),
    _group(
        "crypto", "Crypto",
        ("BTC-USD", "Bitcoin"),
        ("ETH-USD", "Ethereum"),
        ("SOL-USD", "Solana"),
    ),
    _group(
        "commodities", "Commodities",
        ("GC=F", "Gold"),
        ("SI=F", "Silver"),
        ("CL=F", "WTI Oil"),
    ),
)

# Long display names, injected into the snapshot assembler by callers
DEFAULT_SYMBOL_TITLES: dict[str, str] = {
    "AAPL": "Apple",
    "MSFT": "Microsoft",
    "TSLA": "Tesla",
    "NVDA": "NVIDIA",
    "EURUSD=X": "Euro vs US Dollar",
    "GBPUSD=X": "British Pound vs US Dollar",
    "USDJPY=X": "US Dollar vs Japanese Yen",
    "BTC-USD": "Bitcoin",
    "ETH-USD": "Ethereum",
    "SOL-USD": "Solana",
    "GC=F": "Gold",
    "SI=F": "Silver",
    "CL=F": "Crude Oil",
    "^GSPC": "S&P 500 Index",
    "^NDX": "Nasdaq 100 Index",
    "^DJI": "Dow Jones Index",
    "TADAWUL.TASI": "Saudi Market Index",
    "DFMGI": "Dubai Financial Market Index",
}


def get_preset(preset_id: str) -> TimeframePreset:
    """Look up a timeframe preset by id.

    Raises:
        KeyError: If no preset has that id.
    """
    for preset in TIMEFRAME_PRESETS:
        if preset.id == preset_id:
            return preset
    raise KeyError(preset_id)

