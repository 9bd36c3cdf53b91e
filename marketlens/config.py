"""Configuration for marketlens.

Settings are read from ``~/.config/marketlens/config.toml`` (or a path given
on the command line). Every key is optional; a missing file means defaults.

Example::

    max_candles = 300
    take_profit_atr = 2.2
    stop_loss_atr = 1.4

    [symbols]
    "BTC-USD" = "Bitcoin"
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from marketlens.errors import ConfigError
from marketlens.presets import DEFAULT_INTERVAL, DEFAULT_RANGE

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "marketlens" / "config.toml"


class AnalysisConfig(BaseModel):
    """Tunable parameters of the analysis pipeline."""

    max_candles: int = Field(default=300, ge=1, description="Window cap (most recent candles kept)")
    take_profit_atr: float = Field(default=2.2, gt=0, description="Take-profit distance in ATRs")
    stop_loss_atr: float = Field(default=1.4, gt=0, description="Stop-loss distance in ATRs")
    min_price: float = Field(default=0.0001, gt=0, description="Floor for entry/stop/target levels")
    high_volatility_ratio: float = Field(
        default=0.02, gt=0, description="ATR/price ratio above which volatility is reported as high"
    )
    default_interval: str = Field(default=DEFAULT_INTERVAL, min_length=1)
    default_range: str = Field(default=DEFAULT_RANGE, min_length=1)
    symbols: dict[str, str] = Field(
        default_factory=dict, description="Display-name overrides keyed by symbol"
    )

    model_config = {"frozen": True}


def load_config(config_path: Optional[Path] = None) -> AnalysisConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the config file. Defaults to DEFAULT_CONFIG_PATH.

    Returns:
        AnalysisConfig built from the file, or defaults if it does not exist.

    Raises:
        ConfigError: If the file cannot be read or holds invalid values.
    """
    import toml

    path = config_path or DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.debug("No config at %s, using defaults", path)
        return AnalysisConfig()

    try:
        data = toml.load(path)
    except (OSError, toml.TomlDecodeError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    try:
        config = AnalysisConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e

    logger.debug("Loaded config from %s", path)
    return config
