"""Analyze command for marketlens CLI.

Builds a technical analysis snapshot from saved price history and
displays it as a rich panel or as JSON.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from marketlens.config import AnalysisConfig, load_config
from marketlens.engine import build_snapshot
from marketlens.errors import ConfigError, EmptyWindowError, ProviderError
from marketlens.models import MarketSnapshot, Sentiment, Timeframe
from marketlens.presets import DEFAULT_SYMBOL_TITLES, TIMEFRAME_PRESETS, get_preset
from marketlens.providers import JsonFileProvider

console = Console()
logger = logging.getLogger(__name__)

SENTIMENT_COLORS = {
    Sentiment.BULLISH: "green",
    Sentiment.BEARISH: "red",
    Sentiment.NEUTRAL: "yellow",
}


def _error_panel(message: str, title: str = "Error", color: str = "red") -> None:
    console.print(Panel(
        f"[{color}]{message}[/{color}]",
        title=f"[bold {color}]{title}[/bold {color}]",
        border_style=color,
    ))


def _interpret_rsi(value: float) -> tuple[str, str]:
    """Interpret RSI value and return signal and color.

    Args:
        value: RSI value (0-100).

    Returns:
        Tuple of (signal_text, color).
    """
    if value < 30:
        return "Oversold", "green"
    elif value > 70:
        return "Overbought", "red"
    elif value < 40:
        return "Approaching Oversold", "yellow"
    elif value > 60:
        return "Approaching Overbought", "yellow"
    else:
        return "Neutral", "dim"


def _interpret_stochastic(k: float, d: float) -> tuple[str, str]:
    """Interpret Stochastic %K/%D and return signal and color."""
    if k < 20:
        return "Oversold", "green"
    elif k > 80:
        return "Overbought", "red"
    elif k > d:
        return "%K above %D", "green"
    elif k < d:
        return "%K below %D", "red"
    else:
        return "Neutral", "dim"


def resolve_timeframe(
    preset: Optional[str],
    interval: Optional[str],
    history_range: Optional[str],
    config: AnalysisConfig,
) -> Timeframe:
    """Resolve the timeframe from a preset, explicit options and config defaults.

    Explicit --interval/--range win over the preset, which wins over the
    configured defaults.
    """
    if preset:
        chosen = get_preset(preset)
        default_interval, default_range = chosen.interval, chosen.range
    else:
        default_interval, default_range = config.default_interval, config.default_range

    return Timeframe(
        interval=interval or default_interval,
        range=history_range or default_range,
    )


def render_snapshot(snapshot: MarketSnapshot) -> None:
    """Print a snapshot as rich panels."""
    price = snapshot.price
    rec = snapshot.recommendation
    ind = snapshot.indicators
    color = SENTIMENT_COLORS[rec.sentiment]
    change_color = "green" if price.change >= 0 else "red"

    header = [
        f"[bold]{snapshot.display_name}[/bold] ({snapshot.symbol}) - "
        f"{price.last:.4f} {snapshot.meta.currency}",
        f"[{change_color}]{price.change:+.4f} ({price.change_percent:+.2f}%)[/{change_color}]"
        f"  [dim]H {price.high:.4f}  L {price.low:.4f}  O {price.open:.4f}[/dim]",
        f"[dim]{snapshot.meta.exchange} | {snapshot.timeframe.interval} candles over "
        f"{snapshot.timeframe.range} | {len(snapshot.candles)} candles[/dim]",
    ]
    console.print(Panel("\n".join(header), title="[bold]Market Snapshot[/bold]", border_style="cyan"))

    table = Table(title="Indicators", show_header=True, header_style="bold")
    table.add_column("Indicator")
    table.add_column("Value", justify="right")
    table.add_column("Signal")

    ema_trend = "Bullish" if ind.ema20 > ind.ema50 > ind.ema100 else (
        "Bearish" if ind.ema20 < ind.ema50 < ind.ema100 else "Mixed"
    )
    rsi_signal, rsi_color = _interpret_rsi(ind.rsi14)
    stoch_signal, stoch_color = _interpret_stochastic(ind.stochastic_k, ind.stochastic_d)

    table.add_row("EMA 20", f"{ind.ema20:.4f}", ema_trend)
    table.add_row("EMA 50", f"{ind.ema50:.4f}", "")
    table.add_row("EMA 100", f"{ind.ema100:.4f}", "")
    table.add_row("RSI (14)", f"{ind.rsi14:.2f}", f"[{rsi_color}]{rsi_signal}[/{rsi_color}]")
    table.add_row(
        "Stochastic %K/%D",
        f"{ind.stochastic_k:.2f} / {ind.stochastic_d:.2f}",
        f"[{stoch_color}]{stoch_signal}[/{stoch_color}]",
    )
    table.add_row("ATR (14)", f"{ind.atr14:.4f}", "")
    console.print(table)

    rec_lines = [
        f"[bold {color}]{rec.sentiment.value.upper()}[/bold {color}]"
        f"  Confidence: {rec.confidence}%  Risk: {snapshot.risk_score}/100",
        f"Entry: {rec.entry_price:.4f}  Stop: [red]{rec.stop_loss:.4f}[/red]"
        f"  Target: [green]{rec.take_profit:.4f}[/green]",
        f"[dim]Timeframe:[/dim] {rec.preferred_timeframe}",
        f"[dim]Rationale:[/dim] {rec.rationale}",
        f"[dim]Best sessions:[/dim] {', '.join(rec.best_sessions)}",
    ]
    console.print(Panel("\n".join(rec_lines), title="[bold]Recommendation[/bold]", border_style=color))

    for line in snapshot.insights:
        console.print(f"  - {line}")


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--symbol", "-s", default=None, help="Instrument symbol (default: from file)")
@click.option(
    "--preset",
    "-p",
    default=None,
    type=click.Choice([p.id for p in TIMEFRAME_PRESETS]),
    help="Timeframe preset (sets interval and range)",
)
@click.option("--interval", "-i", default=None, help="Candle interval label, e.g. 30m")
@click.option("--range", "-r", "history_range", default=None, help="History range label, e.g. 5d")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the snapshot as JSON")
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to config.toml",
)
def analyze(
    path: Path,
    symbol: Optional[str],
    preset: Optional[str],
    interval: Optional[str],
    history_range: Optional[str],
    as_json: bool,
    config_path: Optional[Path],
) -> None:
    """Analyze saved price history and show a technical snapshot.

    PATH is a JSON file holding a chart payload, a {"candles": [...]}
    document or a bare list of candles.

    \b
    Examples:
      marketlens analyze spx.json                 # Rich output
      marketlens analyze btc.json -s BTC-USD -p 1mo
      marketlens analyze eurusd.json --json       # JSON document
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        _error_panel(str(e), title="Configuration Error")
        raise SystemExit(1)

    timeframe = resolve_timeframe(preset, interval, history_range, config)
    provider = JsonFileProvider(path)

    try:
        data = provider.get_history(symbol or "", timeframe.interval, timeframe.range)
    except ProviderError as e:
        _error_panel(str(e), title="Data Error")
        raise SystemExit(1)

    resolved_symbol = symbol or data.symbol or path.stem.upper()
    display_names = {**DEFAULT_SYMBOL_TITLES, **config.symbols}

    try:
        snapshot = build_snapshot(
            data.samples,
            symbol=resolved_symbol,
            meta=data.meta,
            timeframe=timeframe,
            display_names=display_names,
            config=config,
        )
    except EmptyWindowError as e:
        _error_panel(f"{e} for {resolved_symbol}.", title="No Data", color="yellow")
        raise SystemExit(1)

    logger.debug("Analyzed %s: %s", resolved_symbol, snapshot.recommendation.sentiment.value)

    if as_json:
        click.echo(json.dumps(snapshot.to_document(), ensure_ascii=False, indent=2))
        return

    render_snapshot(snapshot)
