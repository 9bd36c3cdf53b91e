"""Market catalog and timeframe preset commands for marketlens CLI."""

import click
from rich.console import Console
from rich.table import Table

from marketlens.presets import DEFAULT_SYMBOL_TITLES, MARKET_GROUPS, TIMEFRAME_PRESETS

console = Console()


@click.command()
@click.option("--group", "-g", default=None, help="Only show one group (e.g. crypto)")
def markets(group: str | None) -> None:
    """List the symbols in the market catalog."""
    groups = [g for g in MARKET_GROUPS if group is None or g.id == group.lower()]
    if not groups:
        known = ", ".join(g.id for g in MARKET_GROUPS)
        raise click.BadParameter(f"Unknown group '{group}'. Known groups: {known}", param_hint="--group")

    table = Table(title="Markets", show_header=True, header_style="bold")
    table.add_column("Group")
    table.add_column("Symbol", style="cyan")
    table.add_column("Label")
    table.add_column("Name", style="dim")

    for g in groups:
        for entry in g.symbols:
            table.add_row(g.label, entry.symbol, entry.label, DEFAULT_SYMBOL_TITLES.get(entry.symbol, ""))

    console.print(table)


@click.command()
def presets() -> None:
    """List the timeframe presets accepted by analyze --preset."""
    table = Table(title="Timeframe Presets", show_header=True, header_style="bold")
    table.add_column("Preset", style="cyan")
    table.add_column("Label")
    table.add_column("Interval", justify="right")
    table.add_column("Range", justify="right")

    for preset in TIMEFRAME_PRESETS:
        table.add_row(preset.id, preset.label, preset.interval, preset.range)

    console.print(table)
