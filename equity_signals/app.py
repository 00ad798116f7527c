# equity_signals/app.py
from __future__ import annotations
import asyncio
import json
from rich import print
from rich.table import Table
import typer

from .config import settings
from .data.base import BarProvider
from .data.mock_provider import MockProvider
from .data.universe import load_symbols
from .engine import SignalEngine
from .sinks.base import SignalSink
from .sinks.console import ConsoleSink
from .sinks.csv_journal import CsvJournalSink
from .utils.logging import setup_logging

cli = typer.Typer(help="Equity signal scanner: EMA/ADX verdicts, ATR risk plans, walk-forward win rate.")

def _provider_from_name(name: str, data_dir: str) -> BarProvider:
    if name == "csv":
        from .data.csv_provider import CsvProvider
        return CsvProvider(data_dir)
    if name != "mock":
        raise typer.BadParameter(f"unknown provider {name!r} (mock | csv)")
    return MockProvider()

@cli.callback()
def main(log_level: str = typer.Option(settings.log_level, help="DEBUG | INFO | WARNING")):
    setup_logging(log_level)

# ============== SCAN ==============

@cli.command()
def scan(
    symbols: list[str] = typer.Option(None, "--symbol", "-s", help="Symbol to scan (repeatable)"),
    universe: str = typer.Option("", help="JSON file with a list of symbols"),
    provider: str = typer.Option("mock", help="mock | csv"),
    data_dir: str = typer.Option("data", help="Folder with <SYMBOL>.csv files (csv provider)"),
    journal: str = typer.Option("", help="Append signals to this CSV file"),
    json_out: bool = typer.Option(False, "--json", help="Print signals as JSON"),
):
    """Scan a symbol universe once and print the signals that pass every gate."""
    syms = [s.upper() for s in symbols] if symbols else load_symbols(universe or None)
    asyncio.run(_scan(syms, provider, data_dir, journal, json_out))

async def _scan(symbols: list[str], provider: str, data_dir: str, journal: str, json_out: bool):
    engine = SignalEngine(settings)
    sinks: list[SignalSink] = [] if json_out else [ConsoleSink()]
    if journal:
        sinks.append(CsvJournalSink(journal))
    mdp = _provider_from_name(provider, data_dir)
    try:
        print(f"[bold cyan]Scanning {len(symbols)} symbols ({settings.classifier_mode} mode)...[/]")
        signals = await engine.scan(symbols, mdp, sinks=sinks)
    finally:
        await mdp.close()
    if json_out:
        typer.echo(json.dumps([s.to_dict() for s in signals], ensure_ascii=False, indent=2))
    else:
        print(f"[green]Completed scan: {len(signals)} signal(s).[/]")

# ============== SNAPSHOT ==============

@cli.command()
def snapshot(
    symbol: str = typer.Argument(..., help="Ex: RELIANCE"),
    provider: str = typer.Option("mock", help="mock | csv"),
    data_dir: str = typer.Option("data", help="Folder with <SYMBOL>.csv files (csv provider)"),
):
    """Show the latest indicator snapshot, verdict and plan for one symbol."""
    asyncio.run(_snapshot(symbol.upper(), provider, data_dir))

async def _snapshot(symbol: str, provider: str, data_dir: str):
    mdp = _provider_from_name(provider, data_dir)
    try:
        bars = await mdp.get_bars(symbol, settings.history_days)
    finally:
        await mdp.close()
    if not bars:
        print(f"[yellow]No data for {symbol}.[/]")
        raise typer.Exit(code=1)

    engine = SignalEngine(settings)
    snap, verdict, plan = engine.analyze(bars)
    table = Table(title=f"{symbol} @ {snap.time:%Y-%m-%d}" if snap.time else symbol, show_lines=True)
    table.add_column("Indicator"); table.add_column("Value")
    for name, value in snap.as_dict().items():
        if name == "time":
            continue
        table.add_row(name, f"{value:.4f}" if isinstance(value, float) else "-")
    print(table)
    print(f"Verdict: [bold]{verdict.direction}[/]  confidence={verdict.confidence}  {verdict.notes}")
    if plan:
        print(f"Entry: {plan.entry:.2f} | SL: {plan.stop_loss:.2f} | TP: {plan.target:.2f} | "
              f"Qty: {plan.quantity} | Risk: {plan.risk_amount:.2f} ({plan.risk_pct:.2f}%)")

# ============== WIN RATE ==============

@cli.command()
def winrate(
    symbol: str = typer.Argument(..., help="Ex: RELIANCE"),
    provider: str = typer.Option("mock", help="mock | csv"),
    data_dir: str = typer.Option("data", help="Folder with <SYMBOL>.csv files (csv provider)"),
):
    """Walk-forward hit rate of the configured rule over the recent lookback window."""
    asyncio.run(_winrate(symbol.upper(), provider, data_dir))

async def _winrate(symbol: str, provider: str, data_dir: str):
    mdp = _provider_from_name(provider, data_dir)
    try:
        bars = await mdp.get_bars(symbol, settings.history_days)
    finally:
        await mdp.close()
    wr = SignalEngine(settings).win_rate(bars)
    label = f"{wr:.1f}%" if wr is not None else "N/A"
    print(f"{symbol} win rate ({settings.winrate_lookback_days}d, {settings.winrate_forward_window}-bar horizon): "
          f"[bold]{label}[/]")


if __name__ == "__main__":
    cli()
