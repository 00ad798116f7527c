from __future__ import annotations
from rich.console import Console
from rich.panel import Panel
from ..types import TradeSignal
from .base import SignalSink

def _fmt(v: float | None, digits: int = 2) -> str:
    return f"{v:.{digits}f}" if v is not None else "-"

def render(signal: TradeSignal) -> str:
    s = signal.snapshot
    wr = f"{signal.win_rate:.1f}%" if signal.win_rate is not None else "N/A"
    color = "green" if signal.direction == "BUY" else "red"
    lines = [
        f"[bold]{signal.symbol}[/] | [bold {color}]{signal.direction}[/]  (confidence {signal.confidence})",
        f"Price: {_fmt(signal.price)}",
        f"SL: {_fmt(signal.stop_loss)}",
        f"TP: {_fmt(signal.target)}" + (f"  TP2: {_fmt(signal.target2)}" if signal.target2 is not None else ""),
        f"Qty: {signal.quantity}  Risk: {_fmt(signal.risk_amount)} ({_fmt(signal.risk_pct)}%)",
        "",
        "[bold]Indicators[/]",
        f"EMA fast: {_fmt(s.ema_fast)}  EMA mid: {_fmt(s.ema_mid)}  EMA slow: {_fmt(s.ema_slow)}",
        f"ADX: {_fmt(s.trend_strength)}  ATR: {_fmt(s.volatility)}  RSI: {_fmt(s.oscillator)}",
        f"Volume: {_fmt(s.volume, 0)}  Vol avg: {_fmt(s.volume_baseline, 0)}",
        "",
        f"[bold]Win rate:[/] {wr}",
    ]
    return "\n".join(lines)

class ConsoleSink(SignalSink):
    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def emit(self, signal: TradeSignal) -> None:
        self.console.print(Panel(render(signal), title="TRADE SIGNAL", expand=False))
