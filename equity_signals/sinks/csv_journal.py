from __future__ import annotations
import csv
from pathlib import Path
from ..types import TradeSignal
from .base import SignalSink

HEADER = ["time", "symbol", "direction", "price", "sl", "tp", "qty", "ema_fast", "ema_mid", "ema_slow",
          "adx", "atr", "volume", "volume_avg", "win_rate"]

def _num(v: float | None, digits: int = 4) -> str:
    return f"{v:.{digits}f}" if v is not None else ""

class CsvJournalSink(SignalSink):
    """Appends one row per signal; writes the header when the file is new."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def row(self, signal: TradeSignal) -> list[str]:
        s = signal.snapshot
        return [
            signal.generated_at.isoformat(), signal.symbol, signal.direction,
            _num(signal.price), _num(signal.stop_loss), _num(signal.target), str(signal.quantity),
            _num(s.ema_fast), _num(s.ema_mid), _num(s.ema_slow), _num(s.trend_strength, 2),
            _num(s.volatility), _num(s.volume, 0), _num(s.volume_baseline, 0),
            _num(signal.win_rate, 2),
        ]

    def emit(self, signal: TradeSignal) -> None:
        new = not self.path.exists()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", newline="") as f:
            w = csv.writer(f)
            if new:
                w.writerow(HEADER)
            w.writerow(self.row(signal))
