import csv
import io
from datetime import datetime, timezone
from rich.console import Console

from equity_signals.sinks.console import ConsoleSink, render
from equity_signals.sinks.csv_journal import HEADER, CsvJournalSink
from equity_signals.types import IndicatorSnapshot, TradeSignal

def make_signal(win_rate=62.5):
    snap = IndicatorSnapshot(close=100.0, volume=5000.0, ema_fast=98.0, ema_mid=95.0, ema_slow=90.0,
                             trend_strength=31.0, volatility=2.0, oscillator=61.0, volume_baseline=4500.0)
    return TradeSignal(symbol="INFY", direction="BUY", price=100.0, stop_loss=97.0, target=106.0,
                       quantity=333, risk_amount=999.0, risk_pct=0.999, confidence=100,
                       win_rate=win_rate, snapshot=snap,
                       generated_at=datetime(2025, 1, 2, 9, 15, tzinfo=timezone.utc))

def test_render_shows_plan_and_indicators():
    text = render(make_signal())
    assert "INFY" in text and "BUY" in text
    assert "SL: 97.00" in text and "TP: 106.00" in text and "Qty: 333" in text
    assert "ADX: 31.00" in text
    assert "62.5%" in text
    assert "N/A" in render(make_signal(win_rate=None))

def test_console_sink_prints():
    buf = io.StringIO()
    ConsoleSink(Console(file=buf, width=120)).emit(make_signal())
    assert "TRADE SIGNAL" in buf.getvalue()

def test_csv_journal_appends(tmp_path):
    path = tmp_path / "out" / "alerts.csv"
    sink = CsvJournalSink(path)
    sink.emit(make_signal())
    sink.emit(make_signal(win_rate=None))
    rows = list(csv.reader(path.open()))
    assert rows[0] == HEADER
    assert len(rows) == 3
    assert rows[1][1:4] == ["INFY", "BUY", "100.0000"]
    assert rows[1][-1] == "62.50"
    assert rows[2][-1] == ""
