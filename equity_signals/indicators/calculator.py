# equity_signals/indicators/calculator.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence
import math
import numpy as np
from ..types import Bar, IndicatorSnapshot
from ..utils import ta

@dataclass(slots=True, frozen=True)
class IndicatorPeriods:
    ema_fast: int = 20
    ema_mid: int = 50
    ema_slow: int = 200
    adx: int = 14
    atr: int = 14
    rsi: int = 14
    volume: int = 20

    def __post_init__(self):
        for name in ("ema_fast", "ema_mid", "ema_slow", "adx", "atr", "rsi", "volume"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} period must be > 0")

    def required_bars(self) -> int:
        """Bars needed before every snapshot component is defined."""
        return max(self.ema_fast, self.ema_mid, self.ema_slow, 2 * self.adx,
                   self.atr + 1, self.rsi + 1, self.volume)

def to_arrays(bars: Sequence[Bar]):
    opens  = np.array([b.open  for b in bars], dtype=float)
    highs  = np.array([b.high  for b in bars], dtype=float)
    lows   = np.array([b.low   for b in bars], dtype=float)
    closes = np.array([b.close for b in bars], dtype=float)
    vols   = np.array([np.nan if b.volume is None else b.volume for b in bars], dtype=float)
    return opens, highs, lows, closes, vols

def series_problem(bars: Sequence[Bar]) -> str | None:
    """Describe why a bar series is malformed, or None when it is usable."""
    prev = None
    for i, b in enumerate(bars):
        if not all(math.isfinite(v) for v in (b.open, b.high, b.low, b.close)):
            return f"non-finite price at index {i}"
        if prev is not None and b.time <= prev.time:
            return f"timestamps not strictly increasing at index {i}"
        prev = b
    return None

def _finite(value) -> float | None:
    value = float(value)
    return value if math.isfinite(value) else None

def _snapshot_at(i: int, bars: Sequence[Bar], series: dict[str, np.ndarray]) -> IndicatorSnapshot:
    if i < 0:
        return IndicatorSnapshot()
    b = bars[i]
    return IndicatorSnapshot(
        time=b.time,
        close=_finite(b.close),
        volume=_finite(b.volume) if b.volume is not None else None,
        **{name: _finite(arr[i]) for name, arr in series.items()},
    )

def _series(bars: Sequence[Bar], periods: IndicatorPeriods) -> dict[str, np.ndarray]:
    _, h, l, c, v = to_arrays(bars)
    return {
        "ema_fast": ta.ema(c, periods.ema_fast),
        "ema_mid": ta.ema(c, periods.ema_mid),
        "ema_slow": ta.ema(c, periods.ema_slow),
        "trend_strength": ta.adx(h, l, c, periods.adx),
        "volatility": ta.atr(h, l, c, periods.atr),
        "oscillator": ta.rsi(c, periods.rsi),
        "volume_baseline": ta.sma(v, periods.volume),
    }

def compute_snapshots(bars: Sequence[Bar], periods: IndicatorPeriods | None = None
                      ) -> tuple[IndicatorSnapshot, IndicatorSnapshot]:
    """Snapshots as of the second-to-last and last bar.

    The previous snapshot equals ``compute_snapshot(bars[:-1])`` because every
    series value depends only on bars up to its own index.
    """
    periods = periods or IndicatorPeriods()
    if not bars:
        return IndicatorSnapshot(), IndicatorSnapshot()
    series = _series(bars, periods)
    n = len(bars)
    return _snapshot_at(n - 2, bars, series), _snapshot_at(n - 1, bars, series)

def compute_snapshot(bars: Sequence[Bar], periods: IndicatorPeriods | None = None) -> IndicatorSnapshot:
    return compute_snapshots(bars, periods)[1]
