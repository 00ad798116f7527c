# equity_signals/utils/ta.py
"""Named series operations over numpy arrays.

Every function returns an array aligned to its input with NaN at the indices
where the indicator is not defined yet. Values at index ``i`` depend only on
``values[:i+1]``.
"""
from __future__ import annotations
import numpy as np

def _check_period(period: int) -> None:
    if period <= 0: raise ValueError("period must be > 0")

def sma(values: np.ndarray, period: int) -> np.ndarray:
    """Window mean; NaN only where the window itself holds a NaN."""
    _check_period(period)
    values = np.asarray(values, dtype=float)
    out = np.full(len(values), np.nan)
    if len(values) < period:
        return out
    gaps = np.isnan(values)
    cumsum = np.cumsum(np.where(gaps, 0.0, values))
    holes = np.cumsum(gaps)
    sums = cumsum[period-1:] - np.concatenate(([0.0], cumsum[:-period]))
    bad = holes[period-1:] - np.concatenate(([0], holes[:-period]))
    out[period-1:] = np.where(bad > 0, np.nan, sums / period)
    return out

def ema(values: np.ndarray, period: int) -> np.ndarray:
    """EMA seeded with the simple average of the first ``period`` values."""
    _check_period(period)
    values = np.asarray(values, dtype=float)
    out = np.full(len(values), np.nan)
    if len(values) < period:
        return out
    k = 2 / (period + 1.0)
    out[period-1] = np.mean(values[:period])
    for i in range(period, len(values)):
        out[i] = values[i] * k + out[i-1] * (1 - k)
    return out

def wilder(values: np.ndarray, period: int, start: int = 0) -> np.ndarray:
    """Wilder's smoothing (RMA) of ``values[start:]``, seeded with their mean."""
    _check_period(period)
    values = np.asarray(values, dtype=float)
    out = np.full(len(values), np.nan)
    first = start + period - 1
    if first >= len(values):
        return out
    out[first] = np.mean(values[start:first+1])
    for i in range(first + 1, len(values)):
        out[i] = (out[i-1] * (period - 1) + values[i]) / period
    return out

def true_range(high: np.ndarray, low: np.ndarray, close: np.ndarray) -> np.ndarray:
    """True range; index 0 is NaN because it has no previous close."""
    high, low, close = (np.asarray(a, dtype=float) for a in (high, low, close))
    out = np.full(len(close), np.nan)
    if len(close) < 2:
        return out
    prev_close = close[:-1]
    out[1:] = np.maximum(high[1:] - low[1:],
                         np.maximum(np.abs(high[1:] - prev_close), np.abs(low[1:] - prev_close)))
    return out

def atr(high: np.ndarray, low: np.ndarray, close: np.ndarray, period: int = 14) -> np.ndarray:
    # needs period+1 bars
    return wilder(true_range(high, low, close), period, start=1)

def rsi(values: np.ndarray, period: int = 14) -> np.ndarray:
    _check_period(period)
    values = np.asarray(values, dtype=float)
    out = np.full(len(values), np.nan)
    if len(values) < period + 1:
        return out
    diff = np.full(len(values), np.nan)
    diff[1:] = np.diff(values)
    gain = np.where(diff > 0, diff, 0.0)
    loss = np.where(diff < 0, -diff, 0.0)
    avg_gain = wilder(gain, period, start=1)
    avg_loss = wilder(loss, period, start=1)
    for i in range(period, len(values)):
        g, l = avg_gain[i], avg_loss[i]
        if g == 0.0 and l == 0.0:
            out[i] = 50.0
        elif l == 0.0:
            out[i] = 100.0
        else:
            out[i] = 100.0 - 100.0 / (1.0 + g / l)
    return out

def adx(high: np.ndarray, low: np.ndarray, close: np.ndarray, period: int = 14) -> np.ndarray:
    """Average directional index (0..100); first defined at index 2*period-1."""
    _check_period(period)
    high, low, close = (np.asarray(a, dtype=float) for a in (high, low, close))
    n = len(close)
    out = np.full(n, np.nan)
    if n < 2 * period:
        return out
    up = np.zeros(n)
    down = np.zeros(n)
    up[1:] = high[1:] - high[:-1]
    down[1:] = low[:-1] - low[1:]
    plus_dm = np.where((up > down) & (up > 0), up, 0.0)
    minus_dm = np.where((down > up) & (down > 0), down, 0.0)
    tr_s = wilder(true_range(high, low, close), period, start=1)
    plus_s = wilder(plus_dm, period, start=1)
    minus_s = wilder(minus_dm, period, start=1)
    dx = np.full(n, np.nan)
    for i in range(period, n):
        if tr_s[i] <= 0:
            dx[i] = 0.0
            continue
        plus_di = 100.0 * plus_s[i] / tr_s[i]
        minus_di = 100.0 * minus_s[i] / tr_s[i]
        total = plus_di + minus_di
        dx[i] = 100.0 * abs(plus_di - minus_di) / total if total > 0 else 0.0
    return wilder(dx, period, start=period)

def crossed_above(fast_prev: float, mid_prev: float, fast: float, mid: float) -> bool:
    return fast_prev <= mid_prev and fast > mid

def crossed_below(fast_prev: float, mid_prev: float, fast: float, mid: float) -> bool:
    return fast_prev >= mid_prev and fast < mid
