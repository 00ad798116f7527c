# equity_signals/data/synthetic.py
"""Deterministic bar series for demos and tests."""
from __future__ import annotations
from datetime import datetime, timedelta, timezone
import math
import random
from ..types import Bar

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)

def linear_bars(n: int, start: float = 100.0, slope: float = 1.0, spread: float = 0.5,
                volume: float = 1_000.0, t0: datetime = EPOCH) -> list[Bar]:
    """A straight-line series: close moves by ``slope`` every day, high/low at +/- ``spread``."""
    bars = []
    for i in range(n):
        close = start + slope * i
        bars.append(Bar(time=t0 + timedelta(days=i), open=close - slope * 0.2,
                        high=close + spread, low=close - spread, close=close, volume=volume))
    return bars

def random_walk_bars(n: int, seed: int = 42, start: float = 100.0, drift: float = 0.0005,
                     vol: float = 0.015, t0: datetime = EPOCH) -> list[Bar]:
    rnd = random.Random(seed)
    bars = []
    price = start
    for i in range(n):
        ret = drift + vol * rnd.gauss(0.0, 1.0) + 0.002 * math.sin(i / 15)
        open_ = price
        price = max(1.0, price * (1 + ret))
        wick = abs(rnd.gauss(0.0, vol / 2)) * price
        high = max(open_, price) + wick
        low = max(0.5, min(open_, price) - wick)
        bars.append(Bar(time=t0 + timedelta(days=i), open=open_, high=high, low=low, close=price,
                        volume=float(rnd.randint(50_000, 150_000))))
    return bars
