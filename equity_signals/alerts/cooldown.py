# equity_signals/alerts/cooldown.py
"""Process-local alert gates. State lives only as long as the tracker object."""
from __future__ import annotations
from datetime import datetime, timedelta
from typing import Literal, Protocol
import threading

CooldownPolicy = Literal["window", "candle"]

class AlertTracker(Protocol):
    def should_suppress(self, symbol: str, now: datetime, candle_time: datetime | None = None) -> bool: ...
    def mark_alerted(self, symbol: str, now: datetime, candle_time: datetime | None = None) -> None: ...
    def try_acquire(self, symbol: str, now: datetime, candle_time: datetime | None = None) -> bool: ...

class TimeWindowCooldown:
    """Suppress a symbol for ``window`` after its last alert."""

    def __init__(self, window: timedelta):
        if window < timedelta(0):
            raise ValueError("cooldown window must be >= 0")
        self.window = window
        self._last: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def last_alert(self, symbol: str) -> datetime | None:
        with self._lock:
            return self._last.get(symbol)

    def should_suppress(self, symbol: str, now: datetime, candle_time: datetime | None = None) -> bool:
        with self._lock:
            last = self._last.get(symbol)
        return last is not None and now - last < self.window

    def mark_alerted(self, symbol: str, now: datetime, candle_time: datetime | None = None) -> None:
        with self._lock:
            self._last[symbol] = now

    def try_acquire(self, symbol: str, now: datetime, candle_time: datetime | None = None) -> bool:
        """Check and mark under one lock; False when ``symbol`` is still cooling down."""
        with self._lock:
            last = self._last.get(symbol)
            if last is not None and now - last < self.window:
                return False
            self._last[symbol] = now
            return True

class CandleDedup:
    """Suppress only a repeat alert for the same candle, however much time passed."""

    def __init__(self):
        self._seen: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def should_suppress(self, symbol: str, now: datetime, candle_time: datetime | None = None) -> bool:
        key = candle_time or now
        with self._lock:
            return self._seen.get(symbol) == key

    def mark_alerted(self, symbol: str, now: datetime, candle_time: datetime | None = None) -> None:
        with self._lock:
            self._seen[symbol] = candle_time or now

    def try_acquire(self, symbol: str, now: datetime, candle_time: datetime | None = None) -> bool:
        key = candle_time or now
        with self._lock:
            if self._seen.get(symbol) == key:
                return False
            self._seen[symbol] = key
            return True

def build_tracker(policy: CooldownPolicy = "window", window: timedelta = timedelta(minutes=60)) -> AlertTracker:
    if policy == "window":
        return TimeWindowCooldown(window)
    if policy == "candle":
        return CandleDedup()
    raise ValueError(f"unknown cooldown policy {policy!r}")
