from __future__ import annotations
from dataclasses import dataclass, asdict, field, fields
from typing import Literal
from datetime import datetime, timezone
import math

Direction = Literal["BUY", "SELL", "NONE"]

@dataclass(slots=True, frozen=True)
class Bar:
    time: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float | None = None

@dataclass(slots=True)
class IndicatorSnapshot:
    """Indicator values as of the last bar of a series.

    Every component is ``None`` while the series is too short for it; values are
    never NaN or infinite.
    """
    time: datetime | None = None
    close: float | None = None
    volume: float | None = None
    ema_fast: float | None = None
    ema_mid: float | None = None
    ema_slow: float | None = None
    trend_strength: float | None = None  # ADX
    volatility: float | None = None      # ATR
    oscillator: float | None = None      # RSI
    volume_baseline: float | None = None

    def missing(self, *names: str) -> list[str]:
        names = names or tuple(f.name for f in fields(self) if f.name != "time")
        out = []
        for name in names:
            v = getattr(self, name)
            if v is None or not math.isfinite(v):
                out.append(name)
        return out

    def is_complete(self, *names: str) -> bool:
        return not self.missing(*names)

    def as_dict(self) -> dict:
        d = asdict(self)
        d["time"] = self.time.isoformat() if self.time else None
        return d

@dataclass(slots=True, frozen=True)
class Verdict:
    direction: Direction
    confidence: int = 0  # 0..100
    notes: str = ""

    @property
    def actionable(self) -> bool:
        return self.direction != "NONE"

NO_SIGNAL = Verdict("NONE", 0)

@dataclass(slots=True)
class TradePlan:
    direction: Literal["BUY", "SELL"]
    entry: float
    stop_loss: float
    target: float
    quantity: int
    stop_distance: float
    risk_amount: float
    risk_pct: float
    target2: float | None = None

@dataclass(slots=True)
class TradeSignal:
    symbol: str
    direction: Literal["BUY", "SELL"]
    price: float
    stop_loss: float
    target: float
    quantity: int
    risk_amount: float
    risk_pct: float
    confidence: int
    win_rate: float | None
    snapshot: IndicatorSnapshot
    target2: float | None = None
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Plain record for JSON and sinks.

        Keys are snake_case: ``win_rate`` carries the win-rate estimate (None
        when unavailable) and ``indicators`` the indicator snapshot.
        """
        return {
            "symbol": self.symbol,
            "direction": self.direction,
            "price": self.price,
            "stop_loss": self.stop_loss,
            "target": self.target,
            "target2": self.target2,
            "quantity": self.quantity,
            "risk_amount": self.risk_amount,
            "risk_pct": self.risk_pct,
            "confidence": self.confidence,
            "win_rate": self.win_rate,
            "indicators": self.snapshot.as_dict(),
            "generated_at": self.generated_at.isoformat(),
        }
