# equity_signals/classifiers/helpers.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Literal
from ..types import IndicatorSnapshot

def clamp_score(x: float) -> int:
    return int(max(0, min(100, round(x))))

@dataclass(slots=True, frozen=True)
class OscillatorBands:
    midline: float = 50.0
    upper: float = 70.0          # overbought
    healthy_floor: float = 40.0  # weakest reading still called healthy for a BUY

    @property
    def lower(self) -> float:
        return 100.0 - self.upper

    @property
    def healthy_ceiling(self) -> float:
        return 100.0 - self.healthy_floor

def confidence_score(direction: Literal["BUY", "SELL"], price: float,
                     snap: IndicatorSnapshot, bands: OscillatorBands) -> int:
    """Additive score: +40 averages stacked, +30 healthy oscillator, +30 trend/oscillator agree."""
    bull = direction == "BUY"
    fast, mid, osc = snap.ema_fast, snap.ema_mid, snap.oscillator
    score = 0
    if fast is not None and mid is not None and ((fast > mid) if bull else (fast < mid)):
        score += 40
    if osc is not None:
        if bull and bands.healthy_floor <= osc <= bands.upper:
            score += 30
        elif not bull and bands.lower <= osc <= bands.healthy_ceiling:
            score += 30
        if mid is not None:
            if bull and price > mid and osc > bands.midline:
                score += 30
            elif not bull and price < mid and osc < bands.midline:
                score += 30
    return clamp_score(score)
