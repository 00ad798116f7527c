# equity_signals/classifiers/trend_alignment.py
from __future__ import annotations
from ..types import IndicatorSnapshot
from .base import Classifier
from .helpers import OscillatorBands

class TrendAlignmentClassifier(Classifier):
    """Price and three EMAs strictly stacked in one direction, gated by ADX."""
    name = "EMA stack + ADX"
    required = ("ema_fast", "ema_mid", "ema_slow", "trend_strength")

    def __init__(self, adx_min: float = 25.0, min_confidence: int = 60, bands: OscillatorBands | None = None):
        super().__init__(min_confidence, bands)
        self.adx_min = adx_min

    def rules(self, price, snap: IndicatorSnapshot, prev=None):
        f, m, s = snap.ema_fast, snap.ema_mid, snap.ema_slow
        trending = snap.trend_strength > self.adx_min
        buy = price > f > m > s and trending
        sell = price < f < m < s and trending
        return buy, sell
