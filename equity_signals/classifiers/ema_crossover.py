# equity_signals/classifiers/ema_crossover.py
from __future__ import annotations
from ..types import IndicatorSnapshot
from ..utils.ta import crossed_above, crossed_below
from .base import Classifier

class EmaCrossoverClassifier(Classifier):
    """Fresh fast/mid EMA cross with RSI on the same side of 50 and not stretched.

    Only the bar on which the cross happens qualifies; a cross that already
    happened on the previous bar does not fire again.
    """
    name = "EMA Crossover + RSI band"
    required = ("ema_fast", "ema_mid", "oscillator")
    needs_previous = True

    def rules(self, price, snap: IndicatorSnapshot, prev: IndicatorSnapshot | None):
        b = self.bands
        osc = snap.oscillator
        up = crossed_above(prev.ema_fast, prev.ema_mid, snap.ema_fast, snap.ema_mid)
        down = crossed_below(prev.ema_fast, prev.ema_mid, snap.ema_fast, snap.ema_mid)
        buy = up and b.midline < osc < b.upper
        sell = down and b.lower < osc < b.midline
        return buy, sell
