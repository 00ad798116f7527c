from __future__ import annotations
from abc import ABC, abstractmethod
import logging
import math
from ..types import IndicatorSnapshot, Verdict, NO_SIGNAL
from .helpers import OscillatorBands, confidence_score

logger = logging.getLogger(__name__)

class Classifier(ABC):
    name: str
    # snapshot fields that must be defined for a decision
    required: tuple[str, ...] = ()
    needs_previous: bool = False

    def __init__(self, min_confidence: int = 60, bands: OscillatorBands | None = None):
        self.min_confidence = min_confidence
        self.bands = bands or OscillatorBands()

    @abstractmethod
    def rules(self, price: float, snap: IndicatorSnapshot,
              prev: IndicatorSnapshot | None) -> tuple[bool, bool]:
        """Return (buy, sell) for inputs that passed the completeness checks."""

    def classify(self, price: float, snapshot: IndicatorSnapshot,
                 previous: IndicatorSnapshot | None = None) -> Verdict:
        """
        Pure function of its inputs: returns BUY/SELL with a 0..100 confidence,
        or NONE when data is missing, the rule does not fire, the direction is
        ambiguous or the score is under ``min_confidence``.
        """
        if price is None or not math.isfinite(price):
            return NO_SIGNAL
        if not snapshot.is_complete(*self.required):
            return Verdict("NONE", 0, notes=f"incomplete: {','.join(snapshot.missing(*self.required))}")
        if self.needs_previous and (previous is None or not previous.is_complete(*self.required)):
            return Verdict("NONE", 0, notes="incomplete: previous snapshot")

        buy, sell = self.rules(price, snapshot, previous)
        if buy and sell:
            logger.warning("%s: BUY and SELL both matched at price=%s; discarding", self.name, price)
            return Verdict("NONE", 0, notes="ambiguous")
        if not (buy or sell):
            return NO_SIGNAL

        direction = "BUY" if buy else "SELL"
        score = confidence_score(direction, price, snapshot, self.bands)
        if score < self.min_confidence:
            return Verdict("NONE", score, notes=f"{direction} below min confidence {self.min_confidence}")
        return Verdict(direction, score)
