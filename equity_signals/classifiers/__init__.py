# equity_signals/classifiers/__init__.py
from .base import Classifier
from .helpers import OscillatorBands
from .trend_alignment import TrendAlignmentClassifier
from .ema_crossover import EmaCrossoverClassifier

MODES = ("trend", "crossover")

def build_classifier(mode: str = "trend", *, adx_min: float = 25.0, min_confidence: int = 60,
                     bands: OscillatorBands | None = None) -> Classifier:
    if mode == "trend":
        return TrendAlignmentClassifier(adx_min=adx_min, min_confidence=min_confidence, bands=bands)
    if mode == "crossover":
        return EmaCrossoverClassifier(min_confidence=min_confidence, bands=bands)
    raise ValueError(f"unknown classifier mode {mode!r}; expected one of {MODES}")
