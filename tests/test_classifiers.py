import numpy as np
import pytest

from equity_signals.classifiers import (
    EmaCrossoverClassifier, OscillatorBands, TrendAlignmentClassifier, build_classifier,
)
from equity_signals.classifiers.helpers import confidence_score
from equity_signals.data.synthetic import linear_bars
from equity_signals.indicators import compute_snapshots
from equity_signals.types import IndicatorSnapshot

def snap(**kw):
    return IndicatorSnapshot(**kw)

def test_trend_aligned_buy_on_uptrend():
    bars = linear_bars(250)
    prev, cur = compute_snapshots(bars)
    v = TrendAlignmentClassifier().classify(bars[-1].close, cur, prev)
    assert v.direction == "BUY"
    assert v.confidence >= 60
    # fast > mid (+40) and trend/oscillator agree (+30); RSI 100 is not in the healthy band
    assert v.confidence == 70

def test_trend_aligned_sell_on_downtrend():
    bars = linear_bars(250, start=400.0, slope=-1.0)
    prev, cur = compute_snapshots(bars)
    v = TrendAlignmentClassifier().classify(bars[-1].close, cur)
    assert v.direction == "SELL"
    assert v.confidence == 70

def test_flat_series_gives_none():
    bars = linear_bars(250, slope=0.0)
    _, cur = compute_snapshots(bars)
    assert TrendAlignmentClassifier().classify(bars[-1].close, cur).direction == "NONE"

def test_trend_rule_needs_adx_gate():
    s = snap(ema_fast=105.0, ema_mid=100.0, ema_slow=95.0, trend_strength=20.0, oscillator=60.0)
    assert TrendAlignmentClassifier().classify(110.0, s).direction == "NONE"
    s.trend_strength = 30.0
    v = TrendAlignmentClassifier().classify(110.0, s)
    assert v.direction == "BUY" and v.confidence == 100

def test_trend_rule_needs_strict_order():
    s = snap(ema_fast=100.0, ema_mid=100.0, ema_slow=95.0, trend_strength=30.0, oscillator=60.0)
    assert TrendAlignmentClassifier().classify(110.0, s).direction == "NONE"
    s = snap(ema_fast=105.0, ema_mid=100.0, ema_slow=95.0, trend_strength=30.0, oscillator=60.0)
    assert TrendAlignmentClassifier().classify(104.0, s).direction == "NONE"

def test_undefined_input_gives_none():
    s = snap(ema_fast=105.0, ema_mid=100.0, ema_slow=None, trend_strength=30.0, oscillator=60.0)
    v = TrendAlignmentClassifier().classify(110.0, s)
    assert v.direction == "NONE"
    assert "ema_slow" in v.notes
    s = snap(ema_fast=105.0, ema_mid=100.0, ema_slow=float("nan"), trend_strength=30.0, oscillator=60.0)
    assert TrendAlignmentClassifier().classify(110.0, s).direction == "NONE"
    full = snap(ema_fast=105.0, ema_mid=100.0, ema_slow=95.0, trend_strength=30.0, oscillator=60.0)
    assert TrendAlignmentClassifier().classify(float("nan"), full).direction == "NONE"

def test_low_confidence_is_demoted():
    bars = linear_bars(250)
    _, cur = compute_snapshots(bars)
    v = TrendAlignmentClassifier(min_confidence=80).classify(bars[-1].close, cur)
    assert v.direction == "NONE"
    assert v.confidence == 70

def test_fresh_crossover_fires_once():
    clf = EmaCrossoverClassifier()
    before = snap(ema_fast=99.0, ema_mid=100.0, oscillator=55.0)
    cross = snap(ema_fast=101.0, ema_mid=100.0, oscillator=60.0)
    after = snap(ema_fast=102.0, ema_mid=100.5, oscillator=62.0)
    v = clf.classify(103.0, cross, before)
    assert v.direction == "BUY"
    assert v.confidence == 100
    # already above on the previous bar: stale state
    assert clf.classify(104.0, after, cross).direction == "NONE"

def test_crossover_touching_counts_as_fresh():
    clf = EmaCrossoverClassifier()
    touching = snap(ema_fast=100.0, ema_mid=100.0, oscillator=55.0)
    cross = snap(ema_fast=100.5, ema_mid=100.0, oscillator=58.0)
    assert clf.classify(101.0, cross, touching).direction == "BUY"

def test_crossover_sell():
    clf = EmaCrossoverClassifier()
    before = snap(ema_fast=101.0, ema_mid=100.0, oscillator=45.0)
    cross = snap(ema_fast=99.0, ema_mid=100.0, oscillator=40.0)
    v = clf.classify(98.0, cross, before)
    assert v.direction == "SELL"
    assert v.confidence == 100

def test_crossover_oscillator_band_is_tunable():
    before = snap(ema_fast=99.0, ema_mid=100.0, oscillator=60.0)
    cross = snap(ema_fast=101.0, ema_mid=100.0, oscillator=74.0)
    assert EmaCrossoverClassifier().classify(103.0, cross, before).direction == "NONE"
    wide = EmaCrossoverClassifier(bands=OscillatorBands(upper=75.0))
    assert wide.classify(103.0, cross, before).direction == "BUY"
    weak = snap(ema_fast=101.0, ema_mid=100.0, oscillator=48.0)
    assert wide.classify(103.0, weak, before).direction == "NONE"

def test_crossover_needs_previous_snapshot():
    cross = snap(ema_fast=101.0, ema_mid=100.0, oscillator=60.0)
    assert EmaCrossoverClassifier().classify(103.0, cross).direction == "NONE"
    assert EmaCrossoverClassifier().classify(103.0, cross, IndicatorSnapshot()).direction == "NONE"

class _BothWays(TrendAlignmentClassifier):
    def rules(self, price, snap, prev=None):
        return True, True

def test_ambiguous_direction_is_none():
    s = snap(ema_fast=105.0, ema_mid=100.0, ema_slow=95.0, trend_strength=30.0, oscillator=60.0)
    v = _BothWays().classify(110.0, s)
    assert v.direction == "NONE"
    assert v.notes == "ambiguous"

def test_confidence_always_in_range():
    rng = np.random.default_rng(0)
    bands = OscillatorBands()
    for _ in range(500):
        fast, mid, slow = rng.uniform(50, 150, 3)
        s = snap(ema_fast=fast, ema_mid=mid, ema_slow=slow,
                 trend_strength=rng.uniform(0, 100), oscillator=rng.uniform(0, 100))
        price = float(rng.uniform(50, 150))
        for direction in ("BUY", "SELL"):
            assert 0 <= confidence_score(direction, price, s, bands) <= 100
        v = TrendAlignmentClassifier(min_confidence=0).classify(price, s)
        assert 0 <= v.confidence <= 100

def test_build_classifier():
    assert isinstance(build_classifier("trend"), TrendAlignmentClassifier)
    assert isinstance(build_classifier("crossover", min_confidence=50), EmaCrossoverClassifier)
    with pytest.raises(ValueError):
        build_classifier("macd")

def test_trend_rule_does_not_need_oscillator():
    s = snap(ema_fast=105.0, ema_mid=100.0, ema_slow=95.0, trend_strength=30.0)
    # only the +40 stacking points without an oscillator: demoted, not incomplete
    v = TrendAlignmentClassifier().classify(110.0, s)
    assert v.direction == "NONE"
    assert v.confidence == 40
    assert "incomplete" not in v.notes
    v = TrendAlignmentClassifier(min_confidence=40).classify(110.0, s)
    assert v.direction == "BUY" and v.confidence == 40
