# equity_signals/backtest/winrate.py
"""Walk-forward win-rate estimate for a classifier.

At every cut-point the indicators are recomputed from the bars up to and
including that day only, a verdict is taken at its close, and the following
``forward_window`` bars are scanned for the stop or the target. This is a
coarse hit-rate heuristic, not a P&L backtest: no fills, costs or sizing.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Sequence
import logging

from ..types import Bar
from ..classifiers import Classifier, TrendAlignmentClassifier
from ..indicators import IndicatorPeriods, compute_snapshots
from ..risk.sizer import distances, levels

logger = logging.getLogger(__name__)

Outcome = Literal["win", "loss", "inconclusive"]
InconclusivePolicy = Literal["count", "exclude"]

@dataclass(slots=True, frozen=True)
class Trial:
    index: int
    direction: Literal["BUY", "SELL"]
    entry: float
    stop_loss: float
    target: float
    outcome: Outcome
    exit_index: int | None

def scan_outcome(bars: Sequence[Bar], start: int, direction: str, stop_loss: float, target: float,
                 forward_window: int) -> tuple[Outcome, int | None]:
    """First barrier touched in ``bars[start+1 : start+1+forward_window]``.

    The stop is checked before the target inside one bar since the intrabar
    order is unknown.
    """
    end = min(len(bars), start + 1 + forward_window)
    for j in range(start + 1, end):
        b = bars[j]
        if direction == "BUY":
            if b.low <= stop_loss:
                return "loss", j
            if b.high >= target:
                return "win", j
        else:
            if b.high >= stop_loss:
                return "loss", j
            if b.low <= target:
                return "win", j
    return "inconclusive", None

def walk_forward(
    bars: Sequence[Bar],
    lookback_days: int,
    *,
    classifier: Classifier | None = None,
    periods: IndicatorPeriods | None = None,
    forward_window: int = 5,
    sl_multiplier: float = 1.0,
    tp_multiplier: float = 2.0,
) -> list[Trial]:
    classifier = classifier or TrendAlignmentClassifier()
    periods = periods or IndicatorPeriods()
    n = len(bars)
    min_history = periods.required_bars() - 1
    start = max(min_history, n - lookback_days - forward_window)
    trials: list[Trial] = []

    for idx in range(start, n - forward_window):
        history = bars[: idx + 1]
        prev, snap = compute_snapshots(history, periods)
        price = history[-1].close
        verdict = classifier.classify(price, snap, prev)
        if not verdict.actionable:
            continue
        dist = distances(price, snap, sl_multiplier, tp_multiplier, "atr")
        if dist is None:
            continue
        sl, tp = levels(verdict.direction, price, *dist)
        outcome, exit_idx = scan_outcome(bars, idx, verdict.direction, sl, tp, forward_window)
        trials.append(Trial(idx, verdict.direction, float(price), float(sl), float(tp), outcome, exit_idx))
    return trials

def estimate_win_rate(
    bars: Sequence[Bar],
    lookback_days: int = 60,
    *,
    classifier: Classifier | None = None,
    periods: IndicatorPeriods | None = None,
    forward_window: int = 5,
    sl_multiplier: float = 1.0,
    tp_multiplier: float = 2.0,
    min_bars: int = 120,
    inconclusive: InconclusivePolicy = "count",
) -> float | None:
    """Percentage of signals that reached the target first, or None if unavailable."""
    if len(bars) < min_bars:
        return None
    trials = walk_forward(
        bars, lookback_days,
        classifier=classifier, periods=periods, forward_window=forward_window,
        sl_multiplier=sl_multiplier, tp_multiplier=tp_multiplier,
    )
    if inconclusive == "exclude":
        trials = [t for t in trials if t.outcome != "inconclusive"]
    elif inconclusive != "count":
        raise ValueError(f"unknown inconclusive policy {inconclusive!r}")
    if not trials:
        return None
    wins = sum(1 for t in trials if t.outcome == "win")
    logger.debug("win rate: %d/%d signals", wins, len(trials))
    return 100.0 * wins / len(trials)
