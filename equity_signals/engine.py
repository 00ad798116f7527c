# equity_signals/engine.py
from __future__ import annotations
from datetime import datetime, timezone
from typing import Iterable, Sequence
import logging

from .alerts.cooldown import AlertTracker
from .backtest.winrate import estimate_win_rate
from .classifiers import Classifier
from .config import Settings, settings as default_settings
from .data.base import BarProvider
from .indicators import compute_snapshots, series_problem
from .risk.sizer import build_plan
from .sinks.base import SignalSink
from .types import Bar, IndicatorSnapshot, TradePlan, TradeSignal, Verdict

logger = logging.getLogger(__name__)

class SignalEngine:
    """
    Bars -> indicators -> verdict -> plan -> TradeSignal, gated by an alert tracker.
    The tracker is the only mutable state and is owned by the engine instance.
    """

    def __init__(self, cfg: Settings | None = None, tracker: AlertTracker | None = None,
                 classifier: Classifier | None = None):
        self.cfg = cfg or default_settings
        self.periods = self.cfg.periods()
        self.classifier = classifier or self.cfg.classifier()
        self.tracker = tracker if tracker is not None else self.cfg.tracker()

    def analyze(self, bars: Sequence[Bar], price: float | None = None
                ) -> tuple[IndicatorSnapshot, Verdict, TradePlan | None]:
        """Snapshot, verdict and plan for the latest bar, without touching the tracker."""
        prev, snap = compute_snapshots(bars, self.periods)
        if price is None:
            price = snap.close
        verdict = self.classifier.classify(price, snap, prev)
        sl_m, tp_m, tp2_m = self.cfg.stop_multipliers()
        plan = build_plan(
            verdict, price, snap,
            self.cfg.account_capital, self.cfg.risk_fraction, sl_m, tp_m,
            mode=self.cfg.stop_mode, lot_size=self.cfg.lot_size, tp2_multiplier=tp2_m,
        )
        return snap, verdict, plan

    def win_rate(self, bars: Sequence[Bar]) -> float | None:
        c = self.cfg
        return estimate_win_rate(
            bars, c.winrate_lookback_days,
            classifier=self.classifier, periods=self.periods,
            forward_window=c.winrate_forward_window,
            sl_multiplier=c.winrate_sl_multiplier, tp_multiplier=c.winrate_tp_multiplier,
            min_bars=c.winrate_min_bars, inconclusive=c.winrate_inconclusive,
        )

    def evaluate(self, symbol: str, bars: Sequence[Bar], price: float | None = None,
                 now: datetime | None = None) -> TradeSignal | None:
        """A TradeSignal for ``symbol`` or None (no data, no signal, no size, or cooling down)."""
        if not bars:
            logger.info("%s: no bars", symbol)
            return None
        problem = series_problem(bars)
        if problem:
            logger.warning("%s: malformed series (%s)", symbol, problem)
            return None

        snap, verdict, plan = self.analyze(bars, price)
        if plan is None:
            logger.debug("%s: %s conf=%d %s", symbol, verdict.direction, verdict.confidence, verdict.notes)
            return None

        now = now or datetime.now(timezone.utc)
        candle_time = bars[-1].time
        if not self.tracker.try_acquire(symbol, now, candle_time):
            logger.info("%s: %s suppressed by cooldown", symbol, verdict.direction)
            return None

        signal = TradeSignal(
            symbol=symbol,
            direction=plan.direction,
            price=plan.entry,
            stop_loss=plan.stop_loss,
            target=plan.target,
            target2=plan.target2,
            quantity=plan.quantity,
            risk_amount=plan.risk_amount,
            risk_pct=plan.risk_pct,
            confidence=verdict.confidence,
            win_rate=self.win_rate(bars),
            snapshot=snap,
            generated_at=now,
        )
        return signal

    async def scan(self, symbols: Iterable[str], provider: BarProvider,
                   sinks: Sequence[SignalSink] = (), now: datetime | None = None) -> list[TradeSignal]:
        """One pass over ``symbols``; provider or sink failures skip that symbol/sink only."""
        out: list[TradeSignal] = []
        for symbol in symbols:
            try:
                bars = await provider.get_bars(symbol, self.cfg.history_days)
            except Exception:
                logger.exception("%s: bar provider failed", symbol)
                continue
            signal = self.evaluate(symbol, bars, now=now)
            if signal is None:
                continue
            out.append(signal)
            for sink in sinks:
                try:
                    sink.emit(signal)
                except Exception:
                    logger.exception("%s: sink %s failed", symbol, type(sink).__name__)
        logger.info("scan complete: %d signal(s)", len(out))
        return out
