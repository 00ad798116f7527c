# equity_signals/risk/sizer.py
"""Stop/target placement and fixed-fractional position sizing."""
from __future__ import annotations
from typing import Literal
import logging
import math
from ..types import IndicatorSnapshot, TradePlan, Verdict

logger = logging.getLogger(__name__)

StopMode = Literal["atr", "percent"]

def levels(direction: Literal["BUY", "SELL"], price: float, stop_distance: float,
           target_distance: float) -> tuple[float, float]:
    """(stop_loss, target) on the side of ``price`` matching ``direction``."""
    if direction == "BUY":
        return price - stop_distance, price + target_distance
    return price + stop_distance, price - target_distance

def distances(price: float, snapshot: IndicatorSnapshot, sl_multiplier: float, tp_multiplier: float,
              mode: StopMode = "atr") -> tuple[float, float] | None:
    """Stop and target distances, or None when risk cannot be measured."""
    if mode == "atr":
        vol = snapshot.volatility
        if vol is None or not math.isfinite(vol) or vol <= 0:
            return None
        base = vol
    elif mode == "percent":
        # percent stops stay below 100% of price
        if sl_multiplier >= 1:
            return None
        base = price
    else:
        raise ValueError(f"unknown stop mode {mode!r}")
    stop_d, target_d = base * sl_multiplier, base * tp_multiplier
    if not (math.isfinite(stop_d) and stop_d > 0 and math.isfinite(target_d) and target_d > 0):
        return None
    return stop_d, target_d

def position_size(capital: float, risk_fraction: float, stop_distance: float, lot_size: int = 1) -> int:
    raw = math.floor(capital * risk_fraction / stop_distance)
    lot = max(1, int(lot_size))
    return (raw // lot) * lot

def build_plan(
    verdict: Verdict,
    price: float,
    snapshot: IndicatorSnapshot,
    capital: float,
    risk_fraction: float,
    sl_multiplier: float,
    tp_multiplier: float,
    *,
    mode: StopMode = "atr",
    lot_size: int = 1,
    tp2_multiplier: float | None = None,
) -> TradePlan | None:
    """
    In ``atr`` mode the multipliers scale the snapshot's ATR; in ``percent`` mode
    they are fractions of ``price`` (0.02 = 2%). Returns None for a NONE
    verdict, unmeasurable risk, or a budget too small for one lot.
    """
    if not verdict.actionable:
        return None
    if price is None or not math.isfinite(price) or price <= 0 or capital <= 0:
        return None
    dist = distances(price, snapshot, sl_multiplier, tp_multiplier, mode)
    if dist is None:
        logger.debug("no plan: stop distance unavailable (mode=%s, atr=%s)", mode, snapshot.volatility)
        return None
    stop_d, target_d = dist

    qty = position_size(capital, risk_fraction, stop_d, lot_size)
    if qty <= 0:
        logger.debug("no plan: budget %.2f below one lot at stop distance %.4f", capital * risk_fraction, stop_d)
        return None

    sl, tp = levels(verdict.direction, price, stop_d, target_d)
    if sl <= 0 or tp <= 0:
        logger.debug("no plan: levels not positive (sl=%.4f, tp=%.4f)", sl, tp)
        return None
    tp2 = None
    if tp2_multiplier is not None:
        _, tp2 = levels(verdict.direction, price, stop_d, target_d * tp2_multiplier / tp_multiplier)
        if tp2 <= 0:
            tp2 = None
    risk_amount = qty * stop_d
    return TradePlan(
        direction=verdict.direction,
        entry=float(price),
        stop_loss=float(sl),
        target=float(tp),
        quantity=int(qty),
        stop_distance=float(stop_d),
        risk_amount=float(risk_amount),
        risk_pct=float(risk_amount / capital * 100.0),
        target2=float(tp2) if tp2 is not None else None,
    )
