from __future__ import annotations
import os
from datetime import timedelta
from typing import Literal
from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from dotenv import load_dotenv

from .alerts.cooldown import AlertTracker, build_tracker
from .classifiers import Classifier, OscillatorBands, build_classifier
from .indicators import IndicatorPeriods

load_dotenv()

class Settings(BaseModel):
    """Engine configuration, read once from the environment (or .env) and frozen."""
    model_config = ConfigDict(frozen=True, validate_default=True)

    # account & risk
    account_capital: float = os.getenv("ACCOUNT_CAPITAL", 100_000)
    risk_fraction: float = os.getenv("RISK_PCT", 0.01)
    stop_mode: Literal["atr", "percent"] = os.getenv("STOP_MODE", "atr")
    # ATR multiples (stop_mode "atr")
    sl_multiplier: float = os.getenv("SL_ATR_MULTIPLIER", 1.5)
    tp_multiplier: float = os.getenv("TP_ATR_MULTIPLIER", 3.0)
    tp2_multiplier: float | None = os.getenv("TP2_ATR_MULTIPLIER") or None
    # fractions of price (stop_mode "percent")
    sl_pct: float = os.getenv("SL_PCT", 0.02)
    tp_pct: float = os.getenv("TP_PCT", 0.04)
    tp2_pct: float | None = os.getenv("TP2_PCT") or None
    lot_size: int = os.getenv("LOT_SIZE", 1)

    # classifier
    classifier_mode: Literal["trend", "crossover"] = os.getenv("CLASSIFIER_MODE", "trend")
    min_confidence: int = os.getenv("MIN_CONFIDENCE", 60)
    adx_min: float = os.getenv("ADX_MIN", 25.0)
    rsi_upper: float = os.getenv("RSI_UPPER", 70.0)
    rsi_healthy_floor: float = os.getenv("RSI_HEALTHY_FLOOR", 40.0)

    # indicator periods
    ema_fast: int = os.getenv("EMA_FAST", 20)
    ema_mid: int = os.getenv("EMA_MID", 50)
    ema_slow: int = os.getenv("EMA_SLOW", 200)
    adx_period: int = os.getenv("ADX_PERIOD", 14)
    atr_period: int = os.getenv("ATR_PERIOD", 14)
    rsi_period: int = os.getenv("RSI_PERIOD", 14)
    volume_period: int = os.getenv("VOLUME_PERIOD", 20)

    # alerts
    cooldown_policy: Literal["window", "candle"] = os.getenv("COOLDOWN_POLICY", "window")
    cooldown_minutes: float = os.getenv("COOLDOWN_MINUTES", 240)

    # win-rate replay
    history_days: int = os.getenv("HISTORY_DAYS", 250)
    winrate_lookback_days: int = os.getenv("WINRATE_LOOKBACK_DAYS", 60)
    winrate_forward_window: int = os.getenv("WINRATE_FORWARD_WINDOW", 5)
    winrate_sl_multiplier: float = os.getenv("WINRATE_SL_MULTIPLIER", 1.0)
    winrate_tp_multiplier: float = os.getenv("WINRATE_TP_MULTIPLIER", 2.0)
    winrate_min_bars: int = os.getenv("WINRATE_MIN_BARS", 120)
    winrate_inconclusive: Literal["count", "exclude"] = os.getenv("WINRATE_INCONCLUSIVE", "count")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @field_validator("risk_fraction")
    @classmethod
    def _fraction(cls, v: float) -> float:
        if not 0 < v <= 1:
            raise ValueError("risk fraction must be in (0, 1]")
        return v

    @field_validator("account_capital", "sl_multiplier", "tp_multiplier", "tp_pct")
    @classmethod
    def _positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be > 0")
        return v

    @field_validator("lot_size", "ema_fast", "ema_mid", "ema_slow", "adx_period", "atr_period",
                     "rsi_period", "volume_period", "history_days", "winrate_lookback_days",
                     "winrate_forward_window")
    @classmethod
    def _positive_int(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be > 0")
        return v

    @field_validator("sl_pct")
    @classmethod
    def _stop_pct(cls, v: float) -> float:
        if not 0 < v < 1:
            raise ValueError("percent stop must be in (0, 1)")
        return v

    @field_validator("min_confidence")
    @classmethod
    def _score(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError("min confidence must be in [0, 100]")
        return v

    @model_validator(mode="after")
    def _ordering(self) -> "Settings":
        if not self.ema_fast < self.ema_mid < self.ema_slow:
            raise ValueError("EMA periods must satisfy fast < mid < slow")
        if not 50 < self.rsi_upper <= 100:
            raise ValueError("RSI upper band must be in (50, 100]")
        if self.cooldown_minutes < 0:
            raise ValueError("cooldown must be >= 0")
        return self

    def periods(self) -> IndicatorPeriods:
        return IndicatorPeriods(
            ema_fast=self.ema_fast, ema_mid=self.ema_mid, ema_slow=self.ema_slow,
            adx=self.adx_period, atr=self.atr_period, rsi=self.rsi_period, volume=self.volume_period,
        )

    def stop_multipliers(self) -> tuple[float, float, float | None]:
        """(stop, target, second target) multipliers for the active stop mode."""
        if self.stop_mode == "percent":
            return self.sl_pct, self.tp_pct, self.tp2_pct
        return self.sl_multiplier, self.tp_multiplier, self.tp2_multiplier

    def bands(self) -> OscillatorBands:
        return OscillatorBands(upper=self.rsi_upper, healthy_floor=self.rsi_healthy_floor)

    def classifier(self) -> Classifier:
        return build_classifier(self.classifier_mode, adx_min=self.adx_min,
                                min_confidence=self.min_confidence, bands=self.bands())

    def tracker(self) -> AlertTracker:
        return build_tracker(self.cooldown_policy, timedelta(minutes=self.cooldown_minutes))

settings = Settings()
