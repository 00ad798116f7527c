"""Signal generation & risk engine for daily equity bars.

Pipeline per symbol:
- indicators: EMA fast/mid/slow, ADX, ATR, RSI, volume SMA (pure, no look-ahead)
- classifier: EMA stack + ADX ("trend") or fresh EMA cross + RSI band ("crossover")
- sizer: ATR or percent stop, fixed-fractional quantity in whole lots
- win rate: walk-forward replay of the same rule over a trailing window
- alert tracker: per-symbol cooldown or per-candle dedup
"""
