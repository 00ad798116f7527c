from __future__ import annotations
from datetime import datetime, timedelta, timezone
import zlib
from ..types import Bar
from .base import BarProvider
from .synthetic import random_walk_bars

class MockProvider(BarProvider):
    """Seeded random-walk bars ending today; each symbol gets its own stable series."""

    def __init__(self, seed: int = 42):
        self.seed = seed

    async def get_bars(self, symbol: str, lookback: int = 250) -> list[Bar]:
        today = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
        sym_seed = self.seed ^ zlib.crc32(symbol.upper().encode())
        drift = 0.002 if sym_seed % 3 == 0 else (-0.002 if sym_seed % 3 == 1 else 0.0)
        return random_walk_bars(lookback, seed=sym_seed, drift=drift,
                                t0=today - timedelta(days=lookback - 1))
