from __future__ import annotations
from pathlib import Path
import logging
import pandas as pd
from ..types import Bar
from .base import BarProvider

logger = logging.getLogger(__name__)

_COLUMNS = ("open", "high", "low", "close")

class CsvProvider(BarProvider):
    """Reads ``<directory>/<SYMBOL>.csv`` with a date/datetime column and OHLC(V) columns."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, symbol: str) -> Path:
        return self.directory / f"{symbol.upper()}.csv"

    async def get_bars(self, symbol: str, lookback: int = 250) -> list[Bar]:
        path = self._path(symbol)
        if not path.exists():
            logger.info("no data file for %s at %s", symbol, path)
            return []
        df = pd.read_csv(path)
        df.columns = [str(c).strip().lower() for c in df.columns]
        time_col = next((c for c in ("datetime", "date", "time", "timestamp") if c in df.columns), None)
        if time_col is None or any(c not in df.columns for c in _COLUMNS):
            raise ValueError(f"{path}: expected a date column and {', '.join(_COLUMNS)}")
        df[time_col] = pd.to_datetime(df[time_col], utc=True)
        for col in (*_COLUMNS, "volume"):
            if col in df.columns:
                df[col] = pd.to_numeric(df[col], errors="coerce")
        df = (df.dropna(subset=list(_COLUMNS))
                .drop_duplicates(subset=[time_col], keep="last")
                .sort_values(time_col)
                .tail(lookback))
        has_volume = "volume" in df.columns
        return [
            Bar(time=row[time_col].to_pydatetime(),
                open=float(row["open"]), high=float(row["high"]),
                low=float(row["low"]), close=float(row["close"]),
                volume=float(row["volume"]) if has_volume and pd.notna(row["volume"]) else None)
            for _, row in df.iterrows()
        ]
