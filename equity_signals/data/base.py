from __future__ import annotations
from abc import ABC, abstractmethod
from ..types import Bar

class BarProvider(ABC):
    """Common interface for daily bar sources."""

    @abstractmethod
    async def get_bars(self, symbol: str, lookback: int = 250) -> list[Bar]:
        """Return up to ``lookback`` bars, oldest first. An empty list means unavailable."""

    async def close(self) -> None:
        """Release resources; override if the provider holds sessions or files."""
        return None
