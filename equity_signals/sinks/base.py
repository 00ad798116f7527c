from __future__ import annotations
from abc import ABC, abstractmethod
from ..types import TradeSignal

class SignalSink(ABC):
    """Destination for signals that passed the engine (chat, sheet, journal...)."""

    @abstractmethod
    def emit(self, signal: TradeSignal) -> None:
        """Deliver one signal. Implementations may raise; the engine logs and continues."""
