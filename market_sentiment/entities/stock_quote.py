# market_sentiment/entities/stock_quote.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StockQuote:
    """Latest quote snapshot for a symbol (prices in the listing currency)."""

    current: float
    high: float
    low: float
    open: float
    previous_close: float
    timestamp: int

    def __post_init__(self) -> None:
        for name in ("current", "high", "low", "open", "previous_close"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError(f"{name} must be numeric")
            if value < 0:
                raise ValueError(f"{name} cannot be negative")

        if self.current <= 0:
            raise ValueError("current price must be positive")
