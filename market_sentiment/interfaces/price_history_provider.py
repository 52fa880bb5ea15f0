# market_sentiment/interfaces/price_history_provider.py
from abc import ABC, abstractmethod
from datetime import date

from market_sentiment.entities.price_point import PricePoint


class PriceHistoryProvider(ABC):
    @abstractmethod
    def get_daily_closes(self, symbol: str, start: date, end: date) -> list[PricePoint]:
        """Daily closes in [start, end]; may be empty. Raises UpstreamUnavailable on failure."""
        ...
