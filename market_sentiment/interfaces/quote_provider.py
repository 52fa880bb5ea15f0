from abc import ABC, abstractmethod

from market_sentiment.entities.stock_quote import StockQuote


class QuoteProvider(ABC):
    @abstractmethod
    def get_quote(self, symbol: str) -> StockQuote:
        """Latest quote. Raises UpstreamUnavailable on failure."""
        pass
