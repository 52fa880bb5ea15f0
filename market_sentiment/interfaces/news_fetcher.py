from abc import ABC, abstractmethod
from datetime import date

from market_sentiment.entities.news_item import NewsItem


class NewsFetcher(ABC):
    """
    Interface for fetching company headlines from external sources.
    Implementations deal with protocols, authentication and response parsing,
    and raise UpstreamUnavailable when the source cannot be reached.
    """

    @abstractmethod
    def fetch_news(self, symbol: str, start: date, end: date) -> list[NewsItem]:
        """Headlines published for `symbol` between start and end (inclusive days)."""
        pass
