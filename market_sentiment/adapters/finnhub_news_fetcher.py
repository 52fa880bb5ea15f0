# market_sentiment/adapters/finnhub_news_fetcher.py
from __future__ import annotations

import logging
from datetime import date

from market_sentiment.adapters.finnhub_client import FinnhubClient
from market_sentiment.domain.errors import UpstreamUnavailable
from market_sentiment.entities.news_item import NewsItem
from market_sentiment.interfaces.news_fetcher import NewsFetcher

logger = logging.getLogger(__name__)


class FinnhubNewsFetcher(NewsFetcher):
    """
    Company headlines from Finnhub `/company-news`.

    Items without a headline are dropped and the result is capped at `limit`
    (Finnhub returns newest first).
    """

    def __init__(self, client: FinnhubClient, limit: int = 50) -> None:
        self.client = client
        self.limit = limit

    def fetch_news(self, symbol: str, start: date, end: date) -> list[NewsItem]:
        if start > end:
            raise ValueError("start must be <= end")

        data = self.client.get(
            "company-news",
            {
                "symbol": symbol,
                "from": start.strftime("%Y-%m-%d"),
                "to": end.strftime("%Y-%m-%d"),
            },
        )
        if not isinstance(data, list):
            raise UpstreamUnavailable(
                f"Unexpected company-news payload for {symbol}: expected list",
                provider="finnhub",
            )

        news_list: list[NewsItem] = []
        malformed = 0
        for item in data:
            try:
                headline = str(item.get("headline") or "").strip()
                if not headline:
                    continue
                news_list.append(
                    NewsItem(
                        timestamp=int(item["datetime"]),
                        headline=headline,
                        source=str(item.get("source") or ""),
                        url=str(item.get("url") or ""),
                    )
                )
            except (AttributeError, KeyError, TypeError, ValueError):
                malformed += 1  # skip malformed items
                continue

            if len(news_list) >= self.limit:
                break

        logger.info(
            "Finnhub fetched %d news for %s",
            len(news_list),
            symbol,
            extra={"start": start.isoformat(), "end": end.isoformat(), "malformed": malformed},
        )
        return news_list
