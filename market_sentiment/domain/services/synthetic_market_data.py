# market_sentiment/domain/services/synthetic_market_data.py

from __future__ import annotations

import random
import zlib
from dataclasses import dataclass, replace
from typing import List

from market_sentiment.domain.services.daily_aggregator import DailyAggregator
from market_sentiment.domain.services.peer_ranker import PeerRanker
from market_sentiment.domain.services.sentiment_statistics import mean_signed_sentiment
from market_sentiment.domain.time.calendar import day_start_epoch
from market_sentiment.entities.analysis_window import AnalysisWindow
from market_sentiment.entities.daily_bucket import DailySentimentPoint, PriceSource
from market_sentiment.entities.news_item import NewsItem
from market_sentiment.entities.peer_candidate import PeerCandidate, PeerStatus
from market_sentiment.entities.ranking_result import PeerSource, RankingResult
from market_sentiment.entities.sentiment_observation import SentimentLabel, SentimentObservation
from market_sentiment.entities.stock_quote import StockQuote
from market_sentiment.interfaces.peer_provider import IndustryPeerTable

SYNTHETIC_SOURCE = "Synthetic Data"
HEADLINES_PER_DAY = 3

_MOVES = (
    ("rises", SentimentLabel.POSITIVE),
    ("falls", SentimentLabel.NEGATIVE),
    ("remains stable", SentimentLabel.NEUTRAL),
)
_MARKETS = ("Asian", "European", "US")


@dataclass(frozen=True)
class SyntheticDataset:
    quote: StockQuote
    news: List[NewsItem]
    series: List[DailySentimentPoint]
    current_sentiment: float
    peers: RankingResult


def _seed(symbol: str, window: AnalysisWindow) -> int:
    key = f"{symbol.upper()}|{window.start.isoformat()}|{window.end.isoformat()}"
    return zlib.crc32(key.encode("utf-8"))


class SyntheticMarketDataGenerator:
    """
    Builds an illustrative, fully-formed dataset when live data is unavailable.

    Output is deterministic for a given (symbol, window): values come from a
    random.Random seeded with a CRC32 of both, never from global randomness.
    Every price point is tagged PriceSource.SYNTHETIC and every peer
    PeerStatus.SYNTHETIC, so nothing can pass for live data.
    """

    def __init__(
        self,
        aggregator: DailyAggregator,
        peer_table: IndustryPeerTable,
        peer_count: int = 3,
    ) -> None:
        self.aggregator = aggregator
        self.peer_table = peer_table
        self.peer_count = peer_count

    def generate(self, symbol: str, window: AnalysisWindow) -> SyntheticDataset:
        rng = random.Random(_seed(symbol, window))

        quote = StockQuote(
            current=round(150 + rng.random() * 50, 2),
            high=180.0,
            low=140.0,
            open=155.0,
            previous_close=148.0,
            timestamp=day_start_epoch(window.end, self.aggregator.tz),
        )

        news = self._news(symbol, window, rng)
        series = [
            replace(point, price_source=PriceSource.SYNTHETIC)
            for point in self.aggregator.aggregate(
                window,
                news,
                base_price=quote.current,
            )
        ]
        series = self._walk_prices(series, quote.current, rng)

        current = mean_signed_sentiment(news)
        return SyntheticDataset(
            quote=quote,
            news=news,
            series=series,
            current_sentiment=current,
            peers=self.peers(symbol, current),
        )

    def peers(self, symbol: str, baseline: float) -> RankingResult:
        industry = self.peer_table.industry_for_symbol(symbol)
        companies = [
            (s, name) for s, name in self.peer_table.demo_companies(industry) if s != symbol.upper()
        ][: self.peer_count]

        candidates = [
            PeerCandidate(
                symbol=s,
                display_name=name,
                industry=industry,
                aggregate_sentiment=max(-1.0, min(1.0, baseline + (0.3 - i * 0.05))),
                status=PeerStatus.SYNTHETIC,
            )
            for i, (s, name) in enumerate(companies)
        ]
        return PeerRanker.select(
            symbol,
            industry,
            baseline,
            candidates,
            peer_source=PeerSource.SYNTHETIC,
            issues=["peer sentiment is synthetic"],
        )

    def _news(self, symbol: str, window: AnalysisWindow, rng: random.Random) -> List[NewsItem]:
        items: list[NewsItem] = []
        for offset, day in enumerate(window.days()):
            day_start = day_start_epoch(day, self.aggregator.tz)
            for slot in range(HEADLINES_PER_DAY):
                i = offset * HEADLINES_PER_DAY + slot
                move, label = _MOVES[i % len(_MOVES)]
                timestamp = day_start + slot * 8 * 3600
                observation = SentimentObservation(
                    timestamp=timestamp,
                    label=label,
                    score=round(0.5 + rng.random() * 0.5, 4),
                )
                items.append(
                    NewsItem(
                        timestamp=timestamp,
                        headline=f"{symbol} {move} in {_MARKETS[i % len(_MARKETS)]} markets",
                        source=SYNTHETIC_SOURCE,
                        url="",
                    ).with_sentiment(observation)
                )
        return items

    @staticmethod
    def _walk_prices(
        series: List[DailySentimentPoint], base_price: float, rng: random.Random
    ) -> List[DailySentimentPoint]:
        # Daily variation within +/-5% of the synthetic quote
        return [
            replace(point, price=round(base_price * (0.95 + rng.random() * 0.1), 2))
            for point in series
        ]
