# market_sentiment/entities/market_analysis.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from market_sentiment.entities.analysis_window import AnalysisWindow
from market_sentiment.entities.daily_bucket import DailySentimentPoint
from market_sentiment.entities.news_item import NewsItem
from market_sentiment.entities.ranking_result import RankingResult
from market_sentiment.entities.stock_quote import StockQuote


class DataSource(Enum):
    LIVE = "live"
    PARTIAL = "partial"
    SYNTHETIC = "synthetic"


class SentimentLevel(Enum):
    STRONG_POSITIVE = "Strong Positive"
    MILDLY_POSITIVE = "Mildly Positive"
    NEUTRAL = "Neutral"
    MILDLY_NEGATIVE = "Mildly Negative"
    STRONG_NEGATIVE = "Strong Negative"


@dataclass(frozen=True, slots=True)
class SentimentDistribution:
    positive: int = 0
    negative: int = 0
    neutral: int = 0
    unscored: int = 0

    @property
    def total(self) -> int:
        return self.positive + self.negative + self.neutral + self.unscored


@dataclass(frozen=True, slots=True)
class MarketAnalysis:
    """
    Read-only view model for one analysis request.

    `source` tells the caller whether the data is live, partially
    degraded or fully synthetic; `issues` lists what degraded it.
    """

    symbol: str
    window: AnalysisWindow
    quote: StockQuote
    series: tuple[DailySentimentPoint, ...]
    current_sentiment: float
    sentiment_level: SentimentLevel
    distribution: SentimentDistribution
    peers: RankingResult
    news: tuple[NewsItem, ...]
    source: DataSource
    issues: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "series", tuple(self.series))
        object.__setattr__(self, "news", tuple(self.news))
        object.__setattr__(self, "issues", tuple(self.issues))

        if len(self.series) != self.window.days_inclusive:
            raise ValueError("series must cover every day of the window exactly once")

        if self.source is DataSource.LIVE and self.issues:
            raise ValueError("a LIVE analysis cannot carry issues")

    @property
    def degraded(self) -> bool:
        return self.source is not DataSource.LIVE

    @property
    def is_synthetic(self) -> bool:
        return self.source is DataSource.SYNTHETIC
