# market_sentiment/use_cases/analyze_market_sentiment_use_case.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from market_sentiment.domain.services.daily_aggregator import DailyAggregator
from market_sentiment.domain.services.peer_ranker import PeerRanker
from market_sentiment.domain.services.sentiment_scorer import SentimentScorer
from market_sentiment.domain.services.sentiment_statistics import (
    mean_signed_sentiment,
    sentiment_distribution,
    sentiment_level,
)
from market_sentiment.domain.services.synthetic_market_data import SyntheticMarketDataGenerator
from market_sentiment.entities.analysis_window import AnalysisWindow
from market_sentiment.entities.market_analysis import DataSource, MarketAnalysis
from market_sentiment.entities.news_item import NewsItem
from market_sentiment.interfaces.news_fetcher import NewsFetcher
from market_sentiment.interfaces.price_history_provider import PriceHistoryProvider
from market_sentiment.interfaces.quote_provider import QuoteProvider
from market_sentiment.use_cases.analysis_session import RequestToken
from market_sentiment.utils.scatter_gather import gather

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisRequest:
    symbol: str
    days: int
    today: Optional[date] = None


class AnalyzeMarketSentimentUseCase:
    """
    Composes the full analysis for one symbol and window.

    Flow:
      news + quote (+ daily closes)      scatter/gather
      -> score headlines                 scatter/gather
      -> DailyAggregator -> current sentiment -> PeerRanker
      -> MarketAnalysis

    If news or quote is unavailable the whole result is replaced by a
    deterministic synthetic dataset with source=SYNTHETIC. Smaller failures
    (unscored headlines, missing closes, peer issues) keep live data and set
    source=PARTIAL with the reasons in `issues`.
    """

    def __init__(
        self,
        news_fetcher: NewsFetcher,
        quote_provider: QuoteProvider,
        scorer: SentimentScorer,
        aggregator: DailyAggregator,
        peer_ranker: PeerRanker,
        synthetic: SyntheticMarketDataGenerator,
        price_history: Optional[PriceHistoryProvider] = None,
        *,
        timeout_seconds: float = 20.0,
        max_workers: Optional[int] = None,
        today: Callable[[], date] = lambda: datetime.now().date(),
    ) -> None:
        self.news_fetcher = news_fetcher
        self.quote_provider = quote_provider
        self.scorer = scorer
        self.aggregator = aggregator
        self.peer_ranker = peer_ranker
        self.synthetic = synthetic
        self.price_history = price_history
        self.timeout_seconds = timeout_seconds
        self.max_workers = max_workers
        self._today = today

    def execute(self, request: AnalysisRequest, token: Optional[RequestToken] = None) -> MarketAnalysis:
        symbol = request.symbol.strip().upper()
        if not symbol:
            raise ValueError("symbol must be a non-empty string")

        # Contract violations fail here, before any network call
        today = request.today or self._today()
        window = AnalysisWindow.last_n_days(request.days, today)
        checkpoint = token.raise_if_stale if token is not None else (lambda: None)

        logger.info(
            "Starting analysis",
            extra={"symbol": symbol, "start": window.start.isoformat(), "end": window.end.isoformat()},
        )

        tasks = [
            ("news", lambda: self.news_fetcher.fetch_news(symbol, window.start, window.end)),
            ("quote", lambda: self.quote_provider.get_quote(symbol)),
        ]
        if self.price_history is not None:
            tasks.append(
                ("history", lambda: self.price_history.get_daily_closes(symbol, window.start, window.end))
            )
        outcomes = {o.key: o for o in gather(tasks, timeout=self.timeout_seconds)}
        checkpoint()

        failed = [key for key in ("news", "quote") if not outcomes[key].ok]
        if failed:
            reasons = [f"{key} unavailable: {outcomes[key].error}" for key in failed]
            logger.warning(
                "Upstream unavailable; falling back to synthetic data",
                extra={"symbol": symbol, "failed": ",".join(failed), "error": "; ".join(reasons)},
            )
            return self._synthetic(symbol, window, reasons)

        issues: list[str] = []
        news: list[NewsItem] = outcomes["news"].value
        quote = outcomes["quote"].value

        price_series = None
        history = outcomes.get("history")
        if history is not None:
            if history.ok:
                price_series = history.value
            else:
                issues.append(f"price history unavailable: {history.error}")
                logger.warning(
                    "Price history unavailable; using quote price",
                    extra={"symbol": symbol, "error": str(history.error)},
                )

        scored = self._score(news)
        checkpoint()

        unscored = [item for item in scored if not item.is_scored]
        if unscored:
            issues.append(f"{len(unscored)} of {len(scored)} headlines unscored")

        series = self.aggregator.aggregate(window, scored, price_series, quote.current)
        current = mean_signed_sentiment(scored)

        peers = self.peer_ranker.rank(symbol, current, today, checkpoint)
        checkpoint()
        issues.extend(peers.issues)

        analysis = MarketAnalysis(
            symbol=symbol,
            window=window,
            quote=quote,
            series=series,
            current_sentiment=current,
            sentiment_level=sentiment_level(current),
            distribution=sentiment_distribution(scored),
            peers=peers,
            news=scored,
            source=DataSource.PARTIAL if issues else DataSource.LIVE,
            issues=issues,
        )

        logger.info(
            "Analysis completed",
            extra={
                "symbol": symbol,
                "source": analysis.source.value,
                "news": len(scored),
                "unscored": len(unscored),
                "current_sentiment": round(current, 4),
                "peers": len(peers.peers),
            },
        )
        return analysis

    def _score(self, news: list[NewsItem]) -> list[NewsItem]:
        outcomes = gather(
            [(i, self._bind_score(item)) for i, item in enumerate(news)],
            timeout=self.timeout_seconds,
            max_workers=self.max_workers,
        )
        # score_item never raises for classifier errors; a failed outcome is a timeout
        return [
            outcome.value if outcome.ok else news[outcome.key].as_unscored(str(outcome.error))
            for outcome in outcomes
        ]

    def _bind_score(self, item: NewsItem) -> Callable[[], NewsItem]:
        return lambda: self.scorer.score_item(item)

    def _synthetic(self, symbol: str, window: AnalysisWindow, reasons: list[str]) -> MarketAnalysis:
        dataset = self.synthetic.generate(symbol, window)
        return MarketAnalysis(
            symbol=symbol,
            window=window,
            quote=dataset.quote,
            series=dataset.series,
            current_sentiment=dataset.current_sentiment,
            sentiment_level=sentiment_level(dataset.current_sentiment),
            distribution=sentiment_distribution(dataset.news),
            peers=dataset.peers,
            news=dataset.news,
            source=DataSource.SYNTHETIC,
            issues=reasons,
        )
