# market_sentiment/domain/services/peer_ranker.py

from __future__ import annotations

import logging
from datetime import date
from statistics import mean
from typing import Callable, List, Optional

from market_sentiment.domain.errors import PartialData
from market_sentiment.domain.services.sentiment_scorer import SentimentScorer
from market_sentiment.entities.analysis_window import AnalysisWindow
from market_sentiment.entities.company_profile import UNKNOWN_INDUSTRY, CompanyProfile
from market_sentiment.entities.news_item import NewsItem
from market_sentiment.entities.peer_candidate import PeerCandidate
from market_sentiment.entities.ranking_result import PeerSource, RankingResult, ranking_key
from market_sentiment.interfaces.company_profile_provider import CompanyProfileProvider
from market_sentiment.interfaces.news_fetcher import NewsFetcher
from market_sentiment.interfaces.peer_provider import IndustryPeerTable, PeerProvider
from market_sentiment.utils.scatter_gather import gather

logger = logging.getLogger(__name__)

# Fan-out ceiling: 6 peers x 8 headlines bounds the classifier calls per request.
DEFAULT_PEER_LIMIT = 6
DEFAULT_HEADLINE_LIMIT = 8
DEFAULT_NEWS_DAYS = 7


def _noop() -> None:
    return None


class PeerRanker:
    """
    Ranks same-industry peers whose recent news sentiment beats a baseline.

    Flow:
      profile(subject) + peers(subject)      (concurrent)
      -> candidates (subject excluded, first `peer_limit`)
      -> per candidate, concurrently: profile, news (last `news_days`),
         score first `headline_limit` headlines, mean signed value
      -> keep aggregate > baseline, sort desc, tie-break symbol asc

    A failing candidate becomes an INSUFFICIENT_DATA placeholder and is
    reported in `skipped`; it never aborts the batch nor enters the ranking.
    """

    def __init__(
        self,
        profile_provider: CompanyProfileProvider,
        peer_provider: PeerProvider,
        news_fetcher: NewsFetcher,
        scorer: SentimentScorer,
        peer_table: Optional[IndustryPeerTable] = None,
        *,
        peer_limit: int = DEFAULT_PEER_LIMIT,
        headline_limit: int = DEFAULT_HEADLINE_LIMIT,
        news_days: int = DEFAULT_NEWS_DAYS,
        timeout_seconds: float = 20.0,
        max_workers: Optional[int] = None,
    ) -> None:
        self.profile_provider = profile_provider
        self.peer_provider = peer_provider
        self.news_fetcher = news_fetcher
        self.scorer = scorer
        self.peer_table = peer_table
        self.peer_limit = peer_limit
        self.headline_limit = headline_limit
        self.news_days = news_days
        self.timeout_seconds = timeout_seconds
        self.max_workers = max_workers

    def rank(
        self,
        subject: str,
        baseline: float,
        today: date,
        checkpoint: Callable[[], None] = _noop,
    ) -> RankingResult:
        issues: list[str] = []

        profile_outcome, peers_outcome = gather(
            [
                ("profile", lambda: self.profile_provider.get_profile(subject)),
                ("peers", lambda: self.peer_provider.get_peers(subject)),
            ],
            timeout=self.timeout_seconds,
        )
        checkpoint()

        if profile_outcome.ok:
            industry = profile_outcome.value.industry
        else:
            industry = UNKNOWN_INDUSTRY
            issues.append(f"profile lookup failed for {subject}: {profile_outcome.error}")
            logger.warning(
                "Subject profile unavailable; industry defaults to Unknown",
                extra={"symbol": subject, "error": str(profile_outcome.error)},
            )

        if peers_outcome.ok:
            peer_symbols = list(peers_outcome.value)
            peer_source = PeerSource.PROVIDER
        else:
            logger.warning(
                "Peer lookup failed",
                extra={"symbol": subject, "industry": industry, "error": str(peers_outcome.error)},
            )
            issues.append(f"peer lookup failed for {subject}: {peers_outcome.error}")
            peer_symbols = self.peer_table.peers_for_industry(industry) if self.peer_table else []
            if not peer_symbols:
                return RankingResult.empty(subject, industry, baseline, *issues)
            peer_source = PeerSource.STATIC_TABLE

        candidates = self._select_candidates(subject, peer_symbols)
        window = AnalysisWindow.last_n_days(self.news_days, today)

        outcomes = gather(
            [(symbol, self._bind(symbol, window)) for symbol in candidates],
            timeout=self.timeout_seconds * 3,
            max_workers=self.max_workers,
        )
        checkpoint()

        evaluated: list[PeerCandidate] = []
        for outcome in outcomes:
            if outcome.ok:
                evaluated.append(outcome.value)
                continue
            detail = str(outcome.error)
            logger.warning(
                "Peer sentiment unavailable",
                extra={"symbol": subject, "peer": outcome.key, "error": detail},
            )
            issues.append(f"peer {outcome.key}: {detail}")
            evaluated.append(PeerCandidate.insufficient_data(str(outcome.key), detail=detail))

        result = self.select(subject, industry, baseline, evaluated, peer_source, issues)

        logger.info(
            "Peers ranked",
            extra={
                "symbol": subject,
                "industry": industry,
                "baseline": round(baseline, 4),
                "candidates": len(candidates),
                "ranked": len(result.peers),
                "skipped": len(result.skipped),
                "peer_source": peer_source.value,
            },
        )
        return result

    @staticmethod
    def select(
        subject: str,
        industry: str,
        baseline: float,
        candidates: List[PeerCandidate],
        peer_source: PeerSource = PeerSource.PROVIDER,
        issues: Optional[List[str]] = None,
    ) -> RankingResult:
        """Filter to candidates beating the baseline and order them deterministically."""
        skipped = [c for c in candidates if not c.is_rankable]
        better = sorted(
            (c for c in candidates if c.is_rankable and c.aggregate_sentiment > baseline),
            key=ranking_key,
        )
        return RankingResult(
            subject=subject,
            industry=industry,
            baseline=baseline,
            peers=better,
            skipped=skipped,
            peer_source=peer_source,
            issues=issues or (),
        )

    def _select_candidates(self, subject: str, peer_symbols: List[str]) -> List[str]:
        seen: set[str] = set()
        candidates: list[str] = []
        for raw in peer_symbols:
            symbol = str(raw).strip().upper()
            if not symbol or symbol == subject.upper() or symbol in seen:
                continue
            seen.add(symbol)
            candidates.append(symbol)
        # Deliberate ceiling on fan-out, not a top-N selection
        return candidates[: self.peer_limit]

    def _bind(self, symbol: str, window: AnalysisWindow) -> Callable[[], PeerCandidate]:
        return lambda: self._evaluate(symbol, window)

    def _evaluate(self, symbol: str, window: AnalysisWindow) -> PeerCandidate:
        try:
            profile = self.profile_provider.get_profile(symbol)
        except Exception as e:
            raise PartialData(f"profile lookup failed: {e}") from e

        try:
            news = self.news_fetcher.fetch_news(symbol, window.start, window.end)
        except Exception as e:
            raise PartialData(f"news fetch failed: {e}") from e

        headlines = news[: self.headline_limit]
        if not headlines:
            return self._candidate(symbol, profile, 0.0, 0)

        scored = [
            outcome.value
            for outcome in gather(
                [(i, self._bind_score(item)) for i, item in enumerate(headlines)],
                timeout=self.timeout_seconds,
            )
            if outcome.ok
        ]
        values = [item.sentiment.signed_value for item in scored if item.sentiment is not None]
        if not values:
            raise PartialData(f"none of {len(headlines)} headlines could be scored")

        return self._candidate(symbol, profile, mean(values), len(values))

    def _bind_score(self, item: NewsItem) -> Callable[[], NewsItem]:
        return lambda: self.scorer.score_item(item)

    @staticmethod
    def _candidate(symbol: str, profile: CompanyProfile, sentiment: float, scored: int) -> PeerCandidate:
        return PeerCandidate(
            symbol=symbol,
            display_name=profile.name,
            industry=profile.industry,
            aggregate_sentiment=sentiment,
            headlines_scored=scored,
        )
