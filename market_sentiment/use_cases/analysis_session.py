# market_sentiment/use_cases/analysis_session.py

from __future__ import annotations

import logging
import threading
from typing import Optional, TYPE_CHECKING

from market_sentiment.domain.errors import RequestSuperseded
from market_sentiment.entities.market_analysis import MarketAnalysis

if TYPE_CHECKING:
    from market_sentiment.use_cases.analyze_market_sentiment_use_case import (
        AnalysisRequest,
        AnalyzeMarketSentimentUseCase,
    )

logger = logging.getLogger(__name__)


class RequestToken:
    """Generation stamp of one analysis request, compared at every join point."""

    def __init__(self, session: "AnalysisSession", generation: int) -> None:
        self._session = session
        self.generation = generation

    def is_current(self) -> bool:
        return self._session.current_generation == self.generation

    def raise_if_stale(self) -> None:
        if not self.is_current():
            raise RequestSuperseded(
                f"request {self.generation} superseded by {self._session.current_generation}"
            )


class AnalysisSession:
    """
    Holds the latest published analysis for an interactive caller.

    Every `run` starts a new generation. A request whose generation is no
    longer current when it reaches a join point is discarded: its result is
    never published to `latest`.
    """

    def __init__(self, use_case: "AnalyzeMarketSentimentUseCase") -> None:
        self.use_case = use_case
        self._lock = threading.Lock()
        self._generation = 0
        self._latest: Optional[MarketAnalysis] = None

    @property
    def current_generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def latest(self) -> Optional[MarketAnalysis]:
        with self._lock:
            return self._latest

    def begin(self) -> RequestToken:
        with self._lock:
            self._generation += 1
            return RequestToken(self, self._generation)

    def run(self, request: "AnalysisRequest") -> MarketAnalysis:
        token = self.begin()
        analysis = self.use_case.execute(request, token=token)
        self._publish(token, analysis)
        return analysis

    def _publish(self, token: RequestToken, analysis: MarketAnalysis) -> None:
        with self._lock:
            if token.generation != self._generation:
                logger.info(
                    "Discarding stale analysis",
                    extra={"symbol": analysis.symbol, "generation": token.generation, "current": self._generation},
                )
                raise RequestSuperseded(
                    f"request {token.generation} superseded by {self._generation}"
                )
            self._latest = analysis
