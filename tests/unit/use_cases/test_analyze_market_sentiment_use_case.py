# tests/unit/use_cases/test_analyze_market_sentiment_use_case.py

from __future__ import annotations

from datetime import date, timezone

import pytest

from market_sentiment.adapters.yaml_industry_peer_table import YamlIndustryPeerTable
from market_sentiment.domain.errors import InvalidWindow, RequestSuperseded, UpstreamUnavailable
from market_sentiment.domain.services.daily_aggregator import DailyAggregator
from market_sentiment.domain.services.peer_ranker import PeerRanker
from market_sentiment.domain.services.sentiment_scorer import SentimentScorer
from market_sentiment.domain.services.synthetic_market_data import SyntheticMarketDataGenerator
from market_sentiment.domain.time.calendar import day_start_epoch
from market_sentiment.entities.company_profile import CompanyProfile
from market_sentiment.entities.daily_bucket import PriceSource
from market_sentiment.entities.market_analysis import DataSource, SentimentLevel
from market_sentiment.entities.news_item import NewsItem
from market_sentiment.entities.price_point import PricePoint
from market_sentiment.entities.stock_quote import StockQuote
from market_sentiment.interfaces.company_profile_provider import CompanyProfileProvider
from market_sentiment.interfaces.news_fetcher import NewsFetcher
from market_sentiment.interfaces.peer_provider import PeerProvider
from market_sentiment.interfaces.price_history_provider import PriceHistoryProvider
from market_sentiment.interfaces.quote_provider import QuoteProvider
from market_sentiment.interfaces.sentiment_classifier import ClassifierOutput, SentimentClassifier
from market_sentiment.use_cases.analysis_session import AnalysisSession
from market_sentiment.use_cases.analyze_market_sentiment_use_case import (
    AnalysisRequest,
    AnalyzeMarketSentimentUseCase,
)

TODAY = date(2024, 3, 15)
UTC = timezone.utc


def _ts(day: date, hour: int = 12) -> int:
    return day_start_epoch(day, UTC) + hour * 3600


# Fakes

class FakeNews(NewsFetcher):
    def __init__(self, headlines: list[tuple[int, str]] | None = None, error: Exception | None = None) -> None:
        self.headlines = headlines or []
        self.error = error
        self.calls = 0

    def fetch_news(self, symbol: str, start: date, end: date) -> list[NewsItem]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return [NewsItem(timestamp=ts, headline=h, source="fake", url="") for ts, h in self.headlines]


class FakeQuote(QuoteProvider):
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls = 0

    def get_quote(self, symbol: str) -> StockQuote:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return StockQuote(current=100.0, high=101.0, low=99.0, open=99.5, previous_close=99.0, timestamp=0)


class FakeHistory(PriceHistoryProvider):
    def __init__(self, points: list[PricePoint] | None = None, error: Exception | None = None) -> None:
        self.points = points or []
        self.error = error

    def get_daily_closes(self, symbol: str, start: date, end: date) -> list[PricePoint]:
        if self.error is not None:
            raise self.error
        return list(self.points)


class KeywordClassifier(SentimentClassifier):
    """'good' -> positive 0.8, 'bad' -> negative 0.6, 'boom' -> raises, else neutral."""

    def classify(self, text: str) -> ClassifierOutput:
        if "boom" in text:
            raise RuntimeError("model overloaded")
        if "good" in text:
            return ClassifierOutput(label="positive", score=0.8)
        if "bad" in text:
            return ClassifierOutput(label="negative", score=0.6)
        return ClassifierOutput(label="neutral", score=0.9)


class FakeProfiles(CompanyProfileProvider):
    def get_profile(self, symbol: str) -> CompanyProfile:
        return CompanyProfile(symbol=symbol, name=f"{symbol} Inc", industry="Technology")


class NoPeers(PeerProvider):
    def get_peers(self, symbol: str) -> list[str]:
        return []


class SupersedingNews(FakeNews):
    """Starts a newer request on the session while this one is in flight."""

    def __init__(self, session_ref: list[AnalysisSession]) -> None:
        super().__init__([(_ts(TODAY), "good quarter")])
        self.session_ref = session_ref

    def fetch_news(self, symbol: str, start: date, end: date) -> list[NewsItem]:
        self.session_ref[0].begin()
        return super().fetch_news(symbol, start, end)


def _use_case(news: NewsFetcher, quote: QuoteProvider | None = None, history=None) -> AnalyzeMarketSentimentUseCase:
    aggregator = DailyAggregator(tz=UTC)
    scorer = SentimentScorer(KeywordClassifier())
    table = YamlIndustryPeerTable(
        {
            "industries": {"Technology": ["MSFT", "IBM"]},
            "default_industry": "Technology",
            "demo_companies": {"Technology": [{"symbol": "MSFT", "name": "Microsoft Corp"}]},
        }
    )
    ranker = PeerRanker(
        profile_provider=FakeProfiles(),
        peer_provider=NoPeers(),
        news_fetcher=FakeNews(),
        scorer=scorer,
        peer_table=table,
        timeout_seconds=5,
    )
    return AnalyzeMarketSentimentUseCase(
        news_fetcher=news,
        quote_provider=quote or FakeQuote(),
        scorer=scorer,
        aggregator=aggregator,
        peer_ranker=ranker,
        synthetic=SyntheticMarketDataGenerator(aggregator, table),
        price_history=history,
        timeout_seconds=5,
        today=lambda: TODAY,
    )


# Tests

def test_live_analysis_builds_series_and_statistics():
    news = FakeNews(
        [
            (_ts(date(2024, 3, 14)), "good earnings"),
            (_ts(date(2024, 3, 14), 15), "bad guidance"),
            (_ts(TODAY), "good outlook"),
        ]
    )
    use_case = _use_case(news, history=FakeHistory([PricePoint(date(2024, 3, 14), 98.5)]))

    analysis = use_case.execute(AnalysisRequest(symbol=" aapl ", days=1))

    assert analysis.symbol == "AAPL"
    assert analysis.source is DataSource.LIVE
    assert analysis.issues == ()
    assert [p.day for p in analysis.series] == [date(2024, 3, 14), TODAY]

    first, last = analysis.series
    assert first.volume == 2
    assert first.avg_sentiment == pytest.approx((0.8 - 0.6) / 2)
    assert first.price == 98.5
    assert first.price_source is PriceSource.HISTORICAL
    assert last.price == 98.5
    assert last.price_source is PriceSource.CARRIED_FORWARD

    assert analysis.current_sentiment == pytest.approx((0.8 - 0.6 + 0.8) / 3)
    assert analysis.sentiment_level is SentimentLevel.STRONG_POSITIVE
    assert analysis.distribution.positive == 2
    assert analysis.distribution.negative == 1
    assert analysis.peers.is_empty


def test_quote_failure_switches_to_synthetic_data():
    news = FakeNews([(_ts(TODAY), "good outlook")])
    use_case = _use_case(news, quote=FakeQuote(error=UpstreamUnavailable("quote down")))

    analysis = use_case.execute(AnalysisRequest(symbol="AAPL", days=7))

    assert analysis.source is DataSource.SYNTHETIC
    assert analysis.is_synthetic
    assert len(analysis.series) == analysis.window.days_inclusive == 8
    assert any("quote unavailable" in issue for issue in analysis.issues)
    assert {p.price_source for p in analysis.series} == {PriceSource.SYNTHETIC}


def test_news_failure_switches_to_synthetic_data():
    use_case = _use_case(FakeNews(error=UpstreamUnavailable("news down")))

    analysis = use_case.execute(AnalysisRequest(symbol="AAPL", days=1))

    assert analysis.source is DataSource.SYNTHETIC
    assert analysis.issues[0].startswith("news unavailable")


def test_classifier_failure_keeps_headline_unscored():
    news = FakeNews([(_ts(TODAY), "good outlook"), (_ts(TODAY, 13), "boom")])
    use_case = _use_case(news)

    analysis = use_case.execute(AnalysisRequest(symbol="AAPL", days=1))

    assert analysis.source is DataSource.PARTIAL
    assert "1 of 2 headlines unscored" in analysis.issues
    assert len(analysis.news) == 2
    assert analysis.distribution.unscored == 1
    assert analysis.current_sentiment == pytest.approx(0.8)
    assert analysis.series[-1].volume == 1


def test_history_failure_falls_back_to_quote_price():
    news = FakeNews([(_ts(TODAY), "flat session")])
    use_case = _use_case(news, history=FakeHistory(error=UpstreamUnavailable("candles down")))

    analysis = use_case.execute(AnalysisRequest(symbol="AAPL", days=1))

    assert analysis.source is DataSource.PARTIAL
    assert any(issue.startswith("price history unavailable") for issue in analysis.issues)
    assert {p.price for p in analysis.series} == {100.0}
    assert {p.price_source for p in analysis.series} == {PriceSource.QUOTE}


@pytest.mark.parametrize("days", [0, -3])
def test_invalid_window_fails_before_any_network_call(days):
    news = FakeNews()
    quote = FakeQuote()
    use_case = _use_case(news, quote=quote)

    with pytest.raises(InvalidWindow):
        use_case.execute(AnalysisRequest(symbol="AAPL", days=days))

    assert news.calls == 0
    assert quote.calls == 0


def test_blank_symbol_is_rejected():
    with pytest.raises(ValueError):
        _use_case(FakeNews()).execute(AnalysisRequest(symbol="  ", days=1))


def test_stale_token_aborts_the_request():
    session_ref: list[AnalysisSession] = []
    use_case = _use_case(SupersedingNews(session_ref))
    session = AnalysisSession(use_case)
    session_ref.append(session)

    with pytest.raises(RequestSuperseded):
        session.run(AnalysisRequest(symbol="AAPL", days=1))

    assert session.latest is None
