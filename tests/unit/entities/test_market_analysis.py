# tests/unit/entities/test_market_analysis.py

from datetime import date

import pytest

from market_sentiment.entities.analysis_window import AnalysisWindow
from market_sentiment.entities.daily_bucket import DailySentimentPoint, PriceSource
from market_sentiment.entities.market_analysis import (
    DataSource,
    MarketAnalysis,
    SentimentDistribution,
    SentimentLevel,
)
from market_sentiment.entities.ranking_result import RankingResult
from market_sentiment.entities.stock_quote import StockQuote

WINDOW = AnalysisWindow(date(2024, 1, 1), date(2024, 1, 2))
QUOTE = StockQuote(current=10.0, high=11.0, low=9.0, open=9.5, previous_close=9.8, timestamp=0)


def _point(day: date) -> DailySentimentPoint:
    return DailySentimentPoint(day, 0.0, 0, 10.0, PriceSource.QUOTE)


def _analysis(series, source=DataSource.LIVE, issues=()) -> MarketAnalysis:
    return MarketAnalysis(
        symbol="AAPL",
        window=WINDOW,
        quote=QUOTE,
        series=series,
        current_sentiment=0.0,
        sentiment_level=SentimentLevel.NEUTRAL,
        distribution=SentimentDistribution(),
        peers=RankingResult.empty("AAPL", "Technology", 0.0),
        news=[],
        source=source,
        issues=issues,
    )


def test_series_must_cover_window():
    with pytest.raises(ValueError):
        _analysis([_point(date(2024, 1, 1))])


def test_live_analysis_cannot_carry_issues():
    with pytest.raises(ValueError):
        _analysis([_point(WINDOW.start), _point(WINDOW.end)], issues=["x"])


def test_degraded_flags():
    partial = _analysis([_point(WINDOW.start), _point(WINDOW.end)], DataSource.PARTIAL, ["x"])
    synthetic = _analysis([_point(WINDOW.start), _point(WINDOW.end)], DataSource.SYNTHETIC, ["y"])

    assert partial.degraded and not partial.is_synthetic
    assert synthetic.degraded and synthetic.is_synthetic


def test_distribution_total():
    assert SentimentDistribution(positive=2, negative=1, neutral=3, unscored=1).total == 7


@pytest.mark.parametrize(
    "kwargs",
    [
        {"avg_sentiment": 0.3, "volume": 0},
        {"avg_sentiment": 1.5, "volume": 2},
        {"price": 10.0, "price_source": None},
    ],
)
def test_daily_point_invariants(kwargs):
    values = {"day": date(2024, 1, 1), "avg_sentiment": 0.0, "volume": 1, "price": None, "price_source": None}
    values.update(kwargs)

    with pytest.raises(ValueError):
        DailySentimentPoint(**values)
