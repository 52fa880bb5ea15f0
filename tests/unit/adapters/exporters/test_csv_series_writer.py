# tests/unit/adapters/exporters/test_csv_series_writer.py

from datetime import date

import pandas as pd

from market_sentiment.adapters.csv_series_writer import CsvSeriesWriter
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


def _analysis() -> MarketAnalysis:
    window = AnalysisWindow(date(2024, 1, 1), date(2024, 1, 2))
    return MarketAnalysis(
        symbol="AAPL",
        window=window,
        quote=StockQuote(current=100.0, high=101.0, low=99.0, open=99.5, previous_close=99.0, timestamp=0),
        series=[
            DailySentimentPoint(date(2024, 1, 1), 0.25, 2, 99.1, PriceSource.HISTORICAL),
            DailySentimentPoint(date(2024, 1, 2), 0.0, 0, None, None),
        ],
        current_sentiment=0.25,
        sentiment_level=SentimentLevel.STRONG_POSITIVE,
        distribution=SentimentDistribution(positive=2),
        peers=RankingResult.empty("AAPL", "Technology", 0.25),
        news=[],
        source=DataSource.PARTIAL,
        issues=["price history unavailable: down"],
    )


def test_writes_one_row_per_day(tmp_path):
    path = tmp_path / "out" / "aapl.csv"

    written = CsvSeriesWriter().write(_analysis(), path)

    df = pd.read_csv(written)
    assert list(df.columns) == CsvSeriesWriter.COLUMNS
    assert list(df["date"]) == ["2024-01-01", "2024-01-02"]
    assert df.loc[0, "price_source"] == "historical"
    assert pd.isna(df.loc[1, "price"])
    assert set(df["data_source"]) == {"partial"}
