# market_sentiment/main_analyze.py
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from market_sentiment.adapters.csv_series_writer import CsvSeriesWriter
from market_sentiment.adapters.finnhub_client import FinnhubClient
from market_sentiment.adapters.finnhub_company_profile_provider import FinnhubCompanyProfileProvider
from market_sentiment.adapters.finnhub_news_fetcher import FinnhubNewsFetcher
from market_sentiment.adapters.finnhub_peer_provider import FinnhubPeerProvider
from market_sentiment.adapters.finnhub_price_history_provider import FinnhubPriceHistoryProvider
from market_sentiment.adapters.finnhub_quote_provider import FinnhubQuoteProvider
from market_sentiment.adapters.huggingface_sentiment_classifier import HuggingFaceSentimentClassifier
from market_sentiment.adapters.yaml_industry_peer_table import YamlIndustryPeerTable
from market_sentiment.domain.services.daily_aggregator import DailyAggregator
from market_sentiment.domain.services.peer_ranker import PeerRanker
from market_sentiment.domain.services.sentiment_scorer import SentimentScorer
from market_sentiment.domain.services.synthetic_market_data import SyntheticMarketDataGenerator
from market_sentiment.domain.time.calendar import resolve_timezone
from market_sentiment.entities.market_analysis import MarketAnalysis
from market_sentiment.interfaces.price_history_provider import PriceHistoryProvider
from market_sentiment.interfaces.sentiment_classifier import SentimentClassifier
from market_sentiment.use_cases.analyze_market_sentiment_use_case import (
    AnalysisRequest,
    AnalyzeMarketSentimentUseCase,
)
from market_sentiment.utils.logging_config import setup_logging
from market_sentiment.utils.settings import Settings, load_settings

logger = logging.getLogger(__name__)


def build_classifier(settings: Settings) -> SentimentClassifier:
    if settings.classifier == "finbert":
        # transformers is an optional extra
        from market_sentiment.adapters.finbert_sentiment_classifier import FinBERTSentimentClassifier

        return FinBERTSentimentClassifier(settings.finbert_model)
    return HuggingFaceSentimentClassifier(
        api_key=settings.huggingface_api_key,
        model_name=settings.huggingface_model,
        timeout_seconds=settings.request_timeout_seconds,
    )


def build_price_history(settings: Settings, client: FinnhubClient) -> PriceHistoryProvider:
    if settings.price_history == "yfinance":
        from market_sentiment.adapters.yfinance_price_history_provider import YFinancePriceHistoryProvider

        return YFinancePriceHistoryProvider(timeout_seconds=settings.request_timeout_seconds)
    return FinnhubPriceHistoryProvider(client)


def build_use_case(settings: Settings) -> AnalyzeMarketSentimentUseCase:
    client = FinnhubClient(
        api_key=settings.finnhub_api_key,
        timeout_seconds=settings.request_timeout_seconds,
    )
    peer_table = YamlIndustryPeerTable(settings.industry_peers)
    scorer = SentimentScorer(build_classifier(settings))
    aggregator = DailyAggregator(resolve_timezone(settings.timezone))

    peer_ranker = PeerRanker(
        profile_provider=FinnhubCompanyProfileProvider(client),
        peer_provider=FinnhubPeerProvider(client),
        news_fetcher=FinnhubNewsFetcher(client, limit=settings.peer_headline_limit),
        scorer=scorer,
        peer_table=peer_table,
        peer_limit=settings.peer_limit,
        headline_limit=settings.peer_headline_limit,
        news_days=settings.peer_news_days,
        timeout_seconds=settings.task_timeout_seconds,
        max_workers=settings.max_workers,
    )

    return AnalyzeMarketSentimentUseCase(
        news_fetcher=FinnhubNewsFetcher(client, limit=settings.news_limit),
        quote_provider=FinnhubQuoteProvider(client),
        scorer=scorer,
        aggregator=aggregator,
        peer_ranker=peer_ranker,
        synthetic=SyntheticMarketDataGenerator(aggregator, peer_table, settings.synthetic_peer_count),
        price_history=build_price_history(settings, client),
        timeout_seconds=settings.task_timeout_seconds,
        max_workers=settings.max_workers,
    )


def render(analysis: MarketAnalysis) -> str:
    q = analysis.quote
    lines = [
        f"{analysis.symbol} [{analysis.source.value}] "
        f"{analysis.window.start.isoformat()} -> {analysis.window.end.isoformat()}",
        f"Price: {q.current:.2f}  Open: {q.open:.2f}  High: {q.high:.2f}  "
        f"Low: {q.low:.2f}  Prev Close: {q.previous_close:.2f}",
        f"Sentiment: {analysis.current_sentiment:+.2f} ({analysis.sentiment_level.value}), "
        f"{analysis.distribution.total} articles "
        f"(+{analysis.distribution.positive} / ={analysis.distribution.neutral} "
        f"/ -{analysis.distribution.negative} / ?{analysis.distribution.unscored})",
        "",
        "date        sentiment  volume    price",
    ]
    for p in analysis.series:
        price = f"{p.price:8.2f}" if p.price is not None else "     n/a"
        lines.append(f"{p.day.isoformat()}  {p.avg_sentiment:+9.3f}  {p.volume:6d}  {price}")

    lines.append("")
    lines.append(f"Peers in {analysis.peers.industry} with better sentiment:")
    if analysis.peers.is_empty:
        lines.append("  (none)")
    for peer in analysis.peers.peers:
        lines.append(f"  {peer.symbol:<6} {peer.display_name:<30} {peer.aggregate_sentiment:+.2f}")

    if analysis.issues:
        lines.append("")
        lines.append("Issues:")
        lines.extend(f"  - {issue}" for issue in analysis.issues)
    return "\n".join(lines)


def parse_args(allowed_days: tuple[int, ...], default_days: int) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Daily news sentiment vs price for a ticker, with same-industry peers ranked by sentiment"
    )
    parser.add_argument("--asset", required=True, help="Ticker symbol (e.g. AAPL)")
    parser.add_argument(
        "--days",
        type=int,
        default=default_days,
        choices=list(allowed_days),
        help="Lookback window in days",
    )
    parser.add_argument("--export", type=Path, default=None, help="Write the daily series to this CSV file")
    return parser.parse_args()


def main() -> None:
    setup_logging()

    settings = load_settings()
    args = parse_args(settings.allowed_days, settings.default_days)

    use_case = build_use_case(settings)
    analysis = use_case.execute(AnalysisRequest(symbol=args.asset, days=args.days))

    print(render(analysis))

    if args.export is not None:
        CsvSeriesWriter().write(analysis, args.export)


if __name__ == "__main__":
    main()
