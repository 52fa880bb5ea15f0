# market_sentiment/main_search.py
from __future__ import annotations

import argparse
import logging

from market_sentiment.adapters.finnhub_client import FinnhubClient
from market_sentiment.adapters.finnhub_symbol_search import FinnhubSymbolSearch
from market_sentiment.entities.company_search_result import CompanySearchResult
from market_sentiment.use_cases.search_companies_use_case import SearchCompaniesUseCase
from market_sentiment.utils.logging_config import setup_logging
from market_sentiment.utils.settings import load_settings

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search listed companies by name or ticker")
    parser.add_argument("query", help="Company name or ticker fragment")
    return parser.parse_args()


def main() -> None:
    setup_logging()
    args = parse_args()
    settings = load_settings()

    suggestions = [
        CompanySearchResult(
            symbol=str(s["symbol"]),
            display_symbol=str(s["symbol"]),
            description=str(s.get("description", "")),
            type=settings.search_security_type,
        )
        for s in settings.industry_peers.get("search_suggestions", [])
    ]
    use_case = SearchCompaniesUseCase(
        FinnhubSymbolSearch(
            FinnhubClient(
                api_key=settings.finnhub_api_key,
                timeout_seconds=settings.request_timeout_seconds,
            )
        ),
        suggestions=suggestions,
        limit=settings.search_limit,
        security_type=settings.search_security_type,
    )

    outcome = use_case.execute(args.query)
    if outcome.fallback:
        print("Search unavailable, suggestions:")
    for r in outcome.results:
        print(f"{r.symbol:<8} {r.description}")


if __name__ == "__main__":
    main()
