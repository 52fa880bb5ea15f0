# market_sentiment/adapters/finnhub_symbol_search.py
from market_sentiment.adapters.finnhub_client import FinnhubClient
from market_sentiment.domain.errors import UpstreamUnavailable
from market_sentiment.entities.company_search_result import CompanySearchResult
from market_sentiment.interfaces.symbol_search import SymbolSearch


class FinnhubSymbolSearch(SymbolSearch):
    def __init__(self, client: FinnhubClient) -> None:
        self.client = client

    def search(self, query: str) -> list[CompanySearchResult]:
        data = self.client.get("search", {"q": query})
        results = data.get("result") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise UpstreamUnavailable("Unexpected search payload", provider="finnhub")

        return [
            CompanySearchResult(
                symbol=str(r.get("symbol", "")),
                display_symbol=str(r.get("displaySymbol") or r.get("symbol", "")),
                description=str(r.get("description", "")),
                type=str(r.get("type", "")),
            )
            for r in results
            if isinstance(r, dict) and r.get("symbol")
        ]
