from abc import ABC, abstractmethod

from market_sentiment.entities.company_search_result import CompanySearchResult


class SymbolSearch(ABC):
    @abstractmethod
    def search(self, query: str) -> list[CompanySearchResult]:
        pass
