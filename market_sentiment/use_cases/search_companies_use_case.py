# market_sentiment/use_cases/search_companies_use_case.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from market_sentiment.entities.company_search_result import CompanySearchResult
from market_sentiment.interfaces.symbol_search import SymbolSearch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompanySearchOutcome:
    query: str
    results: tuple[CompanySearchResult, ...]
    fallback: bool = False


class SearchCompaniesUseCase:
    """Symbol lookup restricted to one security type (common stock by default)."""

    def __init__(
        self,
        symbol_search: SymbolSearch,
        suggestions: Sequence[CompanySearchResult] = (),
        limit: int = 10,
        security_type: str = "Common Stock",
    ) -> None:
        self.symbol_search = symbol_search
        self.suggestions = tuple(suggestions)
        self.limit = limit
        self.security_type = security_type

    def execute(self, query: str) -> CompanySearchOutcome:
        q = (query or "").strip()
        if not q:
            return CompanySearchOutcome(query=q, results=())

        try:
            found = self.symbol_search.search(q)
        except Exception as e:
            logger.warning(
                "Symbol search unavailable; returning suggestions",
                extra={"query": q, "error": str(e)},
            )
            return CompanySearchOutcome(query=q, results=self.suggestions, fallback=True)

        results = tuple(r for r in found if r.type == self.security_type)[: self.limit]
        logger.info("Symbol search", extra={"query": q, "found": len(found), "kept": len(results)})
        return CompanySearchOutcome(query=q, results=results)
