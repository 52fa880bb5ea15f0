# market_sentiment/entities/company_search_result.py
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CompanySearchResult:
    symbol: str
    display_symbol: str
    description: str
    type: str
