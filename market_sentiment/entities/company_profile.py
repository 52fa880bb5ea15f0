# market_sentiment/entities/company_profile.py

from __future__ import annotations

from dataclasses import dataclass

UNKNOWN_INDUSTRY = "Unknown"


@dataclass(frozen=True, slots=True)
class CompanyProfile:
    symbol: str
    name: str
    industry: str = UNKNOWN_INDUSTRY

    def __post_init__(self) -> None:
        if not isinstance(self.symbol, str) or not self.symbol.strip():
            raise ValueError("symbol must be a non-empty string")

        # Providers return empty strings for unknown fields
        if not self.name or not self.name.strip():
            object.__setattr__(self, "name", self.symbol)
        if not self.industry or not self.industry.strip():
            object.__setattr__(self, "industry", UNKNOWN_INDUSTRY)
