from abc import ABC, abstractmethod

from market_sentiment.entities.company_profile import CompanyProfile


class CompanyProfileProvider(ABC):
    @abstractmethod
    def get_profile(self, symbol: str) -> CompanyProfile:
        """Company name and industry. Raises UpstreamUnavailable on failure."""
        pass
