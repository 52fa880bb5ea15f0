# market_sentiment/adapters/finnhub_company_profile_provider.py
from market_sentiment.adapters.finnhub_client import FinnhubClient
from market_sentiment.domain.errors import UpstreamUnavailable
from market_sentiment.entities.company_profile import UNKNOWN_INDUSTRY, CompanyProfile
from market_sentiment.interfaces.company_profile_provider import CompanyProfileProvider


class FinnhubCompanyProfileProvider(CompanyProfileProvider):
    def __init__(self, client: FinnhubClient) -> None:
        self.client = client

    def get_profile(self, symbol: str) -> CompanyProfile:
        data = self.client.get("stock/profile2", {"symbol": symbol})
        if not isinstance(data, dict):
            raise UpstreamUnavailable(f"Unexpected profile payload for {symbol}", provider="finnhub")
        if not data:
            raise UpstreamUnavailable(f"No profile for {symbol}", provider="finnhub")

        return CompanyProfile(
            symbol=symbol,
            name=str(data.get("name") or symbol),
            industry=str(data.get("finnhubIndustry") or data.get("sector") or UNKNOWN_INDUSTRY),
        )
