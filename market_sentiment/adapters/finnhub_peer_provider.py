# market_sentiment/adapters/finnhub_peer_provider.py
from market_sentiment.adapters.finnhub_client import FinnhubClient
from market_sentiment.domain.errors import UpstreamUnavailable
from market_sentiment.interfaces.peer_provider import PeerProvider


class FinnhubPeerProvider(PeerProvider):
    def __init__(self, client: FinnhubClient) -> None:
        self.client = client

    def get_peers(self, symbol: str) -> list[str]:
        data = self.client.get("stock/peers", {"symbol": symbol})
        if not isinstance(data, list):
            raise UpstreamUnavailable(f"Unexpected peers payload for {symbol}", provider="finnhub")
        return [str(s) for s in data if s and str(s) != symbol]
