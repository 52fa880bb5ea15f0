# market_sentiment/adapters/finnhub_quote_provider.py
from market_sentiment.adapters.finnhub_client import FinnhubClient
from market_sentiment.domain.errors import UpstreamUnavailable
from market_sentiment.entities.stock_quote import StockQuote
from market_sentiment.interfaces.quote_provider import QuoteProvider


class FinnhubQuoteProvider(QuoteProvider):
    def __init__(self, client: FinnhubClient) -> None:
        self.client = client

    def get_quote(self, symbol: str) -> StockQuote:
        data = self.client.get("quote", {"symbol": symbol})
        try:
            # Finnhub answers unknown symbols with an all-zero quote
            if not data or not float(data["c"]):
                raise UpstreamUnavailable(f"No quote available for {symbol}", provider="finnhub")
            return StockQuote(
                current=float(data["c"]),
                high=float(data["h"]),
                low=float(data["l"]),
                open=float(data["o"]),
                previous_close=float(data["pc"]),
                timestamp=int(data.get("t") or 0),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamUnavailable(f"Malformed quote for {symbol}: {e}", provider="finnhub") from e
