# market_sentiment/adapters/finnhub_price_history_provider.py
from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone

from market_sentiment.adapters.finnhub_client import FinnhubClient
from market_sentiment.domain.errors import UpstreamUnavailable
from market_sentiment.entities.price_point import PricePoint
from market_sentiment.interfaces.price_history_provider import PriceHistoryProvider

logger = logging.getLogger(__name__)


class FinnhubPriceHistoryProvider(PriceHistoryProvider):
    """
    Daily closes from Finnhub `/stock/candle` (resolution D).

    Candle timestamps are market-day midnights in UTC; the day is taken in UTC.
    """

    def __init__(self, client: FinnhubClient) -> None:
        self.client = client

    def get_daily_closes(self, symbol: str, start: date, end: date) -> list[PricePoint]:
        if start > end:
            raise ValueError("start must be <= end")

        frm = int(datetime.combine(start, time(0, 0), tzinfo=timezone.utc).timestamp())
        to = int(datetime.combine(end + timedelta(days=1), time(0, 0), tzinfo=timezone.utc).timestamp()) - 1

        data = self.client.get(
            "stock/candle",
            {"symbol": symbol, "resolution": "D", "from": frm, "to": to},
        )
        if not isinstance(data, dict):
            raise UpstreamUnavailable(f"Unexpected candle payload for {symbol}", provider="finnhub")

        # s == "no_data" is a valid empty answer
        if data.get("s") != "ok":
            logger.info("No candles returned", extra={"symbol": symbol, "status": data.get("s")})
            return []

        timestamps = data.get("t") or []
        closes = data.get("c") or []
        if len(timestamps) != len(closes):
            raise UpstreamUnavailable(f"Misaligned candle arrays for {symbol}", provider="finnhub")

        points: list[PricePoint] = []
        for ts, close in zip(timestamps, closes):
            try:
                points.append(
                    PricePoint(
                        day=datetime.fromtimestamp(int(ts), tz=timezone.utc).date(),
                        close=float(close),
                    )
                )
            except (TypeError, ValueError):
                continue

        return points
