# market_sentiment/adapters/yfinance_price_history_provider.py

from __future__ import annotations

import logging
import time
from datetime import date, timedelta

import pandas as pd
import yfinance as yf

from market_sentiment.domain.errors import UpstreamUnavailable
from market_sentiment.entities.price_point import PricePoint
from market_sentiment.interfaces.price_history_provider import PriceHistoryProvider

logger = logging.getLogger(__name__)


class YFinancePriceHistoryProvider(PriceHistoryProvider):
    """
    Adapter that reads daily closes via yfinance.

    Date contract:
    - start/end are calendar days, end inclusive
    - PricePoint.day is the exchange trading day of the bar
    """

    def __init__(self, max_retries: int = 1, retry_delay: float = 1.0, timeout_seconds: float = 10.0) -> None:
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout_seconds = timeout_seconds

    def get_daily_closes(self, symbol: str, start: date, end: date) -> list[PricePoint]:
        if start > end:
            raise ValueError("start must be <= end")

        last_error: Exception | None = None

        for attempt in range(self.max_retries + 1):
            try:
                df = yf.download(
                    symbol,
                    start=start.strftime("%Y-%m-%d"),
                    # yfinance `end` is exclusive
                    end=(end + timedelta(days=1)).strftime("%Y-%m-%d"),
                    interval="1d",
                    progress=False,
                    timeout=self.timeout_seconds,
                    auto_adjust=False,
                )
                return self._to_points(df)

            except Exception as e:
                last_error = e
                logger.warning(
                    "Price history attempt failed",
                    extra={"symbol": symbol, "attempt": attempt + 1, "error": str(e)},
                )
                if attempt < self.max_retries:
                    time.sleep(self.retry_delay * (2**attempt))

        raise UpstreamUnavailable(
            f"Failed to fetch daily closes for {symbol} after {self.max_retries + 1} attempts: {last_error}",
            provider="yfinance",
        ) from last_error

    @staticmethod
    def _to_points(df: pd.DataFrame | None) -> list[PricePoint]:
        if df is None or df.empty:
            return []

        # MultiIndex columns when yfinance groups by ticker
        if getattr(df.columns, "nlevels", 1) > 1:
            df = df.copy()
            df.columns = df.columns.get_level_values(0)

        if "Close" not in df.columns:
            raise ValueError("Missing 'Close' column in response")

        closes = df["Close"].dropna()
        return [
            PricePoint(day=pd.Timestamp(idx).date(), close=float(value))
            for idx, value in closes.items()
            if float(value) > 0
        ]
