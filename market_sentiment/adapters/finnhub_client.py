# market_sentiment/adapters/finnhub_client.py
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from market_sentiment.domain.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


class FinnhubClient:
    """
    Thin HTTP client shared by the Finnhub adapters.

    - one requests.Session per process (connection pooling)
    - every call carries its own timeout
    - HTTP, network and payload errors surface as UpstreamUnavailable
    """

    BASE_URL = "https://finnhub.io/api/v1"

    def __init__(
        self,
        api_key: str,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
        user_agent: str = "market-sentiment/1.0",
    ) -> None:
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self._session = session or requests.Session()
        self._user_agent = user_agent

    def get(self, path: str, params: Optional[dict] = None) -> Any:
        if not self.api_key:
            raise UpstreamUnavailable("FINNHUB_API_KEY is not configured", provider="finnhub")

        url = f"{self.BASE_URL}/{path.lstrip('/')}"
        query = dict(params or {})
        query["token"] = self.api_key

        try:
            response = self._session.get(
                url,
                params=query,
                headers={"Accept": "application/json", "User-Agent": self._user_agent},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            raise UpstreamUnavailable(f"GET {path} failed: {e}", provider="finnhub") from e

        if response.status_code != 200:
            raise UpstreamUnavailable(
                f"GET {path} returned HTTP {response.status_code}", provider="finnhub"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamUnavailable(f"GET {path} returned invalid JSON", provider="finnhub") from e

        if isinstance(data, dict) and data.get("error"):
            raise UpstreamUnavailable(f"GET {path} error: {data['error']}", provider="finnhub")

        logger.debug("Finnhub request ok", extra={"path": path})
        return data
