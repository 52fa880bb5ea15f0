# market_sentiment/domain/errors.py

from __future__ import annotations


class MarketSentimentError(Exception):
    """Base class for pipeline errors."""


class UpstreamUnavailable(MarketSentimentError):
    """An external call (quote, news, profile, peers, history) failed or timed out."""

    def __init__(self, message: str, *, provider: str | None = None) -> None:
        super().__init__(message)
        self.provider = provider


class ClassificationUnavailable(MarketSentimentError):
    """The sentiment classifier failed or returned a malformed response."""


class PartialData(MarketSentimentError):
    """Some, but not all, sub-results of a unit of work succeeded."""


class InvalidWindow(MarketSentimentError, ValueError):
    """Caller contract violation: start > end or a non-positive day count."""


class RequestSuperseded(MarketSentimentError):
    """A newer analysis request was issued while this one was in flight."""
