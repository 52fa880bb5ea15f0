# market_sentiment/entities/news_item.py

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from market_sentiment.entities.sentiment_observation import SentimentObservation


class ScoringStatus(Enum):
    PENDING = "pending"
    SCORED = "scored"
    UNSCORED = "unscored"


@dataclass(frozen=True, slots=True)
class NewsItem:
    """
    A headline for one fetch cycle, optionally carrying its sentiment.

    Invariants:
    - timestamp is integer seconds since epoch
    - status SCORED <=> sentiment is not None
    - status UNSCORED keeps the headline, never a fabricated label
    """

    timestamp: int
    headline: str
    source: str
    url: str
    sentiment: Optional[SentimentObservation] = None
    status: ScoringStatus = ScoringStatus.PENDING
    scoring_error: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.timestamp, bool) or not isinstance(self.timestamp, int):
            raise TypeError("timestamp must be integer seconds since epoch")

        for field_name in ("headline", "source", "url"):
            if not isinstance(getattr(self, field_name), str):
                raise TypeError(f"{field_name} must be a string")

        if self.sentiment is not None and self.status is not ScoringStatus.SCORED:
            raise ValueError("sentiment may only be attached with status SCORED")
        if self.status is ScoringStatus.SCORED and self.sentiment is None:
            raise ValueError("status SCORED requires a sentiment")

    @property
    def is_scored(self) -> bool:
        return self.status is ScoringStatus.SCORED

    def with_sentiment(self, sentiment: SentimentObservation) -> "NewsItem":
        return replace(
            self,
            sentiment=sentiment,
            status=ScoringStatus.SCORED,
            scoring_error=None,
        )

    def as_unscored(self, reason: str) -> "NewsItem":
        return replace(
            self,
            sentiment=None,
            status=ScoringStatus.UNSCORED,
            scoring_error=reason,
        )
