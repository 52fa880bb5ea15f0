# market_sentiment/entities/daily_bucket.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from statistics import mean
from typing import Optional


class PriceSource(Enum):
    HISTORICAL = "historical"
    CARRIED_FORWARD = "carried_forward"
    QUOTE = "quote"
    SYNTHETIC = "synthetic"


@dataclass(frozen=True, slots=True)
class DailyBucket:
    """
    One calendar day's signed sentiment contributions.

    Invariants:
    - day is a date (no time)
    - volume == len(signed_sentiments)
    """

    day: date
    signed_sentiments: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.day, datetime) or not isinstance(self.day, date):
            raise TypeError("day must be a datetime.date instance")
        object.__setattr__(self, "signed_sentiments", tuple(self.signed_sentiments))

    @property
    def volume(self) -> int:
        return len(self.signed_sentiments)

    @property
    def avg_sentiment(self) -> float:
        if not self.signed_sentiments:
            return 0.0
        return mean(self.signed_sentiments)

    def add(self, signed_value: float) -> "DailyBucket":
        return DailyBucket(day=self.day, signed_sentiments=self.signed_sentiments + (signed_value,))


@dataclass(frozen=True, slots=True)
class DailySentimentPoint:
    """
    A gap-filled point of the daily series: sentiment, volume and price.

    Invariants:
    - avg_sentiment ∈ [-1.0, +1.0]
    - volume >= 0 (0 means no scored news that day and avg_sentiment == 0.0)
    - price is None only when no price source exists for the day
    """

    day: date
    avg_sentiment: float
    volume: int
    price: Optional[float]
    price_source: Optional[PriceSource]

    def __post_init__(self) -> None:
        if isinstance(self.day, datetime) or not isinstance(self.day, date):
            raise TypeError("day must be a datetime.date instance")

        if not -1.0 <= self.avg_sentiment <= 1.0:
            raise ValueError("avg_sentiment must be in the range [-1.0, +1.0]")

        if self.volume < 0:
            raise ValueError("volume cannot be negative")
        if self.volume == 0 and self.avg_sentiment != 0.0:
            raise ValueError("a day without news must have avg_sentiment=0.0")

        if (self.price is None) != (self.price_source is None):
            raise ValueError("price and price_source must be set together")
