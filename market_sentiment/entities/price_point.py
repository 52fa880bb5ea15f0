# market_sentiment/entities/price_point.py
from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True, slots=True)
class PricePoint:
    day: date
    close: float

    def __post_init__(self):
        if isinstance(self.day, datetime) or not isinstance(self.day, date):
            raise TypeError("day must be a datetime.date instance")
        if self.close <= 0:
            raise ValueError("Close price must be positive")
