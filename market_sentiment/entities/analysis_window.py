# market_sentiment/entities/analysis_window.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from market_sentiment.domain.errors import InvalidWindow


@dataclass(frozen=True, slots=True)
class AnalysisWindow:
    """
    Inclusive calendar window [start, end] at day granularity.

    Invariants:
    - start/end are dates (datetime is not allowed)
    - start <= end
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        for name in ("start", "end"):
            value = getattr(self, name)
            if isinstance(value, datetime) or not isinstance(value, date):
                raise InvalidWindow(f"{name} must be a date without time")

        if self.start > self.end:
            raise InvalidWindow(
                f"start must be <= end (got {self.start.isoformat()} > {self.end.isoformat()})"
            )

    @classmethod
    def last_n_days(cls, days: int, today: date) -> "AnalysisWindow":
        if isinstance(days, bool) or not isinstance(days, int):
            raise InvalidWindow("days must be an integer")
        if days < 1:
            raise InvalidWindow(f"days must be positive (got {days})")
        return cls(start=today - timedelta(days=days), end=today)

    @property
    def days_inclusive(self) -> int:
        return (self.end - self.start).days + 1

    def days(self) -> list[date]:
        return [self.start + timedelta(days=i) for i in range(self.days_inclusive)]

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end
