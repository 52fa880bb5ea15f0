# market_sentiment/domain/services/daily_aggregator.py

from __future__ import annotations

import bisect
import logging
from datetime import date, tzinfo
from typing import Iterable, List, Optional, Sequence

from market_sentiment.domain.time.calendar import epoch_to_local_day, local_timezone
from market_sentiment.entities.analysis_window import AnalysisWindow
from market_sentiment.entities.daily_bucket import (
    DailyBucket,
    DailySentimentPoint,
    PriceSource,
)
from market_sentiment.entities.news_item import NewsItem
from market_sentiment.entities.price_point import PricePoint

logger = logging.getLogger(__name__)


class DailyAggregator:
    """
    Domain service that folds scored headlines and prices into a
    gap-filled daily series.

    Rules:
    - one bucket per calendar day of the window, created even when empty
    - headlines are mapped to their local calendar day (tz given at construction)
    - headlines without sentiment or outside the window are dropped
    - avg_sentiment = mean(signed values), 0.0 for empty days

    Price policy, per day:
      1. exact historical close              -> HISTORICAL
      2. latest earlier historical close     -> CARRIED_FORWARD
      3. base price (current quote)          -> QUOTE
    """

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self.tz = tz or local_timezone()

    def bucket(self, window: AnalysisWindow, items: Iterable[NewsItem]) -> List[DailyBucket]:
        buckets: dict[date, DailyBucket] = {day: DailyBucket(day=day) for day in window.days()}

        dropped = 0
        for item in items:
            if item.sentiment is None:
                dropped += 1
                continue

            day = epoch_to_local_day(item.timestamp, self.tz)
            existing = buckets.get(day)
            if existing is None:
                dropped += 1
                continue

            buckets[day] = existing.add(item.sentiment.signed_value)

        if dropped:
            logger.debug(
                "Headlines not bucketed",
                extra={"dropped": dropped, "start": window.start.isoformat(), "end": window.end.isoformat()},
            )

        # dict preserves the enumeration order, which is ascending by day
        return list(buckets.values())

    def aggregate(
        self,
        window: AnalysisWindow,
        items: Iterable[NewsItem],
        price_series: Optional[Sequence[PricePoint]] = None,
        base_price: Optional[float] = None,
    ) -> List[DailySentimentPoint]:
        buckets = self.bucket(window, items)
        history = sorted(price_series or (), key=lambda p: p.day)
        history_days = [p.day for p in history]

        points: list[DailySentimentPoint] = []
        for b in buckets:
            price, source = self._price_for_day(b.day, history, history_days, base_price)
            points.append(
                DailySentimentPoint(
                    day=b.day,
                    avg_sentiment=b.avg_sentiment,
                    volume=b.volume,
                    price=price,
                    price_source=source,
                )
            )

        return points

    @staticmethod
    def _price_for_day(
        day: date,
        history: list[PricePoint],
        history_days: list[date],
        base_price: Optional[float],
    ) -> tuple[Optional[float], Optional[PriceSource]]:
        idx = bisect.bisect_right(history_days, day)
        if idx > 0:
            latest = history[idx - 1]
            if latest.day == day:
                return round(latest.close, 2), PriceSource.HISTORICAL
            return round(latest.close, 2), PriceSource.CARRIED_FORWARD

        if base_price is not None:
            return round(base_price, 2), PriceSource.QUOTE

        return None, None
