# market_sentiment/domain/services/sentiment_statistics.py
from __future__ import annotations

from statistics import mean
from typing import Iterable

from market_sentiment.entities.market_analysis import SentimentDistribution, SentimentLevel
from market_sentiment.entities.news_item import NewsItem
from market_sentiment.entities.sentiment_observation import SentimentLabel

STRONG_THRESHOLD = 0.2


def mean_signed_sentiment(items: Iterable[NewsItem]) -> float:
    """Mean signed value over scored items; 0.0 when nothing was scored."""
    values = [item.sentiment.signed_value for item in items if item.sentiment is not None]
    return mean(values) if values else 0.0


def sentiment_distribution(items: Iterable[NewsItem]) -> SentimentDistribution:
    counts = {"positive": 0, "negative": 0, "neutral": 0, "unscored": 0}
    for item in items:
        if item.sentiment is None:
            counts["unscored"] += 1
        elif item.sentiment.label is SentimentLabel.POSITIVE:
            counts["positive"] += 1
        elif item.sentiment.label is SentimentLabel.NEGATIVE:
            counts["negative"] += 1
        else:
            counts["neutral"] += 1
    return SentimentDistribution(**counts)


def sentiment_level(value: float) -> SentimentLevel:
    if value > STRONG_THRESHOLD:
        return SentimentLevel.STRONG_POSITIVE
    if value > 0:
        return SentimentLevel.MILDLY_POSITIVE
    if value < -STRONG_THRESHOLD:
        return SentimentLevel.STRONG_NEGATIVE
    if value < 0:
        return SentimentLevel.MILDLY_NEGATIVE
    return SentimentLevel.NEUTRAL
