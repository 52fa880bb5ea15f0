# tests/unit/domain/services/test_sentiment_statistics.py

import pytest

from market_sentiment.domain.services.sentiment_statistics import (
    mean_signed_sentiment,
    sentiment_distribution,
    sentiment_level,
)
from market_sentiment.entities.market_analysis import SentimentDistribution, SentimentLevel
from market_sentiment.entities.news_item import NewsItem
from market_sentiment.entities.sentiment_observation import SentimentLabel, SentimentObservation


def _item(label: SentimentLabel | None, score: float = 0.5) -> NewsItem:
    item = NewsItem(timestamp=0, headline="h", source="s", url="")
    if label is None:
        return item.as_unscored("down")
    return item.with_sentiment(SentimentObservation(timestamp=0, label=label, score=score))


def test_mean_ignores_unscored_items():
    items = [
        _item(SentimentLabel.POSITIVE, 0.8),
        _item(SentimentLabel.NEGATIVE, 0.2),
        _item(None),
    ]

    assert mean_signed_sentiment(items) == pytest.approx(0.3)


def test_mean_of_nothing_is_zero():
    assert mean_signed_sentiment([]) == 0.0
    assert mean_signed_sentiment([_item(None)]) == 0.0


def test_distribution_counts_each_label():
    items = [
        _item(SentimentLabel.POSITIVE),
        _item(SentimentLabel.POSITIVE),
        _item(SentimentLabel.NEUTRAL),
        _item(SentimentLabel.NEGATIVE),
        _item(None),
    ]

    dist = sentiment_distribution(items)

    assert dist == SentimentDistribution(positive=2, negative=1, neutral=1, unscored=1)
    assert dist.total == 5


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.5, SentimentLevel.STRONG_POSITIVE),
        (0.2, SentimentLevel.MILDLY_POSITIVE),
        (0.01, SentimentLevel.MILDLY_POSITIVE),
        (0.0, SentimentLevel.NEUTRAL),
        (-0.2, SentimentLevel.MILDLY_NEGATIVE),
        (-0.21, SentimentLevel.STRONG_NEGATIVE),
    ],
)
def test_sentiment_level_thresholds(value, expected):
    assert sentiment_level(value) is expected
