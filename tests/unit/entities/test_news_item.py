# tests/unit/entities/test_news_item.py

import pytest

from market_sentiment.entities.news_item import NewsItem, ScoringStatus
from market_sentiment.entities.sentiment_observation import SentimentLabel, SentimentObservation


def _item(**overrides) -> NewsItem:
    data = dict(timestamp=1_704_067_200, headline="Apple beats estimates", source="Reuters", url="https://x")
    data.update(overrides)
    return NewsItem(**data)


def test_new_item_is_pending_without_sentiment():
    item = _item()

    assert item.status is ScoringStatus.PENDING
    assert item.sentiment is None
    assert not item.is_scored


def test_with_sentiment_returns_scored_copy():
    item = _item()
    obs = SentimentObservation(timestamp=item.timestamp, label=SentimentLabel.POSITIVE, score=0.9)

    scored = item.with_sentiment(obs)

    assert scored.is_scored
    assert scored.sentiment == obs
    assert scored.headline == item.headline
    assert item.sentiment is None  # original untouched


def test_as_unscored_keeps_headline_and_reason():
    unscored = _item().as_unscored("classifier down")

    assert unscored.status is ScoringStatus.UNSCORED
    assert unscored.sentiment is None
    assert unscored.scoring_error == "classifier down"
    assert unscored.headline == "Apple beats estimates"


def test_status_and_sentiment_must_agree():
    obs = SentimentObservation(timestamp=0, label=SentimentLabel.NEUTRAL, score=0.5)

    with pytest.raises(ValueError):
        _item(sentiment=obs)  # PENDING with sentiment

    with pytest.raises(ValueError):
        _item(status=ScoringStatus.SCORED)  # SCORED without sentiment


def test_timestamp_must_be_int():
    with pytest.raises(TypeError):
        _item(timestamp="2024-01-01")
