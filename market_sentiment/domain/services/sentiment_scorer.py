# market_sentiment/domain/services/sentiment_scorer.py

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from market_sentiment.domain.errors import ClassificationUnavailable
from market_sentiment.entities.news_item import NewsItem
from market_sentiment.entities.sentiment_observation import (
    SentimentLabel,
    SentimentObservation,
)
from market_sentiment.interfaces.sentiment_classifier import SentimentClassifier

logger = logging.getLogger(__name__)

# Provider label -> domain label. cardiffnlp/roberta uses lowercase names,
# finbert-tone uses capitalized ones, older roberta checkpoints use LABEL_n.
_LABEL_MAP = {
    "positive": SentimentLabel.POSITIVE,
    "pos": SentimentLabel.POSITIVE,
    "label_2": SentimentLabel.POSITIVE,
    "negative": SentimentLabel.NEGATIVE,
    "neg": SentimentLabel.NEGATIVE,
    "label_0": SentimentLabel.NEGATIVE,
    "neutral": SentimentLabel.NEUTRAL,
    "label_1": SentimentLabel.NEUTRAL,
}


class SentimentScorer:
    """
    Domain service wrapping a pluggable classifier.

    Contract:
    - empty / whitespace-only text -> NEUTRAL with score 0.0, classifier not called
    - classifier failure, unknown label or score outside [0, 1]
      -> ClassificationUnavailable
    - no retries here; retry policy belongs to the caller
    """

    def __init__(
        self,
        classifier: SentimentClassifier,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.classifier = classifier
        self._clock = clock

    def score(self, text: str, timestamp: Optional[int] = None) -> SentimentObservation:
        ts = int(self._clock()) if timestamp is None else timestamp

        if not isinstance(text, str) or not text.strip():
            return SentimentObservation(timestamp=ts, label=SentimentLabel.NEUTRAL, score=0.0)

        try:
            output = self.classifier.classify(text)
        except ClassificationUnavailable:
            raise
        except Exception as e:
            raise ClassificationUnavailable(f"classifier call failed: {e}") from e

        label = _LABEL_MAP.get(str(output.label).strip().lower())
        if label is None:
            raise ClassificationUnavailable(f"unrecognized classifier label: {output.label!r}")

        try:
            score = float(output.score)
        except (TypeError, ValueError) as e:
            raise ClassificationUnavailable(f"non-numeric classifier score: {output.score!r}") from e
        if not 0.0 <= score <= 1.0:
            raise ClassificationUnavailable(f"classifier score out of range: {score}")

        return SentimentObservation(timestamp=ts, label=label, score=score)

    def score_item(self, item: NewsItem) -> NewsItem:
        """Attach sentiment to a headline, or mark it UNSCORED when the classifier fails."""
        try:
            observation = self.score(item.headline, timestamp=item.timestamp)
        except ClassificationUnavailable as e:
            logger.warning(
                "Headline left unscored",
                extra={"headline": item.headline[:80], "error": str(e)},
            )
            return item.as_unscored(str(e))
        return item.with_sentiment(observation)
