# market_sentiment/entities/sentiment_observation.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SentimentLabel(Enum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"


def signed_sentiment(label: SentimentLabel, score: float) -> float:
    """
    Signed sentiment rule used for every per-item and aggregate value:

        POSITIVE -> +score
        NEGATIVE -> -score
        NEUTRAL  ->  0.0
    """
    if not isinstance(label, SentimentLabel):
        raise ValueError(f"Unrecognized sentiment label: {label!r}")

    if label is SentimentLabel.POSITIVE:
        return float(score)
    if label is SentimentLabel.NEGATIVE:
        return -float(score)
    return 0.0


@dataclass(frozen=True, slots=True)
class SentimentObservation:
    """
    A labeled sentiment reading for a single text.

    Invariants:
    - timestamp is integer seconds since epoch (>= 0)
    - label is a SentimentLabel
    - score ∈ [0.0, 1.0]
    """

    timestamp: int
    label: SentimentLabel
    score: float

    def __post_init__(self) -> None:
        if isinstance(self.timestamp, bool) or not isinstance(self.timestamp, int):
            raise TypeError("timestamp must be integer seconds since epoch")
        if self.timestamp < 0:
            raise ValueError("timestamp must be >= 0")

        if not isinstance(self.label, SentimentLabel):
            raise ValueError(f"Unrecognized sentiment label: {self.label!r}")

        if not isinstance(self.score, (int, float)):
            raise TypeError("score must be numeric")
        if not 0.0 <= float(self.score) <= 1.0:
            raise ValueError("score must be in the range [0.0, 1.0]")

    @property
    def signed_value(self) -> float:
        return signed_sentiment(self.label, self.score)
