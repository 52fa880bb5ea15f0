# market_sentiment/adapters/finbert_sentiment_classifier.py
from __future__ import annotations

import threading

from transformers import AutoModelForSequenceClassification, AutoTokenizer, pipeline

from market_sentiment.domain.errors import ClassificationUnavailable
from market_sentiment.interfaces.sentiment_classifier import ClassifierOutput, SentimentClassifier


class FinBERTSentimentClassifier(SentimentClassifier):
    """
    Local FinBERT classifier (transformers pipeline), for offline use or when
    the hosted inference API is rate limited.

    Labels from finbert-tone: Positive / Negative / Neutral.
    """

    def __init__(self, model_name: str = "yiyanghkust/finbert-tone") -> None:
        self.model_name = model_name
        self.tokenizer = AutoTokenizer.from_pretrained(model_name)
        self.model = AutoModelForSequenceClassification.from_pretrained(model_name)
        self.pipeline = pipeline(
            "sentiment-analysis",
            model=self.model,
            tokenizer=self.tokenizer,
        )
        # The pipeline is shared by the scoring threads
        self._lock = threading.Lock()

    def classify(self, text: str) -> ClassifierOutput:
        try:
            with self._lock:
                result = self.pipeline(text, truncation=True)[0]  # {"label": "Positive", "score": 0.95}
        except Exception as e:
            raise ClassificationUnavailable(f"FinBERT inference failed: {e}") from e

        return ClassifierOutput(label=str(result["label"]), score=float(result["score"]))
