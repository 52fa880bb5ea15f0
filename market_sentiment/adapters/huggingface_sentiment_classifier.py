# market_sentiment/adapters/huggingface_sentiment_classifier.py
from __future__ import annotations

from typing import Any, Optional

import requests

from market_sentiment.domain.errors import ClassificationUnavailable
from market_sentiment.interfaces.sentiment_classifier import ClassifierOutput, SentimentClassifier


class HuggingFaceSentimentClassifier(SentimentClassifier):
    """
    Text classification through the Hugging Face Inference API.

    Response shape: [[{"label": "positive", "score": 0.93}, ...]]
    The highest-scoring label is returned. Any failure raises
    ClassificationUnavailable; no default label is invented.
    """

    BASE_URL = "https://api-inference.huggingface.co/models"

    def __init__(
        self,
        api_key: str,
        model_name: str = "cardiffnlp/twitter-roberta-base-sentiment-latest",
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self.BASE_URL}/{self.model_name}"

    def classify(self, text: str) -> ClassifierOutput:
        if not self.api_key:
            raise ClassificationUnavailable("HUGGINGFACE_API_KEY is not configured")

        try:
            response = self._session.post(
                self.url,
                json={"inputs": text},
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            raise ClassificationUnavailable(f"inference request failed: {e}") from e

        if response.status_code != 200:
            raise ClassificationUnavailable(f"inference API returned HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise ClassificationUnavailable("inference API returned invalid JSON") from e

        return self._top_label(payload)

    @staticmethod
    def _top_label(payload: Any) -> ClassifierOutput:
        candidates = payload[0] if isinstance(payload, list) and payload and isinstance(payload[0], list) else payload
        if not isinstance(candidates, list) or not candidates:
            raise ClassificationUnavailable(f"unexpected inference payload: {payload!r:.200}")

        try:
            best = max(candidates, key=lambda c: float(c["score"]))
            return ClassifierOutput(label=str(best["label"]), score=float(best["score"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ClassificationUnavailable(f"malformed inference payload: {e}") from e
