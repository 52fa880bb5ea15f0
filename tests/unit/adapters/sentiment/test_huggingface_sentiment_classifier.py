# tests/unit/adapters/sentiment/test_huggingface_sentiment_classifier.py

from __future__ import annotations

from typing import Any, Optional

import pytest
import requests

from market_sentiment.adapters.huggingface_sentiment_classifier import HuggingFaceSentimentClassifier
from market_sentiment.domain.errors import ClassificationUnavailable


class _FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def json(self) -> Any:
        return self._payload


class _FakeSession:
    def __init__(self, payload: Any = None, status_code: int = 200, error: Optional[Exception] = None) -> None:
        self.payload = payload
        self.status_code = status_code
        self.error = error
        self.last_url: Optional[str] = None
        self.last_json: Optional[dict] = None
        self.last_headers: Optional[dict] = None

    def post(self, url: str, json: dict, headers: dict, timeout: float):
        self.last_url = url
        self.last_json = json
        self.last_headers = headers
        if self.error is not None:
            raise self.error
        return _FakeResponse(self.payload, self.status_code)


def test_returns_highest_scoring_label():
    session = _FakeSession(
        [[{"label": "negative", "score": 0.05}, {"label": "positive", "score": 0.9}, {"label": "neutral", "score": 0.05}]]
    )
    clf = HuggingFaceSentimentClassifier(api_key="hf", session=session)

    out = clf.classify("Shares jump after earnings beat")

    assert (out.label, out.score) == ("positive", 0.9)
    assert session.last_url.endswith("/cardiffnlp/twitter-roberta-base-sentiment-latest")
    assert session.last_json == {"inputs": "Shares jump after earnings beat"}
    assert session.last_headers["Authorization"] == "Bearer hf"


def test_flat_payload_is_accepted():
    clf = HuggingFaceSentimentClassifier(api_key="hf", session=_FakeSession([{"label": "neutral", "score": 0.7}]))

    assert clf.classify("text").label == "neutral"


@pytest.mark.parametrize(
    "session",
    [
        _FakeSession(error=requests.Timeout("slow")),
        _FakeSession({"error": "Model is currently loading"}, status_code=503),
        _FakeSession([]),
        _FakeSession([[{"label": "positive"}]]),
        _FakeSession({"error": "bad"}),
    ],
)
def test_failures_raise_classification_unavailable(session):
    clf = HuggingFaceSentimentClassifier(api_key="hf", session=session)

    with pytest.raises(ClassificationUnavailable):
        clf.classify("text")


def test_missing_api_key():
    session = _FakeSession([[{"label": "positive", "score": 1.0}]])

    with pytest.raises(ClassificationUnavailable):
        HuggingFaceSentimentClassifier(api_key="", session=session).classify("text")
    assert session.last_url is None
