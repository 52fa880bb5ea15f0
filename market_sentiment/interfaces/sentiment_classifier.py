from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ClassifierOutput:
    """Raw classifier answer: provider label (e.g. 'positive', 'LABEL_2') and confidence."""

    label: str
    score: float


class SentimentClassifier(ABC):
    @abstractmethod
    def classify(self, text: str) -> ClassifierOutput:
        """Dado um texto, retorna o rótulo de maior confiança e sua confiança."""
        pass
