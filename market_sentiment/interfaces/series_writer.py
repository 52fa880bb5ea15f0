from abc import ABC, abstractmethod
from pathlib import Path

from market_sentiment.entities.market_analysis import MarketAnalysis


class SeriesWriter(ABC):
    @abstractmethod
    def write(self, analysis: MarketAnalysis, path: Path) -> Path:
        """Persist the daily series of an analysis and return the written path."""
        ...
