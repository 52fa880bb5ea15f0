# market_sentiment/entities/peer_candidate.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PeerStatus(Enum):
    OK = "ok"
    INSUFFICIENT_DATA = "insufficient_data"
    SYNTHETIC = "synthetic"


@dataclass(frozen=True, slots=True)
class PeerCandidate:
    """
    A peer company scored by its recent news sentiment.

    Derived per ranking request, never persisted.

    Invariants:
    - aggregate_sentiment ∈ [-1.0, +1.0]
    - INSUFFICIENT_DATA candidates carry aggregate_sentiment == 0.0
    """

    symbol: str
    display_name: str
    industry: str
    aggregate_sentiment: float
    status: PeerStatus = PeerStatus.OK
    headlines_scored: int = 0
    detail: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.symbol, str) or not self.symbol.strip():
            raise ValueError("symbol must be a non-empty string")

        if not -1.0 <= self.aggregate_sentiment <= 1.0:
            raise ValueError("aggregate_sentiment must be in the range [-1.0, +1.0]")

        if self.status is PeerStatus.INSUFFICIENT_DATA and self.aggregate_sentiment != 0.0:
            raise ValueError("INSUFFICIENT_DATA candidates must have aggregate_sentiment=0.0")

        if self.headlines_scored < 0:
            raise ValueError("headlines_scored cannot be negative")

    @classmethod
    def insufficient_data(
        cls,
        symbol: str,
        *,
        display_name: Optional[str] = None,
        industry: str = "Unknown",
        detail: Optional[str] = None,
    ) -> "PeerCandidate":
        return cls(
            symbol=symbol,
            display_name=display_name or symbol,
            industry=industry,
            aggregate_sentiment=0.0,
            status=PeerStatus.INSUFFICIENT_DATA,
            headlines_scored=0,
            detail=detail,
        )

    @property
    def is_rankable(self) -> bool:
        return self.status is not PeerStatus.INSUFFICIENT_DATA
