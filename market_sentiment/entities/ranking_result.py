# market_sentiment/entities/ranking_result.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from market_sentiment.entities.peer_candidate import PeerCandidate


class PeerSource(Enum):
    PROVIDER = "provider"
    STATIC_TABLE = "static_table"
    NONE = "none"
    SYNTHETIC = "synthetic"


@dataclass(frozen=True, slots=True)
class RankingResult:
    """
    Peers whose sentiment beats the baseline, best first.

    Invariants:
    - every peer has aggregate_sentiment > baseline
    - peers sorted by aggregate_sentiment desc, then symbol asc
    - skipped holds candidates without enough data (never ranked)
    """

    subject: str
    industry: str
    baseline: float
    peers: tuple[PeerCandidate, ...] = ()
    skipped: tuple[PeerCandidate, ...] = ()
    peer_source: PeerSource = PeerSource.NONE
    issues: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "peers", tuple(self.peers))
        object.__setattr__(self, "skipped", tuple(self.skipped))
        object.__setattr__(self, "issues", tuple(self.issues))

        for peer in self.peers:
            if not peer.aggregate_sentiment > self.baseline:
                raise ValueError(
                    f"peer {peer.symbol} does not exceed baseline {self.baseline}"
                )

        ordering = [ranking_key(p) for p in self.peers]
        if ordering != sorted(ordering):
            raise ValueError("peers must be sorted by sentiment desc, symbol asc")

    @classmethod
    def empty(cls, subject: str, industry: str, baseline: float, *issues: str) -> "RankingResult":
        return cls(
            subject=subject,
            industry=industry,
            baseline=baseline,
            peer_source=PeerSource.NONE,
            issues=issues,
        )

    @property
    def symbols(self) -> list[str]:
        return [p.symbol for p in self.peers]

    @property
    def is_empty(self) -> bool:
        return not self.peers


def ranking_key(candidate: PeerCandidate) -> tuple[float, str]:
    return (-candidate.aggregate_sentiment, candidate.symbol)
