from abc import ABC, abstractmethod


class PeerProvider(ABC):
    @abstractmethod
    def get_peers(self, symbol: str) -> list[str]:
        """Peer symbols for `symbol` (may include the symbol itself)."""
        pass


class IndustryPeerTable(ABC):
    """
    Static peer configuration keyed by industry.

    Consulted only when the live peer provider fails, so it can be swapped
    and tested independently of network behavior.
    """

    @abstractmethod
    def peers_for_industry(self, industry: str) -> list[str]:
        ...

    @abstractmethod
    def industry_for_symbol(self, symbol: str) -> str:
        """Best-effort industry guess for a symbol (used for synthetic data)."""
        ...

    @abstractmethod
    def demo_companies(self, industry: str) -> list[tuple[str, str]]:
        """(symbol, display name) pairs used to build synthetic peers."""
        ...
