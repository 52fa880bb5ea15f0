# market_sentiment/adapters/yaml_industry_peer_table.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from market_sentiment.entities.company_profile import UNKNOWN_INDUSTRY
from market_sentiment.interfaces.peer_provider import IndustryPeerTable
from market_sentiment.utils.settings import load_yaml


class YamlIndustryPeerTable(IndustryPeerTable):
    """
    Static peer table loaded from config/industry_peers.yaml.

    Keys:
      industries:         industry -> [symbol, ...]
      symbol_industries:  symbol -> industry (synthetic data only)
      default_industry:   industry for unknown symbols
      demo_companies:     industry -> [{symbol, name}, ...]
    """

    def __init__(self, table: Mapping[str, Any]) -> None:
        self._industries = {
            str(k): [str(s).upper() for s in (v or [])]
            for k, v in (table.get("industries") or {}).items()
        }
        self._symbol_industries = {
            str(k).upper(): str(v) for k, v in (table.get("symbol_industries") or {}).items()
        }
        self._default_industry = str(table.get("default_industry") or UNKNOWN_INDUSTRY)
        self._demo = {
            str(k): [(str(c["symbol"]).upper(), str(c.get("name") or c["symbol"])) for c in (v or [])]
            for k, v in (table.get("demo_companies") or {}).items()
        }

    @classmethod
    def from_file(cls, directory: Optional[Path] = None) -> "YamlIndustryPeerTable":
        return cls(load_yaml("industry_peers.yaml", directory))

    def peers_for_industry(self, industry: str) -> list[str]:
        return list(self._industries.get(industry, []))

    def industry_for_symbol(self, symbol: str) -> str:
        return self._symbol_industries.get(symbol.upper(), self._default_industry)

    def demo_companies(self, industry: str) -> list[tuple[str, str]]:
        companies = self._demo.get(industry) or self._demo.get(self._default_industry) or []
        return list(companies)
