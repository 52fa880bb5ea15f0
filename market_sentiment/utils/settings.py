# market_sentiment/utils/settings.py

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


def _as_int(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be an integer (got {value!r})") from e


def _as_float(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a number (got {value!r})") from e


def config_dir() -> Path:
    env = os.getenv("MARKET_SENTIMENT_CONFIG_DIR")
    return Path(env) if env else DEFAULT_CONFIG_DIR


def load_yaml(name: str, directory: Optional[Path] = None) -> dict:
    path = (directory or config_dir()) / name
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@dataclass(frozen=True)
class Settings:
    """
    Process-wide configuration, read once at startup.

    Precedence: environment (.env included) > config/settings.yaml.
    """

    finnhub_api_key: str = ""
    huggingface_api_key: str = ""

    default_days: int = 7
    allowed_days: tuple[int, ...] = (1, 7, 14, 30)
    news_limit: int = 50
    timezone: str = "local"

    peer_limit: int = 6
    peer_news_days: int = 7
    peer_headline_limit: int = 8
    synthetic_peer_count: int = 3

    request_timeout_seconds: float = 10.0
    task_timeout_seconds: float = 20.0
    max_workers: int = 16

    classifier: str = "huggingface"
    huggingface_model: str = "cardiffnlp/twitter-roberta-base-sentiment-latest"
    finbert_model: str = "yiyanghkust/finbert-tone"
    price_history: str = "finnhub"

    search_limit: int = 10
    search_security_type: str = "Common Stock"

    industry_peers: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.classifier not in {"huggingface", "finbert"}:
            raise ValueError(f"Unsupported classifier: {self.classifier!r}")
        if self.price_history not in {"finnhub", "yfinance"}:
            raise ValueError(f"Unsupported price history provider: {self.price_history!r}")
        if self.peer_limit < 0 or self.peer_headline_limit < 0 or self.news_limit < 0:
            raise ValueError("limits cannot be negative")
        if self.request_timeout_seconds <= 0 or self.task_timeout_seconds <= 0:
            raise ValueError("timeouts must be positive")
        if not self.allowed_days or any(d < 1 for d in self.allowed_days):
            raise ValueError("allowed_days must contain positive day counts")

    @classmethod
    def from_mapping(
        cls,
        config: Mapping[str, Any],
        env: Mapping[str, str],
        industry_peers: Optional[Mapping[str, Any]] = None,
    ) -> "Settings":
        analysis = config.get("analysis", {}) or {}
        peers = config.get("peers", {}) or {}
        network = config.get("network", {}) or {}
        providers = config.get("providers", {}) or {}
        search = config.get("search", {}) or {}

        return cls(
            finnhub_api_key=env.get("FINNHUB_API_KEY", "").strip(),
            huggingface_api_key=env.get("HUGGINGFACE_API_KEY", "").strip(),
            default_days=_as_int(analysis.get("default_days", 7), "default_days"),
            allowed_days=tuple(
                _as_int(d, "allowed_days") for d in analysis.get("allowed_days", (1, 7, 14, 30))
            ),
            news_limit=_as_int(analysis.get("news_limit", 50), "news_limit"),
            timezone=env.get("TIMEZONE") or str(analysis.get("timezone", "local")),
            peer_limit=_as_int(peers.get("limit", 6), "peers.limit"),
            peer_news_days=_as_int(peers.get("news_days", 7), "peers.news_days"),
            peer_headline_limit=_as_int(peers.get("headline_limit", 8), "peers.headline_limit"),
            synthetic_peer_count=_as_int(peers.get("synthetic_count", 3), "peers.synthetic_count"),
            request_timeout_seconds=_as_float(
                env.get("REQUEST_TIMEOUT_SECONDS") or network.get("request_timeout_seconds", 10),
                "request_timeout_seconds",
            ),
            task_timeout_seconds=_as_float(
                network.get("task_timeout_seconds", 20), "task_timeout_seconds"
            ),
            max_workers=_as_int(network.get("max_workers", 16), "max_workers"),
            classifier=(env.get("SENTIMENT_CLASSIFIER") or providers.get("classifier", "huggingface")).strip().lower(),
            huggingface_model=str(providers.get("huggingface_model", cls.huggingface_model)),
            finbert_model=str(providers.get("finbert_model", cls.finbert_model)),
            price_history=(env.get("PRICE_HISTORY_PROVIDER") or providers.get("price_history", "finnhub")).strip().lower(),
            search_limit=_as_int(search.get("limit", 10), "search.limit"),
            search_security_type=str(search.get("security_type", "Common Stock")),
            industry_peers=dict(industry_peers or {}),
        )


def load_settings(directory: Optional[Path] = None) -> Settings:
    load_dotenv()

    directory = directory or config_dir()
    settings = Settings.from_mapping(
        load_yaml("settings.yaml", directory),
        os.environ,
        industry_peers=load_yaml("industry_peers.yaml", directory),
    )

    logger.info(
        "Settings loaded",
        extra={
            "config_dir": str(directory),
            "classifier": settings.classifier,
            "price_history": settings.price_history,
            "timezone": settings.timezone,
            "finnhub_key_present": bool(settings.finnhub_api_key),
        },
    )
    return settings
