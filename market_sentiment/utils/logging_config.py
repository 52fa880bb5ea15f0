# market_sentiment/utils/logging_config.py
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(thread)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Anything a bare LogRecord already carries is not an `extra` field
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

_NOISY_LOGGERS = ("urllib3", "yfinance", "transformers", "peewee")


class ExtraFormatter(logging.Formatter):
    """Appends `extra={...}` fields to the line as sorted key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = sorted(
            (k, v) for k, v in vars(record).items() if k not in _RESERVED_ATTRS
        )
        if fields:
            line += " | " + " ".join(f"{k}={v}" for k, v in fields)
        return line


def level_from_env(default: int = logging.INFO) -> int:
    name = os.getenv("LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def _file_handler(log_dir: Optional[Path], log_file: str) -> logging.Handler:
    if log_dir is None:
        log_dir = Path(os.getenv("LOG_DIR") or "logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(log_dir / log_file, encoding="utf-8")


def setup_logging(
    level: Optional[int] = None,
    log_dir: Optional[Path] = None,
    log_file: str = "market_sentiment.log",
) -> None:
    """
    Console + file logging, one line per record:
    2026-01-14 09:49:59 | INFO | market_sentiment.use_cases.x | 1403 | message | key=value

    The thread id tells worker-thread records apart.
    """
    root = logging.getLogger()
    level = level_from_env() if level is None else level
    root.setLevel(level)

    # CLI entry points and tests may both call this
    if root.handlers:
        return

    formatter = ExtraFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in (logging.StreamHandler(sys.stdout), _file_handler(log_dir, log_file)):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
