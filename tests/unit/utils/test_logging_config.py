# tests/unit/utils/test_logging_config.py

import logging

from market_sentiment.utils.logging_config import ExtraFormatter, level_from_env


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("market_sentiment.test", logging.INFO, __file__, 1, "Peers ranked", (), None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_extra_fields_are_appended_sorted():
    formatter = ExtraFormatter(fmt="%(levelname)s | %(message)s")

    line = formatter.format(_record(symbol="AAPL", ranked=2))

    assert line == "INFO | Peers ranked | ranked=2 symbol=AAPL"


def test_plain_record_has_no_suffix():
    formatter = ExtraFormatter(fmt="%(message)s")

    assert formatter.format(_record()) == "Peers ranked"


def test_level_from_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert level_from_env() == logging.DEBUG

    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert level_from_env(logging.WARNING) == logging.WARNING

    monkeypatch.delenv("LOG_LEVEL")
    assert level_from_env() == logging.INFO
