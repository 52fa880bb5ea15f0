# market_sentiment/domain/time/calendar.py

from __future__ import annotations

import logging
import os
from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

_LOCALTIME = "/etc/localtime"


def local_timezone() -> tzinfo:
    """
    System local timezone as a DST-aware zone, resolved at call time.

    Order: TZ environment variable, /etc/localtime, then the current
    fixed UTC offset where no zone database is available.
    """
    name = os.environ.get("TZ", "").strip().lstrip(":")
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.debug("TZ is not an IANA zone", extra={"tz": name})

    try:
        with open(_LOCALTIME, "rb") as f:
            return ZoneInfo.from_file(f, key="localtime")
    except (OSError, ValueError) as e:
        logger.debug("No zone database for local time; using current offset", extra={"error": str(e)})

    return datetime.now().astimezone().tzinfo or timezone.utc


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """
    Resolve a timezone setting.

    Accepts:
      - None / "" / "local" -> system local timezone
      - "UTC"
      - any IANA name (e.g. "America/New_York")
    """
    if name is None or not name.strip() or name.strip().lower() == "local":
        return local_timezone()
    if name.strip().upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name.strip())


def epoch_to_local_day(timestamp: int, tz: tzinfo) -> date:
    """
    Truncate an epoch timestamp (seconds) to its calendar day in `tz`.

    Day boundaries are 00:00:00-23:59:59 local time.
    """
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).astimezone(tz).date()


def day_start_epoch(day: date, tz: tzinfo) -> int:
    return int(datetime(day.year, day.month, day.day, tzinfo=tz).timestamp())
