"""Timezone helpers.

Resolves IANA names to tzinfo objects and buckets timestamps into
calendar days for the daily export sheets.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone, tzinfo
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=64)
def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Resolve an IANA timezone name.

    "UTC" and empty names map to UTC without touching the tz database.
    Unknown names log a warning and fall back to UTC.

    Args:
        name: IANA name like "Europe/London", or None.

    Returns:
        tzinfo for the zone.

    Examples:
        >>> resolve_timezone(None)
        datetime.timezone.utc
    """
    if not name or name.upper() in ("UTC", "GMT", "Z"):
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(f"Unknown timezone {name!r}, falling back to UTC: {e}")
        return timezone.utc


def local_day(moment: datetime, tz: tzinfo) -> date:
    """Calendar day of a timestamp as seen in a timezone."""
    return moment.astimezone(tz).date()
