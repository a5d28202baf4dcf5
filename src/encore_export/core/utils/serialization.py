"""
Serialization Utilities

Provides to/from JSON utilities for tour aggregate snapshots.

Timestamps arrive from the document store in several shapes:
- ISO-8601 strings ("2025-06-18T16:30:00Z")
- Epoch seconds (int/float)
- Firestore-style maps ({"seconds": ..., "nanoseconds": ...})

All of them are normalized to timezone-aware UTC datetimes. Naive
values are assumed to already be UTC.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from ..models.aggregate import TourAggregate


# ─────────────────────────────────────────────────────────────────────────────
# Timestamps
# ─────────────────────────────────────────────────────────────────────────────

def parse_timestamp(value: Any) -> datetime:
    """
    Parse a stored timestamp into an aware UTC datetime.

    Args:
        value: ISO string, epoch seconds, Firestore map, or datetime

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        ValueError: If value cannot be interpreted as a timestamp

    Example:
        >>> parse_timestamp("2025-06-18T16:30:00Z").hour
        16
        >>> parse_timestamp({"seconds": 0, "nanoseconds": 0}).year
        1970
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, bool):
        raise ValueError(f"Not a timestamp: {value!r}")
    elif isinstance(value, (int, float)):
        dt = datetime.fromtimestamp(value, tz=timezone.utc)
    elif isinstance(value, dict) and "seconds" in value:
        seconds = float(value["seconds"]) + float(value.get("nanoseconds", 0)) / 1e9
        dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        # fromisoformat() only accepts a trailing "Z" from 3.11 onwards
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Not a timestamp: {value!r}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_optional_timestamp(value: Any) -> Optional[datetime]:
    """Parse a timestamp, treating None and empty strings as unset."""
    if value is None or value == "":
        return None
    return parse_timestamp(value)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Format a datetime as an ISO-8601 UTC string (None passes through)."""
    if value is None:
        return None
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


# ─────────────────────────────────────────────────────────────────────────────
# Aggregate Files
# ─────────────────────────────────────────────────────────────────────────────

def load_aggregate(path: Path) -> "TourAggregate":
    """
    Load a tour aggregate snapshot from a JSON file.

    Args:
        path: Path to the aggregate JSON file

    Returns:
        TourAggregate instance

    Raises:
        OSError: If the file cannot be read
        ValueError: If the JSON is malformed or missing required fields
    """
    from ..models.aggregate import TourAggregate

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e
    return TourAggregate.from_dict(data)


def dump_aggregate(aggregate: "TourAggregate", path: Path) -> None:
    """Write a tour aggregate snapshot to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(aggregate.to_dict(), indent=2), encoding="utf-8")
