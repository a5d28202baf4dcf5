"""Common utilities shared across the package."""

from __future__ import annotations

from .airports import Airport, AirportDirectory
from .timezones import resolve_timezone, local_day
from .path_utils import sanitize_filename

__all__ = [
    # airports
    "Airport",
    "AirportDirectory",
    # timezones
    "resolve_timezone",
    "local_day",
    # paths
    "sanitize_filename",
]
