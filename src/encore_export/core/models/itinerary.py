"""
Module: itinerary

Purpose:
    Provides ItineraryItem and its ItineraryItemType classification.
    Itinerary items are free-form timed entries (meetings, catering,
    ground transport) plus the show-day timings mirrored as items.

Key Classes:
    - ItineraryItemType: Enum of item kinds with display names
    - ItineraryItem: A single timed entry

Dependencies:
    - enum (std)
    - core.utils.serialization: Timestamp parsing

Used By:
    - export.layout.composer: Daily sheets, travel ground transport
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from ..utils.serialization import format_timestamp, parse_timestamp

logger = logging.getLogger(__name__)


class ItineraryItemType(str, Enum):
    """Kind of itinerary entry. Values match the stored raw strings."""

    VENUE_ACCESS = "venueAccess"
    LOAD_IN = "loadIn"
    SOUNDCHECK = "soundcheck"
    DOORS = "doors"
    PACK_OUT = "packOut"
    FLIGHT = "flight"
    ARRIVAL = "arrival"
    HOTEL = "hotel"
    MEETING = "meeting"
    FREE_TIME = "freeTime"
    CATERING = "catering"
    CUSTOM = "custom"
    HEADLINE = "headline"
    TRAVEL = "travel"
    CONTENT = "content"
    MERCH = "merch"
    LOUNGE = "lounge"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def is_show_timing(self) -> bool:
        """True for entries that mirror a show's own timing fields."""
        return self in _SHOW_TIMINGS

    @property
    def is_travel(self) -> bool:
        """True for ground transport entries shown on travel sheets."""
        return self in (ItineraryItemType.TRAVEL, ItineraryItemType.ARRIVAL)

    @classmethod
    def parse(cls, raw: Optional[str]) -> "ItineraryItemType":
        """Parse a stored value, mapping unknown kinds to CUSTOM."""
        try:
            return cls(raw)
        except ValueError:
            logger.debug(f"Unknown itinerary type {raw!r}, using custom")
            return cls.CUSTOM


_DISPLAY_NAMES = {
    ItineraryItemType.VENUE_ACCESS: "Venue Access",
    ItineraryItemType.LOAD_IN: "Load In",
    ItineraryItemType.SOUNDCHECK: "Soundcheck",
    ItineraryItemType.DOORS: "Doors",
    ItineraryItemType.PACK_OUT: "Pack Out",
    ItineraryItemType.FLIGHT: "Flight",
    ItineraryItemType.ARRIVAL: "Arrival",
    ItineraryItemType.HOTEL: "Hotel",
    ItineraryItemType.MEETING: "Meeting",
    ItineraryItemType.FREE_TIME: "Free Time",
    ItineraryItemType.CATERING: "Catering",
    ItineraryItemType.CUSTOM: "Custom",
    ItineraryItemType.HEADLINE: "Headline Set",
    ItineraryItemType.TRAVEL: "Travel",
    ItineraryItemType.CONTENT: "Content",
    ItineraryItemType.MERCH: "Merch",
    ItineraryItemType.LOUNGE: "Lounge",
}

_SHOW_TIMINGS = frozenset({
    ItineraryItemType.VENUE_ACCESS,
    ItineraryItemType.LOAD_IN,
    ItineraryItemType.SOUNDCHECK,
    ItineraryItemType.DOORS,
    ItineraryItemType.HEADLINE,
    ItineraryItemType.PACK_OUT,
})


@dataclass(frozen=True)
class ItineraryItem:
    """
    Timed itinerary entry (immutable).

    Attributes:
        id: Document identifier
        tour_id: Owning tour
        title: Short title like "Bus Call"
        type: ItineraryItemType
        time: Scheduled time (UTC)
        show_id: Optional show this entry belongs to
        subtitle: Optional secondary line
        notes: Optional free text
        timezone: Optional IANA timezone for display
    """

    id: str
    tour_id: str
    title: str
    type: ItineraryItemType
    time: datetime
    show_id: Optional[str] = None
    subtitle: Optional[str] = None
    notes: Optional[str] = None
    timezone: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "tourId": self.tour_id,
            "title": self.title,
            "type": self.type.value,
            "timeUTC": format_timestamp(self.time),
            "showId": self.show_id,
            "subtitle": self.subtitle,
            "notes": self.notes,
            "timezone": self.timezone,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ItineraryItem":
        return cls(
            id=str(data["id"]),
            tour_id=str(data.get("tourId", "")),
            title=data.get("title", ""),
            type=ItineraryItemType.parse(data.get("type")),
            time=parse_timestamp(data["timeUTC"]),
            show_id=data.get("showId") or None,
            subtitle=data.get("subtitle") or None,
            notes=data.get("notes") or None,
            timezone=data.get("timezone") or None,
        )
