"""
Module: tour

Purpose:
    Provides the Tour and Show dataclasses - the top of the tour aggregate.
    A Tour owns shows, crew, travel and itinerary entries; a Show carries
    venue details and the optional show-day timings.

Key Classes:
    - Tour: Tour header (artist, name, dates, poster)
    - Show: One concert date with venue and timings

Dependencies:
    - dataclasses (std)
    - core.utils.serialization: Timestamp parsing

Used By:
    - core.models.aggregate.TourAggregate
    - export.layout.composer: Headers and show day sheets
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..utils.serialization import (
    format_timestamp,
    parse_optional_timestamp,
    parse_timestamp,
)


@dataclass(frozen=True)
class Tour:
    """
    Tour header (immutable).

    Attributes:
        id: Document identifier
        owner_id: Owning user identifier
        tour_name: Display name like "World Tour 2025"
        artist: Headlining artist
        start_date: First day of the tour
        end_date: Last day of the tour
        poster_url: Optional remote poster image URL
    """

    id: str
    owner_id: str
    tour_name: str
    artist: str
    start_date: datetime
    end_date: datetime
    poster_url: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "ownerId": self.owner_id,
            "tourName": self.tour_name,
            "artist": self.artist,
            "startDate": format_timestamp(self.start_date),
            "endDate": format_timestamp(self.end_date),
            "posterURL": self.poster_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tour":
        return cls(
            id=str(data["id"]),
            owner_id=str(data.get("ownerId", "")),
            tour_name=data["tourName"],
            artist=data["artist"],
            start_date=parse_timestamp(data["startDate"]),
            end_date=parse_timestamp(data["endDate"]),
            poster_url=data.get("posterURL") or None,
        )


# Timing fields in display order, with their document keys
SHOW_TIMING_FIELDS: tuple[tuple[str, str], ...] = (
    ("venue_access", "venueAccess"),
    ("load_in", "loadIn"),
    ("sound_check", "soundCheck"),
    ("doors_open", "doorsOpen"),
    ("headliner_set_time", "headlinerSetTime"),
    ("pack_out", "packOut"),
)


@dataclass(frozen=True)
class Show:
    """
    A single show on the tour (immutable).

    All timing fields are optional; an unset timing renders as "TBC".

    Attributes:
        id: Document identifier
        tour_id: Owning tour
        date: Show date (the timestamp's calendar day is the show day)
        city: City name
        venue_name: Venue name
        venue_address: Street address
        country: Optional country
        timezone: Optional IANA timezone of the venue
        contact_name/contact_email/contact_phone: Venue contact
        venue_access ... pack_out: Optional show-day timings
        headliner_set_duration_minutes: Optional set length
    """

    id: str
    tour_id: str
    date: datetime
    city: str
    venue_name: str
    venue_address: str = ""
    country: Optional[str] = None
    timezone: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    venue_access: Optional[datetime] = None
    load_in: Optional[datetime] = None
    sound_check: Optional[datetime] = None
    doors_open: Optional[datetime] = None
    headliner_set_time: Optional[datetime] = None
    pack_out: Optional[datetime] = None
    headliner_set_duration_minutes: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "tourId": self.tour_id,
            "date": format_timestamp(self.date),
            "city": self.city,
            "venueName": self.venue_name,
            "venueAddress": self.venue_address,
            "country": self.country,
            "timezone": self.timezone,
            "contactName": self.contact_name,
            "contactEmail": self.contact_email,
            "contactPhone": self.contact_phone,
            "headlinerSetDurationMinutes": self.headliner_set_duration_minutes,
        }
        for attr, key in SHOW_TIMING_FIELDS:
            data[key] = format_timestamp(getattr(self, attr))
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Show":
        timings = {
            attr: parse_optional_timestamp(data.get(key))
            for attr, key in SHOW_TIMING_FIELDS
        }
        duration = data.get("headlinerSetDurationMinutes")
        return cls(
            id=str(data["id"]),
            tour_id=str(data.get("tourId", "")),
            date=parse_timestamp(data["date"]),
            city=data["city"],
            venue_name=data["venueName"],
            venue_address=data.get("venueAddress") or "",
            country=data.get("country"),
            timezone=data.get("timezone"),
            contact_name=data.get("contactName"),
            contact_email=data.get("contactEmail"),
            contact_phone=data.get("contactPhone"),
            headliner_set_duration_minutes=int(duration) if duration is not None else None,
            **timings,
        )
