"""
Module: travel

Purpose:
    Flight and hotel bookings for a tour.

Key Classes:
    - Passenger: Crew reference plus baggage allowance
    - Flight: Single flight leg with passengers
    - HotelGuest / HotelRoom: Room assignments
    - Hotel: Hotel booking with check-in/out and rooms

Dependencies:
    - core.utils.serialization: Timestamp parsing

Used By:
    - export.layout.composer: Travel and daily itinerary sheets
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..utils.serialization import format_timestamp, parse_timestamp


@dataclass(frozen=True)
class Passenger:
    """A crew member booked on a flight."""

    crew_id: str
    baggage: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"crewId": self.crew_id, "baggage": self.baggage}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Passenger":
        return cls(crew_id=str(data["crewId"]), baggage=data.get("baggage") or None)


@dataclass(frozen=True)
class Flight:
    """
    Flight leg (immutable).

    Times are stored in UTC; the composer converts them to each
    airport's local time for display.

    Attributes:
        id: Document identifier
        tour_id: Owning tour
        origin: Origin IATA code, e.g. "JFK"
        destination: Destination IATA code, e.g. "LHR"
        departure_time: Departure (UTC)
        arrival_time: Arrival (UTC)
        airline: Optional airline name
        flight_number: Optional flight number like "BA178"
        passengers: Booked passengers
        notes: Optional free text
    """

    id: str
    tour_id: str
    origin: str
    destination: str
    departure_time: datetime
    arrival_time: datetime
    airline: Optional[str] = None
    flight_number: Optional[str] = None
    passengers: tuple[Passenger, ...] = ()
    notes: Optional[str] = None

    @property
    def airline_code(self) -> str:
        """Leading letters of the flight number ("BA178" -> "BA")."""
        if not self.flight_number:
            return ""
        code = []
        for ch in self.flight_number:
            if not ch.isalpha():
                break
            code.append(ch)
        return "".join(code)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "tourId": self.tour_id,
            "origin": self.origin,
            "destination": self.destination,
            "departureTimeUTC": format_timestamp(self.departure_time),
            "arrivalTimeUTC": format_timestamp(self.arrival_time),
            "airline": self.airline,
            "flightNumber": self.flight_number,
            "passengers": [p.to_dict() for p in self.passengers],
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Flight":
        return cls(
            id=str(data["id"]),
            tour_id=str(data.get("tourId", "")),
            origin=data["origin"],
            destination=data["destination"],
            departure_time=parse_timestamp(data["departureTimeUTC"]),
            arrival_time=parse_timestamp(data["arrivalTimeUTC"]),
            airline=data.get("airline") or None,
            flight_number=data.get("flightNumber") or None,
            passengers=tuple(Passenger.from_dict(p) for p in data.get("passengers") or ()),
            notes=data.get("notes") or None,
        )


@dataclass(frozen=True)
class HotelGuest:
    """Guest staying in a hotel room (name is denormalized for display)."""

    crew_id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"crewId": self.crew_id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HotelGuest":
        return cls(crew_id=str(data["crewId"]), name=data.get("name", ""))


@dataclass(frozen=True)
class HotelRoom:
    """Single room in a hotel booking."""

    room_number: Optional[str] = None
    guests: tuple[HotelGuest, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "roomNumber": self.room_number,
            "guests": [g.to_dict() for g in self.guests],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HotelRoom":
        return cls(
            room_number=data.get("roomNumber") or None,
            guests=tuple(HotelGuest.from_dict(g) for g in data.get("guests") or ()),
        )


@dataclass(frozen=True)
class Hotel:
    """
    Hotel booking (immutable).

    Attributes:
        id: Document identifier
        tour_id: Owning tour
        name: Hotel name
        address: Street address
        city: City
        country: Country
        check_in: Check-in time (UTC)
        check_out: Check-out time (UTC)
        timezone: Optional IANA timezone of the hotel
        booking_reference: Optional booking reference
        rooms: Room assignments
    """

    id: str
    tour_id: str
    name: str
    address: str
    city: str
    country: str
    check_in: datetime
    check_out: datetime
    timezone: Optional[str] = None
    booking_reference: Optional[str] = None
    rooms: tuple[HotelRoom, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "tourId": self.tour_id,
            "name": self.name,
            "address": self.address,
            "city": self.city,
            "country": self.country,
            "checkInDate": format_timestamp(self.check_in),
            "checkOutDate": format_timestamp(self.check_out),
            "timezone": self.timezone,
            "bookingReference": self.booking_reference,
            "rooms": [r.to_dict() for r in self.rooms],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Hotel":
        return cls(
            id=str(data["id"]),
            tour_id=str(data.get("tourId", "")),
            name=data["name"],
            address=data.get("address", ""),
            city=data.get("city", ""),
            country=data.get("country", ""),
            check_in=parse_timestamp(data["checkInDate"]),
            check_out=parse_timestamp(data["checkOutDate"]),
            timezone=data.get("timezone") or None,
            booking_reference=data.get("bookingReference") or None,
            rooms=tuple(HotelRoom.from_dict(r) for r in data.get("rooms") or ()),
        )
