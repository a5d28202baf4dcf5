"""
Module: aggregate

Purpose:
    Provides TourAggregate - the read-only snapshot of everything scoped
    to one tour id. The export pipeline never queries the store itself;
    it receives one of these per tour selection.

Key Classes:
    - TourAggregate: Tour plus shows, crew, travel, itinerary and guests

Dependencies:
    - core.models.*: Entity dataclasses

Used By:
    - store: Produces aggregates
    - export.layout.composer: Consumes aggregates
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .crew import CrewMember
from .guests import GuestListEntry
from .itinerary import ItineraryItem
from .tour import Show, Tour
from .travel import Flight, Hotel

UNKNOWN_CREW_NAME = "Unknown"


@dataclass(frozen=True)
class TourAggregate:
    """
    Snapshot of a tour and its sub-entities (immutable).

    Collections keep their input order; the composer relies on it for
    stable tie-breaking.

    Attributes:
        tour: Tour header
        shows: Shows in stored order
        crew: Touring party
        flights: Flight legs
        hotels: Hotel bookings
        itinerary: Itinerary entries
        guest_lists: Guest entries keyed by show id. A show id that is
            absent has no guest list document at all.

    Example:
        >>> agg = TourAggregate(tour=tour, shows=(show,))
        >>> agg.show_by_id(show.id) is show
        True
    """

    tour: Tour
    shows: tuple[Show, ...] = ()
    crew: tuple[CrewMember, ...] = ()
    flights: tuple[Flight, ...] = ()
    hotels: tuple[Hotel, ...] = ()
    itinerary: tuple[ItineraryItem, ...] = ()
    guest_lists: dict[str, tuple[GuestListEntry, ...]] = field(default_factory=dict)

    @property
    def tour_id(self) -> str:
        return self.tour.id

    def show_by_id(self, show_id: Optional[str]) -> Optional[Show]:
        """Find a show by id, or None when missing."""
        if not show_id:
            return None
        for show in self.shows:
            if show.id == show_id:
                return show
        return None

    def crew_name(self, crew_id: str) -> str:
        """Resolve a crew id to a display name."""
        for member in self.crew:
            if member.id == crew_id:
                return member.name
        return UNKNOWN_CREW_NAME

    def guests_for(self, show_id: str) -> Optional[tuple[GuestListEntry, ...]]:
        """Guest entries for a show (None when the show has no list)."""
        return self.guest_lists.get(show_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tour": self.tour.to_dict(),
            "shows": [s.to_dict() for s in self.shows],
            "crew": [c.to_dict() for c in self.crew],
            "flights": [f.to_dict() for f in self.flights],
            "hotels": [h.to_dict() for h in self.hotels],
            "itinerary": [i.to_dict() for i in self.itinerary],
            "guest_lists": {
                show_id: [g.to_dict() for g in entries]
                for show_id, entries in self.guest_lists.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TourAggregate":
        """
        Build an aggregate from its JSON shape.

        Raises:
            ValueError: If required fields are missing or malformed
        """
        try:
            return cls(
                tour=Tour.from_dict(data["tour"]),
                shows=tuple(Show.from_dict(s) for s in data.get("shows") or ()),
                crew=tuple(CrewMember.from_dict(c) for c in data.get("crew") or ()),
                flights=tuple(Flight.from_dict(f) for f in data.get("flights") or ()),
                hotels=tuple(Hotel.from_dict(h) for h in data.get("hotels") or ()),
                itinerary=tuple(ItineraryItem.from_dict(i) for i in data.get("itinerary") or ()),
                guest_lists={
                    str(show_id): tuple(GuestListEntry.from_dict(g) for g in entries or ())
                    for show_id, entries in (data.get("guest_lists") or {}).items()
                },
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed tour aggregate: {e!r}") from e
