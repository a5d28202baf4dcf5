"""
Core Models Package

Immutable data models for a tour and its sub-entities.

All models in this package are frozen dataclasses with `to_dict()` /
`from_dict()` helpers matching the stored document shape. Timestamps are
always timezone-aware UTC datetimes.
"""

from .tour import Tour, Show, SHOW_TIMING_FIELDS
from .crew import CrewMember
from .travel import Passenger, Flight, HotelGuest, HotelRoom, Hotel
from .itinerary import ItineraryItemType, ItineraryItem
from .guests import GuestListEntry
from .aggregate import TourAggregate, UNKNOWN_CREW_NAME

__all__ = [
    "Tour",
    "Show",
    "SHOW_TIMING_FIELDS",
    "CrewMember",
    "Passenger",
    "Flight",
    "HotelGuest",
    "HotelRoom",
    "Hotel",
    "ItineraryItemType",
    "ItineraryItem",
    "GuestListEntry",
    "TourAggregate",
    "UNKNOWN_CREW_NAME",
]
