"""
Encore Core Package

Shared data models and serialization helpers for the tour aggregate.
Everything downstream (stores, composer, export session) works with
these frozen models rather than raw documents.
"""

from .models import (
    Tour,
    Show,
    CrewMember,
    Flight,
    Hotel,
    ItineraryItem,
    ItineraryItemType,
    GuestListEntry,
    TourAggregate,
)

__all__ = [
    "Tour",
    "Show",
    "CrewMember",
    "Flight",
    "Hotel",
    "ItineraryItem",
    "ItineraryItemType",
    "GuestListEntry",
    "TourAggregate",
]
