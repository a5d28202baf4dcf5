"""
Module: store.base

Purpose:
    Abstract interface to the tour document store.
    The export pipeline only needs two queries: the tours a user owns,
    and the full aggregate for one tour id.

Key Classes:
    - TourStore: Abstract base class for tour access
    - StoreError: Exception for store failures

Used By:
    - export.session: Tour selection
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List

from encore_export.core.models import Tour, TourAggregate


class StoreError(Exception):
    """Tour data could not be read from the store."""
    pass


class TourStore(ABC):
    """
    Abstract interface for reading tour snapshots.

    Implementations return fresh, read-only snapshots on every call.
    """

    @abstractmethod
    def list_tours(self, owner_id: str) -> List[Tour]:
        """
        List tours owned by a user, newest start date first.

        Args:
            owner_id: Owning user identifier

        Raises:
            StoreError: If the store cannot be read
        """

    @abstractmethod
    def fetch_aggregate(self, tour_id: str) -> TourAggregate:
        """
        Fetch everything scoped to one tour.

        Args:
            tour_id: Tour identifier

        Returns:
            TourAggregate snapshot

        Raises:
            StoreError: If the tour is missing or unreadable
        """


def sort_tours(tours: Iterable[Tour]) -> List[Tour]:
    """Order tours by start date, newest first."""
    return sorted(tours, key=lambda t: t.start_date, reverse=True)
