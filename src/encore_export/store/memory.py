"""
Module: store.memory

Purpose:
    In-memory TourStore for tests and embedding hosts that already hold
    tour snapshots.
"""

from __future__ import annotations

from typing import Iterable, List

from encore_export.core.models import Tour, TourAggregate

from .base import StoreError, TourStore, sort_tours


class InMemoryTourStore(TourStore):
    """
    TourStore backed by a dict of aggregates.

    Example:
        >>> store = InMemoryTourStore([aggregate])
        >>> store.fetch_aggregate(aggregate.tour_id) is aggregate
        True
    """

    def __init__(self, aggregates: Iterable[TourAggregate] = ()):
        self._aggregates: dict[str, TourAggregate] = {}
        for aggregate in aggregates:
            self.put(aggregate)

    def put(self, aggregate: TourAggregate) -> None:
        """Add or replace an aggregate."""
        self._aggregates[aggregate.tour_id] = aggregate

    def list_tours(self, owner_id: str) -> List[Tour]:
        return sort_tours(
            agg.tour for agg in self._aggregates.values()
            if agg.tour.owner_id == owner_id
        )

    def fetch_aggregate(self, tour_id: str) -> TourAggregate:
        try:
            return self._aggregates[tour_id]
        except KeyError:
            raise StoreError(f"Tour not found: {tour_id}") from None
