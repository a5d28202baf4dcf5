"""
Module: store.json_store

Purpose:
    TourStore reading aggregate snapshots from a directory of JSON files,
    one `<tour_id>.json` per tour.

Key Classes:
    - JsonTourStore: Directory-backed store

Dependencies:
    - core.utils.serialization: load_aggregate

Used By:
    - export.session: Offline exports from exported snapshots
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from encore_export.core.models import Tour, TourAggregate
from encore_export.core.utils.serialization import load_aggregate

from .base import StoreError, TourStore, sort_tours

logger = logging.getLogger(__name__)


class JsonTourStore(TourStore):
    """
    TourStore over `<root>/<tour_id>.json` snapshot files.

    Files are re-read on every call so a tour selection always sees the
    current snapshot.

    Args:
        root: Directory containing aggregate JSON files
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def _path_for(self, tour_id: str) -> Path:
        # Tour ids are document ids; refuse anything that would escape root
        if not tour_id or Path(tour_id).name != tour_id:
            raise StoreError(f"Invalid tour id: {tour_id!r}")
        return self.root / f"{tour_id}.json"

    def list_tours(self, owner_id: str) -> List[Tour]:
        if not self.root.is_dir():
            raise StoreError(f"Store directory does not exist: {self.root}")

        tours: List[Tour] = []
        for path in sorted(self.root.glob("*.json")):
            try:
                aggregate = load_aggregate(path)
            except (OSError, ValueError) as e:
                logger.warning(f"Skipping unreadable tour file {path.name}: {e}")
                continue
            if aggregate.tour.owner_id == owner_id:
                tours.append(aggregate.tour)

        logger.debug(f"Found {len(tours)} tours for owner {owner_id}")
        return sort_tours(tours)

    def fetch_aggregate(self, tour_id: str) -> TourAggregate:
        path = self._path_for(tour_id)
        if not path.exists():
            raise StoreError(f"Tour not found: {tour_id}")
        try:
            aggregate = load_aggregate(path)
        except (OSError, ValueError) as e:
            raise StoreError(f"Failed to load tour {tour_id}: {e}") from e

        logger.info(
            f"Loaded tour {aggregate.tour.tour_name!r}: {len(aggregate.shows)} shows, "
            f"{len(aggregate.flights)} flights, {len(aggregate.hotels)} hotels"
        )
        return aggregate
