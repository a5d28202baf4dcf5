"""
Module: store

Purpose:
    Read-only access to tour aggregates.

Key Classes:
    - TourStore: Abstract store interface
    - InMemoryTourStore: Dict-backed store
    - JsonTourStore: Directory of JSON snapshots
    - StoreError: Store failure
"""

from .base import TourStore, StoreError, sort_tours
from .memory import InMemoryTourStore
from .json_store import JsonTourStore

__all__ = [
    "TourStore",
    "StoreError",
    "sort_tours",
    "InMemoryTourStore",
    "JsonTourStore",
]
