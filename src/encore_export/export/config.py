"""
Module: export.config

Purpose:
    The export configuration value - which preset to render and which
    content blocks to include. Immutable; each export session holds its
    own copy and replaces it on every change.

Key Classes:
    - Preset: Document template selector
    - CoverTheme: Full Tour cover layout
    - ExportConfiguration: Export options value

Dependencies:
    - dataclasses (std)

Used By:
    - export.layout.composer: Preset dispatch and content toggles
    - export.session: Live configuration
    - export.output.naming: Suggested filenames
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any, Optional


class Preset(str, Enum):
    """Document template selector."""

    SHOW = "Show"
    GUEST_LIST = "Guest List"
    TRAVEL = "Travel"
    DATE = "Date"
    FULL_TOUR = "Full Tour"
    TOUR_OVERVIEW = "Tour Overview"

    @property
    def needs_show(self) -> bool:
        """Presets that render a single selected show."""
        return self in (Preset.SHOW, Preset.GUEST_LIST)


class CoverTheme(str, Enum):
    """Cover page layouts for the Full Tour preset."""

    THEME_1 = "Theme 1"  # Dark, poster behind the title
    THEME_2 = "Theme 2"  # Light, poster framed below the title


@dataclass(frozen=True)
class ExportConfiguration:
    """
    Export options (immutable).

    Every field has a default and no combination is invalid; fields that
    do not apply to the chosen preset are ignored.

    Attributes:
        preset: Document template
        include_itinerary: Itinerary entries on daily/travel sheets
        include_flights: Flight cards
        include_hotels: Hotel entries
        include_crew: Crew table on show day sheets
        include_show_details: Show timings block
        include_notes: Notes block on show day sheets
        notes: Free-text notes for the notes block
        include_cover_page: Cover page on Full Tour exports
        cover_theme: Cover layout
        selected_show_id: Show for the Show and Guest List presets
        date_range_start: First day for the Date preset (None = open)
        date_range_end: Last day for the Date preset (None = open)
        timezone: IANA zone used to bucket events into days

    Example:
        >>> config = ExportConfiguration()
        >>> config.with_changes(notes="Bus at 9").notes
        'Bus at 9'
    """

    preset: Preset = Preset.SHOW

    # Content toggles
    include_itinerary: bool = True
    include_flights: bool = True
    include_hotels: bool = True
    include_crew: bool = True
    include_show_details: bool = True
    include_notes: bool = True
    notes: str = ""

    # Cover
    include_cover_page: bool = True
    cover_theme: CoverTheme = CoverTheme.THEME_1

    # Scope
    selected_show_id: Optional[str] = None
    date_range_start: Optional[date] = None
    date_range_end: Optional[date] = None
    timezone: str = "UTC"

    def with_changes(self, **changes: Any) -> "ExportConfiguration":
        """
        Return a copy with fields replaced.

        Raises:
            TypeError: If a field name is unknown
        """
        return replace(self, **changes)

    def includes_day(self, day: date) -> bool:
        """Whether a calendar day falls inside the (inclusive) date range."""
        if self.date_range_start is not None and day < self.date_range_start:
            return False
        if self.date_range_end is not None and day > self.date_range_end:
            return False
        return True
