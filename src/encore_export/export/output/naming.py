"""
Module: export.output.naming

Purpose:
    Suggested filenames for exported documents, derived from the tour,
    the selected show and the preset. Names are not guaranteed unique.

Key Functions:
    - suggested_filename(): Filename for an export
"""

from __future__ import annotations

from typing import Optional

from encore_export.common.path_utils import sanitize_filename
from encore_export.core.models import TourAggregate

from ..config import ExportConfiguration, Preset

PDF_SUFFIX = ".pdf"


def suggested_filename(
    aggregate: Optional[TourAggregate],
    config: ExportConfiguration,
) -> str:
    """
    Suggest a filename for an export.

    Args:
        aggregate: Tour aggregate (None gives a generic name)
        config: Export configuration

    Returns:
        Sanitized filename ending in ".pdf"

    Examples:
        >>> suggested_filename(aggregate, ExportConfiguration(preset=Preset.TRAVEL))
        'The Band - Travel Itinerary.pdf'
    """
    if aggregate is None:
        return "Encore Export.pdf"

    tour = aggregate.tour
    artist = tour.artist
    show = aggregate.show_by_id(config.selected_show_id)
    preset = config.preset

    if preset == Preset.SHOW and show is not None:
        stem = f"{artist} - {show.city} Day Sheet"
    elif preset == Preset.GUEST_LIST and show is not None:
        stem = f"{artist} - {show.city} Guest List"
    elif preset == Preset.TRAVEL:
        stem = f"{artist} - Travel Itinerary"
    elif preset == Preset.FULL_TOUR:
        stem = f"{artist} - {tour.tour_name} Full Tour"
    elif preset == Preset.DATE:
        stem = f"{artist} - {tour.tour_name} {_range_label(config)}"
    elif preset == Preset.TOUR_OVERVIEW:
        stem = f"{artist} - {tour.tour_name} Overview"
    else:
        stem = f"{artist} - {tour.tour_name} Export"

    return sanitize_filename(stem + PDF_SUFFIX)


def _range_label(config: ExportConfiguration) -> str:
    start = config.date_range_start.isoformat() if config.date_range_start else "Start"
    end = config.date_range_end.isoformat() if config.date_range_end else "End"
    return f"{start}–{end}"
