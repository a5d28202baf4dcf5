"""
Module: export.controller

Purpose:
    Orchestrate the export pipeline.
    Fetch poster → Compose → Typeset → Paginate → Write PDF

Key Functions:
    - generate_preview(): Compose, render and paginate for display
    - export_document(): One-shot export to a PDF file

Key Classes:
    - PreviewResult: Rendered preview pages
    - ExportResult: Complete export result
    - ExportError: Exception for export failures

Dependencies:
    - export.layout: Composition, typesetting, pagination
    - export.output: PDF writing and filenames
    - export.assets: Poster fetching

Used By:
    - export.session: Live preview and export
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Tuple, cast

from PIL import Image

from encore_export.common.airports import AirportDirectory
from encore_export.core.models import TourAggregate

from .assets import PosterProvider
from .config import ExportConfiguration, Preset
from .errors import ExportError, ExportWriteError
from .layout import (
    DocumentPlan,
    LayoutConfig,
    Page,
    RenderedDocument,
    compose_document,
    missing_input_reason,
    paginate,
    render_document,
)
from .output import suggested_filename, write_pdf

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Presets whose documents show the tour poster
_POSTER_PRESETS = frozenset({Preset.SHOW, Preset.FULL_TOUR, Preset.DATE})


@dataclass(frozen=True)
class PreviewResult:
    """
    Preview output (immutable).

    Attributes:
        plan: Composed document
        document: Rendered canvas
        pages: Page bitmaps
        warnings: Pagination warnings
        suggested_name: Filename an export would suggest
    """

    plan: DocumentPlan
    document: RenderedDocument
    pages: Tuple[Page, ...]
    warnings: Tuple[str, ...] = ()
    suggested_name: str = ""

    @property
    def page_count(self) -> int:
        return len(self.pages)


@dataclass(frozen=True)
class ExportResult:
    """
    Complete export result (immutable).

    Attributes:
        pdf_path: Path of the written PDF
        page_count: Pages the document needed
        pages_written: Pages actually written
        skipped_pages: Indices of pages dropped by slicing or drawing
        warnings: Warnings collected along the way
        suggested_name: Suggested filename for this export
        elapsed_s: Wall time of the export
        metadata: Export metadata dictionary

    Example:
        >>> result = export_document(aggregate, config, Path("out"))
        >>> print(f"Wrote {result.pages_written} pages to {result.pdf_path}")
    """

    pdf_path: Path
    page_count: int
    pages_written: int
    skipped_pages: Tuple[int, ...]
    warnings: Tuple[str, ...]
    suggested_name: str
    elapsed_s: float
    metadata: dict


def fetch_poster(
    aggregate: TourAggregate,
    config: ExportConfiguration,
    provider: Optional[PosterProvider],
) -> Optional[Image.Image]:
    """Fetch the tour poster if the preset shows it (None otherwise)."""
    if provider is None or config.preset not in _POSTER_PRESETS:
        return None
    return provider.fetch(aggregate.tour.poster_url)


def generate_preview(
    aggregate: Optional[TourAggregate],
    config: ExportConfiguration,
    *,
    layout: Optional[LayoutConfig] = None,
    scale: Optional[float] = None,
    poster_provider: Optional[PosterProvider] = None,
    airports: Optional[AirportDirectory] = None,
    clock: Optional[Clock] = None,
) -> Optional[PreviewResult]:
    """
    Compose, render and paginate a document for display.

    Args:
        aggregate: Tour aggregate (None when no tour is selected)
        config: Export configuration
        layout: Layout configuration
        scale: Pixel scale override (previews usually render at 1.0)
        poster_provider: Poster source; fetched at most once
        airports: Airport directory for flight local times
        clock: "Now" for the Tour Overview export date

    Returns:
        PreviewResult, or None when the composer has no document
    """
    layout = layout or LayoutConfig()
    if aggregate is None or missing_input_reason(aggregate, config) is not None:
        return None

    poster = fetch_poster(aggregate, config, poster_provider)
    plan = compose_document(
        aggregate, config, poster=poster, airports=airports, layout=layout, clock=clock,
    )
    if plan is None:
        return None

    document = render_document(plan, layout, scale=scale)
    pagination = paginate(document, layout)
    logger.debug(f"Preview ready: {len(pagination.pages)} pages")
    return PreviewResult(
        plan=plan,
        document=document,
        pages=pagination.pages,
        warnings=tuple(pagination.warnings),
        suggested_name=suggested_filename(aggregate, config),
    )


def export_document(
    aggregate: Optional[TourAggregate],
    config: ExportConfiguration,
    destination: Path,
    *,
    layout: Optional[LayoutConfig] = None,
    scale: Optional[float] = None,
    poster_provider: Optional[PosterProvider] = None,
    airports: Optional[AirportDirectory] = None,
    clock: Optional[Clock] = None,
) -> ExportResult:
    """
    Export a document to PDF from start to finish.

    Pipeline:
    1. Check required input
    2. Fetch the poster (once; failure degrades to a placeholder)
    3. Compose the document plan
    4. Render the tall canvas
    5. Slice into pages (failed pages are skipped)
    6. Write the PDF (undrawable pages are skipped)

    Nothing is retried; any failure ends this attempt.

    Args:
        aggregate: Tour aggregate
        config: Export configuration
        destination: PDF path, or a directory to receive the suggested name
        layout: Layout configuration
        scale: Pixel scale override
        poster_provider: Poster source
        airports: Airport directory
        clock: "Now" for metadata and Tour Overview

    Returns:
        ExportResult with path and page counts

    Raises:
        ExportError: Missing input, render failure, or no pages produced
        ExportWriteError: The PDF could not be written

    Example:
        >>> result = export_document(aggregate, config, Path("exports"))
        >>> result.pdf_path.name
        'The Band - Leeds Day Sheet.pdf'
    """
    start_time = time.perf_counter()
    layout = layout or LayoutConfig()
    now = (clock or _utc_now)()

    reason = missing_input_reason(aggregate, config)
    if reason is not None:
        raise ExportError(reason)
    aggregate = cast(TourAggregate, aggregate)

    suggested = suggested_filename(aggregate, config)
    destination = Path(destination)
    output_path = destination / suggested if destination.is_dir() else destination

    logger.info(f"Starting {config.preset.value} export for tour {aggregate.tour.tour_name!r}")

    poster = fetch_poster(aggregate, config, poster_provider)
    plan = compose_document(
        aggregate, config, poster=poster, airports=airports, layout=layout, clock=lambda: now,
    )
    if plan is None:
        raise ExportError("Nothing to export for the current selection")

    try:
        document = render_document(plan, layout, scale=scale)
    except Exception as e:
        raise ExportError(f"Failed to render document: {e}") from e
    logger.info(f"Rendered {len(plan.sections)} sections onto {document.width}x{document.height}px canvas")

    pagination = paginate(document, layout)
    if not pagination.pages:
        raise ExportError("No pages could be produced")

    write = write_pdf(
        pagination.pages,
        output_path,
        page_width_pt=layout.page_width,
        page_height_pt=layout.page_height,
        title=plan.title,
    )

    warnings = list(pagination.warnings)
    warnings.extend(f"Skipped page {i + 1} while writing" for i in write.skipped)
    skipped = tuple(sorted(set(pagination.skipped) | set(write.skipped)))

    elapsed = time.perf_counter() - start_time
    logger.info(f"Export completed in {elapsed:.2f}s: {write.pages_written} pages")

    return ExportResult(
        pdf_path=write.path,
        page_count=pagination.page_count,
        pages_written=write.pages_written,
        skipped_pages=skipped,
        warnings=tuple(warnings),
        suggested_name=suggested,
        elapsed_s=elapsed,
        metadata=_build_metadata(aggregate, config, document, pagination.page_count, now),
    )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _build_metadata(
    aggregate: TourAggregate,
    config: ExportConfiguration,
    document: RenderedDocument,
    page_count: int,
    now: datetime,
) -> dict:
    """Export metadata for logging and host bookkeeping."""
    return {
        "preset": config.preset.value,
        "tour_id": aggregate.tour_id,
        "tour_name": aggregate.tour.tour_name,
        "show_id": config.selected_show_id,
        "page_count": page_count,
        "scale": document.scale,
        "canvas_size": [document.width, document.height],
        "generated_at": now.isoformat(),
    }
