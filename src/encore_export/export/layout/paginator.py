"""
Module: export.layout.paginator

Purpose:
    Slice a tall rendered canvas into fixed-size page bitmaps.

Key Functions:
    - compute_page_count(): Pages needed for a canvas height
    - page_boundary(): Canvas row where a page starts
    - slice_bounds(): Row range of every page
    - paginate(): Main pagination function

Algorithm:
    With P = page height in points * scale (may be fractional):
    1. page_count = max(1, ceil(H / P))
    2. Page i covers rows [floor(i*P), min(H, floor((i+1)*P)))
    3. Each slice is pasted at the top-left of a blank W x ceil(P) page;
       a short last slice leaves the rest of the page blank

    Boundaries are floored so consecutive slices share no row and skip
    none, for integer and fractional P alike.

Dependencies:
    - PIL: Image cropping
    - export.layout.models: RenderedDocument, Page

Used By:
    - export.controller: Preview and export
    - export.layout.typesetter: page_boundary() for page-aligned sections
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple

from PIL import Image, ImageOps

from .config import LayoutConfig
from .models import ORIGIN_BOTTOM, Page, PaginationResult, RenderedDocument

logger = logging.getLogger(__name__)

PAGE_FILL = "white"


def compute_page_count(height: float, page_height: float) -> int:
    """
    Number of pages for a canvas height.

    Args:
        height: Canvas height H in pixels
        page_height: Scaled page height P in pixels

    Returns:
        max(1, ceil(H / P))

    Raises:
        ValueError: If P <= 0 or H < 0

    Example:
        >>> compute_page_count(0, 842)
        1
        >>> compute_page_count(3 * 842 + 1, 842)
        4
    """
    if page_height <= 0:
        raise ValueError(f"page_height must be positive: {page_height}")
    if height < 0:
        raise ValueError(f"height must be non-negative: {height}")
    return max(1, math.ceil(height / page_height))


def page_boundary(index: int, page_height: float) -> int:
    """Canvas row where page `index` starts."""
    return math.floor(index * page_height)


def slice_bounds(height: int, page_height: float) -> List[Tuple[int, int]]:
    """
    Row ranges (top inclusive, bottom exclusive) for every page.

    The ranges are contiguous, never overlap, and the last one ends at
    `height`. For H == 0 the single range is empty.

    Example:
        >>> slice_bounds(2000, 842)
        [(0, 842), (842, 1684), (1684, 2000)]
    """
    count = compute_page_count(height, page_height)
    bounds = []
    for i in range(count):
        top = min(height, page_boundary(i, page_height))
        bottom = min(height, page_boundary(i + 1, page_height))
        bounds.append((top, bottom))
    return bounds


def paginate(
    document: RenderedDocument,
    config: Optional[LayoutConfig] = None,
) -> PaginationResult:
    """
    Slice a rendered document into pages.

    A page that fails to slice is logged and skipped; the others are
    still produced.

    Args:
        document: Rendered canvas (any scale)
        config: Layout configuration; only page_height is used, the pixel
            scale comes from the document

    Returns:
        PaginationResult with pages in reading order
    """
    config = config or LayoutConfig()
    page_height = config.page_height * document.scale
    page_width = document.width
    page_height_px = math.ceil(page_height)

    source = document.image
    if document.origin == ORIGIN_BOTTOM:
        # Row 0 must be the document top before slicing
        source = ImageOps.flip(source)

    bounds = slice_bounds(document.height, page_height)
    pages: List[Page] = []
    warnings: List[str] = []
    skipped: List[int] = []

    for index, (top, bottom) in enumerate(bounds):
        try:
            image = _slice_page(source, top, bottom, page_width, page_height_px)
        except Exception as e:
            message = f"Skipped page {index + 1}: {e}"
            logger.warning(message)
            warnings.append(message)
            skipped.append(index)
            continue
        pages.append(Page(index=index, top=top, bottom=bottom, image=image))

    logger.info(
        f"Paginated {document.width}x{document.height}px canvas onto "
        f"{len(pages)} of {len(bounds)} pages"
    )
    return PaginationResult(
        pages=tuple(pages),
        page_count=len(bounds),
        warnings=warnings,
        skipped=tuple(skipped),
    )


def _slice_page(
    source: Image.Image,
    top: int,
    bottom: int,
    width: int,
    height: int,
) -> Image.Image:
    """Copy canvas rows [top, bottom) onto the top of a blank page."""
    page = Image.new("RGB", (width, height), PAGE_FILL)
    if bottom > top:
        region = source.crop((0, top, source.width, bottom))
        page.paste(region, (0, 0))
    return page
