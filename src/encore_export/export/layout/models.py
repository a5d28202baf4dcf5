"""
Module: export.layout.models

Purpose:
    Data models for rendering and pagination.
    Immutable dataclasses for the tall rendered canvas and its page slices.

Key Classes:
    - BlockRegion: Vertical extent of a keyed block on the canvas
    - RenderedDocument: Full-height canvas before pagination
    - Page: One fixed-size page bitmap
    - PaginationResult: Pages plus diagnostics

Dependencies:
    - PIL: Image type
    - dataclasses (std)

Used By:
    - export.layout.typesetter: Creates RenderedDocument
    - export.layout.paginator: Creates Pages
    - export.output.renderer: Consumes Pages
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from PIL import Image

ORIGIN_TOP = "top"
ORIGIN_BOTTOM = "bottom"


@dataclass(frozen=True)
class BlockRegion:
    """
    Rows occupied by a keyed block (canvas pixels, bottom exclusive).

    Example:
        >>> BlockRegion("notes", top=400, bottom=600).height
        200
    """

    key: str
    top: int
    bottom: int

    @property
    def height(self) -> int:
        return self.bottom - self.top


@dataclass(frozen=True)
class RenderedDocument:
    """
    Full-height rendered canvas (immutable by convention).

    Attributes:
        image: RGB canvas of width W and height H pixels
        scale: Pixels per point used to render it
        origin: "top" when row 0 is the document top, "bottom" when the
            canvas is stored bottom-up and must be flipped before slicing
        regions: Regions of keyed blocks (in top-origin coordinates)
    """

    image: Image.Image
    scale: float
    origin: str = ORIGIN_TOP
    regions: Tuple[BlockRegion, ...] = ()

    def __post_init__(self) -> None:
        if self.origin not in (ORIGIN_TOP, ORIGIN_BOTTOM):
            raise ValueError(f"Invalid origin: {self.origin!r}")
        if self.scale <= 0:
            raise ValueError(f"scale must be positive: {self.scale}")

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def region(self, key: str) -> Optional[BlockRegion]:
        """First region recorded for a key."""
        for region in self.regions:
            if region.key == key:
                return region
        return None


@dataclass(frozen=True)
class Page:
    """
    A single output page bitmap.

    Attributes:
        index: Page number (0-indexed)
        top: First canvas row included (inclusive)
        bottom: Last canvas row included (exclusive)
        image: Page bitmap; content at the top, blank below

    Example:
        >>> page.content_height
        1684
    """

    index: int
    top: int
    bottom: int
    image: Image.Image

    @property
    def content_height(self) -> int:
        """Number of canvas rows on this page."""
        return self.bottom - self.top


@dataclass(frozen=True)
class PaginationResult:
    """
    Paginator output with diagnostics.

    Attributes:
        pages: Successfully sliced pages in order
        page_count: Number of pages the document needs
        warnings: Warning messages
        skipped: Indices of pages that failed to slice
    """

    pages: Tuple[Page, ...]
    page_count: int
    warnings: list[str] = field(default_factory=list)
    skipped: Tuple[int, ...] = ()

    @property
    def is_complete(self) -> bool:
        return not self.skipped
