"""
Module: export.layout.config

Purpose:
    Configuration for the typesetter and paginator.
    Defines the logical page size in points, the pixel scale, and the
    content margins.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)

Used By:
    - export.layout.typesetter: Canvas width and block spacing
    - export.layout.paginator: Scaled page height
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace


# A4 at 72 dpi (PDF points)
A4_WIDTH_PT = 595
A4_HEIGHT_PT = 842
DEFAULT_SCALE = 2.0


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    All sizes are in points; the typesetter multiplies them by `scale`
    to get pixels.

    Attributes:
        page_width: Page width in points
        page_height: Page height in points
        scale: Pixels per point
        margin: Left/right/top content margin in points
        block_spacing: Vertical spacing between top-level blocks in points

    Example:
        >>> config = LayoutConfig(scale=2.0)
        >>> config.scaled_page_height
        1684.0
    """

    page_width: float = A4_WIDTH_PT
    page_height: float = A4_HEIGHT_PT
    scale: float = DEFAULT_SCALE
    margin: float = 40
    block_spacing: float = 16

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.page_width <= 0:
            raise ValueError(f"page_width must be positive: {self.page_width}")
        if self.page_height <= 0:
            raise ValueError(f"page_height must be positive: {self.page_height}")
        if self.scale <= 0:
            raise ValueError(f"scale must be positive: {self.scale}")
        if self.margin < 0:
            raise ValueError(f"margin must be non-negative: {self.margin}")
        if self.block_spacing < 0:
            raise ValueError(f"block_spacing must be non-negative: {self.block_spacing}")
        if self.content_width <= 0:
            raise ValueError("Margins exceed page width")

    @property
    def page_width_px(self) -> int:
        """Canvas width in pixels."""
        return round(self.page_width * self.scale)

    @property
    def scaled_page_height(self) -> float:
        """Page height in pixels (may be fractional)."""
        return self.page_height * self.scale

    @property
    def page_height_px(self) -> int:
        """Height of an output page bitmap in pixels."""
        return math.ceil(self.scaled_page_height)

    @property
    def content_width(self) -> float:
        """Width available for content in points (excluding margins)."""
        return self.page_width - 2 * self.margin

    def with_scale(self, scale: float) -> "LayoutConfig":
        """Copy of this config at another pixel scale."""
        return replace(self, scale=scale)
