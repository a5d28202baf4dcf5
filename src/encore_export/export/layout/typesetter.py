"""
Module: export.layout.typesetter

Purpose:
    Render a DocumentPlan onto one tall RGB canvas of fixed width.
    This is the layout stage: it decides where every block lands, wraps
    text, and pads page-aligned sections to page boundaries. Slicing into
    pages is left to the paginator.

Key Functions:
    - render_document(): DocumentPlan -> RenderedDocument
    - wrap_text(): Greedy word wrap against a font
    - load_font(): Cached TrueType font lookup

Dependencies:
    - PIL: Drawing, fonts, compositing
    - export.layout.blocks: Block tree
    - export.layout.paginator: page_boundary()

Used By:
    - export.controller: Preview and export
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple, Union

from PIL import Image, ImageDraw, ImageFont, ImageOps

from .blocks import (
    ALIGN_CENTER,
    ALIGN_RIGHT,
    Block,
    Divider,
    DocumentPlan,
    Picture,
    Row,
    Section,
    Spacer,
    Stack,
    Table,
    Text,
)
from .config import LayoutConfig
from .models import BlockRegion, RenderedDocument
from .paginator import page_boundary
from .theme import Colors, FontSizes

logger = logging.getLogger(__name__)

FontType = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

LINE_HEIGHT = 1.3
CELL_PADDING_PT = 4
TRANSPARENT = (0, 0, 0, 0)

_REGULAR_FONTS = (
    "Helvetica.ttc",
    "arial.ttf",
    "Arial.ttf",
    "DejaVuSans.ttf",
    "LiberationSans-Regular.ttf",
)
_BOLD_FONTS = (
    "arialbd.ttf",
    "Arial Bold.ttf",
    "DejaVuSans-Bold.ttf",
    "LiberationSans-Bold.ttf",
)


@lru_cache(maxsize=64)
def load_font(size: int, bold: bool = False) -> FontType:
    """
    Load a font at a pixel size.

    Tries common TrueType fonts (bold variants first when bold), then
    falls back to Pillow's bundled default font. Results are cached per
    size and weight.

    Args:
        size: Font size in pixels
        bold: Prefer a bold face

    Returns:
        Font object
    """
    candidates = _BOLD_FONTS + _REGULAR_FONTS if bold else _REGULAR_FONTS
    for font_name in candidates:
        try:
            return ImageFont.truetype(font_name, size)
        except (IOError, OSError):
            continue

    logger.warning(f"Could not load TrueType font for size {size}, using default")
    return ImageFont.load_default(size)


def wrap_text(text: str, font: FontType, max_width: int) -> List[str]:
    """
    Greedy word wrap.

    Explicit newlines are kept. A word wider than the line is broken
    between characters.

    Args:
        text: Text to wrap
        font: Font used for measuring
        max_width: Line width in pixels

    Returns:
        Lines (at least one, possibly empty)

    Example:
        >>> wrap_text("Load in at the side door", font, 80)
        ['Load in at', 'the side door']
    """
    lines: List[str] = []
    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if font.getlength(candidate) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
            if font.getlength(word) <= max_width:
                current = word
            else:
                pieces = _break_word(word, font, max_width)
                lines.extend(pieces[:-1])
                current = pieces[-1]
        lines.append(current)
    return lines


def _break_word(word: str, font: FontType, max_width: int) -> List[str]:
    pieces: List[str] = []
    current = ""
    for ch in word:
        if current and font.getlength(current + ch) > max_width:
            pieces.append(current)
            current = ch
        else:
            current += ch
    pieces.append(current)
    return pieces


@dataclass
class _Box:
    """Rendered block: RGBA image plus keyed regions relative to its top."""

    image: Image.Image
    regions: List[BlockRegion] = field(default_factory=list)

    @property
    def height(self) -> int:
        return self.image.height


class _Typesetter:
    """Renders blocks at a fixed pixel scale."""

    def __init__(self, scale: float):
        self.scale = scale

    def px(self, points: float) -> int:
        return max(0, round(points * self.scale))

    def render(self, block: Block, width: int) -> _Box:
        if isinstance(block, Text):
            box = self._text(block, width)
        elif isinstance(block, Spacer):
            box = _Box(Image.new("RGBA", (width, self.px(block.height)), TRANSPARENT))
        elif isinstance(block, Divider):
            box = _Box(Image.new("RGBA", (width, max(1, self.px(block.thickness))), block.color))
        elif isinstance(block, Stack):
            box = self._stack(block, width)
        elif isinstance(block, Row):
            box = self._row(block, width)
        elif isinstance(block, Table):
            box = self._table(block, width)
        elif isinstance(block, Picture):
            box = self._picture(block, width)
        else:
            raise TypeError(f"Unknown block type: {type(block).__name__}")

        if block.key:
            box.regions.insert(0, BlockRegion(block.key, 0, box.height))
        return box

    # ── Leaves ─────────────────────────────────────────────────────────────

    def _text(self, block: Text, width: int) -> _Box:
        size = max(1, self.px(block.size))
        font = load_font(size, block.bold)
        lines = wrap_text(block.text, font, width)
        line_height = math.ceil(size * LINE_HEIGHT)

        image = Image.new("RGBA", (width, line_height * len(lines)), TRANSPARENT)
        draw = ImageDraw.Draw(image)
        for i, line in enumerate(lines):
            if not line:
                continue
            line_width = font.getlength(line)
            if block.align == ALIGN_CENTER:
                x = (width - line_width) / 2
            elif block.align == ALIGN_RIGHT:
                x = width - line_width
            else:
                x = 0
            draw.text((round(x), i * line_height), line, font=font, fill=block.color)
        return _Box(image)

    def _picture(self, block: Picture, width: int) -> _Box:
        w = max(1, min(width, self.px(block.width)))
        h = max(1, self.px(block.height))
        image = Image.new("RGBA", (width, h), TRANSPARENT)

        if block.image is not None:
            fitted = ImageOps.fit(block.image.convert("RGBA"), (w, h), Image.Resampling.LANCZOS)
            image.alpha_composite(fitted, (0, 0))
            return _Box(image)

        draw = ImageDraw.Draw(image)
        draw.rectangle((0, 0, w - 1, h - 1), fill=Colors.PLACEHOLDER)
        if block.placeholder_text:
            label = self._text(
                Text(block.placeholder_text, size=FontSizes.SMALL,
                     color=Colors.TEXT_SECONDARY, align=ALIGN_CENTER),
                w,
            )
            top = max(0, (h - label.height) // 2)
            _composite(image, label.image, 0, top)
        return _Box(image)

    # ── Containers ─────────────────────────────────────────────────────────

    def _stack(self, block: Stack, width: int) -> _Box:
        pad = self.px(block.padding)
        gap = self.px(block.spacing)
        inner_width = max(1, width - 2 * pad)

        children = [self.render(child, inner_width) for child in block.blocks]
        content = sum(c.height for c in children) + gap * max(0, len(children) - 1)
        height = max(content + 2 * pad, self.px(block.min_height))

        image = Image.new("RGBA", (width, height), block.background or TRANSPARENT)
        if block.border and height > 0:
            ImageDraw.Draw(image).rectangle(
                (0, 0, width - 1, height - 1),
                outline=block.border,
                width=max(1, self.px(1)),
            )

        regions: List[BlockRegion] = []
        y = pad
        for child in children:
            _composite(image, child.image, pad, y)
            regions.extend(_offset(child.regions, y))
            y += child.height + gap
        return _Box(image, regions)

    def _row(self, block: Row, width: int) -> _Box:
        if not block.blocks:
            return _Box(Image.new("RGBA", (width, 0), TRANSPARENT))

        gap = self.px(block.spacing)
        widths = _split_width(width - gap * (len(block.blocks) - 1), block.weights or (1,) * len(block.blocks))
        children = [self.render(child, w) for child, w in zip(block.blocks, widths)]
        height = max(c.height for c in children)

        image = Image.new("RGBA", (width, height), TRANSPARENT)
        regions: List[BlockRegion] = []
        x = 0
        for child, w in zip(children, widths):
            _composite(image, child.image, x, 0)
            regions.extend(child.regions)
            x += w + gap
        return _Box(image, regions)

    def _table(self, block: Table, width: int) -> _Box:
        pad = self.px(CELL_PADDING_PT)
        widths = _split_width(width, block.weights or (1,) * len(block.columns))
        rule = max(1, self.px(1))

        rendered_rows = [self._table_row(block.columns, widths, pad, block.size, bold=True, background=block.header_background)]
        for cells in block.rows:
            rendered_rows.append(self._table_row(cells, widths, pad, block.size, bold=False, background=None))

        height = sum(r.height for r in rendered_rows) + rule * len(rendered_rows)
        image = Image.new("RGBA", (width, height), TRANSPARENT)
        draw = ImageDraw.Draw(image)
        y = 0
        for row in rendered_rows:
            _composite(image, row, 0, y)
            y += row.height
            draw.rectangle((0, y, width - 1, y + rule - 1), fill=Colors.DIVIDER)
            y += rule
        return _Box(image)

    def _table_row(
        self,
        cells: Sequence[str],
        widths: Sequence[int],
        pad: int,
        size: float,
        *,
        bold: bool,
        background: Optional[str],
    ) -> Image.Image:
        rendered = [
            self._text(Text(cell, size=size, bold=bold), max(1, w - 2 * pad))
            for cell, w in zip(cells, widths)
        ]
        height = max(r.height for r in rendered) + 2 * pad
        image = Image.new("RGBA", (sum(widths), height), background or TRANSPARENT)
        x = 0
        for cell, w in zip(rendered, widths):
            _composite(image, cell.image, x + pad, pad)
            x += w
        return image

    # ── Sections ───────────────────────────────────────────────────────────

    def section(self, section: Section, layout: LayoutConfig) -> _Box:
        width = layout.page_width_px
        margin = 0 if section.full_bleed else self.px(layout.margin)
        content = self._stack(
            Stack(blocks=section.blocks, spacing=layout.block_spacing),
            max(1, width - 2 * margin),
        )
        image = Image.new("RGBA", (width, content.height + 2 * margin), TRANSPARENT)
        _composite(image, content.image, margin, margin)
        return _Box(image, _offset(content.regions, margin))


def render_document(
    plan: DocumentPlan,
    layout: Optional[LayoutConfig] = None,
    *,
    scale: Optional[float] = None,
) -> RenderedDocument:
    """
    Render a composed document onto one tall canvas.

    Page-aligned sections start on the first page boundary at or after
    the end of the previous section, and their background is extended to
    the next boundary after their content.

    Args:
        plan: Composed document
        layout: Layout configuration (defaults to A4 at scale 2)
        scale: Optional pixel scale overriding layout.scale

    Returns:
        RenderedDocument with an RGB canvas of width round(page_width * scale)

    Example:
        >>> doc = render_document(plan, LayoutConfig(scale=1.0))
        >>> doc.width
        595
    """
    layout = layout or LayoutConfig()
    if scale is not None:
        layout = layout.with_scale(scale)

    setter = _Typesetter(layout.scale)
    page_height = layout.scaled_page_height
    width = layout.page_width_px

    placed: List[Tuple[int, int, Section, _Box]] = []
    y = 0
    for section in plan.sections:
        box = setter.section(section, layout)
        if section.page_aligned:
            start = _boundary_index_at_or_after(y, page_height)
            top = page_boundary(start, page_height)
            end = max(start + 1, _boundary_index_at_or_after(top + box.height, page_height))
            bottom = page_boundary(end, page_height)
        else:
            top = y
            bottom = y + box.height
        placed.append((top, bottom, section, box))
        y = bottom

    canvas = Image.new("RGB", (width, y), Colors.PAGE)
    regions: List[BlockRegion] = []
    for top, bottom, section, box in placed:
        if bottom > top:
            canvas.paste(section.background, (0, top, width, bottom))
        if box.height > 0:
            canvas.paste(box.image, (0, top), box.image)
        regions.extend(_offset(box.regions, top))

    logger.debug(
        f"Rendered {len(plan.sections)} sections onto {width}x{y}px canvas "
        f"at scale {layout.scale}"
    )
    return RenderedDocument(image=canvas, scale=layout.scale, regions=tuple(regions))


def _boundary_index_at_or_after(y: int, page_height: float) -> int:
    """Smallest page index whose boundary row is >= y."""
    return math.ceil(y / page_height)


def _split_width(total: int, weights: Sequence[float]) -> List[int]:
    """Split a pixel width by weights without accumulating rounding error."""
    total = max(len(weights), total)
    weight_sum = float(sum(weights)) or 1.0
    edges = [0]
    running = 0.0
    for weight in weights:
        running += weight
        edges.append(round(total * running / weight_sum))
    return [max(1, b - a) for a, b in zip(edges, edges[1:])]


def _composite(target: Image.Image, source: Image.Image, x: int, y: int) -> None:
    if source.width == 0 or source.height == 0:
        return
    target.alpha_composite(source, (x, y))


def _offset(regions: Sequence[BlockRegion], dy: int) -> List[BlockRegion]:
    return [BlockRegion(r.key, r.top + dy, r.bottom + dy) for r in regions]
