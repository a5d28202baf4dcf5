"""
Module: export.layout.blocks

Purpose:
    Content block tree produced by the composer and consumed by the
    typesetter. Blocks describe WHAT goes on the page in points; they
    carry no pixel positions. The typesetter decides where they land.

Key Classes:
    - Text, Spacer, Divider: Leaf blocks
    - Stack, Row: Vertical and horizontal containers
    - Table: Header row plus body rows
    - Picture: Image, or a placeholder box when the image is missing
    - Section: Top-level chunk of a document, usually one page-aligned sheet
    - DocumentPlan: Ordered sections for one export

Dependencies:
    - PIL: Image type for pictures

Used By:
    - export.layout.composer: Builds block trees
    - export.layout.typesetter: Renders block trees
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple, Union

from PIL import Image

from .theme import Colors, FontSizes

ALIGN_LEFT = "left"
ALIGN_CENTER = "center"
ALIGN_RIGHT = "right"


@dataclass(frozen=True)
class Text:
    """
    Word-wrapped text.

    Attributes:
        text: Content; explicit newlines start new lines
        size: Font size in points
        bold: Use the bold face
        color: Fill colour
        align: "left", "center" or "right"
        key: Optional region key recorded by the typesetter
    """

    text: str
    size: float = FontSizes.BODY
    bold: bool = False
    color: str = Colors.TEXT_PRIMARY
    align: str = ALIGN_LEFT
    key: Optional[str] = None


@dataclass(frozen=True)
class Spacer:
    """Fixed vertical gap in points."""

    height: float
    key: Optional[str] = None


@dataclass(frozen=True)
class Divider:
    """Horizontal rule across the available width."""

    color: str = Colors.DIVIDER
    thickness: float = 1
    key: Optional[str] = None


@dataclass(frozen=True)
class Stack:
    """
    Vertical container.

    Attributes:
        blocks: Children, top to bottom
        spacing: Gap between children in points
        padding: Inner padding on all sides in points
        background: Optional fill colour
        border: Optional border colour
        min_height: Minimum outer height in points
        key: Optional region key
    """

    blocks: Tuple["Block", ...]
    spacing: float = 6
    padding: float = 0
    background: Optional[str] = None
    border: Optional[str] = None
    min_height: float = 0
    key: Optional[str] = None


@dataclass(frozen=True)
class Row:
    """
    Horizontal container; children share the width by weight and the
    row is as tall as its tallest child.
    """

    blocks: Tuple["Block", ...]
    weights: Optional[Tuple[float, ...]] = None
    spacing: float = 8
    key: Optional[str] = None

    def __post_init__(self) -> None:
        if self.weights is not None and len(self.weights) != len(self.blocks):
            raise ValueError(
                f"Row has {len(self.blocks)} blocks but {len(self.weights)} weights"
            )


@dataclass(frozen=True)
class Table:
    """
    Table with a header row that is always drawn, even with no body rows.

    Attributes:
        columns: Header labels
        rows: Body cells; each row must match the column count
        weights: Optional relative column widths
        size: Font size in points
        key: Optional region key
    """

    columns: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...] = ()
    weights: Optional[Tuple[float, ...]] = None
    size: float = FontSizes.BODY
    header_background: str = Colors.TABLE_HEADER
    key: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.columns:
            raise ValueError("Table needs at least one column")
        if self.weights is not None and len(self.weights) != len(self.columns):
            raise ValueError("Table weights must match column count")
        for row in self.rows:
            if len(row) != len(self.columns):
                raise ValueError(
                    f"Table row has {len(row)} cells, expected {len(self.columns)}"
                )


@dataclass(frozen=True)
class Picture:
    """
    Image scaled to fill a fixed box (cropped to keep aspect ratio).

    A missing image renders as a grey placeholder box with optional text.
    """

    image: Optional[Image.Image]
    width: float
    height: float
    placeholder_text: str = ""
    key: Optional[str] = None


Block = Union[Text, Spacer, Divider, Stack, Row, Table, Picture]


@dataclass(frozen=True)
class Section:
    """
    Top-level part of a document.

    Page-aligned sections start on a page boundary and are padded with
    their background colour to the next boundary, so each one fills at
    least one whole page.

    Attributes:
        kind: "show_day", "guest_list", "travel", "cover",
            "daily_itinerary" or "overview"
        blocks: Content, top to bottom
        day: Calendar day for daily sections
        background: Page fill colour
        page_aligned: Start on a fresh page
        full_bleed: Render without page margins (covers)
    """

    kind: str
    blocks: Tuple[Block, ...]
    day: Optional[date] = None
    background: str = Colors.PAGE
    page_aligned: bool = True
    full_bleed: bool = False


@dataclass(frozen=True)
class DocumentPlan:
    """
    Composed document (immutable).

    Attributes:
        title: Document title (PDF metadata)
        preset: Preset value that produced it
        sections: Ordered sections
    """

    title: str
    preset: str
    sections: Tuple[Section, ...] = field(default_factory=tuple)

    @property
    def section_kinds(self) -> Tuple[str, ...]:
        return tuple(s.kind for s in self.sections)
