"""
Module: export.layout

Purpose:
    Document composition, typesetting and pagination.
    Turns a tour aggregate into a block tree, renders it onto one tall
    canvas, and slices the canvas into A4 page bitmaps.

Key Functions:
    - compose_document(): Aggregate + configuration -> DocumentPlan
    - render_document(): DocumentPlan -> RenderedDocument
    - paginate(): RenderedDocument -> Pages

Key Classes:
    - LayoutConfig: Page size, scale and margins
    - DocumentPlan / Section: Composed document
    - RenderedDocument / Page: Canvas and page bitmaps

Dependencies:
    - PIL: Rendering
    - encore_export.core.models: Tour aggregate

Used By:
    - export.controller: Preview and export pipeline
"""

from .config import LayoutConfig
from .blocks import (
    Text,
    Spacer,
    Divider,
    Stack,
    Row,
    Table,
    Picture,
    Section,
    DocumentPlan,
)
from .models import BlockRegion, RenderedDocument, Page, PaginationResult
from .composer import compose_document, missing_input_reason, collect_days
from .typesetter import render_document
from .paginator import compute_page_count, page_boundary, slice_bounds, paginate

__all__ = [
    # Config
    "LayoutConfig",
    # Blocks
    "Text",
    "Spacer",
    "Divider",
    "Stack",
    "Row",
    "Table",
    "Picture",
    "Section",
    "DocumentPlan",
    # Models
    "BlockRegion",
    "RenderedDocument",
    "Page",
    "PaginationResult",
    # Functions
    "compose_document",
    "missing_input_reason",
    "collect_days",
    "render_document",
    "compute_page_count",
    "page_boundary",
    "slice_bounds",
    "paginate",
]
