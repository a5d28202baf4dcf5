"""
Module: export.output.renderer

Purpose:
    Write page bitmaps into a single PDF using ReportLab.
    Each Page becomes one PDF page with a fixed media box, its bitmap
    drawn over the full page.

Key Functions:
    - write_pdf(): Main writing function

Key Classes:
    - WriteResult: Outcome of a write

Write Strategy:
    1. Render into a NamedTemporaryFile beside the destination
    2. Skip pages whose bitmap cannot be drawn
    3. No pages drawn -> remove temp file, raise ExportWriteError
    4. Replace the destination with the temp file

    The destination is only touched by the final replace, so a failed
    export never leaves a partial file behind.

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - export.layout.models: Page

Used By:
    - export.controller: Pipeline orchestration
"""

from __future__ import annotations

import io
import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..errors import ExportWriteError
from ..layout.config import A4_HEIGHT_PT, A4_WIDTH_PT
from ..layout.models import Page

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteResult:
    """
    Outcome of writing a PDF.

    Attributes:
        path: Destination path
        pages_written: Number of PDF pages written
        skipped: Indices of pages that could not be drawn
    """

    path: Path
    pages_written: int
    skipped: Tuple[int, ...] = ()


def write_pdf(
    pages: Sequence[Page],
    output_path: Path,
    *,
    page_width_pt: float = A4_WIDTH_PT,
    page_height_pt: float = A4_HEIGHT_PT,
    title: Optional[str] = None,
) -> WriteResult:
    """
    Write pages to a PDF file, replacing any existing file.

    Args:
        pages: Page bitmaps in order
        output_path: Destination PDF path
        page_width_pt: Media box width in points
        page_height_pt: Media box height in points
        title: Optional PDF title metadata

    Returns:
        WriteResult with the number of pages written

    Raises:
        ExportWriteError: If the temp file cannot be created, no page
            could be drawn, or the file cannot be written or moved

    Example:
        >>> write_pdf(result.pages, Path("out/Day Sheet.pdf")).pages_written
        1
    """
    output_path = Path(output_path)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="wb",
            prefix=f".{output_path.stem}.",
            suffix=".pdf.tmp",
            dir=output_path.parent,
            delete=False,
        ) as f:
            temp_path = Path(f.name)
    except OSError as e:
        raise ExportWriteError(f"Cannot create temporary file in {output_path.parent}: {e}") from e

    try:
        c = canvas.Canvas(str(temp_path), pagesize=(page_width_pt, page_height_pt))
        if title:
            c.setTitle(title)

        written = 0
        skipped = []
        for page in pages:
            try:
                _draw_page(c, page, page_width_pt, page_height_pt)
            except Exception as e:
                logger.warning(f"Skipping page {page.index + 1}: {e}")
                skipped.append(page.index)
                continue
            c.showPage()
            written += 1

        if written == 0:
            raise ExportWriteError("No pages could be rendered; nothing was written")

        c.save()
        temp_path.replace(output_path)
    except ExportWriteError:
        _discard(temp_path)
        raise
    except OSError as e:
        _discard(temp_path)
        raise ExportWriteError(f"Failed to write {output_path}: {e}") from e
    except Exception as e:
        _discard(temp_path)
        raise ExportWriteError(f"PDF rendering failed for {output_path}: {e}") from e

    logger.info(f"Wrote {written} pages to {output_path}")
    return WriteResult(path=output_path, pages_written=written, skipped=tuple(skipped))


def _draw_page(
    c: canvas.Canvas,
    page: Page,
    page_width_pt: float,
    page_height_pt: float,
) -> None:
    """Draw a page bitmap over the whole media box."""
    img_reader = _pil_to_reader(page.image)
    c.drawImage(img_reader, 0, 0, width=page_width_pt, height=page_height_pt)


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove temporary file {path}: {e}")
