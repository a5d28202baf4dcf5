"""
Module: export.output

Purpose:
    PDF output for the export pipeline.
    Writes page bitmaps to PDF with ReportLab and suggests filenames.

Key Functions:
    - write_pdf(): Write pages to a PDF file
    - suggested_filename(): Filename for an export

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
"""

from .renderer import write_pdf, WriteResult
from .naming import suggested_filename

__all__ = [
    "write_pdf",
    "WriteResult",
    "suggested_filename",
]
