"""
Module: export

Purpose:
    Tour document export: configuration, composition, pagination and
    PDF output, plus a live session with debounced previews.

Key Functions:
    - generate_preview(): Preview pages for a configuration
    - export_document(): One-shot PDF export

Key Classes:
    - ExportConfiguration / Preset / CoverTheme: Export options
    - ExportSettings: Host-level defaults
    - ExportSession: Live preview and export state
    - ExportError / ExportWriteError: Export failures

Dependencies:
    - PIL: Rendering
    - reportlab: PDF generation
"""

from .config import ExportConfiguration, Preset, CoverTheme
from .settings import ExportSettings, load_settings, save_settings
from .errors import ExportError, ExportWriteError
from .controller import (
    PreviewResult,
    ExportResult,
    generate_preview,
    export_document,
)
from .session import ExportSession

__all__ = [
    # Config
    "ExportConfiguration",
    "Preset",
    "CoverTheme",
    "ExportSettings",
    "load_settings",
    "save_settings",
    # Errors
    "ExportError",
    "ExportWriteError",
    # Pipeline
    "PreviewResult",
    "ExportResult",
    "generate_preview",
    "export_document",
    # Session
    "ExportSession",
]
