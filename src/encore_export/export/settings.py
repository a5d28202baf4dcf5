"""
Application settings for the export pipeline.

Settings are persisted as JSON. Any malformed data results in a graceful
fallback to defaults with a logged warning; loading never raises.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ExportSettings:
    """
    Host-level export defaults (immutable).

    Attributes:
        render_scale: Pixel scale for exported pages (2.0 = 144 dpi)
        preview_scale: Pixel scale for live previews
        debounce_ms: Quiet period before a preview is regenerated
        poster_timeout_s: Poster download timeout
        output_dir: Default export directory
        timezone: Default day-bucketing timezone for new configurations
        log_level: Package log level
    """

    render_scale: float = 2.0
    preview_scale: float = 1.0
    debounce_ms: int = 300
    poster_timeout_s: float = 10.0
    output_dir: Optional[str] = None
    timezone: str = "UTC"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate settings on construction."""
        if self.render_scale <= 0:
            raise ValueError(f"render_scale must be positive: {self.render_scale}")
        if self.preview_scale <= 0:
            raise ValueError(f"preview_scale must be positive: {self.preview_scale}")
        if self.debounce_ms < 0:
            raise ValueError(f"debounce_ms must be non-negative: {self.debounce_ms}")
        if self.poster_timeout_s <= 0:
            raise ValueError(f"poster_timeout_s must be positive: {self.poster_timeout_s}")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")

    @property
    def debounce_s(self) -> float:
        return self.debounce_ms / 1000.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_settings(path: Path) -> ExportSettings:
    """
    Load settings from JSON, falling back to defaults on any problem.

    Unknown keys are ignored. A file with invalid values falls back to
    defaults entirely rather than mixing partial values.

    Args:
        path: Settings file path

    Returns:
        ExportSettings (defaults if the file is missing or malformed)
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No settings file at {path}, using defaults")
        return ExportSettings()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.warning(f"Settings file is corrupted, using defaults: {e}")
        return ExportSettings()
    except OSError as e:
        logger.warning(f"Failed to read settings, using defaults: {e}")
        return ExportSettings()

    if not isinstance(data, dict):
        logger.warning("Settings file is not a JSON object, using defaults")
        return ExportSettings()

    known = {f.name for f in fields(ExportSettings)}
    values = {k: v for k, v in data.items() if k in known}
    try:
        return ExportSettings(**values)
    except (TypeError, ValueError) as e:
        logger.warning(f"Invalid settings values, using defaults: {e}")
        return ExportSettings()


def save_settings(settings: ExportSettings, path: Path) -> None:
    """
    Persist settings as JSON.

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
    logger.debug(f"Saved settings to {path}")
