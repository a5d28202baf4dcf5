"""Top-level package for Encore tour document export.

Provides subpackages:
- encore_export.core – tour aggregate models and serialization
- encore_export.store – read-only tour stores (in-memory, JSON directory)
- encore_export.export – compose, typeset, paginate and write PDF exports
- encore_export.common – airports and timezone helpers
- encore_export.utils – logging helpers for host applications
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    try:
        from importlib.metadata import version as pkg_version
        return pkg_version("encore-export")
    except Exception:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
