"""Top-level package for reelpdf.

Provides subpackages:
- reelpdf.slicer – whitespace gap detection, cut-point selection, page slicing
- reelpdf.core – immutable models (gaps, slice bounds, text items)
- reelpdf.utils – PyMuPDF rendering and text extraction adapters
- reelpdf.export – highlight export formatting
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
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import version as pkg_version
        return pkg_version("reelpdf")
    except Exception:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
