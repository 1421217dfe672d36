"""Highlight export formatting."""

from .highlights import ExportFormat, Highlight, export_highlights, highlights_filename

__all__ = [
    "ExportFormat",
    "Highlight",
    "export_highlights",
    "highlights_filename",
]
