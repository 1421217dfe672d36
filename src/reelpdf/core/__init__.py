"""
Core package for reelpdf.

Contains the immutable data models used across the slicer:
    - models: WhitespaceGap, SliceBounds, TextItem, PageTextContent
"""

from .models import PageTextContent, SliceBounds, TextItem, WhitespaceGap

__all__ = [
    "PageTextContent",
    "SliceBounds",
    "TextItem",
    "WhitespaceGap",
]
