"""
Core Models Package

Immutable, validated data models shared by the slicer and its adapters.

All models in this package are frozen dataclasses, so gaps and bounds
computed for one page can be handed between threads without copying.
"""

from .bounds import SliceBounds
from .gaps import WhitespaceGap
from .text import PageTextContent, TextItem

__all__ = [
    "SliceBounds",
    "WhitespaceGap",
    "PageTextContent",
    "TextItem",
]
