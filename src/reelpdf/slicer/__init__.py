"""
Module: slicer

Purpose:
    Splits rendered PDF pages into viewport-sized reading slices, cutting
    at whitespace gaps where possible and evenly where not.

Key Functions:
    - detect_gaps(): Scored whitespace gaps on a page
    - select_cut_points(): Cut Y-coordinates for a page
    - analyze_page_for_slicing(): Slice bounds for a page
    - process_document_slices(): Assembled slices for a document

Key Classes:
    - DetectionConfig: Gap detection settings
    - SlicerConfig: Slice assembly settings
    - PixelBuffer: RGBA page pixels

Dependencies:
    - numpy: Row classification
    - PIL: Slice cropping
"""

from .config import DetectionConfig, SlicerConfig
from .cut_points import choose_cut_points, generate_even_cuts, select_cut_points
from .page_slicer import (
    PageSlice,
    ProcessingProgress,
    analyze_page_for_slicing,
    compute_document_cut_points,
    process_document_slices,
    target_slice_height,
)
from .pixels import PixelBuffer
from .whitespace import classify_rows, detect_gaps, find_gaps

__all__ = [
    "DetectionConfig",
    "SlicerConfig",
    "PixelBuffer",
    "classify_rows",
    "find_gaps",
    "detect_gaps",
    "generate_even_cuts",
    "choose_cut_points",
    "select_cut_points",
    "PageSlice",
    "ProcessingProgress",
    "target_slice_height",
    "analyze_page_for_slicing",
    "compute_document_cut_points",
    "process_document_slices",
]
