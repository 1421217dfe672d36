"""Common constants shared across reelpdf."""

from __future__ import annotations

from .thresholds import (
    CUT_THRESHOLDS,
    GAP_THRESHOLDS,
    SLICE_THRESHOLDS,
    CutSelectionThresholds,
    GapDetectionThresholds,
    SliceAssemblyThresholds,
)

__all__ = [
    "CUT_THRESHOLDS",
    "GAP_THRESHOLDS",
    "SLICE_THRESHOLDS",
    "CutSelectionThresholds",
    "GapDetectionThresholds",
    "SliceAssemblyThresholds",
]
