"""Centralized threshold and magic number configuration.

This module contains the fixed thresholds and ratios used by gap detection,
cut-point selection and slice assembly. Having these in one place makes
tuning easier and documents why each value was chosen.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GapDetectionThresholds:
    """Fixed constants for row classification and gap scoring."""

    white_pixel_brightness: float = 0.9  # Mean RGB brightness (0-1) above which a pixel is "white"
    gap_size_cap_px: int = 50  # Gap height at which size_score saturates at 1.0
    row_band_size: int = 256  # Rows classified per numpy band


@dataclass(frozen=True)
class CutSelectionThresholds:
    """Ratios of the target slice height used by the cut-point selector."""

    accept_ratio: float = 0.5  # Reduced from 0.7 for more frequent, shorter slices
    force_ratio: float = 1.0  # Distance at which a weaker gap is forced
    force_min_score: float = 0.2  # Minimum score for a forced cut
    trailing_ratio: float = 0.3  # Trailing segments at or below this are absorbed


@dataclass(frozen=True)
class SliceAssemblyThresholds:
    """Defaults for turning cut points into viewport slices."""

    render_scale: float = 2.0  # Render scale (2 = 2x resolution for retina)
    viewport_fraction: float = 0.5  # Use 50% of viewport for smaller, more digestible slices
    overlap_px: int = 60  # Pixels repeated above each slice for continuity


# Global instances for easy import
GAP_THRESHOLDS = GapDetectionThresholds()
CUT_THRESHOLDS = CutSelectionThresholds()
SLICE_THRESHOLDS = SliceAssemblyThresholds()
