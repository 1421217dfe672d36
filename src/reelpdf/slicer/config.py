"""
Module: slicer.config

Purpose:
    Configuration dataclasses for gap detection and slice assembly.
    Provides immutable settings with documented defaults; caller
    overrides produce a new value instead of mutating the defaults.

Key Classes:
    - DetectionConfig: Row classification and gap filtering settings
    - SlicerConfig: Render scale, viewport fraction, overlap and encoding

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - slicer.whitespace: Uses DetectionConfig for classification
    - slicer.cut_points: Merges caller overrides onto DetectionConfig
    - slicer.page_slicer: Uses SlicerConfig for assembly
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional

from reelpdf.common.thresholds import SLICE_THRESHOLDS


@dataclass(frozen=True)
class DetectionConfig:
    """
    Configuration for whitespace gap detection.

    Attributes:
        whitespace_threshold: Minimum fraction of white pixels (0-1) for a
            row to count as whitespace. Defaults to 0.95.
        min_gap_height: Minimum gap height in pixels to consider as a
            break point. Defaults to 15.
        edge_margin: Gaps centered within this many pixels of the top or
            bottom edge are ignored. Defaults to 50.
        center_bias: How strongly gaps near the vertical middle of the
            page are preferred. Defaults to 0.2.
    """
    whitespace_threshold: float = 0.95
    min_gap_height: float = 15
    edge_margin: float = 50
    center_bias: float = 0.2

    def __post_init__(self) -> None:
        """Validate types and ranges on construction."""
        for f in fields(self):
            _require_number(f.name, getattr(self, f.name))
        if not 0.0 <= self.whitespace_threshold <= 1.0:
            raise ValueError(
                f"whitespace_threshold must be in [0, 1]: {self.whitespace_threshold}"
            )
        if not self.min_gap_height >= 0:
            raise ValueError(f"min_gap_height must be >= 0: {self.min_gap_height}")
        if not self.edge_margin >= 0:
            raise ValueError(f"edge_margin must be >= 0: {self.edge_margin}")
        if not self.center_bias >= 0:
            raise ValueError(f"center_bias must be >= 0: {self.center_bias}")

    def with_overrides(self, overrides: Optional[Mapping[str, Any]] = None) -> DetectionConfig:
        """
        Return a copy with the given fields replaced.

        Args:
            overrides: Mapping of field name to value. None or empty
                returns self unchanged.

        Raises:
            ValueError: If a key is not a DetectionConfig field, or a
                value is out of range.

        Example:
            >>> DetectionConfig().with_overrides({"min_gap_height": 30}).min_gap_height
            30
        """
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown detection config keys: {', '.join(unknown)}")
        return replace(self, **dict(overrides))


@dataclass(frozen=True)
class SlicerConfig:
    """
    Configuration for turning a rendered document into slices.

    Attributes:
        render_scale: Scale the pages were rendered at (default 2.0)
        viewport_fraction: Fraction of the scaled viewport height used as
            the target slice height (default 0.5)
        overlap_px: Pixels of the previous slice repeated above every
            slice except the document's first (default 60)
        image_format: Pillow format for encoded slice images (default WEBP)
        image_quality: Encoder quality for lossy formats (default 90)
        detection: Gap detection settings
    """
    render_scale: float = SLICE_THRESHOLDS.render_scale
    viewport_fraction: float = SLICE_THRESHOLDS.viewport_fraction
    overlap_px: int = SLICE_THRESHOLDS.overlap_px
    image_format: str = "WEBP"
    image_quality: int = 90
    detection: DetectionConfig = field(default_factory=DetectionConfig)

    def __post_init__(self) -> None:
        """Validate ranges on construction."""
        for name in ("render_scale", "viewport_fraction", "overlap_px", "image_quality"):
            _require_number(name, getattr(self, name))
        if not self.render_scale > 0:
            raise ValueError(f"render_scale must be > 0: {self.render_scale}")
        if not self.viewport_fraction > 0:
            raise ValueError(f"viewport_fraction must be > 0: {self.viewport_fraction}")
        if not self.overlap_px >= 0:
            raise ValueError(f"overlap_px must be >= 0: {self.overlap_px}")
        if not 1 <= self.image_quality <= 100:
            raise ValueError(f"image_quality must be in [1, 100]: {self.image_quality}")
        if not isinstance(self.detection, DetectionConfig):
            raise ValueError(f"detection must be a DetectionConfig: {self.detection!r}")


def _require_number(name: str, value: Any) -> None:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number: {value!r}")
