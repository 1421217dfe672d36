"""
Module: bounds

Purpose:
    Provides the SliceBounds dataclass - the vertical pixel range of one
    slice within a rendered page, before overlap padding is applied.

Key Functions:
    - SliceBounds.crop_from(image, overlap): Crop this slice from a PIL image
    - SliceBounds.padded_top(overlap): Top edge after overlap padding
    - SliceBounds.from_cut_points(cut_points): Consecutive bounds for a page

Dependencies:
    - dataclasses (std)
    - PIL.Image (TYPE_CHECKING only)

Used By:
    - slicer.page_slicer: Converts cut points into slice bounds
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:
    from PIL import Image


@dataclass(frozen=True, slots=True)
class SliceBounds:
    """
    Vertical slice region in page pixels.

    The region is defined as [top, bottom) across the full page width:
    - top is inclusive (first row included)
    - bottom is exclusive (first row NOT included)

    Attributes:
        top: Y-coordinate of top edge (inclusive, pixels from page top)
        bottom: Y-coordinate of bottom edge (exclusive)

    Invariants:
        - top >= 0
        - bottom > top

    Example:
        >>> bounds = SliceBounds(top=300, bottom=700)
        >>> bounds.height
        400
        >>> bounds.padded_top(60)
        240
    """

    top: int
    bottom: int

    def __post_init__(self) -> None:
        """Validate bounds on construction."""
        if self.top < 0:
            raise ValueError(f"top must be >= 0: {self.top}")
        if self.bottom <= self.top:
            raise ValueError(f"bottom must be > top: {self.bottom} <= {self.top}")

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def height(self) -> int:
        """Height of the region in pixels."""
        return self.bottom - self.top

    def padded_top(self, overlap: int) -> int:
        """
        Top edge after extending the slice upward by overlap pixels.

        Clamped at 0 so the first slice of a page never reaches above it.
        """
        return max(0, self.top - max(0, overlap))

    # ─────────────────────────────────────────────────────────────────────────
    # Image Operations
    # ─────────────────────────────────────────────────────────────────────────

    def crop_from(self, image: Image.Image, overlap: int = 0) -> Image.Image:
        """
        Crop this region (plus overlap padding) from a page image.

        Args:
            image: Rendered page image
            overlap: Pixels of the previous slice to repeat at the top

        Returns:
            New PIL Image spanning [padded_top, bottom) at full width
        """
        return image.crop((0, self.padded_top(overlap), image.width, self.bottom))

    # ─────────────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_cut_points(cls, cut_points: Sequence[int]) -> List[SliceBounds]:
        """
        Build consecutive slice bounds from a cut-point sequence.

        Zero-height pairs (only possible for an empty page) are skipped.

        Example:
            >>> SliceBounds.from_cut_points([0, 300, 700, 1000])
            [SliceBounds(0, 300), SliceBounds(300, 700), SliceBounds(700, 1000)]
        """
        return [
            cls(top=top, bottom=bottom)
            for top, bottom in zip(cut_points, cut_points[1:])
            if bottom > top
        ]

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"SliceBounds({self.top}, {self.bottom})"
