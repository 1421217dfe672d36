"""
Module: gaps

Purpose:
    Provides the WhitespaceGap dataclass - a maximal run of whitespace
    rows on a rendered page that is a candidate location for a cut.

Dependencies:
    - dataclasses (std)

Used By:
    - slicer.whitespace: Produces gaps
    - slicer.cut_points: Consumes gaps
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WhitespaceGap:
    """
    Contiguous run of whitespace rows in page pixel coordinates.

    The run covers rows [start_y, end_y): start_y is the first whitespace
    row, end_y is the first content row after the run.

    Attributes:
        start_y: First whitespace row (inclusive)
        end_y: First row after the run (exclusive)
        height: end_y - start_y
        center_y: start_y + height / 2 (may be fractional)
        score: Desirability as a cut point in (0, 1]; higher is better

    Example:
        >>> gap = WhitespaceGap(start_y=290, end_y=310, height=20, center_y=300.0, score=0.384)
        >>> gap.center_y
        300.0
    """

    start_y: int
    end_y: int
    height: int
    center_y: float
    score: float
