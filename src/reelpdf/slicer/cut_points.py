"""
Module: slicer.cut_points

Purpose:
    Chooses where to cut a rendered page into viewport-sized slices.
    Walks whitespace gaps top to bottom and greedily accepts cuts that
    keep slices near the target height; falls back to evenly spaced cuts
    when the page has no usable gaps.

Key Functions:
    - select_cut_points(): Detect gaps on a page and choose cuts
    - choose_cut_points(): Greedy selection over an existing gap list
    - generate_even_cuts(): Evenly spaced fallback

Dependencies:
    - reelpdf.common.thresholds: CUT_THRESHOLDS selection ratios

Used By:
    - slicer.page_slicer: analyze_page_for_slicing()
    - cli: `reelpdf cuts`

Design Notes:
    The result is always strictly increasing, starts at 0 and ends at the
    page height. Degenerate inputs (empty page, non-positive target)
    collapse to [0, height] instead of raising.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Mapping, Optional, Sequence

from reelpdf.common.thresholds import CUT_THRESHOLDS, CutSelectionThresholds
from reelpdf.core.models import WhitespaceGap
from .config import DetectionConfig
from .pixels import PixelBuffer
from .whitespace import detect_gaps

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    """Round to nearest int with .5 going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def _is_usable_target(target: float) -> bool:
    # Rejects NaN as well as non-positive targets
    return target > 0


def generate_even_cuts(
    page_height: int,
    target: float,
    thresholds: Optional[CutSelectionThresholds] = None,
) -> List[int]:
    """
    Generate evenly spaced cuts when no whitespace is detected.

    Cuts start at target and step by target, stopping once the remaining
    distance to page_height is <= trailing_ratio * target so the last
    partial segment is absorbed into the final slice.

    Args:
        page_height: Page height in pixels.
        target: Target slice height in pixels.
        thresholds: Selection ratios. Defaults to CUT_THRESHOLDS.

    Returns:
        Strictly increasing cuts from 0 to page_height.

    Example:
        >>> generate_even_cuts(1000, 300)
        [0, 300, 600, 900, 1000]
    """
    thresholds = thresholds or CUT_THRESHOLDS
    page_height = max(0, int(page_height))
    if page_height == 0 or not _is_usable_target(target):
        return [0, page_height]

    cuts = [0]
    current = float(target)
    limit = page_height - target * thresholds.trailing_ratio
    while current < limit:
        cut = _round_half_up(current)
        if cuts[-1] < cut < page_height:
            cuts.append(cut)
        current += target

    cuts.append(page_height)
    return cuts


def choose_cut_points(
    page_height: int,
    target: float,
    gaps: Sequence[WhitespaceGap],
    thresholds: Optional[CutSelectionThresholds] = None,
) -> List[int]:
    """
    Select cut points from whitespace gaps.

    Single left-to-right pass over gaps sorted by center_y. A gap is
    accepted when it is at least accept_ratio * target below the last
    cut, or (as a separate check) at least force_ratio * target below it
    with a score above force_min_score. After the last gap, a trailing
    segment longer than trailing_ratio * target gets its own cut at
    page_height; a shorter one is absorbed by moving the last accepted
    cut to page_height.

    Args:
        page_height: Page height in pixels.
        target: Target slice height in pixels.
        gaps: Candidate gaps (any order).
        thresholds: Selection ratios. Defaults to CUT_THRESHOLDS.

    Returns:
        Strictly increasing cuts from 0 to page_height.

    Example:
        >>> choose_cut_points(1000, 350, gaps_at_300_and_700)
        [0, 300, 700, 1000]
    """
    thresholds = thresholds or CUT_THRESHOLDS
    page_height = max(0, int(page_height))
    if page_height == 0 or not _is_usable_target(target):
        return [0, page_height]
    if not gaps:
        return generate_even_cuts(page_height, target, thresholds)

    cut_points = [0]
    last_cut = 0.0

    for gap in sorted(gaps, key=lambda g: g.center_y):
        distance = gap.center_y - last_cut
        cut = _round_half_up(gap.center_y)
        if not cut_points[-1] < cut < page_height:
            continue

        if distance >= target * thresholds.accept_ratio:
            cut_points.append(cut)
            last_cut = gap.center_y
        # Unreachable while accept_ratio <= force_ratio; kept for alternate thresholds
        elif distance >= target * thresholds.force_ratio and gap.score > thresholds.force_min_score:
            logger.debug(
                f"Forced cut at {cut} (distance {distance:.1f}, score {gap.score:.3f})"
            )
            cut_points.append(cut)
            last_cut = gap.center_y

    if page_height - last_cut > target * thresholds.trailing_ratio or len(cut_points) == 1:
        cut_points.append(page_height)
    else:
        # Extend last slice to end of page
        cut_points[-1] = page_height

    return cut_points


def select_cut_points(
    buffer: PixelBuffer,
    target_slice_height: float,
    overrides: Optional[Mapping[str, Any]] = None,
) -> List[int]:
    """
    Find cut points for a page based on target slice height.

    Detects whitespace gaps with DetectionConfig defaults merged with
    overrides, then selects cuts with choose_cut_points(). Pages with no
    usable gaps get evenly spaced cuts.

    Args:
        buffer: Rendered page pixels.
        target_slice_height: Desired slice height in the buffer's pixel
            units (already scaled for device pixel ratio).
        overrides: Optional DetectionConfig field overrides.

    Returns:
        Strictly increasing cuts from 0 to buffer.height.

    Raises:
        ValueError: If overrides name unknown fields or out-of-range values.

    Example:
        >>> select_cut_points(page_buffer, 350)
        [0, 300, 700, 1000]
    """
    config = DetectionConfig().with_overrides(overrides)
    if buffer.height == 0 or not _is_usable_target(target_slice_height):
        return [0, buffer.height]

    gaps = detect_gaps(buffer, config)
    if not gaps:
        logger.debug(
            f"No whitespace gaps on {buffer.height}px page, using even cuts of {target_slice_height:.0f}px"
        )
        return generate_even_cuts(buffer.height, target_slice_height)

    return choose_cut_points(buffer.height, target_slice_height, gaps)
