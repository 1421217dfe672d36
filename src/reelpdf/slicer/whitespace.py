"""
Module: slicer.whitespace

Purpose:
    Whitespace gap detection for rendered pages. Classifies each pixel row
    as whitespace or content, then groups contiguous whitespace rows into
    scored candidate gaps for the cut-point selector.

Key Functions:
    - classify_rows(): Per-row whitespace flags for a pixel buffer
    - find_gaps(): Group whitespace rows into filtered, scored gaps
    - detect_gaps(): classify_rows() + find_gaps() for one page

Dependencies:
    - numpy: Vectorised brightness over row bands

Used By:
    - slicer.cut_points: select_cut_points() calls detect_gaps()

Design Notes:
    Classification is a row-level aggregate, so a single dark speck does
    not disqualify a row unless enough pixels around it are also dark.
    A whitespace run still open at the bottom of the page is never
    closed and is not reported as a gap.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np

from reelpdf.common.thresholds import GAP_THRESHOLDS
from reelpdf.core.models import WhitespaceGap
from .config import DetectionConfig
from .pixels import PixelBuffer

logger = logging.getLogger(__name__)


def classify_rows(buffer: PixelBuffer, config: DetectionConfig) -> np.ndarray:
    """
    Detect all whitespace rows in a page.

    A pixel is white when the unweighted mean of its R, G, B channels,
    normalised to [0, 1], exceeds 0.9 (alpha ignored). A row is whitespace
    when its fraction of white pixels is >= config.whitespace_threshold.

    Args:
        buffer: Page pixels.
        config: Detection settings.

    Returns:
        Boolean array of length buffer.height.

    Example:
        >>> classify_rows(PixelBuffer(1, 2, bytes([255] * 4 + [0] * 4)), DetectionConfig())
        array([ True, False])
    """
    rows = np.zeros(buffer.height, dtype=bool)
    if buffer.width == 0 or buffer.height == 0:
        return rows

    pixels = buffer.as_array()
    band = GAP_THRESHOLDS.row_band_size
    for start in range(0, buffer.height, band):
        rgb = pixels[start:start + band, :, :3].astype(np.float64)
        brightness = rgb.sum(axis=2) / 3 / 255
        white_counts = np.count_nonzero(
            brightness > GAP_THRESHOLDS.white_pixel_brightness, axis=1
        )
        rows[start:start + band] = white_counts / buffer.width >= config.whitespace_threshold
    return rows


def find_gaps(
    whitespace_rows: Sequence[bool],
    page_height: int,
    config: DetectionConfig,
) -> List[WhitespaceGap]:
    """
    Find contiguous gaps of whitespace.

    Scans rows top to bottom. A run opens on the first whitespace row and
    closes on the next content row. Closed runs become gaps when they are
    at least config.min_gap_height tall and centered strictly inside
    (edge_margin, page_height - edge_margin).

    Score is size_score * center_score where
    size_score = min(height / 50, 1) and
    center_score = 1 - |center_y / page_height - 0.5| * center_bias.

    Args:
        whitespace_rows: Per-row whitespace flags, top to bottom.
        page_height: Page height in pixels.
        config: Detection settings.

    Returns:
        Gaps ordered by position.
    """
    gaps: List[WhitespaceGap] = []
    gap_start: Optional[int] = None

    for y, is_white in enumerate(whitespace_rows):
        if is_white:
            if gap_start is None:
                gap_start = y
            continue
        if gap_start is None:
            continue

        height = y - gap_start
        center_y = gap_start + height / 2
        if (
            height >= config.min_gap_height
            and config.edge_margin < center_y < page_height - config.edge_margin
        ):
            size_score = min(height / GAP_THRESHOLDS.gap_size_cap_px, 1.0)
            # Prefer cuts closer to the middle of the page, mildly
            center_score = 1 - abs(center_y / page_height - 0.5) * config.center_bias
            gaps.append(
                WhitespaceGap(
                    start_y=gap_start,
                    end_y=y,
                    height=height,
                    center_y=center_y,
                    score=size_score * center_score,
                )
            )
        gap_start = None

    return gaps


def detect_gaps(
    buffer: PixelBuffer,
    config: Optional[DetectionConfig] = None,
) -> List[WhitespaceGap]:
    """
    Detect candidate cut gaps on a rendered page.

    Pure function: the same buffer and config always give the same gaps,
    and no reference to the buffer is kept after returning.

    Args:
        buffer: Page pixels.
        config: Detection settings. Defaults to DetectionConfig().

    Returns:
        Gaps ordered by position; empty when the page has no usable
        whitespace.

    Example:
        >>> gaps = detect_gaps(page_buffer)
        >>> [round(g.center_y) for g in gaps]
        [300, 700]
    """
    config = config or DetectionConfig()
    rows = classify_rows(buffer, config)
    gaps = find_gaps(rows, buffer.height, config)
    logger.debug(
        f"Detected {len(gaps)} gaps from {int(rows.sum())}/{buffer.height} "
        f"whitespace rows ({buffer.width}x{buffer.height})"
    )
    return gaps
