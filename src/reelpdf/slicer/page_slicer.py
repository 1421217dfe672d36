"""
Module: slicer.page_slicer

Purpose:
    Turns cut points into reading slices. Converts a viewport height into
    a target slice height, splits each rendered page at its cut points,
    crops every slice with overlap padding, and attaches the text items
    that fall inside it.

Key Functions:
    - target_slice_height(): Viewport height -> target slice height
    - analyze_page_for_slicing(): Slice bounds for one page
    - compute_document_cut_points(): Cut points for many pages in parallel
    - process_document_slices(): Assemble PageSlices for a whole document

Key Classes:
    - PageSlice: One assembled slice
    - ProcessingProgress: Progress report passed to callbacks

Dependencies:
    - PIL.Image: Slice cropping
    - concurrent.futures: Parallel per-page cut-point selection

Used By:
    - cli: `reelpdf slice`
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any, Callable, List, Literal, Mapping, Optional, Sequence

from PIL import Image

from reelpdf.common.thresholds import SLICE_THRESHOLDS
from reelpdf.core.models import PageTextContent, SliceBounds, TextItem
from reelpdf.timing import TimingLog, timed_phase
from .config import SlicerConfig
from .cut_points import select_cut_points
from .pixels import PixelBuffer

if TYPE_CHECKING:
    from reelpdf.utils.pdf import RenderedPage

logger = logging.getLogger(__name__)

Phase = Literal["rendering", "slicing", "complete"]


@dataclass(frozen=True)
class ProcessingProgress:
    """
    Progress of document slicing.

    Attributes:
        phase: "rendering", "slicing" or "complete"
        current_page: 1-indexed page being processed
        total_pages: Pages in the document
        current_slice: Slices produced so far
        total_slices: Final slice count (0 until complete)
    """
    phase: Phase
    current_page: int
    total_pages: int
    current_slice: int
    total_slices: int


@dataclass
class PageSlice:
    """
    One slice of a rendered page, ready for display.

    Attributes:
        id: "{document_id}-p{page_number}-s{slice_index}"
        document_id: Owning document
        page_number: 1-indexed page number
        slice_index: Index within the page
        global_index: Index within the document
        bounds: Raw slice rows [top, bottom) before overlap
        overlap_height: Rows of the previous slice repeated at the top
        image: Cropped slice image (overlap included)
        text_items: Text in the slice, y relative to the image top
    """
    id: str
    document_id: str
    page_number: int
    slice_index: int
    global_index: int
    bounds: SliceBounds
    overlap_height: int
    image: Image.Image
    text_items: List[TextItem] = field(default_factory=list)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def to_dict(self) -> dict:
        """Serialize metadata (not the image) for a JSON manifest."""
        return {
            "id": self.id,
            "document_id": self.document_id,
            "page_number": self.page_number,
            "slice_index": self.slice_index,
            "global_index": self.global_index,
            "start_y": self.bounds.top,
            "end_y": self.bounds.bottom,
            "overlap_height": self.overlap_height,
            "width": self.width,
            "height": self.height,
            "text_items": [item.to_dict() for item in self.text_items],
        }


def target_slice_height(
    viewport_height: float,
    scale: float = SLICE_THRESHOLDS.render_scale,
    viewport_fraction: float = SLICE_THRESHOLDS.viewport_fraction,
) -> float:
    """
    Convert a viewport height to a target slice height in image pixels.

    Example:
        >>> target_slice_height(800, scale=2)
        800.0
    """
    return viewport_height * scale * viewport_fraction


def analyze_page_for_slicing(
    buffer: PixelBuffer,
    viewport_height: float,
    scale: float = SLICE_THRESHOLDS.render_scale,
    config: Optional[SlicerConfig] = None,
) -> List[SliceBounds]:
    """
    Analyze a page and return recommended slices.

    Args:
        buffer: Rendered page pixels.
        viewport_height: Viewport height in CSS pixels.
        scale: Render scale of the buffer. Defaults to 2.
        config: Slicer settings (viewport fraction, detection overrides).

    Returns:
        Consecutive SliceBounds tiling the page; empty for a 0px page.
    """
    config = config or SlicerConfig()
    target = target_slice_height(viewport_height, scale, config.viewport_fraction)
    cut_points = select_cut_points(buffer, target, _detection_overrides(config))
    return SliceBounds.from_cut_points(cut_points)


def compute_document_cut_points(
    buffers: Sequence[PixelBuffer],
    target: float,
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    max_workers: int = 4,
) -> List[List[int]]:
    """
    Select cut points for many pages concurrently.

    Pages are independent, so each is analyzed in its own worker.
    Results come back in page order.

    Args:
        buffers: Page pixel buffers in document order.
        target: Target slice height in pixels.
        overrides: Optional DetectionConfig overrides.
        max_workers: Worker threads. 1 runs inline.

    Returns:
        One cut-point list per page.
    """
    if max_workers <= 1 or len(buffers) <= 1:
        return [select_cut_points(buffer, target, overrides) for buffer in buffers]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(
            executor.map(lambda buffer: select_cut_points(buffer, target, overrides), buffers)
        )


def process_document_slices(
    document_id: str,
    rendered_pages: Sequence[RenderedPage],
    text_contents: Sequence[Optional[PageTextContent]],
    viewport_height: float,
    *,
    config: Optional[SlicerConfig] = None,
    on_progress: Optional[Callable[[ProcessingProgress], None]] = None,
    timing_log: Optional[TimingLog] = None,
) -> List[PageSlice]:
    """
    Process all pages and create slices with text content.

    Every slice except the document's first is padded upward by
    config.overlap_px (clamped at the page top); the padding actually
    applied is recorded as overlap_height.

    Args:
        document_id: Identifier used in slice ids.
        rendered_pages: Pages in document order.
        text_contents: Text per page (same order); may be shorter than
            rendered_pages or contain None.
        viewport_height: Viewport height in CSS pixels.
        config: Slicer settings.
        on_progress: Called once per page and once on completion.
        timing_log: Optional TimingLog for per-page phase timing.

    Returns:
        Slices in reading order.

    Example:
        >>> slices = process_document_slices("doc1", pages, texts, 800)
        >>> slices[0].id
        'doc1-p1-s0'
    """
    config = config or SlicerConfig()
    timing_log = timing_log or TimingLog()
    all_slices: List[PageSlice] = []
    total_pages = len(rendered_pages)
    global_index = 0

    for page_idx, page in enumerate(rendered_pages):
        page_text = text_contents[page_idx] if page_idx < len(text_contents) else None

        if on_progress:
            on_progress(
                ProcessingProgress(
                    phase="slicing",
                    current_page=page_idx + 1,
                    total_pages=total_pages,
                    current_slice=global_index,
                    total_slices=0,
                )
            )

        with timed_phase(timing_log, "cut_selection", page_number=page.page_number):
            bounds_list = analyze_page_for_slicing(
                page.pixel_buffer(),
                viewport_height,
                config.render_scale,
                config,
            )

        with timed_phase(timing_log, "slice_assembly", page_number=page.page_number):
            for slice_idx, bounds in enumerate(bounds_list):
                is_first_slice = slice_idx == 0 and page_idx == 0
                requested_overlap = 0 if is_first_slice else config.overlap_px
                padded_top = bounds.padded_top(requested_overlap)

                text_items = (
                    page_text.items_for_slice(padded_top, bounds.bottom)
                    if page_text is not None
                    else []
                )

                all_slices.append(
                    PageSlice(
                        id=f"{document_id}-p{page.page_number}-s{slice_idx}",
                        document_id=document_id,
                        page_number=page.page_number,
                        slice_index=slice_idx,
                        global_index=global_index,
                        bounds=bounds,
                        overlap_height=bounds.top - padded_top,
                        image=bounds.crop_from(page.image, requested_overlap),
                        text_items=text_items,
                    )
                )
                global_index += 1

        logger.debug(f"Page {page.page_number}: {len(bounds_list)} slices")

    if on_progress:
        on_progress(
            ProcessingProgress(
                phase="complete",
                current_page=total_pages,
                total_pages=total_pages,
                current_slice=global_index,
                total_slices=global_index,
            )
        )

    logger.info(f"Sliced {document_id}: {total_pages} pages into {global_index} slices")
    return all_slices


def _detection_overrides(config: SlicerConfig) -> dict:
    return asdict(config.detection)
