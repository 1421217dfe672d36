"""
Module: utils.text

Purpose:
    Text extraction for rendered pages. Extracts positioned text spans
    from PDF pages in rendered-pixel coordinates so they can be attached
    to the slices they fall in.

Key Functions:
    - extract_page_text(): Positioned text items for one page
    - extract_all_pages_text(): Text items for every page

Dependencies:
    - fitz (pymupdf): PDF text extraction

Used By:
    - slicer.page_slicer: Attaches text items to slices
    - cli: `reelpdf slice` manifests
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import fitz

from reelpdf.common.thresholds import SLICE_THRESHOLDS
from reelpdf.core.models import PageTextContent, TextItem

logger = logging.getLogger(__name__)


def extract_page_text(
    doc: fitz.Document,
    page_number: int,
    scale: float = SLICE_THRESHOLDS.render_scale,
) -> PageTextContent:
    """
    Extract text content with positions from a PDF page.

    Each non-blank span becomes a TextItem whose box is the span bbox
    scaled to rendered pixels.

    Args:
        doc: Open PyMuPDF document.
        page_number: 1-indexed page number.
        scale: Render scale the slices were produced at.

    Returns:
        PageTextContent; items is empty if extraction fails.

    Raises:
        ValueError: If page_number is out of range.
    """
    if not 1 <= page_number <= doc.page_count:
        raise ValueError(f"Page {page_number} out of range (1-{doc.page_count})")

    page = doc[page_number - 1]
    items: List[TextItem] = []

    try:
        data = page.get_text("dict")
    except (RuntimeError, ValueError) as e:
        logger.warning(f"Failed to extract text from page {page_number}: {e}")
        data = {}

    for block in data.get("blocks", []):
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = span.get("text", "")
                bbox = span.get("bbox")
                if not text.strip() or not bbox or len(bbox) != 4:
                    continue
                x0, y0, x1, y1 = (v * scale for v in bbox)
                items.append(
                    TextItem(
                        text=text,
                        x=x0,
                        y=y0,
                        width=max(0.0, x1 - x0),
                        height=max(0.0, y1 - y0),
                        font_height=float(span.get("size", 0.0)) * scale,
                    )
                )

    return PageTextContent(
        page_number=page_number,
        items=items,
        page_width=page.rect.width * scale,
        page_height=page.rect.height * scale,
    )


def extract_all_pages_text(
    doc: fitz.Document,
    scale: float = SLICE_THRESHOLDS.render_scale,
    on_progress: Optional[Callable[[int, int], None]] = None,
) -> List[PageTextContent]:
    """Extract text for all pages, calling on_progress(current, total) per page."""
    results: List[PageTextContent] = []
    total = doc.page_count

    for page_number in range(1, total + 1):
        results.append(extract_page_text(doc, page_number, scale))
        if on_progress:
            on_progress(page_number, total)

    return results
