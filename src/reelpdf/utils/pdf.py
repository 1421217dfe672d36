"""
Module: utils.pdf

Purpose:
    PDF loading and page rendering. Renders PDF pages to RGB images at a
    given scale and exposes them to the slicer as RGBA pixel buffers.

Key Functions:
    - open_pdf(): Open a PDF from a path or bytes
    - get_pdf_info(): Page count and title
    - render_page(): Render a single page (1-indexed)
    - render_all_pages(): Render every page with progress callbacks
    - create_slice_image(): Crop a slice (plus overlap) from a page image
    - image_to_bytes(): Encode a slice image for storage or transfer

Dependencies:
    - fitz (PyMuPDF): PDF rendering
    - PIL.Image: Image handling

Used By:
    - slicer.page_slicer: Crops slices from rendered pages
    - cli: Renders documents for `reelpdf cuts` and `reelpdf slice`
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Union

import fitz
from PIL import Image

from reelpdf.common.thresholds import SLICE_THRESHOLDS
from reelpdf.core.models import SliceBounds
from reelpdf.slicer.pixels import PixelBuffer

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class PdfInfo:
    """
    Basic document information.

    Attributes:
        page_count: Number of pages.
        title: Title from document metadata, if any.
    """
    page_count: int
    title: Optional[str] = None


@dataclass
class RenderedPage:
    """
    A rendered PDF page.

    Attributes:
        page_number: 1-indexed page number.
        width: Rendered width in pixels.
        height: Rendered height in pixels.
        image: Rendered RGB image.
    """
    page_number: int
    width: int
    height: int
    image: Image.Image

    def pixel_buffer(self) -> PixelBuffer:
        """RGBA pixel buffer for whitespace analysis."""
        return PixelBuffer.from_image(self.image)


def open_pdf(source: Union[str, Path, bytes]) -> fitz.Document:
    """
    Open a PDF document from a path or raw bytes.

    Args:
        source: Filesystem path or PDF bytes.

    Returns:
        Open PyMuPDF document. Callers should close it (or use it as a
        context manager).

    Raises:
        FileNotFoundError: If a path is given and doesn't exist.
        ValueError: If the data can't be opened as a PDF.
    """
    if isinstance(source, (bytes, bytearray)):
        try:
            return fitz.open(stream=bytes(source), filetype="pdf")
        except (RuntimeError, ValueError) as e:
            raise ValueError(f"Could not open PDF data: {e}") from e

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"PDF not found: {path}")
    try:
        return fitz.open(path)
    except (RuntimeError, ValueError) as e:
        raise ValueError(f"Could not open PDF {path.name}: {e}") from e


def get_pdf_info(doc: fitz.Document) -> PdfInfo:
    """
    Get page count and title.

    Example:
        >>> get_pdf_info(doc)
        PdfInfo(page_count=12, title='Annual Report')
    """
    metadata = doc.metadata or {}
    title = metadata.get("title") or None
    return PdfInfo(page_count=doc.page_count, title=title)


def render_page(
    doc: fitz.Document,
    page_number: int,
    scale: float = SLICE_THRESHOLDS.render_scale,
) -> RenderedPage:
    """
    Render a single PDF page to an RGB image.

    Args:
        doc: Open PyMuPDF document.
        page_number: 1-indexed page number.
        scale: Render scale (2 = 2x resolution for retina). Defaults to 2.

    Returns:
        RenderedPage with the image and its pixel size.

    Raises:
        ValueError: If page_number is out of range or scale is not positive.

    Example:
        >>> page = render_page(doc, 1, scale=2)
        >>> page.width, page.height
        (1224, 1584)
    """
    if not 1 <= page_number <= doc.page_count:
        raise ValueError(f"Page {page_number} out of range (1-{doc.page_count})")
    if scale <= 0:
        raise ValueError(f"Render scale must be positive: {scale}")

    page = doc[page_number - 1]
    pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
    image = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)

    return RenderedPage(
        page_number=page_number,
        width=pix.width,
        height=pix.height,
        image=image,
    )


def render_all_pages(
    doc: fitz.Document,
    scale: float = SLICE_THRESHOLDS.render_scale,
    on_progress: Optional[ProgressCallback] = None,
) -> List[RenderedPage]:
    """
    Render all pages of a PDF.

    Args:
        doc: Open PyMuPDF document.
        scale: Render scale. Defaults to 2.
        on_progress: Called with (current, total) after each page.

    Returns:
        Rendered pages in document order.
    """
    results: List[RenderedPage] = []
    total = doc.page_count

    for page_number in range(1, total + 1):
        results.append(render_page(doc, page_number, scale))
        if on_progress:
            on_progress(page_number, total)

    logger.debug(f"Rendered {total} pages at scale {scale}")
    return results


def create_slice_image(
    image: Image.Image,
    start_y: int,
    end_y: int,
    overlap_height: int = 0,
) -> Image.Image:
    """
    Create a cropped slice from a page image.

    The slice spans [start_y - overlap_height, end_y) at full width, with
    the top clamped to 0.

    Example:
        >>> create_slice_image(page.image, 300, 700, overlap_height=60).size
        (1224, 460)
    """
    bounds = SliceBounds(top=start_y, bottom=min(end_y, image.height))
    return bounds.crop_from(image, overlap_height)


def image_to_bytes(
    image: Image.Image,
    image_format: str = "WEBP",
    quality: int = 90,
) -> bytes:
    """
    Encode an image for storage.

    Args:
        image: Slice image.
        image_format: Pillow format name. Defaults to WEBP.
        quality: Encoder quality for lossy formats. Defaults to 90.

    Returns:
        Encoded image bytes.
    """
    buf = io.BytesIO()
    if image_format.upper() in ("WEBP", "JPEG"):
        image.save(buf, format=image_format, quality=quality)
    else:
        image.save(buf, format=image_format)
    return buf.getvalue()
