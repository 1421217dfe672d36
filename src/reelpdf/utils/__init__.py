"""
Module: utils

Purpose:
    PyMuPDF adapters that feed the slicer: page rendering and positioned
    text extraction.
"""

from .pdf import (
    PdfInfo,
    RenderedPage,
    create_slice_image,
    get_pdf_info,
    image_to_bytes,
    open_pdf,
    render_all_pages,
    render_page,
)
from .text import extract_all_pages_text, extract_page_text

__all__ = [
    "PdfInfo",
    "RenderedPage",
    "create_slice_image",
    "get_pdf_info",
    "image_to_bytes",
    "open_pdf",
    "render_all_pages",
    "render_page",
    "extract_all_pages_text",
    "extract_page_text",
]
