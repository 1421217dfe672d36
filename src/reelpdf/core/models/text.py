"""
Module: text

Purpose:
    Text item models in rendered-page pixel coordinates, used to attach
    selectable text to each slice.

Key Classes:
    - TextItem: One positioned run of text
    - PageTextContent: All text items on a page

Dependencies:
    - dataclasses (std)

Used By:
    - utils.text: Produces PageTextContent from PyMuPDF pages
    - slicer.page_slicer: Filters items per slice
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List


@dataclass(frozen=True, slots=True)
class TextItem:
    """
    Positioned text run.

    Coordinates are in rendered pixels with the origin at the top-left of
    the page (or of the slice, after items_for_slice()).

    Attributes:
        text: The text content
        x: Left edge
        y: Top edge
        width: Run width
        height: Run height
        font_height: Font size scaled to rendered pixels
    """

    text: str
    x: float
    y: float
    width: float
    height: float
    font_height: float

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "font_height": self.font_height,
        }


@dataclass(frozen=True)
class PageTextContent:
    """
    Text items for one page.

    Attributes:
        page_number: 1-indexed page number
        items: Text items in page pixel coordinates
        page_width: Rendered page width in pixels
        page_height: Rendered page height in pixels
    """

    page_number: int
    items: List[TextItem] = field(default_factory=list)
    page_width: float = 0.0
    page_height: float = 0.0

    def items_for_slice(self, start_y: float, end_y: float) -> List[TextItem]:
        """
        Get text items that fall within a slice's Y range.

        An item belongs to the slice if any part of it overlaps
        [start_y, end_y). Returned items have y made relative to start_y.

        Example:
            >>> content.items_for_slice(240, 700)[0].y
            12.0
        """
        return [
            replace(item, y=item.y - start_y)
            for item in self.items
            if item.y < end_y and item.bottom > start_y
        ]
