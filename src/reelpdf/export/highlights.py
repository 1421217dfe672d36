"""
Module: export.highlights

Purpose:
    Formats a document's saved highlights for export as Markdown, plain
    text or JSON. Loading highlights from storage is left to the caller.

Key Functions:
    - export_highlights(): Render highlights in the chosen format
    - highlights_filename(): File name with the format's extension

Key Classes:
    - Highlight: One highlighted passage
    - ExportFormat: Supported formats with extension and MIME type

Dependencies:
    - json (std)

Used By:
    - Reader front-ends exporting highlights
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, List, Optional, Union


class ExportFormat(str, Enum):
    """Highlight export formats."""

    MARKDOWN = "markdown"
    TEXT = "text"
    JSON = "json"

    @property
    def extension(self) -> str:
        return {"markdown": "md", "text": "txt", "json": "json"}[self.value]

    @property
    def mime_type(self) -> str:
        return {
            "markdown": "text/markdown",
            "text": "text/plain",
            "json": "application/json",
        }[self.value]

    @classmethod
    def parse(cls, value: Union[str, ExportFormat]) -> ExportFormat:
        """Accept an ExportFormat or its string value."""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown format: {value}") from None


@dataclass(frozen=True)
class Highlight:
    """
    A highlighted passage.

    Attributes:
        page_number: 1-indexed page the highlight is on
        slice_index: Slice within the page
        text: Highlighted text
        created_at: When the highlight was made
    """
    page_number: int
    slice_index: int
    text: str
    created_at: datetime


def _iso(moment: datetime) -> str:
    # Naive datetimes are treated as UTC
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def export_highlights(
    highlights: Iterable[Highlight],
    document_name: str,
    fmt: Union[str, ExportFormat],
    *,
    exported_at: Optional[datetime] = None,
) -> str:
    """
    Export highlights in the specified format.

    Highlights are ordered by page, then slice.

    Args:
        highlights: Highlights for one document.
        document_name: Display name used in headings.
        fmt: "markdown", "text" or "json".
        exported_at: Export timestamp. Defaults to now (UTC).

    Returns:
        Formatted export content.

    Raises:
        ValueError: If fmt is not a known format.

    Example:
        >>> print(export_highlights(items, "Paper", "text").splitlines()[0])
        HIGHLIGHTS FROM: Paper
    """
    export_format = ExportFormat.parse(fmt)
    exported_at = exported_at or datetime.now(timezone.utc)
    ordered = sorted(highlights, key=lambda h: (h.page_number, h.slice_index))

    if export_format is ExportFormat.MARKDOWN:
        return _format_markdown(document_name, ordered, exported_at)
    if export_format is ExportFormat.TEXT:
        return _format_text(document_name, ordered, exported_at)
    return _format_json(document_name, ordered, exported_at)


def highlights_filename(name: str, fmt: Union[str, ExportFormat]) -> str:
    """
    File name for an export.

    Example:
        >>> highlights_filename("paper-highlights", "markdown")
        'paper-highlights.md'
    """
    return f"{name}.{ExportFormat.parse(fmt).extension}"


def _format_markdown(document_name: str, highlights: List[Highlight], exported_at: datetime) -> str:
    lines = [
        f'# Highlights from "{document_name}"',
        "",
        f"*Exported on {exported_at.date().isoformat()}*",
        "",
        "---",
        "",
    ]

    current_page = None
    for h in highlights:
        if h.page_number != current_page:
            current_page = h.page_number
            lines.extend([f"## Page {h.page_number}", ""])
        lines.extend([f"> {h.text}", ""])

    return "\n".join(lines)


def _format_text(document_name: str, highlights: List[Highlight], exported_at: datetime) -> str:
    lines = [
        f"HIGHLIGHTS FROM: {document_name}",
        f"Exported: {exported_at.date().isoformat()}",
        "",
        "================================",
        "",
    ]

    for h in highlights:
        lines.extend([f"[Page {h.page_number}]", h.text, ""])

    return "\n".join(lines)


def _format_json(document_name: str, highlights: List[Highlight], exported_at: datetime) -> str:
    return json.dumps(
        {
            "document": document_name,
            "exportedAt": _iso(exported_at),
            "highlights": [
                {
                    "text": h.text,
                    "page": h.page_number,
                    "slice": h.slice_index,
                    "createdAt": _iso(h.created_at),
                }
                for h in highlights
            ],
        },
        indent=2,
    )
