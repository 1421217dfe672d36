import sys
from pathlib import Path
from typing import Iterable, Tuple

import fitz
import numpy as np
import pytest

# Add src to sys.path so we can import reelpdf
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from reelpdf.slicer.pixels import PixelBuffer  # noqa: E402


def banded_buffer(
    height: int,
    white_bands: Iterable[Tuple[int, int]] = (),
    *,
    width: int = 10,
    background: int = 0,
) -> PixelBuffer:
    """Build a page whose rows are `background` except full-width white bands [start, end)."""
    arr = np.full((height, width, 4), background, dtype=np.uint8)
    arr[:, :, 3] = 255
    for start, end in white_bands:
        arr[start:end, :, :3] = 255
    return PixelBuffer.from_array(arr)


@pytest.fixture
def make_buffer():
    """Factory for banded test pages."""
    return banded_buffer


@pytest.fixture
def two_band_page():
    """1000px page with 20px white bands centered at y=300 and y=700."""
    return banded_buffer(1000, [(290, 310), (690, 710)])


@pytest.fixture
def sample_doc():
    """Two-page in-memory PDF (200x300pt) with one line of text per page."""
    doc = fitz.open()
    for number in (1, 2):
        page = doc.new_page(width=200, height=300)
        page.insert_text((20, 50), f"Page {number} heading", fontsize=12)
    doc.set_metadata({"title": "Sample Document"})
    yield doc
    doc.close()


@pytest.fixture
def sample_pdf_bytes(sample_doc):
    return sample_doc.tobytes()


@pytest.fixture
def sample_pdf_path(tmp_path, sample_pdf_bytes):
    path = tmp_path / "sample.pdf"
    path.write_bytes(sample_pdf_bytes)
    return path
