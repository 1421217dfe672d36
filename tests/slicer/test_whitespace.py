"""
Unit tests for slicer.whitespace.

Tests row classification, gap formation, filtering and scoring.
"""

import numpy as np
import pytest

from reelpdf.core.models import WhitespaceGap
from reelpdf.slicer.config import DetectionConfig
from reelpdf.slicer.pixels import PixelBuffer
from reelpdf.slicer.whitespace import classify_rows, detect_gaps, find_gaps


class TestClassifyRows:
    """Tests for classify_rows()."""

    def test_classify_rows_when_white_and_dark_rows_then_flags_each_row(self, make_buffer):
        """White rows are whitespace, dark rows are not."""
        # Arrange
        buffer = make_buffer(4, [(1, 3)])

        # Act
        rows = classify_rows(buffer, DetectionConfig())

        # Assert
        assert rows.tolist() == [False, True, True, False]

    def test_classify_rows_when_single_dark_speck_then_row_still_whitespace(self):
        """One dark pixel in a 100px row stays above the 0.95 white fraction."""
        # Arrange
        arr = np.full((1, 100, 4), 255, dtype=np.uint8)
        arr[0, 50, :3] = 0
        buffer = PixelBuffer.from_array(arr)

        # Act
        rows = classify_rows(buffer, DetectionConfig())

        # Assert
        assert rows.tolist() == [True]

    def test_classify_rows_when_too_many_dark_pixels_then_row_is_content(self):
        """Six dark pixels out of 100 drop the white fraction to 0.94."""
        # Arrange
        arr = np.full((1, 100, 4), 255, dtype=np.uint8)
        arr[0, :6, :3] = 0
        buffer = PixelBuffer.from_array(arr)

        # Act
        rows = classify_rows(buffer, DetectionConfig())

        # Assert
        assert rows.tolist() == [False]

    def test_classify_rows_when_brightness_near_cutoff_then_strictly_above_is_white(self):
        """Brightness just above 0.9 is white, just below is not."""
        # Arrange
        # (229, 230, 230) -> 689 / 3 / 255 = 0.9007
        # (229, 229, 230) -> 688 / 3 / 255 = 0.8993
        white = PixelBuffer(1, 1, bytes([229, 230, 230, 255]))
        grey = PixelBuffer(1, 1, bytes([229, 229, 230, 255]))

        # Act & Assert
        assert classify_rows(white, DetectionConfig()).tolist() == [True]
        assert classify_rows(grey, DetectionConfig()).tolist() == [False]

    def test_classify_rows_when_alpha_zero_then_alpha_ignored(self):
        """Transparent white pixels still count as white."""
        # Arrange
        buffer = PixelBuffer(2, 1, bytes([255, 255, 255, 0, 255, 255, 255, 0]))

        # Act
        rows = classify_rows(buffer, DetectionConfig())

        # Assert
        assert rows.tolist() == [True]

    def test_classify_rows_when_zero_width_then_no_whitespace(self):
        """A zero-width page has no white pixels to count."""
        # Arrange
        buffer = PixelBuffer(0, 3, b"")

        # Act
        rows = classify_rows(buffer, DetectionConfig())

        # Assert
        assert rows.tolist() == [False, False, False]

    def test_classify_rows_when_page_taller_than_band_then_all_bands_classified(self, make_buffer):
        """Rows beyond the first numpy band are classified too."""
        # Arrange
        buffer = make_buffer(600, [(500, 520)])

        # Act
        rows = classify_rows(buffer, DetectionConfig())

        # Assert
        assert rows[500:520].all()
        assert not rows[:500].any()
        assert not rows[520:].any()


class TestFindGaps:
    """Tests for find_gaps()."""

    def _rows(self, height, white_ranges):
        rows = [False] * height
        for start, end in white_ranges:
            for y in range(start, end):
                rows[y] = True
        return rows

    def test_find_gaps_when_run_shorter_than_min_height_then_excluded(self):
        """A 10px run is below min_gap_height=15."""
        # Arrange
        rows = self._rows(1000, [(495, 505)])

        # Act
        gaps = find_gaps(rows, 1000, DetectionConfig(min_gap_height=15))

        # Assert
        assert gaps == []

    def test_find_gaps_when_run_meets_min_height_then_included(self):
        """A 20px run passes min_gap_height=15."""
        # Arrange
        rows = self._rows(1000, [(490, 510)])

        # Act
        gaps = find_gaps(rows, 1000, DetectionConfig(min_gap_height=15))

        # Assert
        assert len(gaps) == 1
        assert gaps[0].start_y == 490
        assert gaps[0].end_y == 510
        assert gaps[0].height == 20
        assert gaps[0].center_y == 500.0

    def test_find_gaps_when_run_exactly_min_height_then_included(self):
        """height >= min_gap_height is inclusive."""
        # Arrange
        rows = self._rows(1000, [(400, 415)])

        # Act
        gaps = find_gaps(rows, 1000, DetectionConfig())

        # Assert
        assert [g.height for g in gaps] == [15]

    def test_find_gaps_when_centered_inside_top_margin_then_excluded(self):
        """A run centered at y=10 is excluded with edge_margin=50."""
        # Arrange
        rows = self._rows(1000, [(0, 20)])

        # Act
        gaps = find_gaps(rows, 1000, DetectionConfig(edge_margin=50, min_gap_height=0))

        # Assert
        assert gaps == []

    def test_find_gaps_when_centered_inside_bottom_margin_then_excluded(self):
        """Runs centered within edge_margin of the bottom are footer whitespace."""
        # Arrange
        rows = self._rows(1000, [(940, 980)])

        # Act
        gaps = find_gaps(rows, 1000, DetectionConfig())

        # Assert
        assert gaps == []

    def test_find_gaps_when_center_exactly_on_margin_then_excluded(self):
        """The margin check is strict on both sides."""
        # Arrange
        rows = self._rows(1000, [(40, 60)])  # center 50

        # Act
        gaps = find_gaps(rows, 1000, DetectionConfig(edge_margin=50))

        # Assert
        assert gaps == []

    def test_find_gaps_when_run_reaches_page_end_then_not_closed(self):
        """A run still open at the last row never becomes a gap."""
        # Arrange
        rows = self._rows(1000, [(400, 1000)])

        # Act
        gaps = find_gaps(rows, 1000, DetectionConfig())

        # Assert
        assert gaps == []

    def test_find_gaps_when_run_starts_at_row_zero_then_closed_on_first_content_row(self):
        """Runs may start at the very first row."""
        # Arrange
        rows = self._rows(1000, [(0, 200)])

        # Act
        gaps = find_gaps(rows, 1000, DetectionConfig())

        # Assert
        assert [(g.start_y, g.end_y, g.center_y) for g in gaps] == [(0, 200, 100.0)]

    def test_find_gaps_when_scored_then_combines_size_and_centeredness(self):
        """score = min(h/50, 1) * (1 - |c/H - 0.5| * bias)."""
        # Arrange
        rows = self._rows(1000, [(290, 310), (450, 550)])

        # Act
        gaps = find_gaps(rows, 1000, DetectionConfig())

        # Assert
        assert gaps[0].score == pytest.approx(0.4 * (1 - 0.2 * 0.2))
        assert gaps[1].score == pytest.approx(1.0)

    def test_find_gaps_when_center_bias_zero_then_position_ignored(self):
        """With no center bias only size matters."""
        # Arrange
        rows = self._rows(1000, [(100, 150), (475, 525)])

        # Act
        gaps = find_gaps(rows, 1000, DetectionConfig(center_bias=0))

        # Assert
        assert [g.score for g in gaps] == [1.0, 1.0]

    def test_find_gaps_when_odd_height_then_center_is_fractional(self):
        """center_y keeps the half pixel."""
        # Arrange
        rows = self._rows(1000, [(300, 321)])

        # Act
        gaps = find_gaps(rows, 1000, DetectionConfig())

        # Assert
        assert gaps[0].center_y == 310.5

    def test_find_gaps_when_many_runs_then_ordered_and_disjoint(self):
        """Gaps come out top to bottom and never overlap."""
        # Arrange
        rows = self._rows(1000, [(100, 130), (400, 420), (600, 700)])

        # Act
        gaps = find_gaps(rows, 1000, DetectionConfig())

        # Assert
        assert [g.start_y for g in gaps] == [100, 400, 600]
        for upper, lower in zip(gaps, gaps[1:]):
            assert upper.end_y < lower.start_y


class TestDetectGaps:
    """Tests for detect_gaps()."""

    def test_detect_gaps_when_all_dark_then_empty(self, make_buffer):
        """A page with no white rows has no gaps."""
        # Arrange
        buffer = make_buffer(1000)

        # Act
        gaps = detect_gaps(buffer)

        # Assert
        assert gaps == []

    def test_detect_gaps_when_two_bands_then_finds_both(self, two_band_page):
        """Both 20px bands become gaps."""
        # Act
        gaps = detect_gaps(two_band_page)

        # Assert
        assert [g.center_y for g in gaps] == [300.0, 700.0]
        assert all(isinstance(g, WhitespaceGap) for g in gaps)

    def test_detect_gaps_when_all_white_then_empty(self, make_buffer):
        """The whole-page run never closes, so there is nothing to cut at."""
        # Arrange
        buffer = make_buffer(1000, [(0, 1000)])

        # Act
        gaps = detect_gaps(buffer)

        # Assert
        assert gaps == []

    def test_detect_gaps_when_called_twice_then_identical(self, two_band_page):
        """No hidden state between calls."""
        # Arrange
        config = DetectionConfig()

        # Act
        first = detect_gaps(two_band_page, config)
        second = detect_gaps(two_band_page, config)

        # Assert
        assert first == second

    def test_detect_gaps_when_custom_threshold_then_grey_rows_count(self, make_buffer):
        """Lowering whitespace_threshold lets partly dark rows qualify."""
        # Arrange
        arr = np.zeros((1000, 10, 4), dtype=np.uint8)
        arr[:, :, 3] = 255
        arr[480:520, :8, :3] = 255  # 80% white rows
        buffer = PixelBuffer.from_array(arr)

        # Act
        strict = detect_gaps(buffer, DetectionConfig())
        loose = detect_gaps(buffer, DetectionConfig(whitespace_threshold=0.8))

        # Assert
        assert strict == []
        assert [g.center_y for g in loose] == [500.0]

    def test_detect_gaps_when_empty_page_then_empty(self):
        """A 0px page yields no gaps and no error."""
        # Arrange
        buffer = PixelBuffer(10, 0, b"")

        # Act & Assert
        assert detect_gaps(buffer) == []
