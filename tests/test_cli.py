"""
Tests for the reelpdf command-line interface.
"""

import json

import pytest

from reelpdf import __version__
from reelpdf.cli import build_parser, main
from reelpdf.common.thresholds import SLICE_THRESHOLDS


class TestBuildParser:
    """Tests for build_parser()."""

    def test_parse_when_cuts_command_then_defaults_filled(self):
        args = build_parser().parse_args(["cuts", "doc.pdf", "--viewport-height", "800"])

        assert args.command == "cuts"
        assert args.viewport_height == 800.0
        assert args.scale == SLICE_THRESHOLDS.render_scale
        assert args.viewport_fraction == SLICE_THRESHOLDS.viewport_fraction
        assert args.min_gap_height == 15
        assert args.workers == 4

    def test_parse_when_format_lowercase_then_normalized(self):
        args = build_parser().parse_args(
            ["slice", "doc.pdf", "--viewport-height", "800", "-o", "out", "--format", "webp"]
        )
        assert args.image_format == "WEBP"
        assert args.overlap == SLICE_THRESHOLDS.overlap_px

    def test_parse_when_viewport_missing_then_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["cuts", "doc.pdf"])

    def test_version_when_requested_then_printed(self, capsys):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--version"])
        assert __version__ in capsys.readouterr().out


class TestCutsCommand:
    """Tests for `reelpdf cuts`."""

    def test_cuts_when_valid_pdf_then_prints_json_per_page(self, sample_pdf_path, capsys):
        """A 300pt page at scale 2 is 600px; viewport 300 gives a 300px target."""
        # Act
        code = main(["cuts", str(sample_pdf_path), "--viewport-height", "300", "--workers", "1"])

        # Assert
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["document"] == "sample.pdf"
        assert data["target_slice_height"] == 300.0
        assert [p["page"] for p in data["pages"]] == [1, 2]
        for page in data["pages"]:
            cuts = page["cut_points"]
            assert page["height"] == 600
            assert cuts[0] == 0 and cuts[-1] == 600
            assert all(a < b for a, b in zip(cuts, cuts[1:]))

    def test_cuts_when_missing_file_then_returns_error(self, tmp_path, caplog):
        code = main(["cuts", str(tmp_path / "nope.pdf"), "--viewport-height", "800"])

        assert code == 1
        assert "PDF not found" in caplog.text

    def test_cuts_when_invalid_detection_value_then_returns_error(self, sample_pdf_path):
        code = main(
            ["cuts", str(sample_pdf_path), "--viewport-height", "800", "--whitespace-threshold", "2"]
        )
        assert code == 1


class TestSliceCommand:
    """Tests for `reelpdf slice`."""

    def test_slice_when_valid_pdf_then_writes_images_and_manifest(self, sample_pdf_path, tmp_path):
        # Arrange
        out = tmp_path / "slices"

        # Act
        code = main(
            ["slice", str(sample_pdf_path), "--viewport-height", "300", "-o", str(out), "--timing"]
        )

        # Assert
        assert code == 0
        manifest = json.loads((out / "slices.json").read_text(encoding="utf-8"))
        assert manifest["document"] == "sample.pdf"
        files = [entry["file"] for entry in manifest["slices"]]
        assert files[0] == "p001_s00.png"
        assert all((out / name).exists() for name in files)
        assert manifest["slices"][0]["overlap_height"] == 0
        assert (out / "timing.json").exists()

    def test_slice_when_text_on_page_then_manifest_carries_items(self, sample_pdf_path, tmp_path):
        out = tmp_path / "slices"

        main(["slice", str(sample_pdf_path), "--viewport-height", "300", "-o", str(out)])

        manifest = json.loads((out / "slices.json").read_text(encoding="utf-8"))
        texts = [item["text"] for entry in manifest["slices"] for item in entry["text_items"]]
        assert "Page 1 heading" in texts
        assert not (out / "timing.json").exists()

    def test_slice_when_image_write_fails_then_manifest_lists_only_written_files(
        self, sample_pdf_path, tmp_path
    ):
        """A directory occupying a slice path blocks that write."""
        # Arrange
        out = tmp_path / "slices"
        (out / "p001_s00.png").mkdir(parents=True)

        # Act
        code = main(["slice", str(sample_pdf_path), "--viewport-height", "800", "-o", str(out)])

        # Assert
        assert code == 1
        manifest = json.loads((out / "slices.json").read_text(encoding="utf-8"))
        files = [entry["file"] for entry in manifest["slices"]]
        assert "p001_s00.png" not in files
        assert files and all((out / name).is_file() for name in files)
        leftovers = [p.name for p in out.iterdir() if p.name.startswith("tmp")]
        assert leftovers == []

    def test_slice_when_negative_overlap_then_returns_error(self, sample_pdf_path, tmp_path):
        code = main(
            ["slice", str(sample_pdf_path), "--viewport-height", "300", "-o", str(tmp_path), "--overlap", "-5"]
        )
        assert code == 1
