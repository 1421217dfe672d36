"""
Module: cli

Purpose:
    Command-line entry point. `reelpdf cuts` prints the cut points chosen
    for every page; `reelpdf slice` writes slice images and a slices.json
    manifest.

Key Functions:
    - main(): Parse arguments and run a command
    - build_parser(): argparse parser (used by tests)

Dependencies:
    - argparse (std)
    - logging (std): basicConfig with message-only format

Used By:
    - `reelpdf` console script
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from reelpdf import __version__
from reelpdf.common.thresholds import SLICE_THRESHOLDS
from reelpdf.slicer import (
    DetectionConfig,
    SlicerConfig,
    compute_document_cut_points,
    process_document_slices,
    target_slice_height,
)
from reelpdf.timing import TimingLog, timed_phase
from reelpdf.utils import extract_all_pages_text, open_pdf, render_all_pages
from reelpdf.write_queue import SliceWriteQueue

logger = logging.getLogger("reelpdf")

_EXTENSIONS = {"PNG": "png", "WEBP": "webp", "JPEG": "jpg"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reelpdf",
        description="Slice PDF pages into viewport-sized reading segments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s cuts paper.pdf --viewport-height 800
  %(prog)s slice paper.pdf --viewport-height 800 --output slices/ --format webp
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("pdf", type=Path, help="PDF file to slice")
    common.add_argument(
        "--viewport-height",
        type=float,
        required=True,
        help="Viewport height in CSS pixels",
    )
    common.add_argument(
        "--scale",
        type=float,
        default=SLICE_THRESHOLDS.render_scale,
        help="Render scale (default: %(default)s)",
    )
    common.add_argument(
        "--viewport-fraction",
        type=float,
        default=SLICE_THRESHOLDS.viewport_fraction,
        help="Fraction of the scaled viewport used per slice (default: %(default)s)",
    )
    defaults = DetectionConfig()
    common.add_argument("--whitespace-threshold", type=float, default=defaults.whitespace_threshold)
    common.add_argument("--min-gap-height", type=float, default=defaults.min_gap_height)
    common.add_argument("--edge-margin", type=float, default=defaults.edge_margin)
    common.add_argument("--center-bias", type=float, default=defaults.center_bias)

    sub = parser.add_subparsers(dest="command", required=True)

    cuts = sub.add_parser("cuts", parents=[common], help="Print cut points per page as JSON")
    cuts.add_argument("--workers", type=int, default=4, help="Pages analyzed in parallel (default: 4)")

    slice_cmd = sub.add_parser("slice", parents=[common], help="Write slice images and slices.json")
    slice_cmd.add_argument("--output", "-o", type=Path, required=True, help="Output directory")
    slice_cmd.add_argument(
        "--format",
        dest="image_format",
        choices=sorted(_EXTENSIONS),
        type=str.upper,
        default="PNG",
        help="Slice image format (default: PNG)",
    )
    slice_cmd.add_argument(
        "--overlap",
        type=int,
        default=SLICE_THRESHOLDS.overlap_px,
        help="Overlap pixels (default: %(default)s)",
    )
    slice_cmd.add_argument("--timing", action="store_true", help="Write timing.json and log a summary")

    return parser


def _detection_config(args: argparse.Namespace) -> DetectionConfig:
    return DetectionConfig(
        whitespace_threshold=args.whitespace_threshold,
        min_gap_height=args.min_gap_height,
        edge_margin=args.edge_margin,
        center_bias=args.center_bias,
    )


def _run_cuts(args: argparse.Namespace) -> int:
    detection = _detection_config(args)
    target = target_slice_height(args.viewport_height, args.scale, args.viewport_fraction)

    with open_pdf(args.pdf) as doc:
        pages = render_all_pages(doc, args.scale)

    buffers = [page.pixel_buffer() for page in pages]
    overrides = asdict(detection)
    all_cuts = compute_document_cut_points(buffers, target, overrides, max_workers=args.workers)

    result = {
        "document": args.pdf.name,
        "target_slice_height": target,
        "pages": [
            {"page": page.page_number, "height": page.height, "cut_points": cuts}
            for page, cuts in zip(pages, all_cuts)
        ],
    }
    print(json.dumps(result, indent=2))
    return 0


def _run_slice(args: argparse.Namespace) -> int:
    config = SlicerConfig(
        render_scale=args.scale,
        viewport_fraction=args.viewport_fraction,
        overlap_px=args.overlap,
        image_format=args.image_format,
        detection=_detection_config(args),
    )
    timing_log = TimingLog()
    document_id = args.pdf.stem

    with open_pdf(args.pdf) as doc:
        with timed_phase(timing_log, "rendering"):
            pages = render_all_pages(doc, config.render_scale)
        with timed_phase(timing_log, "text_extraction"):
            texts = extract_all_pages_text(doc, config.render_scale)

    slices = process_document_slices(
        document_id,
        pages,
        texts,
        args.viewport_height,
        config=config,
        timing_log=timing_log,
    )

    output_dir: Path = args.output
    output_dir.mkdir(parents=True, exist_ok=True)
    extension = _EXTENSIONS[config.image_format]
    manifest: List[Dict] = []

    with timed_phase(timing_log, "writing"):
        with SliceWriteQueue(image_format=config.image_format, quality=config.image_quality) as queue:
            for page_slice in slices:
                filename = f"p{page_slice.page_number:03d}_s{page_slice.slice_index:02d}.{extension}"
                queue.queue_image_write(page_slice.image, output_dir / filename)
                manifest.append({**page_slice.to_dict(), "file": filename})

    failed = set(queue.failed_paths)
    manifest = [entry for entry in manifest if output_dir / entry["file"] not in failed]

    with open(output_dir / "slices.json", "w", encoding="utf-8") as f:
        json.dump({"document": args.pdf.name, "slices": manifest}, f, indent=2)

    if args.timing:
        timing_log.save(output_dir / "timing.json")
        logger.info(timing_log.summary())

    if queue.failed:
        logger.error(f"{queue.failed} slice images failed to write and were left out of slices.json")
        return 1

    logger.info(f"Wrote {len(slices)} slices to {output_dir}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        if args.command == "cuts":
            return _run_cuts(args)
        return _run_slice(args)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
