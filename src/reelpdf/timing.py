"""
Module: timing

Purpose:
    Timing instrumentation for document slicing, to see which pages and
    which phases (cut selection, slice assembly, writing) dominate.

Key Classes:
    - TimingLog: Collects timing metrics for document and page phases

Key Functions:
    - timed_phase: Context manager for timing code blocks

Dependencies:
    - time (std)
    - contextlib (std)
    - dataclasses (std)

Used By:
    - slicer.page_slicer: process_document_slices()
    - cli: `reelpdf slice --timing`
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class TimingLog:
    """
    Timing metrics for slicing a document.

    Attributes:
        document_timings: Dict of phase_name -> duration_seconds
        page_timings: Dict of page_number -> {phase_name -> duration_seconds}

    Example:
        >>> log = TimingLog()
        >>> log.log_document("rendering", 0.812)
        >>> log.log_page(3, "cut_selection", 0.021)
        >>> print(log.summary())
    """
    document_timings: Dict[str, float] = field(default_factory=dict)
    page_timings: Dict[int, Dict[str, float]] = field(default_factory=dict)

    def log_document(self, phase: str, duration: float) -> None:
        """Log a document-level timing metric."""
        self.document_timings[phase] = duration

    def log_page(self, page_number: int, phase: str, duration: float) -> None:
        """Log a page-level timing metric."""
        self.page_timings.setdefault(page_number, {})[phase] = duration

    def get_page_total(self, page_number: int) -> float:
        """Get total time for a page."""
        return sum(self.page_timings.get(page_number, {}).values())

    def get_phase_averages(self) -> Dict[str, float]:
        """Calculate average time per phase across all pages."""
        phase_totals: Dict[str, float] = {}
        phase_counts: Dict[str, int] = {}

        for phases in self.page_timings.values():
            for phase, duration in phases.items():
                phase_totals[phase] = phase_totals.get(phase, 0.0) + duration
                phase_counts[phase] = phase_counts.get(phase, 0) + 1

        return {
            phase: phase_totals[phase] / phase_counts[phase]
            for phase in phase_totals
        }

    def get_slowest_pages(self, n: int = 3) -> List[tuple]:
        """Get the N slowest pages with their total time and slowest phase."""
        results = []
        for page_number, phases in self.page_timings.items():
            if not phases:
                continue
            slowest_phase = max(phases.items(), key=lambda x: x[1])
            results.append((page_number, sum(phases.values()), slowest_phase[0], slowest_phase[1]))

        results.sort(key=lambda x: x[1], reverse=True)
        return results[:n]

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = ["", "=== Slicing Timing Summary ==="]

        if self.document_timings:
            lines.append("Document-level:")
            for phase, duration in sorted(self.document_timings.items()):
                lines.append(f"  {phase:25s} {duration:.3f}s")

        averages = self.get_phase_averages()
        if averages:
            lines.append("")
            lines.append("Page-level averages:")
            for phase, avg in sorted(averages.items(), key=lambda x: -x[1]):
                lines.append(f"  {phase:25s} {avg:.3f}s")

        slowest = self.get_slowest_pages(3)
        if slowest:
            lines.append("")
            lines.append("Slowest pages:")
            for page_number, total, slow_phase, slow_duration in slowest:
                lines.append(f"  page {page_number}: {total:.3f}s ({slow_phase}: {slow_duration:.3f}s)")

        lines.append("")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Export timing data as dictionary (page numbers become string keys)."""
        return {
            "document_timings": self.document_timings,
            "page_timings": {str(k): v for k, v in self.page_timings.items()},
            "phase_averages": self.get_phase_averages(),
            "slowest_pages": [
                {"page": page, "total": total, "slowest_phase": phase, "phase_duration": dur}
                for page, total, phase, dur in self.get_slowest_pages(5)
            ],
        }

    def save(self, path: Path) -> None:
        """Save timing data to a JSON file, creating parent directories."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.debug(f"Saved timing data to {path}")


@contextmanager
def timed_phase(
    log: TimingLog,
    phase: str,
    page_number: Optional[int] = None,
) -> Generator[None, None, None]:
    """
    Context manager for timing a code phase.

    Args:
        log: TimingLog instance to record metrics
        phase: Name of the phase being timed
        page_number: If provided, records as page-level metric;
                    otherwise records as document-level metric

    Example:
        >>> log = TimingLog()
        >>> with timed_phase(log, "rendering"):
        ...     pages = render_all_pages(doc)
        >>> with timed_phase(log, "cut_selection", page_number=1):
        ...     cuts = select_cut_points(buffer, 800)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if page_number is not None:
            log.log_page(page_number, phase, elapsed)
        else:
            log.log_document(phase, elapsed)
