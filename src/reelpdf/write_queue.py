"""
Module: write_queue

Purpose:
    Background writing of slice images so the CLI can crop the next page
    while earlier slices are still being encoded and saved.

Key Classes:
    - SliceWriteQueue: Thread pool-based async write queue

Dependencies:
    - concurrent.futures: Thread pool execution
    - PIL.Image: Image saving

Used By:
    - cli: `reelpdf slice` output
"""

from __future__ import annotations

import logging
import tempfile
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Tuple

from PIL import Image

logger = logging.getLogger(__name__)


class SliceWriteQueue:
    """
    Thread pool-based async write queue for slice images.

    Usage:
        with SliceWriteQueue(max_workers=4) as queue:
            for page_slice in slices:
                queue.queue_image_write(page_slice.image, path)
        # All writes finished on exit

    Attributes:
        failed: Number of writes that raised.
        failed_paths: Destination paths of those writes.
    """

    def __init__(self, max_workers: int = 4, image_format: str = "PNG", quality: int = 90):
        """
        Initialize write queue.

        Args:
            max_workers: Maximum concurrent write threads.
            image_format: Pillow format name for saved images.
            quality: Encoder quality for lossy formats.
        """
        self._executor = ThreadPoolExecutor(max_workers=max_workers)
        self._pending: List[Tuple[Future, Path]] = []
        self.image_format = image_format.upper()
        self.quality = quality
        self.failed_paths: List[Path] = []

    @property
    def failed(self) -> int:
        return len(self.failed_paths)

    def queue_image_write(self, image: Image.Image, path: Path) -> Future:
        """Queue an image write operation."""
        future = self._executor.submit(
            _write_image_sync, image, path, self.image_format, self.quality
        )
        self._pending.append((future, path))
        return future

    def wait_all(self, timeout: Optional[float] = None) -> int:
        """
        Wait for all queued writes to complete.

        Failed writes are logged and their paths added to failed_paths.

        Returns:
            Number of completed writes.
        """
        completed = 0
        for future, path in self._pending:
            try:
                future.result(timeout=timeout)
                completed += 1
            except (OSError, ValueError) as e:
                self.failed_paths.append(path)
                logger.error(f"Write failed for {path.name}: {e}")
        self._pending.clear()
        return completed

    def shutdown(self) -> None:
        """Shutdown the thread pool."""
        self.wait_all()
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "SliceWriteQueue":
        return self

    def __exit__(self, *args) -> None:
        self.shutdown()


def _write_image_sync(
    image: Image.Image,
    path: Path,
    image_format: str = "PNG",
    quality: int = 90,
) -> None:
    """Synchronous atomic image write. The temp file never outlives a failure."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="wb",
        suffix=path.suffix,
        dir=path.parent,
        delete=False,
    ) as f:
        temp_path = Path(f.name)
        try:
            if image_format in ("WEBP", "JPEG"):
                image.save(f, format=image_format, quality=quality)
            else:
                image.save(f, format=image_format)
        except (OSError, ValueError):
            f.close()
            temp_path.unlink(missing_ok=True)
            raise

    try:
        temp_path.replace(path)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise
