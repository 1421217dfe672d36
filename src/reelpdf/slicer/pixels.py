"""
Module: slicer.pixels

Purpose:
    RGBA pixel buffer handed from the rendering collaborator to the gap
    detector. Pixels are row-major and channel-interleaved, addressable
    as pixels[row * width * 4 + col * 4 + channel] with channel order
    R, G, B, A.

Key Classes:
    - PixelBuffer: Width, height and flat RGBA samples

Dependencies:
    - numpy: Zero-copy reshaping of the flat sample buffer
    - PIL.Image: Conversion from rendered page images

Used By:
    - slicer.whitespace: Row classification
    - utils.pdf: RenderedPage.pixel_buffer()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from PIL import Image

CHANNELS = 4  # R, G, B, A


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    Read-only RGBA pixel grid.

    Attributes:
        width: Pixels per row
        height: Number of rows
        pixels: Flat sequence of width * height * 4 samples (0-255).
            Accepts bytes, bytearray, memoryview, lists or numpy arrays.

    Raises:
        ValueError: If dimensions are negative or the sample count does
            not match width * height * 4.

    Example:
        >>> buf = PixelBuffer(2, 1, bytes([255, 255, 255, 255, 0, 0, 0, 255]))
        >>> buf.pixel(0, 1)
        (0, 0, 0, 255)
    """
    width: int
    height: int
    pixels: Any

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid buffer size: {self.width}x{self.height}")
        expected = self.width * self.height * CHANNELS
        actual = len(self.pixels)
        if actual != expected:
            raise ValueError(
                f"Pixel buffer has {actual} samples, expected {expected} "
                f"for {self.width}x{self.height} RGBA"
            )

    def as_array(self) -> np.ndarray:
        """
        View the samples as a (height, width, 4) uint8 array.

        Shares memory with the underlying buffer where numpy allows it.
        """
        if isinstance(self.pixels, (bytes, bytearray, memoryview)):
            arr = np.frombuffer(self.pixels, dtype=np.uint8)
        else:
            arr = np.asarray(self.pixels, dtype=np.uint8)
        return arr.reshape(self.height, self.width, CHANNELS)

    def pixel(self, row: int, col: int) -> tuple[int, int, int, int]:
        """Get the (R, G, B, A) sample at a row and column."""
        idx = row * self.width * CHANNELS + col * CHANNELS
        return tuple(int(v) for v in self.pixels[idx:idx + CHANNELS])

    @classmethod
    def from_array(cls, arr: np.ndarray) -> PixelBuffer:
        """
        Build a buffer from an (H, W, 4) or (H, W, 3) uint8 array.

        RGB arrays get an opaque alpha channel.
        """
        if arr.ndim != 3 or arr.shape[2] not in (3, CHANNELS):
            raise ValueError(f"Expected (H, W, 3|4) array, got shape {arr.shape}")
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr.astype(np.uint8), alpha], axis=2)
        height, width = arr.shape[:2]
        return cls(width, height, np.ascontiguousarray(arr, dtype=np.uint8).reshape(-1))

    @classmethod
    def from_image(cls, image: Image.Image) -> PixelBuffer:
        """Build a buffer from any Pillow image, converting to RGBA."""
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        return cls(rgba.width, rgba.height, rgba.tobytes())
