# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Apply a LUT grid to packed 4-byte-per-pixel frame buffers."""

from __future__ import annotations

import logging
import math
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import numpy as np

from .lut.base import LUTGrid, to_channel

logger = logging.getLogger(__name__)

# Byte offsets of the R, G and B channels within one pixel
CHANNEL_LAYOUTS: dict[str, tuple[int, int, int]] = {
    "RGBA": (0, 1, 2),
    "BGRA": (2, 1, 0),
    "ARGB": (1, 2, 3),
    "ABGR": (3, 2, 1),
}

BYTES_PER_PIXEL = 4


class FrameColorTransform:
    """Map every pixel of a frame buffer through a LUT grid, in place.

    Pixels are independent, so the buffer is split into contiguous row ranges
    that are processed on worker threads. Small frames run as one vectorized
    pass. Alpha bytes are never written.
    """

    DEFAULT_LAYOUT = "RGBA"
    DEFAULT_MIN_PARALLEL_PIXELS = 65536

    def __init__(
        self,
        layout: str = DEFAULT_LAYOUT,
        max_workers: int | None = None,
        min_parallel_pixels: int = DEFAULT_MIN_PARALLEL_PIXELS,
    ) -> None:
        """Initialize frame transform.

        Args:
            layout: Byte order of one pixel ('RGBA', 'BGRA', 'ARGB', 'ABGR')
            max_workers: Worker threads per frame (default: CPU count)
            min_parallel_pixels: Frames smaller than this run on the calling thread
        """
        layout = layout.upper()
        if layout not in CHANNEL_LAYOUTS:
            raise ValueError(
                f"Unsupported channel layout: {layout}. "
                f"Supported: {', '.join(CHANNEL_LAYOUTS)}"
            )
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")

        self.layout = layout
        self.max_workers = max_workers or os.cpu_count() or 1
        self.min_parallel_pixels = min_parallel_pixels
        self._channels = list(CHANNEL_LAYOUTS[layout])

    def apply(
        self,
        buffer: Any,
        width: int,
        height: int,
        grid: LUTGrid,
        intensity: float = 1.0,
    ) -> None:
        """Transform a frame buffer in place.

        Args:
            buffer: Writable bytes-like object or uint8 array of width*height*4 bytes
            width: Frame width in pixels
            height: Frame height in pixels
            grid: LUT grid to map colors through
            intensity: Blend factor between original (0) and mapped (1) colors

        Raises:
            ValueError: If the buffer does not match the frame size or is read-only
        """
        pixels = self.as_pixels(buffer, width, height)

        if math.isnan(intensity):
            raise ValueError("Intensity must be a number, got NaN")
        intensity = min(max(float(intensity), 0.0), 1.0)
        if intensity == 0.0 or pixels.shape[0] == 0:
            return

        ranges = self.partition(width, height)
        logger.debug(
            f"Applying {grid.kind} LUT to {width}x{height} frame in {len(ranges)} range(s)"
        )

        if len(ranges) == 1:
            self.apply_range(pixels, 0, pixels.shape[0], grid, intensity)
            return

        with ThreadPoolExecutor(max_workers=len(ranges)) as executor:
            futures = [
                executor.submit(self.apply_range, pixels, start, stop, grid, intensity)
                for start, stop in ranges
            ]
            for future in futures:
                future.result()

    def apply_range(
        self,
        pixels: np.ndarray,
        start: int,
        stop: int,
        grid: LUTGrid,
        intensity: float = 1.0,
    ) -> None:
        """Transform pixels[start:stop] of an (count, 4) pixel view in place."""
        block = pixels[start:stop]
        source = block[:, self._channels]
        mapped = grid.apply(source)

        if intensity < 1.0:
            original = source.astype(np.float64)
            mapped = to_channel(original + (mapped - original) * intensity)

        block[:, self._channels] = mapped

    def partition(self, width: int, height: int) -> list[tuple[int, int]]:
        """Split a frame into contiguous pixel ranges made of whole rows.

        Returns:
            List of (start, stop) pixel indices covering the frame
        """
        total = width * height
        if total == 0:
            return []
        if total < self.min_parallel_pixels or self.max_workers == 1 or height == 1:
            return [(0, total)]

        workers = min(self.max_workers, height)
        rows_per_range = math.ceil(height / workers)
        return [
            (row * width, min(row + rows_per_range, height) * width)
            for row in range(0, height, rows_per_range)
        ]

    def as_pixels(self, buffer: Any, width: int, height: int) -> np.ndarray:
        """Check a frame buffer and view it as (count, 4) uint8 pixels.

        Raises:
            ValueError: If the buffer does not match the frame size or is read-only
        """
        if width < 0 or height < 0:
            raise ValueError(f"Invalid frame size: {width}x{height}")

        if isinstance(buffer, np.ndarray):
            array = buffer
            if array.dtype != np.uint8:
                raise ValueError(f"Pixel buffer must be uint8, got {array.dtype}")
            if not array.flags.c_contiguous:
                raise ValueError("Pixel buffer must be C-contiguous")
        else:
            array = np.frombuffer(buffer, dtype=np.uint8)

        expected = width * height * BYTES_PER_PIXEL
        if array.size != expected:
            raise ValueError(
                f"Pixel buffer size mismatch: expected {expected} bytes for "
                f"{width}x{height}, got {array.size}"
            )
        if not array.flags.writeable:
            raise ValueError("Pixel buffer is read-only")

        return array.reshape(-1, BYTES_PER_PIXEL)
