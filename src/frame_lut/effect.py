# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Color lookup table effect for video frames."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from pathlib import Path
from typing import Any

import numpy as np

from .cache import LUTCache, get_default_cache
from .lut.base import LUTFileError, LUTGrid
from .transform import FrameColorTransform

logger = logging.getLogger(__name__)

IntensitySource = float | Callable[[int], float]


class LUTEffect:
    """Adjust the colors of each frame using a color lookup table (LUT) file.

    The LUT strength can be animated by passing a callable that returns the
    intensity for a frame number.
    """

    ON_MISSING_POLICIES = ("identity", "raise")

    def __init__(
        self,
        lut_path: str | Path,
        intensity: IntensitySource = 1.0,
        on_missing: str = "identity",
        cache: LUTCache | None = None,
        transform: FrameColorTransform | None = None,
    ) -> None:
        """Initialize LUT effect.

        Args:
            lut_path: Path to the cube LUT file
            intensity: Constant intensity, or callable mapping frame number to intensity
            on_missing: What to do when the LUT file is missing: 'identity' passes
                frames through unchanged, 'raise' propagates LUTFileError
            cache: Grid cache (default: process-wide cache)
            transform: Frame transform (default: FrameColorTransform())
        """
        if on_missing not in self.ON_MISSING_POLICIES:
            raise ValueError(
                f"Unsupported on_missing policy: {on_missing!r}. "
                f"Expected one of {self.ON_MISSING_POLICIES}"
            )

        self.lut_path = Path(lut_path)
        self.intensity = intensity
        self.on_missing = on_missing
        self.cache = cache if cache is not None else get_default_cache()
        self.transform = transform or FrameColorTransform()

    def intensity_at(self, frame_number: int) -> float:
        """Get the intensity for a frame, clamped to [0, 1]."""
        if callable(self.intensity):
            value = float(self.intensity(frame_number))
        else:
            value = float(self.intensity)
        if math.isnan(value):
            raise ValueError(f"Intensity for frame {frame_number} is NaN")
        return min(max(value, 0.0), 1.0)

    def load_grid(self) -> LUTGrid | None:
        """Get the LUT grid, or None when falling back to identity.

        Raises:
            LUTFileError: If the file is missing and on_missing is 'raise'
            FormatError: If the file is malformed
        """
        try:
            return self.cache.get(self.lut_path)
        except LUTFileError as e:
            if self.on_missing == "raise":
                raise
            logger.warning(f"LUT unavailable, passing frames through unchanged: {e}")
            return None

    def apply_to_buffer(
        self, buffer: Any, width: int, height: int, frame_number: int
    ) -> Any:
        """Apply the effect to a packed pixel buffer in place.

        Args:
            buffer: Writable buffer of width*height*4 bytes
            width: Frame width in pixels
            height: Frame height in pixels
            frame_number: Frame number used to evaluate the intensity

        Returns:
            The same buffer

        Raises:
            ValueError: If the buffer does not match the frame size
        """
        self.transform.as_pixels(buffer, width, height)

        intensity = self.intensity_at(frame_number)
        if intensity == 0.0:
            return buffer

        grid = self.load_grid()
        if grid is None:
            return buffer

        self.transform.apply(buffer, width, height, grid, intensity)
        return buffer

    def get_frame(self, image: np.ndarray, frame_number: int) -> np.ndarray:
        """Apply the effect to an image array in place.

        Args:
            image: uint8 array with shape (height, width, 4)
            frame_number: Frame number used to evaluate the intensity

        Returns:
            The same array
        """
        if image.ndim != 3 or image.shape[2] != 4:
            raise ValueError(
                f"Expected image with shape (height, width, 4), got {image.shape}"
            )
        height, width = image.shape[:2]
        return self.apply_to_buffer(image, width, height, frame_number)
