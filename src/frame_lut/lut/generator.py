"""LUT generation from normalized color transforms."""

from __future__ import annotations

from collections.abc import Callable
from typing import cast

import numpy as np

from .base import CHANNEL_MAX, LUTGrid
from .grid1d import Lut1D
from .grid3d import Lut3D

# Rec. 709 luma weights
LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])


class LUTGenerator:
    """Generate 1D and 3D LUT grids."""

    def __init__(self, size: int = 33) -> None:
        """Initialize LUT generator.

        Args:
            size: Nodes per axis (default: 33)
        """
        if size < 2:
            raise ValueError("LUT size must be at least 2")
        self.size = size

    def identity_1d(self) -> Lut1D:
        """Get identity 1D LUT with this generator's size."""
        return Lut1D.identity(self.size)

    def identity_3d(self) -> Lut3D:
        """Get identity 3D LUT with this generator's size."""
        return Lut3D.identity(self.size)

    def apply_transform(
        self, transform_func: Callable[[np.ndarray], np.ndarray], kind: str = "3D"
    ) -> LUTGrid:
        """Sample a color transformation function on an identity grid.

        Args:
            transform_func: Function that takes normalized RGB rows (count, 3) and
                returns transformed RGB rows
            kind: "1D" or "3D"

        Returns:
            Grid holding the transformed samples
        """
        kind = kind.upper()
        if kind == "1D":
            identity: LUTGrid = self.identity_1d()
        elif kind == "3D":
            identity = self.identity_3d()
        else:
            raise ValueError(f"Unsupported LUT kind: {kind}")

        original_shape = identity.table.shape
        rgb = identity.table.reshape(-1, 3) / CHANNEL_MAX

        transformed = np.asarray(transform_func(rgb), dtype=np.float64)
        if transformed.shape != rgb.shape:
            raise ValueError(
                f"Transform changed sample shape from {rgb.shape} to {transformed.shape}"
            )

        table = transformed.reshape(original_shape) * CHANNEL_MAX
        return type(identity)(table)

    def apply_gamma(self, gamma: float, kind: str = "3D") -> LUTGrid:
        """Create a gamma correction LUT.

        Args:
            gamma: Gamma value (> 0)
            kind: "1D" or "3D"
        """
        if gamma <= 0:
            raise ValueError("Gamma must be positive")

        def gamma_transform(rgb: np.ndarray) -> np.ndarray:
            return np.power(np.clip(rgb, 0.0, 1.0), 1.0 / gamma)

        return self.apply_transform(gamma_transform, kind)

    def apply_brightness_contrast(
        self, brightness: float = 0.0, contrast: float = 1.0, kind: str = "3D"
    ) -> LUTGrid:
        """Create a brightness and contrast LUT.

        Args:
            brightness: Brightness adjustment (-1 to 1)
            contrast: Contrast multiplier (> 0)
            kind: "1D" or "3D"
        """
        if contrast <= 0:
            raise ValueError("Contrast must be positive")

        def brightness_contrast_transform(rgb: np.ndarray) -> np.ndarray:
            # Contrast pivots around the 0.5 midpoint
            adjusted = (rgb - 0.5) * contrast + 0.5 + brightness
            return np.clip(adjusted, 0.0, 1.0)

        return self.apply_transform(brightness_contrast_transform, kind)

    def apply_saturation(self, saturation: float) -> Lut3D:
        """Create a saturation LUT.

        Saturation mixes every channel with the pixel's luma, so it can only be
        expressed as a 3D LUT.

        Args:
            saturation: Saturation multiplier (>= 0, 0 is grayscale)
        """
        if saturation < 0:
            raise ValueError("Saturation must be non-negative")

        def saturation_transform(rgb: np.ndarray) -> np.ndarray:
            return _saturate(rgb, saturation)

        return cast(Lut3D, self.apply_transform(saturation_transform, "3D"))

    def create_custom_lut(
        self,
        gamma: float = 1.0,
        brightness: float = 0.0,
        contrast: float = 1.0,
        saturation: float = 1.0,
        kind: str = "3D",
    ) -> LUTGrid:
        """Create a LUT combining several adjustments.

        Gamma is applied first, then brightness/contrast, then saturation.

        Raises:
            ValueError: If a parameter is invalid, or saturation is requested for a 1D LUT
        """
        if gamma <= 0:
            raise ValueError("Gamma must be positive")
        if contrast <= 0:
            raise ValueError("Contrast must be positive")
        if saturation < 0:
            raise ValueError("Saturation must be non-negative")
        if saturation != 1.0 and kind.upper() == "1D":
            raise ValueError("Saturation requires a 3D LUT")

        def combined(rgb: np.ndarray) -> np.ndarray:
            out = np.power(np.clip(rgb, 0.0, 1.0), 1.0 / gamma)
            out = np.clip((out - 0.5) * contrast + 0.5 + brightness, 0.0, 1.0)
            if saturation != 1.0:
                out = _saturate(out, saturation)
            return out

        return self.apply_transform(combined, kind)


def _saturate(rgb: np.ndarray, saturation: float) -> np.ndarray:
    luma = (rgb @ LUMA_WEIGHTS)[:, None]
    return np.clip(luma + (rgb - luma) * saturation, 0.0, 1.0)
