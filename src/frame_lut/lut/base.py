# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Abstract base class for LUT grids."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from .color import Color

CHANNEL_MAX = 255


class LUTGrid(ABC):
    """Abstract base class for color lookup grids.

    A grid is immutable once constructed. Output samples are stored as floats
    in 8-bit channel units; conversion back to an 8-bit channel happens on
    lookup.
    """

    kind: str = ""

    def __init__(
        self,
        table: np.ndarray,
        domain_min: Any = (0.0, 0.0, 0.0),
        domain_max: Any = (255.0, 255.0, 255.0),
        title: str | None = None,
    ) -> None:
        """Initialize grid.

        Args:
            table: Output samples in channel units
            domain_min: Per-channel lower input bound in channel units
            domain_max: Per-channel upper input bound in channel units
            title: Optional title from the source file

        Raises:
            ValueError: If the table contains non-finite values or the domain is empty
        """
        table = np.array(table, dtype=np.float64)
        if not np.all(np.isfinite(table)):
            raise ValueError("LUT table contains non-finite values (NaN/Inf)")

        low = np.array(domain_min, dtype=np.float64).reshape(-1)
        high = np.array(domain_max, dtype=np.float64).reshape(-1)
        if low.shape != (3,) or high.shape != (3,):
            raise ValueError(
                f"Domain bounds must have 3 channels, got {low.shape} and {high.shape}"
            )
        if np.any(high <= low):
            raise ValueError(
                f"Domain must have positive width, got min={low.tolist()} max={high.tolist()}"
            )

        table.setflags(write=False)
        low.setflags(write=False)
        high.setflags(write=False)

        self._table = table
        self._domain_min = low
        self._domain_max = high
        self.title = title

    @property
    def table(self) -> np.ndarray:
        """Read-only output samples."""
        return self._table

    @property
    def domain_min(self) -> np.ndarray:
        """Per-channel lower input bound."""
        return self._domain_min

    @property
    def domain_max(self) -> np.ndarray:
        """Per-channel upper input bound."""
        return self._domain_max

    @property
    @abstractmethod
    def size(self) -> int:
        """Number of sample nodes along one axis."""

    @abstractmethod
    def interpolate(self, rgb: np.ndarray) -> np.ndarray:
        """Interpolate output samples for source colors.

        Args:
            rgb: Source colors with shape (..., 3)

        Returns:
            Float output colors with shape (..., 3), in channel units, not clamped
        """

    def apply(self, rgb: np.ndarray) -> np.ndarray:
        """Map 8-bit source colors through the grid.

        Args:
            rgb: Source colors with shape (..., 3)

        Returns:
            uint8 output colors with the same shape
        """
        return to_channel(self.interpolate(np.asarray(rgb, dtype=np.float64)))

    def lookup(self, color: Color) -> Color:
        """Map a single color through the grid."""
        r, g, b = self.apply(np.array(color.as_tuple(), dtype=np.uint8))
        return Color(int(r), int(g), int(b))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size}, title={self.title!r})"


def to_channel(values: np.ndarray) -> np.ndarray:
    """Round half up and clamp float channel values to uint8."""
    return np.clip(np.floor(values + 0.5), 0, CHANNEL_MAX).astype(np.uint8)


class LUTError(Exception):
    """Base exception for LUT loading and application."""

    pass


class FormatError(LUTError, ValueError):
    """Exception raised when a LUT file is malformed."""

    def __init__(
        self, message: str, source: str | None = None, line_number: int | None = None
    ) -> None:
        self.source = source
        self.line_number = line_number
        location = source or "<string>"
        if line_number is not None:
            location = f"{location}:{line_number}"
        super().__init__(f"{location}: {message}")


class LUTFileError(LUTError, OSError):
    """Exception raised when a LUT file is missing or unreadable."""

    pass
