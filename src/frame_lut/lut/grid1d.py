# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Per-channel (3x1D) lookup grid."""

from __future__ import annotations

from typing import Any

import numpy as np

from .base import CHANNEL_MAX, LUTGrid

_CHANNELS = np.arange(3)


class Lut1D(LUTGrid):
    """Three independent channel curves sampled at N+1 equally spaced nodes.

    Channels never interact: the red output only depends on the red input.
    """

    kind = "1D"

    def __init__(
        self,
        table: Any,
        domain_min: Any = (0.0, 0.0, 0.0),
        domain_max: Any = (255.0, 255.0, 255.0),
        title: str | None = None,
    ) -> None:
        """Initialize 1D grid.

        Args:
            table: Output samples with shape (N+1, 3), in channel units
            domain_min: Per-channel input value of the first node
            domain_max: Per-channel input value of the last node
            title: Optional title from the source file

        Raises:
            ValueError: If the table shape or domain is invalid
        """
        super().__init__(table, domain_min, domain_max, title)
        if self._table.ndim != 2 or self._table.shape[1] != 3:
            raise ValueError(
                f"1D LUT table must have shape (size, 3), got {self._table.shape}"
            )
        if self._table.shape[0] < 2:
            raise ValueError("LUT size must be at least 2")

        self._intervals = self._table.shape[0] - 1
        self._interval_width = (self._domain_max - self._domain_min) / self._intervals

    @classmethod
    def identity(cls, size: int = 2) -> Lut1D:
        """Create a grid that maps every channel onto itself."""
        if size < 2:
            raise ValueError("LUT size must be at least 2")
        ramp = np.linspace(0.0, float(CHANNEL_MAX), size)
        return cls(np.stack([ramp, ramp, ramp], axis=-1))

    @property
    def size(self) -> int:
        return self._intervals + 1

    def interpolate(self, rgb: np.ndarray) -> np.ndarray:
        n = self._intervals

        # Inputs on or past a domain edge resolve to the edge node
        i = np.clip((rgb - self._domain_min) / self._interval_width, 0, n)
        i0 = np.clip(np.floor(i).astype(np.intp), 0, n)
        i1 = np.clip(np.ceil(i).astype(np.intp), 0, n)

        low = self._table[i0, _CHANNELS]
        high = self._table[i1, _CHANNELS]
        lerped = low + (high - low) * (i - i0)

        return np.where(i0 == i1, low, lerped)

    def inverse(self) -> Lut1D:
        """Build the grid that maps this grid's outputs back to its inputs.

        The inverse is sampled at the same node count over the output range of
        each channel.

        Raises:
            ValueError: If any channel curve is not strictly increasing
        """
        if np.any(np.diff(self._table, axis=0) <= 0):
            raise ValueError("Only strictly increasing LUTs can be inverted")

        n = self._intervals
        nodes = self._domain_min + np.arange(n + 1)[:, None] * self._interval_width
        low = self._table[0]
        high = self._table[-1]
        samples = low + np.arange(n + 1)[:, None] * ((high - low) / n)

        inverted = np.empty_like(self._table)
        for channel in range(3):
            inverted[:, channel] = np.interp(
                samples[:, channel], self._table[:, channel], nodes[:, channel]
            )

        return Lut1D(inverted, domain_min=low, domain_max=high, title=self.title)
