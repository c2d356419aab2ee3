# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Cube lookup grid with trilinear interpolation."""

from __future__ import annotations

from typing import Any

import numpy as np

from .base import CHANNEL_MAX, LUTGrid


class Lut3D(LUTGrid):
    """Joint RGB transform sampled on an n x n x n lattice."""

    kind = "3D"

    def __init__(
        self,
        table: Any,
        domain_min: Any = (0.0, 0.0, 0.0),
        domain_max: Any = (255.0, 255.0, 255.0),
        title: str | None = None,
    ) -> None:
        """Initialize 3D grid.

        Args:
            table: Output samples with shape (size, size, size, 3), indexed [r, g, b]
            domain_min: Per-channel input value of the first lattice plane
            domain_max: Per-channel input value of the last lattice plane
            title: Optional title from the source file

        Raises:
            ValueError: If the table shape or domain is invalid
        """
        super().__init__(table, domain_min, domain_max, title)
        shape = self._table.shape
        if len(shape) != 4 or shape[3] != 3:
            raise ValueError(
                f"3D LUT table must have shape (size, size, size, 3), got {shape}"
            )
        if not shape[0] == shape[1] == shape[2]:
            raise ValueError(f"LUT must be cubic, got shape: {shape}")
        if shape[0] < 2:
            raise ValueError("LUT size must be at least 2")

        self._size = shape[0]

    @classmethod
    def identity(cls, size: int = 2) -> Lut3D:
        """Create a grid where output equals input."""
        if size < 2:
            raise ValueError("LUT size must be at least 2")
        coords = np.linspace(0.0, float(CHANNEL_MAX), size)
        r_grid, g_grid, b_grid = np.meshgrid(coords, coords, coords, indexing="ij")
        return cls(np.stack([r_grid, g_grid, b_grid], axis=-1))

    @property
    def size(self) -> int:
        return self._size

    def interpolate(self, rgb: np.ndarray) -> np.ndarray:
        last = self._size - 1
        span = self._domain_max - self._domain_min

        g = np.clip((rgb - self._domain_min) * last / span, 0, last)
        g0 = np.clip(np.floor(g).astype(np.intp), 0, last)
        g1 = np.clip(g0 + 1, 0, last)
        frac = g - g0

        r0, gr0, b0 = g0[..., 0], g0[..., 1], g0[..., 2]
        r1, gr1, b1 = g1[..., 0], g1[..., 1], g1[..., 2]
        fr = frac[..., 0, None]
        fg = frac[..., 1, None]
        fb = frac[..., 2, None]

        t = self._table
        # Collapse red, then green, then blue
        c00 = t[r0, gr0, b0] * (1 - fr) + t[r1, gr0, b0] * fr
        c10 = t[r0, gr1, b0] * (1 - fr) + t[r1, gr1, b0] * fr
        c01 = t[r0, gr0, b1] * (1 - fr) + t[r1, gr0, b1] * fr
        c11 = t[r0, gr1, b1] * (1 - fr) + t[r1, gr1, b1] * fr

        c0 = c00 * (1 - fg) + c10 * fg
        c1 = c01 * (1 - fg) + c11 * fg

        return c0 * (1 - fb) + c1 * fb
