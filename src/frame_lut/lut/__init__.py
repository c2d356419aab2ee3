# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""LUT grids, cube file I/O and LUT generation."""

from .base import FormatError, LUTError, LUTFileError, LUTGrid
from .color import Color
from .cube import CubeLUTReader, CubeLUTWriter, read_cube
from .generator import LUTGenerator
from .grid1d import Lut1D
from .grid3d import Lut3D

__all__ = [
    "Color",
    "CubeLUTReader",
    "CubeLUTWriter",
    "FormatError",
    "LUTError",
    "LUTFileError",
    "LUTGenerator",
    "LUTGrid",
    "Lut1D",
    "Lut3D",
    "read_cube",
]
