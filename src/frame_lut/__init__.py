# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Frame LUT - cube color lookup tables for video frame buffers.

A Python package that parses cube LUT files into 1D or 3D grids and maps
every pixel of packed RGBA frame buffers through them.

Simple usage:
    import flut
    effect = flut.LUTEffect("grade.cube", intensity=0.75)
    effect.apply_to_buffer(pixels, width, height, frame_number=1)
"""

__version__ = "0.1.0"
__author__ = "Fuse Technical Group"

from .cache import LUTCache, load_lut
from .effect import LUTEffect
from .lut import (
    Color,
    CubeLUTReader,
    CubeLUTWriter,
    FormatError,
    LUTError,
    LUTFileError,
    LUTGenerator,
    LUTGrid,
    Lut1D,
    Lut3D,
    read_cube,
)
from .transform import FrameColorTransform

__all__ = [
    "Color",
    "CubeLUTReader",
    "CubeLUTWriter",
    "FormatError",
    "FrameColorTransform",
    "LUTCache",
    "LUTEffect",
    "LUTError",
    "LUTFileError",
    "LUTGenerator",
    "LUTGrid",
    "Lut1D",
    "Lut3D",
    "load_lut",
    "read_cube",
]
