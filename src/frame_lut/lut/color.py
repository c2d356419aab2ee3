# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""8-bit RGB color value."""

from __future__ import annotations

import numbers
from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """Immutable RGB color with 8-bit channels."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            # bool is an int subclass but never a channel value
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"Channel {name} must be an int, got {value!r}")
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name} out of range [0, 255]: {value}")
            object.__setattr__(self, name, int(value))

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)
