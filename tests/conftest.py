# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Shared fixtures for frame-lut tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

IDENTITY_3D = (
    "LUT_3D_SIZE 2\n"
    "0 0 0\n1 0 0\n0 1 0\n1 1 0\n"
    "0 0 1\n1 0 1\n0 1 1\n1 1 1\n"
)

# Red channel forced to 0, green and blue unchanged
NO_RED_1D = "LUT_1D_SIZE 2\n0 0 0\n0 1 1\n"


@pytest.fixture
def write_cube(tmp_path: Path) -> Callable[..., Path]:
    """Write cube text to a file in the test's temporary directory."""

    def _write(text: str, name: str = "test.cube") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def identity_cube(write_cube: Callable[..., Path]) -> Path:
    """Path to a 2-node identity 3D LUT."""
    return write_cube(IDENTITY_3D, "identity.cube")


@pytest.fixture
def no_red_cube(write_cube: Callable[..., Path]) -> Path:
    """Path to a 1D LUT that removes the red channel."""
    return write_cube(NO_RED_1D, "no_red.cube")
