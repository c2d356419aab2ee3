#!/usr/bin/env python3
"""Basic usage examples for frame-lut."""

import tempfile
from pathlib import Path

import numpy as np

from frame_lut import (
    Color,
    CubeLUTWriter,
    FrameColorTransform,
    LUTEffect,
    LUTGenerator,
    Lut1D,
    Lut3D,
    load_lut,
)


def example_single_colors():
    """Example: Look up individual colors."""
    print("=== Single Color Lookups ===")

    # Channel units: 0 maps to 0, 255 maps to 255
    no_red = Lut1D([[0, 0, 0], [0, 255, 255]], title="No red")
    print(f"{no_red!r}: {no_red.lookup(Color(200, 100, 50))}")

    swap = Lut3D.identity(2)
    table = swap.table[..., ::-1]
    swap = Lut3D(table, title="Swap red and blue")
    print(f"{swap!r}: {swap.lookup(Color(200, 100, 50))}")


def example_generate_and_load(work_dir: Path) -> Path:
    """Example: Generate a cube file and load it through the cache."""
    print("\n=== Generate and Load ===")

    generator = LUTGenerator(size=17)
    grid = generator.create_custom_lut(gamma=1.2, contrast=1.1, saturation=0.5)

    path = work_dir / "desaturate.cube"
    CubeLUTWriter().write(grid, path, title="Desaturate 50%")
    print(f"Wrote {path}")

    loaded = load_lut(path)
    print(f"Loaded {loaded!r}")
    print(f"Second load returns the same grid: {load_lut(path) is loaded}")
    return path


def example_frames(lut_path: Path):
    """Example: Apply a LUT to whole frames with an animated intensity."""
    print("\n=== Frame Processing ===")

    width, height = 320, 180
    rng = np.random.default_rng(seed=1)
    frame = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    original = frame.copy()

    # Fade the LUT in over 24 frames
    effect = LUTEffect(
        lut_path,
        intensity=lambda frame_number: frame_number / 24,
        transform=FrameColorTransform(layout="BGRA"),
    )

    for frame_number in (0, 12, 24):
        result = effect.get_frame(original.copy(), frame_number)
        changed = np.count_nonzero(np.any(result != original, axis=2))
        print(f"  frame {frame_number:2d}: {changed} of {width * height} pixels changed")

    raw = bytearray(frame.tobytes())
    effect.apply_to_buffer(raw, width, height, frame_number=24)
    print(f"  processed raw buffer of {len(raw)} bytes")


if __name__ == "__main__":
    example_single_colors()
    with tempfile.TemporaryDirectory() as tmp:
        lut_file = example_generate_and_load(Path(tmp))
        example_frames(lut_file)
