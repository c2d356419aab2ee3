# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Command-line interface for frame-lut."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import click

from . import __version__
from .cache import LUTCache
from .effect import LUTEffect
from .lut.base import CHANNEL_MAX, LUTError
from .lut.cube import CubeLUTWriter, read_cube
from .lut.generator import LUTGenerator
from .transform import CHANNEL_LAYOUTS, FrameColorTransform

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool, info_logging: bool) -> None:
    """Configure root logging for CLI runs."""
    if verbose:
        log_level = logging.DEBUG
    elif info_logging:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING  # Quiet mode - only warnings and errors

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose (debug) logging")
@click.option("--info-logging", is_flag=True, help="Enable info-level logging")
@click.version_option(version=__version__)
def main(verbose: bool, info_logging: bool) -> None:
    """Frame LUT - apply cube color lookup tables to raw video frames."""
    configure_logging(verbose, info_logging)


@main.command()
@click.argument("lut_file", type=click.Path(dir_okay=False, path_type=Path))
def info(lut_file: Path) -> None:
    """Show the kind, size and domain of a cube LUT file."""
    try:
        grid = read_cube(lut_file)
    except (LUTError, OSError) as e:
        _fail(e)

    domain_min = " ".join(f"{v:g}" for v in grid.domain_min / CHANNEL_MAX)
    domain_max = " ".join(f"{v:g}" for v in grid.domain_max / CHANNEL_MAX)

    click.echo(f"File: {lut_file}")
    if grid.title:
        click.echo(f"Title: {grid.title}")
    click.echo(f"Kind: {grid.kind}")
    click.echo(f"Size: {grid.size}")
    click.echo(f"Domain min: {domain_min}")
    click.echo(f"Domain max: {domain_max}")


@main.command()
@click.argument("lut_file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("input_file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("output_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--width", type=click.IntRange(min=1), required=True, help="Frame width in pixels"
)
@click.option(
    "--height", type=click.IntRange(min=1), required=True, help="Frame height in pixels"
)
@click.option(
    "--intensity",
    type=click.FloatRange(0.0, 1.0),
    default=1.0,
    show_default=True,
    help="Blend between original (0) and fully mapped (1) colors",
)
@click.option(
    "--layout",
    type=click.Choice(list(CHANNEL_LAYOUTS), case_sensitive=False),
    default=FrameColorTransform.DEFAULT_LAYOUT,
    show_default=True,
    help="Byte order of one pixel",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Worker threads (default: CPU count)",
)
def apply(
    lut_file: Path,
    input_file: Path,
    output_file: Path,
    width: int,
    height: int,
    intensity: float,
    layout: str,
    workers: int | None,
) -> None:
    """Apply LUT_FILE to a raw 4-byte-per-pixel frame.

    Reads INPUT_FILE, transforms every pixel and writes OUTPUT_FILE.
    """
    effect = LUTEffect(
        lut_file,
        intensity=intensity,
        on_missing="raise",
        cache=LUTCache(check_mtime=False),
        transform=FrameColorTransform(layout=layout, max_workers=workers),
    )

    try:
        buffer = bytearray(input_file.read_bytes())
        effect.apply_to_buffer(buffer, width, height, frame_number=1)
        output_file.write_bytes(buffer)
    except (LUTError, OSError, ValueError) as e:
        _fail(e)

    logger.info(f"Wrote {width}x{height} frame to {output_file}")
    click.echo(f"✅ Applied {lut_file.name} to {width}x{height} frame")


@main.command()
@click.argument("output_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--size",
    type=click.IntRange(min=2),
    default=33,
    show_default=True,
    help="Nodes per axis",
)
@click.option(
    "--kind",
    type=click.Choice(["1D", "3D"], case_sensitive=False),
    default="3D",
    show_default=True,
    help="LUT kind",
)
@click.option("--gamma", default=1.0, show_default=True, help="Gamma correction (> 0)")
@click.option(
    "--brightness",
    default=0.0,
    show_default=True,
    help="Brightness adjustment (-1 to 1)",
)
@click.option(
    "--contrast", default=1.0, show_default=True, help="Contrast multiplier (> 0)"
)
@click.option(
    "--saturation",
    default=1.0,
    show_default=True,
    help="Saturation multiplier (3D only)",
)
@click.option("--title", default=None, help="TITLE written to the file")
def generate(
    output_file: Path,
    size: int,
    kind: str,
    gamma: float,
    brightness: float,
    contrast: float,
    saturation: float,
    title: str | None,
) -> None:
    """Write a generated cube LUT to OUTPUT_FILE."""
    try:
        grid = LUTGenerator(size).create_custom_lut(
            gamma=gamma,
            brightness=brightness,
            contrast=contrast,
            saturation=saturation,
            kind=kind,
        )
        CubeLUTWriter().write(grid, output_file, title=title)
    except (LUTError, OSError, ValueError) as e:
        _fail(e)

    click.echo(f"✅ Wrote {grid.kind} LUT of size {size} to {output_file}")


def _fail(error: Exception) -> NoReturn:
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


if __name__ == "__main__":
    main()
