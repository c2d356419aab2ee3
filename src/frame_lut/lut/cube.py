# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Reader and writer for the cube LUT text format.

3D data rows are ordered with red varying fastest, then green, then blue.
Sample values and domain bounds are stored in the file in the [0, 1]
convention and scaled into 8-bit channel units when loaded. Every sample
must lie inside the declared domain of its channel.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np

from .base import CHANNEL_MAX, FormatError, LUTFileError, LUTGrid
from .grid1d import Lut1D
from .grid3d import Lut3D

logger = logging.getLogger(__name__)


class CubeLUTReader:
    """Parse cube files into LUT grids."""

    MAX_1D_SIZE = 65536
    MAX_3D_SIZE = 256

    def read(self, path: str | Path) -> LUTGrid:
        """Read a cube file.

        Args:
            path: Path to the cube file

        Returns:
            Lut1D or Lut3D, depending on the size directive

        Raises:
            LUTFileError: If the file is missing or unreadable
            FormatError: If the file content is malformed
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise FormatError(f"Not a UTF-8 text file: {e}", str(path)) from e
        except OSError as e:
            raise LUTFileError(
                e.errno, f"Cannot read LUT file: {e.strerror}", str(path)
            ) from e

        return self.parse(text, str(path))

    def parse(self, text: str, source: str | None = None) -> LUTGrid:
        """Parse cube file content.

        Args:
            text: File content
            source: Name used in error messages

        Returns:
            Lut1D or Lut3D, depending on the size directive

        Raises:
            FormatError: If the content is malformed
        """
        title: str | None = None
        kind: str | None = None
        size = 0
        expected_rows = 0
        domain_min = [0.0, 0.0, 0.0]
        domain_max = [1.0, 1.0, 1.0]
        domain_line: int | None = None
        rows: list[list[float]] = []
        row_lines: list[int] = []
        line_number = 0

        for line_number, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            parts = line.split()
            keyword = parts[0].upper()

            if _is_number(parts[0]):
                if kind is None:
                    raise FormatError(
                        "Data row before LUT_1D_SIZE or LUT_3D_SIZE directive",
                        source,
                        line_number,
                    )
                if len(rows) >= expected_rows:
                    raise FormatError(
                        f"Too many data rows, expected {expected_rows}",
                        source,
                        line_number,
                    )
                rows.append(_parse_triple(parts, source, line_number))
                row_lines.append(line_number)
                continue

            if rows:
                raise FormatError(
                    f"Directive {parts[0]} after data rows", source, line_number
                )

            if keyword == "TITLE":
                title = line[len(parts[0]) :].strip().strip('"')
            elif keyword in ("LUT_1D_SIZE", "LUT_3D_SIZE"):
                if kind is not None:
                    raise FormatError(
                        f"Duplicate size directive {parts[0]}", source, line_number
                    )
                kind = "1D" if keyword == "LUT_1D_SIZE" else "3D"
                size = self._parse_size(parts, kind, source, line_number)
                expected_rows = size if kind == "1D" else size**3
            elif keyword == "DOMAIN_MIN":
                domain_min = _parse_triple(parts[1:], source, line_number)
                domain_line = line_number
            elif keyword == "DOMAIN_MAX":
                domain_max = _parse_triple(parts[1:], source, line_number)
                domain_line = line_number
            elif keyword in ("LUT_1D_INPUT_RANGE", "LUT_3D_INPUT_RANGE"):
                if len(parts) != 3:
                    raise FormatError(
                        f"{parts[0]} expects 2 values, got {len(parts) - 1}",
                        source,
                        line_number,
                    )
                low, high = (_parse_float(p, source, line_number) for p in parts[1:])
                domain_min = [low, low, low]
                domain_max = [high, high, high]
                domain_line = line_number
            else:
                raise FormatError(f"Unknown keyword {parts[0]}", source, line_number)

        if kind is None:
            raise FormatError(
                "Missing LUT_1D_SIZE or LUT_3D_SIZE directive", source, line_number
            )
        if len(rows) != expected_rows:
            raise FormatError(
                f"Expected {expected_rows} data rows, found {len(rows)}",
                source,
                line_number,
            )
        for channel, (low, high) in enumerate(zip(domain_min, domain_max)):
            if high <= low:
                raise FormatError(
                    f"Domain of channel {'RGB'[channel]} has zero or negative width "
                    f"({low} .. {high})",
                    source,
                    domain_line,
                )

        data = np.asarray(rows, dtype=np.float64)
        outside = (data < domain_min) | (data > domain_max)
        if np.any(outside):
            row, channel = (int(i) for i in np.argwhere(outside)[0])
            raise FormatError(
                f"Sample {data[row, channel]:g} of channel {'RGB'[channel]} outside "
                f"domain [{domain_min[channel]:g}, {domain_max[channel]:g}]",
                source,
                row_lines[row],
            )

        data *= CHANNEL_MAX
        low = np.asarray(domain_min, dtype=np.float64) * CHANNEL_MAX
        high = np.asarray(domain_max, dtype=np.float64) * CHANNEL_MAX

        grid: LUTGrid
        if kind == "1D":
            grid = Lut1D(data, low, high, title=title)
        else:
            # File order is blue-major; store as [r, g, b]
            table = data.reshape(size, size, size, 3).transpose(2, 1, 0, 3)
            grid = Lut3D(table, low, high, title=title)

        logger.debug(f"Parsed {kind} LUT of size {size} from {source or '<string>'}")
        return grid

    def _parse_size(
        self, parts: list[str], kind: str, source: str | None, line_number: int
    ) -> int:
        if len(parts) != 2:
            raise FormatError(f"{parts[0]} expects 1 value", source, line_number)
        try:
            size = int(parts[1])
        except ValueError:
            raise FormatError(
                f"Invalid LUT size: {parts[1]!r}", source, line_number
            ) from None

        limit = self.MAX_1D_SIZE if kind == "1D" else self.MAX_3D_SIZE
        if not 2 <= size <= limit:
            raise FormatError(
                f"LUT size {size} out of range [2, {limit}]", source, line_number
            )
        return size


class CubeLUTWriter:
    """Serialize LUT grids to the cube format."""

    def dumps(self, grid: LUTGrid, title: str | None = None) -> str:
        """Serialize a grid to cube text.

        Args:
            grid: Grid to serialize
            title: Title line, defaults to the grid's own title

        Returns:
            Cube file content
        """
        title = title if title is not None else grid.title
        lines: list[str] = []
        if title:
            lines.append(f'TITLE "{title}"')

        if isinstance(grid, Lut1D):
            lines.append(f"LUT_1D_SIZE {grid.size}")
            rows = grid.table
        elif isinstance(grid, Lut3D):
            lines.append(f"LUT_3D_SIZE {grid.size}")
            rows = grid.table.transpose(2, 1, 0, 3).reshape(-1, 3)
        else:
            raise TypeError(f"Unsupported grid type: {type(grid).__name__}")

        lines.append("DOMAIN_MIN " + _format_triple(grid.domain_min / CHANNEL_MAX))
        lines.append("DOMAIN_MAX " + _format_triple(grid.domain_max / CHANNEL_MAX))
        lines.append("")
        lines.extend(_format_triple(row / CHANNEL_MAX) for row in rows)

        return "\n".join(lines) + "\n"

    def write(self, grid: LUTGrid, path: str | Path, title: str | None = None) -> None:
        """Write a grid to a cube file.

        Raises:
            LUTFileError: If the file cannot be written
        """
        path = Path(path)
        try:
            path.write_text(self.dumps(grid, title), encoding="utf-8")
        except OSError as e:
            raise LUTFileError(
                e.errno, f"Cannot write LUT file: {e.strerror}", str(path)
            ) from e
        logger.debug(f"Wrote {grid.kind} LUT of size {grid.size} to {path}")


def read_cube(path: str | Path) -> LUTGrid:
    """Read a cube file with the default reader."""
    return CubeLUTReader().read(path)


def _is_number(token: str) -> bool:
    return token[0].isdigit() or token[0] in "+-."


def _parse_float(token: str, source: str | None, line_number: int) -> float:
    try:
        value = float(token)
    except ValueError:
        raise FormatError(f"Non-numeric value {token!r}", source, line_number) from None
    if not math.isfinite(value):
        raise FormatError(f"Non-finite value {token!r}", source, line_number)
    return value


def _parse_triple(
    tokens: list[str], source: str | None, line_number: int
) -> list[float]:
    if len(tokens) != 3:
        raise FormatError(
            f"Expected 3 values, got {len(tokens)}", source, line_number
        )
    return [_parse_float(token, source, line_number) for token in tokens]


def _format_triple(values: np.ndarray) -> str:
    return " ".join(f"{value:.6f}" for value in values)
