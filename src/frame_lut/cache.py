# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Process-wide cache of parsed LUT grids."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from .lut.base import LUTGrid
from .lut.cube import CubeLUTReader

logger = logging.getLogger(__name__)


class _BuildSlot:
    """Build lock shared by the callers currently inside ``get`` for one path."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0
        # Bumped by invalidate() and clear(); a build that started under an
        # older generation must not store its result
        self.generation = 0


class LUTCache:
    """Build each LUT file once and share the grid read-only.

    Entries are keyed by resolved path. With ``check_mtime`` enabled, a file
    whose modification time changed is parsed again on the next ``get``.
    """

    def __init__(
        self, reader: CubeLUTReader | None = None, check_mtime: bool = True
    ) -> None:
        """Initialize LUT cache.

        Args:
            reader: Reader used to parse files (default: CubeLUTReader())
            check_mtime: Rebuild entries whose file changed on disk
        """
        self.reader = reader or CubeLUTReader()
        self.check_mtime = check_mtime

        self._lock = threading.Lock()
        self._entries: dict[Path, tuple[int | None, LUTGrid]] = {}
        self._build_slots: dict[Path, _BuildSlot] = {}

    def get(self, path: str | Path) -> LUTGrid:
        """Get the grid for a LUT file, parsing it if needed.

        Concurrent callers asking for the same path wait for a single parse.

        Raises:
            LUTFileError: If the file is missing or unreadable
            FormatError: If the file content is malformed
        """
        key = Path(path).resolve()

        with self._lock:
            slot = self._build_slots.get(key)
            if slot is None:
                slot = self._build_slots[key] = _BuildSlot()
            slot.users += 1

        try:
            with slot.lock:
                return self._get_or_build(key, slot)
        finally:
            with self._lock:
                slot.users -= 1
                if slot.users == 0:
                    del self._build_slots[key]

    def _get_or_build(self, key: Path, slot: _BuildSlot) -> LUTGrid:
        mtime = self._mtime(key) if self.check_mtime else None

        with self._lock:
            entry = self._entries.get(key)
            generation = slot.generation

        if entry is not None and (not self.check_mtime or entry[0] == mtime):
            logger.debug(f"LUT cache hit: {key}")
            return entry[1]

        if entry is not None:
            logger.debug(f"LUT file changed on disk, rebuilding: {key}")
        else:
            logger.debug(f"LUT cache miss: {key}")

        try:
            grid = self.reader.read(key)
        except Exception:
            with self._lock:
                if slot.generation == generation:
                    self._entries.pop(key, None)
            raise

        with self._lock:
            if slot.generation == generation:
                self._entries[key] = (mtime, grid)
            else:
                logger.debug(f"LUT cache entry dropped while building: {key}")
        return grid

    def invalidate(self, path: str | Path) -> bool:
        """Drop the cached grid for a path.

        A build of the same path that is still running will not be stored.

        Returns:
            True if an entry was removed
        """
        key = Path(path).resolve()
        with self._lock:
            removed = self._entries.pop(key, None) is not None
            slot = self._build_slots.get(key)
            if slot is not None:
                slot.generation += 1
        if removed:
            logger.debug(f"Invalidated LUT cache entry: {key}")
        return removed

    def clear(self) -> None:
        """Drop all cached grids, including builds still running."""
        with self._lock:
            self._entries.clear()
            for slot in self._build_slots.values():
                slot.generation += 1

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        key = Path(path).resolve()
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @staticmethod
    def _mtime(path: Path) -> int | None:
        try:
            return path.stat().st_mtime_ns
        except OSError:
            # The reader reports missing files
            return None


_default_cache = LUTCache()


def get_default_cache() -> LUTCache:
    """Get the process-wide LUT cache."""
    return _default_cache


def load_lut(path: str | Path) -> LUTGrid:
    """Load a LUT through the process-wide cache."""
    return _default_cache.get(path)
