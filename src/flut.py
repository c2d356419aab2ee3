# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Frame LUT - Short import alias.

This module provides a short import alias for frame_lut.
Users can import as: import flut
"""

# Import everything from the main package
from frame_lut import *  # noqa: F403, F401
