#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# mdBook Draw.io Preprocessor
# Copyright (C) 2025 Peter J. Marko
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
#
# Filename: src/mdbook_drawio/freshness.py

"""
Decides whether a cached SVG can be reused or must be regenerated.

The check compares filesystem modification times only; no content hashing is
done. Clock skew between filesystems, or coarse timestamp resolution, can make
a stale SVG look up to date. This is a known limitation.

Both oracles share the signature `(source, artifact) -> bool` so the
preprocessor can take either one.
"""

import logging
import os
from datetime import datetime

logger = logging.getLogger(__name__)


def format_time(timestamp: float) -> str:
    """Formats a POSIX timestamp as local time for log messages."""
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")


def should_generate(source, artifact) -> bool:
    """
    Returns True if the artifact must be (re)generated from the source.

    Rules, in order:
    1. The artifact does not exist.
    2. The source's modification time cannot be read.
    3. The artifact's modification time cannot be read.
    4. The source is strictly newer than the artifact.
    """
    logger.debug(f"Checking if regeneration needed for {source} -> {artifact}")

    if not os.path.exists(artifact):
        logger.debug("  Output file does not exist")
        return True

    try:
        source_mtime = os.path.getmtime(source)
    except OSError:
        logger.debug("  Cannot read input metadata, regenerating.")
        return True

    try:
        artifact_mtime = os.path.getmtime(artifact)
    except OSError:
        logger.debug("  Cannot read output metadata, regenerating.")
        return True

    if source_mtime > artifact_mtime:
        logger.debug(f"  Input modified at {format_time(source_mtime)} is newer than "
                     f"output modified at {format_time(artifact_mtime)}")
        return True

    logger.debug(f"  Output is up-to-date (input: {format_time(source_mtime)}, "
                 f"output: {format_time(artifact_mtime)})")
    return False


def always_generate(source, artifact) -> bool:
    """Oracle used with `force-render`: every artifact is regenerated."""
    logger.debug(f"Force render enabled, regenerating {artifact}")
    return True

# === End of src/mdbook_drawio/freshness.py ===
