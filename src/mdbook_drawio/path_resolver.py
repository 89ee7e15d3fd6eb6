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
# Filename: src/mdbook_drawio/path_resolver.py

"""
Computes the link from a chapter to a generated SVG.

Chapter locations are relative to the book's `src/` directory and the SVG cache
is a flat directory directly under `src/`. A chapter at `guide/setup/index.md`
is two levels deep, so it links to `../../<result-dir>/<file>.svg`; a chapter
at the root links to `./<result-dir>/<file>.svg`. Links always use forward
slashes since they end up in Markdown.
"""

import logging
from pathlib import PurePath

logger = logging.getLogger(__name__)


def chapter_depth(location) -> int:
    """Number of directory segments above the chapter; 0 if it has no location."""
    if not location:
        return 0
    parent = PurePath(location).parent
    return len([part for part in parent.parts if part not in ('', '.')])


def relative_path_from_chapter(location, target, result_dir: str) -> str:
    """
    Obtains the relative link from a chapter's markdown file to a generated SVG.

    Args:
        location: The chapter's path relative to the source dir, or None.
        target: The SVG's absolute path. Only its file name is used.
        result_dir (str): The cache directory name under the source dir.

    Returns:
        str: e.g. './mdbook-drawio/arch-page-0.svg' or '../mdbook-drawio/arch-page-0.svg'.
    """
    target_filename = PurePath(target).name
    depth = chapter_depth(location)
    logger.debug(f"  Chapter path: {location!r}, depth: {depth}, target filename: {target_filename}")

    up_dirs = "." if depth == 0 else "/".join([".."] * depth)
    rel_path = f"{up_dirs}/{result_dir}/{target_filename}"
    logger.debug(f"  Relative path from chapter: {rel_path}")
    return rel_path

# === End of src/mdbook_drawio/path_resolver.py ===
