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
# Filename: src/mdbook_drawio/__init__.py

"""mdBook preprocessor that turns draw.io diagram pages into cached SVG images."""

from mdbook_drawio.directives import DIRECTIVE_REGEX, find_directives, rewrite
from mdbook_drawio.drawio_export import DrawioExportError, drawio_export
from mdbook_drawio.freshness import should_generate
from mdbook_drawio.path_resolver import relative_path_from_chapter
from mdbook_drawio.preprocessor import DrawioPreprocessor

__version__ = "0.1.0"

__all__ = [
    "DIRECTIVE_REGEX",
    "DrawioExportError",
    "DrawioPreprocessor",
    "drawio_export",
    "find_directives",
    "relative_path_from_chapter",
    "rewrite",
    "should_generate",
]

# === End of src/mdbook_drawio/__init__.py ===
