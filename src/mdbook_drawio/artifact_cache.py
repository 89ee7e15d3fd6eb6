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
# Filename: src/mdbook_drawio/artifact_cache.py

"""
The flat directory holding generated SVGs, shared by every directive in a run.

One `ArtifactCache` is created per run and handed to the preprocessor. Access
is sequential; running chapters in parallel would require a lock per artifact
file name so two directives cannot regenerate the same SVG at once.
"""

import logging
from pathlib import Path, PurePath

logger = logging.getLogger(__name__)


class ArtifactCache:
    def __init__(self, directory, result_dir: str, image_format: str = "svg"):
        self.directory = Path(directory)
        self.result_dir = result_dir
        self.image_format = image_format
        self.rendered = 0
        self.reused = 0
        self.failed = 0
        self.exported = set()

    @classmethod
    def for_book(cls, ctx, config) -> "ArtifactCache":
        """Places the cache at <book root>/<book.src>/<result-dir>."""
        return cls(ctx.source_dir / config.result_dir, config.result_dir)

    def artifact_name(self, source, page: int) -> str:
        """`diagrams/arch.drawio`, page 2 -> `arch-page-2.svg`."""
        return f"{PurePath(source).stem}-page-{page}.{self.image_format}"

    def artifact_path(self, source, page: int) -> Path:
        return self.directory / self.artifact_name(source, page)

    def ensure(self) -> Path:
        """Creates the cache directory if it is missing. Raises OSError on failure."""
        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory

    def mark_exported(self, artifact) -> None:
        self.exported.add(Path(artifact))
        self.rendered += 1

    def exported_this_run(self, artifact) -> bool:
        """True once the artifact has been written by this run; it is never exported twice."""
        return Path(artifact) in self.exported

    def summary(self) -> str:
        return (f"{self.rendered} rendered, {self.reused} reused from cache, "
                f"{self.failed} failed")

    def __repr__(self):
        return f"ArtifactCache(directory={str(self.directory)!r}, result_dir={self.result_dir!r})"

# === End of src/mdbook_drawio/artifact_cache.py ===
