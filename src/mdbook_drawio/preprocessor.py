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
# Filename: src/mdbook_drawio/preprocessor.py

"""
Replaces drawio directives in every chapter of a book with SVG image links.

For each chapter (depth-first, a parent before its children) every directive
is handled left to right:

1.  The diagram path is resolved against the book root.
2.  The SVG name is derived from the diagram's file stem and the page.
3.  The cache directory is created if needed.
4.  The link from the chapter to the SVG is computed.
5.  The SVG is exported with drawio unless the cached copy is up to date.
6.  The directive is replaced with a Markdown image pointing at the SVG.

A diagram that fails to export never fails the build: the error is logged and
the link is emitted anyway, so the rendered page shows a broken image naming
the expected file. Only a malformed book structure propagates as an error.
"""

import logging
from functools import partial

from mdbook_drawio import freshness
from mdbook_drawio.artifact_cache import ArtifactCache
from mdbook_drawio.book import Book, Chapter
from mdbook_drawio.config_loader import DrawioConfig
from mdbook_drawio.directives import DirectiveOccurrence, image_markup, rewrite
from mdbook_drawio.drawio_export import DrawioExportError, drawio_export
from mdbook_drawio.path_resolver import relative_path_from_chapter

logger = logging.getLogger(__name__)

PREPROCESSOR_NAME = "mdbook-drawio"


class DrawioPreprocessor:
    """
    Args:
        config (DrawioConfig): Options resolved for this run.
        root: The book root; diagram paths are relative to it.
        cache (ArtifactCache): The shared SVG directory.
        should_generate (callable): Freshness oracle `(source, artifact) -> bool`.
            Defaults to the timestamp check, or `always_generate` when
            `config.force_render` is set.
        exporter (callable): `(drawio_bin, source, page, output) -> None`,
            raising DrawioExportError on failure.
    """

    def __init__(self, config: DrawioConfig, root, cache: ArtifactCache,
                 should_generate=None, exporter=drawio_export):
        self.config = config
        self.root = root
        self.cache = cache
        if should_generate is None:
            should_generate = freshness.always_generate if config.force_render else freshness.should_generate
        self.should_generate = should_generate
        self.exporter = exporter

    @property
    def name(self) -> str:
        return PREPROCESSOR_NAME

    @staticmethod
    def supports_renderer(renderer: str) -> bool:
        """Every renderer can display the generated image links."""
        return True

    def run(self, ctx, book: Book) -> Book:
        """Rewrites every chapter of the book in place and returns it."""
        logger.debug(f"Running {self.name} for renderer '{ctx.renderer}' with {self.cache}")
        for chapter in book.iter_chapters():
            self.process_chapter(chapter)
        logger.info(f"{self.name}: {self.cache.summary()}")
        return book

    def process_chapter(self, chapter: Chapter) -> None:
        chapter.content = rewrite(chapter.content, partial(self.process_match, chapter))

    def process_match(self, chapter: Chapter, occurrence: DirectiveOccurrence) -> str:
        """Produces the replacement text for a single directive."""
        logger.debug(f"Processing directive in '{chapter.name}': {occurrence.text}")

        source = self.root / occurrence.path
        svg_path = self.cache.artifact_path(source, occurrence.page)
        link = relative_path_from_chapter(chapter.location, svg_path, self.cache.result_dir)
        logger.debug(f"  Absolute path: {source}")
        logger.debug(f"  SVG path: {svg_path}")
        logger.debug(f"  Relative link from chapter: {link}")

        try:
            self.cache.ensure()
            if self.cache.exported_this_run(svg_path):
                logger.debug("  Already exported during this run - reusing SVG")
                self.cache.reused += 1
            elif self.should_generate(source, svg_path):
                logger.debug("  Cache miss or outdated - regenerating diagram")
                self.exporter(self.config.drawio_bin, source, occurrence.page, svg_path)
                self.cache.mark_exported(svg_path)
            else:
                logger.debug("  Cache hit - reusing existing SVG")
                self.cache.reused += 1
        except (DrawioExportError, OSError) as e:
            self.cache.failed += 1
            logger.error(f"Could not export page {occurrence.page} of '{occurrence.path}' "
                         f"(chapter '{chapter.name}'): {e}")

        snippet = image_markup(link)
        logger.debug(f"Produced Markdown snippet for SVG: {snippet}")
        return snippet


def build_preprocessor(ctx, config: DrawioConfig, **kwargs) -> DrawioPreprocessor:
    """Creates a preprocessor whose cache lives under the book's source dir."""
    cache = ArtifactCache.for_book(ctx, config)
    return DrawioPreprocessor(config, ctx.root, cache, **kwargs)

# === End of src/mdbook_drawio/preprocessor.py ===
