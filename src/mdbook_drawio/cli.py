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
# Filename: src/mdbook_drawio/cli.py

"""
Command-line entry point speaking mdBook's preprocessor protocol.

mdBook calls the preprocessor twice per build:

-   `mdbook-drawio supports <renderer>`: the exit status tells mdBook whether
    the renderer is supported (it always is).
-   `mdbook-drawio`: the `[context, book]` JSON is read from stdin and the
    rewritten book JSON is written to stdout.

All log output goes to stderr because stdout carries the book.

Usage (book.toml):
    [preprocessor.drawio]
    command = "mdbook-drawio"
    result-dir = "mdbook-drawio"
    drawio-bin = "drawio"

    # Debug logging for a single build
    MDBOOK_DRAWIO_LOG=debug mdbook build
"""

import argparse
import logging
import os
import sys

from colorama import Fore, Style, just_fix_windows_console

from mdbook_drawio.book import BookFormatError, dump_book, load_preprocessor_input
from mdbook_drawio.config_loader import load_drawio_config
from mdbook_drawio.preprocessor import PREPROCESSOR_NAME, DrawioPreprocessor, build_preprocessor

SUPPORTED_MDBOOK_VERSIONS = ("0.4", "0.5")
LOG_LEVEL_ENV = "MDBOOK_DRAWIO_LOG"

logger = logging.getLogger(__name__)


class ColorFormatter(logging.Formatter):
    LEVEL_COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }

    def __init__(self, fmt=None, use_color=True):
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record):
        message = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if color and self.use_color:
            return f"{color}{message}{Style.RESET_ALL}"
        return message


def build_log_handler(stream) -> logging.Handler:
    """A handler writing to `stream`, coloured only when it is a terminal."""
    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColorFormatter(f"%(levelname)s ({PREPROCESSOR_NAME}): %(message)s",
                                        use_color=stream.isatty()))
    return handler


def setup_logging(verbose: bool = False) -> int:
    """Configures stderr logging; returns the effective level."""
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.getenv(LOG_LEVEL_ENV, "INFO").strip().upper()
        level = getattr(logging, level_name, None)
        if not isinstance(level, int):
            level = logging.INFO

    just_fix_windows_console()
    logging.basicConfig(level=level, handlers=[build_log_handler(sys.stderr)])
    return level


def check_mdbook_version(version: str) -> bool:
    """Warns when mdBook's version is not one this preprocessor was tested against."""
    major_minor = ".".join(version.split(".")[:2]) if version else ""
    if major_minor in SUPPORTED_MDBOOK_VERSIONS:
        return True
    logger.warning(f"The {PREPROCESSOR_NAME} preprocessor was built for mdBook "
                   f"{' / '.join(SUPPORTED_MDBOOK_VERSIONS)}, but is being called from "
                   f"mdBook '{version or 'unknown'}'.")
    return False


def run_preprocessor(data, stdout) -> int:
    """Processes the raw `[context, book]` input and writes the book to `stdout`."""
    try:
        ctx, book = load_preprocessor_input(data)
        check_mdbook_version(ctx.mdbook_version)
        config = load_drawio_config(ctx)
        preprocessor = build_preprocessor(ctx, config)
        book = preprocessor.run(ctx, book)
    except BookFormatError as e:
        logger.error(f"Cannot process book: {e}")
        return 1

    stdout.write(dump_book(book))
    stdout.flush()
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog=PREPROCESSOR_NAME,
        description="mdBook preprocessor that embeds draw.io diagram pages as SVG images.",
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help=f"Enable debug logging (same as {LOG_LEVEL_ENV}=debug).")
    subparsers = parser.add_subparsers(dest='command')
    supports_parser = subparsers.add_parser('supports', help="Check whether a renderer is supported.")
    supports_parser.add_argument('renderer', help="Name of the mdBook renderer, e.g. 'html'.")
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command == 'supports':
        supported = DrawioPreprocessor.supports_renderer(args.renderer)
        logger.debug(f"Renderer '{args.renderer}' supported: {supported}")
        return 0 if supported else 1

    return run_preprocessor(sys.stdin.buffer.read(), sys.stdout)


if __name__ == "__main__":
    sys.exit(main())

# === End of src/mdbook_drawio/cli.py ===
