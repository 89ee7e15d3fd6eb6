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
# Filename: src/mdbook_drawio/drawio_export.py

"""
Exports one page of a draw.io diagram to SVG with the draw.io desktop CLI.

The export runs headless: GPU acceleration is switched off through the
environment and Electron's sandbox is disabled, which is required on most CI
runners and in containers. The process output is only logged. Whether the
export worked is judged by the exit status and by the SVG being on disk
afterwards.

No timeout is applied, so a hung `drawio` process hangs the build.
"""

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

EXPORT_FORMAT = "svg"


class DrawioExportError(RuntimeError):
    """Raised when drawio could not produce the requested SVG."""


def build_export_command(drawio_bin: str, source, page: int, output) -> list[str]:
    return [
        drawio_bin,
        '-x', str(source),
        '-p', str(page),
        '-f', EXPORT_FORMAT,
        '-o', str(output),
        '--no-sandbox',
    ]


def drawio_export(drawio_bin: str, source, page: int, output) -> None:
    """
    Invokes drawio to export a single diagram page.

    Args:
        drawio_bin (str): Name or path of the drawio executable.
        source: The .drawio file.
        page (int): The page to export, passed to drawio unchanged.
        output: Where the SVG must be written.

    Raises:
        DrawioExportError: drawio could not be launched (including arguments
            the OS rejects, such as a path with a NUL byte), exited with a
            non-zero status, or did not create the output file.
    """
    cmd = build_export_command(drawio_bin, source, page, output)
    env = dict(os.environ, ELECTRON_DISABLE_GPU="1")

    logger.debug("Executing drawio command:")
    logger.debug(f"  Input file: {source}")
    logger.debug(f"  Output file: {output}")
    logger.debug(f"  Page: {page}")
    logger.debug(f"  Full command: {' '.join(cmd)}")

    try:
        result = subprocess.run(cmd, env=env, capture_output=True, text=True,
                                encoding='utf-8', errors='replace')
    except (OSError, ValueError) as e:
        logger.debug(f"Failed to execute drawio command '{drawio_bin}': {e}")
        raise DrawioExportError(f"Could not launch '{drawio_bin}': {e}") from e

    logger.debug(f"Command exit status: {result.returncode}")
    logger.debug(f"Command stdout: {result.stdout.strip()}")
    if result.stderr:
        logger.debug(f"Command stderr: {result.stderr.strip()}")

    if result.returncode != 0:
        raise DrawioExportError(f"'{drawio_bin}' exited with status {result.returncode} "
                                f"while exporting page {page} of {source}")
    if not os.path.exists(output):
        raise DrawioExportError(f"Output file was not created: {output}")

# === End of src/mdbook_drawio/drawio_export.py ===
