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
# Filename: src/mdbook_drawio/config_loader.py

"""
Preprocessor Configuration Loader (config_loader.py)

Resolves the preprocessor's options once per run. Options are read from the
`[preprocessor.drawio]` table of `book.toml`, which mdBook forwards inside the
preprocessor context, and can be overridden by environment variables.

Key Features:
-   **Loads `.env`**: A `.env` file at the book root is loaded before the
    environment is consulted, so CI machines can point at a different
    `drawio` binary without touching `book.toml`. Variables that are already
    set in the environment take precedence over the file.
-   **Safe Value Retrieval**: `get_config_value()` converts values to the
    requested type (str, int, bool), logging a warning and returning the
    fallback when a value cannot be converted.
-   **Validation**: `result-dir` must be a single directory name, because
    generated links assume the cache sits directly under the book's `src/`.

Supported options:

    [preprocessor.drawio]
    result-dir = "mdbook-drawio"   # MDBOOK_DRAWIO_RESULT_DIR
    drawio-bin = "drawio"          # MDBOOK_DRAWIO_BIN
    force-render = false           # MDBOOK_DRAWIO_FORCE_RENDER

Usage:
    from mdbook_drawio.config_loader import load_drawio_config

    config = load_drawio_config(ctx)
    print(config.drawio_bin)
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

CONFIG_SECTION = "preprocessor.drawio"
DOTENV_FILENAME = ".env"

DEFAULT_RESULT_DIR = "mdbook-drawio"
DEFAULT_DRAWIO_BIN = "drawio"

ENV_OVERRIDES = {
    'result-dir': 'MDBOOK_DRAWIO_RESULT_DIR',
    'drawio-bin': 'MDBOOK_DRAWIO_BIN',
    'force-render': 'MDBOOK_DRAWIO_FORCE_RENDER',
}

_TRUE_STRINGS = {'1', 'true', 'yes', 'on'}
_FALSE_STRINGS = {'0', 'false', 'no', 'off'}

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawioConfig:
    result_dir: str = DEFAULT_RESULT_DIR
    drawio_bin: str = DEFAULT_DRAWIO_BIN
    force_render: bool = False


def load_env_vars(book_root) -> bool:
    """Loads environment variables from a .env file located at the book root."""
    dotenv_path = os.path.join(str(book_root), DOTENV_FILENAME)
    if not os.path.exists(dotenv_path):
        logger.debug(f".env file not found at {dotenv_path}.")
        return False
    if load_dotenv(dotenv_path, override=False):
        logger.debug(f"Successfully loaded .env file from: {dotenv_path}")
        return True
    logger.warning(f"Found .env file at {dotenv_path}, but it may be empty or failed to load.")
    return False


def get_config_value(config: dict, key: str, fallback=None, value_type=str):
    """
    Gets a typed value from the `[preprocessor.drawio]` table.

    The environment variable mapped to `key` in ENV_OVERRIDES wins over the
    table entry.

    Args:
        config (dict): The `[preprocessor.drawio]` table (may be empty).
        key (str): The option name as written in book.toml, e.g. 'drawio-bin'.
        fallback: Returned when the option is absent or cannot be converted.
        value_type (type): str, int or bool.

    Returns:
        The option converted to value_type, or the fallback.
    """
    raw_value = None
    origin = f"[{CONFIG_SECTION}]/{key}"

    env_name = ENV_OVERRIDES.get(key)
    if env_name and os.getenv(env_name) is not None:
        raw_value = os.getenv(env_name)
        origin = f"${env_name}"
    elif isinstance(config, dict) and key in config:
        raw_value = config[key]

    if raw_value is None:
        return fallback

    if value_type == bool:
        if isinstance(raw_value, bool):
            return raw_value
        cleaned_value = str(raw_value).strip().lower()
        if cleaned_value in _TRUE_STRINGS:
            return True
        if cleaned_value in _FALSE_STRINGS:
            return False
        logger.warning(f"Config: Error converting {origin} value '{raw_value}' to bool. Using fallback: {fallback}")
        return fallback
    elif value_type == int:
        try:
            return int(raw_value)
        except (TypeError, ValueError):
            logger.warning(f"Config: Error converting {origin} value '{raw_value}' to int. Using fallback: {fallback}")
            return fallback
    elif value_type == str:
        if not isinstance(raw_value, (str, int, float)) or isinstance(raw_value, bool):
            logger.warning(f"Config: {origin} must be a string, got '{raw_value}'. Using fallback: {fallback}")
            return fallback
        return str(raw_value).strip()
    else:
        logger.error(f"Config: Unsupported value_type '{value_type.__name__}' for key '{key}'. Using fallback.")
        return fallback


def _is_single_segment(name: str) -> bool:
    return bool(name) and name not in ('.', '..') and '/' not in name and '\\' not in name


def load_drawio_config(ctx) -> DrawioConfig:
    """Resolves the run's DrawioConfig from a PreprocessorContext."""
    load_env_vars(ctx.root)

    section = ctx.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        logger.warning(f"Config: [{CONFIG_SECTION}] is not a table. Using defaults.")
        section = {}

    result_dir = get_config_value(section, 'result-dir', fallback=DEFAULT_RESULT_DIR)
    if not _is_single_segment(result_dir):
        logger.warning(f"Config: result-dir '{result_dir}' must be a single directory name. "
                       f"Using default: {DEFAULT_RESULT_DIR}")
        result_dir = DEFAULT_RESULT_DIR

    drawio_bin = get_config_value(section, 'drawio-bin', fallback=DEFAULT_DRAWIO_BIN)
    if not drawio_bin:
        drawio_bin = DEFAULT_DRAWIO_BIN

    force_render = get_config_value(section, 'force-render', fallback=False, value_type=bool)

    config = DrawioConfig(result_dir=result_dir, drawio_bin=drawio_bin, force_render=force_render)
    logger.debug(f"Resolved configuration: {config}")
    return config

# === End of src/mdbook_drawio/config_loader.py ===
