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
# Filename: tests/test_freshness.py

"""
Unit tests for src/mdbook_drawio/freshness.py.
"""
import os
from unittest.mock import patch

from mdbook_drawio.freshness import always_generate, format_time, should_generate


def _touch(path, mtime):
    path.write_text("data", encoding="utf-8")
    os.utime(path, (mtime, mtime))


def test_missing_artifact_regenerates(tmp_path):
    source = tmp_path / "d.drawio"
    _touch(source, 1_000_000)
    assert should_generate(source, tmp_path / "d-page-0.svg") is True


def test_missing_artifact_regenerates_even_without_source(tmp_path):
    assert should_generate(tmp_path / "nope.drawio", tmp_path / "nope-page-0.svg") is True


def test_older_artifact_regenerates(tmp_path):
    source = tmp_path / "d.drawio"
    artifact = tmp_path / "d-page-0.svg"
    _touch(source, 2_000_000)
    _touch(artifact, 1_000_000)
    assert should_generate(source, artifact) is True


def test_newer_artifact_is_reused(tmp_path):
    source = tmp_path / "d.drawio"
    artifact = tmp_path / "d-page-0.svg"
    _touch(source, 1_000_000)
    _touch(artifact, 2_000_000)
    assert should_generate(source, artifact) is False


def test_equal_mtimes_are_reused(tmp_path):
    source = tmp_path / "d.drawio"
    artifact = tmp_path / "d-page-0.svg"
    _touch(source, 1_500_000)
    _touch(artifact, 1_500_000)
    assert should_generate(source, artifact) is False


def test_unreadable_source_regenerates(tmp_path):
    artifact = tmp_path / "d-page-0.svg"
    _touch(artifact, 2_000_000)
    # The source does not exist, so its mtime cannot be read.
    assert should_generate(tmp_path / "missing.drawio", artifact) is True


@patch('mdbook_drawio.freshness.os.path.getmtime')
def test_unreadable_artifact_mtime_regenerates(mock_getmtime, tmp_path):
    artifact = tmp_path / "d-page-0.svg"
    _touch(artifact, 2_000_000)
    mock_getmtime.side_effect = [100.0, PermissionError("denied")]

    assert should_generate(tmp_path / "d.drawio", artifact) is True
    assert mock_getmtime.call_count == 2


def test_always_generate(tmp_path):
    source = tmp_path / "d.drawio"
    artifact = tmp_path / "d-page-0.svg"
    _touch(source, 1_000_000)
    _touch(artifact, 2_000_000)
    assert always_generate(source, artifact) is True


def test_format_time():
    formatted = format_time(0)
    assert len(formatted) == len("1970-01-01 00:00:00")
    assert formatted[4] == "-" and formatted[13] == ":"

# === End of tests/test_freshness.py ===
