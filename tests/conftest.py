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
# Filename: tests/conftest.py

import os
import sys

# Add the 'src' directory to the Python path so the package can be imported
# without being installed.
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
src_path = os.path.join(project_root, 'src')

if src_path not in sys.path:
    sys.path.insert(0, src_path)

import pytest

from mdbook_drawio.drawio_export import DrawioExportError

DRAWIO_ENV_VARS = ("MDBOOK_DRAWIO_RESULT_DIR", "MDBOOK_DRAWIO_BIN",
                   "MDBOOK_DRAWIO_FORCE_RENDER", "MDBOOK_DRAWIO_LOG")


@pytest.fixture(autouse=True)
def clean_drawio_env(monkeypatch):
    """Keeps overrides from the developer's shell (or a loaded .env) out of the tests."""
    for name in DRAWIO_ENV_VARS:
        # setenv first so monkeypatch removes anything a test loads via .env
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def book_root(tmp_path):
    """A book root with an empty src/ and one diagram at diagrams/x.drawio."""
    root = tmp_path / "book"
    (root / "src").mkdir(parents=True)
    (root / "diagrams").mkdir()
    (root / "diagrams" / "x.drawio").write_text("<mxfile/>", encoding="utf-8")
    return root


class FakeExporter:
    """Stands in for drawio: records calls and writes the SVG newer than its source."""

    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def __call__(self, drawio_bin, source, page, output):
        self.calls.append((drawio_bin, str(source), page, str(output)))
        if self.fail:
            raise DrawioExportError(f"Output file was not created: {output}")
        with open(output, 'w', encoding='utf-8') as f:
            f.write("<svg/>")
        if os.path.exists(source):
            newer = os.path.getmtime(source) + 10
            os.utime(output, (newer, newer))


@pytest.fixture
def fake_exporter():
    return FakeExporter()


@pytest.fixture
def failing_exporter():
    return FakeExporter(fail=True)


def make_chapter(name, content, path=None, sub_items=None):
    """Builds a book item in the shape mdBook serialises."""
    return {
        "Chapter": {
            "name": name,
            "content": content,
            "number": None,
            "sub_items": sub_items or [],
            "path": path,
            "source_path": path,
            "parent_names": [],
        }
    }

# === End of tests/conftest.py ===
