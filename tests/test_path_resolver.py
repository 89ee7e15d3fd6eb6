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
# Filename: tests/test_path_resolver.py

"""
Unit tests for src/mdbook_drawio/path_resolver.py.
"""
import pytest

from mdbook_drawio.path_resolver import chapter_depth, relative_path_from_chapter

TARGET = "/abs/book/src/mdbook-drawio/foo-page-1.svg"


@pytest.mark.parametrize("location, depth", [
    (None, 0),
    ("", 0),
    ("intro.md", 0),
    ("guide/setup.md", 1),
    ("guide/setup/index.md", 2),
    ("a/b/c/d.md", 3),
])
def test_chapter_depth(location, depth):
    assert chapter_depth(location) == depth


def test_root_chapter_uses_current_directory():
    assert relative_path_from_chapter("README.md", TARGET, "mdbook-drawio") == "./mdbook-drawio/foo-page-1.svg"


def test_chapter_without_location_uses_current_directory():
    assert relative_path_from_chapter(None, TARGET, "mdbook-drawio") == "./mdbook-drawio/foo-page-1.svg"


def test_depth_two_goes_up_twice():
    link = relative_path_from_chapter("guide/setup/index.md", TARGET, "mdbook-drawio")
    assert link == "../../mdbook-drawio/foo-page-1.svg"


def test_custom_result_dir():
    link = relative_path_from_chapter("guide/setup.md", TARGET, "generated")
    assert link == "../generated/foo-page-1.svg"


def test_only_the_target_filename_is_used():
    link = relative_path_from_chapter("intro.md", "/somewhere/else/bar-page-0.svg", "mdbook-drawio")
    assert link == "./mdbook-drawio/bar-page-0.svg"

# === End of tests/test_path_resolver.py ===
