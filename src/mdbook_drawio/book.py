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
# Filename: src/mdbook_drawio/book.py

"""
Thin wrappers around the JSON that mdBook exchanges with preprocessors.

mdBook writes a two-element JSON array `[context, book]` to the preprocessor's
stdin and reads the (possibly modified) book back from stdout. The wrappers in
this module never copy the underlying dictionaries: chapter content is edited
in place, so every field mdBook sends (numbers, parent names, fields added by
newer mdBook releases) round-trips untouched.

Key Objects:
-   `PreprocessorContext`: the book root, the merged `book.toml` table, the
    renderer name and the mdBook version.
-   `Book`: the top-level item list. mdBook 0.4 calls it `sections`, 0.5
    calls it `items`; both are accepted.
-   `Chapter`: a single `{"Chapter": {...}}` item with mutable `content`.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator


class BookFormatError(ValueError):
    """Raised when the book or context JSON does not have the expected shape."""


@dataclass
class PreprocessorContext:
    root: Path
    config: dict = field(default_factory=dict)
    renderer: str = ""
    mdbook_version: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "PreprocessorContext":
        if not isinstance(data, dict):
            raise BookFormatError("Preprocessor context must be a JSON object.")
        if "root" not in data:
            raise BookFormatError("Preprocessor context is missing the 'root' field.")
        config = data.get("config")
        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise BookFormatError("Preprocessor context 'config' must be a JSON object.")
        return cls(
            root=Path(data["root"]),
            config=config,
            renderer=data.get("renderer", ""),
            mdbook_version=data.get("mdbook_version", ""),
        )

    def get(self, dotted_key: str, default=None):
        """Looks up a dotted key such as 'preprocessor.drawio.result-dir'."""
        node = self.config
        for part in dotted_key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    @property
    def source_dir(self) -> Path:
        """The book's markdown source directory (`[book] src`, default 'src')."""
        src = self.get('book.src', 'src') or 'src'
        return self.root / src


class Chapter:
    """A chapter node. Wraps the inner dict of a `{"Chapter": {...}}` item."""

    def __init__(self, data: dict):
        if not isinstance(data, dict):
            raise BookFormatError("Chapter item must be a JSON object.")
        if not isinstance(data.get("content"), str):
            raise BookFormatError(f"Chapter '{data.get('name', '?')}' has no text content.")
        self._data = data

    @property
    def name(self) -> str:
        return self._data.get("name", "")

    @property
    def content(self) -> str:
        return self._data["content"]

    @content.setter
    def content(self, value: str):
        self._data["content"] = value

    @property
    def location(self) -> str | None:
        """The chapter's path relative to the source dir; None for draft chapters."""
        return self._data.get("path")

    @property
    def sub_items(self) -> list:
        items = self._data.get("sub_items", [])
        if not isinstance(items, list):
            raise BookFormatError(f"Chapter '{self.name}' has malformed 'sub_items'.")
        return items

    def __repr__(self):
        return f"Chapter(name={self.name!r}, location={self.location!r})"


def chapter_from_item(item) -> Chapter | None:
    """Returns the Chapter for a book item, or None for separators and part titles."""
    if isinstance(item, dict) and "Chapter" in item:
        return Chapter(item["Chapter"])
    return None


class Book:
    def __init__(self, data: dict):
        if not isinstance(data, dict):
            raise BookFormatError("Book must be a JSON object.")
        if "sections" in data:
            self._key = "sections"
        elif "items" in data:
            self._key = "items"
        else:
            raise BookFormatError("Book has neither 'sections' nor 'items'.")
        if not isinstance(data[self._key], list):
            raise BookFormatError(f"Book '{self._key}' must be a list.")
        self._data = data

    @property
    def sections(self) -> list:
        return self._data[self._key]

    def iter_chapters(self) -> Iterator[Chapter]:
        """Yields every chapter depth-first, parents before their children."""
        def walk(items):
            for item in items:
                chapter = chapter_from_item(item)
                if chapter is None:
                    continue
                yield chapter
                yield from walk(chapter.sub_items)
        yield from walk(self.sections)

    def to_json(self) -> dict:
        return self._data


def load_preprocessor_input(data) -> tuple[PreprocessorContext, Book]:
    """
    Parses the `[context, book]` payload mdBook writes to stdin.

    mdBook always sends UTF-8, so raw bytes are decoded as UTF-8 whatever the
    platform's locale encoding is. Already-decoded text is accepted as well.
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            data = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise BookFormatError(f"Preprocessor input is not valid UTF-8: {e}") from e

    try:
        payload = json.loads(data)
    except json.JSONDecodeError as e:
        raise BookFormatError(f"Preprocessor input is not valid JSON: {e}") from e

    if not isinstance(payload, list) or len(payload) != 2:
        raise BookFormatError("Preprocessor input must be a JSON array of [context, book].")

    context, book = payload
    return PreprocessorContext.from_json(context), Book(book)


def dump_book(book: Book) -> str:
    return json.dumps(book.to_json())

# === End of src/mdbook_drawio/book.py ===
