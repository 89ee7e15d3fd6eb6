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
# Filename: src/mdbook_drawio/directives.py

"""
Parses `{{#drawio ...}}` directives and splices replacements into chapter text.

Directive syntax (one line, attributes in this order):

    {{#drawio path="diagrams/architecture.drawio" page=0}}

Anything after the page number and before the closing braces is ignored. Text
that looks like a directive but does not match, such as a missing quote, a
missing page or a non-numeric page, is left exactly as written.

Rewriting is split into three steps so each can be tested on its own:
`find_directives()` collects the spans, the caller computes one replacement
per span, and `splice()` assembles the new text.
"""

import re
from dataclasses import dataclass
from typing import Callable

DIRECTIVE_REGEX = re.compile(
    r'\{\{#drawio[ \t]+path="([^"\n]+)"[ \t]+page=([0-9]+)[^}\n]*\}\}'
)


@dataclass(frozen=True)
class DirectiveOccurrence:
    path: str
    page: int
    start: int
    end: int
    text: str


def directive_regex() -> re.Pattern:
    """Returns the compiled regular expression that matches drawio directives."""
    return DIRECTIVE_REGEX


def find_directives(text: str) -> list[DirectiveOccurrence]:
    """Returns every directive in `text`, left to right."""
    return [
        DirectiveOccurrence(
            path=match.group(1),
            page=int(match.group(2)),
            start=match.start(),
            end=match.end(),
            text=match.group(0),
        )
        for match in DIRECTIVE_REGEX.finditer(text)
    ]


def splice(text: str, occurrences: list[DirectiveOccurrence], replacements: list[str]) -> str:
    """Replaces each occurrence's span with the matching replacement string."""
    if len(occurrences) != len(replacements):
        raise ValueError(f"Got {len(replacements)} replacements for {len(occurrences)} directives.")

    parts = []
    cursor = 0
    for occurrence, replacement in zip(occurrences, replacements):
        if occurrence.start < cursor:
            raise ValueError(f"Directive spans overlap or are out of order at offset {occurrence.start}.")
        parts.append(text[cursor:occurrence.start])
        parts.append(replacement)
        cursor = occurrence.end
    parts.append(text[cursor:])
    return "".join(parts)


def rewrite(text: str, substitute: Callable[[DirectiveOccurrence], str]) -> str:
    """Replaces every directive with `substitute(occurrence)`, called left to right."""
    occurrences = find_directives(text)
    if not occurrences:
        return text
    replacements = [substitute(occurrence) for occurrence in occurrences]
    return splice(text, occurrences, replacements)


LINK_NEEDS_BRACKETS = re.compile(r'[\s()<>]')


def link_destination(link: str) -> str:
    """
    Formats `link` as a Markdown link destination.

    A bare destination ends at the first space and must balance its
    parentheses, so links containing either are wrapped in `<...>`.
    """
    if not LINK_NEEDS_BRACKETS.search(link):
        return link
    escaped = link.replace("<", "\\<").replace(">", "\\>")
    return f"<{escaped}>"


def image_markup(link: str) -> str:
    """
    Markdown image for a generated SVG.

    The alt text names the expected path, so a failed export shows up in the
    rendered book as a broken image that says where the SVG should have been.
    """
    alt = link.replace("[", "\\[").replace("]", "\\]")
    return f"![Diagram not found at {alt}]({link_destination(link)})"


# === End of src/mdbook_drawio/directives.py ===
