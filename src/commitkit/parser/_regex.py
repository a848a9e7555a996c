# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Matchers built from :class:`~commitkit.config.ParserOptions`.

Pure functions depending only on ``re``. Keywords, prefixes and actions
are joined into alternations verbatim, so entries may themselves be
regular expressions.

Matcher shapes::

    notes            ^[\\s|*]*(KEYWORDS)[:\\s]+(.*)                      (i)
    reference parts  (?:.*?)??\\s*([\\w.\\/-]*?)??(PREFIXES)([\\w-]*\\d+)   (i unless case-sensitive)
    references       (ACTIONS)(?:\\s+(.*?))(?=(?:ACTIONS)|$)            (i)
                     ()(.+)                        when no actions
    mentions         @([\\w-]+)
    url              \\b(?:https?)://(?:www\\.)?([-a-zA-Z0-9@:%_+.~#?&/=])+\\b
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from commitkit.config import ParserOptions

# Matches nothing, anywhere.
NO_MATCH: re.Pattern[str] = re.compile(r'(?!.*)')

# Treats the whole text as one actionless segment.
PASS_THROUGH: re.Pattern[str] = re.compile(r'()(.+)')

MENTIONS: re.Pattern[str] = re.compile(r'@([\w-]+)')
URL: re.Pattern[str] = re.compile(r'\b(?:https?)://(?:www\.)?([-a-zA-Z0-9@:%_+.~#?&/=])+\b')

# (field name, group name or 1-based index, or None when the pattern has
# no such group).
Correspondence = tuple[tuple[str, str | int | None], ...]


@dataclass(frozen=True)
class ParserRegexes:
    """Every matcher and resolved correspondence one parser needs."""

    notes: re.Pattern[str]
    reference_parts: re.Pattern[str]
    references: re.Pattern[str]
    mentions: re.Pattern[str]
    url: re.Pattern[str]
    header_fields: Correspondence
    breaking_header_fields: Correspondence
    merge_fields: Correspondence
    revert_fields: Correspondence


def join(parts: Iterable[str], joiner: str) -> str:
    """Strip each part, drop empty ones, and join the rest.

    >>> join([' fix ', '', 'closes'], '|')
    'fix|closes'
    """
    return joiner.join(part.strip() for part in parts if part.strip())


def iter_matches(pattern: re.Pattern[str], text: str) -> Iterator[re.Match[str]]:
    """Yield successive non-overlapping matches of ``pattern`` in ``text``.

    Each search resumes where the previous match ended; a zero-width match
    moves the offset forward by one so the loop always terminates.
    """
    pos = 0
    while pos <= len(text):
        match = pattern.search(text, pos)
        if match is None:
            return
        yield match
        pos = match.end() if match.end() > match.start() else match.end() + 1


def get_notes_regex(options: ParserOptions) -> re.Pattern[str]:
    keywords = join(options.note_keywords, '|')
    if not keywords:
        return NO_MATCH
    if options.notes_pattern is not None:
        return options.notes_pattern(keywords)
    return re.compile(rf'^[\s|*]*({keywords})[:\s]+(.*)', re.IGNORECASE)


def get_reference_parts_regex(options: ParserOptions) -> re.Pattern[str]:
    prefixes = join(options.issue_prefixes, '|')
    if not prefixes:
        return NO_MATCH
    flags = 0 if options.issue_prefixes_case_sensitive else re.IGNORECASE
    return re.compile(rf'(?:.*?)??\s*([\w.\/-]*?)??({prefixes})([\w-]*\d+)', flags)


def get_references_regex(options: ParserOptions) -> re.Pattern[str]:
    actions = join(options.reference_actions, '|')
    if not actions:
        return PASS_THROUGH
    return re.compile(rf'({actions})(?:\s+(.*?))(?=(?:{actions})|$)', re.IGNORECASE)


def resolve_correspondence(pattern: re.Pattern[str] | None, names: Iterable[str]) -> Correspondence:
    """Map field names onto the groups of ``pattern``.

    A pattern with named groups is read by name; otherwise the names are
    assigned to the numbered groups in order. Names without a matching
    group resolve to ``None`` and always produce ``None`` values.
    """
    if pattern is None:
        return ()
    resolved: list[tuple[str, str | int | None]] = []
    for index, name in enumerate(names, start=1):
        if pattern.groupindex:
            resolved.append((name, name if name in pattern.groupindex else None))
        else:
            resolved.append((name, index if index <= pattern.groups else None))
    return tuple(resolved)


def read_correspondence(match: re.Match[str], correspondence: Correspondence) -> dict[str, str | None]:
    """Read the resolved groups of ``match``; empty captures become ``None``."""
    return {name: (match.group(group) or None) if group is not None else None for name, group in correspondence}


def get_parser_regexes(options: ParserOptions) -> ParserRegexes:
    """Build every matcher for ``options``.

    Args:
        options: Parser configuration.

    Returns:
        The matchers and correspondences for one parser instance.
    """
    return ParserRegexes(
        notes=get_notes_regex(options),
        reference_parts=get_reference_parts_regex(options),
        references=get_references_regex(options),
        mentions=MENTIONS,
        url=URL,
        header_fields=resolve_correspondence(options.header_pattern, options.header_correspondence),
        breaking_header_fields=resolve_correspondence(
            options.breaking_header_pattern,
            options.header_correspondence,
        ),
        merge_fields=resolve_correspondence(options.merge_pattern, options.merge_correspondence),
        revert_fields=resolve_correspondence(options.revert_pattern, options.revert_correspondence),
    )
