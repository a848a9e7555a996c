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

"""Angular-style commit messages.

A thin layer over :class:`~commitkit.parser.CommitParser` using the
Angular commit conventions:

- ``type(scope): subject`` headers (scope may not be empty),
- ``BREAKING CHANGE:`` and ``DEPRECATED:`` notes,
- ``#`` comment lines and the ``git commit --verbose`` scissor line,
- ``fixup!``, ``squash!`` and ``revert`` prefixes, detected and stripped
  before parsing.

Messages read with :data:`GIT_LOG_FORMAT_FOR_PARSING` carry ``-hash-``,
``-shortHash-`` and ``-author-`` trailers, which the parser stores as
meta fields.

Usage::

    from commitkit.messages import parse_commit_message

    msg = parse_commit_message('fix(core): handle nulls\\n\\nDEPRECATED: old API')
    assert msg.deprecations[0].text == 'old API'
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from commitkit.config import ParserOptions, make_notes_pattern
from commitkit.parser import CommitNote, CommitParser, CommitReference

# git log placeholders stored as meta fields on every commit.
COMMIT_FIELDS: dict[str, str] = {
    'hash': '%H',
    'shortHash': '%h',
    'author': '%aN',
}


def commit_fields_as_format(fields: dict[str, str]) -> str:
    """Render ``fields`` as ``-name-`` blocks for a ``git log --format``.

    >>> commit_fields_as_format({'hash': '%H'})
    '%n-hash-%n%H'
    """
    return ''.join(f'%n-{name}-%n{placeholder}' for name, placeholder in fields.items())


GIT_LOG_FORMAT_FOR_PARSING = f'%B{commit_fields_as_format(COMMIT_FIELDS)}'

BREAKING_CHANGE = 'BREAKING CHANGE'
DEPRECATED = 'DEPRECATED'

FIXUP_PREFIX_RE = re.compile(r'^fixup! ', re.IGNORECASE)
SQUASH_PREFIX_RE = re.compile(r'^squash! ', re.IGNORECASE)
REVERT_PREFIX_RE = re.compile(r'^revert:? ', re.IGNORECASE)

ANGULAR_OPTIONS = ParserOptions(
    comment_char='#',
    header_pattern=re.compile(r'^(\w+)(?:\(([^)]+)\))?: (.*)$'),
    header_correspondence=('type', 'scope', 'subject'),
    note_keywords=(BREAKING_CHANGE, DEPRECATED),
    notes_pattern=make_notes_pattern(r'^\s*({keywords}): ?(.*)'),
)


@dataclass(frozen=True)
class CommitMessage:
    """A parsed Angular-style commit message.

    Text attributes are ``''`` rather than ``None`` when absent.

    Attributes:
        full_text: The message as given, prefixes included.
        header: The header line, prefixes stripped.
        type: Commit type (``feat``, ``fix``, ...).
        scope: Commit scope.
        subject: Header text after the colon.
        body: Body text.
        footer: Footer text.
        references: Issue references.
        breaking_changes: ``BREAKING CHANGE`` notes.
        deprecations: ``DEPRECATED`` notes.
        is_fixup: Whether the message starts with ``fixup!``.
        is_squash: Whether the message starts with ``squash!``.
        is_revert: Whether the message starts with ``revert`` / ``revert:``.
        author: ``-author-`` meta field, if present.
        hash: ``-hash-`` meta field, if present.
        short_hash: ``-shortHash-`` meta field, if present.
    """

    full_text: str
    header: str
    type: str
    scope: str
    subject: str
    body: str
    footer: str
    references: tuple[CommitReference, ...]
    breaking_changes: tuple[CommitNote, ...]
    deprecations: tuple[CommitNote, ...]
    is_fixup: bool
    is_squash: bool
    is_revert: bool
    author: str | None = None
    hash: str | None = None
    short_hash: str | None = None


_PARSER = CommitParser(ANGULAR_OPTIONS)


def strip_prefixes(full_text: str) -> str:
    """Remove one leading ``fixup!``, ``squash!`` and ``revert`` prefix each, in that order."""
    stripped = FIXUP_PREFIX_RE.sub('', full_text, count=1)
    stripped = SQUASH_PREFIX_RE.sub('', stripped, count=1)
    return REVERT_PREFIX_RE.sub('', stripped, count=1)


def parse_commit_message(full_text: str) -> CommitMessage:
    """Parse an Angular-style commit message.

    Args:
        full_text: The raw message, optionally with git log meta fields.

    Returns:
        The parsed :class:`CommitMessage`.

    Raises:
        InvalidInputError: If the message is empty once prefixes are stripped.
    """
    commit = _PARSER.parse(strip_prefixes(full_text))
    return CommitMessage(
        full_text=full_text,
        header=commit.header or '',
        type=commit.type or '',
        scope=commit.scope or '',
        subject=commit.subject or '',
        body=commit.body or '',
        footer=commit.footer or '',
        references=commit.references,
        breaking_changes=tuple(note for note in commit.notes if note.title == BREAKING_CHANGE),
        deprecations=tuple(note for note in commit.notes if note.title == DEPRECATED),
        is_fixup=FIXUP_PREFIX_RE.search(full_text) is not None,
        is_squash=SQUASH_PREFIX_RE.search(full_text) is not None,
        is_revert=REVERT_PREFIX_RE.search(full_text) is not None,
        author=commit.fields.get('author') or None,
        hash=commit.fields.get('hash') or None,
        short_hash=commit.fields.get('shortHash') or None,
    )


__all__ = [
    'ANGULAR_OPTIONS',
    'BREAKING_CHANGE',
    'COMMIT_FIELDS',
    'DEPRECATED',
    'GIT_LOG_FORMAT_FOR_PARSING',
    'CommitMessage',
    'commit_fields_as_format',
    'parse_commit_message',
    'strip_prefixes',
]
