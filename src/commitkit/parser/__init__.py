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

"""Commit message parsing.

This subpackage turns one raw commit message into a :class:`Commit`:
header fields, body, footer, notes, references, mentions, meta fields and
the revert descriptor. Every matcher comes from
:class:`~commitkit.config.ParserOptions`.

Usage::

    from commitkit.parser import CommitParser, parse_commit

    # Using the convenience function (default options):
    commit = parse_commit('fix(core): patch bug\\n\\nCloses #123')
    assert commit.type == 'fix'
    assert commit.references[0].issue == '123'

    # Using a parser instance (reused across a history):
    parser = CommitParser(ParserOptions(comment_char='#'))
    commit = parser.parse(message)
"""

from commitkit.parser._lines import SCISSOR, LineCursor, scan_lines
from commitkit.parser._parser import BREAKING_CHANGE_TITLE, CommitParser
from commitkit.parser._references import ReferenceResolver
from commitkit.parser._regex import ParserRegexes, get_parser_regexes
from commitkit.parser._stream import ErrorHandler, ErrorPolicy, parse_commits, parse_commits_async
from commitkit.parser._types import Commit, CommitNote, CommitReference

# Module-level singleton for convenience.
_DEFAULT_PARSER = CommitParser()


def parse_commit(raw: str) -> Commit:
    """Parse a single commit message with the default options.

    Convenience wrapper around :meth:`CommitParser.parse`.

    Args:
        raw: The full commit message.

    Returns:
        The parsed :class:`Commit`.
    """
    return _DEFAULT_PARSER.parse(raw)


__all__ = [
    'BREAKING_CHANGE_TITLE',
    'SCISSOR',
    'Commit',
    'CommitNote',
    'CommitParser',
    'CommitReference',
    'ErrorHandler',
    'ErrorPolicy',
    'LineCursor',
    'ParserRegexes',
    'ReferenceResolver',
    'get_parser_regexes',
    'parse_commit',
    'parse_commits',
    'parse_commits_async',
    'scan_lines',
]
