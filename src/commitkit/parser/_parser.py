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

"""The commit message state machine.

Parse phases::

    lines ──► merge? ──► header ──► header references
                                         │
                 ┌───────────────────────┘
                 ▼
            ┌─────────┐   per line, in priority order:
            │  loop   │     1. -field- meta blocks
            └────┬────┘     2. notes (+ continuation lines)
                 │          3. body, or footer once a reference is seen
                 ▼
    breaking header note ──► mentions (raw) ──► revert (raw) ──► cleanup

Body and footer never interleave: the first note or reference line ends
the body for good, and later reference-free lines go to the footer.
"""

from __future__ import annotations

import re

from commitkit.config import ParserOptions
from commitkit.parser._lines import LineCursor, append_line, scan_lines, trim_newlines
from commitkit.parser._references import ReferenceResolver
from commitkit.parser._regex import get_parser_regexes, iter_matches, read_correspondence
from commitkit.parser._types import Commit, _DraftCommit, _DraftNote

# Title of the note synthesized from a breaking header.
BREAKING_CHANGE_TITLE = 'BREAKING CHANGE'


def _group(match: re.Match[str], index: int) -> str | None:
    """Group ``index`` of ``match``, or ``None`` when the pattern has fewer groups."""
    return match.group(index) if match.re.groups >= index else None


class _ParseState:
    """Cursor and draft record for one call to :meth:`CommitParser.parse`."""

    def __init__(self, cursor: LineCursor) -> None:
        self.cursor = cursor
        self.commit = _DraftCommit()


class CommitParser:
    """Parses raw commit messages into :class:`Commit` records.

    Matchers are built once, in the constructor; :meth:`parse` keeps no
    state between calls, so one parser can be reused for a whole history.

    Args:
        options: Grammar configuration; defaults to :class:`ParserOptions`.
    """

    def __init__(self, options: ParserOptions | None = None) -> None:
        """Build the matchers for ``options``."""
        self.options = options or ParserOptions()
        self.regexes = get_parser_regexes(self.options)
        self.resolver = ReferenceResolver(self.regexes)

    def _parse_merge(self, state: _ParseState) -> bool:
        pattern = self.options.merge_pattern
        line = state.cursor.current()
        if pattern is None or not line:
            return False
        match = pattern.search(line)
        if match is None:
            return False
        state.cursor.advance()
        state.commit.merge = match.group(0) or None
        for name, value in read_correspondence(match, self.regexes.merge_fields).items():
            state.commit.assign(name, value)
        return True

    def _parse_header(self, state: _ParseState, is_merge: bool) -> None:
        commit = state.commit
        if is_merge:
            state.cursor.skip_blank()
        header = commit.header if commit.header is not None else state.cursor.advance()
        if not header:
            return
        commit.header = header

        fields = None
        if self.options.breaking_header_pattern is not None:
            match = self.options.breaking_header_pattern.search(header)
            if match is not None:
                fields = self.regexes.breaking_header_fields
        if fields is None and self.options.header_pattern is not None:
            match = self.options.header_pattern.search(header)
            if match is not None:
                fields = self.regexes.header_fields
        if fields is not None:
            for name, value in read_correspondence(match, fields).items():
                commit.assign(name, value)

    def _parse_meta(self, state: _ParseState) -> bool:
        """Consume ``-name-`` blocks; returns whether any field got a line."""
        pattern = self.options.field_pattern
        cursor = state.cursor
        if pattern is None:
            return False

        name: str | None = None
        parsed = False
        while cursor.available():
            line = cursor.lines[cursor.index]
            match = pattern.search(line)
            if match is not None:
                name = _group(match, 1) or None
                cursor.advance()
                continue
            if name is None:
                break
            state.commit.fields[name] = append_line(state.commit.fields.get(name), line)
            parsed = True
            cursor.advance()
        return parsed

    def _open_note(self, state: _ParseState) -> _DraftNote | None:
        line = state.cursor.current()
        if line is None:
            return None
        match = self.regexes.notes.search(line)
        if match is None:
            return None
        note = _DraftNote(title=_group(match, 1) or '', text=_group(match, 2) or '')
        state.commit.notes.append(note)
        state.commit.footer = append_line(state.commit.footer, line)
        state.cursor.advance()
        return note

    def _parse_notes(self, state: _ParseState) -> bool:
        """Consume a note and its continuation lines; returns whether one opened.

        A following note line replaces the open note; a meta block or a
        reference line closes it.
        """
        note = self._open_note(state)
        if note is None:
            return False

        commit = state.commit
        cursor = state.cursor
        while cursor.available():
            if self._parse_meta(state):
                break
            next_note = self._open_note(state)
            if next_note is not None:
                note = next_note
                continue

            line = cursor.lines[cursor.index]
            references = self.resolver.parse_references(line)
            if references:
                commit.references.extend(references)
            else:
                note.text = append_line(note.text, line)
            commit.footer = append_line(commit.footer, line)
            cursor.advance()
            if references:
                break
        return True

    def _parse_body_and_footer(self, state: _ParseState, is_body: bool) -> bool:
        """Consume one line as body or footer; returns whether still in the body."""
        cursor = state.cursor
        if not cursor.available():
            return is_body

        commit = state.commit
        line = cursor.lines[cursor.index]
        references = self.resolver.parse_references(line)
        still_body = not references and is_body
        if still_body:
            commit.body = append_line(commit.body, line)
        else:
            commit.references.extend(references)
            commit.footer = append_line(commit.footer, line)
        cursor.advance()
        return still_body

    def _parse_breaking_header(self, state: _ParseState) -> None:
        pattern = self.options.breaking_header_pattern
        commit = state.commit
        if pattern is None or commit.notes or not commit.header:
            return
        match = pattern.search(commit.header)
        if match is None:
            return
        # The description is the third group of a type/scope/description
        # pattern; shorter patterns fall back to their last group.
        group = min(3, pattern.groups)
        text = (match.group(group) if group else None) or ''
        commit.notes.append(_DraftNote(title=BREAKING_CHANGE_TITLE, text=text))

    def _parse_mentions(self, state: _ParseState, raw: str) -> None:
        state.commit.mentions.extend(match.group(1) for match in iter_matches(self.regexes.mentions, raw))

    def _parse_revert(self, state: _ParseState, raw: str) -> None:
        pattern = self.options.revert_pattern
        if pattern is None:
            return
        match = pattern.search(raw)
        if match is not None:
            state.commit.revert = read_correspondence(match, self.regexes.revert_fields)

    @staticmethod
    def _cleanup(state: _ParseState) -> None:
        commit = state.commit
        if commit.body is not None:
            commit.body = trim_newlines(commit.body) or None
        if commit.footer is not None:
            commit.footer = trim_newlines(commit.footer) or None
        for note in commit.notes:
            note.text = trim_newlines(note.text)

    def parse(self, raw: str) -> Commit:
        """Parse one raw commit message.

        Args:
            raw: The full message text, trailers included.

        Returns:
            The parsed :class:`Commit`.

        Raises:
            InvalidInputError: If ``raw`` is empty or whitespace-only.
        """
        state = _ParseState(scan_lines(raw, self.options.comment_char))
        commit = state.commit

        is_merge = self._parse_merge(state)
        self._parse_header(state, is_merge)
        if commit.header:
            commit.references = self.resolver.parse_references(commit.header)

        is_body = True
        while state.cursor.available():
            self._parse_meta(state)
            if self._parse_notes(state):
                is_body = False
            if not self._parse_body_and_footer(state, is_body):
                is_body = False

        self._parse_breaking_header(state)
        self._parse_mentions(state, raw)
        self._parse_revert(state, raw)
        self._cleanup(state)
        return commit.freeze()
