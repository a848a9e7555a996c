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

"""Tests for commitkit.messages (Angular-style messages)."""

from __future__ import annotations

import pytest
from commitkit.errors import InvalidInputError
from commitkit.messages import (
    ANGULAR_OPTIONS,
    COMMIT_FIELDS,
    GIT_LOG_FORMAT_FOR_PARSING,
    commit_fields_as_format,
    parse_commit_message,
    strip_prefixes,
)
from commitkit.parser import SCISSOR, CommitParser


class TestGitLogFormat:
    """Tests for the git log format helpers."""

    def test_format(self) -> None:
        """Test format."""
        assert GIT_LOG_FORMAT_FOR_PARSING == '%B%n-hash-%n%H%n-shortHash-%n%h%n-author-%n%aN'

    def test_fields_as_format(self) -> None:
        """Test fields as format."""
        assert commit_fields_as_format({'hash': '%H'}) == '%n-hash-%n%H'
        assert set(COMMIT_FIELDS) == {'hash', 'shortHash', 'author'}


class TestStripPrefixes:
    """Tests for strip_prefixes()."""

    def test_all_prefixes(self) -> None:
        """Test all prefixes."""
        assert strip_prefixes('fixup! squash! revert: feat: x') == 'feat: x'

    def test_case_insensitive(self) -> None:
        """Test case insensitive."""
        assert strip_prefixes('Revert fix: y') == 'fix: y'

    def test_no_prefix(self) -> None:
        """Test no prefix."""
        assert strip_prefixes('feat: x') == 'feat: x'


class TestParseCommitMessage:
    """Tests for parse_commit_message()."""

    def test_header_fields(self) -> None:
        """Test header fields."""
        msg = parse_commit_message('fix(core): handle nulls')
        assert msg.header == 'fix(core): handle nulls'
        assert (msg.type, msg.scope, msg.subject) == ('fix', 'core', 'handle nulls')
        assert msg.body == ''
        assert msg.footer == ''
        assert not (msg.is_fixup or msg.is_squash or msg.is_revert)

    def test_empty_scope_is_not_a_header_match(self) -> None:
        """Test empty scope is not a header match."""
        msg = parse_commit_message('feat(): x')
        assert msg.type == ''
        assert msg.header == 'feat(): x'

    def test_fixup(self) -> None:
        """Prefixes are detected on the full text and stripped before parsing."""
        msg = parse_commit_message('fixup! fix(core): handle nulls\n\nDEPRECATED: old API')
        assert msg.is_fixup
        assert msg.full_text.startswith('fixup! ')
        assert msg.header == 'fix(core): handle nulls'
        assert msg.deprecations[0].text == 'old API'
        assert msg.breaking_changes == ()

    def test_squash_and_revert(self) -> None:
        """Test squash and revert."""
        assert parse_commit_message('squash! feat: y').is_squash
        assert parse_commit_message('revert: feat: y').is_revert

    def test_breaking_change(self) -> None:
        """Test breaking change."""
        msg = parse_commit_message('feat: x\n\nBREAKING CHANGE: y')
        assert [note.text for note in msg.breaking_changes] == ['y']
        assert msg.footer == 'BREAKING CHANGE: y'

    def test_notes_are_case_sensitive(self) -> None:
        """Test notes are case sensitive."""
        msg = parse_commit_message('feat: x\n\nbreaking change: y')
        assert msg.breaking_changes == ()
        assert msg.body == 'breaking change: y'

    def test_comments_and_scissor(self) -> None:
        """Test comments and scissor."""
        msg = parse_commit_message(f'feat: x\n# comment\n\nbody\n# {SCISSOR}\ndiff --git a b')
        assert msg.body == 'body'

    def test_meta_fields(self) -> None:
        """Test meta fields."""
        msg = parse_commit_message('feat: x\n-hash-\nabc\n-shortHash-\nab\n-author-\nJane Doe')
        assert (msg.hash, msg.short_hash, msg.author) == ('abc', 'ab', 'Jane Doe')

    def test_missing_meta_fields(self) -> None:
        """Test missing meta fields."""
        msg = parse_commit_message('feat: x')
        assert msg.hash is None
        assert msg.author is None

    def test_references(self) -> None:
        """Test references."""
        msg = parse_commit_message('fix: x\n\nFixes #12')
        assert [ref.issue for ref in msg.references] == ['12']

    def test_empty_after_prefix(self) -> None:
        """Test empty after prefix."""
        with pytest.raises(InvalidInputError):
            parse_commit_message('fixup! ')


class TestAngularOptions:
    """Tests for ANGULAR_OPTIONS with a plain CommitParser."""

    def test_notes_pattern(self) -> None:
        """Test notes pattern."""
        commit = CommitParser(ANGULAR_OPTIONS).parse('feat: x\n\nDEPRECATED: use y')
        assert commit.notes[0].title == 'DEPRECATED'
