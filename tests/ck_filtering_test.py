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

"""Tests for commitkit.filtering (reverted-commit removal)."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from commitkit.filtering import (
    RevertedCommitsFilter,
    filter_reverted_commits,
    filter_reverted_commits_async,
    is_match,
)
from commitkit.parser import Commit, parse_commit
from structlog.testing import capture_logs


def _commit(header: str, sha: str) -> Commit:
    return parse_commit(f'{header}\n-hash-\n{sha}')


def _revert(header: str, sha: str, own_sha: str = 'ffff000') -> Commit:
    return parse_commit(f'Revert "{header}"\n\nThis reverts commit {sha}.\n-hash-\n{own_sha}')


A = _commit('feat: add foo', 'abc123')
B = _commit('fix: unrelated', 'bbb222')
C = _commit('docs: readme', 'ccc333')
D = _commit('chore: deps', 'ddd444')
R_A = _revert('feat: add foo', 'abc123')


async def _stream(commits: list[Commit]) -> AsyncIterator[Commit]:
    for commit in commits:
        yield commit


def _run(commits: list[Commit]) -> list[Commit]:
    return list(filter_reverted_commits(commits))


class TestIsMatch:
    """Tests for is_match()."""

    def test_descriptor_matches(self) -> None:
        """Test descriptor matches."""
        assert R_A.revert == {'header': 'feat: add foo', 'hash': 'abc123'}
        assert is_match(A, R_A.revert)

    def test_strings_are_trimmed(self) -> None:
        """Test strings are trimmed."""
        assert is_match(A, {'header': '  feat: add foo ', 'hash': 'abc123\n'})

    def test_every_key_must_match(self) -> None:
        """Test every key must match."""
        assert not is_match(A, {'header': 'feat: add foo', 'hash': 'other'})
        assert not is_match(B, {'header': 'feat: add foo'})

    def test_none_matches_field_set_to_none(self) -> None:
        """A descriptor value of None matches a field the parser set to None."""
        assert A.fields['scope'] is None
        assert is_match(A, {'scope': None})

    def test_none_does_not_match_absent_field(self) -> None:
        """A key the commit never set does not match, even against None."""
        assert 'author' not in A
        assert not is_match(A, {'author': None})


class TestRevertedCommitsFilter:
    """Tests for RevertedCommitsFilter."""

    def test_revert_then_target(self) -> None:
        """A revert followed by its target cancels both."""
        assert _run([R_A, A]) == []

    def test_lone_revert_is_flushed(self) -> None:
        """Test lone revert is flushed."""
        assert _run([R_A]) == [R_A]

    def test_target_already_emitted(self) -> None:
        """A target emitted before its revert arrives cannot be recalled."""
        assert _run([A, R_A, B]) == [A, R_A, B]

    def test_held_commits_keep_order(self) -> None:
        """Test held commits keep order."""
        assert _run([C, R_A, B, A, D]) == [C, B, D]

    def test_revert_matches_held_target(self) -> None:
        """A revert also cancels a target that is already held."""
        ghost = _revert('feat: ghost', 'fff999', own_sha='eee555')
        assert _run([ghost, A, R_A]) == [ghost]

    def test_empty_hash_does_not_cancel_hashless_commit(self) -> None:
        """A revert with an empty hash capture keeps a commit that has no hash."""
        revert = parse_commit('Revert "feat: add foo"\n\nThis reverts commit .')
        plain = parse_commit('feat: add foo')
        assert revert.revert == {'header': 'feat: add foo', 'hash': None}
        assert _run([revert, plain]) == [revert, plain]

    def test_unrelated_commits_pass_immediately(self) -> None:
        """Test unrelated commits pass immediately."""
        revert_filter = RevertedCommitsFilter()
        assert revert_filter.process(B) == [B]
        assert revert_filter.process(C) == [C]
        assert revert_filter.flush() == []

    def test_hold_state(self) -> None:
        """Test hold state."""
        revert_filter = RevertedCommitsFilter()
        assert revert_filter.process(R_A) == []
        assert revert_filter.process(B) == []
        assert revert_filter.hold == [R_A, B]
        assert revert_filter.hold_reverts_count == 1
        assert revert_filter.process(A) == []
        assert revert_filter.hold == [B]
        assert revert_filter.hold_reverts_count == 0
        assert revert_filter.process(C) == [B, C]
        assert revert_filter.hold == []

    def test_flush_resets(self) -> None:
        """Test flush resets."""
        revert_filter = RevertedCommitsFilter()
        revert_filter.process(R_A)
        assert revert_filter.flush() == [R_A]
        assert revert_filter.hold_reverts_count == 0
        assert revert_filter.process(B) == [B]

    def test_cancellation_logged(self) -> None:
        """Test cancellation logged."""
        with capture_logs() as cap:
            _run([R_A, A])
        dropped = [entry for entry in cap if entry['event'] == 'revert_pair_dropped']
        assert len(dropped) == 1
        assert dropped[0]['header'] == 'feat: add foo'
        assert dropped[0]['log_level'] == 'debug'


class TestFilterRevertedCommitsAsync:
    """Tests for filter_reverted_commits_async()."""

    @pytest.mark.asyncio
    async def test_matches_sync(self) -> None:
        """Test matches sync."""
        commits = [C, R_A, B, A, D]
        result = [c async for c in filter_reverted_commits_async(_stream(commits))]
        assert result == _run(commits)

    @pytest.mark.asyncio
    async def test_flushes_at_end(self) -> None:
        """Test flushes at end."""
        result = [c async for c in filter_reverted_commits_async(_stream([R_A, B]))]
        assert result == [R_A, B]
