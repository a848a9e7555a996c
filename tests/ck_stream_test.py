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

"""Tests for commitkit.parser._stream (batch parsing)."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest
from commitkit.config import ParserOptions
from commitkit.errors import CommitKitError, InvalidInputError
from commitkit.parser import ErrorPolicy, parse_commits, parse_commits_async
from structlog.testing import capture_logs

RAW = ['feat: a', '', 'fix: b', '   ']


async def _stream(items: list[str]) -> AsyncIterator[str]:
    for item in items:
        yield item


class TestParseCommits:
    """Tests for parse_commits()."""

    def test_skips_blank_messages_by_default(self) -> None:
        """Test skips blank messages by default."""
        commits = list(parse_commits(RAW))
        assert [c.type for c in commits] == ['feat', 'fix']

    def test_raise_policy(self) -> None:
        """Test raise policy."""
        with pytest.raises(InvalidInputError):
            list(parse_commits(RAW, on_error=ErrorPolicy.RAISE))

    def test_raise_policy_yields_earlier_commits(self) -> None:
        """Commits before the bad message are still delivered."""
        commits = parse_commits(RAW, on_error=ErrorPolicy.RAISE)
        assert next(commits).type == 'feat'
        with pytest.raises(InvalidInputError):
            next(commits)

    def test_log_policy(self) -> None:
        """Test log policy."""
        with capture_logs() as cap:
            commits = list(parse_commits(RAW, on_error=ErrorPolicy.LOG))
        assert len(commits) == 2
        skipped = [entry for entry in cap if entry['event'] == 'skipped_commit']
        assert [entry['index'] for entry in skipped] == [1, 3]
        assert skipped[0]['log_level'] == 'warning'
        assert skipped[0]['code'] == 'CK-INPUT-EMPTY'

    def test_callable_policy(self) -> None:
        """A callable receives every error."""
        errors: list[CommitKitError] = []
        commits = list(parse_commits(RAW, on_error=errors.append))
        assert len(commits) == 2
        assert len(errors) == 2
        assert all(isinstance(e, InvalidInputError) for e in errors)

    def test_options_shared(self) -> None:
        """Test options shared."""
        commits = list(parse_commits(['feat: a\n# c', 'fix: b\n# d'], ParserOptions(comment_char='#')))
        assert [c.body for c in commits] == [None, None]

    def test_lazy(self) -> None:
        """Messages are parsed only as they are pulled."""
        seen: list[str] = []

        def raws() -> Iterator[str]:
            for raw in ['feat: a', 'fix: b']:
                seen.append(raw)
                yield raw

        commits = parse_commits(raws())
        next(commits)
        assert seen == ['feat: a']


class TestParseCommitsAsync:
    """Tests for parse_commits_async()."""

    @pytest.mark.asyncio
    async def test_async_source(self) -> None:
        """Test async source."""
        commits = [c async for c in parse_commits_async(_stream(RAW))]
        assert [c.type for c in commits] == ['feat', 'fix']

    @pytest.mark.asyncio
    async def test_plain_source(self) -> None:
        """Test plain source."""
        commits = [c async for c in parse_commits_async(RAW)]
        assert [c.subject for c in commits] == ['a', 'b']

    @pytest.mark.asyncio
    async def test_raise_policy(self) -> None:
        """Test raise policy."""
        with pytest.raises(InvalidInputError):
            _ = [c async for c in parse_commits_async(_stream(RAW), on_error=ErrorPolicy.RAISE)]

    @pytest.mark.asyncio
    async def test_error_indexes(self) -> None:
        """Indexes count every message, parsed or not."""
        with capture_logs() as cap:
            _ = [c async for c in parse_commits_async(_stream(RAW), on_error=ErrorPolicy.LOG)]
        assert [entry['index'] for entry in cap if entry['event'] == 'skipped_commit'] == [1, 3]
