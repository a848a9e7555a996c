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

"""Streaming removal of reverted commits.

A revert commit and the commit it reverts cancel each other out; neither
is emitted. Everything else is emitted in arrival order.

Key Concepts (ELI5)::

    ┌─────────────────────────┬────────────────────────────────────────────┐
    │ Concept                 │ ELI5 Explanation                           │
    ├─────────────────────────┼────────────────────────────────────────────┤
    │ Revert descriptor       │ ``commit.revert``: the header and hash of │
    │                         │ the commit being undone.                  │
    ├─────────────────────────┼────────────────────────────────────────────┤
    │ Hold                    │ A waiting room. Commits sit here while a  │
    │                         │ revert that might cancel them is pending. │
    ├─────────────────────────┼────────────────────────────────────────────┤
    │ Flush                   │ End of stream: everyone still waiting is  │
    │                         │ let through, in the order they arrived.   │
    └─────────────────────────┴────────────────────────────────────────────┘

Example (newest-first, as ``git log`` prints)::

    in:   C   R(A)   B   A   D
          │    │     │   │   │
          ▼    ▼     ▼   ▼   ▼
    out:  C   hold  hold  ✗   B, D        (A and R(A) cancel)

Order matters: the filter must see commits in true history order.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from typing import Any

from commitkit.logging import get_logger
from commitkit.parser import Commit

logger = get_logger(__name__)


def _normalize(value: Any) -> Any:  # noqa: ANN401 - field values are usually str
    return value.strip() if isinstance(value, str) else value


def is_match(commit: Commit, descriptor: dict[str, str | None]) -> bool:
    """Whether every key of ``descriptor`` equals the same key on ``commit``.

    Strings are compared after stripping surrounding whitespace. A key the
    commit never set does not match, not even a ``None`` value.

    Args:
        commit: The candidate commit.
        descriptor: A revert descriptor (``{"header": ..., "hash": ...}``).
    """
    return all(
        key in commit and _normalize(commit.get(key)) == _normalize(value) for key, value in descriptor.items()
    )


class RevertedCommitsFilter:
    """Drops revert/reverted commit pairs from an ordered commit stream.

    Call :meth:`process` for every commit in order, then :meth:`flush`
    once at the end. Both return the commits that may be emitted now.
    """

    def __init__(self) -> None:
        """Start with an empty hold."""
        self.hold: list[Commit] = []
        self.hold_reverts_count = 0

    def _take(self, commit: Commit) -> None:
        for index, held in enumerate(self.hold):
            if held is commit:
                del self.hold[index]
                return

    def _find_reverting(self, commit: Commit) -> Commit | None:
        """A held revert whose descriptor names ``commit``."""
        for held in self.hold:
            if held.revert is not None and is_match(commit, held.revert):
                return held
        return None

    def _find_reverted(self, revert: Commit) -> Commit | None:
        """A held commit named by the descriptor of ``revert``."""
        if revert.revert is None:
            return None
        for held in self.hold:
            if is_match(held, revert.revert):
                return held
        return None

    def _drain(self) -> list[Commit]:
        released = self.hold
        self.hold = []
        return released

    def process(self, commit: Commit) -> list[Commit]:
        """Feed the next commit.

        Args:
            commit: The next commit in history order.

        Returns:
            Commits to emit now, in order; often empty.
        """
        reverting = self._find_reverting(commit)
        if reverting is not None:
            self._take(reverting)
            self.hold_reverts_count -= 1
            logger.debug('revert_pair_dropped', header=commit.header, revert_header=reverting.header)
            return []

        if commit.revert is not None:
            reverted = self._find_reverted(commit)
            if reverted is not None:
                self._take(reverted)
                if reverted.revert is not None:
                    self.hold_reverts_count -= 1
                logger.debug('revert_pair_dropped', header=reverted.header, revert_header=commit.header)
                return []
            self.hold.append(commit)
            self.hold_reverts_count += 1
            return []

        if self.hold_reverts_count > 0:
            self.hold.append(commit)
            return []

        return [*self._drain(), commit]

    def flush(self) -> list[Commit]:
        """Release every held commit, in arrival order.

        Reverts whose target never arrived pass through unchanged.
        """
        if self.hold:
            logger.debug('hold_flushed', count=len(self.hold), unresolved_reverts=self.hold_reverts_count)
        self.hold_reverts_count = 0
        return self._drain()


def filter_reverted_commits(commits: Iterable[Commit]) -> Iterator[Commit]:
    """Yield ``commits`` without revert/reverted pairs.

    Args:
        commits: Parsed commits in history order.

    Yields:
        Surviving commits, in their original relative order.
    """
    revert_filter = RevertedCommitsFilter()
    for commit in commits:
        yield from revert_filter.process(commit)
    yield from revert_filter.flush()


async def filter_reverted_commits_async(commits: AsyncIterable[Commit]) -> AsyncIterator[Commit]:
    """Async counterpart of :func:`filter_reverted_commits`."""
    revert_filter = RevertedCommitsFilter()
    async for commit in commits:
        for survivor in revert_filter.process(commit):
            yield survivor
    for survivor in revert_filter.flush():
        yield survivor


__all__ = [
    'RevertedCommitsFilter',
    'filter_reverted_commits',
    'filter_reverted_commits_async',
    'is_match',
]
