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

"""Batch parsing of many raw commit messages.

One bad message must not abort a whole history, so every batch entry
point takes an ``on_error`` policy::

    ErrorPolicy.RAISE   re-raise the CommitKitError
    ErrorPolicy.LOG     log a warning and skip the message
    ErrorPolicy.SKIP    skip the message silently (default)
    callable            call it with the error, then skip
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable, Iterator
from enum import Enum

from commitkit.config import ParserOptions
from commitkit.errors import CommitKitError
from commitkit.logging import get_logger
from commitkit.parser._parser import CommitParser
from commitkit.parser._types import Commit

logger = get_logger(__name__)


class ErrorPolicy(Enum):
    """What batch parsing does with a message that fails to parse."""

    RAISE = 'raise'
    LOG = 'log'
    SKIP = 'skip'


ErrorHandler = ErrorPolicy | Callable[[CommitKitError], None]


def _handle_error(exc: CommitKitError, on_error: ErrorHandler, index: int) -> None:
    if on_error is ErrorPolicy.RAISE:
        raise exc
    if on_error is ErrorPolicy.LOG:
        logger.warning('skipped_commit', index=index, code=exc.code.value, error=exc.info.message)
    elif callable(on_error):
        on_error(exc)


def parse_commits(
    raw_commits: Iterable[str],
    options: ParserOptions | None = None,
    *,
    on_error: ErrorHandler = ErrorPolicy.SKIP,
) -> Iterator[Commit]:
    """Parse each raw message with one shared :class:`CommitParser`.

    Args:
        raw_commits: Raw commit messages in history order.
        options: Grammar configuration.
        on_error: Policy for messages that fail to parse.

    Yields:
        One :class:`Commit` per message that parsed.

    Raises:
        CommitKitError: Only with :attr:`ErrorPolicy.RAISE`.
    """
    parser = CommitParser(options)
    for index, raw in enumerate(raw_commits):
        try:
            commit = parser.parse(raw)
        except CommitKitError as exc:
            _handle_error(exc, on_error, index)
            continue
        yield commit


async def parse_commits_async(
    raw_commits: AsyncIterable[str] | Iterable[str],
    options: ParserOptions | None = None,
    *,
    on_error: ErrorHandler = ErrorPolicy.SKIP,
) -> AsyncIterator[Commit]:
    """Async counterpart of :func:`parse_commits`.

    Accepts either an async iterable (e.g. lines streamed from a
    subprocess) or a plain iterable.
    """
    parser = CommitParser(options)
    index = 0
    async for raw in _aiter(raw_commits):
        try:
            commit = parser.parse(raw)
        except CommitKitError as exc:
            _handle_error(exc, on_error, index)
            continue
        finally:
            index += 1
        yield commit


async def _aiter(items: AsyncIterable[str] | Iterable[str]) -> AsyncIterator[str]:
    if isinstance(items, AsyncIterable):
        async for item in items:
            yield item
    else:
        for item in items:
            yield item
