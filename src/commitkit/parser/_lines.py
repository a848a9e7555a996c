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

"""Line normalization for raw commit messages.

Turns raw text into the ordered lines the parser walks, and the
:class:`LineCursor` that walks them::

    raw text
       │  trim_newlines()          leading/trailing \\r \\n runs
       ▼
    split on \\r?\\n
       │  truncate_to_scissor()    only with a comment char
       │  drop comment lines       only with a comment char
       │  drop "gpg:" lines        always
       ▼
    LineCursor(lines)
"""

from __future__ import annotations

import re

from commitkit.errors import InvalidInputError

# The line ``git commit --verbose`` places above the diff.
SCISSOR = '------------------------ >8 ------------------------'

_LINE_BREAK_RE = re.compile(r'\r?\n')
_GPG_RE = re.compile(r'^\s*gpg:')


def trim_newlines(text: str) -> str:
    """Strip leading and trailing ``\\r``/``\\n`` characters only.

    Other whitespace and internal blank lines are kept.

    >>> trim_newlines('\\n\\nfeat: x\\n\\nbody\\r\\n')
    'feat: x\\n\\nbody'
    """
    return text.strip('\r\n')


def append_line(text: str | None, line: str | None) -> str:
    """Append ``line`` to ``text`` with a newline, treating empty ``text`` as unset."""
    return f'{text}\n{line or ""}' if text else line or ''


def truncate_to_scissor(lines: list[str], comment_char: str) -> list[str]:
    """Drop the scissor line and everything after it."""
    try:
        return lines[: lines.index(f'{comment_char} {SCISSOR}')]
    except ValueError:
        return lines


def is_gpg_line(line: str) -> bool:
    return _GPG_RE.match(line) is not None


class LineCursor:
    """A position over the normalized lines of one message."""

    def __init__(self, lines: list[str]) -> None:
        """Start at the first line."""
        self.lines = lines
        self.index = 0

    def available(self) -> bool:
        """Whether a line remains at the cursor."""
        return self.index < len(self.lines)

    def current(self) -> str | None:
        """The line at the cursor, or ``None`` past the end."""
        return self.lines[self.index] if self.available() else None

    def advance(self) -> str | None:
        """Return the line at the cursor and move past it."""
        line = self.current()
        self.index += 1
        return line

    def skip_blank(self) -> None:
        """Move past whitespace-only lines."""
        while self.available() and not self.lines[self.index].strip():
            self.index += 1


def scan_lines(raw: str, comment_char: str | None = None) -> LineCursor:
    """Normalize ``raw`` into lines and return a cursor over them.

    Args:
        raw: The raw commit message.
        comment_char: Marker for comment lines, e.g. ``'#'``.

    Returns:
        A :class:`LineCursor` at the first line.

    Raises:
        InvalidInputError: If ``raw`` is empty or whitespace-only.
    """
    if not raw.strip():
        raise InvalidInputError()

    lines = _LINE_BREAK_RE.split(trim_newlines(raw))
    if comment_char:
        lines = [line for line in truncate_to_scissor(lines, comment_char) if not line.startswith(comment_char)]
    return LineCursor([line for line in lines if not is_gpg_line(line)])
