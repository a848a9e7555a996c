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

"""Structured error system for commitkit.

Every error has a unique ``CK-NAMED-KEY`` code, a human-readable message,
and an optional hint with a suggested fix.

Key Concepts (ELI5)::

    ┌─────────────────────┬────────────────────────────────────────────────┐
    │ Concept             │ ELI5 Explanation                               │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ ErrorCode           │ A unique named ID like "CK-INPUT-EMPTY" for   │
    │                     │ each error. Readable at a glance.             │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ ErrorInfo           │ A bundle of code + message + hint. Like an    │
    │                     │ error card with a fix suggestion stapled on.  │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ CommitKitError      │ An exception you can raise. Carries the       │
    │                     │ error card so renderers can display it.       │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ InvalidInputError   │ The only error the parser itself raises:      │
    │                     │ the raw commit text was empty.                │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ explain()           │ Looks up an error code and prints details.    │
    └─────────────────────┴────────────────────────────────────────────────┘

Code categories::

    CK-INPUT-*        Raw commit text errors
    CK-CONFIG-*       Configuration file errors

Usage::

    from commitkit.errors import CommitKitError, E

    raise CommitKitError(
        code=E.CONFIG_INVALID_PATTERN,
        message="header_pattern is not a valid regular expression",
        hint='Check the escaping of backslashes in commitkit.toml.',
    )
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from rich.console import Console
from rich.markup import escape as rich_escape


class ErrorCode(str, Enum):
    """Enumeration of all commitkit diagnostic codes."""

    # Input
    INPUT_EMPTY = 'CK-INPUT-EMPTY'
    INPUT_UNREADABLE = 'CK-INPUT-UNREADABLE'

    # Configuration
    CONFIG_NOT_FOUND = 'CK-CONFIG-NOT-FOUND'
    CONFIG_INVALID_KEY = 'CK-CONFIG-INVALID-KEY'
    CONFIG_INVALID_VALUE = 'CK-CONFIG-INVALID-VALUE'
    CONFIG_INVALID_PATTERN = 'CK-CONFIG-INVALID-PATTERN'


# Convenience alias for shorter imports.
E = ErrorCode


@dataclass(frozen=True)
class ErrorInfo:
    """Metadata for a single error code.

    Attributes:
        code: The ``CK-NAMED-KEY`` error code.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    code: ErrorCode
    message: str
    hint: str = ''


class CommitKitError(Exception):
    """Base exception for all commitkit errors.

    Args:
        code: The error code from :class:`ErrorCode`.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    def __init__(self, code: ErrorCode, message: str, hint: str = '') -> None:
        """Initialize with an error code, message, and optional hint."""
        self.info = ErrorInfo(code=code, message=message, hint=hint)
        super().__init__(f'[{code.value}] {message}')

    @property
    def code(self) -> ErrorCode:
        """The error code."""
        return self.info.code

    @property
    def hint(self) -> str:
        """Suggestion for fixing this error, or empty string."""
        return self.info.hint


class InvalidInputError(CommitKitError):
    """Raised when a raw commit message is empty or whitespace-only."""

    def __init__(self, message: str = 'Expected a raw commit', hint: str = '') -> None:
        """Initialize with the ``CK-INPUT-EMPTY`` code."""
        super().__init__(
            code=E.INPUT_EMPTY,
            message=message,
            hint=hint or ERRORS[E.INPUT_EMPTY].hint,
        )


ERRORS: dict[ErrorCode, ErrorInfo] = {
    E.INPUT_EMPTY: ErrorInfo(
        code=E.INPUT_EMPTY,
        message='The raw commit message is empty or contains only whitespace.',
        hint='Skip empty messages before parsing, or parse in batch mode with an error policy.',
    ),
    E.INPUT_UNREADABLE: ErrorInfo(
        code=E.INPUT_UNREADABLE,
        message='The commit message input could not be read.',
        hint='Check that the file exists and is UTF-8 encoded.',
    ),
    E.CONFIG_NOT_FOUND: ErrorInfo(
        code=E.CONFIG_NOT_FOUND,
        message='commitkit.toml could not be read or parsed.',
        hint='Check that the file is valid TOML.',
    ),
    E.CONFIG_INVALID_KEY: ErrorInfo(
        code=E.CONFIG_INVALID_KEY,
        message='commitkit.toml contains an unknown key.',
        hint='Keys are snake_case versions of the parser options, e.g. note_keywords.',
    ),
    E.CONFIG_INVALID_VALUE: ErrorInfo(
        code=E.CONFIG_INVALID_VALUE,
        message='A value in commitkit.toml has the wrong type.',
        hint='List keys take arrays of strings, pattern keys take strings, '
        'issue_prefixes_case_sensitive takes a boolean.',
    ),
    E.CONFIG_INVALID_PATTERN: ErrorInfo(
        code=E.CONFIG_INVALID_PATTERN,
        message='A pattern in commitkit.toml is not a valid regular expression.',
        hint='Use TOML literal strings (single quotes) so backslashes are kept verbatim.',
    ),
}


def explain(code: str) -> str | None:
    """Return a detailed explanation for an error code.

    Args:
        code: The error code string, e.g. ``"CK-INPUT-EMPTY"``.

    Returns:
        A formatted explanation string, or ``None`` if the code is unknown.
    """
    try:
        error_code = ErrorCode(code)
    except ValueError:
        return None

    info = ERRORS.get(error_code)
    if info is None:
        return f'{code}: No detailed explanation available.'

    lines = [f'{code}: {info.message}']
    if info.hint:
        lines.append(f'  Hint: {info.hint}')
    return '\n'.join(lines)


def render_error(exc: CommitKitError, *, file: TextIO | None = None) -> None:
    """Render an error in Rust-compiler style with color.

    Output format::

        error[CK-INPUT-EMPTY]: Expected a raw commit
          |
          = hint: Skip empty messages before parsing.

    Args:
        exc: The error to render.
        file: Output stream (defaults to ``sys.stderr``).
    """
    out = file or sys.stderr

    if out.isatty():
        console = Console(file=out, highlight=False)
        msg = rich_escape(exc.info.message)
        console.print(
            f'[bold red]error[/bold red][bold red]\\[{exc.code.value}][/bold red][bold]: {msg}[/bold]',
        )
        if exc.hint:
            hint = rich_escape(exc.hint)
            console.print('  [dim]|[/dim]')
            console.print(f'  [dim]=[/dim] [cyan]hint[/cyan]: {hint}')
        console.print()
    else:
        print(f'error[{exc.code.value}]: {exc.info.message}', file=out)  # noqa: T201 - CLI output
        if exc.hint:
            print('  |', file=out)  # noqa: T201 - CLI output
            print(f'  = hint: {exc.hint}', file=out)  # noqa: T201 - CLI output
        print(file=out)  # noqa: T201 - CLI output


__all__ = [
    'E',
    'ERRORS',
    'CommitKitError',
    'ErrorCode',
    'ErrorInfo',
    'InvalidInputError',
    'explain',
    'render_error',
]
