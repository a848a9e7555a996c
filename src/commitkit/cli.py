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

"""CLI entry point for commitkit.

Subcommands::

    commitkit parse     Parse one commit message and print it as JSON
    commitkit log       Parse a delimited stream of messages (git log output)
    commitkit explain   Explain an error code

Usage::

    # Parse the message being written by git:
    commitkit parse .git/COMMIT_EDITMSG

    # Parse a history, dropping reverted commits:
    git log --format='%B%n-hash-%n%H%n------------------------ >8 ------------------------' \\
        | commitkit log --filter-reverts

    # Explain an error:
    commitkit explain CK-INPUT-EMPTY
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Iterable
from pathlib import Path

from rich_argparse import RichHelpFormatter

from commitkit import __version__
from commitkit.config import ParserOptions, load_options
from commitkit.errors import E, CommitKitError, explain, render_error
from commitkit.filtering import filter_reverted_commits
from commitkit.logging import configure_logging, get_logger
from commitkit.messages import ANGULAR_OPTIONS
from commitkit.parser import SCISSOR, Commit, CommitParser, ErrorPolicy, parse_commits

logger = get_logger(__name__)


def _read_input(path: str | None) -> str:
    """Read a file, or stdin when ``path`` is ``None`` or ``-``."""
    if path is None or path == '-':
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as exc:
        raise CommitKitError(
            code=E.INPUT_UNREADABLE,
            message=f'Failed to read {path}: {exc}',
            hint='Check that the file exists and is UTF-8 encoded.',
        ) from exc


def split_log(text: str) -> list[str]:
    """Split ``text`` into messages on lines equal to the scissor delimiter.

    Blank chunks (e.g. after the final delimiter) are dropped.
    """
    messages: list[str] = []
    current: list[str] = []
    for line in text.splitlines():
        if line.strip() == SCISSOR:
            messages.append('\n'.join(current))
            current = []
        else:
            current.append(line)
    messages.append('\n'.join(current))
    return [message for message in messages if message.strip()]


def _options(args: argparse.Namespace) -> ParserOptions:
    if args.angular:
        return ANGULAR_OPTIONS
    return load_options(Path(args.root))


def _dump(data: object) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))  # noqa: T201 - CLI output


def _cmd_parse(args: argparse.Namespace) -> int:
    """Handle the ``parse`` subcommand."""
    commit = CommitParser(_options(args)).parse(_read_input(args.file))
    _dump(commit.to_dict())
    return 0


def _cmd_log(args: argparse.Namespace) -> int:
    """Handle the ``log`` subcommand."""
    messages = split_log(_read_input(args.file))
    commits: Iterable[Commit] = parse_commits(
        messages,
        _options(args),
        on_error=ErrorPolicy(args.on_error),
    )
    if args.filter_reverts:
        commits = filter_reverted_commits(commits)
    parsed = [commit.to_dict() for commit in commits]
    logger.info('parsed_log', messages=len(messages), emitted=len(parsed))
    _dump(parsed)
    return 0


def _cmd_explain(args: argparse.Namespace) -> int:
    """Handle the ``explain`` subcommand."""
    result = explain(args.code)
    if result is None:
        print(f'Unknown error code: {args.code}')  # noqa: T201 - CLI output
        return 1
    print(result)  # noqa: T201 - CLI output
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        Configured :class:`argparse.ArgumentParser`.
    """
    RichHelpFormatter.styles['argparse.groups'] = 'bold yellow'
    parser = argparse.ArgumentParser(
        prog='commitkit',
        description='Parse commit messages into structured records.',
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
    )
    parser.add_argument(
        '--root',
        '-C',
        metavar='DIR',
        default='.',
        help='Directory containing commitkit.toml (default: current directory).',
    )
    parser.add_argument(
        '--angular',
        action='store_true',
        help='Use the Angular commit conventions instead of commitkit.toml.',
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Enable debug logging.',
    )
    parser.add_argument(
        '--quiet',
        '-q',
        action='store_true',
        help='Only log warnings and errors.',
    )
    parser.add_argument(
        '--json-log',
        action='store_true',
        help='Emit logs as JSON lines on stderr.',
    )

    subparsers = parser.add_subparsers(dest='command')

    parse_parser = subparsers.add_parser(
        'parse',
        help='Parse one commit message and print it as JSON.',
    )
    parse_parser.add_argument(
        'file',
        nargs='?',
        default=None,
        help='Message file (default: stdin).',
    )

    log_parser = subparsers.add_parser(
        'log',
        help='Parse messages separated by scissor lines and print a JSON array.',
    )
    log_parser.add_argument(
        'file',
        nargs='?',
        default=None,
        help='Log file (default: stdin).',
    )
    log_parser.add_argument(
        '--filter-reverts',
        action='store_true',
        help='Drop reverted commits together with the commits that revert them.',
    )
    log_parser.add_argument(
        '--on-error',
        choices=[policy.value for policy in ErrorPolicy],
        default=ErrorPolicy.LOG.value,
        help='What to do with a message that fails to parse (default: log).',
    )

    explain_parser = subparsers.add_parser(
        'explain',
        help='Explain an error code.',
    )
    explain_parser.add_argument(
        'code',
        help='Error code, e.g. CK-INPUT-EMPTY.',
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Arguments (defaults to ``sys.argv[1:]``).

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)

    try:
        command = args.command
        if command == 'parse':
            return _cmd_parse(args)
        if command == 'log':
            return _cmd_log(args)
        if command == 'explain':
            return _cmd_explain(args)

        parser.print_help()  # noqa: T201 - CLI output
        print(  # noqa: T201 - CLI output
            f'\n{parser.prog}: error: please provide a command',
            file=sys.stderr,
        )
        return 2

    except CommitKitError as exc:
        render_error(exc)
        return 1
    except KeyboardInterrupt:
        logger.info('interrupted')
        return 130


def _main() -> None:
    """Wrapper for pyproject.toml [project.scripts] entry point."""
    sys.exit(main())


__all__ = [
    'build_parser',
    'main',
    'split_log',
]
