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

"""Parser options and the ``commitkit.toml`` reader.

:class:`ParserOptions` is the immutable configuration every
:class:`~commitkit.parser.CommitParser` is built from. It can be
constructed directly in Python, or read from ``commitkit.toml`` with
:func:`load_options`.

Key Concepts (ELI5)::

    ┌─────────────────────────┬────────────────────────────────────────────┐
    │ Concept                 │ ELI5 Explanation                           │
    ├─────────────────────────┼────────────────────────────────────────────┤
    │ ParserOptions           │ The grammar knobs: which words start a    │
    │                         │ note, which prefixes mark an issue, what  │
    │                         │ a header looks like.                      │
    ├─────────────────────────┼────────────────────────────────────────────┤
    │ Correspondence          │ Names for the groups a pattern captures,  │
    │                         │ in order: ("type", "scope", "subject").   │
    ├─────────────────────────┼────────────────────────────────────────────┤
    │ load_options()          │ Read commitkit.toml, check every key and  │
    │                         │ compile every pattern before parsing.     │
    └─────────────────────────┴────────────────────────────────────────────┘

Supported keys in ``commitkit.toml``::

    note_keywords                 = ["BREAKING CHANGE", "DEPRECATED"]
    notes_pattern                 = '^\\s*({keywords}): ?(.*)'
    issue_prefixes                = ["#", "gh-"]
    issue_prefixes_case_sensitive = false
    reference_actions             = ["closes", "fixes"]
    header_pattern                = '^(\\w*)(?:\\((.*)\\))?: (.*)$'
    header_correspondence         = ["type", "scope", "subject"]
    breaking_header_pattern       = '^(\\w*)(?:\\((.*)\\))?!: (.*)$'
    merge_pattern                 = '^Merge pull request #(\\d+) from (.*)$'
    merge_correspondence          = ["id", "source"]
    revert_pattern                = '^Revert\\s"([\\s\\S]*)"\\s*This reverts commit (\\w*)\\.'
    revert_correspondence         = ["header", "hash"]
    field_pattern                 = '^-(.*?)-$'
    comment_char                  = "#"

An empty string for any pattern key disables that matcher.

Usage::

    from commitkit.config import load_options

    options = load_options(Path('/path/to/repo'))
    print(options.note_keywords)  # ('BREAKING CHANGE', 'BREAKING-CHANGE')
"""

from __future__ import annotations

import difflib
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomlkit
import tomlkit.exceptions

from commitkit.errors import E, CommitKitError
from commitkit.logging import get_logger

logger = get_logger(__name__)

# The config file name at the project root.
CONFIG_FILENAME = 'commitkit.toml'

# Placeholder substituted with the joined keyword alternation in
# ``notes_pattern`` strings read from TOML.
KEYWORDS_PLACEHOLDER = '{keywords}'

DEFAULT_NOTE_KEYWORDS: tuple[str, ...] = ('BREAKING CHANGE', 'BREAKING-CHANGE')
DEFAULT_ISSUE_PREFIXES: tuple[str, ...] = ('#',)
DEFAULT_REFERENCE_ACTIONS: tuple[str, ...] = (
    'close',
    'closes',
    'closed',
    'fix',
    'fixes',
    'fixed',
    'resolve',
    'resolves',
    'resolved',
)
DEFAULT_HEADER_PATTERN: re.Pattern[str] = re.compile(r'^(\w*)(?:\(([\w$@.\-*/ ]*)\))?: (.*)$')
DEFAULT_HEADER_CORRESPONDENCE: tuple[str, ...] = ('type', 'scope', 'subject')
DEFAULT_REVERT_PATTERN: re.Pattern[str] = re.compile(r'^Revert\s"([\s\S]*)"\s*This reverts commit (\w*)\.')
DEFAULT_REVERT_CORRESPONDENCE: tuple[str, ...] = ('header', 'hash')
DEFAULT_FIELD_PATTERN: re.Pattern[str] = re.compile(r'^-(.*?)-$')

NotesPatternFactory = Callable[[str], re.Pattern[str]]


@dataclass(frozen=True)
class ParserOptions:
    """Immutable grammar configuration for :class:`~commitkit.parser.CommitParser`.

    Every optional matcher degrades to "never matches" when set to
    ``None`` or an empty tuple; nothing here ever makes parsing fail.

    Attributes:
        note_keywords: Phrases that open a note block (``BREAKING CHANGE``).
        notes_pattern: Optional factory receiving the ``|``-joined
            keywords and returning a pattern with (title, text) groups.
        issue_prefixes: Tokens that precede an issue id (``#``).
        issue_prefixes_case_sensitive: Match prefixes case-sensitively.
        reference_actions: Verbs introducing a reference (``closes``).
        header_pattern: Pattern applied to the header line.
        header_correspondence: Field names for the header groups.
        breaking_header_pattern: Pattern tried before ``header_pattern``;
            a match also synthesizes a ``BREAKING CHANGE`` note.
        merge_pattern: Pattern recognizing a leading merge line.
        merge_correspondence: Field names for the merge groups.
        revert_pattern: Pattern applied to the whole raw message.
        revert_correspondence: Keys of the revert descriptor.
        field_pattern: Meta-field delimiter; group 1 is the field name.
        comment_char: Marker for comment lines and the scissor line.
    """

    note_keywords: tuple[str, ...] = DEFAULT_NOTE_KEYWORDS
    notes_pattern: NotesPatternFactory | None = None
    issue_prefixes: tuple[str, ...] = DEFAULT_ISSUE_PREFIXES
    issue_prefixes_case_sensitive: bool = False
    reference_actions: tuple[str, ...] = DEFAULT_REFERENCE_ACTIONS
    header_pattern: re.Pattern[str] | None = DEFAULT_HEADER_PATTERN
    header_correspondence: tuple[str, ...] = DEFAULT_HEADER_CORRESPONDENCE
    breaking_header_pattern: re.Pattern[str] | None = None
    merge_pattern: re.Pattern[str] | None = None
    merge_correspondence: tuple[str, ...] = ()
    revert_pattern: re.Pattern[str] | None = DEFAULT_REVERT_PATTERN
    revert_correspondence: tuple[str, ...] = DEFAULT_REVERT_CORRESPONDENCE
    field_pattern: re.Pattern[str] | None = DEFAULT_FIELD_PATTERN
    comment_char: str | None = None


_LIST_KEYS: frozenset[str] = frozenset({
    'note_keywords',
    'issue_prefixes',
    'reference_actions',
    'header_correspondence',
    'merge_correspondence',
    'revert_correspondence',
})

_PATTERN_KEYS: frozenset[str] = frozenset({
    'header_pattern',
    'breaking_header_pattern',
    'merge_pattern',
    'revert_pattern',
    'field_pattern',
})

# All recognized top-level keys in commitkit.toml.
VALID_KEYS: frozenset[str] = _LIST_KEYS | _PATTERN_KEYS | {
    'notes_pattern',
    'issue_prefixes_case_sensitive',
    'comment_char',
}

_TYPE_MAP: dict[str, type] = {
    **dict.fromkeys(_LIST_KEYS, list),
    **dict.fromkeys(_PATTERN_KEYS, str),
    'notes_pattern': str,
    'issue_prefixes_case_sensitive': bool,
    'comment_char': str,
}


def _validate_value_type(key: str, value: Any) -> None:  # noqa: ANN401 - dynamic config values
    """Raise if a config value has the wrong type."""
    expected = _TYPE_MAP[key]
    if not isinstance(value, expected):
        raise CommitKitError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"'{key}' must be {expected.__name__}, got {type(value).__name__}",
            hint=f'Check the value of {key} in {CONFIG_FILENAME}.',
        )


def _validate_string_list(key: str, items: list[object]) -> tuple[str, ...]:
    """Raise if any item in a list is not a string; return the strings."""
    for item in items:
        if not isinstance(item, str):
            raise CommitKitError(
                code=E.CONFIG_INVALID_VALUE,
                message=f"'{key}' items must be strings, got {type(item).__name__}: {item!r}",
                hint=f'Quote every {key} entry in {CONFIG_FILENAME}.',
            )
    return tuple(str(item) for item in items)


def _compile_pattern(key: str, source: str) -> re.Pattern[str] | None:
    """Compile a pattern from config; an empty string disables it."""
    if not source:
        return None
    try:
        return re.compile(source)
    except re.error as exc:
        raise CommitKitError(
            code=E.CONFIG_INVALID_PATTERN,
            message=f"'{key}' is not a valid regular expression: {exc}",
            hint='Use TOML literal strings (single quotes) so backslashes are kept verbatim.',
        ) from exc


def make_notes_pattern(template: str) -> NotesPatternFactory:
    """Return a notes-pattern factory from a ``{keywords}`` template.

    The placeholder is substituted literally (not with ``str.format``) so
    regex quantifiers such as ``{2}`` survive.

    >>> factory = make_notes_pattern(r'^\\s*({keywords}): ?(.*)')
    >>> factory('BREAKING CHANGE|DEPRECATED').pattern
    '^\\\\s*(BREAKING CHANGE|DEPRECATED): ?(.*)'
    """

    def factory(keywords: str) -> re.Pattern[str]:
        return re.compile(template.replace(KEYWORDS_PLACEHOLDER, keywords))

    return factory


def options_from_mapping(raw: dict[str, Any]) -> ParserOptions:  # noqa: ANN401 - dynamic config
    """Validate a mapping of config keys and build :class:`ParserOptions`.

    Keys that are absent keep their defaults.

    Args:
        raw: Flat mapping using the ``commitkit.toml`` key names.

    Returns:
        A validated :class:`ParserOptions`.

    Raises:
        CommitKitError: On unknown keys, wrong types or bad patterns.
    """
    for key in raw:
        if key not in VALID_KEYS:
            suggestion = difflib.get_close_matches(key, VALID_KEYS, n=1, cutoff=0.6)
            hint = f"Did you mean '{suggestion[0]}'?" if suggestion else f'Check valid keys for {CONFIG_FILENAME}.'
            raise CommitKitError(
                code=E.CONFIG_INVALID_KEY,
                message=f"Unknown key '{key}' in {CONFIG_FILENAME}",
                hint=hint,
            )

    kwargs: dict[str, Any] = {}  # noqa: ANN401
    for key, value in raw.items():
        _validate_value_type(key, value)
        if key in _LIST_KEYS:
            kwargs[key] = _validate_string_list(key, value)
        elif key in _PATTERN_KEYS:
            kwargs[key] = _compile_pattern(key, value)
        elif key == 'notes_pattern':
            if value:
                # Fail early on a template that cannot compile.
                _compile_pattern(key, value.replace(KEYWORDS_PLACEHOLDER, 'x'))
                kwargs[key] = make_notes_pattern(value)
            else:
                kwargs[key] = None
        elif key == 'comment_char':
            kwargs[key] = value or None
        else:
            kwargs[key] = value

    return ParserOptions(**kwargs)


def load_options(root: Path) -> ParserOptions:
    """Load and validate parser options from ``commitkit.toml``.

    Args:
        root: Directory containing ``commitkit.toml``.

    Returns:
        Validated :class:`ParserOptions`; defaults when the file is absent.

    Raises:
        CommitKitError: If the file cannot be read or contains invalid config.
    """
    config_path = root / CONFIG_FILENAME

    if not config_path.is_file():
        logger.debug('no_commitkit_config', path=str(config_path))
        return ParserOptions()

    try:
        text = config_path.read_text(encoding='utf-8')
    except OSError as exc:
        raise CommitKitError(
            code=E.CONFIG_NOT_FOUND,
            message=f'Failed to read {config_path}: {exc}',
        ) from exc

    try:
        doc = tomlkit.parse(text)
    except tomlkit.exceptions.TOMLKitError as exc:
        raise CommitKitError(
            code=E.CONFIG_NOT_FOUND,
            message=f'Failed to parse {config_path}: {exc}',
        ) from exc

    raw: dict[str, Any] = doc.unwrap()  # noqa: ANN401
    options = options_from_mapping(raw)
    logger.debug('loaded_commitkit_config', path=str(config_path), keys=sorted(raw))
    return options


__all__ = [
    'CONFIG_FILENAME',
    'DEFAULT_FIELD_PATTERN',
    'DEFAULT_HEADER_CORRESPONDENCE',
    'DEFAULT_HEADER_PATTERN',
    'DEFAULT_ISSUE_PREFIXES',
    'DEFAULT_NOTE_KEYWORDS',
    'DEFAULT_REFERENCE_ACTIONS',
    'DEFAULT_REVERT_CORRESPONDENCE',
    'DEFAULT_REVERT_PATTERN',
    'VALID_KEYS',
    'NotesPatternFactory',
    'ParserOptions',
    'load_options',
    'make_notes_pattern',
    'options_from_mapping',
]
