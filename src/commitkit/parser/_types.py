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

"""Pure types for commit message parsing.

This module has **zero** runtime dependencies beyond the standard library.
The public records are frozen dataclasses; the ``_Draft*`` classes are
the mutable scratch state a single parse fills in before freezing it.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

# Attributes of :class:`Commit` that :meth:`Commit.get` resolves before
# falling back to :attr:`Commit.fields`.
COMMIT_ATTRIBUTES: frozenset[str] = frozenset({
    'merge',
    'revert',
    'header',
    'body',
    'footer',
    'notes',
    'mentions',
    'references',
})


@dataclass(frozen=True)
class CommitNote:
    """A titled footer block such as ``BREAKING CHANGE: removed X``.

    Attributes:
        title: The keyword as written in the message.
        text: The note text, continuation lines included.
    """

    title: str
    text: str


@dataclass(frozen=True)
class CommitReference:
    """A pointer to an issue or pull request.

    Attributes:
        raw: The matched text, including anything skipped before the prefix.
        action: The verb that introduced it (``"Closes"``), if any.
        owner: Owner part of an ``owner/repo#1`` specifier.
        repository: Repository part of the specifier.
        prefix: The issue prefix that matched (``"#"``).
        issue: The issue id (``"123"``).
    """

    raw: str
    action: str | None
    owner: str | None
    repository: str | None
    prefix: str
    issue: str


@dataclass(frozen=True)
class Commit:
    """A parsed commit message.

    ``fields`` holds everything whose name comes from configuration:
    header and merge correspondence values (``type``, ``scope``,
    ``subject`` by default) and meta fields read from ``-name-`` blocks
    (``hash``, ``author``, ...).

    Attributes:
        merge: The matched merge line, if a merge pattern matched.
        revert: The revert descriptor (``{"header": ..., "hash": ...}``).
        header: The first line of the message.
        body: Free text between the header and the first footer line.
        footer: Note and reference lines.
        notes: Notes in order of appearance.
        mentions: ``@name`` mentions in order, duplicates preserved.
        references: Issue references in order of appearance.
        fields: Configured and meta fields by name.
    """

    merge: str | None = None
    revert: dict[str, str | None] | None = None
    header: str | None = None
    body: str | None = None
    footer: str | None = None
    notes: tuple[CommitNote, ...] = ()
    mentions: tuple[str, ...] = ()
    references: tuple[CommitReference, ...] = ()
    fields: dict[str, str | None] = field(default_factory=dict)

    # ``revert`` and ``fields`` are dicts; records compare by value but
    # cannot be hashed.
    __hash__ = None  # type: ignore[assignment]

    def __contains__(self, name: str) -> bool:
        """Whether ``name`` is a fixed attribute or a field that was set."""
        return name in COMMIT_ATTRIBUTES or name in self.fields

    def get(self, name: str) -> Any:  # noqa: ANN401 - attribute or field value
        """Return a fixed attribute or a named field, ``None`` if absent."""
        if name in COMMIT_ATTRIBUTES:
            return getattr(self, name)
        return self.fields.get(name)

    def __getitem__(self, name: str) -> Any:  # noqa: ANN401
        """Same as :meth:`get`."""
        return self.get(name)

    @property
    def type(self) -> str | None:
        """The ``type`` field of a conventional header."""
        return self.fields.get('type')

    @property
    def scope(self) -> str | None:
        """The ``scope`` field of a conventional header."""
        return self.fields.get('scope')

    @property
    def subject(self) -> str | None:
        """The ``subject`` field of a conventional header."""
        return self.fields.get('subject')

    def to_dict(self) -> dict[str, Any]:  # noqa: ANN401
        """Return a JSON-serializable dict, fields flattened to the top level."""
        data = dataclasses.asdict(self)
        fields = data.pop('fields')
        for name, value in fields.items():
            data.setdefault(name, value)
        return data


@dataclass
class _DraftNote:
    title: str
    text: str


@dataclass
class _DraftCommit:
    """Mutable state of one parse; frozen into a :class:`Commit` at the end."""

    merge: str | None = None
    revert: dict[str, str | None] | None = None
    header: str | None = None
    body: str | None = None
    footer: str | None = None
    notes: list[_DraftNote] = field(default_factory=list)
    mentions: list[str] = field(default_factory=list)
    references: list[CommitReference] = field(default_factory=list)
    fields: dict[str, str | None] = field(default_factory=dict)

    def assign(self, name: str, value: str | None) -> None:
        """Store a correspondence value; ``header`` is the one fixed attribute it may set."""
        if name == 'header':
            if self.header is None:
                self.header = value
            return
        self.fields[name] = value

    def freeze(self) -> Commit:
        return Commit(
            merge=self.merge,
            revert=self.revert,
            header=self.header,
            body=self.body,
            footer=self.footer,
            notes=tuple(CommitNote(title=n.title, text=n.text) for n in self.notes),
            mentions=tuple(self.mentions),
            references=tuple(self.references),
            fields=dict(self.fields),
        )
