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

"""Issue reference extraction.

A line is first cut into ``(action, sentence)`` segments by the
references matcher (``Closes #1, #2 fixes org/repo#3`` gives
``("Closes", "#1, #2 ")`` and ``("fixes", "org/repo#3")``). Each sentence
is then scanned for every ``[owner/repo]PREFIX id`` occurrence.
"""

from __future__ import annotations

import re

from commitkit.parser._regex import PASS_THROUGH, ParserRegexes, iter_matches
from commitkit.parser._types import CommitReference


class ReferenceResolver:
    """Extracts :class:`CommitReference` records from text."""

    def __init__(self, regexes: ParserRegexes) -> None:
        """Use the matchers of one parser."""
        self.regexes = regexes

    def _parse_sentence(self, sentence: str, action: str | None) -> list[CommitReference]:
        # URLs are never references, whatever else the sentence holds.
        if self.regexes.url.search(sentence):
            return []

        references: list[CommitReference] = []
        for match in iter_matches(self.regexes.reference_parts, sentence):
            specifier, prefix, issue = match.group(1, 2, 3)
            owner: str | None = None
            repository = specifier or None
            if repository and '/' in repository:
                owner, repository = repository.split('/', 1)
            references.append(
                CommitReference(
                    raw=match.group(0),
                    action=action,
                    owner=owner,
                    repository=repository,
                    prefix=prefix,
                    issue=issue,
                ),
            )
        return references

    def _segments_regex(self, text: str) -> re.Pattern[str]:
        return self.regexes.references if self.regexes.references.search(text) else PASS_THROUGH

    def parse_references(self, text: str) -> list[CommitReference]:
        """Return every reference in ``text``, in order.

        Args:
            text: A single line (or the header).

        Returns:
            The references found; empty when there are none.
        """
        references: list[CommitReference] = []
        for segment in iter_matches(self._segments_regex(text), text):
            action = segment.group(1) or None
            sentence = segment.group(2) or ''
            references.extend(self._parse_sentence(sentence, action))
        return references
