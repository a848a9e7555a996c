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

"""Structured commit message parsing and reverted-commit filtering.

Usage::

    from commitkit import CommitParser, filter_reverted_commits, parse_commits

    commits = parse_commits(raw_messages)
    for commit in filter_reverted_commits(commits):
        print(commit.type, commit.subject, [r.issue for r in commit.references])
"""

__version__ = '0.1.0'

from commitkit.config import ParserOptions, load_options
from commitkit.errors import CommitKitError, InvalidInputError
from commitkit.filtering import (
    RevertedCommitsFilter,
    filter_reverted_commits,
    filter_reverted_commits_async,
)
from commitkit.parser import (
    Commit,
    CommitNote,
    CommitParser,
    CommitReference,
    ErrorPolicy,
    parse_commit,
    parse_commits,
    parse_commits_async,
)

__all__ = [
    '__version__',
    'Commit',
    'CommitKitError',
    'CommitNote',
    'CommitParser',
    'CommitReference',
    'ErrorPolicy',
    'InvalidInputError',
    'ParserOptions',
    'RevertedCommitsFilter',
    'filter_reverted_commits',
    'filter_reverted_commits_async',
    'load_options',
    'parse_commit',
    'parse_commits',
    'parse_commits_async',
]
