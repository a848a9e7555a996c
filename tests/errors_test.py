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

"""Tests for commitkit.errors module."""

from __future__ import annotations

import dataclasses
import io

import pytest
from commitkit.errors import (
    ERRORS,
    E,
    CommitKitError,
    ErrorCode,
    ErrorInfo,
    InvalidInputError,
    explain,
    render_error,
)


class TestErrorCode:
    """Tests for ErrorCode enum."""

    def test_all_codes_have_ck_prefix(self) -> None:
        """Every error code must start with 'CK-'."""
        for code in ErrorCode:
            assert code.value.startswith('CK-'), f'{code.name} does not start with CK-'

    def test_no_duplicate_values(self) -> None:
        """Error code values must be unique."""
        values = [c.value for c in ErrorCode]
        assert len(values) == len(set(values))

    def test_e_alias(self) -> None:
        """E should be an alias for ErrorCode."""
        assert E is ErrorCode

    def test_catalog_entries_match_keys(self) -> None:
        """Each catalog entry is filed under its own code."""
        for code, info in ERRORS.items():
            assert info.code is code


class TestErrorInfo:
    """Tests for ErrorInfo dataclass."""

    def test_frozen(self) -> None:
        """ErrorInfo instances should be immutable."""
        info = ErrorInfo(code=E.INPUT_EMPTY, message='test')
        with pytest.raises(dataclasses.FrozenInstanceError):
            info.message = 'changed'  # type: ignore[misc]

    def test_default_hint(self) -> None:
        """Hint should default to empty string."""
        assert ErrorInfo(code=E.INPUT_EMPTY, message='test').hint == ''


class TestCommitKitError:
    """Tests for CommitKitError and InvalidInputError."""

    def test_str_includes_code(self) -> None:
        """Test str includes code."""
        exc = CommitKitError(code=E.CONFIG_INVALID_KEY, message='bad key', hint='fix it')
        assert str(exc) == '[CK-CONFIG-INVALID-KEY] bad key'
        assert exc.code is E.CONFIG_INVALID_KEY
        assert exc.hint == 'fix it'

    def test_invalid_input_defaults(self) -> None:
        """Test invalid input defaults."""
        exc = InvalidInputError()
        assert isinstance(exc, CommitKitError)
        assert exc.code is E.INPUT_EMPTY
        assert exc.info.message == 'Expected a raw commit'
        assert exc.hint == ERRORS[E.INPUT_EMPTY].hint


class TestExplain:
    """Tests for explain()."""

    def test_known_code(self) -> None:
        """Test known code."""
        result = explain('CK-INPUT-EMPTY')
        assert result is not None
        assert result.startswith('CK-INPUT-EMPTY: ')
        assert 'Hint:' in result

    def test_every_code_documented(self) -> None:
        """Every error code has a catalog entry."""
        assert set(ERRORS) == set(ErrorCode)
        result = explain('CK-CONFIG-INVALID-VALUE')
        assert result is not None
        assert 'wrong type' in result

    def test_unknown_code(self) -> None:
        """Test unknown code."""
        assert explain('CK-NOPE') is None


class TestRenderError:
    """Tests for render_error()."""

    def test_plain_output(self) -> None:
        """Non-TTY output has no markup."""
        out = io.StringIO()
        render_error(InvalidInputError(), file=out)
        lines = out.getvalue().splitlines()
        assert lines[0] == 'error[CK-INPUT-EMPTY]: Expected a raw commit'
        assert lines[1] == '  |'
        assert lines[2].startswith('  = hint: ')

    def test_no_hint(self) -> None:
        """Test no hint."""
        out = io.StringIO()
        render_error(CommitKitError(code=E.CONFIG_NOT_FOUND, message='nope'), file=out)
        assert out.getvalue() == 'error[CK-CONFIG-NOT-FOUND]: nope\n\n'
