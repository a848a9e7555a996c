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

"""Structured logging for commitkit.

The parser and filter log through `structlog <https://www.structlog.org/>`_
events such as ``skipped_commit`` and ``revert_pair_dropped``. The CLI
calls :func:`configure_logging` once; libraries embedding commitkit may
configure structlog themselves instead.

Output always goes to stderr, because stdout carries the parsed JSON::

    git log --format=... | commitkit log | jq '.[].type'
           stdout ──────────────────────────►
           stderr ──► console lines, or JSON lines with --json-log
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

LOGGER_NAME = 'commitkit'


def _level(*, verbose: bool, quiet: bool) -> int:
    # quiet wins over verbose.
    if quiet:
        return logging.WARNING
    return logging.DEBUG if verbose else logging.INFO


def _renderer(*, json_log: bool, stream: TextIO) -> structlog.types.Processor:
    if json_log:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route structlog events through a stdlib handler on ``stream``.

    Safe to call more than once; the last call wins.

    Args:
        verbose: Emit debug events (one per dropped revert pair, config
            lookups).
        quiet: Emit only warnings and errors.
        json_log: Render one JSON object per line.
        stream: Destination; defaults to ``sys.stderr``.
    """
    out = stream or sys.stderr
    logging.basicConfig(
        format='%(message)s',
        stream=out,
        level=_level(verbose=verbose, quiet=quiet),
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt='iso'),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(json_log=json_log, stream=out),
        ],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str = LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger; module loggers pass ``__name__``."""
    return structlog.get_logger(name)


__all__ = [
    'LOGGER_NAME',
    'configure_logging',
    'get_logger',
]
