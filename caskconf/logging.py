# Copyright 2025 Roger Cibrian
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

"""Logging interface for caskconf.

Library modules log through a small protocol so they never depend on the
CLI. The global logger is silent until the CLI (or an embedding program)
installs a configured one.

Diagnostics go to stderr so that command output on stdout (such as the
JSON printed by ``caskconf export``) stays machine-readable with
``--debug`` enabled.

Output levels:

- Verbose: Only written when verbose mode is enabled
- Debug: Only written when debug mode is enabled (implies verbose)

Example:
    Configure the global logger for a block of work:
        ```python
        from caskconf.logging import get_logger, using_logger

        with using_logger(get_logger(verbose=True)):
            config = Config(default=load_default_overrides(path))
        ```

    Use in library code:
        ```python
        from caskconf.logging import get_global_logger

        logger = get_global_logger()
        logger.verbose("CONFIG", "Reading site defaults")
        logger.debug("CONFIG", "Materialized env layer: 2 key(s)")
        ```
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import sys
from typing import Protocol, TextIO


class Logger(Protocol):
    """Protocol for logger implementations."""

    def verbose(self, prefix: str, message: str) -> None:
        """Write a verbose log message.

        Args:
            prefix: Component tag (e.g., "CONFIG", "STORE").
            message: Log message.
        """
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Write a debug log message.

        Args:
            prefix: Component tag (e.g., "CONFIG", "LOCALE").
            message: Log message.
        """
        ...


class DefaultLogger:
    """Logger writing ``[PREFIX] message`` lines to a stream.

    Attributes:
        stream: Destination for log lines. None means the current
            ``sys.stderr``, looked up on every write.
    """

    def __init__(
        self,
        verbose: bool = False,
        debug: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self.show_verbose = verbose or debug
        self.show_debug = debug
        self.stream = stream

    def _write(self, prefix: str, message: str) -> None:
        print(f"[{prefix}] {message}", file=self.stream or sys.stderr)

    def verbose(self, prefix: str, message: str) -> None:
        if self.show_verbose:
            self._write(prefix, message)

    def debug(self, prefix: str, message: str) -> None:
        if self.show_debug:
            self._write(prefix, message)


class SilentLogger:
    """Logger that discards everything."""

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass


_global_logger: Logger = SilentLogger()


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Return a stderr logger for the CLI's ``--verbose``/``--debug`` flags."""
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Get the global logger instance (silent unless configured)."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Replace the global logger used by library modules."""
    global _global_logger
    _global_logger = logger


@contextmanager
def using_logger(logger: Logger) -> Iterator[Logger]:
    """Install ``logger`` globally for the duration of the block.

    The previous global logger is restored on exit, including when the
    block raises, so a command run through ``caskconf.cli.main`` from
    another program does not leave its verbosity behind.

    Yields:
        The installed logger.
    """
    previous = get_global_logger()
    set_global_logger(logger)
    try:
        yield logger
    finally:
        set_global_logger(previous)
