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

"""Runtime collaborators consulted by Config.

Config never reads the process environment or queries the OS directly.
Everything it needs from the outside world is bundled in a
:class:`SystemContext`:

- cask_opts: returns ``--flag=value`` option strings for the env layer
- languages: a LazyValue of the OS preferred languages
- prefix: installation prefix for binarydir/manpagedir
- platform: ``sys.platform`` value selecting the directory defaults

``SystemContext.current()`` is the process-wide context built from the real
environment. Tests construct their own context instead of patching globals.

Environment Variables:

- CASKCONF_CASK_OPTS: Shell-quoted options, e.g.
  ``--appdir=~/Applications --language=de,en``
- CASKCONF_PREFIX: Installation prefix

When CASKCONF_CASK_OPTS is not set in the environment it is read from
``~/.caskconf/caskconf.env`` (dotenv syntax) if that file exists.

Example:
    A deterministic context for tests:
        ```python
        from pathlib import Path
        from caskconf.config import Config, LazyValue, SystemContext

        system = SystemContext(
            cask_opts=lambda: ["--fontdir=/tmp/fonts"],
            languages=LazyValue(lambda: ["en"]),
            prefix=Path("/opt/test"),
            platform="darwin",
        )
        config = Config(system=system)
        ```
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
import os
from pathlib import Path
import platform as _platform
import shlex
import sys

from dotenv import dotenv_values

from caskconf.config.dirs import ConfigKey, default_dirs, expand_path
from caskconf.config.lazy import LazyValue
from caskconf.language_tags import system_languages

__all__ = [
    "CASK_OPTS_VAR",
    "PREFIX_VAR",
    "DEFAULT_ENV_FILE",
    "SystemContext",
    "cask_opts",
    "default_prefix",
    "reset_current",
]

CASK_OPTS_VAR = "CASKCONF_CASK_OPTS"
PREFIX_VAR = "CASKCONF_PREFIX"
DEFAULT_ENV_FILE = "~/.caskconf/caskconf.env"


def cask_opts(
    environ: Mapping[str, str] | None = None,
    env_file: str | os.PathLike[str] | None = None,
) -> list[str]:
    """Return the option strings configured for the env layer.

    Args:
        environ: Environment to read. Defaults to ``os.environ``.
        env_file: dotenv file consulted when the variable is unset.
            Defaults to DEFAULT_ENV_FILE.

    Returns:
        The shell-split options, e.g. ``["--appdir=/Apps", "--no-quarantine"]``.
        Empty when nothing is configured.
    """
    environ = os.environ if environ is None else environ
    raw = environ.get(CASK_OPTS_VAR)
    if raw is None:
        path = expand_path(env_file or DEFAULT_ENV_FILE)
        if path.is_file():
            raw = dotenv_values(path).get(CASK_OPTS_VAR)
    return shlex.split(raw or "")


def default_prefix(
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
    machine: str | None = None,
) -> Path:
    """Return the installation prefix.

    CASKCONF_PREFIX wins when set. Otherwise Apple Silicon Macs use
    ``/opt/caskconf`` and everything else ``/usr/local``.
    """
    environ = os.environ if environ is None else environ
    configured = environ.get(PREFIX_VAR)
    if configured:
        return expand_path(configured)

    platform = platform or sys.platform
    machine = machine or _platform.machine()
    if platform == "darwin" and machine == "arm64":
        return Path("/opt/caskconf")
    return Path("/usr/local")


@dataclass(frozen=True)
class SystemContext:
    """External collaborators for Config.

    Attributes:
        cask_opts: Provider of ``--flag=value`` option strings.
        languages: Lazily evaluated OS language list.
        prefix: Installation prefix.
        platform: ``sys.platform`` value used to pick directory defaults.
    """

    cask_opts: Callable[[], list[str]] = field(default=cask_opts)
    languages: LazyValue[list[str]] = field(
        default_factory=lambda: LazyValue(system_languages)
    )
    prefix: Path = field(default_factory=default_prefix)
    platform: str = sys.platform

    @classmethod
    def current(cls) -> SystemContext:
        """Return the process-wide context, creating it on first use."""
        global _current
        if _current is None:
            _current = cls()
        return _current

    def default_dirs(self) -> dict[ConfigKey, str]:
        return default_dirs(self.platform)


_current: SystemContext | None = None


def reset_current() -> None:
    """Forget the process-wide context so the next current() rebuilds it."""
    global _current
    _current = None
