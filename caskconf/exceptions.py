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

"""Exception hierarchy for caskconf.

This module defines the exceptions raised while building and resolving
install-location configuration:

- ConfigError: Bad configuration input (YAML defaults files, corrupted
  persisted configuration)
- InvalidConfigurationKeyError: A configuration layer names a key that is
  not one of the recognized install-location keys

All exceptions inherit from CaskConfError, allowing callers to catch every
caskconf error with a single except clause if needed.

Malformed input that is a programming error rather than a user error keeps
its builtin type: a list given for a directory key raises TypeError, and an
unparseable JSON document raises json.JSONDecodeError.

Example:
    Surfacing an unknown key to the user:
        ```python
        from caskconf.config import Config
        from caskconf.exceptions import InvalidConfigurationKeyError

        try:
            config = Config(explicit={"appdirr": "~/Applications"})
        except InvalidConfigurationKeyError as e:
            print(f"Error: {e}")
        ```

    Catching all caskconf errors:
        ```python
        from caskconf.exceptions import CaskConfError

        try:
            config = load_config(Path("config.json"))
        except CaskConfError as e:
            print(f"caskconf error: {e}")
        ```
"""

from __future__ import annotations

from collections.abc import Iterable

__all__ = [
    "CaskConfError",
    "ConfigError",
    "InvalidConfigurationKeyError",
]


class CaskConfError(Exception):
    """Base exception for all caskconf errors."""

    pass


class ConfigError(CaskConfError):
    """Raised for configuration input errors.

    This exception is raised when there are problems with:

    - YAML site defaults files (missing, syntax errors, wrong structure)
    - Persisted package configuration that cannot be parsed
    """

    pass


class InvalidConfigurationKeyError(ConfigError):
    """Raised when a configuration layer contains unrecognized keys.

    Attributes:
        keys: The offending keys, in the order they were found.

    Example:
        Inspecting the rejected keys:
            ```python
            try:
                Config(env={"not_a_real_key": "v"})
            except InvalidConfigurationKeyError as e:
                print(e.keys)  # ['not_a_real_key']
            ```
    """

    def __init__(self, keys: Iterable[str]) -> None:
        self.keys = [str(k) for k in keys]
        noun = "key" if len(self.keys) == 1 else "keys"
        super().__init__(
            f"Invalid configuration {noun}: {', '.join(self.keys)}"
        )
