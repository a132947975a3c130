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

"""Persisted install-location configuration.

When a package is installed, the configuration used for it is written to
its record in the caskroom so that later upgrades and uninstalls find the
same locations:

    <caskroom>/<token>/.metadata/config.json

The file is the Config JSON document (default, env and explicit layers).
On load only the explicit intent matters for precedence, and keys that a
newer or older version no longer recognizes are ignored rather than
rejected, so a stale file never blocks an uninstall.

Example:
    High-level API with ConfigStore:
        ```python
        from pathlib import Path
        from caskconf.config import Config
        from caskconf.store import ConfigStore

        store = ConfigStore(Path("/usr/local/Caskroom"))
        store.save("firefox", Config(explicit={"appdir": "~/Applications"}))

        # Later: flags given now still win over what was persisted
        cli_config = Config(explicit={"fontdir": "~/Fonts"})
        config = store.effective("firefox", cli_config)
        ```

    Low-level API with functions:
        ```python
        from pathlib import Path
        from caskconf.store import load_config, save_config

        config = load_config(Path("config.json"))
        save_config(config, Path("config.json"))
        ```
"""

from __future__ import annotations

import json
from pathlib import Path

from caskconf.config import Config, SystemContext
from caskconf.exceptions import ConfigError
from caskconf.logging import get_global_logger

METADATA_DIR = ".metadata"
CONFIG_FILE = "config.json"


class ConfigStore:
    """Reads and writes per-package configuration files in a caskroom.

    Attributes:
        caskroom: Directory containing one record directory per package.
        system: Collaborators passed to loaded Config instances.
    """

    def __init__(self, caskroom: Path, system: SystemContext | None = None):
        self.caskroom = caskroom
        self.system = system

    def path_for(self, token: str) -> Path:
        """Return the config file path for a package token."""
        return self.caskroom / token / METADATA_DIR / CONFIG_FILE

    def load(self, token: str) -> Config | None:
        """Load the persisted config for ``token``.

        Returns:
            The persisted Config, or None if the package has no config file.

        Raises:
            ConfigError: If the file exists but is corrupted.
        """
        path = self.path_for(token)
        try:
            return load_config(path, system=self.system)
        except FileNotFoundError:
            get_global_logger().verbose("STORE", f"No saved config for {token}")
            return None

    def save(self, token: str, config: Config) -> Path:
        """Persist ``config`` for ``token`` and return the file path."""
        path = self.path_for(token)
        save_config(config, path)
        get_global_logger().verbose("STORE", f"Saved config for {token}: {path}")
        return path

    def effective(self, token: str, cli_config: Config) -> Config:
        """Combine command-line config with what was persisted for ``token``.

        Explicit values from ``cli_config`` win; persisted explicit values
        fill in the rest.
        """
        persisted = self.load(token)
        if persisted is None:
            return cli_config
        return cli_config.merge(persisted)


def load_config(path: Path, *, system: SystemContext | None = None) -> Config:
    """Load a Config from a JSON file, ignoring unrecognized keys.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigError: If the file is not a valid config document.
        OSError: If the file cannot be read due to permissions.
    """
    text = path.read_text(encoding="utf-8")
    try:
        return Config.from_json(text, ignore_invalid_keys=True, system=system)
    except (json.JSONDecodeError, TypeError) as err:
        raise ConfigError(f"Corrupted config file {path}: {err}") from err


def save_config(config: Config, path: Path) -> None:
    """Save a Config as pretty-printed JSON.

    Uses 2-space indentation and sorted keys for stable diffs, and ends the
    file with a newline. Creates parent directories if needed.

    Raises:
        OSError: If the file cannot be written due to permissions.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        f.write(config.to_json(indent=2, sort_keys=True))
        f.write("\n")
