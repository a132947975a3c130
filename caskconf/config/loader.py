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

"""Site-wide default overrides loaded from YAML.

An administrator can relocate install locations for every user of a machine
with a small YAML file. Its entries replace the matching built-in defaults
and still lose to environment options and explicit flags.

File Format:
    A single mapping of configuration key to value:

        ```yaml
        appdir: ~/Applications
        fontdir: /Library/Fonts
        languages: [en-GB, en]
        ```

Error Handling:
    - ConfigError: File doesn't exist, YAML parse errors, or a top-level
      value that is not a mapping
    - All errors are chained with "from err" for better debugging

Example:
    Feed the overrides into the default layer:
        ```python
        from pathlib import Path
        from caskconf.config import Config, load_default_overrides

        overrides = load_default_overrides(Path("/etc/caskconf/defaults.yaml"))
        config = Config(default=overrides)
        ```

Note:
    Keys are not validated here. Unknown keys are dropped when the overrides
    become the default layer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from caskconf.exceptions import ConfigError
from caskconf.logging import get_global_logger

__all__ = ["load_default_overrides"]


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """Loads a YAML file and returns the parsed Python object.

    Args:
        p: Path to the YAML file to load.

    Returns:
        The parsed Python object, or None for an empty file.

    Raises:
        ConfigError: When the file does not exist or is not valid YAML.
    """
    if not p.exists():
        raise ConfigError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err


# -------------------------------
# Public API
# -------------------------------


def load_default_overrides(path: Path) -> dict[str, Any]:
    """Load a YAML file of default overrides.

    Args:
        path: Path to the YAML file.

    Returns:
        The key/value overrides. An empty file yields an empty dict.

    Raises:
        ConfigError: If the file is missing, unparseable, or not a mapping.
    """
    logger = get_global_logger()
    logger.verbose("CONFIG", f"Loading site defaults: {path}")

    data = _load_yaml_file(path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {path}")

    overrides = {str(key): value for key, value in data.items()}
    logger.debug(
        "CONFIG",
        f"Site defaults override {len(overrides)} key(s): {', '.join(overrides)}",
    )
    return overrides
