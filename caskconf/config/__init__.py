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

"""Install-location configuration for caskconf.

This package resolves where a package's artifacts are installed using three
layers, highest precedence first:

  - Explicit values (command-line flags, setters)
  - Environment options (CASKCONF_CASK_OPTS)
  - Built-in platform defaults, optionally overridden by a YAML site file

Public API:

- Config: The layered configuration
- ConfigKey: The closed set of recognized keys
- DIR_KEYS: The directory keys, in display order
- SystemContext: External collaborators (options, OS languages, prefix)
- LazyValue: Evaluate-once deferred value
- load_default_overrides: Read site default overrides from YAML
- expand_path: Home-placeholder expansion to an absolute path

Example:
    Basic usage:

        from caskconf.config import Config

        config = Config(explicit={"fontdir": "~/Fonts"})
        print(config.fontdir)
        print(config.languages)

"""

from .config import Config, Layer
from .dirs import DIR_KEYS, ConfigKey, default_dirs, expand_path
from .environment import SystemContext
from .lazy import LazyValue
from .loader import load_default_overrides

__all__ = [
    "Config",
    "ConfigKey",
    "DIR_KEYS",
    "Layer",
    "LazyValue",
    "SystemContext",
    "default_dirs",
    "expand_path",
    "load_default_overrides",
]
