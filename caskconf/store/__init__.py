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

"""Per-package persistence of install-location configuration.

Public API:

- ConfigStore: Load, save and combine configs for packages in a caskroom
- load_config: Load a Config from a JSON file
- save_config: Save a Config to a JSON file with pretty-printing

"""

from .store import ConfigStore, load_config, save_config

__all__ = ["ConfigStore", "load_config", "save_config"]
