"""
caskconf - Install-location configuration for package installs

A Python library and CLI that decides where a package installer puts each
kind of artifact (applications, fonts, plugins, screen savers, ...) and
which languages it prefers, by layering explicit flags over environment
options over built-in defaults.

caskconf provides:
  - One resolver for fifteen install locations plus preferred languages
  - Explicit > environment > default precedence for every location
  - Language preferences merged across all layers and validated
  - Platform-aware defaults (macOS and Linux) with lazy OS language lookup
  - Site-wide default overrides from YAML
  - JSON export/import and per-package persistence in a caskroom

Quick Start
-----------
Show the effective locations:

    $ caskconf show --appdir=~/Applications

Export the full configuration document:

    $ caskconf export

For full CLI documentation:

    $ caskconf --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
config : package
    Layered Config, recognized keys, defaults and environment options.
language_tags : module
    Language tag validation and OS language discovery.
store : package
    Per-package persisted configuration.

Public API
----------
    from caskconf.config import Config, ConfigKey, SystemContext
    from caskconf.store import ConfigStore, load_config, save_config
    from caskconf.language_tags import Locale

Project Information
-------------------
Author: Roger Cibrian
License: Apache-2.0
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Layered install-location configuration for package installs"

# Re-export commonly used names for convenience
from caskconf.config import Config, ConfigKey, SystemContext
from caskconf.store import ConfigStore, load_config, save_config

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "Config",
    "ConfigKey",
    "SystemContext",
    "ConfigStore",
    "load_config",
    "save_config",
]
