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

"""Install-location configuration with layered precedence.

A Config holds three layers, each a mapping from recognized key to value:

1. **explicit** - values set by the user for this invocation (CLI flags,
   setters). Always present.
2. **env** - values parsed from the configured option string
   (CASKCONF_CASK_OPTS). Computed on first read unless supplied.
3. **default** - built-in platform defaults, optionally overlaid by a
   partial map (e.g. site defaults from YAML). Computed on first read unless
   supplied.

Resolution Rules
----------------
- Directory keys: the first layer that has the key wins
  (explicit, then env, then default).
- languages: every layer contributes. The lists are concatenated in layer
  order, duplicates removed keeping the first occurrence, and tags that do
  not parse as language tags are skipped.

Directory values are stored as absolute paths with home placeholders
expanded. Language lists are stored exactly as given and only validated
when read.

Merging
-------
``a.merge(b)`` keeps only explicit intent: the result's explicit layer is
b's explicit values overlaid with a's, and its env/default layers are
recomputed from the environment when next read.

Example:
    Resolve locations for an install:
        ```python
        from caskconf.config import Config

        config = Config(explicit={"appdir": "~/Applications"})
        config.appdir       # PosixPath('/Users/me/Applications')
        config.fontdir      # env value if set, else ~/Library/Fonts
        config.languages    # ['de', 'en']
        ```

    Persist and restore:
        ```python
        text = config.to_json()
        restored = Config.from_json(text)
        ```
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import json
import os
from pathlib import Path
from typing import Any

from caskconf.config.dirs import (
    DIR_KEYS,
    ConfigKey,
    expand_path,
    normalize_key,
)
from caskconf.config.environment import SystemContext
from caskconf.config.lazy import force
from caskconf.exceptions import ConfigError, InvalidConfigurationKeyError
from caskconf.language_tags import Locale, LocaleParseError
from caskconf.logging import get_global_logger

__all__ = ["Config", "Layer"]

Layer = dict[ConfigKey, Any]
RawLayer = Mapping[Any, Any] | Iterable[tuple[Any, Any]]

_LAYER_NAMES = ("default", "env", "explicit")


def _as_list(value: Any) -> list[Any]:
    value = force(value)
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _serialize_value(value: Any) -> Any:
    value = force(value)
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    if isinstance(value, tuple):
        return list(value)
    return value


class Config:
    """Layered install-location configuration.

    Attributes:
        explicit: The explicit layer. Mutated in place by the setters.
        system: Collaborators used for the lazy layers and derived paths.
    """

    @classmethod
    def defaults(cls, system: SystemContext | None = None) -> Layer:
        """Return the built-in default layer (not yet canonicalized).

        The ``languages`` entry is the context's LazyValue, so the OS is
        only asked for its languages when that entry is first forced, and
        only once per context.
        """
        system = system or SystemContext.current()
        layer: Layer = {ConfigKey.LANGUAGES: system.languages}
        layer.update(system.default_dirs())
        return layer

    @classmethod
    def canonicalize(cls, config: RawLayer) -> dict[Any, Any]:
        """Normalize keys and expand directory values to absolute paths.

        Args:
            config: A mapping, or an iterable of (key, value) pairs.

        Returns:
            A new dict. Recognized keys become ConfigKey members;
            unrecognized keys are kept as plain strings for the caller to
            validate.

        Raises:
            TypeError: If a directory key is given a list value.
        """
        items = config.items() if isinstance(config, Mapping) else config
        result: dict[Any, Any] = {}
        for raw_key, value in items:
            key = normalize_key(raw_key)
            if key in DIR_KEYS:
                if isinstance(value, (list, tuple)):
                    raise TypeError(
                        f"Invalid path for default dir {raw_key}: {value!r}"
                    )
                result[key] = expand_path(value)
            else:
                result[key] = value
        return result

    @classmethod
    def from_args(cls, args: Any, *, system: SystemContext | None = None) -> Config:
        """Build a Config whose explicit layer comes from parsed CLI args.

        Args:
            args: An object with one attribute per directory key plus
                ``language`` (a list of tags). Attributes set to None are
                treated as not given.
            system: Collaborators; defaults to the process-wide context.

        Raises:
            AttributeError: If ``args`` lacks one of the expected attributes.
        """
        explicit: dict[ConfigKey, Any] = {
            key: getattr(args, key.value) for key in DIR_KEYS
        }
        explicit[ConfigKey.LANGUAGES] = args.language
        return cls(
            explicit={k: v for k, v in explicit.items() if v is not None},
            system=system,
        )

    @classmethod
    def from_json(
        cls,
        json_text: str | bytes,
        ignore_invalid_keys: bool = False,
        *,
        system: SystemContext | None = None,
    ) -> Config:
        """Build a Config from a document produced by :meth:`to_json`.

        Raises:
            json.JSONDecodeError: If the text is not valid JSON.
            ConfigError: If the document or one of its sections is not a
                JSON object.
            InvalidConfigurationKeyError: If env/explicit contain unknown keys
                and ``ignore_invalid_keys`` is False.
        """
        document = json.loads(json_text)
        if not isinstance(document, dict):
            raise ConfigError(
                f"Configuration document must be a JSON object, "
                f"got {type(document).__name__}"
            )
        layers = {name: document.get(name, {}) for name in _LAYER_NAMES}
        for name, layer in layers.items():
            if not isinstance(layer, dict):
                raise ConfigError(
                    f"Configuration section '{name}' must be a JSON object, "
                    f"got {type(layer).__name__}"
                )
        return cls(
            **layers,
            ignore_invalid_keys=ignore_invalid_keys,
            system=system,
        )

    def __init__(
        self,
        default: RawLayer | None = None,
        env: RawLayer | None = None,
        explicit: RawLayer | None = None,
        ignore_invalid_keys: bool = False,
        *,
        system: SystemContext | None = None,
    ) -> None:
        self.system = system or SystemContext.current()
        self._default: Layer | None = None
        self._binarydir: Path | None = None
        self._manpagedir: Path | None = None

        if default is not None:
            merged = self.canonicalize(self.defaults(self.system))
            merged.update(self.canonicalize(default))
            self._default = self._drop_invalid_keys(merged, "default")

        raw_env = self.canonicalize(env) if env is not None else None
        raw_explicit = self.canonicalize(explicit or {})

        if ignore_invalid_keys:
            if raw_env is not None:
                raw_env = self._drop_invalid_keys(raw_env, "env")
            raw_explicit = self._drop_invalid_keys(raw_explicit, "explicit")
        else:
            invalid = [
                key
                for layer in (raw_env or {}, raw_explicit)
                for key in layer
                if not isinstance(key, ConfigKey)
            ]
            if invalid:
                raise InvalidConfigurationKeyError(dict.fromkeys(invalid))

        self._env: Layer | None = raw_env
        self.explicit: Layer = raw_explicit

    @staticmethod
    def _drop_invalid_keys(layer: Mapping[Any, Any], name: str) -> Layer:
        kept: Layer = {}
        for key, value in layer.items():
            if isinstance(key, ConfigKey):
                kept[key] = value
            else:
                get_global_logger().debug(
                    "CONFIG", f"Ignoring invalid {name} key: {key}"
                )
        return kept

    # -------------------------------
    # Layers
    # -------------------------------

    @property
    def default(self) -> Layer:
        """The default layer; ``languages`` may still be an unforced LazyValue."""
        if self._default is None:
            self._default = self.canonicalize(self.defaults(self.system))
            get_global_logger().debug("CONFIG", "Materialized default layer")
        return self._default

    @property
    def env(self) -> Layer:
        if self._env is None:
            pairs: list[tuple[str, Any]] = []
            for arg in self.system.cask_opts():
                if "=" not in arg:
                    continue
                flag, value = arg.split("=", 1)
                key = flag.removeprefix("--")
                if key == "language":
                    key = "languages"
                    value = value.split(",")
                pairs.append((key, value))

            self._env = self._drop_invalid_keys(self.canonicalize(pairs), "env")
            get_global_logger().debug(
                "CONFIG", f"Materialized env layer: {len(self._env)} key(s)"
            )
        return self._env

    # -------------------------------
    # Accessors
    # -------------------------------

    def get(self, key: ConfigKey | str) -> Any:
        """Return the effective value for ``key``.

        Directory keys resolve explicit, then env, then default.
        ``languages`` returns :attr:`languages`.

        Raises:
            InvalidConfigurationKeyError: If ``key`` is not recognized.
        """
        key = self._checked_key(key)
        if key is ConfigKey.LANGUAGES:
            return self.languages
        if key in self.explicit:
            return self.explicit[key]
        if key in self.env:
            return self.env[key]
        return self.default[key]

    def set(self, key: ConfigKey | str, value: Any) -> None:
        """Set ``key`` in the explicit layer.

        Directory values are expanded to absolute paths; a language list is
        stored verbatim.

        Raises:
            InvalidConfigurationKeyError: If ``key`` is not recognized.
        """
        key = self._checked_key(key)
        if key is ConfigKey.LANGUAGES:
            self.languages = value
        else:
            self.explicit[key] = expand_path(value)

    @staticmethod
    def _checked_key(raw: ConfigKey | str) -> ConfigKey:
        key = normalize_key(raw)
        if not isinstance(key, ConfigKey):
            raise InvalidConfigurationKeyError([key])
        return key

    @property
    def languages(self) -> list[str]:
        candidates = [
            *_as_list(self.explicit.get(ConfigKey.LANGUAGES)),
            *_as_list(self.env.get(ConfigKey.LANGUAGES)),
            *_as_list(self.default.get(ConfigKey.LANGUAGES)),
        ]

        languages: list[str] = []
        # only strings can be tags; nested lists in a stored file are skipped
        strings = [lang for lang in candidates if isinstance(lang, str)]
        for lang in dict.fromkeys(strings):
            try:
                Locale.parse(lang)
            except LocaleParseError:
                get_global_logger().debug(
                    "CONFIG", f"Skipping invalid language: {lang!r}"
                )
                continue
            languages.append(lang)
        return languages

    @languages.setter
    def languages(self, languages: list[str]) -> None:
        self.explicit[ConfigKey.LANGUAGES] = languages

    @property
    def binarydir(self) -> Path:
        if self._binarydir is None:
            self._binarydir = self.system.prefix / "bin"
        return self._binarydir

    @property
    def manpagedir(self) -> Path:
        if self._manpagedir is None:
            self._manpagedir = self.system.prefix / "share" / "man"
        return self._manpagedir

    # -------------------------------
    # Combination and export
    # -------------------------------

    def merge(self, other: Config) -> Config:
        """Return a new Config with this config's explicit values over ``other``'s.

        Only the explicit layers are combined; the result recomputes env and
        default lazily.
        """
        return type(self)(
            explicit={**other.explicit, **self.explicit},
            system=self.system,
        )

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Return the fully materialized layers as JSON-compatible data."""
        return {
            name: {
                str(key): _serialize_value(value)
                for key, value in getattr(self, name).items()
            }
            for name in _LAYER_NAMES
        }

    def to_json(self, **kwargs: Any) -> str:
        """Serialize all three layers; keyword arguments go to json.dumps."""
        return json.dumps(self.to_dict(), **kwargs)

    def __repr__(self) -> str:
        explicit = {str(k): _serialize_value(v) for k, v in self.explicit.items()}
        return f"{type(self).__name__}(explicit={explicit!r})"


def _dir_property(key: ConfigKey) -> property:
    def getter(self: Config) -> Path:
        return self.get(key)

    def setter(self: Config, path: str | os.PathLike[str]) -> None:
        self.set(key, path)

    return property(
        getter, setter, doc=f"Effective {key} (explicit, env, then default)."
    )


for _key in DIR_KEYS:
    setattr(Config, _key.value, _dir_property(_key))
del _key
