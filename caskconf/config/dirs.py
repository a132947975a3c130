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

"""Recognized configuration keys and their built-in directory defaults.

The key set is closed: every install location a package can be linked into
has exactly one key here, plus ``languages`` for the preferred-language list.
The key set is identical on every platform; only the default values differ.

Default values are templates. A leading ``~``, ``$HOME`` or ``${HOME}``
refers to the invoking user's home directory and is resolved by
:func:`expand_path` when the defaults are canonicalized.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
import os
from pathlib import Path
import sys

__all__ = [
    "ConfigKey",
    "DIR_KEYS",
    "MACOS_DEFAULT_DIRS",
    "LINUX_DEFAULT_DIRS",
    "default_dirs",
    "expand_path",
    "normalize_key",
]


class ConfigKey(StrEnum):
    """Every key a configuration layer may contain."""

    LANGUAGES = "languages"
    APPDIR = "appdir"
    KEYBOARD_LAYOUTDIR = "keyboard_layoutdir"
    COLORPICKERDIR = "colorpickerdir"
    PREFPANEDIR = "prefpanedir"
    QLPLUGINDIR = "qlplugindir"
    MDIMPORTERDIR = "mdimporterdir"
    DICTIONARYDIR = "dictionarydir"
    FONTDIR = "fontdir"
    SERVICEDIR = "servicedir"
    INPUT_METHODDIR = "input_methoddir"
    INTERNET_PLUGINDIR = "internet_plugindir"
    AUDIO_UNIT_PLUGINDIR = "audio_unit_plugindir"
    VST_PLUGINDIR = "vst_plugindir"
    VST3_PLUGINDIR = "vst3_plugindir"
    SCREEN_SAVERDIR = "screen_saverdir"


MACOS_DEFAULT_DIRS: Mapping[ConfigKey, str] = {
    ConfigKey.APPDIR: "/Applications",
    ConfigKey.KEYBOARD_LAYOUTDIR: "/Library/Keyboard Layouts",
    ConfigKey.COLORPICKERDIR: "~/Library/ColorPickers",
    ConfigKey.PREFPANEDIR: "~/Library/PreferencePanes",
    ConfigKey.QLPLUGINDIR: "~/Library/QuickLook",
    ConfigKey.MDIMPORTERDIR: "~/Library/Spotlight",
    ConfigKey.DICTIONARYDIR: "~/Library/Dictionaries",
    ConfigKey.FONTDIR: "~/Library/Fonts",
    ConfigKey.SERVICEDIR: "~/Library/Services",
    ConfigKey.INPUT_METHODDIR: "~/Library/Input Methods",
    ConfigKey.INTERNET_PLUGINDIR: "~/Library/Internet Plug-Ins",
    ConfigKey.AUDIO_UNIT_PLUGINDIR: "~/Library/Audio/Plug-Ins/Components",
    ConfigKey.VST_PLUGINDIR: "~/Library/Audio/Plug-Ins/VST",
    ConfigKey.VST3_PLUGINDIR: "~/Library/Audio/Plug-Ins/VST3",
    ConfigKey.SCREEN_SAVERDIR: "~/Library/Screen Savers",
}

# Linux only overrides the locations that have a conventional home there;
# fontdir is filled in by default_dirs() because it honors XDG_DATA_HOME.
LINUX_DEFAULT_DIRS: Mapping[ConfigKey, str] = {
    ConfigKey.APPDIR: "~/.config/apps",
    ConfigKey.VST_PLUGINDIR: "~/.vst",
    ConfigKey.VST3_PLUGINDIR: "~/.vst3",
}

DIR_KEYS: tuple[ConfigKey, ...] = tuple(MACOS_DEFAULT_DIRS)

_HOME_PLACEHOLDERS = ("${HOME}", "$HOME")


def default_dirs(
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[ConfigKey, str]:
    """Return the directory default templates for a platform.

    Args:
        platform: A ``sys.platform`` value. Defaults to the running platform.
        environ: Environment used for XDG lookups. Defaults to ``os.environ``.

    Returns:
        A new dict with one entry per directory key, in DIR_KEYS order.
    """
    platform = platform or sys.platform
    environ = os.environ if environ is None else environ

    dirs = dict(MACOS_DEFAULT_DIRS)
    if platform.startswith("linux"):
        dirs.update(LINUX_DEFAULT_DIRS)
        data_home = environ.get("XDG_DATA_HOME") or "~/.local/share"
        dirs[ConfigKey.FONTDIR] = f"{data_home}/fonts"
    return dirs


def normalize_key(raw: object) -> ConfigKey | str:
    """Map a raw key to its ConfigKey, or to a plain str if unrecognized.

    Unrecognized keys are returned as strings rather than rejected here so
    that the caller can decide whether to drop them or report them.
    """
    if isinstance(raw, ConfigKey):
        return raw
    name = str(raw)
    try:
        return ConfigKey(name)
    except ValueError:
        return name


def expand_path(value: str | os.PathLike[str], home: str | None = None) -> Path:
    """Expand home placeholders and return an absolute, normalized path.

    Args:
        value: Path text such as ``~/Fonts``, ``${HOME}/Fonts`` or ``apps``.
        home: Home directory to substitute. Defaults to the current user's.

    Returns:
        Absolute path. Relative input is resolved against the working
        directory; symlinks are not resolved.

    Example:
        ```python
        expand_path("${HOME}/Library/Fonts", home="/Users/me")
        # PosixPath('/Users/me/Library/Fonts')
        ```
    """
    text = os.fspath(value)
    home_dir = home if home is not None else os.path.expanduser("~")

    for placeholder in _HOME_PLACEHOLDERS:
        if text == placeholder or text.startswith(placeholder + "/"):
            text = home_dir + text[len(placeholder) :]
            break
    else:
        if text == "~" or text.startswith("~/"):
            text = home_dir + text[1:]
        else:
            # ~user forms
            text = os.path.expanduser(text)

    return Path(os.path.abspath(text))
