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

"""Language tag parsing and OS language discovery.

A language tag is up to three components, in this order, joined by ``-``:

- language: ISO 639-1 or ISO 639-2 code, 2-3 lowercase letters (``en``)
- script: ISO 15924 code, one uppercase and 3 lowercase letters (``Hans``)
- region: ISO 3166-1 code (``US``) or UN M.49 code (``419``)

Each component is optional but at least one must be present, so ``zh``,
``zh-Hans-CN``, ``es-419`` and ``Latn`` are all valid tags.

Example:
    Validate and split a tag:
        ```python
        from caskconf.language_tags import Locale, LocaleParseError

        locale = Locale.parse("zh-Hans-CN")
        locale.script  # "Hans"

        try:
            Locale.parse("en_US")
        except LocaleParseError as e:
            print(e)
        ```

    Preferred languages of the current user:
        ```python
        from caskconf.language_tags import system_languages

        system_languages()  # e.g. ["en-US", "fr"]
        ```
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
import os
import re
import subprocess
import sys

from caskconf.exceptions import CaskConfError
from caskconf.logging import get_global_logger

__all__ = ["Locale", "LocaleParseError", "system_languages"]

_COMPONENTS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("language", re.compile(r"[a-z]{2,3}")),
    ("script", re.compile(r"[A-Z][a-z]{3}")),
    ("region", re.compile(r"[A-Z]{2}|\d{3}")),
)

# Tokens of a `defaults read` plist array: ( "en-US", fr )
_PLIST_TOKEN = re.compile(r'[^ \n"(),]+')


class LocaleParseError(CaskConfError):
    """Raised when a string is not a valid language tag."""

    pass


@dataclass(frozen=True)
class Locale:
    """A parsed language tag.

    Attributes:
        language: Language code, or None.
        script: Script code, or None.
        region: Region code, or None.
    """

    language: str | None = None
    script: str | None = None
    region: str | None = None

    @classmethod
    def parse(cls, text: str) -> Locale:
        """Parse a language tag.

        Args:
            text: Tag such as ``en``, ``en-US`` or ``zh-Hans-CN``.

        Returns:
            The parsed Locale.

        Raises:
            LocaleParseError: If ``text`` is not a valid tag.
        """
        locale = cls.try_parse(text)
        if locale is None:
            raise LocaleParseError(f"'{text}' cannot be parsed to a Locale")
        return locale

    @classmethod
    def try_parse(cls, text: str) -> Locale | None:
        """Parse a language tag, returning None if it is invalid."""
        if not isinstance(text, str) or not text.strip():
            return None

        parts: dict[str, str] = {}
        pos = 0
        for name, pattern in _COMPONENTS:
            match = pattern.match(text, pos)
            if match is None:
                continue
            parts[name] = match.group()
            pos = match.end()
            if text.startswith("-", pos):
                pos += 1
                if pos == len(text):
                    return None
            elif pos != len(text):
                return None

        if pos != len(text) or not parts:
            return None
        return cls(**parts)

    def __str__(self) -> str:
        return "-".join(
            part for part in (self.language, self.script, self.region) if part
        )


def _run_defaults_read(args: list[str]) -> str:
    try:
        result = subprocess.run(
            ["defaults", "read", *args],
            check=True,
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (OSError, subprocess.SubprocessError):
        return ""
    return result.stdout


def system_languages(
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
    runner: Callable[[list[str]], str] | None = None,
) -> list[str]:
    """Return the user's preferred languages as reported by the OS.

    On macOS the user's ``AppleLanguages`` preference is read, falling back
    to the system-wide preference when the user has none. Elsewhere the
    language part of ``LANG`` is used.

    Args:
        platform: A ``sys.platform`` value. Defaults to the running platform.
        environ: Environment to read ``LANG`` from. Defaults to ``os.environ``.
        runner: Callable taking ``defaults read`` arguments and returning its
            stdout ("" on failure). Defaults to running the real command.

    Returns:
        Language tags in preference order, possibly empty. Tags are not
        validated here.
    """
    logger = get_global_logger()
    platform = platform or sys.platform

    if platform == "darwin":
        runner = runner or _run_defaults_read
        output = runner(["-g", "AppleLanguages"])
        if not output.strip():
            output = runner(
                ["/Library/Preferences/.GlobalPreferences", "AppleLanguages"]
            )
        languages = _PLIST_TOKEN.findall(output)
    else:
        environ = os.environ if environ is None else environ
        match = re.search(r"[a-z]+", environ.get("LANG", ""))
        languages = [match.group()] if match else []

    logger.debug("LOCALE", f"OS languages: {', '.join(languages) or '(none)'}")
    return languages
