"""
Tests for caskconf.language_tags module.

Tests language tag handling including:
- Tag grammar (language, script, region)
- Rejection of malformed tags
- OS language discovery on macOS and Linux
"""

from __future__ import annotations

import subprocess
from unittest.mock import patch

import pytest

from caskconf.exceptions import CaskConfError
from caskconf.language_tags import Locale, LocaleParseError, system_languages


class TestLocaleParsing:
    """Tests for Locale.parse and Locale.try_parse."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("en", Locale("en")),
            ("eng", Locale("eng")),
            ("en-US", Locale("en", None, "US")),
            ("es-419", Locale("es", None, "419")),
            ("zh-Hans", Locale("zh", "Hans")),
            ("zh-Hans-CN", Locale("zh", "Hans", "CN")),
            ("Latn", Locale(None, "Latn")),
            ("US", Locale(None, None, "US")),
        ],
    )
    def test_valid_tags(self, text, expected):
        """Test that well-formed tags parse into their components."""
        assert Locale.parse(text) == expected
        assert str(Locale.parse(text)) == text

    @pytest.mark.parametrize(
        "text",
        ["", "   ", "en-", "en_US", "english", "zh-hans", "en-US-x", "-en", "e"],
    )
    def test_invalid_tags(self, text):
        """Test that malformed tags are rejected."""
        assert Locale.try_parse(text) is None
        with pytest.raises(LocaleParseError, match="cannot be parsed"):
            Locale.parse(text)

    def test_non_string_is_invalid(self):
        """Test that non-string values are rejected rather than crashing."""
        assert Locale.try_parse(42) is None  # type: ignore[arg-type]

    def test_parse_error_is_caskconf_error(self):
        """Test the exception hierarchy."""
        assert issubclass(LocaleParseError, CaskConfError)


class TestSystemLanguages:
    """Tests for OS language discovery."""

    def test_macos_reads_apple_languages(self):
        """Test tokenizing the plist array from defaults read."""
        calls = []

        def _runner(args):
            calls.append(args)
            return '(\n    "en-US",\n    fr,\n    "zh-Hans"\n)\n'

        assert system_languages(platform="darwin", runner=_runner) == [
            "en-US",
            "fr",
            "zh-Hans",
        ]
        assert calls == [["-g", "AppleLanguages"]]

    def test_macos_falls_back_to_global_preferences(self):
        """Test the system-wide fallback when the user has no preference."""
        outputs = iter(["", '(\n    de\n)\n'])
        calls = []

        def _runner(args):
            calls.append(args)
            return next(outputs)

        assert system_languages(platform="darwin", runner=_runner) == ["de"]
        assert calls[1] == [
            "/Library/Preferences/.GlobalPreferences",
            "AppleLanguages",
        ]

    def test_macos_command_failure_yields_empty(self):
        """Test that a failing defaults command is not fatal."""
        with patch(
            "caskconf.language_tags.subprocess.run",
            side_effect=subprocess.CalledProcessError(1, ["defaults"]),
        ):
            assert system_languages(platform="darwin") == []

    def test_macos_missing_command_yields_empty(self):
        """Test that a missing defaults binary is not fatal."""
        with patch(
            "caskconf.language_tags.subprocess.run",
            side_effect=FileNotFoundError("defaults"),
        ):
            assert system_languages(platform="darwin") == []

    def test_linux_uses_lang(self):
        """Test that the language part of LANG is returned."""
        assert system_languages(
            platform="linux", environ={"LANG": "de_DE.UTF-8"}
        ) == ["de"]

    def test_linux_without_lang(self):
        """Test that a missing LANG yields no languages."""
        assert system_languages(platform="linux", environ={}) == []
