"""
Tests for caskconf.config.environment, dirs and lazy modules.

Tests the collaborators Config relies on:
- Option strings from CASKCONF_CASK_OPTS and the dotenv file
- Installation prefix selection
- The process-wide SystemContext
- Directory default tables and path expansion
- LazyValue evaluation
"""

from __future__ import annotations

from pathlib import Path
import threading

import pytest

from caskconf.config import DIR_KEYS, ConfigKey, LazyValue, SystemContext, expand_path
from caskconf.config.dirs import default_dirs, normalize_key
from caskconf.config.environment import cask_opts, default_prefix, reset_current


class TestCaskOpts:
    """Tests for reading option strings."""

    def test_reads_environment_variable(self):
        """Test shell-style splitting of the variable."""
        environ = {"CASKCONF_CASK_OPTS": "--appdir='~/My Apps' --no-quarantine"}

        assert cask_opts(environ) == ["--appdir=~/My Apps", "--no-quarantine"]

    def test_unset_and_no_file_is_empty(self, tmp_path):
        """Test that nothing configured yields no options."""
        assert cask_opts({}, env_file=tmp_path / "missing.env") == []

    def test_falls_back_to_env_file(self, tmp_path):
        """Test that the dotenv file is read when the variable is unset."""
        env_file = tmp_path / "caskconf.env"
        env_file.write_text('CASKCONF_CASK_OPTS="--fontdir=/f --language=de"\n')

        assert cask_opts({}, env_file=env_file) == ["--fontdir=/f", "--language=de"]

    def test_environment_beats_env_file(self, tmp_path):
        """Test that a set variable, even empty, wins over the file."""
        env_file = tmp_path / "caskconf.env"
        env_file.write_text("CASKCONF_CASK_OPTS=--fontdir=/f\n")

        assert cask_opts({"CASKCONF_CASK_OPTS": ""}, env_file=env_file) == []

    def test_default_env_file_under_home(self, home):
        """Test the default file location in the user's home."""
        env_dir = home / ".caskconf"
        env_dir.mkdir()
        (env_dir / "caskconf.env").write_text("CASKCONF_CASK_OPTS=--appdir=/A\n")

        assert cask_opts({}) == ["--appdir=/A"]


class TestDefaultPrefix:
    """Tests for installation prefix selection."""

    def test_environment_variable_wins(self):
        """Test that CASKCONF_PREFIX overrides platform defaults."""
        prefix = default_prefix({"CASKCONF_PREFIX": "/srv/pkgs"}, "darwin", "arm64")

        assert prefix == Path("/srv/pkgs")

    @pytest.mark.parametrize(
        "platform, machine, expected",
        [
            ("darwin", "arm64", Path("/opt/caskconf")),
            ("darwin", "x86_64", Path("/usr/local")),
            ("linux", "x86_64", Path("/usr/local")),
        ],
    )
    def test_platform_defaults(self, platform, machine, expected):
        """Test the per-platform fallbacks."""
        assert default_prefix({}, platform, machine) == expected


class TestSystemContext:
    """Tests for the process-wide context."""

    def test_current_is_shared(self):
        """Test that current() returns the same instance until reset."""
        first = SystemContext.current()

        assert SystemContext.current() is first

        reset_current()
        assert SystemContext.current() is not first

    def test_current_reads_prefix_from_environment(self, monkeypatch):
        """Test that the real context picks up CASKCONF_PREFIX."""
        monkeypatch.setenv("CASKCONF_PREFIX", "/srv/pkgs")

        assert SystemContext.current().prefix == Path("/srv/pkgs")

    def test_current_languages_are_lazy(self):
        """Test that building the context does not query the OS."""
        assert not SystemContext.current().languages.evaluated


class TestDirs:
    """Tests for the key set and directory defaults."""

    def test_key_set_is_platform_independent(self):
        """Test that Linux overrides values but not keys."""
        assert list(default_dirs("darwin")) == list(DIR_KEYS)
        assert list(default_dirs("linux", environ={})) == list(DIR_KEYS)

    def test_linux_fontdir_without_xdg(self):
        """Test the XDG fallback for the Linux font directory."""
        dirs = default_dirs("linux", environ={})

        assert dirs[ConfigKey.FONTDIR] == "~/.local/share/fonts"

    def test_languages_is_not_a_directory_key(self):
        """Test that languages is recognized but not a directory."""
        assert ConfigKey.LANGUAGES not in DIR_KEYS
        assert len(DIR_KEYS) == 15

    def test_normalize_key(self):
        """Test mapping raw keys to ConfigKey members."""
        assert normalize_key("fontdir") is ConfigKey.FONTDIR
        assert normalize_key(ConfigKey.APPDIR) is ConfigKey.APPDIR
        assert normalize_key("bogus") == "bogus"
        assert not isinstance(normalize_key("bogus"), ConfigKey)

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("~", "/home/me"),
            ("~/Fonts", "/home/me/Fonts"),
            ("${HOME}/Fonts", "/home/me/Fonts"),
            ("$HOME/Fonts", "/home/me/Fonts"),
            ("/Library/Fonts/../Keyboard Layouts", "/Library/Keyboard Layouts"),
            ("/a/${HOME}", "/a/${HOME}"),
        ],
    )
    def test_expand_path(self, value, expected):
        """Test placeholder expansion and normalization."""
        assert expand_path(value, home="/home/me") == Path(expected)

    def test_expand_path_uses_current_home(self, home):
        """Test that the home directory defaults to the user's."""
        assert expand_path("~/x") == home / "x"

    def test_expand_path_accepts_paths(self):
        """Test that Path input is accepted."""
        assert expand_path(Path("/opt/x")) == Path("/opt/x")


class TestLazyValue:
    """Tests for LazyValue."""

    def test_evaluates_once(self):
        """Test that the factory runs on first get only."""
        calls = []
        lazy = LazyValue(lambda: calls.append(1) or ["en"])

        assert not lazy.evaluated
        assert lazy.get() == ["en"]
        assert lazy.get() == ["en"]
        assert lazy.evaluated
        assert len(calls) == 1

    def test_failure_is_not_cached(self):
        """Test that a raising factory can be retried."""
        attempts = []

        def _factory():
            attempts.append(1)
            if len(attempts) == 1:
                raise OSError("transient")
            return "ok"

        lazy = LazyValue(_factory)

        with pytest.raises(OSError):
            lazy.get()
        assert not lazy.evaluated
        assert lazy.get() == "ok"

    def test_concurrent_first_reads(self):
        """Test that concurrent first reads share one evaluation."""
        calls = []
        gate = threading.Event()

        def _factory():
            gate.wait(timeout=5)
            calls.append(1)
            return 1

        lazy = LazyValue(_factory)
        threads = [threading.Thread(target=lazy.get) for _ in range(8)]
        for thread in threads:
            thread.start()
        gate.set()
        for thread in threads:
            thread.join(timeout=5)

        assert len(calls) == 1

    def test_repr(self):
        """Test that repr does not force the value."""
        lazy = LazyValue(lambda: 3)

        assert repr(lazy) == "LazyValue(<pending>)"
        lazy.get()
        assert repr(lazy) == "LazyValue(3)"
