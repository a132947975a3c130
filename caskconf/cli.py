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

"""Command-line interface for caskconf.

This module provides the ``caskconf`` entry point, which resolves and
persists install locations for packages.

Commands:

    show: Print the effective install locations and languages
    export: Print the configuration document (all three layers) as JSON
    save: Persist the configuration for a package in the caskroom
    load: Show a package's persisted configuration under the given flags

Every command accepts one flag per install location (``--appdir``,
``--fontdir``, ``--keyboard-layoutdir``, ...), ``--language`` with a
comma-separated list of language tags, and ``--defaults`` pointing at a
YAML file of site default overrides.

Example:
    Show where things would be installed:
        ```bash
        $ caskconf show --appdir=~/Applications --language=de,en
        ```

    Remember the locations used for a package:
        ```bash
        $ caskconf save firefox --caskroom /usr/local/Caskroom --appdir=~/Apps
        ```

    Inspect them later:
        ```bash
        $ caskconf load firefox --caskroom /usr/local/Caskroom
        ```

Exit Codes:

- 0: Success
- 1: Error (invalid configuration, unreadable files, nothing persisted)

Note:
    Verbose mode shows full tracebacks on errors for debugging.
    Debug mode implies verbose mode and logs layer materialization.

"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import sys
import traceback

from caskconf import __version__
from caskconf.config import DIR_KEYS, Config, load_default_overrides
from caskconf.exceptions import CaskConfError
from caskconf.logging import get_logger, using_logger
from caskconf.store import ConfigStore


def _split_languages(value: str) -> list[str]:
    return [lang for lang in value.split(",") if lang]


def _apply_defaults(config: Config, args: argparse.Namespace) -> Config:
    """Return ``config`` with the ``--defaults`` site overrides applied.

    Only the explicit layer of ``config`` is kept, so this must run after
    any merge with persisted configuration (merging recomputes defaults).
    """
    if not args.defaults:
        return config
    overrides = load_default_overrides(Path(args.defaults))
    return Config(default=overrides, explicit=config.explicit)


def _build_config(args: argparse.Namespace) -> Config:
    """Build the Config described by the command-line flags."""
    return _apply_defaults(Config.from_args(args), args)


def _report_error(err: Exception, args: argparse.Namespace) -> int:
    print(f"Error: {err}")
    if args.verbose or args.debug:
        traceback.print_exc()
    return 1


def _print_locations(config: Config) -> None:
    print("=" * 70)
    print("INSTALL LOCATIONS")
    print("=" * 70)
    for key in DIR_KEYS:
        print(f"{key + ':':<22} {config.get(key)}")
    print(f"{'binarydir:':<22} {config.binarydir}")
    print(f"{'manpagedir:':<22} {config.manpagedir}")
    print(f"{'languages:':<22} {', '.join(config.languages) or '(none)'}")
    print("=" * 70)


def cmd_show(args: argparse.Namespace) -> int:
    """Handler for 'caskconf show' command.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    try:
        config = _build_config(args)
        _print_locations(config)
    except CaskConfError as err:
        return _report_error(err, args)
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Handler for 'caskconf export' command.

    Prints every layer, fully materialized, as an indented JSON document
    that ``Config.from_json`` accepts.
    """
    try:
        config = _build_config(args)
        print(config.to_json(indent=2))
    except CaskConfError as err:
        return _report_error(err, args)
    return 0


def cmd_save(args: argparse.Namespace) -> int:
    """Handler for 'caskconf save' command.

    Persists the configuration built from the flags, merged over anything
    already saved for the package, so repeated saves accumulate flags.
    Site defaults from ``--defaults`` are recorded in the saved default
    layer.
    """
    store = ConfigStore(Path(args.caskroom))
    try:
        config = store.effective(args.token, Config.from_args(args))
        path = store.save(args.token, _apply_defaults(config, args))
    except CaskConfError as err:
        return _report_error(err, args)

    print(f"[SUCCESS] Saved configuration for {args.token}: {path}")
    return 0


def cmd_load(args: argparse.Namespace) -> int:
    """Handler for 'caskconf load' command.

    Shows the locations a package was installed with. Flags given on the
    command line take precedence over the persisted values, and
    ``--defaults`` supplies the default layer.
    """
    store = ConfigStore(Path(args.caskroom))
    try:
        persisted = store.load(args.token)
        if persisted is None:
            print(f"Error: No saved configuration for {args.token}")
            print(f"Expected: {store.path_for(args.token)}")
            return 1
        config = Config.from_args(args).merge(persisted)
        _print_locations(_apply_defaults(config, args))
    except CaskConfError as err:
        return _report_error(err, args)
    return 0


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the install-location flags shared by every command."""
    group = parser.add_argument_group("install locations")
    for key in DIR_KEYS:
        group.add_argument(
            f"--{key.replace('_', '-')}",
            dest=key.value,
            default=None,
            metavar="DIR",
            help=f"Target location for {key} artifacts",
        )
    group.add_argument(
        "--language",
        type=_split_languages,
        default=None,
        metavar="LANGS",
        help="Comma-separated preferred languages (e.g. de,en-GB)",
    )
    parser.add_argument(
        "--defaults",
        default=None,
        metavar="FILE",
        help="YAML file of site default overrides",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )


def _package_version() -> str:
    try:
        return version("caskconf")
    except PackageNotFoundError:
        return __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the caskconf CLI."""
    parser = argparse.ArgumentParser(
        prog="caskconf",
        description="caskconf - resolve and persist package install locations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"caskconf {_package_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'show' command
    parser_show = subparsers.add_parser(
        "show",
        help="Show effective install locations",
        description="Resolve install locations from flags, environment and defaults.",
    )
    _add_config_arguments(parser_show)
    parser_show.set_defaults(func=cmd_show)

    # 'export' command
    parser_export = subparsers.add_parser(
        "export",
        help="Print the configuration document as JSON",
        description="Print the default, env and explicit layers as JSON.",
    )
    _add_config_arguments(parser_export)
    parser_export.set_defaults(func=cmd_export)

    # 'save' and 'load' commands
    for name, handler, help_text in (
        ("save", cmd_save, "Persist configuration for a package"),
        ("load", cmd_load, "Show persisted configuration for a package"),
    ):
        sub = subparsers.add_parser(name, help=help_text, description=help_text + ".")
        sub.add_argument("token", help="Package token (e.g. firefox)")
        sub.add_argument(
            "--caskroom",
            required=True,
            help="Directory holding installed package records",
        )
        _add_config_arguments(sub)
        sub.set_defaults(func=handler)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the caskconf CLI.

    This function is registered as the 'caskconf' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    with using_logger(get_logger(verbose=args.verbose, debug=args.debug)):
        exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
