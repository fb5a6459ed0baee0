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

"""Command-line interface for envvar.

This module provides the ``envvar`` command, used by operators to find out
which environment variables a release reads and to check what configuration
the current environment produces.

Commands:

    show-vars: Print the environment variable names a schema reads
    load: Resolve a schema against the environment and print the result

SCHEMA is either a path to a YAML schema file or a reference of the form
``package.module:function`` returning a schema mapping. PREFIX is required;
pass '' for no prefix.

Example:
    List the variables to supply at runtime:
        ```bash
        $ envvar show-vars config/env_schema.yaml beowulf
        BEOWULF_MYCLUSTER_SERVER_COUNT
        BEOWULF_MYCLUSTER_NAME
        ```

    Resolve against the current environment and a base config:
        ```bash
        $ envvar load myapp.settings:env_schema beowulf --config config/base.yaml
        ```

Exit Codes:

- 0: Success
- 1: Error (bad options, schema, missing or malformed values)

"""

from __future__ import annotations

import argparse
from importlib.metadata import version
from pathlib import Path
import sys
import traceback
from typing import Any

from envvar.exceptions import EnvVarError
from envvar.logging import get_logger, set_global_logger
from envvar.provider import apply, init, show_vars
from envvar.schema import load_schema_file
from envvar.store import ConfigStore


def _schema_source(source: str) -> Any:
    """Turn the SCHEMA argument into a parsed schema or a reference."""
    path = Path(source)
    if ":" in source and not path.exists():
        return (source, ())
    return load_schema_file(path)


def cmd_show_vars(args: argparse.Namespace) -> int:
    """Handler for 'envvar show-vars' command.

    Args:
        args: Parsed command-line arguments containing schema and prefix.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    try:
        names = show_vars(args.prefix, _schema_source(args.schema))
    except (EnvVarError, FileNotFoundError) as err:
        print(f"Error: {err}")
        return 1

    for name in names:
        print(name)
    return 0


def cmd_load(args: argparse.Namespace) -> int:
    """Handler for 'envvar load' command.

    Resolves the schema against the current environment, merges the result
    over the optional --config file and prints the merged tree as YAML.

    Args:
        args: Parsed command-line arguments containing schema, prefix,
            config path, enforcement and verbosity flags.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    try:
        store = ConfigStore.from_yaml(Path(args.config)) if args.config else ConfigStore()
        state = init(
            prefix=args.prefix,
            env_map=_schema_source(args.schema),
            enforce=not args.no_enforce,
        )
        apply(store, state, logger=logger)
    except (EnvVarError, FileNotFoundError) as err:
        print(f"Error: {err}")
        if args.verbose or args.debug:
            traceback.print_exc()
        return 1

    print(store.to_yaml(), end="")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the envvar CLI."""
    parser = argparse.ArgumentParser(
        prog="envvar",
        description="Load application configuration from environment variables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"envvar {version('envvar-provider')}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'show-vars' command
    parser_show = subparsers.add_parser(
        "show-vars",
        help="Show the names of the environment variables to use",
        description="Print every environment variable name the schema reads, one per line.",
    )
    parser_show.add_argument(
        "schema",
        help="YAML schema file or package.module:function reference",
    )
    parser_show.add_argument(
        "prefix",
        help="Variable name prefix, or '' if you want none",
    )
    parser_show.set_defaults(func=cmd_show_vars)

    # 'load' command
    parser_load = subparsers.add_parser(
        "load",
        help="Resolve the schema against the environment and print the config",
        description="Read environment variables, merge them over an optional config file and print YAML.",
    )
    parser_load.add_argument(
        "schema",
        help="YAML schema file or package.module:function reference",
    )
    parser_load.add_argument(
        "prefix",
        help="Variable name prefix, or '' if you want none",
    )
    parser_load.add_argument(
        "--config",
        default=None,
        help="Existing YAML configuration to merge into",
    )
    parser_load.add_argument(
        "--no-enforce",
        action="store_true",
        help="Allow settings without a default to be missing",
    )
    parser_load.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show where each value came from",
    )
    parser_load.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )
    parser_load.set_defaults(func=cmd_load)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the envvar CLI.

    This function is registered as the 'envvar' console script in pyproject.toml.
    """
    args = build_parser().parse_args(argv)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
