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

"""Environment variable configuration provider.

This module is the entry point for loading configuration from environment
variables. It follows a two-phase protocol so that bad options fail as early
as possible:

1. **init** validates the options and returns an opaque ProviderState
2. **load** resolves the schema against the environment and deep-merges
   the result into an existing configuration

Options
-------
prefix : str or Enum member
    Upper-cased and prepended to every variable name to namespace them.
    "beowulf" means variables start with ``BEOWULF_``; "" means no prefix.
env_map : mapping or schema reference
    Which settings to read, their types and defaults (see envvar.schema).
enforce : bool, default True
    If True, every setting without a default must be present in the
    environment. This prevents falling back to values from config files for
    settings that are declared here.

Default values overwrite existing values in the configuration, while
settings with neither a value nor a default leave existing values alone.

Example:
    Load configuration at startup:
        ```python
        from envvar.provider import init, load

        state = init(
            prefix="beowulf",
            env_map={
                "mycluster": {
                    "server_count": {"type": "integer", "default": "123"},
                    "name": {"type": "string", "default": "grendel"},
                }
            },
            enforce=False,
        )
        config = load(existing_config, state)
        ```

    List the variables an operator may set:
        ```python
        from envvar.provider import show_vars

        for name in show_vars("beowulf", env_map):
            print(name)
        ```
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from envvar.exceptions import OptionError
from envvar.logging import Logger, get_global_logger
from envvar.merge import deep_merge
from envvar.naming import env_var_name
from envvar.schema import Interior, is_reference, iter_leaves, parse_schema, resolve_env_map
from envvar.store import ConfigStore
from envvar.walker import walk

__all__ = ["ProviderState", "init", "load", "apply", "show_vars"]


@dataclass(frozen=True)
class ProviderState:
    """Validated provider options returned by init().

    Attributes:
        prefix: Variable name prefix.
        env_map: Parsed schema, or a schema reference resolved on load.
        enforce: Whether settings without defaults are required.

    """

    prefix: str | Enum
    env_map: Any
    enforce: bool


# -------------------------------
# Option validation
# -------------------------------


def _check_prefix(prefix: Any) -> str | Enum:
    if isinstance(prefix, (str, Enum)):
        return prefix
    raise OptionError("prefix", "a string or Enum member", prefix)


def _check_env_map(env_map: Any) -> Any:
    if is_reference(env_map):
        return env_map
    if isinstance(env_map, (Mapping, Interior)):
        return parse_schema(env_map)
    raise OptionError("env_map", "a map", env_map)


def _check_enforce(enforce: Any) -> bool:
    if isinstance(enforce, bool):
        return enforce
    raise OptionError("enforce", "a boolean", enforce)


# -------------------------------
# Public API
# -------------------------------


def init(*, prefix: Any, env_map: Any, enforce: Any = True) -> ProviderState:
    """Validate provider options.

    Mapping schemas are parsed here, so malformed type descriptors fail at
    init rather than at load. Schema references are kept and resolved by
    each load().

    Raises:
        OptionError: If prefix is not a string or Enum, env_map is neither a
            mapping nor a schema reference, or enforce is not a bool.
        SchemaError: If a mapping schema is malformed.

    """
    return ProviderState(
        prefix=_check_prefix(prefix),
        env_map=_check_env_map(env_map),
        enforce=_check_enforce(enforce),
    )


def load(
    config: Mapping[Any, Any],
    state: ProviderState,
    *,
    environ: Mapping[str, str] | None = None,
    logger: Logger | None = None,
) -> dict[Any, Any]:
    """Read the environment and deep-merge it into config.

    Args:
        config: Existing configuration. Not modified.
        state: Options returned by init().
        environ: Environment to read from. Defaults to os.environ.
        logger: Logger for source reporting. Defaults to the global logger.

    Returns:
        A new, merged configuration dict.

    Raises:
        EnforcementError: A required setting has no value and no default.
        ConversionError: A value does not parse as its declared type.
        SchemaError: A schema reference cannot be resolved.

    """
    if logger is None:
        logger = get_global_logger()

    schema = resolve_env_map(state.env_map)
    from_env = walk(schema, state.prefix, state.enforce, environ=environ, logger=logger)
    logger.debug("MERGE", f"merging {len(from_env)} application(s) into config")
    return deep_merge(config, from_env)


def apply(
    store: ConfigStore,
    state: ProviderState,
    *,
    environ: Mapping[str, str] | None = None,
    logger: Logger | None = None,
) -> ConfigStore:
    """Run load() against a store's contents and write the result back.

    The store is read once and written once. Nothing is written if load()
    raises.

    Returns:
        The same store, for chaining.

    """
    store.replace(load(store.as_dict(), state, environ=environ, logger=logger))
    return store


def show_vars(prefix: Any, env_map: Any) -> list[str]:
    """List every environment variable name the schema reads, in order.

    No environment variable is read and no value is converted.

    Raises:
        OptionError: If prefix or env_map have the wrong type.
        SchemaError: If the schema is malformed.

    """
    state = init(prefix=prefix, env_map=env_map, enforce=False)
    schema = resolve_env_map(state.env_map)
    return [env_var_name(state.prefix, path) for path, _leaf in iter_leaves(schema)]
