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

"""Resolve a schema against the process environment.

The walker visits every leaf depth-first in declaration order and reads the
environment variable derived from its path. For each leaf:

1. An unset or empty variable falls back to the leaf's default.
2. If there is still no value and enforcement is on, EnforcementError.
3. If there is still no value and enforcement is off, the leaf is left out
   of the result, so a later merge keeps whatever value already exists.
4. Otherwise the raw string is converted to the leaf's type.

Interior nodes whose leaves were all left out are dropped as well. The
result is a fresh nested dict keyed exactly like the schema.
"""

from __future__ import annotations

from collections.abc import Mapping
import os
from typing import Any

from envvar.exceptions import ConversionError, EnforcementError
from envvar.logging import Logger, get_global_logger
from envvar.naming import env_var_name
from envvar.schema import Interior, Leaf, SchemaNode
from envvar.types import convert

__all__ = ["walk"]

_ABSENT = object()


def _resolve_leaf(
    leaf: Leaf,
    name: str,
    environ: Mapping[str, str],
    enforce: bool,
    logger: Logger,
) -> Any:
    """Resolve one leaf, returning _ABSENT when it has no value.

    Raises:
        EnforcementError: If enforce is True and there is no usable value.
        ConversionError: If the value does not parse, with name attached.

    """
    raw = environ.get(name)
    if raw:
        logger.verbose("ENV", f"{name} set from environment")
    elif leaf.default is not None:
        raw = leaf.default
        logger.verbose("ENV", f"{name} using default")
    else:
        raw = None

    if not raw and enforce:
        raise EnforcementError(name)
    if raw is None:
        logger.verbose("ENV", f"{name} not set, keeping existing value")
        return _ABSENT

    try:
        return convert(raw, leaf.type)
    except ConversionError as err:
        raise ConversionError(err.value, err.type_name, env_var=name) from err


def _walk_node(
    node: SchemaNode,
    prefix: Any,
    path: list[Any],
    environ: Mapping[str, str],
    enforce: bool,
    logger: Logger,
) -> Any:
    if isinstance(node, Leaf):
        return _resolve_leaf(node, env_var_name(prefix, path), environ, enforce, logger)

    resolved: dict[Any, Any] = {}
    for key, child in node.children.items():
        value = _walk_node(child, prefix, path + [key], environ, enforce, logger)
        if value is not _ABSENT:
            resolved[key] = value
    if not resolved:
        logger.debug("WALK", f"nothing resolved under {env_var_name(prefix, path)}")
        return _ABSENT
    return resolved


def walk(
    schema: Interior,
    prefix: Any,
    enforce: bool,
    environ: Mapping[str, str] | None = None,
    logger: Logger | None = None,
) -> dict[Any, Any]:
    """Resolve every leaf of schema into a nested configuration dict.

    Args:
        schema: Parsed schema root (see envvar.schema.parse_schema).
        prefix: Name prefix, "" for none.
        enforce: If True, every leaf must resolve to a non-empty value.
        environ: Environment to read from. Defaults to os.environ.
        logger: Logger for source reporting. Defaults to the global logger.

    Returns:
        Mapping of application name to resolved keys. Leaves without a value
        are omitted, never stored as None.

    Raises:
        EnforcementError: A required leaf has no value and no default.
        ConversionError: A value does not parse as its declared type.

    """
    if environ is None:
        environ = os.environ
    if logger is None:
        logger = get_global_logger()

    resolved = _walk_node(schema, prefix, [], environ, enforce, logger)
    if resolved is _ABSENT:
        return {}
    return resolved
