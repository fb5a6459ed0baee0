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

"""Schema trees describing which settings are read from the environment.

A schema maps application names to keys, and keys either to a leaf
descriptor or to a further mapping of keys:

    env_map = {
        "heorot": {
            "location": {"type": "string", "default": "land of the Geats"},
        },
        "mycluster": {
            "server_count": {"type": "integer", "default": "123"},
            "settings": {"type": ("list", "string"), "default": "swarthy,hairy"},
            "keys": {"type": ("tuple", "float"), "default": "1.1,2.3,3.4"},
            "no_default": {"type": "string"},
        },
    }

Defaults are written in the same string form an environment variable would
have. A node is a leaf if and only if it has a "type" key. This means a
mapping that uses "type" as the name of one of its children is read as a
leaf descriptor; pick another key name for such settings.

Plain data is parsed once into a tree of Leaf and Interior nodes so the rest
of the package never inspects raw dicts.

Schema Sources
--------------
- A mapping (Python dict, or parsed YAML via load_schema_file)
- A Leaf/Interior tree built directly
- A reference that computes the schema: a zero-argument callable, or a tuple
  (target, args) / (target, args, kwargs) where target is a callable or an
  import string "package.module:function"

References are resolved by resolve_env_map(), once per load.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
import importlib
from pathlib import Path
from typing import Any, Union

import yaml

from envvar.exceptions import SchemaError
from envvar.types import TypeSpec, parse_type

__all__ = [
    "Leaf",
    "Interior",
    "SchemaNode",
    "parse_schema",
    "iter_leaves",
    "is_reference",
    "resolve_env_map",
    "load_schema_file",
]

# -------------------------------
# Data types
# -------------------------------


@dataclass(frozen=True)
class Leaf:
    """A single setting read from one environment variable.

    Attributes:
        type: How the raw string is converted.
        default: Raw string used when the variable is unset or empty.

    """

    type: TypeSpec
    default: str | None = None


@dataclass(frozen=True)
class Interior:
    """A mapping of key to nested schema node, in declaration order."""

    children: dict[Any, SchemaNode] = field(default_factory=dict)


SchemaNode = Union[Leaf, Interior]

# -------------------------------
# Parsing
# -------------------------------


def _describe(path: list[Any]) -> str:
    return ".".join(str(segment) for segment in path) or "<root>"


def _parse_leaf(node: Mapping[Any, Any], path: list[Any]) -> Leaf:
    try:
        type_spec = parse_type(node["type"])
    except SchemaError as err:
        raise SchemaError(f"{_describe(path)}: {err}") from err

    default = node.get("default")
    if default is not None and not isinstance(default, str):
        raise SchemaError(
            f"{_describe(path)}: default must be a string, got: {default!r}"
        )
    return Leaf(type=type_spec, default=default)


def _parse_node(node: Any, path: list[Any]) -> SchemaNode:
    if isinstance(node, (Leaf, Interior)):
        return node
    if not isinstance(node, Mapping):
        raise SchemaError(
            f"{_describe(path)}: schema node must be a mapping, got: {node!r}"
        )
    if "type" in node:
        return _parse_leaf(node, path)
    return Interior(
        children={key: _parse_node(child, path + [key]) for key, child in node.items()}
    )


def parse_schema(data: Any) -> Interior:
    """Parse a plain-data schema into an Interior root node.

    The top level maps application names to mappings of keys. Every node
    carrying a "type" key becomes a Leaf, every other mapping an Interior.

    Raises:
        SchemaError: If the root or an application entry is not a mapping,
            a type descriptor is unknown, or a default is not a string.

    """
    if isinstance(data, Interior):
        root = data
    elif isinstance(data, Mapping) and "type" not in data:
        root = Interior(
            children={app: _parse_node(node, [app]) for app, node in data.items()}
        )
    else:
        raise SchemaError(f"schema must be a mapping of applications, got: {data!r}")

    for app, app_node in root.children.items():
        if not isinstance(app_node, Interior):
            raise SchemaError(
                f"{_describe([app])}: application entry must be a mapping of keys"
            )
    return root


def iter_leaves(
    node: SchemaNode, path: list[Any] | None = None
) -> Iterator[tuple[list[Any], Leaf]]:
    """Yield (path, leaf) pairs depth-first in declaration order."""
    path = path or []
    if isinstance(node, Leaf):
        yield path, node
        return
    for key, child in node.children.items():
        yield from iter_leaves(child, path + [key])


# -------------------------------
# References
# -------------------------------


def is_reference(env_map: Any) -> bool:
    """Return True if env_map computes a schema rather than being one."""
    if isinstance(env_map, (Mapping, Leaf, Interior)):
        return False
    if callable(env_map):
        return True
    if isinstance(env_map, tuple) and len(env_map) in (2, 3):
        target = env_map[0]
        return callable(target) or (isinstance(target, str) and ":" in target)
    return False


def _import_target(target: str) -> Callable[..., Any]:
    module_name, _, attr = target.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as err:
        raise SchemaError(f"cannot import schema module {module_name!r}: {err}") from err

    obj: Any = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as err:
            raise SchemaError(f"{target!r} not found") from err
    if not callable(obj):
        raise SchemaError(f"{target!r} is not callable")
    return obj


def resolve_env_map(env_map: Any) -> Interior:
    """Resolve an env_map (schema or reference) into a parsed schema.

    References are called exactly once; the result is parsed like any other
    plain-data schema.

    Raises:
        SchemaError: If the reference cannot be imported or called, or the
            schema it produces is malformed.

    """
    if not is_reference(env_map):
        return parse_schema(env_map)

    if callable(env_map):
        target, args, kwargs = env_map, (), {}
    else:
        target, args = env_map[0], env_map[1]
        kwargs = env_map[2] if len(env_map) == 3 else {}
        if isinstance(target, str):
            target = _import_target(target)

    result = target(*args, **kwargs)
    if not isinstance(result, (Mapping, Interior)):
        raise SchemaError(f"schema reference returned a non-mapping: {result!r}")
    return parse_schema(result)


# -------------------------------
# YAML files
# -------------------------------


def load_schema_file(path: Path) -> Interior:
    """Load and parse a YAML schema file.

    Type descriptors are written as names or flow sequences:

        mycluster:
          server_count: {type: integer, default: "123"}
          keys: {type: [tuple, float, ";"], default: "1.1;2.3"}

    Raises:
        FileNotFoundError: If the file does not exist.
        SchemaError: For invalid YAML, an empty file, or a malformed schema.

    """
    if not path.exists():
        raise FileNotFoundError(f"file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise SchemaError(f"Error parsing YAML: {path}: {err}") from err
    if data is None:
        raise SchemaError(f"YAML file is empty: {path}")
    return parse_schema(data)
