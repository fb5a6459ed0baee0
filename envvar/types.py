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

"""Type descriptors and string conversion for environment values.

Every environment variable arrives as a string. This module defines the
closed set of types a schema leaf can declare and converts raw strings into
Python values of those types.

Supported types:

- String: returned unchanged
- Integer: base-10, optional sign, the whole string must be a number
- Float: decimal or exponential literal, the whole string must be a number
- Boolean: exactly "1", "0", "true" or "false" (case-sensitive)
- Tuple(element, separator=","): fixed-size tuple of converted pieces
- List(element, separator=","): list of converted pieces, "" gives []

Type descriptors written as plain data (in a dict schema or a YAML file) are
turned into these classes by parse_type().

Example:
    Convert raw strings:
        ```python
        from envvar.types import Float, List, Integer, Tuple, convert

        convert("1.1,2.3,3.4", Tuple(Float()))  # (1.1, 2.3, 3.4)
        convert("1,2,3", List(Integer()))       # [1, 2, 3]
        convert("", List(Integer()))            # []
        ```

    Parse descriptors from plain data:
        ```python
        from envvar.types import parse_type

        parse_type("integer")               # Integer()
        parse_type(("list", "string", ";")) # List(String(), ";")
        parse_type(bool)                    # Boolean()
        ```
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any, Union

from envvar.exceptions import ConversionError, SchemaError

__all__ = [
    "String",
    "Integer",
    "Float",
    "Boolean",
    "Tuple",
    "List",
    "TypeSpec",
    "parse_type",
    "convert",
]

DEFAULT_SEPARATOR = ","

# ----------------------------
# Type descriptors
# ----------------------------


@dataclass(frozen=True)
class String:
    """Text value, passed through unchanged."""

    @property
    def name(self) -> str:
        return "string"


@dataclass(frozen=True)
class Integer:
    """Base-10 integer."""

    @property
    def name(self) -> str:
        return "integer"


@dataclass(frozen=True)
class Float:
    """Floating-point number."""

    @property
    def name(self) -> str:
        return "float"


@dataclass(frozen=True)
class Boolean:
    """Boolean written as "1", "0", "true" or "false"."""

    @property
    def name(self) -> str:
        return "boolean"


@dataclass(frozen=True)
class Tuple:
    """Fixed-size tuple of a single element type.

    Attributes:
        element: Type of every item in the tuple.
        separator: Literal substring separating items in the raw value.

    """

    element: TypeSpec
    separator: str = DEFAULT_SEPARATOR

    def __post_init__(self) -> None:
        _check_collection(self, "tuple")

    @property
    def name(self) -> str:
        return f"tuple of {self.element.name}"


@dataclass(frozen=True)
class List:
    """Variable-length list of a single element type.

    Attributes:
        element: Type of every item in the list.
        separator: Literal substring separating items in the raw value.

    """

    element: TypeSpec
    separator: str = DEFAULT_SEPARATOR

    def __post_init__(self) -> None:
        _check_collection(self, "list")

    @property
    def name(self) -> str:
        return f"list of {self.element.name}"


TypeSpec = Union[String, Integer, Float, Boolean, Tuple, List]

_TYPE_CLASSES = (String, Integer, Float, Boolean, Tuple, List)


def _check_collection(spec: Tuple | List, kind: str) -> None:
    if not isinstance(spec.element, _TYPE_CLASSES):
        raise SchemaError(f"{kind} element must be a type, got: {spec.element!r}")
    if not isinstance(spec.separator, str) or not spec.separator:
        raise SchemaError(
            f"{kind} separator must be a non-empty string, got: {spec.separator!r}"
        )


# ----------------------------
# Descriptor parsing
# ----------------------------

_SCALAR_NAMES: dict[str, TypeSpec] = {
    "string": String(),
    "integer": Integer(),
    "float": Float(),
    "boolean": Boolean(),
}

_BUILTINS: dict[type, TypeSpec] = {
    str: String(),
    int: Integer(),
    float: Float(),
    bool: Boolean(),
}

_COLLECTIONS = {"tuple": Tuple, "list": List}


def parse_type(descriptor: Any) -> TypeSpec:
    """Turn a plain-data type descriptor into a TypeSpec.

    Accepted forms:
      - a TypeSpec instance (returned as-is)
      - "string", "integer", "float", "boolean"
      - the builtins str, int, float, bool
      - ("tuple", <element>) or ("tuple", <element>, <separator>),
        and the same with "list"; YAML flow sequences work too

    Raises:
        SchemaError: If the descriptor is not one of the forms above.

    """
    if isinstance(descriptor, _TYPE_CLASSES):
        return descriptor
    if isinstance(descriptor, str) and descriptor in _SCALAR_NAMES:
        return _SCALAR_NAMES[descriptor]
    if isinstance(descriptor, type) and descriptor in _BUILTINS:
        return _BUILTINS[descriptor]
    if isinstance(descriptor, (tuple, list)) and len(descriptor) in (2, 3):
        kind = descriptor[0]
        if isinstance(kind, str) and kind in _COLLECTIONS:
            element = parse_type(descriptor[1])
            if len(descriptor) == 3:
                return _COLLECTIONS[kind](element, descriptor[2])
            return _COLLECTIONS[kind](element)
    raise SchemaError(f"Unknown type descriptor: {descriptor!r}")


# ----------------------------
# Conversion
# ----------------------------

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?[0-9]+(\.[0-9]+)?([eE][+-]?[0-9]+)?")
_BOOLEANS = {"1": True, "0": False, "true": True, "false": False}


def convert(raw: str | None, type_spec: TypeSpec) -> Any:
    """Convert a raw environment string into a value of type_spec.

    None propagates as None so a missing value with no default stays absent.

    Tuple and List split on the literal separator. For the empty string a
    Tuple yields a one-element tuple (the conversion of "") while a List
    yields an empty list.

    Raises:
        ConversionError: If the string (or any tuple/list piece) does not
            parse as the declared type.
        SchemaError: If type_spec is not a TypeSpec.

    """
    if raw is None:
        return None

    if isinstance(type_spec, String):
        return raw

    if isinstance(type_spec, Integer):
        if not _INTEGER_RE.fullmatch(raw):
            raise ConversionError(raw, type_spec.name)
        return int(raw)

    if isinstance(type_spec, Float):
        if not _FLOAT_RE.fullmatch(raw):
            raise ConversionError(raw, type_spec.name)
        return float(raw)

    if isinstance(type_spec, Boolean):
        if raw not in _BOOLEANS:
            raise ConversionError(raw, type_spec.name)
        return _BOOLEANS[raw]

    if isinstance(type_spec, Tuple):
        return tuple(
            convert(piece, type_spec.element)
            for piece in raw.split(type_spec.separator)
        )

    if isinstance(type_spec, List):
        if raw == "":
            return []
        return [
            convert(piece, type_spec.element)
            for piece in raw.split(type_spec.separator)
        ]

    raise SchemaError(f"Unknown type: {type_spec!r}")
