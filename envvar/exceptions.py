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

"""Exception hierarchy for envvar.

This module defines a custom exception hierarchy that allows callers to
distinguish between the ways loading configuration from the environment
can fail:

- OptionError: Bad provider options (prefix, env_map, enforce)
- SchemaError: Malformed schema, type descriptor, or schema reference
- ConversionError: An environment value cannot be parsed as its declared type
- EnforcementError: A required value has neither an env var nor a default
- ConfigError: An existing configuration file cannot be read

All exceptions inherit from EnvVarError, allowing callers to catch every
envvar error with a single except clause. None of them are recovered inside
the library: configuration is either correct or fatal at startup.

Example:
    Catching specific error types:
        ```python
        from envvar.provider import init, load
        from envvar.exceptions import ConversionError, EnforcementError

        state = init(prefix="beowulf", env_map=schema)
        try:
            config = load({}, state)
        except EnforcementError as e:
            print(f"Missing setting: {e.env_var}")
        except ConversionError as e:
            print(f"Bad value in {e.env_var}: {e}")
        ```

    Catching all envvar errors:
        ```python
        from envvar.exceptions import EnvVarError

        try:
            config = load({}, state)
        except EnvVarError as e:
            print(f"envvar error: {e}")
        ```
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "EnvVarError",
    "OptionError",
    "SchemaError",
    "ConversionError",
    "EnforcementError",
    "ConfigError",
]


class EnvVarError(Exception):
    """Base exception for all envvar errors.

    All envvar-specific exceptions inherit from this class, allowing callers
    to catch every envvar error with a single except clause if needed.
    """

    pass


class OptionError(EnvVarError):
    """Raised by init() when a provider option has the wrong type.

    The message names the offending option and the value received, e.g.
    ``":enforce should be a boolean, got: 'yes'"``.

    Attributes:
        option: Name of the bad option ("prefix", "env_map" or "enforce").
        value: The value that was received.
    """

    def __init__(self, option: str, expected: str, value: Any) -> None:
        super().__init__(f":{option} should be {expected}, got: {value!r}")
        self.option = option
        self.value = value


class SchemaError(EnvVarError):
    """Raised for a malformed schema.

    This exception is raised when there are problems with:

    - Unknown or malformed type descriptors
    - Application entries that are leaves instead of mappings
    - Schema references that cannot be imported or do not return a mapping
    - YAML schema files that fail to parse or are empty
    """

    pass


class ConversionError(EnvVarError):
    """Raised when a raw string cannot be parsed as its declared type.

    Attributes:
        value: The raw string that failed to parse.
        type_name: Name of the type that was attempted.
        env_var: The environment variable the value came from, when known.
    """

    def __init__(
        self, value: str, type_name: str, env_var: str | None = None
    ) -> None:
        message = f"expected {type_name}, got: {value!r}"
        if env_var:
            message = f"{env_var}: {message}"
        super().__init__(message)
        self.value = value
        self.type_name = type_name
        self.env_var = env_var


class EnforcementError(EnvVarError):
    """Raised when enforcement is on and a leaf has no value and no default.

    Attributes:
        env_var: The environment variable that needs to be set.
    """

    def __init__(self, env_var: str) -> None:
        super().__init__(
            f"Config enforcement on and missing value for {env_var} so crashing"
        )
        self.env_var = env_var


class ConfigError(EnvVarError):
    """Raised when an existing configuration file cannot be loaded.

    This covers YAML parse errors, empty files and files whose top level is
    not a mapping.
    """

    pass
