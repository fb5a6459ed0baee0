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

"""Environment variable naming.

Variable names are derived from the schema path by convention:

    UPPER(prefix)_UPPER(app)_UPPER(key)[_UPPER(nested)...]

With prefix "beowulf", the leaf at mycluster -> server_count is read from
BEOWULF_MYCLUSTER_SERVER_COUNT. An empty prefix drops the prefix segment, so
the same leaf is read from MYCLUSTER_SERVER_COUNT.

Keys do not have to be strings. Classes, modules and Enum members can be
used as keys; they are rendered without their module qualifier and any dots
become underscores, so a key of ``EnvVar.Provider`` (or a class named
``Provider`` nested in ``EnvVar``) reads from ``..._ENVVAR_PROVIDER``.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
import types
from typing import Any

__all__ = ["segment_text", "env_var_name"]


def segment_text(segment: Any) -> str:
    """Render a single path segment as an upper-cased name token."""
    if isinstance(segment, Enum):
        text = segment.name
    elif isinstance(segment, type):
        text = segment.__qualname__
    elif isinstance(segment, types.ModuleType):
        text = segment.__name__
    else:
        text = str(segment)
    return text.replace(".", "_").upper()


def env_var_name(prefix: Any, path: Iterable[Any]) -> str:
    """Derive the environment variable name for a schema path.

    Args:
        prefix: Namespace prepended to every name. "" means no prefix.
        path: Segments from the application name down to the leaf key.

    Returns:
        The segments upper-cased and joined with underscores.

    Example:
        ```python
        env_var_name("beowulf", ["mycluster", "server_count"])
        # "BEOWULF_MYCLUSTER_SERVER_COUNT"
        env_var_name("", ["mycluster", "server_count"])
        # "MYCLUSTER_SERVER_COUNT"
        ```

    """
    parts = [segment_text(segment) for segment in path]
    head = segment_text(prefix)
    if head:
        parts.insert(0, head)
    return "_".join(parts)
