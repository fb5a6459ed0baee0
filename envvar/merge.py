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

"""Deep merge of configuration trees.

Merge Behavior
--------------
The merge performs deep merging with "incoming wins, unless absent":
  - **Mappings**: Recursively merged; keys present on one side are kept
  - **None / missing**: Never overwrite an existing value
  - **Lists, tuples, scalars**: Incoming replaces existing

Neither input is mutated. Applying the same incoming tree twice gives the
same result as applying it once.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

__all__ = ["deep_merge"]


def deep_merge(existing: Mapping[Any, Any], incoming: Mapping[Any, Any]) -> dict[Any, Any]:
    """Deep-merge incoming on top of existing.

    Rules:
      - mapping + mapping -> deep merge
      - incoming None -> existing value kept (or key left out)
      - everything else -> incoming overwrites existing

    Returns:
        A new dict; key order follows existing, then new incoming keys.

    """
    result: dict[Any, Any] = dict(existing)
    for key, value in incoming.items():
        if value is None:
            continue
        current = result.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(current, value)
        elif isinstance(value, Mapping):
            # Copy so later merges into the result never touch the input
            result[key] = deep_merge({}, value)
        else:
            result[key] = value
    return result
