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

"""Application configuration store.

The store holds the configuration a host process reads after startup: a
mapping of application name to a mapping of keys. It is an ordinary object
passed around by reference, never a module-level global, so tests and
multiple hosts in one process stay isolated.

The store performs no locking. A host that shares one store between
threads must serialize writes itself.

Example:
    Populate a store from a YAML file and the environment:
        ```python
        from pathlib import Path
        from envvar.provider import apply, init
        from envvar.store import ConfigStore

        store = ConfigStore.from_yaml(Path("config/prod.yaml"))
        apply(store, init(prefix="beowulf", env_map=schema))
        port = store.get("mycluster", "port")
        ```

"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from envvar.exceptions import ConfigError
from envvar.merge import deep_merge

__all__ = ["ConfigStore"]


class ConfigStore:
    """In-memory application configuration.

    Attributes:
        data: Mapping of application name to that application's settings.

    """

    def __init__(self, data: dict[Any, Any] | None = None):
        self.data: dict[Any, Any] = copy.deepcopy(data) if data else {}

    @classmethod
    def from_yaml(cls, path: Path) -> ConfigStore:
        """Create a store from a YAML file whose top level is a mapping.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigError: For invalid YAML, an empty file, or a non-mapping
                top level.

        """
        if not path.exists():
            raise FileNotFoundError(f"file not found: {path}")
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as err:
            raise ConfigError(f"Error parsing YAML: {path}: {err}") from err
        if data is None:
            raise ConfigError(f"YAML file is empty: {path}")
        if not isinstance(data, dict):
            raise ConfigError(f"top-level YAML must be a mapping (dict): {path}")
        return cls(data)

    def get(self, app: Any, key: Any = None, default: Any = None) -> Any:
        """Return an application's settings, or one key within them."""
        settings = self.data.get(app)
        if key is None:
            return default if settings is None else settings
        if not isinstance(settings, dict):
            return default
        return settings.get(key, default)

    def put(self, app: Any, key: Any, value: Any) -> None:
        """Set a single key, replacing any previous value."""
        self.data.setdefault(app, {})[key] = value

    def merge(self, tree: dict[Any, Any]) -> None:
        """Deep-merge tree into the store (see envvar.merge.deep_merge)."""
        self.data = deep_merge(self.data, tree)

    def replace(self, tree: dict[Any, Any]) -> None:
        """Replace the whole store contents with tree."""
        self.data = copy.deepcopy(tree)

    def as_dict(self) -> dict[Any, Any]:
        """Return a deep copy of the store contents."""
        return copy.deepcopy(self.data)

    def to_yaml(self) -> str:
        """Dump the store contents as YAML, keeping key order.

        Tuples are written as plain sequences and non-string keys as
        their string form.
        """
        return yaml.safe_dump(
            _plain(self.data), default_flow_style=False, sort_keys=False
        )


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            k if isinstance(k, (str, int, float, bool)) else _key_name(k): _plain(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def _key_name(key: Any) -> str:
    if isinstance(key, type):
        return key.__qualname__
    return str(key)
