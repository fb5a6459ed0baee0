"""
Tests for envvar.store module.

Tests the application configuration store including:
- Reading and writing keys
- Deep merging into the store
- YAML loading and dumping
"""

from __future__ import annotations

import pytest
import yaml

from envvar.exceptions import ConfigError
from envvar.store import ConfigStore


class Provider:
    pass


class TestConfigStore:
    """Tests for in-memory store operations."""

    def test_get_and_put(self):
        """Test setting and reading single keys."""
        store = ConfigStore()
        store.put("mycluster", "port", 9042)

        assert store.get("mycluster", "port") == 9042
        assert store.get("mycluster") == {"port": 9042}
        assert store.get("mycluster", "missing", "fallback") == "fallback"
        assert store.get("unknown", default={}) == {}

    def test_constructor_copies_data(self):
        """Test that the store does not alias the given dict."""
        data = {"app": {"key": "value"}}
        store = ConfigStore(data)
        store.put("app", "key", "changed")

        assert data["app"]["key"] == "value"

    def test_merge(self):
        """Test that merge deep-merges into existing contents."""
        store = ConfigStore({"mycluster": {"sys_logger": {"metadata": {"environment": "dev", "name": "foo"}}}})

        store.merge({"mycluster": {"sys_logger": {"metadata": {"environment": "prod"}}}})

        assert store.get("mycluster", "sys_logger") == {
            "metadata": {"environment": "prod", "name": "foo"}
        }

    def test_as_dict_is_a_copy(self):
        """Test that as_dict() cannot be used to mutate the store."""
        store = ConfigStore({"app": {"nested": {"a": 1}}})
        snapshot = store.as_dict()
        snapshot["app"]["nested"]["a"] = 2

        assert store.get("app", "nested") == {"a": 1}


class TestConfigStoreYaml:
    """Tests for YAML loading and dumping."""

    def test_from_yaml(self, create_yaml_file):
        """Test loading a store from a YAML mapping."""
        path = create_yaml_file("config.yaml", {"mycluster": {"port": 9042, "name": "grendel"}})

        store = ConfigStore.from_yaml(path)

        assert store.get("mycluster", "port") == 9042

    def test_from_yaml_missing(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ConfigStore.from_yaml(tmp_path / "missing.yaml")

    def test_from_yaml_not_mapping(self, tmp_path):
        """Test that a non-mapping top level raises ConfigError."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="must be a mapping"):
            ConfigStore.from_yaml(path)

    def test_from_yaml_empty(self, tmp_path):
        """Test that an empty file raises ConfigError."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        with pytest.raises(ConfigError, match="empty"):
            ConfigStore.from_yaml(path)

    def test_from_yaml_invalid(self, tmp_path):
        """Test that invalid YAML raises ConfigError."""
        path = tmp_path / "bad.yaml"
        path.write_text("app: {unclosed", encoding="utf-8")

        with pytest.raises(ConfigError, match="Error parsing YAML"):
            ConfigStore.from_yaml(path)

    def test_to_yaml_plain_values(self):
        """Test that tuples and class keys dump as plain YAML."""
        store = ConfigStore({"app": {"keys": (1.1, 2.3), Provider: "result"}})

        dumped = yaml.safe_load(store.to_yaml())

        assert dumped["app"]["keys"] == [1.1, 2.3]
        assert dumped["app"]["Provider"] == "result"
