"""
Pytest configuration and shared fixtures for envvar tests.

This module provides reusable schemas and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml


class EnvVar:
    """Namespace standing in for a qualified module-style key."""

    class Provider:
        pass


@pytest.fixture
def environ() -> dict[str, str]:
    """Provide an empty, isolated environment mapping."""
    return {}


@pytest.fixture
def complex_schema() -> dict[str, Any]:
    """Provide a schema with one nested key of mixed types."""
    return {
        "mycluster": {
            "cluster_options": {
                "credentials": {"type": ("tuple", "string"), "default": "user,pass"},
                "contact_points": {"type": "string", "default": "127.0.0.1"},
                "port": {"type": "integer", "default": "9042"},
                "list_key": {"type": ("list", "integer"), "default": "1,2,3"},
            }
        }
    }


@pytest.fixture
def simple_schema() -> dict[str, Any]:
    """Provide a flat schema across two applications."""
    return {
        "the_system": {
            "service_name": {"type": "string", "default": "envoygw"},
        },
        "mycluster": {
            "server_count": {"type": "integer", "default": "123"},
            "name": {"type": "string", "default": "grendel"},
            "settings": {"type": ("list", "string"), "default": "swarthy,hairy"},
            "keys": {"type": ("tuple", "float"), "default": "1.1,2.3,3.4"},
        },
    }


@pytest.fixture
def module_key_schema() -> dict[Any, Any]:
    """Provide a schema keyed by a class instead of a string."""
    return {
        "app": {
            EnvVar.Provider: {"type": "string", "default": "result"},
        }
    }


@pytest.fixture
def deep_schema() -> dict[str, Any]:
    """Provide a schema nested several levels deep, without defaults."""
    return {
        "mycluster": {
            "sys_logger": {
                "metadata": {
                    "environment": {"type": "string"},
                    "deeper": {
                        "port": {"type": "integer"},
                    },
                }
            }
        }
    }


@pytest.fixture
def create_yaml_file(tmp_path: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("schema.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)
        return path

    return _create
