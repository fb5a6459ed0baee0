"""
Tests for envvar.merge module.

Tests deep merging including:
- Recursive mapping merge
- Absent values never overwriting present ones
- Replacement of lists, tuples and scalars
- Idempotence and input immutability
"""

from __future__ import annotations

import copy

from envvar.merge import deep_merge


class TestDeepMerge:
    """Tests for deep_merge()."""

    def test_preserves_untouched_keys(self):
        """Test that sibling keys on the existing side survive."""
        existing = {"mycluster": {"sys_logger": {"metadata": {"environment": "dev", "name": "foo"}}}}
        incoming = {"mycluster": {"sys_logger": {"metadata": {"environment": "prod"}}}}

        merged = deep_merge(existing, incoming)
        metadata = merged["mycluster"]["sys_logger"]["metadata"]

        assert metadata["environment"] == "prod"
        assert metadata["name"] == "foo"

    def test_deeper_levels(self):
        """Test merging several levels down on both sides."""
        existing = {"metadata": {"environment": "dev", "deeper": {"address": "localhost"}}}
        incoming = {"metadata": {"environment": "prod", "deeper": {"port": 9090}}}

        merged = deep_merge(existing, incoming)

        assert merged == {
            "metadata": {
                "environment": "prod",
                "deeper": {"address": "localhost", "port": 9090},
            }
        }

    def test_none_never_overwrites(self):
        """Test that an absent incoming value keeps the existing one."""
        merged = deep_merge({"app": {"key": "original"}}, {"app": {"key": None}})

        assert merged == {"app": {"key": "original"}}

    def test_none_adds_no_key(self):
        """Test that an absent incoming value does not create a key."""
        merged = deep_merge({"app": {}}, {"app": {"key": None}})

        assert merged == {"app": {}}

    def test_lists_and_tuples_replace(self):
        """Test that sequences replace rather than extend."""
        existing = {"app": {"settings": ["a", "b"], "keys": (1.0, 2.0)}}
        incoming = {"app": {"settings": ["c"], "keys": (3.0,)}}

        assert deep_merge(existing, incoming) == incoming

    def test_scalar_replaced_by_mapping(self):
        """Test that a present incoming mapping wins over an existing scalar."""
        assert deep_merge({"app": "flat"}, {"app": {"key": 1}}) == {"app": {"key": 1}}

    def test_new_applications_added(self):
        """Test that keys only on the incoming side are carried through."""
        merged = deep_merge({"mycluster": {"port": 1}}, {"the_system": {"service_name": "envoygw"}})

        assert merged == {
            "mycluster": {"port": 1},
            "the_system": {"service_name": "envoygw"},
        }

    def test_inputs_not_mutated(self):
        """Test that neither input is modified."""
        existing = {"app": {"nested": {"a": 1}}}
        incoming = {"app": {"nested": {"b": 2}}, "other": {"c": 3}}
        existing_before = copy.deepcopy(existing)
        incoming_before = copy.deepcopy(incoming)

        merged = deep_merge(existing, incoming)
        merged["other"]["c"] = 99

        assert existing == existing_before
        assert incoming == incoming_before

    def test_idempotent(self):
        """Test that merging the same tree twice equals merging once."""
        existing = {"app": {"a": 1, "nested": {"x": "dev"}}}
        incoming = {"app": {"nested": {"x": "prod", "y": [1, 2]}}}

        once = deep_merge(existing, incoming)

        assert deep_merge(once, incoming) == once

    def test_no_foreign_keys(self):
        """Test that the result only contains keys from either input."""
        existing = {"a": {"x": 1}}
        incoming = {"b": {"y": 2}, "a": {"z": None}}

        merged = deep_merge(existing, incoming)

        assert set(merged) == {"a", "b"}
        assert set(merged["a"]) == {"x"}
