"""Unit tests for schema.py - resource attribute tables."""

from schema import (
    CONSUMER_PLUGIN_CONFIG_ATTRIBUTES,
    PLUGIN_ATTRIBUTES,
    changed_attributes,
    replacement_attributes,
    to_json_schema,
)
from validation import validate_openapi_schema


class TestAttributeTables:
    """Tests for the declared attribute tables."""

    def test_plugin_name_required_and_force_new(self):
        name = next(a for a in PLUGIN_ATTRIBUTES if a.name == "name")
        assert name.required is True
        assert name.force_new is True

    def test_plugin_scope_ids_mutable(self):
        for attr in PLUGIN_ATTRIBUTES:
            if attr.name.endswith("_id"):
                assert attr.force_new is False
                assert attr.required is False

    def test_consumer_config_all_force_new(self):
        assert all(a.force_new for a in CONSUMER_PLUGIN_CONFIG_ATTRIBUTES)

    def test_config_conflicts(self):
        for table in (PLUGIN_ATTRIBUTES, CONSUMER_PLUGIN_CONFIG_ATTRIBUTES):
            attrs = {a.name: a for a in table}
            assert attrs["config"].conflicts_with == ("config_json",)
            assert attrs["config_json"].conflicts_with == ("config",)


class TestToJsonSchema:
    """Tests for JSON Schema generation."""

    def test_plugin_schema(self):
        schema = to_json_schema(PLUGIN_ATTRIBUTES)
        assert schema["type"] == "object"
        assert schema["required"] == ["name"]
        assert schema["additionalProperties"] is False
        assert schema["properties"]["config"]["additionalProperties"] == {
            "type": "string"
        }
        assert schema["properties"]["route_id"] == {"type": "string"}

    def test_consumer_schema_required(self):
        schema = to_json_schema(CONSUMER_PLUGIN_CONFIG_ATTRIBUTES)
        assert schema["required"] == ["consumer_id", "plugin_name"]

    def test_generated_schemas_are_valid(self):
        for table in (PLUGIN_ATTRIBUTES, CONSUMER_PLUGIN_CONFIG_ATTRIBUTES):
            is_valid, error = validate_openapi_schema(to_json_schema(table))
            assert is_valid is True, error


class TestReplacementAttributes:
    """Tests for force-new change detection."""

    def test_no_changes(self):
        current = {"name": "rate-limiting", "service_id": "s1"}
        desired = {"name": "rate-limiting", "service_id": "s2"}
        assert replacement_attributes(PLUGIN_ATTRIBUTES, current, desired) == []

    def test_name_change_forces_new(self):
        current = {"name": "rate-limiting"}
        desired = {"name": "key-auth"}
        assert replacement_attributes(PLUGIN_ATTRIBUTES, current, desired) == ["name"]

    def test_consumer_changes(self):
        current = {"consumer_id": "c1", "plugin_name": "acl", "config_json": '{"a":1}'}
        desired = {"consumer_id": "c2", "plugin_name": "acl"}
        assert replacement_attributes(
            CONSUMER_PLUGIN_CONFIG_ATTRIBUTES, current, desired
        ) == ["consumer_id"]

    def test_config_json_compared_canonically(self):
        current = {"consumer_id": "c1", "plugin_name": "acl", "config_json": '{"a":1,"b":2}'}
        desired = {
            "consumer_id": "c1",
            "plugin_name": "acl",
            "config_json": '{ "b": 2, "a": 1 }',
        }
        assert (
            replacement_attributes(CONSUMER_PLUGIN_CONFIG_ATTRIBUTES, current, desired)
            == []
        )

    def test_empty_config_json_suppressed(self):
        current = {"consumer_id": "c1", "plugin_name": "acl", "config_json": '{"a":1}'}
        desired = {"consumer_id": "c1", "plugin_name": "acl", "config_json": ""}
        assert (
            replacement_attributes(CONSUMER_PLUGIN_CONFIG_ATTRIBUTES, current, desired)
            == []
        )

    def test_config_json_change(self):
        current = {"consumer_id": "c1", "plugin_name": "acl", "config_json": '{"a":1}'}
        desired = {"consumer_id": "c1", "plugin_name": "acl", "config_json": '{"a":2}'}
        assert replacement_attributes(
            CONSUMER_PLUGIN_CONFIG_ATTRIBUTES, current, desired
        ) == ["config_json"]

    def test_config_mapping_matches_stored_json(self):
        """A read only stores config_json; a matching mapping is not a change."""
        current = {"consumer_id": "c1", "plugin_name": "acl", "config_json": '{"group":"admins"}'}
        desired = {"consumer_id": "c1", "plugin_name": "acl", "config": {"group": "admins"}}
        assert (
            replacement_attributes(CONSUMER_PLUGIN_CONFIG_ATTRIBUTES, current, desired)
            == []
        )

    def test_config_mapping_differs_from_stored_json(self):
        current = {"consumer_id": "c1", "plugin_name": "acl", "config_json": '{"group":"users"}'}
        desired = {"consumer_id": "c1", "plugin_name": "acl", "config": {"group": "admins"}}
        assert replacement_attributes(
            CONSUMER_PLUGIN_CONFIG_ATTRIBUTES, current, desired
        ) == ["config"]

    def test_invalid_desired_config_json_is_a_change(self, caplog):
        current = {"consumer_id": "c1", "plugin_name": "acl", "config_json": '{"a":1}'}
        desired = {"consumer_id": "c1", "plugin_name": "acl", "config_json": "{bad"}
        assert replacement_attributes(
            CONSUMER_PLUGIN_CONFIG_ATTRIBUTES, current, desired
        ) == ["config_json"]
        assert "Invalid JSON data in config_json" in caplog.text


class TestChangedAttributes:
    """Tests for drift detection across all declared attributes."""

    def test_unchanged_plugin(self):
        current = {
            "name": "cors",
            "service_id": "s1",
            "route_id": "",
            "config_json": '{"origins":["*"]}',
        }
        desired = {"name": "cors", "service_id": "s1", "config": {}, "config_json": ""}
        assert changed_attributes(PLUGIN_ATTRIBUTES, current, desired) == []

    def test_mutable_change_reported(self):
        current = {"name": "cors", "service_id": "s1", "config_json": "{}"}
        desired = {"name": "cors", "service_id": "s2"}
        assert changed_attributes(PLUGIN_ATTRIBUTES, current, desired) == ["service_id"]
        assert replacement_attributes(PLUGIN_ATTRIBUTES, current, desired) == []

    def test_plugin_mapping_compared_to_config_json(self):
        current = {"name": "cors", "config_json": '{"max_age":"10"}'}
        assert changed_attributes(
            PLUGIN_ATTRIBUTES, current, {"name": "cors", "config": {"max_age": "10"}}
        ) == []
        assert changed_attributes(
            PLUGIN_ATTRIBUTES, current, {"name": "cors", "config": {"max_age": "20"}}
        ) == ["config"]
