"""Tests for loading permission rules from configuration."""

import pytest

from restricted_store import (
    PermissionConfigError,
    PermissionConfigSchema,
    PermissionRegistry,
    PermissionRuleSchema,
    Store,
    load_permissions,
    registry,
)


@pytest.fixture
def reg():
    return PermissionRegistry()


# ── schema validation ────────────────────────────────────────


def test_rule_by_class_and_field():
    rule = PermissionRuleSchema(class_name="AdminStore", field_name="name", permission="r")
    assert rule.key is None


def test_rule_defaults_to_none():
    rule = PermissionRuleSchema(key="custom:key")
    assert rule.permission == "none"


def test_rule_requires_target():
    with pytest.raises(ValueError):
        PermissionRuleSchema(permission="r")


def test_rule_requires_both_class_and_field():
    with pytest.raises(ValueError):
        PermissionRuleSchema(class_name="AdminStore", permission="r")


def test_rule_rejects_key_and_field_together():
    with pytest.raises(ValueError):
        PermissionRuleSchema(key="k", class_name="A", field_name="f")


def test_rule_rejects_unknown_permission():
    with pytest.raises(ValueError):
        PermissionRuleSchema(key="k", permission="admin")


# ── load_permissions ─────────────────────────────────────────


def test_load_from_dict(reg):
    count = load_permissions(
        {
            "rules": [
                {"class_name": "AdminStore", "field_name": "name", "permission": "none"},
                {"key": "custom:path:key", "permission": "rw"},
            ]
        },
        reg,
    )
    assert count == 2
    assert reg.get("AdminStore:name") == "none"
    assert reg.get("custom:path:key") == "rw"


def test_load_into_supplied_registry_only(reg):
    before = registry.snapshot()
    load_permissions({"rules": [{"class_name": "A", "field_name": "f", "permission": "w"}]}, reg)
    assert reg.get("A:f") == "w"
    assert registry.snapshot() == before


def test_load_from_schema(reg):
    schema = PermissionConfigSchema(rules=[PermissionRuleSchema(key="k", permission="r")])
    assert load_permissions(schema, reg) == 1
    assert reg.get("k") == "r"


def test_later_rules_replace_earlier(reg):
    load_permissions(
        {
            "rules": [
                {"key": "k", "permission": "r"},
                {"key": "k", "permission": "w"},
            ]
        },
        reg,
    )
    assert reg.get("k") == "w"


def test_empty_config(reg):
    assert load_permissions({}, reg) == 0
    assert len(reg) == 0


def test_invalid_config_raises(reg):
    with pytest.raises(PermissionConfigError, match="invalid permission configuration"):
        load_permissions({"rules": [{"key": "k", "permission": "everything"}]}, reg)
    assert len(reg) == 0


def test_string_config_rejected(reg):
    with pytest.raises(PermissionConfigError):
        load_permissions('{"rules": []}', reg)


def test_loaded_rules_apply_to_stores():
    class ConfiguredStore(Store):
        pass

    load_permissions({"rules": [{"class_name": "ConfiguredStore", "field_name": "locked"}]})
    assert registry.get("ConfiguredStore:locked") == "none"
    instance = ConfiguredStore()
    assert not instance.allowed_to_read("locked")
    assert instance.allowed_to_read("open")
