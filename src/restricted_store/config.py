# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Permission rules loaded from configuration.

Rules are declared in a plain dict (or a schema instance) and applied to the
registry in order, the same way ``restrict`` calls would be::

    {
        "rules": [
            {"class_name": "AdminStore", "field_name": "name", "permission": "none"},
            {"key": "custom:path:key", "permission": "rw"}
        ]
    }
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from restricted_store.exceptions import PermissionConfigError
from restricted_store.permissions import Permission
from restricted_store.registry import PermissionRegistry, registry

logger = logging.getLogger(__name__)


class PermissionRuleSchema(BaseModel):
    """Single permission rule.

    Attributes:
        permission: Level to register ("r", "w", "rw" or "none")
        class_name: Class the field is declared on (with field_name)
        field_name: Field the rule applies to (with class_name)
        key: Explicit registry key, instead of class_name/field_name
    """

    permission: Permission = "none"
    class_name: str | None = None
    field_name: str | None = None
    key: str | None = None

    @model_validator(mode="after")
    def _check_target(self) -> PermissionRuleSchema:
        by_field = self.class_name is not None or self.field_name is not None
        if self.key is not None and by_field:
            raise ValueError("use either 'key' or 'class_name'/'field_name', not both")
        if self.key is None and not (self.class_name and self.field_name):
            raise ValueError("'class_name' and 'field_name' are both required without 'key'")
        return self


class PermissionConfigSchema(BaseModel):
    """Complete permission configuration.

    Attributes:
        rules: Rules applied in order; later rules replace earlier ones
    """

    rules: list[PermissionRuleSchema] = Field(default_factory=list)


def parse_config(config: PermissionConfigSchema | dict[str, Any]) -> PermissionConfigSchema:
    """Validate *config* given as a schema or a dict.

    Raises:
        PermissionConfigError: If validation fails
    """
    if isinstance(config, PermissionConfigSchema):
        return config
    try:
        return PermissionConfigSchema.model_validate(config)
    except ValidationError as e:
        raise PermissionConfigError(f"invalid permission configuration: {e}") from e


def load_permissions(
    config: PermissionConfigSchema | dict[str, Any],
    target_registry: PermissionRegistry | None = None,
) -> int:
    """Apply every rule in *config* to the registry.

    Args:
        config: Schema instance or dict
        target_registry: Registry to populate (defaults to the shared one)

    Returns:
        Number of rules applied
    """
    schema = parse_config(config)
    reg = registry if target_registry is None else target_registry

    for rule in schema.rules:
        if rule.key is not None:
            reg.register_key(rule.permission, rule.key)
        else:
            reg.register(rule.permission, rule.class_name, rule.field_name)  # type: ignore[arg-type]

    logger.info("Loaded %d permission rule(s)", len(schema.rules))
    return len(schema.rules)
