"""Permission system for role-based, territorially scoped access control."""

from electoral_access.core.permissions.checker import (
    PermissionEvaluator,
    access_level,
    authorize,
    can_access,
    can_approve,
    can_modify,
    can_reject,
    can_validate,
    get_evaluator,
)
from electoral_access.core.permissions.context import UserContext
from electoral_access.core.permissions.decorators import (
    ensure_allowed,
    require_any_permission,
    require_permission,
)
from electoral_access.core.permissions.rules import (
    MODIFICATION_RULES,
    ActionDecision,
    TerritorialRule,
    validate_modification,
    validate_validation,
)
from electoral_access.core.permissions.scope import (
    TerritorialFields,
    TerritorialLevel,
    TerritoryHierarchy,
    filter_by_scope,
)
from electoral_access.core.permissions.table import (
    DEFAULT_ROLE_PERMISSIONS,
    RolePermissionTable,
    default_table,
)
from electoral_access.core.permissions.types import (
    AccessLevel,
    Action,
    Entity,
    Permission,
    Role,
    Scope,
    parse_action,
    parse_entity,
    parse_role,
    parse_roles,
    parse_scope,
)
from electoral_access.core.permissions.views import (
    ROLE_ENTITY_TABS,
    ROLE_MESSAGES,
    ROLE_VIEWS,
    EntityTab,
    RoleMessages,
    RoleView,
    entity_tabs,
    landing_view,
    primary_role,
    role_messages,
)


__all__ = [
    "DEFAULT_ROLE_PERMISSIONS",
    "MODIFICATION_RULES",
    "ROLE_ENTITY_TABS",
    "ROLE_MESSAGES",
    "ROLE_VIEWS",
    # Types
    "AccessLevel",
    "Action",
    "ActionDecision",
    "Entity",
    "EntityTab",
    "Permission",
    # Evaluator
    "PermissionEvaluator",
    "Role",
    "RoleMessages",
    "RolePermissionTable",
    "RoleView",
    "Scope",
    "TerritorialFields",
    "TerritorialLevel",
    "TerritorialRule",
    "TerritoryHierarchy",
    "UserContext",
    "access_level",
    "authorize",
    "can_access",
    "can_approve",
    "can_modify",
    "can_reject",
    "can_validate",
    "default_table",
    # Enforcement
    "ensure_allowed",
    "entity_tabs",
    "filter_by_scope",
    "get_evaluator",
    "landing_view",
    "parse_action",
    "parse_entity",
    "parse_role",
    "parse_roles",
    "parse_scope",
    "primary_role",
    "require_any_permission",
    "require_permission",
    "role_messages",
    "validate_modification",
    "validate_validation",
]
