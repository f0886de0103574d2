"""Permission checking logic.

This module provides the evaluator that decides whether a set of roles
may perform an action on an entity, and the derived predicates built on
top of that single decision.
"""

from collections.abc import Iterable
from functools import lru_cache
from typing import TYPE_CHECKING, Any, TypeVar

import structlog

from electoral_access.core.permissions.scope import (
    TerritorialFields,
    TerritoryHierarchy,
    filter_by_scope,
)
from electoral_access.core.permissions.table import RolePermissionTable, default_table
from electoral_access.core.permissions.types import (
    AccessLevel,
    Action,
    Entity,
    Role,
    Scope,
    parse_action,
    parse_entity,
    parse_roles,
    parse_scope,
)


if TYPE_CHECKING:
    from electoral_access.core.permissions.context import UserContext


logger = structlog.get_logger()

T = TypeVar("T")

RoleNames = Iterable[Role | str]

_VALIDATION_ACTIONS = (Action.VALIDATE, Action.APPROVE, Action.REJECT)
_MODIFICATION_ACTIONS = (Action.UPDATE, Action.CREATE)


class PermissionEvaluator:
    """Service for checking role permissions.

    Evaluates requests against an immutable ``RolePermissionTable``
    supplied at construction. Every check is a pure function of its
    arguments; unknown roles, entities, actions or scopes deny.
    """

    def __init__(self, table: RolePermissionTable) -> None:
        self.table = table

    def authorize(
        self,
        roles: RoleNames | None,
        entity: Entity | str,
        action: Action | str,
        desired_scope: Scope | str | None = None,
    ) -> bool:
        """Check if any of the roles grants an action on an entity.

        Args:
            roles: The user's roles, as members or session names
            entity: The entity being accessed
            action: The action being performed
            desired_scope: Breadth the caller needs; any grant matches when
                omitted, otherwise the grant's scope must cover it

        Returns:
            True if at least one grant matches, False otherwise
        """
        parsed_entity = parse_entity(entity)
        parsed_action = parse_action(action)
        if parsed_entity is None or parsed_action is None:
            return False

        scope = None
        if desired_scope is not None:
            scope = parse_scope(desired_scope)
            if scope is None:
                return False

        for role in parse_roles(roles):
            for permission in self.table.permissions_for(role):
                if permission.allows(parsed_entity, parsed_action, scope):
                    return True

        return False

    def has_any_permission(
        self,
        roles: RoleNames | None,
        permissions: list[tuple[Entity | str, Action | str]],
    ) -> bool:
        """Check if the roles grant at least one of the (entity, action) pairs."""
        roles = parse_roles(roles)
        return any(self.authorize(roles, entity, action) for entity, action in permissions)

    def has_all_permissions(
        self,
        roles: RoleNames | None,
        permissions: list[tuple[Entity | str, Action | str]],
    ) -> bool:
        """Check if the roles grant every one of the (entity, action) pairs."""
        roles = parse_roles(roles)
        return all(self.authorize(roles, entity, action) for entity, action in permissions)

    def granted_scope(
        self,
        roles: RoleNames | None,
        entity: Entity | str,
        action: Action | str,
    ) -> Scope | None:
        """Get the widest scope at which the roles grant an action.

        Returns:
            The widest matching scope, or None when nothing matches
        """
        parsed_entity = parse_entity(entity)
        parsed_action = parse_action(action)
        if parsed_entity is None or parsed_action is None:
            return None

        widest: Scope | None = None
        for role in parse_roles(roles):
            for permission in self.table.permissions_for(role):
                if not permission.allows(parsed_entity, parsed_action):
                    continue
                if widest is None or permission.scope.rank > widest.rank:
                    widest = permission.scope
        return widest

    def can_access(self, roles: RoleNames | None, entity: Entity | str) -> bool:
        return self.authorize(roles, entity, Action.READ)

    def can_modify(self, roles: RoleNames | None, entity: Entity | str) -> bool:
        roles = parse_roles(roles)
        return any(self.authorize(roles, entity, a) for a in _MODIFICATION_ACTIONS)

    def can_validate(self, roles: RoleNames | None, entity: Entity | str) -> bool:
        roles = parse_roles(roles)
        return any(self.authorize(roles, entity, a) for a in _VALIDATION_ACTIONS)

    def can_create(self, roles: RoleNames | None, entity: Entity | str) -> bool:
        return self.authorize(roles, entity, Action.CREATE)

    def can_delete(self, roles: RoleNames | None, entity: Entity | str) -> bool:
        return self.authorize(roles, entity, Action.DELETE)

    def can_approve(self, roles: RoleNames | None, entity: Entity | str) -> bool:
        return self.authorize(roles, entity, Action.APPROVE)

    def can_reject(self, roles: RoleNames | None, entity: Entity | str) -> bool:
        return self.authorize(roles, entity, Action.REJECT)

    def can_see_validation_actions(self, roles: RoleNames | None, entity: Entity | str) -> bool:
        """Whether validation controls should be shown for an entity."""
        return self.can_validate(roles, entity)

    def can_see_modification_actions(self, roles: RoleNames | None, entity: Entity | str) -> bool:
        """Whether create/edit/delete controls should be shown for an entity."""
        return self.can_modify(roles, entity) or self.can_delete(roles, entity)

    def access_level(self, roles: RoleNames | None) -> AccessLevel:
        """Classify roles for top-level view routing.

        The highest tier present wins: admin, then validate (validator or
        department supervisor), then modify (scrutineer), then read.
        """
        parsed = set(parse_roles(roles))
        if Role.ADMINISTRATOR in parsed:
            return AccessLevel.ADMIN
        if parsed & {Role.VALIDATOR, Role.DEPARTMENT_SUPERVISOR}:
            return AccessLevel.VALIDATE
        if Role.SCRUTINEER in parsed:
            return AccessLevel.MODIFY
        return AccessLevel.READ

    def accessible_entities(self, roles: RoleNames | None) -> list[Entity]:
        """Get the entities the roles can read, in declaration order."""
        roles = parse_roles(roles)
        return [entity for entity in Entity if self.can_access(roles, entity)]

    def permission_names(self, roles: RoleNames | None) -> set[str]:
        """Get every grant of the roles as ``entity:action@scope`` strings."""
        names: set[str] = set()
        for role in parse_roles(roles):
            for permission in self.table.permissions_for(role):
                names |= permission.names
        return names

    def filter_by_scope(
        self,
        records: Iterable[T],
        user: "UserContext",
        entity: Entity | str,
        fields: TerritorialFields | None = None,
        hierarchy: TerritoryHierarchy | None = None,
    ) -> list[T]:
        """Narrow records to the user's read scope. See ``scope.filter_by_scope``."""
        return filter_by_scope(self, records, user, entity, fields, hierarchy)

    # Role predicates

    def is_admin(self, roles: RoleNames | None) -> bool:
        return Role.ADMINISTRATOR in parse_roles(roles)

    def is_validator(self, roles: RoleNames | None) -> bool:
        return bool(set(parse_roles(roles)) & {Role.VALIDATOR, Role.DEPARTMENT_SUPERVISOR})

    def is_scrutineer(self, roles: RoleNames | None) -> bool:
        return Role.SCRUTINEER in parse_roles(roles)

    def is_local_observer(self, roles: RoleNames | None) -> bool:
        return Role.LOCAL_OBSERVER in parse_roles(roles)

    def is_department_supervisor(self, roles: RoleNames | None) -> bool:
        return Role.DEPARTMENT_SUPERVISOR in parse_roles(roles)


@lru_cache
def get_evaluator() -> PermissionEvaluator:
    """Get the cached evaluator over the canonical permission table."""
    return PermissionEvaluator(default_table())


def authorize(
    roles: RoleNames | None,
    entity: Entity | str,
    action: Action | str,
    desired_scope: Scope | str | None = None,
) -> bool:
    """Convenience function to check permission against the canonical table.

    For use in handlers that do not hold their own evaluator.
    """
    allowed = get_evaluator().authorize(roles, entity, action, desired_scope)
    if not allowed:
        logger.debug(
            "permission_denied",
            entity=_label(entity),
            action=_label(action),
            desired_scope=_label(desired_scope),
        )
    return allowed


def can_access(roles: RoleNames | None, entity: Entity | str) -> bool:
    return get_evaluator().can_access(roles, entity)


def can_modify(roles: RoleNames | None, entity: Entity | str) -> bool:
    return get_evaluator().can_modify(roles, entity)


def can_validate(roles: RoleNames | None, entity: Entity | str) -> bool:
    return get_evaluator().can_validate(roles, entity)


def can_approve(roles: RoleNames | None, entity: Entity | str) -> bool:
    return get_evaluator().can_approve(roles, entity)


def can_reject(roles: RoleNames | None, entity: Entity | str) -> bool:
    return get_evaluator().can_reject(roles, entity)


def access_level(roles: RoleNames | None) -> AccessLevel:
    return get_evaluator().access_level(roles)


def _label(value: Any) -> Any:
    return getattr(value, "value", value)
