"""Role permission table.

The table maps each role to the grants it holds. It is built once at
startup and never mutated; the evaluator receives it by construction.
"""

from collections.abc import Iterator, Mapping, Sequence
from functools import lru_cache
from types import MappingProxyType
from typing import Any

import structlog

from electoral_access.core.errors import PermissionTableError
from electoral_access.core.permissions.types import (
    Action,
    Entity,
    Permission,
    Role,
    Scope,
    parse_action,
    parse_entity,
    parse_role,
    parse_scope,
)


logger = structlog.get_logger()


_READ_AND_REVIEW = (Action.READ, Action.VALIDATE, Action.APPROVE, Action.REJECT)
_SUBMIT = (Action.CREATE, Action.READ, Action.UPDATE)
_MANAGE = (Action.CREATE, Action.READ, Action.UPDATE, Action.DELETE)
_SUPERVISE = (*_MANAGE, Action.VALIDATE)
_EVERYTHING = tuple(Action)

# Entities scrutineers and local observers work on within their arrondissement
_FIELD_ENTITIES = (
    Entity.DOCUMENT_ARRONDISSEMENT,
    Entity.DEPARTMENTAL_PARTICIPATION,
    Entity.OFFICE_REDRESS,
    Entity.CANDIDATE_REDRESS,
    Entity.DEPARTMENTAL_RESULT,
)


def _row(entity: Entity, actions: tuple[Action, ...], scope: Scope) -> dict[str, Any]:
    return {"entity": entity, "actions": actions, "scope": scope}


DEFAULT_ROLE_PERMISSIONS: dict[Role, list[dict[str, Any]]] = {
    Role.VALIDATOR: [
        _row(Entity.DOCUMENT_ARRONDISSEMENT, _READ_AND_REVIEW, Scope.DEPARTMENT),
        _row(Entity.DEPARTMENTAL_PARTICIPATION, _READ_AND_REVIEW, Scope.DEPARTMENT),
        _row(Entity.OFFICE_REDRESS, _READ_AND_REVIEW, Scope.DEPARTMENT),
        _row(Entity.CANDIDATE_REDRESS, _READ_AND_REVIEW, Scope.DEPARTMENT),
        _row(Entity.DEPARTMENTAL_RESULT, _EVERYTHING, Scope.DEPARTMENT),
    ],
    Role.SCRUTINEER: [
        _row(entity, _SUBMIT, Scope.OWN)
        for entity in _FIELD_ENTITIES
    ],
    Role.LOCAL_OBSERVER: [
        _row(entity, (Action.READ,), Scope.OWN)
        for entity in _FIELD_ENTITIES
    ],
    Role.DEPARTMENT_SUPERVISOR: [
        _row(Entity.ARRONDISSEMENT, (Action.READ,), Scope.DEPARTMENT),
        _row(Entity.DOCUMENT_ARRONDISSEMENT, _READ_AND_REVIEW, Scope.DEPARTMENT),
        _row(Entity.DEPARTMENTAL_COMMISSION, _MANAGE, Scope.DEPARTMENT),
        _row(Entity.COMMISSION_MEMBER, _MANAGE, Scope.DEPARTMENT),
        _row(Entity.DEPARTMENTAL_PARTICIPATION, _SUPERVISE, Scope.DEPARTMENT),
        _row(Entity.OFFICE_REDRESS, _SUPERVISE, Scope.DEPARTMENT),
        _row(Entity.CANDIDATE_REDRESS, _SUPERVISE, Scope.DEPARTMENT),
    ],
    Role.ADMINISTRATOR: [
        _row(entity, _EVERYTHING, Scope.ALL)
        for entity in Entity
    ],
}


class RolePermissionTable:
    """Immutable mapping of roles to the grants they hold.

    Every role of the ``Role`` enumeration is present; roles without a row
    map to an empty tuple. Lookups never fail: an unknown role simply
    grants nothing.
    """

    def __init__(self, grants: Mapping[Role, Sequence[Permission]]) -> None:
        table = {role: tuple(grants.get(role, ())) for role in Role}
        self._grants: Mapping[Role, tuple[Permission, ...]] = MappingProxyType(table)

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[Any, Sequence[Mapping[str, Any]]]
    ) -> "RolePermissionTable":
        """Build a table from plain configuration data.

        Args:
            mapping: ``{role: [{"entity": ..., "actions": [...], "scope": ...}]}``
                with enum members or their string identifiers

        Returns:
            The constructed table

        Raises:
            PermissionTableError: If any row names an unknown role, entity,
                action or scope
        """
        grants: dict[Role, list[Permission]] = {}

        for raw_role, rows in mapping.items():
            role = parse_role(raw_role)
            if role is None:
                raise PermissionTableError(
                    "Unknown role in permission table",
                    details={"role": str(raw_role)},
                )
            grants.setdefault(role, []).extend(_parse_row(role, row) for row in rows)

        table = cls(grants)
        logger.info(
            "permission_table_built",
            roles=len(grants),
            grants=sum(len(rows) for rows in grants.values()),
        )
        return table

    def permissions_for(self, role: Role | str | None) -> tuple[Permission, ...]:
        """Return the grants of a role, or an empty tuple for unknown roles."""
        parsed = parse_role(role)
        if parsed is None:
            return ()
        return self._grants[parsed]

    def roles(self) -> tuple[Role, ...]:
        return tuple(self._grants)

    def __contains__(self, role: object) -> bool:
        return parse_role(role) is not None

    def __iter__(self) -> Iterator[Role]:
        return iter(self._grants)

    def __len__(self) -> int:
        return len(self._grants)

    def __repr__(self) -> str:
        total = sum(len(grants) for grants in self._grants.values())
        return f"<RolePermissionTable(roles={len(self)}, grants={total})>"


def _parse_row(role: Role, row: Mapping[str, Any]) -> Permission:
    entity = parse_entity(row.get("entity"))
    if entity is None:
        raise PermissionTableError(
            "Unknown entity in permission table",
            details={"role": role.value, "entity": str(row.get("entity"))},
        )

    actions: list[Action] = []
    for raw_action in row.get("actions", ()):
        action = parse_action(raw_action)
        if action is None:
            raise PermissionTableError(
                "Unknown action in permission table",
                details={"role": role.value, "action": str(raw_action)},
            )
        actions.append(action)

    raw_scope = row.get("scope")
    scope = Scope.ALL if raw_scope is None else parse_scope(raw_scope)
    if scope is None:
        raise PermissionTableError(
            "Unknown scope in permission table",
            details={"role": role.value, "scope": str(raw_scope)},
        )

    return Permission(entity=entity, actions=frozenset(actions), scope=scope)


@lru_cache
def default_table() -> RolePermissionTable:
    """Get the cached canonical permission table."""
    return RolePermissionTable.from_mapping(DEFAULT_ROLE_PERMISSIONS)
