"""Permission vocabulary.

This module defines the closed sets the permission model is built from:
- Role: who the user is in the electoral organisation
- Entity: the kind of record being protected
- Action: what the user wants to do with it
- Scope: how wide a grant reaches (own < department < region < all)

Values are the identifiers used by the session layer. The ``parse_*``
helpers are the only place external strings are turned into members, and
they fail closed by returning ``None`` instead of raising.
"""

from collections.abc import Iterable
from enum import Enum
from typing import TypeVar

import structlog
from pydantic import BaseModel, ConfigDict, field_validator


logger = structlog.get_logger()


class Role(str, Enum):
    """Roles known to the electoral application."""

    VALIDATOR = "validateur"
    SCRUTINEER = "scrutateur"
    LOCAL_OBSERVER = "observateur-local"
    DEPARTMENT_SUPERVISOR = "superviseur-departementale"
    ADMINISTRATOR = "administrateur"


class Entity(str, Enum):
    """Protected resource kinds."""

    ARRONDISSEMENT = "arrondissement"
    DOCUMENT_ARRONDISSEMENT = "document_arrondissement"
    DEPARTMENTAL_COMMISSION = "commission_departementale"
    COMMISSION_MEMBER = "membre_commission"
    DEPARTMENTAL_PARTICIPATION = "participation_departementale"
    OFFICE_REDRESS = "redressement_bureau"
    CANDIDATE_REDRESS = "redressement_candidat"
    DEPARTMENTAL_RESULT = "resultat_departement"


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    VALIDATE = "validate"
    APPROVE = "approve"
    REJECT = "reject"


class Scope(str, Enum):
    """Breadth of a grant.

    Scopes are totally ordered: a grant at one scope covers every
    narrower scope, and ``ALL`` covers everything.
    """

    OWN = "own"
    DEPARTMENT = "department"
    REGION = "region"
    ALL = "all"

    @property
    def rank(self) -> int:
        return _SCOPE_RANKS[self]

    def covers(self, desired: "Scope") -> bool:
        """Return True if a grant at this scope satisfies ``desired``."""
        return self.rank >= desired.rank


_SCOPE_RANKS = {
    Scope.OWN: 0,
    Scope.DEPARTMENT: 1,
    Scope.REGION: 2,
    Scope.ALL: 3,
}


class AccessLevel(str, Enum):
    """Coarse classification used to route a user to a top-level view."""

    READ = "read"
    MODIFY = "modify"
    VALIDATE = "validate"
    ADMIN = "admin"


class Permission(BaseModel):
    """A grant of some actions on one entity, at a given scope.

    Attributes:
        entity: The protected entity
        actions: Actions the grant allows
        scope: Breadth of the grant; unspecified means unrestricted
    """

    model_config = ConfigDict(frozen=True)

    entity: Entity
    actions: frozenset[Action]
    scope: Scope = Scope.ALL

    @field_validator("actions", mode="before")
    @classmethod
    def coerce_actions(cls, v: Iterable[Action | str]) -> frozenset[Action | str]:
        return frozenset(v)

    def allows(
        self,
        entity: Entity,
        action: Action,
        desired_scope: Scope | None = None,
    ) -> bool:
        """Check whether this grant matches an (entity, action, scope) request."""
        if self.entity is not entity:
            return False
        if action not in self.actions:
            return False
        return desired_scope is None or self.scope.covers(desired_scope)

    @property
    def names(self) -> set[str]:
        """Flat ``entity:action@scope`` strings for this grant."""
        return {
            f"{self.entity.value}:{action.value}@{self.scope.value}"
            for action in self.actions
        }


E = TypeVar("E", bound=Enum)


def _normalize(value: str) -> str:
    return value.strip().lower().replace("-", "_")


def _lookup(enum_cls: type[E], value: object) -> E | None:
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None

    key = _normalize(value)
    for member in enum_cls:
        if key in (_normalize(member.value), member.name.lower()):
            return member
    return None


def parse_role(value: object) -> Role | None:
    """Convert a role name from the session layer into a Role.

    Both the stored value (``"scrutateur"``) and the English member name
    (``"scrutineer"``) are accepted, case-insensitively.
    """
    return _lookup(Role, value)


def parse_entity(value: object) -> Entity | None:
    return _lookup(Entity, value)


def parse_action(value: object) -> Action | None:
    return _lookup(Action, value)


def parse_scope(value: object) -> Scope | None:
    return _lookup(Scope, value)


def parse_roles(values: Iterable[object] | None) -> tuple[Role, ...]:
    """Parse a collection of role names, dropping unknown ones and duplicates."""
    if isinstance(values, str):
        values = [values]
    elif not isinstance(values, Iterable):
        return ()

    roles: list[Role] = []
    for value in values:
        role = parse_role(value)
        if role is None:
            logger.debug("unknown_role_dropped", role=value)
        elif role not in roles:
            roles.append(role)
    return tuple(roles)
