"""Scope filtering of territorial records.

Records carry territorial keys (arrondissement, department, region codes)
under caller-chosen names. A record that only carries a narrow key can be
resolved to its department or region through a ``TerritoryHierarchy``.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

import structlog

from electoral_access.core.constants import (
    DEFAULT_ARRONDISSEMENT_FIELD,
    DEFAULT_DEPARTMENT_FIELD,
    DEFAULT_REGION_FIELD,
)
from electoral_access.core.permissions.types import Action, Entity, Scope


if TYPE_CHECKING:
    from electoral_access.core.permissions.checker import PermissionEvaluator
    from electoral_access.core.permissions.context import UserContext


logger = structlog.get_logger()

T = TypeVar("T")


class TerritorialLevel(str, Enum):
    ARRONDISSEMENT = "arrondissement"
    DEPARTMENT = "department"
    REGION = "region"


@dataclass(frozen=True)
class TerritorialFields:
    """Names of the territorial keys on the records being checked."""

    arrondissement: str = DEFAULT_ARRONDISSEMENT_FIELD
    department: str = DEFAULT_DEPARTMENT_FIELD
    region: str = DEFAULT_REGION_FIELD

    def name_for(self, level: TerritorialLevel) -> str:
        return getattr(self, level.value)


@dataclass(frozen=True)
class TerritoryHierarchy:
    """Ancestry of territorial units.

    Attributes:
        department_of: Arrondissement code -> department code
        region_of: Department code -> region code
    """

    department_of: Mapping[int, int] = field(default_factory=dict)
    region_of: Mapping[int, int] = field(default_factory=dict)

    def resolve_department(self, arrondissement_code: int | None) -> int | None:
        if arrondissement_code is None:
            return None
        return self.department_of.get(arrondissement_code)

    def resolve_region(self, department_code: int | None) -> int | None:
        if department_code is None:
            return None
        return self.region_of.get(department_code)


DEFAULT_FIELDS = TerritorialFields()
EMPTY_HIERARCHY = TerritoryHierarchy()


def _read(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def territorial_key(
    record: Any,
    level: TerritorialLevel,
    fields: TerritorialFields = DEFAULT_FIELDS,
    hierarchy: TerritoryHierarchy = EMPTY_HIERARCHY,
) -> Any:
    """Read a record's territorial key at a level.

    The key is read directly when present. Otherwise a department is
    resolved from the record's arrondissement, and a region from its
    (possibly resolved) department.

    Args:
        record: A mapping or an object with attributes
        level: Which territorial key to read
        fields: Names of the keys on the record
        hierarchy: Ancestry used when the key is absent

    Returns:
        The key, or None when it cannot be determined
    """
    value = _read(record, fields.name_for(level))
    if value is not None or level is TerritorialLevel.ARRONDISSEMENT:
        return value

    department = _read(record, fields.department)
    if department is None:
        department = hierarchy.resolve_department(_read(record, fields.arrondissement))
    if level is TerritorialLevel.DEPARTMENT:
        return department
    return hierarchy.resolve_region(department)


def user_code(user: "UserContext", level: TerritorialLevel) -> int | None:
    return getattr(user, f"{level.value}_code")


# Narrowing ladder applied when the user holds no ALL-scope read grant
_SCOPE_TIERS = (
    (Scope.REGION, TerritorialLevel.REGION),
    (Scope.DEPARTMENT, TerritorialLevel.DEPARTMENT),
    (Scope.OWN, TerritorialLevel.ARRONDISSEMENT),
)


def filter_by_scope(
    evaluator: "PermissionEvaluator",
    records: Iterable[T],
    user: "UserContext",
    entity: Entity | str,
    fields: TerritorialFields | None = None,
    hierarchy: TerritoryHierarchy | None = None,
) -> list[T]:
    """Return the records the user's read grant on ``entity`` entitles them to.

    Only the first satisfied tier applies, in the order all, region,
    department, own. A tier is satisfied when a read grant covering its
    scope exists and the user carries the matching territorial code.
    Without any satisfied tier the result is empty.

    Args:
        evaluator: Evaluator holding the permission table
        records: Candidate records; not mutated
        user: The requesting user's context
        entity: Entity the records belong to
        fields: Names of the territorial keys on the records
        hierarchy: Ancestry used to resolve missing keys

    Returns:
        A new list holding the visible records, in input order
    """
    fields = fields or DEFAULT_FIELDS
    hierarchy = hierarchy or EMPTY_HIERARCHY
    records = list(records)

    if evaluator.authorize(user.roles, entity, Action.READ, Scope.ALL):
        return records

    for scope, level in _SCOPE_TIERS:
        code = user_code(user, level)
        if code is None:
            continue
        if evaluator.authorize(user.roles, entity, Action.READ, scope):
            return [
                record
                for record in records
                if territorial_key(record, level, fields, hierarchy) == code
            ]

    logger.debug(
        "scope_filter_denied",
        entity=getattr(entity, "value", entity),
        roles=[role.value for role in user.roles],
    )
    return []
