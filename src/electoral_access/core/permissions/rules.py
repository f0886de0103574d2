"""Territorial checks on individual records.

A blanket grant says a role may update participations at department
scope; it does not say *which* participation. The rules below tie the
target record's territorial key to the user's own code for the
(entity, action) pairs where that matters.

A rule applies when the user holds the pair at the rule's scope or wider,
so an administrator's ``all`` grant is checked like any other. Validation
actions carry no territorial rule; the grant alone decides them.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict

from electoral_access.core.constants import (
    REASON_PERMISSION_DENIED,
    REASON_VALIDATION_DENIED,
)
from electoral_access.core.permissions.checker import PermissionEvaluator
from electoral_access.core.permissions.context import UserContext
from electoral_access.core.permissions.scope import (
    DEFAULT_FIELDS,
    EMPTY_HIERARCHY,
    TerritorialFields,
    TerritorialLevel,
    TerritoryHierarchy,
    territorial_key,
    user_code,
)
from electoral_access.core.permissions.types import (
    Action,
    Entity,
    Scope,
    parse_action,
    parse_entity,
)


logger = structlog.get_logger()


class ActionDecision(BaseModel):
    """Outcome of a record-level check.

    Attributes:
        allowed: Whether the action may proceed
        reason: Human-readable explanation when denied
    """

    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.allowed

    @classmethod
    def allow(cls) -> "ActionDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "ActionDecision":
        return cls(allowed=False, reason=reason)


@dataclass(frozen=True)
class TerritorialRule:
    """Requires the target's key at ``level`` to match the user's code.

    Attributes:
        entity: Entity the rule protects
        actions: Actions the rule applies to
        scope: Narrowest grant the rule applies to
        level: Territorial key compared between record and user
        reason: Denial message shown to the user
    """

    entity: Entity
    actions: frozenset[Action]
    scope: Scope
    level: TerritorialLevel
    reason: str

    def matches(self, entity: Entity, action: Action) -> bool:
        return self.entity is entity and action in self.actions


_WRITE = frozenset({Action.UPDATE, Action.DELETE})

MODIFICATION_RULES: tuple[TerritorialRule, ...] = (
    TerritorialRule(
        Entity.DOCUMENT_ARRONDISSEMENT,
        _WRITE,
        Scope.OWN,
        TerritorialLevel.ARRONDISSEMENT,
        "You can only modify your own documents",
    ),
    TerritorialRule(
        Entity.DEPARTMENTAL_PARTICIPATION,
        _WRITE,
        Scope.DEPARTMENT,
        TerritorialLevel.DEPARTMENT,
        "You can only modify participations in your department",
    ),
    TerritorialRule(
        Entity.OFFICE_REDRESS,
        _WRITE,
        Scope.OWN,
        TerritorialLevel.ARRONDISSEMENT,
        "You can only modify redressements in your area",
    ),
    TerritorialRule(
        Entity.CANDIDATE_REDRESS,
        _WRITE,
        Scope.OWN,
        TerritorialLevel.ARRONDISSEMENT,
        "You can only modify redressements in your area",
    ),
)


def check_territorial_action(
    evaluator: PermissionEvaluator,
    rules: Iterable[TerritorialRule],
    user: UserContext,
    entity: Entity | str,
    action: Action | str,
    target: Any,
    denied_reason: str = REASON_PERMISSION_DENIED,
    fields: TerritorialFields | None = None,
    hierarchy: TerritoryHierarchy | None = None,
) -> ActionDecision:
    """Check a grant and the first applicable territorial rule.

    Args:
        evaluator: Evaluator holding the permission table
        rules: Rule table to consult
        user: The requesting user's context
        entity: Entity of the target record
        action: Action about to be performed
        target: The record acted on (mapping or object); may be None
        denied_reason: Reason returned when no grant matches
        fields: Names of the territorial keys on the record
        hierarchy: Ancestry used to resolve missing keys

    Returns:
        The decision; never raises
    """
    if not evaluator.authorize(user.roles, entity, action):
        return ActionDecision.deny(denied_reason)

    # authorize() succeeded, so both parse
    parsed_entity = parse_entity(entity)
    parsed_action = parse_action(action)

    rule = next((r for r in rules if r.matches(parsed_entity, parsed_action)), None)
    if rule is None or not evaluator.authorize(
        user.roles, parsed_entity, parsed_action, rule.scope
    ):
        return ActionDecision.allow()

    expected = user_code(user, rule.level)
    actual = None
    if target is not None:
        actual = territorial_key(
            target,
            rule.level,
            fields or DEFAULT_FIELDS,
            hierarchy or EMPTY_HIERARCHY,
        )

    if expected is None or actual is None or actual != expected:
        logger.debug(
            "territorial_check_failed",
            entity=parsed_entity.value,
            action=parsed_action.value,
            level=rule.level.value,
            expected=expected,
            actual=actual,
        )
        return ActionDecision.deny(rule.reason)

    return ActionDecision.allow()


def validate_modification(
    evaluator: PermissionEvaluator,
    user: UserContext,
    entity: Entity | str,
    action: Action | str,
    target: Any = None,
    fields: TerritorialFields | None = None,
    hierarchy: TerritoryHierarchy | None = None,
) -> ActionDecision:
    """Check a create/update/delete against the modification rules."""
    return check_territorial_action(
        evaluator,
        MODIFICATION_RULES,
        user,
        entity,
        action,
        target,
        REASON_PERMISSION_DENIED,
        fields,
        hierarchy,
    )


def validate_validation(
    evaluator: PermissionEvaluator,
    user: UserContext,
    entity: Entity | str,
    action: Action | str,
    target: Any = None,
) -> ActionDecision:
    """Check a validate/approve/reject.

    No territorial rule narrows review actions, so the grant decides.
    ``target`` is accepted so callers can treat both checks alike.
    """
    return check_territorial_action(
        evaluator, (), user, entity, action, target, REASON_VALIDATION_DENIED
    )
