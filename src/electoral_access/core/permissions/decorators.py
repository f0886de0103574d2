"""Permission enforcement for request handlers.

The evaluator answers questions; this module turns a negative answer into
a ``ForbiddenError`` the HTTP layer can map to a 403. Handlers receive
the caller's context as a ``user`` keyword argument.
"""

from collections.abc import Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

import structlog

from electoral_access.config import get_settings
from electoral_access.core.constants import REASON_AUTH_REQUIRED
from electoral_access.core.errors import ForbiddenError
from electoral_access.core.permissions.checker import PermissionEvaluator, get_evaluator
from electoral_access.core.permissions.context import UserContext
from electoral_access.core.permissions.rules import ActionDecision
from electoral_access.core.permissions.types import Action, Entity, Role
from electoral_access.core.permissions.views import role_messages


logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")


def log_access_attempt(
    user: UserContext,
    entity: Entity | str,
    action: Action | str,
    success: bool,
    **details: Any,
) -> None:
    """Record an access attempt when access logging is enabled."""
    if not get_settings().log_access_attempts:
        return
    logger.info(
        "access_attempt",
        roles=[role.value for role in user.roles],
        arrondissement_code=user.arrondissement_code,
        department_code=user.department_code,
        region_code=user.region_code,
        entity=getattr(entity, "value", entity),
        action=getattr(action, "value", action),
        success=success,
        **details,
    )


def ensure_allowed(decision: ActionDecision, **details: Any) -> None:
    """Raise if a record-level decision denies the action.

    Raises:
        ForbiddenError: With the decision's reason as message
    """
    if not decision.allowed:
        raise ForbiddenError(
            decision.reason,
            error_code="permission_denied",
            details=details,
        )


def _check_permissions(
    evaluator: PermissionEvaluator,
    user: UserContext,
    permissions: list[tuple[Entity | str, Action | str]],
    require_all: bool,
) -> bool:
    """Common permission checking logic.

    Administrators pass every check, and that access is logged.
    """
    if require_all:
        has_perm = evaluator.has_all_permissions(user.roles, permissions)
    else:
        has_perm = evaluator.has_any_permission(user.roles, permissions)

    if has_perm and user.has_role(Role.ADMINISTRATOR):
        logger.warning(
            "administrator_access",
            permissions=[_perm_str(e, a) for e, a in permissions],
        )
    return has_perm


def _perm_str(entity: Entity | str, action: Action | str) -> str:
    return f"{getattr(entity, 'value', entity)}:{getattr(action, 'value', action)}"


def _get_user(kwargs: dict[str, Any]) -> UserContext | None:
    return cast("UserContext | None", kwargs.get("user"))


def _guard(
    permissions: list[tuple[Entity | str, Action | str]],
    require_all: bool,
    evaluator: PermissionEvaluator | None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            user = _get_user(kwargs)

            if user is None:
                raise ForbiddenError(REASON_AUTH_REQUIRED, error_code="auth_required")

            has_perm = _check_permissions(
                evaluator or get_evaluator(), user, permissions, require_all
            )
            for entity, action in permissions:
                log_access_attempt(user, entity, action, has_perm, handler=func.__name__)

            if not has_perm:
                perm_strs = [_perm_str(e, a) for e, a in permissions]
                qualifier = "permissions" if require_all else "permission. Need one of"
                details: dict[str, Any] = {"required_permissions": perm_strs}
                messages = role_messages(user.roles)
                if messages is not None:
                    details["hint"] = messages.access_denied
                raise ForbiddenError(
                    f"Missing required {qualifier}: {', '.join(perm_strs)}",
                    error_code="permission_denied",
                    details=details,
                )

            return func(*args, **kwargs)

        return wrapper

    return decorator


def require_permission(
    entity: Entity | str,
    action: Action | str,
    evaluator: PermissionEvaluator | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator that requires a specific permission to call a handler.

    Usage:
        @require_permission(Entity.DEPARTMENTAL_COMMISSION, Action.DELETE)
        def delete_commission(commission_id: int, *, user: UserContext):
            ...

    Args:
        entity: The entity being accessed
        action: The action being performed
        evaluator: Evaluator to use; defaults to the canonical one

    Raises:
        ForbiddenError: If the user is missing or lacks the permission
    """
    return _guard([(entity, action)], True, evaluator)


def require_any_permission(
    permissions: list[tuple[Entity | str, Action | str]],
    evaluator: PermissionEvaluator | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator that requires any one of the specified permissions.

    Usage:
        @require_any_permission([
            (Entity.DEPARTMENTAL_PARTICIPATION, Action.VALIDATE),
            (Entity.DEPARTMENTAL_PARTICIPATION, Action.APPROVE),
        ])
        def review_participation(participation_id: int, *, user: UserContext):
            ...
    """
    return _guard(permissions, False, evaluator)
