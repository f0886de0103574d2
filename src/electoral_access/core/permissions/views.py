"""Landing views, entity tabs and denial messages per role.

Everything a user sees first is chosen from their primary role: the
highest one they hold by the access-level ladder.
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from electoral_access.core.permissions.types import Entity, Role, parse_roles


class RoleView(BaseModel):
    """Dashboard configuration for a role."""

    model_config = ConfigDict(frozen=True)

    default_view: str
    available_views: tuple[str, ...]
    title: str
    description: str = ""


class EntityTab(BaseModel):
    """A tab of the role's dashboard, bound to one entity."""

    model_config = ConfigDict(frozen=True)

    entity: Entity
    label: str


class RoleMessages(BaseModel):
    """Role-specific wording shown alongside a denial.

    Attributes:
        access_denied: Shown when the role holds no grant for the request
        scope_error: Shown when a grant exists but does not reach far enough
    """

    model_config = ConfigDict(frozen=True)

    access_denied: str
    scope_error: str


ROLE_VIEWS: dict[Role, RoleView] = {
    Role.VALIDATOR: RoleView(
        default_view="validation",
        available_views=("validation",),
        title="Validator dashboard",
        description="Validate and approve scrutineer submissions",
    ),
    Role.SCRUTINEER: RoleView(
        default_view="submissions",
        available_views=("submissions",),
        title="Scrutineer dashboard",
        description="Manage your submissions and election data",
    ),
    Role.LOCAL_OBSERVER: RoleView(
        default_view="consultation",
        available_views=("consultation",),
        title="Local observer dashboard",
        description="Consult the election data of your observation area",
    ),
    Role.DEPARTMENT_SUPERVISOR: RoleView(
        default_view="overview",
        available_views=(
            "overview",
            "commissions",
            "documents",
            "participations",
            "redressements",
            "resultats",
        ),
        title="Department supervisor dashboard",
        description="Supervise and manage the election data of your department",
    ),
    Role.ADMINISTRATOR: RoleView(
        default_view="dashboard",
        available_views=(
            "dashboard",
            "arrondissements",
            "commissions",
            "participations",
            "redressements",
            "resultats",
        ),
        title="Administrator dashboard",
        description="Full management of the electoral system",
    ),
}

_DOCUMENTS = EntityTab(entity=Entity.DOCUMENT_ARRONDISSEMENT, label="Documents")
_PARTICIPATIONS = EntityTab(entity=Entity.DEPARTMENTAL_PARTICIPATION, label="Participations")
_REDRESSES = EntityTab(entity=Entity.CANDIDATE_REDRESS, label="Redresses")
_RESULTS = EntityTab(entity=Entity.DEPARTMENTAL_RESULT, label="Results")
_COMMISSIONS = EntityTab(entity=Entity.DEPARTMENTAL_COMMISSION, label="Commissions")
_ARRONDISSEMENTS = EntityTab(entity=Entity.ARRONDISSEMENT, label="Arrondissements")

_FIELD_TABS = (_DOCUMENTS, _PARTICIPATIONS, _REDRESSES, _RESULTS)

ROLE_ENTITY_TABS: dict[Role, tuple[EntityTab, ...]] = {
    Role.VALIDATOR: _FIELD_TABS,
    Role.SCRUTINEER: _FIELD_TABS,
    Role.LOCAL_OBSERVER: _FIELD_TABS,
    Role.DEPARTMENT_SUPERVISOR: (_COMMISSIONS, *_FIELD_TABS),
    Role.ADMINISTRATOR: (
        _ARRONDISSEMENTS,
        _COMMISSIONS,
        _PARTICIPATIONS,
        _REDRESSES,
        _RESULTS,
    ),
}

ROLE_MESSAGES: dict[Role, RoleMessages] = {
    Role.VALIDATOR: RoleMessages(
        access_denied="You do not have the permissions needed to validate this resource.",
        scope_error="You can only validate resources from your department.",
    ),
    Role.SCRUTINEER: RoleMessages(
        access_denied="You do not have the permissions needed to modify this resource.",
        scope_error="You can only modify your own submissions.",
    ),
    Role.LOCAL_OBSERVER: RoleMessages(
        access_denied="You only have read access.",
        scope_error="You can only consult data from your area.",
    ),
    Role.DEPARTMENT_SUPERVISOR: RoleMessages(
        access_denied="You do not have the permissions needed to manage this resource.",
        scope_error="You can only manage resources in your department.",
    ),
    Role.ADMINISTRATOR: RoleMessages(
        access_denied="Unexpected permission error.",
        scope_error="Unexpected scope error.",
    ),
}

# Roles in the order their views take precedence
_VIEW_PRIORITY = (
    Role.ADMINISTRATOR,
    Role.DEPARTMENT_SUPERVISOR,
    Role.VALIDATOR,
    Role.SCRUTINEER,
    Role.LOCAL_OBSERVER,
)


def primary_role(roles: Iterable[Role | str] | None) -> Role | None:
    """Get the highest-priority role held, or None when no known role is held."""
    held = set(parse_roles(roles))
    return next((role for role in _VIEW_PRIORITY if role in held), None)


def landing_view(roles: Iterable[Role | str] | None) -> RoleView | None:
    """Get the view of the highest-priority role held.

    Returns:
        The role's view, or None when no known role is held
    """
    role = primary_role(roles)
    return ROLE_VIEWS[role] if role is not None else None


def entity_tabs(roles: Iterable[Role | str] | None) -> tuple[EntityTab, ...]:
    role = primary_role(roles)
    return ROLE_ENTITY_TABS[role] if role is not None else ()


def role_messages(roles: Iterable[Role | str] | None) -> RoleMessages | None:
    role = primary_role(roles)
    return ROLE_MESSAGES[role] if role is not None else None
