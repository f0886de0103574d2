"""Per-request user context.

A ``UserContext`` is built from session data on every request and carries
the user's roles and territorial assignment. It is never persisted.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from electoral_access.core.permissions.types import Role, parse_roles


_CODE_KEYS = {
    "arrondissement_code": ("arrondissement_code", "arrondissementCode", "code_arrondissement"),
    "department_code": ("department_code", "departementCode", "departmentCode", "code_departement"),
    "region_code": ("region_code", "regionCode", "code_region"),
}


class UserContext(BaseModel):
    """The caller's roles and territorial codes.

    Attributes:
        roles: Parsed roles; unknown role names are dropped
        arrondissement_code: Code of the user's arrondissement, if assigned
        department_code: Code of the user's department, if assigned
        region_code: Code of the user's region, if assigned
    """

    model_config = ConfigDict(frozen=True)

    roles: tuple[Role, ...] = ()
    arrondissement_code: int | None = None
    department_code: int | None = None
    region_code: int | None = None

    @field_validator("roles", mode="before")
    @classmethod
    def parse_role_names(cls, v: Any) -> tuple[Role, ...]:
        return parse_roles(v)

    @field_validator("arrondissement_code", "department_code", "region_code", mode="before")
    @classmethod
    def coerce_code(cls, v: Any) -> int | None:
        """Treat malformed codes as absent rather than failing."""
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, int):
            return v
        try:
            return int(str(v).strip())
        except ValueError:
            return None

    @classmethod
    def from_session(cls, payload: Mapping[str, Any] | None) -> "UserContext":
        """Build a context from an authenticated session payload.

        Accepts ``roles`` as a list of names or of ``{"libelle": name}``
        objects, or a legacy single ``role``. Territorial codes may use
        camelCase or snake_case keys.

        Args:
            payload: Session or token data; ``None`` yields an empty context

        Returns:
            The user context
        """
        if not payload or not isinstance(payload, Mapping):
            return cls()

        raw_roles = payload.get("roles")
        if raw_roles is None and payload.get("role") is not None:
            raw_roles = [payload["role"]]
        if isinstance(raw_roles, (str, Mapping)):
            raw_roles = [raw_roles]
        elif not isinstance(raw_roles, (list, tuple)):
            raw_roles = []

        data: dict[str, Any] = {"roles": [_role_name(r) for r in raw_roles]}
        for field, keys in _CODE_KEYS.items():
            data[field] = next((payload[k] for k in keys if payload.get(k) is not None), None)

        return cls.model_validate(data)

    def has_role(self, role: Role) -> bool:
        return role in self.roles


def _role_name(raw: Any) -> Any:
    if isinstance(raw, Mapping):
        return raw.get("libelle") or raw.get("name")
    return raw
