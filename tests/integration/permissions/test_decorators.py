"""Integration tests for permission enforcement.

These tests verify the decorator behavior on handlers including:
- require_permission
- require_any_permission
- ensure_allowed with record-level decisions
"""

import pytest

from electoral_access.core.errors import ForbiddenError, to_problem_detail
from electoral_access.core.permissions import (
    Action,
    Entity,
    UserContext,
    ensure_allowed,
    get_evaluator,
    require_any_permission,
    require_permission,
    validate_modification,
)


pytestmark = pytest.mark.integration


@require_permission(Entity.DEPARTMENTAL_COMMISSION, Action.DELETE)
def delete_commission(commission_id: int, *, user: UserContext) -> dict:
    """Handler requiring a single permission."""
    return {"status": "ok", "deleted": commission_id}


@require_any_permission(
    [
        (Entity.DEPARTMENTAL_PARTICIPATION, Action.APPROVE),
        (Entity.DEPARTMENTAL_PARTICIPATION, Action.VALIDATE),
    ]
)
def review_participation(participation_id: int, *, user: UserContext) -> dict:
    """Handler requiring any of the permissions."""
    return {"status": "ok", "reviewed": participation_id}


def update_document(document: dict, *, user: UserContext) -> dict:
    """Handler performing a record-level check before writing."""
    decision = validate_modification(
        get_evaluator(), user, Entity.DOCUMENT_ARRONDISSEMENT, Action.UPDATE, document
    )
    ensure_allowed(decision, document_id=document["id"])
    return {"status": "ok", "updated": document["id"]}


class TestRequirePermission:
    """Tests for require_permission."""

    def test_allows_granted_user(self, supervisor):
        assert delete_commission(3, user=supervisor) == {"status": "ok", "deleted": 3}

    def test_denies_missing_grant(self, validator):
        with pytest.raises(ForbiddenError) as exc_info:
            delete_commission(3, user=validator)

        assert exc_info.value.status_code == 403
        assert exc_info.value.error_code == "permission_denied"
        assert exc_info.value.details == {
            "required_permissions": ["commission_departementale:delete"],
            "hint": "You do not have the permissions needed to validate this resource.",
        }

    def test_administrator_passes(self, administrator):
        assert delete_commission(4, user=administrator)["deleted"] == 4

    def test_user_without_known_role_gets_no_hint(self):
        with pytest.raises(ForbiddenError) as exc_info:
            delete_commission(3, user=UserContext(roles=["superuser"]))

        assert "hint" not in exc_info.value.details

    def test_requires_user(self):
        with pytest.raises(ForbiddenError) as exc_info:
            delete_commission(3)  # type: ignore[call-arg]

        assert exc_info.value.error_code == "auth_required"

    def test_preserves_handler_metadata(self):
        assert delete_commission.__name__ == "delete_commission"
        assert "single permission" in delete_commission.__doc__


class TestRequireAnyPermission:
    """Tests for require_any_permission."""

    def test_one_matching_permission_is_enough(self, supervisor, validator):
        # supervisors may validate but not approve; validators may do both
        assert review_participation(8, user=supervisor)["reviewed"] == 8
        assert review_participation(8, user=validator)["reviewed"] == 8

    def test_denies_when_none_match(self, scrutineer):
        with pytest.raises(ForbiddenError, match="Need one of"):
            review_participation(8, user=scrutineer)


class TestEnsureAllowed:
    """Tests for record-level enforcement."""

    def test_passes_through_when_allowed(self, scrutineer):
        assert update_document({"id": 1, "arrondissement_code": 101}, user=scrutineer)["updated"] == 1

    def test_raises_with_decision_reason(self, scrutineer):
        with pytest.raises(ForbiddenError) as exc_info:
            update_document({"id": 2, "arrondissement_code": 102}, user=scrutineer)

        exc = exc_info.value
        assert exc.message == "You can only modify your own documents"
        assert exc.details == {"document_id": 2}

    def test_renders_problem_detail(self, scrutineer):
        with pytest.raises(ForbiddenError) as exc_info:
            update_document({"id": 2, "arrondissement_code": 102}, user=scrutineer)

        problem = to_problem_detail(exc_info.value, instance="/documents/2")
        assert problem["status"] == 403
        assert problem["code"] == "permission_denied"
        assert problem["detail"] == "You can only modify your own documents"
        assert problem["instance"] == "/documents/2"
        assert problem["document_id"] == 2
