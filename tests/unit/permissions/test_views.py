"""Unit tests for role landing views."""

import pytest

from electoral_access.core.permissions.types import Entity, Role
from electoral_access.core.permissions.views import (
    ROLE_ENTITY_TABS,
    ROLE_MESSAGES,
    ROLE_VIEWS,
    entity_tabs,
    landing_view,
    primary_role,
    role_messages,
)


pytestmark = pytest.mark.unit


class TestLandingView:
    """Tests for landing_view."""

    def test_every_role_has_a_view(self):
        assert set(ROLE_VIEWS) == set(Role)
        assert all(v.default_view in v.available_views for v in ROLE_VIEWS.values())

    @pytest.mark.parametrize(
        ("roles", "expected"),
        [
            (["administrateur", "scrutateur"], "dashboard"),
            (["validateur", "superviseur-departementale"], "overview"),
            (["scrutateur", "validateur"], "validation"),
            (["observateur-local", "scrutateur"], "submissions"),
            (["observateur-local"], "consultation"),
        ],
    )
    def test_highest_priority_role_wins(self, roles, expected):
        assert landing_view(roles).default_view == expected

    def test_no_known_role(self):
        assert landing_view([]) is None
        assert landing_view(["superuser"]) is None


class TestPrimaryRole:
    """Tests for primary_role."""

    def test_follows_access_level_ladder(self):
        assert primary_role(["scrutateur", "superviseur-departementale"]) is Role.DEPARTMENT_SUPERVISOR
        assert primary_role(["ghost"]) is None
        assert primary_role(5) is None


class TestEntityTabs:
    """Tests for the per-role dashboard tabs."""

    def test_every_role_has_tabs(self):
        assert set(ROLE_ENTITY_TABS) == set(Role)

    def test_supervisor_sees_commissions_first(self):
        tabs = entity_tabs(["validateur", "superviseur-departementale"])
        assert [tab.entity for tab in tabs] == [
            Entity.DEPARTMENTAL_COMMISSION,
            Entity.DOCUMENT_ARRONDISSEMENT,
            Entity.DEPARTMENTAL_PARTICIPATION,
            Entity.CANDIDATE_REDRESS,
            Entity.DEPARTMENTAL_RESULT,
        ]

    def test_administrator_tabs_skip_documents(self):
        entities = {tab.entity for tab in entity_tabs(["administrateur"])}
        assert Entity.ARRONDISSEMENT in entities
        assert Entity.DOCUMENT_ARRONDISSEMENT not in entities

    def test_no_known_role(self):
        assert entity_tabs([]) == ()


class TestRoleMessages:
    """Tests for role-specific denial wording."""

    def test_every_role_has_messages(self):
        assert set(ROLE_MESSAGES) == set(Role)

    def test_uses_primary_role(self):
        messages = role_messages(["observateur-local", "scrutateur"])
        assert messages.access_denied == "You do not have the permissions needed to modify this resource."
        assert messages.scope_error == "You can only modify your own submissions."

    def test_no_known_role(self):
        assert role_messages(["superuser"]) is None
