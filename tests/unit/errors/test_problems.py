"""Tests for exception types and Problem Details rendering."""

import pytest

from electoral_access.core.errors import (
    AppException,
    ForbiddenError,
    PermissionTableError,
    to_problem_detail,
)


pytestmark = pytest.mark.unit


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_defaults(self):
        exc = ForbiddenError()
        assert exc.message == "Access forbidden"
        assert exc.error_code == "forbidden"
        assert exc.status_code == 403
        assert exc.details == {}
        assert str(exc) == "Access forbidden"

    def test_overrides(self):
        exc = PermissionTableError("bad row", details={"role": "x"})
        assert isinstance(exc, AppException)
        assert exc.message == "bad row"
        assert exc.error_code == "invalid_permission_table"
        assert exc.details == {"role": "x"}


class TestToProblemDetail:
    """Tests for to_problem_detail."""

    def test_renders_fields(self):
        problem = to_problem_detail(ForbiddenError("Nope", error_code="permission_denied"))
        assert problem == {
            "type": "https://elections.example.com/errors/permission_denied",
            "title": "Permission Denied",
            "status": 403,
            "detail": "Nope",
            "code": "permission_denied",
        }

    def test_uses_configured_base_url(self, monkeypatch):
        monkeypatch.setenv("ELECTORAL_ACCESS_PROBLEM_BASE_URL", "https://api.test")
        problem = to_problem_detail(ForbiddenError())
        assert problem["type"] == "https://api.test/errors/forbidden"
