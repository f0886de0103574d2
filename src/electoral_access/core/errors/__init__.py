"""Error handling module with RFC 7807 Problem Details."""

from electoral_access.core.errors.exceptions import (
    AppException,
    ForbiddenError,
    PermissionTableError,
)
from electoral_access.core.errors.problems import ProblemDetail, to_problem_detail


__all__ = [
    # Exceptions
    "AppException",
    "ForbiddenError",
    "PermissionTableError",
    # Problem details
    "ProblemDetail",
    "to_problem_detail",
]
