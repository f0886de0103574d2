"""RFC 7807 Problem Details rendering.

The HTTP layer that consumes this package turns a denied decision into a
403 response. This module gives it a standard body to send.

See: https://tools.ietf.org/html/rfc7807
"""

from typing import Any

from pydantic import BaseModel

from electoral_access.config import get_settings
from electoral_access.core.errors.exceptions import AppException


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details response schema.

    Attributes:
        type: URI reference identifying the problem type
        title: Short human-readable summary
        status: HTTP status code
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying this specific occurrence
        code: Machine-readable error code
    """

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None
    code: str

    model_config = {"extra": "allow"}


def _get_error_type_uri(error_code: str) -> str:
    return f"{get_settings().problem_base_url}/errors/{error_code}"


def to_problem_detail(exc: AppException, instance: str | None = None) -> dict[str, Any]:
    """Render an application exception as a Problem Details body.

    Args:
        exc: The exception to render
        instance: Optional URI of the request that failed

    Returns:
        JSON-ready dict with the exception details merged in
    """
    content: dict[str, Any] = ProblemDetail(
        type=_get_error_type_uri(exc.error_code),
        title=exc.error_code.replace("_", " ").title(),
        status=exc.status_code,
        detail=exc.message,
        instance=instance,
        code=exc.error_code,
    ).model_dump(exclude_none=True)

    if exc.details:
        content.update(exc.details)

    return content
