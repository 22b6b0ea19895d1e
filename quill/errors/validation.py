"""Custom validation error handling for FastAPI."""

from collections.abc import Sequence
from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from quill.errors.base import BaseAppError
from quill.monitoring import get_logger
from quill.utils.helpers import host

logger = get_logger(__name__)


class ValidationError(BaseAppError):
    """Raised when input is malformed or outside the accepted ranges."""

    def __init__(
        self,
        detail: str = "Validation failed",
        errors: list[dict] | None = None,
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)
        self.errors = errors or []


def format_errors(
    errors: Sequence[Any],
    *,
    skip_location: bool = False,
) -> list[dict[str, Any]]:
    """
    Flatten pydantic error dicts into ``{field, message, type, context}`` entries.

    Input values are left out on purpose so rejected passwords never echo back.

    Args:
        errors: Errors as returned by ``exc.errors()``.
        skip_location: Drop the leading ``body``/``query``/``path`` segment.
    """
    formatted = []
    for error in errors:
        loc = list(error.get("loc", []))
        if skip_location:
            loc = loc[1:]
        entry: dict[str, Any] = {
            "field": ".".join(str(part) for part in loc),
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "validation_error"),
        }
        if ctx := error.get("ctx"):
            # ValueError instances in ctx are not JSON serializable
            entry["context"] = {
                key: str(value) if isinstance(value, Exception) else value
                for key, value in ctx.items()
            }
        formatted.append(entry)
    return formatted


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Render request validation failures as ``400`` with a flat error list.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with formatted validation errors.
    """
    exec_error = cast(RequestValidationError, exc)
    formatted_errors = format_errors(exec_error.errors(), skip_location=True)

    logger.warning(
        "Request validation failed",
        ip=host(request),
        endpoint=request.url.path,
        fields=[error["field"] for error in formatted_errors],
    )

    return ORJSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "detail": "Validation failed",
            "errors": formatted_errors,
        },
    )
