from collections.abc import Awaitable, Callable

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from structlog.stdlib import BoundLogger

from quill.utils.helpers import host

# Attributes that shape the response itself rather than its body
_RESERVED_ATTRS = frozenset({"status_code", "detail", "headers"})


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code
        self.headers = headers

    def __str__(self) -> str:
        return self.detail


def create_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Every ``BaseAppError`` is rendered as ``{"detail": ..., **extra}`` where
    ``extra`` holds any additional public attributes of the exception.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
        detail = getattr(exc, "detail", "Internal Server Error")
        headers = getattr(exc, "headers", None)

        log = logger.error if status_code >= HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
        log(
            detail,
            status_code=status_code,
            ip=host(request),
            endpoint=request.url.path,
            error=type(exc).__name__,
        )

        content = {"detail": detail}
        content.update(
            {k: v for k, v in exc.__dict__.items() if k not in _RESERVED_ATTRS},
        )

        return ORJSONResponse(content=content, status_code=status_code, headers=headers)

    return handler
