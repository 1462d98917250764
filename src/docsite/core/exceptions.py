"""Domain errors and exception handlers with request_id in responses."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.docsite.core.logging import get_logger

logger = get_logger(__name__)


class ProjectError(Exception):
    """Base class for project mutation failures.

    Each subclass carries a stable machine-readable ``code`` and a
    user-facing ``message``. Raised inside the service layer and turned
    into a ``ProjectActionResult`` at the service boundary.
    """

    code: str = "internal_failure"
    default_message: str = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(ProjectError):
    code = "validation_error"
    default_message = "Invalid project data."


class NoTenantSelected(ProjectError):
    code = "no_tenant_selected"
    default_message = "Please select an organization before managing projects."


class PermissionDenied(ProjectError):
    code = "permission_denied"
    default_message = "You do not have permission to perform this action."


class ProjectNotFound(ProjectError):
    """Project is missing, inactive, or owned by another tenant.

    The three cases are deliberately indistinguishable to callers.
    """

    code = "not_found"
    default_message = "Project not found or you do not have access to it."


class SlugConflict(ProjectError):
    code = "slug_conflict"
    default_message = "A project with this name already exists. Please choose a different name."


class InternalFailure(ProjectError):
    code = "internal_failure"


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
