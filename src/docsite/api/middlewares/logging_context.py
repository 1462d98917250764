"""Request logging context: correlation id, route and public tenant slug."""

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint
from structlog.contextvars import bind_contextvars

from src.docsite.core.logging import bind_request_context, clear_request_context

PUBLIC_PATH_PREFIX = "/api/v1/public/"


def public_tenant_slug(path: str) -> str | None:
    """Tenant slug addressed by a public site path, if any.

    Examples:
        >>> public_tenant_slug("/api/v1/public/acme/projects")
        'acme'
        >>> public_tenant_slug("/api/v1/projects") is None
        True
    """
    if not path.startswith(PUBLIC_PATH_PREFIX):
        return None
    slug = path[len(PUBLIC_PATH_PREFIX) :].split("/", 1)[0]
    return slug or None


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Bind per-request context for all log calls made while handling it.

    Authenticated routes add user_id and tenant_id later, once the bearer
    token is resolved; anonymous public routes only carry the tenant slug.
    """
    clear_request_context()
    bind_request_context(correlation_id.get())
    bind_contextvars(http_method=request.method, path=request.url.path)
    tenant_slug = public_tenant_slug(request.url.path)
    if tenant_slug:
        bind_contextvars(tenant_slug=tenant_slug)
    try:
        return await call_next(request)
    finally:
        clear_request_context()
