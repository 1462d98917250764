"""Tests for the request logging context middleware."""

from unittest.mock import MagicMock

import pytest
from fastapi import Request, Response
from structlog.contextvars import get_contextvars

from src.docsite.api.middlewares.logging_context import (
    logging_context_middleware,
    public_tenant_slug,
)

pytestmark = pytest.mark.unit


def _request(path: str, method: str = "GET") -> MagicMock:
    request = MagicMock(spec=Request)
    request.method = method
    request.url.path = path
    return request


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/api/v1/public/acme/projects", "acme"),
        ("/api/v1/public/acme/projects/docs/views", "acme"),
        ("/api/v1/public/", None),
        ("/api/v1/projects", None),
        ("/health", None),
    ],
)
def test_public_tenant_slug(path: str, expected: str | None):
    assert public_tenant_slug(path) == expected


async def test_binds_route_and_tenant_slug_during_request():
    seen: dict = {}

    async def call_next(request):
        seen.update(get_contextvars())
        return Response(status_code=202)

    response = await logging_context_middleware(
        _request("/api/v1/public/acme/projects/docs/views", "POST"), call_next
    )

    assert response.status_code == 202
    assert seen["http_method"] == "POST"
    assert seen["path"] == "/api/v1/public/acme/projects/docs/views"
    assert seen["tenant_slug"] == "acme"


async def test_tenant_routes_carry_no_slug():
    seen: dict = {}

    async def call_next(request):
        seen.update(get_contextvars())
        return Response()

    await logging_context_middleware(_request("/api/v1/projects"), call_next)

    assert "tenant_slug" not in seen


async def test_context_is_cleared_after_failure():
    async def call_next(request):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await logging_context_middleware(_request("/api/v1/public/acme/projects"), call_next)

    assert get_contextvars() == {}
