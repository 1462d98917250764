"""HTTP tests for the public site endpoints and operational routes."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.docsite.models import Tenant
from tests.helpers import create_document, create_project

pytestmark = pytest.mark.integration


async def test_public_project_details(
    client: AsyncClient, db_session: AsyncSession, tenant: Tenant
):
    project = await create_project(
        db_session, tenant, name="API Docs", is_public=True, meta_title="API reference"
    )
    await create_document(db_session, project, title="Intro", is_published=True)
    await create_document(db_session, project, title="Draft", is_published=False)

    response = await client.get("/api/v1/public/acme/projects/api-docs")

    assert response.status_code == 200
    body = response.json()
    assert body["meta_title"] == "API reference"
    assert [d["title"] for d in body["documents"]] == ["Intro"]
    assert "recent_activity" not in body


async def test_private_project_is_404(
    client: AsyncClient, db_session: AsyncSession, tenant: Tenant
):
    await create_project(db_session, tenant, name="API Docs")

    response = await client.get("/api/v1/public/acme/projects/api-docs")

    assert response.status_code == 404


async def test_record_page_view(client: AsyncClient, db_session: AsyncSession, tenant: Tenant):
    project = await create_project(db_session, tenant, name="API Docs", is_public=True)
    document = await create_document(db_session, project, is_published=True)

    response = await client.post(
        "/api/v1/public/acme/projects/api-docs/views",
        json={"documentId": str(document.id)},
    )

    assert response.status_code == 202
    assert response.json() == {"recorded": True}


async def test_page_view_without_body(
    client: AsyncClient, db_session: AsyncSession, tenant: Tenant
):
    await create_project(db_session, tenant, name="API Docs", is_public=True)

    response = await client.post("/api/v1/public/acme/projects/api-docs/views")

    assert response.status_code == 202


async def test_page_view_of_hidden_project_is_404(client: AsyncClient, tenant: Tenant):
    response = await client.post("/api/v1/public/acme/projects/missing/views")

    assert response.status_code == 404


async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "healthy"


async def test_metrics_exposed(client: AsyncClient):
    response = await client.get("/metrics")

    assert response.status_code == 200
