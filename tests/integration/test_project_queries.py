"""Tests for project read queries and the public site service."""

from datetime import timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.docsite.core.tenant_context import TenantContext
from src.docsite.models import AnalyticsEvent, EventType, Tenant, User
from src.docsite.services import ProjectQueryService, ProjectService
from tests.factories import TenantFactory, utc_now
from tests.helpers import (
    build_public_site_service,
    create_document,
    create_page_view,
    create_project,
    make_context,
)

pytestmark = pytest.mark.integration


class TestGetProjects:
    async def test_lists_only_active_projects_of_tenant(
        self,
        query_service: ProjectQueryService,
        ctx: TenantContext,
        db_session: AsyncSession,
        tenant: Tenant,
        other_tenant: Tenant,
    ):
        await create_project(db_session, tenant, name="Mine")
        await create_project(db_session, tenant, name="Gone", is_active=False)
        await create_project(db_session, other_tenant, name="Theirs")

        projects = await query_service.get_projects(ctx)

        assert [p.name for p in projects] == ["Mine"]

    async def test_no_tenant_returns_empty_list(
        self, query_service: ProjectQueryService, owner: User, db_session, tenant: Tenant
    ):
        await create_project(db_session, tenant, name="Mine")

        assert await query_service.get_projects(make_context(owner)) == []

    async def test_exclude_private(
        self,
        query_service: ProjectQueryService,
        ctx: TenantContext,
        db_session: AsyncSession,
        tenant: Tenant,
    ):
        await create_project(db_session, tenant, name="Draft")
        await create_project(db_session, tenant, name="Live", is_public=True)

        projects = await query_service.get_projects(ctx, include_private=False)

        assert [p.name for p in projects] == ["Live"]

    async def test_sort_by_name(
        self,
        query_service: ProjectQueryService,
        ctx: TenantContext,
        db_session: AsyncSession,
        tenant: Tenant,
    ):
        for name in ("Charlie", "Alpha", "Bravo"):
            await create_project(db_session, tenant, name=name)

        projects = await query_service.get_projects(ctx, sort_by="name", sort_order="asc")

        assert [p.name for p in projects] == ["Alpha", "Bravo", "Charlie"]

    async def test_summary_includes_document_aggregates(
        self,
        query_service: ProjectQueryService,
        ctx: TenantContext,
        db_session: AsyncSession,
        tenant: Tenant,
    ):
        project = await create_project(db_session, tenant, name="Docs")
        latest = utc_now()
        await create_document(db_session, project, updated_at=latest - timedelta(days=2))
        await create_document(db_session, project, updated_at=latest)

        [summary] = await query_service.get_projects(ctx)

        assert summary.document_count == 2
        assert summary.last_activity == latest

    async def test_search_matches_name_and_description(
        self,
        query_service: ProjectQueryService,
        ctx: TenantContext,
        db_session: AsyncSession,
        tenant: Tenant,
    ):
        await create_project(db_session, tenant, name="Payments API")
        await create_project(db_session, tenant, name="Guides", description="All about payments")
        await create_project(db_session, tenant, name="Onboarding")

        results = await query_service.search_projects(ctx, "PAYMENTS")

        assert sorted(p.name for p in results) == ["Guides", "Payments API"]

    async def test_search_treats_wildcards_literally(
        self,
        query_service: ProjectQueryService,
        ctx: TenantContext,
        db_session: AsyncSession,
        tenant: Tenant,
    ):
        await create_project(db_session, tenant, name="Docs")

        assert await query_service.search_projects(ctx, "%") == []


class TestGetProjectDetails:
    async def test_details_include_documents_and_activity(
        self,
        query_service: ProjectQueryService,
        project_service: ProjectService,
        ctx: TenantContext,
        db_session: AsyncSession,
        tenant: Tenant,
    ):
        created = await project_service.create_project(ctx, {"name": "Docs"})
        project_id = created.project_id
        project = await query_service.project_repo.get_for_tenant(tenant.id, project_id)
        await create_document(db_session, project, title="Intro", position=0)
        await create_document(db_session, project, title="Setup", position=1)

        details = await query_service.get_project_details(ctx, project_id)

        assert details is not None
        assert details.slug == "docs"
        assert [d.title for d in details.documents] == ["Intro", "Setup"]
        assert details.settings["enable_search"] is True
        [activity] = details.recent_activity
        assert activity.type == EventType.PROJECT_CREATED.value
        assert activity.user is not None
        assert activity.user.name == "Olivia Owner"

    async def test_activity_is_limited_to_recent_window(
        self,
        query_service: ProjectQueryService,
        ctx: TenantContext,
        db_session: AsyncSession,
        tenant: Tenant,
    ):
        project = await create_project(db_session, tenant, name="Docs")
        await create_page_view(db_session, project, created_at=utc_now() - timedelta(days=45))
        await create_page_view(db_session, project)

        details = await query_service.get_project_details(ctx, project.id)

        assert len(details.recent_activity) == 1
        assert details.recent_activity[0].user is None

    async def test_activity_ignores_events_of_other_tenants(
        self,
        query_service: ProjectQueryService,
        ctx: TenantContext,
        db_session: AsyncSession,
        tenant: Tenant,
        other_tenant: Tenant,
    ):
        project = await create_project(db_session, tenant, name="Docs")
        db_session.add(
            AnalyticsEvent(
                tenant_id=other_tenant.id,
                project_id=project.id,
                type=EventType.PAGE_VIEW.value,
                created_at=utc_now(),
            )
        )
        await db_session.commit()

        details = await query_service.get_project_details(ctx, project.id)

        assert details.recent_activity == []

    async def test_other_tenant_project_is_none(
        self,
        query_service: ProjectQueryService,
        ctx: TenantContext,
        db_session: AsyncSession,
        other_tenant: Tenant,
    ):
        foreign = await create_project(db_session, other_tenant, name="Secret")

        assert await query_service.get_project_details(ctx, foreign.id) is None

    async def test_by_slug(
        self,
        query_service: ProjectQueryService,
        ctx: TenantContext,
        db_session: AsyncSession,
        tenant: Tenant,
    ):
        await create_project(db_session, tenant, name="API Docs")

        details = await query_service.get_project_by_slug(ctx, "api-docs")
        missing = await query_service.get_project_by_slug(ctx, "nope")

        assert details is not None and details.name == "API Docs"
        assert missing is None


class TestGetProjectStats:
    async def test_stats(
        self,
        query_service: ProjectQueryService,
        ctx: TenantContext,
        db_session: AsyncSession,
        tenant: Tenant,
    ):
        project = await create_project(db_session, tenant, name="Docs")
        popular = await create_document(db_session, project, is_published=True)
        other = await create_document(db_session, project, is_published=True)
        await create_document(db_session, project, is_published=False)
        for _ in range(3):
            await create_page_view(db_session, project, popular)
        await create_page_view(db_session, project, other)
        now = utc_now()
        await create_page_view(db_session, project, other, created_at=now - timedelta(days=10))
        await create_page_view(db_session, project, popular, created_at=now - timedelta(days=60))

        stats = await query_service.get_project_stats(ctx, project.id)

        assert stats is not None
        assert stats.total_documents == 3
        assert stats.published_documents == 2
        assert stats.recent_views == 4
        assert [(d.document_id, d.views) for d in stats.popular_documents] == [
            (popular.id, 3),
            (other.id, 2),
        ]

    async def test_unknown_project_is_none(
        self, query_service: ProjectQueryService, ctx: TenantContext, other_tenant: Tenant,
        db_session: AsyncSession,
    ):
        foreign = await create_project(db_session, other_tenant, name="Secret")

        assert await query_service.get_project_stats(ctx, foreign.id) is None


class TestPublicSite:
    async def test_lists_public_projects_newest_first(
        self, db_session: AsyncSession, tenant: Tenant
    ):
        now = utc_now()
        older = await create_project(
            db_session, tenant, name="Older", is_public=True, published_at=now - timedelta(days=3)
        )
        newer = await create_project(
            db_session, tenant, name="Newer", is_public=True, published_at=now
        )
        await create_project(db_session, tenant, name="Draft")
        await create_project(
            db_session, tenant, name="Deleted", is_public=True, published_at=now, is_active=False
        )
        await create_document(db_session, newer, is_published=True)
        await create_document(db_session, newer, is_published=False)

        projects = await build_public_site_service(db_session).get_public_projects("acme")

        assert [p.id for p in projects] == [newer.id, older.id]
        assert projects[0].document_count == 1

    async def test_inactive_or_unknown_tenant_has_no_public_projects(
        self, db_session: AsyncSession
    ):
        closed = TenantFactory.inactive(slug="closed")
        db_session.add(closed)
        await db_session.commit()
        await create_project(db_session, closed, name="Docs", is_public=True)

        service = build_public_site_service(db_session)

        assert await service.get_public_projects("closed") == []
        assert await service.get_public_projects("nobody") == []

    async def test_public_project_shows_published_documents_only(
        self, db_session: AsyncSession, tenant: Tenant
    ):
        project = await create_project(db_session, tenant, name="API Docs", is_public=True)
        await create_document(db_session, project, title="Live", is_published=True)
        await create_document(db_session, project, title="Draft", is_published=False)

        details = await build_public_site_service(db_session).get_public_project(
            "acme", "api-docs"
        )

        assert details is not None
        assert [d.title for d in details.documents] == ["Live"]

    async def test_private_project_is_hidden(self, db_session: AsyncSession, tenant: Tenant):
        await create_project(db_session, tenant, name="API Docs")

        service = build_public_site_service(db_session)

        assert await service.get_public_project("acme", "api-docs") is None

    async def test_record_page_view(self, db_session: AsyncSession, tenant: Tenant):
        project = await create_project(db_session, tenant, name="API Docs", is_public=True)
        document = await create_document(db_session, project, is_published=True)
        service = build_public_site_service(db_session)

        recorded = await service.record_page_view("acme", "api-docs", document.id)

        assert recorded is True
        result = await db_session.execute(select(AnalyticsEvent))
        [event] = result.scalars().all()
        assert event.type == EventType.PAGE_VIEW.value
        assert event.document_id == document.id
        assert event.user_id is None

    async def test_page_view_of_unpublished_document_is_rejected(
        self, db_session: AsyncSession, tenant: Tenant
    ):
        project = await create_project(db_session, tenant, name="API Docs", is_public=True)
        draft = await create_document(db_session, project, is_published=False)
        service = build_public_site_service(db_session)

        assert await service.record_page_view("acme", "api-docs", draft.id) is False
        assert await service.record_page_view("acme", "missing") is False
