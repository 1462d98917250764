"""Project read queries for dashboards and analytics."""

from datetime import timedelta
from typing import Any
from uuid import UUID

from src.docsite.core.config import get_settings
from src.docsite.core.logging import get_logger
from src.docsite.core.tenant_context import TenantContext
from src.docsite.models import AnalyticsEvent, Document, EventType, Project, User
from src.docsite.models.base import utc_now
from src.docsite.repositories import (
    AnalyticsEventRepository,
    DocumentRepository,
    ProjectRepository,
)
from src.docsite.repositories.project import ProjectSortField, SortOrder
from src.docsite.schemas import (
    ActivityActor,
    DocumentSummary,
    PopularDocument,
    ProjectActivity,
    ProjectDetails,
    ProjectStats,
    ProjectSummary,
)

logger = get_logger(__name__)


def build_summary(
    project: Project,
    document_count: int = 0,
    last_activity: Any = None,
) -> ProjectSummary:
    """Build a listing entry from a project row and its document aggregates."""
    return ProjectSummary.model_validate(
        {
            **project.model_dump(),
            "document_count": document_count,
            "last_activity": last_activity,
        }
    )


async def build_summaries(
    projects: list[Project],
    document_repo: DocumentRepository,
    published_only: bool = False,
) -> list[ProjectSummary]:
    """Build listing entries for many projects with two aggregate queries."""
    project_ids = [project.id for project in projects]
    counts = await document_repo.count_by_project(project_ids, published_only=published_only)
    last_updates = await document_repo.last_updated_by_project(project_ids)
    return [
        build_summary(project, counts.get(project.id, 0), last_updates.get(project.id))
        for project in projects
    ]


def _activity(event: AnalyticsEvent, user: User | None) -> ProjectActivity:
    return ProjectActivity(
        type=event.type,
        created_at=event.created_at,
        data=event.data,
        user=ActivityActor(name=user.full_name, email=user.email) if user else None,
    )


class ProjectQueryService:
    """Tenant-scoped project queries.

    Queries without a selected tenant return empty results rather than
    failing, so dashboards render an empty state.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        document_repo: DocumentRepository,
        event_repo: AnalyticsEventRepository,
    ):
        self.project_repo = project_repo
        self.document_repo = document_repo
        self.event_repo = event_repo

    async def get_projects(
        self,
        ctx: TenantContext,
        include_private: bool = True,
        search: str | None = None,
        sort_by: ProjectSortField = "updated_at",
        sort_order: SortOrder = "desc",
        limit: int = 50,
        offset: int = 0,
    ) -> list[ProjectSummary]:
        """List active projects of the caller's tenant."""
        if ctx.tenant_id is None:
            return []

        logger.info(
            "Fetching projects",
            user_id=str(ctx.user_id),
            tenant_id=str(ctx.tenant_id),
            include_private=include_private,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
        )

        projects = await self.project_repo.list_for_tenant(
            ctx.tenant_id,
            include_private=include_private,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
            limit=limit,
            offset=offset,
        )
        return await build_summaries(projects, self.document_repo)

    async def search_projects(
        self,
        ctx: TenantContext,
        query: str,
        include_private: bool = True,
        limit: int = 20,
    ) -> list[ProjectSummary]:
        """Search projects by name or description."""
        return await self.get_projects(
            ctx,
            include_private=include_private,
            search=query,
            limit=limit,
        )

    async def get_project_details(
        self, ctx: TenantContext, project_id: UUID
    ) -> ProjectDetails | None:
        """Get a project with its documents and recent activity."""
        if ctx.tenant_id is None:
            return None

        project = await self.project_repo.get_for_tenant(ctx.tenant_id, project_id)
        if project is None:
            logger.warning(
                "Project not found or access denied",
                project_id=str(project_id),
                user_id=str(ctx.user_id),
                tenant_id=str(ctx.tenant_id),
            )
            return None

        return await self._details(project)

    async def get_project_by_slug(self, ctx: TenantContext, slug: str) -> ProjectDetails | None:
        """Get a project of the caller's tenant by its slug."""
        if ctx.tenant_id is None:
            return None

        project = await self.project_repo.get_by_slug(ctx.tenant_id, slug)
        if project is None:
            return None
        return await self._details(project)

    async def get_project_stats(self, ctx: TenantContext, project_id: UUID) -> ProjectStats | None:
        """Aggregate document and page view statistics for a project."""
        if ctx.tenant_id is None:
            return None

        project = await self.project_repo.get_for_tenant(ctx.tenant_id, project_id)
        if project is None:
            return None

        settings = get_settings()
        now = utc_now()
        tenant_id = ctx.tenant_id

        total_documents = await self.document_repo.count_for_project(tenant_id, project.id)
        published_documents = await self.document_repo.count_for_project(
            tenant_id, project.id, published_only=True
        )
        recent_views = await self.event_repo.count_for_project(
            tenant_id,
            project.id,
            EventType.PAGE_VIEW,
            since=now - timedelta(days=settings.stats_recent_views_days),
        )
        popular = await self.event_repo.top_documents_by_views(
            tenant_id,
            project.id,
            since=now - timedelta(days=settings.stats_popular_window_days),
            limit=settings.stats_popular_limit,
        )

        return ProjectStats(
            total_documents=total_documents,
            published_documents=published_documents,
            recent_views=recent_views,
            popular_documents=[
                PopularDocument(document_id=document_id, views=views)
                for document_id, views in popular
            ],
            generated_at=now,
        )

    async def _details(self, project: Project) -> ProjectDetails:
        settings = get_settings()
        documents: list[Document] = await self.document_repo.list_for_project(
            project.tenant_id, project.id
        )
        events = await self.event_repo.list_recent_for_project(
            project.tenant_id,
            project.id,
            since=utc_now() - timedelta(days=settings.recent_activity_days),
            limit=settings.recent_activity_limit,
        )

        return ProjectDetails.model_validate(
            {
                **project.model_dump(),
                "document_count": len(documents),
                "last_activity": max((d.updated_at for d in documents), default=None),
                "documents": [DocumentSummary.model_validate(d) for d in documents],
                "recent_activity": [_activity(event, user) for event, user in events],
            }
        )
