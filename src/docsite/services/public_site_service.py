"""Public documentation site queries (no authentication)."""

from uuid import UUID

from src.docsite.core.logging import get_logger
from src.docsite.models import EventType, Project, Tenant
from src.docsite.repositories import DocumentRepository, ProjectRepository, TenantRepository
from src.docsite.schemas import DocumentSummary, ProjectSummary, PublicProjectDetails
from src.docsite.services.event_service import EventService
from src.docsite.services.project_query_service import build_summaries

logger = get_logger(__name__)


class PublicSiteService:
    """Read-only access to a tenant's published projects by subdomain slug.

    Only active public projects of active tenants are visible, and only
    their published documents.
    """

    def __init__(
        self,
        tenant_repo: TenantRepository,
        project_repo: ProjectRepository,
        document_repo: DocumentRepository,
        events: EventService,
    ):
        self.tenant_repo = tenant_repo
        self.project_repo = project_repo
        self.document_repo = document_repo
        self.events = events

    async def get_public_projects(self, tenant_slug: str) -> list[ProjectSummary]:
        """List public projects of a tenant, most recently published first."""
        logger.info("Fetching public projects", tenant_slug=tenant_slug)

        tenant = await self.tenant_repo.get_active_by_slug(tenant_slug)
        if tenant is None:
            return []

        projects = await self.project_repo.list_public(tenant.id)
        return await build_summaries(projects, self.document_repo, published_only=True)

    async def get_public_project(
        self, tenant_slug: str, project_slug: str
    ) -> PublicProjectDetails | None:
        """Get a public project with its published documents."""
        found = await self._resolve(tenant_slug, project_slug)
        if found is None:
            return None
        _, project = found

        documents = await self.document_repo.list_for_project(
            project.tenant_id, project.id, published_only=True
        )
        return PublicProjectDetails.model_validate(
            {
                **project.model_dump(),
                "document_count": len(documents),
                "last_activity": max((d.updated_at for d in documents), default=None),
                "documents": [DocumentSummary.model_validate(d) for d in documents],
            }
        )

    async def record_page_view(
        self,
        tenant_slug: str,
        project_slug: str,
        document_id: UUID | None = None,
    ) -> bool:
        """Record an anonymous page view of a public project or one of its documents.

        Returns:
            False if the project (or published document) is not publicly visible
        """
        found = await self._resolve(tenant_slug, project_slug)
        if found is None:
            return False
        tenant, project = found

        if document_id is not None:
            document = await self.document_repo.get_for_project(project.id, document_id)
            if document is None or not document.is_published:
                return False

        await self.events.record(
            EventType.PAGE_VIEW,
            tenant_id=tenant.id,
            project_id=project.id,
            document_id=document_id,
            data={"project_slug": project.slug},
        )
        return True

    async def _resolve(self, tenant_slug: str, project_slug: str) -> tuple[Tenant, Project] | None:
        tenant = await self.tenant_repo.get_active_by_slug(tenant_slug)
        if tenant is None:
            return None

        project = await self.project_repo.get_by_slug(tenant.id, project_slug)
        if project is None or not project.is_public:
            return None
        return tenant, project
