"""Repository for Project entity (tenant-scoped)."""

from typing import Literal
from uuid import UUID

from sqlmodel import col, or_, select

from src.docsite.models import Project
from src.docsite.repositories.base import BaseRepository

ProjectSortField = Literal["name", "updated_at", "created_at"]
SortOrder = Literal["asc", "desc"]


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity.

    Every lookup except ``get_by_id`` requires a tenant id. Callers must
    never resolve a project from a caller-supplied id alone.
    """

    model = Project

    async def get_for_tenant(
        self,
        tenant_id: UUID,
        project_id: UUID,
        active_only: bool = True,
    ) -> Project | None:
        """Get a project by id within a tenant."""
        query = select(Project).where(
            Project.id == project_id,
            Project.tenant_id == tenant_id,
        )
        if active_only:
            query = query.where(Project.is_active == True)  # noqa: E712
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_slug(self, tenant_id: UUID, slug: str) -> Project | None:
        """Get an active project by slug within a tenant."""
        result = await self.session.execute(
            select(Project).where(
                Project.tenant_id == tenant_id,
                Project.slug == slug,
                Project.is_active == True,  # noqa: E712
            )
        )
        return result.scalar_one_or_none()

    async def slug_exists(
        self,
        tenant_id: UUID,
        slug: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        """Check whether an active project in the tenant already uses the slug.

        Args:
            tenant_id: Tenant to check within
            slug: Candidate slug
            exclude_id: Project to ignore (the one being renamed)
        """
        query = select(Project.id).where(
            Project.tenant_id == tenant_id,
            Project.slug == slug,
            Project.is_active == True,  # noqa: E712
        )
        if exclude_id is not None:
            query = query.where(Project.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.first() is not None

    async def list_for_tenant(
        self,
        tenant_id: UUID,
        include_private: bool = True,
        search: str | None = None,
        sort_by: ProjectSortField = "updated_at",
        sort_order: SortOrder = "desc",
        limit: int = 50,
        offset: int = 0,
    ) -> list[Project]:
        """List active projects of a tenant.

        Args:
            tenant_id: Tenant to list
            include_private: If False, only public projects are returned
            search: Case-insensitive substring matched against name and description
            sort_by: Column to order by
            sort_order: "asc" or "desc"
            limit: Maximum number of results
            offset: Number of results to skip
        """
        query = select(Project).where(
            Project.tenant_id == tenant_id,
            Project.is_active == True,  # noqa: E712
        )

        if not include_private:
            query = query.where(Project.is_public == True)  # noqa: E712

        if search:
            query = query.where(
                or_(
                    col(Project.name).icontains(search, autoescape=True),
                    col(Project.description).icontains(search, autoescape=True),
                )
            )

        sort_column = col(getattr(Project, sort_by))
        order = sort_column.asc() if sort_order == "asc" else sort_column.desc()
        query = query.order_by(order, col(Project.id)).offset(offset).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_public(self, tenant_id: UUID) -> list[Project]:
        """List active public projects of a tenant, most recently published first."""
        result = await self.session.execute(
            select(Project)
            .where(
                Project.tenant_id == tenant_id,
                Project.is_public == True,  # noqa: E712
                Project.is_active == True,  # noqa: E712
            )
            .order_by(col(Project.published_at).desc())
        )
        return list(result.scalars().all())
