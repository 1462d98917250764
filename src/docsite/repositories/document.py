"""Repository for Document entity (tenant-scoped)."""

from datetime import datetime
from uuid import UUID

from sqlmodel import col, func, select

from src.docsite.models import Document
from src.docsite.repositories.base import BaseRepository


class DocumentRepository(BaseRepository[Document]):
    """Repository for documents inside projects."""

    model = Document

    async def count_for_project(
        self,
        tenant_id: UUID,
        project_id: UUID,
        published_only: bool = False,
    ) -> int:
        """Count documents of a single project."""
        query = select(func.count(col(Document.id))).where(
            Document.tenant_id == tenant_id,
            Document.project_id == project_id,
        )
        if published_only:
            query = query.where(Document.is_published == True)  # noqa: E712
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def count_by_project(
        self,
        project_ids: list[UUID],
        published_only: bool = False,
    ) -> dict[UUID, int]:
        """Count documents for many projects in one query.

        Projects without documents are absent from the result.
        """
        if not project_ids:
            return {}
        query = (
            select(Document.project_id, func.count(col(Document.id)))
            .where(col(Document.project_id).in_(project_ids))
            .group_by(col(Document.project_id))
        )
        if published_only:
            query = query.where(Document.is_published == True)  # noqa: E712
        result = await self.session.execute(query)
        return {project_id: int(count) for project_id, count in result.all()}

    async def last_updated_by_project(self, project_ids: list[UUID]) -> dict[UUID, datetime]:
        """Most recent document update per project."""
        if not project_ids:
            return {}
        result = await self.session.execute(
            select(Document.project_id, func.max(Document.updated_at))
            .where(col(Document.project_id).in_(project_ids))
            .group_by(col(Document.project_id))
        )
        return {project_id: updated_at for project_id, updated_at in result.all()}

    async def list_for_project(
        self,
        tenant_id: UUID,
        project_id: UUID,
        published_only: bool = False,
    ) -> list[Document]:
        """List documents of a project in display order."""
        query = select(Document).where(
            Document.tenant_id == tenant_id,
            Document.project_id == project_id,
        )
        if published_only:
            query = query.where(Document.is_published == True)  # noqa: E712
        query = query.order_by(col(Document.position).asc(), col(Document.updated_at).desc())
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_for_project(self, project_id: UUID, document_id: UUID) -> Document | None:
        """Get a document only if it belongs to the given project."""
        result = await self.session.execute(
            select(Document).where(
                Document.id == document_id,
                Document.project_id == project_id,
            )
        )
        return result.scalar_one_or_none()
