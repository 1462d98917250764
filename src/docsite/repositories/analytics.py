"""Repository for AnalyticsEvent entity."""

from datetime import datetime
from uuid import UUID

from sqlmodel import col, func, select

from src.docsite.models import AnalyticsEvent, EventType, User
from src.docsite.repositories.base import BaseRepository


class AnalyticsEventRepository(BaseRepository[AnalyticsEvent]):
    """Repository for analytics events."""

    model = AnalyticsEvent

    async def list_recent_for_project(
        self,
        tenant_id: UUID,
        project_id: UUID,
        since: datetime,
        limit: int = 20,
    ) -> list[tuple[AnalyticsEvent, User | None]]:
        """List a project's events since a point in time, newest first.

        Returns:
            (event, actor) pairs; actor is None for anonymous events
        """
        result = await self.session.execute(
            select(AnalyticsEvent, User)
            .join(User, col(AnalyticsEvent.user_id) == col(User.id), isouter=True)
            .where(
                AnalyticsEvent.tenant_id == tenant_id,
                AnalyticsEvent.project_id == project_id,
                AnalyticsEvent.created_at >= since,
            )
            .order_by(col(AnalyticsEvent.created_at).desc())
            .limit(limit)
        )
        return [(event, user) for event, user in result.all()]

    async def count_for_project(
        self,
        tenant_id: UUID,
        project_id: UUID,
        event_type: EventType,
        since: datetime,
    ) -> int:
        """Count events of one type for a project since a point in time."""
        result = await self.session.execute(
            select(func.count(col(AnalyticsEvent.id))).where(
                AnalyticsEvent.tenant_id == tenant_id,
                AnalyticsEvent.project_id == project_id,
                AnalyticsEvent.type == event_type.value,
                AnalyticsEvent.created_at >= since,
            )
        )
        return int(result.scalar_one())

    async def top_documents_by_views(
        self,
        tenant_id: UUID,
        project_id: UUID,
        since: datetime,
        limit: int = 5,
    ) -> list[tuple[UUID, int]]:
        """Most viewed documents of a project since a point in time.

        Returns:
            (document_id, views) pairs ordered by views descending
        """
        views = func.count(col(AnalyticsEvent.id)).label("views")
        result = await self.session.execute(
            select(AnalyticsEvent.document_id, views)
            .where(
                AnalyticsEvent.tenant_id == tenant_id,
                AnalyticsEvent.project_id == project_id,
                AnalyticsEvent.type == EventType.PAGE_VIEW.value,
                col(AnalyticsEvent.document_id).is_not(None),
                AnalyticsEvent.created_at >= since,
            )
            .group_by(col(AnalyticsEvent.document_id))
            .order_by(views.desc())
            .limit(limit)
        )
        return [(document_id, int(count)) for document_id, count in result.all()]
