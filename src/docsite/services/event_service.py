"""Analytics event recording - appends project and page view events."""

import contextlib
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.docsite.core.logging import get_logger
from src.docsite.models import AnalyticsEvent, EventType
from src.docsite.repositories import AnalyticsEventRepository

logger = get_logger(__name__)


class EventService:
    """Service for recording analytics events.

    Fire-and-forget design: recording failures are logged and swallowed so
    they never undo or fail the business operation that triggered them.
    Callers must commit their own work before recording.
    """

    def __init__(self, event_repo: AnalyticsEventRepository, session: AsyncSession):
        self.event_repo = event_repo
        self.session = session

    async def record(
        self,
        event_type: EventType,
        tenant_id: UUID,
        project_id: UUID | None = None,
        user_id: UUID | None = None,
        document_id: UUID | None = None,
        data: dict[str, Any] | None = None,
    ) -> AnalyticsEvent | None:
        """Record an analytics event.

        Args:
            event_type: The kind of event
            tenant_id: Tenant the event belongs to
            project_id: Project the event is about, if any
            user_id: Acting user; None for anonymous visitors
            document_id: Viewed document for page views
            data: Small JSON payload (ids, names, field names - never field values)

        Returns:
            The created event, or None if recording failed
        """
        try:
            event = AnalyticsEvent(
                tenant_id=tenant_id,
                project_id=project_id,
                user_id=user_id,
                document_id=document_id,
                type=event_type.value,
                data=data,
            )
            self.event_repo.add(event)
            await self.session.commit()

            logger.debug(
                "Analytics event recorded",
                event_type=event.type,
                project_id=str(project_id) if project_id else None,
            )
            return event

        except Exception as e:
            logger.warning(
                "Failed to record analytics event",
                event_type=event_type.value,
                project_id=str(project_id) if project_id else None,
                error=str(e),
            )
            with contextlib.suppress(Exception):
                await self.session.rollback()
            return None
