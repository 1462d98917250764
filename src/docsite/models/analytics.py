"""Analytics event model."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column, Index
from sqlmodel import Field, SQLModel

from src.docsite.models.base import JSONType, utc_now


class AnalyticsEvent(SQLModel, table=True):
    """Append-only record of project lifecycle changes and page views."""

    __tablename__ = "analytics_events"
    __table_args__ = (
        Index("ix_analytics_events_project_created", "project_id", "created_at"),
        Index("ix_analytics_events_tenant_type_created", "tenant_id", "type", "created_at"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True)
    project_id: UUID | None = Field(default=None, foreign_key="projects.id")
    document_id: UUID | None = Field(default=None, foreign_key="documents.id")
    user_id: UUID | None = Field(default=None, foreign_key="users.id")

    type: str = Field(max_length=50)  # EventType value
    data: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSONType, nullable=True),
    )

    created_at: datetime = Field(default_factory=utc_now)
