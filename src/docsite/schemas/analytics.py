"""Analytics schemas for project statistics."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class PopularDocument(BaseModel):
    document_id: UUID
    views: int


class ProjectStats(BaseModel):
    """Aggregated statistics for one project."""

    total_documents: int
    published_documents: int
    recent_views: int = Field(description="Page views over the recent-views window")
    popular_documents: list[PopularDocument] = Field(default_factory=list)
    generated_at: datetime
