"""Document model - pages that belong to a project."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from src.docsite.models.base import utc_now


class Document(SQLModel, table=True):
    """A single documentation page inside a project."""

    __tablename__ = "documents"
    __table_args__ = (Index("ix_documents_project_position", "project_id", "position"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    title: str = Field(max_length=200)
    slug: str = Field(max_length=200)
    content: str = Field(default="")
    is_published: bool = Field(default=False)
    position: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
