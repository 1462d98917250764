"""Project model - tenant-scoped documentation site."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column, Index, text
from sqlmodel import Field, SQLModel

from src.docsite.core.slugs import MAX_SLUG_LENGTH
from src.docsite.models.base import JSONType, utc_now

MAX_PROJECT_NAME_LENGTH = 100


def default_project_settings() -> dict[str, Any]:
    """Feature flags every new project starts with."""
    return {
        "enable_search": True,
        "enable_feedback": True,
        "show_last_updated": True,
        "enable_print_mode": True,
    }


class Project(SQLModel, table=True):
    """Documentation project owned by exactly one tenant.

    The slug is unique among *active* projects of a tenant. The partial
    unique index below is the authoritative guard; service-level checks
    only exist to return a friendly error early.
    """

    __tablename__ = "projects"
    __table_args__ = (
        Index(
            "uq_projects_tenant_slug_active",
            "tenant_id",
            "slug",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
        Index("ix_projects_tenant_updated", "tenant_id", "updated_at"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", index=True)

    name: str = Field(max_length=MAX_PROJECT_NAME_LENGTH)
    slug: str = Field(max_length=MAX_SLUG_LENGTH)
    description: str | None = Field(default=None, max_length=1000)

    # SEO
    meta_title: str | None = Field(default=None, max_length=120)
    meta_description: str | None = Field(default=None, max_length=300)

    # Branding
    primary_color: str | None = Field(default=None, max_length=7)
    custom_css: str | None = Field(default=None)

    settings: dict[str, Any] = Field(
        default_factory=default_project_settings,
        sa_column=Column(JSONType, nullable=False),
    )

    is_public: bool = Field(default=False)
    published_at: datetime | None = Field(default=None)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
