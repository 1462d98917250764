"""Tenant model - organization registry."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.docsite.models.base import utc_now

MAX_TENANT_SLUG_LENGTH = 63  # DNS label limit; the slug doubles as the public subdomain


class Tenant(SQLModel, table=True):
    """Organization that owns projects, documents and events."""

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100, index=True)
    slug: str = Field(max_length=MAX_TENANT_SLUG_LENGTH, unique=True, index=True)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
