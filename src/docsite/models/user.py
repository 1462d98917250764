"""User and membership models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.docsite.models.base import utc_now
from src.docsite.models.enums import MembershipRole


class User(SQLModel, table=True):
    """User known to the platform. Credentials live with the session service."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    full_name: str | None = Field(default=None, max_length=100)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class UserTenantMembership(SQLModel, table=True):
    """Junction table for user-tenant membership."""

    __tablename__ = "user_tenant_membership"

    user_id: UUID = Field(foreign_key="users.id", primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", primary_key=True)
    role: str = Field(default=MembershipRole.MEMBER.value, max_length=50)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def role_enum(self) -> MembershipRole:
        """Get role as MembershipRole enum."""
        return MembershipRole(self.role)
