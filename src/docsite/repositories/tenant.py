"""Repositories for tenants, users and memberships."""

from uuid import UUID

from sqlmodel import select

from src.docsite.models import Tenant, User, UserTenantMembership
from src.docsite.repositories.base import BaseRepository


class TenantRepository(BaseRepository[Tenant]):
    """Repository for Tenant entity."""

    model = Tenant

    async def get_active_by_slug(self, slug: str) -> Tenant | None:
        """Get an active tenant by slug (public subdomain lookups)."""
        result = await self.session.execute(
            select(Tenant).where(
                Tenant.slug == slug,
                Tenant.is_active == True,  # noqa: E712
            )
        )
        return result.scalar_one_or_none()


class UserRepository(BaseRepository[User]):
    """Repository for User entity."""

    model = User


class MembershipRepository(BaseRepository[UserTenantMembership]):
    """Repository for user-tenant memberships."""

    model = UserTenantMembership

    async def get_active_membership(
        self, user_id: UUID, tenant_id: UUID
    ) -> UserTenantMembership | None:
        """Get active membership for a user in a tenant."""
        result = await self.session.execute(
            select(UserTenantMembership).where(
                UserTenantMembership.user_id == user_id,
                UserTenantMembership.tenant_id == tenant_id,
                UserTenantMembership.is_active == True,  # noqa: E712
            )
        )
        return result.scalar_one_or_none()
