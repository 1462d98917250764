"""Resolved caller identity handed to the project services."""

from dataclasses import dataclass
from uuid import UUID

from src.docsite.models.enums import MembershipRole


@dataclass(frozen=True)
class TenantContext:
    """Immutable caller context for the current request.

    ``tenant_id`` is None when the caller has not selected an organization.
    ``role`` is the caller's active membership role in that tenant.
    """

    user_id: UUID
    tenant_id: UUID | None = None
    role: MembershipRole | None = None

    @property
    def has_tenant(self) -> bool:
        return self.tenant_id is not None

    def has_role(self, allowed: frozenset[MembershipRole]) -> bool:
        return self.role is not None and self.role in allowed
