"""Shared enums for models."""

from enum import Enum


class MembershipRole(str, Enum):
    """User role within a tenant."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


# Roles allowed to create new projects (including duplicates)
CONTRIBUTOR_ROLES: frozenset[MembershipRole] = frozenset(
    {MembershipRole.OWNER, MembershipRole.ADMIN, MembershipRole.MEMBER}
)

# Roles allowed to change, publish or delete existing projects
MANAGER_ROLES: frozenset[MembershipRole] = frozenset({MembershipRole.OWNER, MembershipRole.ADMIN})


class EventType(str, Enum):
    """Analytics event types."""

    PROJECT_CREATED = "project_created"
    PROJECT_UPDATED = "project_updated"
    PROJECT_DELETED = "project_deleted"
    PROJECT_PUBLISHED = "project_published"
    PROJECT_UNPUBLISHED = "project_unpublished"
    PROJECT_DUPLICATED = "project_duplicated"
    PAGE_VIEW = "page_view"
