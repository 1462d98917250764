"""Repository layer - data access abstraction."""

from src.docsite.repositories.analytics import AnalyticsEventRepository
from src.docsite.repositories.base import BaseRepository
from src.docsite.repositories.document import DocumentRepository
from src.docsite.repositories.project import ProjectRepository
from src.docsite.repositories.tenant import (
    MembershipRepository,
    TenantRepository,
    UserRepository,
)

__all__ = [
    "AnalyticsEventRepository",
    "BaseRepository",
    "DocumentRepository",
    "MembershipRepository",
    "ProjectRepository",
    "TenantRepository",
    "UserRepository",
]
