"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.docsite.api.dependencies.db import DBSession
from src.docsite.repositories import (
    AnalyticsEventRepository,
    DocumentRepository,
    MembershipRepository,
    ProjectRepository,
    TenantRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    """Get user repository."""
    return UserRepository(session)


def get_tenant_repository(session: DBSession) -> TenantRepository:
    """Get tenant repository."""
    return TenantRepository(session)


def get_membership_repository(session: DBSession) -> MembershipRepository:
    """Get membership repository."""
    return MembershipRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    """Get project repository."""
    return ProjectRepository(session)


def get_document_repository(session: DBSession) -> DocumentRepository:
    """Get document repository."""
    return DocumentRepository(session)


def get_event_repository(session: DBSession) -> AnalyticsEventRepository:
    """Get analytics event repository."""
    return AnalyticsEventRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
TenantRepo = Annotated[TenantRepository, Depends(get_tenant_repository)]
MembershipRepo = Annotated[MembershipRepository, Depends(get_membership_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
DocumentRepo = Annotated[DocumentRepository, Depends(get_document_repository)]
EventRepo = Annotated[AnalyticsEventRepository, Depends(get_event_repository)]
