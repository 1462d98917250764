"""FastAPI dependency injection definitions.

Re-exports all dependencies.
"""

# Auth
from src.docsite.api.dependencies.auth import CurrentTenantContext, get_tenant_context

# Database
from src.docsite.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.docsite.api.dependencies.repositories import (
    DocumentRepo,
    EventRepo,
    MembershipRepo,
    ProjectRepo,
    TenantRepo,
    UserRepo,
    get_document_repository,
    get_event_repository,
    get_membership_repository,
    get_project_repository,
    get_tenant_repository,
    get_user_repository,
)

# Services
from src.docsite.api.dependencies.services import (
    EventServiceDep,
    ProjectQueryServiceDep,
    ProjectServiceDep,
    PublicSiteServiceDep,
    get_event_service,
    get_project_query_service,
    get_project_service,
    get_public_site_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentTenantContext",
    "get_tenant_context",
    # Repositories
    "DocumentRepo",
    "EventRepo",
    "MembershipRepo",
    "ProjectRepo",
    "TenantRepo",
    "UserRepo",
    "get_document_repository",
    "get_event_repository",
    "get_membership_repository",
    "get_project_repository",
    "get_tenant_repository",
    "get_user_repository",
    # Services
    "EventServiceDep",
    "ProjectQueryServiceDep",
    "ProjectServiceDep",
    "PublicSiteServiceDep",
    "get_event_service",
    "get_project_query_service",
    "get_project_service",
    "get_public_site_service",
]
