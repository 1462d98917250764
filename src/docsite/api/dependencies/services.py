"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.docsite.api.dependencies.db import DBSession
from src.docsite.api.dependencies.repositories import (
    DocumentRepo,
    EventRepo,
    ProjectRepo,
    TenantRepo,
)
from src.docsite.services import (
    EventService,
    ProjectQueryService,
    ProjectService,
    PublicSiteService,
)


def get_event_service(event_repo: EventRepo, session: DBSession) -> EventService:
    """Get analytics event service."""
    return EventService(event_repo, session)


EventServiceDep = Annotated[EventService, Depends(get_event_service)]


def get_project_service(
    project_repo: ProjectRepo,
    document_repo: DocumentRepo,
    events: EventServiceDep,
    session: DBSession,
) -> ProjectService:
    """Get project mutation service."""
    return ProjectService(project_repo, document_repo, events, session)


def get_project_query_service(
    project_repo: ProjectRepo,
    document_repo: DocumentRepo,
    event_repo: EventRepo,
) -> ProjectQueryService:
    """Get project query service."""
    return ProjectQueryService(project_repo, document_repo, event_repo)


def get_public_site_service(
    tenant_repo: TenantRepo,
    project_repo: ProjectRepo,
    document_repo: DocumentRepo,
    events: EventServiceDep,
) -> PublicSiteService:
    """Get public site service (no authentication required)."""
    return PublicSiteService(tenant_repo, project_repo, document_repo, events)


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
ProjectQueryServiceDep = Annotated[ProjectQueryService, Depends(get_project_query_service)]
PublicSiteServiceDep = Annotated[PublicSiteService, Depends(get_public_site_service)]
