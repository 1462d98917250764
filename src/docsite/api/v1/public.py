"""Public documentation site endpoints (no authentication).

Projects are addressed by the tenant's subdomain slug and the project slug.
"""

from fastapi import APIRouter, HTTPException, Request, status

from src.docsite.api.dependencies import PublicSiteServiceDep
from src.docsite.core.config import get_settings
from src.docsite.core.rate_limit import limiter
from src.docsite.schemas import PageViewCreate, ProjectSummary, PublicProjectDetails

router = APIRouter(prefix="/public/{tenant_slug}/projects", tags=["public"])


@router.get(
    "",
    response_model=list[ProjectSummary],
    summary="List public projects",
    description="List published projects of an organization, newest first.",
)
async def list_public_projects(
    tenant_slug: str,
    service: PublicSiteServiceDep,
) -> list[ProjectSummary]:
    """List public projects of a tenant."""
    return await service.get_public_projects(tenant_slug)


@router.get(
    "/{project_slug}",
    response_model=PublicProjectDetails,
    summary="Get public project",
    responses={404: {"description": "Project not found"}},
)
async def get_public_project(
    tenant_slug: str,
    project_slug: str,
    service: PublicSiteServiceDep,
) -> PublicProjectDetails:
    """Get a public project with its published documents."""
    project = await service.get_public_project(tenant_slug, project_slug)
    if project is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )
    return project


@router.post(
    "/{project_slug}/views",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Record page view",
    responses={
        404: {"description": "Project or document not found"},
        429: {"description": "Rate limit exceeded"},
    },
)
@limiter.limit(get_settings().public_view_rate_limit)
async def record_page_view(
    request: Request,
    tenant_slug: str,
    project_slug: str,
    service: PublicSiteServiceDep,
    payload: PageViewCreate | None = None,
) -> dict[str, bool]:
    """Record an anonymous page view."""
    document_id = payload.document_id if payload else None
    recorded = await service.record_page_view(tenant_slug, project_slug, document_id)
    if not recorded:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )
    return {"recorded": True}
