"""Project endpoints - tenant-scoped queries and mutations.

The tenant is taken from the caller's bearer token, never from the request.
Mutations always answer with a ``ProjectActionResult``; the HTTP status
mirrors its error code.
"""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body, HTTPException, Query, Response, status

from src.docsite.api.dependencies import (
    CurrentTenantContext,
    ProjectQueryServiceDep,
    ProjectServiceDep,
)
from src.docsite.repositories.project import ProjectSortField, SortOrder
from src.docsite.schemas import (
    ProjectActionResult,
    ProjectDetails,
    ProjectStats,
    ProjectSummary,
    ProjectVisibilityUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])

ERROR_STATUS_CODES: dict[str, int] = {
    "validation_error": 422,
    "no_tenant_selected": 400,
    "permission_denied": 403,
    "not_found": 404,
    "slug_conflict": 409,
    "internal_failure": 500,
}

ACTION_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ProjectActionResult, "description": "No organization selected"},
    403: {"model": ProjectActionResult, "description": "Insufficient role"},
    404: {"model": ProjectActionResult, "description": "Project not found"},
    409: {"model": ProjectActionResult, "description": "Slug already in use"},
    422: {"model": ProjectActionResult, "description": "Invalid project data"},
}

ProjectFields = Annotated[
    dict[str, Any], Body(description="Project fields (camelCase or snake_case)")
]


def _respond(
    result: ProjectActionResult,
    response: Response,
    success_status: int = status.HTTP_200_OK,
) -> ProjectActionResult:
    if result.success:
        response.status_code = success_status
    else:
        response.status_code = ERROR_STATUS_CODES.get(
            result.error or "", status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return result


def _not_found(project: object) -> None:
    if project is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )


@router.get(
    "",
    response_model=list[ProjectSummary],
    summary="List projects",
    description="List active projects of the caller's organization.",
)
async def list_projects(
    ctx: CurrentTenantContext,
    service: ProjectQueryServiceDep,
    include_private: Annotated[bool, Query(description="Include private projects")] = True,
    search: Annotated[str | None, Query(max_length=200)] = None,
    sort_by: Annotated[ProjectSortField, Query()] = "updated_at",
    sort_order: Annotated[SortOrder, Query()] = "desc",
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[ProjectSummary]:
    """List projects in the caller's tenant."""
    return await service.get_projects(
        ctx,
        include_private=include_private,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        limit=limit,
        offset=offset,
    )


@router.get(
    "/search",
    response_model=list[ProjectSummary],
    summary="Search projects",
    description="Case-insensitive search on project name and description.",
)
async def search_projects(
    ctx: CurrentTenantContext,
    service: ProjectQueryServiceDep,
    q: Annotated[str, Query(min_length=1, max_length=200)],
    include_private: bool = True,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
) -> list[ProjectSummary]:
    """Search projects in the caller's tenant."""
    return await service.search_projects(ctx, q, include_private=include_private, limit=limit)


@router.get(
    "/by-slug/{slug}",
    response_model=ProjectDetails,
    summary="Get project by slug",
    responses={404: {"description": "Project not found"}},
)
async def get_project_by_slug(
    slug: str,
    ctx: CurrentTenantContext,
    service: ProjectQueryServiceDep,
) -> ProjectDetails:
    """Get a project of the caller's tenant by slug."""
    project = await service.get_project_by_slug(ctx, slug)
    _not_found(project)
    return project  # type: ignore[return-value]


@router.get(
    "/{project_id}",
    response_model=ProjectDetails,
    summary="Get project",
    description="Get a project with its documents and recent activity.",
    responses={404: {"description": "Project not found"}},
)
async def get_project(
    project_id: UUID,
    ctx: CurrentTenantContext,
    service: ProjectQueryServiceDep,
) -> ProjectDetails:
    """Get a project by ID."""
    project = await service.get_project_details(ctx, project_id)
    _not_found(project)
    return project  # type: ignore[return-value]


@router.get(
    "/{project_id}/stats",
    response_model=ProjectStats,
    summary="Get project statistics",
    responses={404: {"description": "Project not found"}},
)
async def get_project_stats(
    project_id: UUID,
    ctx: CurrentTenantContext,
    service: ProjectQueryServiceDep,
) -> ProjectStats:
    """Get document counts and page view statistics for a project."""
    stats = await service.get_project_stats(ctx, project_id)
    _not_found(stats)
    return stats  # type: ignore[return-value]


@router.post(
    "",
    response_model=ProjectActionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description="Create a project in the caller's organization. The slug derives from the name.",
    responses=ACTION_RESPONSES,
)
async def create_project(
    fields: ProjectFields,
    response: Response,
    ctx: CurrentTenantContext,
    service: ProjectServiceDep,
) -> ProjectActionResult:
    """Create a new project."""
    result = await service.create_project(ctx, fields)
    return _respond(result, response, status.HTTP_201_CREATED)


@router.patch(
    "/{project_id}",
    response_model=ProjectActionResult,
    summary="Update project",
    description="Partially update a project. Renaming regenerates the slug.",
    responses=ACTION_RESPONSES,
)
async def update_project(
    project_id: UUID,
    fields: ProjectFields,
    response: Response,
    ctx: CurrentTenantContext,
    service: ProjectServiceDep,
) -> ProjectActionResult:
    """Update a project."""
    result = await service.update_project(ctx, project_id, fields)
    return _respond(result, response)


@router.delete(
    "/{project_id}",
    response_model=ProjectActionResult,
    summary="Delete project",
    description="Soft-delete a project. Documents are kept.",
    responses=ACTION_RESPONSES,
)
async def delete_project(
    project_id: UUID,
    response: Response,
    ctx: CurrentTenantContext,
    service: ProjectServiceDep,
) -> ProjectActionResult:
    """Delete a project."""
    result = await service.delete_project(ctx, project_id)
    return _respond(result, response)


@router.post(
    "/{project_id}/visibility",
    response_model=ProjectActionResult,
    summary="Publish or unpublish project",
    description=(
        "Publishing stamps published_at only when the project is currently private; "
        "publishing an already public project keeps its original published_at. "
        "Unpublishing clears it."
    ),
    responses=ACTION_RESPONSES,
)
async def set_project_visibility(
    project_id: UUID,
    payload: ProjectVisibilityUpdate,
    response: Response,
    ctx: CurrentTenantContext,
    service: ProjectServiceDep,
) -> ProjectActionResult:
    """Toggle a project's public visibility."""
    result = await service.toggle_project_public(ctx, project_id, payload.is_public)
    return _respond(result, response)


@router.post(
    "/{project_id}/duplicate",
    response_model=ProjectActionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Duplicate project",
    description="Copy a project's settings and branding into a new private project.",
    responses=ACTION_RESPONSES,
)
async def duplicate_project(
    project_id: UUID,
    response: Response,
    ctx: CurrentTenantContext,
    service: ProjectServiceDep,
) -> ProjectActionResult:
    """Duplicate a project."""
    result = await service.duplicate_project(ctx, project_id)
    return _respond(result, response, status.HTTP_201_CREATED)
