"""Project mutation service - tenant-scoped create/update/delete/publish/duplicate.

Every public method returns a ``ProjectActionResult``; no exception crosses
this boundary. Domain failures are raised internally as ``ProjectError``
subclasses and converted in ``_run``.
"""

import contextlib
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar
from uuid import UUID

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.docsite.core.config import get_settings
from src.docsite.core.exceptions import (
    InternalFailure,
    NoTenantSelected,
    PermissionDenied,
    ProjectError,
    ProjectNotFound,
    SlugConflict,
    ValidationFailed,
)
from src.docsite.core.logging import get_logger
from src.docsite.core.slugs import generate_slug, random_suffix, with_suffix
from src.docsite.core.tenant_context import TenantContext
from src.docsite.models import EventType, MembershipRole, Project, default_project_settings
from src.docsite.models.base import utc_now
from src.docsite.models.enums import CONTRIBUTOR_ROLES, MANAGER_ROLES
from src.docsite.models.project import MAX_PROJECT_NAME_LENGTH
from src.docsite.repositories import DocumentRepository, ProjectRepository
from src.docsite.schemas import ProjectActionResult, ProjectCreate, ProjectUpdate
from src.docsite.services.event_service import EventService

SchemaT = TypeVar("SchemaT", bound=BaseModel)

logger = get_logger(__name__)

COPY_SUFFIX = " (Copy)"
SLUG_UNIQUE_INDEX = "uq_projects_tenant_slug_active"


def _is_slug_violation(exc: IntegrityError) -> bool:
    """True when the integrity error comes from the per-tenant slug index."""
    message = str(exc.orig)
    # PostgreSQL names the index; SQLite names the columns
    return SLUG_UNIQUE_INDEX in message or "projects.slug" in message


class ProjectService:
    """Project mutation service - business logic only."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        document_repo: DocumentRepository,
        events: EventService,
        session: AsyncSession,
        duplicate_slug_max_attempts: int | None = None,
    ):
        self.project_repo = project_repo
        self.document_repo = document_repo
        self.events = events
        self.session = session
        if duplicate_slug_max_attempts is None:
            duplicate_slug_max_attempts = get_settings().duplicate_slug_max_attempts
        self.duplicate_slug_max_attempts = duplicate_slug_max_attempts

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def create_project(
        self, ctx: TenantContext, fields: Mapping[str, Any]
    ) -> ProjectActionResult:
        """Create a project in the caller's tenant from a loose field bag."""
        return await self._run(
            "Project creation failed",
            "Failed to create project. Please try again.",
            ctx,
            lambda: self._create(ctx, fields),
        )

    async def update_project(
        self, ctx: TenantContext, project_id: UUID, fields: Mapping[str, Any]
    ) -> ProjectActionResult:
        """Apply a partial update to a project of the caller's tenant."""
        return await self._run(
            "Project update failed",
            "Failed to update project. Please try again.",
            ctx,
            lambda: self._update(ctx, project_id, fields),
            project_id=project_id,
        )

    async def delete_project(self, ctx: TenantContext, project_id: UUID) -> ProjectActionResult:
        """Soft-delete a project. Its documents are left untouched."""
        return await self._run(
            "Project deletion failed",
            "Failed to delete project. Please try again.",
            ctx,
            lambda: self._delete(ctx, project_id),
            project_id=project_id,
        )

    async def toggle_project_public(
        self, ctx: TenantContext, project_id: UUID, is_public: bool
    ) -> ProjectActionResult:
        """Publish or unpublish a project."""
        return await self._run(
            "Project visibility toggle failed",
            "Failed to update project visibility. Please try again.",
            ctx,
            lambda: self._toggle_public(ctx, project_id, is_public),
            project_id=project_id,
        )

    async def duplicate_project(self, ctx: TenantContext, project_id: UUID) -> ProjectActionResult:
        """Copy a project's settings and branding into a new private project."""
        return await self._run(
            "Project duplication failed",
            "Failed to duplicate project. Please try again.",
            ctx,
            lambda: self._duplicate(ctx, project_id),
            project_id=project_id,
        )

    # ------------------------------------------------------------------
    # Implementations
    # ------------------------------------------------------------------

    async def _create(self, ctx: TenantContext, fields: Mapping[str, Any]) -> ProjectActionResult:
        tenant_id = self._require_tenant(ctx, CONTRIBUTOR_ROLES)
        data = self._validate(ProjectCreate, fields)

        logger.info(
            "Project creation attempt",
            user_id=str(ctx.user_id),
            tenant_id=str(tenant_id),
            project_name=data.name,
            is_public=data.is_public,
        )

        slug = generate_slug(data.name)
        if await self.project_repo.slug_exists(tenant_id, slug):
            raise SlugConflict()

        settings = default_project_settings()
        if data.settings is not None:
            settings.update(data.settings.model_dump())

        now = utc_now()
        project = Project(
            tenant_id=tenant_id,
            name=data.name,
            slug=slug,
            description=data.description,
            meta_title=data.meta_title,
            meta_description=data.meta_description,
            primary_color=data.primary_color,
            custom_css=data.custom_css,
            settings=settings,
            is_public=data.is_public,
            published_at=now if data.is_public else None,
            created_at=now,
            updated_at=now,
        )
        self.project_repo.add(project)
        await self._commit_project(project)

        logger.info(
            "Project created successfully",
            user_id=str(ctx.user_id),
            tenant_id=str(tenant_id),
            project_id=str(project.id),
            project_slug=project.slug,
            is_public=project.is_public,
        )

        await self.events.record(
            EventType.PROJECT_CREATED,
            tenant_id=tenant_id,
            project_id=project.id,
            user_id=ctx.user_id,
            data={
                "project_id": str(project.id),
                "project_name": project.name,
                "is_public": project.is_public,
            },
        )
        return ProjectActionResult.ok("Project created successfully!", project.id)

    async def _update(
        self, ctx: TenantContext, project_id: UUID, fields: Mapping[str, Any]
    ) -> ProjectActionResult:
        tenant_id = self._require_tenant(ctx, MANAGER_ROLES)
        data = self._validate(ProjectUpdate, fields)

        logger.info(
            "Project update attempt",
            user_id=str(ctx.user_id),
            tenant_id=str(tenant_id),
            project_id=str(project_id),
        )

        project = await self._get_project(tenant_id, project_id)

        provided = data.provided_fields()
        settings_patch: dict[str, Any] | None = provided.pop("settings", None)
        changes: set[str] = set()

        new_name = provided.get("name")
        if new_name is not None and new_name != project.name:
            new_slug = generate_slug(new_name)
            if new_slug != project.slug:
                if await self.project_repo.slug_exists(tenant_id, new_slug, exclude_id=project.id):
                    raise SlugConflict()
                project.slug = new_slug
                changes.add("slug")

        for field, value in provided.items():
            if getattr(project, field) != value:
                setattr(project, field, value)
                changes.add(field)

        if settings_patch:
            merged = {
                **project.settings,
                **{key: value for key, value in settings_patch.items() if value is not None},
            }
            if merged != project.settings:
                project.settings = merged
                changes.add("settings")

        project.updated_at = utc_now()
        await self._commit_project(project)

        changed_fields = sorted(changes)
        logger.info(
            "Project updated successfully",
            user_id=str(ctx.user_id),
            tenant_id=str(tenant_id),
            project_id=str(project.id),
            updated_fields=changed_fields,
        )

        # Field names only, never values
        await self.events.record(
            EventType.PROJECT_UPDATED,
            tenant_id=tenant_id,
            project_id=project.id,
            user_id=ctx.user_id,
            data={
                "project_id": str(project.id),
                "project_name": project.name,
                "changes": changed_fields,
            },
        )
        return ProjectActionResult.ok("Project updated successfully!", project.id)

    async def _delete(self, ctx: TenantContext, project_id: UUID) -> ProjectActionResult:
        tenant_id = self._require_tenant(ctx, MANAGER_ROLES)

        logger.warning(
            "Project deletion attempt",
            user_id=str(ctx.user_id),
            tenant_id=str(tenant_id),
            project_id=str(project_id),
        )

        project = await self._get_project(tenant_id, project_id)
        document_count = await self.document_repo.count_for_project(tenant_id, project.id)

        project.is_active = False
        project.updated_at = utc_now()
        await self._commit_project(project)

        logger.warning(
            "Project deleted",
            user_id=str(ctx.user_id),
            tenant_id=str(tenant_id),
            project_id=str(project.id),
            project_name=project.name,
            document_count=document_count,
        )

        await self.events.record(
            EventType.PROJECT_DELETED,
            tenant_id=tenant_id,
            project_id=project.id,
            user_id=ctx.user_id,
            data={
                "project_id": str(project.id),
                "project_name": project.name,
                "document_count": document_count,
            },
        )
        return ProjectActionResult.ok("Project deleted successfully.", project.id)

    async def _toggle_public(
        self, ctx: TenantContext, project_id: UUID, is_public: bool
    ) -> ProjectActionResult:
        tenant_id = self._require_tenant(ctx, MANAGER_ROLES)

        logger.info(
            "Project visibility toggle attempt",
            user_id=str(ctx.user_id),
            tenant_id=str(tenant_id),
            project_id=str(project_id),
            new_visibility="public" if is_public else "private",
        )

        project = await self._get_project(tenant_id, project_id)

        if is_public:
            # Re-publishing an already public project keeps its original timestamp
            if not project.is_public or project.published_at is None:
                project.published_at = utc_now()
        else:
            project.published_at = None
        project.is_public = is_public
        project.updated_at = utc_now()
        await self._commit_project(project)

        logger.info(
            "Project visibility updated",
            user_id=str(ctx.user_id),
            tenant_id=str(tenant_id),
            project_id=str(project.id),
            project_name=project.name,
            is_public=project.is_public,
        )

        await self.events.record(
            EventType.PROJECT_PUBLISHED if is_public else EventType.PROJECT_UNPUBLISHED,
            tenant_id=tenant_id,
            project_id=project.id,
            user_id=ctx.user_id,
            data={"project_id": str(project.id), "project_name": project.name},
        )
        action = "published" if is_public else "unpublished"
        return ProjectActionResult.ok(f"Project {action} successfully!", project.id)

    async def _duplicate(self, ctx: TenantContext, project_id: UUID) -> ProjectActionResult:
        tenant_id = self._require_tenant(ctx, CONTRIBUTOR_ROLES)

        logger.info(
            "Project duplication attempt",
            user_id=str(ctx.user_id),
            tenant_id=str(tenant_id),
            source_project_id=str(project_id),
        )

        source = await self._get_project(tenant_id, project_id)

        base_name = source.name[: MAX_PROJECT_NAME_LENGTH - len(COPY_SUFFIX)]
        duplicate_name = f"{base_name}{COPY_SUFFIX}"
        duplicate_slug = await self._find_free_slug(tenant_id, generate_slug(duplicate_name))

        now = utc_now()
        duplicate = Project(
            tenant_id=tenant_id,
            name=duplicate_name,
            slug=duplicate_slug,
            description=source.description,
            meta_title=source.meta_title,
            meta_description=source.meta_description,
            primary_color=source.primary_color,
            custom_css=source.custom_css,
            settings=dict(source.settings),
            is_public=False,  # Copies always start private
            published_at=None,
            created_at=now,
            updated_at=now,
        )
        self.project_repo.add(duplicate)
        await self._commit_project(duplicate)

        logger.info(
            "Project duplicated successfully",
            user_id=str(ctx.user_id),
            tenant_id=str(tenant_id),
            source_project_id=str(source.id),
            duplicate_project_id=str(duplicate.id),
            duplicate_slug=duplicate.slug,
        )

        await self.events.record(
            EventType.PROJECT_DUPLICATED,
            tenant_id=tenant_id,
            project_id=duplicate.id,
            user_id=ctx.user_id,
            data={
                "source_project_id": str(source.id),
                "duplicate_project_id": str(duplicate.id),
                "project_name": duplicate.name,
            },
        )
        return ProjectActionResult.ok("Project duplicated successfully!", duplicate.id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _run(
        self,
        failure_event: str,
        failure_message: str,
        ctx: TenantContext,
        operation: Callable[[], Awaitable[ProjectActionResult]],
        project_id: UUID | None = None,
    ) -> ProjectActionResult:
        """Execute an operation and convert every failure into a result."""
        try:
            return await operation()
        except ProjectError as e:
            logger.info(
                "Project action rejected",
                reason=e.code,
                user_id=str(ctx.user_id),
                tenant_id=str(ctx.tenant_id) if ctx.tenant_id else None,
                project_id=str(project_id) if project_id else None,
            )
            return ProjectActionResult.failed(e)
        except Exception:
            with contextlib.suppress(Exception):
                await self.session.rollback()
            logger.exception(
                failure_event,
                user_id=str(ctx.user_id),
                tenant_id=str(ctx.tenant_id) if ctx.tenant_id else None,
                project_id=str(project_id) if project_id else None,
            )
            return ProjectActionResult.failed(InternalFailure(failure_message))

    @staticmethod
    def _require_tenant(ctx: TenantContext, allowed_roles: frozenset[MembershipRole]) -> UUID:
        """Gate on tenant selection, then on membership role."""
        if ctx.tenant_id is None:
            raise NoTenantSelected()
        if not ctx.has_role(allowed_roles):
            raise PermissionDenied()
        return ctx.tenant_id

    @staticmethod
    def _validate(
        schema: type[SchemaT], fields: Mapping[str, Any]
    ) -> SchemaT:
        """Validate a field bag, surfacing the first error message verbatim."""
        try:
            return schema.model_validate(dict(fields))
        except PydanticValidationError as e:
            errors = e.errors()
            raise ValidationFailed(errors[0]["msg"] if errors else None) from e

    async def _get_project(self, tenant_id: UUID, project_id: UUID) -> Project:
        project = await self.project_repo.get_for_tenant(tenant_id, project_id)
        if project is None:
            raise ProjectNotFound()
        return project

    async def _commit_project(self, project: Project) -> None:
        """Commit a project write; the slug index is the final uniqueness check."""
        try:
            await self.session.commit()
            await self.session.refresh(project)
        except IntegrityError as e:
            await self.session.rollback()
            if _is_slug_violation(e):
                raise SlugConflict() from e
            raise

    async def _find_free_slug(self, tenant_id: UUID, base_slug: str) -> str:
        """Find an unused slug: base, then base-1, base-2, ... then a random suffix.

        The numbered search is capped at ``duplicate_slug_max_attempts`` lookups.
        """
        candidate = base_slug
        for counter in range(1, self.duplicate_slug_max_attempts + 1):
            if not await self.project_repo.slug_exists(tenant_id, candidate):
                return candidate
            candidate = with_suffix(base_slug, counter)

        fallback = with_suffix(base_slug, random_suffix())
        logger.warning(
            "Duplicate slug search exhausted, using random suffix",
            tenant_id=str(tenant_id),
            base_slug=base_slug,
            attempts=self.duplicate_slug_max_attempts,
            slug=fallback,
        )
        return fallback
