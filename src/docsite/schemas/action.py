"""Uniform result returned by every project mutation."""

from uuid import UUID

from pydantic import BaseModel

from src.docsite.core.exceptions import ProjectError


class ProjectActionResult(BaseModel):
    """Outcome of a project mutation.

    ``error`` is a stable machine-readable code, present only on failure.
    """

    success: bool
    message: str
    project_id: UUID | None = None
    error: str | None = None

    @classmethod
    def ok(cls, message: str, project_id: UUID | None = None) -> "ProjectActionResult":
        return cls(success=True, message=message, project_id=project_id)

    @classmethod
    def failed(cls, exc: ProjectError) -> "ProjectActionResult":
        return cls(success=False, message=exc.message, error=exc.code)
