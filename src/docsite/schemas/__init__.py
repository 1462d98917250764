from src.docsite.schemas.action import ProjectActionResult
from src.docsite.schemas.analytics import PopularDocument, ProjectStats
from src.docsite.schemas.project import (
    ActivityActor,
    DocumentSummary,
    PageViewCreate,
    ProjectActivity,
    ProjectCreate,
    ProjectDetails,
    ProjectSettings,
    ProjectSettingsUpdate,
    ProjectSummary,
    ProjectUpdate,
    ProjectVisibilityUpdate,
    PublicProjectDetails,
)

__all__ = [
    "ActivityActor",
    "DocumentSummary",
    "PageViewCreate",
    "PopularDocument",
    "ProjectActionResult",
    "ProjectActivity",
    "ProjectCreate",
    "ProjectDetails",
    "ProjectSettings",
    "ProjectSettingsUpdate",
    "ProjectStats",
    "ProjectSummary",
    "ProjectUpdate",
    "ProjectVisibilityUpdate",
    "PublicProjectDetails",
]
