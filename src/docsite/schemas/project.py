"""Project schemas for API request/response.

Mutation inputs arrive as loose field bags (form submissions), so the
input schemas accept camelCase or snake_case keys and treat blank strings
as "not provided".
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.docsite.core.slugs import generate_slug
from src.docsite.models.project import MAX_PROJECT_NAME_LENGTH

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"
MAX_NAME_LENGTH = MAX_PROJECT_NAME_LENGTH

_OPTIONAL_TEXT_FIELDS = (
    "description",
    "meta_title",
    "meta_description",
    "primary_color",
    "custom_css",
)


def _clean_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Project name is required")
    if not generate_slug(v):
        raise ValueError("Project name must contain at least one letter or number")
    return v


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str):
        v = v.strip()
        if not v:
            return None
    return v


class ProjectSettings(BaseModel):
    """Feature flags stored on a project. Unknown keys are preserved."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    enable_search: bool = True
    enable_feedback: bool = True
    show_last_updated: bool = True
    enable_print_mode: bool = True


class ProjectSettingsUpdate(BaseModel):
    """Partial settings update, merged over the stored settings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    enable_search: bool | None = None
    enable_feedback: bool | None = None
    show_last_updated: bool | None = None
    enable_print_mode: bool | None = None


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(max_length=MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=1000)
    is_public: bool = False
    meta_title: str | None = Field(default=None, max_length=120)
    meta_description: str | None = Field(default=None, max_length=300)
    primary_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    custom_css: str | None = Field(default=None, max_length=50_000)
    settings: ProjectSettings | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _clean_name(v)

    @field_validator(*_OPTIONAL_TEXT_FIELDS, mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("is_public", mode="before")
    @classmethod
    def default_is_public(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return False
        return v


class ProjectUpdate(BaseModel):
    """Schema for updating a project.

    Visibility is not updatable here; use the visibility endpoint.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=1000)
    meta_title: str | None = Field(default=None, max_length=120)
    meta_description: str | None = Field(default=None, max_length=300)
    primary_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    custom_css: str | None = Field(default=None, max_length=50_000)
    settings: ProjectSettingsUpdate | None = None

    @field_validator("name", mode="before")
    @classmethod
    def blank_name_to_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            return _clean_name(v)
        return v

    @field_validator(*_OPTIONAL_TEXT_FIELDS, mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        return _blank_to_none(v)

    def provided_fields(self) -> dict[str, Any]:
        """Fields the caller actually supplied with a non-empty value."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class ProjectVisibilityUpdate(BaseModel):
    """Schema for publishing or unpublishing a project."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_public: bool


class DocumentSummary(BaseModel):
    """Document listing entry inside project details."""

    id: UUID
    title: str
    slug: str
    is_published: bool
    updated_at: datetime

    model_config = {"from_attributes": True}


class ActivityActor(BaseModel):
    name: str | None = None
    email: str


class ProjectActivity(BaseModel):
    """One entry of a project's recent activity feed."""

    type: str
    created_at: datetime
    data: dict[str, Any] | None = None
    user: ActivityActor | None = None


class ProjectSummary(BaseModel):
    """Schema for listing projects."""

    id: UUID
    name: str
    slug: str
    description: str | None = None
    is_public: bool
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None
    document_count: int = 0
    last_activity: datetime | None = None


class PublicProjectDetails(ProjectSummary):
    """Public view of a published project."""

    meta_title: str | None = None
    meta_description: str | None = None
    primary_color: str | None = None
    custom_css: str | None = None
    settings: dict[str, Any] = Field(default_factory=dict)
    documents: list[DocumentSummary] = Field(default_factory=list)


class ProjectDetails(PublicProjectDetails):
    """Full project view for tenant members."""

    recent_activity: list[ProjectActivity] = Field(default_factory=list)


class PageViewCreate(BaseModel):
    """Schema for recording a public page view."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    document_id: UUID | None = None
