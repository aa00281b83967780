"""Pydantic schemas for the Web API.

Input models validate parsed bodies (blank optional strings become None);
response models serialize repository records.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


def _none_to_zero(value: Any) -> Any:
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return 0
    return value


def _none_to_false(value: Any) -> Any:
    return False if value is None else value


# Range of a PostgreSQL integer column
ColumnInt = Annotated[int, Field(ge=-2_147_483_648, le=2_147_483_647)]

OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]
OptionalInt = Annotated[ColumnInt | None, BeforeValidator(_blank_to_none)]
OptionalDate = Annotated[date | None, BeforeValidator(_blank_to_none)]
OrderIndex = Annotated[ColumnInt, BeforeValidator(_none_to_zero)]
Flag = Annotated[bool, BeforeValidator(_none_to_false)]


# =============================================================================
# HERO SCHEMAS
# =============================================================================


class HeroInput(BaseModel):
    """Request body for PUT /api/hero. Any id in the body is ignored."""

    greeting: OptionalText = None
    greeting_part2: OptionalText = None
    name: OptionalText = None
    title: OptionalText = None
    description: OptionalText = None
    linkedin_url: OptionalText = None
    github_url: OptionalText = None
    email_url: OptionalText = None
    profile_image_url: OptionalText = None


class HeroResponse(BaseModel):
    """Response for the hero singleton."""

    id: int
    greeting: str
    greeting_part2: str
    name: str
    title: str
    description: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    email_url: str | None = None
    profile_image_url: str | None = None
    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}


# =============================================================================
# PROJECT SCHEMAS
# =============================================================================


class ProjectInput(BaseModel):
    """Request body for creating/updating a project."""

    title: str = Field(..., min_length=1)
    summary: OptionalText = None
    hero_image_url: OptionalText = None
    case_study_url: OptionalText = None
    tags_text: list[str] = Field(default_factory=list)

    @field_validator("tags_text", mode="before")
    @classmethod
    def _tags(cls, value: Any) -> Any:
        return [] if value is None else value


class ProjectResponse(BaseModel):
    """Response for a project."""

    id: str
    title: str
    summary: str | None = None
    hero_image_url: str | None = None
    case_study_url: str | None = None
    tags_text: list[str] = Field(default_factory=list)
    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}


# =============================================================================
# SKILL SCHEMAS
# =============================================================================


class SkillInput(BaseModel):
    """Request body for creating/updating a skill."""

    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    slug: OptionalText = None
    level: OptionalText = None
    icon_url: OptionalText = None
    description: OptionalText = None
    order_index: OrderIndex = 0
    is_highlight: Flag = False


class SkillResponse(BaseModel):
    """Response for a skill."""

    id: int
    name: str
    slug: str | None = None
    category: str
    level: str | None = None
    icon_url: str | None = None
    description: str | None = None
    order_index: int = 0
    is_highlight: bool = False
    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}


# =============================================================================
# EXPERIENCE SCHEMAS
# =============================================================================


class BulletInput(BaseModel):
    text: str = ""


class ExperienceInput(BaseModel):
    """Request body for creating/updating an experience.

    Bullets may be plain strings or {"text": ...} objects; blank ones are dropped.
    """

    company: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    start_date: date
    location: OptionalText = None
    end_date: OptionalDate = None
    is_current: Flag = False
    description: OptionalText = None
    bullets: list[str] = Field(default_factory=list)
    skills_text: list[str] = Field(default_factory=list)

    @field_validator("bullets", mode="before")
    @classmethod
    def _bullets(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, list):
            return value

        texts = []
        for item in value:
            if isinstance(item, dict):
                item = BulletInput.model_validate(item).text
            if isinstance(item, str) and item.strip():
                texts.append(item)
        return texts

    @field_validator("skills_text", mode="before")
    @classmethod
    def _skills(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_repository_kwargs(self) -> dict[str, Any]:
        data = self.model_dump()
        data["start_date"] = self.start_date.isoformat()
        data["end_date"] = self.end_date.isoformat() if self.end_date else None
        return data


class BulletResponse(BaseModel):
    id: int
    text: str

    model_config = {"from_attributes": True}


class ExperienceResponse(BaseModel):
    """Response for an experience with its bullets."""

    id: str
    company: str
    role: str
    location: str | None = None
    start_date: str
    end_date: str | None = None
    is_current: bool = False
    description: str | None = None
    skills_text: list[str] = Field(default_factory=list)
    bullets: list[BulletResponse] = Field(default_factory=list)
    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}


# =============================================================================
# SPECIALIZATION SCHEMAS
# =============================================================================


class SpecializationInput(BaseModel):
    """Request body for creating/updating a specialization card."""

    title: str = Field(..., min_length=1)
    number: OptionalInt = None
    description: OptionalText = None
    icon_url: OptionalText = None


class SpecializationResponse(BaseModel):
    """Response for a specialization card."""

    id: int
    number: int | None = None
    title: str
    description: str | None = None
    icon_url: str | None = None
    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}


# =============================================================================
# PORTFOLIO SCHEMAS (camelCase on the wire)
# =============================================================================


class PortfolioInput(BaseModel):
    """Request body for creating/updating a portfolio item."""

    title: str = Field(..., min_length=1)
    tag_role: str = Field(..., min_length=1)
    description: OptionalText = None
    image_url: OptionalText = None
    project_url: OptionalText = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PortfolioResponse(BaseModel):
    """Response for a portfolio item."""

    id: str
    title: str
    tag_role: str
    description: str | None = None
    image_url: str | None = None
    project_url: str | None = None
    created_at: str
    updated_at: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# COMMON SCHEMAS
# =============================================================================


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class HealthEnvironment(BaseModel):
    environment: str
    has_database_url: bool
    has_supabase_url: bool
    has_supabase_key: bool


class HealthDatabase(BaseModel):
    status: str
    response_time_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: HealthEnvironment
    database: HealthDatabase
