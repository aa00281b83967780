"""Skill endpoints."""

from fastapi import APIRouter, Query, Request, status

from folio.db import skills_repository as repo
from folio.web.errors import ApiError, database_errors
from folio.web.request_parsing import (
    build_payload,
    int_param,
    parse_request_body,
    require_fields,
)
from folio.web.schemas import MessageResponse, SkillInput, SkillResponse

router = APIRouter(prefix="/api/skills", tags=["skills"])

REQUIRED_FIELDS = ["name", "category"]


@router.get("", response_model=list[SkillResponse])
async def list_skills(
    category: str | None = Query(None, description="Only this category"),
    highlight: str | None = Query(None, description="'true' for highlighted skills only"),
) -> list[SkillResponse]:
    """List skills ordered by order_index, then name."""
    # Any value other than "true" selects the non-highlighted skills
    highlight_filter = None if highlight is None else highlight == "true"

    with database_errors("fetch skills"):
        skills = repo.list_skills(category=category, highlight=highlight_filter)

    return [SkillResponse.model_validate(s) for s in skills]


@router.post("", response_model=SkillResponse, status_code=status.HTTP_201_CREATED)
async def create_skill(request: Request) -> SkillResponse:
    """Create a new skill."""
    body = await parse_request_body(request)
    require_fields(body, REQUIRED_FIELDS)
    payload = build_payload(SkillInput, body)

    with database_errors("create skill"):
        skill = repo.create_skill(**payload.model_dump())

    return SkillResponse.model_validate(skill)


@router.get("/{skill_id}", response_model=SkillResponse)
async def get_skill(skill_id: str) -> SkillResponse:
    """Get a specific skill by ID."""
    skill_pk = int_param(skill_id)

    with database_errors("fetch skill"):
        skill = repo.get_skill(skill_pk)

    if skill is None:
        raise ApiError(404, "Skill not found")

    return SkillResponse.model_validate(skill)


@router.put("/{skill_id}", response_model=SkillResponse)
async def update_skill(skill_id: str, request: Request) -> SkillResponse:
    """Update a skill."""
    skill_pk = int_param(skill_id)
    body = await parse_request_body(request)
    require_fields(body, REQUIRED_FIELDS)
    payload = build_payload(SkillInput, body)

    with database_errors("update skill"):
        skill = repo.update_skill(skill_pk, **payload.model_dump())

    if skill is None:
        raise ApiError(404, "Skill not found")

    return SkillResponse.model_validate(skill)


@router.delete("/{skill_id}", response_model=MessageResponse)
async def delete_skill(skill_id: str) -> MessageResponse:
    """Delete a skill by ID."""
    skill_pk = int_param(skill_id)

    with database_errors("delete skill"):
        deleted = repo.delete_skill(skill_pk)

    if not deleted:
        raise ApiError(404, "Skill not found")

    return MessageResponse(message="Skill deleted successfully")
