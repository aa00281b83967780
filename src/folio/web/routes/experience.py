"""Experience endpoints (experience rows with ordered bullets)."""

from fastapi import APIRouter, Request, status

from folio.db import experience_repository as repo
from folio.web.errors import ApiError, database_errors
from folio.web.request_parsing import (
    build_payload,
    parse_request_body,
    require_fields,
    uuid_param,
)
from folio.web.schemas import ExperienceInput, ExperienceResponse, MessageResponse

router = APIRouter(prefix="/api/experience", tags=["experience"])

REQUIRED_FIELDS = ["company", "role", "start_date"]


@router.get("", response_model=list[ExperienceResponse])
async def list_experiences() -> list[ExperienceResponse]:
    """List experiences with bullets, most recent first."""
    with database_errors("fetch experiences"):
        experiences = repo.list_experiences()

    return [ExperienceResponse.model_validate(e) for e in experiences]


@router.post("", response_model=ExperienceResponse, status_code=status.HTTP_201_CREATED)
async def create_experience(request: Request) -> ExperienceResponse:
    """Create an experience and its bullets in one transaction."""
    body = await parse_request_body(request)
    require_fields(body, REQUIRED_FIELDS)
    payload = build_payload(ExperienceInput, body)

    with database_errors("create experience"):
        experience = repo.create_experience(**payload.to_repository_kwargs())

    return ExperienceResponse.model_validate(experience)


@router.get("/{experience_id}", response_model=ExperienceResponse)
async def get_experience(experience_id: str) -> ExperienceResponse:
    """Get a specific experience by ID."""
    experience_id = uuid_param(experience_id, "experience")

    with database_errors("fetch experience"):
        experience = repo.get_experience(experience_id)

    if experience is None:
        raise ApiError(404, "Experience not found")

    return ExperienceResponse.model_validate(experience)


@router.put("/{experience_id}", response_model=ExperienceResponse)
async def update_experience(experience_id: str, request: Request) -> ExperienceResponse:
    """Update an experience, replacing all of its bullets."""
    experience_id = uuid_param(experience_id, "experience")
    body = await parse_request_body(request)
    require_fields(body, REQUIRED_FIELDS)
    payload = build_payload(ExperienceInput, body)

    with database_errors("update experience"):
        experience = repo.update_experience(experience_id, **payload.to_repository_kwargs())

    if experience is None:
        raise ApiError(404, "Experience not found")

    return ExperienceResponse.model_validate(experience)


@router.delete("/{experience_id}", response_model=MessageResponse)
async def delete_experience(experience_id: str) -> MessageResponse:
    """Delete an experience and its bullets."""
    experience_id = uuid_param(experience_id, "experience")

    with database_errors("delete experience"):
        deleted = repo.delete_experience(experience_id)

    if not deleted:
        raise ApiError(404, "Experience not found")

    return MessageResponse(message="Experience deleted successfully")
