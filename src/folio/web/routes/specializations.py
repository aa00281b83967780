"""Specialization endpoints (numbered "I specialize in" cards)."""

from fastapi import APIRouter, Request, status

from folio.db import specializations_repository as repo
from folio.web.errors import ApiError, database_errors
from folio.web.request_parsing import (
    build_payload,
    int_param,
    parse_request_body,
    require_fields,
)
from folio.web.schemas import (
    MessageResponse,
    SpecializationInput,
    SpecializationResponse,
)

router = APIRouter(prefix="/api/specializations", tags=["specializations"])

REQUIRED_FIELDS = ["title"]


@router.get("", response_model=list[SpecializationResponse])
async def list_specializations() -> list[SpecializationResponse]:
    """List all specializations."""
    with database_errors("fetch specializations"):
        items = repo.list_specializations()

    return [SpecializationResponse.model_validate(s) for s in items]


@router.post(
    "", response_model=SpecializationResponse, status_code=status.HTTP_201_CREATED
)
async def create_specialization(request: Request) -> SpecializationResponse:
    """Create a new specialization."""
    body = await parse_request_body(request)
    require_fields(body, REQUIRED_FIELDS)
    payload = build_payload(SpecializationInput, body)

    with database_errors("create specialization"):
        item = repo.create_specialization(**payload.model_dump())

    return SpecializationResponse.model_validate(item)


@router.get("/{specialization_id}", response_model=SpecializationResponse)
async def get_specialization(specialization_id: str) -> SpecializationResponse:
    """Get a specific specialization by ID."""
    pk = int_param(specialization_id)

    with database_errors("fetch specialization"):
        item = repo.get_specialization(pk)

    if item is None:
        raise ApiError(404, "Specialization not found")

    return SpecializationResponse.model_validate(item)


@router.put("/{specialization_id}", response_model=SpecializationResponse)
async def update_specialization(
    specialization_id: str, request: Request
) -> SpecializationResponse:
    """Update a specialization."""
    pk = int_param(specialization_id)
    body = await parse_request_body(request)
    require_fields(body, REQUIRED_FIELDS)
    payload = build_payload(SpecializationInput, body)

    with database_errors("update specialization"):
        item = repo.update_specialization(pk, **payload.model_dump())

    if item is None:
        raise ApiError(404, "Specialization not found")

    return SpecializationResponse.model_validate(item)


@router.delete("/{specialization_id}", response_model=MessageResponse)
async def delete_specialization(specialization_id: str) -> MessageResponse:
    """Delete a specialization by ID."""
    pk = int_param(specialization_id)

    with database_errors("delete specialization"):
        deleted = repo.delete_specialization(pk)

    if not deleted:
        raise ApiError(404, "Specialization not found")

    return MessageResponse(message="Specialization deleted successfully")
