"""Hero endpoints (singleton row, always id = 1)."""

from fastapi import APIRouter, Request, status

from folio.db.hero_repository import get_hero_or_default, upsert_hero
from folio.web.errors import ApiError, database_errors
from folio.web.request_parsing import build_payload, parse_request_body
from folio.web.schemas import HeroInput, HeroResponse

router = APIRouter(prefix="/api/hero", tags=["hero"])


@router.get("", response_model=HeroResponse)
async def get_hero() -> HeroResponse:
    """Get hero content, or the defaults when nothing was saved yet."""
    with database_errors("fetch hero section"):
        hero = get_hero_or_default()

    return HeroResponse.model_validate(hero)


@router.put("", response_model=HeroResponse)
async def put_hero(request: Request) -> HeroResponse:
    """Create or update the hero content."""
    payload = build_payload(HeroInput, await parse_request_body(request))

    with database_errors("update hero section"):
        hero = upsert_hero(**payload.model_dump())

    return HeroResponse.model_validate(hero)


@router.post("", status_code=status.HTTP_405_METHOD_NOT_ALLOWED)
async def post_hero() -> None:
    raise ApiError(405, "Use PUT to update hero content")


@router.delete("", status_code=status.HTTP_405_METHOD_NOT_ALLOWED)
async def delete_hero() -> None:
    raise ApiError(405, "Cannot delete hero content (singleton)")
