"""Portfolio endpoints (camelCase JSON)."""

from fastapi import APIRouter, Request, status

from folio.db import portfolio_repository as repo
from folio.db.portfolio_repository import PortfolioRecord
from folio.web.errors import ApiError, database_errors
from folio.web.request_parsing import (
    build_payload,
    parse_request_body,
    require_fields,
    uuid_param,
)
from folio.web.schemas import MessageResponse, PortfolioInput, PortfolioResponse

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])

REQUIRED_FIELDS = ["title", "tagRole"]


def _to_response(item: PortfolioRecord) -> PortfolioResponse:
    """Convert PortfolioRecord to PortfolioResponse."""
    return PortfolioResponse(
        id=item.id,
        title=item.title,
        tag_role=item.tag_role,
        description=item.description,
        image_url=item.image_url,
        project_url=item.project_url,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


@router.get("", response_model=list[PortfolioResponse])
async def list_portfolio() -> list[PortfolioResponse]:
    """List all portfolio items, newest first."""
    with database_errors("fetch portfolios"):
        items = repo.list_portfolio_items()

    return [_to_response(i) for i in items]


@router.post("", response_model=PortfolioResponse, status_code=status.HTTP_201_CREATED)
async def create_portfolio(request: Request) -> PortfolioResponse:
    """Create a new portfolio item."""
    body = await parse_request_body(request)
    require_fields(body, REQUIRED_FIELDS)
    payload = build_payload(PortfolioInput, body)

    with database_errors("create portfolio"):
        item = repo.create_portfolio_item(**payload.model_dump())

    return _to_response(item)


@router.get("/{item_id}", response_model=PortfolioResponse)
async def get_portfolio(item_id: str) -> PortfolioResponse:
    """Get a specific portfolio item by ID."""
    item_id = uuid_param(item_id, "portfolio")

    with database_errors("fetch portfolio"):
        item = repo.get_portfolio_item(item_id)

    if item is None:
        raise ApiError(404, "Portfolio project not found")

    return _to_response(item)


@router.put("/{item_id}", response_model=PortfolioResponse)
async def update_portfolio(item_id: str, request: Request) -> PortfolioResponse:
    """Update a portfolio item."""
    item_id = uuid_param(item_id, "portfolio")
    body = await parse_request_body(request)
    require_fields(body, REQUIRED_FIELDS)
    payload = build_payload(PortfolioInput, body)

    with database_errors("update portfolio"):
        item = repo.update_portfolio_item(item_id, **payload.model_dump())

    if item is None:
        raise ApiError(404, "Portfolio project not found")

    return _to_response(item)


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_portfolio(item_id: str) -> MessageResponse:
    """Delete a portfolio item by ID."""
    item_id = uuid_param(item_id, "portfolio")

    with database_errors("delete portfolio"):
        deleted = repo.delete_portfolio_item(item_id)

    if not deleted:
        raise ApiError(404, "Portfolio project not found")

    return MessageResponse(message="Portfolio project deleted successfully")
