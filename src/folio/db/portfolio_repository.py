"""Repository functions for portfolio table.

Uses SQLAlchemy Core expressions over the table object instead of
hand-written SQL.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

import structlog
from sqlalchemy import delete, insert, select, update

from folio.db.database import get_db, utc_now
from folio.db.schema import portfolio

logger = structlog.get_logger(__name__)


@dataclass
class PortfolioRecord:
    """Portfolio item from database."""

    id: str
    title: str
    tag_role: str
    description: str | None
    image_url: str | None
    project_url: str | None
    created_at: str
    updated_at: str


def list_portfolio_items() -> list[PortfolioRecord]:
    """Get all portfolio items, newest first."""
    with get_db() as conn:
        rows = conn.execute(
            select(portfolio).order_by(portfolio.c.created_at.desc())
        ).mappings().all()

    return [PortfolioRecord(**dict(row)) for row in rows]


def get_portfolio_item(item_id: str) -> PortfolioRecord | None:
    """Get portfolio item by ID."""
    with get_db() as conn:
        row = conn.execute(
            select(portfolio).where(portfolio.c.id == item_id)
        ).mappings().fetchone()

    if row is None:
        return None

    return PortfolioRecord(**dict(row))


def create_portfolio_item(
    title: str,
    tag_role: str,
    description: str | None = None,
    image_url: str | None = None,
    project_url: str | None = None,
) -> PortfolioRecord:
    """Insert a new portfolio item."""
    now = utc_now()
    record = PortfolioRecord(
        id=str(uuid.uuid4()),
        title=title,
        tag_role=tag_role,
        description=description,
        image_url=image_url,
        project_url=project_url,
        created_at=now,
        updated_at=now,
    )

    with get_db() as conn:
        conn.execute(insert(portfolio).values(**record.__dict__))

    logger.info("portfolio.created", item_id=record.id)
    return record


def update_portfolio_item(
    item_id: str,
    title: str,
    tag_role: str,
    description: str | None = None,
    image_url: str | None = None,
    project_url: str | None = None,
) -> PortfolioRecord | None:
    """Replace all editable fields of a portfolio item.

    Returns:
        The updated record, or None if item_id doesn't exist
    """
    with get_db() as conn:
        result = conn.execute(
            update(portfolio)
            .where(portfolio.c.id == item_id)
            .values(
                title=title,
                tag_role=tag_role,
                description=description,
                image_url=image_url,
                project_url=project_url,
                updated_at=utc_now(),
            )
        )
        if result.rowcount == 0:
            return None

        row = conn.execute(
            select(portfolio).where(portfolio.c.id == item_id)
        ).mappings().one()

    logger.info("portfolio.updated", item_id=item_id)
    return PortfolioRecord(**dict(row))


def delete_portfolio_item(item_id: str) -> bool:
    """Delete portfolio item by ID.

    Returns:
        True if deleted, False if not found
    """
    with get_db() as conn:
        result = conn.execute(delete(portfolio).where(portfolio.c.id == item_id))

    deleted = result.rowcount > 0
    if deleted:
        logger.info("portfolio.deleted", item_id=item_id)

    return deleted
