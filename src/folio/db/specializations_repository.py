"""Repository functions for specializations table (numbered cards)."""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from sqlalchemy import text

from folio.db.database import get_db, utc_now

logger = structlog.get_logger(__name__)


@dataclass
class SpecializationRecord:
    """Specialization record from database."""

    id: int
    number: int | None
    title: str
    description: str | None
    icon_url: str | None
    created_at: str
    updated_at: str


def list_specializations() -> list[SpecializationRecord]:
    """Get all specializations in insertion order."""
    with get_db() as conn:
        rows = conn.execute(
            text("SELECT * FROM specializations ORDER BY id ASC")
        ).mappings().all()

    return [SpecializationRecord(**dict(row)) for row in rows]


def get_specialization(specialization_id: int) -> SpecializationRecord | None:
    """Get specialization by ID."""
    with get_db() as conn:
        row = conn.execute(
            text("SELECT * FROM specializations WHERE id = :id"),
            {"id": specialization_id},
        ).mappings().fetchone()

    if row is None:
        return None

    return SpecializationRecord(**dict(row))


def create_specialization(
    title: str,
    number: int | None = None,
    description: str | None = None,
    icon_url: str | None = None,
) -> SpecializationRecord:
    """Insert a new specialization card."""
    now = utc_now()

    with get_db() as conn:
        specialization_id = conn.execute(
            text(
                """
                INSERT INTO specializations (
                    number, title, description, icon_url, created_at, updated_at
                ) VALUES (:number, :title, :description, :icon_url, :now, :now)
                RETURNING id
                """
            ),
            {
                "number": number,
                "title": title,
                "description": description,
                "icon_url": icon_url,
                "now": now,
            },
        ).scalar_one()
        row = conn.execute(
            text("SELECT * FROM specializations WHERE id = :id"),
            {"id": specialization_id},
        ).mappings().one()

    logger.info("specializations.created", specialization_id=specialization_id)
    return SpecializationRecord(**dict(row))


def update_specialization(
    specialization_id: int,
    title: str,
    number: int | None = None,
    description: str | None = None,
    icon_url: str | None = None,
) -> SpecializationRecord | None:
    """Replace all editable fields of a specialization.

    Returns:
        The updated record, or None if specialization_id doesn't exist
    """
    with get_db() as conn:
        result = conn.execute(
            text(
                """
                UPDATE specializations SET
                    number = :number,
                    title = :title,
                    description = :description,
                    icon_url = :icon_url,
                    updated_at = :now
                WHERE id = :id
                """
            ),
            {
                "id": specialization_id,
                "number": number,
                "title": title,
                "description": description,
                "icon_url": icon_url,
                "now": utc_now(),
            },
        )
        if result.rowcount == 0:
            return None

        row = conn.execute(
            text("SELECT * FROM specializations WHERE id = :id"),
            {"id": specialization_id},
        ).mappings().one()

    logger.info("specializations.updated", specialization_id=specialization_id)
    return SpecializationRecord(**dict(row))


def delete_specialization(specialization_id: int) -> bool:
    """Delete specialization by ID.

    Returns:
        True if deleted, False if not found
    """
    with get_db() as conn:
        result = conn.execute(
            text("DELETE FROM specializations WHERE id = :id"),
            {"id": specialization_id},
        )

    deleted = result.rowcount > 0
    if deleted:
        logger.info("specializations.deleted", specialization_id=specialization_id)

    return deleted
