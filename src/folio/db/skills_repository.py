"""Repository functions for skills table."""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from sqlalchemy import text

from folio.db.database import get_db, utc_now

logger = structlog.get_logger(__name__)


@dataclass
class SkillRecord:
    """Skill record from database."""

    id: int
    name: str
    slug: str | None
    category: str
    level: str | None
    icon_url: str | None
    description: str | None
    order_index: int
    is_highlight: bool
    created_at: str
    updated_at: str


def list_skills(
    category: str | None = None,
    highlight: bool | None = None,
) -> list[SkillRecord]:
    """Get skills ordered by order_index, then name.

    Args:
        category: Only skills of this category
        highlight: Only highlighted (True) or non-highlighted (False) skills
    """
    query = "SELECT * FROM skills WHERE 1=1"
    params: dict[str, object] = {}

    if category:
        query += " AND category = :category"
        params["category"] = category

    if highlight is not None:
        query += " AND is_highlight = :highlight"
        params["highlight"] = highlight

    query += " ORDER BY order_index ASC, name ASC"

    with get_db() as conn:
        rows = conn.execute(text(query), params).mappings().all()

    return [_row_to_record(row) for row in rows]


def get_skill(skill_id: int) -> SkillRecord | None:
    """Get skill by ID."""
    with get_db() as conn:
        row = conn.execute(
            text("SELECT * FROM skills WHERE id = :id"), {"id": skill_id}
        ).mappings().fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def create_skill(
    name: str,
    category: str,
    slug: str | None = None,
    level: str | None = None,
    icon_url: str | None = None,
    description: str | None = None,
    order_index: int = 0,
    is_highlight: bool = False,
) -> SkillRecord:
    """Insert a new skill.

    Returns:
        The created SkillRecord
    """
    now = utc_now()

    with get_db() as conn:
        skill_id = conn.execute(
            text(
                """
                INSERT INTO skills (
                    name, slug, category, level, icon_url, description,
                    order_index, is_highlight, created_at, updated_at
                ) VALUES (
                    :name, :slug, :category, :level, :icon_url, :description,
                    :order_index, :is_highlight, :now, :now
                )
                RETURNING id
                """
            ),
            {
                "name": name,
                "slug": slug,
                "category": category,
                "level": level,
                "icon_url": icon_url,
                "description": description,
                "order_index": order_index,
                "is_highlight": is_highlight,
                "now": now,
            },
        ).scalar_one()
        row = conn.execute(
            text("SELECT * FROM skills WHERE id = :id"), {"id": skill_id}
        ).mappings().one()

    logger.info("skills.created", skill_id=skill_id, category=category)
    return _row_to_record(row)


def update_skill(
    skill_id: int,
    name: str,
    category: str,
    slug: str | None = None,
    level: str | None = None,
    icon_url: str | None = None,
    description: str | None = None,
    order_index: int = 0,
    is_highlight: bool = False,
) -> SkillRecord | None:
    """Replace all editable fields of a skill.

    Returns:
        The updated SkillRecord, or None if skill_id doesn't exist
    """
    with get_db() as conn:
        result = conn.execute(
            text(
                """
                UPDATE skills SET
                    name = :name,
                    slug = :slug,
                    category = :category,
                    level = :level,
                    icon_url = :icon_url,
                    description = :description,
                    order_index = :order_index,
                    is_highlight = :is_highlight,
                    updated_at = :now
                WHERE id = :id
                """
            ),
            {
                "id": skill_id,
                "name": name,
                "slug": slug,
                "category": category,
                "level": level,
                "icon_url": icon_url,
                "description": description,
                "order_index": order_index,
                "is_highlight": is_highlight,
                "now": utc_now(),
            },
        )
        if result.rowcount == 0:
            return None

        row = conn.execute(
            text("SELECT * FROM skills WHERE id = :id"), {"id": skill_id}
        ).mappings().one()

    logger.info("skills.updated", skill_id=skill_id)
    return _row_to_record(row)


def delete_skill(skill_id: int) -> bool:
    """Delete skill by ID.

    Returns:
        True if deleted, False if not found
    """
    with get_db() as conn:
        result = conn.execute(
            text("DELETE FROM skills WHERE id = :id"), {"id": skill_id}
        )

    deleted = result.rowcount > 0
    if deleted:
        logger.info("skills.deleted", skill_id=skill_id)

    return deleted


def _row_to_record(row) -> SkillRecord:
    """Convert database row to SkillRecord."""
    return SkillRecord(
        id=row["id"],
        name=row["name"],
        slug=row["slug"],
        category=row["category"],
        level=row["level"],
        icon_url=row["icon_url"],
        description=row["description"],
        order_index=row["order_index"] or 0,
        is_highlight=bool(row["is_highlight"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
