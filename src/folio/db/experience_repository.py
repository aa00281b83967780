"""Repository functions for experience and experience_bullets tables.

An experience owns an ordered list of bullet rows. Create, update and
delete each touch both tables inside a single transaction.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field

import structlog
from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection

from folio.db.database import get_db, utc_now

logger = structlog.get_logger(__name__)


@dataclass
class BulletRecord:
    """One bullet point of an experience."""

    id: int
    text: str


@dataclass
class ExperienceRecord:
    """Experience record with its bullets."""

    id: str
    company: str
    role: str
    location: str | None
    start_date: str
    end_date: str | None
    is_current: bool
    description: str | None
    skills_text: list[str]
    created_at: str
    updated_at: str
    bullets: list[BulletRecord] = field(default_factory=list)


def list_experiences() -> list[ExperienceRecord]:
    """Get all experiences with bullets, most recent start date first."""
    with get_db() as conn:
        rows = conn.execute(
            text("SELECT * FROM experience ORDER BY start_date DESC")
        ).mappings().all()

        ids = [row["id"] for row in rows]
        bullets_by_exp: dict[str, list[BulletRecord]] = {i: [] for i in ids}

        if ids:
            bullet_rows = conn.execute(
                text(
                    """
                    SELECT id, experience_id, text FROM experience_bullets
                    WHERE experience_id IN :ids
                    ORDER BY position ASC, id ASC
                    """
                ).bindparams(bindparam("ids", expanding=True)),
                {"ids": ids},
            ).mappings().all()

            for b in bullet_rows:
                bullets_by_exp[b["experience_id"]].append(
                    BulletRecord(id=b["id"], text=b["text"])
                )

    return [_row_to_record(row, bullets_by_exp[row["id"]]) for row in rows]


def get_experience(experience_id: str) -> ExperienceRecord | None:
    """Get experience by ID, including bullets.

    Returns:
        ExperienceRecord if found, None otherwise
    """
    with get_db() as conn:
        return _fetch(conn, experience_id)


def create_experience(
    company: str,
    role: str,
    start_date: str,
    location: str | None = None,
    end_date: str | None = None,
    is_current: bool = False,
    description: str | None = None,
    bullets: list[str] | None = None,
    skills_text: list[str] | None = None,
) -> ExperienceRecord:
    """Insert an experience and its bullets atomically.

    Returns:
        The created ExperienceRecord
    """
    experience_id = str(uuid.uuid4())
    now = utc_now()

    with get_db() as conn:
        conn.execute(
            text(
                """
                INSERT INTO experience (
                    id, company, role, location, start_date, end_date,
                    is_current, description, skills_text, created_at, updated_at
                ) VALUES (
                    :id, :company, :role, :location, :start_date, :end_date,
                    :is_current, :description, :skills_text, :now, :now
                )
                """
            ),
            {
                "id": experience_id,
                "company": company,
                "role": role,
                "location": location,
                "start_date": start_date,
                "end_date": end_date,
                "is_current": is_current,
                "description": description,
                "skills_text": json.dumps(skills_text or []),
                "now": now,
            },
        )
        _insert_bullets(conn, experience_id, bullets or [])
        record = _fetch(conn, experience_id)

    logger.info(
        "experience.created",
        experience_id=experience_id,
        bullets=len(bullets or []),
    )
    return record


def update_experience(
    experience_id: str,
    company: str,
    role: str,
    start_date: str,
    location: str | None = None,
    end_date: str | None = None,
    is_current: bool = False,
    description: str | None = None,
    bullets: list[str] | None = None,
    skills_text: list[str] | None = None,
) -> ExperienceRecord | None:
    """Replace an experience and all its bullets atomically.

    Returns:
        The updated ExperienceRecord, or None if experience_id doesn't exist
    """
    with get_db() as conn:
        result = conn.execute(
            text(
                """
                UPDATE experience SET
                    company = :company,
                    role = :role,
                    location = :location,
                    start_date = :start_date,
                    end_date = :end_date,
                    is_current = :is_current,
                    description = :description,
                    skills_text = :skills_text,
                    updated_at = :now
                WHERE id = :id
                """
            ),
            {
                "id": experience_id,
                "company": company,
                "role": role,
                "location": location,
                "start_date": start_date,
                "end_date": end_date,
                "is_current": is_current,
                "description": description,
                "skills_text": json.dumps(skills_text or []),
                "now": utc_now(),
            },
        )
        if result.rowcount == 0:
            return None

        conn.execute(
            text("DELETE FROM experience_bullets WHERE experience_id = :id"),
            {"id": experience_id},
        )
        _insert_bullets(conn, experience_id, bullets or [])
        record = _fetch(conn, experience_id)

    logger.info("experience.updated", experience_id=experience_id)
    return record


def delete_experience(experience_id: str) -> bool:
    """Delete experience and its bullets.

    Returns:
        True if deleted, False if not found
    """
    with get_db() as conn:
        conn.execute(
            text("DELETE FROM experience_bullets WHERE experience_id = :id"),
            {"id": experience_id},
        )
        result = conn.execute(
            text("DELETE FROM experience WHERE id = :id"), {"id": experience_id}
        )

    deleted = result.rowcount > 0
    if deleted:
        logger.info("experience.deleted", experience_id=experience_id)

    return deleted


def _insert_bullets(conn: Connection, experience_id: str, bullets: list[str]) -> None:
    for position, bullet in enumerate(bullets):
        conn.execute(
            text(
                """
                INSERT INTO experience_bullets (experience_id, position, text)
                VALUES (:experience_id, :position, :text)
                """
            ),
            {"experience_id": experience_id, "position": position, "text": bullet},
        )


def _fetch(conn: Connection, experience_id: str) -> ExperienceRecord | None:
    row = conn.execute(
        text("SELECT * FROM experience WHERE id = :id"), {"id": experience_id}
    ).mappings().fetchone()

    if row is None:
        return None

    bullet_rows = conn.execute(
        text(
            """
            SELECT id, text FROM experience_bullets
            WHERE experience_id = :id
            ORDER BY position ASC, id ASC
            """
        ),
        {"id": experience_id},
    ).mappings().all()

    return _row_to_record(
        row, [BulletRecord(id=b["id"], text=b["text"]) for b in bullet_rows]
    )


def _row_to_record(row, bullets: list[BulletRecord]) -> ExperienceRecord:
    """Convert database row to ExperienceRecord."""
    return ExperienceRecord(
        id=row["id"],
        company=row["company"],
        role=row["role"],
        location=row["location"],
        start_date=row["start_date"],
        end_date=row["end_date"],
        is_current=bool(row["is_current"]),
        description=row["description"],
        skills_text=json.loads(row["skills_text"]) if row["skills_text"] else [],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        bullets=bullets,
    )
