"""Repository functions for projects table.

Provides CRUD operations for case-study projects.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass

import structlog
from sqlalchemy import text

from folio.db.database import get_db, utc_now

logger = structlog.get_logger(__name__)


@dataclass
class ProjectRecord:
    """Project record from database."""

    id: str
    title: str
    summary: str | None
    hero_image_url: str | None
    case_study_url: str | None
    tags_text: list[str]
    created_at: str
    updated_at: str


def list_projects() -> list[ProjectRecord]:
    """Get all projects, newest first."""
    with get_db() as conn:
        rows = conn.execute(
            text("SELECT * FROM projects ORDER BY created_at DESC")
        ).mappings().all()

    return [_row_to_record(row) for row in rows]


def get_project(project_id: str) -> ProjectRecord | None:
    """Get project by ID.

    Args:
        project_id: UUID string

    Returns:
        ProjectRecord if found, None otherwise
    """
    with get_db() as conn:
        row = conn.execute(
            text("SELECT * FROM projects WHERE id = :id"), {"id": project_id}
        ).mappings().fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def create_project(
    title: str,
    summary: str | None = None,
    hero_image_url: str | None = None,
    case_study_url: str | None = None,
    tags_text: list[str] | None = None,
) -> ProjectRecord:
    """Insert a new project.

    Returns:
        The created ProjectRecord
    """
    project_id = str(uuid.uuid4())
    now = utc_now()

    with get_db() as conn:
        conn.execute(
            text(
                """
                INSERT INTO projects (
                    id, title, summary, hero_image_url, case_study_url,
                    tags_text, created_at, updated_at
                ) VALUES (
                    :id, :title, :summary, :hero_image_url, :case_study_url,
                    :tags_text, :now, :now
                )
                """
            ),
            {
                "id": project_id,
                "title": title,
                "summary": summary,
                "hero_image_url": hero_image_url,
                "case_study_url": case_study_url,
                "tags_text": json.dumps(tags_text or []),
                "now": now,
            },
        )
        row = conn.execute(
            text("SELECT * FROM projects WHERE id = :id"), {"id": project_id}
        ).mappings().one()

    logger.info("projects.created", project_id=project_id)
    return _row_to_record(row)


def update_project(
    project_id: str,
    title: str,
    summary: str | None = None,
    hero_image_url: str | None = None,
    case_study_url: str | None = None,
    tags_text: list[str] | None = None,
) -> ProjectRecord | None:
    """Replace all editable fields of a project.

    Returns:
        The updated ProjectRecord, or None if project_id doesn't exist
    """
    with get_db() as conn:
        result = conn.execute(
            text(
                """
                UPDATE projects SET
                    title = :title,
                    summary = :summary,
                    hero_image_url = :hero_image_url,
                    case_study_url = :case_study_url,
                    tags_text = :tags_text,
                    updated_at = :now
                WHERE id = :id
                """
            ),
            {
                "id": project_id,
                "title": title,
                "summary": summary,
                "hero_image_url": hero_image_url,
                "case_study_url": case_study_url,
                "tags_text": json.dumps(tags_text or []),
                "now": utc_now(),
            },
        )
        if result.rowcount == 0:
            return None

        row = conn.execute(
            text("SELECT * FROM projects WHERE id = :id"), {"id": project_id}
        ).mappings().one()

    logger.info("projects.updated", project_id=project_id)
    return _row_to_record(row)


def delete_project(project_id: str) -> bool:
    """Delete project by ID.

    Returns:
        True if deleted, False if not found
    """
    with get_db() as conn:
        result = conn.execute(
            text("DELETE FROM projects WHERE id = :id"), {"id": project_id}
        )

    deleted = result.rowcount > 0
    if deleted:
        logger.info("projects.deleted", project_id=project_id)

    return deleted


def _row_to_record(row) -> ProjectRecord:
    """Convert database row to ProjectRecord."""
    return ProjectRecord(
        id=row["id"],
        title=row["title"],
        summary=row["summary"],
        hero_image_url=row["hero_image_url"],
        case_study_url=row["case_study_url"],
        tags_text=json.loads(row["tags_text"]) if row["tags_text"] else [],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
